"""Tag model for grouping polls."""

from __future__ import annotations

from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from polldesk.db.base import Base


class Tag(Base):
    """Represents a label attached to polls."""

    __tablename__ = "tags"
    __table_args__ = (
        CheckConstraint("length(name) > 0", name="ck_tags_name_not_empty"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(Text, nullable=False)

    polls = relationship("Poll", secondary="poll_tags", back_populates="tags")
