"""Response model linking a user to the answer they chose."""

from __future__ import annotations

from uuid import UUID, uuid4

from sqlalchemy import ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from polldesk.db.base import Base


class Response(Base):
    """Represents one user's choice of one answer."""

    __tablename__ = "responses"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    answer_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("answers.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    answer = relationship("Answer", back_populates="responses")
    user = relationship("User", back_populates="responses")
