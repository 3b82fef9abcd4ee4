"""Poll model and the poll/tag association table."""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID, uuid4

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Table,
    Text,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from polldesk.db.base import Base

poll_tags = Table(
    "poll_tags",
    Base.metadata,
    Column("poll_id", Uuid, ForeignKey("polls.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Uuid, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Poll(Base):
    """Represents a question put to users."""

    __tablename__ = "polls"
    __table_args__ = (
        CheckConstraint("length(question) > 0", name="ck_polls_question_not_empty"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    question: Mapped[str] = mapped_column(Text, nullable=False)
    # No onupdate: the creation time never moves
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=func.now(),
    )
    created_by_id: Mapped[UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    access_id: Mapped[UUID | None] = mapped_column(
        Uuid, ForeignKey("poll_access.id", ondelete="SET NULL"), nullable=True
    )

    created_by = relationship("User", back_populates="polls")
    access = relationship("PollAccess", back_populates="polls")
    answers = relationship(
        "Answer", back_populates="poll", cascade="all, delete-orphan"
    )
    tags = relationship("Tag", secondary=poll_tags, back_populates="polls")

    @validates("created_at")
    def _validate_created_at(self, key: str, value: datetime) -> datetime:
        if self.created_at is not None and value != self.created_at:
            raise ValueError("Poll.created_at cannot change after creation")
        return value

    def __repr__(self) -> str:
        return f"<Poll {self.question!r}>"
