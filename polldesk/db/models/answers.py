"""Answer model for poll choices."""

from __future__ import annotations

from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, ForeignKey, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from polldesk.db.base import Base


class Answer(Base):
    """Represents one possible answer to a poll."""

    __tablename__ = "answers"
    __table_args__ = (
        CheckConstraint("length(answer) > 0", name="ck_answers_answer_not_empty"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    answer: Mapped[str] = mapped_column(Text, nullable=False)
    poll_id: Mapped[UUID | None] = mapped_column(
        Uuid, ForeignKey("polls.id", ondelete="CASCADE"), nullable=True
    )

    poll = relationship("Poll", back_populates="answers")
    responses = relationship(
        "Response", back_populates="answer", cascade="all, delete-orphan"
    )
