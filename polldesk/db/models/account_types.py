"""Account type model."""

from __future__ import annotations

from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from polldesk.db.base import Base


class AccountType(Base):
    """Represents the kind of account a user holds."""

    __tablename__ = "account_types"
    __table_args__ = (
        CheckConstraint("length(name) > 0", name="ck_account_types_name_not_empty"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(Text, nullable=False)

    users = relationship("User", back_populates="account_type")
