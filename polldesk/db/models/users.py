"""User model for poll authors and respondents."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from polldesk.core.security import is_password_hash, verify_password
from polldesk.db.base import Base


class User(Base):
    """Represents a person who authors polls and responds to them."""

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("length(first_name) > 0", name="ck_users_first_name_not_empty"),
        CheckConstraint("length(last_name) > 0", name="ck_users_last_name_not_empty"),
        CheckConstraint("length(email) > 0", name="ck_users_email_not_empty"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    first_name: Mapped[str] = mapped_column(Text, nullable=False)
    last_name: Mapped[str] = mapped_column(Text, nullable=False)
    birth_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    email: Mapped[str] = mapped_column(
        Text, unique=True, nullable=False, index=True
    )
    # Holds a bcrypt hash only
    password: Mapped[str] = mapped_column("password_hash", String(255), nullable=False)
    district_id: Mapped[UUID | None] = mapped_column(
        Uuid, ForeignKey("districts.id", ondelete="SET NULL"), nullable=True
    )
    account_type_id: Mapped[UUID | None] = mapped_column(
        Uuid, ForeignKey("account_types.id", ondelete="SET NULL"), nullable=True
    )

    district = relationship("District", back_populates="users")
    account_type = relationship("AccountType", back_populates="users")
    polls = relationship("Poll", back_populates="created_by")
    responses = relationship(
        "Response", back_populates="user", cascade="all, delete-orphan"
    )

    @validates("password")
    def _validate_password(self, key: str, value: str) -> str:
        if not is_password_hash(value):
            raise ValueError("User.password only accepts a bcrypt hash")
        return value

    def check_password(self, plain_password: str) -> bool:
        """Verify a plaintext password against the stored hash."""
        return verify_password(plain_password, self.password)

    def __repr__(self) -> str:
        return f"<User {self.email}>"
