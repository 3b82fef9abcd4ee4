"""Poll access model holding a visibility level."""

from __future__ import annotations

import enum
from uuid import UUID, uuid4

from sqlalchemy import Enum, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from polldesk.db.base import Base


class PollAccessLevel(str, enum.Enum):
    """Who can see a poll."""

    DRAFT = "draft"  # Only editors
    PUBLIC = "public"  # Everyone


class PollAccess(Base):
    """Represents a visibility level shared by polls."""

    __tablename__ = "poll_access"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    level: Mapped[PollAccessLevel] = mapped_column(
        Enum(
            PollAccessLevel,
            name="poll_access_level",
            native_enum=False,
            create_constraint=True,
            values_callable=lambda levels: [level.value for level in levels],
        ),
        nullable=False,
        default=PollAccessLevel.DRAFT,
    )

    polls = relationship("Poll", back_populates="access")
