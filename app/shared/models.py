"""Shared SQLAlchemy model mixins."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column


def generate_id() -> str:
    """Generate an opaque 32-character record identifier."""
    return uuid.uuid4().hex


class IdMixin:
    """Mixin providing an opaque string primary key generated server-side."""

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=generate_id)


class TimestampMixin:
    """Mixin providing created_at and updated_at timestamps."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
