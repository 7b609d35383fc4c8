"""Base model class and common mixins for SQLAlchemy models.

This module provides the declarative base for all models and the constraint
helpers shared by every Guildhall table.
"""

from datetime import UTC, datetime
from typing import ClassVar

from sqlalchemy import CheckConstraint, DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

PUBLIC_ID_MAX_LENGTH = 255
GAME_PUBLIC_ID_MAX_LENGTH = 36


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models.

    Provides type_annotation_map for automatic type inference from Python types.
    """

    # Configure automatic type mapping
    type_annotation_map: ClassVar[dict] = {
        datetime: DateTime(timezone=True),
    }


class TimestampMixin:
    """Mixin for models that need created_at and updated_at timestamps.

    Automatically sets created_at on insert and updated_at on update.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: utc_now(),
        server_default=func.now(),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: utc_now(),
        server_default=func.now(),
        onupdate=lambda: utc_now(),
    )


def json_metadata_check(table: str) -> CheckConstraint:
    """CHECK constraint that makes the store reject malformed metadata JSON.

    Only emitted on SQLite; PostgreSQL deployments should map the column to
    ``JSON`` in their migration instead.
    """
    constraint = CheckConstraint("json_valid(metadata)", name=f"ck_{table}_metadata_json")
    return constraint.ddl_if(dialect="sqlite")


def length_check(table: str, column: str, max_length: int) -> CheckConstraint:
    """CHECK constraint enforcing a maximum string length on any backend."""
    return CheckConstraint(f"length({column}) <= {max_length}", name=f"ck_{table}_{column}_length")


def utc_now() -> datetime:
    """Get current UTC time with timezone awareness.

    Returns:
        datetime: Current time in UTC with timezone info
    """
    return datetime.now(UTC)
