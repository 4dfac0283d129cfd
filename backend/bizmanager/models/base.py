"""
Business Manager Backend — Shared Column Helpers
================================================

What:  Column types, defaults and mixins reused by every ORM model.
How:   Mixins contribute `id` / `created_at` / `updated_at` columns through
       SQLAlchemy 2.0 `Mapped` annotations.

Column conventions:
    - id:         36-char string UUID generated in Python
    - timestamps: TIMESTAMP WITH TIME ZONE, always written in UTC
    - money:      NUMERIC(12, 2) surfaced as float, rounded to cents
"""

import uuid
from datetime import datetime, timezone
from typing import Optional, Union

from sqlalchemy import DateTime, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

Money = Numeric(12, 2, asdecimal=False)


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalizes a datetime to aware UTC; naive values are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def money(value: Union[int, float, None]) -> float:
    """Rounds an amount to cents; None counts as zero."""
    return round(float(value or 0), 2)


class IdMixin:
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
