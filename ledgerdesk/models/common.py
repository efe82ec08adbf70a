"""Column helpers shared by the mapped models."""
import enum
from datetime import datetime, timezone

from sqlalchemy import Enum


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def enum_column_type(enum_cls: type[enum.Enum], name: str) -> Enum:
    """Store enum values ("pending"), not member names ("PENDING")."""
    return Enum(enum_cls, name=name, values_callable=lambda x: [e.value for e in x])
