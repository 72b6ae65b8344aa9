from __future__ import annotations

import enum
import uuid

from sqlalchemy import CHAR, Enum
from sqlalchemy.types import TypeDecorator


class GUID(TypeDecorator):
    """UUID stored as CHAR(36) on every backend; Python always gets uuid.UUID."""
    impl = CHAR(36)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        if isinstance(value, uuid.UUID):
            return str(value)
        # si viene como str, normalizamos
        return str(uuid.UUID(str(value)))

    def process_result_value(self, value, dialect):
        if value is None:
            return value
        return uuid.UUID(str(value))


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


def StoredEnum(enum_cls: type[enum.Enum], name: str) -> Enum:
    """Enum column storing member values (the stored literals), not member names."""
    return Enum(
        enum_cls,
        name=name,
        values_callable=_enum_values,
        create_constraint=True,
        validate_strings=True,
    )
