# marketdb/schema/unit.py
from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field

from alembic.operations import Operations

_UNIT_ID = re.compile(r"^(?P<sequence>\d{3})_[a-z0-9_]+$")

UnitAction = Callable[[Operations], None]


def parse_sequence(unit_id: str) -> int:
    """Return the monotonic sequence number embedded in a unit id (``"004_create_x"`` -> 4)."""
    match = _UNIT_ID.match(unit_id)
    if not match:
        raise ValueError(f"Invalid unit id {unit_id!r}; expected 'NNN_snake_case_name'.")
    return int(match.group("sequence"))


@dataclass(frozen=True, slots=True)
class SchemaUnit:
    """One forward schema mutation plus its exact reverse."""

    id: str
    description: str
    upgrade: UnitAction
    downgrade: UnitAction
    requires: tuple[str, ...] = ()
    creates: tuple[str, ...] = ()
    sequence: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "sequence", parse_sequence(self.id))
        # Una tabla autorreferenciada (CATEGORIAS.parent_id) no es prerequisito de sí misma.
        object.__setattr__(
            self, "requires", tuple(t for t in self.requires if t not in self.creates)
        )
