# marketdb/schema/ledger.py
from __future__ import annotations

import sqlalchemy as sa
from sqlalchemy.engine import Connection

from marketdb.core.config import settings


class MigrationLedger:
    """Append-only record of applied unit ids.

    Every method works on the caller's connection, so ``record`` commits or
    rolls back together with the unit's own mutation.
    """

    def __init__(self, table_name: str | None = None):
        self.table_name = table_name or settings.LEDGER_TABLE
        self.table = sa.Table(
            self.table_name,
            sa.MetaData(),
            sa.Column("name", sa.String(255), primary_key=True, nullable=False),
        )

    def ensure(self, connection: Connection) -> None:
        self.table.create(connection, checkfirst=True)

    def exists(self, connection: Connection) -> bool:
        return sa.inspect(connection).has_table(self.table_name)

    def get_applied(self, connection: Connection) -> set[str]:
        if not self.exists(connection):
            return set()
        return set(connection.execute(sa.select(self.table.c.name)).scalars())

    def record(self, connection: Connection, unit_id: str) -> None:
        connection.execute(self.table.insert().values(name=unit_id))

    def forget(self, connection: Connection, unit_id: str) -> None:
        connection.execute(self.table.delete().where(self.table.c.name == unit_id))
