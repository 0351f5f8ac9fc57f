"""Standard exporters: turn one catalog object into its drop statements."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from schemadrop.catalog.models import (
    AuxiliaryDatabaseObject,
    Database,
    ForeignKey,
    Identifier,
    Sequence,
    Table,
)
from schemadrop.types import Statement

if TYPE_CHECKING:
    from schemadrop.dialects.base import Dialect

__all__ = [
    "Exporter",
    "StandardTableExporter",
    "StandardSequenceExporter",
    "StandardForeignKeyExporter",
    "StandardAuxiliaryDatabaseObjectExporter",
]


@runtime_checkable
class Exporter(Protocol):
    """
    Renders the drop statements for a single catalog object.

    Implementations return an ordered, possibly empty, list of statements
    and must not mutate the object or the database.
    """

    def get_sql_drop_strings(self, exportable: Any, database: Database) -> list[Statement]:
        ...


class StandardTableExporter:
    def __init__(self, dialect: "Dialect") -> None:
        self.dialect = dialect

    def get_sql_drop_strings(self, table: Table, database: Database) -> list[Statement]:
        dialect = self.dialect
        sql = "drop table "
        if dialect.supports_if_exists_before_table_name:
            sql += "if exists "
        sql += table.qualified_name(dialect) + dialect.cascade_constraints_string
        if dialect.supports_if_exists_after_table_name:
            sql += " if exists"
        return [sql]


class StandardSequenceExporter:
    def __init__(self, dialect: "Dialect") -> None:
        self.dialect = dialect

    def get_sql_drop_strings(self, sequence: Sequence, database: Database) -> list[Statement]:
        return self.dialect.get_drop_sequence_strings(sequence.qualified_name(self.dialect))


class StandardForeignKeyExporter:
    """Drops a foreign key through ALTER TABLE on its owning table.

    Dialects without ALTER TABLE produce no statements.
    """

    def __init__(self, dialect: "Dialect") -> None:
        self.dialect = dialect

    def get_sql_drop_strings(
        self, foreign_key: ForeignKey, database: Database
    ) -> list[Statement]:
        dialect = self.dialect
        if not dialect.has_alter_table:
            return []

        sql = "alter table "
        if dialect.supports_if_exists_before_table_name:
            sql += "if exists "
        sql += foreign_key.table.qualified_name(dialect)
        sql += dialect.drop_foreign_key_string
        sql += Identifier.to_identifier(foreign_key.name).render(dialect)
        return [sql]


class StandardAuxiliaryDatabaseObjectExporter:
    def __init__(self, dialect: "Dialect") -> None:
        self.dialect = dialect

    def get_sql_drop_strings(
        self, auxiliary_object: AuxiliaryDatabaseObject, database: Database
    ) -> list[Statement]:
        return list(auxiliary_object.sql_drop_strings(self.dialect))
