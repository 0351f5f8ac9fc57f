"""Built-in dialects and the name registry."""

from schemadrop.dialects.base import Dialect
from schemadrop.exceptions import DialectError
from schemadrop.types import DialectName

__all__ = [
    "GenericDialect",
    "PostgreSQLDialect",
    "MySQLDialect",
    "H2Dialect",
    "SQLiteDialect",
    "DatabricksDialect",
    "available_dialects",
    "canonical_dialect_name",
    "get_dialect",
]


class GenericDialect(Dialect):
    """ANSI-style rendering with no optional clauses."""

    name = "generic"


class PostgreSQLDialect(Dialect):
    name = "postgresql"
    supports_if_exists_before_table_name = True
    cascade_constraints_string = " cascade"

    def get_drop_sequence_strings(self, sequence_name: str) -> list[str]:
        return [f"drop sequence if exists {sequence_name}"]


class MySQLDialect(Dialect):
    name = "mysql"
    supports_sequences = False
    supports_if_exists_before_table_name = True
    drop_foreign_key_string = " drop foreign key "
    open_quote = "`"
    close_quote = "`"


class H2Dialect(Dialect):
    """H2 drops tables with CASCADE, so foreign keys are never dropped first."""

    name = "h2"
    drop_constraints = False
    supports_if_exists_before_table_name = True
    cascade_constraints_string = " cascade"

    def get_drop_sequence_strings(self, sequence_name: str) -> list[str]:
        return [f"drop sequence if exists {sequence_name}"]


class SQLiteDialect(Dialect):
    name = "sqlite"
    drop_constraints = False
    has_alter_table = False
    supports_sequences = False
    supports_schemas = False
    supports_if_exists_before_table_name = True


class DatabricksDialect(Dialect):
    """Unity Catalog: three-level names, informational constraints."""

    name = "databricks"
    supports_sequences = False
    supports_if_exists_before_table_name = True
    drop_foreign_key_string = " drop constraint if exists "
    open_quote = "`"
    close_quote = "`"

    def get_drop_schema_command(self, schema_name: str) -> list[str]:
        return [f"drop schema if exists {schema_name} cascade"]


_DIALECTS: dict[str, type[Dialect]] = {
    "generic": GenericDialect,
    "postgresql": PostgreSQLDialect,
    "mysql": MySQLDialect,
    "h2": H2Dialect,
    "sqlite": SQLiteDialect,
    "databricks": DatabricksDialect,
}

_ALIASES = {
    "ansi": "generic",
    "postgres": "postgresql",
    "pg": "postgresql",
    "mariadb": "mysql",
    "unity": "databricks",
}


def available_dialects() -> list[str]:
    """Return the canonical names of the built-in dialects."""
    return sorted(_DIALECTS)


def canonical_dialect_name(name: DialectName) -> DialectName:
    """Map a dialect name or alias (case-insensitive) to its canonical name.

    Raises:
        DialectError: If the name is not known.
    """
    key = name.strip().lower()
    key = _ALIASES.get(key, key)
    if key not in _DIALECTS:
        raise DialectError(
            f"Unknown dialect '{name}'. Available dialects: {', '.join(available_dialects())}"
        )
    return key


def get_dialect(name: DialectName) -> Dialect:
    """Instantiate a built-in dialect by name or alias (case-insensitive).

    Raises:
        DialectError: If the name is not known.
    """
    return _DIALECTS[canonical_dialect_name(name)]()
