"""SQL dialects and the exporters they provide."""

from schemadrop.dialects.base import Dialect
from schemadrop.dialects.builtin import (
    DatabricksDialect,
    GenericDialect,
    H2Dialect,
    MySQLDialect,
    PostgreSQLDialect,
    SQLiteDialect,
    available_dialects,
    canonical_dialect_name,
    get_dialect,
)
from schemadrop.dialects.exporters import Exporter

__all__ = [
    "Dialect",
    "DatabricksDialect",
    "Exporter",
    "GenericDialect",
    "H2Dialect",
    "MySQLDialect",
    "PostgreSQLDialect",
    "SQLiteDialect",
    "available_dialects",
    "canonical_dialect_name",
    "get_dialect",
]
