"""Dependency-ordered DROP script generation for relational catalogs."""

from typing import Iterable, Optional

from schemadrop.catalog.models import Database
from schemadrop.dialects.base import Dialect
from schemadrop.drop.dropper import SchemaDropper
from schemadrop.drop.targets import Target
from schemadrop.types import DialectResolution

__all__ = [
    "SchemaDropper",
    "DialectResolution",
    "generate_drop_commands",
    "drop",
]


def generate_drop_commands(
    database: Database, drop_schemas: bool, dialect: Optional[Dialect] = None
) -> list[str]:
    """Return the ordered drop statements for ``database``."""
    return SchemaDropper().generate_drop_commands(database, drop_schemas, dialect)


def drop(
    database: Database,
    drop_schemas: bool,
    targets: Iterable[Target],
    dialect: Optional[Dialect] = None,
) -> None:
    """Deliver the drop statements for ``database`` to ``targets``.

    Without ``dialect`` the database environment's dialect is used.
    """
    SchemaDropper().do_drop(database, drop_schemas, targets, dialect=dialect)
