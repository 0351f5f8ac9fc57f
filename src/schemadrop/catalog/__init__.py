"""Catalog model and loaders."""

from schemadrop.catalog.models import (
    AuxiliaryDatabaseObject,
    Database,
    DatabaseEnvironment,
    ForeignKey,
    Identifier,
    Namespace,
    NamespaceName,
    Sequence,
    Table,
)

__all__ = [
    "AuxiliaryDatabaseObject",
    "Database",
    "DatabaseEnvironment",
    "ForeignKey",
    "Identifier",
    "Namespace",
    "NamespaceName",
    "Sequence",
    "Table",
]
