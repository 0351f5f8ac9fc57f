"""Dialect base class: capability flags, rendering helpers and exporters."""

from __future__ import annotations

from typing import Optional

from schemadrop.catalog.models import Identifier, NamespaceName
from schemadrop.dialects.exporters import (
    Exporter,
    StandardAuxiliaryDatabaseObjectExporter,
    StandardForeignKeyExporter,
    StandardSequenceExporter,
    StandardTableExporter,
)
from schemadrop.exceptions import DialectError
from schemadrop.types import DialectName, Statement

__all__ = ["Dialect"]


class Dialect:
    """
    Describes how one database family renders drop statements.

    Subclasses override the class-level capability flags; the rendering
    methods and exporters are shared.
    """

    name: DialectName = "generic"
    drop_constraints = True
    has_alter_table = True
    supports_sequences = True
    supports_schemas = True
    supports_if_exists_before_table_name = False
    supports_if_exists_after_table_name = False
    cascade_constraints_string = ""
    drop_foreign_key_string = " drop constraint "
    open_quote = '"'
    close_quote = '"'

    def __init__(self) -> None:
        self._table_exporter: Exporter = StandardTableExporter(self)
        self._sequence_exporter: Exporter = StandardSequenceExporter(self)
        self._foreign_key_exporter: Exporter = StandardForeignKeyExporter(self)
        self._auxiliary_object_exporter: Exporter = (
            StandardAuxiliaryDatabaseObjectExporter(self)
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    @property
    def table_exporter(self) -> Exporter:
        return self._table_exporter

    @property
    def sequence_exporter(self) -> Exporter:
        return self._sequence_exporter

    @property
    def foreign_key_exporter(self) -> Exporter:
        return self._foreign_key_exporter

    @property
    def auxiliary_object_exporter(self) -> Exporter:
        return self._auxiliary_object_exporter

    def quote(self, text: str) -> str:
        return f"{self.open_quote}{text}{self.close_quote}"

    def qualify(self, namespace: NamespaceName, name: Identifier) -> str:
        """Render ``catalog.schema.name``, omitting absent parts."""
        parts: list[Optional[Identifier]] = [namespace.catalog, namespace.schema, name]
        return ".".join(p.render(self) for p in parts if p is not None)

    def get_drop_schema_command(self, schema_name: str) -> list[Statement]:
        if not self.supports_schemas:
            raise DialectError(f"Dialect '{self.name}' does not support schemas")
        return [f"drop schema {schema_name}"]

    def get_drop_sequence_strings(self, sequence_name: str) -> list[Statement]:
        if not self.supports_sequences:
            raise DialectError(f"Dialect '{self.name}' does not support sequences")
        return [f"drop sequence {sequence_name}"]
