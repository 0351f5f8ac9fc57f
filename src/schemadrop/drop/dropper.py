"""Drop orchestration: order and deliver the statements that tear a catalog down."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from schemadrop.catalog.models import Database
from schemadrop.dialects.base import Dialect
from schemadrop.drop.identifiers import ExportIdentifierRegistry
from schemadrop.drop.targets import CollectingTarget, Target, TargetMultiplexer
from schemadrop.types import DialectResolution, Statement

__all__ = ["SchemaDropper"]

logger = logging.getLogger(__name__)


class SchemaDropper:
    """
    Generates drop statements for a whole catalog, in dependency order:

    1. auxiliary objects flagged ``before_tables``
    2. foreign keys of every physical table, across all namespaces
       (only when the dialect drops constraints)
    3. physical tables, then sequences, namespace by namespace
    4. the remaining auxiliary objects
    5. schemas, when requested

    Within a phase the catalog's insertion order is kept. Tables and
    sequences are checked for duplicate export identifiers; a repeat aborts
    the run with DuplicateExportError. Targets are released on every exit.

    ``dialect_resolution`` selects which dialect phases 2 and 4 consult:
    the dialect given to the call (EXPLICIT) or the database environment's
    dialect (ENVIRONMENT).
    """

    def __init__(
        self, dialect_resolution: DialectResolution = DialectResolution.EXPLICIT
    ) -> None:
        self.dialect_resolution = dialect_resolution

    def generate_drop_commands(
        self,
        database: Database,
        drop_schemas: bool,
        dialect: Optional[Dialect] = None,
    ) -> list[Statement]:
        """Return the drop statements for ``database`` as a list."""
        target = CollectingTarget()
        self.do_drop(database, drop_schemas, [target], dialect=dialect)
        return target.statements

    def do_drop(
        self,
        database: Database,
        drop_schemas: bool,
        targets: Iterable[Target] = (),
        dialect: Optional[Dialect] = None,
    ) -> None:
        """
        Deliver the drop statements for ``database`` to every target.

        Args:
            database: Catalog to tear down. It is not modified.
            drop_schemas: Also emit a schema drop for each schema-qualified namespace.
            targets: Consumers of the statements; may be empty.
            dialect: Dialect to render with. Defaults to the database environment's.

        Raises:
            DuplicateExportError: If two tables/sequences share an export identifier.
        """
        if dialect is None:
            dialect = database.dialect
        multiplexer = TargetMultiplexer(targets)
        with multiplexer.bracket():
            self._drop(database, drop_schemas, dialect, multiplexer)
        logger.info(
            f"Generated {multiplexer.statement_count} drop statement(s) "
            f"for {len(database.namespaces)} namespace(s) using {dialect.name}"
        )

    def _environment_dialect(self, database: Database, dialect: Dialect) -> Dialect:
        if self.dialect_resolution is DialectResolution.ENVIRONMENT:
            return database.dialect
        return dialect

    def _drop(
        self,
        database: Database,
        drop_schemas: bool,
        dialect: Dialect,
        multiplexer: TargetMultiplexer,
    ) -> None:
        export_identifiers = ExportIdentifierRegistry()

        # init commands are irrelevant when dropping
        self._drop_auxiliary_objects_before_tables(database, dialect, multiplexer)
        self._drop_constraints(database, dialect, multiplexer)
        self._drop_tables_and_sequences(database, dialect, multiplexer, export_identifiers)
        self._drop_auxiliary_objects_after_tables(database, dialect, multiplexer)
        if drop_schemas:
            self._drop_schemas(database, dialect, multiplexer)

    def _drop_auxiliary_objects_before_tables(
        self, database: Database, dialect: Dialect, multiplexer: TargetMultiplexer
    ) -> None:
        exporter = dialect.auxiliary_object_exporter
        for auxiliary_object in database.auxiliary_objects:
            if not auxiliary_object.before_tables:
                continue
            if not auxiliary_object.applies_to_dialect(dialect):
                logger.debug(f"Skipping {auxiliary_object.name}: not applicable to {dialect.name}")
                continue
            multiplexer.broadcast_all(exporter.get_sql_drop_strings(auxiliary_object, database))

    def _drop_constraints(
        self, database: Database, dialect: Dialect, multiplexer: TargetMultiplexer
    ) -> None:
        # constraints must be gone before any table is dropped
        constraint_dialect = self._environment_dialect(database, dialect)
        if not constraint_dialect.drop_constraints:
            logger.debug(f"Dialect {constraint_dialect.name} does not drop constraints")
            return

        exporter = constraint_dialect.foreign_key_exporter
        for namespace in database.namespaces:
            for table in namespace.physical_tables():
                for foreign_key in table.foreign_keys:
                    multiplexer.broadcast_all(exporter.get_sql_drop_strings(foreign_key, database))

    def _drop_tables_and_sequences(
        self,
        database: Database,
        dialect: Dialect,
        multiplexer: TargetMultiplexer,
        export_identifiers: ExportIdentifierRegistry,
    ) -> None:
        for namespace in database.namespaces:
            logger.debug(f"Dropping tables and sequences in {namespace.name}")
            for table in namespace.physical_tables():
                export_identifiers.observe(table.export_identifier)
                multiplexer.broadcast_all(
                    dialect.table_exporter.get_sql_drop_strings(table, database)
                )

            for sequence in namespace.sequences:
                export_identifiers.observe(sequence.export_identifier)
                multiplexer.broadcast_all(
                    dialect.sequence_exporter.get_sql_drop_strings(sequence, database)
                )

    def _drop_auxiliary_objects_after_tables(
        self, database: Database, dialect: Dialect, multiplexer: TargetMultiplexer
    ) -> None:
        render_dialect = self._environment_dialect(database, dialect)
        for auxiliary_object in database.auxiliary_objects:
            if auxiliary_object.before_tables:
                continue
            if not auxiliary_object.applies_to_dialect(dialect):
                logger.debug(f"Skipping {auxiliary_object.name}: not applicable to {dialect.name}")
                continue
            multiplexer.broadcast_all(auxiliary_object.sql_drop_strings(render_dialect))

    def _drop_schemas(
        self, database: Database, dialect: Dialect, multiplexer: TargetMultiplexer
    ) -> None:
        for namespace in database.namespaces:
            schema = namespace.name.schema
            if schema is None:
                continue
            multiplexer.broadcast_all(dialect.get_drop_schema_command(schema.render(dialect)))
