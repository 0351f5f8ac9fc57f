"""Load catalog definitions from YAML files."""

from pathlib import Path
from typing import Any, Optional

import yaml

from schemadrop.catalog.models import (
    AuxiliaryDatabaseObject,
    Database,
    Identifier,
    Namespace,
    NamespaceName,
    Table,
)
from schemadrop.dialects.base import Dialect
from schemadrop.dialects.builtin import canonical_dialect_name, get_dialect
from schemadrop.exceptions import CatalogError, CatalogLoadError, DialectError

__all__ = ["load_catalog", "build_database"]

VALID_CATALOG_FIELDS = {"dialect", "namespaces", "auxiliary_objects"}

VALID_NAMESPACE_FIELDS = {"catalog", "schema", "tables", "sequences"}

VALID_TABLE_FIELDS = {
    "table",
    "physical_name",
    "physical",
    "view",
    "foreign_keys",
    "comment",
}

VALID_FOREIGN_KEY_FIELDS = {"name", "references", "columns", "referenced_columns"}

VALID_SEQUENCE_FIELDS = {"sequence", "physical_name"}

VALID_AUXILIARY_FIELDS = {
    "name",
    "drop",
    "create",
    "dialects",
    "before_tables",
    "catalog",
    "schema",
}


def load_catalog(catalog_path: Path, dialect: Optional[Dialect] = None) -> Database:
    """Load a catalog from a single YAML file or a directory of YAML files.

    Files in a directory are read in name order and merged into one database.

    Args:
        catalog_path: YAML file, or directory containing ``*.yaml``/``*.yml`` files.
        dialect: Environment dialect for the database. When omitted, the
            ``dialect`` key of the documents is used, falling back to generic.

    Raises:
        CatalogLoadError: If the path is missing or a document is invalid.
    """
    if catalog_path.is_file():
        documents = [_read_yaml(catalog_path)]
    elif catalog_path.is_dir():
        files = sorted([*catalog_path.glob("*.yaml"), *catalog_path.glob("*.yml")])
        documents = [_read_yaml(f) for f in files]
    else:
        raise CatalogLoadError(f"Catalog path does not exist: {catalog_path}")
    return build_database(documents, dialect=dialect)


def _read_yaml(file_path: Path) -> dict:
    try:
        with open(file_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise CatalogLoadError(f"Invalid YAML in {file_path}: {e}") from e
    if data is None:
        raise CatalogLoadError(f"Empty YAML file: {file_path}")
    if not isinstance(data, dict):
        raise CatalogLoadError(f"Expected a mapping at top level of {file_path}")
    return data


def build_database(documents: list[dict], dialect: Optional[Dialect] = None) -> Database:
    """Build a Database from already-parsed catalog documents."""
    for data in documents:
        _check_fields(data, VALID_CATALOG_FIELDS, "catalog document")

    database = Database(dialect or _resolve_dialect(documents))

    # foreign keys may point at tables declared later, so resolve them last
    pending_foreign_keys: list[tuple[Table, Namespace, dict]] = []
    for data in documents:
        for ns_data in data.get("namespaces") or []:
            pending_foreign_keys.extend(_parse_namespace(database, ns_data))
        for aux_data in data.get("auxiliary_objects") or []:
            database.add_auxiliary_object(_parse_auxiliary_object(aux_data))

    for table, namespace, fk_data in pending_foreign_keys:
        _add_foreign_key(database, table, namespace, fk_data)

    return database


def _resolve_dialect(documents: list[dict]) -> Dialect:
    names = {d["dialect"] for d in documents if d.get("dialect")}
    if len(names) > 1:
        raise CatalogLoadError(
            f"Conflicting dialects in catalog documents: {', '.join(sorted(names))}"
        )
    try:
        return get_dialect(names.pop() if names else "generic")
    except DialectError as e:
        raise CatalogLoadError(str(e)) from e


def _check_fields(data: Any, valid: set[str], kind: str) -> None:
    if not isinstance(data, dict):
        raise CatalogLoadError(f"Expected a mapping for {kind}, got {type(data).__name__}")
    unknown_fields = set(data.keys()) - valid
    if unknown_fields:
        raise CatalogLoadError(
            f"Unknown field(s) in {kind}: {', '.join(sorted(unknown_fields))}"
        )


def _parse_namespace(database: Database, data: dict) -> list[tuple[Table, Namespace, dict]]:
    _check_fields(data, VALID_NAMESPACE_FIELDS, "namespace definition")
    namespace = database.locate_namespace(data.get("catalog"), data.get("schema"))
    pending: list[tuple[Table, Namespace, dict]] = []

    for table_data in data.get("tables") or []:
        _check_fields(table_data, VALID_TABLE_FIELDS, "table definition")
        name = table_data.get("table")
        if not name:
            raise CatalogLoadError(
                f"Table definition missing 'table' field in namespace {namespace.name}"
            )
        physical = table_data.get("physical", not table_data.get("view", False))
        try:
            table = namespace.create_table(
                name,
                physical_name=table_data.get("physical_name"),
                physical=bool(physical),
            )
        except CatalogError as e:
            raise CatalogLoadError(str(e)) from e
        for fk_data in table_data.get("foreign_keys") or []:
            _check_fields(fk_data, VALID_FOREIGN_KEY_FIELDS, "foreign key definition")
            pending.append((table, namespace, fk_data))

    for seq_data in data.get("sequences") or []:
        _check_fields(seq_data, VALID_SEQUENCE_FIELDS, "sequence definition")
        name = seq_data.get("sequence")
        if not name:
            raise CatalogLoadError(
                f"Sequence definition missing 'sequence' field in namespace {namespace.name}"
            )
        try:
            namespace.create_sequence(name, physical_name=seq_data.get("physical_name"))
        except CatalogError as e:
            raise CatalogLoadError(str(e)) from e

    return pending


def _add_foreign_key(database: Database, table: Table, namespace: Namespace, data: dict) -> None:
    """Resolve ``references`` and attach the foreign key.

    ``references`` is ``table``, ``schema.table`` or ``catalog.schema.table``;
    missing parts default to the owning table's namespace.
    """
    name = data.get("name")
    if not name:
        raise CatalogLoadError(f"Foreign key on table '{table.name}' missing 'name' field")
    reference = data.get("references")
    if not reference:
        raise CatalogLoadError(f"Foreign key '{name}' missing 'references' field")

    parts = str(reference).split(".")
    if len(parts) > 3:
        raise CatalogLoadError(f"Foreign key '{name}' has invalid reference '{reference}'")
    target_name = namespace.name
    if len(parts) == 3:
        catalog, schema, table_name = parts
        target_name = NamespaceName.of(catalog, schema)
    elif len(parts) == 2:
        schema, table_name = parts
        target_name = NamespaceName(
            catalog=namespace.name.catalog, schema=Identifier.to_identifier(schema)
        )
    else:
        table_name = parts[0]

    target_namespace = database.find_namespace(target_name)
    referenced = target_namespace.get_table(table_name) if target_namespace else None
    if referenced is None:
        raise CatalogLoadError(
            f"Foreign key '{name}' on table '{table.name}' references unknown table '{reference}'"
        )

    try:
        table.add_foreign_key(
            name,
            referenced,
            columns=data.get("columns"),
            referenced_columns=data.get("referenced_columns"),
        )
    except CatalogError as e:
        raise CatalogLoadError(str(e)) from e


def _parse_auxiliary_object(data: dict) -> AuxiliaryDatabaseObject:
    _check_fields(data, VALID_AUXILIARY_FIELDS, "auxiliary object definition")
    name = data.get("name")
    if not name:
        raise CatalogLoadError("Auxiliary object definition missing 'name' field")

    drop = data.get("drop")
    if drop is None:
        raise CatalogLoadError(f"Auxiliary object '{name}' missing 'drop' field")
    if isinstance(drop, str):
        drop = [drop]

    return AuxiliaryDatabaseObject(
        name=name,
        drop_statements=list(drop),
        dialect_scopes=_parse_dialect_scopes(name, data.get("dialects")),
        before_tables=bool(data.get("before_tables", False)),
        catalog_name=data.get("catalog"),
        schema_name=data.get("schema"),
    )


def _parse_dialect_scopes(name: str, dialects: Any) -> set[str]:
    if not dialects:
        return set()
    if isinstance(dialects, str):
        dialects = [dialects]
    scopes = set()
    for dialect_name in dialects:
        try:
            scopes.add(canonical_dialect_name(str(dialect_name)))
        except DialectError as e:
            raise CatalogLoadError(f"Auxiliary object '{name}': {e}") from e
    return scopes
