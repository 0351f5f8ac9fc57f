"""Catalog model: an in-memory description of a relational database."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator, Optional

from schemadrop.exceptions import CatalogError
from schemadrop.types import ExportIdentifier

if TYPE_CHECKING:
    from schemadrop.dialects.base import Dialect

__all__ = [
    "Identifier",
    "NamespaceName",
    "ForeignKey",
    "Table",
    "Sequence",
    "AuxiliaryDatabaseObject",
    "Namespace",
    "DatabaseEnvironment",
    "Database",
]

_QUOTE_PAIRS = {"`": "`", '"': '"', "[": "]"}


@dataclass(frozen=True)
class Identifier:
    """A database object name, optionally quoted."""

    text: str
    quoted: bool = False

    @classmethod
    def to_identifier(cls, text: Optional[str], quoted: bool = False) -> Optional["Identifier"]:
        """Build an Identifier, or None for a missing/blank name.

        Names wrapped in backticks, double quotes or brackets are unwrapped
        and marked as quoted.
        """
        if text is None:
            return None
        text = text.strip()
        if not text:
            return None
        closing = _QUOTE_PAIRS.get(text[0])
        if closing and len(text) > 2 and text.endswith(closing):
            return cls(text=text[1:-1], quoted=True)
        return cls(text=text, quoted=quoted)

    def render(self, dialect: Optional["Dialect"] = None) -> str:
        """Render for use in SQL, quoting with the dialect's quote characters."""
        if self.quoted and dialect is not None:
            return dialect.quote(self.text)
        return self.text

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class NamespaceName:
    """Catalog/schema pair qualifying a namespace. Either part may be absent."""

    catalog: Optional[Identifier] = None
    schema: Optional[Identifier] = None

    @classmethod
    def of(cls, catalog: Optional[str] = None, schema: Optional[str] = None) -> "NamespaceName":
        return cls(
            catalog=Identifier.to_identifier(catalog),
            schema=Identifier.to_identifier(schema),
        )

    def __str__(self) -> str:
        parts = [str(p) for p in (self.catalog, self.schema) if p is not None]
        return ".".join(parts) or "<default>"


def _export_part(identifier: Identifier) -> str:
    # quoted and unquoted spellings name different objects
    return f"`{identifier.text}`" if identifier.quoted else identifier.text


def _qualify(namespace: NamespaceName, name: Identifier) -> ExportIdentifier:
    parts = [namespace.catalog, namespace.schema, name]
    return ".".join(_export_part(p) for p in parts if p is not None)


@dataclass(eq=False)
class ForeignKey:
    """Foreign key constraint owned by one table and referencing another."""

    name: str
    table: "Table" = field(repr=False)
    referenced_table: "Table" = field(repr=False)
    columns: list[str] = field(default_factory=list)
    referenced_columns: list[str] = field(default_factory=list)


@dataclass(eq=False)
class Table:
    """A table, or a non-physical relation such as a view.

    Only physical tables take part in drop generation.
    """

    name: str
    namespace: NamespaceName
    physical_name: Identifier
    physical: bool = True
    foreign_keys: list[ForeignKey] = field(default_factory=list)

    @property
    def is_physical_table(self) -> bool:
        return self.physical

    @property
    def export_identifier(self) -> ExportIdentifier:
        return _qualify(self.namespace, self.physical_name)

    def qualified_name(self, dialect: "Dialect") -> str:
        return dialect.qualify(self.namespace, self.physical_name)

    def add_foreign_key(
        self,
        name: str,
        referenced_table: "Table",
        columns: Optional[list[str]] = None,
        referenced_columns: Optional[list[str]] = None,
    ) -> ForeignKey:
        """Attach a named foreign key referencing ``referenced_table``."""
        if self.get_foreign_key(name) is not None:
            raise CatalogError(f"Duplicate foreign key '{name}' on table '{self.name}'")
        fk = ForeignKey(
            name=name,
            table=self,
            referenced_table=referenced_table,
            columns=list(columns or []),
            referenced_columns=list(referenced_columns or []),
        )
        self.foreign_keys.append(fk)
        return fk

    def get_foreign_key(self, name: str) -> Optional[ForeignKey]:
        for fk in self.foreign_keys:
            if fk.name == name:
                return fk
        return None


@dataclass(eq=False)
class Sequence:
    """A physical sequence generator."""

    name: str
    namespace: NamespaceName
    physical_name: Identifier

    @property
    def export_identifier(self) -> ExportIdentifier:
        return _qualify(self.namespace, self.physical_name)

    def qualified_name(self, dialect: "Dialect") -> str:
        return dialect.qualify(self.namespace, self.physical_name)


@dataclass(eq=False)
class AuxiliaryDatabaseObject:
    """A free-standing, dialect-conditional object such as a trigger.

    ``dialect_scopes`` holds dialect names the object applies to; an empty
    set means every dialect. ``${catalog}`` and ``${schema}`` in the
    statements are replaced with ``catalog_name`` and ``schema_name``.
    """

    name: str
    drop_statements: list[str]
    dialect_scopes: set[str] = field(default_factory=set)
    before_tables: bool = False
    catalog_name: Optional[str] = None
    schema_name: Optional[str] = None

    def applies_to_dialect(self, dialect: "Dialect") -> bool:
        if not self.dialect_scopes:
            return True
        scopes = {s.lower() for s in self.dialect_scopes}
        return dialect.name.lower() in scopes

    def sql_drop_strings(self, dialect: "Dialect") -> list[str]:
        return [self._substitute_variables(s) for s in self.drop_statements]

    def _substitute_variables(self, sql: str) -> str:
        return sql.replace("${catalog}", self.catalog_name or "").replace(
            "${schema}", self.schema_name or ""
        )


class Namespace:
    """Tables and sequences under one catalog/schema qualifier.

    Both collections keep insertion order, which is also the drop order.
    """

    def __init__(self, name: NamespaceName):
        self.name = name
        self._tables: dict[str, Table] = {}
        self._sequences: dict[str, Sequence] = {}

    def __repr__(self) -> str:
        return f"Namespace({self.name})"

    @property
    def tables(self) -> list[Table]:
        return list(self._tables.values())

    @property
    def sequences(self) -> list[Sequence]:
        return list(self._sequences.values())

    def physical_tables(self) -> Iterator[Table]:
        return (t for t in self._tables.values() if t.is_physical_table)

    def get_table(self, name: str) -> Optional[Table]:
        return self._tables.get(name)

    def get_sequence(self, name: str) -> Optional[Sequence]:
        return self._sequences.get(name)

    def create_table(
        self,
        name: str,
        physical_name: Optional[str] = None,
        physical: bool = True,
    ) -> Table:
        """Register a table under its logical ``name``.

        ``physical_name`` defaults to ``name``. Two logical tables may share a
        physical name; that collision is reported when drops are generated.
        """
        if not name or not name.strip():
            raise CatalogError(f"Table name must not be blank in namespace {self.name}")
        if name in self._tables:
            raise CatalogError(f"Duplicate table name '{name}' in namespace {self.name}")
        table = Table(
            name=name,
            namespace=self.name,
            physical_name=Identifier.to_identifier(physical_name or name),
            physical=physical,
        )
        self._tables[name] = table
        return table

    def create_sequence(
        self,
        name: str,
        physical_name: Optional[str] = None,
    ) -> Sequence:
        if not name or not name.strip():
            raise CatalogError(f"Sequence name must not be blank in namespace {self.name}")
        if name in self._sequences:
            raise CatalogError(f"Duplicate sequence name '{name}' in namespace {self.name}")
        sequence = Sequence(
            name=name,
            namespace=self.name,
            physical_name=Identifier.to_identifier(physical_name or name),
        )
        self._sequences[name] = sequence
        return sequence


@dataclass
class DatabaseEnvironment:
    """Environment the catalog was built for; supplies the default dialect."""

    dialect: "Dialect"


class Database:
    """Root of the catalog: namespaces plus auxiliary database objects."""

    def __init__(self, dialect: "Dialect"):
        self.environment = DatabaseEnvironment(dialect=dialect)
        self._namespaces: dict[NamespaceName, Namespace] = {}
        self._auxiliary_objects: list[AuxiliaryDatabaseObject] = []

    @property
    def dialect(self) -> "Dialect":
        return self.environment.dialect

    @property
    def namespaces(self) -> list[Namespace]:
        return list(self._namespaces.values())

    @property
    def auxiliary_objects(self) -> list[AuxiliaryDatabaseObject]:
        return list(self._auxiliary_objects)

    def get_namespace(
        self, catalog: Optional[str] = None, schema: Optional[str] = None
    ) -> Optional[Namespace]:
        return self._namespaces.get(NamespaceName.of(catalog, schema))

    def find_namespace(self, name: NamespaceName) -> Optional[Namespace]:
        return self._namespaces.get(name)

    def locate_namespace(
        self, catalog: Optional[str] = None, schema: Optional[str] = None
    ) -> Namespace:
        """Return the namespace for catalog/schema, creating it on first use."""
        name = NamespaceName.of(catalog, schema)
        namespace = self._namespaces.get(name)
        if namespace is None:
            namespace = Namespace(name)
            self._namespaces[name] = namespace
        return namespace

    @property
    def default_namespace(self) -> Namespace:
        return self.locate_namespace()

    def add_auxiliary_object(self, obj: AuxiliaryDatabaseObject) -> None:
        self._auxiliary_objects.append(obj)

    def physical_tables(self) -> Iterator[Table]:
        for namespace in self._namespaces.values():
            yield from namespace.physical_tables()

    def sequences(self) -> Iterator[Sequence]:
        for namespace in self._namespaces.values():
            yield from namespace.sequences
