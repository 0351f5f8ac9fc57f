"""Shared test helpers for schemadrop tests."""

from typing import Optional

from schemadrop.catalog.models import AuxiliaryDatabaseObject, Database
from schemadrop.config import Config
from schemadrop.dialects import Dialect, GenericDialect


class RecordingTarget:
    """Target that records its whole lifecycle as a list of events.

    Events are "prepare", "release" and the accepted statements themselves.
    """

    accepts_import_script_actions = False

    def __init__(self, name: str = "target", log: Optional[list] = None):
        self.name = name
        self.events: list[str] = []
        self._log = log

    def prepare(self) -> None:
        self._record("prepare")

    def accept(self, statement: str) -> None:
        self._record(statement)

    def release(self) -> None:
        self._record("release")

    @property
    def statements(self) -> list[str]:
        return [e for e in self.events if e not in ("prepare", "release")]

    def _record(self, event: str) -> None:
        self.events.append(event)
        if self._log is not None:
            self._log.append((self.name, event))


class FailingTarget(RecordingTarget):
    """RecordingTarget that raises from one lifecycle step."""

    def __init__(self, fail_on: str, name: str = "failing", log: Optional[list] = None):
        super().__init__(name=name, log=log)
        self.fail_on = fail_on

    def prepare(self) -> None:
        super().prepare()
        if self.fail_on == "prepare":
            raise RuntimeError(f"{self.name} prepare failed")

    def accept(self, statement: str) -> None:
        super().accept(statement)
        if self.fail_on == "accept":
            raise RuntimeError(f"{self.name} accept failed")

    def release(self) -> None:
        super().release()
        if self.fail_on == "release":
            raise RuntimeError(f"{self.name} release failed")


class FakeClient:
    """Stand-in for DatabricksClient: records executed SQL."""

    def __init__(self, fail_on: Optional[str] = None):
        self.fail_on = fail_on
        self.connected = False
        self.closed = False
        self.executed: list[str] = []

    def connect(self) -> None:
        self.connected = True

    def execute(self, sql: str) -> None:
        if self.fail_on is not None and self.fail_on in sql:
            raise RuntimeError(f"cannot execute {sql}")
        self.executed.append(sql)

    def close(self) -> None:
        self.closed = True


class NoConstraintDialect(GenericDialect):
    name = "noconstraints"
    drop_constraints = False


def make_test_config(**overrides) -> Config:
    """Create a Config for tests with sensible defaults."""
    return Config(**overrides)


def make_sample_database(dialect: Optional[Dialect] = None) -> Database:
    """Namespace S with table T (owning FK1) and sequence SEQ1."""
    database = Database(dialect or GenericDialect())
    namespace = database.locate_namespace(schema="S")
    table = namespace.create_table("T")
    table.add_foreign_key("FK1", table)
    namespace.create_sequence("SEQ1")
    return database


def make_shop_database(dialect: Optional[Dialect] = None) -> Database:
    """Two namespaces with cross-namespace foreign keys, a view and aux objects.

    sales: customers, orders (fk_orders_customer -> customers,
           fk_orders_product -> inventory.products), order_summary (view),
           sequence order_seq
    inventory: products, sequence product_seq
    default namespace: audit_log
    """
    database = Database(dialect or GenericDialect())

    sales = database.locate_namespace(schema="sales")
    inventory = database.locate_namespace(schema="inventory")
    default = database.default_namespace

    customers = sales.create_table("customers")
    orders = sales.create_table("orders")
    sales.create_table("order_summary", physical=False)
    sales.create_sequence("order_seq")

    products = inventory.create_table("products")
    inventory.create_sequence("product_seq")

    default.create_table("audit_log")

    orders.add_foreign_key("fk_orders_customer", customers)
    orders.add_foreign_key("fk_orders_product", products)

    database.add_auxiliary_object(
        AuxiliaryDatabaseObject(
            name="audit_trigger",
            drop_statements=["drop trigger audit_trigger"],
            before_tables=True,
        )
    )
    database.add_auxiliary_object(
        AuxiliaryDatabaseObject(
            name="order_totals",
            drop_statements=["drop function order_totals"],
        )
    )
    return database
