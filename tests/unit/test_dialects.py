"""Tests for dialects and the standard exporters."""

import pytest

from schemadrop.catalog.models import AuxiliaryDatabaseObject, Database
from schemadrop.dialects import (
    DatabricksDialect,
    Dialect,
    Exporter,
    GenericDialect,
    H2Dialect,
    MySQLDialect,
    PostgreSQLDialect,
    SQLiteDialect,
    available_dialects,
    get_dialect,
)
from schemadrop.exceptions import DialectError


@pytest.fixture
def database() -> Database:
    database = Database(GenericDialect())
    namespace = database.locate_namespace("main", "sales")
    customers = namespace.create_table("customers")
    orders = namespace.create_table("orders")
    orders.add_foreign_key("fk_orders_customer", customers)
    namespace.create_sequence("order_seq")
    return database


def _orders(database: Database):
    return database.get_namespace("main", "sales").get_table("orders")


def _sequence(database: Database):
    return database.get_namespace("main", "sales").get_sequence("order_seq")


class TestRegistry:
    def test_available_dialects(self):
        assert available_dialects() == [
            "databricks",
            "generic",
            "h2",
            "mysql",
            "postgresql",
            "sqlite",
        ]

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("postgresql", PostgreSQLDialect),
            ("Postgres", PostgreSQLDialect),
            ("pg", PostgreSQLDialect),
            ("  MySQL ", MySQLDialect),
            ("mariadb", MySQLDialect),
            ("ansi", GenericDialect),
            ("unity", DatabricksDialect),
            ("h2", H2Dialect),
            ("sqlite", SQLiteDialect),
        ],
    )
    def test_get_dialect(self, name, expected):
        assert isinstance(get_dialect(name), expected)

    def test_unknown_dialect(self):
        with pytest.raises(DialectError, match="Unknown dialect 'oracle'"):
            get_dialect("oracle")

    def test_each_call_returns_new_instance(self):
        assert get_dialect("generic") is not get_dialect("generic")


class TestDialectCapabilities:
    def test_generic_schema_command(self):
        assert GenericDialect().get_drop_schema_command("sales") == ["drop schema sales"]

    def test_databricks_schema_command(self):
        assert DatabricksDialect().get_drop_schema_command("`sales`") == [
            "drop schema if exists `sales` cascade"
        ]

    def test_sqlite_has_no_schemas(self):
        with pytest.raises(DialectError, match="does not support schemas"):
            SQLiteDialect().get_drop_schema_command("sales")

    @pytest.mark.parametrize("dialect", [MySQLDialect(), SQLiteDialect(), DatabricksDialect()])
    def test_dialects_without_sequences(self, dialect: Dialect):
        with pytest.raises(DialectError, match="does not support sequences"):
            dialect.get_drop_sequence_strings("s")

    def test_constraint_drop_support(self):
        assert GenericDialect().drop_constraints
        assert PostgreSQLDialect().drop_constraints
        assert not H2Dialect().drop_constraints
        assert not SQLiteDialect().drop_constraints

    def test_exporters_satisfy_protocol(self):
        dialect = GenericDialect()
        for exporter in (
            dialect.table_exporter,
            dialect.sequence_exporter,
            dialect.foreign_key_exporter,
            dialect.auxiliary_object_exporter,
        ):
            assert isinstance(exporter, Exporter)
            assert exporter.dialect is dialect


class TestTableExporter:
    @pytest.mark.parametrize(
        "dialect, expected",
        [
            (GenericDialect(), "drop table main.sales.orders"),
            (PostgreSQLDialect(), "drop table if exists main.sales.orders cascade"),
            (MySQLDialect(), "drop table if exists main.sales.orders"),
            (H2Dialect(), "drop table if exists main.sales.orders cascade"),
            (DatabricksDialect(), "drop table if exists main.sales.orders"),
        ],
    )
    def test_drop_table(self, database, dialect, expected):
        assert dialect.table_exporter.get_sql_drop_strings(_orders(database), database) == [
            expected
        ]

    def test_if_exists_after_table_name(self, database):
        class TrailingIfExists(GenericDialect):
            supports_if_exists_after_table_name = True

        dialect = TrailingIfExists()

        assert dialect.table_exporter.get_sql_drop_strings(_orders(database), database) == [
            "drop table main.sales.orders if exists"
        ]


class TestSequenceExporter:
    def test_generic(self, database):
        exporter = GenericDialect().sequence_exporter

        assert exporter.get_sql_drop_strings(_sequence(database), database) == [
            "drop sequence main.sales.order_seq"
        ]

    def test_postgresql(self, database):
        exporter = PostgreSQLDialect().sequence_exporter

        assert exporter.get_sql_drop_strings(_sequence(database), database) == [
            "drop sequence if exists main.sales.order_seq"
        ]

    def test_unsupported(self, database):
        with pytest.raises(DialectError):
            MySQLDialect().sequence_exporter.get_sql_drop_strings(_sequence(database), database)


class TestForeignKeyExporter:
    @pytest.mark.parametrize(
        "dialect, expected",
        [
            (GenericDialect(), "alter table main.sales.orders drop constraint fk_orders_customer"),
            (
                MySQLDialect(),
                "alter table if exists main.sales.orders drop foreign key fk_orders_customer",
            ),
            (
                DatabricksDialect(),
                "alter table if exists main.sales.orders "
                "drop constraint if exists fk_orders_customer",
            ),
        ],
    )
    def test_drop_foreign_key(self, database, dialect, expected):
        fk = _orders(database).foreign_keys[0]

        assert dialect.foreign_key_exporter.get_sql_drop_strings(fk, database) == [expected]

    def test_no_alter_table(self, database):
        fk = _orders(database).foreign_keys[0]

        assert SQLiteDialect().foreign_key_exporter.get_sql_drop_strings(fk, database) == []

    def test_quoted_constraint_name(self, database):
        orders = _orders(database)
        fk = orders.add_foreign_key('"FK Mixed"', orders)

        assert GenericDialect().foreign_key_exporter.get_sql_drop_strings(fk, database) == [
            'alter table main.sales.orders drop constraint "FK Mixed"'
        ]


class TestAuxiliaryObjectExporter:
    def test_delegates_to_object(self, database):
        obj = AuxiliaryDatabaseObject(
            name="trg",
            drop_statements=["drop trigger ${schema}.trg", "drop function ${schema}.trg_fn"],
            schema_name="sales",
        )

        assert GenericDialect().auxiliary_object_exporter.get_sql_drop_strings(obj, database) == [
            "drop trigger sales.trg",
            "drop function sales.trg_fn",
        ]
