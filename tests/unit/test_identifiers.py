"""Tests for export identifier tracking."""

import pytest

from schemadrop.drop.identifiers import ExportIdentifierRegistry
from schemadrop.exceptions import DuplicateExportError


class TestExportIdentifierRegistry:
    def test_first_observation_succeeds(self):
        registry = ExportIdentifierRegistry()

        registry.observe("sales.orders")

        assert "sales.orders" in registry
        assert len(registry) == 1

    def test_distinct_identifiers_never_raise(self):
        registry = ExportIdentifierRegistry()

        for identifier in ["a", "b", "sales.a", "main.sales.a"]:
            registry.observe(identifier)

        assert len(registry) == 4

    def test_second_observation_raises(self):
        registry = ExportIdentifierRegistry()
        registry.observe("sales.orders")

        with pytest.raises(DuplicateExportError) as exc_info:
            registry.observe("sales.orders")

        assert exc_info.value.export_identifier == "sales.orders"

    def test_every_later_observation_raises(self):
        registry = ExportIdentifierRegistry()
        registry.observe("t")

        for _ in range(2):
            with pytest.raises(DuplicateExportError):
                registry.observe("t")
        assert len(registry) == 1

    def test_identifiers_are_case_sensitive(self):
        registry = ExportIdentifierRegistry()
        registry.observe("Orders")

        registry.observe("orders")

        assert len(registry) == 2
