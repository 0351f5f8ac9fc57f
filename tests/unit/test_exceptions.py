"""Tests for schemadrop.exceptions module."""

import pytest

from schemadrop.exceptions import (
    CatalogError,
    CatalogLoadError,
    ConfigError,
    DialectError,
    DuplicateExportError,
    SchemadropError,
    SchemaManagementError,
    TargetError,
)


class TestExceptionHierarchy:
    """Tests for exception hierarchy."""

    def test_exception_hierarchy(self):
        """All exceptions inherit from SchemadropError."""
        assert issubclass(CatalogError, SchemadropError)
        assert issubclass(CatalogLoadError, CatalogError)
        assert issubclass(DialectError, SchemadropError)
        assert issubclass(SchemaManagementError, SchemadropError)
        assert issubclass(DuplicateExportError, SchemaManagementError)
        assert issubclass(TargetError, SchemaManagementError)
        assert issubclass(ConfigError, SchemadropError)

    def test_schemadrop_error_is_exception(self):
        assert issubclass(SchemadropError, Exception)

    def test_duplicate_export_error_carries_identifier(self):
        error = DuplicateExportError("main.sales.orders")

        assert error.export_identifier == "main.sales.orders"
        assert str(error) == "SQL strings added more than once for: main.sales.orders"

    def test_duplicate_export_error_caught_as_management_error(self):
        with pytest.raises(SchemaManagementError):
            raise DuplicateExportError("t")
