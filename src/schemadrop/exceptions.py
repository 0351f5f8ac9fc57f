"""Exception classes for schemadrop."""

__all__ = [
    "SchemadropError",
    "CatalogError",
    "CatalogLoadError",
    "DialectError",
    "SchemaManagementError",
    "DuplicateExportError",
    "TargetError",
    "ConfigError",
]


class SchemadropError(Exception):
    """Base exception for schemadrop."""


class CatalogError(SchemadropError):
    """Invalid use of the catalog model."""


class CatalogLoadError(CatalogError):
    """Error loading catalog definition files."""


class DialectError(SchemadropError):
    """Unknown dialect, or an operation the dialect cannot render."""


class SchemaManagementError(SchemadropError):
    """Base error raised while generating or delivering drop statements."""


class DuplicateExportError(SchemaManagementError):
    """The same export identifier produced statements twice in one run."""

    def __init__(self, export_identifier: str):
        self.export_identifier = export_identifier
        super().__init__(f"SQL strings added more than once for: {export_identifier}")


class TargetError(SchemaManagementError):
    """A target failed to prepare, accept or release."""


class ConfigError(SchemadropError):
    """Error in configuration."""
