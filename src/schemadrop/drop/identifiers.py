"""Per-run tracking of export identifiers."""

from schemadrop.exceptions import DuplicateExportError
from schemadrop.types import ExportIdentifier

__all__ = ["ExportIdentifierRegistry"]


class ExportIdentifierRegistry:
    """Remembers which export identifiers have produced statements.

    One registry lives for exactly one drop run. The first observation of an
    identifier succeeds; any later observation raises DuplicateExportError.
    """

    def __init__(self) -> None:
        self._seen: set[ExportIdentifier] = set()

    def observe(self, export_identifier: ExportIdentifier) -> None:
        if export_identifier in self._seen:
            raise DuplicateExportError(export_identifier)
        self._seen.add(export_identifier)

    def __contains__(self, export_identifier: object) -> bool:
        return export_identifier in self._seen

    def __len__(self) -> int:
        return len(self._seen)
