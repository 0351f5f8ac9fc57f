"""Drop orchestration, targets and duplicate tracking."""

from schemadrop.drop.dropper import SchemaDropper
from schemadrop.drop.identifiers import ExportIdentifierRegistry
from schemadrop.drop.targets import (
    CollectingTarget,
    DatabaseTarget,
    FileTarget,
    StdoutTarget,
    Target,
    TargetMultiplexer,
)

__all__ = [
    "SchemaDropper",
    "ExportIdentifierRegistry",
    "CollectingTarget",
    "DatabaseTarget",
    "FileTarget",
    "StdoutTarget",
    "Target",
    "TargetMultiplexer",
]
