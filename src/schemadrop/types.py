"""Core type definitions for schemadrop."""

from enum import Enum
from typing import TypeAlias

Statement: TypeAlias = str
ExportIdentifier: TypeAlias = str
DialectName: TypeAlias = str

__all__ = [
    "Statement",
    "ExportIdentifier",
    "DialectName",
    "DialectResolution",
]


class DialectResolution(Enum):
    """Which dialect the constraint and post-table auxiliary phases consult.

    EXPLICIT threads the dialect passed to the drop call through every phase.
    ENVIRONMENT reads the database environment's dialect in those two phases,
    even when a different dialect was passed to the call.
    """

    EXPLICIT = "explicit"
    ENVIRONMENT = "environment"
