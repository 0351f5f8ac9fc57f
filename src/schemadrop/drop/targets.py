"""Statement targets and the multiplexer that drives them together."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Any, Iterable, Iterator, Optional, Protocol, runtime_checkable

from schemadrop.exceptions import TargetError
from schemadrop.types import Statement

__all__ = [
    "Target",
    "CollectingTarget",
    "StdoutTarget",
    "FileTarget",
    "DatabaseTarget",
    "TargetMultiplexer",
]

logger = logging.getLogger(__name__)


@runtime_checkable
class Target(Protocol):
    """
    Consumer of generated statements.

    Lifecycle per run: exactly one prepare(), any number of accept(),
    exactly one release(). ``accepts_import_script_actions`` is read only by
    create runs; drop runs ignore it.
    """

    accepts_import_script_actions: bool

    def prepare(self) -> None:
        ...

    def accept(self, statement: Statement) -> None:
        ...

    def release(self) -> None:
        ...


class CollectingTarget:
    """Keeps every accepted statement in memory, in order."""

    accepts_import_script_actions = True

    def __init__(self) -> None:
        self.statements: list[Statement] = []

    def prepare(self) -> None:
        pass

    def accept(self, statement: Statement) -> None:
        self.statements.append(statement)

    def release(self) -> None:
        pass


class StdoutTarget:
    """Prints each statement followed by the delimiter."""

    accepts_import_script_actions = True

    def __init__(self, delimiter: Optional[str] = ";", stream: Optional[IO[str]] = None):
        self.delimiter = delimiter
        self._stream = stream

    def prepare(self) -> None:
        pass

    def accept(self, statement: Statement) -> None:
        print(statement + (self.delimiter or ""), file=self._stream)

    def release(self) -> None:
        pass


class FileTarget:
    """Writes a drop script to ``path``; the file is open between prepare and release."""

    accepts_import_script_actions = True

    def __init__(self, path: Path, delimiter: Optional[str] = ";", append: bool = False):
        self.path = Path(path)
        self.delimiter = delimiter
        self.append = append
        self._file: Optional[IO[str]] = None

    def prepare(self) -> None:
        if self._file is not None:
            raise TargetError(f"File target {self.path} is already prepared")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self.path, "a" if self.append else "w", encoding="utf-8")
        except OSError as e:
            raise TargetError(f"Unable to open file target {self.path}: {e}") from e
        logger.debug(f"Opened drop script {self.path}")

    def accept(self, statement: Statement) -> None:
        if self._file is None:
            raise TargetError(f"File target {self.path} has not been prepared")
        try:
            self._file.write(statement)
            if self.delimiter:
                self._file.write(self.delimiter)
            self._file.write("\n")
        except OSError as e:
            raise TargetError(f"Unable to write to file target {self.path}: {e}") from e

    def release(self) -> None:
        if self._file is None:
            return
        try:
            self._file.close()
        except OSError as e:
            raise TargetError(f"Unable to close file target {self.path}: {e}") from e
        finally:
            self._file = None
        logger.debug(f"Closed drop script {self.path}")


class DatabaseTarget:
    """Executes each statement through a client.

    The client needs ``connect()``, ``execute(sql)`` and ``close()``; the
    Databricks client satisfies this. With ``halt_on_error`` disabled a failed
    statement is logged and recorded in ``errors`` and execution continues.
    """

    accepts_import_script_actions = True

    def __init__(self, client: Any, halt_on_error: bool = True):
        self.client = client
        self.halt_on_error = halt_on_error
        self.errors: list[Exception] = []

    def prepare(self) -> None:
        self.errors = []
        try:
            self.client.connect()
        except Exception as e:
            raise TargetError(f"Unable to open database target: {e}") from e

    def accept(self, statement: Statement) -> None:
        try:
            self.client.execute(statement)
        except Exception as e:
            if self.halt_on_error:
                raise TargetError(f"Unable to execute '{statement}': {e}") from e
            logger.warning(f"Unsuccessful: {statement} ({e})")
            self.errors.append(e)

    def release(self) -> None:
        try:
            self.client.close()
        except Exception as e:
            raise TargetError(f"Unable to close database target: {e}") from e


class TargetMultiplexer:
    """
    Broadcasts statements to an ordered list of targets.

    Every target sees the same statements in the same order, bracketed by one
    prepare and one release. Zero targets is valid and discards the output.
    """

    def __init__(self, targets: Iterable[Target] = ()) -> None:
        self._targets: list[Target] = list(targets)
        self._prepared: list[Target] = []
        self._active = False
        self.statement_count = 0

    def __len__(self) -> int:
        return len(self._targets)

    @property
    def targets(self) -> list[Target]:
        return list(self._targets)

    def prepare_all(self) -> None:
        """Prepare every target in list order.

        If a target fails to prepare, the ones already prepared stay recorded
        so that release_all() can still release them.
        """
        if self._active:
            raise TargetError("Targets are already prepared")
        self._active = True
        self.statement_count = 0
        for target in self._targets:
            target.prepare()
            self._prepared.append(target)

    def broadcast(self, statement: Statement) -> None:
        if not self._active:
            raise TargetError("Targets must be prepared before statements are broadcast")
        for target in self._targets:
            target.accept(statement)
        self.statement_count += 1

    def broadcast_all(self, statements: Optional[Iterable[Statement]]) -> None:
        if statements is None:
            return
        for statement in statements:
            self.broadcast(statement)

    def release_all(self, suppress_errors: bool = False) -> None:
        """Release every prepared target in list order.

        A failing release does not stop the others. The first failure is
        re-raised afterward unless ``suppress_errors`` is set, in which case
        failures are only logged.
        """
        prepared, self._prepared = self._prepared, []
        self._active = False
        first_error: Optional[Exception] = None
        for target in prepared:
            try:
                target.release()
            except Exception as e:
                if first_error is None and not suppress_errors:
                    first_error = e
                else:
                    logger.warning(f"Failed to release target {target!r}: {e}")
        if first_error is not None:
            raise first_error

    @contextmanager
    def bracket(self) -> Iterator["TargetMultiplexer"]:
        """Prepare all targets on entry and release them on every exit path.

        When the body (or a prepare) fails, release errors are logged and the
        original error propagates. Entering while already prepared raises
        without touching the targets.
        """
        if self._active:
            raise TargetError("Targets are already prepared")
        try:
            self.prepare_all()
            yield self
        except BaseException:
            self.release_all(suppress_errors=True)
            raise
        self.release_all()
