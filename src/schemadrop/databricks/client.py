"""Databricks connection used to run drop statements."""

import logging
from typing import Any, Optional

from databricks.connect import DatabricksSession
from pyspark.sql import SparkSession

logger = logging.getLogger(__name__)


class DatabricksClient:
    """Runs drop statements through a databricks-connect session.

    host and token override the Databricks SDK configuration (env vars,
    ~/.databrickscfg profiles); without them the SDK decides the workspace
    and compute. http_path is accepted for configuration symmetry only.
    """

    def __init__(
        self,
        host: Optional[str] = None,
        token: Optional[str] = None,
        http_path: Optional[str] = None,
    ) -> None:
        self.host = host
        self.token = token
        self.http_path = http_path
        self._session: Optional[SparkSession] = None

    @property
    def is_connected(self) -> bool:
        return self._session is not None

    def _session_builder(self) -> Any:
        builder = DatabricksSession.builder
        if self.host:
            builder = builder.host(self.host)
        if self.token:
            builder = builder.token(self.token)
        return builder

    def connect(self) -> None:
        if self.is_connected:
            raise RuntimeError("Already connected. Call close() before reconnecting.")
        if self.http_path:
            logger.debug(f"Ignoring http_path {self.http_path}; compute comes from the SDK config")
        self._session = self._session_builder().getOrCreate()
        logger.debug(f"Connected to {self.host or 'default Databricks workspace'}")

    def execute(self, statement: str) -> None:
        """Run one statement, discarding any rows it returns."""
        if self._session is None:
            raise RuntimeError("Not connected. Call connect() first.")
        logger.debug(f"Executing: {statement}")
        self._session.sql(statement).collect()

    def close(self) -> None:
        session, self._session = self._session, None
        if session is not None:
            session.stop()

    def __enter__(self) -> "DatabricksClient":
        self.connect()
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()
