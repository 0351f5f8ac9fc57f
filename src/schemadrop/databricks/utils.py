"""Helpers for running drops against Databricks.

Kept apart from the CLI so they can be reused and tested without argparse.
"""

from schemadrop.config import Config
from schemadrop.drop.targets import DatabaseTarget


def build_database_target(config: Config, halt_on_error: bool = True) -> DatabaseTarget:
    """Create a target that executes statements on the configured workspace.

    The connection is opened when the target is prepared, not here.

    Raises:
        ConfigError: If connection configuration is missing.
    """
    config.validate_for_db_ops()

    from schemadrop.databricks.client import DatabricksClient

    client = DatabricksClient(
        host=config.databricks_host,
        token=config.databricks_token,
        http_path=config.databricks_http_path,
    )
    return DatabaseTarget(client, halt_on_error=halt_on_error)
