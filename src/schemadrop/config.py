"""Configuration management for schemadrop."""

import configparser
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from schemadrop.exceptions import ConfigError
from schemadrop.types import DialectResolution

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def load_databrickscfg(profile: str = "DEFAULT") -> dict[str, str]:
    """Load credentials from ~/.databrickscfg.

    Args:
        profile: Profile name to load (default: "DEFAULT")

    Returns:
        Dict with host, token, and optionally http_path

    Raises:
        ConfigError: If the profile doesn't exist in the file
    """
    cfg_path = Path.home() / ".databrickscfg"
    if not cfg_path.exists():
        return {}

    config = configparser.ConfigParser()
    config.read(cfg_path)

    if profile not in config:
        available = [s for s in config.sections() if s != "DEFAULT"] or ["DEFAULT"]
        raise ConfigError(
            f"Profile '{profile}' not found in ~/.databrickscfg. "
            f"Available profiles: {', '.join(available)}"
        )

    section = config[profile]
    result = {}

    if "host" in section:
        host = section["host"].strip()
        if host.startswith("https://"):
            host = host[8:]
        result["host"] = host.rstrip("/")

    if "token" in section:
        result["token"] = section["token"].strip()

    if "http_path" in section:
        result["http_path"] = section["http_path"].strip()

    return result


def parse_bool(value: str, name: str) -> bool:
    """Parse a boolean setting such as SCHEMADROP_DROP_SCHEMAS."""
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigError(f"Invalid boolean for {name}: {value!r}")


def parse_dialect_resolution(value: str) -> DialectResolution:
    try:
        return DialectResolution(value.strip().lower())
    except ValueError:
        choices = ", ".join(r.value for r in DialectResolution)
        raise ConfigError(
            f"Invalid dialect resolution {value!r}. Expected one of: {choices}"
        ) from None


@dataclass
class Config:
    """Configuration for schemadrop."""

    catalog_path: str = "catalog.yaml"
    dialect: Optional[str] = None
    drop_schemas: bool = False
    delimiter: str = ";"
    dialect_resolution: DialectResolution = DialectResolution.EXPLICIT
    databricks_host: Optional[str] = None
    databricks_token: Optional[str] = None
    databricks_http_path: Optional[str] = None

    @classmethod
    def from_env(
        cls,
        *,
        catalog_path: Optional[str] = None,
        dialect: Optional[str] = None,
        drop_schemas: Optional[bool] = None,
        delimiter: Optional[str] = None,
        dialect_resolution: Optional[str] = None,
        databricks_host: Optional[str] = None,
        databricks_token: Optional[str] = None,
        databricks_http_path: Optional[str] = None,
        profile: Optional[str] = None,
    ) -> "Config":
        """Load configuration from ~/.databrickscfg, env vars, with CLI overrides.

        Priority (highest to lowest):
        1. Explicit parameters (CLI args)
        2. Environment variables
        3. ~/.databrickscfg profile (connection settings only)
        """
        databricks_cfg = {}
        profile_name = profile or os.environ.get("DATABRICKS_CONFIG_PROFILE", "DEFAULT")
        try:
            databricks_cfg = load_databrickscfg(profile_name)
        except ConfigError:
            if profile is not None:
                raise

        def resolve(explicit, env_key, cfg_key=None):
            if explicit is not None:
                return explicit
            env_val = os.environ.get(env_key)
            if env_val is not None:
                return env_val
            if cfg_key and cfg_key in databricks_cfg:
                return databricks_cfg[cfg_key]
            return None

        if drop_schemas is None:
            env_drop = os.environ.get("SCHEMADROP_DROP_SCHEMAS")
            drop_schemas = (
                parse_bool(env_drop, "SCHEMADROP_DROP_SCHEMAS") if env_drop is not None else False
            )

        resolution = resolve(dialect_resolution, "SCHEMADROP_DIALECT_RESOLUTION")

        return cls(
            catalog_path=resolve(catalog_path, "SCHEMADROP_CATALOG") or "catalog.yaml",
            dialect=resolve(dialect, "SCHEMADROP_DIALECT"),
            drop_schemas=drop_schemas,
            delimiter=delimiter
            if delimiter is not None
            else os.environ.get("SCHEMADROP_DELIMITER", ";"),
            dialect_resolution=parse_dialect_resolution(resolution)
            if resolution is not None
            else DialectResolution.EXPLICIT,
            databricks_host=resolve(databricks_host, "DATABRICKS_HOST", "host"),
            databricks_token=resolve(databricks_token, "DATABRICKS_TOKEN", "token"),
            databricks_http_path=resolve(
                databricks_http_path, "DATABRICKS_HTTP_PATH", "http_path"
            ),
        )

    def validate_for_db_ops(self) -> None:
        """Validate that connection settings for executing drops are present.

        Raises:
            ConfigError: If host or token is missing.
        """
        missing = []
        if not self.databricks_host:
            missing.append("databricks_host (use --profile or DATABRICKS_HOST)")
        if not self.databricks_token:
            missing.append("databricks_token (use --profile or DATABRICKS_TOKEN)")

        if missing:
            raise ConfigError(
                "Missing required configuration:\n  - " + "\n  - ".join(missing)
            )
