"""Configuration loader for the dashboard tile registry."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from dashboard_tiles.errors import ConfigError
from dashboard_tiles.keys import DASHBOARD_TILE_PREF_KEY_PREFIX
from dashboard_tiles.models import UserHandle
from dashboard_tiles.ordering import PRIORITY_GROUP_SIZE

logger = logging.getLogger(__name__)


class DashboardConfig(BaseModel):
    """Settings for the registry and its collaborators."""

    enabled: bool = Field(True, description="Serve dashboard tiles at all")
    caller_package: str = Field(
        "com.android.settings", description="Package of the hosting settings app"
    )
    caller_user_id: Optional[int] = Field(
        0, ge=0, description="User the caller runs as; null when unknown"
    )
    key_prefix: str = Field(
        DASHBOARD_TILE_PREF_KEY_PREFIX, min_length=1, description="Prefix for derived tile keys"
    )
    priority_group_size: int = Field(
        PRIORITY_GROUP_SIZE, gt=0, description="Order span of one priority group"
    )
    extra_intent_action: Optional[str] = Field(
        None, description="Additional action used when scanning for tiles"
    )
    settings_root_action: str = Field(
        "android.settings.SETTINGS", description="Action that opens the settings root"
    )
    settings_root_class: str = Field(
        ".Settings", description="Settings root activity, relative to caller_package"
    )
    log_level: str = Field("INFO", description="Logging level name")

    @property
    def caller_user(self) -> Optional[UserHandle]:
        if self.caller_user_id is None:
            return None
        return UserHandle(identifier=self.caller_user_id)


class ConfigLoader:
    """Loads dashboard configuration from YAML."""

    DEFAULT_CONFIG_PATHS = [
        "/etc/dashboard-tiles/config.yaml",
        "./config/dashboard_tiles.yaml",
        "~/.config/dashboard-tiles/config.yaml",
    ]

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration loader.

        Args:
            config_path: Path to configuration file (optional)
        """
        self.config_path = config_path
        self.raw: Dict[str, Any] = {}
        self.loaded_from: Optional[Path] = None

    def _candidate_paths(self) -> List[str]:
        if self.config_path:
            return [self.config_path]
        return list(self.DEFAULT_CONFIG_PATHS)

    def load(self) -> DashboardConfig:
        """Load and validate configuration.

        An explicit path must exist and parse. Default paths are tried in
        order; when none is usable the defaults are returned.

        Raises:
            ConfigError: If an explicit file is missing or any file is invalid
        """
        for path in self._candidate_paths():
            expanded_path = Path(path).expanduser()
            if not expanded_path.exists():
                if self.config_path:
                    raise ConfigError(f"Config file not found: {expanded_path}")
                continue

            try:
                with open(expanded_path, "r") as f:
                    data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Config file {expanded_path} is not valid YAML: {e}") from e

            if not isinstance(data, dict):
                raise ConfigError(f"Config file {expanded_path} must contain a mapping")

            self.raw = data
            self.loaded_from = expanded_path
            logger.info(f"Loaded configuration from {expanded_path}")
            return self._validate(data.get("dashboard", data))

        logger.warning("No configuration file found, using defaults")
        self.raw = {}
        return DashboardConfig()

    def get(self, key: str, default: Any = None) -> Any:
        """Get a raw value by dot-notation key, e.g. ``'dashboard.enabled'``."""
        value: Any = self.raw
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    @staticmethod
    def _validate(data: Dict[str, Any]) -> DashboardConfig:
        try:
            return DashboardConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid dashboard configuration: {e}") from e


def load_config(config_path: Optional[str] = None) -> DashboardConfig:
    """Convenience wrapper around ``ConfigLoader``."""
    return ConfigLoader(config_path).load()
