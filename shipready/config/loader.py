"""
Configuration loader for the project's tool directory.

Reads .ship-toolkit/config.yaml (or config.yml, or the older
config.json) and validates it into a ShipConfig.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from ..errors import ConfigError
from .defaults import TOOL_DIR, get_default_config
from .models import ShipConfig

CONFIG_FILENAMES = ("config.yaml", "config.yml", "config.json")


class ConfigLoader:
    """
    Loads and saves the project configuration.

    A project without a config file gets the defaults. A config file
    that cannot be parsed or validated raises ConfigError.
    """

    def __init__(self, project_root: Union[str, Path] = "."):
        """
        Initialize the config loader.

        Args:
            project_root: Project directory holding .ship-toolkit/
        """
        self.project_root = Path(project_root)
        self._config: Optional[ShipConfig] = None

    @property
    def tool_dir(self) -> Path:
        return self.project_root / TOOL_DIR

    @property
    def config_path(self) -> Optional[Path]:
        """First existing config file, or None."""
        for filename in CONFIG_FILENAMES:
            path = self.tool_dir / filename
            if path.exists():
                return path
        return None

    @property
    def config(self) -> ShipConfig:
        """Loaded configuration, loading on first access."""
        if self._config is None:
            self.load()
        return self._config

    def load(self) -> ShipConfig:
        """
        Load the configuration.

        Returns:
            ShipConfig merged over defaults

        Raises:
            ConfigError: If the file is unreadable or invalid
        """
        path = self.config_path
        data = self._read(path) if path else {}
        self._config = self._parse(data, path)
        return self._config

    def _read(self, path: Path) -> Dict[str, Any]:
        """Read a YAML or JSON config file."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                if path.suffix == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}")
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}")
        except OSError as e:
            raise ConfigError(f"Cannot read {path}: {e}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration in {path} must be a mapping")
        return data

    def _parse(self, data: Dict[str, Any], path: Optional[Path]) -> ShipConfig:
        try:
            return ShipConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {path or 'defaults'}: {e}")

    def save(self, config: Optional[ShipConfig] = None) -> Path:
        """
        Save configuration as YAML.

        Args:
            config: Configuration to write. Defaults to the loaded one.

        Returns:
            Path of the written file
        """
        config = config or self.config
        self.tool_dir.mkdir(parents=True, exist_ok=True)
        path = self.tool_dir / CONFIG_FILENAMES[0]
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(
                config.model_dump(exclude_none=True),
                f,
                default_flow_style=False,
                sort_keys=False,
            )
        self._config = config
        return path

    def init(self) -> Optional[Path]:
        """
        Write the default config if none exists.

        Returns:
            Path of the new file, or None if a config already exists
        """
        if self.config_path is not None:
            return None
        return self.save(ShipConfig.model_validate(get_default_config()))

    @classmethod
    def from_dict(cls, data: Dict[str, Any], project_root: Union[str, Path] = ".") -> "ConfigLoader":
        """
        Create a ConfigLoader from a dictionary.

        Useful for programmatic configuration.
        """
        loader = cls(project_root)
        loader._config = loader._parse(data, None)
        return loader
