"""Configuration loader."""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import SecretStr, ValidationError

from .models import ConfigModel, Credentials


class Config:
    """Configuration manager."""

    def __init__(
        self,
        config_path: Optional[Path] = None,
        model: Optional[ConfigModel] = None,
    ) -> None:
        """Initialize config manager."""
        if config_path is None:
            config_path = Path.home() / ".config" / "grovecast" / "config.yaml"
        self.config_path = config_path
        self._config: Optional[ConfigModel] = model

    @property
    def config(self) -> ConfigModel:
        """Get loaded config."""
        if self._config is None:
            self._config = load_config(self.config_path)
        return self._config

    @property
    def workspace_root(self) -> Path:
        """Get workspace root path."""
        path = Path(self.config.workspace_root).expanduser()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def episodes_dir(self) -> Path:
        """Get the folder final episodes are moved into."""
        path = self.workspace_root / self.config.episodes_subdir
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def temp_root(self) -> Optional[Path]:
        """Get the configured temp directory, if any."""
        if not self.config.temp_root:
            return None
        path = Path(self.config.temp_root).expanduser()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def library_path(self) -> Path:
        """Get path of the article/podcast library file."""
        return self.config_path.parent / "library.json"

    def get_credentials(self) -> Credentials:
        """Resolve both API keys, environment first."""
        return Credentials(
            anthropic_api_key=_resolve_secret(self.config.llm.api_key_env, self.config.llm.api_key),
            speechify_api_key=_resolve_secret(self.config.tts.api_key_env, self.config.tts.api_key),
        )


def _resolve_secret(env_name: Optional[str], fallback: Optional[str]) -> Optional[SecretStr]:
    value = os.environ.get(env_name) if env_name else None
    if not value:
        value = fallback
    return SecretStr(value) if value else None


def load_config(config_path: Path) -> ConfigModel:
    """Load configuration from YAML file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path) as f:
            config_data = yaml.safe_load(f)

        if config_data is None:
            config_data = {}

        return ConfigModel(**config_data)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file: {e}")
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}")


def save_config(config: ConfigModel, config_path: Path) -> None:
    """Save configuration to YAML file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        yaml.dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)
