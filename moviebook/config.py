"""Configuration management for Moviebook."""

import json
import logging
import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Literal

logger = logging.getLogger(__name__)

API_KEY_ENV = "MOVIEBOOK_TMDB_API_KEY"

Sorting = Literal["last_added", "rating", "name", "release"]


def get_config_dir() -> Path:
    """Get config directory path."""
    if os.name == "nt":
        base = Path(os.environ.get("APPDATA", Path.home()))
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base / "moviebook"


def get_data_dir() -> Path:
    """Get data directory path."""
    if os.name == "nt":
        base = Path(os.environ.get("LOCALAPPDATA", Path.home()))
    else:
        base = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))
    return base / "moviebook"


def get_cache_dir() -> Path:
    """Get cache directory path."""
    if os.name == "nt":
        base = Path(os.environ.get("LOCALAPPDATA", Path.home())) / "Cache"
    else:
        base = Path(os.environ.get("XDG_CACHE_HOME", Path.home() / ".cache"))
    return base / "moviebook"


def get_shared_dir() -> Path:
    """Directory shared between the app and its widget-style readers."""
    return get_data_dir() / "shared"


@dataclass
class Config:
    """Moviebook configuration."""
    api_key: str = ""
    language: str = "en-US"
    region: str = ""
    currency: str = "EUR"
    default_sorting: Sorting = "last_added"
    log_requests: bool = False

    @property
    def effective_api_key(self) -> str:
        """API key from the environment when set, otherwise the stored one."""
        return os.environ.get(API_KEY_ENV) or self.api_key

    @property
    def effective_region(self) -> str:
        """Region used for localised release dates, derived from the language if unset."""
        if self.region:
            return self.region.upper()
        _, _, region = self.language.partition("-")
        return region.upper()


_config: Config | None = None


def load_config() -> Config:
    """Load configuration from file."""
    global _config
    if _config is not None:
        return _config

    config_file = get_config_dir() / "config.json"

    if config_file.exists():
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                data = json.load(f)
            _config = Config(**{k: v for k, v in data.items() if hasattr(Config, k)})
        except (OSError, ValueError, TypeError) as e:
            logger.warning("Failed to load config: %s", e)
            _config = Config()
    else:
        _config = Config()

    return _config


def save_config(config: Config) -> None:
    """Save configuration to file."""
    global _config
    _config = config

    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    config_file = config_dir / "config.json"

    with open(config_file, "w", encoding="utf-8") as f:
        json.dump(asdict(config), f, indent=2)


def get_config() -> Config:
    """Get current configuration."""
    return load_config()


def reset_config() -> None:
    """Forget the loaded configuration so the next access re-reads it."""
    global _config
    _config = None
