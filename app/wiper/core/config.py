"""User configuration and environment toggles.

Persistent settings live in ``~/.config/wiper/config.toml``::

    ignore = ["~/Downloads/keep", "$HOME/Projects"]
    large_file_threshold_mb = 100

Two environment toggles change how much the cleanup engine reports,
never what it does:

- ``WIPER_SHOW_WARNINGS=true``: print per-path scan warnings instead of
  counting them silently.
- ``WIPER_SHOW_DETAILS=true``: log every discovered large file and every
  removed item.
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from wiper.core.paths import get_config_path

SHOW_WARNINGS_ENV = "WIPER_SHOW_WARNINGS"
SHOW_DETAILS_ENV = "WIPER_SHOW_DETAILS"

DEFAULT_LARGE_FILE_THRESHOLD_MB = 100


def env_flag(name: str) -> bool:
    """Return True when environment variable ``name`` is set to ``true``."""
    return os.environ.get(name, "").strip().lower() == "true"


def show_warnings() -> bool:
    """Whether suppressed scan warnings should be surfaced."""
    return env_flag(SHOW_WARNINGS_ENV)


def show_details() -> bool:
    """Whether per-item discovery and removal notices should be surfaced."""
    return env_flag(SHOW_DETAILS_ENV)


class WiperConfig(BaseModel):
    """Persistent wiper settings.

    Attributes:
        ignore: Paths excluded from every cleanup, merged with ``--ignore``.
        large_file_threshold_mb: Minimum on-disk size for ``--large-files``.
    """

    model_config = ConfigDict(extra="forbid")

    ignore: Annotated[
        list[str],
        Field(description="Paths to exclude from cleanup"),
    ] = []
    large_file_threshold_mb: Annotated[
        int,
        Field(ge=1, le=1024 * 1024, description="Large file threshold in MiB"),
    ] = DEFAULT_LARGE_FILE_THRESHOLD_MB

    @property
    def large_file_threshold_bytes(self) -> int:
        """Large file threshold converted to bytes."""
        return self.large_file_threshold_mb * 1024 * 1024


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> WiperConfig:
    """Load configuration from a TOML file.

    A missing file is not an error: defaults are returned.

    Args:
        path: Path to the config file. If None, uses the default path.

    Returns:
        Validated WiperConfig object.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or fails validation.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        return WiperConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    try:
        return WiperConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e


def save_config(config: WiperConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written to a temporary sibling first and moved into
    place with os.replace().

    Args:
        config: The configuration to save.
        path: Destination path. If None, uses the default path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    data = config.model_dump()

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config {config_path}: {e}") from e

    return config_path
