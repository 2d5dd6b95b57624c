# src/atomspace/config.py
"""Resolve where an AtomSpace lives and how it behaves.

Values come from four layers, highest first: explicit arguments (CLI flags
or library callers), ``ATOMSPACE_*`` environment variables, the nearest
``atomspace.yaml`` and the ``Settings`` defaults. A ``.env`` file in the
working directory can seed the environment layer.

Example atomspace.yaml:

    owner: alice
    data_dir: ./kb
    settings:
      max_page_size: 500
      log_level: INFO
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from atomspace.settings import Settings

if TYPE_CHECKING:
    from atomspace.atomspace import AtomSpace

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = "./atomspace_data"
DEFAULT_OWNER = "default"
CONFIG_FILES = ["atomspace.yaml", "atomspace.yml", ".atomspacerc"]
ENV_FILE = ".env"
ENV_PREFIX = "ATOMSPACE_"

# Parent directories searched for a config file, cwd included
MAX_SEARCH_DEPTH = 10

VALID_ROOT_KEYS = {"data_dir", "owner", "settings"}
VALID_SETTINGS_KEYS = set(Settings.model_fields)

# Numeric settings readable from ATOMSPACE_<NAME>; log_level is handled apart
NUMERIC_ENV_SETTINGS: dict[str, type[int] | type[float]] = {
    "default_page_size": int,
    "max_page_size": int,
    "max_public_limit": int,
    "export_cap": int,
    "max_render_depth": int,
    "busy_timeout": float,
}


class ConfigLoadError(Exception):
    """Raised when a config file exists but cannot be parsed."""


@dataclass
class ConfigError:
    """Configuration problem reported to the caller instead of raised."""

    message: str
    suggestion: str | None = None


def load_env_file(env_path: str | Path = ENV_FILE) -> None:
    """Copy KEY=VALUE lines from a .env file into os.environ.

    Blank lines and ``#`` comments are skipped, surrounding quotes are
    stripped, and variables already present in the environment win.
    """
    path = Path(env_path)
    if not path.is_file():
        return

    for raw in path.read_text(encoding="utf-8").splitlines():
        entry = raw.strip()
        if entry.startswith("#") or "=" not in entry:
            continue
        key, _, value = entry.partition("=")
        os.environ.setdefault(key.strip(), value.strip().strip("\"'"))


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Nearest config file, looking in start_dir (default cwd) then its parents."""
    start = start_dir or Path.cwd()
    for directory in [start, *start.parents][:MAX_SEARCH_DEPTH]:
        for name in CONFIG_FILES:
            candidate = directory / name
            if candidate.exists():
                return candidate
    return None


def _unknown(keys: Any, valid: set[str]) -> str:
    return ", ".join(sorted(set(keys) - valid))


def validate_config(config: dict[str, Any], config_path: Path | None = None) -> list[str]:
    """Warnings for keys the loader does not understand (empty when clean)."""
    warnings: list[str] = []
    source = str(config_path) if config_path else "config"

    if unknown := _unknown(config, VALID_ROOT_KEYS):
        warnings.append(f"Unknown config keys in {source}: {unknown}")

    section = config.get("settings")
    if isinstance(section, dict) and (unknown := _unknown(section, VALID_SETTINGS_KEYS)):
        warnings.append(f"Unknown settings keys: {unknown}")

    return warnings


def load_config(config_path: Path | str | None = None) -> dict[str, Any]:
    """Parse the YAML config at config_path, or the nearest one found.

    Returns an empty dict when there is no config file. Unknown keys are
    logged as warnings.

    Raises:
        ConfigLoadError: If the file is not valid YAML or not a mapping
    """
    path = Path(config_path) if config_path is not None else find_config_file()
    if path is None or not path.exists():
        return {}

    try:
        config = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigLoadError(f"Config file {path} must contain a mapping")

    for warning in validate_config(config, path):
        logger.warning(warning)
    return config


def _env_number(name: str, cast: type[int] | type[float]) -> int | float | None:
    raw = os.environ.get(f"{ENV_PREFIX}{name.upper()}", "").strip()
    if not raw:
        return None
    try:
        return cast(raw)
    except ValueError:
        logger.warning("Ignoring %s%s=%r: not a number", ENV_PREFIX, name.upper(), raw)
        return None


def get_settings_from_env() -> dict[str, Any]:
    """Settings explicitly set through ATOMSPACE_<NAME> variables."""
    found: dict[str, Any] = {}
    for name, cast in NUMERIC_ENV_SETTINGS.items():
        value = _env_number(name, cast)
        if value is not None:
            found[name] = value

    log_level = os.environ.get(f"{ENV_PREFIX}LOG_LEVEL", "").strip()
    if log_level:
        found["log_level"] = log_level.upper()
    return found


def get_settings_from_yaml(config: dict[str, Any]) -> dict[str, Any]:
    """Known keys of the YAML ``settings:`` section."""
    section = config.get("settings") or {}
    return {key: section[key] for key in section if key in VALID_SETTINGS_KEYS}


def build_settings(
    config: dict[str, Any] | None = None,
    env_settings: dict[str, Any] | None = None,
) -> Settings:
    """Merge YAML and environment settings over the defaults.

    Args:
        config: Parsed YAML config (None for none)
        env_settings: Environment overrides; read from os.environ when None

    Raises:
        pydantic.ValidationError: If a merged value is out of range
    """
    merged = get_settings_from_yaml(config or {})
    merged.update(get_settings_from_env() if env_settings is None else env_settings)
    return Settings(**merged)


def resolve_data_dir(data_dir: str | None, config: dict[str, Any]) -> str:
    """Effective data directory: explicit > env > yaml > default."""
    return str(
        data_dir
        or os.environ.get(f"{ENV_PREFIX}DATA_DIR")
        or config.get("data_dir")
        or DEFAULT_DATA_DIR
    )


def resolve_owner(owner: str | None, config: dict[str, Any]) -> str:
    """Effective owner id: explicit > env > yaml > default."""
    return str(
        owner or os.environ.get(f"{ENV_PREFIX}OWNER") or config.get("owner") or DEFAULT_OWNER
    )


@dataclass
class AtomSpaceConfig:
    """Everything needed to open one owner's AtomSpace."""

    owner: str
    data_dir: str
    settings: Settings
    config_path: str | None = None


def get_atomspace_config(
    owner: str | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> AtomSpaceConfig | ConfigError:
    """Resolve owner, data directory and settings without touching the database.

    Args:
        owner: Explicit owner id
        data_dir: Explicit data directory
        config_path: Explicit config file (default: search from cwd)

    Returns:
        AtomSpaceConfig, or ConfigError describing the first problem found
    """
    try:
        config = load_config(config_path)
        settings = build_settings(config)
    except ConfigLoadError as e:
        return ConfigError(message=str(e), suggestion="Fix or remove the config file")
    except PydanticValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"])
        return ConfigError(
            message=f"Invalid setting '{field}': {error['msg']}",
            suggestion=f"Check the settings section of atomspace.yaml and {ENV_PREFIX}* env vars",
        )

    source = Path(config_path) if config_path is not None else find_config_file()
    return AtomSpaceConfig(
        owner=resolve_owner(owner, config),
        data_dir=resolve_data_dir(data_dir, config),
        settings=settings,
        config_path=str(source) if source is not None and source.exists() else None,
    )


def create_atomspace(config: AtomSpaceConfig) -> AtomSpace:
    """Open the AtomSpace a resolved configuration points at."""
    from atomspace.atomspace import AtomSpace
    from atomspace.configuration import LocalStorage

    return AtomSpace(config.owner, storage=LocalStorage(config.data_dir), settings=config.settings)


def get_atomspace(
    owner: str | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> AtomSpace | ConfigError:
    """Resolve configuration and open the AtomSpace in one step."""
    config = get_atomspace_config(owner, data_dir, config_path)
    if isinstance(config, ConfigError):
        return config
    return create_atomspace(config)
