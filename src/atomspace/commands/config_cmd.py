# src/atomspace/commands/config_cmd.py
"""Config command - show the resolved configuration and where each value came from."""

from __future__ import annotations

from pathlib import Path

from atomspace.commands.base import ConfigResult, SettingInfo
from atomspace.config import (
    ConfigError,
    get_atomspace_config,
    get_settings_from_env,
    get_settings_from_yaml,
    load_config,
)


def config(
    owner: str | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> ConfigResult:
    """Resolve configuration the same way every other command does.

    Each setting is tagged "env var", "yaml" or "default" by the highest
    layer that set it.

    Args:
        owner: Override owner id
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        ConfigResult with owner, data directory and tagged settings
    """
    resolved = get_atomspace_config(owner, data_dir, config_path)
    if isinstance(resolved, ConfigError):
        return ConfigResult(success=False, error=resolved.message)

    # load_config cannot fail here: get_atomspace_config already parsed the file
    layers = [
        ("env var", get_settings_from_env()),
        ("yaml", get_settings_from_yaml(load_config(config_path))),
    ]

    settings = []
    for name, value in resolved.settings.model_dump().items():
        source = next((label for label, layer in layers if name in layer), "default")
        settings.append(SettingInfo(name=name, value=str(value), source=source))

    return ConfigResult(
        success=True,
        owner=resolved.owner,
        data_dir=resolved.data_dir,
        settings=settings,
        config_path=resolved.config_path,
    )
