"""Config – 12-factor settings and loaders."""

from mp_mediator.config.settings import (
    EnvSettingsLoader,
    MediatorSettings,
    Settings,
    SettingsLoader,
    load_settings,
)
from mp_mediator.config.validation import ConfigError, InvalidSettingValueError, MissingRequiredSettingError

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MediatorSettings",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
    "load_settings",
]
