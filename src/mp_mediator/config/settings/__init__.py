"""Config settings – 12-factor env-based configuration."""
from mp_mediator.config.settings.base import MediatorSettings, Settings
from mp_mediator.config.settings.loaders import EnvSettingsLoader, SettingsLoader, load_settings

__all__ = ["EnvSettingsLoader", "MediatorSettings", "Settings", "SettingsLoader", "load_settings"]
