"""Config settings – Settings base class and MediatorSettings."""
from __future__ import annotations

import dataclasses
import logging

from mp_mediator.config.validation import InvalidSettingValueError

_LOG_FORMATS = frozenset({"json", "console"})


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: dataclasses.ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class MediatorSettings(Settings):
    """Logging configuration for the mediator, read from ``MEDIATOR_*`` variables.

    ``logger_name`` names the process-wide default logger that dispatch
    failures are reported to when no logger is attached to the context.
    """

    _prefix: dataclasses.ClassVar[str] = "MEDIATOR"

    log_level: str = "INFO"
    log_format: str = "json"
    logger_name: str = "mp_mediator"

    def _validate(self) -> None:
        self.log_level = self.log_level.upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise InvalidSettingValueError("log_level", self.log_level, "unknown logging level")
        self.log_format = self.log_format.lower()
        if self.log_format not in _LOG_FORMATS:
            raise InvalidSettingValueError(
                "log_format", self.log_format, f"expected one of {sorted(_LOG_FORMATS)}"
            )
        if not self.logger_name:
            raise InvalidSettingValueError("logger_name", self.logger_name, "must not be empty")

    @property
    def level(self) -> int:
        return logging.getLevelName(self.log_level)


__all__ = ["MediatorSettings", "Settings"]
