# src/qahlvm/config.py
"""Runtime configuration, read from the environment or built by the host."""

import logging
import os
from dataclasses import dataclass

from .memory import GcApproach

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

_TRUE_WORDS = {"1", "true", "yes", "on"}
_FALSE_WORDS = {"0", "false", "no", "off", ""}


def _parse_flag(name, text):
    word = text.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ValueError(f"{name} must be a boolean, got {text!r}")


@dataclass
class Config:
    log_level: str = "warning"
    gc_approach: GcApproach = GcApproach.NONE
    report_leaks: bool = True
    strict_counts: bool = False

    def __post_init__(self):
        self.log_level = self.log_level.lower()
        if self.log_level not in _LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level!r}")
        if isinstance(self.gc_approach, str):
            self.gc_approach = GcApproach.parse(self.gc_approach)

    @classmethod
    def from_env(cls, environ=None):
        environ = os.environ if environ is None else environ
        return cls(
            log_level=environ.get("QAHL_LOG_LEVEL", "warning"),
            gc_approach=environ.get("QAHL_GC", "none"),
            report_leaks=_parse_flag("QAHL_REPORT_LEAKS", environ.get("QAHL_REPORT_LEAKS", "1")),
            strict_counts=_parse_flag("QAHL_STRICT_COUNTS", environ.get("QAHL_STRICT_COUNTS", "0")),
        )

    @property
    def level(self):
        return _LEVELS[self.log_level]

    def should_log(self, level):
        return _LEVELS.get(level, logging.DEBUG) >= self.level


config = Config.from_env()
