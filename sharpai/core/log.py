# severity levels used by the SDK and a logger that honours the configured minimum
# messages go through the standard logging module so applications keep control of handlers/format

import logging
from enum import IntEnum
from typing import Dict, Optional


class Severity(IntEnum):
    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    ALERT = 4
    CRITICAL = 5
    EMERGENCY = 6

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Severity"]:
        # accepts names ("warn", "DEBUG") or numbers ("2"); blank means unset
        if value is None or not value.strip():
            return None
        raw = value.strip().upper()
        if raw.isdigit():
            return cls(int(raw))
        if raw == "WARNING":
            raw = "WARN"
        try:
            return cls[raw]
        except KeyError:
            raise ValueError(f"Unknown severity: {value}") from None


_LEVELS: Dict[Severity, int] = {
    Severity.DEBUG: logging.DEBUG,
    Severity.INFO: logging.INFO,
    Severity.WARN: logging.WARNING,
    Severity.ERROR: logging.ERROR,
    Severity.ALERT: logging.CRITICAL,
    Severity.CRITICAL: logging.CRITICAL,
    Severity.EMERGENCY: logging.CRITICAL,
}


class SdkLogger:
    def __init__(self, name: str = "sharpai", minimum: Optional[Severity] = None) -> None:
        self._logger = logging.getLogger(name)
        self.minimum = minimum

    def enabled(self, severity: Severity) -> bool:
        # unset minimum = log everything
        return self.minimum is None or severity >= self.minimum

    def log(self, severity: Severity, message: str) -> None:
        if not message or not self.enabled(severity):
            return
        self._logger.log(_LEVELS[severity], message)

    def debug(self, message: str) -> None:
        self.log(Severity.DEBUG, message)

    def warn(self, message: str) -> None:
        self.log(Severity.WARN, message)
