import logging
from enum import Enum
from typing import Callable, Optional


class ErrorSeverity(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorHandler:
    """Route recoverable failures to the log and, optionally, to the UI."""

    def __init__(self, logger: logging.Logger):
        self._logger = logger
        self._ui_callback: Optional[Callable[[str, ErrorSeverity], None]] = None
        self.history: list[tuple[Exception, ErrorSeverity]] = []

    def register_ui_callback(self, callback: Callable[[str, ErrorSeverity], None]):
        self._ui_callback = callback

    def handle(self, error: Exception, severity: ErrorSeverity = ErrorSeverity.ERROR, context: dict = None):
        log_method = getattr(self._logger, severity.value, self._logger.error)
        log_method("%s: %s", error.__class__.__name__, error, extra=context or {})

        self.history.append((error, severity))

        # Warnings reach the UI too; INFO stays in the log.
        if self._ui_callback and severity is not ErrorSeverity.INFO:
            self._ui_callback(str(error), severity)
