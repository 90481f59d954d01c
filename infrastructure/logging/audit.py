import json
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

from planterbox.utils.time import iso_now


class WindowsSafeRotatingFileHandler(RotatingFileHandler):
    """RotatingFileHandler that closes the stream before rotating and tolerates
    the file still being locked on Windows."""

    def doRollover(self):
        if self.stream:
            self.stream.close()
            self.stream = None
        try:
            super().doRollover()
        except PermissionError:
            # Still locked; keep appending to the current file.
            pass
        finally:
            if not self.stream:
                self.stream = self._open()


class DosingAuditLogger:
    """Append-only JSON-lines record of dosing reservations.

    One line per issued dose and per reservation lost to a concurrent tick.
    """

    def __init__(self, log_path: str, level: str = "INFO", logger_name: str = "planterbox.audit") -> None:
        self.log_path = Path(log_path)
        self.log_path.parent.mkdir(parents=True, exist_ok=True)

        self.logger = logging.getLogger(logger_name)
        self.logger.setLevel(getattr(logging, level.upper(), logging.INFO))
        self.logger.propagate = False

        # Avoid duplicate handlers when the app is created more than once
        if not any(isinstance(handler, RotatingFileHandler) for handler in self.logger.handlers):
            handler_cls = WindowsSafeRotatingFileHandler if sys.platform == "win32" else RotatingFileHandler
            handler = handler_cls(
                filename=str(self.log_path),
                maxBytes=10 * 1024 * 1024,  # 10 MB
                backupCount=30,
                encoding="utf-8",
                delay=True,
            )
            handler.setFormatter(logging.Formatter(fmt="%(message)s"))
            self.logger.addHandler(handler)

    def log_dose(
        self,
        scope_id: str,
        action: str,
        outcome: str,
        *,
        ph: Optional[float] = None,
        ppm: Optional[float] = None,
        reserved_ms: Optional[int] = None,
        busy_until_ms: Optional[int] = None,
    ) -> None:
        payload: Dict[str, Any] = {
            "ts": iso_now(timespec="milliseconds"),
            "scope_id": scope_id,
            "action": action,
            "outcome": outcome,
            "reserved_ms": reserved_ms,
            "busy_until_ms": busy_until_ms,
            "reading": {"ph": ph, "ppm": ppm},
        }
        self.logger.info(json.dumps(payload))

    def close(self) -> None:
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)
