"""Log diario de errores.

Implementaciones de `ErrorLog`:
- `DailyFileErrorLog`: archivo `log_YYYY-MM-DD.log` (logging de stdlib),
  inicializado de forma perezosa en la primera escritura.
- `NullErrorLog` / `MemoryErrorLog`: para tests y modos sin disco.

Reglas:
- Solo severidad ERROR; una entrada por línea:
  `[<timestamp ISO-8601>] ERROR: <mensaje>`.
- Ninguna falla de logging se propaga; a lo sumo se avisa una vez por stderr.
"""

from __future__ import annotations

import itertools
import logging
import sys
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Callable

LOG_FORMAT = "[%(asctime)s] %(levelname)s: %(message)s"

_logger_ids = itertools.count()


def log_file_name(day: date) -> str:
    return f"log_{day.isoformat()}.log"


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


class IsoUtcFormatter(logging.Formatter):
    """Formatter con timestamp ISO-8601 en UTC (milisegundos, sufijo `Z`)."""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        moment = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class _ReportingFileHandler(logging.FileHandler):
    """FileHandler que delega las fallas de emisión en un callback."""

    def __init__(self, filename: Path, on_failure: Callable[[str], None]) -> None:
        super().__init__(filename, mode="a", encoding="utf-8", delay=True)
        self._on_failure = on_failure

    def handleError(self, record: logging.LogRecord) -> None:  # noqa: N802
        exc = sys.exc_info()[1]
        self._on_failure(f"could not write log entry: {exc}")


class DailyFileErrorLog:
    """Log de errores en `log_dir/log_<fecha>.log`."""

    def __init__(
        self,
        log_dir: Path,
        *,
        today: Callable[[], date] = utc_today,
        stderr_warnings: bool = True,
    ) -> None:
        self.log_dir = Path(log_dir)
        self._today = today
        self._stderr_warnings = stderr_warnings
        self._logger: logging.Logger | None = None
        self._disabled = False
        self._warned = False

    @property
    def path(self) -> Path:
        return self.log_dir / log_file_name(self._today())

    def error(self, message: str) -> None:
        try:
            logger = self._get_logger()
            if logger is not None:
                logger.error(" ".join(str(message).splitlines()))
        except Exception as exc:  # noqa: BLE001 - logging never fails the run
            self._report_failure(f"logging failed: {exc}")

    def close(self) -> None:
        if self._logger is None:
            return
        for handler in list(self._logger.handlers):
            handler.close()
            self._logger.removeHandler(handler)
        self._logger = None

    def _get_logger(self) -> logging.Logger | None:
        if self._disabled:
            return None
        if self._logger is not None:
            return self._logger

        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            self._disabled = True
            self._report_failure(f"could not create log directory {self.log_dir}: {exc}")
            return None

        logger = logging.getLogger(f"tax_client.errors.{next(_logger_ids)}")
        logger.setLevel(logging.ERROR)
        logger.propagate = False
        handler = _ReportingFileHandler(self.path, self._report_failure)
        handler.setLevel(logging.ERROR)
        handler.setFormatter(IsoUtcFormatter(LOG_FORMAT))
        logger.addHandler(handler)
        self._logger = logger
        return logger

    def _report_failure(self, text: str) -> None:
        if self._warned or not self._stderr_warnings:
            return
        self._warned = True
        try:
            print(f"[error-log] {text}", file=sys.stderr)
        except Exception:  # noqa: BLE001
            pass


class NullErrorLog:
    """Descarta todas las entradas."""

    def error(self, message: str) -> None:
        return None


class MemoryErrorLog:
    """Acumula las entradas en memoria (tests)."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def error(self, message: str) -> None:
        self.messages.append(message)
