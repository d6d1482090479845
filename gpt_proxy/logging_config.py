import datetime
import logging
import re
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .settings import settings


_LOGGING_CONFIGURED = False


class LocalTimezoneFormatter(logging.Formatter):
    """
    Renders record timestamps in LOG_TIMEZONE, falling back to the system
    local timezone when it is unset or unknown.
    """

    def __init__(self, *args, timezone_name: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self._tzinfo = self._resolve_tzinfo(timezone_name)

    @staticmethod
    def _resolve_tzinfo(timezone_name: str | None) -> datetime.tzinfo:
        if timezone_name:
            try:
                return ZoneInfo(timezone_name)
            except ZoneInfoNotFoundError:
                pass
        return datetime.datetime.now().astimezone().tzinfo or datetime.timezone.utc

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        dt = datetime.datetime.fromtimestamp(record.created, tz=self._tzinfo)
        if datefmt:
            return dt.strftime(datefmt)
        return dt.isoformat(timespec="milliseconds")


class DatedLogFileHandler(TimedRotatingFileHandler):
    """
    Midnight-rotating handler for <dir>/<stem><ext>. Rotated days are
    renamed to <dir>/<stem>-YYYY-MM-DD<ext>; only the newest ``backupCount``
    of those are kept.
    """

    def __init__(self, filename: Path, backup_count: int = 7, encoding: str = "utf-8"):
        super().__init__(
            filename,
            when="midnight",
            interval=1,
            backupCount=backup_count,
            encoding=encoding,
        )
        self.suffix = "%Y-%m-%d"
        base = Path(self.baseFilename)
        self._stem = base.stem
        self._ext = base.suffix
        self._dated_name = re.compile(
            rf"^{re.escape(self._stem)}-\d{{4}}-\d{{2}}-\d{{2}}{re.escape(self._ext)}$"
        )
        self.namer = self._dated_path

    def _dated_path(self, default_name: str) -> str:
        # default_name is "<dir>/<stem><ext>.YYYY-MM-DD"
        day = default_name.rsplit(".", 1)[-1]
        return str(Path(self.baseFilename).with_name(f"{self._stem}-{day}{self._ext}"))

    def getFilesToDelete(self) -> list[str]:
        log_dir = Path(self.baseFilename).parent
        rotated = sorted(
            str(p) for p in log_dir.iterdir() if self._dated_name.match(p.name)
        )
        if len(rotated) <= self.backupCount:
            return []
        return rotated[: len(rotated) - self.backupCount]


def setup_logging() -> None:
    """
    Configure process logging once: "gptproxy" records go to a daily file
    under LOG_DIR, and everything is echoed to the console via the root
    logger.
    """
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    app_logger = logging.getLogger("gptproxy")
    level_value = getattr(logging, settings.log_level.upper(), logging.INFO)

    formatter = LocalTimezoneFormatter(
        "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        timezone_name=settings.log_timezone,
    )

    file_handler = DatedLogFileHandler(log_dir / "app.log", backup_count=7)
    file_handler.setFormatter(formatter)
    file_handler.addFilter(lambda record: record.name.startswith("gptproxy"))
    app_logger.setLevel(level_value)
    app_logger.propagate = True  # console output comes from the root handler
    app_logger.addHandler(file_handler)

    root_logger.setLevel(level_value)
    has_console = any(
        isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        for h in root_logger.handlers
    )
    if not has_console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    _LOGGING_CONFIGURED = True


logger = logging.getLogger("gptproxy")
