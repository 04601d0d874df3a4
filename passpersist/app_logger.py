from __future__ import annotations

import logging
import logging.handlers
import os
import re
import shutil
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

if TYPE_CHECKING:
    from passpersist.app_config import AppConfig

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s [%(process)d] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class LoggingConfig:
    level: str
    log_dir: Path
    log_file: str = "passpersist-agent.log"
    # stdout carries the pass_persist protocol, so console logging goes to stderr
    console: bool = False
    max_bytes: int = 10 * 1024 * 1024
    backup_count: int = 5
    rotate_on_startup: bool = True


class ColoredFormatter(logging.Formatter):
    """Formatter that colours the level name for terminal output."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        original_levelname = record.levelname
        if record.levelname in self.COLORS:
            record.levelname = f"{self.COLORS[record.levelname]}{record.levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original_levelname


class FlushingStreamHandler(logging.StreamHandler):  # type: ignore[type-arg]
    """Stream handler that flushes after every emit."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            super().emit(record)
            self.flush()
        except Exception:
            self.handleError(record)


class FlushingRotatingFileHandler(logging.handlers.RotatingFileHandler):
    """Rotating file handler that flushes after every emit.

    snmpd may kill the agent at any time, so nothing is left in the buffer.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            super().emit(record)
            self.flush()
        except Exception:
            self.handleError(record)


def _archive_log_file(log_path: Path) -> None:
    """Move an existing log file into ``<log_dir>/archive`` with a timestamp suffix.

    The timestamp comes from the first record in the file, or the file's
    modification time when the first line does not start with one.
    """
    if not log_path.exists():
        return

    timestamp_str = None
    try:
        with open(log_path, "r", encoding="utf-8") as f:
            match = re.match(r"^(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})\.\d{3}", f.readline())
            if match:
                timestamp_str = match.group(1)
    except (OSError, UnicodeDecodeError):
        pass

    if timestamp_str is None:
        timestamp_str = datetime.fromtimestamp(log_path.stat().st_mtime).strftime(DATE_FORMAT)

    filename_timestamp = timestamp_str.replace(" ", "_").replace(":", "-")
    archive_dir = log_path.parent / "archive"
    archive_dir.mkdir(parents=True, exist_ok=True)

    archived_path = archive_dir / f"{log_path.stem}_{filename_timestamp}{log_path.suffix}"
    counter = 1
    while archived_path.exists():
        archived_path = archive_dir / f"{log_path.stem}_{filename_timestamp}_{counter}{log_path.suffix}"
        counter += 1

    try:
        shutil.move(str(log_path), str(archived_path))
    except OSError:
        # Keep appending to the existing file
        pass


class AppLogger:
    _configured: bool = False
    _handlers: list[logging.Handler] = []

    @staticmethod
    def configure(app_config: "AppConfig") -> None:
        """Configure logging from the ``logger`` section of an AppConfig."""
        logger_cfg = cast(dict[str, Any], app_config.get("logger", {}) or {})
        log_dir = Path(logger_cfg.get("log_dir", "logs"))
        # snmpd starts the agent from /, so a relative log_dir follows the config file
        config_path = getattr(app_config, "config_path", None)
        if not log_dir.is_absolute() and config_path:
            log_dir = Path(config_path).resolve().parent / log_dir
        config = LoggingConfig(
            level=str(logger_cfg.get("level", "INFO")),
            log_dir=Path(os.path.abspath(log_dir)),
            log_file=logger_cfg.get("log_file", "passpersist-agent.log"),
            console=bool(logger_cfg.get("console", False)),
            max_bytes=int(logger_cfg.get("max_bytes", 10 * 1024 * 1024)),
            backup_count=int(logger_cfg.get("backup_count", 5)),
            rotate_on_startup=bool(logger_cfg.get("rotate_on_startup", True)),
        )
        AppLogger(config)

    def __init__(self, config: LoggingConfig) -> None:
        if AppLogger._configured:
            return
        self._configure(config)
        AppLogger._configured = True

    @staticmethod
    def get(name: str | None = None) -> logging.Logger:
        return logging.getLogger(name)

    @staticmethod
    def reset() -> None:
        """Remove the handlers added by configure so logging can be configured again."""
        root = logging.getLogger()
        for handler in AppLogger._handlers:
            root.removeHandler(handler)
            handler.close()
        AppLogger._handlers = []
        AppLogger._configured = False

    @staticmethod
    def _configure(config: LoggingConfig) -> None:
        level = logging.getLevelName(config.level.upper())
        if not isinstance(level, int):
            level = logging.INFO

        config.log_dir.mkdir(parents=True, exist_ok=True)
        log_path = config.log_dir / config.log_file
        if config.rotate_on_startup:
            _archive_log_file(log_path)

        root = logging.getLogger()
        root.setLevel(level)
        for handler in list(root.handlers):
            root.removeHandler(handler)

        file_handler = FlushingRotatingFileHandler(
            filename=log_path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        root.addHandler(file_handler)
        AppLogger._handlers.append(file_handler)

        if config.console:
            console_handler = FlushingStreamHandler(sys.stderr)
            console_handler.setLevel(level)
            console_handler.setFormatter(ColoredFormatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
            root.addHandler(console_handler)
            AppLogger._handlers.append(console_handler)

        # pysnmp and dynaconf are chatty at DEBUG
        if level > logging.DEBUG:
            logging.getLogger("pysnmp").setLevel(logging.WARNING)
            logging.getLogger("dynaconf").setLevel(logging.WARNING)
