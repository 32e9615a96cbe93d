import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional


DEFAULT_FORMAT = "%(asctime)s  [%(levelname)s]  %(name)s › %(message)s"
DEFAULT_DATEFMT = "%H:%M:%S"


class TruncateLongMsgs(logging.Filter):
    """Truncates long log messages (e.g. a whole substituted paragraph)."""

    def __init__(self, max_len: int = 300):
        super().__init__()
        self.max_len = max_len

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            msg = record.getMessage()
        except (TypeError, ValueError):
            # Malformed %-args: let logging report it the usual way.
            return True
        if self.max_len and len(msg) > self.max_len:
            record.msg = msg[: self.max_len] + " …(truncated)"
            record.args = ()
        return True


def level_for_verbosity(verbosity: int) -> int:
    """0 → WARNING, 1 (-v) → INFO, 2+ (-vv) → DEBUG."""
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


_configured = False  # guard against double-initialisation


def setup_logging(
    *,
    level: int = logging.WARNING,
    console: bool = True,
    console_truncate_len: int = 300,
    fmt: str = DEFAULT_FORMAT,
    datefmt: str = DEFAULT_DATEFMT,
    log_file: Optional[str] = None,
    file_level: Optional[int] = None,
    file_max_bytes: int = 1_000_000,
    file_backup_count: int = 3,
) -> None:
    """
    Configure root logging once. Only the CLI entry point calls this.

    - Library modules just use `logging.getLogger(__name__)`.
    - The console handler writes to stderr; stdout carries resolved dates only.
    - An optional rotating file handler keeps untruncated records.
    """
    global _configured
    if _configured:
        return

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)

    root.setLevel(level if file_level is None else min(level, file_level))

    formatter = logging.Formatter(fmt=fmt, datefmt=datefmt)

    if console:
        ch = logging.StreamHandler(sys.stderr)
        ch.setLevel(level)
        ch.setFormatter(formatter)
        if console_truncate_len and console_truncate_len > 0:
            ch.addFilter(TruncateLongMsgs(console_truncate_len))
        root.addHandler(ch)

    if log_file:
        fh = RotatingFileHandler(
            log_file, maxBytes=file_max_bytes, backupCount=file_backup_count, encoding="utf-8"
        )
        fh.setLevel(file_level if file_level is not None else level)
        fh.setFormatter(formatter)
        root.addHandler(fh)

    _configured = True
    logging.getLogger(__name__).debug("🚀 Logging initialised (level=%s)", logging.getLevelName(level))


def reset_logging() -> None:
    """Drop root handlers and allow setup_logging to run again."""
    global _configured
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    _configured = False
