"""
Session-aware logging for the composer.

Every record carries a short session tag and the user action in progress
(pick, group, import, ...), both held in contextvars so nested calls need not
pass them around. Output goes to stderr, plus an optional rotating log file.
"""

import contextvars
import hashlib
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Printed on every line
cv_session_tag = contextvars.ContextVar("session_tag", default="-")
cv_action = contextvars.ContextVar("action", default="-")

# Only exposed through get_log_context
cv_session_id_full = contextvars.ContextVar("session_id_full", default="-")


def make_session_tag(session_id_full: str, length: int = 8) -> str:
    """Hash a session id (timestamp plus command) down to a fixed-width hex tag."""
    h = hashlib.blake2s(session_id_full.encode("utf-8"), digest_size=8).hexdigest()
    return h[:length]


class ContextInjectFilter(logging.Filter):
    """Copy the session tag and current action onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.session = cv_session_tag.get() or "-"
        record.action = cv_action.get() or "-"
        return True


def set_log_context(
    *,
    session_id_full: str | None = None,
    action: str | None = None,
) -> None:
    """Set the session and/or the action shown on subsequent log lines."""
    if session_id_full is not None:
        cv_session_id_full.set(str(session_id_full))
        cv_session_tag.set(make_session_tag(str(session_id_full)))

    if action is not None:
        cv_action.set(str(action))


def get_log_context() -> dict[str, str]:
    """Snapshot of the session and action currently in effect."""
    return {
        "session_tag": str(cv_session_tag.get() or "-"),
        "session_id_full": str(cv_session_id_full.get() or "-"),
        "action": str(cv_action.get() or "-"),
    }


def clear_action_context() -> None:
    """Mark the end of a user action; the session stays set."""
    cv_action.set("-")


def configure_logging(
    *,
    log_file: Path | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    max_bytes: int = 10_000_000,  # 10MB
    backup_count: int = 5,
) -> None:
    """
    Install the stderr handler and, when log_file is given, a rotating file handler.

    Safe to call more than once: previous root handlers are
    replaced, never stacked.

    Args:
        log_file: Rotating log destination; None for stderr only
        console_level: Threshold for stderr
        file_level: Threshold for the log file
        max_bytes: Size at which the log file rotates
        backup_count: Rotated files kept
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.DEBUG)

    console_fmt = "%(asctime)s [%(levelname)s] s=%(session)s a=%(action)s | %(message)s"
    file_fmt = "%(asctime)s [%(levelname)s] %(name)s | s=%(session)s a=%(action)s | %(message)s"

    console_formatter = logging.Formatter(console_fmt, datefmt="%H:%M:%S")
    file_formatter = logging.Formatter(file_fmt, datefmt="%Y-%m-%d %H:%M:%S")

    ctx_filter = ContextInjectFilter()

    # stdout is reserved for prompt text
    ch = logging.StreamHandler()
    ch.setLevel(console_level)
    ch.setFormatter(console_formatter)
    ch.addFilter(ctx_filter)
    root.addHandler(ch)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        fh.setLevel(file_level)
        fh.setFormatter(file_formatter)
        fh.addFilter(ctx_filter)
        root.addHandler(fh)

    logging.getLogger(__name__).debug(
        "Logging configured (console_level=%s, file=%s)",
        logging.getLevelName(console_level),
        str(log_file) if log_file is not None else "None",
    )
