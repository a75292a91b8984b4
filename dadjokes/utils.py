"""
Design (utils.py)
- Purpose: Reusable helpers: worker threads, logging setup (console + Logs panel),
           desktop notifications, and the Logs panel trimming rule.
- Inputs: Various helper parameters (callables, log level, messages).
- Outputs: Helper results (threads, handlers, line counts).
- Side effects: configure_logging installs root handlers; notify shows an OS notification.
- Thread-safety: Stateless; safe to call from any thread.
"""

import logging
import threading
from typing import Callable, Optional

from plyer import notification

from .config import LOG_DATE_FORMAT, LOG_FORMAT, WINDOW_TITLE

logger = logging.getLogger(__name__)


def run_in_thread(target: Callable[[], None]) -> threading.Thread:
    """
    Purpose: Run target in a daemon thread so the Tk mainloop is never blocked.
    Outputs: The started thread.
    """
    thread = threading.Thread(target=target, daemon=True)
    thread.start()
    return thread


def make_formatter() -> logging.Formatter:
    return logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)


def configure_logging(level: int = logging.INFO) -> None:
    """
    Purpose: Send log records to stderr in the app's format.
    Side Effects: Replaces handlers on the root logger.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(make_formatter())
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)
    # urllib3 is chatty at DEBUG; keep it to warnings
    logging.getLogger("urllib3").setLevel(logging.WARNING)


class UILogHandler(logging.Handler):
    """
    Design (UILogHandler)
    - Purpose: Forward formatted log lines to the Logs panel.
    - sink: callable taking one line (with trailing newline). Must itself be safe to call
            from any thread (AppUI.append_log reschedules onto the Tk thread).
    """

    def __init__(self, sink: Callable[[str], None], level: int = logging.INFO):
        super().__init__(level)
        self.sink = sink
        self.setFormatter(make_formatter())

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.sink(self.format(record) + "\n")
        except Exception:
            self.handleError(record)


def notify(message: str, title: Optional[str] = None, timeout: int = 5) -> bool:
    """
    Purpose: Show a desktop notification.
    Outputs: True if shown; False when the platform has no notification backend.
    """
    try:
        notification.notify(title=title or WINDOW_TITLE, message=message, timeout=timeout)
    except Exception as exc:
        logger.warning("Desktop notification unavailable: %s", exc)
        return False
    return True


def lines_to_trim(total_lines: int, max_lines: int) -> int:
    """Number of oldest lines to drop so at most max_lines remain."""
    return max(0, total_lines - max_lines)
