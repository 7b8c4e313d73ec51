"""Root logger setup shared by the CLI, the API and the dashboard.

Handlers installed here are tagged so a second call (the dashboard reruns its
script, tests call the CLI repeatedly) replaces them instead of stacking
duplicates. Handlers owned by someone else are left alone.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_OWNED = "_invoice_dashboard"


def _owned_handlers(root: logging.Logger) -> list[logging.Handler]:
    return [h for h in root.handlers if getattr(h, _OWNED, False)]


def configure_logging(
    log_path: Path | None = None,
    level: int = logging.INFO,
    stream: TextIO | None = None,
) -> list[logging.Handler]:
    """Attach a console handler and an optional UTF-8 file handler to the root logger.

    Args:
        log_path: Optional log file; its directory is created when missing.
        level: Root logger level (defaults to INFO).
        stream: Console stream, stdout by default. The CLI passes stderr so
            report output stays clean.

    Returns:
        The handlers that were installed.
    """
    root = logging.getLogger()
    for h in _owned_handlers(root):
        root.removeHandler(h)
        h.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(stream or sys.stdout)]
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    formatter = logging.Formatter(LOG_FORMAT)
    for h in handlers:
        h.setFormatter(formatter)
        setattr(h, _OWNED, True)
        root.addHandler(h)

    root.setLevel(level)
    return handlers
