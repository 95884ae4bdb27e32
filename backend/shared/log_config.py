"""
Logging configuration.

Modules log through ``logging.getLogger(__name__)``; this sets up the
root handler once at application startup.
"""

import logging

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


def setup_logging(level: str | int = logging.INFO) -> None:
    """
    Configure the root logger with a single stream handler.

    Calling it again replaces the handler rather than stacking a second one.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_portal_handler", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._portal_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(level)

    # Supabase's HTTP stack is chatty at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
