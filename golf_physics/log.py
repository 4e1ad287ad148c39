"""
Golf Physics Core: Logging

Library modules log through `logging.getLogger(__name__)` and never install
handlers themselves. Applications call `setup_logging()` to route the
package's records through rich.
"""

import logging

from rich.logging import RichHandler

PACKAGE_LOGGER = "golf_physics"


def setup_logging(level="INFO") -> logging.Logger:
    """Attach a RichHandler to the package logger (idempotent)."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(rich_tracebacks=True, show_path=False)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
    return logger
