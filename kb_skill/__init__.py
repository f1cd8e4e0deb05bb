"""Knowledge base skill -- in-memory TF-IDF document search for agent runtimes."""

import logging

from .config import LOG_LEVEL

__version__ = "1.0.0"


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Attach a stream handler to the ``kb_skill`` logger at ``level``."""
    logger = logging.getLogger("kb_skill")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(level.upper())
