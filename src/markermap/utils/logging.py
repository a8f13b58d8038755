"""Logging utilities for markermap.

All submodules log through the ``markermap`` logger.  By default the logger
is silent (a ``NullHandler`` is installed); applications enable output via
:func:`configure_logging` or :func:`markermap.logging.init_logging`.
"""

import logging


# Global project-wide logger -------------------------------------------------
logger = logging.getLogger("markermap")
logger.addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return a child of the ``markermap`` logger (``markermap.<name>``)."""
    if name.startswith("markermap"):
        return logging.getLogger(name)
    return logger.getChild(name)


def configure_logging(enabled: bool = True, level: int = logging.INFO) -> None:
    """Configure the global ``markermap`` logger.

    Parameters
    ----------
    enabled:
        If ``True`` (default) a ``StreamHandler`` is installed.  If ``False``
        logging output is suppressed.
    level:
        Logging level used when enabling the handler.  Dropped nodes and
        preset fallbacks are reported at ``WARNING``; colour fallbacks at
        ``DEBUG``.
    """

    # Remove any existing handlers so configuration calls are idempotent.
    logger.handlers.clear()

    if enabled:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.setLevel(level)
    else:
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.CRITICAL + 1)


__all__ = ["logger", "get_logger", "configure_logging"]
