from .dict_merge import deep_update
from .logging import configure_logging, get_logger, logger

__all__ = ["deep_update", "configure_logging", "get_logger", "logger"]
