import logging

from markermap.logging import init_logging, level_from_cfg
from markermap.config import MapConfig
from markermap.utils.logging import configure_logging, get_logger, logger


def test_get_logger_is_namespaced():
    assert get_logger("groups").name == "markermap.groups"
    assert get_logger("markermap.api").name == "markermap.api"


def test_level_from_cfg():
    assert level_from_cfg(MapConfig(log_level="debug")) == logging.DEBUG
    assert level_from_cfg({"log_level": "info"}) == logging.INFO
    assert level_from_cfg(None) == logging.WARNING
    assert level_from_cfg({"log_level": "bogus"}) == logging.WARNING


def test_init_logging_sets_namespace_level():
    pkg = logging.getLogger("markermap")
    root = logging.getLogger()
    old = (pkg.level, root.level)
    try:
        init_logging("debug")
        assert pkg.level == logging.DEBUG
        init_logging("none")
        assert pkg.level == logging.WARNING
    finally:
        pkg.setLevel(old[0])
        root.setLevel(old[1])


def test_configure_logging_toggle():
    old_handlers, old_level = list(logger.handlers), logger.level
    try:
        configure_logging(enabled=True, level=logging.DEBUG)
        assert any(isinstance(h, logging.StreamHandler) for h in logger.handlers)
        assert logger.level == logging.DEBUG
        configure_logging(enabled=False)
        assert logger.level > logging.CRITICAL
    finally:
        logger.handlers[:] = old_handlers
        logger.setLevel(old_level)
