import logging

import pytest

from markermap.config import MapConfig
from markermap.regions import RegionCatalog


@pytest.fixture
def config():
    return MapConfig(
        custom_regions={
            "dev": {"name": "Development", "coordinates": (47.6062, -122.3321)},
            "laptop": {"coordinates": (49.2827, -123.1207)},
        }
    )


@pytest.fixture
def catalog(config):
    return RegionCatalog(config)


@pytest.fixture
def warnings_log(caplog):
    caplog.set_level(logging.WARNING, logger="markermap")
    return caplog


@pytest.fixture
def prod_groups():
    return [
        {"nodes": ["sjc", "fra"], "label": "Prod"},
        {"nodes": ["zzz"]},
    ]
