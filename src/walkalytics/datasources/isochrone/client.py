"""Walkalytics isochrone API constants.

API docs: https://dev.walkalytics.com/docs/services/
"""

from __future__ import annotations

from walkalytics.config import get_settings

ISOCHRONE_PATH = "/isochrone"

#: Substring every isochrone request URL contains.
ENDPOINT_TAG = "isochrone"

# WGS 84 / Pseudo-Mercator
DEFAULT_EPSG = 3857
DEFAULT_MAX_MIN = 1000
# Walking-time classes (minutes) of the PNG result
DEFAULT_BREAK_VALUES: tuple[float, ...] = (0, 3, 6, 9, 13)

# POI coordinates are always sent as EPSG:3857
POI_EPSG = 3857

DEFAULT_PNG_FILE = "isochrone.png"


def isochrone_url() -> str:
    return get_settings().api_url + ISOCHRONE_PATH
