"""Walkalytics - client for the Walkalytics walking-isochrone API.

Architecture::

    datasources/   Request builders and response decoders per API
                   (isochrone, pubtrans)
    validation.py  Status / endpoint checks run before any decoding
    payload.py     Data-URI payloads (PNG, gzipped Esri ASCII grid)
    grid.py        Esri ASCII grid parser -> RasterGrid
    tables.py      Pixel, POI and station tables sorted by walking time
    services/      Shared HTTP session
    cli.py         Command-line interface

Data flow: request builder -> requests.Response -> validation -> payload
-> grid -> tables -> caller.

Example::

    from walkalytics import isochrone_pois, pois_walktimes

    resp = isochrone_pois(895815, 6004839, [{"x": 895777, "y": 6004833, "id": "a"}], key="...")
    rows = pois_walktimes(resp)
"""

__version__ = "0.1.0"

from walkalytics.config import Settings, get_settings
from walkalytics.datasources.isochrone import (
    esri_to_grid,
    isochrone,
    isochrone_esri,
    isochrone_png,
    isochrone_pois,
    pixel_walktimes,
    pois_walktimes,
    save_png,
)
from walkalytics.datasources.pubtrans import get_stops, pubtrans_ch_nearby
from walkalytics.exceptions import (
    DimensionMismatch,
    EmptyResult,
    InvalidGridHeader,
    MalformedPayload,
    MissingRequiredField,
    UnexpectedStatus,
    WalkalyticsError,
    WrongEndpoint,
)
from walkalytics.grid import GridHeader, PixelWalktime, RasterGrid, parse_ascii_grid
from walkalytics.schemas import Poi, PoiWalktime, Stop

__all__ = [
    "DimensionMismatch",
    "EmptyResult",
    "GridHeader",
    "InvalidGridHeader",
    "MalformedPayload",
    "MissingRequiredField",
    "PixelWalktime",
    "Poi",
    "PoiWalktime",
    "RasterGrid",
    "Settings",
    "Stop",
    "UnexpectedStatus",
    "WalkalyticsError",
    "WrongEndpoint",
    "__version__",
    "esri_to_grid",
    "get_settings",
    "get_stops",
    "isochrone",
    "isochrone_esri",
    "isochrone_png",
    "isochrone_pois",
    "parse_ascii_grid",
    "pixel_walktimes",
    "pois_walktimes",
    "pubtrans_ch_nearby",
    "save_png",
]
