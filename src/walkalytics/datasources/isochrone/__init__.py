"""Walkalytics isochrone API.

Public API:
  - query: isochrone, isochrone_png, isochrone_esri, isochrone_pois
  - png: save_png
  - esri: esri_to_grid, pixel_walktimes
  - pois: pois_walktimes
"""

from walkalytics.datasources.isochrone.esri import esri_to_grid, pixel_walktimes
from walkalytics.datasources.isochrone.png import save_png
from walkalytics.datasources.isochrone.pois import pois_walktimes
from walkalytics.datasources.isochrone.query import (
    isochrone,
    isochrone_esri,
    isochrone_png,
    isochrone_pois,
    poi_collection,
)

__all__ = [
    "esri_to_grid",
    "isochrone",
    "isochrone_esri",
    "isochrone_png",
    "isochrone_pois",
    "pixel_walktimes",
    "poi_collection",
    "pois_walktimes",
    "save_png",
]
