"""Isochrone request builders.

Every builder issues exactly one ``POST /isochrone`` and returns the raw
response; hand it to a decoder (``save_png``, ``esri_to_grid``,
``pixel_walktimes``, ``pois_walktimes``).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import requests

from walkalytics.config import resolve_key
from walkalytics.datasources.isochrone.client import (
    DEFAULT_BREAK_VALUES,
    DEFAULT_EPSG,
    DEFAULT_MAX_MIN,
    POI_EPSG,
    isochrone_url,
)
from walkalytics.exceptions import MissingRequiredField
from walkalytics.schemas import Poi
from walkalytics.services.http import auth_headers, session
from walkalytics.validation import require_query

logger = logging.getLogger(__name__)

PoiLike = Poi | Mapping[str, Any]


def _flag(value: bool) -> str:
    return "TRUE" if value else "FALSE"


def _to_poi(poi: PoiLike) -> Poi:
    return poi if isinstance(poi, Poi) else Poi.from_mapping(poi)


def poi_collection(pois: Iterable[PoiLike]) -> dict[str, Any]:
    """Build the GeoJSON FeatureCollection request body for ``pois``.

    POIs without an id are sent with an empty ``id`` property.

    Raises:
        MissingRequiredField: If a POI lacks x or y.
    """
    return {
        "type": "FeatureCollection",
        "crs": {"type": "EPSG", "properties": {"code": POI_EPSG}},
        "features": [_to_poi(p).to_feature() for p in pois],
    }


def isochrone(
    x: float | None,
    y: float | None,
    *,
    epsg: int = DEFAULT_EPSG,
    max_min: float = DEFAULT_MAX_MIN,
    raw_data: bool = False,
    pois: Sequence[PoiLike] | None = None,
    only_pois: bool = False,
    break_values: Sequence[float] | None = DEFAULT_BREAK_VALUES,
    key: str | None = None,
) -> requests.Response:
    """
    Issue a walkalytics isochrone query for a source location.

    The response carries a base64 PNG with classified isochrones (default),
    a gzipped Esri ASCII grid of walking times in seconds (``raw_data``),
    and/or the walking times to ``pois``.

    Args:
        x: x-coordinate of the source location.
        y: y-coordinate of the source location.
        epsg: EPSG code of ``x`` and ``y``.
        max_min: Maximum number of minutes for the isochrone.
        raw_data: Return the Esri ASCII grid instead of the PNG.
        pois: Points-of-interest to compute walking times to.
        only_pois: Return only the annotated POIs, no raster.
        break_values: Walking-time classes (minutes) of the PNG result.
        key: Subscription key (defaults to ``WALKALYTICS_API_KEY``).

    Returns:
        The unvalidated ``requests.Response``.

    Raises:
        MissingRequiredField: If x, y, the key or a POI coordinate is absent.
        requests.RequestException: On transport errors.
    """
    key = require_query(x, y, resolve_key(key))
    body = poi_collection(pois) if pois is not None else None

    params: dict[str, Any] = {
        "x": x,
        "y": y,
        "epsg": epsg,
        "max_min": max_min,
        "only_pois": _flag(only_pois),
        "raw_data": _flag(raw_data),
    }
    if break_values:
        params["break_values"] = ", ".join(f"{v:.15g}" for v in break_values)

    url = isochrone_url()
    logger.info(
        "POST %s (x=%s, y=%s, raw_data=%s, pois=%d)",
        url,
        x,
        y,
        raw_data,
        len(body["features"]) if body else 0,
    )
    return session.post(url, params=params, json=body, headers=auth_headers(key))


def isochrone_png(
    x: float | None,
    y: float | None,
    *,
    epsg: int = DEFAULT_EPSG,
    max_min: float = DEFAULT_MAX_MIN,
    break_values: Sequence[float] | None = DEFAULT_BREAK_VALUES,
    key: str | None = None,
) -> requests.Response:
    """Query the classified isochrone as a PNG; decode with ``save_png``."""
    return isochrone(
        x, y, epsg=epsg, max_min=max_min, raw_data=False, break_values=break_values, key=key
    )


def isochrone_esri(
    x: float | None,
    y: float | None,
    *,
    epsg: int = DEFAULT_EPSG,
    max_min: float = DEFAULT_MAX_MIN,
    key: str | None = None,
) -> requests.Response:
    """Query per-pixel walking times; decode with ``esri_to_grid`` or ``pixel_walktimes``."""
    return isochrone(x, y, epsg=epsg, max_min=max_min, raw_data=True, break_values=None, key=key)


def isochrone_pois(
    x: float | None,
    y: float | None,
    pois: Sequence[PoiLike],
    *,
    epsg: int = DEFAULT_EPSG,
    max_min: float = DEFAULT_MAX_MIN,
    key: str | None = None,
) -> requests.Response:
    """Query walking times to ``pois``; decode with ``pois_walktimes``.

    Raises:
        MissingRequiredField: If ``pois`` is empty.
    """
    if not pois:
        raise MissingRequiredField("points-of-interest are missing.")
    return isochrone(
        x,
        y,
        epsg=epsg,
        max_min=max_min,
        pois=pois,
        only_pois=True,
        break_values=None,
        key=key,
    )
