"""Reshape decoded responses into row tables sorted by walking time."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from typing import Any

import numpy as np
from pydantic import ValidationError

from walkalytics.exceptions import EmptyResult, MalformedPayload
from walkalytics.grid import PixelWalktime, RasterGrid
from walkalytics.schemas import PoiWalktime, Stop

logger = logging.getLogger(__name__)


def pixel_table(grid: RasterGrid, *, drop_missing: bool = False) -> list[PixelWalktime]:
    """Flatten a grid into one ``PixelWalktime`` per cell.

    Rows are sorted ascending by walking time; missing cells come last,
    or are left out when ``drop_missing`` is set.
    """
    values = grid.values.ravel()
    xs, ys = grid.coordinates()
    order = np.argsort(values, kind="stable")  # NaN sorts to the end

    rows: list[PixelWalktime] = []
    for i in order:
        value = float(values[i])
        if math.isnan(value):
            if drop_missing:
                continue
            rows.append(PixelWalktime(walktime=None, x=float(xs[i]), y=float(ys[i])))
        else:
            rows.append(PixelWalktime(walktime=value, x=float(xs[i]), y=float(ys[i])))

    logger.debug("Built pixel table with %d rows", len(rows))
    return rows


def feature_table(features: Sequence[dict[str, Any]] | None) -> list[PoiWalktime]:
    """Project POI features onto ``PoiWalktime`` rows, sorted by walking time.

    Each feature needs ``geometry.coordinates`` ``[x, y]`` and a ``time``
    (or ``walktime``) property; ``id`` defaults to an empty string.

    Raises:
        EmptyResult: If ``features`` is empty.
        MalformedPayload: If a feature lacks coordinates or a time.
    """
    if not features:
        raise EmptyResult("no points-of-interest found")

    rows: list[PoiWalktime] = []
    for feature in features:
        try:
            x, y = feature["geometry"]["coordinates"][:2]
            props = feature.get("properties") or {}
            walktime = props["time"] if "time" in props else props["walktime"]
            rows.append(PoiWalktime(id=props.get("id"), walktime=walktime, x=x, y=y))
        except (AttributeError, KeyError, TypeError, ValueError, ValidationError) as exc:
            raise MalformedPayload(f"invalid point-of-interest feature: {feature!r}") from exc

    rows.sort(key=lambda row: row.walktime)
    logger.debug("Built POI table with %d rows", len(rows))
    return rows


def station_table(stations: Sequence[dict[str, Any]]) -> list[Stop]:
    """Flatten the pubtrans station list into ``Stop`` rows, sorted by walking time.

    Raises:
        MalformedPayload: If a station lacks one of the expected fields.
    """
    rows: list[Stop] = []
    for station in stations:
        try:
            coords = station["coordinates"]
            rows.append(
                Stop(
                    name=station["name"],
                    walktime=station["walktime"],
                    station_category=station["station_category"],
                    latitude=coords["x"],
                    longitude=coords["y"],
                    coordinates_type=coords["type"],
                    transport_category=station["transport_category"],
                    id=station["id"],
                )
            )
        except (AttributeError, KeyError, TypeError, ValidationError) as exc:
            raise MalformedPayload(f"invalid station record: {station!r}") from exc

    rows.sort(key=lambda row: row.walktime)
    logger.debug("Built station table with %d rows", len(rows))
    return rows
