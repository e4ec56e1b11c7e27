"""Decode the gzipped Esri ASCII grid of an isochrone response."""

from __future__ import annotations

import requests

from walkalytics.datasources.isochrone.client import ENDPOINT_TAG
from walkalytics.grid import PixelWalktime, RasterGrid, parse_ascii_grid
from walkalytics.payload import GzipGridPayload, payload_from_body
from walkalytics.tables import pixel_table
from walkalytics.validation import response_json


def esri_to_grid(response: requests.Response) -> RasterGrid:
    """
    Convert an ``isochrone_esri`` response into a ``RasterGrid``.

    Cell values are walking times in seconds; unreachable cells are ``NaN``.

    Raises:
        UnexpectedStatus: If the response status is not 200.
        WrongEndpoint: If the response is not from the isochrone API.
        MalformedPayload: If ``raw_data`` is not a base64 gzip stream.
        InvalidGridHeader: If the grid header is malformed.
        DimensionMismatch: If the cell count does not match the header.
    """
    content = response_json(response, ENDPOINT_TAG)
    payload = payload_from_body(content, GzipGridPayload)
    return parse_ascii_grid(payload.decompress())


def pixel_walktimes(
    response: requests.Response, *, drop_missing: bool = False
) -> list[PixelWalktime]:
    """
    Extract the walking time to every pixel of an ``isochrone_esri`` response.

    Returns:
        One row per pixel (walking time in seconds, cell-centre x and y),
        sorted by walking time; unreachable pixels come last unless dropped.
    """
    return pixel_table(esri_to_grid(response), drop_missing=drop_missing)
