"""Walking times to points-of-interest from an isochrone response."""

from __future__ import annotations

import requests

from walkalytics.datasources.isochrone.client import ENDPOINT_TAG
from walkalytics.exceptions import EmptyResult, MalformedPayload
from walkalytics.schemas import PoiWalktime
from walkalytics.tables import feature_table
from walkalytics.validation import response_json


def pois_walktimes(response: requests.Response) -> list[PoiWalktime]:
    """
    Extract walking times from the source location to each POI of an
    ``isochrone_pois`` response, ordered by walking time (seconds).

    Raises:
        UnexpectedStatus: If the response status is not 200.
        WrongEndpoint: If the response is not from the isochrone API.
        EmptyResult: If the response holds no points-of-interest.
    """
    content = response_json(response, ENDPOINT_TAG)
    if not isinstance(content, dict):
        raise MalformedPayload("isochrone response is not a JSON object")

    pois = content.get("pois")
    if not pois:
        raise EmptyResult("no points-of-interest found")
    if not isinstance(pois, dict):
        raise MalformedPayload("pois is not a GeoJSON FeatureCollection")
    return feature_table(pois.get("features"))
