"""Nearby public transport stops in Switzerland."""

from __future__ import annotations

import logging
from typing import Any

import requests

from walkalytics.config import resolve_key
from walkalytics.datasources.pubtrans.client import (
    DEFAULT_MAX_WALKTIME,
    ENDPOINT_TAG,
    nearby_url,
)
from walkalytics.exceptions import MalformedPayload
from walkalytics.schemas import Stop
from walkalytics.services.http import auth_headers, session
from walkalytics.tables import station_table
from walkalytics.validation import require_query, response_json

logger = logging.getLogger(__name__)


def pubtrans_ch_nearby(
    x: float | None,
    y: float | None,
    *,
    max_walktime: float = DEFAULT_MAX_WALKTIME,
    key: str | None = None,
) -> requests.Response:
    """
    Query public transport stops near a starting point.

    Args:
        x: Longitude of the starting point (WGS 84).
        y: Latitude of the starting point (WGS 84).
        max_walktime: Only return stops within this many minutes' walk.
        key: Subscription key (defaults to ``WALKALYTICS_API_KEY``).

    Returns:
        The unvalidated ``requests.Response``; decode with ``get_stops``.

    Raises:
        MissingRequiredField: If x, y or the key is absent.
    """
    key = require_query(x, y, resolve_key(key))
    params = {"x": x, "y": y, "max_walktime": max_walktime}

    url = nearby_url()
    logger.info("GET %s (x=%s, y=%s, max_walktime=%s)", url, x, y, max_walktime)
    return session.get(url, params=params, headers=auth_headers(key))


def _flatten(content: Any) -> list[Any]:
    """Remove one level of nesting: the station list may come wrapped in an object or list."""
    if isinstance(content, dict):
        groups = list(content.values())
    elif isinstance(content, list):
        groups = content
    else:
        raise MalformedPayload("pubtrans response is not a list of stations")

    stations: list[Any] = []
    for item in groups:
        if isinstance(item, list):
            stations.extend(item)
        else:
            stations.append(item)
    return stations


def get_stops(response: requests.Response) -> list[Stop]:
    """
    Extract the nearby stops of a ``pubtrans_ch_nearby`` response,
    ordered by walking time (minutes).

    Raises:
        UnexpectedStatus: If the response status is not 200.
        WrongEndpoint: If the response is not from the pubtrans API.
        MalformedPayload: If the body is not a list of station records.
    """
    content = response_json(response, ENDPOINT_TAG)
    return station_table(_flatten(content))
