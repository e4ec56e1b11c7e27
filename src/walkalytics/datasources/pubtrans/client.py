"""Walkalytics pubtrans API constants."""

from __future__ import annotations

from walkalytics.config import get_settings

NEARBY_PATH = "/pubtrans/ch/nearby"

#: Substring every pubtrans request URL contains.
ENDPOINT_TAG = "pubtrans"

DEFAULT_MAX_WALKTIME = 10  # minutes


def nearby_url() -> str:
    return get_settings().api_url + NEARBY_PATH
