"""Shared fixtures: canned Walkalytics responses and encoded payloads."""

from __future__ import annotations

import base64
import gzip
import json
from collections.abc import Callable, Iterator
from typing import Any

import pytest
import requests

from walkalytics.config import get_settings

ISOCHRONE_URL = "https://api.walkalytics.com/v1/isochrone?x=895815&y=6004839"
PUBTRANS_URL = "https://api.walkalytics.com/v1/pubtrans/ch/nearby?x=8.05&y=47.39"

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR fake image"

SAMPLE_GRID = """ncols 2
nrows 2
xllcorner 0
yllcorner 0
cellsize 10
NODATA_value -9999
1 -9999
3 4
"""


def png_data_uri(data: bytes = PNG_BYTES) -> str:
    return "data:image/png;base64," + base64.b64encode(data).decode("ascii")


def grid_data_uri(text: str = SAMPLE_GRID) -> str:
    compressed = gzip.compress(text.encode("ascii"))
    return "data:application/gzip;base64," + base64.b64encode(compressed).decode("ascii")


def build_response(body: Any, status: int = 200, url: str = ISOCHRONE_URL) -> requests.Response:
    """A real ``requests.Response`` with a JSON body, as returned by the session."""
    resp = requests.Response()
    resp.status_code = status
    resp.url = url
    resp.encoding = "utf-8"
    resp._content = body if isinstance(body, bytes) else json.dumps(body).encode("utf-8")
    return resp


@pytest.fixture
def make_response() -> Callable[..., requests.Response]:
    return build_response


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate tests from WALKALYTICS_* variables in the developer's shell."""
    for name in ("API_KEY", "API_URL", "APP_ENV", "DEBUG", "LOG_LEVEL", "APP_NAME"):
        monkeypatch.delenv(f"WALKALYTICS_{name}", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
