"""Save the classified isochrone PNG of an isochrone response."""

from __future__ import annotations

import logging
from pathlib import Path

import requests

from walkalytics.datasources.isochrone.client import DEFAULT_PNG_FILE, ENDPOINT_TAG
from walkalytics.payload import PngPayload, payload_from_body
from walkalytics.validation import response_json

logger = logging.getLogger(__name__)


def png_path(file: str | Path) -> Path:
    """Normalize the output file name: empty -> default, ``.png`` appended if absent."""
    name = str(file)
    if not name:
        name = DEFAULT_PNG_FILE
    if ".png" not in name.lower():
        name += ".png"
    return Path(name)


def save_png(response: requests.Response, file: str | Path = DEFAULT_PNG_FILE) -> Path:
    """
    Decode the base64 PNG of an ``isochrone_png`` response and write it to ``file``.

    Args:
        response: Response from ``isochrone_png``.
        file: Output path; ``.png`` is appended if missing.

    Returns:
        The path written.

    Raises:
        UnexpectedStatus: If the response status is not 200.
        WrongEndpoint: If the response is not from the isochrone API.
        MalformedPayload: If the ``img`` field is not a base64 PNG.
    """
    content = response_json(response, ENDPOINT_TAG)
    png = payload_from_body(content, PngPayload).decode()

    path = png_path(file)
    path.write_bytes(png)
    logger.info("Saved isochrone PNG to %s (%d bytes)", path, len(png))
    return path
