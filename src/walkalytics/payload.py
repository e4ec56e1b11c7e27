"""Decoding of the data-URI payloads embedded in isochrone responses.

The API returns binary results as strings such as
``data:image/png;base64,iVBORw0KGgo...``. Each payload type knows the
base64 form of its format's magic bytes; decoding starts at that marker.
The caller picks the payload type, it is never guessed from the content.
"""

from __future__ import annotations

import base64
import binascii
import gzip
import io
import logging
import zlib
from dataclasses import dataclass
from typing import ClassVar, TypeVar

from walkalytics.exceptions import MalformedPayload

logger = logging.getLogger(__name__)

#: base64 of the PNG signature ``\x89PNG\r\n\x1a\n``
PNG_MARKER = "iVBORw0KGgo"
#: base64 of the gzip magic ``\x1f\x8b\x08``
GZIP_MARKER = "H4s"


def extract_base64(data: object, marker: str) -> bytes:
    """Base64-decode ``data`` from the first occurrence of ``marker`` on.

    Raises:
        MalformedPayload: If ``data`` is not a string, does not contain
            ``marker``, or is not valid base64 from the marker on.
    """
    if not isinstance(data, str):
        raise MalformedPayload(f"expected a data-URI string, got {type(data).__name__}")
    start = data.find(marker)
    if start < 0:
        raise MalformedPayload("The input data is not in the correct format.")
    try:
        return base64.b64decode(data[start:])
    except (binascii.Error, ValueError) as exc:
        raise MalformedPayload(f"invalid base64 payload: {exc}") from exc


@dataclass(frozen=True)
class PngPayload:
    """Classified isochrone raster as a PNG image (``img`` field)."""

    data: str

    json_field: ClassVar[str] = "img"
    marker: ClassVar[str] = PNG_MARKER

    def decode(self) -> bytes:
        """Return the PNG file bytes."""
        png = extract_base64(self.data, self.marker)
        logger.debug("Decoded PNG payload (%d bytes)", len(png))
        return png


@dataclass(frozen=True)
class GzipGridPayload:
    """Per-pixel walking times as a gzipped Esri ASCII grid (``raw_data`` field)."""

    data: str

    json_field: ClassVar[str] = "raw_data"
    marker: ClassVar[str] = GZIP_MARKER
    encoding: ClassVar[str] = "ascii"

    def decode(self) -> bytes:
        """Return the compressed gzip stream."""
        return extract_base64(self.data, self.marker)

    def decompress(self) -> str:
        """Return the grid text, decompressed in memory."""
        compressed = self.decode()
        try:
            with io.BytesIO(compressed) as buf, gzip.GzipFile(fileobj=buf, mode="rb") as gz:
                raw = gz.read()
        except (OSError, EOFError, zlib.error) as exc:
            raise MalformedPayload(f"corrupt gzip stream: {exc}") from exc
        logger.debug("Decompressed grid payload (%d -> %d bytes)", len(compressed), len(raw))
        try:
            return raw.decode(self.encoding)
        except UnicodeDecodeError as exc:
            raise MalformedPayload(f"grid is not ASCII text: {exc}") from exc


Payload = PngPayload | GzipGridPayload

P = TypeVar("P", bound=Payload)


def payload_from_body(body: object, kind: type[P]) -> P:
    """Select the ``kind`` payload from a decoded isochrone response body.

    A body that is not an object, or lacks the field, yields a payload whose
    ``decode`` raises ``MalformedPayload``.
    """
    data = body.get(kind.json_field) if isinstance(body, dict) else None
    return kind(data)
