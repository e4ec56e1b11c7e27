"""Serialization helpers for walking-time tables."""

from __future__ import annotations

import csv
import dataclasses
from collections.abc import Iterable
from typing import IO, Any

from pydantic import BaseModel

from walkalytics.grid import PixelWalktime


def record_to_dict(record: BaseModel | PixelWalktime) -> dict[str, Any]:
    """Convert a table row (pydantic model or dataclass) to a plain dict."""
    if isinstance(record, BaseModel):
        return record.model_dump()
    return dataclasses.asdict(record)


def write_csv(records: Iterable[BaseModel | PixelWalktime], fh: IO[str]) -> int:
    """Write table rows as CSV with a header line.

    Missing values are written as empty fields.

    Returns:
        Number of rows written.
    """
    writer: csv.DictWriter[str] | None = None
    count = 0
    for record in records:
        row = record_to_dict(record)
        if writer is None:
            writer = csv.DictWriter(fh, fieldnames=list(row))
            writer.writeheader()
        writer.writerow(row)
        count += 1
    return count


def read_pois_csv(fh: IO[str]) -> list[dict[str, str]]:
    """Read POI rows (``x``, ``y`` and optional ``id`` columns) from CSV."""
    return list(csv.DictReader(fh))
