"""Esri ASCII grid parsing.

The isochrone API returns walking times per pixel as a gzipped Esri ASCII
grid: six ``key value`` header lines followed by whitespace-separated cell
values, north-most row first::

    ncols         2
    nrows         2
    xllcorner     0
    yllcorner     0
    cellsize      10
    NODATA_value  -9999
    1 -9999
    3 4

Cells equal to the no-data sentinel become ``NaN`` in the parsed grid.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import StrEnum

import numpy as np

from walkalytics.exceptions import DimensionMismatch, InvalidGridHeader, MalformedPayload

logger = logging.getLogger(__name__)

HEADER_LINES = 6


class HeaderKey(StrEnum):
    """Header keys recognised in an Esri ASCII grid (lower-cased)."""

    NCOLS = "ncols"
    NROWS = "nrows"
    XLLCORNER = "xllcorner"
    YLLCORNER = "yllcorner"
    XLLCENTER = "xllcenter"
    YLLCENTER = "yllcenter"
    CELLSIZE = "cellsize"
    NODATA_VALUE = "nodata_value"


def _resolve_axis(
    corner: float | None, center: float | None, cellsize: float, axis: str
) -> tuple[float, float]:
    """Return ``(corner, center)`` for one axis, deriving the missing one."""
    if corner is not None and center is not None:
        raise InvalidGridHeader(f"both {axis}llcorner and {axis}llcenter given")
    if corner is not None:
        return corner, corner + 0.5 * cellsize
    if center is not None:
        return center - 0.5 * cellsize, center
    raise InvalidGridHeader(f"neither {axis}llcorner nor {axis}llcenter given")


@dataclass(frozen=True)
class GridHeader:
    """Geo-reference of an Esri ASCII grid.

    Both the lower-left corner and the lower-left cell centre are stored;
    they always differ by half a cell.
    """

    ncols: int
    nrows: int
    xllcorner: float
    yllcorner: float
    xllcenter: float
    yllcenter: float
    cellsize: float
    nodata_value: float

    @property
    def size(self) -> int:
        """Number of cells the header announces."""
        return self.ncols * self.nrows

    @classmethod
    def from_lines(cls, lines: list[str]) -> GridHeader:
        """Parse the six header lines of an Esri ASCII grid.

        Keys are matched case-insensitively against ``HeaderKey``; their
        order in the file is free.

        Raises:
            InvalidGridHeader: On unknown, duplicate, missing or
                non-numeric header fields.
        """
        if len(lines) != HEADER_LINES:
            raise InvalidGridHeader(f"expected {HEADER_LINES} header lines, got {len(lines)}")

        values: dict[HeaderKey, float] = {}
        for line in lines:
            parts = line.split()
            if len(parts) != 2:
                raise InvalidGridHeader(f"header line is not a 'key value' pair: {line!r}")
            name, raw = parts
            try:
                key = HeaderKey(name.strip().lower())
            except ValueError:
                raise InvalidGridHeader(f"unknown header key: {name!r}") from None
            if key in values:
                raise InvalidGridHeader(f"duplicate header key: {name!r}")
            try:
                values[key] = float(raw)
            except ValueError:
                raise InvalidGridHeader(f"non-numeric value for {name}: {raw!r}") from None

        for required in (
            HeaderKey.NCOLS,
            HeaderKey.NROWS,
            HeaderKey.CELLSIZE,
            HeaderKey.NODATA_VALUE,
        ):
            if required not in values:
                raise InvalidGridHeader(f"header is missing {required.value}")

        ncols = values[HeaderKey.NCOLS]
        nrows = values[HeaderKey.NROWS]
        if not (ncols.is_integer() and nrows.is_integer()) or ncols < 1 or nrows < 1:
            raise InvalidGridHeader(f"invalid grid dimensions {ncols} x {nrows}")

        cellsize = values[HeaderKey.CELLSIZE]
        xllcorner, xllcenter = _resolve_axis(
            values.get(HeaderKey.XLLCORNER), values.get(HeaderKey.XLLCENTER), cellsize, "x"
        )
        yllcorner, yllcenter = _resolve_axis(
            values.get(HeaderKey.YLLCORNER), values.get(HeaderKey.YLLCENTER), cellsize, "y"
        )

        return cls(
            ncols=int(ncols),
            nrows=int(nrows),
            xllcorner=xllcorner,
            yllcorner=yllcorner,
            xllcenter=xllcenter,
            yllcenter=yllcenter,
            cellsize=cellsize,
            nodata_value=values[HeaderKey.NODATA_VALUE],
        )


@dataclass
class RasterGrid:
    """A planar raster anchored at its lower-left cell centre.

    ``values`` has shape ``(nrows, ncols)``, north-most row first; missing
    cells hold ``NaN``. No coordinate reference system is attached unless
    the caller sets ``crs``.
    """

    header: GridHeader
    values: np.ndarray
    crs: str | None = field(default=None)

    @property
    def shape(self) -> tuple[int, int]:
        return self.header.nrows, self.header.ncols

    @property
    def anchor(self) -> tuple[float, float]:
        """Lower-left cell centre ``(x, y)``."""
        return self.header.xllcenter, self.header.yllcenter

    @property
    def cellsize(self) -> tuple[float, float]:
        return self.header.cellsize, self.header.cellsize

    def is_missing(self, row: int, col: int) -> bool:
        return bool(np.isnan(self.values[row, col]))

    def cell_center(self, row: int, col: int) -> tuple[float, float]:
        """Planar coordinates of the centre of cell ``(row, col)``."""
        h = self.header
        return (
            h.xllcenter + col * h.cellsize,
            h.yllcenter + (h.nrows - 1 - row) * h.cellsize,
        )

    def coordinates(self) -> tuple[np.ndarray, np.ndarray]:
        """Cell-centre x and y arrays, each flattened row-major like ``values``."""
        h = self.header
        xs = h.xllcenter + np.arange(h.ncols) * h.cellsize
        ys = h.yllcenter + np.arange(h.nrows - 1, -1, -1) * h.cellsize
        return np.tile(xs, h.nrows), np.repeat(ys, h.ncols)


@dataclass(frozen=True)
class PixelWalktime:
    """Walking time to one grid cell; ``walktime`` is None for missing cells."""

    walktime: float | None
    x: float
    y: float


def parse_ascii_grid(text: str) -> RasterGrid:
    """Parse Esri ASCII grid text into a ``RasterGrid``.

    Raises:
        InvalidGridHeader: If the header is malformed.
        MalformedPayload: If a cell value is not numeric.
        DimensionMismatch: If the cell count differs from ``ncols * nrows``.
    """
    lines = text.splitlines()
    header = GridHeader.from_lines(lines[:HEADER_LINES])

    tokens = " ".join(lines[HEADER_LINES:]).split()
    if len(tokens) != header.size:
        raise DimensionMismatch(expected=header.size, actual=len(tokens))

    try:
        cells = np.array([float(t) for t in tokens], dtype=np.float64)
    except ValueError as exc:
        raise MalformedPayload(f"non-numeric grid cell: {exc}") from exc

    if not math.isnan(header.nodata_value):
        cells[cells == header.nodata_value] = np.nan

    logger.debug(
        "Parsed %dx%d grid (%d missing cells)",
        header.ncols,
        header.nrows,
        int(np.isnan(cells).sum()),
    )
    return RasterGrid(header=header, values=cells.reshape(header.nrows, header.ncols))
