"""
Data models for the vinyl chart pipeline.

This module defines the **schema layer** for Vinyl Chart.  The pipeline
itself operates on ``pandas.DataFrame`` columns, while these dataclasses
describe the shape of every entity that flows between stages:

::

    SongRecord
        One row of the input table (rank, title, artist, release year).

    DerivedRecord
        A SongRecord plus the two values computed by the geometry transform:
        the ordinal position inside its release year and the glyph size.

    Style
        Visual attributes shared by every drawing primitive.

    Rectangle / Segment / Point / Text
        The four LayerPrimitive variants produced by the layer composer.
        Coordinates are always in (releaseYear, ordinalInYear) data space;
        the renderer owns the polar mapping.

All models are frozen.  A composed chart is an ordered ``list`` of
primitives and list position is draw order.
"""

from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional, Union, Any

import pandas as pd

from ..core.config import COL_RANK, COL_TITLE, COL_ARTIST, COL_YEAR, COL_ORDINAL, COL_GLYPH


# ============================================================================
# SONG RECORDS
# ============================================================================

@dataclass(frozen=True)
class SongRecord:
    """A single ranked song.  Identity is ``rank``."""
    rank: int
    title: str
    artist: str
    release_year: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a row dict keyed by the canonical column names."""
        return {
            COL_RANK: self.rank,
            COL_TITLE: self.title,
            COL_ARTIST: self.artist,
            COL_YEAR: self.release_year,
        }


@dataclass(frozen=True)
class DerivedRecord:
    """A SongRecord with its radial position and glyph size."""
    rank: int
    title: str
    artist: str
    release_year: int
    ordinal_in_year: int
    glyph_size: float

    @property
    def song(self) -> SongRecord:
        return SongRecord(self.rank, self.title, self.artist, self.release_year)

    def to_dict(self) -> Dict[str, Any]:
        row = self.song.to_dict()
        row[COL_ORDINAL] = self.ordinal_in_year
        row[COL_GLYPH] = self.glyph_size
        return row


def songs_frame(records: List[SongRecord]) -> pd.DataFrame:
    """Build the canonical input table from SongRecord objects."""
    return pd.DataFrame(
        [r.to_dict() for r in records],
        columns=[COL_RANK, COL_TITLE, COL_ARTIST, COL_YEAR],
    )


# ============================================================================
# DRAWING PRIMITIVES
# ============================================================================

@dataclass(frozen=True)
class Style:
    """Visual attributes of a primitive.

    ``size`` is a glyph diameter in millimetres for points; ``fontsize`` is
    in points for text.  Unused attributes are ignored by the renderer.
    """
    color: str = "#000000"
    fill: Optional[str] = None
    alpha: float = 1.0
    size: float = 1.0
    linewidth: float = 0.5
    fontsize: float = 8.0
    fontweight: str = "normal"
    family: str = "sans-serif"


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned rectangle in data space (an annular wedge once polar)."""
    xmin: float
    xmax: float
    ymin: float
    ymax: float
    style: Style = field(default_factory=Style)
    layer: str = ""
    kind: str = field(default="rectangle", init=False)


@dataclass(frozen=True)
class Segment:
    """Straight segment in data space (an arc or spoke once polar)."""
    x0: float
    y0: float
    x1: float
    y1: float
    style: Style = field(default_factory=Style)
    layer: str = ""
    kind: str = field(default="segment", init=False)


@dataclass(frozen=True)
class Point:
    """A glyph.  ``filled=False`` draws the ring only."""
    x: float
    y: float
    style: Style = field(default_factory=Style)
    filled: bool = True
    layer: str = ""
    kind: str = field(default="point", init=False)


@dataclass(frozen=True)
class Text:
    """A text label anchored at (x, y)."""
    x: float
    y: float
    text: str
    style: Style = field(default_factory=Style)
    ha: str = "center"
    va: str = "center"
    rotation: float = 0.0
    layer: str = ""
    kind: str = field(default="text", init=False)


LayerPrimitive = Union[Rectangle, Segment, Point, Text]


def primitive_to_dict(primitive: LayerPrimitive) -> Dict[str, Any]:
    """Serialise a primitive (used for debugging dumps and tests)."""
    return asdict(primitive)
