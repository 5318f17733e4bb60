"""
Geometry Transform - turns the ranked song table into chart coordinates.

For every song two values are derived:

  ordinalInYear
      Position of the song within its release year.  Songs of one year are
      walked in *descending* rank order (least popular first), so the least
      popular song sits at ordinal 1 near the center and the most popular
      song of the year sits furthest out.

  glyphSize
      ``(GLYPH_BASE + GLYPH_SLOPE * ln(rank)) / scale``.  GLYPH_SLOPE is
      negative, so the size shrinks as rank grows and rank 1 gets the
      largest glyph.

The transform is a pure function of its input: the caller's DataFrame is
never modified and identical input always yields identical output.
"""

import logging
from typing import Dict, List, Any

import numpy as np
import pandas as pd

from ..core.config import (
    COL_RANK, COL_TITLE, COL_ARTIST, COL_YEAR, COL_ORDINAL, COL_GLYPH,
    GLYPH_BASE, GLYPH_SLOPE, GLYPH_SCALE, GLYPH_TARGET_RANGE,
    HIGHLIGHT_TOP_N, RADIUS_DOMAIN,
)
from ..core.exceptions import DataError, ConfigError
from ..core.utils import integral_column
from ..models.data_models import DerivedRecord

logger = logging.getLogger(__name__)


def glyph_size(rank, scale: float = GLYPH_SCALE):
    """Glyph size for a rank (scalar, array or Series).

    Raises:
        DataError: If any rank is <= 0 (the log is undefined there).
        ConfigError: If ``scale`` is not positive.
    """
    if scale is None or scale <= 0:
        raise ConfigError(f"Glyph scale must be positive, got {scale}")
    ranks = np.asarray(rank, dtype=float)
    if np.any(np.isnan(ranks)) or np.any(ranks <= 0):
        raise DataError("Glyph size is undefined for ranks <= 0")
    sizes = (GLYPH_BASE + GLYPH_SLOPE * np.log(ranks)) / scale
    if isinstance(rank, pd.Series):
        return pd.Series(sizes, index=rank.index, name=COL_GLYPH)
    if np.ndim(rank) == 0:
        return float(sizes)
    return sizes


def _checked_input(df: pd.DataFrame) -> pd.DataFrame:
    """Copy of ``df`` with integer rank and year columns, or DataError."""
    missing = [c for c in (COL_RANK, COL_YEAR) if c not in df.columns]
    if missing:
        raise DataError(f"Cannot derive geometry without columns {missing}")
    checked = df.reset_index(drop=True)
    checked[COL_RANK] = integral_column(checked, COL_RANK)
    checked[COL_YEAR] = integral_column(checked, COL_YEAR)
    if (checked[COL_RANK] <= 0).any():
        raise DataError("Ranks must be >= 1")
    if checked[COL_RANK].duplicated().any():
        raise DataError("Ranks must be unique")
    return checked


def assign_ordinals(df: pd.DataFrame) -> pd.Series:
    """Ordinal of each song within its release year (1..k per year).

    The returned Series is aligned to ``df.index``.
    """
    by_desc_rank = df.sort_values(COL_RANK, ascending=False, kind="mergesort")
    ordinals = by_desc_rank.groupby(COL_YEAR, sort=False).cumcount() + 1
    return ordinals.reindex(df.index).astype(int).rename(COL_ORDINAL)


def derive_records(df: pd.DataFrame, scale: float = GLYPH_SCALE) -> pd.DataFrame:
    """Derive ``ordinalInYear`` and ``glyphSize`` for every song.

    Args:
        df: Song table with at least ``rank`` and ``releaseYear``.
        scale: Glyph scale divisor.

    Returns:
        A new DataFrame sorted by rank with the two derived columns appended.

    Raises:
        DataError: On missing columns/values, non-numeric or fractional ranks
            and years, non-positive or duplicate ranks.
    """
    derived = _checked_input(df)
    derived[COL_ORDINAL] = assign_ordinals(derived)
    derived[COL_GLYPH] = glyph_size(derived[COL_RANK], scale=scale)
    derived = derived.sort_values(COL_RANK).reset_index(drop=True)
    logger.info(f"[Geometry] Derived {len(derived)} records across "
                f"{derived[COL_YEAR].nunique()} release years")
    return derived


def highlight_set(derived: pd.DataFrame, top_n: int = HIGHLIGHT_TOP_N) -> pd.DataFrame:
    """Songs with rank < top_n + 1, in rank order."""
    top = derived[derived[COL_RANK] < top_n + 1]
    return top.sort_values(COL_RANK).reset_index(drop=True)


def to_derived_records(derived: pd.DataFrame) -> List[DerivedRecord]:
    """Convert a derived table into DerivedRecord objects."""
    return [
        DerivedRecord(
            rank=int(row[COL_RANK]),
            title=row.get(COL_TITLE, ""),
            artist=row.get(COL_ARTIST, ""),
            release_year=int(row[COL_YEAR]),
            ordinal_in_year=int(row[COL_ORDINAL]),
            glyph_size=float(row[COL_GLYPH]),
        )
        for _, row in derived.iterrows()
    ]


def year_summary(derived: pd.DataFrame) -> pd.DataFrame:
    """Number of songs per release year, oldest year first."""
    if derived.empty:
        return pd.DataFrame({COL_YEAR: pd.Series(dtype=int), 'songs': pd.Series(dtype=int)})
    counts = derived.groupby(COL_YEAR).size().rename('songs').reset_index()
    tallest = counts.loc[counts['songs'].idxmax()]
    if tallest['songs'] > RADIUS_DOMAIN[1]:
        logger.warning(f"[Geometry] {int(tallest['songs'])} songs from {int(tallest[COL_YEAR])} "
                       f"exceed the radius domain {RADIUS_DOMAIN}")
    return counts


def calibration_report(derived: pd.DataFrame, scale: float = GLYPH_SCALE) -> Dict[str, Any]:
    """Compare the glyph size range against the documented target range.

    The target range (GLYPH_TARGET_RANGE) is expressed before the scale
    divisor.  A glyph that is <= 0 or far outside the range means the
    constants do not suit the dataset size.
    """
    if derived.empty:
        return {'min': None, 'max': None, 'calibrated': True, 'non_positive': 0}

    sizes = derived[COL_GLYPH] * scale
    low, high = GLYPH_TARGET_RANGE
    non_positive = int((derived[COL_GLYPH] <= 0).sum())
    report = {
        'min': float(sizes.min()),
        'max': float(sizes.max()),
        'calibrated': bool(non_positive == 0 and sizes.max() <= high * 1.05),
        'non_positive': non_positive,
    }
    if not report['calibrated']:
        logger.warning(f"[Geometry] Glyph sizes {report['min']:.3f}..{report['max']:.3f} fall "
                       f"outside the target range {low}..{high}; "
                       f"{non_positive} glyphs are not drawable")
    elif sizes.min() < low:
        logger.debug(f"[Geometry] Smallest glyph {sizes.min():.4f} is below {low}")
    return report
