"""
Geometry module for Vinyl Chart.

Derives the within-year ordinal and glyph size of every song.
"""

from .transform import (
    glyph_size,
    assign_ordinals,
    derive_records,
    highlight_set,
    to_derived_records,
    year_summary,
    calibration_report,
)

__all__ = [
    'glyph_size',
    'assign_ordinals',
    'derive_records',
    'highlight_set',
    'to_derived_records',
    'year_summary',
    'calibration_report',
]
