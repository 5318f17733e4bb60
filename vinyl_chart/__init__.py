"""
Vinyl Chart - the most popular songs of all time drawn as a vinyl record.

This package renders a ranked song table as a polar chart:
- Release year runs around the record, songs of one year stack outward
- Every song glows with a size that shrinks with its rank
- The top 10 songs get an accent ring and a label
"""

__version__ = "1.0.0"
__author__ = "Vinyl Chart Team"

# Core imports
from .core.exceptions import VinylChartError, DataError, ConfigError, RenderError
from .core.utils import clean_text, validate_columns

# Data model
from .models import SongRecord, DerivedRecord, Style, Rectangle, Segment, Point, Text

# Stages
from .data import load_songs
from .geometry import glyph_size, derive_records, highlight_set, calibration_report
from .visualization import DesignConfig, PolarTransform, compose_layers, MatplotlibRenderer

# Pipeline
from .pipeline import VinylChartPipeline, main_pipeline

__all__ = [
    # Errors
    'VinylChartError',
    'DataError',
    'ConfigError',
    'RenderError',

    # Utils
    'clean_text',
    'validate_columns',

    # Data model
    'SongRecord',
    'DerivedRecord',
    'Style',
    'Rectangle',
    'Segment',
    'Point',
    'Text',

    # Stages
    'load_songs',
    'glyph_size',
    'derive_records',
    'highlight_set',
    'calibration_report',
    'DesignConfig',
    'PolarTransform',
    'compose_layers',
    'MatplotlibRenderer',

    # Pipeline
    'VinylChartPipeline',
    'main_pipeline',

    # Metadata
    '__version__',
]
