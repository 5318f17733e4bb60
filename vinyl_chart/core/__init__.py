"""
Core module for Vinyl Chart.

Contains configuration, exceptions, and base utilities.
"""

from vinyl_chart.core.config import *
from vinyl_chart.core.exceptions import VinylChartError, DataError, ConfigError, RenderError
from vinyl_chart.core.utils import clean_text, validate_columns, normalize_column_name, format_song_label

__all__ = [
    # Exceptions
    'VinylChartError',
    'DataError',
    'ConfigError',
    'RenderError',
    # Utils
    'clean_text',
    'validate_columns',
    'normalize_column_name',
    'format_song_label',
]
