"""
Data module for Vinyl Chart.

Loads the ranked song table from a local CSV file or a URL.
"""

from .loader import load_songs, read_table, normalize_columns, validate_songs, to_song_records, is_url

__all__ = [
    'load_songs',
    'read_table',
    'normalize_columns',
    'validate_songs',
    'to_song_records',
    'is_url',
]
