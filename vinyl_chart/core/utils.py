"""
Utility functions for text processing and data validation.
"""

import re
import logging
import numpy as np
import pandas as pd

from .exceptions import DataError

logger = logging.getLogger(__name__)


def clean_text(text):
    """Clean and normalize text for labels"""
    if pd.isna(text):
        return ""
    text = str(text).replace("\r", " ").replace("\n", " ")
    return re.sub(r'\s+', ' ', text).strip()


def normalize_column_name(name):
    """Lower-case a raw header and strip spaces, dashes and dots"""
    return re.sub(r'[\s\-\.]+', '', str(name)).lower()


def validate_columns(df, required_cols):
    """Validate that required columns exist in dataframe"""
    missing = [c for c in required_cols if c not in df.columns]
    if missing:
        logger.error(f"Missing columns: {missing}")
        raise DataError(f"Missing required columns: {missing}")
    return True


def integral_column(df, col):
    """Coerce a column to int, raising DataError on blanks, text or fractions"""
    values = pd.to_numeric(df[col], errors='coerce').astype(float)
    bad = values.isna() | (values != np.floor(values))
    if bad.any():
        rows = list(df.index[bad][:10])
        raise DataError(f"Column '{col}' has missing or non-integer values at rows {rows}")
    return values.astype(int)


def format_song_label(rank, artist, title):
    """Two-line label used for highlighted songs"""
    return f"{int(rank)}. {clean_text(artist)}\n{clean_text(title)}"
