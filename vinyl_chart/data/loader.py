"""
Data Loader - reads the ranked song table from disk or over HTTP.

The loader is the only stage that touches the outside world before the
render.  It accepts either a local CSV path or an ``http(s)://`` URL,
normalises the header names onto the canonical columns from
``core.config`` and validates every row before handing the table on:

    [CSV file / URL]
         |
         v
    read_table()      --> raw DataFrame
         |
         v
    normalize_columns() --> rank / title / artist / releaseYear
         |
         v
    validate_songs()  --> integer ranks and years, cleaned text

Any problem raises ``DataError``.  There is no retry policy: a failed
download is reported and the run stops.
"""

import io
import os
import logging
from typing import List, Union

import pandas as pd
import requests

from ..core.config import (
    COL_RANK, COL_TITLE, COL_ARTIST, COL_YEAR,
    REQUIRED_COLUMNS, COLUMN_ALIASES, HTTP_TIMEOUT,
)
from ..core.exceptions import DataError
from ..core.utils import clean_text, validate_columns, normalize_column_name, integral_column
from ..models.data_models import SongRecord

logger = logging.getLogger(__name__)


def is_url(source) -> bool:
    """True when ``source`` looks like an http(s) URL."""
    return str(source).lower().startswith(("http://", "https://"))


def fetch_csv_text(url: str, timeout: int = HTTP_TIMEOUT) -> str:
    """Download a CSV document and return its text.

    Raises:
        DataError: On connection failure, timeout, or a non-2xx response.
    """
    logger.info(f"[Loader] Fetching {url}")
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        raise DataError(f"Could not fetch dataset from {url}: {e}") from e
    # Chart exports are frequently served without a charset header.
    if not response.encoding or response.encoding.lower() == "iso-8859-1":
        response.encoding = response.apparent_encoding or "utf-8"
    return response.text


def read_table(source: Union[str, os.PathLike], timeout: int = HTTP_TIMEOUT) -> pd.DataFrame:
    """Read the raw CSV table from a path or URL (header row required)."""
    try:
        if is_url(source):
            return pd.read_csv(io.StringIO(fetch_csv_text(str(source), timeout=timeout)))
        if not os.path.exists(source):
            raise DataError(f"Dataset not found: {source}")
        logger.info(f"[Loader] Reading {source}")
        return pd.read_csv(source)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise DataError(f"Could not parse dataset {source}: {e}") from e
    except OSError as e:
        raise DataError(f"Could not read dataset {source}: {e}") from e


def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Rename known header spellings onto the canonical column names."""
    mapping = {}
    for col in df.columns:
        canonical = COLUMN_ALIASES.get(normalize_column_name(col))
        if canonical and canonical not in mapping.values():
            mapping[col] = canonical
    renamed = df.rename(columns=mapping)
    if mapping:
        logger.debug(f"[Loader] Column mapping: {mapping}")
    return renamed


def validate_songs(df: pd.DataFrame) -> pd.DataFrame:
    """Validate and clean the canonical song table.

    Checks that every required column exists, that ``rank`` and
    ``releaseYear`` are present and integral on every row, that ranks are
    positive and unique.  Text columns are cleaned.

    Returns:
        A new DataFrame with only the canonical columns, sorted by rank.

    Raises:
        DataError: On any violation.
    """
    validate_columns(df, REQUIRED_COLUMNS)
    out = df[REQUIRED_COLUMNS].copy()

    out[COL_RANK] = integral_column(out, COL_RANK)
    out[COL_YEAR] = integral_column(out, COL_YEAR)

    non_positive = out.loc[out[COL_RANK] <= 0, COL_RANK]
    if not non_positive.empty:
        raise DataError(f"Ranks must be >= 1, got {sorted(non_positive.tolist())[:10]}")

    duplicated = out.loc[out[COL_RANK].duplicated(), COL_RANK]
    if not duplicated.empty:
        raise DataError(f"Duplicate ranks: {sorted(duplicated.unique().tolist())[:10]}")

    out[COL_TITLE] = out[COL_TITLE].map(clean_text)
    out[COL_ARTIST] = out[COL_ARTIST].map(clean_text)

    return out.sort_values(COL_RANK).reset_index(drop=True)


def load_songs(source: Union[str, os.PathLike], timeout: int = HTTP_TIMEOUT) -> pd.DataFrame:
    """Load, normalise and validate the ranked song table."""
    df = normalize_columns(read_table(source, timeout=timeout))
    songs = validate_songs(df)
    logger.info(
        f"[Loader] {len(songs)} songs, release years "
        f"{songs[COL_YEAR].min() if len(songs) else '-'}-{songs[COL_YEAR].max() if len(songs) else '-'}"
    )
    return songs


def to_song_records(df: pd.DataFrame) -> List[SongRecord]:
    """Convert a validated song table into SongRecord objects."""
    return [
        SongRecord(int(row[COL_RANK]), row[COL_TITLE], row[COL_ARTIST], int(row[COL_YEAR]))
        for _, row in df.iterrows()
    ]
