"""
Unit tests for the data loader

Tests reading local CSV files and URLs, header alias normalisation and
row validation.
"""

import os
import unittest
from unittest.mock import patch, MagicMock
from pathlib import Path
import sys
import tempfile

import pandas as pd
import requests

sys.path.insert(0, str(Path(__file__).parent.parent))

from vinyl_chart.core.exceptions import DataError
from vinyl_chart.data import load_songs, normalize_columns, validate_songs, to_song_records, is_url
from vinyl_chart.models import SongRecord, songs_frame
from tests.fixtures.sample_data import create_sample_song_data, create_sample_csv_file


class TestLoadLocalFile(unittest.TestCase):
    """Test suite for loading CSV files from disk."""

    def setUp(self):
        self.paths = []

    def tearDown(self):
        for path in self.paths:
            if path.exists():
                os.unlink(path)

    def _csv(self, **kwargs):
        path = create_sample_csv_file(**kwargs)
        self.paths.append(path)
        return path

    def test_load_sample(self):
        songs = load_songs(self._csv())
        self.assertEqual(len(songs), 15)
        self.assertEqual(list(songs.columns), ['rank', 'title', 'artist', 'releaseYear'])
        self.assertEqual(list(songs['rank']), list(range(1, 16)))

    def test_dutch_headers(self):
        """Headers from the Dutch chart export are recognised."""
        songs = load_songs(self._csv(columns=['positie', 'titel', 'artiest', 'jaar']))
        self.assertEqual(list(songs.columns), ['rank', 'title', 'artist', 'releaseYear'])
        self.assertEqual(songs.loc[0, 'artist'], 'Queen')

    def test_mixed_case_headers(self):
        songs = load_songs(self._csv(columns=['Rank', 'Title', 'Artist', 'Release Year']))
        self.assertEqual(songs.loc[0, 'releaseYear'], 1975)

    def test_text_cleaned(self):
        df = create_sample_song_data()
        df.loc[0, 'title'] = '  Bohemian   Rhapsody '
        songs = load_songs(self._csv(df=df))
        self.assertEqual(songs.loc[0, 'title'], 'Bohemian Rhapsody')

    def test_missing_column(self):
        df = create_sample_song_data().drop(columns=['artist'])
        with self.assertRaises(DataError) as context:
            load_songs(self._csv(df=df))
        self.assertIn('artist', str(context.exception))

    def test_missing_file(self):
        with self.assertRaises(DataError):
            load_songs('/nonexistent/dir/songs.csv')

    def test_directory_source(self):
        """A directory path is reported as DataError, not IsADirectoryError."""
        directory = tempfile.mkdtemp()
        try:
            with self.assertRaises(DataError) as context:
                load_songs(directory)
            self.assertIn('Could not read', str(context.exception))
        finally:
            os.rmdir(directory)

    @patch('vinyl_chart.data.loader.pd.read_csv')
    def test_unreadable_file(self, mock_read):
        mock_read.side_effect = PermissionError(13, 'Permission denied')
        with self.assertRaises(DataError):
            load_songs(self._csv())

    def test_empty_table(self):
        songs = load_songs(self._csv(df=create_sample_song_data().iloc[0:0]))
        self.assertTrue(songs.empty)


class TestValidateSongs(unittest.TestCase):
    """Test suite for row validation."""

    def setUp(self):
        self.df = create_sample_song_data()

    def test_valid_table(self):
        songs = validate_songs(self.df)
        self.assertEqual(songs['rank'].dtype.kind, 'i')
        self.assertEqual(songs['releaseYear'].dtype.kind, 'i')

    def test_blank_year(self):
        df = self.df.astype({'releaseYear': object})
        df.loc[2, 'releaseYear'] = None
        with self.assertRaises(DataError):
            validate_songs(df)

    def test_non_numeric_rank(self):
        df = self.df.astype({'rank': object})
        df.loc[2, 'rank'] = 'three'
        with self.assertRaises(DataError):
            validate_songs(df)

    def test_fractional_rank(self):
        df = self.df.astype({'rank': float})
        df.loc[2, 'rank'] = 2.5
        with self.assertRaises(DataError):
            validate_songs(df)

    def test_zero_rank(self):
        df = self.df.copy()
        df.loc[0, 'rank'] = 0
        with self.assertRaises(DataError) as context:
            validate_songs(df)
        self.assertIn('>= 1', str(context.exception))

    def test_duplicate_rank(self):
        df = self.df.copy()
        df.loc[4, 'rank'] = 3
        with self.assertRaises(DataError) as context:
            validate_songs(df)
        self.assertIn('Duplicate', str(context.exception))

    def test_float_ranks_accepted(self):
        """Whole-number floats (as read from a CSV with blanks elsewhere) are fine."""
        songs = validate_songs(self.df.astype({'rank': float}))
        self.assertEqual(songs.loc[0, 'rank'], 1)

    def test_input_not_mutated(self):
        before = self.df.copy()
        validate_songs(self.df)
        pd.testing.assert_frame_equal(self.df, before)

    def test_normalize_keeps_first_alias(self):
        """Two headers mapping to the same column: only the first is renamed."""
        df = pd.DataFrame({'year': [1999], 'jaar': [2000]})
        renamed = normalize_columns(df)
        self.assertEqual(list(renamed.columns), ['releaseYear', 'jaar'])

    def test_to_song_records(self):
        records = to_song_records(validate_songs(self.df))
        self.assertEqual(records[0], SongRecord(1, 'Bohemian Rhapsody', 'Queen', 1975))

    def test_songs_frame_from_records(self):
        """A table built from SongRecord objects passes validation unchanged."""
        records = [SongRecord(2, 'Hotel California', 'Eagles', 1977),
                   SongRecord(1, 'Bohemian Rhapsody', 'Queen', 1975)]
        songs = validate_songs(songs_frame(records))
        self.assertEqual(list(songs['rank']), [1, 2])
        self.assertEqual(to_song_records(songs), records[::-1])


class TestLoadUrl(unittest.TestCase):
    """Test suite for fetching the table over HTTP."""

    URL = 'https://example.org/top2000.csv'

    def setUp(self):
        self.csv_text = create_sample_song_data().to_csv(index=False)

    def test_is_url(self):
        self.assertTrue(is_url(self.URL))
        self.assertTrue(is_url('HTTP://example.org/x.csv'))
        self.assertFalse(is_url('data/top2000.csv'))

    @patch('vinyl_chart.data.loader.requests.get')
    def test_fetch_success(self, mock_get):
        mock_get.return_value = MagicMock(text=self.csv_text, encoding='utf-8')

        songs = load_songs(self.URL, timeout=5)

        mock_get.assert_called_once_with(self.URL, timeout=5)
        self.assertEqual(len(songs), 15)

    @patch('vinyl_chart.data.loader.requests.get')
    def test_connection_error(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError('refused')

        with self.assertRaises(DataError) as context:
            load_songs(self.URL)
        self.assertIn('Could not fetch', str(context.exception))

    @patch('vinyl_chart.data.loader.requests.get')
    def test_http_error(self, mock_get):
        response = MagicMock(encoding='utf-8')
        response.raise_for_status.side_effect = requests.exceptions.HTTPError('404 Not Found')
        mock_get.return_value = response

        with self.assertRaises(DataError):
            load_songs(self.URL)

    @patch('vinyl_chart.data.loader.requests.get')
    def test_empty_body(self, mock_get):
        mock_get.return_value = MagicMock(text='', encoding='utf-8')

        with self.assertRaises(DataError):
            load_songs(self.URL)


if __name__ == '__main__':
    unittest.main()
