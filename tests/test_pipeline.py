"""
Integration tests for the pipeline orchestrator

Runs the four phases end to end on the sample dataset.
"""

import os
import shutil
import tempfile
import unittest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from vinyl_chart.core.config import DESIGN
from vinyl_chart.core.exceptions import ConfigError, DataError
from vinyl_chart.pipeline import VinylChartPipeline, main_pipeline
from vinyl_chart.visualization import LAYER_ORDER
from tests.fixtures.sample_data import create_sample_csv_file


class TestVinylChartPipeline(unittest.TestCase):
    """Test suite for VinylChartPipeline."""

    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp())
        self.csv_path = create_sample_csv_file(self.test_dir / 'songs.csv')
        self.output = self.test_dir / 'out' / 'vinyl.png'

    def tearDown(self):
        if self.test_dir.exists():
            shutil.rmtree(self.test_dir)

    def test_full_run(self):
        pipeline = VinylChartPipeline(self.csv_path, self.output, dpi=20)
        path = pipeline.run()

        self.assertEqual(path, self.output)
        self.assertTrue(self.output.exists())
        self.assertGreater(os.path.getsize(self.output), 0)

    def test_results_populated(self):
        pipeline = VinylChartPipeline(self.csv_path, self.output, dpi=20)
        pipeline.run()
        results = pipeline.get_results()

        self.assertEqual(len(results['songs']), 15)
        self.assertIn('ordinalInYear', results['derived'].columns)
        self.assertEqual(len(results['highlights']), 10)
        layers = [p.layer for p in results['primitives']]
        self.assertEqual(sorted(set(layers), key=LAYER_ORDER.index), list(LAYER_ORDER))

    def test_phases_can_run_individually(self):
        pipeline = VinylChartPipeline(self.csv_path, self.output, dpi=20)
        pipeline.load_data()
        derived = pipeline.derive()
        self.assertEqual(derived['glyphSize'].iloc[0], derived['glyphSize'].max())
        self.assertIsNone(pipeline.primitives)

    def test_scale_changes_glyphs(self):
        pipeline = VinylChartPipeline(self.csv_path, self.output, scale=3.6)
        pipeline.load_data()
        derived = pipeline.derive()
        self.assertAlmostEqual(derived['glyphSize'].iloc[0], 40 / 3.6)

    def test_bad_design_fails_before_loading(self):
        design = dict(DESIGN, label_color='nope')
        with self.assertRaises(ConfigError):
            VinylChartPipeline('/nonexistent/songs.csv', self.output, design=design)

    def test_missing_input(self):
        pipeline = VinylChartPipeline(self.test_dir / 'missing.csv', self.output)
        with self.assertRaises(DataError):
            pipeline.run()
        self.assertFalse(self.output.exists())

    def test_main_pipeline(self):
        path = main_pipeline(self.csv_path, self.test_dir / 'chart.svg', dpi=20)
        self.assertTrue(path.exists())
        self.assertEqual(path.suffix, '.svg')


if __name__ == '__main__':
    unittest.main()
