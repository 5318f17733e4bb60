"""
Unit tests for highlight label placement
"""

import unittest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from vinyl_chart.visualization import LabelAnchor, NoLayout, GreedyRadialRepel


def anchor(key, x, y):
    return LabelAnchor(key=key, x=x, y=y, anchor_y=y, text=f"label {key}")


class TestNoLayout(unittest.TestCase):

    def test_positions_unchanged(self):
        labels = [anchor(1, 1975, 20), anchor(2, 1975, 21)]
        self.assertEqual(NoLayout().place(labels), labels)


class TestGreedyRadialRepel(unittest.TestCase):
    """Test suite for the default two-pass greedy layout."""

    def setUp(self):
        self.layout = GreedyRadialRepel(min_gap=6, angular_window=4, radius_min=-2, radius_max=78)

    def test_clusters_by_year_distance(self):
        labels = [anchor(1, 1975, 10), anchor(2, 1971, 10), anchor(3, 1991, 10), anchor(4, 1972, 10)]
        clusters = self.layout.clusters(labels)
        self.assertEqual([[l.key for l in c] for c in clusters], [[2, 4, 1], [3]])

    def test_stacked_labels_spread_outward(self):
        labels = [anchor(1, 1975, 10), anchor(2, 1975, 11), anchor(3, 1975, 12)]
        placed = self.layout.place(labels)
        self.assertEqual([l.y for l in placed], [10, 16, 22])

    def test_clamped_at_outer_edge(self):
        labels = [anchor(1, 1975, 75), anchor(2, 1975, 76)]
        placed = self.layout.place(labels)
        self.assertEqual([l.y for l in placed], [72, 78])

    def test_distant_labels_untouched(self):
        labels = [anchor(1, 1960, 30), anchor(2, 1990, 31)]
        placed = self.layout.place(labels)
        self.assertEqual([l.y for l in placed], [30, 31])

    def test_well_separated_cluster_untouched(self):
        labels = [anchor(1, 1975, 10), anchor(2, 1976, 30)]
        self.assertEqual(self.layout.place(labels), labels)

    def test_input_order_preserved(self):
        labels = [anchor(5, 1990, 40), anchor(1, 1975, 12), anchor(3, 1975, 10)]
        placed = self.layout.place(labels)
        self.assertEqual([l.key for l in placed], [5, 1, 3])

    def test_min_gap_within_clusters(self):
        labels = [anchor(k, 1970 + (k % 3), 20 + k * 0.5) for k in range(1, 11)]
        placed = self.layout.place(labels)
        for cluster in self.layout.clusters(placed):
            ys = sorted(l.y for l in cluster)
            gaps = [b - a for a, b in zip(ys, ys[1:])]
            self.assertTrue(all(g >= 6 - 1e-9 for g in gaps), gaps)
            self.assertLessEqual(max(ys), 78)

    def test_open_axis_does_not_wrap(self):
        labels = [anchor(1, 1956, 10), anchor(2, 2019, 11)]
        self.assertEqual(len(self.layout.clusters(labels)), 2)
        self.assertEqual([l.y for l in self.layout.place(labels)], [10, 11])

    def test_clusters_wrap_across_seam(self):
        """On a closed axis 2019 and 1956 are two years apart."""
        layout = GreedyRadialRepel(min_gap=6, angular_window=4, radius_min=-2, radius_max=78,
                                   period=65)
        labels = [anchor(1, 1956, 10), anchor(2, 1990, 10), anchor(3, 2019, 11)]
        clusters = layout.clusters(labels)
        self.assertEqual([[l.key for l in c] for c in clusters], [[3, 1], [2]])

        placed = layout.place(labels)
        self.assertEqual([l.y for l in placed], [10, 10, 16])

    def test_wrap_needs_gap_within_window(self):
        layout = GreedyRadialRepel(min_gap=6, angular_window=4, radius_min=-2, radius_max=78,
                                   period=65)
        labels = [anchor(1, 1960, 10), anchor(2, 2014, 11)]
        self.assertEqual(len(layout.clusters(labels)), 2)

    def test_anchor_kept_for_leader(self):
        labels = [anchor(1, 1975, 10), anchor(2, 1975, 11)]
        placed = self.layout.place(labels)
        self.assertEqual(placed[1].anchor_y, 11)
        self.assertEqual(placed[1].displaced, 5)


if __name__ == '__main__':
    unittest.main()
