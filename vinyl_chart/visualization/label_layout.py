"""
Label placement for the highlighted songs.

The top-10 labels start at (releaseYear, ordinalInYear + glyphSize), just
outside their ring.  Popular songs cluster in a handful of years, so labels
from neighbouring years collide.  A layout takes the list of label anchors
and returns them with adjusted radial positions; the layer composer accepts
any ``LabelLayout`` so the strategy can be swapped.

``GreedyRadialRepel`` is the default: labels whose years are within
``angular_window`` of each other form a cluster (the axis wraps, so the
last and first years of the record are neighbours), and each cluster is spread
along the radius with a two-pass greedy nudge (outward, then inward from the
edge of the record) so that neighbouring labels end up at least
``min_gap`` apart.
"""

import logging
from dataclasses import dataclass, replace
from typing import List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LabelAnchor:
    """A label position in data space.

    ``x``/``y`` are where the text goes; ``anchor_y`` is the radius of the
    glyph edge the label belongs to.
    """
    key: int
    x: float
    y: float
    anchor_y: float
    text: str = ""

    @property
    def displaced(self) -> float:
        return self.y - self.anchor_y


class LabelLayout:
    """Base class for label placement strategies."""

    def place(self, labels: List[LabelAnchor]) -> List[LabelAnchor]:
        raise NotImplementedError


class NoLayout(LabelLayout):
    """Keep every label where it was anchored."""

    def place(self, labels: List[LabelAnchor]) -> List[LabelAnchor]:
        return list(labels)


class GreedyRadialRepel(LabelLayout):
    """Spread clustered labels along the radius.

    Args:
        min_gap: Minimum radial distance between neighbouring labels.
        angular_window: Years within which two labels count as neighbours.
        radius_min: Innermost radius a label may be moved to.
        radius_max: Outermost radius a label may be moved to.
        period: Length of the year axis when it closes into a full circle;
            labels either side of the seam then count as neighbours.
            ``None`` treats the axis as open.
    """

    def __init__(self, min_gap: float, angular_window: float,
                 radius_min: float, radius_max: float,
                 period: Optional[float] = None):
        self.min_gap = min_gap
        self.angular_window = angular_window
        self.radius_min = radius_min
        self.radius_max = radius_max
        self.period = period

    def clusters(self, labels: List[LabelAnchor]) -> List[List[LabelAnchor]]:
        """Group labels chained by year distance <= angular_window."""
        groups: List[List[LabelAnchor]] = []
        last_x: Optional[float] = None
        for label in sorted(labels, key=lambda l: (l.x, l.key)):
            if last_x is None or label.x - last_x > self.angular_window:
                groups.append([])
            groups[-1].append(label)
            last_x = label.x

        # Across the seam the last year is followed by the first one
        if self.period and len(groups) > 1:
            gap = groups[0][0].x + self.period - groups[-1][-1].x
            if gap <= self.angular_window:
                groups[0] = groups.pop() + groups[0]
        return groups

    def _spread(self, cluster: List[LabelAnchor]) -> List[LabelAnchor]:
        ordered = sorted(cluster, key=lambda l: (l.y, l.key))
        pos = [min(max(l.y, self.radius_min), self.radius_max) for l in ordered]

        # Pass 1: inside-out, push labels outward when too close
        for i in range(1, len(pos)):
            if pos[i] - pos[i - 1] < self.min_gap:
                pos[i] = pos[i - 1] + self.min_gap

        # Pass 2: outside-in, pull back anything pushed past the edge
        upper = self.radius_max
        for i in reversed(range(len(pos))):
            pos[i] = max(min(pos[i], upper), self.radius_min)
            upper = pos[i] - self.min_gap

        return [replace(l, y=p) for l, p in zip(ordered, pos)]

    def place(self, labels: List[LabelAnchor]) -> List[LabelAnchor]:
        placed = {}
        for cluster in self.clusters(labels):
            for label in self._spread(cluster):
                placed[label.key] = label
        moved = sum(1 for l in labels if placed[l.key].y != l.y)
        if moved:
            logger.debug(f"[Layout] Nudged {moved} of {len(labels)} labels")
        return [placed[l.key] for l in labels]
