"""
Shared polar coordinate mapping.

Every primitive is expressed in (releaseYear, ordinalInYear) data space.
PolarTransform maps that space onto a polar plane:

    releaseYear   -> angle   (angle_domain spans one full turn, clockwise,
                              starting at 12 o'clock)
    ordinalInYear -> radius  (radius_domain[0] is the center of the record)
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from ..core.config import ANGLE_DOMAIN, RADIUS_DOMAIN


@dataclass(frozen=True)
class PolarTransform:
    angle_domain: Tuple[float, float] = ANGLE_DOMAIN
    radius_domain: Tuple[float, float] = RADIUS_DOMAIN
    theta_offset: float = np.pi / 2
    theta_direction: int = -1

    @property
    def angle_span(self) -> float:
        return self.angle_domain[1] - self.angle_domain[0]

    @property
    def radius_span(self) -> float:
        return self.radius_domain[1] - self.radius_domain[0]

    def theta(self, x):
        """Angle in radians (matplotlib polar convention) for data x."""
        return 2 * np.pi * (np.asarray(x, dtype=float) - self.angle_domain[0]) / self.angle_span

    def radius(self, y):
        """Distance from the center for data y."""
        return np.asarray(y, dtype=float) - self.radius_domain[0]

    def to_polar(self, x, y):
        return self.theta(x), self.radius(y)

    def to_cartesian(self, x, y):
        """Screen-space (unit-free) position, used to measure label overlap."""
        theta, r = self.to_polar(x, y)
        angle = self.theta_offset + self.theta_direction * theta
        return r * np.cos(angle), r * np.sin(angle)

    def sample_line(self, x0, y0, x1, y1, n: int = 100):
        """Points along a straight data-space segment, mapped to polar.

        A constant-radius segment becomes an arc and a constant-angle segment
        a spoke, so the line is sampled densely instead of mapping only its
        end points.
        """
        xs = np.linspace(x0, x1, n)
        ys = np.linspace(y0, y1, n)
        return self.to_polar(xs, ys)
