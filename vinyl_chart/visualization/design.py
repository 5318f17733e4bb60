"""
Design configuration for the layer composer.

``DesignConfig`` is a frozen, validated view of the ``DESIGN`` mapping in
``core.config``.  Every key is required: a missing colour or bound raises
``ConfigError``; nothing falls back to another value.
"""

import logging
from dataclasses import dataclass, fields
from typing import Mapping, Optional, Tuple, Any

from matplotlib.colors import is_color_like

from ..core.config import DESIGN
from ..core.exceptions import ConfigError

logger = logging.getLogger(__name__)

COLOR_KEYS = (
    'label_color', 'body_color', 'sheen_color', 'groove_color', 'edge_color',
    'text_color', 'hole_color', 'song_color', 'accent_color',
)
BOUND_KEYS = ('angle_domain', 'radius_domain', 'body_radius')
ALPHA_KEYS = (
    'sheen_max_alpha', 'tick_alpha', 'spoke_alpha', 'song_alpha', 'density_alpha', 'leader_alpha',
)


@dataclass(frozen=True)
class DesignConfig:
    """Colours, bounds, label text and tick positions of the chart."""
    label_color: str
    body_color: str
    sheen_color: str
    groove_color: str
    edge_color: str
    text_color: str
    hole_color: str
    song_color: str
    accent_color: str

    angle_domain: Tuple[float, float]
    radius_domain: Tuple[float, float]
    body_radius: Tuple[float, float]

    sheen_steps: int
    sheen_span: float
    sheen_max_alpha: float

    groove_interval: float
    groove_width: float
    edge_width: float

    radial_ticks: Tuple[float, ...]
    radial_label: str
    tick_fontsize: float
    tick_alpha: float

    hole_size: float

    title: str
    subtitle: str
    title_position: Tuple[float, float]
    subtitle_position: Tuple[float, float]
    title_fontsize: float
    subtitle_fontsize: float

    year_ticks: Tuple[int, int, int]
    year_label_radius: float
    year_fontsize: float
    spoke_alpha: float
    spoke_width: float

    song_size: float
    song_alpha: float
    density_alpha: float
    ring_stroke: float
    label_fontsize: float
    label_min_gap: float
    label_angular_window: float
    leader_alpha: float
    leader_width: float

    @classmethod
    def from_mapping(cls, mapping: Optional[Mapping[str, Any]] = None) -> "DesignConfig":
        """Build and validate a DesignConfig.

        Args:
            mapping: Design constants; ``None`` uses ``core.config.DESIGN``.

        Raises:
            ConfigError: If a key is missing, a colour is not a colour, or a
                bound is not an increasing pair.
        """
        if mapping is None:
            mapping = DESIGN
        names = [f.name for f in fields(cls)]
        missing = [n for n in names if n not in mapping or mapping[n] is None]
        if missing:
            raise ConfigError(f"Missing design constants: {missing}")

        values = {n: mapping[n] for n in names}
        for key in BOUND_KEYS + ('title_position', 'subtitle_position'):
            values[key] = tuple(values[key])
        values['radial_ticks'] = tuple(values['radial_ticks'])
        values['year_ticks'] = tuple(values['year_ticks'])

        config = cls(**values)
        config.validate()
        return config

    def validate(self):
        """Raise ConfigError on unusable values."""
        bad_colors = [k for k in COLOR_KEYS if not is_color_like(getattr(self, k))]
        if bad_colors:
            raise ConfigError(f"Invalid colours for {bad_colors}")

        for key in BOUND_KEYS:
            bound = getattr(self, key)
            if len(bound) != 2 or not bound[0] < bound[1]:
                raise ConfigError(f"{key} must be an increasing (low, high) pair, got {bound}")

        r_low, r_high = self.radius_domain
        b_low, b_high = self.body_radius
        if b_low < r_low or b_high > r_high:
            raise ConfigError(f"body_radius {self.body_radius} lies outside radius_domain {self.radius_domain}")

        if len(self.year_ticks) != 3 or self.year_ticks[2] <= 0:
            raise ConfigError(f"year_ticks must be (first, last, step), got {self.year_ticks}")
        if self.sheen_steps < 1 or self.sheen_span <= 0:
            raise ConfigError("sheen_steps and sheen_span must be positive")
        bad_alphas = [k for k in ALPHA_KEYS if not 0 <= getattr(self, k) <= 1]
        if bad_alphas:
            raise ConfigError(f"Opacities must be in [0, 1]: {bad_alphas}")
        if self.groove_interval <= 0:
            raise ConfigError(f"groove_interval must be positive, got {self.groove_interval}")

    @property
    def year_tick_values(self):
        first, last, step = self.year_ticks
        return list(range(int(first), int(last) + 1, int(step)))

    @property
    def groove_radii(self):
        """Radii of the thin groove lines strictly inside the body band."""
        low, high = self.body_radius
        radii = []
        r = low + self.groove_interval
        while r < high:
            radii.append(r)
            r += self.groove_interval
        return radii
