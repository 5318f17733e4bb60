"""
Layer Composer - builds the ordered drawing program for the vinyl chart.

The composer turns the derived song table into a flat, ordered list of
primitives (Rectangle, Segment, Point, Text).  List position is draw order:
later primitives cover earlier ones wherever they overlap.  The twelve
layers are always emitted in this sequence:

     1. label_band        red label, whole canvas
     2. body_band         dark vinyl body
     3. sheen             light falloff strips at both angular edges
     4. grooves           thin groove circles + two bold band edges
     5. radial_axis       ordinal tick labels + description
     6. center_hole       the spindle hole
     7. title             title and subtitle on the label
     8. year_axis         year spokes and labels
     9. all_songs         one small dot per song
    10. density           one translucent glyph per song (glow)
    11. highlight_labels  "{rank}. {artist}\\n{title}" for the top 10
    12. highlight_rings   accent rings around the top 10

Layers 1-8 are decoration and 9-12 carry data, so data is never hidden
behind decoration.  With an empty song table only layers 1-8 are emitted.
"""

import logging
from typing import List, Optional, Mapping, Dict, Tuple, Union, Any

import numpy as np
import pandas as pd

from ..core.config import COL_RANK, COL_TITLE, COL_ARTIST, COL_YEAR, COL_ORDINAL, COL_GLYPH
from ..core.utils import format_song_label
from ..geometry.transform import highlight_set
from ..models.data_models import Style, Rectangle, Segment, Point, Text, LayerPrimitive
from .design import DesignConfig
from .label_layout import LabelAnchor, LabelLayout, GreedyRadialRepel

logger = logging.getLogger(__name__)

DECORATION_LAYERS = (
    'label_band',
    'body_band',
    'sheen',
    'grooves',
    'radial_axis',
    'center_hole',
    'title',
    'year_axis',
)
DATA_LAYERS = (
    'all_songs',
    'density',
    'highlight_labels',
    'highlight_rings',
)
LAYER_ORDER = DECORATION_LAYERS + DATA_LAYERS


def resolve_design(design: Union[DesignConfig, Mapping[str, Any], None]) -> DesignConfig:
    if isinstance(design, DesignConfig):
        return design
    return DesignConfig.from_mapping(design)


# ============================================================================
# DECORATION LAYERS
# ============================================================================

def background_bands(design: DesignConfig) -> List[LayerPrimitive]:
    a0, a1 = design.angle_domain
    r0, r1 = design.radius_domain
    b0, b1 = design.body_radius
    return [
        Rectangle(a0, a1, r0, r1,
                  Style(color=design.label_color, fill=design.label_color),
                  layer='label_band'),
        Rectangle(a0, a1, b0, b1,
                  Style(color=design.body_color, fill=design.body_color),
                  layer='body_band'),
    ]


def sheen_strips(design: DesignConfig) -> List[LayerPrimitive]:
    """Adjacent strips whose opacity ramps linearly towards each angular edge."""
    a0, a1 = design.angle_domain
    b0, b1 = design.body_radius
    steps = design.sheen_steps
    width = design.sheen_span / steps
    ramp = np.linspace(1.0, 0.0, steps) if steps > 1 else np.array([1.0])

    strips = []
    for i, t in enumerate(ramp):
        x = a0 + i * width
        strips.append(Rectangle(x, x + width, b0, b1,
                                Style(color=design.sheen_color, fill=design.sheen_color,
                                      alpha=float(design.sheen_max_alpha * t)),
                                layer='sheen'))
    for i, t in enumerate(ramp[::-1]):
        x = a1 - design.sheen_span + i * width
        strips.append(Rectangle(x, x + width, b0, b1,
                                Style(color=design.sheen_color, fill=design.sheen_color,
                                      alpha=float(design.sheen_max_alpha * t)),
                                layer='sheen'))
    return strips


def groove_lines(design: DesignConfig) -> List[LayerPrimitive]:
    a0, a1 = design.angle_domain
    b0, b1 = design.body_radius
    thin = Style(color=design.groove_color, linewidth=design.groove_width)
    bold = Style(color=design.edge_color, linewidth=design.edge_width)
    lines = [Segment(a0, r, a1, r, thin, layer='grooves') for r in design.groove_radii]
    lines.append(Segment(a0, b0, a1, b0, bold, layer='grooves'))
    lines.append(Segment(a0, b1, a1, b1, bold, layer='grooves'))
    return lines


def radial_axis(design: DesignConfig) -> List[LayerPrimitive]:
    a0 = design.angle_domain[0]
    b0 = design.body_radius[0]
    tick_style = Style(color=design.text_color, fontsize=design.tick_fontsize, alpha=design.tick_alpha)
    texts = [Text(a0, tick, str(int(tick)) if float(tick).is_integer() else str(tick),
                  tick_style, ha='left', va='center', layer='radial_axis')
             for tick in design.radial_ticks]
    texts.append(Text(a0, b0, design.radial_label,
                      Style(color=design.text_color, fontsize=design.tick_fontsize, fontweight='bold'),
                      ha='left', va='top', layer='radial_axis'))
    return texts


def center_hole(design: DesignConfig) -> List[LayerPrimitive]:
    return [Point(design.angle_domain[0], design.radius_domain[0],
                  Style(color=design.hole_color, fill=design.hole_color, size=design.hole_size),
                  layer='center_hole')]


def title_block(design: DesignConfig) -> List[LayerPrimitive]:
    tx, ty = design.title_position
    sx, sy = design.subtitle_position
    return [
        Text(tx, ty, design.title,
             Style(color=design.text_color, fontsize=design.title_fontsize, fontweight='bold'),
             layer='title'),
        Text(sx, sy, design.subtitle,
             Style(color=design.text_color, fontsize=design.subtitle_fontsize),
             layer='title'),
    ]


def year_axis(design: DesignConfig) -> List[LayerPrimitive]:
    b0, b1 = design.body_radius
    spoke = Style(color=design.text_color, alpha=design.spoke_alpha, linewidth=design.spoke_width)
    label = Style(color=design.text_color, fontsize=design.year_fontsize)
    primitives: List[LayerPrimitive] = []
    for year in design.year_tick_values:
        primitives.append(Segment(year, b0, year, b1, spoke, layer='year_axis'))
        primitives.append(Text(year, design.year_label_radius, str(year), label, layer='year_axis'))
    return primitives


# ============================================================================
# DATA LAYERS
# ============================================================================

def song_points(derived: pd.DataFrame, design: DesignConfig) -> List[LayerPrimitive]:
    style = Style(color=design.song_color, fill=design.song_color,
                  size=design.song_size, alpha=design.song_alpha)
    return [Point(float(x), float(y), style, layer='all_songs')
            for x, y in zip(derived[COL_YEAR], derived[COL_ORDINAL])]


def density_glow(derived: pd.DataFrame, design: DesignConfig) -> List[LayerPrimitive]:
    return [Point(float(x), float(y),
                  Style(color=design.song_color, fill=design.song_color,
                        size=float(size), alpha=design.density_alpha),
                  layer='density')
            for x, y, size in zip(derived[COL_YEAR], derived[COL_ORDINAL], derived[COL_GLYPH])]


def label_anchors(highlights: pd.DataFrame) -> List[LabelAnchor]:
    anchors = []
    for _, row in highlights.iterrows():
        y = float(row[COL_ORDINAL] + row[COL_GLYPH])
        anchors.append(LabelAnchor(
            key=int(row[COL_RANK]),
            x=float(row[COL_YEAR]),
            y=y,
            anchor_y=y,
            text=format_song_label(row[COL_RANK], row.get(COL_ARTIST, ""), row.get(COL_TITLE, "")),
        ))
    return anchors


def highlight_labels(highlights: pd.DataFrame, design: DesignConfig,
                     layout: LabelLayout) -> List[LayerPrimitive]:
    """Text per highlighted song, with a leader line when the layout moved it."""
    placed = layout.place(label_anchors(highlights))
    text_style = Style(color=design.accent_color, fontsize=design.label_fontsize, fontweight='bold')
    leader_style = Style(color=design.accent_color, alpha=design.leader_alpha, linewidth=design.leader_width)
    primitives: List[LayerPrimitive] = []
    for label in placed:
        if abs(label.displaced) > design.label_min_gap * 0.3:
            primitives.append(Segment(label.x, label.anchor_y, label.x, label.y,
                                      leader_style, layer='highlight_labels'))
        primitives.append(Text(label.x, label.y, label.text, text_style,
                               ha='center', va='bottom', layer='highlight_labels'))
    return primitives


def highlight_rings(highlights: pd.DataFrame, design: DesignConfig) -> List[LayerPrimitive]:
    return [Point(float(x), float(y),
                  Style(color=design.accent_color, size=float(size), linewidth=design.ring_stroke),
                  filled=False, layer='highlight_rings')
            for x, y, size in zip(highlights[COL_YEAR], highlights[COL_ORDINAL], highlights[COL_GLYPH])]


# ============================================================================
# COMPOSER
# ============================================================================

def default_layout(design: DesignConfig) -> LabelLayout:
    return GreedyRadialRepel(
        min_gap=design.label_min_gap,
        angular_window=design.label_angular_window,
        radius_min=design.body_radius[0],
        radius_max=design.body_radius[1],
        period=design.angle_domain[1] - design.angle_domain[0],
    )


def compose_layers(derived: pd.DataFrame,
                   highlights: Optional[pd.DataFrame] = None,
                   design: Union[DesignConfig, Mapping[str, Any], None] = None,
                   label_layout: Optional[LabelLayout] = None) -> List[LayerPrimitive]:
    """Produce the ordered primitive sequence for the whole chart.

    Args:
        derived: Output of ``derive_records``.
        highlights: Output of ``highlight_set``; computed from ``derived``
            when omitted.
        design: DesignConfig, a mapping of design constants, or None for the
            defaults in ``core.config.DESIGN``.
        label_layout: Placement strategy for highlight labels; defaults to
            GreedyRadialRepel configured from the design.

    Returns:
        List of primitives in draw order.

    Raises:
        ConfigError: If the design is incomplete or invalid.
    """
    design = resolve_design(design)
    if highlights is None:
        highlights = highlight_set(derived)
    if label_layout is None:
        label_layout = default_layout(design)

    primitives: List[LayerPrimitive] = []
    primitives += background_bands(design)
    primitives += sheen_strips(design)
    primitives += groove_lines(design)
    primitives += radial_axis(design)
    primitives += center_hole(design)
    primitives += title_block(design)
    primitives += year_axis(design)

    if not derived.empty:
        primitives += song_points(derived, design)
        primitives += density_glow(derived, design)
        primitives += highlight_labels(highlights, design, label_layout)
        primitives += highlight_rings(highlights, design)

    logger.info(f"[Composer] {len(primitives)} primitives "
                f"({len(derived)} songs, {len(highlights)} highlighted)")
    return primitives


def layer_spans(primitives: List[LayerPrimitive]) -> Dict[str, Tuple[int, int]]:
    """First and last index of every layer present in the sequence."""
    spans: Dict[str, Tuple[int, int]] = {}
    for i, p in enumerate(primitives):
        first, _ = spans.get(p.layer, (i, i))
        spans[p.layer] = (first, i)
    return spans
