"""
Central Configuration Module for Vinyl Chart.

=== PURPOSE ===
This module is the single source of truth for every tunable constant used to
draw the vinyl record chart: glyph sizing, highlight selection, coordinate
domains, palette, tick positions, figure geometry, and input column names.
Every other module imports from here rather than defining its own magic
numbers.

=== DATA FLOW ===
  1. COL_* and COLUMN_ALIASES are used by the data loader to map raw CSV
     headers onto the canonical rank / title / artist / releaseYear columns.
  2. GLYPH_BASE, GLYPH_SLOPE and GLYPH_SCALE drive the geometry transform:
     glyph_size = (GLYPH_BASE + GLYPH_SLOPE * ln(rank)) / GLYPH_SCALE.
  3. DESIGN is the mapping handed to DesignConfig.from_mapping(); the layer
     composer refuses to run if any of its keys is missing.
  4. FIGURE_SIZE / FIGURE_DPI / OUTPUT_FILE feed the renderer.

Contains all constants, palette entries, bounds and column mappings.
"""

import os
import logging

logger = logging.getLogger(__name__)

# ==========================================
# PATHS
# ==========================================
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Rendered output; run.py --output overrides it.  The input table is always
# given explicitly (--file or --url).
OUTPUT_DIR = os.path.join(PROJECT_ROOT, "output")
OUTPUT_FILE = os.path.join(OUTPUT_DIR, "vinyl_chart.png")

# Seconds to wait for a remote CSV before giving up (no retries).
HTTP_TIMEOUT = 30

# ==========================================
# COLUMN MAPPING
# ==========================================
COL_RANK = "rank"
COL_TITLE = "title"
COL_ARTIST = "artist"
COL_YEAR = "releaseYear"

# Derived columns added by the geometry transform
COL_ORDINAL = "ordinalInYear"
COL_GLYPH = "glyphSize"

REQUIRED_COLUMNS = [COL_RANK, COL_TITLE, COL_ARTIST, COL_YEAR]

# Raw header spellings seen in published chart exports (lower-cased keys).
COLUMN_ALIASES = {
    "rank": COL_RANK,
    "position": COL_RANK,
    "pos": COL_RANK,
    "positie": COL_RANK,
    "title": COL_TITLE,
    "titel": COL_TITLE,
    "song": COL_TITLE,
    "artist": COL_ARTIST,
    "artiest": COL_ARTIST,
    "releaseyear": COL_YEAR,
    "release_year": COL_YEAR,
    "year": COL_YEAR,
    "jaar": COL_YEAR,
}

# ==========================================
# GLYPH SIZING
# ==========================================
#   glyph_size = (GLYPH_BASE + GLYPH_SLOPE * ln(rank)) / GLYPH_SCALE
#
# With these constants rank 1 -> 40 / scale and rank ~2000 -> ~0.  Ranks
# beyond exp(GLYPH_BASE / |GLYPH_SLOPE|) (about 2006) would go negative.
GLYPH_BASE = 40.0
GLYPH_SLOPE = -5.26
GLYPH_SCALE = 1.8

# Expected glyph range before the scale divisor; used by calibration_report().
GLYPH_TARGET_RANGE = (2.0, 40.0)

# Songs with rank <= HIGHLIGHT_TOP_N get a ring and a label.
HIGHLIGHT_TOP_N = 10

# ==========================================
# COORDINATE DOMAINS
# ==========================================
# releaseYear -> angle, ordinalInYear -> radius
ANGLE_DOMAIN = (1955, 2020)
RADIUS_DOMAIN = (-40, 80)

# ==========================================
# PALETTE
# ==========================================
COLORS = {
    'label': '#D62828',       # Record label red (band A)
    'body': '#1E1E1E',        # Vinyl body dark gray (band B)
    'sheen': '#FFFFFF',       # Light falloff strips
    'groove': '#3A3A3A',      # Groove guide lines
    'edge': '#0A0A0A',        # Bold band boundaries
    'text': '#F2F2F2',        # Axis labels and title
    'hole': '#FFFFFF',        # Center hole
    'song': '#F4E9CD',        # All-songs dots and density glow
    'accent': '#FCBF49',      # Top 10 rings and labels
    'background': '#FFFFFF',  # Figure background outside the record
}

# ==========================================
# DESIGN CONSTANTS
# ==========================================
# Everything the layer composer needs.  Kept as a plain mapping so that a
# caller can copy it, change a value, and pass it through DesignConfig.
DESIGN = {
    # Palette
    'label_color': COLORS['label'],
    'body_color': COLORS['body'],
    'sheen_color': COLORS['sheen'],
    'groove_color': COLORS['groove'],
    'edge_color': COLORS['edge'],
    'text_color': COLORS['text'],
    'hole_color': COLORS['hole'],
    'song_color': COLORS['song'],
    'accent_color': COLORS['accent'],

    # Bounds
    'angle_domain': ANGLE_DOMAIN,
    'radius_domain': RADIUS_DOMAIN,
    'body_radius': (-2, 78),

    # Sheen: strips per edge, width in years, peak opacity
    'sheen_steps': 12,
    'sheen_span': 3.0,
    'sheen_max_alpha': 0.12,

    # Grooves
    'groove_interval': 4,
    'groove_width': 0.3,
    'edge_width': 2.0,

    # Radial axis
    'radial_ticks': (0, 20, 40, 60),
    'radial_label': "Songs per\nrelease year",
    'tick_fontsize': 5.5,
    'tick_alpha': 0.8,

    # Center hole
    'hole_size': 2.5,

    # Title
    'title': "TOP 2000",
    'subtitle': "The most popular songs of all time\nby year of release",
    'title_position': (ANGLE_DOMAIN[0], -22),
    'subtitle_position': ((ANGLE_DOMAIN[0] + ANGLE_DOMAIN[1]) / 2, -26),
    'title_fontsize': 22,
    'subtitle_fontsize': 8,

    # Year axis
    'year_ticks': (1960, 2015, 5),
    'year_label_radius': -6,
    'year_fontsize': 6,
    'spoke_alpha': 0.15,
    'spoke_width': 0.3,

    # Data layers
    'song_size': 0.4,
    'song_alpha': 0.5,
    'density_alpha': 0.02,
    'ring_stroke': 0.8,
    'label_fontsize': 6.5,
    'label_min_gap': 6.0,
    'label_angular_window': 4.0,
    'leader_alpha': 0.6,
    'leader_width': 0.4,
}

# ==========================================
# FIGURE
# ==========================================
FIGURE_SIZE = (10, 10)  # inches, square
FIGURE_DPI = 300
