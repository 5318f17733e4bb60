"""
Pipeline Orchestrator - main execution flow for Vinyl Chart.

Wires the four stages together into one sequential, single-pass run:

::

    [CSV file / URL]
         |
         v
    load_data()  --> self.songs    (rank, title, artist, releaseYear)
         |
         v
    derive()     --> self.derived  (+ ordinalInYear, glyphSize)
                     self.highlights (top 10)
         |
         v
    compose()    --> self.primitives (ordered drawing program)
         |
         v
    render()     --> output file

Every stage raises on failure (DataError, ConfigError, RenderError); the
pipeline does not retry or continue with partial results.
"""

import logging
from pathlib import Path
from typing import Union, Mapping, Any

from ..core.config import (
    OUTPUT_FILE, GLYPH_SCALE, HIGHLIGHT_TOP_N, FIGURE_DPI, FIGURE_SIZE,
    COLORS,
)
from ..data.loader import load_songs
from ..geometry.transform import derive_records, highlight_set, year_summary, calibration_report
from ..visualization.design import DesignConfig
from ..visualization.layers import compose_layers, layer_spans
from ..visualization.polar import PolarTransform
from ..visualization.renderer import MatplotlibRenderer

logger = logging.getLogger(__name__)


def print_banner(text, char="=", width=60):
    """Print a formatted banner to console."""
    print()
    print(char * width)
    print(f"  {text}")
    print(char * width)


class VinylChartPipeline:
    """
    Runs the vinyl chart from input table to rendered file.

    Args:
        source: Local CSV path or http(s) URL of the ranked song table.
        output_path: Where to write the chart; the suffix picks the format.
        scale: Glyph scale divisor.
        design: Design constants (mapping or DesignConfig); defaults to
            ``core.config.DESIGN``.
        dpi: Export resolution for raster output.
    """

    def __init__(self, source: Union[str, Path],
                 output_path: Union[str, Path] = OUTPUT_FILE,
                 scale: float = GLYPH_SCALE,
                 design: Union[DesignConfig, Mapping[str, Any], None] = None,
                 dpi: int = FIGURE_DPI):
        self.source = source
        self.output_path = Path(output_path)
        self.scale = scale
        # Design problems surface here, before any I/O.
        self.design = design if isinstance(design, DesignConfig) else DesignConfig.from_mapping(design)
        self.dpi = dpi

        self.songs = None
        self.derived = None
        self.highlights = None
        self.primitives = None

    def load_data(self):
        logger.info(f"[Pipeline] Phase 1: loading {self.source}")
        self.songs = load_songs(self.source)
        return self.songs

    def derive(self):
        logger.info("[Pipeline] Phase 2: deriving geometry")
        self.derived = derive_records(self.songs, scale=self.scale)
        self.highlights = highlight_set(self.derived, top_n=HIGHLIGHT_TOP_N)
        year_summary(self.derived)
        calibration_report(self.derived, scale=self.scale)
        return self.derived

    def compose(self):
        logger.info("[Pipeline] Phase 3: composing layers")
        self.primitives = compose_layers(self.derived, self.highlights, self.design)
        for layer, (first, last) in layer_spans(self.primitives).items():
            logger.debug(f"[Pipeline]   {layer:<17} {first:>5}..{last:<5}")
        return self.primitives

    def render(self) -> Path:
        logger.info(f"[Pipeline] Phase 4: rendering {self.output_path}")
        renderer = MatplotlibRenderer(
            PolarTransform(self.design.angle_domain, self.design.radius_domain),
            figsize=FIGURE_SIZE,
            dpi=self.dpi,
            background=COLORS['background'],
        )
        return renderer.export(self.primitives, self.output_path)

    def run(self) -> Path:
        """Run all four phases and return the written file path."""
        self.load_data()
        self.derive()
        self.compose()
        return self.render()

    def get_results(self):
        return {
            'songs': self.songs,
            'derived': self.derived,
            'highlights': self.highlights,
            'primitives': self.primitives,
            'output_path': self.output_path,
        }


def main_pipeline(source: Union[str, Path],
                  output: Union[str, Path] = OUTPUT_FILE,
                  scale: float = GLYPH_SCALE,
                  dpi: int = FIGURE_DPI) -> Path:
    """Run the pipeline once and return the output path.

    Errors propagate to the caller; ``run.py`` turns them into an exit code.
    """
    print_banner("VINYL CHART")
    pipeline = VinylChartPipeline(source, output, scale=scale, dpi=dpi)
    path = pipeline.run()
    print_banner(f"Saved to: {path}", "-")
    return path
