"""
Renderer / Exporter - draws a primitive sequence with matplotlib.

The renderer knows nothing about songs.  It receives the ordered primitive
list from the layer composer plus the PolarTransform, and paints each
primitive on a single polar axes:

    Rectangle -> polar bar (an annular wedge)
    Segment   -> densely sampled polyline (arcs and spokes)
    Point     -> scatter marker, size given as a diameter in mm
    Text      -> ax.text

Draw order is preserved by giving every primitive a zorder equal to its
position in the sequence.  Consecutive points of the same layer are batched
into one scatter call; a scatter call draws its markers in order, so
batching does not change the stacking.

Output is written once.  A failed write raises RenderError; there are no
retries.
"""

import logging
from itertools import groupby
from pathlib import Path
from typing import List, Optional, Tuple, Union

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from ..core.config import FIGURE_SIZE, FIGURE_DPI, COLORS
from ..core.exceptions import RenderError
from ..models.data_models import Rectangle, Segment, Point, Text, LayerPrimitive
from .polar import PolarTransform

logger = logging.getLogger(__name__)

# Millimetres to points; glyph sizes are diameters in mm.
MM_TO_PT = 72.27 / 25.4


def _run_key(item):
    """Group consecutive primitives of one kind and layer."""
    primitive = item[1]
    return getattr(primitive, "kind", None), getattr(primitive, "layer", None), getattr(primitive, "filled", None)


def marker_area(size) -> np.ndarray:
    """Scatter ``s`` (points squared) for a diameter in mm.  Negative sizes draw nothing."""
    diameter = np.clip(np.asarray(size, dtype=float), 0, None) * MM_TO_PT
    return diameter ** 2


class MatplotlibRenderer:
    """
    Paints LayerPrimitive sequences onto a square polar figure.

    Args:
        transform: Shared polar mapping for all primitives.
        figsize: Figure size in inches.
        dpi: Resolution used when exporting raster formats.
        background: Figure colour outside the record.
    """

    def __init__(self, transform: Optional[PolarTransform] = None,
                 figsize: Tuple[float, float] = FIGURE_SIZE,
                 dpi: int = FIGURE_DPI,
                 background: str = COLORS['background']):
        self.transform = transform or PolarTransform()
        self.figsize = figsize
        self.dpi = dpi
        self.background = background

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def _setup_axes(self, fig):
        ax = fig.add_subplot(111, projection="polar")
        ax.set_theta_offset(self.transform.theta_offset)
        ax.set_theta_direction(self.transform.theta_direction)
        ax.set_ylim(0, self.transform.radius_span)
        ax.set_axis_off()
        ax.set_facecolor(self.background)
        return ax

    def _draw_rectangle(self, ax, rect: Rectangle, zorder: int):
        t0, t1 = self.transform.theta([rect.xmin, rect.xmax])
        r0, r1 = self.transform.radius([rect.ymin, rect.ymax])
        ax.bar((t0 + t1) / 2, r1 - r0, width=t1 - t0, bottom=r0, align='center',
               color=rect.style.fill or rect.style.color, alpha=rect.style.alpha,
               linewidth=0, edgecolor='none', zorder=zorder)

    def _draw_segment(self, ax, seg: Segment, zorder: int):
        theta, r = self.transform.sample_line(seg.x0, seg.y0, seg.x1, seg.y1)
        ax.plot(theta, r, color=seg.style.color, alpha=seg.style.alpha,
                linewidth=seg.style.linewidth, solid_capstyle='butt', zorder=zorder)

    def _draw_points(self, ax, points: List[Point], zorder: int):
        theta, r = self.transform.to_polar([p.x for p in points], [p.y for p in points])
        sizes = marker_area([p.style.size for p in points])
        alphas = [p.style.alpha for p in points]
        first = points[0]
        if first.filled:
            ax.scatter(theta, r, s=sizes, c=[p.style.fill or p.style.color for p in points],
                       alpha=alphas if len(set(alphas)) > 1 else alphas[0],
                       linewidths=0, zorder=zorder)
        else:
            ax.scatter(theta, r, s=sizes, facecolors='none',
                       edgecolors=[p.style.color for p in points],
                       linewidths=first.style.linewidth,
                       alpha=alphas if len(set(alphas)) > 1 else alphas[0],
                       zorder=zorder)

    def _draw_text(self, ax, text: Text, zorder: int):
        theta, r = self.transform.to_polar(text.x, text.y)
        ax.text(theta, r, text.text, color=text.style.color, alpha=text.style.alpha,
                fontsize=text.style.fontsize, fontweight=text.style.fontweight,
                family=text.style.family, ha=text.ha, va=text.va,
                rotation=text.rotation, zorder=zorder)

    def render(self, primitives: List[LayerPrimitive]):
        """Draw the sequence and return the matplotlib Figure."""
        fig = plt.figure(figsize=self.figsize, facecolor=self.background)
        ax = self._setup_axes(fig)

        indexed = list(enumerate(primitives, start=1))
        for (kind, layer, _), run in groupby(indexed, key=_run_key):
            run = list(run)
            if kind == 'point':
                self._draw_points(ax, [p for _, p in run], zorder=run[0][0])
                continue
            for zorder, primitive in run:
                if isinstance(primitive, Rectangle):
                    self._draw_rectangle(ax, primitive, zorder)
                elif isinstance(primitive, Segment):
                    self._draw_segment(ax, primitive, zorder)
                elif isinstance(primitive, Text):
                    self._draw_text(ax, primitive, zorder)
                else:
                    raise RenderError(f"Unknown primitive {primitive!r}")

        logger.debug(f"[Renderer] Drew {len(primitives)} primitives")
        return fig

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export(self, primitives: List[LayerPrimitive], path: Union[str, Path]) -> Path:
        """Render and write the chart to ``path``; format follows the suffix.

        Raises:
            RenderError: If the file cannot be written.
        """
        path = Path(path)
        fig = self.render(primitives)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(path, dpi=self.dpi, facecolor=self.background)
        except (OSError, ValueError) as e:
            raise RenderError(f"Could not write chart to {path}: {e}") from e
        finally:
            plt.close(fig)
        logger.info(f"[Renderer] Saved {path}")
        return path
