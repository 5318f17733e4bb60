"""
Visualization module for the vinyl record chart.
"""

from .design import DesignConfig
from .polar import PolarTransform
from .label_layout import LabelAnchor, LabelLayout, NoLayout, GreedyRadialRepel
from .layers import compose_layers, layer_spans, LAYER_ORDER, DECORATION_LAYERS, DATA_LAYERS
from .renderer import MatplotlibRenderer

__all__ = [
    'DesignConfig',
    'PolarTransform',
    'LabelAnchor',
    'LabelLayout',
    'NoLayout',
    'GreedyRadialRepel',
    'compose_layers',
    'layer_spans',
    'LAYER_ORDER',
    'DECORATION_LAYERS',
    'DATA_LAYERS',
    'MatplotlibRenderer',
]
