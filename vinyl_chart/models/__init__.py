"""
Models module for Vinyl Chart.

Contains the song records and the drawing primitives.
"""

from .data_models import (
    SongRecord,
    DerivedRecord,
    Style,
    Rectangle,
    Segment,
    Point,
    Text,
    LayerPrimitive,
    songs_frame,
    primitive_to_dict,
)

__all__ = [
    'SongRecord',
    'DerivedRecord',
    'Style',
    'Rectangle',
    'Segment',
    'Point',
    'Text',
    'LayerPrimitive',
    'songs_frame',
    'primitive_to_dict',
]
