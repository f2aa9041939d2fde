"""Layout engine: geometry, text metrics, line breaking, pagination."""

from .geometry import LayoutOptions, Size
from .layout_engine import FlowLayoutEngine, layout
from .unified_layout import Cursor, LayoutPage, ShowText, StrokeLine, StrokeRect

__all__ = [
    "Cursor",
    "FlowLayoutEngine",
    "LayoutOptions",
    "LayoutPage",
    "ShowText",
    "Size",
    "StrokeLine",
    "StrokeRect",
    "layout",
]
