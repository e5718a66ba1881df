"""Rendering of Entry trees to text."""

from .formatting import format_size
from .bar import format_bar
from .text import display_width, truncate, fit, colorize
from .renderer import TreeRenderer, Layout

__all__ = [
    "format_size",
    "format_bar",
    "display_width",
    "truncate",
    "fit",
    "colorize",
    "TreeRenderer",
    "Layout",
]
