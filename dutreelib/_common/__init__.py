"""Common components shared across dutreelib.

This internal package contains non-I/O code: configuration classes and
parsers for the values the command line hands over. It should NOT be
imported directly by users.

Important: This package must NEVER import from core, adapters or render
to avoid circular dependencies.
"""

from .config import (
    DepthConfig,
    FilterConfig,
    DisplayConfig,
    DuTreeConfig,
    parse_ls_colors,
    load_color_table,
    parse_threshold,
)

__all__ = [
    'DepthConfig',
    'FilterConfig',
    'DisplayConfig',
    'DuTreeConfig',
    'parse_ls_colors',
    'load_color_table',
    'parse_threshold',
]
