"""Configuration re-export.

Public home of the configuration components defined in the
_common package.
"""

from ._common.config import (
    KIB,
    DepthConfig,
    FilterConfig,
    DisplayConfig,
    DuTreeConfig,
    parse_ls_colors,
    load_color_table,
    parse_threshold,
)

__all__ = [
    'KIB',
    'DepthConfig',
    'FilterConfig',
    'DisplayConfig',
    'DuTreeConfig',
    'parse_ls_colors',
    'load_color_table',
    'parse_threshold',
]
