"""dutreelib - disk usage trees for the terminal.

dutreelib measures the disk usage of file-system subtrees and renders them
as a sorted, depth-limited tree with proportional bars:

    from dutreelib import DuTreeConfig, du_tree
    du_tree(["."], DuTreeConfig.summary())

Lower-level pieces (TreeBuilder, TreeRenderer, FileSystemProbe) are
available for callers that want the Entry tree itself.
"""

__version__ = "0.2.17"

from .config import (
    DepthConfig,
    FilterConfig,
    DisplayConfig,
    DuTreeConfig,
    parse_ls_colors,
    load_color_table,
    parse_threshold,
)
from .error_policies import (
    ErrorPolicy,
    FailFastPolicy,
    CollectErrorsPolicy,
    ReportErrorsPolicy,
)
from .core.entry import Entry, AGGREGATE_NAME, COLLECTION_NAME
from .core.probe import SizeProbe
from .core.builder import TreeBuilder
from .adapters.filesystem import FileSystemProbe
from .render.formatting import format_size
from .render.renderer import TreeRenderer
from .api import build_tree, render_tree, du_tree

__all__ = [
    "__version__",
    # Config
    "DepthConfig",
    "FilterConfig",
    "DisplayConfig",
    "DuTreeConfig",
    "parse_ls_colors",
    "load_color_table",
    "parse_threshold",
    # Errors
    "ErrorPolicy",
    "FailFastPolicy",
    "CollectErrorsPolicy",
    "ReportErrorsPolicy",
    # Core
    "Entry",
    "AGGREGATE_NAME",
    "COLLECTION_NAME",
    "SizeProbe",
    "TreeBuilder",
    "FileSystemProbe",
    # Rendering
    "format_size",
    "TreeRenderer",
    # API
    "build_tree",
    "render_tree",
    "du_tree",
]
