"""Configuration system for dutreelib.

This module defines how callers describe a disk usage scan: how deep the
tree is expanded, which entries are filtered out, how small entries are
aggregated and how the result is displayed.
"""

import os
import re
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional


KIB = 1024

_THRESHOLD_RE = re.compile(r"^\d+\D?$")

_UNIT_FACTORS = {
    "b": 1,
    "k": KIB,
    "m": KIB ** 2,
    "g": KIB ** 3,
    "t": KIB ** 4,
}


@dataclass
class DepthConfig:
    """Configuration for display depth.

    Depth limiting only controls how far the tree is *expanded* for display.
    Sizes are always computed for the full subtree.
    """

    max_depth: Optional[int] = None  # None = depth limiting disabled

    @property
    def enabled(self) -> bool:
        return self.max_depth is not None

    def budget(self) -> int:
        """Return the inclusive depth budget handed to a root entry."""
        if self.max_depth is None:
            return 1
        return self.max_depth + 1

    def remaining(self, budget: int) -> int:
        """Budget left for the children of an entry built with ``budget``.

        When limiting is disabled the budget stays at 1 forever, which keeps
        the recursion guard satisfied without ever stopping expansion.
        """
        if not self.enabled:
            return 1
        return budget - 1

    def should_explore(self, remaining: int) -> bool:
        """Check if a directory with ``remaining`` budget gets expanded."""
        if not self.enabled:
            return True
        return remaining > 0


@dataclass
class FilterConfig:
    """Configuration for filtering directory entries during traversal.

    Filtered entries are not displayed and not counted in expanded
    directories. The accounting pass for directories cut off by the depth
    limit ignores filters and always reports the full subtree size.
    """

    exclude_names: List[str] = field(default_factory=list)  # Exact names
    include_hidden: bool = True  # Keep entries starting with "."
    files_only: bool = False     # Skip sub-directories

    @property
    def keeps_everything(self) -> bool:
        """True when no filter is active, so children need not be named."""
        return (not self.exclude_names and self.include_hidden
                and not self.files_only)

    def should_include(self, name: str, is_dir: bool) -> bool:
        """Check if an entry passes all filters.

        Filters are applied in order: exclude list, hidden, files-only.

        Args:
            name: Display name of the entry
            is_dir: Whether the entry is a directory (links are not)

        Returns:
            True if the entry should be kept
        """
        if name in self.exclude_names:
            return False
        if not self.include_hidden and name.startswith("."):
            return False
        if self.files_only and is_dir:
            return False
        return True


@dataclass
class DisplayConfig:
    """Configuration for rendering the result tree."""

    raw_bytes: bool = False       # Print sizes as plain byte counts
    ascii_only: bool = False      # No colors, no box-drawing glyphs
    width: Optional[int] = None   # Terminal width override


@dataclass
class DuTreeConfig:
    """Complete configuration for a disk usage scan.

    This is the primary way callers specify what they want from a scan.
    The color table is loaded once (usually from ``LS_COLORS``) and treated
    as immutable afterwards.
    """

    depth: DepthConfig = field(default_factory=DepthConfig)
    filter: FilterConfig = field(default_factory=FilterConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    aggregate_below: int = 0   # Fold entries smaller than this; 0 disables
    physical: bool = False     # Report allocated blocks instead of lengths

    colors: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def summary(cls, **kwargs) -> 'DuTreeConfig':
        """Create config for a one-level overview.

        Equivalent to a depth of 1 with everything below 1 MiB aggregated.

        Returns:
            DuTreeConfig for summary output
        """
        return cls(
            depth=DepthConfig(max_depth=1),
            aggregate_below=KIB ** 2,
            **kwargs
        )

    @classmethod
    def from_environment(cls, environ: Optional[Mapping[str, str]] = None,
                         **kwargs) -> 'DuTreeConfig':
        """Create config with the color table taken from ``LS_COLORS``."""
        return cls(colors=load_color_table(environ), **kwargs)

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.depth.max_depth is not None and self.depth.max_depth < 0:
            errors.append("max_depth cannot be negative")

        if self.aggregate_below < 0:
            errors.append("aggregate_below cannot be negative")

        if self.display.width is not None and self.display.width <= 0:
            errors.append("width must be positive")

        for name in self.filter.exclude_names:
            if not name:
                errors.append("exclude names cannot be empty")
                break

        return errors


def parse_ls_colors(text: str) -> Dict[str, str]:
    """Parse an ``LS_COLORS`` style string into a key -> SGR code table.

    Items are ``key=value`` pairs separated by ``:``. Parsing stops at the
    first empty item. Items without ``=`` are ignored.

    Example:
        >>> parse_ls_colors('di=01;34:*.mp3=00;36')
        {'di': '01;34', '*.mp3': '00;36'}
    """
    table: Dict[str, str] = {}
    for item in text.split(":"):
        if not item:
            break
        item = item.replace('"', "")
        key, sep, value = item.partition("=")
        if not sep:
            continue
        table[key] = value.split("=")[0]
    return table


def load_color_table(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Read the color table from the ``LS_COLORS`` environment variable."""
    if environ is None:
        environ = os.environ
    return parse_ls_colors(environ.get("LS_COLORS", ""))


def parse_threshold(text: str) -> int:
    """Parse an aggregation threshold such as ``512``, ``10K`` or ``1M``.

    Units are 1024-based and case-insensitive: B, K, M, G, T. A missing
    or unknown unit letter means bytes.

    Raises:
        ValueError: If the text is not a number with an optional unit
    """
    if not _THRESHOLD_RE.match(text):
        raise ValueError(f"invalid argument '{text}'")

    digits = "".join(ch for ch in text if ch.isdigit())
    unit = text[-1].lower() if text[-1].isalpha() else "b"
    return int(digits) * _UNIT_FACTORS.get(unit, 1)
