"""Tree construction for dutreelib.

The TreeBuilder walks a directory depth-first and produces a sorted,
size-annotated Entry tree. Two concerns are kept apart:

- *expansion*: how many levels get materialized as Entry children,
  controlled by the depth limit and the filters
- *accounting*: how many bytes a node represents, which always covers the
  full subtree, expanded or not

Both walks keep their own stack instead of recursing, so directory depth
is bounded by memory, not by the interpreter's recursion limit.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from .._common.config import DuTreeConfig
from ..error_policies import ErrorPolicy
from .entry import Entry, sort_siblings
from .probe import PathLike, SizeProbe


@dataclass
class _PendingEntry:
    """A node whose children are still being built."""

    path: PathLike
    name: str
    st: Optional[os.stat_result]
    is_dir: bool
    remaining: int
    explore: bool
    listing: Optional[List[Path]] = None  # Children not yet visited, reversed
    built: List[Entry] = field(default_factory=list)


class TreeBuilder:
    """Builds Entry trees from filesystem paths.

    Example:
        >>> builder = TreeBuilder(DuTreeConfig.summary())
        >>> root = builder.build('.')
        >>> for child in root.children:
        ...     print(child.name, child.bytes)
    """

    def __init__(self,
                 config: Optional[DuTreeConfig] = None,
                 probe: Optional[SizeProbe] = None,
                 error_policy: Optional[ErrorPolicy] = None):
        """Initialize builder.

        Args:
            config: Scan configuration (default: unlimited depth, no filters)
            probe: Filesystem probe (default: FileSystemProbe)
            error_policy: Error policy for the default probe
        """
        if probe is None:
            from ..adapters.filesystem import FileSystemProbe
            probe = FileSystemProbe(error_policy)

        self.config = config if config is not None else DuTreeConfig()
        self.probe = probe

    def build(self, path: PathLike, budget: Optional[int] = None) -> Entry:
        """Build the Entry for ``path`` and, if expanded, its subtree.

        Args:
            path: File or directory to measure
            budget: Inclusive depth budget (default: from the depth config)

        Returns:
            Entry with cumulative size, color and sorted children
        """
        if budget is None:
            budget = self.config.depth.budget()

        stack = [self._open(path, budget)]
        while True:
            top = stack[-1]
            if top.listing:
                stack.append(self._open(top.listing.pop(), top.remaining))
                continue

            stack.pop()
            entry = self._close(top)
            if not stack:
                return entry
            stack[-1].built.append(entry)

    def build_collection(self, paths: Iterable[PathLike]) -> Entry:
        """Build the result tree for one or more input paths.

        A single path yields that path's Entry directly. Several paths are
        gathered under a synthetic collection root, each built with the full
        depth budget.
        """
        paths = list(paths)
        if len(paths) == 1:
            return self.build(paths[0])
        return Entry.collection([self.build(path) for path in paths])

    def total_bytes(self, path: PathLike,
                    st: Optional[os.stat_result] = None) -> int:
        """Full recursive size of ``path`` without materializing children.

        Nothing is filtered: excluded and hidden entries below a directory
        still count towards its size. Links are not followed.

        Args:
            path: File or directory to measure
            st: Its ``lstat`` result, if already known
        """
        if st is None:
            st = self.probe.stat(path)
        total = self.probe.size_from_stat(st, self.config.physical)
        if st is None or not self.probe.is_dir(path, st):
            return total

        pending = list(self.probe.list_dir(path) or ())
        while pending:
            child = pending.pop()
            child_st = self.probe.stat(child)
            total += self.probe.size_from_stat(child_st, self.config.physical)
            if child_st is not None and self.probe.is_dir(child, child_st):
                pending.extend(self.probe.list_dir(child) or ())
        return total

    def _open(self, path: PathLike, budget: int) -> _PendingEntry:
        """Measure a node and, if it gets expanded, list its children."""
        depth = self.config.depth
        st = self.probe.stat(path)
        is_dir = st is not None and self.probe.is_dir(path, st)
        remaining = depth.remaining(budget)

        pending = _PendingEntry(
            path=path,
            name=self.probe.display_name(path),
            st=st,
            is_dir=is_dir,
            remaining=remaining,
            explore=is_dir and depth.should_explore(remaining),
        )
        if pending.explore:
            listing = self._iter_children(path)
            if listing is not None:
                listing.reverse()
                pending.listing = listing
        return pending

    def _close(self, pending: _PendingEntry) -> Entry:
        """Turn a node whose children are all built into its Entry."""
        children = None
        if pending.listing is not None:
            children = self._fold_children(pending.built)

        if children is not None:
            self_size = self.probe.size_from_stat(pending.st, self.config.physical)
            total = self_size + sum(child.bytes for child in children)
        elif pending.is_dir and not pending.explore:
            total = self.total_bytes(pending.path, pending.st)
        else:
            total = self.probe.size_from_stat(pending.st, self.config.physical)

        color = None
        if not self.config.display.ascii_only:
            color = self.probe.classify(pending.path, pending.st, self.config.colors)

        return Entry(pending.name, bytes=total, color=color, children=children)

    def _fold_children(self, built: List[Entry]) -> List[Entry]:
        """Aggregate small children and put the rest in display order."""
        threshold = self.config.aggregate_below
        visible = []
        aggregated = 0

        for child in built:
            if threshold > 0 and child.bytes < threshold:
                aggregated += child.bytes
            else:
                visible.append(child)

        return sort_siblings(visible, aggregated)

    def _iter_children(self, path: PathLike) -> Optional[List[Path]]:
        """List a directory and apply the configured filters.

        Returns:
            Child paths that survive filtering, or None on error
        """
        listing = self.probe.list_dir(path)
        filters = self.config.filter
        if listing is None or filters.keeps_everything:
            return listing

        kept = []
        for child in listing:
            name = self.probe.display_name(child)
            is_dir = filters.files_only and self.probe.is_dir(child)
            if filters.should_include(name, is_dir):
                kept.append(child)
        return kept
