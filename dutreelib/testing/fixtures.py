"""Test fixtures for dutreelib consumers.

These helpers build small directory trees with exact file sizes so that
tests can predict every total the builder reports.
"""

import os
import shutil
import tempfile
from pathlib import Path
from typing import Dict, Optional, Union

from ..core.entry import Entry

Layout = Dict[str, Union[int, dict, None]]


class SizedTree:
    """Temporary directory populated from a nested layout.

    Layout values are file sizes (int), nested layouts (dict) for
    sub-directories, or None for an empty directory.

    Example:
        with SizedTree({'big.bin': 2048, 'sub': {'a.txt': 10}}) as tree:
            root = TreeBuilder().build(tree.root)
            assert root.bytes == tree.expected_total()
    """

    def __init__(self, layout: Layout, root: Optional[Path] = None):
        self.layout = layout
        self._owned = root is None
        self.root = Path(root) if root is not None else Path(tempfile.mkdtemp())
        self._populate(self.root, layout)

    def __enter__(self) -> 'SizedTree':
        return self

    def __exit__(self, *exc) -> None:
        self.cleanup()

    def cleanup(self) -> None:
        if self._owned:
            shutil.rmtree(self.root, ignore_errors=True)

    def path(self, *parts: str) -> Path:
        return self.root.joinpath(*parts)

    def _populate(self, base: Path, layout: Optional[Layout]) -> None:
        for name, spec in (layout or {}).items():
            target = base / name
            if isinstance(spec, int):
                target.write_bytes(b"x" * spec)
            else:
                target.mkdir()
                self._populate(target, spec)

    def self_size(self, *parts: str) -> int:
        """Logical size the filesystem reports for one node itself."""
        return os.lstat(self.path(*parts)).st_size

    def expected_total(self, *parts: str) -> int:
        """Sum of lstat sizes of a node and everything below it."""
        top = self.path(*parts)
        total = os.lstat(top).st_size
        if top.is_dir() and not top.is_symlink():
            for dirpath, dirnames, filenames in os.walk(top):
                for name in dirnames + filenames:
                    total += os.lstat(os.path.join(dirpath, name)).st_size
        return total


def find_child(entry: Entry, name: str) -> Optional[Entry]:
    """Return the direct child of ``entry`` called ``name``."""
    for child in entry.children or ():
        if child.name == name:
            return child
    return None
