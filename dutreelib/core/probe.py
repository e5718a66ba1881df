"""SizeProbe abstraction for dutreelib.

The SizeProbe is the only component that touches the filesystem. It knows
how to read metadata, list directories, name paths and classify them for
colorization. The TreeBuilder works purely through this interface, which
keeps traversal logic independent from the platform details.
"""

import os
import stat
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Mapping, Optional, Union

from ..error_policies import ErrorPolicy, resolve_policy


BLOCK_UNIT = 512

PathLike = Union[str, Path]


class SizeProbe(ABC):
    """Abstract probe for measuring and classifying filesystem nodes.

    Probes never follow symbolic links: a link is sized and classified by
    its own metadata. Failures are handed to the configured ErrorPolicy and
    turned into neutral defaults, so a single unreadable node never aborts
    a scan.
    """

    def __init__(self, error_policy: Optional[ErrorPolicy] = None):
        """Initialize probe with an error policy.

        Args:
            error_policy: Where per-node failures go (default: report on stderr)
        """
        self.error_policy = resolve_policy(error_policy)

    @abstractmethod
    def stat(self, path: PathLike) -> Optional[os.stat_result]:
        """Read the metadata of ``path`` without following links.

        Returns:
            stat result, or None after reporting a failure
        """
        pass

    @abstractmethod
    def list_dir(self, path: PathLike) -> Optional[List[Path]]:
        """List the children of a directory.

        Returns:
            Child paths, or None after reporting a failure
        """
        pass

    @abstractmethod
    def display_name(self, path: PathLike) -> str:
        """Return the name shown for ``path``."""
        pass

    @abstractmethod
    def classify(self, path: PathLike, st: Optional[os.stat_result],
                 colors: Mapping[str, str]) -> Optional[str]:
        """Resolve the color code for ``path`` from a color table."""
        pass

    def size_from_stat(self, st: Optional[os.stat_result], physical: bool) -> int:
        """Size of a node given its metadata.

        Args:
            st: Result of ``stat`` (None means unreadable, size 0)
            physical: Report allocated blocks instead of logical length

        Returns:
            Size in bytes
        """
        if st is None:
            return 0
        if physical:
            blocks = getattr(st, 'st_blocks', None)
            if blocks is not None:
                return blocks * BLOCK_UNIT
        return st.st_size

    def size_of(self, path: PathLike, physical: bool = False) -> int:
        """Return the occupied space of a single node (not its subtree)."""
        return self.size_from_stat(self.stat(path), physical)

    def is_dir(self, path: PathLike, st: Optional[os.stat_result] = None) -> bool:
        """Check if ``path`` is a real directory (links never are)."""
        if st is None:
            try:
                st = os.lstat(path)
            except OSError:
                return False
        return stat.S_ISDIR(st.st_mode)

    def report(self, error: Exception, method_name: str, path: PathLike):
        """Hand a failure to the error policy, naming the offending path."""
        return self.error_policy.handle(error, method_name, path,
                                        name=self.display_name(path))
