"""Filesystem probe for dutreelib.

Reads sizes, names and LS_COLORS classes from the local filesystem using
``os.lstat`` and ``os.scandir``.
"""

import os
import stat
from pathlib import Path
from typing import List, Mapping, Optional

from ..core.probe import PathLike, SizeProbe


INVALID_NAME = "[invalid name]"
ROOT_NAME = "/"

# Permission bits used for colorization
OTHER_WRITABLE = 0o002
ANY_EXECUTE = 0o111


def is_symlink(path: PathLike) -> bool:
    """Check if ``path`` itself is a symbolic link."""
    try:
        return stat.S_ISLNK(os.lstat(path).st_mode)
    except OSError:
        return False


def display_name(path: PathLike) -> str:
    """Name shown for a path.

    The path is made absolute against the working directory and, unless it
    is itself a symbolic link, canonicalized (so ``.`` shows the real
    directory name). Links are never resolved to their targets.

    Example:
        >>> display_name('/usr/lib/../bin')
        'bin'
    """
    path = Path(path)
    absolute = Path.cwd() / path

    if not is_symlink(path):
        try:
            absolute = absolute.resolve()
        except (OSError, RuntimeError):
            pass

    name = absolute.name
    if not name:
        return ROOT_NAME  # '/' has no final component

    try:
        name.encode('utf-8')
    except UnicodeEncodeError:
        # Undecodable bytes come back as lone surrogates
        return INVALID_NAME
    return name


class FileSystemProbe(SizeProbe):
    """Probe for the local filesystem."""

    def stat(self, path: PathLike) -> Optional[os.stat_result]:
        try:
            return os.lstat(path)
        except OSError as e:
            return self.report(e, 'stat', path)

    def list_dir(self, path: PathLike) -> Optional[List[Path]]:
        """List directory children; links to directories are not read."""
        if is_symlink(path):
            return None

        base = Path(path)
        try:
            with os.scandir(path) as entries:
                return [base / entry.name for entry in entries]
        except OSError as e:
            return self.report(e, 'list_dir', path)

    def display_name(self, path: PathLike) -> str:
        return display_name(path)

    def classify(self, path: PathLike, st: Optional[os.stat_result],
                 colors: Mapping[str, str]) -> Optional[str]:
        """Resolve the LS_COLORS code for a node.

        Order of checks: link (``ln`` or ``or``), directory (``ow`` then
        ``di``), executable file (``ex``), extension (``*.ext``), regular
        file (``fi``), anything else (``bd``).

        Args:
            path: Path being classified
            st: Its ``lstat`` result (None when unreadable)
            colors: Color table, key -> SGR code

        Returns:
            SGR code, or None when no class matches
        """
        if st is None or not colors:
            return None

        mode = st.st_mode

        if stat.S_ISLNK(mode):
            key = 'ln' if os.path.exists(path) else 'or'
            return colors.get(key)

        if stat.S_ISDIR(mode):
            if mode & OTHER_WRITABLE and 'ow' in colors:
                return colors['ow']
            return colors.get('di')

        is_regular = stat.S_ISREG(mode)
        if is_regular and mode & ANY_EXECUTE and 'ex' in colors:
            return colors['ex']

        suffix = Path(path).suffix
        if suffix:
            code = colors.get('*' + suffix)
            if code is not None:
                return code

        if is_regular:
            return colors.get('fi')

        # Block/char devices, fifos and sockets all share one class
        return colors.get('bd')
