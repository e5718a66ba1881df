"""High-level API for dutreelib.

This module provides simple, functional interfaces for the common case:
scan some paths and print the tree. These functions wrap the builder and
renderer classes for ease of use.
"""

from typing import Iterable, Optional, TextIO, Union

from .config import DuTreeConfig
from .core.builder import TreeBuilder
from .core.entry import Entry
from .core.probe import PathLike, SizeProbe
from .error_policies import ErrorPolicy
from .render.renderer import TreeRenderer


def build_tree(
    paths: Union[PathLike, Iterable[PathLike]],
    config: Optional[DuTreeConfig] = None,
    probe: Optional[SizeProbe] = None,
    error_policy: Optional[ErrorPolicy] = None,
) -> Entry:
    """Scan one or more paths into an Entry tree.

    Args:
        paths: A single path or an iterable of paths
        config: Scan configuration (default: DuTreeConfig())
        probe: Filesystem probe (default: FileSystemProbe)
        error_policy: Error policy for the default probe

    Returns:
        Root Entry; a collection entry when several paths are given

    Example:
        >>> root = build_tree('/var/log', DuTreeConfig.summary())
        >>> print(root.bytes)
    """
    if isinstance(paths, (str, bytes)) or hasattr(paths, '__fspath__'):
        paths = [paths]

    builder = TreeBuilder(config, probe=probe, error_policy=error_policy)
    return builder.build_collection(paths)


def render_tree(
    root: Entry,
    config: Optional[DuTreeConfig] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Print an Entry tree using the display settings of ``config``."""
    display = (config if config is not None else DuTreeConfig()).display
    renderer = TreeRenderer(
        raw_bytes=display.raw_bytes,
        ascii_only=display.ascii_only,
        width=display.width,
        stream=stream,
    )
    renderer.render(root)


def du_tree(
    paths: Union[PathLike, Iterable[PathLike]],
    config: Optional[DuTreeConfig] = None,
    stream: Optional[TextIO] = None,
    error_policy: Optional[ErrorPolicy] = None,
) -> Entry:
    """Scan ``paths`` and print the result.

    Args:
        paths: A single path or an iterable of paths
        config: Scan and display configuration
        stream: Output stream (default: sys.stdout)
        error_policy: Where per-node read failures go (default: stderr)

    Returns:
        The root Entry that was printed

    Raises:
        ValueError: If the configuration is invalid
    """
    config = config if config is not None else DuTreeConfig()
    errors = config.validate()
    if errors:
        raise ValueError("; ".join(errors))

    root = build_tree(paths, config, error_policy=error_policy)
    render_tree(root, config, stream)
    return root
