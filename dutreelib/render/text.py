"""Display-width aware text helpers.

Terminal columns are not characters: East Asian wide characters take two
cells and combining sequences take none. Names are therefore measured with
``rich.cells`` and cut only at grapheme cluster boundaries (``regex``'s
``\\X``), so an accented letter or an emoji sequence is never split.
"""

from typing import List, Optional

import regex
from rich.cells import cell_len

_GRAPHEME = regex.compile(r"\X")

ESC = "\x1b"


def display_width(text: str) -> int:
    """Number of terminal cells ``text`` occupies."""
    return cell_len(text)


def graphemes(text: str) -> List[str]:
    """Split ``text`` into user-perceived characters."""
    return _GRAPHEME.findall(text)


def truncate(text: str, width: int) -> str:
    """Cut ``text`` to at most ``width`` cells without splitting a cluster.

    Stops at the first cluster that would overflow.
    """
    used = 0
    kept = []
    for cluster in graphemes(text):
        w = cell_len(cluster)
        if used + w > width:
            break
        used += w
        kept.append(cluster)
    return "".join(kept)


def fit(text: str, width: int) -> str:
    """Truncate and right-pad ``text`` to exactly ``width`` cells.

    A wide character that does not fit in the last cell leaves one
    padding space instead.
    """
    cut = truncate(text, width)
    return cut + " " * (width - cell_len(cut))


def colorize(text: str, code: Optional[str]) -> str:
    """Wrap ``text`` in an ANSI SGR sequence, e.g. ``01;34``."""
    if not code:
        return text
    return f"{ESC}[{code}m{text}{ESC}[0m"
