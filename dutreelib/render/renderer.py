"""Terminal rendering of Entry trees.

Output layout, one line per entry::

    [ project 2.01 MiB ]
    ├─ src            │       ░░░░▒▒▒▒▒████│  61%      1.23 MiB
    └─ <aggregated>   │                  ██│   9%    190.00 KiB

The line width follows the terminal: 15 columns for the size, a quarter
(at least 25) of the rest for guides and names, the remainder for the bar.
"""

import shutil
import sys
from dataclasses import dataclass
from typing import Iterator, List, Optional, TextIO

from ..core.entry import Entry
from .bar import format_bar
from .formatting import format_size
from .text import colorize, fit

DEFAULT_WIDTH = 80
SIZE_WIDTH = 15
MIN_NAME_WIDTH = 25
GUIDE_WIDTH = 3


@dataclass
class Glyphs:
    """Tree guide strings, all GUIDE_WIDTH cells wide."""

    pipe: str
    blank: str
    tee: str
    corner: str


UNICODE_GLYPHS = Glyphs(pipe="│  ", blank="   ", tee="├─ ", corner="└─ ")
ASCII_GLYPHS = Glyphs(pipe="|  ", blank="   ", tee="|- ", corner="`- ")


@dataclass
class Layout:
    """Column widths for one rendering."""

    total: int
    name_width: int
    bar_width: int

    @classmethod
    def for_width(cls, total: int) -> 'Layout':
        variable = max(total - SIZE_WIDTH, 0)
        name_width = max(MIN_NAME_WIDTH, variable * 25 // 100)
        return cls(total, name_width, max(variable - name_width, 0))


def terminal_width() -> int:
    """Columns of the attached terminal, 80 when there is none."""
    return shutil.get_terminal_size((DEFAULT_WIDTH, 24)).columns or DEFAULT_WIDTH


class TreeRenderer:
    """Writes an Entry tree as an annotated text tree.

    Example:
        >>> renderer = TreeRenderer(width=100)
        >>> renderer.render(TreeBuilder(config).build('.'))
    """

    def __init__(self,
                 raw_bytes: bool = False,
                 ascii_only: bool = False,
                 width: Optional[int] = None,
                 stream: Optional[TextIO] = None):
        """Initialize renderer.

        Args:
            raw_bytes: Print sizes as plain byte counts
            ascii_only: No colors, ASCII guides and bars
            width: Total line width (default: terminal width)
            stream: Output stream (default: sys.stdout at render time)
        """
        self.raw_bytes = raw_bytes
        self.ascii_only = ascii_only
        self.width = width
        self.stream = stream
        self.glyphs = ASCII_GLYPHS if ascii_only else UNICODE_GLYPHS

    def layout(self) -> Layout:
        return Layout.for_width(self.width if self.width else terminal_width())

    def render(self, root: Entry) -> None:
        """Write the whole tree to the output stream."""
        stream = self.stream or sys.stdout
        for line in self.render_lines(root):
            stream.write(line + "\n")
        stream.flush()

    def render_lines(self, root: Entry) -> Iterator[str]:
        """Yield output lines without trailing newlines."""
        layout = self.layout()

        if root.children:
            reference = max(child.bytes for child in root.children)
        else:
            reference = root.bytes

        yield f"[ {root.name} {format_size(root.bytes, self.raw_bytes)} ]"
        yield from self._render_children(root, [], [root.bytes], reference, layout)

    def _render_children(self, parent: Entry, open_parents: List[bool],
                         chain: List[int], reference: int,
                         layout: Layout) -> Iterator[str]:
        """Emit the subtree below ``parent`` in pre-order.

        Args:
            parent: Entry whose children are drawn
            open_parents: Last-sibling flag of every ancestor below the root
            chain: Byte totals from the root down to ``parent``
            reference: 100% mark for the first bar level
            layout: Column widths
        """
        for entry in parent.children or ():
            name_width = layout.name_width - GUIDE_WIDTH * (len(open_parents) + 1)
            if name_width < 0:
                # Too deep for the name column
                continue

            entry_chain = chain + [entry.bytes]
            yield self._format_line(entry, open_parents, entry_chain,
                                    reference, name_width, layout)

            if entry.children is not None:
                yield from self._render_children(
                    entry, open_parents + [entry.is_last_sibling],
                    entry_chain, reference, layout)

    def _format_line(self, entry: Entry, open_parents: List[bool],
                     chain: List[int], reference: int, name_width: int,
                     layout: Layout) -> str:
        glyphs = self.glyphs
        guides = "".join(glyphs.blank if last else glyphs.pipe
                         for last in open_parents)
        guides += glyphs.corner if entry.is_last_sibling else glyphs.tee

        name = fit(entry.name, name_width)
        if not self.ascii_only:
            name = colorize(name, entry.color)

        bar = format_bar(chain, reference, layout.bar_width, self.ascii_only)
        size = format_size(entry.bytes, self.raw_bytes)
        return f"{guides}{name} {bar} {size:>13}"
