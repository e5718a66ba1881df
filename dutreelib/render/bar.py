"""Proportional bar charts.

Each bar shows an entry's share of every ancestor at once. The outermost
level spans ``cells * top / reference`` cells on the right side of the bar,
each nested level a proportional part of the previous one. Cells covered by
more levels get a denser shade; the entry's own span is always solid.
"""

from typing import List, Sequence

UNICODE_SHADES = " ░▒▓█"
ASCII_SHADES = " #"

UNICODE_BORDER = "│"
ASCII_BORDER = "|"

# Two borders plus " NNN%"
RESERVED = 7


def level_spans(chain: Sequence[int], reference: int, cells: int) -> List[int]:
    """Compute how many cells each nesting level covers.

    Args:
        chain: Byte totals from the root down to the entry (root first)
        reference: Bytes that map to the full bar at the first level
        cells: Number of drawable cells

    Returns:
        One span per level below the root, non-increasing
    """
    spans = []
    total, span = reference, cells
    for value in chain[1:]:
        span = min(value * span // total, span) if total else 0
        spans.append(span)
        total = value
    return spans


def percent_of_parent(chain: Sequence[int]) -> int:
    """Floor percentage of the entry relative to its immediate parent."""
    if len(chain) < 2 or chain[-2] == 0:
        return 0
    return chain[-1] * 100 // chain[-2]


def format_bar(chain: Sequence[int], reference: int, width: int,
               ascii_only: bool = False) -> str:
    """Draw the bar column for one entry.

    Args:
        chain: Byte totals from the root down to the entry (root first)
        reference: Largest top-level child, the 100% mark of the first level
        width: Whole column width including borders and percentage
        ascii_only: Use ``#`` and ``|`` only

    Returns:
        String of exactly ``max(width, 7)`` characters
    """
    shades = ASCII_SHADES if ascii_only else UNICODE_SHADES
    border = ASCII_BORDER if ascii_only else UNICODE_BORDER
    solid = len(shades) - 1

    cells = max(width - RESERVED, 0)
    spans = level_spans(chain, reference, cells)
    levels = len(spans)

    out = []
    for x in range(cells):
        shade = sum(1 for span in spans if x >= cells - span)
        if shade and (shade == levels or shade > solid):
            shade = solid
        out.append(shades[shade])

    return f"{border}{''.join(out)}{border} {percent_of_parent(chain):3d}%"
