"""Entry abstraction for dutreelib.

An Entry is one node of the result tree: a file, a directory, or one of the
synthetic marker nodes (aggregated small entries, multi-root collection).
It is a plain data container; the TreeBuilder creates it and the renderer
reads it.
"""

from typing import Any, Dict, Iterator, List, Optional, Tuple


AGGREGATE_NAME = "<aggregated>"
COLLECTION_NAME = "<collection>"

AGGREGATE = "aggregate"
COLLECTION = "collection"


class Entry:
    """Node of a size-annotated tree.

    ``children`` distinguishes three cases that need different size
    accounting:

    - ``None``: a file, a directory that was not expanded because of the
      depth limit, or a directory that could not be read
    - ``[]``: an expanded directory with nothing left after filtering
    - a non-empty list: an expanded directory
    """

    def __init__(self,
                 name: str,
                 bytes: int = 0,
                 color: Optional[str] = None,
                 children: Optional[List['Entry']] = None,
                 is_last_sibling: bool = False,
                 kind: Optional[str] = None):
        """Initialize an entry.

        Args:
            name: Display name
            bytes: Cumulative size in bytes
            color: ANSI SGR code from the color table, or None
            children: Sorted child entries, or None when not expanded
            is_last_sibling: True only for the final element of a sibling list
            kind: None for real paths, AGGREGATE or COLLECTION for markers
        """
        self.name = name
        self.bytes = bytes
        self.color = color
        self.children = children
        self.is_last_sibling = is_last_sibling
        self.kind = kind

    @classmethod
    def aggregate(cls, total: int) -> 'Entry':
        """Create the synthetic node that stands in for folded small entries."""
        return cls(AGGREGATE_NAME, bytes=total, kind=AGGREGATE)

    @classmethod
    def collection(cls, children: List['Entry']) -> 'Entry':
        """Create the synthetic root used when several paths are scanned."""
        ordered = sort_siblings(children)
        return cls(COLLECTION_NAME,
                   bytes=sum(child.bytes for child in ordered),
                   children=ordered,
                   kind=COLLECTION)

    def is_leaf(self) -> bool:
        """Check if this entry was not expanded (no child list)."""
        return self.children is None

    def is_aggregate(self) -> bool:
        return self.kind == AGGREGATE

    def is_collection(self) -> bool:
        return self.kind == COLLECTION

    def walk(self, depth: int = 0) -> Iterator[Tuple['Entry', int]]:
        """Yield ``(entry, depth)`` pairs in pre-order, this entry first."""
        stack = [(self, depth)]
        while stack:
            entry, level = stack.pop()
            yield (entry, level)
            for child in reversed(entry.children or ()):
                stack.append((child, level + 1))

    def metadata(self) -> Dict[str, Any]:
        """Return a lightweight summary of this entry."""
        return {
            'name': self.name,
            'bytes': self.bytes,
            'color': self.color,
            'is_last_sibling': self.is_last_sibling,
            'expanded': self.children is not None,
            'child_count': len(self.children) if self.children else 0,
        }

    def __repr__(self) -> str:
        """Detailed representation for debugging."""
        kids = "-" if self.children is None else len(self.children)
        return f"Entry(name={self.name!r}, bytes={self.bytes}, children={kids})"


def sort_siblings(entries: List[Entry], aggregated: int = 0) -> List[Entry]:
    """Order a sibling sequence and fix up its last-sibling flag.

    Entries are sorted by descending size (ties by name). When ``aggregated``
    is nonzero an aggregate entry holding that many bytes is appended after
    sorting, so it always ends up last.

    Args:
        entries: Visible siblings, in any order
        aggregated: Total bytes of siblings folded into the aggregate

    Returns:
        New list in display order
    """
    ordered = sorted(entries, key=lambda e: (-e.bytes, e.name))
    if aggregated > 0:
        ordered.append(Entry.aggregate(aggregated))

    for entry in ordered:
        entry.is_last_sibling = False
    if ordered:
        ordered[-1].is_last_sibling = True
    return ordered
