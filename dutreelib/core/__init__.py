"""Core abstractions for dutreelib.

This module contains the result tree node, the probe interface through
which all filesystem access goes, and the builder that ties them together.
"""

from .entry import Entry, AGGREGATE_NAME, COLLECTION_NAME, sort_siblings
from .probe import SizeProbe, BLOCK_UNIT
from .builder import TreeBuilder

__all__ = [
    "Entry",
    "AGGREGATE_NAME",
    "COLLECTION_NAME",
    "sort_siblings",
    "SizeProbe",
    "BLOCK_UNIT",
    "TreeBuilder",
]
