"""Testing utilities for dutreelib consumers."""

from .fixtures import SizedTree, find_child

__all__ = ['SizedTree', 'find_child']
