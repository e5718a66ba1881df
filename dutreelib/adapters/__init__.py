"""Probe implementations for dutreelib."""

from .filesystem import FileSystemProbe, display_name

__all__ = [
    'FileSystemProbe',
    'display_name',
]
