"""
Orbit files and parameter bookmarks
"""

from .orbit_file import OrbitRecord, format_float, read_orbit, write_orbit
from .bookmarks import BookmarkFile

__all__ = ['OrbitRecord', 'format_float', 'read_orbit', 'write_orbit', 'BookmarkFile']
