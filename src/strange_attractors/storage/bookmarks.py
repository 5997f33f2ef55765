"""
Bookmark file for parameter sets worth revisiting

One comma-separated line of name=value pairs per bookmark, appended only
when the identical line is not already present.
"""

import os
from typing import Dict, List

from ..errors import IOFailure
from .orbit_file import format_float


def format_bookmark(params: Dict[str, float]) -> str:
    return ",".join(f"{key}={format_float(value)}" for key, value in params.items())


def parse_bookmark(line: str) -> Dict[str, float]:
    params = {}
    for pair in line.strip().split(','):
        key, sep, value = pair.partition('=')
        if not sep:
            raise ValueError(f"malformed bookmark entry {pair!r}")
        params[key.strip()] = float(value)
    return params


class BookmarkFile:
    """append-only list of special parameter sets"""

    def __init__(self, path):
        self.path = path

    def _read_lines(self) -> List[str]:
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                return [line.strip() for line in f if line.strip()]
        except OSError as e:
            raise IOFailure(self.path, e) from e

    def __contains__(self, params: Dict[str, float]) -> bool:
        return format_bookmark(params) in self._read_lines()

    def add(self, params: Dict[str, float]) -> bool:
        """append params unless already bookmarked, returns True if written"""
        line = format_bookmark(params)
        if line in self._read_lines():
            return False
        try:
            with open(self.path, 'a', encoding='utf-8') as f:
                f.write(line + "\n")
        except OSError as e:
            raise IOFailure(self.path, e) from e
        return True

    def load(self) -> List[Dict[str, float]]:
        return [parse_bookmark(line) for line in self._read_lines()]

    def __len__(self) -> int:
        return len(self._read_lines())
