"""
Plain-text orbit files

    #<name>,<num_parameters>,<dimensionality>
    #<param_name>=<value>            (once per parameter, in order)
    <index>:<x>,<y>[,<z>]            (once per history entry, from 0)

These files are meant to be human-readable, for debugging and for
identifying a run later on.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List

import numpy as np

from ..errors import IOFailure, OrbitFormatError

# lines joined per write() call
WRITE_CHUNK = 65536


@dataclass
class OrbitRecord:
    name: str
    num_parameters: int
    dimensionality: int
    params: Dict[str, float]
    history: np.ndarray


def format_float(value: float) -> str:
    """shortest round-trip decimal, integral values without a trailing '.0'"""
    text = repr(float(value))
    if text.endswith('.0'):
        text = text[:-2]
    return text


def _preamble(name: str, params: Dict[str, float], dimensionality: int) -> List[str]:
    lines = [f"#{name},{len(params)},{dimensionality}\n"]
    lines.extend(f"#{key}={format_float(value)}\n" for key, value in params.items())
    return lines


def _position_lines(history) -> Iterable[str]:
    for i, position in enumerate(history):
        coords = ",".join(format_float(v) for v in position)
        yield f"{i}:{coords}\n"


def write_orbit(path, name: str, params: Dict[str, float], dimensionality: int, history) -> None:
    """
    Write an attractor's parameters and full history to `path`.

    Raises IOFailure if the file cannot be created or written. A failed
    write may leave a partial file behind.
    """
    history = np.asarray(history, dtype=np.float64)
    if history.ndim != 2 or history.shape[1] != dimensionality:
        raise ValueError(
            f"history shape {history.shape} does not match dimensionality {dimensionality}"
        )

    try:
        with open(path, 'w', encoding='utf-8') as f:
            f.writelines(_preamble(name, params, dimensionality))
            chunk: List[str] = []
            for line in _position_lines(history):
                chunk.append(line)
                if len(chunk) >= WRITE_CHUNK:
                    f.write("".join(chunk))
                    chunk.clear()
            f.write("".join(chunk))
    except OSError as e:
        raise IOFailure(path, e) from e


def read_orbit(path) -> OrbitRecord:
    """parse an orbit file written by write_orbit"""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            lines = f.read().splitlines()
    except OSError as e:
        raise IOFailure(path, e) from e

    if not lines or not lines[0].startswith('#'):
        raise OrbitFormatError(path, 1, "missing '#<name>,<arity>,<dimensionality>' header")
    try:
        name, arity, dims = lines[0][1:].split(',')
        num_parameters, dimensionality = int(arity), int(dims)
    except ValueError:
        raise OrbitFormatError(path, 1, f"malformed header {lines[0]!r}") from None

    params: Dict[str, float] = {}
    for line_no in range(2, num_parameters + 2):
        if line_no > len(lines):
            raise OrbitFormatError(path, line_no, "file ends inside the parameter block")
        line = lines[line_no - 1]
        key, sep, value = line[1:].partition('=')
        if not line.startswith('#') or not sep:
            raise OrbitFormatError(path, line_no, f"expected '#<name>=<value>', got {line!r}")
        try:
            params[key] = float(value)
        except ValueError:
            raise OrbitFormatError(path, line_no, f"bad parameter value {value!r}") from None

    positions = []
    first_position = num_parameters + 2
    for offset, line in enumerate(lines[first_position - 1:]):
        line_no = first_position + offset
        index, sep, coords = line.partition(':')
        try:
            if not sep or int(index) != offset:
                raise ValueError
            position = [float(v) for v in coords.split(',')]
        except ValueError:
            raise OrbitFormatError(path, line_no, f"expected '{offset}:<coords>', got {line!r}") from None
        if len(position) != dimensionality:
            raise OrbitFormatError(
                path, line_no, f"expected {dimensionality} coordinates, got {len(position)}"
            )
        positions.append(position)

    history = np.array(positions, dtype=np.float64).reshape(-1, dimensionality)
    return OrbitRecord(name, num_parameters, dimensionality, params, history)
