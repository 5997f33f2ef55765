"""
Density field construction: orbit -> normalised 2D occupancy grid
"""

import math
import warnings
from typing import Dict, Tuple

import numpy as np

from .kernels import OrbitKernels

# absorbs float noise in border * size, e.g. 0.05 * 100
_EDGE_EPS = 1e-9


def pixel_region(width: int, height: int, border: float = 0.0) -> Tuple[int, int, int, int]:
    """
    Pixel window (x0, x1, y0, y1) the orbit is mapped into.

    The window is the central (1 - 2*border) fraction of the grid, half-open
    on the upper side. border=0 gives the whole grid.
    """
    if width < 1 or height < 1:
        raise ValueError(f"density grid must be at least 1x1, got {width}x{height}")
    if not 0.0 <= border < 0.5:
        raise ValueError(f"border fraction must be in [0, 0.5), got {border}")

    x0 = int(math.ceil(border * width - _EDGE_EPS))
    x1 = int(math.floor((1.0 - border) * width + _EDGE_EPS))
    y0 = int(math.ceil(border * height - _EDGE_EPS))
    y1 = int(math.floor((1.0 - border) * height + _EDGE_EPS))

    if x1 <= x0 or y1 <= y0:
        raise ValueError(
            f"border {border} leaves no drawable pixels on a {width}x{height} grid"
        )
    return x0, x1, y0, y1


def histogram(points, bounds: Dict[str, Tuple[float, float]],
              width: int, height: int, border: float = 0.0) -> Tuple[np.ndarray, int]:
    """
    Raw visit counts per pixel (int64, length width*height) and the
    largest count. Points outside `bounds` are clamped onto the window edge.
    """
    x0, x1, y0, y1 = pixel_region(width, height, border)

    xmin, xmax = bounds['x']
    ymin, ymax = bounds['y']
    xspan = xmax - xmin
    yspan = ymax - ymin
    if not (xspan > 0.0 and yspan > 0.0):
        raise ValueError(f"bounding box has an empty span: {bounds}")

    points = np.ascontiguousarray(points, dtype=np.float64)
    if points.ndim != 2 or points.shape[1] < 2:
        raise ValueError(f"expected an (n, 2) array of positions, got shape {points.shape}")

    counts = np.zeros(width * height, dtype=np.int64)
    peak, skipped = OrbitKernels.density_histogram(
        points, float(xmin), float(xspan), float(ymin), float(yspan),
        x0, x1 - x0, y0, y1 - y0, width, counts
    )
    if skipped:
        warnings.warn(f"{skipped} non-finite positions skipped while building density")
    return counts, int(peak)


def build_density(points, bounds: Dict[str, Tuple[float, float]],
                  width: int, height: int, border: float = 0.0) -> np.ndarray:
    """
    Normalised density field of an orbit.

    Args:
        points: (n, 2+) array of positions, only x and y are used
        bounds: {'x': (xmin, xmax), 'y': (ymin, ymax)} coordinate domain
        width, height: grid size in pixels
        border: fraction of each axis left empty on both sides

    Returns:
        float64 array of length width*height, row-major (x + y*width),
        most visited pixel at exactly 1.0 and unvisited pixels at 0.0
    """
    counts, peak = histogram(points, bounds, width, height, border)

    # nothing landed anywhere: keep a zero field rather than 0/0
    if peak == 0:
        return np.zeros(width * height, dtype=np.float64)

    return counts / float(peak)


def coverage(densities) -> float:
    """fraction of pixels visited at least once"""
    densities = np.asarray(densities)
    if densities.size == 0:
        return 0.0
    return float(np.count_nonzero(densities)) / densities.size
