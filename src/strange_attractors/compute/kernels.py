"""
Numba kernels for orbit iteration and density accumulation
"""

import math
from numba import njit


class OrbitKernels:
    """compiled hot loops, one orbit kernel per attractor formula"""

    @staticmethod
    @njit
    def clifford_orbit(buffer, start, count, x, y, a, b, c, d):
        for i in range(count):
            x_new = math.sin(a * y) + c * math.cos(a * x)
            y_new = math.sin(b * x) + d * math.cos(b * y)
            x, y = x_new, y_new
            buffer[start + i, 0] = x
            buffer[start + i, 1] = y
        return x, y

    @staticmethod
    @njit
    def dejong_orbit(buffer, start, count, x, y, a, b, c, d):
        for i in range(count):
            x_new = math.sin(a * y) - math.cos(b * x)
            y_new = math.sin(c * x) - math.cos(d * y)
            x, y = x_new, y_new
            buffer[start + i, 0] = x
            buffer[start + i, 1] = y
        return x, y

    @staticmethod
    @njit
    def henon_orbit(buffer, start, count, x, y, a, b):
        for i in range(count):
            x_new = 1.0 - a * x * x + y
            y_new = b * x
            x, y = x_new, y_new
            buffer[start + i, 0] = x
            buffer[start + i, 1] = y
        return x, y

    @staticmethod
    @njit
    def density_histogram(points, xmin, xspan, ymin, yspan,
                          x0, inner_width, y0, inner_height, width, counts):
        """
        First pass of the density build: bin every finite point into
        `counts` (row-major, x + y * width) inside the pixel window
        starting at (x0, y0). Returns (max bin count, skipped points).
        """
        peak = 0
        skipped = 0
        for i in range(points.shape[0]):
            px = points[i, 0]
            py = points[i, 1]
            if not (math.isfinite(px) and math.isfinite(py)):
                skipped += 1
                continue

            # clamp before the int conversion, the domain maximum lands on inner_width
            tx = inner_width * (px - xmin) / xspan
            if tx < 0.0:
                tx = 0.0
            elif tx >= inner_width:
                tx = inner_width - 1.0
            ty = inner_height * (py - ymin) / yspan
            if ty < 0.0:
                ty = 0.0
            elif ty >= inner_height:
                ty = inner_height - 1.0

            # truncation is floor for non-negative values
            idx = (x0 + int(tx)) + (y0 + int(ty)) * width
            counts[idx] += 1
            if counts[idx] > peak:
                peak = counts[idx]
        return peak, skipped
