"""
Clifford attractor implementation
"""

from .base import Attractor
from ..compute.kernels import OrbitKernels
from typing import Dict, Sequence, Tuple
import math

class CliffordAttractor(Attractor):
    """
    x_new = sin(a * y) + c * cos(a * x)
    y_new = sin(b * x) + d * cos(b * y)

    c and d scale the cosine terms, so they alone set the orbit's extent.
    """

    NAME = "clifford"
    PARAM_NAMES = ('a', 'b', 'c', 'd')
    DEFAULT_PARAMS = (-1.4, 1.6, 1.0, 0.7)

    def compute_bounds(self, params: Sequence[float]) -> Dict[str, Tuple[float, float]]:
        # |sin| <= 1 plus |c| * |cos| <= |c|
        c, d = abs(params[2]), abs(params[3])
        return {'x': (-1.0 - c, 1.0 + c), 'y': (-1.0 - d, 1.0 + d)}

    def evolve_point(self, x: float, y: float) -> Tuple[float, float]:
        """Evolve a single point under Clifford map"""
        a, b, c, d = self._params
        x_new = math.sin(a * y) + c * math.cos(a * x)
        y_new = math.sin(b * x) + d * math.cos(b * y)
        return x_new, y_new

    def _advance(self, buffer, start: int, count: int) -> Tuple[float, float]:
        a, b, c, d = self._params
        return OrbitKernels.clifford_orbit(buffer, start, count, float(self.x), float(self.y), a, b, c, d)

    def __str__(self) -> str:
        a, b, c, d = self._params
        return ("Clifford Attractor:\n"
                f"  x_new = sin({a:+.4f} * y) + {c:+.4f} * cos({a:+.4f} * x);\n"
                f"  y_new = sin({b:+.4f} * x) + {d:+.4f} * cos({b:+.4f} * y)")
