"""
Peter de Jong attractor implementation
"""

from .base import Attractor
from ..compute.kernels import OrbitKernels
from typing import Dict, Sequence, Tuple
import math

# sin(.) - cos(.) never leaves [-2, 2], whatever the parameters
DEJONG_BOUNDS = {'x': (-2.0, 2.0), 'y': (-2.0, 2.0)}

class DeJongAttractor(Attractor):
    """
    x_new = sin(a * y) - cos(b * x)
    y_new = sin(c * x) - cos(d * y)
    """

    NAME = "dejong"
    PARAM_NAMES = ('a', 'b', 'c', 'd')
    DEFAULT_PARAMS = (-2.0, -2.0, -1.2, 2.0)

    def compute_bounds(self, params: Sequence[float]) -> Dict[str, Tuple[float, float]]:
        return dict(DEJONG_BOUNDS)

    def evolve_point(self, x: float, y: float) -> Tuple[float, float]:
        """Evolve a single point under de Jong map"""
        a, b, c, d = self._params
        x_new = math.sin(a * y) - math.cos(b * x)
        y_new = math.sin(c * x) - math.cos(d * y)
        return x_new, y_new

    def _advance(self, buffer, start: int, count: int) -> Tuple[float, float]:
        a, b, c, d = self._params
        return OrbitKernels.dejong_orbit(buffer, start, count, float(self.x), float(self.y), a, b, c, d)

    def __str__(self) -> str:
        a, b, c, d = self._params
        return ("De Jong Attractor:\n"
                f"  x_new = sin({a:+.4f} * y) - cos({b:+.4f} * x);\n"
                f"  y_new = sin({c:+.4f} * x) - cos({d:+.4f} * y)")
