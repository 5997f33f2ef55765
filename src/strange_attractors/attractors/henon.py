"""
Hénon map implementation
"""

from .base import Attractor
from ..compute.kernels import OrbitKernels
from typing import Dict, Sequence, Tuple

class HenonAttractor(Attractor):
    """
    x_new = 1 - a * x^2 + y
    y_new = b * x

    The x extent is empirical for the classic a ~ 1.4 regime; y is x
    scaled by b, so its extent follows |b|.
    """

    NAME = "henon"
    PARAM_NAMES = ('a', 'b')
    DEFAULT_PARAMS = (1.4, 0.3)

    def compute_bounds(self, params: Sequence[float]) -> Dict[str, Tuple[float, float]]:
        b = abs(params[1])
        return {'x': (-2.0, 2.0), 'y': (-2.0 * b, 2.0 * b)}

    def evolve_point(self, x: float, y: float) -> Tuple[float, float]:
        """Evolve a single point under Hénon map"""
        a, b = self._params
        x_new = 1.0 - a * x * x + y
        y_new = b * x
        return x_new, y_new

    def _advance(self, buffer, start: int, count: int) -> Tuple[float, float]:
        a, b = self._params
        return OrbitKernels.henon_orbit(buffer, start, count, float(self.x), float(self.y), a, b)

    def __str__(self) -> str:
        a, b = self._params
        return ("Hénon Attractor:\n"
                f"  x_new = 1 - {a:.4f} * x^2 + y;\n"
                f"  y_new = {b:+.4f} * x")
