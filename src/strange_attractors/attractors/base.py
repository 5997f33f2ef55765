"""
Base class for strange attractors
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Tuple, List, Optional, Sequence

import numpy as np

from ..compute.density import build_density
from ..errors import InvalidArity
from ..storage.orbit_file import write_orbit

ORIGIN = (0.0, 0.0)
INITIAL_CAPACITY = 1024


@dataclass
class AttractorConfig:
    """snapshot of an attractor's identity, parameters and domain"""
    name: str
    params: Dict[str, float]
    bounds: Dict[str, Tuple[float, float]]


class Attractor(ABC):
    """
    A 2D point recurrence that records every position it visits.

    Subclasses declare NAME, PARAM_NAMES and DEFAULT_PARAMS and implement
    the recurrence (`evolve_point`, `_advance`) plus the bounding box the
    orbit stays in (`compute_bounds`).
    """

    NAME: str = ''
    DIMENSIONALITY: int = 2
    PARAM_NAMES: Tuple[str, ...] = ()
    DEFAULT_PARAMS: Tuple[float, ...] = ()

    def __init__(self, params: Sequence[float]):
        self._check_arity(params)
        self._params: List[float] = [float(p) for p in params]
        self.x, self.y = ORIGIN
        self._bounds = self.compute_bounds(self._params)

        self._history = np.empty((INITIAL_CAPACITY, self.DIMENSIONALITY), dtype=np.float64)
        self._history[0] = ORIGIN
        self._length = 1
        self.param_history: List[Tuple[float, ...]] = [tuple(self._params)]

    @classmethod
    def num_parameters(cls) -> int:
        return len(cls.PARAM_NAMES)

    @classmethod
    def _check_arity(cls, params: Sequence) -> None:
        if len(params) != cls.num_parameters():
            raise InvalidArity(cls.NAME, cls.num_parameters(), len(params))

    @property
    def name(self) -> str:
        return self.NAME

    @property
    def params(self) -> Dict[str, float]:
        return dict(zip(self.PARAM_NAMES, self._params))

    @property
    def bounds(self) -> Dict[str, Tuple[float, float]]:
        return dict(self._bounds)

    @property
    def xmin(self) -> float:
        return self._bounds['x'][0]

    @property
    def xmax(self) -> float:
        return self._bounds['x'][1]

    @property
    def ymin(self) -> float:
        return self._bounds['y'][0]

    @property
    def ymax(self) -> float:
        return self._bounds['y'][1]

    @property
    def config(self) -> AttractorConfig:
        return AttractorConfig(self.NAME, self.params, self.bounds)

    @property
    def history(self) -> np.ndarray:
        """read-only (n, 2) view of every visited position since the last reset"""
        view = self._history[:self._length]
        view.flags.writeable = False
        return view

    def __len__(self) -> int:
        return self._length

    @abstractmethod
    def compute_bounds(self, params: Sequence[float]) -> Dict[str, Tuple[float, float]]:
        """Return {'x': (xmin, xmax), 'y': (ymin, ymax)} for the given parameters"""

    @abstractmethod
    def evolve_point(self, x: float, y: float) -> Tuple[float, float]:
        """Evolve a single point (x,y) one step forward under the current parameters"""

    @abstractmethod
    def _advance(self, buffer: np.ndarray, start: int, count: int) -> Tuple[float, float]:
        """Write `count` iterations from the live position into buffer[start:], return the last"""

    def step(self, num_steps: int) -> None:
        """
        Iterate the recurrence num_steps - 1 times, appending each new
        position to history. step(1) adds nothing; callers wanting k new
        points pass k + 1.
        """
        if num_steps < 0:
            raise ValueError(f"num_steps must be non-negative, got {num_steps}")
        count = num_steps - 1
        if count <= 0:
            return

        self._reserve(count)
        self.x, self.y = self._advance(self._history, self._length, count)
        self._length += count

    def _reserve(self, extra: int) -> None:
        needed = self._length + extra
        capacity = self._history.shape[0]
        if needed <= capacity:
            return
        grown = np.empty((max(needed, 2 * capacity), self.DIMENSIONALITY), dtype=np.float64)
        grown[:self._length] = self._history[:self._length]
        self._history = grown

    def set_params(self, params: Sequence[Optional[float]]) -> None:
        """
        Overwrite every parameter whose entry is not None and recompute
        the bounding box. The arity is checked before anything changes.
        """
        self._check_arity(params)

        updated = list(self._params)
        for i, value in enumerate(params):
            if value is not None:
                updated[i] = float(value)
        if updated == self._params:
            return

        self._params = updated
        self._bounds = self.compute_bounds(self._params)
        self.param_history.append(tuple(self._params))

    def reset(self) -> None:
        """drop history back to the origin, keeping parameters and position"""
        self._history = np.empty((INITIAL_CAPACITY, self.DIMENSIONALITY), dtype=np.float64)
        self._history[0] = ORIGIN
        self._length = 1
        self.param_history = [tuple(self._params)]

    def load_history(self, points) -> None:
        """replace history with previously recorded positions"""
        points = np.array(points, dtype=np.float64)
        if points.ndim != 2 or points.shape[1] != self.DIMENSIONALITY or len(points) == 0:
            raise ValueError(
                f"history must be a non-empty (n, {self.DIMENSIONALITY}) array, got shape {points.shape}"
            )
        self._history = points
        self._length = len(points)
        self.x, self.y = (float(v) for v in points[-1])
        self.param_history = [tuple(self._params)]

    def get_densities(self, width: int, height: int) -> np.ndarray:
        return build_density(self._history[:self._length], self._bounds, width, height)

    def get_densities_with_border(self, width: int, height: int, border: float) -> np.ndarray:
        return build_density(self._history[:self._length], self._bounds, width, height, border)

    def to_file(self, path) -> None:
        write_orbit(path, self.NAME, self.params, self.DIMENSIONALITY, self._history[:self._length])

    def __repr__(self) -> str:
        params = ", ".join(f"{k}={v}" for k, v in self.params.items())
        return f"{type(self).__name__}({params}, history={self._length})"
