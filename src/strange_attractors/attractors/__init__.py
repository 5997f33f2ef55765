"""
Attractor implementations and registry
"""

from typing import Dict, Optional, Sequence, Type

from .base import Attractor, AttractorConfig
from .clifford import CliffordAttractor
from .dejong import DeJongAttractor
from .henon import HenonAttractor
from ..errors import OrbitFormatError
from ..storage.orbit_file import read_orbit

# available attractors registry, keyed by the name written to orbit files
AVAILABLE_ATTRACTORS: Dict[str, Type[Attractor]] = {
    CliffordAttractor.NAME: CliffordAttractor,
    DeJongAttractor.NAME: DeJongAttractor,
    HenonAttractor.NAME: HenonAttractor,
}


def create_attractor(name: str, params: Optional[Sequence[float]] = None) -> Attractor:
    """build a registered attractor, falling back to its default parameters"""
    try:
        cls = AVAILABLE_ATTRACTORS[name]
    except KeyError:
        raise ValueError(
            f"unknown attractor '{name}', must be one of {sorted(AVAILABLE_ATTRACTORS)}"
        ) from None
    return cls(cls.DEFAULT_PARAMS if params is None else params)


def load_attractor(path) -> Attractor:
    """rebuild an attractor, parameters and history, from an orbit file"""
    record = read_orbit(path)
    cls = AVAILABLE_ATTRACTORS.get(record.name)
    if cls is None:
        raise OrbitFormatError(path, 1, f"unknown attractor '{record.name}'")
    # parameters are matched by name, the file order is not trusted
    if set(record.params) != set(cls.PARAM_NAMES):
        raise OrbitFormatError(
            path, 2, f"{record.name} parameters must be {list(cls.PARAM_NAMES)}, got {list(record.params)}"
        )
    attractor = cls([record.params[name] for name in cls.PARAM_NAMES])
    attractor.load_history(record.history)
    return attractor


__all__ = ['Attractor', 'AttractorConfig', 'CliffordAttractor', 'DeJongAttractor',
           'HenonAttractor', 'AVAILABLE_ATTRACTORS', 'create_attractor', 'load_attractor']
