"""
Still-image rendering: step an attractor, build its density field, save PNG
"""

from dataclasses import dataclass, field, fields, asdict
from typing import Dict, List, Optional, Any

import matplotlib.pyplot as plt
import numpy as np
import yaml

from ..attractors import Attractor, create_attractor
from ..errors import IOFailure
from .color import ColorParams, argb_to_rgba, colorize


def _check_keys(label: str, data: Dict[str, Any], dataclass_type) -> None:
    valid = [f.name for f in fields(dataclass_type)]
    unknown = sorted(set(data) - set(valid))
    if unknown:
        raise ValueError(f"unknown {label} keys {unknown}, valid keys are {valid}")


@dataclass
class RenderConfig:
    attractor: str = 'clifford'
    params: Optional[List[float]] = None
    steps: int = 1_000_000
    width: int = 800
    height: int = 800
    border: float = 0.05
    chunk_size: int = 100_000
    color: ColorParams = field(default_factory=ColorParams)

    def __post_init__(self):
        if isinstance(self.color, dict):
            self.color = ColorParams(**self.color)
        if self.steps < 1:
            raise ValueError(f"steps must be at least 1, got {self.steps}")
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be at least 1, got {self.chunk_size}")

    def build_attractor(self) -> Attractor:
        return create_attractor(self.attractor, self.params)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RenderConfig':
        if not isinstance(data, dict):
            raise ValueError(f"render config must be a mapping, got {type(data).__name__}")
        _check_keys('render config', data, cls)
        if isinstance(data.get('color'), dict):
            _check_keys('color', data['color'], ColorParams)
        return cls(**data)

    @classmethod
    def from_yaml(cls, yaml_path: str) -> 'RenderConfig':
        """load render settings from yaml file"""
        try:
            with open(yaml_path, 'r') as f:
                data = yaml.safe_load(f) or {}
        except OSError as e:
            raise IOFailure(yaml_path, e) from e
        return cls.from_dict(data)

    def to_yaml(self, yaml_path: str):
        """save render settings to yaml file"""
        with open(yaml_path, 'w') as f:
            yaml.dump(asdict(self), f, default_flow_style=False)


def step_in_chunks(attractor: Attractor, steps: int, chunk_size: int) -> None:
    """
    Advance by `steps` new points in bounded increments, the same total
    as attractor.step(steps + 1).
    """
    remaining = steps
    while remaining > 0:
        batch = min(chunk_size, remaining)
        attractor.step(batch + 1)
        remaining -= batch


def render_attractor(attractor: Attractor, config: RenderConfig) -> np.ndarray:
    """iterate the attractor and return its bordered density field"""
    step_in_chunks(attractor, config.steps, config.chunk_size)
    return attractor.get_densities_with_border(config.width, config.height, config.border)


def density_to_image(densities, width: int, height: int, color: ColorParams) -> np.ndarray:
    return argb_to_rgba(colorize(densities, color), width, height)


def save_png(densities, width: int, height: int, path, color: Optional[ColorParams] = None) -> str:
    """write a density field as PNG, row 0 (ymin) at the bottom of the image"""
    image = density_to_image(densities, width, height, color or ColorParams())
    try:
        plt.imsave(path, image, origin='lower')
    except OSError as e:
        raise IOFailure(path, e) from e
    return str(path)
