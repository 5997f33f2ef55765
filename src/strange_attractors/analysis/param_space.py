"""
Parameter space management for attractor sweeps
"""

import numpy as np
from typing import Dict, List, Iterator, Any, Sequence
from itertools import product
import yaml

from ..errors import IOFailure


class ParamRange:
    """represents a single parameter's range/values"""

    VALID_TYPES = {'linspace', 'logspace', 'random', 'fixed', 'values'}

    def __init__(self, name: str, config: Dict[str, Any]):
        self.name = name
        self.config = config
        self.type = config.get('type')
        self._values = None
        self._validate_config()

    def _validate_config(self):
        if self.type not in self.VALID_TYPES:
            raise ValueError(f"invalid param type '{self.type}' for '{self.name}', "
                             f"must be one of {sorted(self.VALID_TYPES)}")

        if self.type in ('linspace', 'logspace', 'random'):
            missing = {'start', 'stop', 'num'} - set(self.config)
            if missing:
                raise ValueError(f"param '{self.name}' missing required fields: {sorted(missing)}")
            if int(self.config['num']) < 1:
                raise ValueError(f"param '{self.name}' needs num >= 1")
            if self.type == 'logspace' and (self.config['start'] <= 0 or self.config['stop'] <= 0):
                raise ValueError(f"param '{self.name}' logspace bounds must be positive")

        elif self.type == 'fixed':
            if 'value' not in self.config:
                raise ValueError(f"param '{self.name}' missing 'value' field")

        elif self.type == 'values':
            values = self.config.get('values')
            if not isinstance(values, (list, tuple)) or not values:
                raise ValueError(f"param '{self.name}' 'values' must be a non-empty list")

    def get_values(self) -> np.ndarray:
        """get array of parameter values"""
        if self._values is not None:
            return self._values

        if self.type == 'linspace':
            self._values = np.linspace(self.config['start'], self.config['stop'], int(self.config['num']))
        elif self.type == 'logspace':
            self._values = np.logspace(np.log10(self.config['start']),
                                       np.log10(self.config['stop']),
                                       int(self.config['num']))
        elif self.type == 'random':
            # reproducible random sampling
            rng = np.random.default_rng(self.config.get('seed', 42))
            self._values = rng.uniform(self.config['start'], self.config['stop'], int(self.config['num']))
        elif self.type == 'fixed':
            self._values = np.array([self.config['value']], dtype=float)
        else:
            self._values = np.array(self.config['values'], dtype=float)

        if not np.all(np.isfinite(self._values)):
            raise ValueError(f"parameter '{self.name}' contains non-finite values")
        return self._values

    def size(self) -> int:
        return len(self.get_values())

    def __repr__(self) -> str:
        return f"ParamRange({self.name}, {self.type}, size={self.size()})"


class ParamSpace:
    """
    Cartesian grid over an attractor's parameters.

    config looks like:
        attractor: clifford
        parameters:
          a: {type: linspace, start: -2.0, stop: 2.0, num: 5}
          c: {type: values, values: [0.5, 1.0]}

    Parameters the config leaves out stay fixed at `defaults`.
    """

    def __init__(self, config: Dict[str, Any], param_names: Sequence[str] = None,
                 defaults: Sequence[float] = None):
        self.config = config
        if 'parameters' not in config:
            raise ValueError("config missing 'parameters' section")

        ranges = {name: ParamRange(name, cfg) for name, cfg in config['parameters'].items()}

        if param_names is not None:
            unknown = set(ranges) - set(param_names)
            if unknown:
                raise ValueError(f"unknown parameters {sorted(unknown)}, expected {list(param_names)}")
            defaults = list(defaults) if defaults is not None else []
            for i, name in enumerate(param_names):
                if name not in ranges:
                    if i >= len(defaults):
                        raise ValueError(f"parameter '{name}' has no range and no default")
                    ranges[name] = ParamRange(name, {'type': 'fixed', 'value': defaults[i]})
            self._param_names = list(param_names)
        else:
            self._param_names = list(ranges)

        self.param_ranges: Dict[str, ParamRange] = {name: ranges[name] for name in self._param_names}
        self._total_size = None

    @property
    def param_names(self) -> List[str]:
        return list(self._param_names)

    def iter_params(self) -> Iterator[Dict[str, float]]:
        """yield parameter combinations as ordered dicts"""
        param_arrays = [self.param_ranges[name].get_values() for name in self._param_names]
        for param_values in product(*param_arrays):
            yield {name: float(v) for name, v in zip(self._param_names, param_values)}

    def size(self) -> int:
        """total number of parameter combinations"""
        if self._total_size is None:
            self._total_size = 1
            for param_range in self.param_ranges.values():
                self._total_size *= param_range.size()
        return self._total_size

    def get_param_info(self) -> Dict[str, Dict]:
        info = {}
        for name, param_range in self.param_ranges.items():
            values = param_range.get_values()
            info[name] = {
                'type': param_range.type,
                'size': param_range.size(),
                'min': float(np.min(values)),
                'max': float(np.max(values)),
            }
        return info

    def __repr__(self) -> str:
        param_info = ", ".join(f"{name}({pr.size()})" for name, pr in self.param_ranges.items())
        return f"ParamSpace(size={self.size():,}, params=[{param_info}])"

    @classmethod
    def for_attractor(cls, config: Dict[str, Any], attractor_cls) -> 'ParamSpace':
        return cls(config, attractor_cls.PARAM_NAMES, attractor_cls.DEFAULT_PARAMS)

    @classmethod
    def from_yaml(cls, yaml_path: str, attractor_cls=None) -> 'ParamSpace':
        """load parameter space from yaml file"""
        try:
            with open(yaml_path, 'r') as f:
                config = yaml.safe_load(f) or {}
        except OSError as e:
            raise IOFailure(yaml_path, e) from e
        if attractor_cls is not None:
            return cls.for_attractor(config, attractor_cls)
        return cls(config)

    def to_yaml(self, yaml_path: str):
        """save parameter space config to yaml file"""
        with open(yaml_path, 'w') as f:
            yaml.dump(self.config, f, default_flow_style=False)
