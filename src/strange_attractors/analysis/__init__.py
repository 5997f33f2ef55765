"""
Parameter space sweeps
"""

from .param_space import ParamSpace, ParamRange
from .sweep_runner import SweepRunner, SweepConfig, SweepResults, ParamPointResult

__all__ = ['ParamSpace', 'ParamRange', 'SweepRunner', 'SweepConfig', 'SweepResults', 'ParamPointResult']
