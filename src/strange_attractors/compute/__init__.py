"""
Numba-compiled orbit kernels and density field construction
"""

from .kernels import OrbitKernels
from .density import build_density, coverage, histogram, pixel_region

__all__ = ['OrbitKernels', 'build_density', 'coverage', 'histogram', 'pixel_region']
