"""
Strange attractor simulation, density fields and orbit files
"""

__version__ = "0.1.0"
