"""
Colour mapping, image export and animation
"""

from .color import ColorParams, hsla_to_argb, hsl_to_argb_array, colorize, argb_to_rgba
from .render import RenderConfig, render_attractor, save_png, step_in_chunks
from .animation import create_morphing_animation, interpolate_params

__all__ = ['ColorParams', 'hsla_to_argb', 'hsl_to_argb_array', 'colorize', 'argb_to_rgba',
           'RenderConfig', 'render_attractor', 'save_png', 'step_in_chunks',
           'create_morphing_animation', 'interpolate_params']
