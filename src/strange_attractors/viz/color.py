"""
HSL colour mapping for density fields
"""

from dataclasses import dataclass

import numpy as np


def _hue_to_channel(p: float, q: float, t: float) -> float:
    t %= 1.0
    if t < 1.0 / 6.0:
        return p + (q - p) * 6.0 * t
    if t < 0.5:
        return q
    if t < 2.0 / 3.0:
        return p + (q - p) * (2.0 / 3.0 - t) * 6.0
    return p


def hsla_to_argb(hue: float, saturation: float, lightness: float, alpha: float = 1.0) -> int:
    """
    Convert HSL to a packed 0x00RRGGBB pixel. Hue wraps around 1,
    saturation and lightness are clamped to [0, 1], alpha is ignored.
    """
    h = hue % 1.0
    s = min(max(saturation, 0.0), 1.0)
    l = min(max(lightness, 0.0), 1.0)

    if s == 0.0:
        r = g = b = l
    else:
        q = l * (1.0 + s) if l < 0.5 else l + s - l * s
        p = 2.0 * l - q
        r = _hue_to_channel(p, q, h + 1.0 / 3.0)
        g = _hue_to_channel(p, q, h)
        b = _hue_to_channel(p, q, h - 1.0 / 3.0)

    return (int(round(r * 255)) << 16) | (int(round(g * 255)) << 8) | int(round(b * 255))


def _hue_to_channel_array(p: np.ndarray, q: np.ndarray, t: np.ndarray) -> np.ndarray:
    t = np.mod(t, 1.0)
    return np.select(
        [t < 1.0 / 6.0, t < 0.5, t < 2.0 / 3.0],
        [p + (q - p) * 6.0 * t, q, p + (q - p) * (2.0 / 3.0 - t) * 6.0],
        default=p,
    )


def hsl_to_argb_array(hue, saturation, lightness) -> np.ndarray:
    """vectorised hsla_to_argb over broadcastable arrays, returns uint32"""
    h = np.mod(np.asarray(hue, dtype=np.float64), 1.0)
    s = np.clip(np.asarray(saturation, dtype=np.float64), 0.0, 1.0)
    l = np.clip(np.asarray(lightness, dtype=np.float64), 0.0, 1.0)
    h, s, l = np.broadcast_arrays(h, s, l)

    q = np.where(l < 0.5, l * (1.0 + s), l + s - l * s)
    p = 2.0 * l - q
    grey = s == 0.0
    r = np.where(grey, l, _hue_to_channel_array(p, q, h + 1.0 / 3.0))
    g = np.where(grey, l, _hue_to_channel_array(p, q, h))
    b = np.where(grey, l, _hue_to_channel_array(p, q, h - 1.0 / 3.0))

    def channel(c):
        return np.round(c * 255).astype(np.uint32)

    return (channel(r) << 16) | (channel(g) << 8) | channel(b)


@dataclass
class ColorParams:
    hue: float = 0.6
    saturation: float = 0.8
    lightness: float = 1.0
    gamma: float = 0.3
    hue_shift: float = 0.0


def colorize(densities, color: ColorParams) -> np.ndarray:
    """map densities in [0, 1] to packed pixels, unvisited pixels stay black"""
    d = np.asarray(densities, dtype=np.float64)
    lightness = color.lightness * np.power(d, color.gamma)
    lightness = np.where(d > 0.0, lightness, 0.0)
    return hsl_to_argb_array(color.hue + color.hue_shift * d, color.saturation, lightness)


def argb_to_rgba(pixels, width: int, height: int) -> np.ndarray:
    """unpack 0x00RRGGBB pixels into an opaque (height, width, 4) uint8 image"""
    pixels = np.asarray(pixels, dtype=np.uint32).reshape(height, width)
    rgba = np.empty((height, width, 4), dtype=np.uint8)
    rgba[..., 0] = (pixels >> 16) & 0xFF
    rgba[..., 1] = (pixels >> 8) & 0xFF
    rgba[..., 2] = pixels & 0xFF
    rgba[..., 3] = 255
    return rgba
