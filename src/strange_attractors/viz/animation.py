"""
Animation generation for strange attractors
"""

import os
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation, PillowWriter
from typing import List, Sequence, Tuple

from ..attractors import Attractor
from .color import ColorParams
from .render import density_to_image

WIDTH = 400
HEIGHT = 400
FPS = 15

def interpolate_params(start: Sequence[float], end: Sequence[float], frames: int) -> List[List[float]]:
    """linearly spaced parameter sets from start to end, both included"""
    if len(start) != len(end):
        raise ValueError(f"parameter sets differ in length: {len(start)} != {len(end)}")
    if frames < 2:
        raise ValueError(f"need at least 2 frames, got {frames}")
    path = np.linspace(np.asarray(start, dtype=float), np.asarray(end, dtype=float), frames)
    return [list(map(float, row)) for row in path]


def render_frames(
    attractor: Attractor,
    param_path: List[List[float]],
    steps: int,
    width: int = WIDTH,
    height: int = HEIGHT,
    border: float = 0.05,
    color: ColorParams = None
) -> Tuple[List[np.ndarray], List[Tuple[float, ...]]]:
    """
    Render one RGBA image per parameter set, along with the parameter
    snapshot each frame was drawn with. The live position carries over
    between frames so later frames start on the attractor, not the origin.
    """
    color = color or ColorParams()
    images, snapshots = [], []
    for params in param_path:
        attractor.set_params(params)
        snapshots.append(attractor.param_history[-1])
        attractor.reset()
        attractor.step(steps + 1)
        densities = attractor.get_densities_with_border(width, height, border)
        images.append(density_to_image(densities, width, height, color))
    return images, snapshots


def create_morphing_animation(
    attractor: Attractor,
    start_params: Sequence[float],
    end_params: Sequence[float],
    output_dir: str,
    frames: int = 30,
    steps: int = 200_000,
    width: int = WIDTH,
    height: int = HEIGHT,
    fps: int = FPS,
    color: ColorParams = None
) -> str:
    """
    Create a GIF morphing the attractor from start_params to end_params.

    Args:
        attractor: attractor to animate, its parameters end at end_params
        start_params, end_params: full parameter lists
        output_dir: directory to save the animation
        frames: number of frames, including both ends
        steps: new orbit points per frame
        fps: frames per second

    Returns:
        Path to the saved animation file
    """
    print(f"Creating morphing {attractor.name} attractor animation...")

    param_path = interpolate_params(start_params, end_params, frames)
    images, snapshots = render_frames(attractor, param_path, steps, width, height, color=color)

    fig, ax = plt.subplots(figsize=(width / 100, height / 100), dpi=100)
    fig.subplots_adjust(0, 0, 1, 1)
    ax.set_axis_off()
    im = ax.imshow(images[0], origin='lower', interpolation='nearest')

    # parameter overlay
    param_text = ax.text(0.02, 0.98, '', transform=ax.transAxes,
                         fontsize=8, color='white', verticalalignment='top')

    def animate(frame):
        im.set_array(images[frame])
        values = ", ".join(f"{name}={value:+.3f}"
                           for name, value in zip(attractor.PARAM_NAMES, snapshots[frame]))
        param_text.set_text(values)
        return [im, param_text]

    print(f"Creating animation with {len(images)} frames...")
    anim = FuncAnimation(fig, animate, frames=len(images),
                         interval=1000/fps, blit=True, repeat=True)

    os.makedirs(output_dir, exist_ok=True)
    filename = os.path.join(output_dir, f"morphing_{attractor.name.lower()}.gif")
    writer = PillowWriter(fps=fps)
    anim.save(filename, writer=writer)
    print(f"Saved animation to: {filename}")

    plt.close(fig)
    return filename
