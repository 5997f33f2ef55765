from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pytest

from strange_attractors.attractors import create_attractor
from strange_attractors.errors import IOFailure
from strange_attractors.viz import (
    ColorParams,
    RenderConfig,
    create_morphing_animation,
    interpolate_params,
    render_attractor,
    save_png,
    step_in_chunks,
)


def test_step_in_chunks_adds_exact_count() -> None:
    attractor = create_attractor('clifford')
    step_in_chunks(attractor, 250, 100)
    assert len(attractor.history) == 251

    reference = create_attractor('clifford')
    reference.step(251)
    np.testing.assert_allclose(attractor.history, reference.history)


def test_render_attractor_returns_bordered_field() -> None:
    config = RenderConfig(attractor='dejong', steps=20_000, width=60, height=40,
                          border=0.1, chunk_size=7_000)
    densities = render_attractor(config.build_attractor(), config)
    assert densities.shape == (60 * 40,)
    assert densities.max() == 1.0
    grid = densities.reshape(40, 60)
    assert grid[:4].sum() == 0 and grid[:, :6].sum() == 0


def test_save_png_puts_first_row_at_bottom(tmp_path: Path) -> None:
    width, height = 6, 4
    densities = np.zeros(width * height)
    densities[0] = 1.0
    path = tmp_path / "field.png"

    save_png(densities, width, height, path, ColorParams(lightness=1.0))

    image = plt.imread(path)
    assert image.shape[:2] == (height, width)
    assert image[height - 1, 0, :3].tolist() == [1.0, 1.0, 1.0]
    assert image[0, 0, :3].tolist() == [0.0, 0.0, 0.0]


def test_save_png_unwritable_path(tmp_path: Path) -> None:
    with pytest.raises(IOFailure):
        save_png(np.zeros(4), 2, 2, tmp_path / "missing" / "field.png")


def test_render_config_yaml_round_trip(tmp_path: Path) -> None:
    config = RenderConfig(attractor='henon', params=[1.4, 0.3], steps=5000, width=320, height=200,
                          color=ColorParams(hue=0.1, gamma=0.5))
    path = tmp_path / "render.yaml"
    config.to_yaml(path)
    assert RenderConfig.from_yaml(path) == config


def test_render_config_validation() -> None:
    with pytest.raises(ValueError):
        RenderConfig(steps=0)
    with pytest.raises(ValueError):
        RenderConfig(chunk_size=0)


def test_interpolate_params() -> None:
    path = interpolate_params([0.0, 1.0], [1.0, 3.0], 3)
    assert path == [[0.0, 1.0], [0.5, 2.0], [1.0, 3.0]]
    with pytest.raises(ValueError):
        interpolate_params([0.0], [1.0, 2.0], 3)
    with pytest.raises(ValueError):
        interpolate_params([0.0], [1.0], 1)


def test_create_morphing_animation(tmp_path: Path) -> None:
    attractor = create_attractor('clifford')
    filename = create_morphing_animation(
        attractor, [-1.4, 1.6, 1.0, 0.7], [-1.7, 1.3, -0.1, -1.2], str(tmp_path),
        frames=3, steps=2_000, width=40, height=40, fps=5
    )
    assert Path(filename).exists()
    assert Path(filename).name == "morphing_clifford.gif"
    assert attractor.params == {'a': -1.7, 'b': 1.3, 'c': -0.1, 'd': -1.2}


def test_render_config_rejects_unknown_keys() -> None:
    with pytest.raises(ValueError, match="valid keys"):
        RenderConfig.from_dict({'stepz': 10})
    with pytest.raises(ValueError, match="unknown color keys"):
        RenderConfig.from_dict({'color': {'hew': 0.2}})


def test_render_config_missing_yaml_raises_io_failure(tmp_path: Path) -> None:
    path = tmp_path / "missing.yaml"
    with pytest.raises(IOFailure) as excinfo:
        RenderConfig.from_yaml(path)
    assert excinfo.value.path == str(path)
    assert isinstance(excinfo.value.cause, FileNotFoundError)
