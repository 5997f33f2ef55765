import json
from pathlib import Path

import pytest

from strange_attractors.analysis import ParamSpace, SweepConfig, SweepRunner
from strange_attractors.analysis.sweep_runner import point_basename
from strange_attractors.attractors import AVAILABLE_ATTRACTORS
from strange_attractors.storage import BookmarkFile


def _space(name: str, config: dict) -> ParamSpace:
    return ParamSpace.for_attractor(config, AVAILABLE_ATTRACTORS[name])


def test_sweep_keeps_points_and_writes_outputs(tmp_path: Path) -> None:
    space = _space('clifford', {'parameters': {'c': {'type': 'values', 'values': [0.5, 1.0]}}})
    config = SweepConfig(
        attractor_name='clifford', steps=3_000, width=50, height=50,
        min_coverage=0.0, output_dir=str(tmp_path / "gallery"), save_orbits=True,
        bookmark_file=str(tmp_path / "special.txt"),
    )

    results = SweepRunner(config).run(space)

    assert len(results.results) == 2
    assert all(r.kept and r.error is None for r in results.results)
    for result in results.results:
        assert Path(result.image_file).exists()
        assert Path(result.orbit_file).exists()
        assert 0.0 < result.coverage <= 1.0

    assert len(BookmarkFile(tmp_path / "special.txt").load()) == 2

    saved = json.loads((tmp_path / "gallery" / "sweep_results.json").read_text())
    assert saved['summary']['total_param_points'] == 2
    assert saved['summary']['kept_points'] == 2
    assert saved['config']['attractor_name'] == 'clifford'


def test_sweep_discards_low_coverage_points(tmp_path: Path) -> None:
    space = _space('dejong', {'parameters': {'a': {'type': 'fixed', 'value': -2.0}}})
    config = SweepConfig(attractor_name='dejong', steps=1_000, width=20, height=20,
                         min_coverage=1.1, output_dir=str(tmp_path))

    results = SweepRunner(config).run(space)

    assert results.kept == []
    assert results.results[0].image_file is None
    assert not list(tmp_path.glob("*.png"))


def test_failed_point_is_recorded_and_sweep_continues(tmp_path: Path) -> None:
    # b = 0 collapses the y extent of the henon map
    space = _space('henon', {'parameters': {'b': {'type': 'values', 'values': [0.0, 0.3]}}})
    config = SweepConfig(attractor_name='henon', steps=2_000, width=30, height=30,
                         min_coverage=0.0, output_dir=str(tmp_path))

    results = SweepRunner(config).run(space)

    failed, ok = results.results
    assert failed.error is not None and not failed.kept
    assert ok.error is None and ok.kept
    assert results.get_summary()['failed_points'] == 1


def test_unknown_attractor_rejected() -> None:
    with pytest.raises(ValueError):
        SweepConfig(attractor_name='lorenz')


def test_point_basename() -> None:
    assert point_basename('clifford', {'a': -1.4, 'b': 1.0}) == "clifford-a=-1.4-b=1"
