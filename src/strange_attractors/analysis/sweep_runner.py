"""
Parameter sweep runner - renders a gallery of attractors over a parameter grid
"""

import os
import time
import json
from typing import Dict, List, Any, Optional
from dataclasses import dataclass, asdict, field

from .param_space import ParamSpace
from ..attractors import AVAILABLE_ATTRACTORS
from ..compute.density import coverage
from ..errors import AttractorError
from ..storage.bookmarks import BookmarkFile
from ..storage.orbit_file import format_float
from ..viz.color import ColorParams
from ..viz.render import RenderConfig, render_attractor, save_png


@dataclass
class SweepConfig:
    attractor_name: str
    steps: int = 200_000
    width: int = 400
    height: int = 400
    border: float = 0.05
    chunk_size: int = 100_000
    # points whose orbit lights up less of the grid are treated as collapsed
    min_coverage: float = 0.02
    output_dir: str = "sweep_results"
    save_orbits: bool = False
    bookmark_file: Optional[str] = None
    color: ColorParams = field(default_factory=ColorParams)

    def __post_init__(self):
        if self.attractor_name not in AVAILABLE_ATTRACTORS:
            raise ValueError(f"unknown attractor '{self.attractor_name}', "
                             f"must be one of {sorted(AVAILABLE_ATTRACTORS)}")
        if isinstance(self.color, dict):
            self.color = ColorParams(**self.color)

    def render_config(self, params: List[float]) -> RenderConfig:
        return RenderConfig(
            attractor=self.attractor_name, params=params, steps=self.steps,
            width=self.width, height=self.height, border=self.border,
            chunk_size=self.chunk_size, color=self.color
        )


@dataclass
class ParamPointResult:
    """result for a single parameter point"""
    params: Dict[str, float]
    coverage: float
    kept: bool
    compute_time: float
    image_file: Optional[str] = None
    orbit_file: Optional[str] = None
    error: Optional[str] = None


class SweepResults:
    """container for sweep results and summary"""

    def __init__(self, config: SweepConfig, param_space: ParamSpace):
        self.config = config
        self.param_space = param_space
        self.results: List[ParamPointResult] = []
        self.start_time = time.time()
        self.end_time: Optional[float] = None

    def add_result(self, result: ParamPointResult):
        self.results.append(result)

    def finalize(self):
        self.end_time = time.time()

    @property
    def kept(self) -> List[ParamPointResult]:
        return [r for r in self.results if r.kept]

    def get_summary(self) -> Dict[str, Any]:
        if not self.results:
            return {}

        total_time = (self.end_time or time.time()) - self.start_time
        coverages = [r.coverage for r in self.results if r.error is None]
        return {
            'total_param_points': len(self.results),
            'kept_points': len(self.kept),
            'failed_points': sum(1 for r in self.results if r.error is not None),
            'total_compute_time': total_time,
            'avg_time_per_point': total_time / len(self.results),
            'best_coverage': max(coverages) if coverages else None,
        }

    def save(self, filepath: str):
        data = {
            'config': asdict(self.config),
            'param_space_config': self.param_space.config,
            'results': [asdict(r) for r in self.results],
            'summary': self.get_summary(),
            'metadata': {
                'start_time': self.start_time,
                'end_time': self.end_time,
                'param_space_size': self.param_space.size()
            }
        }
        with open(filepath, 'w') as f:
            json.dump(data, f, indent=2, default=str)


def point_basename(name: str, params: Dict[str, float]) -> str:
    """file stem embedding the parameter values, e.g. clifford-a=-1.4-b=1.6"""
    return "-".join([name] + [f"{k}={format_float(v)}" for k, v in params.items()])


class SweepRunner:
    """renders every point of a parameter space and keeps the interesting ones"""

    def __init__(self, config: SweepConfig):
        self.config = config
        self.attractor_cls = AVAILABLE_ATTRACTORS[config.attractor_name]
        os.makedirs(config.output_dir, exist_ok=True)
        self.bookmarks = BookmarkFile(config.bookmark_file) if config.bookmark_file else None

    def run_single_point(self, params: Dict[str, float]) -> ParamPointResult:
        start_time = time.time()
        render_config = self.config.render_config(list(params.values()))
        attractor = render_config.build_attractor()
        densities = render_attractor(attractor, render_config)
        point_coverage = coverage(densities)
        kept = point_coverage >= self.config.min_coverage

        result = ParamPointResult(params=dict(params), coverage=point_coverage,
                                  kept=kept, compute_time=0.0)
        if kept:
            stem = os.path.join(self.config.output_dir, point_basename(attractor.name, params))
            result.image_file = save_png(densities, render_config.width, render_config.height,
                                         stem + ".png", render_config.color)
            if self.config.save_orbits:
                attractor.to_file(stem + ".txt")
                result.orbit_file = stem + ".txt"
            if self.bookmarks is not None:
                self.bookmarks.add(params)

        result.compute_time = time.time() - start_time
        return result

    def run(self, param_space: ParamSpace) -> SweepResults:
        """run complete parameter sweep"""
        print(f"starting sweep of {self.config.attractor_name} with {param_space.size():,} parameter points")
        results = SweepResults(self.config, param_space)

        for i, params in enumerate(param_space.iter_params(), 1):
            print(f"running param point {i}/{param_space.size()}: {params}")
            try:
                result = self.run_single_point(params)
            except (AttractorError, ValueError) as e:
                print(f"  → error: {e}")
                result = ParamPointResult(params=dict(params), coverage=0.0, kept=False,
                                          compute_time=0.0, error=str(e))
            else:
                status = "kept" if result.kept else "discarded"
                print(f"  → {status}, coverage {result.coverage:.2%} ({result.compute_time:.2f}s)")
            results.add_result(result)

        results.finalize()
        final_file = os.path.join(self.config.output_dir, "sweep_results.json")
        results.save(final_file)

        summary = results.get_summary()
        if summary:
            print(f"\nsweep completed!")
            print(f"total points: {summary['total_param_points']}")
            print(f"kept: {summary['kept_points']}, failed: {summary['failed_points']}")
            print(f"total time: {summary['total_compute_time']:.2f}s")
        print(f"results saved to {final_file}")
        return results
