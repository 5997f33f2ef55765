#!/usr/bin/env python3
"""
strange attractor rendering CLI

usage:
  strange-attractors render -a clifford -p '[-1.4, 1.6, 1.0, 0.7]' -o clifford.png
  strange-attractors render --config render.yaml --orbit-file orbit.txt --bookmark special.txt
  strange-attractors export -a dejong -n 100000 -o dejong.txt
  strange-attractors sweep -a clifford -s sweep.yaml -o gallery
  strange-attractors animate -a clifford --from '[-1.4, 1.6, 1.0, 0.7]' --to '[-1.7, 1.3, -0.1, -1.2]'
  strange-attractors bookmarks special.txt
"""

import argparse
import json
import sys
from typing import List, Optional

from .attractors import AVAILABLE_ATTRACTORS, create_attractor
from .errors import AttractorError
from .storage.bookmarks import BookmarkFile
from .viz.color import ColorParams


def resolve_params(attractor_name: str, raw: Optional[str]) -> Optional[List[float]]:
    """
    JSON list -> positional parameters; JSON object -> named overrides
    merged onto the attractor's defaults; nothing -> defaults.
    """
    if raw is None:
        return None
    cls = AVAILABLE_ATTRACTORS[attractor_name]
    value = json.loads(raw)
    if isinstance(value, list):
        return [float(v) for v in value]
    if isinstance(value, dict):
        unknown = set(value) - set(cls.PARAM_NAMES)
        if unknown:
            raise ValueError(f"unknown parameters {sorted(unknown)} for {attractor_name}, "
                             f"expected {list(cls.PARAM_NAMES)}")
        params = dict(zip(cls.PARAM_NAMES, cls.DEFAULT_PARAMS))
        params.update({k: float(v) for k, v in value.items()})
        return list(params.values())
    raise ValueError(f"parameters must be a JSON list or object, got {raw!r}")


def color_from_args(args) -> ColorParams:
    return ColorParams(hue=args.hue, saturation=args.saturation, lightness=args.lightness,
                       gamma=args.gamma, hue_shift=args.hue_shift)


def cmd_render(args) -> None:
    """step an attractor and save its density field as PNG"""
    from .viz.render import RenderConfig, render_attractor, save_png

    if args.config:
        config = RenderConfig.from_yaml(args.config)
    else:
        config = RenderConfig(
            attractor=args.attractor,
            params=resolve_params(args.attractor, args.params),
            steps=args.steps,
            width=args.width,
            height=args.height,
            border=args.border,
            chunk_size=args.chunk_size,
            color=color_from_args(args),
        )

    attractor = config.build_attractor()
    print(attractor)
    print(f"iterating {config.steps:,} steps into a {config.width}x{config.height} grid...")
    densities = render_attractor(attractor, config)

    output = save_png(densities, config.width, config.height, args.output, config.color)
    print(f"saved image to: {output}")

    if args.orbit_file:
        attractor.to_file(args.orbit_file)
        print(f"saved orbit to: {args.orbit_file}")

    if args.bookmark:
        added = BookmarkFile(args.bookmark).add(attractor.params)
        print(f"bookmarked in {args.bookmark}" if added else f"already bookmarked in {args.bookmark}")


def cmd_export(args) -> None:
    """write an attractor's orbit to a plain-text file"""
    attractor = create_attractor(args.attractor, resolve_params(args.attractor, args.params))
    attractor.step(args.steps + 1)
    attractor.to_file(args.output)
    print(f"saved {len(attractor):,} positions to: {args.output}")


def cmd_sweep(args) -> None:
    """render a gallery over a yaml parameter space"""
    from .analysis.param_space import ParamSpace
    from .analysis.sweep_runner import SweepRunner, SweepConfig

    param_space = ParamSpace.from_yaml(args.space, AVAILABLE_ATTRACTORS[args.attractor])
    print(param_space)
    config = SweepConfig(
        attractor_name=args.attractor,
        steps=args.steps,
        width=args.width,
        height=args.height,
        border=args.border,
        chunk_size=args.chunk_size,
        min_coverage=args.min_coverage,
        output_dir=args.output_dir,
        save_orbits=args.save_orbits,
        bookmark_file=args.bookmark,
        color=color_from_args(args),
    )
    SweepRunner(config).run(param_space)


def cmd_animate(args) -> None:
    """morph between two parameter sets and save a GIF"""
    from .viz.animation import create_morphing_animation

    start = resolve_params(args.attractor, args.start)
    end = resolve_params(args.attractor, args.end)
    attractor = create_attractor(args.attractor, start)
    create_morphing_animation(
        attractor, start, end, args.output_dir,
        frames=args.frames, steps=args.steps,
        width=args.width, height=args.height, fps=args.fps,
        color=color_from_args(args),
    )


def cmd_bookmarks(args) -> None:
    """list bookmarked parameter sets"""
    bookmarks = BookmarkFile(args.path).load()
    if not bookmarks:
        print(f"no bookmarks in {args.path}")
        return
    for i, params in enumerate(bookmarks):
        print(f"{i:3d}: " + ", ".join(f"{k}={v}" for k, v in params.items()))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='strange attractor rendering CLI')
    subparsers = parser.add_subparsers(dest='command', help='commands')

    # shared arguments
    def add_attractor_args(parser, steps):
        parser.add_argument('-a', '--attractor', type=str, default='clifford',
                            choices=sorted(AVAILABLE_ATTRACTORS),
                            help='attractor type')
        parser.add_argument('-n', '--steps', type=int, default=steps,
                            help='number of new orbit points')

    def add_image_args(parser, size):
        parser.add_argument('-W', '--width', type=int, default=size, help='image width in pixels')
        parser.add_argument('-H', '--height', type=int, default=size, help='image height in pixels')
        parser.add_argument('-b', '--border', type=float, default=0.05,
                            help='fraction of each side left as margin')
        parser.add_argument('--chunk-size', type=int, default=100_000,
                            help='orbit points computed per step call')
        parser.add_argument('--hue', type=float, default=0.6, help='base hue in [0, 1]')
        parser.add_argument('--saturation', type=float, default=0.8, help='saturation in [0, 1]')
        parser.add_argument('--lightness', type=float, default=1.0, help='peak lightness in [0, 1]')
        parser.add_argument('--gamma', type=float, default=0.3,
                            help='density exponent, lower brightens faint regions')
        parser.add_argument('--hue-shift', type=float, default=0.0,
                            help='hue added at full density')

    render_parser = subparsers.add_parser('render', help='render an attractor to PNG')
    add_attractor_args(render_parser, 1_000_000)
    add_image_args(render_parser, 800)
    render_parser.add_argument('-p', '--params', type=str, default=None,
                               help='parameters as JSON list or object')
    render_parser.add_argument('-c', '--config', type=str, default=None,
                               help='yaml render config, overrides the other render options')
    render_parser.add_argument('-o', '--output', type=str, default='attractor.png',
                               help='output PNG path')
    render_parser.add_argument('--orbit-file', type=str, default=None,
                               help='also write the orbit to this text file')
    render_parser.add_argument('--bookmark', type=str, default=None,
                               help='append the parameters to this bookmark file')

    export_parser = subparsers.add_parser('export', help='write an orbit text file')
    add_attractor_args(export_parser, 10_000)
    export_parser.add_argument('-p', '--params', type=str, default=None,
                               help='parameters as JSON list or object')
    export_parser.add_argument('-o', '--output', type=str, required=True,
                               help='output orbit file')

    sweep_parser = subparsers.add_parser('sweep', help='render a gallery over a parameter grid')
    add_attractor_args(sweep_parser, 200_000)
    add_image_args(sweep_parser, 400)
    sweep_parser.add_argument('-s', '--space', type=str, required=True,
                              help='yaml parameter space definition')
    sweep_parser.add_argument('-o', '--output-dir', type=str, default='sweep_results',
                              help='output directory')
    sweep_parser.add_argument('-m', '--min-coverage', type=float, default=0.02,
                              help='minimum fraction of lit pixels for a point to be kept')
    sweep_parser.add_argument('--save-orbits', action='store_true',
                              help='write an orbit file for every kept point')
    sweep_parser.add_argument('--bookmark', type=str, default=None,
                              help='bookmark file for kept points')

    animate_parser = subparsers.add_parser('animate', help='morph between two parameter sets')
    add_attractor_args(animate_parser, 200_000)
    add_image_args(animate_parser, 400)
    animate_parser.add_argument('--from', dest='start', type=str, required=True,
                                help='start parameters as JSON list or object')
    animate_parser.add_argument('--to', dest='end', type=str, required=True,
                                help='end parameters as JSON list or object')
    animate_parser.add_argument('-F', '--frames', type=int, default=30, help='number of frames')
    animate_parser.add_argument('-f', '--fps', type=int, default=15, help='frames per second')
    animate_parser.add_argument('-o', '--output-dir', type=str, default='.',
                                help='output directory')

    bookmarks_parser = subparsers.add_parser('bookmarks', help='list bookmarked parameters')
    bookmarks_parser.add_argument('path', type=str, help='bookmark file')

    return parser


COMMANDS = {
    'render': cmd_render,
    'export': cmd_export,
    'sweep': cmd_sweep,
    'animate': cmd_animate,
    'bookmarks': cmd_bookmarks,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        COMMANDS[args.command](args)
    except (AttractorError, ValueError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
