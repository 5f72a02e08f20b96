#!/usr/bin/env python3
"""
fieldtrace command-line interface.

Usage:
    python -m fieldtrace --version          # Show version
    python -m fieldtrace demo               # Trace the default scene
    python -m fieldtrace demo --scene pair  # Trace another preset
"""

import argparse
import sys

DEFAULT_SEEDS = {
    "default": (0.0, 25.0),
    "single": (50.0, 0.0),
    "pair": (30.0, 50.0),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='fieldtrace',
        description='fieldtrace - Isopotential and field-line tracing for 2D electrostatics',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m fieldtrace demo                         # Default scene
  python -m fieldtrace demo --scene single          # Single point charge
  python -m fieldtrace demo --spacing 5 --profile   # Denser lines, with timings
  python -m fieldtrace demo --ticks 10 --dt 0.1     # Move the charges first
"""
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'fieldtrace {get_version()}'
    )

    subparsers = parser.add_subparsers(dest='command')

    demo = subparsers.add_parser('demo', help='Trace an isopotential and the field lines seeded on it')
    demo.add_argument('--scene', default='default', help='Preset scene: default, single or pair')
    demo.add_argument('--seed', nargs=2, type=float, metavar=('X', 'Y'),
                      help='Isopotential seed point (default depends on the scene)')
    demo.add_argument('--spacing', type=float, default=10.0, help='Seed spacing along the isopotential')
    demo.add_argument('--metric', choices=('arclength', 'flux'), default='arclength',
                      help='Spacing metric for field-line seeds')
    demo.add_argument('--steps', type=int, default=1000, help='Step budget per trace direction')
    demo.add_argument('--ticks', type=int, default=0, help='Simulation ticks to run before tracing')
    demo.add_argument('--dt', type=float, default=0.05, help='Simulation time step')
    demo.add_argument('--profile', action='store_true', help='Print timings and memory deltas')
    demo.add_argument('--quiet', action='store_true', help='Disable progress output')

    return parser


def run_demo(args) -> int:
    """Trace one isopotential of a preset scene and its field lines."""
    # Import here to avoid slow startup for --version
    from fieldtrace import CurveTracer, TraceOptions, configure, get_scene, step_sources
    from fieldtrace.utils.logging import Timer

    if args.quiet:
        configure(show_progress=False)

    try:
        scene = get_scene(args.scene)
        options = TraceOptions(max_steps=args.steps)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    seed = tuple(args.seed) if args.seed else DEFAULT_SEEDS.get(args.scene, (0.0, 25.0))
    quiet_timers = not args.profile

    print("=" * 60)
    print(f"Scene '{args.scene}': {len(scene)} sources")
    print("=" * 60)

    if args.ticks > 0:
        with Timer(f"Simulated {args.ticks} ticks", track_memory=args.profile, quiet=quiet_timers):
            for _ in range(args.ticks):
                step_sources(scene, args.dt)

    tracer = CurveTracer(scene, options)

    with Timer("Isopotential", track_memory=args.profile, quiet=quiet_timers):
        contour = tracer.isopotential(seed)

    try:
        with Timer("Field lines", track_memory=args.profile, quiet=quiet_timers):
            lines = tracer.field_lines_from_isopotential(contour, args.spacing, metric=args.metric)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    info = contour.summary()
    print(f"\nIsopotential from {seed}:")
    print(f"  points: {info['n_points']}, closed: {info['closed']}, "
          f"stop: {info['stop_reason']}, length: {info['length']:.2f}")

    print(f"\nField lines: {len(lines)}")
    if lines:
        n_points = [len(line) for line in lines]
        reasons = {}
        for line in lines:
            key = line.stop_reason.value
            reasons[key] = reasons.get(key, 0) + 1
        print(f"  points per line: min {min(n_points)}, max {max(n_points)}, total {sum(n_points)}")
        print("  stop reasons: " + ", ".join(f"{k}={v}" for k, v in sorted(reasons.items())))

    return 0


def main(argv=None) -> int:
    """Command-line interface for fieldtrace."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == 'demo':
        return run_demo(args)

    parser.print_help()
    return 0


def get_version():
    """Get fieldtrace version."""
    from fieldtrace import __version__
    return __version__


if __name__ == "__main__":
    sys.exit(main())
