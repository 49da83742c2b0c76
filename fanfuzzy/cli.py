"""
Command line front end.

Usage:
  python -m fanfuzzy compute 27 50
  python -m fanfuzzy --step 1 compute 10 10 --json
  python -m fanfuzzy surface --t-step 5 --h-step 10 --csv surface.csv
  python -m fanfuzzy plot --temperature 33 --humidity 70 --output fan.png
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import numpy as np

from .controller import speed_category
from .engine import EngineConfig, FuzzyEngine


def _inclusive_range(lo: float, hi: float, step: float) -> np.ndarray:
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")
    return np.arange(lo, hi + step / 2, step)


def cmd_compute(engine: FuzzyEngine, args: argparse.Namespace) -> int:
    result = engine.compute(args.temperature, args.humidity)
    if args.json:
        print(json.dumps(result.as_dict(), indent=2))
        return 0

    print(f"Temp={result.temperature}°C  Hum={result.humidity}%  => Fan speed {result.output}% "
          f"({speed_category(result.output)})")
    for var, degrees in result.fuzzified.items():
        print(f"  {var}: " + "  ".join(f"{k}={v:.2f}" for k, v in degrees.items()))
    if result.active:
        print("  rules: " + "  ".join(f"{k}={v:.2f}" for k, v in result.alpha.items()))
    else:
        print("  rules: none active")
    return 0


def cmd_surface(engine: FuzzyEngine, args: argparse.Namespace) -> int:
    from .surface import sweep

    df = sweep(
        engine,
        _inclusive_range(args.t_min, args.t_max, args.t_step),
        _inclusive_range(args.h_min, args.h_max, args.h_step),
    )
    if args.csv is not None:
        df.to_csv(args.csv, index=False)
        print(f"Wrote {len(df)} rows to {args.csv}")
    else:
        print(df.pivot(index="temperature", columns="humidity", values="output").to_string())
    return 0


def cmd_plot(engine: FuzzyEngine, args: argparse.Namespace) -> int:
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    from .plotting import plot_memberships, plot_result

    if args.temperature is None or args.humidity is None:
        fig = plot_memberships()
    else:
        fig = plot_result(args.temperature, args.humidity, engine)
    fig.savefig(args.output, bbox_inches="tight", pad_inches=0.2)
    plt.close(fig)
    print(f"Saved plot to {args.output}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fanfuzzy", description="Fuzzy (Mamdani) fan speed controller")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--step", type=float, default=EngineConfig.sample_step,
                        help="Output sampling step for the centroid (default: %(default)s)")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("compute", help="Evaluate one temperature/humidity pair")
    p.add_argument("temperature", type=float, help="Temperature in °C")
    p.add_argument("humidity", type=float, help="Relative humidity in %%")
    p.add_argument("--json", action="store_true", help="Print the full result as JSON")
    p.set_defaults(func=cmd_compute)

    p = sub.add_parser("surface", help="Sweep a temperature x humidity grid")
    p.add_argument("--t-min", type=float, default=15.0)
    p.add_argument("--t-max", type=float, default=40.0)
    p.add_argument("--t-step", type=float, default=1.0)
    p.add_argument("--h-min", type=float, default=0.0)
    p.add_argument("--h-max", type=float, default=100.0)
    p.add_argument("--h-step", type=float, default=5.0)
    p.add_argument("--csv", type=Path, default=None, help="Write the sweep to a CSV file")
    p.set_defaults(func=cmd_surface)

    p = sub.add_parser("plot", help="Plot membership functions, or one evaluation")
    p.add_argument("--temperature", type=float, default=None)
    p.add_argument("--humidity", type=float, default=None)
    p.add_argument("--output", type=Path, required=True, help="PNG file to write")
    p.set_defaults(func=cmd_plot)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        engine = FuzzyEngine(EngineConfig(sample_step=args.step))
        return args.func(engine, args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
