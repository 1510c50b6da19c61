"""CLI main module with subcommands for trace, inspect, and validate.

Usage:
    python -m lensbench.cli trace --lens 6 --lens 4:1.6 --distance 1.0 --out fan.json
    python -m lensbench.cli inspect --lens=-3:1.5:biconcave
    python -m lensbench.cli validate --config settings.yaml
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict, dataclass
from pathlib import Path

from ..core.config import BenchSettings, load_settings
from ..core.errors import LensbenchError
from ..core.logging import get_logger, setup_logging
from ..optics.layout import AxialLayout
from ..optics.lenses import LensType
from ..optics.outline import lens_outline
from ..optics.state import LensBench
from ..optics.trace import trace_fan
from ..validation.cases import run_all_cases

logger = get_logger(__name__)


@dataclass(frozen=True)
class LensSpec:
    power: float
    index: float | None = None
    lens_type: LensType = LensType.BICONVEX


def parse_lens(text: str) -> LensSpec:
    """Parse ``POWER[:INDEX[:TYPE]]``."""
    parts = text.split(":")
    if not 1 <= len(parts) <= 3:
        raise argparse.ArgumentTypeError(f"expected POWER[:INDEX[:TYPE]], got {text!r}")
    try:
        power = float(parts[0])
        index = float(parts[1]) if len(parts) > 1 and parts[1] else None
        lens_type = LensType(parts[2]) if len(parts) > 2 else LensType.BICONVEX
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid lens {text!r}: {e}") from e
    return LensSpec(power=power, index=index, lens_type=lens_type)


def load_bench_settings(args: argparse.Namespace) -> BenchSettings:
    if getattr(args, "config", None):
        return load_settings(args.config)
    return BenchSettings()


def build_bench(args: argparse.Namespace, settings: BenchSettings) -> LensBench:
    """Replay the command line lenses and distances as bench operations."""
    bench = LensBench(settings)
    specs: list[LensSpec] = args.lens or []
    if len(specs) > settings.max_lenses:
        logger.warning(
            "extra lenses ignored",
            {"given": len(specs), "max_lenses": settings.max_lenses},
        )

    for spec in specs:
        before = len(bench.lenses)
        bench.add_lens(spec.lens_type)
        if len(bench.lenses) == before:
            continue
        lens_id = bench.lenses[-1].id
        bench.update_power(lens_id, spec.power)
        if spec.index is not None:
            bench.update_index(lens_id, spec.index)
        if bench.lenses[-1].power != spec.power or (
            spec.index is not None and bench.lenses[-1].index != spec.index
        ):
            logger.warning("lens value rejected", {"id": lens_id, **asdict(spec)})

    gaps: list[float] = args.distance or []
    if len(gaps) > len(bench.distances):
        logger.warning(
            "extra distances ignored",
            {"given": len(gaps), "gaps": len(bench.distances)},
        )

    for i, distance in enumerate(gaps[: len(bench.distances)]):
        bench.update_distance(i, distance)
        if bench.distances[i] != distance:
            logger.warning("distance rejected", {"position": i, "distance": distance})
    return bench


def describe(bench: LensBench) -> dict:
    """Lenses, layout, outlines, labels and rays for one snapshot."""
    snapshot = bench.snapshot
    settings = bench.settings
    layout = AxialLayout.from_settings(settings)
    fan = trace_fan(snapshot)

    outlines = []
    for k, lens in enumerate(snapshot.lenses):
        outline = lens_outline(lens, layout.position_of(k, snapshot.distances), settings.viewport)
        if outline is not None:
            outlines.append(asdict(outline))

    labels = [
        {"x": layout.midpoint(i, snapshot.distances), "text": f"{d:.2f}"}
        for i, d in enumerate(snapshot.distances)
    ]

    return {
        **snapshot.to_dict(),
        "outlines": outlines,
        "labels": labels,
        "fan": fan.to_dict(),
    }


def cmd_trace(args: argparse.Namespace) -> int:
    """Trace the ray fan and emit JSON to stdout or ``--out``."""
    try:
        settings = load_bench_settings(args)
        bench = build_bench(args, settings)
        text = json.dumps(describe(bench), indent=2)

        if args.out:
            out_path = Path(args.out)
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(text)
            print("Wrote", out_path)
        else:
            print(text)
        return 0
    except (LensbenchError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_inspect(args: argparse.Namespace) -> int:
    """Print the lens table and gaps."""
    try:
        settings = load_bench_settings(args)
        bench = build_bench(args, settings)
    except (LensbenchError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    layout = AxialLayout.from_settings(settings)
    snapshot = bench.snapshot

    print("Lenses:")
    print("-" * 60)
    print(f"  {'id':>3} {'type':10} {'power':>8} {'index':>6} {'r (m)':>9} {'x':>8}")
    for k, lens in enumerate(snapshot.lenses):
        r = f"{lens.r:.4f}" if lens.r is not None else "-"
        power = f"{lens.power:.2f}" if lens.power is not None else "-"
        x = layout.position_of(k, snapshot.distances)
        print(f"  {lens.id:>3} {lens.type.value:10} {power:>8} {lens.index:>6.2f} {r:>9} {x:>8.1f}")
    print()

    print("Distances:")
    print("-" * 60)
    if not snapshot.distances:
        print("  (none)")
    for i, d in enumerate(snapshot.distances):
        print(f"  lens {i + 1} -> lens {i + 2}: {d:.2f} m")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Run scenario checks against the bench."""
    try:
        settings = load_bench_settings(args)
    except (LensbenchError, FileNotFoundError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 2

    print("Running validation suite...")
    results = run_all_cases(settings)

    print("\nValidation Results:")
    print("-" * 40)
    for result in results:
        status = "PASS" if result.passed else "FAIL"
        print(f"  {result.name:30} {status}  {result.detail}")
    print("-" * 40)

    if all(result.passed for result in results):
        print("\nAll validation cases passed")
        return 0
    print("\nSome validation cases failed")
    return 1


def add_config_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        required=False,
        help="Path to YAML/JSON settings file",
    )


def add_bench_arguments(parser: argparse.ArgumentParser) -> None:
    add_config_argument(parser)
    parser.add_argument(
        "--lens",
        "-l",
        type=parse_lens,
        action="append",
        metavar="POWER[:INDEX[:TYPE]]",
        help="Add a lens (repeatable, axis order)",
    )
    parser.add_argument(
        "--distance",
        "-d",
        type=float,
        action="append",
        metavar="METERS",
        help="Gap after lens N (repeatable, axis order)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lensbench",
        description="Thin lens bench: radii, layout and ray trace",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Optional JSON lines log file",
    )
    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # Trace subcommand
    parser_trace = subparsers.add_parser(
        "trace",
        help="Trace the ray fan and write JSON geometry",
    )
    add_bench_arguments(parser_trace)
    parser_trace.add_argument(
        "--out",
        "-o",
        type=Path,
        default=None,
        help="Output JSON file (default: stdout)",
    )
    parser_trace.set_defaults(func=cmd_trace)

    # Inspect subcommand
    parser_inspect = subparsers.add_parser(
        "inspect",
        help="Print lens radii, positions and distances",
    )
    add_bench_arguments(parser_inspect)
    parser_inspect.set_defaults(func=cmd_inspect)

    # Validate subcommand
    parser_validate = subparsers.add_parser(
        "validate",
        help="Run scenario checks",
    )
    add_config_argument(parser_validate)
    parser_validate.set_defaults(func=cmd_validate)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        setup_logging(args.log_file, args.log_level)
    except ValueError as e:
        parser.error(str(e))
    return int(args.func(args) or 0)


if __name__ == "__main__":
    sys.exit(main())
