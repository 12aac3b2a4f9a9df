"""
CLI Adapter - Command-line interface.

Thin wrapper over compute_parameters(). Angles on the command line are
in degrees.
"""

from __future__ import annotations

import argparse
import json
import math
import sys

from soundstage.config import AudioParameterOptions
from soundstage.spatial.directivity import DirectivityPattern
from soundstage.spatial.distance import DistanceModel
from soundstage.spatial.geometry import Position, Wall
from soundstage.spatial.hearing import create_listener
from soundstage.spatial.parameters import AudioParameters, SourceConfig, compute_parameters


def _floats(text: str, count: tuple[int, ...], what: str) -> list[float]:
    try:
        values = [float(v) for v in text.split(",")]
    except ValueError:
        raise ValueError(f"{what} must be comma-separated numbers, got {text!r}") from None
    if len(values) not in count:
        expected = " or ".join(str(c) for c in count)
        raise ValueError(f"{what} needs {expected} values, got {len(values)}")
    return values


def _pose(text: str, what: str) -> tuple[Position, float]:
    values = _floats(text, (2, 3), what)
    facing = math.radians(values[2]) if len(values) == 3 else 0.0
    return Position(values[0], values[1]), facing


def _wall(text: str) -> Wall:
    x1, y1, x2, y2 = _floats(text, (4,), "--wall")
    return Wall(Position(x1, y1), Position(x2, y2))


def main(args: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="soundstage",
        description="2D positional audio parameter engine",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # params command
    params_parser = subparsers.add_parser("params", help="Compute audio parameters for one source")
    params_parser.add_argument("--listener", default="0,0,0", help="Listener X,Y[,FACING_DEG]")
    params_parser.add_argument("--source", required=True, help="Source X,Y[,FACING_DEG]")
    params_parser.add_argument(
        "--pattern",
        default=DirectivityPattern.CARDIOID.value,
        choices=[p.value for p in DirectivityPattern],
        help="Source directivity pattern",
    )
    params_parser.add_argument("--volume", type=float, default=1.0, help="Source base volume (0-1)")
    params_parser.add_argument(
        "--wall",
        action="append",
        default=[],
        help="Wall X1,Y1,X2,Y2 (repeatable)",
    )
    params_parser.add_argument(
        "--model",
        default=DistanceModel.INVERSE.value,
        choices=[m.value for m in DistanceModel],
        help="Distance model",
    )
    params_parser.add_argument("--max-distance", type=float, default=5.0, help="Cutoff distance")
    params_parser.add_argument("--rear-gain", type=float, default=0.3, help="Rear-gain floor (0-1)")
    params_parser.add_argument("--per-wall", type=float, default=0.3, help="Energy passed per wall (0-1)")
    params_parser.add_argument("--master-volume", type=float, default=1.0, help="Master volume (0-1)")
    params_parser.add_argument("--json", action="store_true", help="Print JSON")

    subparsers.add_parser("patterns", help="List directivity patterns")
    subparsers.add_parser("models", help="List distance models")
    subparsers.add_parser("version", help="Show version")

    parsed = parser.parse_args(args)

    if parsed.command is None:
        parser.print_help()
        return 0

    if parsed.command == "version":
        from soundstage import __version__
        print(f"soundstage {__version__}")
        return 0

    if parsed.command == "patterns":
        for pattern in DirectivityPattern:
            print(pattern.value)
        return 0

    if parsed.command == "models":
        for model in DistanceModel:
            print(model.value)
        return 0

    if parsed.command == "params":
        return _cmd_params(parsed)

    return 0


def _cmd_params(parsed: argparse.Namespace) -> int:
    """Compute and print parameters for one query."""
    try:
        listener_pos, listener_facing = _pose(parsed.listener, "--listener")
        source_pos, source_facing = _pose(parsed.source, "--source")
        walls = [_wall(w) for w in parsed.wall]
        options = AudioParameterOptions(
            distance_model=parsed.model,
            master_volume=parsed.master_volume,
            max_distance=parsed.max_distance,
            rear_gain_floor=parsed.rear_gain,
            attenuation_per_wall=parsed.per_wall,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    source = SourceConfig(
        id="cli",
        position=source_pos,
        facing=source_facing,
        directivity=parsed.pattern,
        volume=max(0.0, min(1.0, parsed.volume)),
    )
    listener = create_listener(listener_pos, listener_facing)
    params = compute_parameters(source, listener, walls, options)

    if parsed.json:
        print(json.dumps(params.to_dict(), indent=2))
    else:
        _print_params(params)
    return 0


def _print_params(params: AudioParameters) -> None:
    print(f"volume:            {params.volume:.4f}")
    print(f"pan:               {params.pan:+.4f}")
    print(f"distance:          {params.distance:.4f}")
    print(f"distance falloff:  {params.distance_attenuation:.4f}")
    print(f"directional gain:  {params.directional_gain:.4f}")
    print(f"walls:             {params.describe()}")


if __name__ == "__main__":
    sys.exit(main())
