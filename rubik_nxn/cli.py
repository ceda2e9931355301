"""CLI entrypoint for the cube engine."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from .animation import AsyncioTicker, FixedTicker
from .config import CubeConfig, load_config
from .engine import CubeEvent, RubikCube
from .state_codec import format_move, parse_move


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="N x N x N disc rotation cube")
    sub = parser.add_subparsers(dest="mode", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", type=str, default=None, help="Path to YAML cube config")
    common.add_argument("--dimensions", type=int, default=None)
    common.add_argument("--history-size", type=int, default=None)
    common.add_argument("--seed", type=int, default=None)
    common.add_argument("--speed", type=float, default=None, help="Quarter turns per second")
    common.add_argument("--realtime", action="store_true", help="Animate at the configured tick rate")
    common.add_argument("--log-level", type=str, default="WARNING")

    shuffle = sub.add_parser("shuffle", parents=[common], help="Shuffle a new cube and print the moves")
    shuffle.add_argument("--count", type=int, default=None)

    play = sub.add_parser("play", parents=[common], help="Apply moves like X0+ Y2- undo shuffle:5")
    play.add_argument("moves", nargs="*")
    play.add_argument("--shuffle-first", action="store_true", help="Shuffle before applying the moves")

    return parser


def resolve_config(args: argparse.Namespace) -> CubeConfig:
    config = load_config(args.config) if args.config else CubeConfig()
    return config.merged(
        dimensions=args.dimensions,
        history_size=args.history_size,
        seed=args.seed,
        rotation_speed=args.speed,
        undo_speed=args.speed,
        shuffle_speed=args.speed,
        shuffle_count=getattr(args, "count", None),
    )


def _make_cube(config: CubeConfig, realtime: bool) -> RubikCube:
    ticker = AsyncioTicker(config.tick_rate) if realtime else FixedTicker(dt=1.0 / config.tick_rate)
    return RubikCube.from_config(config, ticker=ticker)


async def _run_shuffle(config: CubeConfig, realtime: bool) -> dict:
    cube = _make_cube(config, realtime)
    moves = await cube.shuffle(config.shuffle_count, speed=config.shuffle_speed)
    return {
        "dimensions": cube.dimensions,
        "moves": [format_move(m) for m in moves],
        "solved": cube.is_solved(),
    }


async def _run_play(config: CubeConfig, tokens: list[str], shuffle_first: bool, realtime: bool) -> dict:
    cube = _make_cube(config, realtime)
    cube.add_listener(CubeEvent.SOLVED, lambda c: print(json.dumps({"event": "solved"}), flush=True))

    if shuffle_first or config.shuffle_on_start:
        moves = await cube.shuffle(config.shuffle_count, speed=config.shuffle_speed)
        print(json.dumps({"shuffle": [format_move(m) for m in moves]}), flush=True)

    for token in tokens:
        if token.lower() == "undo":
            move = await cube.undo(speed=config.undo_speed)
            print(json.dumps({"undo": format_move(move) if move else None}), flush=True)
            continue
        if token.lower().startswith("shuffle"):
            _, _, count = token.partition(":")
            moves = await cube.shuffle(int(count) if count else config.shuffle_count, speed=config.shuffle_speed)
            print(json.dumps({"shuffle": [format_move(m) for m in moves]}), flush=True)
            continue
        move = parse_move(token, cube.border)
        await cube.rotate(move.axis, move.layer, move.positive, speed=config.rotation_speed)
        print(json.dumps({"move": format_move(move), "solved": cube.is_solved()}), flush=True)

    payload = cube.state_payload()
    payload.pop("pieces")
    return payload


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")

    try:
        config = resolve_config(args)
    except ValueError as exc:
        parser.error(str(exc))

    try:
        if args.mode == "shuffle":
            result = asyncio.run(_run_shuffle(config, args.realtime))
        elif args.mode == "play":
            result = asyncio.run(_run_play(config, args.moves, args.shuffle_first, args.realtime))
        else:
            parser.error(f"Unsupported mode: {args.mode}")
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
