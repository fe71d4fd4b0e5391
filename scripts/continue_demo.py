#!/usr/bin/env python3
"""
Save / restore / continue demo.

Draws a fixed sequence on one source, serializes its history, continues a
second source from that history, then shows that both produce the same next
values.

Usage:
    python -m scripts.continue_demo --seed 0
    python -m scripts.continue_demo --seed 42 --save ../out/history.json
    python -m scripts.continue_demo --seed 42 --load ../out/history.json
"""
import argparse
import logging
import sys
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from randsource.config import settings
from randsource.errors import RandomSourceError
from randsource.logic.rng import RandomSource


def draw_scenario(source: RandomSource) -> list[int | float]:
    """Run the six-draw scenario: next(), next(10), double, next(2, 15), double, next(15)."""
    return [
        source.next(),
        source.next(10),
        source.next_double(),
        source.next(2, 15),
        source.next_double(),
        source.next(15),
    ]


def draw_continuation(source: RandomSource) -> tuple[int, float]:
    """The two draws compared after a restore."""
    return source.next(10), source.next_double()


def configure_logging(verbose: bool) -> None:
    level = "DEBUG" if verbose or settings.debug else settings.log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Record draws, restore from the JSON history and continue"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=settings.demo_seed,
        help=f"Generator seed (default: {settings.demo_seed})",
    )
    parser.add_argument(
        "--save",
        type=str,
        default=None,
        help="Write the recorded history JSON to this path",
    )
    parser.add_argument(
        "--load",
        type=str,
        default=None,
        help="Continue the second source from this history file instead",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        original = RandomSource(args.seed)
        draw_scenario(original)
        history_json = original.serialized_history()

        print("Random #1 Generated Values in Json")
        print(history_json)
        print()

        if args.save:
            output_path = Path(args.save)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(history_json, encoding="utf-8")
            print(f"History written to: {args.save}")
            print()

        if args.load:
            restore_json = Path(args.load).read_text(encoding="utf-8")
        else:
            restore_json = history_json

        print("Random #2 Continue From Previous Values (in Json)")
        restored = RandomSource.continue_from_json(args.seed, restore_json)
        for value in draw_continuation(restored):
            print(value)
        print()

        print("Random #1 Continue Values")
        for value in draw_continuation(original):
            print(value)
        print()
    except RandomSourceError as e:
        print(f"ERROR [{e.code.value}]: {e.message}", file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
