"""Recording random source with history replay.

Every draw is recorded with its cursor index and the bounds it was made
with. A new source built from the same seed and a recorded history replays
the recorded operations to fast-forward its generator, so its next draw
continues the original sequence.
"""
import logging
import random
from collections.abc import Iterable
from typing import Any

from randsource.config import settings
from randsource.errors import RangeError
from randsource.logic.models import (
    INT64_MAX,
    INT64_MIN,
    FloatDraw,
    IntegerDraw,
    RandomValue,
    dump_history,
    parse_history,
    sort_by_index,
    validate_history,
)


logger = logging.getLogger(__name__)

# Unbounded integer draws fall in [0, INT32_MAX), as System.Random.Next() does
INT32_MAX = 2**31 - 1

UNSEEDED = 0


class RandomSource:
    """
    Seeded random source that records every value it produces.

    Each draw consumes exactly one sample of the underlying Mersenne Twister,
    whatever its kind, so replaying a history advances the generator to the
    same position the recording source had reached.

    Not safe for concurrent use.
    """

    def __init__(self, seed: int):
        self._seed = seed
        self._rng = random.Random(seed)
        self._values: list[RandomValue] = []
        self._index = 0
        logger.debug("RandomSource created with seed=%d", seed)

    @classmethod
    def continue_from(
        cls, seed: int, previous_values: Iterable[RandomValue | dict[str, Any]] | None
    ) -> "RandomSource":
        """
        Build a source positioned after the draws in `previous_values`.

        Records may be models or JSON-shaped mappings. The new source starts
        with an empty history and cursor index 0.

        Raises:
            InvalidInputError: previous_values is None.
            FormatError: a record does not validate.
        """
        values = validate_history(previous_values)
        source = cls(seed)
        source._replay(values)
        return source

    @classmethod
    def continue_from_json(cls, seed: int, previous_values_json: str | None) -> "RandomSource":
        """
        Build a source positioned after the draws in a serialized history.

        Raises:
            InvalidInputError: the JSON string is missing or empty.
            FormatError: the JSON does not parse into history records.
        """
        values = parse_history(previous_values_json)
        source = cls(seed)
        source._replay(values)
        return source

    def _replay(self, values: Iterable[RandomValue]) -> None:
        """Re-run each recorded operation against the generator, ascending by index."""
        replayed = 0
        for val in sort_by_index(values):
            if isinstance(val, IntegerDraw):
                if val.is_unbounded:
                    self._next_unbounded()
                else:
                    self._next_ranged(val.min_value, val.max_value)
            elif isinstance(val, FloatDraw):
                # Float records replay as unbounded integer draws; both
                # consume one sample, so the generator position matches.
                self._next_unbounded()
            replayed += 1
        logger.debug("Replayed %d draws for seed=%d", replayed, self._seed)

    # === Generator primitives (one sample each) ===

    def _next_unbounded(self) -> int:
        return int(self._rng.random() * INT32_MAX)

    def _next_ranged(self, min_inclusive: int, max_exclusive: int) -> int:
        span = max_exclusive - min_inclusive
        offset = int(self._rng.random() * span)
        # Float rounding can reach the upper bound on very wide spans
        if span > 0 and offset >= span:
            offset = span - 1
        return min_inclusive + offset

    def _next_float(self) -> float:
        return self._rng.random()

    def _record(self, value: RandomValue) -> None:
        # Cursor moves only once the record exists
        self._values.append(value)
        self._index = value.index

    # === Draws ===

    def draw_unbounded_integer(self) -> int:
        """Return a non-negative integer below 2**31 - 1."""
        val = self._next_unbounded()
        self._record(IntegerDraw(index=self._index + 1, value=val, min_value=0, max_value=0))
        return val

    def draw_bounded_integer(self, max_exclusive: int) -> int:
        """
        Return an integer in [0, max_exclusive).

        Returns 0 when max_exclusive is 0.

        Raises:
            TypeError: max_exclusive is not an int.
            RangeError: max_exclusive is negative or above the int64 range.
        """
        _check_int64(max_exclusive)
        if max_exclusive < 0:
            raise RangeError(f"max_exclusive must be >= 0, got {max_exclusive}")

        val = self._next_ranged(0, max_exclusive)
        self._record(
            IntegerDraw(index=self._index + 1, value=val, min_value=0, max_value=max_exclusive)
        )
        return val

    def draw_ranged_integer(self, min_inclusive: int, max_exclusive: int) -> int:
        """
        Return an integer in [min_inclusive, max_exclusive).

        Returns min_inclusive when both bounds are equal.

        Raises:
            TypeError: a bound is not an int.
            RangeError: min_inclusive > max_exclusive, or a bound is outside
                the int64 range.
        """
        _check_int64(min_inclusive)
        _check_int64(max_exclusive)
        if min_inclusive > max_exclusive:
            raise RangeError(
                f"min_inclusive {min_inclusive} is greater than max_exclusive {max_exclusive}"
            )

        val = self._next_ranged(min_inclusive, max_exclusive)
        self._record(
            IntegerDraw(
                index=self._index + 1,
                value=val,
                min_value=min_inclusive,
                max_value=max_exclusive,
            )
        )
        return val

    def draw_float(self) -> float:
        """Return a float in [0.0, 1.0)."""
        val = self._next_float()
        self._record(FloatDraw(index=self._index + 1, value=val))
        return val

    def next(self, *bounds: int) -> int:
        """
        System.Random-style integer draw.

        next() is unbounded, next(max) is [0, max), next(min, max) is
        [min, max).
        """
        if not bounds:
            return self.draw_unbounded_integer()
        if len(bounds) == 1:
            return self.draw_bounded_integer(bounds[0])
        if len(bounds) == 2:
            return self.draw_ranged_integer(bounds[0], bounds[1])
        raise TypeError(f"next() takes at most 2 bounds ({len(bounds)} given)")

    def next_double(self) -> float:
        """System.Random-style float draw."""
        return self.draw_float()

    # === Introspection ===

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def index(self) -> int:
        """Number of draws since construction or the last reset."""
        return self._index

    def __len__(self) -> int:
        return len(self._values)

    def history(self) -> list[RandomValue]:
        """Snapshot of recorded draws in ascending index order."""
        return sort_by_index(self._values)

    def serialized_history(self) -> str:
        """Recorded draws as an indented JSON array."""
        return dump_history(self._values, indent=settings.json_indent)

    def reset(self) -> None:
        """
        Reseed the generator and drop the history.

        Seed 0 means "unseeded": the generator is reseeded from OS entropy,
        so draws after the reset are not reproducible.
        """
        if self._seed == UNSEEDED:
            logger.warning("Resetting unseeded RandomSource; draws are no longer reproducible")
            self._rng = random.Random()
        else:
            self._rng = random.Random(self._seed)
        self._values.clear()
        self._index = 0
        logger.debug("RandomSource reset (seed=%d)", self._seed)


def _check_int64(bound: int) -> None:
    if isinstance(bound, bool) or not isinstance(bound, int):
        raise TypeError(f"Bound must be an int, got {type(bound).__name__}")
    if not INT64_MIN <= bound <= INT64_MAX:
        raise RangeError(f"Bound {bound} is outside the int64 range")
