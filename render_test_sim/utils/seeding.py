"""Deterministic pseudo-random source and per-prefix unique-ID allocator.

``SeededGenerator`` advances a linear congruential recurrence
``current = (current * A + C) mod M`` and derives every value from it, so two
generators built with the same seed and replayed with the same call sequence
produce identical output. The constants are frozen in ``config/constants.yaml``.
"""

from __future__ import annotations

import copy
import dataclasses
import logging
import math
import os
from typing import Any, Dict, Optional, Sequence, Tuple, TypeVar

import numpy as np

from ..core.constants import (
    DEFAULT_ID_PREFIX,
    DEFAULT_SEED,
    LCG_INCREMENT,
    LCG_MODULUS,
    LCG_MULTIPLIER,
    SEED_MAX_VALUE,
    SEED_MIN_VALUE,
    VALID_SEED_TYPES,
)
from .exceptions import ValidationError

_logger = logging.getLogger(__name__)

T = TypeVar("T")

__all__ = [
    "validate_seed",
    "get_random_seed",
    "GeneratorState",
    "SeededGenerator",
]


def validate_seed(seed: Any) -> Tuple[bool, Optional[int], str]:
    """Validate a generator seed without normalizing it.

    Accepts non-negative integers up to ``SEED_MAX_VALUE`` and numpy integer
    scalars (converted to ``int``). Booleans, floats, strings and negative
    values are rejected.

    Returns:
        Tuple[bool, Optional[int], str]: ``(is_valid, seed, error_message)``

    Examples:
        >>> validate_seed(42)
        (True, 42, '')
        >>> validate_seed(-1)[0]
        False
    """
    if isinstance(seed, bool) or not isinstance(
        seed, (*VALID_SEED_TYPES, np.integer)
    ):
        return (False, None, f"Seed must be integer type, got {type(seed).__name__}")

    seed = int(seed)
    if seed < SEED_MIN_VALUE:
        return (
            False,
            None,
            f"Seed must be non-negative, got {seed} (range: [{SEED_MIN_VALUE}, {SEED_MAX_VALUE}])",
        )
    if seed > SEED_MAX_VALUE:
        return (
            False,
            None,
            f"Seed {seed} exceeds maximum {SEED_MAX_VALUE}",
        )
    return (True, seed, "")


def get_random_seed() -> int:
    """Return an entropy-derived seed for coordinators created without one."""
    return int.from_bytes(os.urandom(4), "little") % (SEED_MAX_VALUE + 1)


@dataclasses.dataclass(frozen=True)
class GeneratorState:
    """Opaque snapshot of a :class:`SeededGenerator`."""

    seed: int
    current_seed: int
    counters: Dict[str, int]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "current_seed": self.current_seed,
            "counters": dict(self.counters),
        }


class SeededGenerator:
    """Linear congruential generator with per-prefix id counters.

    Args:
        seed: Non-negative integer seed; ``DEFAULT_SEED`` when omitted.

    Raises:
        ValidationError: If the seed fails :func:`validate_seed`.
    """

    def __init__(self, seed: int = DEFAULT_SEED):
        is_valid, validated, message = validate_seed(seed)
        if not is_valid:
            raise ValidationError(
                message,
                parameter_name="seed",
                parameter_value=seed,
                expected_format=f"int in [{SEED_MIN_VALUE}, {SEED_MAX_VALUE}]",
            )
        self.seed: int = validated  # type: ignore[assignment]
        self.current_seed: int = self.seed
        self.counters: Dict[str, int] = {}
        self.logger = logging.getLogger(f"{__name__}.SeededGenerator")

    def __repr__(self) -> str:
        return (
            f"SeededGenerator(seed={self.seed}, current_seed={self.current_seed}, "
            f"counters={len(self.counters)})"
        )

    def random(self) -> float:
        """Advance the recurrence and return a float in ``[0, 1)``."""
        self.current_seed = (
            self.current_seed * LCG_MULTIPLIER + LCG_INCREMENT
        ) % LCG_MODULUS
        return self.current_seed / LCG_MODULUS

    def random_int(self, min_value: int = 0, max_value: int = 100) -> int:
        """Integer in ``[min_value, max_value]``, inclusive on both ends."""
        return math.floor(self.random() * (max_value - min_value + 1)) + min_value

    def random_float(self, min_value: float = 0.0, max_value: float = 1.0) -> float:
        return self.random() * (max_value - min_value) + min_value

    def random_bool(self, threshold: float = 0.5) -> bool:
        return self.random() > threshold

    def choice(self, options: Sequence[T]) -> T:
        """Pick one element with a single ``random_int`` draw."""
        if not options:
            raise ValidationError(
                "Cannot choose from an empty sequence", parameter_name="options"
            )
        return options[self.random_int(0, len(options) - 1)]

    def generate_unique_id(self, prefix: str = DEFAULT_ID_PREFIX) -> str:
        count = self.counters.get(prefix, 0) + 1
        self.counters[prefix] = count
        return f"{prefix}-{count}"

    def reset_seed(self) -> None:
        self.current_seed = self.seed

    def reset_counters(self) -> None:
        """Clear all id counters and rewind the recurrence to the seed."""
        self.counters.clear()
        self.reset_seed()
        self.logger.debug("Generator reset to seed %d", self.seed)

    def save_state(self) -> GeneratorState:
        return GeneratorState(
            seed=self.seed,
            current_seed=self.current_seed,
            counters=copy.deepcopy(self.counters),
        )

    def restore_state(self, state: GeneratorState) -> None:
        self.seed = state.seed
        self.current_seed = state.current_seed
        self.counters = copy.deepcopy(state.counters)
