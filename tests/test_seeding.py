"""
Test suite for the seeded value generator in render_test_sim.utils.seeding.

This module validates:
- Seed validation for accepted and rejected seed values
- The linear congruential recurrence and the ranges of derived values
- Per-prefix unique-id allocation and counter reset
- State snapshots (save_state / restore_state)
"""

import numpy as np
import pytest

from render_test_sim.core.constants import (
    LCG_INCREMENT,
    LCG_MODULUS,
    LCG_MULTIPLIER,
    SEED_MAX_VALUE,
    SEED_MIN_VALUE,
)
from render_test_sim.utils.exceptions import ValidationError
from render_test_sim.utils.seeding import (
    GeneratorState,
    SeededGenerator,
    get_random_seed,
    validate_seed,
)

VALID_INTEGER_SEEDS = [
    SEED_MIN_VALUE,  # Boundary: minimum
    1,
    42,
    12345,
    SEED_MAX_VALUE - 1,
    SEED_MAX_VALUE,  # Boundary: maximum
]

INVALID_SEEDS = [
    -1,
    SEED_MAX_VALUE + 1,
    3.5,
    "42",
    None,
    True,
    [1],
]


class TestSeedValidation:
    @pytest.mark.parametrize("seed", VALID_INTEGER_SEEDS)
    def test_valid_integer_seeds(self, seed):
        is_valid, normalized, message = validate_seed(seed)
        assert is_valid
        assert normalized == seed
        assert message == ""

    @pytest.mark.parametrize("seed", INVALID_SEEDS)
    def test_invalid_seeds_rejected(self, seed):
        is_valid, normalized, message = validate_seed(seed)
        assert not is_valid
        assert normalized is None
        assert message

    def test_numpy_integer_seed_is_converted(self):
        is_valid, normalized, _ = validate_seed(np.int64(7))
        assert is_valid
        assert normalized == 7
        assert type(normalized) is int

    @pytest.mark.parametrize("seed", [-5, "seed", 1.0])
    def test_generator_rejects_invalid_seed(self, seed):
        with pytest.raises(ValidationError) as exc_info:
            SeededGenerator(seed)
        assert exc_info.value.parameter_name == "seed"

    def test_random_seed_in_range(self):
        for _ in range(20):
            seed = get_random_seed()
            assert SEED_MIN_VALUE <= seed <= SEED_MAX_VALUE


class TestRecurrence:
    def test_first_value_follows_lcg(self):
        generator = SeededGenerator(12345)
        expected_state = (12345 * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        assert generator.random() == expected_state / LCG_MODULUS
        assert generator.current_seed == expected_state

    @pytest.mark.parametrize("seed", VALID_INTEGER_SEEDS)
    def test_same_seed_same_sequence(self, seed):
        first = SeededGenerator(seed)
        second = SeededGenerator(seed)
        assert [first.random() for _ in range(50)] == [second.random() for _ in range(50)]

    def test_different_seeds_diverge(self):
        first = [SeededGenerator(1).random() for _ in range(1)]
        second = [SeededGenerator(2).random() for _ in range(1)]
        assert first != second

    def test_random_in_unit_interval(self, seeded_generator):
        values = [seeded_generator.random() for _ in range(1000)]
        assert all(0.0 <= value < 1.0 for value in values)

    @pytest.mark.parametrize("bounds", [(0, 0), (0, 1), (-5, 5), (10, 20), (0, 100)])
    def test_random_int_inclusive_bounds(self, seeded_generator, bounds):
        low, high = bounds
        values = [seeded_generator.random_int(low, high) for _ in range(500)]
        assert all(low <= value <= high for value in values)
        assert all(isinstance(value, int) for value in values)

    def test_random_int_reaches_both_ends(self, seeded_generator):
        values = {seeded_generator.random_int(0, 3) for _ in range(500)}
        assert values == {0, 1, 2, 3}

    @pytest.mark.parametrize("bounds", [(0.0, 1.0), (-10.0, 10.0), (0.5, 5.0)])
    def test_random_float_bounds(self, seeded_generator, bounds):
        low, high = bounds
        values = [seeded_generator.random_float(low, high) for _ in range(500)]
        assert all(low <= value < high for value in values)

    def test_random_bool_thresholds(self, seeded_generator):
        assert not any(seeded_generator.random_bool(1.0) for _ in range(100))
        values = [seeded_generator.random_bool(0.5) for _ in range(200)]
        assert True in values and False in values

    def test_choice_picks_member(self, seeded_generator):
        options = ("box", "sphere", "plane")
        assert all(seeded_generator.choice(options) in options for _ in range(50))

    def test_choice_on_empty_sequence_raises(self, seeded_generator):
        with pytest.raises(ValidationError):
            seeded_generator.choice([])


class TestUniqueIds:
    def test_ids_count_per_prefix(self, seeded_generator):
        assert seeded_generator.generate_unique_id("mesh") == "mesh-1"
        assert seeded_generator.generate_unique_id("mesh") == "mesh-2"
        assert seeded_generator.generate_unique_id("light") == "light-1"
        assert seeded_generator.generate_unique_id() == "test-1"
        assert seeded_generator.counters == {"mesh": 2, "light": 1, "test": 1}

    def test_ids_do_not_consume_random_values(self):
        plain = SeededGenerator(9)
        with_ids = SeededGenerator(9)
        with_ids.generate_unique_id("x")
        assert plain.random() == with_ids.random()

    def test_reset_counters_restarts_ids_and_sequence(self, seeded_generator):
        first_value = SeededGenerator(12345).random()
        for _ in range(5):
            seeded_generator.generate_unique_id("x")
            seeded_generator.random()
        seeded_generator.reset_counters()
        assert seeded_generator.counters == {}
        assert seeded_generator.generate_unique_id("x") == "x-1"
        assert seeded_generator.random() == first_value

    def test_reset_seed_keeps_counters(self, seeded_generator):
        seeded_generator.generate_unique_id("x")
        seeded_generator.random()
        seeded_generator.reset_seed()
        assert seeded_generator.current_seed == seeded_generator.seed
        assert seeded_generator.generate_unique_id("x") == "x-2"


class TestStateSnapshots:
    def test_save_state_captures_fields(self, seeded_generator):
        seeded_generator.random()
        seeded_generator.generate_unique_id("mesh")
        state = seeded_generator.save_state()
        assert isinstance(state, GeneratorState)
        assert state.to_dict() == {
            "seed": 12345,
            "current_seed": seeded_generator.current_seed,
            "counters": {"mesh": 1},
        }

    def test_snapshot_is_independent_of_later_mutation(self, seeded_generator):
        seeded_generator.generate_unique_id("mesh")
        state = seeded_generator.save_state()
        seeded_generator.generate_unique_id("mesh")
        assert state.counters == {"mesh": 1}

    def test_restore_replays_the_same_values(self, seeded_generator):
        seeded_generator.random()
        state = seeded_generator.save_state()
        expected = [seeded_generator.random_int(0, 1000) for _ in range(10)]
        expected_id = seeded_generator.generate_unique_id("scene")

        seeded_generator.generate_unique_id("scene")
        seeded_generator.random()
        seeded_generator.restore_state(state)

        assert [seeded_generator.random_int(0, 1000) for _ in range(10)] == expected
        assert seeded_generator.generate_unique_id("scene") == expected_id

    def test_restore_across_instances(self):
        source = SeededGenerator(5)
        source.random()
        target = SeededGenerator(77)
        target.restore_state(source.save_state())
        assert target.seed == 5
        assert target.random() == source.random()
