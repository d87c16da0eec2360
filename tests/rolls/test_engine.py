"""
Tests for the dice roll resolution engine.
"""

from datetime import datetime, timezone

import pytest
from diceroller.core.constants import (
    AdvantageMode,
    ClampDirection,
    SelectionAction,
    SelectionTarget,
)
from diceroller.core.error_handling import RollConfigError
from diceroller.core.random_source import SequenceRandomSource, SystemRandomSource
from diceroller.rolls.engine import (
    apply_clamp,
    resolve,
    select_extremes,
    validate_config,
)
from diceroller.rolls.roll_config import (
    AdvantageRollConfig,
    DropOrReroll,
    PerDieClamp,
    StandardRollConfig,
)


@pytest.fixture
def drop_lowest_4d6():
    return StandardRollConfig(
        die_sides=6,
        dice_count=4,
        drop_or_reroll=DropOrReroll(
            action=SelectionAction.DROP,
            target=SelectionTarget.LOWEST,
            count=1,
        ),
    )


@pytest.fixture
def d20_advantage():
    return AdvantageRollConfig(die_sides=20, modifier=3, mode=AdvantageMode.ADVANTAGE)


def test_plain_roll_sums_raw_rolls():
    """Test that a roll without rules sums every die and adds the modifier."""
    config = StandardRollConfig(die_sides=8, dice_count=3, modifier=-2)
    outcome = resolve(config, SequenceRandomSource([3, 8, 1]))

    assert outcome.all_raw_rolls == (3, 8, 1)
    assert outcome.used_rolls == (3, 8, 1)
    assert outcome.dropped_rolls == ()
    assert outcome.rerolled_rolls == ()
    assert outcome.base_total == 12
    assert outcome.final_result == 10


def test_plain_roll_property_holds_for_random_rolls():
    """Test the plain roll invariants over many seeded rolls."""
    rng = SystemRandomSource(seed=1234)
    config = StandardRollConfig(die_sides=12, dice_count=5, modifier=4)
    for _ in range(200):
        outcome = resolve(config, rng)
        assert outcome.final_result == sum(outcome.all_raw_rolls) + 4
        assert outcome.used_rolls == outcome.all_raw_rolls
        assert all(1 <= value <= 12 for value in outcome.all_raw_rolls)


def test_drop_lowest_scenario(drop_lowest_4d6):
    """Test the classic 4d6 drop lowest ability score roll."""
    outcome = resolve(drop_lowest_4d6, SequenceRandomSource([2, 5, 1, 4]))

    assert outcome.dropped_rolls == (1,)
    assert sorted(outcome.used_rolls) == [2, 4, 5]
    assert outcome.base_total == 11
    assert outcome.final_result == 11
    assert outcome.all_raw_rolls == (2, 5, 1, 4)


def test_drop_lowest_sizes_and_ordering():
    """Test that dropped dice are never above the dice that were kept."""
    rng = SystemRandomSource(seed=7)
    config = StandardRollConfig(
        die_sides=10,
        dice_count=6,
        drop_or_reroll=DropOrReroll(
            action=SelectionAction.DROP, target=SelectionTarget.LOWEST, count=2
        ),
    )
    for _ in range(200):
        outcome = resolve(config, rng)
        assert len(outcome.used_rolls) == 4
        assert len(outcome.dropped_rolls) == 2
        assert max(outcome.dropped_rolls) <= min(outcome.used_rolls)


def test_drop_highest():
    """Test dropping the highest dice."""
    config = StandardRollConfig(
        die_sides=6,
        dice_count=3,
        drop_or_reroll=DropOrReroll(
            action=SelectionAction.DROP, target=SelectionTarget.HIGHEST, count=1
        ),
    )
    outcome = resolve(config, SequenceRandomSource([6, 2, 3]))

    assert outcome.dropped_rolls == (6,)
    assert outcome.used_rolls == (2, 3)
    assert outcome.final_result == 5


def test_drop_tie_removes_earliest_occurrence():
    """Test that ties at the boundary remove exactly one die, the earliest rolled."""
    config = StandardRollConfig(
        die_sides=6,
        dice_count=3,
        drop_or_reroll=DropOrReroll(
            action=SelectionAction.DROP, target=SelectionTarget.LOWEST, count=1
        ),
    )
    outcome = resolve(config, SequenceRandomSource([2, 5, 2]))

    assert outcome.dropped_rolls == (2,)
    assert outcome.used_rolls == (5, 2)
    assert outcome.base_total == 7


def test_advantage_scenario(d20_advantage):
    """Test that advantage keeps the higher die and drops the other."""
    outcome = resolve(d20_advantage, SequenceRandomSource([14, 9]))

    assert outcome.used_rolls == (14,)
    assert outcome.dropped_rolls == (9,)
    assert outcome.rerolled_rolls == ()
    assert outcome.all_raw_rolls == (14, 9)
    assert outcome.final_result == 17


def test_disadvantage_keeps_lower_die():
    """Test that disadvantage keeps the lower die."""
    config = AdvantageRollConfig(die_sides=20, modifier=1, mode=AdvantageMode.DISADVANTAGE)
    outcome = resolve(config, SequenceRandomSource([14, 9]))

    assert outcome.used_rolls == (9,)
    assert outcome.dropped_rolls == (14,)
    assert outcome.final_result == 10


def test_advantage_property_holds_for_random_rolls(d20_advantage):
    """Test the advantage invariants over many seeded rolls."""
    rng = SystemRandomSource(seed=99)
    for _ in range(200):
        outcome = resolve(d20_advantage, rng)
        first, second = outcome.all_raw_rolls
        assert outcome.final_result == max(first, second) + 3
        assert len(outcome.dropped_rolls) == 1


def test_clamp_min_raises_low_results():
    """Test that a minimum clamp raises results below 1+offset."""
    config = StandardRollConfig(
        die_sides=6,
        dice_count=3,
        per_die_clamp=PerDieClamp(direction=ClampDirection.MIN, offset=1),
    )
    outcome = resolve(config, SequenceRandomSource([1, 2, 6]))

    assert outcome.all_raw_rolls == (1, 2, 6)
    assert outcome.used_rolls == (2, 2, 6)
    assert outcome.base_total == 10


def test_clamp_max_lowers_high_results():
    """Test that a maximum clamp lowers results above sides+offset."""
    config = StandardRollConfig(
        die_sides=6,
        dice_count=3,
        per_die_clamp=PerDieClamp(direction=ClampDirection.MAX, offset=-2),
    )
    outcome = resolve(config, SequenceRandomSource([1, 5, 6]))

    assert outcome.used_rolls == (1, 4, 4)


def test_clamp_is_idempotent():
    """Test that clamping twice gives the same result as clamping once."""
    rolls = [1, 3, 5, 6, 2, 4]
    for clamp in (
        PerDieClamp(direction=ClampDirection.MIN, offset=2),
        PerDieClamp(direction=ClampDirection.MAX, offset=-1),
        PerDieClamp(direction=ClampDirection.MAX, offset=3),
    ):
        once = apply_clamp(rolls, 6, clamp)
        assert apply_clamp(once, 6, clamp) == once


def test_clamp_applies_before_selection():
    """Test that the drop rule sees clamped values."""
    config = StandardRollConfig(
        die_sides=6,
        dice_count=3,
        per_die_clamp=PerDieClamp(direction=ClampDirection.MIN, offset=2),
        drop_or_reroll=DropOrReroll(
            action=SelectionAction.DROP, target=SelectionTarget.LOWEST, count=1
        ),
    )
    outcome = resolve(config, SequenceRandomSource([1, 6, 5]))

    assert outcome.dropped_rolls == (3,)
    assert outcome.used_rolls == (6, 5)


def test_advantage_bypasses_clamp_and_selection():
    """Test that the advantage branch never clamps."""
    config = AdvantageRollConfig(die_sides=20, mode=AdvantageMode.ADVANTAGE)
    outcome = resolve(config, SequenceRandomSource([1, 1]))

    assert outcome.used_rolls == (1,)
    assert outcome.dropped_rolls == (1,)


def test_reroll_lowest_accepts_first_draw():
    """Test a single reroll that keeps the replacement whatever it shows."""
    config = StandardRollConfig(
        die_sides=6,
        dice_count=3,
        drop_or_reroll=DropOrReroll(
            action=SelectionAction.REROLL,
            target=SelectionTarget.LOWEST,
            count=1,
            reroll_floor=2,
            reroll_until_above_floor=False,
        ),
    )
    outcome = resolve(config, SequenceRandomSource([1, 4, 5, 1]))

    assert outcome.all_raw_rolls == (1, 4, 5, 1)
    assert outcome.rerolled_rolls == (1,)
    assert outcome.used_rolls == (4, 5, 1)
    assert outcome.base_total == 10


def test_reroll_until_above_floor_loops():
    """Test that replacements are redrawn until they exceed the floor."""
    config = StandardRollConfig(
        die_sides=6,
        dice_count=2,
        drop_or_reroll=DropOrReroll(
            action=SelectionAction.REROLL,
            target=SelectionTarget.LOWEST,
            count=1,
            reroll_floor=2,
            reroll_until_above_floor=True,
        ),
    )
    rng = SequenceRandomSource([1, 6, 2, 1, 3])
    outcome = resolve(config, rng)

    assert rng.remaining == 0
    assert outcome.all_raw_rolls == (1, 6, 2, 1, 3)
    assert outcome.rerolled_rolls == (1, 2, 1)
    assert outcome.used_rolls == (6, 3)
    assert outcome.final_result == 9


def test_reroll_replacement_is_clamped():
    """Test that replacement dice go through the per-die clamp."""
    config = StandardRollConfig(
        die_sides=6,
        dice_count=2,
        per_die_clamp=PerDieClamp(direction=ClampDirection.MIN, offset=2),
        drop_or_reroll=DropOrReroll(
            action=SelectionAction.REROLL, target=SelectionTarget.LOWEST, count=1
        ),
    )
    outcome = resolve(config, SequenceRandomSource([2, 5, 1]))

    assert outcome.rerolled_rolls == (3,)
    assert outcome.used_rolls == (5, 3)


def test_reroll_highest():
    """Test rerolling the highest dice."""
    config = StandardRollConfig(
        die_sides=8,
        dice_count=3,
        drop_or_reroll=DropOrReroll(
            action=SelectionAction.REROLL, target=SelectionTarget.HIGHEST, count=2
        ),
    )
    outcome = resolve(config, SequenceRandomSource([8, 2, 7, 1, 1]))

    assert sorted(outcome.rerolled_rolls) == [7, 8]
    assert outcome.used_rolls == (2, 1, 1)
    assert outcome.base_total == 4


def test_single_die_skips_selection():
    """Test that selection only applies to pools of more than one die."""
    config = StandardRollConfig.model_construct(
        die_sides=6,
        dice_count=1,
        modifier=0,
        per_die_clamp=None,
        drop_or_reroll=DropOrReroll(
            action=SelectionAction.DROP, target=SelectionTarget.LOWEST, count=0
        ),
    )
    outcome = resolve(config, SequenceRandomSource([4]))

    assert outcome.used_rolls == (4,)
    assert outcome.dropped_rolls == ()


def test_zero_count_selection_is_noop():
    """Test that a selection rule with count zero leaves the pool untouched."""
    config = StandardRollConfig(
        die_sides=6,
        dice_count=2,
        drop_or_reroll=DropOrReroll(
            action=SelectionAction.DROP, target=SelectionTarget.HIGHEST, count=0
        ),
    )
    outcome = resolve(config, SequenceRandomSource([3, 6]))

    assert outcome.used_rolls == (3, 6)
    assert outcome.dropped_rolls == ()


def test_select_extremes():
    """Test picking the lowest and highest values."""
    pool = [4, 1, 6, 1, 3]
    assert select_extremes(pool, 2, SelectionTarget.LOWEST) == [1, 1]
    assert select_extremes(pool, 2, SelectionTarget.HIGHEST) == [6, 4]
    assert select_extremes(pool, 0, SelectionTarget.HIGHEST) == []


def test_deterministic_for_fixed_sequence(drop_lowest_4d6):
    """Test that the same draws always produce the same outcome."""
    stamp = datetime(2024, 1, 1, tzinfo=timezone.utc)
    first = resolve(drop_lowest_4d6, SequenceRandomSource([3, 3, 6, 2]), stamp)
    second = resolve(drop_lowest_4d6, SequenceRandomSource([3, 3, 6, 2]), stamp)

    assert first == second
    assert first.timestamp == stamp


def test_invalid_config_rejected_before_rolling():
    """Test that an invalid configuration draws no dice."""
    # model_copy skips validation, so the engine sees the broken rule itself.
    config = StandardRollConfig(die_sides=6, dice_count=2).model_copy(
        update={
            "drop_or_reroll": DropOrReroll(
                action=SelectionAction.DROP, target=SelectionTarget.LOWEST, count=2
            )
        }
    )
    rng = SequenceRandomSource([1, 2])

    with pytest.raises(RollConfigError):
        resolve(config, rng)
    assert rng.consumed == 0


@pytest.mark.parametrize(
    "fields",
    [
        {"die_sides": 1, "dice_count": 1},
        {"die_sides": 6, "dice_count": 0},
    ],
)
def test_validate_config_rejects_bad_sizes(fields):
    """Test that out-of-range die sizes and counts are rejected."""
    config = StandardRollConfig.model_construct(
        modifier=0, per_die_clamp=None, drop_or_reroll=None, **fields
    )
    with pytest.raises(RollConfigError):
        validate_config(config)


def test_validate_config_rejects_unreachable_floor():
    """Test that a reroll floor no die can exceed is rejected."""
    config = StandardRollConfig(die_sides=6, dice_count=2).model_copy(
        update={
            "drop_or_reroll": DropOrReroll(
                action=SelectionAction.REROLL,
                target=SelectionTarget.LOWEST,
                count=1,
                reroll_floor=6,
                reroll_until_above_floor=True,
            )
        }
    )
    with pytest.raises(RollConfigError):
        validate_config(config)


def test_large_modifiers_and_clamps_never_fail():
    """Test that any modifier or clamp offset resolves."""
    config = StandardRollConfig(
        die_sides=4,
        dice_count=2,
        modifier=-1000,
        per_die_clamp=PerDieClamp(direction=ClampDirection.MAX, offset=-10),
    )
    outcome = resolve(config, SequenceRandomSource([3, 4]))

    assert outcome.used_rolls == (-6, -6)
    assert outcome.final_result == -1012
