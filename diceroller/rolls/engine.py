"""
Dice roll resolution engine.

Turns a roll configuration and a random source into a roll outcome. The
engine is a pure function of its inputs: given the same configuration and
the same sequence of draws it always produces the same outcome.

Ties at the selection boundary are broken by roll order: when several dice
share the value being dropped or rerolled, the earliest rolled one goes.
"""

from datetime import datetime

from diceroller.core.constants import (
    MIN_DIE_SIDES,
    AdvantageMode,
    SelectionAction,
    SelectionTarget,
)
from diceroller.core.error_handling import RollConfigError, require_int_at_least
from diceroller.core.logging import log_debug
from diceroller.core.random_source import RandomSource

from .roll_config import (
    AdvantageRollConfig,
    DropOrReroll,
    PerDieClamp,
    RollConfig,
    StandardRollConfig,
    highest_reachable,
)
from .roll_outcome import RollOutcome, utc_now


def validate_config(config: RollConfig) -> None:
    """
    Rejects configurations the engine cannot resolve.

    Args:
        config (RollConfig): The configuration to check.

    Raises:
        RollConfigError: If the die size or count is out of range, the
            selection rule would remove every die, or a reroll floor can
            never be exceeded.

    """
    context = {"config": str(config)}
    if not isinstance(config, (StandardRollConfig, AdvantageRollConfig)):
        raise RollConfigError(
            f"Unsupported roll configuration: {type(config).__name__}", context
        )
    require_int_at_least(config.die_sides, "die_sides", MIN_DIE_SIDES, context)
    require_int_at_least(config.dice_count, "dice_count", 1, context)
    if isinstance(config, AdvantageRollConfig) and config.mode == AdvantageMode.OFF:
        raise RollConfigError("Advantage roll without an advantage mode", context)
    rule = config.drop_or_reroll
    if rule is None:
        return
    require_int_at_least(rule.count, "drop_or_reroll.count", 0, context)
    if rule.count >= config.dice_count:
        raise RollConfigError(
            f"Cannot {rule.action.name.lower()} {rule.count} of {config.dice_count} dice",
            context,
        )
    if (
        rule.action == SelectionAction.REROLL
        and rule.reroll_until_above_floor
        and rule.count > 0
        and rule.reroll_floor >= highest_reachable(config.die_sides, config.per_die_clamp)
    ):
        raise RollConfigError(
            f"Reroll floor {rule.reroll_floor} can never be exceeded on a d{config.die_sides}",
            context,
        )


def apply_clamp(rolls: list[int], sides: int, clamp: PerDieClamp | None) -> list[int]:
    """
    Applies a per-die clamp to every roll.

    Clamping is idempotent: applying it to already clamped rolls changes nothing.

    Args:
        rolls (list[int]): The die results.
        sides (int): The number of sides of the dice.
        clamp (PerDieClamp | None): The clamp, or None to leave rolls untouched.

    Returns:
        list[int]: The clamped results, in the same order.

    """
    if clamp is None:
        return list(rolls)
    return [clamp.apply(value, sides) for value in rolls]


def select_extremes(pool: list[int], count: int, target: SelectionTarget) -> list[int]:
    """
    Picks the `count` lowest or highest values of a pool.

    Args:
        pool (list[int]): The die results.
        count (int): How many values to pick.
        target (SelectionTarget): Which extreme to pick from.

    Returns:
        list[int]: The picked values, most extreme first.

    """
    if count <= 0:
        return []
    ordered = sorted(pool, reverse=target == SelectionTarget.HIGHEST)
    return ordered[:count]


def remove_values(pool: list[int], values: list[int]) -> list[int]:
    """Removes one occurrence of each value, earliest occurrence first."""
    remaining = list(pool)
    for value in values:
        remaining.remove(value)
    return remaining


def _draw(rng: RandomSource, sides: int, count: int) -> list[int]:
    return [rng.randint(1, sides) for _ in range(count)]


def _resolve_advantage(
    config: AdvantageRollConfig, rng: RandomSource
) -> tuple[list[int], list[int], list[int], list[int]]:
    first, second = _draw(rng, config.die_sides, 2)
    if config.mode == AdvantageMode.ADVANTAGE:
        kept, other = max(first, second), min(first, second)
    else:
        kept, other = min(first, second), max(first, second)
    return [first, second], [kept], [other], []


def _resolve_standard(
    config: StandardRollConfig, rng: RandomSource
) -> tuple[list[int], list[int], list[int], list[int]]:
    sides = config.die_sides
    clamp = config.per_die_clamp

    all_raw = _draw(rng, sides, config.dice_count)
    pool = apply_clamp(all_raw, sides, clamp)
    dropped: list[int] = []
    rerolled: list[int] = []

    rule = config.drop_or_reroll
    if rule is None or config.dice_count <= 1 or rule.count == 0:
        return all_raw, pool, dropped, rerolled

    candidates = select_extremes(pool, rule.count, rule.target)
    pool = remove_values(pool, candidates)
    if rule.action == SelectionAction.DROP:
        dropped.extend(candidates)
        return all_raw, pool, dropped, rerolled

    rerolled.extend(candidates)
    for _ in range(rule.count):
        pool.append(_draw_replacement(rng, sides, clamp, rule, all_raw, rerolled))
    return all_raw, pool, dropped, rerolled


def _draw_replacement(
    rng: RandomSource,
    sides: int,
    clamp: PerDieClamp | None,
    rule: DropOrReroll,
    all_raw: list[int],
    rerolled: list[int],
) -> int:
    while True:
        raw = rng.randint(1, sides)
        all_raw.append(raw)
        value = apply_clamp([raw], sides, clamp)[0]
        if not rule.reroll_until_above_floor or value > rule.reroll_floor:
            return value
        # A rejected replacement is itself replaced.
        rerolled.append(value)


def resolve(
    config: RollConfig,
    rng: RandomSource,
    timestamp: datetime | None = None,
) -> RollOutcome:
    """
    Resolves a roll configuration into an outcome.

    Advantage rolls draw two dice and keep the higher or lower one; the
    other die is reported as dropped. Standard rolls draw `dice_count` dice,
    clamp each one, then apply the drop/reroll rule if the pool holds more
    than one die.

    Args:
        config (RollConfig): The configuration to resolve.
        rng (RandomSource): Source of uniform die results.
        timestamp (datetime | None): Time stamped on the outcome. Defaults to now (UTC).

    Returns:
        RollOutcome: The resolved outcome.

    Raises:
        RollConfigError: If the configuration is structurally invalid. No
            dice are drawn in that case.

    """
    validate_config(config)

    if isinstance(config, AdvantageRollConfig):
        all_raw, used, dropped, rerolled = _resolve_advantage(config, rng)
    else:
        all_raw, used, dropped, rerolled = _resolve_standard(config, rng)

    base_total = sum(used)
    outcome = RollOutcome(
        config=config,
        all_raw_rolls=tuple(all_raw),
        used_rolls=tuple(used),
        dropped_rolls=tuple(dropped),
        rerolled_rolls=tuple(rerolled),
        base_total=base_total,
        final_result=base_total + config.modifier,
        timestamp=timestamp or utc_now(),
    )
    log_debug(
        "Resolved roll",
        {"roll": outcome.describe(), "raw": all_raw},
    )
    return outcome
