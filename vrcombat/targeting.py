"""
Target selection: which living opponent the player swings at each round.

Strategies are looked up by name with get_strategy(). ``first`` (the
default) always picks the first living opponent in flattened order, which
means groups are cleared one member at a time, front to back.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from vrcombat.errors import ConfigurationError

if TYPE_CHECKING:
    from vrcombat.combatant import Opponent
    from vrcombat.dice import Dice


class TargetStrategy:
    """Base class for target selection strategies."""

    name: str = ""

    def choose(self, living: list[Opponent], dice: Dice) -> Opponent | None:
        """Return the opponent to attack, or None if nobody is left."""
        raise NotImplementedError


class FirstLiving(TargetStrategy):
    name = "first"

    def choose(self, living: list[Opponent], dice: Dice) -> Opponent | None:
        return living[0] if living else None


class RandomTarget(TargetStrategy):
    """Pick uniformly among the living. Draws from the encounter's dice so
    seeded encounters stay reproducible."""

    name = "random"

    def choose(self, living: list[Opponent], dice: Dice) -> Opponent | None:
        if not living:
            return None
        return dice.rng.choice(living)


class LowestHp(TargetStrategy):
    """Finish off the most wounded opponent. Ties go to the earliest one in
    flattened order."""

    name = "lowest_hp"

    def choose(self, living: list[Opponent], dice: Dice) -> Opponent | None:
        if not living:
            return None
        return min(living, key=lambda o: o.hp)


STRATEGIES: dict[str, type[TargetStrategy]] = {
    cls.name: cls for cls in (FirstLiving, RandomTarget, LowestHp)
}


def get_strategy(name: str) -> TargetStrategy:
    try:
        return STRATEGIES[name]()
    except KeyError:
        known = ", ".join(STRATEGIES)
        raise ConfigurationError(f"unknown target strategy {name!r} (expected one of {known})") from None
