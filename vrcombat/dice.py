"""
Dice rolling primitives for the VR combat system.

Every random outcome in an encounter comes from a single six-sided die:

- An attack rolls 1d6. A 1 always misses. A 6 is a critical hit that deals
  the full attack/defense gap plus 6 plus the attacker's luck, whichever side
  of the gap the attacker is on. Anything else deals
  ``attack - defense + roll``, never less than 0.
- Fleeing rolls 1d6 against ``6 - luck``.

The Dice object owns the random generator, so an encounter can be replayed
exactly by handing it a seeded ``random.Random``.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Protocol

from vrcombat.types import Severity


class Fighter(Protocol):
    attack: int
    defense: int
    luck: int


@dataclass(frozen=True)
class AttackRoll:
    """The outcome of one attack."""

    roll: int
    """The face of the d6 that decided the attack."""

    damage: int
    is_miss: bool
    is_crit: bool


class Dice:
    """The single source of randomness for one encounter."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()

    @classmethod
    def seeded(cls, seed: int | str | None) -> Dice:
        return cls(random.Random(seed))

    def d6(self) -> int:
        """Roll a single six-sided die."""
        return self.rng.randint(1, 6)

    def resolve_attack(self, attacker: Fighter, defender: Fighter) -> AttackRoll:
        """Roll one attack from attacker against defender."""
        roll = self.d6()
        if roll == 1:
            return AttackRoll(roll=roll, damage=0, is_miss=True, is_crit=False)
        if roll == 6:
            damage = abs(attacker.attack - defender.defense) + 6 + attacker.luck
            return AttackRoll(roll=roll, damage=damage, is_miss=False, is_crit=True)
        damage = max(0, attacker.attack - defender.defense + roll)
        return AttackRoll(roll=roll, damage=damage, is_miss=False, is_crit=False)

    def attempt_flee(self, luck: int) -> bool:
        """Try to escape. Each point of luck lowers the target by one, so
        luck 0 only escapes on a 6 and luck 5 or more always escapes."""
        return self.d6() >= 6 - luck

    def uniform(self, lo: float, hi: float) -> float:
        """A float in [lo, hi), drawn from the same generator as the dice."""
        return lo + (hi - lo) * self.rng.random()


def wound_severity(damage: int, max_hp: int) -> Severity:
    """Describe a hit by how much of the target's max hp it took."""
    pct = damage / max_hp * 100
    if pct <= 10:
        return "Glancing Blow"
    if pct <= 25:
        return "Moderate Wound"
    if pct <= 50:
        return "Severe Injury"
    if pct <= 75:
        return "Critical Trauma"
    return "Lethal Blow"
