"""
Opponents are generated from a level-scaled base stat line multiplied by the
factors of their archetype. The tables here are the single source for those
numbers:

    base = {
        "hp": 15 + 5 * level,
        "attack": 3 + 1.5 * level,
        "defense": 2 + 1 * level,
        "luck": max(1, level - 1),
    }

and each archetype carries one multiplier per stat plus an experience
multiplier used when the player wins:

    ARCHETYPES["Elite"].hp       # 1.8
    ARCHETYPES["Boss"].xp        # 5.0

ARCHETYPES is a read-only mapping; nothing in the simulator may change it at
runtime.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

MIN_LEVEL = 1
MAX_LEVEL = 50
MIN_GROUP_SIZE = 1
MAX_GROUP_SIZE = 5


@dataclass(frozen=True)
class Archetype:
    """Stat and reward multipliers for one opponent tier."""

    name: str
    hp: float
    attack: float
    defense: float
    luck: float
    xp: float
    """Scales the experience awarded for defeating a group of this tier."""


ARCHETYPES: MappingProxyType[str, Archetype] = MappingProxyType({
    "Trash": Archetype("Trash", hp=0.8, attack=0.9, defense=0.7, luck=1.0, xp=0.6),
    "Normal": Archetype("Normal", hp=1.0, attack=1.0, defense=1.0, luck=1.0, xp=1.0),
    "Elite": Archetype("Elite", hp=1.8, attack=1.4, defense=1.3, luck=1.5, xp=1.8),
    "Boss": Archetype("Boss", hp=3.0, attack=2.0, defense=2.0, luck=2.0, xp=5.0),
})


def base_stats(level: int) -> dict[str, float]:
    """The un-multiplied stat line for an opponent of the given level."""
    return {
        "hp": 15 + 5 * level,
        "attack": 3 + 1.5 * level,
        "defense": 2 + 1 * level,
        "luck": max(1, level - 1),
    }
