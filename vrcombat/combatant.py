"""
Combatants for the VR combat simulator.

There is exactly one Player per encounter and any number of Opponents. Both
expose the same ``attack``, ``defense`` and ``luck`` attributes, which is all
the dice mechanic needs to resolve a blow in either direction.

The Player record belongs to the caller. The engine only ever works on a
copy and hands back a new record when the encounter is settled.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Mapping

from vrcombat.errors import ConfigurationError
from vrcombat.types import ArchetypeName

PLAYER_REQUIRED = ("level", "hp", "maxHp", "attack", "defense", "luck")
"""Boundary keys a player record must carry."""

PLAYER_OPTIONAL = ("potions", "experience", "currency")
"""Boundary keys that default to 0 when absent."""

LEGACY_KEYS = {
    "atk": "attack",
    "def": "defense",
    "luk": "luck",
    "xp": "experience",
    "gold": "currency",
}
"""Short key names used by older host integrations, mapped to the current
boundary names. A current name always wins over its legacy alias."""

_FIELDS = {
    "level": "level",
    "hp": "hp",
    "maxHp": "max_hp",
    "attack": "attack",
    "defense": "defense",
    "luck": "luck",
    "potions": "potions",
    "experience": "experience",
    "currency": "currency",
}


@dataclass
class Player:
    """The player-controlled combatant."""

    level: int
    hp: int
    """Current hit points. Never negative once the engine has touched it."""

    max_hp: int
    attack: int
    defense: int
    luck: int
    """Adds to critical hit damage and lowers the flee threshold."""

    potions: int = 0
    experience: int = 0
    currency: int = 0

    name: str = "Player"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Player:
        """Build a Player from a host-supplied record.

        Accepts both the current boundary keys and the legacy short ones
        (``atk``, ``def``, ``luk``, ``xp``, ``gold``). Every stat must be an
        integer; booleans are rejected even though Python treats them as
        ints.
        """
        merged = {LEGACY_KEYS.get(k, k): v for k, v in data.items() if k in LEGACY_KEYS}
        merged.update({k: v for k, v in data.items() if k not in LEGACY_KEYS})

        missing = [k for k in PLAYER_REQUIRED if merged.get(k) is None]
        if missing:
            raise ConfigurationError(f"player record is missing {', '.join(missing)}")

        kwargs: dict[str, int] = {}
        for key in PLAYER_REQUIRED + PLAYER_OPTIONAL:
            value = merged.get(key)
            if value is None:
                value = 0
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"player field {key!r} must be an integer, got {value!r}")
            kwargs[_FIELDS[key]] = value

        if kwargs["max_hp"] <= 0:
            raise ConfigurationError("player maxHp must be positive")
        if kwargs["potions"] < 0:
            raise ConfigurationError("player potions can't be negative")
        return cls(**kwargs)

    def to_dict(self) -> dict[str, int]:
        """The boundary representation, keyed the way from_dict() reads it."""
        values = asdict(self)
        return {key: values[attr] for key, attr in _FIELDS.items()}

    def copy(self) -> Player:
        return replace(self)

    @property
    def dead(self) -> bool:
        return self.hp <= 0

    def take_damage(self, damage: int) -> None:
        self.hp = max(0, self.hp - damage)

    def heal(self, amount: int) -> int:
        """Restore up to ``amount`` hp without exceeding max_hp.

        Returns the hp actually restored.
        """
        before = self.hp
        self.hp = min(self.max_hp, self.hp + amount)
        return self.hp - before


@dataclass
class Opponent:
    """A single computer-controlled enemy.

    Opponents are created by vrcombat.builders and only ever change through
    take_damage(), which keeps ``0 <= hp <= max_hp``. Once dead they stay
    dead.
    """

    level: int
    archetype: ArchetypeName
    hp: int
    max_hp: int
    attack: int
    defense: int
    luck: int
    group_id: int = 0
    """1-based position of the owning group in the encounter's input list.
    Used for log attribution only, as in the name ``Group 2 #1``."""

    index: int = 0
    """1-based position of this opponent inside its group."""

    @property
    def name(self) -> str:
        return f"Group {self.group_id} #{self.index}"

    @property
    def dead(self) -> bool:
        return self.hp <= 0

    def take_damage(self, damage: int) -> None:
        self.hp = max(0, self.hp - damage)
