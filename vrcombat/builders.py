"""
Opponent construction for the VR combat simulator.

An opponent is fully determined by its level and archetype: the level gives
a base stat line (vrcombat.data.base_stats) and the archetype multiplies each
stat before flooring to an integer. Every call builds a brand new Opponent,
so no two opponents ever share mutable state.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import floor
from typing import Any, Iterable, Mapping

from vrcombat.combatant import Opponent
from vrcombat.data import ARCHETYPES, MAX_GROUP_SIZE, MAX_LEVEL, MIN_GROUP_SIZE, MIN_LEVEL, Archetype, base_stats
from vrcombat.errors import ConfigurationError
from vrcombat.formations import OpponentGroup
from vrcombat.types import ArchetypeName


def archetype(name: str) -> Archetype:
    """Look up an archetype by name, failing loudly on unknown tiers."""
    try:
        return ARCHETYPES[name]
    except (KeyError, TypeError):
        known = ", ".join(ARCHETYPES)
        raise ConfigurationError(f"unknown archetype {name!r} (expected one of {known})") from None


def create_opponent(level: int, archetype_name: str, group_id: int = 0, index: int = 0) -> Opponent:
    """Build one opponent of the given level and archetype.

    >>> o = create_opponent(3, "Normal")
    >>> (o.max_hp, o.attack, o.defense, o.luck)
    (30, 7, 5, 2)
    """
    arch = archetype(archetype_name)
    base = base_stats(level)
    max_hp = floor(base["hp"] * arch.hp)
    return Opponent(
        level=level,
        archetype=arch.name,
        hp=max_hp,
        max_hp=max_hp,
        attack=floor(base["attack"] * arch.attack),
        defense=floor(base["defense"] * arch.defense),
        luck=floor(base["luck"] * arch.luck),
        group_id=group_id,
        index=index,
    )


@dataclass(frozen=True)
class GroupSpec:
    """A request for ``count`` opponents of one level and archetype."""

    count: int
    level: int
    type: ArchetypeName

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GroupSpec:
        missing = [k for k in ("count", "level", "type") if k not in data]
        if missing:
            raise ConfigurationError(f"enemy group is missing {', '.join(missing)}")
        return cls(count=data["count"], level=data["level"], type=data["type"])

    def validate(self) -> None:
        for attr, lo, hi in (
            ("count", MIN_GROUP_SIZE, MAX_GROUP_SIZE),
            ("level", MIN_LEVEL, MAX_LEVEL),
        ):
            value = getattr(self, attr)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"enemy group {attr} must be an integer, got {value!r}")
            if not lo <= value <= hi:
                raise ConfigurationError(f"enemy group {attr} {value} is outside {lo}..{hi}")
        archetype(self.type)


def build_groups(specs: Iterable[GroupSpec | Mapping[str, Any]]) -> list[OpponentGroup]:
    """Validate every group request, then materialise the opponents.

    Group ids are the 1-based positions of the requests. Validation covers
    the whole list before any opponent is created.
    """
    specs = [s if isinstance(s, GroupSpec) else GroupSpec.from_dict(s) for s in specs]
    if not specs:
        raise ConfigurationError("an encounter needs at least one enemy group")
    for spec in specs:
        spec.validate()

    groups = []
    for group_id, spec in enumerate(specs, start=1):
        group = OpponentGroup(group_id=group_id, level=spec.level, archetype=spec.type)
        for index in range(1, spec.count + 1):
            group.members.append(create_opponent(spec.level, spec.type, group_id, index))
        groups.append(group)
    return groups
