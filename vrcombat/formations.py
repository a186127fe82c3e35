"""
Battle formations: how the opponents of an encounter are organised.

Opponents arrive in groups (one group per entry in the encounter's enemy
list). Targeting and the enemy volley both walk the opponents in a single
flattened order: first group first, and inside a group in creation order.
The Formation owns that order so nobody else has to rebuild it.

There is no spatial model. Every living opponent can reach the player and
the player can reach every living opponent.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from vrcombat.types import ArchetypeName

if TYPE_CHECKING:
    from vrcombat.combatant import Opponent, Player


@dataclass
class OpponentGroup:
    """Same-level, same-archetype opponents spawned together."""

    group_id: int
    level: int
    archetype: ArchetypeName
    members: list[Opponent] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.members)

    @property
    def defeated(self) -> bool:
        return all(m.dead for m in self.members)


class Formation:
    """The player on one side, every opponent group on the other."""

    def __init__(self, player: Player, groups: list[OpponentGroup]) -> None:
        self.player = player
        self.groups = groups
        self.opponents: list[Opponent] = [m for g in groups for m in g.members]

    @property
    def living(self) -> list[Opponent]:
        """Living opponents in flattened order."""
        return [o for o in self.opponents if not o.dead]

    @property
    def opponents_defeated(self) -> bool:
        return all(g.defeated for g in self.groups)

    @property
    def one_side_finished(self) -> bool:
        return self.player.dead or self.opponents_defeated
