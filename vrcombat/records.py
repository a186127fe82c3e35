"""Structured combat records for the VR combat simulator.

The engine never writes log text directly. It appends these dataclasses to
a CombatRecord as the encounter unfolds, and a renderer turns the finished
record into text (vrcombat.renderers.TextRenderer) or anything else.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from vrcombat.types import Outcome, Severity


@dataclass
class AttackRecord:
    """The player's attack for the round."""

    attacker: str
    defender: str
    damage: int = 0
    miss: bool = False
    crit: bool = False
    severity: Severity | None = None
    defender_hp: int = 0
    """Defender's hp after the damage was applied."""

    killed: bool = False


@dataclass
class PotionRecord:
    """The player drank a potion instead of attacking."""

    healed: int
    """Hit points actually restored (the nominal heal may be capped)."""

    hp: int
    potions_left: int


@dataclass
class FleeRecord:
    """The player tried to run instead of attacking."""

    luck: int
    success: bool


@dataclass
class EnemyAttackRecord:
    """One opponent's counter-attack on the player."""

    attacker: str
    damage: int = 0
    miss: bool = False
    crit: bool = False


PlayerAction = AttackRecord | PotionRecord | FleeRecord


@dataclass
class RoundRecord:
    """Everything that happened in one round."""

    round_num: int
    action: PlayerAction | None = None
    enemy_attacks: list[EnemyAttackRecord] = field(default_factory=list)
    damage_taken: int = 0
    player_hp: int = 0
    """Player's hp at the end of the round."""


@dataclass
class SettlementRecord:
    """Experience and currency changes once the encounter is over."""

    outcome: Outcome
    experience_change: int = 0
    currency_change: int = 0


@dataclass
class CombatRecord:
    """Top-level record of an entire encounter."""

    rounds: list[RoundRecord] = field(default_factory=list)
    outcome: Outcome | None = None
    settlement: SettlementRecord | None = None
