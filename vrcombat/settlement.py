"""
Post-combat settlement: what the encounter was worth to the player.

A victory pays out per opponent group. Experience is
``25 * level * archetype xp multiplier * group size`` and currency is
``(5 + U(0, 10)) * level * group size`` with a fresh draw per group, both
floored.

Defeat and retreat are governed by the penalty policy. Under
``percentage`` the player loses a floored share of their experience and
currency (Settings.defeat_penalty / retreat_penalty); under ``none`` they
lose nothing. A stalemate never changes anything.
"""

from __future__ import annotations

from math import floor
from typing import TYPE_CHECKING

from vrcombat.data import ARCHETYPES
from vrcombat.records import SettlementRecord

if TYPE_CHECKING:
    from vrcombat.combatant import Player
    from vrcombat.config import Settings
    from vrcombat.dice import Dice
    from vrcombat.formations import OpponentGroup
    from vrcombat.types import Outcome

XP_PER_LEVEL = 25
BASE_GOLD = 5
GOLD_SPREAD = 10


def victory_rewards(groups: list[OpponentGroup], dice: Dice) -> tuple[int, int]:
    """Return (experience, currency) earned for defeating every group."""
    xp = gold = 0
    for group in groups:
        multiplier = ARCHETYPES[group.archetype].xp
        xp += floor(XP_PER_LEVEL * group.level * multiplier * len(group))
        gold += floor((BASE_GOLD + dice.uniform(0, GOLD_SPREAD)) * group.level * len(group))
    return xp, gold


def penalty(player: Player, share: float) -> tuple[int, int]:
    """Return the (negative) experience and currency change for losing
    ``share`` of what the player holds."""
    return -floor(player.experience * share), -floor(player.currency * share)


def settle(
    outcome: Outcome,
    player: Player,
    groups: list[OpponentGroup],
    dice: Dice,
    settings: Settings,
) -> SettlementRecord:
    """Work out the rewards or penalties for ``outcome`` and apply them to
    ``player`` (which must be the engine's working copy)."""
    xp = gold = 0
    if outcome == "victory":
        xp, gold = victory_rewards(groups, dice)
    elif settings.penalty_policy == "percentage":
        if outcome == "defeat":
            xp, gold = penalty(player, settings.defeat_penalty)
        elif outcome == "fled":
            xp, gold = penalty(player, settings.retreat_penalty)

    player.experience += xp
    player.currency += gold
    return SettlementRecord(outcome=outcome, experience_change=xp, currency_change=gold)
