"""
The host-facing entry point.

run_combat() takes plain data (a player dict and a list of enemy group
dicts), plays the encounter, and returns plain data. The caller's player
dict is never modified.

    >>> result = run_combat(
    ...     {"level": 5, "hp": 100, "maxHp": 100, "attack": 10,
    ...      "defense": 5, "luck": 2, "potions": 1},
    ...     [{"count": 1, "level": 3, "type": "Normal"}],
    ...     seed=42,
    ... )
    >>> sorted(result)
    ['currency_change', 'experience_change', 'fled', 'log', 'outcome', 'player', 'rounds', 'victory']
"""

from __future__ import annotations

import random
from dataclasses import replace
from typing import Any, Iterable, Mapping

from vrcombat.builders import GroupSpec, build_groups
from vrcombat.combatant import Player
from vrcombat.config import Settings
from vrcombat.dice import Dice
from vrcombat.engine import Engine
from vrcombat.formations import Formation
from vrcombat.renderers import TextRenderer
from vrcombat.types import PenaltyPolicyName, StrategyName


def run_combat(
    player: Mapping[str, Any] | Player,
    enemies: Iterable[Mapping[str, Any] | GroupSpec],
    *,
    seed: int | str | None = None,
    rng: random.Random | None = None,
    settings: Settings | None = None,
    target_strategy: StrategyName | None = None,
    penalty_policy: PenaltyPolicyName | None = None,
    renderer: TextRenderer | None = None,
) -> dict[str, Any]:
    """Resolve one encounter and return the log, updated player and outcome.

    Args:
        player: The player record, either as host data or a Player.
        enemies: Enemy group requests (``count``, ``level``, ``type``).
        seed: Seed for a fresh random generator. Ignored if ``rng`` is given.
        rng: Random generator to draw every die from.
        settings: Encounter settings; defaults to Settings().
        target_strategy: Shortcut overriding settings.target_strategy.
        penalty_policy: Shortcut overriding settings.penalty_policy.
        renderer: Turns the combat record into log lines.

    Raises:
        ConfigurationError: if the player or enemy data is invalid.
    """
    settings = settings or Settings()
    if target_strategy is not None:
        settings = replace(settings, target_strategy=target_strategy)
    if penalty_policy is not None:
        settings = replace(settings, penalty_policy=penalty_policy)

    fighter = player.copy() if isinstance(player, Player) else Player.from_dict(player)
    groups = build_groups(enemies)
    dice = Dice(rng) if rng is not None else Dice.seeded(seed)

    engine = Engine(Formation(fighter, groups), dice, settings)
    record = engine.fight()
    lines = (renderer or TextRenderer()).render_combat(record)

    return {
        "log": "\n".join(lines),
        "player": fighter.to_dict(),
        "victory": record.outcome == "victory",
        "fled": record.outcome == "fled",
        "outcome": record.outcome,
        "rounds": len(record.rounds),
        "experience_change": record.settlement.experience_change,
        "currency_change": record.settlement.currency_change,
    }
