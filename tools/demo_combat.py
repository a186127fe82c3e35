#!/usr/bin/env python3
"""Run a quick demo encounter: a level 5 player vs two Trash and an Elite."""

import logging

from vrcombat.api import run_combat

logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")

player = {
    "level": 5, "hp": 100, "maxHp": 100, "attack": 10, "defense": 5,
    "luck": 2, "potions": 2, "experience": 400, "currency": 120,
}
enemies = [
    {"count": 2, "level": 3, "type": "Trash"},
    {"count": 1, "level": 4, "type": "Elite"},
]
result = run_combat(player, enemies, seed=7)
print(result["log"])
print(
    f"player ends the encounter ({result['outcome']}) with"
    f" {result['player']['hp']} hp, {result['player']['potions']} potions"
    f" and {result['player']['experience']} xp"
)
