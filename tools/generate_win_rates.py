#!/usr/bin/env python3
"""Estimate encounter outcomes for a reference player by simulation.

Plays many seeded encounters against a single opponent of every archetype
and level 1-10, and prints the share of victories, defeats, retreats and
stalemates for each, which is handy when tuning the archetype multipliers.

Usage:
    python tools/generate_win_rates.py [output_file]

If no output file is given, writes to /tmp/win_rates.py.
"""

import sys
from collections import Counter
from pprint import pprint

from vrcombat.api import run_combat
from vrcombat.data import ARCHETYPES

ENCOUNTERS = 2000

PLAYER = {
    "level": 5, "hp": 100, "maxHp": 100, "attack": 10,
    "defense": 5, "luck": 2, "potions": 1,
}


def main() -> None:
    [fname] = sys.argv[1:2] or ["/tmp/win_rates.py"]
    rates: dict = {}
    for archetype in ARCHETYPES:
        for level in range(1, 11):
            outcomes = Counter(
                run_combat(PLAYER, [{"count": 1, "level": level, "type": archetype}], seed=i)["outcome"]
                for i in range(ENCOUNTERS)
            )
            rates[archetype, level] = {
                outcome: count / ENCOUNTERS for outcome, count in sorted(outcomes.items())
            }

    with open(fname, "w") as f:
        f.write("win_rates = ")
        pprint(rates, stream=f)


if __name__ == "__main__":
    main()
