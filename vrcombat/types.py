"""
Domain-specific type aliases for the VR combat simulator.

These aren't used for runtime type checking; they make function signatures
self-documenting. A parameter typed as ArchetypeName is one of the four
opponent tiers, not an arbitrary string.
"""

from typing import Literal, TypeAlias

# Opponent power tiers. Each one scales the level-based stat line by its own
# set of multipliers (see vrcombat.data.ARCHETYPES).
ArchetypeName: TypeAlias = Literal["Trash", "Normal", "Elite", "Boss"]

# How an encounter ended. Exactly one of these holds when Engine.fight()
# returns.
Outcome: TypeAlias = Literal["victory", "defeat", "fled", "stalemate"]

# How the player picks which opponent to hit each round.
StrategyName: TypeAlias = Literal["first", "random", "lowest_hp"]

# What a lost or abandoned fight costs the player.
PenaltyPolicyName: TypeAlias = Literal["percentage", "none"]

# Descriptive label for a hit, from damage relative to the target's max hp.
Severity: TypeAlias = Literal[
    "Glancing Blow",
    "Moderate Wound",
    "Severe Injury",
    "Critical Trauma",
    "Lethal Blow",
]
