"""
Tunable encounter settings.

Settings are plain values on a frozen dataclass. Callers either take the
defaults, override individual fields with dataclasses.replace(), or read
them from ``VRCOMBAT_*`` environment variables with Settings.from_env().
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Mapping

from vrcombat.errors import ConfigurationError
from vrcombat.targeting import STRATEGIES
from vrcombat.types import PenaltyPolicyName, StrategyName

ENV_PREFIX = "VRCOMBAT_"

PENALTY_POLICIES = ("percentage", "none")


@dataclass(frozen=True)
class Settings:
    triage_threshold: float = 0.2
    """Fraction of max hp at or below which the player stops attacking and
    either drinks a potion or tries to flee."""

    potion_heal: int = 15
    """Hit points restored by one potion, capped at max hp."""

    max_rounds: int = 100
    """Rounds played before the encounter is called a stalemate. Without a
    cap, two sides that can't hurt each other would fight forever."""

    target_strategy: StrategyName = "first"

    penalty_policy: PenaltyPolicyName = "percentage"
    """``percentage`` takes defeat_penalty / retreat_penalty of the player's
    experience and currency on a loss; ``none`` costs nothing."""

    defeat_penalty: float = 0.10
    retreat_penalty: float = 0.05

    def __post_init__(self) -> None:
        if not 0 <= self.triage_threshold <= 1:
            raise ConfigurationError(f"triage_threshold must be between 0 and 1, got {self.triage_threshold}")
        if self.potion_heal < 0:
            raise ConfigurationError(f"potion_heal can't be negative, got {self.potion_heal}")
        if self.target_strategy not in STRATEGIES:
            raise ConfigurationError(f"unknown target strategy {self.target_strategy!r}")
        if self.penalty_policy not in PENALTY_POLICIES:
            raise ConfigurationError(f"unknown penalty policy {self.penalty_policy!r}")
        if self.max_rounds < 1:
            raise ConfigurationError(f"max_rounds must be at least 1, got {self.max_rounds}")
        for name in ("defeat_penalty", "retreat_penalty"):
            if not 0 <= getattr(self, name) <= 1:
                raise ConfigurationError(f"{name} must be between 0 and 1, got {getattr(self, name)}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``VRCOMBAT_<FIELD>`` variables, falling back
        to the defaults for anything unset."""
        environ = os.environ if environ is None else environ
        kwargs = {}
        for f in fields(cls):
            raw = environ.get(ENV_PREFIX + f.name.upper())
            if raw is None or raw.strip() == "":
                continue
            convert = type(f.default)
            try:
                kwargs[f.name] = convert(raw.strip())
            except ValueError:
                raise ConfigurationError(f"{ENV_PREFIX}{f.name.upper()}={raw!r} is not a valid {convert.__name__}") from None
        return cls(**kwargs)
