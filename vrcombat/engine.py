"""
Combat engine: drives an encounter round by round until it ends.

Each round the player acts once and then every living opponent strikes
back:

1. Triage. At or below the triage threshold (20% of max hp by default) the
   player drinks a potion if they have one, and otherwise tries to flee. A
   successful escape ends the encounter on the spot with no counter-attack.
2. Attack. Otherwise the player attacks the target picked by the target
   strategy.
3. Enemy volley. Every living opponent attacks the player once, in
   flattened order, and the total is taken off the player's hp.

The encounter ends in victory (every opponent dead), defeat (player at 0
hp), retreat (a successful flee), or stalemate once Settings.max_rounds
rounds have gone by without any of those.
"""

from __future__ import annotations

import logging

from vrcombat.config import Settings
from vrcombat.dice import Dice, wound_severity
from vrcombat.formations import Formation
from vrcombat.records import AttackRecord, CombatRecord, EnemyAttackRecord, FleeRecord, PotionRecord, RoundRecord, SettlementRecord
from vrcombat.settlement import settle
from vrcombat.targeting import get_strategy
from vrcombat.types import Outcome

logger = logging.getLogger(__name__)


class Engine:
    """Runs one encounter from start to finish.

    Owns the combat state: the round clock, the player's working copy (via
    the formation), the fled/victory flags, and the combat record. An Engine
    is single use; build a new one for every encounter.
    """

    def __init__(self, formation: Formation, dice: Dice | None = None, settings: Settings | None = None) -> None:
        self.formation = formation
        self.player = formation.player
        self.dice = dice or Dice()
        self.settings = settings or Settings()
        self.strategy = get_strategy(self.settings.target_strategy)
        self.combat_record = CombatRecord()
        self.fled = False
        self.victory = False

    @property
    def round_num(self) -> int:
        return len(self.combat_record.rounds)

    @property
    def finished(self) -> bool:
        return self.fled or self.victory or self.player.dead

    @property
    def needs_triage(self) -> bool:
        return self.player.hp <= self.settings.triage_threshold * self.player.max_hp

    def fight(self) -> CombatRecord:
        """Play rounds until the encounter ends, then settle it."""
        logger.info(
            "encounter start: player hp %d/%d vs %d opponents in %d groups",
            self.player.hp, self.player.max_hp,
            len(self.formation.opponents), len(self.formation.groups),
        )

        empty = self.formation.one_side_finished
        if empty:
            logger.warning(
                "encounter over before it began (player hp %d, %d living opponents)",
                self.player.hp, len(self.formation.living),
            )
        self.victory = not self.player.dead and self.formation.opponents_defeated

        while not self.finished:
            if self.round_num >= self.settings.max_rounds:
                logger.warning("no result after %d rounds, calling a stalemate", self.round_num)
                break
            self.round()

        outcome = self.outcome()
        self.combat_record.outcome = outcome
        if empty:
            # Nothing was fought, so nothing is won or lost. A player who
            # arrived below 0 hp still leaves at exactly 0.
            self.player.take_damage(0)
            self.combat_record.settlement = SettlementRecord(outcome=outcome)
        else:
            self.combat_record.settlement = settle(
                outcome, self.player, self.formation.groups, self.dice, self.settings,
            )
        logger.info("encounter end: %s after %d rounds", outcome, self.round_num)
        return self.combat_record

    def outcome(self) -> Outcome:
        if self.victory:
            return "victory"
        if self.fled:
            return "fled"
        if self.player.dead:
            return "defeat"
        return "stalemate"

    def round(self) -> None:
        """Play one round: a player action, then the enemy volley."""
        round_rec = RoundRecord(round_num=self.round_num + 1)
        self.combat_record.rounds.append(round_rec)

        if self.needs_triage:
            round_rec.action = self.triage()
            if self.fled:
                round_rec.player_hp = self.player.hp
                return
        else:
            round_rec.action = self.attack()
            if round_rec.action is None:
                self.victory = True
                round_rec.player_hp = self.player.hp
                return

        self.enemy_volley(round_rec)
        round_rec.player_hp = self.player.hp
        self.victory = self.formation.opponents_defeated
        logger.debug(
            "round %d: player hp %d, %d opponents left",
            round_rec.round_num, self.player.hp, len(self.formation.living),
        )

    def triage(self) -> PotionRecord | FleeRecord:
        """Drink a potion, or try to run if there are none left."""
        if self.player.potions > 0:
            self.player.potions -= 1
            healed = self.player.heal(self.settings.potion_heal)
            return PotionRecord(healed=healed, hp=self.player.hp, potions_left=self.player.potions)

        self.fled = self.dice.attempt_flee(self.player.luck)
        return FleeRecord(luck=self.player.luck, success=self.fled)

    def attack(self) -> AttackRecord | None:
        """Attack the chosen target. Returns None when nobody is left to hit."""
        target = self.strategy.choose(self.formation.living, self.dice)
        if target is None:
            return None

        result = self.dice.resolve_attack(self.player, target)
        rec = AttackRecord(
            attacker=self.player.name, defender=target.name,
            miss=result.is_miss, crit=result.is_crit,
        )
        if not result.is_miss:
            target.take_damage(result.damage)
            rec.damage = result.damage
            rec.severity = wound_severity(result.damage, target.max_hp)
            rec.killed = target.dead
        rec.defender_hp = target.hp
        return rec

    def enemy_volley(self, round_rec: RoundRecord) -> None:
        """Every living opponent attacks the player once."""
        total = 0
        for opponent in self.formation.living:
            result = self.dice.resolve_attack(opponent, self.player)
            round_rec.enemy_attacks.append(EnemyAttackRecord(
                attacker=opponent.name, damage=result.damage,
                miss=result.is_miss, crit=result.is_crit,
            ))
            total += result.damage
        round_rec.damage_taken = total
        self.player.take_damage(total)
