"""Tests for the Engine: triage, attack, enemy volley, termination and
full encounter integration.

Dice are patched with fixed roll sequences so every branch of the round
state machine can be driven deterministically.
"""

from dataclasses import replace
from itertools import cycle
from unittest.mock import patch

from vrcombat.builders import build_groups
from vrcombat.combatant import Player
from vrcombat.config import Settings
from vrcombat.dice import Dice
from vrcombat.engine import Engine
from vrcombat.formations import Formation
from vrcombat.records import AttackRecord, FleeRecord, PotionRecord


def make_player(**kw: int) -> Player:
    defaults = dict(level=5, hp=100, max_hp=100, attack=10, defense=5, luck=2)
    defaults.update(kw)
    return Player(**defaults)


def make_engine(
    player: Player | None = None,
    enemies: list[dict] | None = None,
    **settings: object,
) -> Engine:
    """Player vs one level 3 Normal (hp 30, attack 7, defense 5, luck 2)
    unless told otherwise."""
    groups = build_groups(enemies or [{"count": 1, "level": 3, "type": "Normal"}])
    return Engine(Formation(player or make_player(), groups), Dice.seeded(0), Settings(**settings))


class TestEngineInit:
    def test_empty_record(self) -> None:
        e = make_engine()
        assert e.combat_record.rounds == []
        assert e.combat_record.outcome is None
        assert e.round_num == 0
        assert e.fled is False
        assert e.victory is False

    def test_not_finished_at_start(self) -> None:
        assert make_engine().finished is False


class TestTriage:
    def test_threshold_is_inclusive(self) -> None:
        assert make_engine(make_player(hp=20)).needs_triage is True
        assert make_engine(make_player(hp=21)).needs_triage is False

    def test_potion_heals_and_uses_the_action(self) -> None:
        """20/100 hp with a potion: heal to 35, no attack, then the
        opponent still hits for 7 - 5 + 2 = 4."""
        e = make_engine(make_player(hp=20, potions=1))
        with patch.object(e.dice, "d6", side_effect=[2]):
            e.round()
        rnd = e.combat_record.rounds[0]
        assert isinstance(rnd.action, PotionRecord)
        assert rnd.action.healed == 15
        assert rnd.action.potions_left == 0
        assert e.player.potions == 0
        assert rnd.damage_taken == 4
        assert e.player.hp == 31
        assert e.formation.opponents[0].hp == 30

    def test_potion_heal_capped_at_max(self) -> None:
        e = make_engine(make_player(hp=2, max_hp=10, potions=2))
        with patch.object(e.dice, "d6", side_effect=[1]):
            e.round()
        assert e.combat_record.rounds[0].action.healed == 8
        assert e.player.potions == 1
        assert e.player.hp == 10

    def test_successful_flee_skips_enemy_volley(self) -> None:
        e = make_engine(make_player(hp=10, luck=2))
        with patch.object(e.dice, "d6", side_effect=[4]) as mock_d6:
            e.round()
        rnd = e.combat_record.rounds[0]
        assert isinstance(rnd.action, FleeRecord)
        assert rnd.action.success is True
        assert rnd.enemy_attacks == []
        assert e.fled is True
        assert e.finished is True
        assert e.player.hp == 10
        assert mock_d6.call_count == 1

    def test_failed_flee_still_takes_volley(self) -> None:
        e = make_engine(make_player(hp=10, luck=2))
        with patch.object(e.dice, "d6", side_effect=[3, 2]):
            e.round()
        rnd = e.combat_record.rounds[0]
        assert rnd.action.success is False
        assert e.fled is False
        assert rnd.damage_taken == 4
        assert e.player.hp == 6
        assert e.formation.opponents[0].hp == 30


class TestAttack:
    def test_hits_first_living(self) -> None:
        e = make_engine(enemies=[{"count": 2, "level": 3, "type": "Normal"}])
        first, second = e.formation.opponents
        with patch.object(e.dice, "d6", side_effect=[4, 1, 1]):
            e.round()
        assert first.hp == 21
        assert second.hp == 30
        rec = e.combat_record.rounds[0].action
        assert isinstance(rec, AttackRecord)
        assert (rec.damage, rec.defender_hp, rec.severity) == (9, 21, "Severe Injury")

    def test_skips_dead_members(self) -> None:
        e = make_engine(enemies=[{"count": 2, "level": 3, "type": "Normal"}])
        first, second = e.formation.opponents
        first.take_damage(first.max_hp)
        with patch.object(e.dice, "d6", side_effect=[4, 1]):
            e.round()
        assert second.hp == 21

    def test_lowest_hp_strategy_picks_the_weakest(self) -> None:
        e = make_engine(enemies=[{"count": 3, "level": 3, "type": "Normal"}], target_strategy="lowest_hp")
        first, second, third = e.formation.opponents
        third.take_damage(10)
        with patch.object(e.dice, "d6", side_effect=[4, 1, 1, 1]):
            e.round()
        assert third.hp == 11
        assert first.hp == 30
        assert second.hp == 30
        assert e.combat_record.rounds[0].action.defender == "Group 1 #3"

    def test_random_strategy_uses_the_encounter_dice(self) -> None:
        e = make_engine(enemies=[{"count": 3, "level": 3, "type": "Normal"}], target_strategy="random")
        first, second, third = e.formation.opponents
        with (
            patch.object(e.dice.rng, "choice", side_effect=lambda living: living[1]),
            patch.object(e.dice, "d6", side_effect=[4, 1, 1, 1]),
        ):
            e.round()
        assert second.hp == 21
        assert first.hp == third.hp == 30
        assert e.combat_record.rounds[0].action.defender == "Group 1 #2"

    def test_miss_deals_nothing(self) -> None:
        e = make_engine()
        with patch.object(e.dice, "d6", side_effect=[1, 1]):
            e.round()
        rec = e.combat_record.rounds[0].action
        assert rec.miss is True
        assert rec.damage == 0
        assert rec.severity is None
        assert e.formation.opponents[0].hp == 30

    def test_kill_is_recorded_and_floors_hp(self) -> None:
        """A crit for |10 - 5| + 6 + 2 = 13 on a 10 hp opponent."""
        e = make_engine()
        target = e.formation.opponents[0]
        target.hp = 10
        with patch.object(e.dice, "d6", side_effect=[6]):
            e.round()
        rec = e.combat_record.rounds[0].action
        assert rec.crit is True
        assert rec.killed is True
        assert target.hp == 0
        assert e.victory is True

    def test_dead_opponents_do_not_strike(self) -> None:
        e = make_engine(enemies=[{"count": 2, "level": 3, "type": "Normal"}])
        e.formation.opponents[0].hp = 5
        with patch.object(e.dice, "d6", side_effect=[4, 3]) as mock_d6:
            e.round()
        rnd = e.combat_record.rounds[0]
        assert len(rnd.enemy_attacks) == 1
        assert mock_d6.call_count == 2


class TestEnemyVolley:
    def test_every_living_opponent_attacks_in_order(self) -> None:
        e = make_engine(enemies=[
            {"count": 2, "level": 3, "type": "Normal"},
            {"count": 1, "level": 3, "type": "Normal"},
        ])
        with patch.object(e.dice, "d6", side_effect=[1, 2, 3, 4]):
            e.round()
        rnd = e.combat_record.rounds[0]
        assert [a.attacker for a in rnd.enemy_attacks] == ["Group 1 #1", "Group 1 #2", "Group 2 #1"]
        assert [a.damage for a in rnd.enemy_attacks] == [4, 5, 6]
        assert rnd.damage_taken == 15
        assert e.player.hp == 85

    def test_player_hp_floors_at_zero(self) -> None:
        e = make_engine(make_player(hp=30), enemies=[{"count": 5, "level": 10, "type": "Boss"}])
        with patch.object(e.dice, "d6", return_value=5):
            e.round()
        assert e.player.hp == 0
        assert e.player.dead
        assert e.finished


class TestFight:
    def test_worked_example(self) -> None:
        """Player hits for 9 each round (30 -> 21 -> 12 -> 3 -> 0) and
        takes 5 in each of the first three rounds."""
        e = make_engine(make_player(potions=1))
        with (
            patch.object(e.dice, "d6", side_effect=[4, 3, 4, 3, 4, 3, 4]),
            patch.object(e.dice, "uniform", return_value=0.0),
        ):
            record = e.fight()
        assert record.outcome == "victory"
        assert len(record.rounds) == 4
        assert record.rounds[0].action.defender_hp == 21
        assert record.rounds[0].player_hp == 95
        assert e.player.hp == 85
        assert e.player.potions == 1
        assert record.settlement.experience_change == 75
        assert record.settlement.currency_change == 15
        assert e.player.experience == 75

    def test_defeat(self) -> None:
        """Flee fails on a 5 (luck 0 needs 6), Boss hits 36 - 5 + 3 = 34."""
        player = make_player(hp=10, luck=0, experience=1000, currency=200)
        e = make_engine(player, enemies=[{"count": 1, "level": 10, "type": "Boss"}])
        with patch.object(e.dice, "d6", side_effect=[5, 3]):
            record = e.fight()
        assert record.outcome == "defeat"
        assert e.player.hp == 0
        assert record.settlement.experience_change == -100
        assert record.settlement.currency_change == -20

    def test_retreat(self) -> None:
        player = make_player(hp=10, experience=1000, currency=200)
        e = make_engine(player)
        with patch.object(e.dice, "d6", side_effect=[5]):
            record = e.fight()
        assert record.outcome == "fled"
        assert e.fled is True
        assert record.settlement.experience_change == -50
        assert record.settlement.currency_change == -10

    def test_retreat_without_penalty(self) -> None:
        player = make_player(hp=10, experience=1000, currency=200)
        e = make_engine(player, penalty_policy="none")
        with patch.object(e.dice, "d6", side_effect=[5]):
            record = e.fight()
        assert record.outcome == "fled"
        assert record.settlement.experience_change == 0
        assert e.player.experience == 1000

    def test_stalemate_after_round_cap(self) -> None:
        e = make_engine(make_player(experience=50), max_rounds=3)
        with patch.object(e.dice, "d6", return_value=1):
            record = e.fight()
        assert record.outcome == "stalemate"
        assert len(record.rounds) == 3
        assert record.settlement.experience_change == 0
        assert e.player.experience == 50

    def test_player_down_at_start(self) -> None:
        e = make_engine(make_player(hp=0, experience=100))
        with patch.object(e.dice, "d6") as mock_d6:
            record = e.fight()
        assert record.outcome == "defeat"
        assert record.rounds == []
        assert record.settlement.experience_change == 0
        mock_d6.assert_not_called()

    def test_opponents_down_at_start(self) -> None:
        e = make_engine()
        for o in e.formation.opponents:
            o.hp = 0
        record = e.fight()
        assert record.outcome == "victory"
        assert record.rounds == []
        assert record.settlement.experience_change == 0

    def test_one_action_per_round(self) -> None:
        e = make_engine(make_player(hp=60, potions=3), enemies=[{"count": 3, "level": 8, "type": "Elite"}])
        e.fight()
        for rnd in e.combat_record.rounds:
            assert rnd.action is not None

    def test_exactly_one_terminal_state(self) -> None:
        for seed in range(200):
            groups = build_groups([
                {"count": 2, "level": 4, "type": "Trash"},
                {"count": 1, "level": 5, "type": "Elite"},
            ])
            e = Engine(Formation(make_player(potions=1), groups), Dice.seeded(seed))
            record = e.fight()
            states = [e.victory, e.fled, e.player.dead]
            assert sum(states) == 1
            assert record.outcome in ("victory", "fled", "defeat")

    def test_same_rolls_same_record(self) -> None:
        rolls = [4, 3, 2, 5, 6, 1, 3, 4, 5, 2]

        def play() -> tuple:
            e = make_engine(make_player(hp=50, potions=1), enemies=[{"count": 2, "level": 4, "type": "Normal"}])
            with (
                patch.object(e.dice, "d6", side_effect=cycle(rolls)),
                patch.object(e.dice, "uniform", return_value=3.5),
            ):
                record = e.fight()
            return record, replace(e.player)

        assert play() == play()
