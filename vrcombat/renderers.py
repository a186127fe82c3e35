"""Renderers that convert structured combat records into text output.

The TextRenderer produces the line-per-event log handed back to the host.
Other front-ends (e.g. the streamlit app) can consume the same records for
richer display.
"""

from __future__ import annotations

from vrcombat.records import AttackRecord, CombatRecord, EnemyAttackRecord, FleeRecord, PotionRecord, RoundRecord, SettlementRecord


class TextRenderer:
    """Renders a CombatRecord to log lines, one string per event."""

    def render_combat(self, record: CombatRecord) -> list[str]:
        lines: list[str] = []
        for rnd in record.rounds:
            lines.extend(self.render_round(rnd))
        if record.settlement:
            lines.append(self.render_settlement(record.settlement))
        return lines

    def render_round(self, record: RoundRecord) -> list[str]:
        lines = [f"--- ROUND {record.round_num} ---"]
        if record.action is not None:
            lines.extend(self.render_action(record.action))
        for attack in record.enemy_attacks:
            lines.append(self.render_enemy_attack(attack))
        if record.damage_taken > 0:
            lines.append(f"Total damage taken: {record.damage_taken} (HP {record.player_hp})")
        return lines

    def render_action(self, record: AttackRecord | PotionRecord | FleeRecord) -> list[str]:
        if isinstance(record, AttackRecord):
            return self.render_attack(record)
        elif isinstance(record, PotionRecord):
            return [f"Potion used! +{record.healed} HP, now {record.hp} ({record.potions_left} left)"]
        elif isinstance(record, FleeRecord):
            return [f"Flee attempt (luck {record.luck})...", "Escaped successfully!" if record.success else "Escape failed!"]
        return []

    def render_attack(self, record: AttackRecord) -> list[str]:
        if record.miss:
            return [f"{record.attacker} missed {record.defender}!"]
        lines = [f"{record.attacker} hits {record.defender}: {record.damage} dmg ({record.severity}), {record.defender_hp} HP left"]
        if record.crit:
            lines.append("CRITICAL!")
        if record.killed:
            lines.append(f"{record.defender} defeated")
        return lines

    def render_enemy_attack(self, record: EnemyAttackRecord) -> str:
        if record.miss:
            return f"{record.attacker} attacks: missed"
        suffix = " (CRITICAL)" if record.crit else ""
        return f"{record.attacker} attacks: {record.damage} dmg{suffix}"

    def render_settlement(self, record: SettlementRecord) -> str:
        xp, gold = record.experience_change, record.currency_change
        if record.outcome == "victory":
            return f"VICTORY! Earned {xp} XP and {gold} silver"
        elif record.outcome == "defeat":
            return f"DEFEAT! Lost {-xp} XP and {-gold} silver"
        elif record.outcome == "fled":
            return f"RETREAT! Lost {-xp} XP and {-gold} silver"
        return "STALEMATE! Neither side could finish the fight"
