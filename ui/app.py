"""Streamlit encounter simulator UI.

Run with: PYTHONPATH=. streamlit run ui/app.py
"""

from __future__ import annotations

import streamlit as st

from vrcombat.api import run_combat
from vrcombat.config import PENALTY_POLICIES
from vrcombat.data import ARCHETYPES, MAX_GROUP_SIZE, MAX_LEVEL
from vrcombat.errors import ConfigurationError
from vrcombat.targeting import STRATEGIES

ARCHETYPE_NAMES = list(ARCHETYPES)
PLAYER_STATS = (
    # (key, label, min, default)
    ("level", "Level", 1, 5),
    ("hp", "HP", 0, 100),
    ("maxHp", "Max HP", 1, 100),
    ("attack", "Attack", 0, 10),
    ("defense", "Defense", 0, 5),
    ("luck", "Luck", 0, 2),
    ("potions", "Potions", 0, 1),
    ("experience", "Experience", 0, 0),
    ("currency", "Silver", 0, 0),
)


def player_config() -> dict:
    """Render sidebar controls for the player and return the player record."""
    st.sidebar.subheader("Player")
    player: dict[str, int] = {}
    with st.sidebar.expander("Stats", expanded=True):
        for key, label, min_value, default in PLAYER_STATS:
            player[key] = int(st.number_input(label, min_value=min_value, value=default, key=f"player_{key}"))
    return player


def group_config(n: int) -> dict:
    """Render sidebar controls for one enemy group and return its request."""
    with st.sidebar.expander(f"Group {n}", expanded=n == 1):
        archetype = st.selectbox("Type", ARCHETYPE_NAMES, index=1, key=f"group{n}_type")
        count = st.slider("Count", 1, MAX_GROUP_SIZE, 1, key=f"group{n}_count")
        level = st.slider("Level", 1, MAX_LEVEL, 3, key=f"group{n}_level")
    return {"count": count, "level": level, "type": archetype}


def enemies_config() -> list[dict]:
    st.sidebar.subheader("Enemies")
    n_groups = st.sidebar.number_input("Groups", min_value=1, max_value=5, value=1)
    return [group_config(n) for n in range(1, int(n_groups) + 1)]


def show_result(result: dict) -> None:
    """Display the outcome and the player's updated resources."""
    outcome = result["outcome"]
    message = f"{outcome.capitalize()} after {result['rounds']} rounds"
    if outcome == "victory":
        st.success(message)
    elif outcome == "defeat":
        st.error(message)
    else:
        st.warning(message)

    player = result["player"]
    cols = st.columns(4)
    cols[0].metric("HP", f"{player['hp']}/{player['maxHp']}")
    cols[1].metric("Potions", player["potions"])
    cols[2].metric("Experience", player["experience"], result["experience_change"])
    cols[3].metric("Silver", player["currency"], result["currency_change"])


def main() -> None:
    st.set_page_config(page_title="VR Combat Simulator", layout="wide")
    st.title("VR Combat Simulator")

    st.sidebar.header("Encounter Configuration")
    player = player_config()
    st.sidebar.divider()
    enemies = enemies_config()

    st.sidebar.divider()
    st.sidebar.subheader("Combat Options")
    strategy = st.sidebar.selectbox("Targeting", list(STRATEGIES))
    policy = st.sidebar.selectbox("Penalty policy", PENALTY_POLICIES)
    seed = st.sidebar.text_input("Seed (blank for random)")
    fight_clicked = st.sidebar.button("Fight!", type="primary")

    if fight_clicked:
        try:
            result = run_combat(
                player, enemies,
                seed=seed or None,
                target_strategy=strategy,
                penalty_policy=policy,
            )
        except ConfigurationError as e:
            st.error(str(e))
            return

        st.subheader("Combat Log")
        st.code(result["log"])
        st.subheader("Result")
        show_result(result)


if __name__ == "__main__":
    main()
