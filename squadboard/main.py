# Copyright (C) 2025 Richard Owen
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""Entry point for the demo formation board and the optional visualiser."""
import argparse
import asyncio
from pathlib import Path
from typing import List, Optional, Sequence

from squadboard.engine.presentation import board_view, player_card, selected_players
from squadboard.engine.session import FormationSession
from squadboard.engine.state import FormationState
from squadboard.formations.catalog import DEFAULT_CATALOG
from squadboard.models.player import Player
from squadboard.utils.debug import BoardDebugger
from squadboard.utils.generator import generate_squad  # Fallback if no squad file
from squadboard.utils.roster import InMemoryRosterProvider, load_squad_from_json

DEMO_COACH = "demo"


def print_lineup(state: FormationState) -> None:
    """Print the current board as text.

    Parameters
    ----------
    state : FormationState
        Board state whose current view should be printed.
    """
    view = board_view(state.current)
    print(f"\nFormation: {view.formation_name} ({view.shape}) [{view.status}]")
    if view.message:
        print(view.message)
    for slot in view.slots:
        print(f"  {slot.label:>4}  {slot.text}")
    if view.goalkeeper_rating:
        print(f"Goalkeeper rating: {view.goalkeeper_rating}")

    players = selected_players(state.current)
    if players:
        keeper = player_card(players[0])
        if keeper.goalkeeper_rating is not None:
            breakdown = ", ".join(f"{name} {value}" for name, value in keeper.categories.items())
            print(f"{keeper.name}: {breakdown}")


def load_squad(path: Path) -> List[Player]:
    """Load the demo squad, generating one when the file is unusable.

    Parameters
    ----------
    path : Path
        JSON squad file to try first.

    Returns
    -------
    List[Player]
        The squad.
    """
    if path.exists():
        try:
            return load_squad_from_json(str(path))
        except (OSError, ValueError) as e:
            print(f"Error loading squad from {path}: {e}")
            print("Falling back to a generated squad...")
    else:
        print(f"No squad file found at {path}")
        print("Using a generated squad...")
    return generate_squad()


async def run_demo(session: FormationSession, formations: Sequence[str]) -> None:
    """Load the board and step through the requested formations.

    Parameters
    ----------
    session : FormationSession
        Session driving the board.
    formations : Sequence[str]
        Formation names to show after the default one.
    """
    await session.start()
    print_lineup(session.state)
    for name in formations:
        await session.change_formation(name)
        print_lineup(session.state)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Build a demo board from a squad file and print or draw it.

    Parameters
    ----------
    argv : Optional[Sequence[str]]
        Command-line arguments; ``sys.argv`` when ``None``.
    """
    parser = argparse.ArgumentParser(description="Assign a squad to formation slots and rate the goalkeeper")
    parser.add_argument("--squad", type=str, default="data/squad.json", help="Path to squad JSON file")
    parser.add_argument(
        "--formation",
        action="append",
        default=[],
        help=f"Formation to show after the default one; one of {', '.join(DEFAULT_CATALOG.list_formations())}",
    )
    parser.add_argument("--visualize", action="store_true", help="Open the pygame board after printing")
    parser.add_argument("--debug-dir", type=str, default=None, help="Directory for board debug logs")
    args = parser.parse_args(argv)

    squad = load_squad(Path(args.squad))
    debugger = BoardDebugger(args.debug_dir)
    state = FormationState(debugger=debugger)
    session = FormationSession(InMemoryRosterProvider({DEMO_COACH: squad}), DEMO_COACH, state)

    try:
        asyncio.run(run_demo(session, args.formation))

        if args.visualize:
            from squadboard.visualizer.visualizer import start_visualizer

            def select(name: str) -> None:
                asyncio.run(session.change_formation(name))

            start_visualizer(state, on_select_formation=select)
    finally:
        debugger.close()
        print(f"\nDebug log written to {debugger.log_path}")


if __name__ == "__main__":
    main()
