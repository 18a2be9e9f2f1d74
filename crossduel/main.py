"""
Console entry point for a local two-player crossword duel.

Usage:
    python -m crossduel.main
    python -m crossduel.main config.yaml --output results/duel.json --verbose

Moves are typed as LETTER@ROW,COL placements, e.g. ``W@6,1 I@6,2``.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List

import yaml

from .engine import render_view
from .engine.parsing import parse_move
from .environment import Duel, GameConfig


def load_config(config_path: str) -> GameConfig:
    """Load duel configuration from a YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return GameConfig(**data)


def describe_hints(duel: Duel) -> List[str]:
    """One line per word slot: slot, length, hint and completion mark."""
    lines = []
    for word in duel.get_view().words:
        mark = "✓" if word.completed else " "
        lines.append(f"  [{mark}] {word.slot:<3} ({word.length}) {word.hint}")
    return lines


def play_move(duel: Duel, command: str) -> None:
    """Place the letters of a move command and submit them."""
    placements, errors = parse_move(command)
    if errors:
        for err in errors:
            print(f"  - {err.message}")
        return

    for letter, coordinate in placements:
        rack = duel.current_player.rack
        if letter not in rack:
            print(f"  - '{letter}' is not in your rack")
            continue
        try:
            duel.place_letter(rack.index(letter), coordinate)
        except ValueError as e:
            print(f"  - {e}")

    result = duel.submit_move()
    player = duel.config.player_names[result.player_index]

    if result.accepted:
        print(f"{player}: +{result.score_delta} points")
        return

    print(result.errors[0].message)
    if result.reason == "WRONG_LETTERS":
        cleared = duel.wait_and_revert()
        print(f"Cleared {len(cleared)} letter(s). {player} tries again.")


def main():
    parser = argparse.ArgumentParser(
        description="Play a two-player crossword duel in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  seed: 42
  strategy: dynamic
  source: dwds
  fetch_timeout: 5
  revert_delay_seconds: 3
  player_names: [Anna, Ben]
        """
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to YAML configuration file (defaults to the fixed grid)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed (overrides the config)"
    )
    parser.add_argument(
        "--strategy",
        choices=["fixed", "dynamic"],
        help="Grid build strategy (overrides the config)"
    )
    parser.add_argument(
        "--source",
        choices=["bank", "dwds", "llm"],
        help="Word source for the dynamic strategy (overrides the config)"
    )
    parser.add_argument(
        "--output", "-o",
        help="Path to save the duel result JSON"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log debug output to stderr"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config) if args.config else GameConfig()
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    overrides = {
        key: value for key, value in
        (("seed", args.seed), ("strategy", args.strategy), ("source", args.source))
        if value is not None
    }
    if overrides:
        config = config.model_copy(update=overrides)

    duel = Duel.create(config=config)

    try:
        while not duel.is_complete:
            index = duel.session.current_player_index
            print()
            print(render_view(duel.get_view()))
            print("\n".join(describe_hints(duel)))
            scores = " | ".join(
                f"{name}: {player.score}"
                for name, player in zip(config.player_names, duel.session.players)
            )
            print(f"Scores: {scores}")
            print(f"{config.player_names[index]} to move. Rack: {' '.join(duel.current_player.rack)}")

            command = input("Move (LETTER@ROW,COL ..., 'pass' or 'quit'): ").strip()
            if command.lower() == "quit":
                break
            if command.lower() == "pass":
                duel.pass_turn()
                continue

            play_move(duel, command)
    except (KeyboardInterrupt, EOFError):
        print("\nDuel interrupted")

    result = duel.get_result()

    if args.output:
        duel.save_result(args.output)
        print(f"Results saved to: {args.output}")

    # Print summary
    print()
    print("=== Duel Summary ===")
    print(f"Turns: {result.total_turns}")
    for pid, score in result.scores.items():
        print(f"{result.player_names[pid]}: {score}")
    if result.winner:
        print(f"Winner: {result.player_names[result.winner]}")
    elif result.is_draw:
        print("Draw")

    return 0


if __name__ == "__main__":
    sys.exit(main())
