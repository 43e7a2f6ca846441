"""Command-line driver: play one Pawns Board game in the terminal.

Usage:
    python -m pawnsboard --red human --blue random --seed 7
    python -m pawnsboard --config config/pawnsboard.yaml --no-shuffle
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import ControllerKind, GameConfig, load_config
from .deck import deck_source
from .errors import ConfigurationError, GameRuleError
from .game_engine import GameEngine
from .models import Player
from .players import BasePlayer, HumanPlayer, RandomPlayer, run_game
from .view import TextualView

logger = logging.getLogger(__name__)

DEFAULT_DECK = Path(__file__).resolve().parent / "decks" / "3x5_complete.deck"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pawnsboard",
        description="Play a game of Pawns Board in the terminal.",
    )
    parser.add_argument("--config", type=Path, help="YAML game configuration file")
    parser.add_argument("--deck", type=Path, help="Deck configuration file")
    parser.add_argument("--rows", type=int, help="Number of board rows")
    parser.add_argument("--columns", type=int, help="Number of board columns (odd)")
    parser.add_argument("--hand-size", type=int, help="Starting hand size")
    parser.add_argument("--seed", type=int, help="Seed for deck shuffling and random players")
    parser.add_argument(
        "--no-shuffle",
        action="store_true",
        help="Deal cards in deck file order",
    )
    parser.add_argument(
        "--red",
        choices=[kind.value for kind in ControllerKind],
        help="Controller for RED",
    )
    parser.add_argument(
        "--blue",
        choices=[kind.value for kind in ControllerKind],
        help="Controller for BLUE",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    return parser


def resolve_config(args: argparse.Namespace) -> GameConfig:
    """Layer command-line flags over the file/environment configuration."""
    config = load_config(args.config)
    overrides = {
        "rows": args.rows,
        "columns": args.columns,
        "starting_hand_size": args.hand_size,
        "deck_path": args.deck,
        "seed": args.seed,
        "red": args.red,
        "blue": args.blue,
    }
    data = config.model_dump()
    data.update({key: value for key, value in overrides.items() if value is not None})
    if args.no_shuffle:
        data["shuffle"] = False
    try:
        return GameConfig(**data)
    except ValueError as e:
        raise ConfigurationError(f"Invalid command-line option: {e}") from e


def make_controller(kind: ControllerKind, color: Player, seed: Optional[int]) -> BasePlayer:
    if kind == ControllerKind.HUMAN:
        return HumanPlayer(color)
    player_seed = None if seed is None else seed + (0 if color is Player.RED else 1)
    return RandomPlayer(color, seed=player_seed)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        config = resolve_config(args)
        engine = GameEngine()
        engine.start_game(
            config.rows,
            config.columns,
            deck_source(config.deck_path or DEFAULT_DECK, shuffle=config.shuffle, seed=config.seed),
            config.starting_hand_size,
        )
        view = TextualView(engine)
        print(view.render_game_state("Game Start"))
        print()

        def _show(engine: GameEngine, acting: Player) -> None:
            print(view.render_game_state(f"After {acting.value}'s turn"))
            print()

        red = make_controller(config.red, Player.RED, config.seed)
        blue = make_controller(config.blue, Player.BLUE, config.seed)
        winner = run_game(engine, red, blue, on_turn=_show)
    except (ConfigurationError, GameRuleError) as e:
        logger.error("Cannot play game: %s", e)
        return 2

    logger.info("Game finished, winner: %s", winner.value if winner else "none")
    return 0


if __name__ == "__main__":
    sys.exit(main())
