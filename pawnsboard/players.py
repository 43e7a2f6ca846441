"""
Player controllers for Pawns Board.

A controller decides what one side does on its turn and calls the engine's
``place_card`` / ``pass_turn``. No search or evaluation lives here:
:class:`RandomPlayer` picks uniformly among legal placements and
:class:`HumanPlayer` reads commands from a prompt.
"""

from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from .errors import ErrorKind, GameRuleError
from .game_engine import GameEngine
from .models import Player
from .view import TextualView

__all__ = ["BasePlayer", "HumanPlayer", "RandomPlayer", "derive_seed", "run_game"]

logger = logging.getLogger(__name__)


def derive_seed(color: Player) -> int:
    """Deterministic fallback seed for a controller without an explicit one."""
    base = 1_000_003 ^ ((1 if color is Player.RED else 2) * 97_911)
    return int(base & 0xFFFFFFFF)


class BasePlayer(ABC):
    """Abstract base class for all controllers."""

    def __init__(self, color: Player):
        self.color = color
        self.invalid_move_messages: List[str] = []

    def is_my_turn(self, engine: GameEngine) -> bool:
        return engine.current_player is self.color

    def take_turn(self, engine: GameEngine) -> None:
        """Act once on ``engine``.

        Raises:
            GameRuleError: WRONG_OWNER when it is not this player's turn, or
                any rule error raised by the move itself.
        """
        try:
            if not self.is_my_turn(engine):
                raise GameRuleError(
                    ErrorKind.WRONG_OWNER, f"Not {self.color.value}'s turn"
                )
            self._act(engine)
        except GameRuleError as e:
            self.receive_invalid_move_message(e.message)
            raise

    @abstractmethod
    def _act(self, engine: GameEngine) -> None:
        """Place a card or pass on ``engine``."""

    def receive_invalid_move_message(self, message: str) -> None:
        self.invalid_move_messages.append(message)
        logger.debug("%s rejected move: %s", self, message)

    def notify_game_end(self, engine: GameEngine, is_winner: bool) -> None:
        logger.info("%s notified of game end (winner=%s)", self, is_winner)

    def __str__(self) -> str:
        return f"{type(self).__name__} ({self.color.value})"


class RandomPlayer(BasePlayer):
    """Places a uniformly random legal card, or passes when none exists."""

    def __init__(self, color: Player, seed: Optional[int] = None):
        super().__init__(color)
        self.rng_seed = derive_seed(color) if seed is None else int(seed)
        self.rng = random.Random(self.rng_seed)

    def _act(self, engine: GameEngine) -> None:
        moves = engine.legal_moves()
        if not moves:
            engine.pass_turn()
            return
        card_index, row, col = self.rng.choice(moves)
        engine.place_card(card_index, row, col)


class HumanPlayer(BasePlayer):
    """Reads ``pass`` or ``<card_index> <row> <col>`` from ``input_fn``.

    Malformed commands and rejected moves are reported through ``output_fn``
    and the prompt repeats. End of input counts as a pass.
    """

    def __init__(
        self,
        color: Player,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ):
        super().__init__(color)
        self.input_fn = input_fn
        self.output_fn = output_fn

    def _act(self, engine: GameEngine) -> None:
        view = TextualView(engine)
        self.output_fn(view.render_hand(self.color))
        while True:
            try:
                command = self.input_fn(f"{self.color.value}> ").strip().lower()
            except EOFError:
                command = "pass"

            if command == "pass":
                engine.pass_turn()
                return

            parts = command.split()
            try:
                card_index, row, col = (int(part) for part in parts)
            except ValueError:
                self.output_fn("Enter 'pass' or '<card_index> <row> <col>'")
                continue

            try:
                engine.place_card(card_index, row, col)
            except GameRuleError as e:
                self.receive_invalid_move_message(e.message)
                self.output_fn(f"Invalid move: {e.message}")
                continue
            return


def run_game(
    engine: GameEngine,
    red: BasePlayer,
    blue: BasePlayer,
    on_turn: Optional[Callable[[GameEngine, Player], None]] = None,
) -> Optional[Player]:
    """Alternate ``red`` and ``blue`` on a started engine until the game ends.

    ``on_turn`` is called after every turn with the engine and the player
    who just acted. Returns the winner, or None on a draw.
    """
    controllers = {Player.RED: red, Player.BLUE: blue}
    while not engine.is_over():
        acting = engine.current_player
        controllers[acting].take_turn(engine)
        if on_turn is not None:
            on_turn(engine, acting)

    winner = engine.get_winner()
    for color, controller in controllers.items():
        controller.notify_game_end(engine, winner is color)
    return winner
