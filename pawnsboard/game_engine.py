"""Core game engine for Pawns Board.

The engine owns the :class:`~pawnsboard.board.Board`, both players' hands
and decks, and the turn state machine::

    not started --start_game--> in progress --two consecutive passes--> over

``place_card`` and ``pass_turn`` are the only mutating entry points once a
game is running. Every rule violation raises :class:`GameRuleError` before
anything is mutated, so a failed call leaves the engine exactly as it was.

The engine is not thread-safe. Hosts driving several sessions concurrently
must serialise calls per engine instance.
"""

from __future__ import annotations

import logging
import os
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from .board import Board, BoardFactory, RectangularBoardFactory
from .errors import ErrorKind, GameRuleError
from .influence import apply_influence
from .models import Card, Cell, CellContent, Player
from .scoring import ScoringEngine

__all__ = ["DeckSource", "GameEngine", "PlacementMove"]

logger = logging.getLogger(__name__)

DEBUG_ENGINE = os.environ.get("PAWNSBOARD_DEBUG_ENGINE", "0") in {
    "1", "true", "yes", "on",
}
if DEBUG_ENGINE:
    logger.setLevel(logging.DEBUG)

Decks = Tuple[Sequence[Card], Sequence[Card]]
# Either a zero-argument callable producing (red_deck, blue_deck) or the
# pair itself. Deck order is draw order.
DeckSource = Union[Callable[[], Decks], Decks]
PlacementMove = Tuple[int, int, int]


class GameEngine:
    """Rules engine for a single two-player Pawns Board session."""

    def __init__(self, board_factory: Optional[BoardFactory] = None) -> None:
        self._board_factory: BoardFactory = board_factory or RectangularBoardFactory()
        self._board: Optional[Board] = None
        self._hands: Dict[Player, List[Card]] = {Player.RED: [], Player.BLUE: []}
        self._decks: Dict[Player, List[Card]] = {Player.RED: [], Player.BLUE: []}
        self._max_hand_size = 0
        self._current_player = Player.RED
        self._started = False
        self._over = False
        self._last_player_passed = False

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def start_game(
        self,
        rows: int,
        columns: int,
        deck_source: DeckSource,
        starting_hand_size: int,
    ) -> None:
        """Set up a fresh game and deal opening hands.

        Args:
            rows: Board rows, positive.
            columns: Board columns, odd and greater than 1.
            deck_source: Callable returning ``(red_deck, blue_deck)``, or
                that pair directly.
            starting_hand_size: Cards dealt to each player. Also the hand
                size cap for the rest of the game.

        Raises:
            GameRuleError: INVALID_DIMENSIONS or INVALID_DECK_CONFIGURATION.
        """
        board = self._board_factory.create_board(rows, columns)
        red_deck, blue_deck = self._load_decks(deck_source)

        min_deck_size = rows * columns
        if len(red_deck) < min_deck_size or len(blue_deck) < min_deck_size:
            raise GameRuleError(
                ErrorKind.INVALID_DECK_CONFIGURATION,
                f"Deck size must be at least {min_deck_size} cards",
                context={"red_deck": len(red_deck), "blue_deck": len(blue_deck)},
            )
        max_start = min(len(red_deck), len(blue_deck)) // 3
        if starting_hand_size < 0 or starting_hand_size > max_start:
            raise GameRuleError(
                ErrorKind.INVALID_DECK_CONFIGURATION,
                "Starting hand size must be between 0 and one third of the deck size",
                context={"starting_hand_size": starting_hand_size, "max": max_start},
            )

        self._board = board
        self._decks = {Player.RED: red_deck, Player.BLUE: blue_deck}
        self._hands = {
            Player.RED: [red_deck.pop(0) for _ in range(starting_hand_size)],
            Player.BLUE: [blue_deck.pop(0) for _ in range(starting_hand_size)],
        }
        self._max_hand_size = starting_hand_size
        self._current_player = Player.RED
        self._started = True
        self._over = False
        self._last_player_passed = False

        logger.info(
            "Started %dx%d game, hand size %d, decks %d/%d",
            rows,
            columns,
            starting_hand_size,
            len(red_deck),
            len(blue_deck),
        )
        self._draw_card()

    @staticmethod
    def _load_decks(deck_source: DeckSource) -> Tuple[List[Card], List[Card]]:
        decks = deck_source() if callable(deck_source) else deck_source
        try:
            red_deck, blue_deck = decks
        except (TypeError, ValueError):
            raise GameRuleError(
                ErrorKind.INVALID_DECK_CONFIGURATION,
                "Deck source must provide exactly two decks",
            ) from None
        red_deck, blue_deck = list(red_deck), list(blue_deck)
        for deck in (red_deck, blue_deck):
            if not all(isinstance(card, Card) for card in deck):
                raise GameRuleError(
                    ErrorKind.INVALID_DECK_CONFIGURATION,
                    "Decks may only contain cards",
                )
        return red_deck, blue_deck

    # ------------------------------------------------------------------
    # Moves
    # ------------------------------------------------------------------

    def place_card(self, card_index: int, row: int, col: int) -> None:
        """Place card ``card_index`` of the current hand at ``(row, col)``.

        The target must hold at least ``card.cost`` pawns owned by the
        current player. The card's influence is applied, the card leaves the
        hand, the turn passes and the next player draws.

        Raises:
            GameRuleError: GAME_NOT_IN_PROGRESS, OUT_OF_BOUNDS,
                INVALID_CARD_INDEX, NOT_PAWNS, WRONG_OWNER or
                INSUFFICIENT_PAWNS.
        """
        card = self._validate_placement(card_index, row, col)
        board = self._require_board()
        player = self._current_player

        board.place_card(row, col, card, player)
        effects = apply_influence(board, card, (row, col), player)
        del self._hands[player][card_index]

        logger.info(
            "%s placed %s (cost %d, value %d) at (%d, %d), %d influence hits",
            player.value,
            card.name,
            card.cost,
            card.value,
            row,
            col,
            len(effects),
        )

        self._last_player_passed = False
        self._switch_player()
        self._draw_card()

    def pass_turn(self) -> None:
        """Pass. A pass directly after the opponent's pass ends the game."""
        self._validate_game_in_progress()

        if self._last_player_passed:
            self._over = True
            red, blue = self.get_total_score()
            logger.info("Game over after consecutive passes, score %d-%d", red, blue)
            return

        logger.info("%s passed", self._current_player.value)
        self._last_player_passed = True
        self._switch_player()
        self._draw_card()

    def is_legal_move(self, card_index: int, row: int, col: int) -> bool:
        """Return True if ``place_card(card_index, row, col)`` would succeed."""
        try:
            self._validate_placement(card_index, row, col)
        except GameRuleError:
            return False
        return True

    def legal_moves(self) -> List[PlacementMove]:
        """Return every legal ``(card_index, row, col)`` for the current player."""
        if not self._started or self._over:
            return []
        board = self._require_board()
        hand = self._hands[self._current_player]
        moves: List[PlacementMove] = []
        for r, c, cell in board.iter_cells():
            if cell.content != CellContent.PAWNS or cell.owner is not self._current_player:
                continue
            for index, card in enumerate(hand):
                if card.cost <= cell.pawn_count:
                    moves.append((index, r, c))
        moves.sort()
        return moves

    def _validate_placement(self, card_index: int, row: int, col: int) -> Card:
        self._validate_game_in_progress()
        board = self._require_board()
        board.validate_coordinates(row, col)

        hand = self._hands[self._current_player]
        if not 0 <= card_index < len(hand):
            raise GameRuleError(
                ErrorKind.INVALID_CARD_INDEX,
                f"Invalid card index: {card_index}",
                context={"hand_size": len(hand)},
            )
        card = hand[card_index]

        if board.content_at(row, col) != CellContent.PAWNS:
            raise GameRuleError(
                ErrorKind.NOT_PAWNS,
                "Cell does not contain pawns",
                context={"row": row, "col": col},
            )
        if board.owner_at(row, col) is not self._current_player:
            raise GameRuleError(
                ErrorKind.WRONG_OWNER,
                "Pawns in cell are not owned by current player",
                context={"row": row, "col": col},
            )
        available = board.pawn_count_at(row, col)
        if available < card.cost:
            raise GameRuleError(
                ErrorKind.INSUFFICIENT_PAWNS,
                "Not enough pawns in cell",
                context={"required": card.cost, "available": available},
            )
        return card

    # ------------------------------------------------------------------
    # Turn bookkeeping
    # ------------------------------------------------------------------

    def _switch_player(self) -> None:
        self._current_player = self._current_player.opponent()

    def _draw_card(self) -> None:
        """Move the next deck card into the current hand, if there is room."""
        player = self._current_player
        hand = self._hands[player]
        deck = self._decks[player]
        if not deck or len(hand) >= self._max_hand_size:
            logger.debug(
                "%s draw skipped (hand %d/%d, deck %d)",
                player.value,
                len(hand),
                self._max_hand_size,
                len(deck),
            )
            return
        hand.append(deck.pop(0))

    def _validate_game_started(self) -> None:
        if not self._started:
            raise GameRuleError(ErrorKind.GAME_NOT_STARTED, "Game has not been started")

    def _validate_game_in_progress(self) -> None:
        if not self._started:
            raise GameRuleError(
                ErrorKind.GAME_NOT_IN_PROGRESS, "Game has not been started"
            )
        if self._over:
            raise GameRuleError(ErrorKind.GAME_NOT_IN_PROGRESS, "Game is already over")

    def _require_board(self) -> Board:
        self._validate_game_started()
        assert self._board is not None
        return self._board

    # ------------------------------------------------------------------
    # Read-only queries
    # ------------------------------------------------------------------

    def is_started(self) -> bool:
        return self._started

    def is_over(self) -> bool:
        return self._over

    @property
    def current_player(self) -> Player:
        self._validate_game_started()
        return self._current_player

    @property
    def max_hand_size(self) -> int:
        return self._max_hand_size

    def board_snapshot(self) -> List[List[Cell]]:
        """Return a copy of every cell, row by row.

        The engine keeps no reference to the returned cells.
        """
        return self._require_board().snapshot()

    def board_dimensions(self) -> Tuple[int, int]:
        return self._require_board().dimensions

    def get_cell_content(self, row: int, col: int) -> CellContent:
        return self._require_board().content_at(row, col)

    def get_cell_owner(self, row: int, col: int) -> Optional[Player]:
        return self._require_board().owner_at(row, col)

    def get_pawn_count(self, row: int, col: int) -> int:
        return self._require_board().pawn_count_at(row, col)

    def get_card_at(self, row: int, col: int) -> Optional[Card]:
        return self._require_board().card_at(row, col)

    def get_player_hand(self, player: Player) -> Tuple[Card, ...]:
        """Return a snapshot of ``player``'s hand."""
        self._validate_game_started()
        return tuple(self._hands[player])

    def get_remaining_deck_size(self, player: Player) -> int:
        self._validate_game_started()
        return len(self._decks[player])

    def get_row_scores(self, row: int) -> Tuple[int, int]:
        board = self._require_board()
        board.validate_row(row)
        return ScoringEngine.row_score(board, row)

    def get_total_score(self) -> Tuple[int, int]:
        return ScoringEngine.total_score(self._require_board())

    def get_winner(self) -> Optional[Player]:
        """Return the winner, or None on a draw.

        Raises:
            GameRuleError: GAME_NOT_STARTED, or GAME_NOT_OVER while play continues.
        """
        self._validate_game_started()
        if not self._over:
            raise GameRuleError(ErrorKind.GAME_NOT_OVER, "Game is not over yet")
        return ScoringEngine.winner(self.get_total_score())
