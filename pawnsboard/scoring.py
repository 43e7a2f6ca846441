"""Row and total scoring for Pawns Board."""
from __future__ import annotations

from typing import Optional, Tuple

from .board import Board
from .models import CellContent, Player

__all__ = ["ScoringEngine"]

Score = Tuple[int, int]


class ScoringEngine:
    """Read-only scoring over a :class:`Board`.

    Scores are ``(red, blue)`` pairs.
    """

    @staticmethod
    def row_score(board: Board, row: int) -> Score:
        """Sum the values of each player's cards in ``row``."""
        red = 0
        blue = 0
        for cell in board.cells_in_row(row):
            if cell.content != CellContent.CARD or cell.card is None:
                continue
            if cell.owner is Player.RED:
                red += cell.card.value
            else:
                blue += cell.card.value
        return red, blue

    @staticmethod
    def total_score(board: Board) -> Score:
        """Award each row's score to its strictly higher side; ties score nothing."""
        red_total = 0
        blue_total = 0
        for row in range(board.rows):
            red, blue = ScoringEngine.row_score(board, row)
            if red > blue:
                red_total += red
            elif blue > red:
                blue_total += blue
        return red_total, blue_total

    @staticmethod
    def winner(total: Score) -> Optional[Player]:
        red, blue = total
        if red > blue:
            return Player.RED
        if blue > red:
            return Player.BLUE
        return None
