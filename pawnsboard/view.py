"""Plain-text rendering of a Pawns Board game."""
from __future__ import annotations

from typing import List, Optional

from .game_engine import GameEngine
from .models import CellContent, Player

__all__ = ["TextualView"]

NOT_STARTED = "Game has not been started"


class TextualView:
    """Renders an engine's board using only its public queries.

    Each row reads ``<red row score> <cells...> <blue row score>``. Cells are
    ``__`` when empty, ``2r``/``1b`` for pawns and ``R3``/``B1`` for cards.
    """

    def __init__(self, engine: GameEngine) -> None:
        self.engine = engine

    def __str__(self) -> str:
        return self.render()

    def render(self) -> str:
        if not self.engine.is_started():
            return NOT_STARTED
        rows, columns = self.engine.board_dimensions()
        lines = []
        for r in range(rows):
            red, blue = self.engine.get_row_scores(r)
            cells = " ".join(self._render_cell(r, c) for c in range(columns))
            lines.append(f"{red} {cells} {blue}")
        return "\n".join(lines)

    def _render_cell(self, row: int, col: int) -> str:
        content = self.engine.get_cell_content(row, col)
        owner = self.engine.get_cell_owner(row, col)
        if content == CellContent.PAWNS:
            suffix = "r" if owner is Player.RED else "b"
            return f"{self.engine.get_pawn_count(row, col)}{suffix}"
        if content == CellContent.CARD:
            card = self.engine.get_card_at(row, col)
            prefix = "R" if owner is Player.RED else "B"
            return f"{prefix}{card.value if card is not None else 0}"
        return "__"

    def render_game_state(self, header: Optional[str] = None) -> str:
        """Board plus current player and, once over, scores and winner."""
        parts: List[str] = []
        if header is not None:
            parts.append(f"--- {header} ---")
        if not self.engine.is_started():
            parts.append(NOT_STARTED)
            return "\n".join(parts)

        parts.append(f"Current Player: {self.engine.current_player.value}")
        parts.append(self.render())
        if self.engine.is_over():
            red, blue = self.engine.get_total_score()
            parts.append("Game is over")
            parts.append(f"RED score: {red}")
            parts.append(f"BLUE score: {blue}")
            winner = self.engine.get_winner()
            if winner is not None:
                parts.append(f"Winner: {winner.value}")
            else:
                parts.append("Game ended in a tie!")
        return "\n".join(parts)

    def render_hand(self, player: Player) -> str:
        """Numbered listing of ``player``'s hand with each influence grid."""
        hand = self.engine.get_player_hand(player)
        if not hand:
            return f"{player.value} hand is empty"
        blocks = [f"{player.value} hand:"]
        for index, card in enumerate(hand):
            blocks.append(f"[{index}] {card}")
        return "\n".join(blocks)
