"""Board storage and mutation primitives for Pawns Board.

The :class:`Board` owns every :class:`~pawnsboard.models.Cell` and is the
only place cells are mutated. Query helpers hand out copies so callers can
never change board state behind the engine's back.
"""
from __future__ import annotations

from typing import Iterator, List, Protocol, Tuple

from .errors import ErrorKind, GameRuleError
from .models import MAX_PAWNS, Card, Cell, CellContent, Player

__all__ = ["Board", "BoardFactory", "RectangularBoardFactory"]


class Board:
    """A ``rows`` x ``columns`` grid of cells.

    Dimensions are fixed at construction. ``columns`` must be odd so that
    both players' home columns are equidistant from the centre column.
    """

    def __init__(self, rows: int, columns: int) -> None:
        if rows <= 0:
            raise GameRuleError(
                ErrorKind.INVALID_DIMENSIONS,
                "Number of rows must be positive",
                context={"rows": rows},
            )
        if columns <= 1:
            raise GameRuleError(
                ErrorKind.INVALID_DIMENSIONS,
                "Number of columns must be greater than 1",
                context={"columns": columns},
            )
        if columns % 2 == 0:
            raise GameRuleError(
                ErrorKind.INVALID_DIMENSIONS,
                "Number of columns must be odd",
                context={"columns": columns},
            )
        self._rows = rows
        self._columns = columns
        self._cells: List[List[Cell]] = [
            [Cell() for _ in range(columns)] for _ in range(rows)
        ]

    @classmethod
    def create(cls, rows: int, columns: int) -> "Board":
        return cls(rows, columns)

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def dimensions(self) -> Tuple[int, int]:
        return self._rows, self._columns

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self._rows and 0 <= col < self._columns

    def validate_coordinates(self, row: int, col: int) -> None:
        """Raise OUT_OF_BOUNDS unless ``(row, col)`` is on the board."""
        if not self.in_bounds(row, col):
            raise GameRuleError(
                ErrorKind.OUT_OF_BOUNDS,
                f"Invalid coordinates: ({row}, {col})",
                context={"rows": self._rows, "columns": self._columns},
            )

    def validate_row(self, row: int) -> None:
        if not 0 <= row < self._rows:
            raise GameRuleError(
                ErrorKind.OUT_OF_BOUNDS,
                f"Row index out of bounds: {row}",
                context={"rows": self._rows},
            )

    def _cell(self, row: int, col: int) -> Cell:
        self.validate_coordinates(row, col)
        return self._cells[row][col]

    def content_at(self, row: int, col: int) -> CellContent:
        return self._cell(row, col).content

    def owner_at(self, row: int, col: int) -> Player | None:
        return self._cell(row, col).owner

    def pawn_count_at(self, row: int, col: int) -> int:
        return self._cell(row, col).pawn_count

    def card_at(self, row: int, col: int) -> Card | None:
        return self._cell(row, col).card

    def cell_at(self, row: int, col: int) -> Cell:
        """Return a copy of the cell at ``(row, col)``."""
        return self._cell(row, col).model_copy()

    def cells_in_row(self, row: int) -> List[Cell]:
        self.validate_row(row)
        return [cell.model_copy() for cell in self._cells[row]]

    def iter_cells(self) -> Iterator[Tuple[int, int, Cell]]:
        """Yield ``(row, col, cell_copy)`` in row-major order."""
        for r, row in enumerate(self._cells):
            for c, cell in enumerate(row):
                yield r, c, cell.model_copy()

    def snapshot(self) -> List[List[Cell]]:
        return [[cell.model_copy() for cell in row] for row in self._cells]

    # ------------------------------------------------------------------
    # Mutation primitives
    # ------------------------------------------------------------------

    def add_pawn(self, row: int, col: int, player: Player) -> None:
        """Add one pawn owned by ``player``.

        Empty cells gain a single pawn. Cells already holding ``player``'s
        pawns gain one more, up to ``MAX_PAWNS``; at the cap this is a no-op.
        """
        cell = self._cell(row, col)
        if cell.content == CellContent.EMPTY:
            cell.content = CellContent.PAWNS
            cell.owner = player
            cell.pawn_count = 1
            return
        if cell.content == CellContent.CARD:
            raise GameRuleError(
                ErrorKind.INVALID_CONTENT,
                "Cannot add a pawn to a cell holding a card",
                context={"row": row, "col": col},
            )
        if cell.owner != player:
            raise GameRuleError(
                ErrorKind.WRONG_OWNER,
                "Cannot add a pawn to a cell owned by the opponent",
                context={"row": row, "col": col, "owner": cell.owner},
            )
        if cell.pawn_count < MAX_PAWNS:
            cell.pawn_count += 1

    def transfer_ownership(self, row: int, col: int, new_owner: Player) -> None:
        cell = self._cell(row, col)
        if cell.content != CellContent.PAWNS:
            raise GameRuleError(
                ErrorKind.INVALID_CONTENT,
                "Only pawns can change ownership",
                context={"row": row, "col": col, "content": cell.content.value},
            )
        cell.owner = new_owner

    def place_card(self, row: int, col: int, card: Card, player: Player) -> None:
        """Install ``card`` for ``player``, discarding whatever was there.

        Affordability is the caller's responsibility.
        """
        cell = self._cell(row, col)
        cell.content = CellContent.CARD
        cell.owner = player
        cell.pawn_count = 0
        cell.card = card


class BoardFactory(Protocol):
    """Creates a board of a particular shape with its starting pawns."""

    def create_board(self, rows: int, columns: int) -> Board:
        ...


class RectangularBoardFactory:
    """Rectangular board with RED pawns in the first column and BLUE in the last."""

    def create_board(self, rows: int, columns: int) -> Board:
        board = Board(rows, columns)
        for r in range(rows):
            board.add_pawn(r, 0, Player.RED)
            board.add_pawn(r, columns - 1, Player.BLUE)
        return board
