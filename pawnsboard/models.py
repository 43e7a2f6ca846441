"""
Pydantic Models for Pawns Board Game State
"""

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


MAX_PAWNS = 3
INFLUENCE_GRID_SIZE = 5
# Row and column of the placement anchor inside the influence grid.
INFLUENCE_CENTER = 2

InfluenceGrid = Tuple[Tuple[bool, ...], ...]


def mirror_influence_grid(grid: InfluenceGrid) -> InfluenceGrid:
    """Reflect ``grid`` across its vertical axis (column c -> 4 - c)."""
    return tuple(tuple(reversed(row)) for row in grid)


class Player(str, Enum):
    """Player enumeration. RED moves first from column 0."""
    RED = "RED"
    BLUE = "BLUE"

    def opponent(self) -> "Player":
        """Return the opposing player."""
        return Player.BLUE if self is Player.RED else Player.RED


class CellContent(str, Enum):
    """Cell content enumeration"""
    EMPTY = "empty"
    PAWNS = "pawns"
    CARD = "card"


class Card(BaseModel):
    """Immutable playing card.

    ``influence[r][c]`` marks the cells, relative to the anchor at
    ``influence[2][2]``, that receive influence when the card is placed.
    The centre flag is ignored.
    """
    name: str = Field(min_length=1)
    cost: int = Field(ge=1, le=MAX_PAWNS)
    value: int = Field(gt=0)
    influence: InfluenceGrid

    model_config = ConfigDict(frozen=True)

    @field_validator("influence")
    @classmethod
    def _check_grid_shape(cls, grid: InfluenceGrid) -> InfluenceGrid:
        if len(grid) != INFLUENCE_GRID_SIZE or any(
            len(row) != INFLUENCE_GRID_SIZE for row in grid
        ):
            raise ValueError(
                f"influence grid must be {INFLUENCE_GRID_SIZE}x{INFLUENCE_GRID_SIZE}"
            )
        return grid

    def mirrored(self) -> "Card":
        """Return this card with its influence grid reflected left-right."""
        return self.model_copy(update={"influence": mirror_influence_grid(self.influence)})

    def influence_as_chars(self) -> Tuple[str, ...]:
        """Render the grid as rows of ``I`` (influence), ``X`` (none), ``C`` (anchor)."""
        rows = []
        for r, row in enumerate(self.influence):
            chars = []
            for c, flag in enumerate(row):
                if r == INFLUENCE_CENTER and c == INFLUENCE_CENTER:
                    chars.append("C")
                else:
                    chars.append("I" if flag else "X")
            rows.append("".join(chars))
        return tuple(rows)

    def __str__(self) -> str:
        header = f"{self.name} (Cost: {self.cost}, Value: {self.value})"
        return "\n".join((header,) + self.influence_as_chars())


class Cell(BaseModel):
    """A single board cell.

    Exactly one ``content`` kind applies. ``pawn_count`` is only non-zero for
    PAWNS and ``card`` is only set for CARD.
    """
    content: CellContent = CellContent.EMPTY
    owner: Optional[Player] = None
    pawn_count: int = Field(default=0, ge=0, le=MAX_PAWNS)
    card: Optional[Card] = None

    def is_consistent(self) -> bool:
        """Return True if content, owner, pawn count and card agree."""
        if self.content == CellContent.EMPTY:
            return self.owner is None and self.pawn_count == 0 and self.card is None
        if self.content == CellContent.PAWNS:
            return (
                self.owner is not None
                and self.card is None
                and 1 <= self.pawn_count <= MAX_PAWNS
            )
        return self.owner is not None and self.card is not None and self.pawn_count == 0
