"""Influence propagation for placed cards.

A card's 5x5 influence grid is laid over the board with its centre on the
anchor cell. BLUE approaches the board from the right-hand side, so the grid
is reflected left-right before use when BLUE places a card. Targets that
fall off the board are dropped.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from .board import Board
from .models import (
    INFLUENCE_CENTER,
    INFLUENCE_GRID_SIZE,
    Card,
    CellContent,
    InfluenceGrid,
    Player,
    mirror_influence_grid,
)

__all__ = [
    "EffectKind",
    "InfluenceEffect",
    "apply_influence",
    "effective_grid",
    "mirror_influence_grid",
    "resolve_influence",
]

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


class EffectKind(Enum):
    """What an influence hit did to its target cell."""
    ADD_PAWN = "add_pawn"
    TRANSFER = "transfer"
    NONE = "none"


@dataclass(frozen=True)
class InfluenceEffect:
    """One applied influence hit.

    Attributes:
        target: Absolute board coordinate that was hit.
        kind: Effect applied to the target.
    """
    target: Coord
    kind: EffectKind


def effective_grid(card: Card, player: Player) -> InfluenceGrid:
    """Return the grid ``player`` actually applies for ``card``."""
    if player is Player.BLUE:
        return card.mirrored().influence
    return card.influence


def resolve_influence(
    card: Card,
    anchor: Coord,
    player: Player,
    rows: int,
    columns: int,
) -> List[Coord]:
    """Return the on-board cells influenced by ``card`` placed at ``anchor``.

    Pure: the board is not consulted beyond its dimensions. Targets come out
    in grid row-major order; each target appears at most once.
    """
    grid = effective_grid(card, player)
    anchor_row, anchor_col = anchor
    targets: List[Coord] = []
    for gr in range(INFLUENCE_GRID_SIZE):
        for gc in range(INFLUENCE_GRID_SIZE):
            if gr == INFLUENCE_CENTER and gc == INFLUENCE_CENTER:
                continue
            if not grid[gr][gc]:
                continue
            target_row = anchor_row + gr - INFLUENCE_CENTER
            target_col = anchor_col + gc - INFLUENCE_CENTER
            if 0 <= target_row < rows and 0 <= target_col < columns:
                targets.append((target_row, target_col))
    return targets


def apply_influence(
    board: Board,
    card: Card,
    anchor: Coord,
    player: Player,
) -> List[InfluenceEffect]:
    """Apply ``card``'s influence for ``player`` and return what happened.

    Empty cells and ``player``'s own pawns gain a pawn (capped), opponent
    pawns switch owner with their count kept, cards are untouched.
    """
    effects: List[InfluenceEffect] = []
    for row, col in resolve_influence(card, anchor, player, board.rows, board.columns):
        content = board.content_at(row, col)
        if content == CellContent.CARD:
            kind = EffectKind.NONE
        elif content == CellContent.EMPTY or board.owner_at(row, col) is player:
            board.add_pawn(row, col, player)
            kind = EffectKind.ADD_PAWN
        else:
            board.transfer_ownership(row, col, player)
            kind = EffectKind.TRANSFER
        effects.append(InfluenceEffect(target=(row, col), kind=kind))

    logger.debug(
        "Influence of %s at %s for %s: %s",
        card.name,
        anchor,
        player.value,
        [(e.target, e.kind.value) for e in effects],
    )
    return effects
