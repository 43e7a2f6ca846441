"""Deck configuration files and deck building.

A deck file lists one card per block::

    Security 1 2
    XXXXX
    XXIXX
    XICIX
    XXIXX
    XXXXX

The header is ``<name> <cost> <value>``; the five grid rows use ``I`` for
influence, ``X`` for none and ``C`` for the card itself, which must sit in
the centre. Blank lines between blocks are ignored.

Both decks are built in file order from the same cards. Mirroring for BLUE
happens in the engine at placement time, not here.
"""

from __future__ import annotations

import logging
import random
from collections import Counter
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from .errors import ErrorKind, GameRuleError
from .models import INFLUENCE_CENTER, INFLUENCE_GRID_SIZE, Card

__all__ = [
    "MAX_COPIES_PER_CARD",
    "CardFactory",
    "build_decks",
    "deck_source",
    "parse_cards",
    "read_cards",
    "validate_deck",
]

logger = logging.getLogger(__name__)

MAX_COPIES_PER_CARD = 2
_GRID_CHARS = {"I", "X", "C"}


def _deck_error(message: str, **context) -> GameRuleError:
    return GameRuleError(ErrorKind.INVALID_DECK_CONFIGURATION, message, context=context)


class CardFactory:
    """Builds :class:`Card` objects from the character grid used in deck files."""

    def create_card(
        self,
        name: str,
        cost: int,
        value: int,
        char_grid: Sequence[str],
    ) -> Card:
        if len(char_grid) != INFLUENCE_GRID_SIZE:
            raise _deck_error(
                f"Influence grid must have {INFLUENCE_GRID_SIZE} rows", card=name
            )
        influence = []
        for r, row in enumerate(char_grid):
            if len(row) != INFLUENCE_GRID_SIZE:
                raise _deck_error(
                    f"Influence row must have {INFLUENCE_GRID_SIZE} cells",
                    card=name,
                    grid_row=r,
                )
            flags = []
            for c, char in enumerate(row):
                if char not in _GRID_CHARS:
                    raise _deck_error(
                        f"Unexpected influence character {char!r}",
                        card=name,
                        grid_row=r,
                    )
                is_center = r == INFLUENCE_CENTER and c == INFLUENCE_CENTER
                if (char == "C") != is_center:
                    raise _deck_error(
                        "The card cell 'C' must appear exactly once, at the centre",
                        card=name,
                        grid_row=r,
                    )
                flags.append(char == "I")
            influence.append(tuple(flags))

        try:
            return Card(name=name, cost=cost, value=value, influence=tuple(influence))
        except ValidationError as e:
            raise _deck_error(
                f"Invalid card definition: {e.errors()[0]['msg']}", card=name
            ) from e


def parse_cards(text: str, factory: Optional[CardFactory] = None) -> List[Card]:
    """Parse deck file contents into cards, in file order."""
    factory = factory or CardFactory()
    lines = [
        (number, line.strip())
        for number, line in enumerate(text.splitlines(), start=1)
        if line.strip()
    ]

    cards: List[Card] = []
    i = 0
    while i < len(lines):
        line_number, header = lines[i]
        parts = header.split()
        if len(parts) != 3:
            raise _deck_error(
                "Card header must be '<name> <cost> <value>'", line=line_number
            )
        name, cost_text, value_text = parts
        try:
            cost, value = int(cost_text), int(value_text)
        except ValueError:
            raise _deck_error(
                "Card cost and value must be integers", line=line_number
            ) from None

        grid_lines = lines[i + 1:i + 1 + INFLUENCE_GRID_SIZE]
        if len(grid_lines) != INFLUENCE_GRID_SIZE:
            raise _deck_error(
                f"Card {name} is missing influence rows", line=line_number
            )
        try:
            cards.append(factory.create_card(name, cost, value, [row for _, row in grid_lines]))
        except GameRuleError as e:
            e.context.setdefault("line", line_number)
            raise
        i += 1 + INFLUENCE_GRID_SIZE
    return cards


def read_cards(path: Union[str, Path], factory: Optional[CardFactory] = None) -> List[Card]:
    """Read every card from the deck file at ``path``."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise _deck_error(f"Cannot read deck file: {e}", path=str(path)) from e
    cards = parse_cards(text, factory)
    logger.debug("Read %d cards from %s", len(cards), path)
    return cards


def validate_deck(cards: Sequence[Card]) -> None:
    """Reject decks holding more than two copies of any card name."""
    counts = Counter(card.name for card in cards)
    for name, count in counts.items():
        if count > MAX_COPIES_PER_CARD:
            raise _deck_error(
                f"Deck contains more than {MAX_COPIES_PER_CARD} copies of card: {name}",
                card=name,
                copies=count,
            )


def build_decks(
    path: Union[str, Path],
    shuffle: bool = True,
    seed: Optional[int] = None,
) -> Tuple[List[Card], List[Card]]:
    """Build ``(red_deck, blue_deck)`` from the deck file at ``path``.

    When ``shuffle`` is set each deck is shuffled independently; a ``seed``
    makes the order reproducible.
    """
    cards = read_cards(path)
    validate_deck(cards)
    red_deck = list(cards)
    blue_deck = list(cards)
    if shuffle:
        rng = random.Random(seed)
        rng.shuffle(red_deck)
        rng.shuffle(blue_deck)
    return red_deck, blue_deck


def deck_source(
    path: Union[str, Path],
    shuffle: bool = True,
    seed: Optional[int] = None,
) -> Callable[[], Tuple[List[Card], List[Card]]]:
    """Return a deck source for :meth:`GameEngine.start_game`."""

    def _build() -> Tuple[List[Card], List[Card]]:
        return build_decks(path, shuffle=shuffle, seed=seed)

    return _build
