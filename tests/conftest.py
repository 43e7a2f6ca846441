"""
Shared pytest fixtures for Pawns Board tests.

Factory fixtures build cards and decks with customizable defaults; engine
fixtures are function-scoped so every test gets a fresh game.
"""

from pathlib import Path
import sys
from typing import Callable, Iterable, List, Tuple

import pytest

# Ensure the repository root is on sys.path so `import pawnsboard` works when
# running pytest without installing the package.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from pawnsboard.game_engine import GameEngine  # noqa: E402
from pawnsboard.models import Card, InfluenceGrid  # noqa: E402


def make_grid(cells: Iterable[Tuple[int, int]] = ()) -> InfluenceGrid:
    """5x5 influence grid with ``cells`` (grid coordinates) set."""
    grid = [[False] * 5 for _ in range(5)]
    for r, c in cells:
        grid[r][c] = True
    return tuple(tuple(row) for row in grid)


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def card_factory() -> Callable[..., Card]:
    """Factory for creating Card instances with customizable defaults."""

    def _create_card(
        name: str = "Card",
        cost: int = 1,
        value: int = 1,
        influence: Iterable[Tuple[int, int]] = (),
    ) -> Card:
        return Card(name=name, cost=cost, value=value, influence=make_grid(influence))

    return _create_card


@pytest.fixture
def deck_factory(card_factory) -> Callable[..., List[Card]]:
    """Factory for decks of distinctly named, otherwise identical cards."""

    def _create_deck(
        size: int = 15,
        name: str = "Card",
        cost: int = 1,
        value: int = 1,
        influence: Iterable[Tuple[int, int]] = (),
    ) -> List[Card]:
        influence = tuple(influence)
        return [
            card_factory(name=f"{name}{i}", cost=cost, value=value, influence=influence)
            for i in range(size)
        ]

    return _create_deck


# =============================================================================
# ENGINE FIXTURES
# =============================================================================


@pytest.fixture
def engine() -> GameEngine:
    """A fresh, unstarted engine."""
    return GameEngine()


@pytest.fixture
def started_engine(deck_factory) -> GameEngine:
    """3x5 game, hand size 2, cost-1 value-1 cards without influence."""
    game = GameEngine()
    game.start_game(3, 5, (deck_factory(15, "Red"), deck_factory(15, "Blue")), 2)
    return game


@pytest.fixture
def deck_text() -> str:
    """Two-card deck file contents."""
    return (
        "Security 1 2\n"
        "XXXXX\n"
        "XXIXX\n"
        "XICIX\n"
        "XXIXX\n"
        "XXXXX\n"
        "\n"
        "Lancer 2 3\n"
        "XXXXX\n"
        "XXXXX\n"
        "XXCII\n"
        "XXXXX\n"
        "XXXXX\n"
    )
