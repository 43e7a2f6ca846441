"""Tests for the plain-text view."""

import pytest

from pawnsboard.game_engine import GameEngine
from pawnsboard.models import Player
from pawnsboard.view import TextualView


@pytest.fixture
def east_engine(deck_factory):
    """3x5 game whose RED cards are value 2 with influence one cell east."""
    game = GameEngine()
    game.start_game(
        3,
        5,
        (deck_factory(15, "R", value=2, influence=[(2, 3)]), deck_factory(15, "B")),
        2,
    )
    return game


def test_unstarted_game(engine):
    view = TextualView(engine)
    assert view.render() == "Game has not been started"
    assert view.render_game_state("Start") == "--- Start ---\nGame has not been started"


def test_initial_board(east_engine):
    assert str(TextualView(east_engine)) == "\n".join(["0 1r __ __ __ 1b 0"] * 3)


def test_board_after_placement(east_engine):
    east_engine.place_card(0, 0, 0)
    lines = TextualView(east_engine).render().splitlines()
    assert lines[0] == "2 R2 1r __ __ 1b 0"
    assert lines[1] == "0 1r __ __ __ 1b 0"


def test_game_state_in_progress(started_engine):
    text = TextualView(started_engine).render_game_state("Game Start")
    lines = text.splitlines()
    assert lines[0] == "--- Game Start ---"
    assert lines[1] == "Current Player: RED"
    assert "Game is over" not in text


def test_game_state_tie(started_engine):
    started_engine.pass_turn()
    started_engine.pass_turn()
    text = TextualView(started_engine).render_game_state()
    assert text.splitlines()[-4:] == [
        "Game is over",
        "RED score: 0",
        "BLUE score: 0",
        "Game ended in a tie!",
    ]


def test_game_state_winner(started_engine):
    started_engine.place_card(0, 1, 0)
    started_engine.pass_turn()
    started_engine.pass_turn()
    text = TextualView(started_engine).render_game_state()
    assert "RED score: 1" in text
    assert text.endswith("Winner: RED")


def test_render_hand(started_engine):
    view = TextualView(started_engine)
    text = view.render_hand(Player.BLUE)
    lines = text.splitlines()
    assert lines[0] == "BLUE hand:"
    assert lines[1] == "[0] Blue0 (Cost: 1, Value: 1)"
    assert lines[2:7] == ["XXXXX", "XXXXX", "XXCXX", "XXXXX", "XXXXX"]
    assert "[1] Blue1 (Cost: 1, Value: 1)" in lines


def test_render_empty_hand(deck_factory):
    game = GameEngine()
    game.start_game(3, 5, (deck_factory(15), deck_factory(15)), 0)
    assert TextualView(game).render_hand(Player.RED) == "RED hand is empty"
