"""Tests for the command-line driver."""

import pytest

from pawnsboard.cli import build_parser, main, make_controller, resolve_config
from pawnsboard.config import ControllerKind
from pawnsboard.errors import ConfigurationError
from pawnsboard.models import Player
from pawnsboard.players import HumanPlayer, RandomPlayer


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for key in (
        "PAWNSBOARD_ROWS",
        "PAWNSBOARD_COLUMNS",
        "PAWNSBOARD_HAND_SIZE",
        "PAWNSBOARD_DECK",
        "PAWNSBOARD_SEED",
        "PAWNSBOARD_SHUFFLE",
    ):
        monkeypatch.delenv(key, raising=False)


def test_without_config_flag_defaults_and_environment_apply(monkeypatch):
    monkeypatch.setenv("PAWNSBOARD_HAND_SIZE", "4")
    config = resolve_config(build_parser().parse_args(["--rows", "2"]))
    assert config.rows == 2
    assert config.starting_hand_size == 4
    assert config.columns == 5
    assert config.deck_path is None


def test_flags_override_config(tmp_path):
    path = tmp_path / "game.yaml"
    path.write_text("rows: 5\nseed: 1\n")
    args = build_parser().parse_args(
        ["--config", str(path), "--seed", "7", "--no-shuffle", "--blue", "human"]
    )
    config = resolve_config(args)
    assert config.rows == 5
    assert config.seed == 7
    assert config.shuffle is False
    assert config.blue is ControllerKind.HUMAN
    assert config.red is ControllerKind.RANDOM


def test_invalid_flag_value():
    args = build_parser().parse_args(["--rows", "0"])
    with pytest.raises(ConfigurationError):
        resolve_config(args)


def test_make_controller():
    assert isinstance(make_controller(ControllerKind.HUMAN, Player.RED, None), HumanPlayer)
    red = make_controller(ControllerKind.RANDOM, Player.RED, 10)
    blue = make_controller(ControllerKind.RANDOM, Player.BLUE, 10)
    assert isinstance(red, RandomPlayer)
    assert (red.rng_seed, blue.rng_seed) == (10, 11)


def test_plays_a_full_game(capsys):
    assert main(["--seed", "3", "--log-level", "ERROR"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("--- Game Start ---\nCurrent Player: RED\n")
    assert "--- After RED's turn ---" in out
    assert "Game is over" in out


def test_same_seed_same_transcript(capsys):
    main(["--seed", "12", "--log-level", "ERROR"])
    first = capsys.readouterr().out
    main(["--seed", "12", "--log-level", "ERROR"])
    assert capsys.readouterr().out == first


@pytest.mark.parametrize(
    "argv",
    [
        ["--columns", "4"],
        ["--hand-size", "6"],
        ["--rows", "5"],
        ["--rows", "0"],
    ],
)
def test_rejected_setups_exit_with_error(argv, capsys):
    assert main(argv + ["--log-level", "ERROR"]) == 2
    assert "Game Start" not in capsys.readouterr().out


def test_missing_deck_file(tmp_path):
    assert main(["--deck", str(tmp_path / "none.deck"), "--log-level", "ERROR"]) == 2
