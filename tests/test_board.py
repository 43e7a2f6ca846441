"""Tests for pawnsboard.board: dimensions, queries and mutation primitives."""

import pytest

from pawnsboard.board import Board, RectangularBoardFactory
from pawnsboard.errors import ErrorKind, GameRuleError
from pawnsboard.models import CellContent, Player


@pytest.mark.parametrize("rows, columns", [(0, 5), (-1, 5), (3, 1), (3, 4), (3, 0)])
def test_invalid_dimensions(rows, columns):
    with pytest.raises(GameRuleError) as exc_info:
        Board.create(rows, columns)
    assert exc_info.value.kind is ErrorKind.INVALID_DIMENSIONS


def test_new_board_is_empty():
    board = Board(2, 3)
    assert board.dimensions == (2, 3)
    for _, _, cell in board.iter_cells():
        assert cell.content == CellContent.EMPTY
        assert cell.is_consistent()


@pytest.mark.parametrize("row, col", [(-1, 0), (0, -1), (3, 0), (0, 5)])
def test_queries_out_of_bounds(row, col):
    board = Board(3, 5)
    for query in (board.content_at, board.owner_at, board.pawn_count_at, board.card_at):
        with pytest.raises(GameRuleError) as exc_info:
            query(row, col)
        assert exc_info.value.kind is ErrorKind.OUT_OF_BOUNDS


def test_add_pawn_to_empty_cell():
    board = Board(3, 5)
    board.add_pawn(1, 2, Player.BLUE)
    assert board.content_at(1, 2) == CellContent.PAWNS
    assert board.owner_at(1, 2) is Player.BLUE
    assert board.pawn_count_at(1, 2) == 1


def test_add_pawn_caps_at_three():
    board = Board(3, 5)
    for _ in range(10):
        board.add_pawn(0, 0, Player.RED)
        assert board.pawn_count_at(0, 0) <= 3
    assert board.pawn_count_at(0, 0) == 3
    assert board.cell_at(0, 0).is_consistent()


def test_add_pawn_on_opponent_pawns_fails():
    board = Board(3, 5)
    board.add_pawn(0, 0, Player.RED)
    with pytest.raises(GameRuleError) as exc_info:
        board.add_pawn(0, 0, Player.BLUE)
    assert exc_info.value.kind is ErrorKind.WRONG_OWNER
    assert board.owner_at(0, 0) is Player.RED
    assert board.pawn_count_at(0, 0) == 1


def test_add_pawn_on_card_fails(card_factory):
    board = Board(3, 5)
    board.place_card(0, 0, card_factory(), Player.RED)
    with pytest.raises(GameRuleError) as exc_info:
        board.add_pawn(0, 0, Player.RED)
    assert exc_info.value.kind is ErrorKind.INVALID_CONTENT


def test_transfer_ownership_keeps_count():
    board = Board(3, 5)
    board.add_pawn(2, 4, Player.BLUE)
    board.add_pawn(2, 4, Player.BLUE)
    board.transfer_ownership(2, 4, Player.RED)
    assert board.owner_at(2, 4) is Player.RED
    assert board.pawn_count_at(2, 4) == 2


def test_transfer_ownership_requires_pawns(card_factory):
    board = Board(3, 5)
    with pytest.raises(GameRuleError) as exc_info:
        board.transfer_ownership(0, 0, Player.RED)
    assert exc_info.value.kind is ErrorKind.INVALID_CONTENT

    board.place_card(0, 1, card_factory(), Player.BLUE)
    with pytest.raises(GameRuleError) as exc_info:
        board.transfer_ownership(0, 1, Player.RED)
    assert exc_info.value.kind is ErrorKind.INVALID_CONTENT


def test_place_card_overwrites_pawns(card_factory):
    board = Board(3, 5)
    card = card_factory(value=4)
    board.add_pawn(1, 1, Player.RED)
    board.add_pawn(1, 1, Player.RED)
    board.place_card(1, 1, card, Player.RED)
    cell = board.cell_at(1, 1)
    assert cell.content == CellContent.CARD
    assert cell.owner is Player.RED
    assert cell.pawn_count == 0
    assert cell.card == card
    assert cell.is_consistent()


def test_cell_copies_do_not_leak():
    board = Board(3, 5)
    board.add_pawn(0, 0, Player.RED)
    copy = board.cell_at(0, 0)
    copy.pawn_count = 3
    copy.owner = Player.BLUE
    assert board.pawn_count_at(0, 0) == 1
    assert board.owner_at(0, 0) is Player.RED

    snapshot = board.snapshot()
    snapshot[0][0].pawn_count = 2
    assert board.pawn_count_at(0, 0) == 1


def test_rectangular_factory_seeds_home_columns():
    board = RectangularBoardFactory().create_board(3, 5)
    for r in range(3):
        assert board.owner_at(r, 0) is Player.RED
        assert board.pawn_count_at(r, 0) == 1
        assert board.owner_at(r, 4) is Player.BLUE
        assert board.pawn_count_at(r, 4) == 1
        for c in (1, 2, 3):
            assert board.content_at(r, c) == CellContent.EMPTY
