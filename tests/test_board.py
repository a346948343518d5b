import pytest

from tacticube_play.engine.board import (
    EMPTY_COLOR,
    P1,
    P2,
    PLAYERS,
    Facelet,
    empty_indices,
    face_indices,
    face_of,
    is_full,
    new_board,
    other_player,
    owned_count,
)

from conftest import board_with


def test_new_board_is_empty():
    board = new_board()
    assert len(board) == 54
    assert all(f.is_empty and f.color == EMPTY_COLOR for f in board)
    assert not is_full(board)
    assert empty_indices(board) == list(range(54))


def test_faces_partition_the_board():
    assert face_indices('U') == list(range(0, 9))
    assert face_indices('D') == list(range(45, 54))
    assert [face_of(i) for i in (0, 9, 18, 27, 36, 45, 53)] == ['U', 'L', 'F', 'R', 'B', 'D', 'D']


def test_face_of_out_of_range():
    with pytest.raises(IndexError):
        face_of(54)


def test_owned_count_per_player():
    board = board_with({0: Facelet(P1, '#ef4444'), 1: Facelet(P2, '#3b82f6'), 2: Facelet(P2, '#3b82f6')})
    assert owned_count(board) == 3
    assert owned_count(board, P1) == 1
    assert owned_count(board, P2) == 2


def test_players():
    assert other_player(P1) == P2
    assert other_player(P2) == P1
    assert PLAYERS[P2].palette == ('#3b82f6', '#22c55e', '#ffffff')
    assert PLAYERS[P1].to_dict()['theme_color'] == '#ef4444'
