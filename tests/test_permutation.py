from collections import Counter

import pytest

from tacticube_play.engine.board import FACE_OFFSETS, FACES, P1, Facelet, new_board
from tacticube_play.engine.permutation import face_cycles, rotate

from conftest import board_with


@pytest.mark.parametrize('face', FACES)
def test_turn_then_inverse_is_identity(labelled_board, face):
    assert rotate(rotate(labelled_board, face, True), face, False) == labelled_board
    assert rotate(rotate(labelled_board, face, False), face, True) == labelled_board


@pytest.mark.parametrize('face', FACES)
@pytest.mark.parametrize('clockwise', [True, False])
def test_four_turns_are_identity(labelled_board, face, clockwise):
    board = labelled_board
    for _ in range(4):
        board = rotate(board, face, clockwise)
    assert board == labelled_board


@pytest.mark.parametrize('face', FACES)
def test_single_turn_changes_the_board(labelled_board, face):
    assert rotate(labelled_board, face, True) != labelled_board


@pytest.mark.parametrize('face', FACES)
def test_turn_conserves_facelets(labelled_board, face):
    turned = rotate(labelled_board, face, True)
    assert Counter(turned) == Counter(labelled_board)


@pytest.mark.parametrize('face', FACES)
def test_face_centre_never_moves(labelled_board, face):
    centre = FACE_OFFSETS[face] + 4
    assert rotate(labelled_board, face, True)[centre] == labelled_board[centre]
    assert rotate(labelled_board, face, False)[centre] == labelled_board[centre]


def test_rotate_does_not_mutate_input(labelled_board):
    before = tuple(labelled_board)
    rotate(labelled_board, 'F', True)
    assert labelled_board == before


def test_clockwise_moves_along_the_cycle(labelled_board):
    turned = rotate(labelled_board, 'U', True)
    # Adjacent strip (18, 9, 36, 27): F's top-left goes to L.
    assert turned[9] == labelled_board[18]
    assert turned[36] == labelled_board[9]
    assert turned[27] == labelled_board[36]
    assert turned[18] == labelled_board[27]
    # Own corners (0, 2, 8, 6) and edges (1, 5, 7, 3).
    assert turned[2] == labelled_board[0]
    assert turned[5] == labelled_board[1]


def test_counter_clockwise_walks_the_other_way(labelled_board):
    turned = rotate(labelled_board, 'R', False)
    # Adjacent strip (20, 2, 42, 47) reversed.
    assert turned[20] == labelled_board[2]
    assert turned[47] == labelled_board[20]
    # Own corners of R start at offset 27: (27, 29, 35, 33) reversed.
    assert turned[27] == labelled_board[29]


def test_single_owned_facelet_follows_the_turn():
    board = board_with({0: Facelet(P1, '#ef4444')})
    turned = rotate(board, 'L', True)
    # L's strip (0, 18, 45, 44): U's top-left lands on F's top-left.
    assert turned[0].owner is None
    assert turned[18] == Facelet(P1, '#ef4444')


def test_each_turn_moves_twenty_facelets():
    for face in FACES:
        moved = {i for cycle in face_cycles(face) for i in cycle}
        assert len(moved) == 20


def test_unknown_face_raises():
    with pytest.raises(ValueError):
        rotate(new_board(), 'X', True)
