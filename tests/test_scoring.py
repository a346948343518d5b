from tacticube_play.engine.board import DRAW, P1, P2, Facelet, face_indices, new_board
from tacticube_play.engine.permutation import rotate
from tacticube_play.engine.scoring import ScoreBreakdown, score, winner_for

from conftest import board_with

RED    = '#ef4444'
ORANGE = '#f97316'
BLUE   = '#3b82f6'


def owned_face(face, player, color, overrides=None):
    owned = {i: Facelet(player, color) for i in face_indices(face)}
    owned.update(overrides or {})
    return owned


def test_empty_board_scores_nothing():
    scores = score(new_board())
    assert scores[P1] == ScoreBreakdown()
    assert scores[P2] == ScoreBreakdown()


def test_full_single_colour_face():
    scores = score(board_with(owned_face('F', P1, RED)))
    p1 = scores[P1]
    assert (p1.lines, p1.squares, p1.face_bonus, p1.crosses) == (8, 4, 1, 1)
    assert p1.total == 8 * 1 + 4 * 2 + 5 + 3
    assert scores[P2].total == 0


def test_full_face_without_matching_cross_colour():
    # F starts at 18; grid position 1 is index 19.
    board = board_with(owned_face('F', P1, RED, {19: Facelet(P1, ORANGE)}))
    p1 = score(board)[P1]
    assert p1.face_bonus == 1
    assert p1.crosses == 0
    assert p1.total == 8 + 4 * 2 + 5


def test_single_row_is_one_line():
    board = board_with({i: Facelet(P1, RED) for i in (0, 1, 2)})
    p1 = score(board)[P1]
    assert (p1.lines, p1.squares, p1.face_bonus, p1.crosses, p1.total) == (1, 0, 0, 0, 1)


def test_two_by_two_block_is_a_square():
    # U grid positions 0, 1, 3, 4.
    board = board_with({i: Facelet(P2, BLUE) for i in (0, 1, 3, 4)})
    p2 = score(board)[P2]
    assert p2.squares == 1
    assert p2.lines == 0
    assert p2.total == 2


def test_cross_needs_owner_and_colour():
    plus = (4, 1, 3, 5, 7)
    board = board_with({i: Facelet(P1, RED) for i in plus})
    p1 = score(board)[P1]
    # Middle row and middle column are lines as well.
    assert (p1.lines, p1.squares, p1.crosses) == (2, 0, 1)
    assert p1.total == 2 + 3

    mixed = board_with({7: Facelet(P1, ORANGE)}, base=board)
    assert score(mixed)[P1].crosses == 0


def test_diagonals_count_as_lines():
    board = board_with({i: Facelet(P1, RED) for i in (0, 4, 8, 2, 6)})
    assert score(board)[P1].lines == 2


def test_players_are_scored_independently():
    board = board_with({
        **{i: Facelet(P1, RED) for i in (0, 1, 2)},
        **{i: Facelet(P2, BLUE) for i in (6, 7, 8)},
    })
    scores = score(board)
    assert scores[P1].lines == 1
    assert scores[P2].lines == 1


def test_score_depends_only_on_the_board(labelled_board):
    direct = board_with(owned_face('D', P2, BLUE))
    # Reach the same board through a turn and its inverse.
    detour = rotate(rotate(direct, 'F', True), 'F', False)
    assert score(direct) == score(detour)
    assert score(labelled_board) == score(labelled_board)


def test_winner_for():
    assert winner_for({P1: ScoreBreakdown(total=5), P2: ScoreBreakdown(total=3)}) == P1
    assert winner_for({P1: ScoreBreakdown(total=1), P2: ScoreBreakdown(total=3)}) == P2
    assert winner_for({P1: ScoreBreakdown(total=4), P2: ScoreBreakdown(total=4)}) == DRAW
