import pytest

from engine import (
    GameConfig,
    LinearBoard,
    PyramidBoard,
    auto_play,
    choose_move,
    find_hint,
    legal_moves,
    new_game,
    parse_card,
    session_from_board,
)


def _row(*tokens: str) -> LinearBoard:
    return LinearBoard.from_cards([parse_card(t) for t in tokens])


def test_hint_points_at_the_first_legal_pair():
    state = session_from_board(_row("KH", "5C", "5H", "QH"))
    hint = find_hint(state)
    assert hint is not None
    assert hint.kind == "pair"
    assert hint.positions == [1, 2]


def test_no_hint_when_stuck():
    state = session_from_board(_row("KH", "2S", "7D", "QH"))
    assert state.status == "lost"
    assert legal_moves(state) == []
    assert find_hint(state) is None


def test_pyramid_hint_lists_kings_then_falls_back_to_draw():
    rows = [[None] * (r + 1) for r in range(7)]
    rows[6][2] = parse_card("KC")
    rows[6][4] = parse_card("3D")
    state = session_from_board(PyramidBoard.from_rows(rows, stock=[parse_card("4S")]))
    hint = find_hint(state)
    assert hint is not None and hint.kind == "single" and hint.positions == [(6, 2)]

    rows[6][2] = None
    state = session_from_board(PyramidBoard.from_rows(rows, stock=[parse_card("4S")]))
    hint = find_hint(state)
    assert hint is not None and hint.kind == "draw"


def test_choose_move_takes_the_winning_pair():
    state = session_from_board(_row("KH", "5C", "5H", "QH"))
    move = choose_move(state)
    assert move is not None and move.positions == [1, 2]
    assert auto_play(state) == 1
    assert state.status == "won"


@pytest.mark.parametrize("kind", ["linear", "grid", "pyramid"])
def test_auto_play_keeps_every_card_accounted_for(kind):
    state = new_game(GameConfig(kind=kind, seed=2024))
    steps = auto_play(state, max_steps=200)
    assert 0 <= steps <= 200
    assert state.board.cards_in_play() + len(state.removed) == state.deal_count == 52
    assert state.moves == sum(1 for line in state.logs if line.startswith(("MATCH:", "REMOVE_KING:")))
    assert state.score == 10 * state.moves
