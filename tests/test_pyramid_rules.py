from typing import Dict, List, Sequence

from engine import (
    RANKS,
    WASTE,
    Card,
    GameConfig,
    GridPos,
    PyramidBoard,
    activate,
    attempt_match,
    draw_from_stock,
    find_hint,
    parse_card,
    remove_single,
    session_from_board,
    subscribe,
)


def _pyramid(cells: Dict[GridPos, str], stock: Sequence[str] = (), waste: Sequence[str] = ()) -> PyramidBoard:
    rows = [[parse_card(cells[(r, c)]) if (r, c) in cells else None for c in range(r + 1)] for r in range(7)]
    return PyramidBoard.from_rows(rows, [parse_card(t) for t in stock], [parse_card(t) for t in waste])


def test_lone_king_at_the_top_goes_by_itself():
    state = session_from_board(_pyramid({(0, 0): "KS", (6, 6): "2D"}))
    board_events: List[Dict[str, object]] = []
    subscribe(state, on_board_changed=board_events.append)

    res = activate(state, (0, 0))

    assert res.kind == "removed"
    assert state.board.card_at((0, 0)) is None
    assert state.score == 10
    assert state.moves == 1
    assert state.selection is None
    assert len(board_events) == 1


def test_covered_card_cannot_be_clicked_until_a_child_goes():
    state = session_from_board(_pyramid({(5, 0): "3C", (6, 0): "6S", (6, 1): "9D"}, waste=["7H"]))
    board = state.board
    assert board.is_covered((5, 0))
    assert activate(state, (5, 0)).kind == "ignored"

    assert activate(state, WASTE).kind == "selected"
    assert activate(state, (6, 0)).kind == "matched"

    assert not board.is_covered((5, 0))
    assert board.is_selectable((5, 0))
    assert board.waste == []
    assert state.status == "in_progress"


def test_bottom_row_is_never_covered():
    board = _pyramid({(6, c): "2C" for c in range(7)})
    assert all(not board.is_covered((6, c)) for c in range(7))


def test_pairs_summing_to_thirteen():
    for v1 in range(1, 14):
        for v2 in range(1, 14):
            board = PyramidBoard.from_rows(
                [[None] * (r + 1) for r in range(6)]
                + [[Card("spades", RANKS[v1 - 1]), Card("hearts", RANKS[v2 - 1]), None, None, None, None, Card("clubs", "2")]]
            )
            state = session_from_board(board)
            ok = attempt_match(state, (6, 0), (6, 1))
            assert ok == (v1 + v2 == 13), (v1, v2)
            if not ok:
                assert board.card_at((6, 0)) is not None and board.card_at((6, 1)) is not None
                assert state.moves == 0


def test_covered_card_is_not_a_partner():
    state = session_from_board(_pyramid({(5, 0): "6C", (6, 0): "2S", (6, 1): "9D", (6, 3): "7H"}))
    assert attempt_match(state, (5, 0), (6, 3)) is False
    assert state.board.card_at((5, 0)) is not None


def test_king_removal_keeps_the_current_selection():
    state = session_from_board(_pyramid({(6, 0): "6S", (6, 3): "KC", (6, 6): "2D"}))
    activate(state, (6, 0))
    res = activate(state, (6, 3))
    assert res.kind == "removed"
    assert state.selection is not None and state.selection.position == (6, 0)
    assert state.moves == 1 and state.score == 10


def test_king_on_the_waste_is_removed_alone():
    state = session_from_board(_pyramid({(6, 0): "6S"}, waste=["2H", "KD"]))
    assert activate(state, WASTE).kind == "removed"
    assert [str(c) for c in state.waste] == ["2♥"]


def test_clearing_the_pyramid_wins_regardless_of_stock():
    state = session_from_board(_pyramid({(6, 0): "6S"}, stock=["3C", "4C"], waste=["7H"]))
    ended: List[str] = []
    subscribe(state, on_session_ended=ended.append)
    activate(state, (6, 0))
    activate(state, WASTE)
    assert state.status == "won"
    assert ended == ["won"]
    assert len(state.stock) == 2


def test_draw_then_recycle_the_waste():
    state = session_from_board(_pyramid({(6, 0): "6S"}, stock=["AS", "2S"]))
    activate(state, (6, 0))
    assert state.selection is not None

    assert draw_from_stock(state).kind == "drew"
    assert state.selection is None
    assert str(state.waste[-1]) == "2♠"
    assert draw_from_stock(state).kind == "drew"
    assert str(state.waste[-1]) == "A♠"

    assert draw_from_stock(state).kind == "recycled"
    assert state.waste == []
    assert draw_from_stock(state).kind == "drew"
    assert str(state.waste[-1]) == "2♠"
    # drawing is not a move
    assert state.moves == 0 and state.score == 0


def test_recycle_limit():
    board = _pyramid({(6, 0): "6S"}, stock=["AS"])
    state = session_from_board(board, GameConfig(kind="pyramid", max_recycles=0))
    assert draw_from_stock(state).kind == "drew"
    assert draw_from_stock(state).kind == "ignored"
    assert not board.can_draw(0)


def test_card_count_invariant_through_play():
    state = session_from_board(
        _pyramid({(5, 0): "QC", (6, 0): "AS", (6, 1): "5D", (6, 2): "KH"}, stock=["8C", "2D"], waste=["QD"])
    )
    start = state.deal_count
    assert start == 7
    activate(state, (6, 2))
    activate(state, WASTE)
    activate(state, (6, 0))
    draw_from_stock(state)
    assert state.board.cards_in_play() + len(state.removed) == start


def test_won_session_refuses_a_late_king():
    state = session_from_board(_pyramid({(6, 0): "6S"}, waste=["KD", "7H"]))
    activate(state, (6, 0))
    activate(state, WASTE)
    assert state.status == "won"
    assert str(state.waste[-1]) == "K♦"

    assert remove_single(state, WASTE) is False
    assert (state.moves, state.score) == (1, 10)
    assert [str(c) for c in state.waste] == ["K♦"]
    assert state.board.cards_in_play() + len(state.removed) == state.deal_count


def test_stuck_pyramid_stays_in_progress():
    board = _pyramid({(6, 0): "6S"}, waste=["2H"])
    state = session_from_board(board, GameConfig(kind="pyramid", max_recycles=0))
    ended: List[str] = []
    subscribe(state, on_session_ended=ended.append)

    assert draw_from_stock(state).kind == "ignored"
    assert activate(state, (6, 0)).kind == "selected"
    assert activate(state, WASTE).kind == "reselected"

    # no loss is reported for a pyramid that cannot move
    assert state.status == "in_progress"
    assert ended == []
    assert find_hint(state) is None
