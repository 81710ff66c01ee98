from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Literal, Optional, Sequence, Tuple, cast

from .types import (
    Card,
    GameKind,
    Outcome,
    Position,
    ProgrammingError,
    WASTE,
    card_to_obj,
    obj_to_card,
)
from .board import Board
from .deck import DECK_SIZE, deal
from .evaluator import evaluate
from .grid import GRID_SIZES, GridBoard
from .linear import DEFAULT_GAPS, LinearBoard
from .pyramid import PyramidBoard
from .rules import MatchRule, pair_is_legal, rule_for

SCHEMA_VERSION = 1

MoveKind = Literal[
    "ignored",
    "selected",
    "deselected",
    "matched",
    "reselected",
    "removed",
    "drew",
    "recycled",
]

BoardListener = Callable[[Dict[str, object]], None]
EndListener = Callable[[Outcome], None]


@dataclass
class GameConfig:
    kind: GameKind = "linear"
    grid_size: int = 5
    suitor_rule: bool = False
    score_per_move: int = 10
    linear_gaps: Tuple[int, ...] = DEFAULT_GAPS
    max_recycles: Optional[int] = None  # None = unlimited
    seed: Optional[int] = None

    def validate(self) -> None:
        assert self.kind in ("linear", "grid", "pyramid"), f"Unknown game kind: {self.kind}"
        assert self.grid_size in GRID_SIZES, "grid_size must be 5 or 6"
        assert self.score_per_move >= 0, "score_per_move must be >= 0"
        assert all(g >= 0 for g in self.linear_gaps), "linear_gaps must be >= 0"
        assert self.max_recycles is None or self.max_recycles >= 0, "max_recycles must be >= 0"


@dataclass(frozen=True)
class Selection:
    position: Position
    card: Card


@dataclass
class MoveResult:
    kind: MoveKind
    positions: List[Position]
    outcome: Outcome


@dataclass
class GameState:
    cfg: GameConfig
    board: Board
    rule: MatchRule
    deal_count: int
    selection: Optional[Selection] = None
    moves: int = 0
    score: int = 0
    status: Outcome = "in_progress"
    removed: List[Card] = field(default_factory=list)
    logs: List[str] = field(default_factory=list)
    _board_listeners: List[BoardListener] = field(default_factory=list)
    _end_listeners: List[EndListener] = field(default_factory=list)

    @property
    def is_over(self) -> bool:
        return self.status != "in_progress"

    @property
    def stock(self) -> List[Card]:
        return self.board.stock

    @property
    def waste(self) -> List[Card]:
        if isinstance(self.board, PyramidBoard):
            return self.board.waste
        return []


def _append_log(state: GameState, msg: str) -> None:
    if state.logs is None:
        state.logs = []
    state.logs.append(msg)


def fmt_pos(pos: Position) -> str:
    if isinstance(pos, tuple):
        return f"({pos[0]},{pos[1]})"
    return str(pos)


# --- construction ---


def new_game(cfg: GameConfig, deck: Optional[Sequence[Card]] = None) -> GameState:
    """Deal a fresh session.

    `deck` is the already shuffled card order from the deck provider; when
    omitted a standard deck is shuffled with `cfg.seed`.
    """
    cfg.validate()
    cards = list(deck) if deck is not None else deal(cfg.seed)
    assert len(cards) == DECK_SIZE, f"Expected {DECK_SIZE} cards, got {len(cards)}"
    assert len(set((c.suit, c.rank) for c in cards)) == DECK_SIZE, "Deck cards must be unique"
    board: Board
    if cfg.kind == "linear":
        board = LinearBoard.deal(cards, cfg.linear_gaps)
    elif cfg.kind == "grid":
        board = GridBoard.deal(cards, cfg.grid_size)
    else:
        board = PyramidBoard.deal(cards)
    state = session_from_board(board, cfg)
    _append_log(state, f"DEAL: {cfg.kind} {board.card_count()} on board, {len(board.stock)} in stock")
    return state


def session_from_board(board: Board, cfg: Optional[GameConfig] = None) -> GameState:
    """Wrap an explicit layout in a session; used by tests, restores and custom deals."""
    cfg = replace(cfg) if cfg is not None else GameConfig(kind=board.kind)
    if isinstance(board, GridBoard) and board.size in GRID_SIZES:
        cfg.grid_size = board.size
    if isinstance(board, LinearBoard):
        cfg.linear_gaps = tuple(board.gaps)
    cfg.validate()
    assert cfg.kind == board.kind, f"Config kind {cfg.kind} does not match a {board.kind} board"
    state = GameState(
        cfg=cfg,
        board=board,
        rule=rule_for(board.kind),
        deal_count=board.cards_in_play(),
    )
    state.status = evaluate(board, state.rule, cfg.suitor_rule)
    return state


def cards_in_play(state: GameState) -> int:
    return state.board.cards_in_play()


def subscribe(
    state: GameState,
    on_board_changed: Optional[BoardListener] = None,
    on_session_ended: Optional[EndListener] = None,
) -> None:
    if on_board_changed is not None:
        state._board_listeners.append(on_board_changed)
    if on_session_ended is not None:
        state._end_listeners.append(on_session_ended)


def _board_changed(state: GameState) -> None:
    if state.selection is not None:
        pos = state.selection.position
        if not state.board.is_selectable(pos) or state.board.card_at(pos) != state.selection.card:
            state.selection = None
    if state._board_listeners:
        snap = state.board.to_json()
        for cb in list(state._board_listeners):
            cb(snap)


def _evaluate_after_move(state: GameState) -> None:
    if state.is_over:
        return
    outcome = evaluate(state.board, state.rule, state.cfg.suitor_rule)
    if outcome == "in_progress":
        return
    state.status = outcome
    state.selection = None
    _append_log(state, "WON" if outcome == "won" else "LOST")
    for cb in list(state._end_listeners):
        cb(outcome)


def _check_position(state: GameState, pos: Position) -> Card:
    if not state.board.is_valid(pos):
        raise ProgrammingError(f"Position {pos!r} is outside the {state.board.kind} board")
    card = state.board.card_at(pos)
    if card is None:
        raise ProgrammingError(f"Position {pos!r} is empty")
    return card


def _score_move(state: GameState) -> None:
    state.moves += 1
    state.score += state.cfg.score_per_move


# --- match engine ---


def attempt_match(state: GameState, a: Position, b: Position) -> bool:
    """Try to remove the pair at `a` and `b`.

    Raises ProgrammingError when either position is off the board, already
    empty, or both name the same cell. A pair that does not match leaves the
    board untouched and returns False, as does any call once the session is
    over.
    """
    if state.is_over:
        return False
    ca = _check_position(state, a)
    cb = _check_position(state, b)
    if a == b:
        raise ProgrammingError(f"Cannot match position {a!r} with itself")
    if not pair_is_legal(state.board, state.rule, a, b):
        _append_log(state, f"NO_MATCH: {ca}@{fmt_pos(a)} {cb}@{fmt_pos(b)}")
        return False
    state.board.remove(a)
    state.board.remove(b)
    state.removed.extend([ca, cb])
    _append_log(state, f"MATCH: {ca}@{fmt_pos(a)} + {cb}@{fmt_pos(b)}")
    for line in state.board.after_removal():
        _append_log(state, line)
    _score_move(state)
    _board_changed(state)
    _evaluate_after_move(state)
    return True


def remove_single(state: GameState, pos: Position) -> bool:
    """Remove a card that needs no partner (a King under the sum rule)."""
    if state.is_over:
        return False
    card = _check_position(state, pos)
    if not state.board.is_selectable(pos) or not state.rule.single_removable(card):
        return False
    state.board.remove(pos)
    state.removed.append(card)
    _append_log(state, f"REMOVE_KING: {card}@{fmt_pos(pos)}")
    for line in state.board.after_removal():
        _append_log(state, line)
    _score_move(state)
    _board_changed(state)
    _evaluate_after_move(state)
    return True


def draw_from_stock(state: GameState) -> MoveResult:
    board = state.board
    if state.is_over or not isinstance(board, PyramidBoard):
        return MoveResult("ignored", [], state.status)
    what = board.draw(state.cfg.max_recycles)
    if what is None:
        return MoveResult("ignored", [], state.status)
    state.selection = None
    if what == "draw":
        _append_log(state, f"DRAW: {board.waste[-1]} ({len(board.stock)} left)")
    else:
        _append_log(state, f"RECYCLE: {len(board.stock)} back to stock")
    _board_changed(state)
    return MoveResult("drew" if what == "draw" else "recycled", [WASTE], state.status)


# --- selection state machine ---


def activate(state: GameState, pos: Position) -> MoveResult:
    """Handle one click/tap on `pos`.

    Empty, covered, anchor and off-board positions are ignored. A lone King
    under the sum rule is removed on the spot; otherwise the first click
    selects, a second click on the same card deselects, and a click on another
    card tries the pair. A failed pair leaves the newly clicked card selected.
    """
    board = state.board
    if state.is_over or not board.is_valid(pos) or not board.is_selectable(pos):
        return MoveResult("ignored", [pos], state.status)
    card = board.card_at(pos)
    assert card is not None
    if state.rule.single_removable(card):
        remove_single(state, pos)
        return MoveResult("removed", [pos], state.status)
    sel = state.selection
    if sel is None:
        state.selection = Selection(pos, card)
        _append_log(state, f"SELECT: {card}@{fmt_pos(pos)}")
        return MoveResult("selected", [pos], state.status)
    if sel.position == pos:
        state.selection = None
        _append_log(state, f"DESELECT: {card}@{fmt_pos(pos)}")
        return MoveResult("deselected", [pos], state.status)
    if attempt_match(state, sel.position, pos):
        state.selection = None
        return MoveResult("matched", [sel.position, pos], state.status)
    state.selection = Selection(pos, card)
    _append_log(state, f"SELECT: {card}@{fmt_pos(pos)}")
    return MoveResult("reselected", [pos], state.status)


def evaluate_state(state: GameState) -> Outcome:
    return evaluate(state.board, state.rule, state.cfg.suitor_rule)


def clone_state(state: GameState) -> GameState:
    """Deep enough copy for lookahead; listeners are not carried over."""
    return GameState(
        cfg=state.cfg,
        board=state.board.clone(),
        rule=state.rule,
        deal_count=state.deal_count,
        selection=state.selection,
        moves=state.moves,
        score=state.score,
        status=state.status,
        removed=list(state.removed),
        logs=[],
    )


# --- serialization ---


def _pos_to_obj(pos: Position) -> object:
    if isinstance(pos, tuple):
        return [pos[0], pos[1]]
    return pos


def obj_to_pos(obj: object) -> Position:
    if isinstance(obj, (list, tuple)):
        assert len(obj) == 2, "Position pair must have two items"
        return (int(obj[0]), int(obj[1]))
    if isinstance(obj, str):
        assert obj == WASTE, f"Unknown position: {obj}"
        return obj
    assert isinstance(obj, int) and not isinstance(obj, bool), "Position must be int, pair or 'waste'"
    return obj


def to_json(state: GameState) -> Dict[str, object]:
    cfg = state.cfg
    cfg_obj: Dict[str, object] = {
        "kind": cfg.kind,
        "gridSize": cfg.grid_size,
        "suitorRule": cfg.suitor_rule,
        "scorePerMove": cfg.score_per_move,
        "linearGaps": list(cfg.linear_gaps),
        "maxRecycles": cfg.max_recycles,
        "seed": cfg.seed,
    }
    sel_obj: Optional[Dict[str, object]] = None
    if state.selection is not None:
        sel_obj = {
            "position": _pos_to_obj(state.selection.position),
            "card": card_to_obj(state.selection.card),
        }
    data: Dict[str, object] = {
        "schemaVersion": SCHEMA_VERSION,
        "config": cfg_obj,
        "board": state.board.to_json(),
        "stockCount": len(state.stock),
        "wasteTop": card_to_obj(state.waste[-1]) if state.waste else None,
        "selection": sel_obj,
        "moves": state.moves,
        "score": state.score,
        "status": state.status,
        "dealCount": state.deal_count,
        "removed": [card_to_obj(c) for c in state.removed],
        "logs": list(state.logs),
    }
    return data


def from_json(data: Dict[str, object]) -> GameState:
    assert isinstance(data, dict), "Data must be a dict"
    assert data.get("schemaVersion") == SCHEMA_VERSION, "Unsupported schemaVersion"

    cfgd = data.get("config")
    assert isinstance(cfgd, dict), "Missing config"
    gaps = cfgd.get("linearGaps", list(DEFAULT_GAPS))
    assert isinstance(gaps, list), "linearGaps must be a list"
    max_recycles = cfgd.get("maxRecycles")
    seed = cfgd.get("seed")
    cfg = GameConfig(
        kind=cast(GameKind, cfgd.get("kind")),
        grid_size=int(cast(Any, cfgd.get("gridSize", 5))),
        suitor_rule=bool(cfgd.get("suitorRule", False)),
        score_per_move=int(cast(Any, cfgd.get("scorePerMove", 10))),
        linear_gaps=tuple(int(g) for g in gaps),
        max_recycles=None if max_recycles is None else int(cast(Any, max_recycles)),
        seed=None if seed is None else int(cast(Any, seed)),
    )

    bd = data.get("board")
    assert isinstance(bd, dict), "Missing board"
    kind = bd.get("kind")
    board: Board
    if kind == "linear":
        board = LinearBoard.from_json(bd)
    elif kind == "grid":
        board = GridBoard.from_json(bd)
    elif kind == "pyramid":
        board = PyramidBoard.from_json(bd)
    else:
        raise AssertionError(f"Unknown board kind: {kind}")

    state = session_from_board(board, cfg)
    state.moves = int(cast(Any, data.get("moves", 0)))
    state.score = int(cast(Any, data.get("score", 0)))
    status = data.get("status", state.status)
    assert status in ("in_progress", "won", "lost"), "Invalid status"
    state.status = cast(Outcome, status)
    removed = data.get("removed", [])
    assert isinstance(removed, list)
    state.removed = [obj_to_card(c) for c in removed]
    state.deal_count = int(cast(Any, data.get("dealCount", cards_in_play(state) + len(state.removed))))

    sel = data.get("selection")
    if isinstance(sel, dict):
        pos = obj_to_pos(sel.get("position"))
        card = obj_to_card(sel.get("card"))
        # only keep a selection that still points at the same selectable card
        if board.is_valid(pos) and board.is_selectable(pos) and board.card_at(pos) == card:
            state.selection = Selection(pos, card)

    logs_obj = data.get("logs", [])
    assert isinstance(logs_obj, list)
    state.logs = [str(x) for x in logs_obj]
    return state
