from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal, Optional

from .types import Position
from .pyramid import PyramidBoard
from .evaluator import legal_pairs
from .core import (
    GameState,
    attempt_match,
    clone_state,
    draw_from_stock,
    remove_single,
)

HintKind = Literal["pair", "single", "draw"]

WIN_BONUS: float = 1000.0


@dataclass
class Hint:
    kind: HintKind
    positions: List[Position]


@dataclass
class CandidateEval:
    hint: Hint
    score: float
    follow_ups: int
    cleared: int
    wins: bool


def legal_moves(state: GameState) -> List[Hint]:
    """Lone-King removals first, then pairs, both in scan order. Drawing is not listed."""
    if state.is_over:
        return []
    board = state.board
    out: List[Hint] = []
    for pos in board.positions():
        if not board.is_selectable(pos):
            continue
        card = board.card_at(pos)
        if card is not None and state.rule.single_removable(card):
            out.append(Hint("single", [pos]))
    for a, b in legal_pairs(board, state.rule):
        out.append(Hint("pair", [a, b]))
    return out


def _can_draw(state: GameState) -> bool:
    board = state.board
    return isinstance(board, PyramidBoard) and board.can_draw(state.cfg.max_recycles)


def find_hint(state: GameState) -> Optional[Hint]:
    moves = legal_moves(state)
    if moves:
        return moves[0]
    if not state.is_over and _can_draw(state):
        return Hint("draw", [])
    return None


def apply_hint(state: GameState, hint: Hint) -> bool:
    if hint.kind == "pair":
        a, b = hint.positions
        return attempt_match(state, a, b)
    if hint.kind == "single":
        return remove_single(state, hint.positions[0])
    return draw_from_stock(state).kind != "ignored"


def evaluate_moves(state: GameState) -> List[CandidateEval]:
    """One-ply lookahead: play each move on a copy and count what it opens up."""
    cands: List[CandidateEval] = []
    before = state.board.card_count()
    for hint in legal_moves(state):
        sim = clone_state(state)
        apply_hint(sim, hint)
        wins = sim.status == "won"
        follow = len(legal_moves(sim))
        cleared = before - sim.board.card_count()
        score = float(follow) + float(cleared) + (WIN_BONUS if wins else 0.0)
        cands.append(CandidateEval(hint=hint, score=score, follow_ups=follow, cleared=cleared, wins=wins))
    return cands


def choose_move(state: GameState) -> Optional[Hint]:
    best: Optional[CandidateEval] = None
    for cand in evaluate_moves(state):
        # strict comparison keeps the earliest move on ties
        if best is None or cand.score > best.score:
            best = cand
    if best is not None:
        return best.hint
    if not state.is_over and _can_draw(state):
        return Hint("draw", [])
    return None


def auto_play(state: GameState, max_steps: int = 500) -> int:
    """Play greedily until the session ends, nothing is left to do, or `max_steps` runs out.

    A run of draws longer than the stock plus waste means a full pass without
    any removal, so play stops there too.
    """
    steps = 0
    idle_draws = 0
    while steps < max_steps and not state.is_over:
        hint = choose_move(state)
        if hint is None:
            break
        if hint.kind == "draw":
            idle_draws += 1
            if idle_draws > len(state.stock) + len(state.waste) + 1:
                break
        else:
            idle_draws = 0
        state.selection = None
        if not apply_hint(state, hint):
            break
        steps += 1
    return steps
