from __future__ import annotations

from typing import List, Optional, Tuple

from .types import GridPos, Outcome, Position
from .board import Board
from .grid import GridBoard
from .linear import LinearBoard
from .pyramid import PyramidBoard
from .rules import MatchRule, pair_is_legal


def legal_pairs(board: Board, rule: MatchRule, limit: Optional[int] = None) -> List[Tuple[Position, Position]]:
    """Every legal pair in scan order, lower position first."""
    cands = [p for p in board.positions() if board.is_selectable(p)]
    out: List[Tuple[Position, Position]] = []
    for i, a in enumerate(cands):
        for b in board.reach_candidates(a, cands[i + 1:]):
            if pair_is_legal(board, rule, a, b):
                out.append((a, b))
                if limit is not None and len(out) >= limit:
                    return out
    return out


def has_legal_pair(board: Board, rule: MatchRule) -> bool:
    return bool(legal_pairs(board, rule, limit=1))


def has_suitor_blocking(board: GridBoard) -> bool:
    """True while a non-anchor King or Queen sits next to either protagonist."""
    anchors: List[GridPos] = [p for p in (board.king_pos, board.queen_pos) if p is not None]
    for pos in anchors:
        for n in board.neighbors(pos):
            card = board.card_at(n)
            if card is not None and not card.is_anchor and card.rank in ("K", "Q"):
                return True
    return False


def _only_anchors_left(board: Board) -> bool:
    cards = [board.card_at(p) for p in board.occupied()]
    roles = sorted(c.role for c in cards if c is not None)
    return roles == ["king", "queen"]


def evaluate(board: Board, rule: MatchRule, suitor_rule: bool = False) -> Outcome:
    if isinstance(board, PyramidBoard):
        # stock and waste do not matter, only the pyramid itself
        return "won" if board.is_cleared() else "in_progress"
    if isinstance(board, LinearBoard):
        if _only_anchors_left(board) and board.anchors_adjacent():
            return "won"
        if not has_legal_pair(board, rule):
            return "lost"
        return "in_progress"
    if isinstance(board, GridBoard):
        if _only_anchors_left(board) and board.anchors_adjacent():
            # only the two anchors are left here, so no suitor can be adjacent;
            # the check stays so a looser win condition picks it up unchanged
            if suitor_rule and has_suitor_blocking(board):
                return "in_progress"
            return "won"
        return "in_progress"
    raise TypeError(f"Unknown board type: {type(board).__name__}")
