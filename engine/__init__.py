from .types import (
    Card,
    GridPos,
    LinearPos,
    Position,
    Outcome,
    GameKind,
    ProgrammingError,
    WASTE,
    SUITS,
    RANKS,
    RANK_VALUES,
    parse_card,
)
from .deck import standard_deck, shuffle_deck, deal, take_protagonists
from .board import Board
from .linear import DEFAULT_GAPS, LinearBoard
from .grid import GridBoard
from .pyramid import PyramidBoard
from .rules import MatchRule, SumRule, SuitOrRankRule, pair_is_legal
from .evaluator import evaluate, has_legal_pair, has_suitor_blocking, legal_pairs
from .core import (
    GameConfig,
    GameState,
    Selection,
    MoveResult,
    new_game,
    session_from_board,
    subscribe,
    activate,
    attempt_match,
    remove_single,
    draw_from_stock,
    evaluate_state,
    cards_in_play,
    clone_state,
    to_json,
    from_json,
    obj_to_pos,
)
from .ai import Hint, CandidateEval, legal_moves, find_hint, choose_move, auto_play

__all__ = [
    "Card",
    "GridPos",
    "LinearPos",
    "Position",
    "Outcome",
    "GameKind",
    "ProgrammingError",
    "WASTE",
    "SUITS",
    "RANKS",
    "RANK_VALUES",
    "parse_card",
    "standard_deck",
    "shuffle_deck",
    "deal",
    "take_protagonists",
    "Board",
    "DEFAULT_GAPS",
    "LinearBoard",
    "GridBoard",
    "PyramidBoard",
    "MatchRule",
    "SumRule",
    "SuitOrRankRule",
    "pair_is_legal",
    "evaluate",
    "has_legal_pair",
    "has_suitor_blocking",
    "legal_pairs",
    "GameConfig",
    "GameState",
    "Selection",
    "MoveResult",
    "new_game",
    "session_from_board",
    "subscribe",
    "activate",
    "attempt_match",
    "remove_single",
    "draw_from_stock",
    "evaluate_state",
    "cards_in_play",
    "clone_state",
    "to_json",
    "from_json",
    "obj_to_pos",
    "Hint",
    "CandidateEval",
    "legal_moves",
    "find_hint",
    "choose_move",
    "auto_play",
]
