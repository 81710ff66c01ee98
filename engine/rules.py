from __future__ import annotations

from .types import Card, Position
from .board import Board


class MatchRule:
    name: str = ""

    def single_removable(self, card: Card) -> bool:
        return False

    def cards_match(self, a: Card, b: Card) -> bool:
        raise NotImplementedError


class SumRule(MatchRule):
    """Pyramid pairing: two values adding up to the target; a lone King goes by itself."""

    name = "sum"

    def __init__(self, target: int = 13) -> None:
        self.target = target

    def single_removable(self, card: Card) -> bool:
        return card.value == self.target

    def cards_match(self, a: Card, b: Card) -> bool:
        return a.value + b.value == self.target


class SuitOrRankRule(MatchRule):
    name = "suit_or_rank"

    def cards_match(self, a: Card, b: Card) -> bool:
        return a.suit == b.suit or a.rank == b.rank


def pair_is_legal(board: Board, rule: MatchRule, a: Position, b: Position) -> bool:
    """Both cards selectable, matching under `rule` and within reach on `board`."""
    if a == b:
        return False
    if not (board.is_selectable(a) and board.is_selectable(b)):
        return False
    ca = board.card_at(a)
    cb = board.card_at(b)
    assert ca is not None and cb is not None
    if ca.is_anchor or cb.is_anchor:
        return False
    return rule.cards_match(ca, cb) and board.reachable(a, b)


def rule_for(kind: str) -> MatchRule:
    if kind == "pyramid":
        return SumRule()
    return SuitOrRankRule()
