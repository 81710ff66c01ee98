from __future__ import annotations

from typing import Dict, List, Optional

from .types import Card, GameKind, Position, ProgrammingError


class Board:
    """Common surface of the three layouts.

    A board maps every valid position to a card or None (empty) and owns the
    stock used for its post-removal maintenance. Subclasses decide which pairs
    are within reach of each other and what happens after a removal.
    """

    kind: GameKind = "linear"

    def __init__(self) -> None:
        self.stock: List[Card] = []

    # --- addressing ---

    def positions(self) -> List[Position]:
        raise NotImplementedError

    def is_valid(self, pos: Position) -> bool:
        raise NotImplementedError

    def card_at(self, pos: Position) -> Optional[Card]:
        raise NotImplementedError

    def _clear(self, pos: Position) -> None:
        raise NotImplementedError

    def is_occupied(self, pos: Position) -> bool:
        return self.is_valid(pos) and self.card_at(pos) is not None

    def is_anchor(self, pos: Position) -> bool:
        card = self.card_at(pos) if self.is_valid(pos) else None
        return card is not None and card.is_anchor

    def is_selectable(self, pos: Position) -> bool:
        return self.is_occupied(pos) and not self.is_anchor(pos)

    def occupied(self) -> List[Position]:
        return [p for p in self.positions() if self.card_at(p) is not None]

    def card_count(self) -> int:
        return len(self.occupied())

    def cards_in_play(self) -> int:
        """Cards on the board plus those still in stock (and waste)."""
        return self.card_count() + len(self.stock)

    # --- rules hooks ---

    def reachable(self, a: Position, b: Position) -> bool:
        raise NotImplementedError

    def reach_candidates(self, a: Position, later: List[Position]) -> List[Position]:
        """Narrow `later` (positions after `a` in scan order) to those worth testing against `a`."""
        return later

    def remove(self, pos: Position) -> Card:
        if not self.is_valid(pos):
            raise ProgrammingError(f"Position {pos!r} is outside the board")
        card = self.card_at(pos)
        if card is None:
            raise ProgrammingError(f"Position {pos!r} is already empty")
        self._clear(pos)
        return card

    def after_removal(self) -> List[str]:
        """Board maintenance after a successful removal; returns log lines."""
        return []

    # --- copies and snapshots ---

    def clone(self) -> "Board":
        raise NotImplementedError

    def to_json(self) -> Dict[str, object]:
        raise NotImplementedError
