from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from .types import Card, LinearPos, Position, card_to_obj, obj_to_card
from .board import Board
from .deck import take_protagonists

DEFAULT_GAPS: Tuple[int, ...] = (0, 1, 2)


class LinearBoard(Board):
    """Royal Marriage row: King at the left end, Queen at the right end.

    Cards are never refilled; removed slots stay empty and simply stop
    counting toward the separation between two candidates.
    """

    kind = "linear"

    def __init__(self, cells: Sequence[Optional[Card]], gaps: Sequence[int] = DEFAULT_GAPS) -> None:
        super().__init__()
        self.cells: List[Optional[Card]] = list(cells)
        self.gaps: Tuple[int, ...] = tuple(gaps)

    @classmethod
    def from_cards(cls, cards: Sequence[Optional[Card]], gaps: Sequence[int] = DEFAULT_GAPS) -> "LinearBoard":
        """Build a row where the first card is the King anchor and the last the Queen."""
        assert len(cards) >= 2, "A row needs at least the two anchors"
        first, last = cards[0], cards[-1]
        assert first is not None and last is not None, "Anchors must be present"
        cells: List[Optional[Card]] = [first.with_role("king")]
        cells.extend(c.with_role("none") if c is not None else None for c in cards[1:-1])
        cells.append(last.with_role("queen"))
        return cls(cells, gaps)

    @classmethod
    def deal(cls, shuffled: Sequence[Card], gaps: Sequence[int] = DEFAULT_GAPS) -> "LinearBoard":
        king, queen, rest = take_protagonists(shuffled)
        return cls([king, *rest, queen], gaps)

    def positions(self) -> List[Position]:
        return list(range(len(self.cells)))

    def is_valid(self, pos: Position) -> bool:
        return isinstance(pos, int) and not isinstance(pos, bool) and 0 <= pos < len(self.cells)

    def card_at(self, pos: Position) -> Optional[Card]:
        assert isinstance(pos, int)
        return self.cells[pos]

    def _clear(self, pos: Position) -> None:
        assert isinstance(pos, int)
        self.cells[pos] = None

    def separation(self, a: LinearPos, b: LinearPos) -> int:
        lo, hi = min(a, b), max(a, b)
        return sum(1 for i in range(lo + 1, hi) if self.cells[i] is not None)

    def reachable(self, a: Position, b: Position) -> bool:
        assert isinstance(a, int) and isinstance(b, int)
        return a != b and self.separation(a, b) in self.gaps

    def reach_candidates(self, a: Position, later: List[Position]) -> List[Position]:
        assert isinstance(a, int)
        wanted = set(later)
        top = max(self.gaps) if self.gaps else -1
        out: List[Position] = []
        between = 0
        for j in range(a + 1, len(self.cells)):
            if self.cells[j] is None:
                continue
            if between > top:
                break
            if j in wanted:
                out.append(j)
            between += 1
        return out

    def anchor_positions(self) -> Tuple[Optional[LinearPos], Optional[LinearPos]]:
        king = next((i for i, c in enumerate(self.cells) if c is not None and c.role == "king"), None)
        queen = next((i for i, c in enumerate(self.cells) if c is not None and c.role == "queen"), None)
        return king, queen

    def anchors_adjacent(self) -> bool:
        king, queen = self.anchor_positions()
        if king is None or queen is None:
            return False
        return self.separation(king, queen) == 0

    def clone(self) -> "LinearBoard":
        b = LinearBoard(self.cells, self.gaps)
        b.stock = list(self.stock)
        return b

    def to_json(self) -> Dict[str, object]:
        return {
            "kind": self.kind,
            "cells": [None if c is None else card_to_obj(c) for c in self.cells],
            "gaps": list(self.gaps),
        }

    @classmethod
    def from_json(cls, data: Dict[str, object]) -> "LinearBoard":
        cells = data.get("cells")
        assert isinstance(cells, list), "cells must be a list"
        gaps = data.get("gaps", list(DEFAULT_GAPS))
        assert isinstance(gaps, list)
        return cls([None if c is None else obj_to_card(c) for c in cells], [int(g) for g in gaps])
