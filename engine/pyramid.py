from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Set

from .types import Card, GridPos, Position, WASTE, card_to_obj, obj_to_card
from .board import Board

PYRAMID_ROWS: int = 7
PYRAMID_CARDS: int = PYRAMID_ROWS * (PYRAMID_ROWS + 1) // 2


class PyramidBoard(Board):
    """Seven-row pyramid plus a stock and a waste pile.

    Emptied pyramid cells are never refilled. Only the top of the waste pile is
    addressable, through the WASTE position.
    """

    kind = "pyramid"

    def __init__(self, rows: int = PYRAMID_ROWS, stock: Sequence[Card] = (), waste: Sequence[Card] = ()) -> None:
        super().__init__()
        self.rows = rows
        self.cells: List[List[Optional[Card]]] = [[None for _ in range(r + 1)] for r in range(rows)]
        self.stock = list(stock)
        self.waste: List[Card] = list(waste)
        self.covered: Set[GridPos] = set()
        self.recycles: int = 0

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Sequence[Optional[Card]]],
        stock: Sequence[Card] = (),
        waste: Sequence[Card] = (),
    ) -> "PyramidBoard":
        n = len(rows)
        for r, row in enumerate(rows):
            assert len(row) == r + 1, f"Pyramid row {r} must have {r + 1} cells"
        p = cls(n, stock, waste)
        for r, row in enumerate(rows):
            for c, card in enumerate(row):
                p.cells[r][c] = card
        p.update_coverage()
        return p

    @classmethod
    def deal(cls, shuffled: Sequence[Card]) -> "PyramidBoard":
        cards = list(shuffled)
        p = cls(PYRAMID_ROWS)
        idx = 0
        for r in range(PYRAMID_ROWS):
            for c in range(r + 1):
                p.cells[r][c] = cards[idx]
                idx += 1
        p.stock = cards[idx:]
        p.update_coverage()
        return p

    def coords(self) -> List[GridPos]:
        return [(r, c) for r in range(self.rows) for c in range(r + 1)]

    def positions(self) -> List[Position]:
        out: List[Position] = list(self.coords())
        out.append(WASTE)
        return out

    def is_valid(self, pos: Position) -> bool:
        if pos == WASTE:
            return True
        if not isinstance(pos, tuple) or len(pos) != 2:
            return False
        r, c = pos
        return isinstance(r, int) and isinstance(c, int) and 0 <= c <= r < self.rows

    def card_at(self, pos: Position) -> Optional[Card]:
        if pos == WASTE:
            return self.waste[-1] if self.waste else None
        assert isinstance(pos, tuple)
        r, c = pos
        return self.cells[r][c]

    def _clear(self, pos: Position) -> None:
        if pos == WASTE:
            self.waste.pop()
            return
        assert isinstance(pos, tuple)
        r, c = pos
        self.cells[r][c] = None

    def update_coverage(self) -> None:
        covered: Set[GridPos] = set()
        # the bottom row has no children and is never covered
        for r in range(self.rows - 1):
            for c in range(r + 1):
                if self.cells[r][c] is None:
                    continue
                if self.cells[r + 1][c] is not None and self.cells[r + 1][c + 1] is not None:
                    covered.add((r, c))
        self.covered = covered

    def is_covered(self, pos: Position) -> bool:
        return pos in self.covered

    def is_selectable(self, pos: Position) -> bool:
        return self.is_occupied(pos) and not self.is_covered(pos)

    def reachable(self, a: Position, b: Position) -> bool:
        # any two uncovered cards may pair; coverage is checked through is_selectable
        return a != b

    def after_removal(self) -> List[str]:
        self.update_coverage()
        return []

    def pyramid_count(self) -> int:
        return sum(1 for r, c in self.coords() if self.cells[r][c] is not None)

    def cards_in_play(self) -> int:
        return self.pyramid_count() + len(self.stock) + len(self.waste)

    def is_cleared(self) -> bool:
        return self.pyramid_count() == 0

    def can_draw(self, max_recycles: Optional[int] = None) -> bool:
        if self.stock:
            return True
        if not self.waste:
            return False
        return max_recycles is None or self.recycles < max_recycles

    def draw(self, max_recycles: Optional[int] = None) -> Optional[str]:
        """Turn the next stock card onto the waste, or recycle the waste when the stock is out.

        Returns "draw", "recycle" or None when nothing could be done.
        """
        if self.stock:
            self.waste.append(self.stock.pop())
            return "draw"
        if self.waste and (max_recycles is None or self.recycles < max_recycles):
            self.stock = list(reversed(self.waste))
            self.waste = []
            self.recycles += 1
            return "recycle"
        return None

    def clone(self) -> "PyramidBoard":
        p = PyramidBoard(self.rows, self.stock, self.waste)
        p.cells = [list(row) for row in self.cells]
        p.covered = set(self.covered)
        p.recycles = self.recycles
        return p

    def to_json(self) -> Dict[str, object]:
        return {
            "kind": self.kind,
            "rows": [[None if c is None else card_to_obj(c) for c in row] for row in self.cells],
            "covered": [[r, c] for (r, c) in sorted(self.covered)],
            "stock": [card_to_obj(c) for c in self.stock],
            "waste": [card_to_obj(c) for c in self.waste],
            "recycles": self.recycles,
        }

    @classmethod
    def from_json(cls, data: Dict[str, object]) -> "PyramidBoard":
        rows = data.get("rows")
        stock = data.get("stock", [])
        waste = data.get("waste", [])
        assert isinstance(rows, list), "rows must be a list"
        assert isinstance(stock, list) and isinstance(waste, list)
        p = cls.from_rows(
            [[None if c is None else obj_to_card(c) for c in row] for row in rows],
            [obj_to_card(c) for c in stock],
            [obj_to_card(c) for c in waste],
        )
        p.recycles = int(data.get("recycles", 0))  # type: ignore[arg-type]
        return p
