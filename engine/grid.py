from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .types import Card, GridPos, Position, card_to_obj, obj_to_card
from .board import Board
from .deck import take_protagonists

GRID_SIZES: Tuple[int, ...] = (5, 6)

DIRECTIONS: List[GridPos] = [(-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, -1), (1, 0), (1, 1)]


def chebyshev(a: GridPos, b: GridPos) -> int:
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))


class GridBoard(Board):
    """Meeting in the Garden: a size x size lattice with the anchors in opposite corners."""

    kind = "grid"

    def __init__(self, size: int, stock: Sequence[Card] = ()) -> None:
        super().__init__()
        self.size = size
        # None means an empty cell
        self.cells: List[List[Optional[Card]]] = [[None for _ in range(size)] for _ in range(size)]
        self.stock = list(stock)

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Sequence[Optional[Card]]],
        stock: Sequence[Card] = (),
        king: GridPos = (0, 0),
        queen: Optional[GridPos] = None,
    ) -> "GridBoard":
        size = len(rows)
        assert size >= 2 and all(len(r) == size for r in rows), "Grid must be square"
        if queen is None:
            queen = (size - 1, size - 1)
        g = cls(size, stock)
        for r in range(size):
            for c in range(size):
                card = rows[r][c]
                if card is None:
                    continue
                role = "king" if (r, c) == king else "queen" if (r, c) == queen else "none"
                g.cells[r][c] = card.with_role(role)
        return g

    @classmethod
    def deal(cls, shuffled: Sequence[Card], size: int = 5) -> "GridBoard":
        king, queen, rest = take_protagonists(shuffled)
        g = cls(size)
        g.cells[0][0] = king
        g.cells[size - 1][size - 1] = queen
        idx = 0
        for r, c in g.coords():
            if g.cells[r][c] is None and idx < len(rest):
                g.cells[r][c] = rest[idx]
                idx += 1
        g.stock = list(rest[idx:])
        return g

    def coords(self) -> Iterable[GridPos]:
        for r in range(self.size):
            for c in range(self.size):
                yield (r, c)

    def positions(self) -> List[Position]:
        return list(self.coords())

    def is_valid(self, pos: Position) -> bool:
        if not isinstance(pos, tuple) or len(pos) != 2:
            return False
        r, c = pos
        return isinstance(r, int) and isinstance(c, int) and 0 <= r < self.size and 0 <= c < self.size

    def card_at(self, pos: Position) -> Optional[Card]:
        assert isinstance(pos, tuple)
        r, c = pos
        return self.cells[r][c]

    def _clear(self, pos: Position) -> None:
        assert isinstance(pos, tuple)
        r, c = pos
        self.cells[r][c] = None

    def _find_role(self, role: str) -> Optional[GridPos]:
        for r, c in self.coords():
            card = self.cells[r][c]
            if card is not None and card.role == role:
                return (r, c)
        return None

    @property
    def king_pos(self) -> Optional[GridPos]:
        return self._find_role("king")

    @property
    def queen_pos(self) -> Optional[GridPos]:
        return self._find_role("queen")

    def neighbors(self, pos: GridPos) -> List[GridPos]:
        r, c = pos
        out: List[GridPos] = []
        for dr, dc in DIRECTIONS:
            nr, nc = r + dr, c + dc
            if 0 <= nr < self.size and 0 <= nc < self.size:
                out.append((nr, nc))
        return out

    def separated_by_one(self, a: GridPos, b: GridPos) -> bool:
        dr = b[0] - a[0]
        dc = b[1] - a[1]
        # straight line only: horizontal, vertical or diagonal
        if dr != 0 and dc != 0 and abs(dr) != abs(dc):
            return False
        if chebyshev(a, b) != 2:
            return False
        mid = (a[0] + (dr > 0) - (dr < 0), a[1] + (dc > 0) - (dc < 0))
        return self.card_at(mid) is not None

    def reachable(self, a: Position, b: Position) -> bool:
        assert isinstance(a, tuple) and isinstance(b, tuple)
        if chebyshev(a, b) == 1:
            return True
        return self.separated_by_one(a, b)

    def refill(self) -> int:
        filled = 0
        for r, c in self.coords():
            if self.cells[r][c] is None and self.stock:
                self.cells[r][c] = self.stock.pop()
                filled += 1
        return filled

    def compress(self) -> None:
        remaining: List[Card] = []
        for r, c in self.coords():
            card = self.cells[r][c]
            if card is not None:
                remaining.append(card)
        self.cells = [[None for _ in range(self.size)] for _ in range(self.size)]
        for idx, (r, c) in enumerate(self.coords()):
            if idx >= len(remaining):
                break
            self.cells[r][c] = remaining[idx]

    def after_removal(self) -> List[str]:
        if self.stock:
            n = self.refill()
            return [f"REFILL: {n} from stock, {len(self.stock)} left"]
        self.compress()
        return [f"COMPRESS: king={self.king_pos} queen={self.queen_pos}"]

    def anchors_adjacent(self) -> bool:
        king, queen = self.king_pos, self.queen_pos
        if king is None or queen is None:
            return False
        return chebyshev(king, queen) == 1

    def clone(self) -> "GridBoard":
        g = GridBoard(self.size, self.stock)
        g.cells = [[self.cells[r][c] for c in range(self.size)] for r in range(self.size)]
        return g

    def to_json(self) -> Dict[str, object]:
        return {
            "kind": self.kind,
            "size": self.size,
            "cells": [[None if c is None else card_to_obj(c) for c in row] for row in self.cells],
            "stock": [card_to_obj(c) for c in self.stock],
        }

    @classmethod
    def from_json(cls, data: Dict[str, object]) -> "GridBoard":
        size = data.get("size")
        cells = data.get("cells")
        stock = data.get("stock", [])
        assert isinstance(size, int), "size must be int"
        assert isinstance(cells, list) and len(cells) == size, f"Grid must be {size} rows"
        assert isinstance(stock, list)
        g = cls(size, [obj_to_card(c) for c in stock])
        for r in range(size):
            row = cells[r]
            assert isinstance(row, list) and len(row) == size, f"Grid row must have {size} cols"
            for c in range(size):
                g.cells[r][c] = None if row[c] is None else obj_to_card(row[c])
        return g
