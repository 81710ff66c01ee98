from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, List, Literal, Tuple, TypeAlias, Union

Suit = Literal["spades", "hearts", "diamonds", "clubs"]
Rank = Literal["A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K"]
# "king" / "queen" mark the protagonist anchors of the Royal Marriage and Garden games
Role = Literal["none", "king", "queen"]

SUITS: List[str] = ["spades", "hearts", "diamonds", "clubs"]
RANKS: List[str] = ["A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K"]

SUIT_SYMBOLS: Dict[str, str] = {
    "spades": "♠",
    "hearts": "♥",
    "diamonds": "♦",
    "clubs": "♣",
}
SUIT_LETTERS: Dict[str, str] = {"S": "spades", "H": "hearts", "D": "diamonds", "C": "clubs"}

RANK_VALUES: Dict[str, int] = {r: i + 1 for i, r in enumerate(RANKS)}

LinearPos = int
GridPos = Tuple[int, int]
# Pyramid waste pile top; the only non-coordinate position
WASTE = "waste"
Position: TypeAlias = Union[int, Tuple[int, int], str]

GameKind = Literal["linear", "grid", "pyramid"]
Outcome = Literal["in_progress", "won", "lost"]


class ProgrammingError(AssertionError):
    """Raised when the engine is driven with positions it never offered.

    Signals that a caller and the session fell out of sync (an empty or
    out-of-range cell handed to attempt_match, for instance). User clicks never
    raise this; they are ignored instead.
    """


@dataclass(frozen=True)
class Card:
    suit: str
    rank: str
    role: str = "none"

    def __str__(self) -> str:
        return f"{self.rank}{SUIT_SYMBOLS.get(self.suit, '?')}"

    @property
    def value(self) -> int:
        return RANK_VALUES[self.rank]

    @property
    def is_anchor(self) -> bool:
        return self.role != "none"

    def with_role(self, role: str) -> "Card":
        return replace(self, role=role)


def parse_card(token: str) -> Card:
    """Parse "5C", "10h", "K♥" style tokens into a Card."""
    s = token.strip()
    assert len(s) >= 2, f"Invalid card token: {token!r}"
    rank, suit_tok = s[:-1].upper(), s[-1]
    if suit_tok.upper() in SUIT_LETTERS:
        suit = SUIT_LETTERS[suit_tok.upper()]
    else:
        by_symbol = {v: k for k, v in SUIT_SYMBOLS.items()}
        assert suit_tok in by_symbol, f"Invalid suit in {token!r}"
        suit = by_symbol[suit_tok]
    if rank == "1":
        rank = "A"
    assert rank in RANK_VALUES, f"Invalid rank in {token!r}"
    return Card(suit, rank)


def card_to_obj(card: Card) -> Dict[str, object]:
    return {"suit": card.suit, "rank": card.rank, "role": card.role}


def obj_to_card(obj: object) -> Card:
    assert isinstance(obj, dict), "Card must be an object"
    suit = obj.get("suit")
    rank = obj.get("rank")
    role = obj.get("role", "none")
    assert suit in SUITS, "Invalid suit"
    assert rank in RANK_VALUES, "Invalid rank"
    assert role in ("none", "king", "queen"), "Invalid role"
    return Card(str(suit), str(rank), str(role))
