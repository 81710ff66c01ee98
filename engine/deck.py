from __future__ import annotations

from typing import List, Optional, Sequence, Tuple
import random

from .types import Card, SUITS, RANKS

DECK_SIZE: int = 52


def standard_deck() -> List[Card]:
    """Fresh 52-card deck in suit-major, rank-ascending order."""
    return [Card(s, r) for s in SUITS for r in RANKS]


def shuffle_deck(cards: Sequence[Card], seed: Optional[int] = None) -> List[Card]:
    rng = random.Random(seed)
    out = list(cards)
    rng.shuffle(out)
    return out


def deal(seed: Optional[int] = None) -> List[Card]:
    return shuffle_deck(standard_deck(), seed)


def take_protagonists(cards: Sequence[Card]) -> Tuple[Card, Card, List[Card]]:
    """Pull the King and Queen of Hearts out of `cards`.

    Returns (king, queen, rest) with the two tagged as anchors; `rest` keeps
    the original order of the other cards.
    """
    king: Optional[Card] = None
    queen: Optional[Card] = None
    rest: List[Card] = []
    for c in cards:
        if c.suit == "hearts" and c.rank == "K" and king is None:
            king = c.with_role("king")
        elif c.suit == "hearts" and c.rank == "Q" and queen is None:
            queen = c.with_role("queen")
        else:
            rest.append(c)
    if king is None or queen is None:
        raise ValueError("Invalid deck: expected the King and Queen of Hearts")
    return king, queen, rest
