"""Placement rules. Every function here is total and side-effect free."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from engine.board import Board, Pile
from engine.cards import ACE, KING, NUM_PER_SUIT, Card, CardId


class PileKind(Enum):
    WASTE = "waste"
    TABLEAU = "tableau"
    FOUNDATION = "foundation"


@dataclass(frozen=True, slots=True)
class Location:
    kind: PileKind
    pile: int = 0
    index: int = 0


def can_place_on_foundation(card: Card, foundation: Sequence[Card]) -> bool:
    if not foundation:
        return card.rank == ACE
    top = foundation[-1]
    return card.suit == top.suit and card.rank == top.rank + 1


def can_place_on_tableau(card: Card, column: Sequence[Card]) -> bool:
    if not column:
        return card.rank == KING
    top = column[-1]
    return card.color != top.color and card.rank == top.rank - 1


def find_foundation_for(card: Card, foundations: Sequence[Pile]) -> int:
    """Index of the first foundation accepting ``card``, or -1."""
    for idx, foundation in enumerate(foundations):
        if can_place_on_foundation(card, foundation):
            return idx
    return -1


def is_movable_run(column: Pile, index: int) -> bool:
    """True if the cards from ``index`` to the top form a face-up alternating descending run."""
    if index < 0 or index >= len(column):
        return False
    base = column[index]
    if not base.face_up:
        return False
    for upper in column[index + 1:]:
        if not upper.face_up or upper.rank != base.rank - 1 or upper.color == base.color:
            return False
        base = upper
    return True


def locate(card_id: CardId, board: Board, include_foundations: bool = False) -> Optional[Location]:
    """
    Find a face-up, reachable card.

    Only the waste top and face-up tableau cards are searched, then the
    foundation tops when ``include_foundations`` is set.
    """
    top = board.waste_top
    if top is not None and top.id == card_id:
        return Location(PileKind.WASTE, 0, len(board.waste) - 1)

    for col, column in enumerate(board.tableau):
        for idx, card in enumerate(column):
            if card.id == card_id and card.face_up:
                return Location(PileKind.TABLEAU, col, idx)

    if include_foundations:
        for f_idx, foundation in enumerate(board.foundations):
            if foundation and foundation[-1].id == card_id:
                return Location(PileKind.FOUNDATION, f_idx, len(foundation) - 1)
    return None


def is_won_piles(foundations: Sequence[Pile]) -> bool:
    return all(len(foundation) == NUM_PER_SUIT for foundation in foundations)


def is_won(board: Board) -> bool:
    return is_won_piles(board.foundations)
