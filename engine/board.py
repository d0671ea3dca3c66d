from __future__ import annotations

import random
from collections import Counter
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterator, Optional

from engine.cards import ACE, DECK_SIZE, Card, shuffled_deck

FOUNDATION_COUNT = 4
TABLEAU_COUNT = 7

Pile = tuple[Card, ...]


class GameStatus(Enum):
    PLAYING = "playing"
    SOLVING = "solving"
    WON = "won"


class BoardIntegrityError(AssertionError):
    """Raised when a board breaks an invariant that no legal move can break."""


def _empty_piles(count: int) -> tuple[Pile, ...]:
    return tuple(() for _ in range(count))


@dataclass(frozen=True, slots=True)
class Board:
    """
    Immutable Klondike position.

    The last card of every pile is its top. A transition always builds a new
    Board, so snapshots can be kept and compared freely.
    """

    stock: Pile = ()
    waste: Pile = ()
    foundations: tuple[Pile, ...] = field(default_factory=lambda: _empty_piles(FOUNDATION_COUNT))
    tableau: tuple[Pile, ...] = field(default_factory=lambda: _empty_piles(TABLEAU_COUNT))
    moves: int = 0
    status: GameStatus = GameStatus.PLAYING

    @staticmethod
    def deal(rng: Optional[random.Random] = None) -> Board:
        """Deal a fresh game: column i gets i+1 cards with only the last one face up."""
        deck = shuffled_deck(rng)
        columns = []
        idx = 0
        for col in range(TABLEAU_COUNT):
            column = []
            for row in range(col + 1):
                column.append(deck[idx].turned(row == col))
                idx += 1
            columns.append(tuple(column))
        stock = tuple(card.turned(False) for card in deck[idx:])
        return Board(stock=stock, tableau=tuple(columns))

    @property
    def won(self) -> bool:
        return self.status is GameStatus.WON

    @property
    def solving(self) -> bool:
        return self.status is GameStatus.SOLVING

    @property
    def waste_top(self) -> Optional[Card]:
        return self.waste[-1] if self.waste else None

    def all_cards(self) -> Iterator[Card]:
        yield from self.stock
        yield from self.waste
        for pile in self.foundations:
            yield from pile
        for column in self.tableau:
            yield from column

    def with_foundation(self, idx: int, pile: Pile) -> Board:
        foundations = list(self.foundations)
        foundations[idx] = pile
        return replace(self, foundations=tuple(foundations))

    def with_column(self, idx: int, column: Pile) -> Board:
        tableau = list(self.tableau)
        tableau[idx] = column
        return replace(self, tableau=tuple(tableau))

    def verify(self) -> None:
        """
        Check the structural invariants of a position.
        :raises BoardIntegrityError: on a broken invariant
        """
        if len(self.foundations) != FOUNDATION_COUNT or len(self.tableau) != TABLEAU_COUNT:
            raise BoardIntegrityError("wrong pile count")

        ids = Counter(card.id for card in self.all_cards())
        if len(ids) != DECK_SIZE or sum(ids.values()) != DECK_SIZE:
            duplicated = sorted(i for i, n in ids.items() if n > 1)
            raise BoardIntegrityError(f"expected {DECK_SIZE} unique cards, got {sum(ids.values())} "
                                      f"({len(ids)} unique, duplicated: {duplicated})")

        for idx, pile in enumerate(self.foundations):
            for rank, card in enumerate(pile, start=ACE):
                if card.rank != rank or card.suit != pile[0].suit or not card.face_up:
                    raise BoardIntegrityError(f"foundation {idx} is not an ascending run: {pile}")

        for idx, column in enumerate(self.tableau):
            if column and not column[-1].face_up:
                raise BoardIntegrityError(f"column {idx} has a face-down top")
            first_up = next((i for i, card in enumerate(column) if card.face_up), len(column))
            for lower, upper in zip(column[first_up:], column[first_up + 1:]):
                if not upper.face_up or upper.rank != lower.rank - 1 or upper.color == lower.color:
                    raise BoardIntegrityError(f"column {idx} has a broken face-up run: {column}")

        if any(card.face_up for card in self.stock):
            raise BoardIntegrityError("face-up card in stock")
