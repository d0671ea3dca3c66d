from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import Optional

SUITS = ("spades", "hearts", "diamonds", "clubs")
SUIT_SYMBOLS = {"spades": "♠", "hearts": "♥", "diamonds": "♦", "clubs": "♣"}
SUIT_LETTERS = {"spades": "S", "hearts": "H", "diamonds": "D", "clubs": "C"}
RED_SUITS = frozenset(("hearts", "diamonds"))
RANK_NAMES = ("A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K")

ACE = 1
KING = 13
NUM_PER_SUIT = 13
DECK_SIZE = len(SUITS) * NUM_PER_SUIT

CardId = tuple[str, int]


@dataclass(frozen=True, slots=True)
class Card:
    """A playing card. Only ``face_up`` differs between two copies of the same card."""

    suit: str
    rank: int
    face_up: bool = False

    @property
    def id(self) -> CardId:
        return self.suit, self.rank

    @property
    def color(self) -> str:
        return "red" if self.suit in RED_SUITS else "black"

    def turned(self, face_up: bool) -> Card:
        if self.face_up == face_up:
            return self
        return replace(self, face_up=face_up)

    def short_name(self) -> str:
        return RANK_NAMES[self.rank - 1] + SUIT_LETTERS[self.suit]

    def game_str(self) -> str:
        if not self.face_up:
            return "---"
        return SUIT_SYMBOLS[self.suit] + RANK_NAMES[self.rank - 1].ljust(2)

    def __str__(self):
        return self.short_name() if self.face_up else self.short_name() + "?"


def new_deck() -> list[Card]:
    return [Card(suit, rank) for suit in SUITS for rank in range(ACE, KING + 1)]


def shuffled_deck(rng: Optional[random.Random] = None) -> list[Card]:
    deck = new_deck()
    (rng or random.Random()).shuffle(deck)
    return deck


def card_name(card_id: CardId) -> str:
    suit, rank = card_id
    return RANK_NAMES[rank - 1] + SUIT_LETTERS[suit]


def parse_card_id(text: str) -> CardId:
    """
    Parse the short text form of a card, e.g. ``AS``, ``10h`` or ``qd``.
    :raises ValueError: if the text does not name a card
    """
    s = text.strip().upper()
    if len(s) < 2:
        raise ValueError(f"not a card: {text!r}")
    rank_part, suit_part = s[:-1], s[-1]
    suits_by_letter = {letter: suit for suit, letter in SUIT_LETTERS.items()}
    if suit_part not in suits_by_letter or rank_part not in RANK_NAMES:
        raise ValueError(f"not a card: {text!r}")
    return suits_by_letter[suit_part], RANK_NAMES.index(rank_part) + 1
