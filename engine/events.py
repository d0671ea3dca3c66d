from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from engine.cards import CardId

if TYPE_CHECKING:
    from engine.game import Game


class GameEvent:
    pass


@dataclass(frozen=True)
class DrawEvent(GameEvent):
    card: CardId


@dataclass(frozen=True)
class RecycleEvent(GameEvent):
    count: int


@dataclass(frozen=True)
class CardMoveEvent(GameEvent):
    """``src`` and ``dest`` are (pile kind, pile index) pairs, e.g. ("tableau", 3)."""

    cards: tuple[CardId, ...]
    src: tuple[str, int]
    dest: tuple[str, int]


@dataclass(frozen=True)
class RevealEvent(GameEvent):
    column: int
    card: CardId


@dataclass(frozen=True)
class AutoSolveStepEvent(GameEvent):
    column: int
    foundation_index: int
    remaining: int


@dataclass(frozen=True)
class WinEvent(GameEvent):
    moves: int


class Interface:
    """Listener for a Game. Presentation layers override what they need."""

    def __init__(self):
        self.game: Game = None

    def on_start(self):
        pass

    def on_event(self, event: GameEvent):
        """
        Invoked after a command has been applied.
        :param event:
        :return:
        """
        self.notify_redraw()

    def on_undo(self):
        """
        Invoked after the live board has been replaced by an earlier snapshot.
        :return:
        """
        self.notify_redraw()

    def notify_redraw(self):
        pass

    def on_win(self):
        pass
