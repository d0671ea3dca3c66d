from __future__ import annotations

from typing import Optional

from engine.board import Board
from engine.config import DESKTOP_HISTORY_LIMIT


class HistoryRecorder:
    """
    Bounded list of board snapshots, oldest first.

    The last entry is always the live board, so undo needs at least two
    entries. Boards are immutable values: a snapshot never shares mutable
    storage with the live game.
    """

    def __init__(self, limit: int = DESKTOP_HISTORY_LIMIT, initial: Optional[Board] = None):
        if limit < 1:
            raise ValueError("history limit must be at least 1")
        self.limit = limit
        self.lst: list[Board] = []
        if initial is not None:
            self.reset(initial)

    def __len__(self):
        return len(self.lst)

    def reset(self, board: Board):
        self.lst = [board]

    @property
    def current(self) -> Optional[Board]:
        return self.lst[-1] if self.lst else None

    @property
    def can_undo(self) -> bool:
        return len(self.lst) > 1

    def log(self, board: Board):
        self.lst.append(board)
        if len(self.lst) > self.limit:
            del self.lst[:len(self.lst) - self.limit]

    def undo(self) -> Optional[Board]:
        if not self.can_undo:
            return None
        self.lst.pop()
        return self.lst[-1]
