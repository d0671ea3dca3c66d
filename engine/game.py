from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import replace
from typing import Optional

from engine.board import Board, GameStatus
from engine.cards import CardId, card_name
from engine.config import DEFAULT_RULES, RuleConfig
from engine.events import (
    AutoSolveStepEvent,
    CardMoveEvent,
    DrawEvent,
    GameEvent,
    Interface,
    RecycleEvent,
    RevealEvent,
    WinEvent,
)
from engine.history import HistoryRecorder
from engine.moves import PlannedMove, apply_planned_move, draw, move_to_foundation, move_to_tableau
from engine.rules import Location, PileKind, find_foundation_for, is_won, locate
from solver.auto_solve import solve

LOGGER = logging.getLogger(__name__)


class Game:
    """
    The live game: one board, its undo history and a pending auto-solve plan.

    ask_* : called by the player; returns True if the command was applied.
    Rejected commands leave the board and the history untouched.
    """

    def __init__(self, rules: RuleConfig = DEFAULT_RULES):
        self.rules = rules
        self.interfaces: list[Interface] = []
        self.board: Optional[Board] = None
        self.history = HistoryRecorder(rules.history_limit)
        self.plan: deque[PlannedMove] = deque()

    def register_interface(self, interface: Interface):
        interface.game = self
        self.interfaces.append(interface)

    @property
    def solving(self) -> bool:
        return self.board is not None and self.board.solving

    @property
    def won(self) -> bool:
        return self.board is not None and self.board.won

    @property
    def can_undo(self) -> bool:
        return not self.solving and self.history.can_undo

    def new_game(self, seed: Optional[int] = None) -> Board:
        self.plan.clear()
        self.board = Board.deal(random.Random(seed))
        self.history.reset(self.board)
        LOGGER.info("new game dealt (seed=%s)", seed)
        for interface in self.interfaces:
            interface.on_start()
        return self.board

    def start_from(self, board: Board) -> Board:
        """Start playing from a given position, e.g. a prepared test deal."""
        board.verify()
        self.plan.clear()
        self.board = board
        self.history.reset(board)
        for interface in self.interfaces:
            interface.on_start()
        return board

    def _emit(self, event: GameEvent):
        for interface in self.interfaces:
            interface.on_event(event)

    def _commit(self, board: Board, events: list[GameEvent]):
        board.verify()
        self.board = board
        self.history.log(board)
        for event in events:
            self._emit(event)
        if board.won:
            self._announce_win()

    def _announce_win(self):
        LOGGER.info("game won in %d moves", self.board.moves)
        self._emit(WinEvent(self.board.moves))
        for interface in self.interfaces:
            interface.on_win()

    def _accepts_commands(self) -> bool:
        return self.board is not None and self.board.status is GameStatus.PLAYING

    def ask_draw(self) -> bool:
        if not self._accepts_commands():
            return False
        prev = self.board
        nxt = draw(prev, self.rules)
        if nxt is None:
            return False
        if prev.stock:
            event = DrawEvent(nxt.waste[-1].id)
        else:
            event = RecycleEvent(len(prev.waste))
        self._commit(nxt, [event])
        return True

    def _move_events(self, prev: Board, nxt: Board, loc: Location, dest: tuple[str, int]) -> list[GameEvent]:
        if loc.kind is PileKind.TABLEAU:
            moved = prev.tableau[loc.pile][loc.index:]
        elif loc.kind is PileKind.WASTE:
            moved = prev.waste[-1:]
        else:
            moved = prev.foundations[loc.pile][-1:]
        events: list[GameEvent] = [
            CardMoveEvent(tuple(card.id for card in moved), (loc.kind.value, loc.pile), dest)
        ]
        if loc.kind is PileKind.TABLEAU:
            column = nxt.tableau[loc.pile]
            if column and not prev.tableau[loc.pile][len(column) - 1].face_up:
                events.append(RevealEvent(loc.pile, column[-1].id))
        return events

    def ask_foundation_move(self, card_id: CardId, foundation_index: int) -> bool:
        if not self._accepts_commands():
            return False
        prev = self.board
        loc = locate(card_id, prev)
        nxt = move_to_foundation(prev, card_id, foundation_index, self.rules)
        if nxt is None:
            LOGGER.debug("rejected %s -> foundation %s", card_name(card_id), foundation_index)
            return False
        self._commit(nxt, self._move_events(prev, nxt, loc, (PileKind.FOUNDATION.value, foundation_index)))
        return True

    def ask_tableau_move(self, card_id: CardId, column_index: int) -> bool:
        if not self._accepts_commands():
            return False
        prev = self.board
        loc = locate(card_id, prev, include_foundations=self.rules.foundation_source)
        nxt = move_to_tableau(prev, card_id, column_index, self.rules)
        if nxt is None:
            LOGGER.debug("rejected %s -> column %s", card_name(card_id), column_index)
            return False
        self._commit(nxt, self._move_events(prev, nxt, loc, (PileKind.TABLEAU.value, column_index)))
        return True

    def ask_auto_move(self, card_id: CardId) -> bool:
        """Double-click / double-tap: send the card to the first foundation that takes it."""
        if not self._accepts_commands():
            return False
        loc = locate(card_id, self.board)
        if loc is None:
            return False
        if loc.kind is PileKind.WASTE:
            card = self.board.waste[-1]
        else:
            card = self.board.tableau[loc.pile][loc.index]
        idx = find_foundation_for(card, self.board.foundations)
        if idx < 0:
            return False
        return self.ask_foundation_move(card_id, idx)

    def ask_undo(self) -> bool:
        if self.solving:
            return False
        board = self.history.undo()
        if board is None:
            return False
        self.board = board
        for interface in self.interfaces:
            interface.on_undo()
        return True

    def can_auto_solve(self) -> bool:
        if not self._accepts_commands():
            return False
        return solve(self.board, self.rules.solver_max_steps).solved

    def begin_auto_solve(self) -> Optional[tuple[PlannedMove, ...]]:
        """
        Compute the plan and lock the board until it has been replayed with
        ``step_auto_solve`` (or dropped with ``abort_auto_solve``).
        """
        if not self._accepts_commands():
            return None
        result = solve(self.board, self.rules.solver_max_steps)
        if not result.solved:
            LOGGER.debug("auto-solve refused: %s", result.status)
            return None
        self.plan = deque(result.plan)
        self.board = replace(self.board, status=GameStatus.SOLVING)
        LOGGER.info("auto-solve started: %d promotions", len(self.plan))
        return result.plan

    def step_auto_solve(self) -> bool:
        """Apply the next planned promotion. Returns False once there is nothing left to do."""
        if not self.solving:
            return False
        if not self.plan:
            self._finish_auto_solve()
            return False
        move = self.plan.popleft()
        nxt = apply_planned_move(self.board, move)
        if nxt is None:
            LOGGER.warning("planned move %s no longer applies; ending auto-solve", move.to_notation())
            self.plan.clear()
            self._finish_auto_solve()
            return False
        self.board = nxt
        self._emit(AutoSolveStepEvent(move.column, move.foundation_index, len(self.plan)))
        if not self.plan:
            self._finish_auto_solve()
        return True

    def _finish_auto_solve(self):
        status = GameStatus.WON if is_won(self.board) else GameStatus.PLAYING
        board = replace(self.board, status=status)
        LOGGER.info("auto-solve finished: %s", status.value)
        self._commit(board, [])

    def abort_auto_solve(self) -> bool:
        if not self.solving:
            return False
        LOGGER.info("auto-solve aborted with %d promotions left", len(self.plan))
        self.plan.clear()
        self._finish_auto_solve()
        return True

    def solve_instantly(self) -> bool:
        """Jump straight to the solved board as a single step."""
        if not self._accepts_commands():
            return False
        result = solve(self.board, self.rules.solver_max_steps)
        if not result.solved:
            return False
        self._commit(replace(result.final_board, status=GameStatus.WON), [])
        return True
