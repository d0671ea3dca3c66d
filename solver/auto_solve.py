"""
Greedy auto-solver.

Once the stock and waste are empty and every tableau card is face up, each
card is reachable the moment it becomes a column top and foundations only
grow by rank within a suit. Promoting any playable column top straight to a
foundation can then only delay another promotion, never block it, so a
left-to-right scan that restarts after every promotion finds a win whenever
one exists. Outside that position the scan proves nothing: it never moves
cards between columns and never touches the stock.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional

from engine.board import Board
from engine.config import SOLVER_MAX_STEPS
from engine.moves import PlannedMove, apply_planned_move
from engine.rules import find_foundation_for, is_won

LOGGER = logging.getLogger(__name__)

SOLVED = "solved"
STUCK = "stuck"
EXHAUSTED = "exhausted"
NOT_ELIGIBLE = "not_eligible"


@dataclass(slots=True)
class SolveResult:
    status: str
    plan: tuple[PlannedMove, ...]
    final_board: Board
    steps: int
    elapsed_ms: float

    @property
    def solved(self) -> bool:
        return self.status == SOLVED

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "steps": self.steps,
            "elapsed_ms": self.elapsed_ms,
            "plan": [move.to_notation() for move in self.plan],
        }


def can_auto_solve(board: Board) -> bool:
    if board.stock or board.waste:
        return False
    return all(card.face_up for column in board.tableau for card in column)


def next_promotion(board: Board) -> Optional[PlannedMove]:
    """First column top (left to right) that some foundation (0..3) accepts."""
    for col, column in enumerate(board.tableau):
        if not column or not column[-1].face_up:
            continue
        idx = find_foundation_for(column[-1], board.foundations)
        if idx >= 0:
            return PlannedMove(col, idx)
    return None


def _run(board: Board, max_steps: int) -> SolveResult:
    started = time.perf_counter()
    plan: list[PlannedMove] = []
    status = SOLVED
    while not is_won(board):
        if len(plan) >= max_steps:
            status = EXHAUSTED
            break
        move = next_promotion(board)
        if move is None:
            status = STUCK
            break
        nxt = apply_planned_move(board, move)
        if nxt is None:
            status = STUCK
            break
        board = nxt
        plan.append(move)
    elapsed_ms = round((time.perf_counter() - started) * 1000.0, 3)
    return SolveResult(status=status, plan=tuple(plan), final_board=board, steps=len(plan), elapsed_ms=elapsed_ms)


def solve(board: Board, max_steps: int = SOLVER_MAX_STEPS) -> SolveResult:
    if not can_auto_solve(board):
        return SolveResult(status=NOT_ELIGIBLE, plan=(), final_board=board, steps=0, elapsed_ms=0.0)
    result = _run(board, max_steps)
    LOGGER.debug("auto-solve scan finished: status=%s steps=%d elapsed_ms=%s",
                 result.status, result.steps, result.elapsed_ms)
    return result


def simulate(board: Board, max_steps: int = SOLVER_MAX_STEPS) -> Board:
    """Board reached by the greedy scan; the input board itself is left as is."""
    return _run(board, max_steps).final_board


def plan_moves(board: Board, max_steps: int = SOLVER_MAX_STEPS) -> tuple[PlannedMove, ...]:
    """
    Promotions made by the greedy scan, in order. Replaying them with
    ``apply_planned_move`` reaches the board returned by ``simulate``.
    """
    return _run(board, max_steps).plan


def is_winnable(board: Board, max_steps: int = SOLVER_MAX_STEPS) -> bool:
    return solve(board, max_steps).solved
