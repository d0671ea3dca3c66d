"""
Command application.

Every function takes a Board and returns the next Board, or ``None`` when the
command is rejected. The input Board is never touched, so a rejected command
leaves no trace.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional

from engine.board import FOUNDATION_COUNT, TABLEAU_COUNT, Board, GameStatus, Pile
from engine.cards import CardId, card_name
from engine.config import DEFAULT_RULES, RuleConfig
from engine.rules import (
    PileKind,
    can_place_on_foundation,
    can_place_on_tableau,
    find_foundation_for,
    is_movable_run,
    is_won,
    locate,
)

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PlannedMove:
    """One auto-solve promotion: the top of a tableau column onto a foundation."""

    column: int
    foundation_index: int

    def to_notation(self) -> str:
        return f"T{self.column}->F{self.foundation_index}"


def _expose_top(column: Pile) -> Pile:
    if column and not column[-1].face_up:
        return column[:-1] + (column[-1].turned(True),)
    return column


def after_move(board: Board) -> Board:
    """Recompute the win flag. Runs after foundation and tableau moves, never after a draw."""
    if board.status is GameStatus.PLAYING and is_won(board):
        return replace(board, status=GameStatus.WON)
    return board


def draw(board: Board, rules: RuleConfig = DEFAULT_RULES) -> Optional[Board]:
    """Turn the stock top onto the waste, or recycle the waste when the stock is empty."""
    if board.status is not GameStatus.PLAYING:
        return None
    moves = board.moves + (1 if rules.count_draws else 0)
    if board.stock:
        card = board.stock[-1].turned(True)
        return replace(board, stock=board.stock[:-1], waste=board.waste + (card,), moves=moves)
    stock = tuple(card.turned(False) for card in reversed(board.waste))
    return replace(board, stock=stock, waste=(), moves=moves)


def move_to_foundation(board: Board, card_id: CardId, foundation_index: int,
                       rules: RuleConfig = DEFAULT_RULES) -> Optional[Board]:
    if board.status is not GameStatus.PLAYING:
        return None
    if not 0 <= foundation_index < FOUNDATION_COUNT:
        return None
    loc = locate(card_id, board)
    if loc is None:
        LOGGER.debug("foundation move rejected: %s is not reachable", card_name(card_id))
        return None

    target = board.foundations[foundation_index]
    if loc.kind is PileKind.WASTE:
        card = board.waste[-1]
        if not can_place_on_foundation(card, target):
            return None
        nxt = replace(board, waste=board.waste[:-1])
    else:
        column = board.tableau[loc.pile]
        card = column[loc.index]
        if loc.index != len(column) - 1 or not can_place_on_foundation(card, target):
            return None
        nxt = board.with_column(loc.pile, _expose_top(column[:-1]))

    nxt = nxt.with_foundation(foundation_index, target + (card,))
    return after_move(replace(nxt, moves=board.moves + 1))


def move_to_tableau(board: Board, card_id: CardId, column_index: int,
                    rules: RuleConfig = DEFAULT_RULES) -> Optional[Board]:
    """Move a card, together with every card stacked on it, onto a tableau column."""
    if board.status is not GameStatus.PLAYING:
        return None
    if not 0 <= column_index < TABLEAU_COUNT:
        return None
    loc = locate(card_id, board, include_foundations=rules.foundation_source)
    if loc is None:
        LOGGER.debug("tableau move rejected: %s is not reachable", card_name(card_id))
        return None

    target = board.tableau[column_index]
    if loc.kind is PileKind.WASTE:
        run = board.waste[-1:]
        if not can_place_on_tableau(run[0], target):
            return None
        nxt = replace(board, waste=board.waste[:-1])
    elif loc.kind is PileKind.FOUNDATION:
        foundation = board.foundations[loc.pile]
        run = foundation[-1:]
        if not can_place_on_tableau(run[0], target):
            return None
        nxt = board.with_foundation(loc.pile, foundation[:-1])
    else:
        if loc.pile == column_index:
            return None
        column = board.tableau[loc.pile]
        if not is_movable_run(column, loc.index) or not can_place_on_tableau(column[loc.index], target):
            return None
        run = column[loc.index:]
        nxt = board.with_column(loc.pile, _expose_top(column[:loc.index]))

    nxt = nxt.with_column(column_index, target + run)
    return after_move(replace(nxt, moves=board.moves + 1))


def auto_move(board: Board, card_id: CardId, rules: RuleConfig = DEFAULT_RULES) -> Optional[Board]:
    """Send a card to the first foundation that takes it."""
    loc = locate(card_id, board)
    if loc is None:
        return None
    if loc.kind is PileKind.WASTE:
        card = board.waste[-1]
    else:
        card = board.tableau[loc.pile][loc.index]
    idx = find_foundation_for(card, board.foundations)
    if idx < 0:
        return None
    return move_to_foundation(board, card_id, idx, rules)


def apply_planned_move(board: Board, move: PlannedMove) -> Optional[Board]:
    """
    Apply one auto-solve step. The move counter is left alone and a SOLVING
    status is kept; the caller decides when the solve is over.
    """
    if board.status is GameStatus.WON:
        return None
    if not 0 <= move.column < TABLEAU_COUNT or not 0 <= move.foundation_index < FOUNDATION_COUNT:
        return None
    column = board.tableau[move.column]
    if not column or not column[-1].face_up:
        return None
    card = column[-1]
    target = board.foundations[move.foundation_index]
    if not can_place_on_foundation(card, target):
        return None
    nxt = board.with_column(move.column, _expose_top(column[:-1]))
    return after_move(nxt.with_foundation(move.foundation_index, target + (card,)))
