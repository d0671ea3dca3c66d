from __future__ import annotations

from dataclasses import dataclass

DESKTOP_HISTORY_LIMIT = 50
MOBILE_HISTORY_LIMIT = 10
SOLVER_MAX_STEPS = 200


@dataclass(frozen=True, slots=True)
class RuleConfig:
    # Snapshots kept for undo, the live position included.
    history_limit: int = DESKTOP_HISTORY_LIMIT
    # Whether drawing from (or recycling) the stock counts as a move.
    count_draws: bool = True
    # Whether a foundation top may be moved back onto the tableau.
    foundation_source: bool = False
    # Safety bound on single-card promotions made by the auto-solver.
    solver_max_steps: int = SOLVER_MAX_STEPS

    def __post_init__(self):
        if self.history_limit < 1:
            raise ValueError("history_limit must be at least 1")
        if self.solver_max_steps < 1:
            raise ValueError("solver_max_steps must be at least 1")

    @staticmethod
    def desktop() -> RuleConfig:
        return RuleConfig()

    @staticmethod
    def mobile() -> RuleConfig:
        return RuleConfig(history_limit=MOBILE_HISTORY_LIMIT, foundation_source=True)


DEFAULT_RULES = RuleConfig()
