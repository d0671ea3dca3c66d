from dataclasses import dataclass


@dataclass(frozen=True)
class CardView:
    suit: str
    rank: int
    color: str
    face_up: bool
    label: str


@dataclass(frozen=True)
class PileView:
    cards: tuple[CardView, ...]


@dataclass(frozen=True)
class GameViewModel:
    stock_count: int
    waste_top: CardView | None
    foundations: tuple[PileView, ...]
    tableau: tuple[PileView, ...]
    moves: int
    status: str
    can_undo: bool
    can_auto_solve: bool


@dataclass(frozen=True)
class AnimationEvent:
    type: str
    payload: dict
