from engine.board import Pile
from engine.cards import Card
from engine.events import AutoSolveStepEvent, CardMoveEvent, DrawEvent, GameEvent, RecycleEvent, RevealEvent, WinEvent
from engine.game import Game
from frontend.view_model import AnimationEvent, CardView, GameViewModel, PileView


class GameAdapter:
    """Turns the live Game into a renderer-friendly model."""

    @staticmethod
    def card_view(card: Card) -> CardView:
        return CardView(suit=card.suit, rank=card.rank, color=card.color, face_up=card.face_up,
                        label=card.short_name())

    @staticmethod
    def pile_view(pile: Pile) -> PileView:
        return PileView(cards=tuple(GameAdapter.card_view(card) for card in pile))

    @staticmethod
    def snapshot(game: Game) -> GameViewModel:
        board = game.board
        waste_top = board.waste_top
        return GameViewModel(
            stock_count=len(board.stock),
            waste_top=GameAdapter.card_view(waste_top) if waste_top is not None else None,
            foundations=tuple(GameAdapter.pile_view(pile) for pile in board.foundations),
            tableau=tuple(GameAdapter.pile_view(column) for column in board.tableau),
            moves=board.moves,
            status=board.status.value,
            can_undo=game.can_undo,
            can_auto_solve=game.can_auto_solve(),
        )

    @staticmethod
    def event_to_animation(event: GameEvent) -> AnimationEvent:
        if isinstance(event, CardMoveEvent):
            return AnimationEvent(
                type="MOVE",
                payload={"cards": event.cards, "src": event.src, "dest": event.dest},
            )
        if isinstance(event, DrawEvent):
            return AnimationEvent(type="DRAW", payload={"card": event.card})
        if isinstance(event, RecycleEvent):
            return AnimationEvent(type="RECYCLE", payload={"count": event.count})
        if isinstance(event, RevealEvent):
            return AnimationEvent(type="REVEAL", payload={"column": event.column, "card": event.card})
        if isinstance(event, AutoSolveStepEvent):
            return AnimationEvent(
                type="AUTO_SOLVE_STEP",
                payload={"column": event.column, "foundation": event.foundation_index,
                         "remaining": event.remaining},
            )
        if isinstance(event, WinEvent):
            return AnimationEvent(type="WIN", payload={"moves": event.moves})
        return AnimationEvent(type="UNKNOWN", payload={"event": type(event).__name__})
