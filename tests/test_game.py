import unittest
from dataclasses import replace

from engine.board import Board, GameStatus
from engine.cards import Card
from engine.config import RuleConfig
from engine.events import AutoSolveStepEvent, CardMoveEvent, DrawEvent, Interface, RecycleEvent, RevealEvent, WinEvent
from engine.game import Game


class TestInterface(Interface):
    def __init__(self):
        super().__init__()
        self.events = []
        self.starts = 0
        self.undos = 0
        self.wins = 0

    def on_start(self):
        self.starts += 1

    def on_event(self, event):
        self.events.append(event)
        super().on_event(event)

    def on_undo(self):
        self.undos += 1
        super().on_undo()

    def on_win(self):
        self.wins += 1


def up(suit, rank):
    return Card(suit, rank, True)


def alternating_columns():
    pairs = (("spades", "hearts"), ("hearts", "spades"), ("clubs", "diamonds"), ("diamonds", "clubs"))
    return [tuple(up(odd if rank % 2 else even, rank) for rank in range(13, 0, -1)) for odd, even in pairs]


def board_of(columns):
    columns = [tuple(c) for c in columns] + [()] * (7 - len(columns))
    return Board(tableau=tuple(columns))


class GameTestCase(unittest.TestCase):
    def make_game(self, rules=RuleConfig()):
        game = Game(rules)
        ui = TestInterface()
        game.register_interface(ui)
        return game, ui

    def test_new_game_starts_with_single_history_entry(self):
        game, ui = self.make_game()
        board = game.new_game(seed=5)
        self.assertEqual(1, ui.starts)
        self.assertIs(ui.game, game)
        self.assertEqual(1, len(game.history))
        self.assertFalse(game.can_undo)
        self.assertFalse(game.ask_undo())
        self.assertEqual(board, game.board)

    def test_draw_then_undo_restores_board(self):
        game, ui = self.make_game()
        before = game.new_game(seed=5)
        self.assertTrue(game.ask_draw())
        self.assertIsInstance(ui.events[-1], DrawEvent)
        self.assertEqual(1, game.board.moves)
        self.assertEqual(2, len(game.history))
        self.assertTrue(game.ask_undo())
        self.assertEqual(before, game.board)
        self.assertEqual(1, ui.undos)

    def test_recycle_emits_recycle_event(self):
        game, ui = self.make_game()
        game.new_game(seed=9)
        for _ in range(24):
            game.ask_draw()
        self.assertTrue(game.ask_draw())
        self.assertEqual(RecycleEvent(24), ui.events[-1])
        self.assertEqual(24, len(game.board.stock))

    def test_rejected_move_leaves_board_and_history(self):
        game, ui = self.make_game()
        game.start_from(board_of(alternating_columns()))
        before = game.board
        self.assertFalse(game.ask_tableau_move(("spades", 1), 1))
        self.assertFalse(game.ask_foundation_move(("spades", 2), 0))
        self.assertFalse(game.ask_foundation_move(("spades", 1), 9))
        self.assertEqual(before, game.board)
        self.assertEqual(1, len(game.history))
        self.assertEqual([], ui.events)

    def test_foundation_move_reveals_next_card(self):
        columns = alternating_columns()
        columns[0] = tuple(card.turned(False) for card in columns[0][:-1]) + columns[0][-1:]
        game, ui = self.make_game()
        game.start_from(board_of(columns))
        self.assertTrue(game.ask_foundation_move(("spades", 1), 0))
        self.assertEqual(CardMoveEvent((("spades", 1),), ("tableau", 0), ("foundation", 0)), ui.events[0])
        self.assertEqual(RevealEvent(0, ("hearts", 2)), ui.events[1])
        self.assertTrue(game.board.tableau[0][-1].face_up)
        self.assertEqual(1, game.board.moves)
        self.assertFalse(game.can_auto_solve())

    def test_tableau_move_onto_opposite_color(self):
        columns = alternating_columns()
        ace = columns[0][-1]
        columns[0] = columns[0][:-1]
        columns.append(())
        columns.append((ace,))
        game, ui = self.make_game()
        game.start_from(board_of(columns))
        self.assertTrue(game.ask_tableau_move(("spades", 1), 0))
        self.assertEqual(alternating_columns()[0], game.board.tableau[0])
        self.assertEqual((), game.board.tableau[5])
        self.assertEqual(("tableau", 5), ui.events[0].src)

    def test_auto_move(self):
        game, ui = self.make_game()
        game.start_from(board_of(alternating_columns()))
        self.assertTrue(game.ask_auto_move(("hearts", 1)))
        self.assertEqual(("foundation", 0), ui.events[0].dest)
        self.assertFalse(game.ask_auto_move(("clubs", 2)))

    def test_auto_solve_replay(self):
        game, ui = self.make_game()
        start = game.start_from(board_of(alternating_columns()))
        self.assertTrue(game.can_auto_solve())
        plan = game.begin_auto_solve()
        self.assertEqual(52, len(plan))
        self.assertTrue(game.solving)
        self.assertIs(GameStatus.SOLVING, game.board.status)

        self.assertFalse(game.ask_draw())
        self.assertFalse(game.ask_undo())
        self.assertFalse(game.can_undo)
        self.assertFalse(game.ask_auto_move(("spades", 1)))
        self.assertIsNone(game.begin_auto_solve())

        steps = 0
        while game.step_auto_solve():
            steps += 1
        self.assertEqual(52, steps)
        self.assertFalse(game.solving)
        self.assertTrue(game.won)
        self.assertEqual(0, game.board.moves)
        self.assertEqual(1, ui.wins)
        self.assertEqual(52, sum(isinstance(e, AutoSolveStepEvent) for e in ui.events))
        self.assertIsInstance(ui.events[-1], WinEvent)
        self.assertFalse(game.step_auto_solve())

        self.assertEqual(2, len(game.history))
        self.assertTrue(game.ask_undo())
        self.assertEqual(start, game.board)

    def test_abort_auto_solve_keeps_applied_steps(self):
        game, _ = self.make_game()
        game.start_from(board_of(alternating_columns()))
        game.begin_auto_solve()
        for _ in range(3):
            game.step_auto_solve()
        self.assertTrue(game.abort_auto_solve())
        self.assertFalse(game.solving)
        self.assertIs(GameStatus.PLAYING, game.board.status)
        self.assertEqual(3, sum(len(f) for f in game.board.foundations))
        self.assertFalse(game.abort_auto_solve())
        self.assertTrue(game.can_auto_solve())

    def test_solve_instantly(self):
        game, ui = self.make_game()
        start = game.start_from(board_of(alternating_columns()))
        self.assertTrue(game.solve_instantly())
        self.assertTrue(game.won)
        self.assertEqual(1, ui.wins)
        self.assertFalse(game.ask_draw())
        self.assertFalse(game.solve_instantly())
        self.assertTrue(game.ask_undo())
        self.assertEqual(start, game.board)

    def test_fresh_deal_is_not_auto_solvable(self):
        game, _ = self.make_game()
        game.new_game(seed=1)
        self.assertFalse(game.can_auto_solve())
        self.assertIsNone(game.begin_auto_solve())
        self.assertFalse(game.solve_instantly())

    def test_manual_win(self):
        columns = alternating_columns()
        game, ui = self.make_game()
        game.start_from(board_of(columns))
        for _ in range(52):
            self.assertTrue(any(game.ask_auto_move(col[-1].id) for col in game.board.tableau if col))
        self.assertTrue(game.won)
        self.assertEqual(52, game.board.moves)
        self.assertEqual(1, ui.wins)
        self.assertTrue(game.ask_undo())
        self.assertFalse(game.won)

    def test_history_limit_from_rules(self):
        game, _ = self.make_game(RuleConfig.mobile())
        game.new_game(seed=2)
        for _ in range(15):
            game.ask_draw()
        self.assertEqual(10, len(game.history))
        undone = 0
        while game.ask_undo():
            undone += 1
        self.assertEqual(9, undone)
        self.assertEqual(6, game.board.moves)

    def test_start_from_rejects_broken_board(self):
        game, _ = self.make_game()
        columns = alternating_columns()[:3]
        with self.assertRaises(AssertionError):
            game.start_from(board_of(columns))
        solving = replace(board_of(alternating_columns()), status=GameStatus.SOLVING)
        game.start_from(solving)
        self.assertFalse(game.ask_draw())


if __name__ == "__main__":
    unittest.main()
