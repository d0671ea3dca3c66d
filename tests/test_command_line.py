import io
import unittest
from contextlib import redirect_stdout

from engine.board import Board
from engine.cards import Card
from engine.game import Game
from frontend.command_line import CommandLineInterface, handle_command


def alternating_board():
    pairs = (("spades", "hearts"), ("hearts", "spades"), ("clubs", "diamonds"), ("diamonds", "clubs"))
    columns = [tuple(Card(odd if rank % 2 else even, rank, True) for rank in range(13, 0, -1)) for odd, even in pairs]
    return Board(tableau=tuple(columns) + ((), (), ()))


class CommandLineTestCase(unittest.TestCase):
    def make(self):
        game = Game()
        ui = CommandLineInterface(step_delay=0.0)
        game.register_interface(ui)
        return game, ui

    def run_commands(self, game, ui, *commands):
        out = io.StringIO()
        results = []
        with redirect_stdout(out):
            for command in commands:
                results.append(handle_command(game, ui, command))
        return results, out.getvalue()

    def test_draw_and_undo(self):
        game, ui = self.make()
        with redirect_stdout(io.StringIO()):
            game.new_game(seed=4)
        _, out = self.run_commands(game, ui, "draw")
        self.assertEqual(1, game.board.moves)
        self.assertIn("Moves: 1", out)
        _, out = self.run_commands(game, ui, "undo", "undo")
        self.assertEqual(0, game.board.moves)
        self.assertIn("Cannot undo!", out)

    def test_invalid_input_is_reported(self):
        game, ui = self.make()
        with redirect_stdout(io.StringIO()):
            game.new_game(seed=4)
        results, out = self.run_commands(game, ui, "mv", "mv ZZ t1", "mv AS x1", "mv AS t9", "jump", "")
        self.assertTrue(all(results))
        self.assertEqual(3, out.count("Invalid card or target!"))
        self.assertIn("Cannot move!", out)
        self.assertIn("Invalid command!", out)
        self.assertEqual(0, game.board.moves)

    def test_quit(self):
        game, ui = self.make()
        results, _ = self.run_commands(game, ui, "quit")
        self.assertEqual([False], results)

    def test_solve_replays_plan_to_a_win(self):
        game, ui = self.make()
        with redirect_stdout(io.StringIO()):
            game.start_from(alternating_board())
        _, out = self.run_commands(game, ui, "solve")
        self.assertTrue(game.won)
        self.assertIn("You win", out)

    def test_solve_refused_on_fresh_deal(self):
        game, ui = self.make()
        with redirect_stdout(io.StringIO()):
            game.new_game(seed=4)
        _, out = self.run_commands(game, ui, "solve", "instant")
        self.assertIn("Cannot auto-solve yet!", out)
        self.assertIn("Cannot solve yet!", out)

    def test_move_and_auto_commands(self):
        game, ui = self.make()
        with redirect_stdout(io.StringIO()):
            game.start_from(alternating_board())
        self.run_commands(game, ui, "auto AS", "mv ah f1")
        self.assertEqual(1, len(game.board.foundations[0]))
        self.assertEqual(1, len(game.board.foundations[1]))
        self.assertEqual(2, game.board.moves)


if __name__ == "__main__":
    unittest.main()
