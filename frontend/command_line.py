from __future__ import annotations

import argparse
import logging
import time

from engine.cards import parse_card_id
from engine.config import RuleConfig
from engine.events import Interface
from engine.game import Game
from frontend import settings_store

HELP = """commands:
  draw                 turn a stock card (recycles the waste when the stock is empty)
  mv <card> f<0-3>     move a card to a foundation, e.g. mv AS f0
  mv <card> t<0-6>     move a card (and the cards on it) to a column, e.g. mv 9H t2
  auto <card>          send a card to the first foundation that takes it
  undo                 take back the last move
  solve                replay the auto-solve plan step by step
  instant              finish a solvable game at once
  new                  deal a new game
  quit"""


class CommandLineInterface(Interface):

    def __init__(self, step_delay: float = 0.0):
        super().__init__()
        self.step_delay = step_delay

    def print_all(self):
        board = self.game.board
        waste = board.waste_top.game_str() if board.waste_top else "   "
        foundations = "  ".join(f[-1].game_str() if f else "[ ]" for f in board.foundations)
        print(f"Moves: {board.moves}    Stock: {len(board.stock)}    Waste: {waste}    Foundations: {foundations}")
        print("----0-----1-----2-----3-----4-----5-----6---")
        i = 0
        while True:
            has = False
            line = ""
            for column in board.tableau:
                if len(column) <= i:
                    line += "      "
                    continue
                has = True
                line += column[i].game_str() + "   "
            if not has:
                break
            print(line.rstrip())
            i += 1
        if self.game.can_auto_solve():
            print("(auto-solve available: type 'solve')")
        print()

    def on_start(self):
        print("Game started!")
        self.notify_redraw()

    def on_event(self, event):
        if not self.game.solving:
            self.notify_redraw()

    def notify_redraw(self):
        self.print_all()

    def on_win(self):
        print(f"You win in {self.game.board.moves} moves!")

    def replay_plan(self):
        if self.game.begin_auto_solve() is None:
            print("Cannot auto-solve yet!")
            return
        while self.game.step_auto_solve():
            if self.step_delay > 0:
                time.sleep(self.step_delay)
        self.notify_redraw()


def _parse_target(text: str):
    kind, idx = text[0].lower(), int(text[1:])
    if kind not in ("f", "t"):
        raise ValueError(f"bad target: {text!r}")
    return kind, idx


def handle_command(game: Game, ui: CommandLineInterface, command: str) -> bool:
    """Run one command line. Returns False when the player quits."""
    parts = command.split()
    if not parts:
        return True
    name = parts[0].lower()
    if name == "quit":
        return False
    if name == "draw":
        game.ask_draw()
    elif name in ("mv", "auto"):
        try:
            card_id = parse_card_id(parts[1])
            target = _parse_target(parts[2]) if name == "mv" else None
        except (IndexError, ValueError):
            print("Invalid card or target!")
            return True
        if target is None:
            ok = game.ask_auto_move(card_id)
        elif target[0] == "f":
            ok = game.ask_foundation_move(card_id, target[1])
        else:
            ok = game.ask_tableau_move(card_id, target[1])
        if not ok:
            print("Cannot move!")
    elif name == "undo":
        if not game.ask_undo():
            print("Cannot undo!")
    elif name == "solve":
        ui.replay_plan()
    elif name == "instant":
        if not game.solve_instantly():
            print("Cannot solve yet!")
    elif name == "new":
        game.new_game()
    elif name == "help":
        print(HELP)
    else:
        print("Invalid command! Type 'help' for the list.")
    return True


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play Klondike in the terminal.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible deal.")
    parser.add_argument("--mobile", action="store_true", help="Use the tap-based rule variant.")
    parser.add_argument("--step-delay", type=float, default=0.2, help="Seconds between auto-solve steps.")
    parser.add_argument("--verbose", action="store_true", help="Log engine decisions.")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    rules = RuleConfig.mobile() if args.mobile else settings_store.load_rule_config()
    game = Game(rules)
    ui = CommandLineInterface(step_delay=args.step_delay)
    game.register_interface(ui)
    game.new_game(args.seed)
    print(HELP)
    while True:
        try:
            command = input("> ")
        except EOFError:
            break
        if not handle_command(game, ui, command):
            break


if __name__ == '__main__':
    main()
