#!/usr/bin/env python3
"""
Adaptive Reversi - console driver.

Play Reversi against an engine that tries to match your level: every move you
make is scored against the alternatives and folded into a running estimate of
your skill, and the engine picks its replies to match that estimate.

    python main.py                  # choose a color interactively
    python main.py --color light    # computer opens
    python main.py --auto           # a greedy bot plays the human side
"""

import argparse
import logging
import queue
import sys
import time

from board import render
from config import load_config
from constants import DARK, LIGHT, color_name, from_notation, to_notation
from reversi import Outcome, Reversi
from worker import ThinkWorker


class ConsoleGame:
    """Text-mode stand-in for the windowed UI: one game, one worker thread."""

    def __init__(self, game, worker=None, delay=1.0, auto=False, input_fn=input, output=print):
        self.game = game
        self.worker = worker or ThinkWorker()
        self.delay = delay
        self.auto = auto
        self.input = input_fn
        self.out = output

    def _wait_for(self, start):
        """Run a background step and block until its callback reports back."""
        results = queue.Queue()
        start(lambda result, error: results.put((result, error)))
        result, error = results.get()
        if error is not None:
            raise error
        return result

    def _show(self):
        dark, light = self.game.piece_counts()
        self.out(render(self.game.grid))
        self.out(f"Dark: {dark}  Light: {light}  (skill estimate {self.game.skill_estimate:.3f})")

    def _human_move(self):
        if self.auto:
            square, _ = self.game.scored_moves()[0]
            self.game.play(*square)
            self.out(f"Auto plays {to_notation(*square)}")
            return True
        while True:
            try:
                text = self.input("Your move (e.g. d3, ? for hints, q to quit): ")
            except EOFError:
                return False
            text = text.strip().lower()
            if text in ("q", "quit", "exit"):
                return False
            if text == "?":
                self.out("Legal: " + " ".join(to_notation(r, c) for r, c in self.game.legal_moves()))
                continue
            try:
                row, col = from_notation(text)
            except ValueError:
                self.out("Type a square like d3.")
                continue
            if self.game.play(row, col):
                return True
            self.out("Illegal move.")

    def run(self, human_color):
        """Play until the game ends (returns the final ThinkResult) or the human quits (None)."""
        self.game.set_human_color(human_color)
        self._wait_for(lambda cb: self.worker.init(self.game, cb))
        self.out(f"New game with human as {color_name(human_color)}.")
        self._show()

        human_turn = human_color == DARK
        while True:
            if human_turn:
                if not self._human_move():
                    self.out("Bye.")
                    return None
            else:
                time.sleep(self.delay)
                played = self.game.computer_play()
                if played is None:
                    self.out("Computer cannot move.")
                    return None
                self.out(f"Computer plays {to_notation(*played)}")
            result = self._wait_for(lambda cb: self.worker.think(self.game, cb))
            self._show()

            if result.outcome is Outcome.ENDED:
                self.out(f"The game is over.      Dark's score: {result.dark}      "
                         f"Light's score: {result.light}")
                return result
            if result.outcome is Outcome.SKIPPED:
                if human_turn:
                    self.out("I have no legal moves.  Go again.")
                else:
                    self.out("You have no legal moves.  I will go again.")
            else:
                human_turn = not human_turn


def _ask_color(input_fn=input):
    answer = input_fn("Play as [d]ark (moves first) or [l]ight? ").strip().lower()
    return LIGHT if answer.startswith("l") else DARK


def main(argv=None):
    parser = argparse.ArgumentParser(description="Reversi against a skill-matching engine")
    parser.add_argument("--config", default="config.json", help="JSON config file (optional)")
    parser.add_argument("--color", choices=["dark", "light"], help="your color; asked if omitted")
    parser.add_argument("--auto", action="store_true", help="let a greedy bot play the human side")
    parser.add_argument("--alpha", type=float, help="smoothing factor of the skill estimate (0-1)")
    args = parser.parse_args(argv)

    cfg = load_config(args.config)
    if args.alpha is not None:
        cfg["alpha"] = args.alpha
    logging.basicConfig(level=getattr(logging, str(cfg["log_level"]).upper(), logging.INFO),
                        format='[%(asctime)s] %(message)s', datefmt='%H:%M:%S')

    try:
        game = Reversi(log=print, config=cfg)
    except ValueError as e:
        parser.error(str(e))

    if args.color:
        human = DARK if args.color == "dark" else LIGHT
    elif args.auto:
        human = DARK
    else:
        human = _ask_color()

    console = ConsoleGame(game, delay=0.0 if args.auto else float(cfg["computer_delay"]), auto=args.auto)
    try:
        console.run(human)
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
