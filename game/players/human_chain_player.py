from __future__ import annotations

import queue
from typing import Callable, Optional

from game.chain_game import ChainGame
from game.players.chain_player import ChainPlayer


class HumanChainPlayer(ChainPlayer):
    """Player driven by an input source.

    Moves arrive either through submit_action (e.g. from a renderer click
    handler) or, when a prompt callable is given, by reading coordinates such
    as "c5" from it until a legal one is entered.
    """

    def __init__(self, game: ChainGame, n, prompt: Optional[Callable[[str], str]] = None,
                 status_reporter: Optional[Callable[[str], None]] = None):
        super().__init__(game, n)
        self._action_queue: queue.Queue = queue.Queue()
        self._prompt = prompt
        self._status_reporter = status_reporter
        self.name = f"Human {n}"

    def get_action(self):
        if self._prompt is None or not self._action_queue.empty():
            return self._action_queue.get()
        return self._read_action()

    def _read_action(self):
        while True:
            text = self._prompt(f"{self.name} move (e.g. c5): ")
            try:
                row, col = self.game.str_to_action(text)
            except ValueError as e:
                self._report(str(e))
                continue
            if not self.game.board.validate_placement(row, col, self.n):
                self._report(f"Cell {text.strip()} belongs to another player")
                continue
            return row, col

    def submit_action(self, action):
        self._action_queue.put(action)

    def pending_actions_empty(self):
        return self._prompt is None and self._action_queue.empty()

    def cancel_pending_action(self):
        while not self._action_queue.empty():
            self._action_queue.get_nowait()

    def _report(self, message):
        if self._status_reporter is not None:
            self._status_reporter(message)
        else:
            print(message)
