from __future__ import annotations

from game.chain_game import ChainGame
from game.players.chain_player import ChainPlayer


class ReplayChainPlayer(ChainPlayer):
    """Player that replays moves from a list of action dictionaries."""

    def __init__(self, game: ChainGame, n, actions):
        super().__init__(game, n)
        self.actions = actions
        self.action_index = 0

    def get_action(self):
        """Return the next action from the replay list."""
        if self.action_index >= len(self.actions):
            raise ValueError(f"No more actions for player {self.n}")

        action_dict = self.actions[self.action_index]
        self.action_index += 1

        if action_dict.get("action") != "PUT":
            raise ValueError(f"Unknown action type: {action_dict.get('action')}")
        return self.game.str_to_action(action_dict["pos"])
