from __future__ import annotations

import numpy as np

from game.chain_game import ChainGame
from game.players.chain_player import ChainPlayer


class RandomChainPlayer(ChainPlayer):

    def __init__(self, game: ChainGame, n, rng_seed=None):
        super().__init__(game, n)
        self.rng = np.random.default_rng(rng_seed)
        self.name = f"Random {n}"

    def get_action(self):
        """Select a random legal placement, or None if there is none."""
        moves = np.argwhere(self.game.get_valid_actions(self.n))
        if moves.size == 0:
            return None
        r, c = moves[int(self.rng.integers(len(moves)))]
        return int(r), int(c)
