from __future__ import annotations

import numpy as np

from game.chain_game import ChainGame
from game.constants import DEFAULT_JITTER, DEFAULT_TOP_K
from game.heuristic import find_best_move
from game.players.chain_player import ChainPlayer


class HeuristicChainPlayer(ChainPlayer):
    """Computer player that picks among the best-scoring placements.

    Scores favour loaded cells, corners and attacks on opponents, and
    penalise cells next to loaded opponent cells (see game.heuristic).
    """

    def __init__(self, game: ChainGame, n, top_k=DEFAULT_TOP_K, jitter=DEFAULT_JITTER, rng_seed=None):
        """Initialize heuristic player.

        Args:
            game: ChainGame instance
            n: Player id (1-4)
            top_k: Choose uniformly among this many best moves (default: 3)
            jitter: Upper bound of uniform noise added to each score (default: 3.0)
            rng_seed: Optional integer seed for reproducible play
        """
        super().__init__(game, n)
        self.top_k = top_k
        self.jitter = jitter
        self.rng_seed = rng_seed
        self.rng = np.random.default_rng(rng_seed)
        self.name = f"Heuristic {n}"

    def get_action(self):
        """Select a placement using the move heuristic.

        Returns:
            (row, col), or None when no placement is legal
        """
        state = self.game.board.state
        return find_best_move(state, self.n, self.game.config, self.rng, self.top_k, self.jitter)
