from __future__ import annotations

from game.chain_game import ChainGame


class ChainPlayer:
    """Base player with shared state and lifecycle hooks."""

    def __init__(self, game: ChainGame, n):
        self.game = game
        self.n = n
        self.name = f"Player {n}"

    def get_action(self):
        """Return the (row, col) to place on, or None if no placement is possible."""
        raise NotImplementedError

    #
    # Lifecycle hooks
    #
    def on_turn_start(self) -> None:
        """Inform the player that it is about to be asked for a move."""
        return None

    def clear_context(self) -> None:
        """Signal that the current decision is complete."""
        return None
