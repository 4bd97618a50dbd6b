"""Controller module for Chain Reaction.

Contains the game controller, session, logger and loop.
"""

from controller.chain_game_controller import ChainGameController

__all__ = ["ChainGameController"]
