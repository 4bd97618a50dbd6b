"""Players."""

from .chain_player import ChainPlayer
from .heuristic_chain_player import HeuristicChainPlayer
from .human_chain_player import HumanChainPlayer
from .random_chain_player import RandomChainPlayer
from .replay_chain_player import ReplayChainPlayer

__all__ = [
    "ChainPlayer",
    "HeuristicChainPlayer",
    "HumanChainPlayer",
    "RandomChainPlayer",
    "ReplayChainPlayer",
]
