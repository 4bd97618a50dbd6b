"""Game session management for Chain Reaction.

Manages a single game's lifecycle including grid state, players, and seed management.
"""

import hashlib
import random
import time
from typing import Callable

import numpy as np

from game.chain_game import ChainGame
from game.constants import (
    GRID_COLS,
    GRID_ROWS,
    MAX_EXPLOSIONS_PER_TURN,
    MAX_PLAYERS,
    MIN_SESSION_PLAYERS,
)
from game.player_config import PlayerConfig
from game.players import (
    HeuristicChainPlayer,
    HumanChainPlayer,
    RandomChainPlayer,
    ReplayChainPlayer,
)


class GameSession:
    """Manages a single game's lifecycle (grid state, players, current game)."""

    def __init__(
        self,
        rows=GRID_ROWS,
        cols=GRID_COLS,
        max_explosions=MAX_EXPLOSIONS_PER_TURN,
        seed=None,
        replay_actions=None,
        partial_replay=False,
        status_reporter: Callable[[str], None] | None = None,
        player_configs: list[PlayerConfig] | None = None,
        prompt: Callable[[str], str] | None = None,
    ):
        """Initialize a game session.

        Args:
            rows, cols: Grid dimensions
            max_explosions: Cascade safety bound per placement
            seed: Random seed for reproducibility (auto-generated if None)
            replay_actions: Dict of player id -> action list for replay mode
            partial_replay: If True, continue with configured play after replay ends
            status_reporter: Optional callback for status messages
            player_configs: Configurations for seats 1-4 (default: two heuristic players)
            prompt: Input callable handed to human players
        """
        self.rows = rows
        self.cols = cols
        self.max_explosions = max_explosions
        self._status_reporter: Callable[[str], None] | None = status_reporter
        self._prompt = prompt

        if player_configs is None:
            player_configs = [PlayerConfig.heuristic(), PlayerConfig.heuristic()]
        if len(player_configs) > MAX_PLAYERS:
            raise ValueError(f"At most {MAX_PLAYERS} seats are supported, got {len(player_configs)}")
        self.player_configs = {n: cfg for n, cfg in enumerate(player_configs, start=1)}

        # Replay mode setup
        self.replay_mode = replay_actions is not None
        self.partial_replay = partial_replay
        self.replay_actions = replay_actions

        if self.replay_mode:
            self.roster = tuple(sorted(replay_actions))
        else:
            self.roster = tuple(n for n, cfg in self.player_configs.items() if cfg.is_active)
            if len(self.roster) < MIN_SESSION_PLAYERS:
                raise ValueError(
                    f"At least {MIN_SESSION_PLAYERS} active players are required, got {len(self.roster)}"
                )

        # Seed management
        self.current_seed = None
        if not self.replay_mode:
            if seed is None:
                seed = int(time.time())
            self.current_seed = seed
            self._apply_seed(seed)

        # Game state
        self.game = None
        self.players = {}
        self.games_played = 0

        # Initialize first game
        self.reset_game()

    def _apply_seed(self, seed):
        """Apply a seed to both global random number generators."""
        self._report(f"-- Setting Seed: {seed}")
        np.random.seed(seed)
        random.seed(seed)

    def _generate_next_seed(self):
        """Generate the next seed deterministically from the current seed using hash.

        Returns:
            int: New seed value
        """
        hash_obj = hashlib.sha256(str(self.current_seed).encode())
        new_seed = int.from_bytes(hash_obj.digest()[:8], byteorder="big")
        return new_seed % (2**32)

    def _player_seed(self, player_num: int, config: PlayerConfig):
        # Unseeded players follow the session seed so a seeded session replays exactly
        if config.rng_seed is not None:
            return config.rng_seed
        if self.current_seed is None:
            return None
        return (self.current_seed + player_num) % (2**32)

    def _create_player_from_config(self, player_num: int, config: PlayerConfig):
        """Create a player from a PlayerConfig.

        Args:
            player_num: Player id (1-4)
            config: PlayerConfig describing player type and parameters

        Returns:
            ChainPlayer: Configured player instance with name set from config
        """
        if config.player_type == "human":
            player = HumanChainPlayer(
                self.game, player_num, prompt=self._prompt, status_reporter=self._report
            )
        elif config.player_type == "random":
            player = RandomChainPlayer(
                self.game, player_num, rng_seed=self._player_seed(player_num, config)
            )
        elif config.player_type == "heuristic":
            player = HeuristicChainPlayer(
                self.game,
                player_num,
                top_k=config.top_k,
                jitter=config.jitter,
                rng_seed=self._player_seed(player_num, config),
            )
        else:
            raise ValueError(f"Unknown player type: {config.player_type}")

        if config.name is not None:
            player.name = config.name

        return player

    def _config_for(self, player_num: int) -> PlayerConfig:
        config = self.player_configs.get(player_num)
        if config is None or not config.is_active:
            return PlayerConfig.heuristic()
        return config

    def reset_game(self):
        """Reset the game state for a new game.

        This creates a new game instance and players.
        """
        self._report(f"** New game ({self.rows}x{self.cols}, {len(self.roster)} players) **")

        # Generate new seed for non-replay games (only after the first game)
        if not self.replay_mode and self.current_seed is not None and self.game is not None:
            self.current_seed = self._generate_next_seed()
            self._apply_seed(self.current_seed)

        self.game = ChainGame(self.rows, self.cols, self.roster, self.max_explosions)

        if self.replay_mode:
            self._report("-- Replay Mode --")
            self.players = {}
            for n in self.roster:
                player = ReplayChainPlayer(self.game, n, self.replay_actions[n])
                config = self.player_configs.get(n)
                if config is not None and config.name:
                    player.name = config.name
                self.players[n] = player
        else:
            self.players = {
                n: self._create_player_from_config(n, self.player_configs[n]) for n in self.roster
            }

    def get_current_player(self):
        """Get the player whose turn it is."""
        return self.players[self.game.current_player]

    def get_player_names(self) -> dict[int, str]:
        return {n: player.name for n, player in self.players.items()}

    def switch_to_configured_play(self):
        """Switch from replay mode to configured play (for partial replay).

        Returns:
            ChainPlayer: The new current player
        """
        if not self.partial_replay:
            raise ValueError("Cannot switch to configured play when partial_replay is False")

        self._report("Replay finished - continuing with configured play")
        names = self.get_player_names()
        self.players = {
            n: self._create_player_from_config(n, self._config_for(n)) for n in self.roster
        }
        for n, player in self.players.items():
            if self.player_configs.get(n) is None or self.player_configs[n].name is None:
                player.name = names[n]
        self.replay_mode = False
        return self.get_current_player()

    def increment_games_played(self):
        self.games_played += 1

    def get_seed(self):
        return self.current_seed

    def is_replay_mode(self):
        return self.replay_mode

    def is_partial_replay(self):
        return self.partial_replay

    def get_games_played(self):
        return self.games_played

    def set_status_reporter(self, reporter: Callable[[str], None] | None) -> None:
        """Set or update the status reporter callback."""
        self._status_reporter = reporter

    def _report(self, message: str | None) -> None:
        if message is None:
            return
        if self._status_reporter is not None:
            self._status_reporter(message)
        else:
            print(message)
