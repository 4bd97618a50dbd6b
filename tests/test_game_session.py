"""Tests for GameSession functionality."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add parent directory to path to import modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from controller.game_session import GameSession
from game.player_config import PlayerConfig
from game.players import (
    HeuristicChainPlayer,
    HumanChainPlayer,
    RandomChainPlayer,
    ReplayChainPlayer,
)


def quiet(message):
    pass


def play_out(session, limit=500):
    """Drive the current game to completion, returning the placements made."""
    moves = []
    game = session.game
    while game.get_game_ended() is None and len(moves) < limit:
        move = session.get_current_player().get_action()
        moves.append(move)
        game.take_action(*move)
    return moves


class TestGameSession:
    """Test suite for GameSession class."""

    def test_default_initialization(self):
        session = GameSession(seed=1, status_reporter=quiet)

        assert (session.rows, session.cols) == (9, 6)
        assert session.roster == (1, 2)
        assert all(isinstance(p, HeuristicChainPlayer) for p in session.players.values())
        assert session.games_played == 0
        assert not session.is_replay_mode()
        assert session.get_current_player() is session.players[1]

    def test_custom_grid(self):
        session = GameSession(rows=4, cols=5, max_explosions=50, seed=1, status_reporter=quiet)
        assert session.game.board.rows == 4
        assert session.game.board.cols == 5
        assert session.game.config.max_explosions == 50

    def test_roster_skips_off_seats(self):
        configs = [
            PlayerConfig.heuristic(),
            PlayerConfig.off(),
            PlayerConfig.random(),
            PlayerConfig.human(name="Ann"),
        ]
        session = GameSession(seed=1, player_configs=configs, status_reporter=quiet)

        assert session.roster == (1, 3, 4)
        assert isinstance(session.players[3], RandomChainPlayer)
        assert isinstance(session.players[4], HumanChainPlayer)
        assert session.get_player_names()[4] == "Ann"
        assert 2 not in session.players

    def test_requires_two_active_players(self):
        with pytest.raises(ValueError, match="At least 2 active players"):
            GameSession(player_configs=[PlayerConfig.heuristic(), PlayerConfig.off()])

    def test_rejects_more_than_four_seats(self):
        with pytest.raises(ValueError, match="At most 4"):
            GameSession(player_configs=[PlayerConfig.heuristic()] * 5)

    def test_status_reporter_receives_seed(self):
        messages = []
        GameSession(seed=42, status_reporter=messages.append)
        assert "-- Setting Seed: 42" in messages

    def test_seed_applied_to_numpy(self):
        GameSession(seed=42, status_reporter=quiet)
        first = np.random.rand()
        GameSession(seed=42, status_reporter=quiet)
        assert np.random.rand() == first


class TestSeeding:
    def test_same_seed_same_game(self):
        first = GameSession(rows=4, cols=4, seed=123, status_reporter=quiet)
        second = GameSession(rows=4, cols=4, seed=123, status_reporter=quiet)
        assert play_out(first) == play_out(second)

    def test_explicit_player_seed_wins(self):
        configs = [PlayerConfig.heuristic(seed=5), PlayerConfig.random(seed=6)]
        session = GameSession(seed=1, player_configs=configs, status_reporter=quiet)
        assert session.players[1].rng_seed == 5

    def test_reset_advances_seed(self):
        session = GameSession(rows=3, cols=3, seed=123, status_reporter=quiet)
        first_seed = session.get_seed()
        first_game = session.game
        session.reset_game()

        assert session.get_seed() != first_seed
        assert 0 <= session.get_seed() < 2**32
        assert session.game is not first_game

    def test_seed_sequence_is_deterministic(self):
        a = GameSession(rows=3, cols=3, seed=5, status_reporter=quiet)
        b = GameSession(rows=3, cols=3, seed=5, status_reporter=quiet)
        a.reset_game()
        b.reset_game()
        assert a.get_seed() == b.get_seed()

    def test_games_played_counter(self):
        session = GameSession(rows=3, cols=3, seed=5, status_reporter=quiet)
        session.increment_games_played()
        assert session.get_games_played() == 1


class TestReplayMode:
    @pytest.fixture
    def replay_actions(self):
        return {
            1: [{"action": "PUT", "pos": "a1"}, {"action": "PUT", "pos": "a1"}],
            2: [{"action": "PUT", "pos": "a2"}],
        }

    def test_replay_players(self, replay_actions):
        session = GameSession(rows=3, cols=3, replay_actions=replay_actions, status_reporter=quiet)
        assert session.is_replay_mode()
        assert session.get_seed() is None
        assert all(isinstance(p, ReplayChainPlayer) for p in session.players.values())

        play_out(session)
        assert session.game.get_game_ended() == 1

    def test_replay_uses_recorded_roster(self):
        actions = {1: [], 3: [], 4: []}
        session = GameSession(rows=3, cols=3, replay_actions=actions, status_reporter=quiet)
        assert session.roster == (1, 3, 4)

    def test_switch_requires_partial_replay(self, replay_actions):
        session = GameSession(rows=3, cols=3, replay_actions=replay_actions, status_reporter=quiet)
        with pytest.raises(ValueError, match="partial_replay is False"):
            session.switch_to_configured_play()

    def test_switch_to_configured_play(self, replay_actions):
        session = GameSession(
            rows=3,
            cols=3,
            replay_actions=replay_actions,
            partial_replay=True,
            player_configs=[PlayerConfig.random(seed=1), PlayerConfig.off()],
            status_reporter=quiet,
        )
        session.game.take_action(0, 0)
        player = session.switch_to_configured_play()

        assert not session.is_replay_mode()
        assert player is session.players[2]
        assert isinstance(session.players[1], RandomChainPlayer)
        # Seat 2 is off in the configs, so it continues as a heuristic player
        assert isinstance(session.players[2], HeuristicChainPlayer)
        assert session.game.moves_made == 1
