"""
Unit tests for ChainGameController.

Tests that the game controller correctly handles:
- Game ending in headless mode and the max_games limit
- Transcript and notation logging, and replaying those logs
- Partial replay continuing with configured players
- Anomaly and degenerate-elimination diagnostics
"""

import os
import sys
import tempfile
from io import StringIO
from pathlib import Path
from unittest.mock import Mock, patch

import numpy as np
import pytest

# Add parent directory to path to import game modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from controller.chain_game_controller import ChainGameController
from controller.game_loop import GameLoop, _LoopTask
from factory.chain_factory import ChainFactory
from game.player_config import PlayerConfig


@pytest.fixture
def temp_dir():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def output_lines():
    """Capture print output as a list of lines."""
    lines = []

    def capture_print(*args, **kwargs):
        text = " ".join(str(arg) for arg in args)
        stream = kwargs.get("file")
        if stream is None:
            lines.append(text)
        else:
            stream.write(text + "\n")

    with patch("builtins.print", side_effect=capture_print):
        yield lines


def write_file(directory, name, content):
    path = os.path.join(directory, name)
    with open(path, "w") as f:
        f.write(content)
    return path


# ============================================================================
# Headless play
# ============================================================================


class TestGameControllerHeadless:
    def test_single_game(self, output_lines):
        controller = ChainGameController(rows=4, cols=4, seed=12345, max_games=1)
        controller.run()

        game = controller.session.game
        assert controller.session.get_games_played() == 1
        assert game.get_game_ended() in (1, 2)
        assert any(line.startswith(f"Winner: Player {game.winner}") for line in output_lines)
        assert "Completed 1 game(s)" in output_lines

    def test_max_games_and_statistics(self, output_lines):
        controller = ChainGameController(
            rows=3, cols=3, seed=7, max_games=3, track_statistics=True
        )
        controller.run()

        assert controller.session.get_games_played() == 3
        assert sum(controller.win_stats.values()) == 3
        assert len(controller.move_stats) == 3

        controller.print_statistics()
        assert "STATISTICS" in output_lines
        assert "Games played: 3" in output_lines

    def test_statistics_disabled(self, output_lines):
        controller = ChainGameController(rows=3, cols=3, seed=7, max_games=1)
        controller.run()
        controller.print_statistics()
        assert "STATISTICS" not in output_lines

    def test_four_player_game(self, output_lines):
        configs = [
            PlayerConfig.heuristic(),
            PlayerConfig.random(),
            PlayerConfig.heuristic(top_k=1, jitter=0),
            PlayerConfig.random(),
        ]
        controller = ChainGameController(
            rows=5, cols=5, seed=3, max_games=1, player_configs=configs
        )
        controller.run()
        assert controller.session.roster == (1, 2, 3, 4)
        assert controller.session.game.get_game_ended() in (1, 2, 3, 4)

    def test_rejects_bad_renderer(self):
        with pytest.raises(TypeError):
            ChainGameController(rows=3, cols=3, seed=1, renderer_or_factory=42)


# ============================================================================
# Turn handling
# ============================================================================


class TestTurnHandling:
    def test_waits_for_human_input(self, output_lines):
        configs = [PlayerConfig.human(), PlayerConfig.heuristic()]
        controller = ChainGameController(rows=3, cols=3, seed=1, player_configs=configs)
        task = _LoopTask(delay_time=0.0)

        assert controller.update_game(task) is task.again
        assert controller.session.game.moves_made == 0

        controller.session.get_current_player().submit_action((1, 1))
        assert controller.update_game(task) is task.again
        assert controller.session.game.moves_made == 1

    def test_prompted_human(self, output_lines):
        configs = [PlayerConfig.human(), PlayerConfig.heuristic()]
        prompt = Mock(side_effect=["b2"])
        controller = ChainGameController(
            rows=3, cols=3, seed=1, player_configs=configs, prompt=prompt
        )
        controller.update_game(_LoopTask(delay_time=0.0))
        assert controller.session.game.board.cell_at(1, 1).owner == 1

    def test_player_without_move_stops_game(self, output_lines):
        controller = ChainGameController(rows=3, cols=3, seed=1)
        controller.session.get_current_player().get_action = Mock(return_value=None)
        task = _LoopTask(delay_time=0.0)

        assert controller.update_game(task) is task.done
        assert any("no legal placement" in line for line in output_lines)

    def test_anomaly_and_degenerate_diagnostics(self, output_lines):
        controller = ChainGameController(rows=3, cols=3, seed=1)
        result = Mock()
        result.has_anomaly.return_value = True
        result.anomaly.describe.return_value = "Cascade anomaly: explosion limit 5 reached"
        result.degenerate = True
        result.move_number = 9
        result.winner = 1

        controller._report_diagnostics(result)

        assert controller.anomaly_count == 1
        assert "Cascade anomaly: explosion limit 5 reached" in output_lines
        assert any(line.startswith("Diagnostic:") for line in output_lines)

    def test_next_turn_waits_for_renderer_completion(self, output_lines):
        class DeferredRenderer:
            def __init__(self):
                self.pending = []

            def run(self):
                pass

            def reset_board(self):
                pass

            def execute_action(self, player, render_data, action_result, move_duration, on_complete):
                self.pending.append((on_complete, player, action_result))

            def attach_update_loop(self, update_fn, interval):
                return False

            def report_status(self, message):
                pass

        renderer = DeferredRenderer()
        controller = ChainGameController(rows=3, cols=3, seed=4, renderer_or_factory=renderer)
        task = _LoopTask(delay_time=0.0)

        assert controller.update_game(task) is task.again
        assert controller.update_game(task) is task.again
        assert controller.session.game.moves_made == 1
        assert controller.waiting_for_renderer

        on_complete, player, action_result = renderer.pending.pop()
        assert player.n == 1
        assert action_result.move_number == 1
        on_complete(player, action_result)

        assert not controller.waiting_for_renderer
        controller.update_game(task)
        assert controller.session.game.moves_made == 2

    def test_explosion_limit_reaches_engine(self, output_lines):
        controller = ChainGameController(rows=3, cols=3, seed=1, max_explosions=5)
        assert controller.session.game.config.max_explosions == 5


# ============================================================================
# Logging and replay
# ============================================================================


class TestLoggingAndReplay:
    def test_transcript_replay_reproduces_game(self, temp_dir, output_lines):
        original = ChainGameController(
            rows=4, cols=4, seed=2024, max_games=1, log_to_file=temp_dir
        )
        original.run()
        path = os.path.join(temp_dir, "chainlog_2024.txt")
        assert os.path.exists(path)

        replay = ChainGameController(replay_file=path)
        replay.run()

        assert (replay.session.rows, replay.session.cols) == (4, 4)
        assert replay.session.is_replay_mode()
        assert np.array_equal(replay.session.game.board.state[0], original.session.game.board.state[0])
        assert replay.session.game.winner == original.session.game.winner
        assert replay.session.get_player_names() == original.session.get_player_names()
        assert "Replay complete" in output_lines

    def test_notation_replay_reproduces_game(self, temp_dir, output_lines):
        original = ChainGameController(
            rows=4, cols=4, seed=77, max_games=1, log_notation_to_file=temp_dir
        )
        original.run()
        path = os.path.join(temp_dir, "chainlog_77_notation.txt")

        assert ChainGameController._detect_file_format(path) == "notation"
        replay = ChainGameController(replay_file=path)
        replay.run()

        assert replay.session.game.moves_made == original.session.game.moves_made
        assert replay.session.game.winner == original.session.game.winner

    def test_one_file_per_game(self, temp_dir, output_lines):
        controller = ChainGameController(
            rows=3, cols=3, seed=5, max_games=2, log_to_file=temp_dir
        )
        controller.run()
        assert len([name for name in os.listdir(temp_dir) if name.startswith("chainlog_")]) == 2

    def test_incomplete_replay_stops(self, temp_dir, output_lines):
        path = write_file(temp_dir, "short.txt", "3x3\na1\nc3\n")
        controller = ChainGameController(replay_file=path)
        controller.run()

        assert controller.session.game.moves_made == 2
        assert controller.session.game.get_game_ended() is None
        assert "Replay finished" in output_lines

    def test_partial_replay_continues(self, temp_dir, output_lines):
        path = write_file(temp_dir, "short.txt", "3x3\na1\nc3\n")
        configs = [PlayerConfig.heuristic(seed=1), PlayerConfig.heuristic(seed=2)]
        controller = ChainGameController(
            replay_file=path, partial_replay=True, player_configs=configs
        )
        GameLoop(controller, max_ticks=500).run()

        assert controller.session.game.moves_made > 2
        assert controller.session.game.get_game_ended() in (1, 2)
        assert not controller.session.is_replay_mode()
        assert controller.session.get_games_played() == 1
        assert "Replay complete" in output_lines

    def test_replay_uses_recorded_explosion_limit(self, temp_dir, output_lines):
        # Under the default limit player 1 wins on move 4 and the file would not load
        path = write_file(
            temp_dir,
            "limited.txt",
            "2x2\n# Max explosions: 1\n# Player 1: A\n# Player 2: B\n# Player 3: C\n"
            "a1\nb2\nb1\na1!\nb2!\n",
        )
        controller = ChainGameController(replay_file=path)
        controller.run()

        assert controller.session.max_explosions == 1
        assert controller.session.game.config.max_explosions == 1
        assert controller.session.game.moves_made == 5
        assert controller.session.game.winner == 1
        assert controller.anomaly_count == 2
        assert "Replay complete" in output_lines

    def test_logged_explosion_limit_round_trips(self, temp_dir, output_lines):
        original = ChainGameController(
            rows=3, cols=3, seed=31, max_games=1, max_explosions=3,
            log_to_file=temp_dir, log_notation_to_file=temp_dir,
        )
        original.run()

        for name in ("chainlog_31.txt", "chainlog_31_notation.txt"):
            path = os.path.join(temp_dir, name)
            with open(path) as f:
                assert "# Max explosions: 3\n" in f.read()
            replay = ChainGameController(replay_file=path)
            replay.run()
            assert replay.session.max_explosions == 3
            assert replay.session.game.moves_made == original.session.game.moves_made
            assert replay.session.game.winner == original.session.game.winner


# ============================================================================
# Factory and renderer
# ============================================================================


class TestFactory:
    def test_text_renderer_output(self, output_lines):
        stream = StringIO()
        controller = ChainFactory(text_stream=stream).create_controller(
            rows=3, cols=3, seed=9, max_games=1, show_board=True
        )
        controller.run()

        text = stream.getvalue()
        assert "Player 1 (RED) places at" in text
        assert "explodes ->" in text
        assert controller.renderer is not None

    def test_headless_by_default(self, output_lines):
        controller = ChainFactory().create_controller(rows=3, cols=3, seed=9, max_games=1)
        assert controller.renderer is None
