"""Game controller for Chain Reaction.

Manages game loop, player actions, renderer updates, and game state.
"""

from __future__ import annotations

import statistics
import time

from controller.game_logger import GameLogger
from controller.game_loop import GameLoop
from controller.game_session import GameSession
from game.constants import GRID_COLS, GRID_ROWS, MAX_EXPLOSIONS_PER_TURN, PLAYER_NAMES
from game.loaders import NotationLoader, TranscriptLoader
from game.loaders.base_loader import ReplayLoader
from game.player_config import PlayerConfig
from shared.interfaces import IRenderer, IRendererFactory


class ChainGameController:

    @staticmethod
    def _detect_file_format(filepath: str) -> str:
        """Detect whether a file is transcript or notation format.

        Transcript files start with '#' comments or 'Player' lines; notation
        files start with the grid size (e.g. '9x6').

        Returns:
            "transcript" or "notation"
        """
        with open(filepath, "r") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                if line.startswith("#") or line.startswith("Player"):
                    return "transcript"
                if line[0].isdigit():
                    return "notation"
        return "transcript"

    def __init__(
        self,
        rows=GRID_ROWS,
        cols=GRID_COLS,
        max_explosions=MAX_EXPLOSIONS_PER_TURN,
        replay_file=None,
        seed=None,
        log_to_file: str | None = None,
        log_to_screen=False,
        log_notation_to_file: str | None = None,
        log_notation_to_screen=False,
        partial_replay=False,
        max_games=None,
        show_board=False,
        move_duration=0.0,
        renderer_or_factory: IRenderer | IRendererFactory | None = None,
        track_statistics=False,
        player_configs: list[PlayerConfig] | None = None,
        prompt=None,
    ):
        self.max_games = max_games  # None means play indefinitely
        self.show_board = show_board
        self.move_duration = move_duration

        # Statistics tracking
        self.track_statistics = track_statistics
        self.game_stats = []  # Game durations in seconds
        self.win_stats = {}  # Winner id -> games won
        self.move_stats = []  # Moves per game
        self.anomaly_count = 0
        self.current_game_start_time = None
        self.total_start_time = None

        self.renderer = None
        self.waiting_for_renderer = False
        self._game_ending_processed = False

        # Load replay first to detect grid size and roster
        replay_actions = None
        loader: ReplayLoader | None = None
        if replay_file is not None:
            if self._detect_file_format(replay_file) == "notation":
                loader = NotationLoader(replay_file, status_reporter=print)
            else:
                loader = TranscriptLoader(replay_file, status_reporter=print)

            replay_actions = loader.load()
            rows = loader.detected_rows
            cols = loader.detected_cols
            max_explosions = loader.detected_max_explosions
            player_configs = self._merge_replay_names(player_configs, loader.player_names)

        # A partial replay ends with its first game even after switching players
        self._from_replay = replay_actions is not None

        self.session = GameSession(
            rows=rows,
            cols=cols,
            max_explosions=max_explosions,
            seed=seed,
            replay_actions=replay_actions,
            partial_replay=partial_replay,
            status_reporter=print,
            player_configs=player_configs,
            prompt=prompt,
        )

        self.logger = GameLogger(
            session=self.session,
            transcript_dir=log_to_file,
            notation_dir=log_notation_to_file,
            log_to_screen=log_to_screen,
            log_notation_to_screen=log_notation_to_screen,
            status_reporter=self._report,
        )

        if isinstance(renderer_or_factory, IRenderer):
            self.renderer = renderer_or_factory
        elif isinstance(renderer_or_factory, IRendererFactory):
            self.renderer = renderer_or_factory(self)
        elif renderer_or_factory is not None:
            raise TypeError("renderer_or_factory must be an IRenderer, IRendererFactory, or None")

        self._game_loop = GameLoop(self, self.renderer, self.move_duration)

        # Route everything through the logger from here on
        self.logger.set_status_reporter(self._report)
        self.session.set_status_reporter(self._report)
        if loader is not None:
            loader.set_status_reporter(self._report)

        self._start_game_log()
        for filename in self.logger.get_log_filenames():
            self._report(f"Logging to: {filename}")

        if self.track_statistics:
            self.total_start_time = time.time()
            self.current_game_start_time = time.time()

    @staticmethod
    def _merge_replay_names(player_configs, player_names):
        # Seats listed in a replay file keep the names recorded there
        configs = list(player_configs or [])
        for n, name in player_names.items():
            while len(configs) < n:
                configs.append(PlayerConfig.off())
            config = configs[n - 1]
            if config.name is None:
                configs[n - 1] = PlayerConfig(
                    player_type=config.player_type if config.is_active else "heuristic",
                    top_k=config.top_k,
                    jitter=config.jitter,
                    rng_seed=config.rng_seed,
                    name=name,
                )
        return configs or None

    def _start_game_log(self):
        self.logger.start_log(
            self.session.get_seed(),
            self.session.rows,
            self.session.cols,
            self.session.get_player_names(),
            self.session.max_explosions,
        )

    def _close_log_file(self):
        """Write the footer with the final grid and close file writers."""
        self.logger.end_log(self.session.game)

    def run(self):
        self._game_loop.run()

    def _reset_board(self):
        """Reset the board for a new game."""
        self._close_log_file()
        self._game_ending_processed = False
        self.session.reset_game()

        if self.renderer is not None:
            self.renderer.reset_board()

        self._start_game_log()

        if self.track_statistics:
            self.current_game_start_time = time.time()

    def _get_player_action(self, player, task):
        """Ask player for a move, handling exhausted replays.

        Returns:
            (player, (row, col) or None), or (player, task.done) when replay stops
        """
        try:
            return player, player.get_action()
        except ValueError as e:
            if not self.session.is_replay_mode():
                raise
            self._report(f"Error getting action: {e}")
            if self.session.is_partial_replay():
                player = self.session.switch_to_configured_play()
                return player, player.get_action()
            self._report("Replay finished")
            self._close_log_file()
            return player, task.done

    def update_game(self, task):
        # Wait for renderer callback before continuing
        if self.waiting_for_renderer:
            return task.again

        status = self._check_game_status(task)
        if status is task.done:
            return task.done

        player = self.session.get_current_player()
        player.on_turn_start()

        if hasattr(player, "pending_actions_empty") and player.pending_actions_empty():
            return task.again

        player, action = self._get_player_action(player, task)
        if action is task.done:
            return task.done
        player.clear_context()

        if action is None:
            # Only reachable if the engine hands the turn to a player with no placement
            self._report(f"Player {player.n} has no legal placement; stopping game")
            self._close_log_file()
            return task.done

        row, col = action
        game = self.session.game
        _, action_dict = game.action_to_str(row, col)
        action_result = game.take_action(row, col)

        self.logger.log_action(player.n, action_dict, action_result)
        self._report_diagnostics(action_result)

        if self.renderer:
            render_data = game.get_render_data(action_result, include_board=self.show_board)
            self.waiting_for_renderer = True
            self.renderer.execute_action(
                player, render_data, action_result, self.move_duration, self._handle_action_completion
            )
            if self.waiting_for_renderer:
                return task.again

        return self._check_game_status(task)

    def _report_diagnostics(self, action_result):
        if action_result.has_anomaly():
            self.anomaly_count += 1
            self._report(action_result.anomaly.describe())
        if action_result.degenerate:
            self._report(
                f"Diagnostic: no competitor holds units after move {action_result.move_number}; "
                f"falling back to player {action_result.winner}"
            )

    def _handle_action_completion(self, player, action_result):
        """Renderer callback invoked when all visuals for an action are complete."""
        self.waiting_for_renderer = False

    def _check_game_status(self, task):
        """Check if game is over and handle the ending if needed.

        Returns:
            task.done if game should stop, task.again if game should continue
        """
        winner = self.session.game.get_game_ended()
        if winner is None:
            return task.again
        return self._handle_game_ending(winner, task)

    def _handle_game_ending(self, winner, task):
        """Report the winner, record statistics and start the next game if any.

        Idempotent for a given game so renderer callbacks cannot double count.

        Returns:
            task.done if should exit, task.again if should continue with next game
        """
        if self._game_ending_processed:
            return task.done
        self._game_ending_processed = True

        game = self.session.game
        name = self.session.players[winner].name
        self._report("")
        self._report(
            f"Winner: Player {winner} ({PLAYER_NAMES.get(winner, '?')}, {name}) "
            f"after {game.moves_made} moves"
        )

        if self.track_statistics and self.current_game_start_time is not None:
            self.game_stats.append(time.time() - self.current_game_start_time)
            self.win_stats[winner] = self.win_stats.get(winner, 0) + 1
            self.move_stats.append(game.moves_made)

        self.session.increment_games_played()

        if self._from_replay:
            self._report("Replay complete")
            self._close_log_file()
            return task.done
        if self.max_games is not None and self.session.get_games_played() >= self.max_games:
            self._report(f"Completed {self.session.get_games_played()} game(s)")
            self._close_log_file()
            return task.done

        self._reset_board()
        return task.again

    def _report(self, message: str | None) -> None:
        """Forward status messages to the logger.

        TranscriptWriters record them as comments; NotationWriters ignore them.
        With no writers configured the message goes to stdout.
        """
        if message is None:
            return
        text = str(message)
        if self.logger.writers:
            self.logger.log_comment(text)
        else:
            print(text)

    def print_statistics(self) -> None:
        """Print timing and per-player win statistics for all games played."""
        if not self.track_statistics or not self.game_stats:
            return

        total_time = time.time() - self.total_start_time if self.total_start_time else 0
        total_games = len(self.game_stats)
        mean_time = statistics.mean(self.game_stats)
        std_time = statistics.stdev(self.game_stats) if total_games > 1 else 0.0

        print("\n" + "=" * 60)
        print("STATISTICS")
        print("=" * 60)
        print(f"Games played: {total_games}")
        print()
        print("Wins:")
        for n in self.session.roster:
            wins = self.win_stats.get(n, 0)
            print(f"  Player {n} ({PLAYER_NAMES[n]}): {wins} ({wins / total_games * 100:.1f}%)")
        print()
        print("Moves per game:")
        print(f"  Mean: {statistics.mean(self.move_stats):.1f}")
        print(f"  Min: {min(self.move_stats)}")
        print(f"  Max: {max(self.move_stats)}")
        print(f"  Cascade anomalies: {self.anomaly_count}")
        print()
        print("Timing:")
        print(f"  Mean time per game: {mean_time:.3f}s")
        print(f"  Min time: {min(self.game_stats):.3f}s")
        print(f"  Max time: {max(self.game_stats):.3f}s")
        print(f"  Std deviation: {std_time:.3f}s")
        print(f"  Total execution time: {total_time:.3f}s")
        print("=" * 60)
