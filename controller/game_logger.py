"""Game logging for Chain Reaction.

Handles logging game actions and notation using pluggable writers.
"""

import os
import sys
from typing import Callable

from game.writers import GameWriter, NotationWriter, TranscriptWriter


class GameLogger:
    """Manages multiple game action writers.

    Supports several output formats and destinations at once (e.g. transcript
    to file, notation to screen). Owns the writer lifecycle including file
    creation, error handling and writer recreation for new games.
    """

    def __init__(
        self,
        session,
        transcript_dir: str | None = None,
        notation_dir: str | None = None,
        log_to_screen: bool = False,
        log_notation_to_screen: bool = False,
        status_reporter: Callable[[str], None] | None = None,
    ):
        """Initialize the game logger.

        Args:
            session: GameSession instance (for seed, grid size and replay mode)
            transcript_dir: Directory path for transcript log files (None to disable)
            notation_dir: Directory path for notation log files (None to disable)
            log_to_screen: Whether to log transcript to stdout
            log_notation_to_screen: Whether to log notation to stdout
            status_reporter: Optional callback for status messages
        """
        self.session = session
        self._transcript_dir = transcript_dir
        self._notation_dir = notation_dir
        self._log_to_screen = log_to_screen
        self._log_notation_to_screen = log_notation_to_screen
        self._status_reporter = status_reporter
        self._game_logged = False

        self._log_filenames = []

        self.writers: list[GameWriter] = []
        self._screen_writers: list[GameWriter] = []  # persist across games
        self._create_initial_writers()

    def _create_file_writer(self, directory, filename, writer_class, log_type):
        """Create a file writer, reporting failures to stderr.

        Returns:
            Writer instance on success, None on failure
        """
        try:
            os.makedirs(directory, exist_ok=True)
            filepath = os.path.join(directory, filename)
            writer = writer_class(open(filepath, "w"))
        except OSError as e:
            print(f"Error: Failed to create {log_type} log file: {e}", file=sys.stderr)
            print(f"Attempted path: {directory}", file=sys.stderr)
            print(f"{log_type.capitalize()} logging to file disabled for this session", file=sys.stderr)
            if log_type == "transcript":
                self._transcript_dir = None
            else:
                self._notation_dir = None
            return None
        self._log_filenames.append(filepath)
        return writer

    def _create_initial_writers(self):
        if self._log_to_screen:
            writer = TranscriptWriter(sys.stdout)
            self.writers.append(writer)
            self._screen_writers.append(writer)

        if self._log_notation_to_screen:
            writer = NotationWriter(sys.stdout)
            self.writers.append(writer)
            self._screen_writers.append(writer)

        # Replays are never written back to disk
        if not self.session.is_replay_mode():
            self._create_game_file_writers()

    def _create_game_file_writers(self):
        seed = self.session.get_seed()

        if self._transcript_dir:
            writer = self._create_file_writer(
                self._transcript_dir, f"chainlog_{seed}.txt", TranscriptWriter, "transcript"
            )
            if writer:
                self.writers.append(writer)

        if self._notation_dir:
            writer = self._create_file_writer(
                self._notation_dir, f"chainlog_{seed}_notation.txt", NotationWriter, "notation"
            )
            if writer:
                self.writers.append(writer)

    def get_log_filenames(self):
        """Paths of every log file created so far."""
        return self._log_filenames.copy()

    def add_writer(self, writer: GameWriter) -> None:
        self.writers.append(writer)

    def remove_writer(self, writer: GameWriter) -> None:
        if writer in self.writers:
            self.writers.remove(writer)

    def _drop_file_writers(self):
        kept = []
        for writer in self.writers:
            if writer in self._screen_writers:
                kept.append(writer)
            else:
                writer.close()
        self.writers = kept

    def start_log(
        self,
        seed,
        rows: int,
        cols: int,
        player_names: dict | None = None,
        max_explosions: int | None = None,
    ) -> None:
        """Start logging for a new game and write headers to all writers.

        The first call uses the writers created at construction; later calls
        recreate the file writers (keyed by the new seed) and keep the screen
        writers.
        """
        if self._game_logged:
            self._drop_file_writers()
            if not self.session.is_replay_mode():
                before = len(self._log_filenames)
                self._create_game_file_writers()
                for filename in self._log_filenames[before:]:
                    self._report(f"Logging to: {filename}")
        self._game_logged = True

        if not self.writers:
            return

        for writer in self.writers:
            writer.write_header(seed, rows, cols, player_names, max_explosions)

    def end_log(self, game=None) -> None:
        """Write footers and close file writers; screen writers stay open."""
        if not self.writers:
            return

        for writer in self.writers:
            writer.write_footer(game)

        self._drop_file_writers()

    def log_action(self, player_num: int, action_dict: dict, action_result=None) -> None:
        """Log an action to all writers.

        Args:
            player_num: Player id (1-4)
            action_dict: Dictionary containing action details
            action_result: Optional PlacementResult (explosion count and anomaly marker)
        """
        for writer in self.writers:
            writer.write_action(player_num, action_dict, action_result)

    def log_comment(self, message: str) -> None:
        for writer in self.writers:
            writer.write_comment(message)

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
