"""Game action writers for Chain Reaction.

Provides pluggable writer classes that combine formatters with output streams
to log game actions in various formats (notation, transcript).
"""

import sys
from abc import ABC, abstractmethod
from typing import TextIO

from game.formatters import NotationFormatter, TranscriptFormatter


class GameWriter(ABC):
    """Abstract base class for game action writers.

    A GameWriter combines a formatter with an output stream to write
    game actions in a specific format. Subclasses implement format-specific
    headers and action formatting.
    """

    def __init__(self, output: TextIO):
        """Initialize the writer.

        Args:
            output: Output stream to write to (file, stdout, etc.)
        """
        self.output = output
        self._game_started = False

    @abstractmethod
    def write_header(
        self,
        seed: int,
        rows: int,
        cols: int,
        player_names: dict | None = None,
        max_explosions: int | None = None,
    ) -> None:
        """Write file header with game metadata.

        Args:
            seed: Random seed for this game
            rows, cols: Grid dimensions
            player_names: Optional mapping of player id to display name
            max_explosions: Cascade bound the game was played with (omitted when None)
        """
        pass

    @abstractmethod
    def write_action(self, player_num: int, action_dict: dict, action_result=None) -> None:
        """Write a game action.

        Args:
            player_num: Player id (1-4)
            action_dict: Action dictionary
            action_result: Optional PlacementResult
        """
        pass

    def write_comment(self, message: str) -> None:
        """Write a status/comment message (default: ignored)."""
        pass

    def write_footer(self, game=None) -> None:
        """Write file footer with final game state (optional)."""
        pass

    def flush(self) -> None:
        self.output.flush()

    def close(self) -> None:
        """Close the output stream (but never close stdout/stderr)."""
        if self.output in (sys.stdout, sys.stderr):
            return
        if hasattr(self.output, "close"):
            self.output.close()


class NotationWriter(GameWriter):
    """Writes game actions in compact notation.

    File format:
        9x6               # Header: grid size
        # Max explosions: 1000
        # Player 1: RED   # Optional player names
        c5                # One placement per line
        d5!               # Cascade cut off at the explosion limit
    """

    def __init__(self, output: TextIO):
        super().__init__(output)
        self.formatter = NotationFormatter()

    def write_header(
        self,
        seed: int,
        rows: int,
        cols: int,
        player_names: dict | None = None,
        max_explosions: int | None = None,
    ) -> None:
        self.output.write(f"{rows}x{cols}\n")
        if max_explosions is not None:
            self.output.write(f"# Max explosions: {max_explosions}\n")
        for player_num, name in sorted((player_names or {}).items()):
            if name:
                self.output.write(f"# Player {player_num}: {name}\n")
        self._game_started = True
        self.flush()

    def write_action(self, player_num: int, action_dict: dict, action_result=None) -> None:
        notation = self.formatter.action_to_notation(action_dict, action_result)
        self.output.write(f"{notation}\n")
        self.flush()


class TranscriptWriter(GameWriter):
    """Writes game actions in transcript file format.

    File format:
        # Seed: 12345              # Header comments
        # Grid: 9x6
        # Max explosions: 1000
        # Player 1: Heuristic 1
        #
        Player 1: {'action': 'PUT', 'pos': 'c5', 'move': 1, 'explosions': 0}
        Player 2: {'action': 'PUT', 'pos': 'a1', 'move': 2, 'explosions': 0}
        #
        # Final game state:        # Footer comments
        # ...
    """

    def __init__(self, output: TextIO):
        super().__init__(output)
        self.formatter = TranscriptFormatter()

    def write_header(
        self,
        seed: int,
        rows: int,
        cols: int,
        player_names: dict | None = None,
        max_explosions: int | None = None,
    ) -> None:
        self.output.write(f"# Seed: {seed}\n")
        self.output.write(f"# Grid: {rows}x{cols}\n")
        if max_explosions is not None:
            self.output.write(f"# Max explosions: {max_explosions}\n")
        for player_num, name in sorted((player_names or {}).items()):
            if name:
                self.output.write(f"# Player {player_num}: {name}\n")
        self.output.write("#\n")
        self._game_started = True
        self.flush()

    def write_action(self, player_num: int, action_dict: dict, action_result=None) -> None:
        """Write action as "Player {player_num}: {action_dict}"."""
        transcript_str = self.formatter.action_to_transcript(action_dict, action_result)
        self.output.write(f"Player {player_num}: {transcript_str}\n")
        self.flush()

    def write_comment(self, message: str) -> None:
        for line in str(message).splitlines() or [""]:
            self.output.write(f"# {line}\n")
        self.flush()

    def write_footer(self, game=None) -> None:
        """Write the final grid, move count and winner as comments."""
        if game is None:
            return

        self.output.write("#\n")
        self.output.write("# Final game state:\n")
        self.output.write("# ---------------\n")
        self.output.write("# Board state:\n")
        for row in str(game.board).splitlines():
            self.output.write(f"# {row}\n")
        self.output.write("# ---------------\n")
        self.output.write(f"# Moves made: {game.moves_made}\n")
        if game.winner is not None:
            self.output.write(f"# Winner: Player {game.winner}\n")
        self.output.write("# ---------------\n")
        self.flush()
