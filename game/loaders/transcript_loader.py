"""Transcript loader for Chain Reaction.

Handles loading and parsing transcript files, including grid size and roster
detection from the header comments.
"""

import re
from typing import Callable

from game.constants import GRID_COLS, GRID_ROWS, MAX_EXPLOSIONS_PER_TURN
from game.formatters import TranscriptFormatter

_GRID_RE = re.compile(r"^#\s*Grid:\s*(\d+)\s*x\s*(\d+)\s*$")
_NAME_RE = re.compile(r"^#\s*Player\s+(\d+):\s*(.*)$")
_LIMIT_RE = re.compile(r"^#\s*Max explosions:\s*(\d+)\s*$")
_ACTION_RE = re.compile(r"^Player\s+(\d+):\s*(\{.*\})\s*$")


class TranscriptLoader:
    """Loads and parses transcript files for Chain Reaction games."""

    def __init__(
        self,
        transcript_file,
        status_reporter: Callable[[str], None] | None = None,
    ):
        """Initialize the transcript loader.

        Args:
            transcript_file: Path to the transcript file
            status_reporter: Optional callback for status messages
        """
        self.transcript_file = transcript_file
        self.detected_rows = GRID_ROWS
        self.detected_cols = GRID_COLS
        self.detected_max_explosions = MAX_EXPLOSIONS_PER_TURN
        self.player_names: dict[int, str] = {}
        self.roster: tuple[int, ...] = ()
        self._status_reporter: Callable[[str], None] | None = status_reporter

    def set_status_reporter(self, reporter: Callable[[str], None] | None) -> None:
        """Set or update the status reporter callback."""
        self._status_reporter = reporter

    def load(self) -> dict[int, list[dict]]:
        """Load transcript actions from the file.

        Returns:
            Dict mapping player id to that player's actions in order

        Side effects:
            Sets self.detected_rows, self.detected_cols, self.detected_max_explosions,
            self.player_names and self.roster based on file contents.
        """
        self._report(f"Loading transcript from: {self.transcript_file}")
        actions: dict[int, list[dict]] = {}
        total = 0

        with open(self.transcript_file, "r") as f:
            for line_num, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue

                grid_match = _GRID_RE.match(line)
                if grid_match:
                    self.detected_rows = int(grid_match.group(1))
                    self.detected_cols = int(grid_match.group(2))
                    continue

                name_match = _NAME_RE.match(line)
                if name_match:
                    self.player_names[int(name_match.group(1))] = name_match.group(2).strip()
                    continue

                limit_match = _LIMIT_RE.match(line)
                if limit_match:
                    self.detected_max_explosions = int(limit_match.group(1))
                    continue

                if line.startswith("#"):
                    continue

                action_match = _ACTION_RE.match(line)
                if action_match is None:
                    raise ValueError(f"Line {line_num}: cannot parse transcript entry: {line}")
                player_num = int(action_match.group(1))
                try:
                    action_dict = TranscriptFormatter.transcript_to_action_dict(action_match.group(2))
                except (ValueError, SyntaxError) as e:
                    raise ValueError(f"Line {line_num}: {e}") from e
                actions.setdefault(player_num, []).append(action_dict)
                total += 1

        self.roster = tuple(sorted(set(self.player_names) | set(actions)))
        for player_num in self.roster:
            actions.setdefault(player_num, [])

        self._report(
            f"Detected grid: {self.detected_rows}x{self.detected_cols}, "
            f"{len(self.roster)} players, {total} moves"
        )
        return actions

    def _report(self, message: str | None) -> None:
        if message is None:
            return
        if self._status_reporter is not None:
            self._status_reporter(message)
