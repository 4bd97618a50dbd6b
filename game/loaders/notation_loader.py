"""Loader for compact notation files.

Notation files list coordinates only, so moves are attributed to players by
replaying them through a ChainGame: turn order is fully determined by the
placements themselves.
"""

import re
from typing import Callable

from game.chain_game import ChainGame
from game.constants import MAX_EXPLOSIONS_PER_TURN
from game.formatters import NotationFormatter

_HEADER_RE = re.compile(r"^(\d+)\s*x\s*(\d+)$")
_NAME_RE = re.compile(r"^#\s*Player\s+(\d+):\s*(.*)$")
_LIMIT_RE = re.compile(r"^#\s*Max explosions:\s*(\d+)\s*$")


class NotationLoader:
    """Loads and parses compact notation files."""

    def __init__(
        self,
        filename,
        status_reporter: Callable[[str], None] | None = None,
        roster: tuple[int, ...] | None = None,
    ):
        """Initialize notation loader.

        Args:
            filename: Path to notation file
            status_reporter: Optional callback for status messages
            roster: Roster to replay with when the file names no players (default: (1, 2))
        """
        self.filename = filename
        self._status_reporter = status_reporter
        self._default_roster = tuple(roster) if roster else (1, 2)

        # Detected values (set after load())
        self.detected_rows = None
        self.detected_cols = None
        self.detected_max_explosions = MAX_EXPLOSIONS_PER_TURN
        self.player_names: dict[int, str] = {}
        self.roster: tuple[int, ...] = ()

    def set_status_reporter(self, reporter: Callable[[str], None] | None) -> None:
        """Set or update the status reporter callback."""
        self._status_reporter = reporter

    def load(self) -> dict[int, list[dict]]:
        """Load and parse notation file.

        Returns:
            Dict mapping player id to that player's actions in order

        Raises:
            ValueError: Missing header, bad coordinate or illegal move sequence
        """
        self._report(f"Loading notation from: {self.filename}")

        with open(self.filename, "r") as f:
            lines = [line.strip() for line in f]

        lines = [line for line in lines if line]
        if not lines:
            raise ValueError(f"Empty notation file: {self.filename}")

        header = _HEADER_RE.match(lines[0])
        if header is None:
            raise ValueError(f"Invalid notation header: {lines[0]!r}. Expected e.g. '9x6'")
        self.detected_rows = int(header.group(1))
        self.detected_cols = int(header.group(2))

        moves = []
        for line_num, line in enumerate(lines[1:], start=2):
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
            try:
                moves.append(NotationFormatter.notation_to_action_dict(line))
            except ValueError as e:
                raise ValueError(f"Line {line_num}: {e}") from e

        self.roster = tuple(sorted(self.player_names)) or self._default_roster
        actions = self._attribute_moves(moves)
        self._report(
            f"Detected grid: {self.detected_rows}x{self.detected_cols}, "
            f"{len(self.roster)} players, {len(moves)} moves"
        )
        return actions

    def _attribute_moves(self, moves):
        game = ChainGame(
            self.detected_rows, self.detected_cols, self.roster, self.detected_max_explosions
        )
        actions: dict[int, list[dict]] = {player: [] for player in self.roster}
        for move_num, action_dict in enumerate(moves, start=1):
            if game.get_game_ended() is not None:
                raise ValueError(f"Move {move_num} ({action_dict['pos']}) comes after the game ended")
            player = game.current_player
            row, col = game.str_to_action(action_dict["pos"])
            try:
                game.take_action(row, col)
            except ValueError as e:
                raise ValueError(f"Move {move_num}: {e}") from e
            actions[player].append(action_dict)
        return actions

    def _report(self, message: str | None) -> None:
        if message is None:
            return
        if self._status_reporter is not None:
            self._status_reporter(message)
