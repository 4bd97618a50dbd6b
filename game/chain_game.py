import numpy as np

from shared.render_data import RenderData

from .chain_board import ChainBoard
from .action_result import MoveIntent, PlacementResult
from .errors import OutOfBounds
from .constants import (
    GRID_COLS,
    GRID_ROWS,
    MAX_EXPLOSIONS_PER_TURN,
    MAX_PLAYERS,
    MIN_PLAYERS,
)
from .stateless_logic import (
    check_winner,
    get_alive_players,
    get_next_player,
    is_degenerate_elimination,
    is_first_round,
    is_inbounds,
)


class ChainGame:
    """A single Chain Reaction match: one grid plus one turn state.

    Turn state (current_player, moves_made, winner) only changes inside
    take_action, after a placement and its whole cascade have been applied.
    """

    def __init__(
        self,
        rows=GRID_ROWS,
        cols=GRID_COLS,
        roster=(1, 2),
        max_explosions=MAX_EXPLOSIONS_PER_TURN,
        clone=None,
    ):
        if clone is not None:
            self.roster = clone.roster
            self.board = ChainBoard(clone=clone.board)
            self.current_player = clone.current_player
            self.moves_made = clone.moves_made
            self.winner = clone.winner
            return

        self.roster = self._validate_roster(roster)
        self.board = ChainBoard(rows, cols, max_explosions)
        self.current_player = self.roster[0]
        self.moves_made = 0
        self.winner = None

    @staticmethod
    def _validate_roster(roster):
        roster = tuple(int(p) for p in roster)
        if not MIN_PLAYERS <= len(roster) <= MAX_PLAYERS:
            raise ValueError(
                f"Roster must hold {MIN_PLAYERS}-{MAX_PLAYERS} players, got {len(roster)}"
            )
        if len(set(roster)) != len(roster):
            raise ValueError(f"Roster contains duplicate players: {roster}")
        for player in roster:
            if not 1 <= player <= MAX_PLAYERS:
                raise ValueError(f"Invalid player id {player}. Must be 1-{MAX_PLAYERS}")
        return roster

    def __deepcopy__(self, memo):
        return ChainGame(clone=self)

    @property
    def config(self):
        return self.board.config

    def reset_board(self):
        """Start the match over with the same roster."""
        self.board.reset()
        self.current_player = self.roster[0]
        self.moves_made = 0
        self.winner = None

    def get_valid_actions(self, player=None):
        """Boolean (rows, cols) mask of legal placements for player (default: current)."""
        if player is None:
            player = self.current_player
        return self.board.get_valid_moves(player)

    def has_valid_moves(self, player=None):
        return bool(np.any(self.get_valid_actions(player)))

    def get_alive_players(self):
        return get_alive_players(self.board.state, self.roster, self.config)

    def is_first_round(self):
        return is_first_round(self.moves_made, self.roster)

    def get_game_ended(self):
        """Returns the winning player id, or None while the match is running."""
        return self.winner

    def take_action(self, row, col):
        """Place a unit for the current player and advance the turn.

        Args:
            row, col: Target cell

        Returns:
            PlacementResult with explosion events, winner and next player

        Raises:
            OutOfBounds, IllegalOwner: Illegal placement (game state untouched)
            ValueError: The match is already over
        """
        if self.winner is not None:
            raise ValueError(f"Game is over: player {self.winner} has already won")

        player = self.current_player
        result = self.board.place(row, col, player)
        self.moves_made += 1
        result.move_number = self.moves_made

        state = self.board.state
        winner = check_winner(state, self.roster, self.moves_made, self.config)
        if winner is not None:
            self.winner = winner
            result.winner = winner
            result.degenerate = is_degenerate_elimination(
                state, self.roster, self.moves_made, self.config
            )
            return result

        self.current_player = get_next_player(
            player, self.roster, state, self.moves_made, self.config
        )
        result.next_player = self.current_player
        return result

    def apply_intent(self, intent: MoveIntent):
        """Apply an ordered move intent from a host.

        Intents already applied (move_number <= moves_made) are ignored.

        Returns:
            PlacementResult, or None for a stale intent

        Raises:
            ValueError: Intent skips ahead or names a player out of turn
        """
        if intent.move_number <= self.moves_made:
            return None
        if intent.move_number != self.moves_made + 1:
            raise ValueError(
                f"Out-of-order move {intent.move_number}: expected move {self.moves_made + 1}"
            )
        if intent.player != self.current_player:
            raise ValueError(
                f"Move {intent.move_number} is for player {intent.player}, "
                f"but it is player {self.current_player}'s turn"
            )
        return self.take_action(intent.row, intent.col)

    def action_to_str(self, row, col):
        """Return (notation, action_dict) for a placement by the current player."""
        pos = self.board.index_to_str((row, col))
        return pos, {"action": "PUT", "pos": pos}

    def str_to_action(self, text):
        return self.board.str_to_index(text)

    def get_render_data(self, result, include_board=False):
        """Build the renderer payload for a completed placement.

        Args:
            result: PlacementResult returned by take_action
            include_board: Attach the settled grid as text

        Returns:
            RenderData with notation strings only
        """
        to_str = self.board.index_to_str
        _, action_dict = self.action_to_str(result.row, result.col)
        events = [
            {
                "pos": to_str((event.row, event.col)),
                "owner": event.owner,
                "targets": [to_str(target) for target in event.targets],
            }
            for event in result.events
        ]
        return RenderData(
            action_dict,
            events=events,
            board_text=str(self.board) if include_board else "",
            anomaly=result.anomaly.describe() if result.has_anomaly() else None,
        )

    # ==================================================================================
    # Snapshots
    # ==================================================================================

    def to_dict(self):
        """Lossless snapshot of grid and turn state (plain Python types)."""
        board = self.board
        cells = []
        for r in range(board.rows):
            for c in range(board.cols):
                units = int(board.state[board.UNITS_LAYER][r, c])
                owner = int(board.state[board.OWNER_LAYER][r, c]) if units > 0 else 0
                cells.append([r, c, units, owner])
        return {
            "rows": board.rows,
            "cols": board.cols,
            "max_explosions": self.config.max_explosions,
            "roster": list(self.roster),
            "current_player": self.current_player,
            "moves_made": self.moves_made,
            "winner": self.winner,
            "cells": cells,
        }

    @classmethod
    def from_dict(cls, data):
        """Rebuild a game from to_dict() output.

        Raises:
            OutOfBounds: A cell lies outside the grid
            ValueError: A cell holds units without a roster owner, or the turn
                state names a player outside the roster
        """
        game = cls(
            rows=data["rows"],
            cols=data["cols"],
            roster=data["roster"],
            max_explosions=data.get("max_explosions", MAX_EXPLOSIONS_PER_TURN),
        )
        board = game.board
        for r, c, units, owner in data["cells"]:
            if not is_inbounds((r, c), game.config):
                raise OutOfBounds(r, c, board.rows, board.cols)
            if units < 0:
                raise ValueError(f"Cell ({r}, {c}) has negative units: {units}")
            if units > 0 and owner not in game.roster:
                raise ValueError(
                    f"Cell ({r}, {c}) holds {units} unit(s) for player {owner}, "
                    f"who is not in the roster {game.roster}"
                )
            board.state[board.UNITS_LAYER][r, c] = units
            board.state[board.OWNER_LAYER][r, c] = owner if units > 0 else 0
        if data["current_player"] not in game.roster:
            raise ValueError(f"Current player {data['current_player']} is not in the roster")
        game.current_player = data["current_player"]
        game.moves_made = data["moves_made"]
        game.winner = data["winner"]
        return game
