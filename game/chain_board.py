from typing import NamedTuple

import numpy as np

from game.action_result import PlacementResult
from game.constants import CELL_TYPES, GRID_COLS, GRID_ROWS, MAX_EXPLOSIONS_PER_TURN
from game.errors import IllegalOwner, OutOfBounds
from game.stateless_logic import (
    BoardConfig,
    apply_placement,
    create_state,
    get_capacity,
    get_cell_type,
    get_neighbors,
    get_owner,
    get_unstable_cells,
    get_valid_placements,
    is_inbounds,
    validate_placement,
)


class Cell(NamedTuple):
    """Read-only view of one grid cell."""

    row: int
    col: int
    units: int
    owner: int
    capacity: int

    @property
    def neighbor_count(self):
        return self.capacity + 1

    @property
    def cell_type(self):
        return CELL_TYPES[self.neighbor_count]

    @property
    def is_stable(self):
        return self.units <= self.capacity


class ChainBoard:
    # The board is a rectangular grid; each cell touches the cells above,
    # below, left and right of it. 9x6 reference board, capacities shown:
    #
    #       a  b  c  d  e  f
    #   1   1  2  2  2  2  1
    #   2   2  3  3  3  3  2
    #   3   2  3  3  3  3  2
    #   4   2  3  3  3  3  2
    #   5   2  3  3  3  3  2
    #   6   2  3  3  3  3  2
    #   7   2  3  3  3  3  2
    #   8   2  3  3  3  3  2
    #   9   1  2  2  2  2  1
    #
    # A cell with more units than its capacity explodes, sending one unit to
    # each neighbour and converting it to the exploding owner.

    # ==================================================================================
    # STATE STRUCTURE (3D array, shape: 2 x R x C)
    # ==================================================================================
    #   Layer 0: Units held by each cell
    #   Layer 1: Owner of each cell (0 = unclaimed, 1-4 = player id)
    #
    # An owner value under a cell with zero units is ignored; such a cell reads
    # as unclaimed everywhere.
    # ==================================================================================
    UNITS_LAYER = 0
    OWNER_LAYER = 1

    def __init__(self, rows=GRID_ROWS, cols=GRID_COLS, max_explosions=MAX_EXPLOSIONS_PER_TURN, clone=None):
        """Initialize a Chain Reaction grid.

        Args:
            rows: Number of rows (default: 9)
            cols: Number of columns (default: 6)
            max_explosions: Cascade safety bound per placement
            clone: ChainBoard instance to clone from
        """
        if clone is not None:
            self.config = clone.config
            self.state = np.copy(clone.state)
        else:
            self.config = BoardConfig.standard(rows, cols, max_explosions)
            self.state = create_state(self.config)

    @property
    def rows(self):
        return self.config.rows

    @property
    def cols(self):
        return self.config.cols

    def reset(self):
        self.state = create_state(self.config)

    def cell_at(self, row, col):
        """Bounds-checked cell lookup.

        Raises:
            OutOfBounds: If (row, col) lies outside the grid
        """
        if not is_inbounds((row, col), self.config):
            raise OutOfBounds(row, col, self.rows, self.cols)
        units = int(self.state[self.UNITS_LAYER][row, col])
        owner = get_owner(self.state, (row, col), self.config)
        return Cell(row, col, units, owner, get_capacity((row, col), self.config))

    def cells(self):
        """All cells in row-major order."""
        return [self.cell_at(r, c) for r in range(self.rows) for c in range(self.cols)]

    def neighbors_of(self, row, col):
        if not is_inbounds((row, col), self.config):
            raise OutOfBounds(row, col, self.rows, self.cols)
        return set(get_neighbors((row, col), self.config))

    def cell_type(self, row, col):
        return get_cell_type((row, col), self.config)

    def validate_placement(self, row, col, player):
        return validate_placement(self.state, (row, col), player, self.config)

    def check_placement(self, row, col, player):
        """Raise if player may not place at (row, col); never mutates the board."""
        if not is_inbounds((row, col), self.config):
            raise OutOfBounds(row, col, self.rows, self.cols)
        owner = get_owner(self.state, (row, col), self.config)
        if owner != self.config.unclaimed and owner != player:
            raise IllegalOwner(row, col, owner, player)

    def get_valid_moves(self, player):
        return get_valid_placements(self.state, player, self.config)

    def is_settled(self):
        return get_unstable_cells(self.state, self.config).size == 0

    def total_units(self):
        return int(self.state[self.UNITS_LAYER].sum())

    def place(self, row, col, player):
        """Place a unit for player and resolve the cascade.

        The board only ever holds the state before or after the whole cascade.

        Returns:
            PlacementResult with the ordered explosion events

        Raises:
            OutOfBounds, IllegalOwner: On an illegal placement (board untouched)
        """
        self.check_placement(row, col, player)
        new_state, events, anomaly = apply_placement(self.state, (row, col), player, self.config)
        self.state = new_state
        return PlacementResult(row, col, player, events, anomaly)

    # ==================================================================================
    # Coordinates
    # ==================================================================================
    # Cells are written as a column letter and a 1-based row number: (0, 0) is "a1",
    # (8, 5) on the reference board is "f9".

    def index_to_str(self, index):
        r, c = index
        if not is_inbounds((r, c), self.config):
            raise OutOfBounds(r, c, self.rows, self.cols)
        return f"{chr(ord('a') + c)}{r + 1}"

    def str_to_index(self, text):
        text = text.strip().lower()
        if len(text) < 2 or not text[0].isalpha() or not text[1:].isdigit():
            raise ValueError(f"Invalid coordinate: {text!r}. Expected e.g. 'c5'")
        c = ord(text[0]) - ord("a")
        r = int(text[1:]) - 1
        if not is_inbounds((r, c), self.config):
            raise OutOfBounds(r, c, self.rows, self.cols)
        return r, c

    def __str__(self):
        lines = []
        for r in range(self.rows):
            row_text = []
            for c in range(self.cols):
                units = int(self.state[self.UNITS_LAYER][r, c])
                if units <= 0:
                    row_text.append(" . ")
                else:
                    owner = int(self.state[self.OWNER_LAYER][r, c])
                    row_text.append(f"{units}P{owner}")
            lines.append(" ".join(row_text))
        return "\n".join(lines)
