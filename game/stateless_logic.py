"""Stateless game logic for Chain Reaction.

All functions are pure: same inputs → same outputs.
No side effects, no mutations of their inputs, no hidden state.

This enables:
- Identical replays on every host that applies the same placements
- Speculative evaluation (move selection) without touching the live board
- Reproducible simulations

Architecture:
    BoardConfig: Immutable configuration (dimensions, cascade limit, layout)
    Pure functions: Take (state, config) → return new state or derived values

State layout:
    state is an int array of shape (2, rows, cols)
      Layer 0 (UNITS_LAYER): units held by each cell
      Layer 1 (OWNER_LAYER): owner id (0 = unclaimed, 1..4 = competitors)

Usage:
    config = BoardConfig.standard(rows=9, cols=6)
    state = create_state(config)
    if validate_placement(state, (0, 0), 1, config):
        state, events, anomaly = apply_placement(state, (0, 0), 1, config)
    winner = check_winner(state, roster, moves_made, config)
"""

from functools import lru_cache
from typing import List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from game.action_result import CascadeAnomaly, ExplosionEvent
from game.constants import (
    CELL_TYPES,
    GRID_COLS,
    GRID_ROWS,
    MAX_EXPLOSIONS_PER_TURN,
    MIN_GRID_SIZE,
    UNCLAIMED,
)


class BoardConfig(NamedTuple):
    """Immutable board configuration.

    Contains all constants needed for stateless game logic.
    Shared by the board, the game and every speculative evaluation.
    """
    # Grid dimensions
    rows: int
    cols: int

    # Cascade safety bound (explosions per placement)
    max_explosions: int

    # Orthogonal (row, col) offsets
    directions: Tuple[Tuple[int, int], ...]  # ((-1, 0), (1, 0), (0, -1), (0, 1))

    # Layer indices
    units_layer: int  # 0
    owner_layer: int  # 1
    num_layers: int  # 2

    # Owner value of an empty cell
    unclaimed: int  # 0

    @classmethod
    def standard(cls, rows=GRID_ROWS, cols=GRID_COLS, max_explosions=MAX_EXPLOSIONS_PER_TURN):
        """Create a BoardConfig for a rows x cols grid.

        Args:
            rows: Number of rows (at least 2)
            cols: Number of columns (at least 2)
            max_explosions: Explosions allowed per placement before the cascade is cut off

        Returns:
            BoardConfig instance
        """
        if rows < MIN_GRID_SIZE or cols < MIN_GRID_SIZE:
            raise ValueError(
                f"Unsupported grid size: {rows}x{cols}. "
                f"Rows and columns must be at least {MIN_GRID_SIZE}."
            )
        if max_explosions < 1:
            raise ValueError(f"max_explosions must be positive, got {max_explosions}")

        return cls(
            rows=rows,
            cols=cols,
            max_explosions=max_explosions,
            directions=((-1, 0), (1, 0), (0, -1), (0, 1)),
            units_layer=0,
            owner_layer=1,
            num_layers=2,
            unclaimed=UNCLAIMED,
        )


# ============================================================================
# GRID MODEL
# ============================================================================

def create_state(config: BoardConfig) -> np.ndarray:
    """Return an empty grid (all cells unclaimed with zero units)."""
    return np.zeros((config.num_layers, config.rows, config.cols), dtype=np.int32)


def is_inbounds(index: Tuple[int, int], config: BoardConfig) -> bool:
    """Check if index is within grid bounds."""
    r, c = index
    return 0 <= r < config.rows and 0 <= c < config.cols


def get_neighbors(index: Tuple[int, int], config: BoardConfig) -> List[Tuple[int, int]]:
    """Get the in-bounds orthogonal neighbours of index."""
    r, c = index
    return [
        (r + dr, c + dc)
        for dr, dc in config.directions
        if is_inbounds((r + dr, c + dc), config)
    ]


def get_capacity(index: Tuple[int, int], config: BoardConfig) -> int:
    """Units a cell can hold before exploding (neighbour count - 1)."""
    return len(get_neighbors(index, config)) - 1


@lru_cache(maxsize=None)
def get_capacity_map(config: BoardConfig) -> np.ndarray:
    """Capacity of every cell as a read-only (rows, cols) array.

    Interior cells hold 3; every grid border a cell touches removes one.
    """
    capacity = np.full((config.rows, config.cols), 3, dtype=np.int32)
    capacity[0, :] -= 1
    capacity[-1, :] -= 1
    capacity[:, 0] -= 1
    capacity[:, -1] -= 1
    capacity.setflags(write=False)
    return capacity


def get_cell_type(index: Tuple[int, int], config: BoardConfig) -> str:
    """Classify a cell as 'corner', 'edge' or 'center'."""
    return CELL_TYPES[len(get_neighbors(index, config))]


def get_owner(state: np.ndarray, index: Tuple[int, int], config: BoardConfig) -> int:
    """Owner of a cell; a cell without units is always unclaimed."""
    if state[config.units_layer][index] <= 0:
        return config.unclaimed
    return int(state[config.owner_layer][index])


def validate_placement(
    state: np.ndarray, index: Tuple[int, int], player: int, config: BoardConfig
) -> bool:
    """True iff index is in bounds and unclaimed or already owned by player."""
    if not is_inbounds(index, config):
        return False
    owner = get_owner(state, index, config)
    return owner == config.unclaimed or owner == player


def get_valid_placements(state: np.ndarray, player: int, config: BoardConfig) -> np.ndarray:
    """Boolean (rows, cols) mask of cells player may place on."""
    units = state[config.units_layer]
    owners = state[config.owner_layer]
    return (units <= 0) | (owners == player)


def get_unstable_cells(state: np.ndarray, config: BoardConfig) -> np.ndarray:
    """Coordinates of over-capacity cells in row-major order, shape (N, 2)."""
    return np.argwhere(state[config.units_layer] > get_capacity_map(config))


def is_settled(state: np.ndarray, config: BoardConfig) -> bool:
    return get_unstable_cells(state, config).size == 0


# ============================================================================
# CASCADE RESOLVER
# ============================================================================

def resolve_cascade(state: np.ndarray, config: BoardConfig):
    """Explode unstable cells one at a time until the grid settles.

    Each iteration explodes the first unstable cell in row-major order (lowest
    row, then lowest column). The exploding cell loses capacity + 1 units
    (dropping to unclaimed at zero) and each neighbour takes the exploding
    owner and one unit. The loop stops after config.max_explosions explosions.

    Args:
        state: Grid state array (not modified)
        config: BoardConfig

    Returns:
        Tuple of (new_state, events, anomaly) where events is the ordered list
        of ExplosionEvent and anomaly is a CascadeAnomaly when the limit was
        reached with cells still unstable, else None.
    """
    new_state = np.copy(state)
    units = new_state[config.units_layer]
    owners = new_state[config.owner_layer]
    capacity = get_capacity_map(config)
    events = []

    while len(events) < config.max_explosions:
        unstable = np.argwhere(units > capacity)
        if unstable.size == 0:
            return new_state, events, None

        r, c = int(unstable[0][0]), int(unstable[0][1])
        owner = int(owners[r, c])

        units[r, c] -= capacity[r, c] + 1
        if units[r, c] <= 0:
            units[r, c] = 0
            owners[r, c] = config.unclaimed

        targets = tuple(get_neighbors((r, c), config))
        for nr, nc in targets:
            owners[nr, nc] = owner
            units[nr, nc] += 1

        events.append(ExplosionEvent(r, c, owner, targets))

    unstable = np.argwhere(units > capacity)
    if unstable.size == 0:
        return new_state, events, None
    anomaly = CascadeAnomaly(
        limit=config.max_explosions,
        unstable=tuple((int(r), int(c)) for r, c in unstable),
    )
    return new_state, events, anomaly


def apply_placement(
    state: np.ndarray, index: Tuple[int, int], player: int, config: BoardConfig
):
    """Place one unit for player at index and resolve the resulting cascade.

    The placement is assumed valid (see validate_placement).

    Returns:
        Tuple of (new_state, events, anomaly) as for resolve_cascade
    """
    placed = np.copy(state)
    placed[config.units_layer][index] += 1
    placed[config.owner_layer][index] = player
    return resolve_cascade(placed, config)


# ============================================================================
# TURN & ELIMINATION
# ============================================================================

def is_first_round(moves_made: int, roster: Sequence[int]) -> bool:
    """First round lasts until every competitor has placed once."""
    return moves_made < len(roster)


def get_alive_players(state: np.ndarray, roster: Sequence[int], config: BoardConfig) -> list:
    """Competitors owning at least one cell with units, in roster order."""
    units = state[config.units_layer]
    owners = set(int(o) for o in np.unique(state[config.owner_layer][units > 0]))
    return [p for p in roster if p in owners]


def check_winner(
    state: np.ndarray, roster: Sequence[int], moves_made: int, config: BoardConfig
) -> Optional[int]:
    """Return the winner, or None while the match continues.

    Nobody can win during the first round. Afterwards a sole survivor wins.
    With no survivors at all the first roster entry is returned so the match
    cannot stall (see is_degenerate_elimination).
    """
    if is_first_round(moves_made, roster):
        return None

    alive = get_alive_players(state, roster, config)
    if len(alive) == 1:
        return alive[0]
    if len(alive) == 0:
        return roster[0]
    return None


def is_degenerate_elimination(
    state: np.ndarray, roster: Sequence[int], moves_made: int, config: BoardConfig
) -> bool:
    """True when check_winner would fall back because no competitor has units.

    Unreachable while placements conserve units; hosts report it as a diagnostic.
    """
    if is_first_round(moves_made, roster):
        return False
    return len(get_alive_players(state, roster, config)) == 0


def get_next_player(
    current: int,
    roster: Sequence[int],
    state: np.ndarray,
    moves_made: int,
    config: BoardConfig,
) -> int:
    """Pick the next actor.

    First round: round-robin over the full roster, ignoring eliminations.
    Steady state: round-robin over alive competitors only. With one (or no)
    competitor alive the current player is returned unchanged. A current
    player who is no longer alive hands the turn to the first alive
    competitor in roster order, so every host picks the same next actor.
    """
    roster = list(roster)
    if current not in roster:
        raise ValueError(f"Player {current} is not in the roster {roster}")

    if is_first_round(moves_made, roster):
        idx = roster.index(current)
        return roster[(idx + 1) % len(roster)]

    alive = get_alive_players(state, roster, config)
    if len(alive) <= 1:
        return current

    if current not in alive:
        return alive[0]
    idx = alive.index(current)
    return alive[(idx + 1) % len(alive)]
