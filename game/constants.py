"""Game constants shared across modules.

This module contains grid dimensions, limits and heuristic weights used by
both the stateful (ChainGame) and stateless (stateless_logic) implementations.
"""

# Reference grid size
GRID_ROWS = 9
GRID_COLS = 6
MIN_GRID_SIZE = 2

# Owner value of a cell with no units
UNCLAIMED = 0

# Competitor limits (ids run 1..MAX_PLAYERS)
MIN_PLAYERS = 1
MAX_PLAYERS = 4
MIN_SESSION_PLAYERS = 2  # Menu rule: at least two active seats

# Cascade safety bound (explosions per placement)
MAX_EXPLOSIONS_PER_TURN = 1000

# Cell classification by neighbour count
CELL_TYPES = {2: "corner", 3: "edge", 4: "center"}

PLAYER_NAMES = {1: "RED", 2: "CYAN", 3: "GREEN", 4: "GOLD"}

# Heuristic weights
OWN_CELL_BONUS = 10
AT_CAPACITY_BONUS = 25
NEAR_CAPACITY_BONUS = 15
CORNER_BONUS = 8
EDGE_BONUS = 4
ATTACKABLE_NEIGHBOR_BONUS = 5
LOADED_ATTACK_BONUS = 10
THREATENED_PENALTY = 8
DEFAULT_JITTER = 3.0
DEFAULT_TOP_K = 3
