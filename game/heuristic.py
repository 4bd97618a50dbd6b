"""Move scoring and selection for computer-controlled competitors.

Both functions only read the grid. Randomness comes from an injected
numpy Generator so that seeded games replay identically.
"""

from typing import Optional, Tuple

import numpy as np

from game.constants import (
    AT_CAPACITY_BONUS,
    ATTACKABLE_NEIGHBOR_BONUS,
    CORNER_BONUS,
    DEFAULT_JITTER,
    DEFAULT_TOP_K,
    EDGE_BONUS,
    LOADED_ATTACK_BONUS,
    NEAR_CAPACITY_BONUS,
    OWN_CELL_BONUS,
    THREATENED_PENALTY,
)
from game.stateless_logic import (
    BoardConfig,
    get_capacity_map,
    get_neighbors,
    get_owner,
    get_valid_placements,
)


def score_move(
    state: np.ndarray,
    index: Tuple[int, int],
    player: int,
    config: BoardConfig,
    rng: np.random.Generator,
    jitter: float = DEFAULT_JITTER,
) -> float:
    """Score a candidate placement for player (higher is better).

    Components:
        +10 if player already owns the cell
        +25 if the cell is one unit from exploding, +15 if two units away
        +8 corner, +4 edge
        per opponent neighbour holding units: +5, and +10 more when the
        candidate is loaded (at capacity)
        per opponent neighbour at capacity: -8
        plus uniform jitter in [0, jitter)
    """
    capacity = get_capacity_map(config)
    units = state[config.units_layer]

    cell_units = int(units[index])
    cell_capacity = int(capacity[index])
    loaded = cell_units == cell_capacity

    score = 0.0
    if get_owner(state, index, config) == player:
        score += OWN_CELL_BONUS

    if loaded:
        score += AT_CAPACITY_BONUS
    elif cell_units == cell_capacity - 1:
        score += NEAR_CAPACITY_BONUS

    if cell_capacity == 1:
        score += CORNER_BONUS
    elif cell_capacity == 2:
        score += EDGE_BONUS

    for neighbor in get_neighbors(index, config):
        owner = get_owner(state, neighbor, config)
        if owner == config.unclaimed or owner == player:
            continue
        score += ATTACKABLE_NEIGHBOR_BONUS
        if loaded:
            score += LOADED_ATTACK_BONUS
        if units[neighbor] == capacity[neighbor]:
            score -= THREATENED_PENALTY

    if jitter > 0:
        score += float(rng.uniform(0.0, jitter))
    return score


def score_moves(
    state: np.ndarray,
    player: int,
    config: BoardConfig,
    rng: np.random.Generator,
    jitter: float = DEFAULT_JITTER,
) -> list:
    """Score every legal placement, best first.

    Returns:
        List of ((row, col), score) sorted by descending score. Ties keep
        row-major order.
    """
    mask = get_valid_placements(state, player, config)
    scored = [
        ((int(r), int(c)), score_move(state, (int(r), int(c)), player, config, rng, jitter))
        for r, c in np.argwhere(mask)
    ]
    scored.sort(key=lambda item: item[1], reverse=True)
    return scored


def find_best_move(
    state: np.ndarray,
    player: int,
    config: BoardConfig,
    rng: np.random.Generator,
    top_k: int = DEFAULT_TOP_K,
    jitter: float = DEFAULT_JITTER,
) -> Optional[Tuple[int, int]]:
    """Choose uniformly among the top_k best scoring placements.

    Returns:
        (row, col), or None when player has no legal placement
    """
    scored = score_moves(state, player, config, rng, jitter)
    if not scored:
        return None
    top = scored[: max(1, min(top_k, len(scored)))]
    choice = int(rng.integers(len(top)))
    return top[choice][0]
