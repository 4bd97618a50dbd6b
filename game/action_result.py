"""Value objects describing the outcome of a placement.

These objects form the interface between the game and the controller and
renderer layers: the controller logs them, the renderer replays the explosion
events in order, and neither needs to touch board internals.
"""

from typing import NamedTuple, Optional, Tuple


class ExplosionEvent(NamedTuple):
    """One step of a cascade.

    Attributes:
        row, col: Exploding cell
        owner: Owner of the cell at explosion time
        targets: Neighbour coordinates that each received one unit
    """

    row: int
    col: int
    owner: int
    targets: Tuple[Tuple[int, int], ...]


class CascadeAnomaly(NamedTuple):
    """Cascade stopped at the explosion limit with cells still unstable."""

    limit: int
    unstable: Tuple[Tuple[int, int], ...]

    def describe(self):
        return (
            f"Cascade anomaly: explosion limit {self.limit} reached with "
            f"{len(self.unstable)} unstable cell(s)"
        )


class MoveIntent(NamedTuple):
    """An ordered placement request from a host (network or local input).

    move_number is 1-based: the first placement of a match is move 1.
    """

    row: int
    col: int
    player: int
    move_number: int


class PlacementResult:
    """Encapsulates the result of a placement and its cascade.

    Attributes:
        row, col: Placed cell
        player: Competitor who placed
        events: Ordered explosion events (empty when nothing exploded)
        anomaly: CascadeAnomaly if the safety bound was hit, else None
        move_number: moves_made after this placement (set by ChainGame)
        winner: Winner declared after this placement, if any
        next_player: Next actor (None when the game is won)
        degenerate: True when the winner came from the zero-survivor fallback
    """

    def __init__(self, row, col, player, events=None, anomaly: Optional[CascadeAnomaly] = None):
        self.row = row
        self.col = col
        self.player = player
        self.events = list(events) if events is not None else []
        self.anomaly = anomaly
        self.move_number = None
        self.winner = None
        self.next_player = None
        self.degenerate = False

    def __repr__(self):
        return (
            f"PlacementResult(pos=({self.row}, {self.col}), player={self.player}, "
            f"explosions={len(self.events)}, winner={self.winner})"
        )

    def has_explosions(self):
        return len(self.events) > 0

    def has_anomaly(self):
        return self.anomaly is not None

    def explosion_count(self):
        return len(self.events)
