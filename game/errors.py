"""Rule violations raised by the Chain Reaction engine."""


class ChainReactionError(ValueError):
    """Base class for rejected placements."""


class OutOfBounds(ChainReactionError):
    """Coordinate lies outside the grid."""

    def __init__(self, row, col, rows, cols):
        self.row = row
        self.col = col
        super().__init__(
            f"Invalid placement: position ({row}, {col}) is outside the {rows}x{cols} grid"
        )


class IllegalOwner(ChainReactionError):
    """Cell is held by another competitor."""

    def __init__(self, row, col, owner, player):
        self.row = row
        self.col = col
        self.owner = owner
        self.player = player
        super().__init__(
            f"Invalid placement: position ({row}, {col}) is owned by player {owner}, "
            f"not player {player}"
        )
