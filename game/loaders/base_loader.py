"""Base protocol for game replay loaders."""

from typing import Protocol, Callable


class ReplayLoader(Protocol):
    """Protocol defining the interface for game replay loaders.

    All loader implementations (notation, transcript) should conform to this interface.
    """

    # Required attributes
    detected_rows: int
    detected_cols: int
    detected_max_explosions: int
    player_names: dict[int, str]

    def load(self) -> dict[int, list[dict]]:
        """Load and parse the replay file.

        Returns:
            Dict mapping player id to that player's actions in order
        """
        ...

    def set_status_reporter(self, reporter: Callable[[str], None] | None) -> None:
        """Set or update the status reporter callback."""
        ...
