"""Text-based renderer implementation for status output."""

from __future__ import annotations

import sys
from typing import Any, Callable, TextIO

from game.constants import PLAYER_NAMES
from shared.interfaces import IRenderer, PlacementDone
from shared.render_data import RenderData


class TextRenderer(IRenderer):
    """Renderer that prints each placement, its explosion log and optionally the grid."""

    def __init__(self, stream: TextIO | None = None, show_explosions: bool = True):
        self._stream: TextIO = stream or sys.stdout
        self._show_explosions = show_explosions

    def run(self) -> None:
        """No-op run loop for text renderer."""
        pass

    def reset_board(self) -> None:
        self.report_status("Board reset.")

    def execute_action(
        self,
        player: Any,
        render_data: RenderData,
        action_result: Any,
        move_duration: float,
        on_complete: PlacementDone | None,
    ) -> None:
        """Print the placement and notify completion immediately (no animation)."""
        n = getattr(player, "n", "?")
        colour = PLAYER_NAMES.get(n, "?")
        pos = render_data.action_dict.get("pos", "?")
        self.report_status(f"Player {n} ({colour}) places at {pos}")

        if self._show_explosions:
            for step, event in enumerate(render_data.events, start=1):
                targets = ", ".join(event["targets"])
                self.report_status(f"  {step:>3}. {event['pos']} explodes -> {targets}")
        if render_data.anomaly:
            self.report_status(f"  {render_data.anomaly}")
        if render_data.has_board():
            self.report_status(render_data.board_text)

        if on_complete:
            on_complete(player, action_result)

    def report_status(self, message: str) -> None:
        if message is None:
            return
        print(message, file=self._stream)

    def attach_update_loop(
        self, update_fn: Callable[[], bool], interval: float
    ) -> bool:
        return False
