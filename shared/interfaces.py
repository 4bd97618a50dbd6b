"""Renderer protocols used by ChainGameController.

A renderer is told about each placement after the engine has resolved it, so
it only ever draws settled grids plus the ordered explosion log.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Protocol, runtime_checkable

from shared.render_data import RenderData

if TYPE_CHECKING:  # pragma: no cover - used for type hints only
    from controller.chain_game_controller import ChainGameController
    from game.action_result import PlacementResult
    from game.players import ChainPlayer

PlacementDone = Callable[["ChainPlayer", "PlacementResult"], None]


@runtime_checkable
class IRenderer(Protocol):
    """What the controller needs from a renderer."""

    def run(self) -> None:
        """Enter the renderer's own event loop (if attach_update_loop accepted one)."""
        ...

    def reset_board(self) -> None:
        """Clear the displayed grid before the next game."""
        ...

    def execute_action(
        self,
        player: ChainPlayer,
        render_data: RenderData,
        action_result: PlacementResult,
        move_duration: float,
        on_complete: PlacementDone | None,
    ) -> None:
        """Show one placement and its cascade.

        on_complete(player, action_result) must be called once the display is
        finished; the controller does not take the next turn until then.
        """
        ...

    def attach_update_loop(self, update_fn: Callable[[], bool], interval: float) -> bool:
        """Offer to drive update_fn from the renderer's loop.

        Returns False to leave the controller ticking itself.
        """
        ...

    def report_status(self, message: str) -> None: ...


@runtime_checkable
class IRendererFactory(Protocol):
    def __call__(self, controller: ChainGameController) -> IRenderer: ...
