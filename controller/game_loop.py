"""Turn loop for Chain Reaction.

The controller is ticked through update_game(task) until it hands back
task.done. A renderer with its own event loop may take the ticking over.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from shared.interfaces import IRenderer


@dataclass
class _LoopTask:
    """Sentinels for one update_game call: return `done` to stop, `again` to be called again."""

    delay_time: float
    done: object = field(default_factory=object, repr=False, compare=False)
    again: object = field(default_factory=object, repr=False, compare=False)


class GameLoop:
    """Ticks a controller until it finishes.

    Headless runs pause move_duration seconds between ticks so a text
    renderer can be followed; max_ticks turns a controller that never
    finishes into a RuntimeError instead of a hang.
    """

    def __init__(
        self,
        controller,
        renderer: IRenderer | None = None,
        move_duration: float = 0.0,
        max_ticks: int | None = None,
        sleep=time.sleep,
    ) -> None:
        self._controller = controller
        self._renderer = renderer
        self._move_duration = move_duration
        self._max_ticks = max_ticks
        self._sleep = sleep
        self.ticks = 0

    def run(self) -> int:
        """Run until the controller is done.

        Returns:
            Number of update_game calls made
        """
        if self._renderer is not None and self._renderer.attach_update_loop(
            self.tick, self._move_duration
        ):
            self._renderer.run()
            return self.ticks

        while not self.tick():
            if self._move_duration > 0:
                self._sleep(self._move_duration)
        return self.ticks

    def tick(self) -> bool:
        """Call update_game once; True when the controller reports it is done."""
        if self._max_ticks is not None and self.ticks >= self._max_ticks:
            raise RuntimeError(f"Game loop did not finish within {self._max_ticks} ticks")
        self.ticks += 1
        task = _LoopTask(delay_time=self._move_duration)
        return self._controller.update_game(task) is task.done
