"""Factory helpers for constructing Chain Reaction game components."""

from __future__ import annotations

from typing import Callable, TextIO

from controller.chain_game_controller import ChainGameController
from game.constants import GRID_COLS, GRID_ROWS, MAX_EXPLOSIONS_PER_TURN
from game.player_config import PlayerConfig
from renderer.text_renderer import TextRenderer
from shared.interfaces import IRenderer


class ChainFactory:
    """Centralised factory for assembling ChainGameController instances."""

    def __init__(self, text_stream: TextIO | None = None):
        self._text_stream = text_stream

    def create_controller(
        self,
        *,
        rows: int = GRID_ROWS,
        cols: int = GRID_COLS,
        max_explosions: int = MAX_EXPLOSIONS_PER_TURN,
        replay_file: str | None = None,
        seed: int | None = None,
        log_to_file: str | None = None,
        log_to_screen: bool = False,
        log_notation_to_file: str | None = None,
        log_notation_to_screen: bool = False,
        partial_replay: bool = False,
        max_games: int | None = None,
        show_board: bool = False,
        move_duration: float = 0.0,
        track_statistics: bool = False,
        player_configs: list[PlayerConfig] | None = None,
        prompt: Callable[[str], str] | None = None,
    ) -> ChainGameController:
        """Create a fully-wired ChainGameController.

        A TextRenderer is attached when the grid is shown or when any seat is
        human (a person needs to see the board to move).
        """
        has_human = any(cfg.player_type == "human" for cfg in player_configs or [])

        def renderer_factory(controller: ChainGameController) -> IRenderer | None:
            if show_board or has_human:
                return TextRenderer(stream=self._text_stream)
            return None

        return ChainGameController(
            rows=rows,
            cols=cols,
            max_explosions=max_explosions,
            replay_file=replay_file,
            seed=seed,
            log_to_file=log_to_file,
            log_to_screen=log_to_screen,
            log_notation_to_file=log_notation_to_file,
            log_notation_to_screen=log_notation_to_screen,
            partial_replay=partial_replay,
            max_games=max_games,
            show_board=show_board or has_human,
            move_duration=move_duration,
            renderer_or_factory=renderer_factory,
            track_statistics=track_statistics,
            player_configs=player_configs,
            prompt=prompt,
        )
