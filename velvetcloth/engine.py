"""The engine: runs scenes one after another, restarting on reset."""

from __future__ import annotations

from typing import Any, Callable, Sequence

from .common import Config, GameState, SimParams
from .game import GameInstance
from .input import Input
from .timer import Timer


class Engine:
    """Creates a fresh game for the current scene until no reset is pending.

    A scene provides ``populate_actors(game)``, ``on_enter`` and ``on_exit``
    callbacks and ``clear_callbacks()``.
    """

    def __init__(
        self,
        window_size=(Config.SCREEN_WIDTH, Config.SCREEN_HEIGHT),
        clock: Callable[[], float] | None = None,
        input_state: Input | None = None,
        game_state: GameState | None = None,
        sim_params: SimParams | None = None,
    ) -> None:
        self.window_size = tuple(window_size)
        self.input = input_state if input_state is not None else Input()
        self.game_state = game_state if game_state is not None else GameState()
        self.sim_params = sim_params if sim_params is not None else SimParams()
        self.scenes: list[Any] = []
        self.scene_index = 0
        self.game: GameInstance | None = None
        self._clock = clock
        self._next_scene_index = 0

    def set_scenes(self, scenes: Sequence[Any]) -> None:
        self.scenes = list(scenes)

    def run(self, max_frames: int | None = None) -> int:
        """Run the selected scene, restarting whenever a reset is requested."""
        if not self.scenes:
            raise ValueError("no scenes to run")
        while True:
            self.game = GameInstance(
                engine=self,
                input_state=self.input,
                timer=Timer(self._clock),
                game_state=self.game_state,
                sim_params=self.sim_params,
                window_size=self.window_size,
            )
            self.scene_index = self._next_scene_index
            scene = self.scenes[self.scene_index]
            scene.populate_actors(self.game)
            scene.on_enter.invoke()
            self.game.run(max_frames)
            scene.on_exit.invoke()
            scene.clear_callbacks()
            if not self.game.pending_reset:
                return 0

    def _current_game(self) -> GameInstance:
        if self.game is None:
            raise RuntimeError("no game is running")
        return self.game

    def reset(self) -> None:
        """Restart the current scene after this frame."""
        self._current_game().pending_reset = True

    def switch_scene(self, scene_index: int) -> None:
        """Switch to a scene after this frame; the index is clamped to the list."""
        game = self._current_game()
        self._next_scene_index = min(max(int(scene_index), 0), len(self.scenes) - 1)
        game.pending_reset = True