"""The game instance: owns the actors and drives the main loop."""

from __future__ import annotations

from typing import Any, TypeVar

import numpy as np

from .actor import Actor, Component
from .common import Callback, Config, GameState, SimParams
from .input import Input, Key
from .timer import Timer

T = TypeVar("T", bound=Component)


class GameInstance:
    """Holds the actors of one scene and advances them frame by frame.

    ``engine`` is optional; when present, number keys switch scenes and
    ``R`` resets through it.
    """

    def __init__(
        self,
        engine: Any = None,
        input_state: Input | None = None,
        timer: Timer | None = None,
        game_state: GameState | None = None,
        sim_params: SimParams | None = None,
        window_size=(Config.SCREEN_WIDTH, Config.SCREEN_HEIGHT),
    ) -> None:
        self.engine = engine
        self.input = input_state if input_state is not None else Input()
        self.timer = timer if timer is not None else Timer()
        self.game_state = game_state if game_state is not None else GameState()
        self.sim_params = sim_params if sim_params is not None else SimParams()
        self.window_size = tuple(window_size)

        self.on_mouse_scroll = Callback()
        self.on_mouse_move = Callback()
        self.animation_update = Callback()
        # Runs every frame, also while the simulation is paused.
        self.god_update = Callback()
        self.on_finalize = Callback()

        self.pending_reset = False
        self.should_close = False
        self.sky_color = np.zeros(4)
        self.init_time = 0.0
        self.actors: list[Actor] = []

        self.timer.start_timer("GAME_INSTANCE_INIT")

    def add_actor(self, actor: Actor) -> Actor:
        self.actors.append(actor)
        return actor

    def create_actor(self, name: str) -> Actor:
        return self.add_actor(Actor(name))

    def find_components(self, component_type: type[T]) -> list[T]:
        """All components of ``component_type`` over every actor, in order."""
        return [c for actor in self.actors for c in actor.get_components(component_type)]

    def window_minimized(self) -> bool:
        width, height = self.window_size
        return width < 1 or height < 1

    def process_mouse(self, xpos: float, ypos: float) -> None:
        self.on_mouse_move.invoke(xpos, ypos)

    def process_scroll(self, xoffset: float, yoffset: float) -> None:
        self.on_mouse_scroll.invoke(xoffset, yoffset)

    def process_keyboard(self) -> None:
        state = self.game_state
        keys = self.input
        state.hide_gui = keys.toggle_on_key_down(Key.H, state.hide_gui)

        if keys.get_key(Key.ESCAPE):
            self.should_close = True
        if keys.get_key_down(Key.O):
            state.step = True
            state.pause = False
        for i in range(9):
            if keys.get_key_down(Key.KEY_1 + i) and self.engine is not None:
                self.engine.switch_scene(i)
        if keys.get_key_down(Key.R):
            if self.engine is not None:
                self.engine.reset()
            else:
                self.pending_reset = True

    def initialize(self) -> None:
        for actor in self.actors:
            actor.start()

    def step(self) -> None:
        """One iteration of the main loop: input, logic and callbacks."""
        self.process_keyboard()

        timer = self.timer
        state = self.game_state
        timer.start_timer("CPU_TIME")
        timer.update_delta_time()

        if not state.pause:
            timer.next_frame()
            if timer.next_fixed_frame():
                for actor in self.actors:
                    actor.fixed_update()
                self.animation_update.invoke()
                if state.step:
                    state.pause = True
                    state.step = False
            for actor in self.actors:
                actor.update()

        self.input.on_update()
        self.god_update.invoke()
        timer.end_timer("CPU_TIME")

    def finalize(self) -> None:
        for actor in self.actors:
            actor.on_destroy()
        self.on_finalize.invoke()

    def run(self, max_frames: int | None = None) -> int:
        """Start the actors, loop until closed or reset, then finish them."""
        self.initialize()
        self.init_time = self.timer.end_timer("GAME_INSTANCE_INIT") * 1000.0
        frames = 0
        while not self.should_close and not self.pending_reset:
            if max_frames is not None and frames >= max_frames:
                break
            frames += 1
            if self.window_minimized():
                continue
            self.step()
        self.finalize()
        return 0