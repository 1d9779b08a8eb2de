"""Simulation parameters, game state flags, callbacks and configuration."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator

import numpy as np


def _default_gravity() -> np.ndarray:
    return np.array([0.0, -9.8, 0.0])


@dataclass
class SimParams:
    """Tunable parameters of the cloth solver."""

    num_substeps: int = 2
    num_iterations: int = 4
    max_num_neighbors: int = 64
    max_speed: float = 50.0

    gravity: np.ndarray = field(default_factory=_default_gravity)
    bend_compliance: float = 0.0
    damping: float = 0.25
    relaxation_factor: float = 1.0
    long_range_stretchiness: float = 1.2

    collision_margin: float = 0.06
    friction: float = 0.1
    enable_self_collision: bool = True
    interleaved_hash: int = 3

    num_particles: int = 0
    particle_diameter: float = 0.0
    delta_time: float = 0.0

    particle_diameter_scalar: float = 1.5
    hash_cell_size_scalar: float = 1.5

    def __post_init__(self) -> None:
        self.gravity = np.asarray(self.gravity, dtype=float).copy()


@dataclass
class GameState:
    """Run-time switches of the main loop."""

    step: bool = False
    pause: bool = False
    render_wireframe: bool = False
    draw_particles: bool = False
    hide_gui: bool = False
    detail_timer: bool = False


class Callback:
    """An ordered list of functions invoked together."""

    def __init__(self) -> None:
        self._funcs: list[Callable[..., Any]] = []

    def register(self, func: Callable[..., Any]) -> None:
        self._funcs.append(func)

    def invoke(self, *args: Any) -> None:
        # Iterate over a snapshot so callbacks may register further callbacks.
        for func in list(self._funcs):
            func(*args)

    def clear(self) -> None:
        self._funcs.clear()

    def empty(self) -> bool:
        return not self._funcs

    def __len__(self) -> int:
        return len(self._funcs)

    def __iter__(self) -> Iterator[Callable[..., Any]]:
        return iter(self._funcs)


class ColliderType(enum.Enum):
    SPHERE = enum.auto()
    PLANE = enum.auto()
    CUBE = enum.auto()


class Config:
    """Fixed application settings."""

    CAMERA_TRANSLATE_SPEED = 5.0
    CAMERA_ROTATE_SENSITIVITY = 0.15

    SCREEN_WIDTH = 1600
    SCREEN_HEIGHT = 900

    SHADOW_WIDTH = 1024
    SHADOW_HEIGHT = 1024