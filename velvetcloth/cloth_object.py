"""Cloth component with mouse picking of individual particles."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

import numpy as np

from . import helper
from .actor import Component
from .cloth_solver import ClothSolver
from .common import Config, SimParams
from .input import MouseButton
from .mesh import Mesh
from .timer import Timer


@dataclass
class Ray:
    origin: np.ndarray
    direction: np.ndarray


@dataclass
class RaycastCollision:
    collide: bool = False
    object_index: int = -1
    distance_to_origin: float = 0.0


def mouse_ray(screen_pos, window_size, view_projection) -> Ray:
    """World-space ray under a cursor position given in window pixels."""
    screen = np.asarray(screen_pos, dtype=float)
    size = np.asarray(window_size, dtype=float)
    if size.shape != (2,) or np.any(size <= 0):
        raise ValueError("window size must be two positive numbers")
    ndc = 2.0 * screen / size - 1.0
    ndc[1] = -ndc[1]

    inverse = np.linalg.inv(np.asarray(view_projection, dtype=float))
    near_raw = inverse @ np.array([ndc[0], ndc[1], 0.0, 1.0])
    far_raw = inverse @ np.array([ndc[0], ndc[1], 1.0, 1.0])
    near = near_raw[:3] / near_raw[3]
    far = far_raw[:3] / far_raw[3]
    direction = far - near
    return Ray(near, direction / np.linalg.norm(direction))


def find_closest_vertex_to_ray(positions, ray: Ray, max_distance: float = 0.2) -> RaycastCollision:
    """Vertex nearest to the ray line; a hit only when closer than ``max_distance``."""
    points = np.asarray(positions, dtype=float).reshape(-1, 3)
    if len(points) == 0:
        return RaycastCollision()
    offsets = points - ray.origin
    to_ray = np.linalg.norm(np.cross(ray.direction, offsets), axis=1)
    index = int(np.argmin(to_ray))
    return RaycastCollision(
        bool(to_ray[index] < max_distance),
        index,
        float(np.dot(ray.direction, offsets[index])),
    )


class ClothObject(Component):
    """Runs a ``ClothSolver`` for a mesh and lets the mouse drag its particles."""

    GRAB_DISTANCE = 0.2

    def __init__(
        self,
        resolution: int,
        mesh: Mesh,
        *,
        input_state=None,
        camera=None,
        colliders: Sequence = (),
        sim_params: SimParams | None = None,
        window_size=(Config.SCREEN_WIDTH, Config.SCREEN_HEIGHT),
        fixed_delta_time: float = Timer.FIXED_DELTA_TIME,
    ) -> None:
        super().__init__()
        self.mesh = mesh
        self.input_state = input_state
        self.camera = camera
        self.colliders = list(colliders)
        self.window_size = tuple(window_size)
        self.fixed_delta_time = fixed_delta_time
        self.solver = ClothSolver(resolution, sim_params)

        self._grabbing = False
        self._grabbed_vertex_mass = 0.0
        self._ray_collision = RaycastCollision()

    @property
    def is_grabbing(self) -> bool:
        return self._grabbing

    def set_attached_indices(self, indices: Iterable[int]) -> None:
        self.solver.set_attached_indices(indices)

    def start(self) -> None:
        transform = self.transform()
        self.solver.initialize(self.mesh, transform.matrix(), self.colliders)
        # The solver now holds world positions, so the actor sits at the origin.
        transform.reset()

    def update(self) -> None:
        self._handle_mouse_interaction()

    def fixed_update(self) -> None:
        self._update_grabbed_vertex()
        self.solver.simulate(self.fixed_delta_time)

    def _can_pick(self) -> bool:
        return self.input_state is not None and self.camera is not None

    def _mouse_ray(self) -> Ray:
        width, height = self.window_size
        view_projection = self.camera.projection(width / height) @ self.camera.view()
        return mouse_ray(self.input_state.mouse_pos(), self.window_size, view_projection)

    def _handle_mouse_interaction(self) -> None:
        if not self._can_pick():
            return
        masses = self.solver.inverse_mass
        if self.input_state.get_mouse_down(MouseButton.LEFT):
            self._ray_collision = find_closest_vertex_to_ray(
                self.solver.positions, self._mouse_ray(), self.GRAB_DISTANCE
            )
            if self._ray_collision.collide:
                index = self._ray_collision.object_index
                self._grabbing = True
                self._grabbed_vertex_mass = float(masses[index])
                masses[index] = 0.0

        if self.input_state.get_mouse_up(MouseButton.LEFT) and self._grabbing:
            self._grabbing = False
            masses[self._ray_collision.object_index] = self._grabbed_vertex_mass

    def _update_grabbed_vertex(self) -> None:
        if not self._grabbing or not self._can_pick():
            return
        ray = self._mouse_ray()
        mouse_pos = ray.origin + ray.direction * self._ray_collision.distance_to_origin
        index = self._ray_collision.object_index
        current = self.solver.positions[index].copy()
        target = helper.lerp(mouse_pos, current, 0.8)
        self.solver.positions[index] = target
        self.solver.velocities[index] += (target - current) / self.fixed_delta_time