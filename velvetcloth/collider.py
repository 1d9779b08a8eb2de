"""Signed-distance colliders that push cloth particles out of shapes."""

from __future__ import annotations

import numpy as np

from .actor import Component
from .common import ColliderType, SimParams
from .timer import Timer


class Collider(Component):
    """A sphere, plane or cube shape that cloth particles collide against.

    Spheres use the owning actor's position as centre and ``scale.x`` as
    radius; planes are the ground plane ``y = 0``.
    """

    def __init__(
        self,
        collider_type: ColliderType = ColliderType.SPHERE,
        sim_params: SimParams | None = None,
        fixed_delta_time: float = Timer.FIXED_DELTA_TIME,
    ) -> None:
        super().__init__()
        self.collider_type = collider_type
        self.sim_params = sim_params if sim_params is not None else SimParams()
        self.fixed_delta_time = fixed_delta_time
        self.last_pos = np.zeros(3)
        self.velocity = np.zeros(3)
        self.cur_transform = np.identity(4)
        self.last_transform = np.identity(4)

    def start(self) -> None:
        transform = self.transform()
        self.last_pos = transform.position.copy()
        self.cur_transform = transform.matrix()
        self.last_transform = self.cur_transform.copy()

    def fixed_update(self) -> None:
        transform = self.transform()
        cur_pos = transform.position.copy()
        self.velocity = (cur_pos - self.last_pos) / self.fixed_delta_time
        self.last_pos = cur_pos
        self.last_transform = self.cur_transform
        self.cur_transform = transform.matrix()

    def compute_sdf(self, position) -> np.ndarray:
        """Correction that moves ``position`` out of the shape (zero if outside)."""
        if self.collider_type is ColliderType.PLANE:
            return self.compute_plane_sdf(position)
        if self.collider_type is ColliderType.SPHERE:
            return self.compute_sphere_sdf(position)
        # Cube colliders have no distance function on this path.
        return np.zeros(3)

    def compute_plane_sdf(self, position) -> np.ndarray:
        position = np.asarray(position, dtype=float)
        margin = self.sim_params.collision_margin
        if position[1] < margin:
            return np.array([0.0, margin - position[1], 0.0])
        return np.zeros(3)

    def compute_sphere_sdf(self, position) -> np.ndarray:
        transform = self.transform()
        center = transform.position
        radius = transform.scale[0] + self.sim_params.collision_margin
        diff = np.asarray(position, dtype=float) - center
        distance = float(np.linalg.norm(diff))
        if distance < radius:
            with np.errstate(invalid="ignore", divide="ignore"):
                direction = diff / distance
            return (radius - distance) * direction
        return np.zeros(3)