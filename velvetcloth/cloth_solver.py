"""Position-based cloth solver running on the CPU."""

from __future__ import annotations

import math
from typing import Iterable, Sequence

import numpy as np

from .common import SimParams
from .mesh import Mesh
from .spatial_hash import SpatialHash
from .timer import Timer


class ClothSolver:
    """Simulates one square cloth grid with stretch, bending and collisions."""

    EPSILON = 1e-6

    def __init__(self, resolution: int, sim_params: SimParams | None = None) -> None:
        if resolution < 1:
            raise ValueError("resolution must be at least 1")
        self.resolution = resolution
        self.sim_params = sim_params if sim_params is not None else SimParams()

        self.positions = np.zeros((0, 3))
        self.predicted = np.zeros((0, 3))
        self.velocities = np.zeros((0, 3))
        self.inverse_mass = np.zeros(0)

        self.stretch_constraints: list[tuple[int, int, float]] = []
        self.attachment_constraints: list[tuple[int, np.ndarray]] = []
        self.bending_constraints: list[tuple[int, int, int, int, float]] = []

        self.indices = np.zeros(0, dtype=np.int64)
        self.colliders: list = []
        self.mesh: Mesh | None = None

        self._attached_indices: list[int] = []
        self._particle_diameter = 0.0
        self._spatial_hash: SpatialHash | None = None

    @property
    def particle_diameter(self) -> float:
        return self._particle_diameter

    def set_attached_indices(self, indices: Iterable[int]) -> None:
        """Particles pinned to their initial position; applied by ``initialize``."""
        self._attached_indices = [int(i) for i in indices]

    def initialize(self, mesh: Mesh, model_matrix, colliders: Sequence = ()) -> None:
        """Take the mesh vertices into world space and build the constraints."""
        self.mesh = mesh
        model = np.asarray(model_matrix, dtype=float)
        vertices = np.asarray(mesh.vertices, dtype=float)
        homogeneous = np.column_stack([vertices, np.ones(len(vertices))])
        self.positions = (homogeneous @ model.T)[:, :3]

        count = len(self.positions)
        self.indices = np.asarray(mesh.indices, dtype=np.int64)
        self.colliders = list(colliders)
        self.velocities = np.zeros((count, 3))
        self.predicted = np.zeros((count, 3))
        self.inverse_mass = np.ones(count)

        self._particle_diameter = float(
            np.linalg.norm(self.positions[0] - self.positions[self.resolution + 1])
        )
        self._spatial_hash = SpatialHash(self._particle_diameter, count)

        self.stretch_constraints = []
        self.attachment_constraints = []
        self.bending_constraints = []
        self._generate_stretch()
        self._generate_attachment()
        self._generate_bending()

    def simulate(self, frame_time: float = Timer.FIXED_DELTA_TIME) -> None:
        """Advance the cloth by one frame and write the result into the mesh."""
        if self.mesh is None or self._spatial_hash is None:
            raise RuntimeError("simulate called before initialize")
        params = self.sim_params
        substep_time = frame_time / params.num_substeps

        # Pre-stabilisation: resolve penetration without affecting velocity.
        self._collide_sdf(self.positions)

        self._predict_positions(frame_time)
        self._spatial_hash.hash_objects(self.predicted)

        for _ in range(params.num_substeps):
            self._predict_positions(substep_time)
            for _ in range(params.num_iterations):
                self._solve_stretch()
                self._solve_bending(substep_time)
                self._collide_particles()
                self._collide_sdf(self.predicted)
                self._solve_attachment()
            self._finalize(substep_time)

        normals = self.compute_normals(self.positions)
        self.mesh.set_vertices_and_normals(self.positions, normals)

    def compute_friction(self, correction, relative_velocity) -> np.ndarray:
        """Tangential displacement opposing sliding along a contact correction."""
        correction = np.asarray(correction, dtype=float)
        relative_velocity = np.asarray(relative_velocity, dtype=float)
        correction_length = float(np.linalg.norm(correction))
        friction = self.sim_params.friction
        if friction <= 0 or correction_length <= 0:
            return np.zeros(3)
        normal = correction / correction_length
        tangential = relative_velocity - normal * float(np.dot(relative_velocity, normal))
        tangential_length = float(np.linalg.norm(tangential))
        max_tangential = correction_length * friction
        factor = 1.0 if tangential_length == 0 else min(max_tangential / tangential_length, 1.0)
        return -tangential * factor

    def compute_normals(self, positions) -> np.ndarray:
        """Vertex normals averaged from the triangles touching each vertex."""
        positions = np.asarray(positions, dtype=float).reshape(-1, 3)
        normals = np.zeros_like(positions)
        usable = len(self.indices) - len(self.indices) % 3
        triangles = self.indices[:usable].reshape(-1, 3)
        if len(triangles):
            p1 = positions[triangles[:, 0]]
            p2 = positions[triangles[:, 1]]
            p3 = positions[triangles[:, 2]]
            face = np.cross(p2 - p1, p3 - p1)
            for corner in range(3):
                np.add.at(normals, triangles[:, corner], face)
        with np.errstate(invalid="ignore", divide="ignore"):
            return normals / np.linalg.norm(normals, axis=1, keepdims=True)

    # Constraint generation

    def _vertex_at(self, x: int, y: int) -> int:
        return x * (self.resolution + 1) + y

    def _add_stretch(self, idx1: int, idx2: int) -> None:
        rest = float(np.linalg.norm(self.positions[idx1] - self.positions[idx2]))
        self.stretch_constraints.append((idx1, idx2, rest))

    def _generate_stretch(self) -> None:
        res = self.resolution
        for x in range(res + 1):
            for y in range(res + 1):
                if y != res:
                    self._add_stretch(self._vertex_at(x, y), self._vertex_at(x, y + 1))
                if x != res:
                    self._add_stretch(self._vertex_at(x, y), self._vertex_at(x + 1, y))
                if y != res and x != res:
                    self._add_stretch(self._vertex_at(x, y), self._vertex_at(x + 1, y + 1))
                    self._add_stretch(self._vertex_at(x, y + 1), self._vertex_at(x + 1, y))

    def _generate_attachment(self) -> None:
        for index in self._attached_indices:
            self.attachment_constraints.append((index, self.positions[index].copy()))
            self.inverse_mass[index] = 0.0

    def _generate_bending(self) -> None:
        # Assumes quads made of two triangles laid out as the generated cloth grid.
        for start in range(0, len(self.indices) - 5, 6):
            quad = self.indices[start : start + 6]
            self.bending_constraints.append(
                (int(quad[0]), int(quad[1]), int(quad[2]), int(quad[5]), 0.0)
            )

    # Core physics

    def _predict_positions(self, delta_time: float) -> None:
        self.velocities += self.sim_params.gravity * delta_time
        self.predicted = self.positions + self.velocities * delta_time

    def _solve_stretch(self) -> None:
        predicted = self.predicted
        for idx1, idx2, rest in self.stretch_constraints:
            diff = predicted[idx1] - predicted[idx2]
            distance = float(np.linalg.norm(diff))
            w1 = self.inverse_mass[idx1]
            w2 = self.inverse_mass[idx2]
            # Unilateral: only resist stretching, never compression.
            if distance > rest and w1 + w2 > 0:
                gradient = diff / (distance + self.EPSILON)
                lam = (distance - rest) / (w1 + w2)
                predicted[idx1] -= w1 * lam * gradient
                predicted[idx2] += w2 * lam * gradient

    def _solve_bending(self, delta_time: float) -> None:
        eps = self.EPSILON
        xpbd_bend = self.sim_params.bend_compliance / delta_time / delta_time
        predicted = self.predicted
        mass = self.inverse_mass
        for c0, c1, c2, c3, rest_angle in self.bending_constraints:
            idx1, idx2, idx3, idx4 = c2, c1, c0, c3
            w1, w2, w3, w4 = mass[idx1], mass[idx2], mass[idx3], mass[idx4]

            p1 = predicted[idx1]
            p2 = predicted[idx2] - p1
            p3 = predicted[idx3] - p1
            p4 = predicted[idx4] - p1

            cross23 = np.cross(p2, p3)
            cross24 = np.cross(p2, p4)
            with np.errstate(invalid="ignore", divide="ignore"):
                n1 = cross23 / np.linalg.norm(cross23)
                n2 = cross24 / np.linalg.norm(cross24)
                d = float(np.dot(n1, n2))
            if math.isnan(d):
                continue
            d = min(max(d, 0.0), 1.0)
            angle = math.acos(d)
            if angle < eps:
                continue

            len23 = float(np.linalg.norm(cross23)) + eps
            len24 = float(np.linalg.norm(cross24)) + eps
            q3 = (np.cross(p2, n2) + np.cross(n1, p2) * d) / len23
            q4 = (np.cross(p2, n1) + np.cross(n2, p2) * d) / len24
            q2 = (
                -(np.cross(p3, n2) + np.cross(n1, p3) * d) / len23
                - (np.cross(p4, n1) + np.cross(n2, p4) * d) / len24
            )
            q1 = -q2 - q3 - q4

            denom = xpbd_bend + (
                w1 * np.dot(q1, q1) + w2 * np.dot(q2, q2)
                + w3 * np.dot(q3, q3) + w4 * np.dot(q4, q4)
            )
            if denom < eps:
                continue
            lam = math.sqrt(1.0 - d * d) * (angle - rest_angle) / denom

            predicted[idx1] += w1 * lam * q1
            predicted[idx2] += w2 * lam * q2
            predicted[idx3] += w3 * lam * q3
            predicted[idx4] += w4 * lam * q4

    def _collide_sdf(self, positions: np.ndarray) -> None:
        if not self.colliders:
            return
        for i, previous in enumerate(self.positions):
            for collider in self.colliders:
                correction = collider.compute_sdf(positions[i].copy())
                positions[i] += correction
                relative_velocity = positions[i] - previous
                positions[i] += self.compute_friction(correction, relative_velocity)

    def _solve_attachment(self) -> None:
        for index, position in self.attachment_constraints:
            self.predicted[index] = position

    def _collide_particles(self) -> None:
        predicted = self.predicted
        positions = self.positions
        mass = self.inverse_mass
        expected = self._particle_diameter
        for i in range(len(predicted)):
            for j in self._spatial_hash.neighbors(i):
                if i >= j:
                    continue
                diff = predicted[i] - predicted[j]
                distance = float(np.linalg.norm(diff))
                w1, w2 = mass[i], mass[j]
                if distance < expected and w1 + w2 > 0:
                    gradient = diff / (distance + self.EPSILON)
                    lam = (distance - expected) / (w1 + w2)
                    common = lam * gradient
                    predicted[i] -= w1 * common
                    predicted[j] += w2 * common

                    relative_velocity = (predicted[i] - positions[i]) - (predicted[j] - positions[j])
                    friction = self.compute_friction(common, relative_velocity)
                    predicted[i] += w1 * friction
                    predicted[j] -= w2 * friction

    def _finalize(self, delta_time: float) -> None:
        damping = 1.0 - self.sim_params.damping * delta_time
        self.velocities = (self.predicted - self.positions) / delta_time * damping
        self.positions = self.predicted.copy()