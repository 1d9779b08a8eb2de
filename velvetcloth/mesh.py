"""Triangle meshes and the generated cloth grids."""

from __future__ import annotations

import random as _random
from typing import Sequence

import numpy as np

_CLOTH_SIZE = 2.0


def _rows(values, width: int) -> np.ndarray:
    if values is None:
        return np.zeros((0, width))
    return np.asarray(values, dtype=float).reshape(-1, width)


class Mesh:
    """Vertex positions with optional normals, texture coordinates and indices."""

    def __init__(self, vertices, normals=None, tex_coords=None, indices=None) -> None:
        self.vertices = _rows(vertices, 3)
        self.normals = _rows(normals, 3)
        self.tex_coords = _rows(tex_coords, 2)
        self.indices = (
            np.zeros(0, dtype=np.int64)
            if indices is None
            else np.asarray(indices, dtype=np.int64).ravel()
        )

    @classmethod
    def from_packed(
        cls, attribute_sizes: Sequence[int], packed_vertices: Sequence[float], indices=None
    ) -> "Mesh":
        """Build a mesh from interleaved position[/normal]/uv floats."""
        stride = sum(attribute_sizes)
        if stride < 3:
            raise ValueError("a vertex needs at least three position floats")
        packed = np.asarray(packed_vertices, dtype=float)
        count = len(packed) // stride
        table = packed[: count * stride].reshape(count, stride)
        has_normals = stride >= 6
        uv_offset = 6 if has_normals else 3
        normals = table[:, 3:6] if has_normals else None
        tex_coords = table[:, uv_offset : uv_offset + 2] if stride >= uv_offset + 2 else None
        return cls(table[:, :3], normals, tex_coords, indices)

    def use_indices(self) -> bool:
        return len(self.indices) > 0

    def draw_count(self) -> int:
        return len(self.indices) if self.use_indices() else len(self.vertices)

    def set_vertices_and_normals(self, vertices, normals) -> None:
        self.vertices = _rows(vertices, 3)
        self.normals = _rows(normals, 3)


def _check_resolution(resolution: int) -> None:
    if resolution < 1:
        raise ValueError("resolution must be at least 1")


def _grid_index(resolution: int, x, y):
    return x * (resolution + 1) + y


def generate_cloth_mesh(resolution: int) -> Mesh:
    """A square cloth of ``resolution`` x ``resolution`` quads hanging below y = 0."""
    _check_resolution(resolution)
    ys, xs = np.meshgrid(
        np.arange(resolution + 1), np.arange(resolution + 1), indexing="ij"
    )
    u = xs.ravel() / resolution
    v = ys.ravel() / resolution
    vertices = _CLOTH_SIZE * np.column_stack([u - 0.5, -v, np.zeros_like(u)])
    normals = np.tile([0.0, 0.0, 1.0], (len(u), 1))
    uvs = np.column_stack([u, v])

    qx, qy = np.meshgrid(np.arange(resolution), np.arange(resolution), indexing="ij")
    a = _grid_index(resolution, qx.ravel(), qy.ravel())
    b = _grid_index(resolution, qx.ravel() + 1, qy.ravel())
    c = a + 1
    d = b + 1
    indices = np.column_stack([a, b, c, c, b, d]).ravel()
    return Mesh(vertices, normals, uvs, indices)


def _angle(left: np.ndarray, mid: np.ndarray, right: np.ndarray) -> float:
    with np.errstate(invalid="ignore"):
        return float(np.arccos(np.dot(left - mid, right - mid)))


def generate_cloth_mesh_irregular(resolution: int, rng=None) -> Mesh:
    """A cloth grid with jittered interior vertices and angle-based diagonals."""
    _check_resolution(resolution)
    rng = rng if rng is not None else _random
    noise_size = 1.0 / resolution * 0.4

    uv_rows = []
    for y in range(resolution + 1):
        for x in range(resolution + 1):
            boundary = x in (0, resolution) or y in (0, resolution)
            noise = (0.0, 0.0) if boundary else (
                noise_size * rng.random(),
                noise_size * rng.random(),
            )
            uv_rows.append((noise[0] + x / resolution, noise[1] + y / resolution))
    uvs = np.array(uv_rows)
    vertices = _CLOTH_SIZE * np.column_stack(
        [uvs[:, 0] - 0.5, -uvs[:, 1], np.zeros(len(uvs))]
    )
    normals = np.tile([0.0, 0.0, 1.0], (len(uvs), 1))

    indices: list[int] = []
    for y in range(resolution):
        for x in range(resolution):
            a = _grid_index(resolution, x, y)
            b = _grid_index(resolution, x + 1, y)
            c = _grid_index(resolution, x, y + 1)
            d = _grid_index(resolution, x + 1, y + 1)
            pa, pb, pc, pd = vertices[[a, b, c, d]]
            angle1 = _angle(pc, pa, pb)
            angle2 = _angle(pa, pb, pd)
            angle3 = _angle(pa, pc, pd)
            angle4 = _angle(pc, pd, pb)
            if angle1 + angle4 > angle2 + angle3:
                indices.extend((a, d, c, a, b, d))
            else:
                indices.extend((a, b, c, c, b, d))
    return Mesh(vertices, normals, uvs, indices)