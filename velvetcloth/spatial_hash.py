"""Uniform-grid spatial hash used to find nearby particles."""

from __future__ import annotations

import math
from itertools import accumulate
from typing import Sequence

import numpy as np

_PRIME_X = 92837111
_PRIME_Y = 689287499
_PRIME_Z = 283923481


def _wrap_int32(value: int) -> int:
    return (value + 2**31) % 2**32 - 2**31


class SpatialHash:
    """Buckets positions into hashed grid cells of side ``spacing``."""

    def __init__(self, spacing: float, max_num_objects: int) -> None:
        if spacing <= 0:
            raise ValueError("spacing must be positive")
        if max_num_objects < 1:
            raise ValueError("max_num_objects must be at least 1")
        self.spacing = float(spacing)
        self.max_num_objects = max_num_objects
        self.table_size = 2 * max_num_objects
        self._cell_start = [0] * (self.table_size + 1)
        self._cell_entries: list[int] = []
        self._neighbors: list[list[int]] = [[] for _ in range(max_num_objects)]

    def int_coord(self, value: float) -> int:
        return math.floor(value / self.spacing)

    def hash_coords(self, x: int, y: int, z: int) -> int:
        """Hash of a cell, using 32-bit wrapping arithmetic."""
        h = (
            _wrap_int32(x * _PRIME_X)
            ^ _wrap_int32(y * _PRIME_Y)
            ^ _wrap_int32(z * _PRIME_Z)
        )
        return abs(h) % self.table_size

    def hash_position(self, position) -> int:
        x, y, z = (self.int_coord(v) for v in position)
        return self.hash_coords(x, y, z)

    def hash_objects(self, positions: Sequence) -> None:
        """Rebuild the table for ``positions`` and cache every neighbour list."""
        positions = np.asarray(positions, dtype=float).reshape(-1, 3)
        if len(positions) > self.max_num_objects:
            raise ValueError(
                f"{len(positions)} objects exceed the capacity of {self.max_num_objects}"
            )
        hashes = [self.hash_position(p) for p in positions]
        counts = [0] * self.table_size
        for h in hashes:
            counts[h] += 1
        self._cell_start = [0, *accumulate(counts)]
        # Within a cell, later objects come first.
        self._cell_entries = sorted(range(len(hashes)), key=lambda i: (hashes[i], -i))
        for i, position in enumerate(positions):
            self._neighbors[i] = self.query_neighbors(position)

    def neighbors(self, index: int) -> list[int]:
        """Cached candidates near object ``index``, itself included."""
        return self._neighbors[index]

    def query_neighbors(self, position) -> list[int]:
        """Objects in the 27 cells around ``position``."""
        ix, iy, iz = (self.int_coord(v) for v in position)
        result: list[int] = []
        for x in range(ix - 1, ix + 2):
            for y in range(iy - 1, iy + 2):
                for z in range(iz - 1, iz + 2):
                    h = self.hash_coords(x, y, z)
                    start, end = self._cell_start[h], self._cell_start[h + 1]
                    result.extend(self._cell_entries[start:end])
        return result