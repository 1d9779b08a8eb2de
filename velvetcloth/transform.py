"""Position, rotation and scale of an actor."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from . import helper


def _zeros() -> np.ndarray:
    return np.zeros(3)


def _ones() -> np.ndarray:
    return np.ones(3)


@dataclass(eq=False)
class Transform:
    """Placement of an actor; rotation holds Euler angles in degrees."""

    actor: Any = None
    position: np.ndarray = field(default_factory=_zeros)
    rotation: np.ndarray = field(default_factory=_zeros)
    scale: np.ndarray = field(default_factory=_ones)

    def __post_init__(self) -> None:
        self.position = np.asarray(self.position, dtype=float).copy()
        self.rotation = np.asarray(self.rotation, dtype=float).copy()
        self.scale = np.asarray(self.scale, dtype=float).copy()

    def matrix(self) -> np.ndarray:
        """Model matrix: translate, then rotate, then scale."""
        result = helper.translate(np.identity(4), self.position)
        result = helper.rotate_matrix_with_degree(result, self.rotation)
        return helper.scale(result, self.scale)

    def reset(self) -> None:
        """Return to the identity placement."""
        self.position = _zeros()
        self.rotation = _zeros()
        self.scale = _ones()