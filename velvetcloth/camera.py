"""Camera and light components."""

from __future__ import annotations

import enum
import math

import numpy as np

from . import helper
from .actor import Component

_FRONT = np.array([0.0, 0.0, -1.0])
_UP = np.array([0.0, 1.0, 0.0])


class Camera(Component):
    """A perspective camera oriented by its actor's rotation."""

    NEAR = 0.01
    FAR = 100.0

    def __init__(self, zoom: float = 45.0) -> None:
        super().__init__()
        self.zoom = zoom

    def position(self) -> np.ndarray:
        return self.transform().position

    def front(self) -> np.ndarray:
        return helper.rotate_with_degree(_FRONT, self.transform().rotation)

    def up(self) -> np.ndarray:
        return helper.rotate_with_degree(_UP, self.transform().rotation)

    def view(self) -> np.ndarray:
        position = self.position()
        return helper.look_at(position, position + self.front(), self.up())

    def projection(self, aspect: float) -> np.ndarray:
        """Projection matrix for a viewport of the given width/height ratio."""
        return helper.perspective(math.radians(self.zoom), aspect, self.NEAR, self.FAR)


class LightType(enum.Enum):
    POINT = enum.auto()
    DIRECTIONAL = enum.auto()
    SPOT_LIGHT = enum.auto()


class Light(Component):
    """A light source placed by its actor's transform."""

    def __init__(self, light_type: LightType = LightType.SPOT_LIGHT) -> None:
        super().__init__()
        self.light_type = light_type
        self.color = np.full(3, 1.3)
        self.ambient = 0.15
        self.inner_cutoff = 40.0
        self.outer_cutoff = 50.0
        self.constant = 1.0
        self.linear = 0.09
        self.quadratic = 0.032

    def position(self) -> np.ndarray:
        """Homogeneous position; ``w`` is 0 for directional lights."""
        w = 0.0 if self.light_type is LightType.DIRECTIONAL else 1.0
        return np.append(self.transform().position, w)