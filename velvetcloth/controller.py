"""Fly-through camera control with keyboard, mouse drag and scroll."""

from __future__ import annotations

import numpy as np

from . import helper
from .actor import Component
from .camera import Camera
from .common import Config
from .input import Key, MouseButton


class PlayerController(Component):
    """Moves a camera with WASD/QE and rotates it while the right button is held."""

    MIN_ZOOM = 1.0
    MAX_ZOOM = 45.0
    MAX_PITCH = 89.0

    def __init__(self, game, camera: Camera | None = None) -> None:
        super().__init__()
        self.game = game
        self.camera = camera
        self.current_speed = np.zeros(3)
        self.last_x = Config.SCREEN_WIDTH / 2
        self.last_y = Config.SCREEN_HEIGHT / 2

    def start(self) -> None:
        if self.camera is None and self.actor is not None:
            self.camera = self.actor.get_component(Camera)
        self.game.on_mouse_move.register(self.on_mouse_move)
        self.game.god_update.register(self.god_update)

    def _require_camera(self) -> Camera:
        if self.camera is None:
            raise RuntimeError("camera not found")
        return self.camera

    def god_update(self) -> None:
        """Smoothly move the camera towards the velocity the keys ask for."""
        camera = self._require_camera()
        keys = self.game.input
        delta_time = self.game.timer.delta_time
        front = camera.front()
        up = camera.up()
        target = np.zeros(3)

        if keys.get_key(Key.W):
            target += front
        elif keys.get_key(Key.S):
            target -= front

        right = np.cross(front, up)
        right = right / np.linalg.norm(right)
        if keys.get_key(Key.A):
            target -= right
        elif keys.get_key(Key.D):
            target += right

        if keys.get_key(Key.Q):
            target += up
        elif keys.get_key(Key.E):
            target -= up

        self.current_speed = helper.lerp(self.current_speed, target, delta_time * 10)
        transform = camera.transform()
        transform.position = (
            transform.position
            + self.current_speed * Config.CAMERA_TRANSLATE_SPEED * delta_time
        )

    def on_mouse_scroll(self, xoffset: float, yoffset: float) -> None:
        camera = self._require_camera()
        camera.zoom = min(max(camera.zoom - float(yoffset), self.MIN_ZOOM), self.MAX_ZOOM)

    def on_mouse_move(self, xpos: float, ypos: float) -> None:
        if self.game.input.get_mouse(MouseButton.RIGHT):
            transform = self._require_camera().transform()
            rotation = transform.rotation
            yaw = -float(rotation[1])
            pitch = float(rotation[0])

            sensitivity = Config.CAMERA_ROTATE_SENSITIVITY
            xoffset = (float(xpos) - self.last_x) * sensitivity
            yoffset = (self.last_y - float(ypos)) * sensitivity
            yaw += xoffset
            pitch = min(max(pitch + yoffset, -self.MAX_PITCH), self.MAX_PITCH)
            transform.rotation = np.array([pitch, -yaw, 0.0])
        self.last_x = float(xpos)
        self.last_y = float(ypos)