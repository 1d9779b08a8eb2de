import math

import numpy as np
import pytest

from velvetcloth import helper
from velvetcloth.actor import Actor
from velvetcloth.camera import Camera, Light, LightType


def _camera(position=(0.0, 0.0, 0.0), rotation=(0.0, 0.0, 0.0)):
    actor = Actor("camera")
    actor.initialize(position, (1.0, 1.0, 1.0), rotation)
    camera = Camera()
    actor.add_component(camera)
    return camera


def test_default_orientation():
    camera = _camera()
    np.testing.assert_allclose(camera.front(), [0.0, 0.0, -1.0], atol=1e-12)
    np.testing.assert_allclose(camera.up(), [0.0, 1.0, 0.0], atol=1e-12)


def test_yaw_rotates_front():
    camera = _camera(rotation=(0.0, 90.0, 0.0))
    np.testing.assert_allclose(camera.front(), [-1.0, 0.0, 0.0], atol=1e-9)
    np.testing.assert_allclose(camera.up(), [0.0, 1.0, 0.0], atol=1e-9)


def test_position_follows_actor():
    camera = _camera(position=(0.35, 3.3, 7.2))
    np.testing.assert_allclose(camera.position(), [0.35, 3.3, 7.2])


def test_view_moves_camera_to_origin():
    camera = _camera(position=(0.35, 3.3, 7.2), rotation=(-21.0, 2.25, 0.0))
    view = camera.view()
    eye = view @ np.append(camera.position(), 1.0)
    np.testing.assert_allclose(eye, [0.0, 0.0, 0.0, 1.0], atol=1e-9)
    ahead = view @ np.append(camera.position() + camera.front(), 1.0)
    np.testing.assert_allclose(ahead[:3], [0.0, 0.0, -1.0], atol=1e-9)


def test_projection_uses_zoom():
    camera = _camera()
    camera.zoom = 30.0
    expected = helper.perspective(math.radians(30.0), 16 / 9, 0.01, 100.0)
    np.testing.assert_allclose(camera.projection(16 / 9), expected)


def test_projection_rejects_zero_aspect():
    with pytest.raises(ValueError):
        _camera().projection(0.0)


def test_light_position_w_component():
    actor = Actor("light")
    actor.initialize((2.5, 5.0, 2.5))
    spot = Light()
    directional = Light(LightType.DIRECTIONAL)
    point = Light(LightType.POINT)
    actor.add_components([spot, directional, point])
    np.testing.assert_allclose(spot.position(), [2.5, 5.0, 2.5, 1.0])
    np.testing.assert_allclose(directional.position(), [2.5, 5.0, 2.5, 0.0])
    assert point.position()[3] == 1.0


def test_light_defaults_to_spot_light():
    light = Light()
    assert light.light_type is LightType.SPOT_LIGHT
    assert light.inner_cutoff < light.outer_cutoff