import numpy as np
import pytest

from velvetcloth.camera import Camera
from velvetcloth.common import Config
from velvetcloth.controller import PlayerController
from velvetcloth.game import GameInstance
from velvetcloth.input import Input, Key, MouseButton
from velvetcloth.timer import Timer


class _Clock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def _setup():
    clock = _Clock()
    game = GameInstance(input_state=Input(), timer=Timer(clock))
    actor = game.create_actor("Prefab Camera")
    camera = Camera()
    controller = PlayerController(game)
    actor.add_components([camera, controller])
    game.initialize()
    return game, clock, camera, controller


def _tick(game, clock, seconds):
    clock.now += seconds
    game.timer.update_delta_time()


def test_start_finds_camera_and_registers_callbacks():
    game, _, camera, controller = _setup()
    assert controller.camera is camera
    assert not game.on_mouse_move.empty()
    assert not game.god_update.empty()


def test_forward_key_moves_along_front():
    game, clock, camera, controller = _setup()
    _tick(game, clock, 0.1)
    game.input.set_key(Key.W, True)
    controller.god_update()
    position = camera.position()
    assert np.linalg.norm(position) > 0
    assert np.allclose(position / np.linalg.norm(position), camera.front())


def test_strafe_right_moves_along_cross_of_front_and_up():
    game, clock, camera, controller = _setup()
    _tick(game, clock, 0.1)
    game.input.set_key(Key.D, True)
    controller.god_update()
    right = np.cross(camera.front(), camera.up())
    position = camera.position()
    assert np.allclose(position / np.linalg.norm(position), right / np.linalg.norm(right))


def test_no_keys_keeps_camera_still():
    game, clock, camera, controller = _setup()
    _tick(game, clock, 0.1)
    controller.god_update()
    assert np.allclose(camera.position(), np.zeros(3))


def test_scroll_clamps_zoom():
    _, _, camera, controller = _setup()
    controller.on_mouse_scroll(0.0, -10.0)
    assert camera.zoom == 45.0
    controller.on_mouse_scroll(0.0, 100.0)
    assert camera.zoom == 1.0


def test_scroll_changes_zoom_by_offset():
    _, _, camera, controller = _setup()
    before = camera.zoom
    controller.on_mouse_scroll(0.0, 5.0)
    assert camera.zoom == pytest.approx(before - 5.0)


def test_mouse_move_without_button_only_tracks_cursor():
    game, _, camera, controller = _setup()
    game.process_mouse(100.0, 200.0)
    assert np.allclose(camera.transform().rotation, np.zeros(3))
    assert (controller.last_x, controller.last_y) == (100.0, 200.0)


def test_mouse_drag_rotates_yaw():
    game, _, camera, controller = _setup()
    game.process_mouse(100.0, 100.0)
    game.input.set_mouse_button(MouseButton.RIGHT, True)
    game.process_mouse(110.0, 100.0)
    rotation = camera.transform().rotation
    assert rotation[1] == pytest.approx(-10.0 * Config.CAMERA_ROTATE_SENSITIVITY)
    assert rotation[0] == pytest.approx(0.0)


def test_pitch_is_clamped():
    game, _, camera, controller = _setup()
    game.input.set_mouse_button(MouseButton.RIGHT, True)
    controller.on_mouse_move(controller.last_x, controller.last_y - 10000.0)
    assert camera.transform().rotation[0] == pytest.approx(89.0)
    controller.on_mouse_move(controller.last_x, controller.last_y + 100000.0)
    assert camera.transform().rotation[0] == pytest.approx(-89.0)


def test_missing_camera_raises():
    game = GameInstance(input_state=Input(), timer=Timer(_Clock()))
    controller = PlayerController(game)
    game.create_actor("empty").add_component(controller)
    game.initialize()
    with pytest.raises(RuntimeError):
        controller.god_update()