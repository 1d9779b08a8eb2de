import numpy as np
import pytest

from velvetcloth.actor import Component
from velvetcloth.camera import Camera
from velvetcloth.game import GameInstance
from velvetcloth.input import Input, Key
from velvetcloth.timer import Timer


class _Clock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class _Recorder(Component):
    def __init__(self):
        super().__init__()
        self.calls = []

    def start(self):
        self.calls.append("start")

    def update(self):
        self.calls.append("update")

    def fixed_update(self):
        self.calls.append("fixed")

    def on_destroy(self):
        self.calls.append("destroy")


class _FakeEngine:
    def __init__(self):
        self.calls = []

    def switch_scene(self, index):
        self.calls.append(("switch", index))

    def reset(self):
        self.calls.append(("reset",))


def _game(**kwargs):
    clock = _Clock()
    game = GameInstance(input_state=Input(), timer=Timer(clock), **kwargs)
    return game, clock


def test_create_actor_adds_named_actor():
    game, _ = _game()
    actor = game.create_actor("Cloth")
    assert actor.name == "Cloth"
    assert game.actors == [actor]


def test_find_components_across_actors_in_order():
    game, _ = _game()
    first = _Recorder()
    second = _Recorder()
    game.create_actor("a").add_components([first, Camera()])
    game.create_actor("b").add_component(second)
    assert game.find_components(_Recorder) == [first, second]
    assert len(game.find_components(Camera)) == 1


def test_process_mouse_and_scroll_invoke_callbacks():
    game, _ = _game()
    moves, scrolls = [], []
    game.on_mouse_move.register(lambda x, y: moves.append((x, y)))
    game.on_mouse_scroll.register(lambda x, y: scrolls.append((x, y)))
    game.process_mouse(3.0, 4.0)
    game.process_scroll(0.0, -1.0)
    assert moves == [(3.0, 4.0)]
    assert scrolls == [(0.0, -1.0)]


def test_step_runs_fixed_update_and_animation():
    game, clock = _game()
    recorder = _Recorder()
    game.create_actor("a").add_component(recorder)
    animations = []
    game.animation_update.register(lambda: animations.append(1))
    game.initialize()
    clock.advance(0.02)
    game.step()
    assert recorder.calls == ["start", "fixed", "update"]
    assert animations == [1]
    assert game.timer.frame_count == 1


def test_paused_game_only_runs_god_update():
    game, clock = _game()
    game.game_state.pause = True
    recorder = _Recorder()
    game.create_actor("a").add_component(recorder)
    gods = []
    game.god_update.register(lambda: gods.append(1))
    clock.advance(0.02)
    game.step()
    assert recorder.calls == []
    assert gods == [1]


def test_step_key_runs_one_physics_frame_then_pauses():
    game, clock = _game()
    game.game_state.pause = True
    recorder = _Recorder()
    game.create_actor("a").add_component(recorder)
    game.input.set_key(Key.O, True)
    clock.advance(0.02)
    game.step()
    assert recorder.calls.count("fixed") == 1
    assert game.game_state.pause is True
    assert game.game_state.step is False


def test_h_key_toggles_hide_gui():
    game, clock = _game()
    game.input.set_key(Key.H, True)
    game.step()
    assert game.game_state.hide_gui is True
    game.step()
    assert game.game_state.hide_gui is True


def test_number_and_reset_keys_go_through_engine():
    engine = _FakeEngine()
    game, _ = _game(engine=engine)
    game.input.set_key(Key.KEY_2, True)
    game.input.set_key(Key.R, True)
    game.process_keyboard()
    assert engine.calls == [("switch", 1), ("reset",)]


def test_reset_key_without_engine_marks_pending_reset():
    game, _ = _game()
    game.input.set_key(Key.R, True)
    game.process_keyboard()
    assert game.pending_reset is True


def test_escape_stops_run_after_one_frame():
    game, clock = _game()
    recorder = _Recorder()
    game.create_actor("a").add_component(recorder)
    game.input.set_key(Key.ESCAPE, True)
    assert game.run(max_frames=10) == 0
    assert recorder.calls.count("update") == 1
    assert recorder.calls[0] == "start"
    assert recorder.calls[-1] == "destroy"


def test_run_respects_max_frames():
    game, _ = _game()
    gods = []
    game.god_update.register(lambda: gods.append(1))
    game.run(max_frames=5)
    assert len(gods) == 5


def test_minimized_window_skips_frames():
    game, _ = _game(window_size=(0, 600))
    recorder = _Recorder()
    game.create_actor("a").add_component(recorder)
    assert game.window_minimized() is True
    game.run(max_frames=3)
    assert "update" not in recorder.calls


def test_finalize_invokes_on_finalize():
    game, _ = _game()
    done = []
    game.on_finalize.register(lambda: done.append(True))
    game.finalize()
    assert done == [True]
    assert np.array_equal(game.sky_color, np.zeros(4))


def test_pending_reset_stops_run():
    game, _ = _game()
    gods = []

    def request_reset():
        gods.append(1)
        game.pending_reset = True

    game.god_update.register(request_reset)
    assert game.run(max_frames=10) == 0
    assert len(gods) == 1
    assert game.pending_reset is True


def test_end_timer_records_init_time():
    game, clock = _game()
    clock.advance(0.5)
    game.run(max_frames=0)
    assert game.init_time == pytest.approx(500.0)