import numpy as np

from velvetcloth.common import Callback, GameState, SimParams


def test_sim_params_defaults_from_source():
    params = SimParams()
    assert params.num_substeps == 2
    assert params.num_iterations == 4
    assert params.max_num_neighbors == 64
    assert np.allclose(params.gravity, (0.0, -9.8, 0.0))
    assert params.enable_self_collision is True


def test_sim_params_do_not_share_gravity():
    a = SimParams()
    b = SimParams()
    a.gravity[1] = 0.0
    assert b.gravity[1] < 0.0


def test_game_state_starts_unpaused():
    state = GameState()
    assert (state.pause, state.step, state.hide_gui) == (False, False, False)


def test_callback_invokes_in_registration_order_with_args():
    calls = []
    cb = Callback()
    cb.register(lambda x, y: calls.append(("first", x, y)))
    cb.register(lambda x, y: calls.append(("second", x, y)))
    cb.invoke(1.0, 2.0)
    assert calls == [("first", 1.0, 2.0), ("second", 1.0, 2.0)]


def test_callback_empty_and_clear():
    cb = Callback()
    assert cb.empty()
    cb.register(lambda: None)
    assert not cb.empty()
    assert len(cb) == 1
    cb.clear()
    assert cb.empty()


def test_callback_registered_during_invoke_runs_next_time():
    calls = []
    cb = Callback()

    def outer():
        calls.append("outer")
        cb.register(lambda: calls.append("inner"))

    cb.register(outer)
    cb.invoke()
    assert calls == ["outer"]
    assert len(cb) == 2
    assert cb.empty() is False
    cb.invoke()
    assert calls == ["outer", "outer", "inner"]
    assert len(cb) == 3