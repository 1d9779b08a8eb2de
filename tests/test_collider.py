import numpy as np
import pytest

from velvetcloth.actor import Actor
from velvetcloth.collider import Collider
from velvetcloth.common import ColliderType, SimParams


def _attach(collider, position=(0.0, 0.0, 0.0), scale=(1.0, 1.0, 1.0)):
    actor = Actor("shape")
    actor.initialize(position, scale)
    actor.add_component(collider)
    return actor


def test_plane_pushes_point_up_to_margin():
    params = SimParams()
    collider = Collider(ColliderType.PLANE, params)
    _attach(collider)
    correction = collider.compute_plane_sdf((0.3, -0.2, 0.1))
    np.testing.assert_allclose(correction, [0.0, params.collision_margin + 0.2, 0.0])
    corrected_y = -0.2 + correction[1]
    assert corrected_y == pytest.approx(params.collision_margin)


def test_plane_leaves_point_above_margin():
    collider = Collider(ColliderType.PLANE)
    _attach(collider)
    np.testing.assert_array_equal(collider.compute_plane_sdf((0.0, 1.0, 0.0)), np.zeros(3))


def test_sphere_pushes_point_to_surface():
    params = SimParams()
    collider = Collider(ColliderType.SPHERE, params)
    _attach(collider, position=(1.0, 2.0, 3.0), scale=(0.5, 0.5, 0.5))
    point = np.array([1.1, 2.0, 3.0])
    corrected = point + collider.compute_sphere_sdf(point)
    radius = 0.5 + params.collision_margin
    assert np.linalg.norm(corrected - np.array([1.0, 2.0, 3.0])) == pytest.approx(radius)
    assert corrected[0] > point[0]


def test_sphere_ignores_point_outside():
    collider = Collider(ColliderType.SPHERE)
    _attach(collider, scale=(0.5, 0.5, 0.5))
    np.testing.assert_array_equal(collider.compute_sphere_sdf((0.0, 3.0, 0.0)), np.zeros(3))


def test_compute_sdf_dispatches_on_type():
    plane = Collider(ColliderType.PLANE)
    _attach(plane)
    sphere = Collider(ColliderType.SPHERE)
    _attach(sphere)
    point = (0.0, -0.5, 0.0)
    np.testing.assert_allclose(plane.compute_sdf(point), plane.compute_plane_sdf(point))
    np.testing.assert_allclose(sphere.compute_sdf(point), sphere.compute_sphere_sdf(point))


def test_cube_gives_no_correction():
    cube = Collider(ColliderType.CUBE)
    _attach(cube)
    np.testing.assert_array_equal(cube.compute_sdf((0.0, 0.0, 0.0)), np.zeros(3))


def test_start_records_transform():
    collider = Collider(ColliderType.SPHERE)
    actor = _attach(collider, position=(1.0, 0.5, -2.0))
    collider.start()
    np.testing.assert_allclose(collider.cur_transform, actor.transform.matrix())
    np.testing.assert_allclose(collider.last_transform, collider.cur_transform)
    np.testing.assert_allclose(collider.last_pos, [1.0, 0.5, -2.0])


def test_fixed_update_tracks_velocity_and_transforms():
    collider = Collider(ColliderType.SPHERE, fixed_delta_time=0.5)
    actor = _attach(collider)
    collider.start()
    first = collider.cur_transform.copy()
    actor.transform.position = np.array([1.0, 0.0, -0.5])
    collider.fixed_update()
    np.testing.assert_allclose(collider.velocity, np.array([1.0, 0.0, -0.5]) / 0.5)
    np.testing.assert_allclose(collider.last_transform, first)
    np.testing.assert_allclose(collider.cur_transform, actor.transform.matrix())
    np.testing.assert_allclose(collider.last_pos, actor.transform.position)