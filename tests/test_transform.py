import numpy as np

from velvetcloth.transform import Transform


def test_default_matrix_is_identity():
    assert np.allclose(Transform().matrix(), np.identity(4))


def test_matrix_places_origin_at_position():
    t = Transform(position=(1.0, 2.0, 3.0), rotation=(30.0, 40.0, 50.0), scale=(2.0, 2.0, 2.0))
    origin = t.matrix() @ np.array([0.0, 0.0, 0.0, 1.0])
    assert np.allclose(origin[:3], (1.0, 2.0, 3.0))


def test_matrix_without_rotation_scales_then_translates():
    t = Transform(position=(1.0, 0.0, -1.0), scale=(2.0, 3.0, 4.0))
    p = t.matrix() @ np.array([1.0, 1.0, 1.0, 1.0])
    assert np.allclose(p[:3], np.array([1.0, 0.0, -1.0]) + np.array([2.0, 3.0, 4.0]))


def test_rotation_part_is_orthonormal_with_unit_scale():
    t = Transform(rotation=(90.0, 0.0, 0.0))
    r = t.matrix()[:3, :3]
    assert np.allclose(r @ r.T, np.identity(3))


def test_reset_restores_defaults():
    t = Transform(position=(5.0, 5.0, 5.0), rotation=(1.0, 2.0, 3.0), scale=(0.2, 0.2, 0.2))
    t.reset()
    assert np.allclose(t.position, 0.0)
    assert np.allclose(t.rotation, 0.0)
    assert np.allclose(t.scale, 1.0)
    assert np.allclose(t.matrix(), np.identity(4))


def test_instances_do_not_share_vectors():
    a = Transform()
    b = Transform()
    a.position[0] = 9.0
    assert b.position[0] == 0.0