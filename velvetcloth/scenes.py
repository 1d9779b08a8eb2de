"""Demo scenes that populate a game with cameras, lights, colliders and cloth."""

from __future__ import annotations

import abc
import math
from typing import Any

import numpy as np

from . import helper
from .actor import Actor, Component
from .camera import Camera, Light
from .cloth_object import ClothObject
from .collider import Collider
from .common import Callback, ColliderType
from .controller import PlayerController
from .mesh import generate_cloth_mesh


class _Tint(Component):
    """Display colour of an actor."""

    def __init__(self, color) -> None:
        super().__init__()
        self.color = np.asarray(color, dtype=float).copy()


class _SceneCloth(ClothObject):
    """Cloth that picks up the scene's colliders and camera when it starts."""

    def __init__(self, game, resolution: int) -> None:
        super().__init__(
            resolution,
            generate_cloth_mesh(resolution),
            input_state=game.input,
            sim_params=game.sim_params,
            window_size=game.window_size,
            fixed_delta_time=game.timer.fixed_delta_time,
        )
        self._game = game

    def start(self) -> None:
        self.colliders = [c for c in self._game.find_components(Collider) if c.enabled]
        if self.camera is None:
            cameras = self._game.find_components(Camera)
            self.camera = cameras[0] if cameras else None
        super().start()


class Scene(abc.ABC):
    """A named recipe for filling a game with actors."""

    name = "BaseScene"

    def __init__(self) -> None:
        self.on_enter = Callback()
        self.on_exit = Callback()

    @abc.abstractmethod
    def populate_actors(self, game) -> None:
        """Create the scene's actors in ``game``."""

    def clear_callbacks(self) -> None:
        self.on_enter.clear()
        self.on_exit.clear()

    def modify_parameter(self, target: Any, attribute: str, value: Any) -> None:
        """Set ``target.attribute`` on enter and restore its old value on exit."""

        def enter() -> None:
            previous = getattr(target, attribute)
            setattr(target, attribute, value)
            self.on_exit.register(lambda: setattr(target, attribute, previous))

        self.on_enter.register(enter)

    def spawn_camera_and_light(self, game) -> None:
        camera = self._spawn_camera(game)
        camera.initialize((0.35, 3.3, 7.2), (1.0, 1.0, 1.0), (-21.0, 2.25, 0.0))

        light = self._spawn_light(game)
        light.initialize((2.5, 5.0, 2.5), (0.2, 0.2, 0.2), (20.0, 30.0, 0.0))

    def _spawn_camera(self, game) -> Actor:
        actor = game.create_actor("Prefab Camera")
        camera = Camera()
        actor.add_components([camera, PlayerController(game, camera)])
        return actor

    def _spawn_light(self, game) -> Actor:
        actor = game.create_actor("Prefab Light")
        actor.add_component(Light())
        return actor

    @staticmethod
    def _collider(game, collider_type: ColliderType) -> Collider:
        return Collider(
            collider_type,
            sim_params=game.sim_params,
            fixed_delta_time=game.timer.fixed_delta_time,
        )

    def spawn_cloth(self, game, resolution: int = 16) -> Actor:
        cloth = game.create_actor("Cloth Generated")
        cloth.add_component(_SceneCloth(game, resolution))
        return cloth

    def spawn_sphere(self, game) -> Actor:
        sphere = game.create_actor("Sphere")
        sphere.add_components([_Tint((1.0, 1.0, 1.0)), self._collider(game, ColliderType.SPHERE)])
        return sphere

    def spawn_infinite_plane(self, game) -> Actor:
        plane = game.create_actor("Infinite Plane")
        plane.add_component(self._collider(game, ColliderType.PLANE))
        return plane

    def spawn_colored_cube(self, game, color=(1.0, 1.0, 1.0)) -> Actor:
        cube = game.create_actor("Cube")
        cube.add_components([_Tint(color), self._collider(game, ColliderType.CUBE)])
        return cube


def _attach_indices(resolution: int) -> list[int]:
    side = resolution + 1
    return [0, resolution, side * side - 1, side * resolution]


class SceneClothAttach(Scene):
    name = "Cloth / Attach"

    def populate_actors(self, game) -> None:
        self.spawn_camera_and_light(game)
        self.spawn_infinite_plane(game)

        radius = 0.5
        sphere = self.spawn_sphere(game)
        sphere.initialize((0.0, radius, 0.0), (radius, radius, radius))

        resolution = 40
        cloth = self.spawn_cloth(game, resolution)
        cloth.initialize((0.0, 1.5, 1.0), (1.0, 1.0, 1.0), (90.0, 0.0, 0.0))
        cloth_obj = cloth.get_component(ClothObject)
        if cloth_obj is not None:
            cloth_obj.set_attached_indices(_attach_indices(resolution))


class SceneClothCollision(Scene):
    name = "Cloth / SDF Collision"

    def populate_actors(self, game) -> None:
        self.spawn_camera_and_light(game)
        self.spawn_infinite_plane(game)

        radius = 0.6
        sphere = self.spawn_sphere(game)
        sphere.initialize((0.0, radius, -1.0), (radius, radius, radius))
        timer = game.timer

        def animate() -> None:
            time = timer.fixed_delta_time * timer.physics_frame_count
            sphere.transform.position = np.array([0.0, radius, -math.cos(time * 2)])

        game.animation_update.register(animate)

        resolution = 16
        cloth = self.spawn_cloth(game, resolution)
        cloth.initialize((0.0, 2.5, 0.0), (1.0, 1.0, 1.0))
        cloth_obj = cloth.get_component(ClothObject)
        if cloth_obj is not None:
            cloth_obj.set_attached_indices([0, resolution])


class SceneClothSelfCollision(Scene):
    name = "Cloth / Self Collision"

    def populate_actors(self, game) -> None:
        self.spawn_camera_and_light(game)
        self.spawn_infinite_plane(game)

        params = game.sim_params
        self.modify_parameter(params, "num_substeps", 3)
        self.modify_parameter(params, "num_substeps", 8)
        self.modify_parameter(params, "friction", 0.3)

        cloth = self.spawn_cloth(game, 60)
        cloth.initialize((0.0, 1.5, 1.0), (1.0, 1.0, 1.0), (-15.0, 10.0, 10.0))


class SceneClothFriction(Scene):
    name = "Cloth / Friction"

    def populate_actors(self, game) -> None:
        self.spawn_camera_and_light(game)
        self.spawn_infinite_plane(game)

        params = game.sim_params
        self.modify_parameter(params, "friction", 0.6)
        self.modify_parameter(params, "num_substeps", 5)
        self.modify_parameter(params, "num_iterations", 5)

        radius = 0.5
        sphere = self.spawn_sphere(game)
        sphere.initialize((0.0, radius, 0.0), (radius, radius, radius))
        timer = game.timer

        def animate() -> None:
            time = timer.physics_frame_count * timer.fixed_delta_time - 0.5
            if time > 0:
                sphere.transform.position = np.array([math.sin(time), radius, 0.0])
            spin = -time * 180 if int(time) % 4 > 1 else time * 180
            sphere.transform.rotation = np.array([0.0, spin, 0.0])

        game.animation_update.register(animate)

        cloth = self.spawn_cloth(game, 64)
        cloth.initialize((0.0, 1.5, 1.0), (1.0, 1.0, 1.0), (90.0, 0.0, 0.0))


class SceneClothHD(Scene):
    name = "Cloth / High Resolution"

    def populate_actors(self, game) -> None:
        self.spawn_camera_and_light(game)
        self.spawn_infinite_plane(game)

        params = game.sim_params
        self.modify_parameter(params, "num_substeps", 10)
        self.modify_parameter(params, "num_iterations", 10)

        radius = 0.6
        sphere = self.spawn_sphere(game)
        sphere.initialize((0.0, radius, 0.0), (radius, radius, radius))

        cloth = self.spawn_cloth(game, 200)
        cloth.initialize((0.0, 1.5, 1.0), (1.0, 1.0, 1.0), (90.0, 0.0, 0.0))


class SceneClothSwirl(Scene):
    name = "Cloth / Swirl"

    def populate_actors(self, game) -> None:
        self.spawn_camera_and_light(game)
        self.spawn_infinite_plane(game)

        radius = 0.1
        sphere = self.spawn_sphere(game)
        sphere.get_component(Collider).enabled = False
        sphere.initialize((0.0, radius, 0.0), (radius, radius, radius))

        cloth = self.spawn_cloth(game, 36)
        cloth.initialize((0.0, 1.5, 1.0), (1.0, 1.0, 1.0), (90.0, 0.0, 0.0))
        cloth_obj = cloth.get_component(ClothObject)
        cloth_obj.set_attached_indices([0])
        timer = game.timer

        def animate() -> None:
            time = timer.fixed_delta_time * timer.physics_frame_count * 3
            pos = np.array([math.sin(time), math.cos(time) + 2.0, 0.0])
            constraints = cloth_obj.solver.attachment_constraints
            if constraints:
                index, _ = constraints[0]
                constraints[0] = (index, pos.copy())
            sphere.transform.position = pos

        game.animation_update.register(animate)


_CUBE_COLORS = [
    (0.0, 0.5, 1.0),
    (0.797, 0.354, 0.000),
    (0.000, 0.349, 0.173),
    (0.875, 0.782, 0.051),
    (0.01, 0.170, 0.453),
    (0.673, 0.111, 0.000),
    (0.612, 0.194, 0.394),
]


class SceneColoredCubes(Scene):
    name = "Basic / Colored Cubes"

    NUM_CUBES = 50
    BOUND_RADIUS = 3.0
    MIN_HEIGHT = 0.07

    def populate_actors(self, game) -> None:
        self.spawn_camera_and_light(game)
        self.spawn_infinite_plane(game)

        white = self.spawn_colored_cube(game, (1.0, 1.0, 1.0))
        white.initialize((0.0, 0.25, 0.0), (2.0, 0.5, 2.0))

        cubes: list[Actor] = []
        velocities: list[np.ndarray] = []
        for _ in range(self.NUM_CUBES):
            index = min(int(helper.random(0.0, float(len(_CUBE_COLORS)))), len(_CUBE_COLORS) - 1)
            cube = self.spawn_colored_cube(game, _CUBE_COLORS[index])
            cube.initialize(
                (helper.random(-3.0, 3.0), helper.random(0.3, 0.5), helper.random(-3.0, 3.0)),
                (0.3, 0.3, 0.3),
            )
            cubes.append(cube)
            velocities.append(np.zeros(3))
        timer = game.timer

        def animate() -> None:
            dt = timer.fixed_delta_time
            for i, cube in enumerate(cubes):
                velocities[i] = helper.lerp(velocities[i], helper.random_unit_vector(), dt)
                transform = cube.transform
                transform.rotation = transform.rotation + helper.random_unit_vector() * dt * 50.0
                position = transform.position + velocities[i] * dt * 5.0
                position[1] = max(position[1], self.MIN_HEIGHT)
                length = float(np.linalg.norm(position))
                if length > self.BOUND_RADIUS:
                    position = position / length * self.BOUND_RADIUS
                transform.position = position

        game.animation_update.register(animate)


def default_scenes() -> list[Scene]:
    """The scenes offered by the application, in menu order."""
    return [
        SceneClothAttach(),
        SceneClothCollision(),
        SceneClothSelfCollision(),
        SceneClothFriction(),
        SceneClothHD(),
        SceneClothSwirl(),
    ]