# velvetcloth

`velvetcloth` simulates cloth with position-based dynamics on the CPU, using `numpy`. The package has three parts:

- **Cloth solver** (`velvetcloth.cloth_solver.ClothSolver`). It handles stretch and bending constraints and pinned particles. Particles collide with each other through a spatial hash, and with sphere and ground-plane colliders. Contacts apply friction.
- **Scene framework.** This covers actors and components (`velvetcloth.actor`) and a fixed-step game loop (`velvetcloth.game.GameInstance`). It also has a timer (`velvetcloth.timer.Timer`), keyboard and mouse state (`velvetcloth.input.Input`), and a camera and a light (`velvetcloth.camera`). A fly-through camera controller is in `velvetcloth.controller`, and an engine that runs scenes and restarts them on reset is in `velvetcloth.engine.Engine`.
- **Scenes** (`velvetcloth.scenes`). These are prepared scenes with cloth, colliders, a camera and a light.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Command line

The `velvetcloth` command runs one scene for a fixed number of frames. It prints the number of rendered frames and physics frames reached:

```
velvetcloth --list               # print the index and name of every scene
velvetcloth --scene 1 --frames 300
```

The command takes these options:

- `--scene` is the scene index. It defaults to 0.
- `--frames` is the number of loop iterations. It defaults to 600.

The loop advances by wall-clock time. A physics step runs only once more than 1/60 s has passed since the previous step, so the physics frame count depends on how fast the machine runs.

## Library use

This example simulates a cloth with the solver directly:

```python
import numpy as np

from velvetcloth.mesh import generate_cloth_mesh
from velvetcloth.cloth_solver import ClothSolver

resolution = 16
mesh = generate_cloth_mesh(resolution)

solver = ClothSolver(resolution)
solver.set_attached_indices([0, resolution])   # pin two corners
solver.initialize(mesh, np.eye(4), colliders=[])

for _ in range(60):
    solver.simulate(1.0 / 60.0)

print(mesh.vertices[:3])   # simulate() writes positions and normals back into the mesh
```

The colliders are `velvetcloth.collider.Collider` components of type `ColliderType.SPHERE` or `ColliderType.PLANE`. A sphere collider sits at its actor's position, and its radius is the actor's `scale[0]`. A plane collider is the ground `y = 0`. A `ColliderType.CUBE` collider produces no correction.

### Running scenes

```python
from velvetcloth.engine import Engine
from velvetcloth.scenes import default_scenes

engine = Engine()
engine.set_scenes(default_scenes())
engine.run(max_frames=120)
```

`default_scenes()` returns these scenes, in order:

| Index | Scene |
|-------|-------|
| 0 | Attach |
| 1 | SDF Collision |
| 2 | Self Collision |
| 3 | Friction |
| 4 | High Resolution |
| 5 | Swirl |

`SceneColoredCubes` is also available but is not in that list.

`Engine.run` runs the scene at the current index. `Engine.switch_scene(i)` clamps `i` to the list of scenes and requests a restart. `Engine.reset()` requests a restart of the current scene. After a restart request the engine builds a fresh `GameInstance` for the chosen scene.

### Input

`GameInstance.process_keyboard` reads key state from `Input`:

| Key | Action |
|-----|--------|
| `H` | Toggles `hide_gui` |
| `Escape` | Closes the loop |
| `O` | Runs a single step |
| `1`–`9` | Switch scene |
| `R` | Reset |

When an actor has a `PlayerController`, it moves the camera with `W`/`A`/`S`/`D`/`Q`/`E`. It rotates the camera while the right mouse button is held and the mouse moves (`GameInstance.process_mouse`). `PlayerController.on_mouse_scroll` changes the zoom, which is clamped to 1–45. A `ClothObject` lets the left mouse button grab and drag the particle nearest the cursor ray.

### Spatial hashing

`velvetcloth.spatial_hash.SpatialHash(spacing, max_num_objects)` can be used on its own:

1. Call `hash_objects(positions)`.
2. Read `neighbors(i)` for each object. The list includes the object itself.
3. Alternatively, call `query_neighbors(point)` to get the candidates in the 27 cells around any point.

### Settings

`velvetcloth.common.SimParams` holds the solver settings:

- substeps and iterations
- gravity
- damping
- friction
- collision margin
- bend compliance
- particle-diameter and hash-cell scalars

`Scene.modify_parameter(target, attribute, value)` sets a value when the scene is entered and restores the previous value when it exits.

## What the package does not do

The package has no renderer, window or on-screen interface. Nothing is drawn, and the `hide_gui`, `draw_particles` and `render_wireframe` flags in `GameState` are only stored. It does not load meshes, textures or shaders from files, and it has no GPU solver.

Device input does not come from the operating system. The caller feeds it through `Input.set_key`, `Input.set_mouse_button` and `Input.set_mouse_pos`, and through `GameInstance.process_mouse` and `GameInstance.process_scroll`.