# spacex

A small 3D scene drawn with OpenGL through pyglet. It has ten cubes that spin
in place, an eleventh cube that is mirrored, shrunk to half size and does not
spin, and a small light cube. A free camera lets you fly through the scene.

## Installing

```
pip install .
```

## Running

```
spacex
```

The window opens full screen and captures the mouse. It asks for an
OpenGL 4.0 context with double buffering and a 24-bit depth buffer. If no such
window can be made, or a shader cannot be read, compiled or linked, the error
goes to standard error and the command exits with status 1.

The shaders are loaded from `shaders/objects/` and `shaders/light/` relative
to the working directory (`vertex_shader.glsl` and `color_shader.frag` in
each). Start the command from the directory that holds them. The package does
not ship any shader files of its own.

The object shader receives the uniforms `model`, `view`, `projection`,
`lightPos`, `viewPos`, `lightColor`, `ambientStrength`, `specularStrength` and
`shininess`; the light shader receives `model`, `view`, `projection` and
`lightColor`. Both projections stay the identity matrix until the mouse wheel
is first turned.

When you quit, the program prints the number of vertex attributes the driver
supports and closes the window.

## Controls

| Input        | Action                                       |
|--------------|----------------------------------------------|
| Mouse        | Look around (pitch is limited to ±89°)       |
| Mouse wheel  | Zoom: down widens, up narrows (1° to 180°)   |
| Up / Down    | Move forward / backward                      |
| Left / Right | Strafe left / right                          |
| Space        | Move up                                      |
| Tab          | Move down                                    |
| Escape       | Quit                                         |

Only one movement key acts at a time; releasing any key stops movement. While
a key is held the camera steps 0.05 units at most once every 2 ms.

## Using the pieces

The building blocks can be used without opening a window:

```python
from spacex.camera import Button, Camera
from spacex.geometry import CUBE_COUNT, cube_model, light_model, LIGHT_POSITION

camera = Camera()
camera.look(10.0, 0.0)        # turn by a relative mouse motion
camera.move(Button.UP)        # one step forward
view = camera.view_matrix()
projection = camera.projection_matrix(2560, 1440)

models = [cube_model(i, rotation_angle=0.0) for i in range(CUBE_COUNT)]
light = light_model(LIGHT_POSITION)
```

- `spacex.transforms` provides `normalize`, `look_at`, `perspective`,
  `translate`, `scale` and `rotate` on NumPy 4×4 matrices that act on column
  vectors (`matrix @ point`).
- `spacex.geometry` provides the cube mesh (`cube_vertices`, `cube_indices`),
  the cube centres (`cube_positions`) and model matrices (`cube_model`,
  `light_model`).
- `spacex.camera.Camera` holds position, direction and field of view;
  `press`, `release` and `update(now)` apply held-key movement over time, and
  `zoom(wheel_y)` changes the field of view.
- `spacex.shader.Shader` compiles and links a vertex/fragment shader pair,
  makes it current and sets uniforms; each `set_*` method returns `False` when
  the program has no uniform of that name. It raises `ShaderError` when a file
  cannot be read or a stage fails to compile or link. It needs a current
  OpenGL context.
- `spacex.app.SpaceExplorer` holds the window event handlers and draws the
  scene; `spacex.app.main` is what the `spacex` command runs.

## Tests

```
pip install .[test]
pytest
```