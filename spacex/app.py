"""Interactive scene: spinning lit cubes viewed through a fly-through camera."""

from __future__ import annotations

import argparse
import math
import sys
import time
from pathlib import Path

import numpy as np

from spacex.camera import Button, Camera
from spacex.geometry import (
    CUBE_COUNT,
    LIGHT_POSITION,
    VERTEX_STRIDE,
    cube_indices,
    cube_model,
    cube_vertices,
    light_model,
)
from spacex.shader import Shader, ShaderError

# Key symbols as delivered by pyglet window events.
KEY_TAB = 0xFF09
KEY_SPACE = 0x20
KEY_LEFT = 0xFF51
KEY_UP = 0xFF52
KEY_RIGHT = 0xFF53
KEY_DOWN = 0xFF54
KEY_ESCAPE = 0xFF1B

SHADER_DIR = Path("shaders")
LIGHT_COLOR = (1.0, 1.0, 1.0)
EXIT_MESSAGE = "Don't close me!"

_KEY_BUTTONS = {
    KEY_TAB: Button.TAB,
    KEY_SPACE: Button.SPACE,
    KEY_LEFT: Button.LEFT,
    KEY_RIGHT: Button.RIGHT,
    KEY_UP: Button.UP,
    KEY_DOWN: Button.DOWN,
}

_INDEX_COUNT = len(cube_indices())


class _PygletRenderer:
    """Draw calls and buffer setup on the current OpenGL context."""

    def __init__(self) -> None:
        from pyglet import gl

        self._gl = gl
        self._buffers: tuple = ()

    def setup(self, width: int, height: int) -> None:
        gl = self._gl
        gl.glViewport(0, 0, width, height)
        gl.glClearColor(0.5, 0.0, 0.0, 1.0)
        for capability in (gl.GL_DEPTH_TEST, gl.GL_LINE_SMOOTH, gl.GL_POLYGON_SMOOTH):
            gl.glEnable(capability)

    def _buffer(self, target, data: np.ndarray):
        gl = self._gl
        handle = gl.GLuint()
        gl.glGenBuffers(1, handle)
        gl.glBindBuffer(target, handle.value)
        gl.glBufferData(target, data.nbytes, data.tobytes(), gl.GL_STATIC_DRAW)
        return handle

    def _vertex_array(self, vbo, ebo, attributes: int, stride: int, itemsize: int) -> int:
        gl = self._gl
        vao = gl.GLuint()
        gl.glGenVertexArrays(1, vao)
        gl.glBindVertexArray(vao.value)
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, vbo.value)
        gl.glBindBuffer(gl.GL_ELEMENT_ARRAY_BUFFER, ebo.value)
        for attribute in range(attributes):
            offset = 3 * attribute * itemsize or None
            gl.glVertexAttribPointer(attribute, 3, gl.GL_FLOAT, gl.GL_FALSE, stride, offset)
            gl.glEnableVertexAttribArray(attribute)
        gl.glBindVertexArray(0)
        return vao.value

    def upload_mesh(self, vertices, indices) -> tuple[int, int]:
        """Upload the cube mesh; return the lit-cube and light-cube vertex arrays."""
        gl = self._gl
        vertex_data = np.ascontiguousarray(vertices, dtype=np.float32)
        index_data = np.ascontiguousarray(indices, dtype=np.uint32)
        itemsize = vertex_data.itemsize
        stride = VERTEX_STRIDE * itemsize
        vbo = self._buffer(gl.GL_ARRAY_BUFFER, vertex_data)
        ebo = self._buffer(gl.GL_ELEMENT_ARRAY_BUFFER, index_data)
        cube_vao = self._vertex_array(vbo, ebo, 3, stride, itemsize)
        light_vao = self._vertex_array(vbo, ebo, 1, stride, itemsize)
        self._buffers = (vbo, ebo)
        return cube_vao, light_vao

    def clear(self) -> None:
        gl = self._gl
        gl.glClear(gl.GL_COLOR_BUFFER_BIT | gl.GL_DEPTH_BUFFER_BIT)

    def bind_vertex_array(self, vao: int) -> None:
        self._gl.glBindVertexArray(vao)

    def draw_elements(self, count: int) -> None:
        gl = self._gl
        gl.glDrawElements(gl.GL_TRIANGLES, count, gl.GL_UNSIGNED_INT, None)

    def max_vertex_attribs(self) -> int:
        gl = self._gl
        count = gl.GLint()
        gl.glGetIntegerv(gl.GL_MAX_VERTEX_ATTRIBS, count)
        return count.value


class SpaceExplorer:
    """Window event handlers that drive the camera and draw the scene."""

    def __init__(
        self,
        object_shader,
        light_shader,
        width,
        height,
        *,
        renderer=None,
        cube_vao=0,
        light_vao=0,
        camera=None,
        clock=time.perf_counter,
        on_exit=None,
    ) -> None:
        self.object_shader = object_shader
        self.light_shader = light_shader
        self.width = width
        self.height = height
        self.renderer = renderer if renderer is not None else _PygletRenderer()
        self.cube_vao = cube_vao
        self.light_vao = light_vao
        self.camera = camera if camera is not None else Camera()
        self.light_position = np.array(LIGHT_POSITION, dtype=np.float64)
        self.projection = np.eye(4)
        self.running = True
        self._clock = clock
        self._on_exit = on_exit
        self._started = clock()
        self.camera.last_move = self._started

        view = self.camera.view_matrix()
        light_shader.use()
        light_shader.set_vec3("lightColor", *LIGHT_COLOR)
        object_shader.use()
        object_shader.set_mat4("model", np.eye(4))
        object_shader.set_mat4("view", view)
        object_shader.set_mat4("projection", self.projection)
        light_shader.use()
        light_shader.set_mat4("model", light_model(self.light_position))
        light_shader.set_mat4("view", view)
        light_shader.set_mat4("projection", np.eye(4))

    def _exit(self) -> None:
        print(EXIT_MESSAGE)
        self.running = False
        if self._on_exit is not None:
            self._on_exit()

    def on_key_press(self, symbol, modifiers):
        """Hold a movement key, or leave on Escape."""
        if symbol == KEY_ESCAPE:
            self._exit()
            return True
        button = _KEY_BUTTONS.get(symbol)
        if button is None:
            return None
        self.camera.press(button)
        return True

    def on_key_release(self, symbol, modifiers):
        """Releasing any key stops movement."""
        self.camera.release()

    def on_close(self):
        """Leave when the window is asked to close."""
        self._exit()
        return True

    def on_mouse_motion(self, x, y, dx, dy):
        """Turn the camera; upward motion raises the view."""
        self.camera.look(dx, -dy)

    def on_mouse_scroll(self, x, y, scroll_x, scroll_y):
        """Change the field of view and refresh both projections."""
        self.camera.zoom(scroll_y)
        self.projection = self.camera.projection_matrix(self.width, self.height)
        for shader in (self.object_shader, self.light_shader):
            shader.use()
            shader.set_mat4("projection", self.projection)

    def on_draw(self):
        """Advance the camera and draw every cube and the light."""
        now = self._clock()
        self.camera.update(now)
        view = self.camera.view_matrix()

        objects = self.object_shader
        objects.use()
        objects.set_vec3("lightPos", *self.light_position)
        objects.set_vec3("viewPos", *self.camera.position)
        objects.set_vec3("lightColor", *LIGHT_COLOR)
        objects.set_float("ambientStrength", 0.1)
        objects.set_float("specularStrength", 0.5)
        objects.set_float("shininess", 32.0)
        objects.set_mat4("view", view)

        light = self.light_shader
        light.use()
        light.set_mat4("view", view)

        renderer = self.renderer
        renderer.clear()
        renderer.bind_vertex_array(self.cube_vao)
        rotation = (now - self._started) * math.radians(50.0)
        for index in range(CUBE_COUNT):
            objects.use()
            objects.set_mat4("model", cube_model(index, rotation))
            renderer.draw_elements(_INDEX_COUNT)

        renderer.bind_vertex_array(self.light_vao)
        light.use()
        light.set_mat4("model", light_model(self.light_position))
        renderer.draw_elements(_INDEX_COUNT)


def main(argv=None) -> int:
    """Open a fullscreen window and run the scene until it is closed."""
    argparse.ArgumentParser(prog="spacex", description="Fly around a lit cube scene.").parse_args(argv)

    import pyglet

    config = pyglet.gl.Config(
        major_version=4, minor_version=0, forward_compatible=True,
        double_buffer=True, depth_size=24,
    )
    try:
        window = pyglet.window.Window(
            caption="Space Explorer", resizable=True, fullscreen=True, config=config,
        )
    except (
        pyglet.window.NoSuchConfigException,
        pyglet.window.NoSuchDisplayException,
        pyglet.gl.ContextException,
    ) as exc:
        print(f"Window could not be created: {exc}", file=sys.stderr)
        return 1
    print("OpenGL context created successfully!")

    renderer = _PygletRenderer()
    renderer.setup(window.width, window.height)
    cube_vao, light_vao = renderer.upload_mesh(cube_vertices(), cube_indices())

    try:
        object_shader = Shader(
            SHADER_DIR / "objects" / "vertex_shader.glsl",
            SHADER_DIR / "objects" / "color_shader.frag",
        )
        light_shader = Shader(
            SHADER_DIR / "light" / "vertex_shader.glsl",
            SHADER_DIR / "light" / "color_shader.frag",
        )
    except ShaderError as exc:
        print(exc, file=sys.stderr)
        window.close()
        return 1

    def finish() -> None:
        print(f"Maximum nr of vertex attributes supported: {renderer.max_vertex_attribs()}")
        window.close()

    explorer = SpaceExplorer(
        object_shader, light_shader, window.width, window.height,
        renderer=renderer, cube_vao=cube_vao, light_vao=light_vao, on_exit=finish,
    )
    window.push_handlers(explorer)
    window.set_exclusive_mouse(True)
    pyglet.app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())