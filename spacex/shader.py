"""GLSL program loading and uniform upload."""

from __future__ import annotations

from pathlib import Path

import numpy as np

__all__ = ["INFO_LOG_SIZE", "ShaderError", "Shader", "read_source"]

# Longest compiler or linker log kept in an error message.
INFO_LOG_SIZE = 512


class ShaderError(RuntimeError):
    """Raised when a shader cannot be read, compiled or linked."""


def read_source(path) -> str:
    """Return the text of the shader file at ``path``."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ShaderError(f"Failed to open shader file {path}: {exc.strerror or exc}") from exc


class _Stage:
    """One shader stage as held by the pyglet backend."""

    def __init__(self, stage: str) -> None:
        self.stage = stage
        self.compiled = None


class _Program:
    """One program as held by the pyglet backend."""

    def __init__(self) -> None:
        self.linked = None


class _PygletGL:
    """Thin wrapper over the OpenGL entry points that shaders need."""

    def __init__(self) -> None:
        from pyglet import gl
        from pyglet.graphics import shader as pyglet_shader

        self._gl = gl
        self._shader_module = pyglet_shader
        self._uniform_setters = {
            ("i", 1): gl.glUniform1i,
            ("f", 1): gl.glUniform1f,
            ("f", 2): gl.glUniform2f,
            ("f", 3): gl.glUniform3f,
            ("f", 4): gl.glUniform4f,
        }

    def create_shader(self, stage: str) -> _Stage:
        return _Stage("vertex" if stage == "vertex" else "fragment")

    def compile_shader(self, handle: _Stage, source: str) -> tuple[bool, str]:
        module = self._shader_module
        try:
            handle.compiled = module.Shader(source, handle.stage)
        except module.ShaderException as exc:
            return False, str(exc)[:INFO_LOG_SIZE]
        return True, ""

    def create_program(self) -> _Program:
        return _Program()

    def link_program(self, program: _Program, shaders) -> tuple[bool, str]:
        module = self._shader_module
        try:
            program.linked = module.ShaderProgram(*(handle.compiled for handle in shaders))
        except module.ShaderException as exc:
            return False, str(exc)[:INFO_LOG_SIZE]
        return True, ""

    def delete_shader(self, handle: _Stage) -> None:
        if handle.compiled is not None:
            handle.compiled.delete()
            handle.compiled = None

    def delete_program(self, program: _Program) -> None:
        if program.linked is not None:
            program.linked.delete()
            program.linked = None

    def use_program(self, program: _Program) -> None:
        if program.linked is not None:
            program.linked.use()

    def uniform_location(self, program: _Program, name: str) -> int:
        if program.linked is None:
            return -1
        info = program.linked.uniforms.get(name)
        if info is None:
            return -1
        return int(info["location"])

    def uniform(self, location: int, kind: str, values) -> None:
        self._uniform_setters[(kind, len(values))](location, *values)

    def uniform_matrix4(self, location: int, data) -> None:
        gl = self._gl
        array = (gl.GLfloat * 16)(*data)
        gl.glUniformMatrix4fv(location, 1, gl.GL_FALSE, array)


class Shader:
    """A linked vertex + fragment shader program."""

    def __init__(self, vertex_path, fragment_path, gl=None) -> None:
        self._gl = gl if gl is not None else _PygletGL()
        self.program = 0
        self.load(vertex_path, fragment_path)

    def __enter__(self) -> Shader:
        return self

    def __exit__(self, *exc_info) -> None:
        self.delete()

    def load(self, vertex_path, fragment_path) -> None:
        """Compile and link the two shader files and make the program current."""
        vertex_source = read_source(vertex_path)
        fragment_source = read_source(fragment_path)

        gl = self._gl
        fragment = gl.create_shader("fragment")
        vertex = gl.create_shader("vertex")
        program = gl.create_program()
        stages = (vertex, fragment)

        try:
            ok, log = gl.compile_shader(vertex, vertex_source)
            if not ok:
                raise ShaderError(f"Vertex shader compilation failed: {log}")
            ok, log = gl.compile_shader(fragment, fragment_source)
            if not ok:
                raise ShaderError(f"Fragment shader compilation failed: {log}")
            ok, log = gl.link_program(program, stages)
            if not ok:
                raise ShaderError(f"Shader program linking failed: {log}")
        except ShaderError:
            gl.delete_program(program)
            raise
        finally:
            for handle in stages:
                gl.delete_shader(handle)

        if self.program:
            gl.delete_program(self.program)
        self.program = program
        gl.use_program(program)

    def use(self) -> None:
        """Make this program the current one."""
        self._gl.use_program(self.program)

    def _set(self, name: str, kind: str, values: tuple) -> bool:
        location = self._gl.uniform_location(self.program, name)
        if location == -1:
            return False
        self._gl.uniform(location, kind, values)
        return True

    def set_bool(self, name, value) -> bool:
        """Set a boolean uniform; return False if the program has no such uniform."""
        return self._set(name, "i", (int(bool(value)),))

    def set_int(self, name, value) -> bool:
        """Set an integer uniform; return False if the program has no such uniform."""
        return self._set(name, "i", (int(value),))

    def set_float(self, name, value) -> bool:
        """Set a float uniform; return False if the program has no such uniform."""
        return self._set(name, "f", (float(value),))

    def set_vec2(self, name, x, y) -> bool:
        """Set a vec2 uniform; return False if the program has no such uniform."""
        return self._set(name, "f", (float(x), float(y)))

    def set_vec3(self, name, x, y, z) -> bool:
        """Set a vec3 uniform; return False if the program has no such uniform."""
        return self._set(name, "f", (float(x), float(y), float(z)))

    def set_vec4(self, name, x, y, z, w) -> bool:
        """Set a vec4 uniform; return False if the program has no such uniform."""
        return self._set(name, "f", (float(x), float(y), float(z), float(w)))

    def set_mat4(self, name, value) -> bool:
        """Set a mat4 uniform from a 4x4 matrix in (row, column) order.

        The matrix is sent in column-major order. Returns False if the
        program has no such uniform.
        """
        matrix = np.asarray(value, dtype=np.float64)
        if matrix.shape != (4, 4):
            raise ValueError(f"expected a 4x4 matrix, got shape {matrix.shape}")
        location = self._gl.uniform_location(self.program, name)
        if location == -1:
            return False
        self._gl.uniform_matrix4(location, tuple(float(v) for v in matrix.T.ravel()))
        return True

    def delete(self) -> None:
        """Release the program; further deletes do nothing."""
        if self.program:
            self._gl.delete_program(self.program)
            self.program = 0