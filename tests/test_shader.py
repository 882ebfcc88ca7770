import numpy as np
import pytest

from spacex.shader import Shader, ShaderError, read_source
from spacex.transforms import translate

VERTEX_TEXT = "#version 400 core\nvoid main() { gl_Position = vec4(0.0); }\n"
FRAGMENT_TEXT = "#version 400 core\nout vec4 color;\nvoid main() { color = vec4(1.0); }\n"


class FakeGL:
    def __init__(self, fail_stage=None, link_ok=True, missing=()):
        self.fail_stage = fail_stage
        self.link_ok = link_ok
        self.missing = set(missing)
        self._next = 1
        self.stages = {}
        self.sources = {}
        self.attached = {}
        self.deleted_shaders = []
        self.deleted_programs = []
        self.current = None
        self.locations = {}
        self.values = {}

    def _new(self):
        handle = self._next
        self._next += 1
        return handle

    def create_shader(self, stage):
        handle = self._new()
        self.stages[handle] = stage
        return handle

    def compile_shader(self, handle, source):
        self.sources[handle] = source
        if self.stages[handle] == self.fail_stage:
            return False, "broken"
        return True, ""

    def create_program(self):
        return self._new()

    def link_program(self, program, shaders):
        self.attached[program] = list(shaders)
        return (True, "") if self.link_ok else (False, "unresolved")

    def delete_shader(self, handle):
        self.deleted_shaders.append(handle)

    def delete_program(self, program):
        self.deleted_programs.append(program)

    def use_program(self, program):
        self.current = program

    def uniform_location(self, program, name):
        if name in self.missing:
            return -1
        key = (program, name)
        if key not in self.locations:
            self.locations[key] = len(self.locations)
        return self.locations[key]

    def _key(self, location):
        return next(key for key, loc in self.locations.items() if loc == location)

    def uniform(self, location, kind, values):
        self.values[self._key(location)] = (kind, tuple(values))

    def uniform_matrix4(self, location, data):
        self.values[self._key(location)] = ("m4", tuple(data))


@pytest.fixture
def paths(tmp_path):
    vertex = tmp_path / "vertex_shader.glsl"
    fragment = tmp_path / "color_shader.frag"
    vertex.write_text(VERTEX_TEXT, encoding="utf-8")
    fragment.write_text(FRAGMENT_TEXT, encoding="utf-8")
    return vertex, fragment


def test_read_source_returns_text(paths):
    assert read_source(paths[0]) == VERTEX_TEXT


def test_read_source_missing_file(tmp_path):
    with pytest.raises(ShaderError, match="Failed to open shader file"):
        read_source(tmp_path / "absent.glsl")


def test_load_compiles_each_stage_with_its_source(paths):
    gl = FakeGL()
    Shader(*paths, gl=gl)
    by_stage = {gl.stages[h]: src for h, src in gl.sources.items()}
    assert by_stage == {"vertex": VERTEX_TEXT, "fragment": FRAGMENT_TEXT}


def test_load_links_and_uses_program(paths):
    gl = FakeGL()
    shader = Shader(*paths, gl=gl)
    assert gl.current == shader.program
    assert sorted(gl.stages[h] for h in gl.attached[shader.program]) == ["fragment", "vertex"]


def test_stage_shaders_deleted_after_link(paths):
    gl = FakeGL()
    shader = Shader(*paths, gl=gl)
    assert sorted(gl.deleted_shaders) == sorted(gl.attached[shader.program])


def test_vertex_compile_failure(paths):
    with pytest.raises(ShaderError, match="Vertex shader compilation failed: broken"):
        Shader(*paths, gl=FakeGL(fail_stage="vertex"))


def test_fragment_compile_failure(paths):
    with pytest.raises(ShaderError, match="Fragment shader compilation failed: broken"):
        Shader(*paths, gl=FakeGL(fail_stage="fragment"))


def test_link_failure(paths):
    gl = FakeGL(link_ok=False)
    with pytest.raises(ShaderError, match="Shader program linking failed: unresolved"):
        Shader(*paths, gl=gl)
    assert len(gl.deleted_programs) == 1


def test_missing_fragment_file(paths, tmp_path):
    with pytest.raises(ShaderError):
        Shader(paths[0], tmp_path / "missing.frag", gl=FakeGL())


def test_scalar_uniforms(paths):
    gl = FakeGL()
    shader = Shader(*paths, gl=gl)
    assert shader.set_int("count", 7) is True
    assert shader.set_float("shininess", 32.0) is True
    assert shader.set_bool("enabled", True) is True
    p = shader.program
    assert gl.values[(p, "count")] == ("i", (7,))
    assert gl.values[(p, "shininess")] == ("f", (32.0,))
    assert gl.values[(p, "enabled")] == ("i", (1,))


def test_vector_uniforms(paths):
    gl = FakeGL()
    shader = Shader(*paths, gl=gl)
    shader.set_vec2("a", 0.25, 0.5)
    shader.set_vec3("b", 1.0, 0.5, 0.25)
    shader.set_vec4("c", 0.5, 0.25, 1.0, 2.0)
    p = shader.program
    assert gl.values[(p, "a")] == ("f", (0.25, 0.5))
    assert gl.values[(p, "b")] == ("f", (1.0, 0.5, 0.25))
    assert gl.values[(p, "c")] == ("f", (0.5, 0.25, 1.0, 2.0))


def test_missing_uniform_returns_false(paths):
    gl = FakeGL(missing={"lightColor"})
    shader = Shader(*paths, gl=gl)
    assert shader.set_vec3("lightColor", 1.0, 1.0, 1.0) is False
    assert shader.set_mat4("lightColor", np.eye(4)) is False
    assert gl.values == {}


def test_mat4_sent_column_major(paths):
    gl = FakeGL()
    shader = Shader(*paths, gl=gl)
    matrix = translate(np.eye(4), (1.0, 2.0, 3.0))
    assert shader.set_mat4("model", matrix) is True
    kind, data = gl.values[(shader.program, "model")]
    assert kind == "m4"
    assert data[12:16] == (1.0, 2.0, 3.0, 1.0)
    assert np.allclose(np.reshape(data, (4, 4)).T, matrix)


def test_mat4_rejects_wrong_shape(paths):
    shader = Shader(*paths, gl=FakeGL())
    with pytest.raises(ValueError):
        shader.set_mat4("model", np.eye(3))


def test_use_switches_current_program(paths):
    gl = FakeGL()
    first = Shader(*paths, gl=gl)
    second = Shader(*paths, gl=gl)
    assert gl.current == second.program
    first.use()
    assert gl.current == first.program


def test_delete_is_idempotent(paths):
    gl = FakeGL()
    shader = Shader(*paths, gl=gl)
    program = shader.program
    shader.delete()
    shader.delete()
    assert gl.deleted_programs == [program]
    assert shader.program == 0


def test_context_manager_deletes(paths):
    gl = FakeGL()
    with Shader(*paths, gl=gl) as shader:
        program = shader.program
    assert gl.deleted_programs == [program]