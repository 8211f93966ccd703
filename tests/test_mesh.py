"""Tests for canvas_pipeline.mesh and canvas_pipeline.scene (geometry, factories, OBJ loading)."""

from __future__ import annotations

import logging

import pytest

from canvas_pipeline.errors import MalformedGeometryError
from canvas_pipeline.mesh import Geometry, Material, Mesh, triangulate
from canvas_pipeline.scene import Scene
from canvas_pipeline.shaders import basic_fragment_shader, basic_vertex_shader


class TestGeometry:
    def test_faces_are_consecutive_triples(self) -> None:
        geo = Geometry([(0, 0, 0), (1, 0, 0), (0, 1, 0), (1, 1, 0)], [0, 1, 3, 1, 2, 3])
        assert geo.face_count == 2
        assert list(geo.faces()) == [(0, 1, 3), (1, 2, 3)]

    def test_validate_accepts_good_geometry(self) -> None:
        Mesh.plane().geometry.validate()
        Mesh.cube().geometry.validate()

    def test_validate_rejects_out_of_range(self) -> None:
        geo = Geometry([(0, 0, 0), (1, 0, 0), (0, 1, 0)], [0, 1, 3])
        with pytest.raises(MalformedGeometryError) as info:
            geo.validate()
        assert info.value.face_index == 0
        assert isinstance(info.value, IndexError)

    def test_validate_rejects_negative_index(self) -> None:
        geo = Geometry([(0, 0, 0), (1, 0, 0), (0, 1, 0)], [0, 1, -1])
        with pytest.raises(MalformedGeometryError):
            geo.validate()

    def test_validate_rejects_partial_triple(self) -> None:
        geo = Geometry([(0, 0, 0), (1, 0, 0), (0, 1, 0)], [0, 1, 2, 0])
        with pytest.raises(MalformedGeometryError):
            geo.validate()


class TestFactories:
    def test_plane_layout(self) -> None:
        mesh = Mesh.plane(200, 100)
        positions = [list(v.position) for v in mesh.geometry.vertices]
        assert positions == [[-100, 50, 0], [100, 50, 0], [100, -50, 0], [-100, -50, 0]]
        assert mesh.geometry.indices == [0, 1, 3, 1, 2, 3]

    def test_default_transform_and_material(self) -> None:
        mesh = Mesh.plane()
        assert list(mesh.position) == [0, 0, 0]
        assert [mesh.rotation.x, mesh.rotation.y, mesh.rotation.z] == [0, 0, 0]
        assert list(mesh.scale) == [1, 1, 1]
        assert mesh.material.vertex_shader is basic_vertex_shader
        assert mesh.material.fragment_shader is basic_fragment_shader
        assert mesh.material.wireframe is False

    def test_cube_has_twelve_faces(self) -> None:
        mesh = Mesh.cube(4)
        assert len(mesh.geometry.vertices) == 8
        assert mesh.geometry.face_count == 12
        assert max(abs(c) for v in mesh.geometry.vertices for c in v.position) == 2

    def test_shared_material(self) -> None:
        material = Material(color="#00ff00")
        a = Mesh.plane(material=material)
        b = Mesh.cube(material=material)
        assert a.material is b.material

    def test_triangulate_fans(self) -> None:
        assert triangulate([[0, 1, 2, 3, 4]]) == [0, 1, 2, 0, 2, 3, 0, 3, 4]


class TestObjLoader:
    def test_loads_vertices_and_quads(self, tmp_path) -> None:
        path = tmp_path / "quad.obj"
        path.write_text(
            "# quad\n"
            "v -1 -1 0\n"
            "v 1 -1 0\n"
            "v 1 1 0\n"
            "v -1 1 0\n"
            "vn 0 0 1\n"
            "f 1/1/1 2/2/1 3/3/1 4/4/1\n"
        )
        mesh = Mesh.from_obj(path)
        assert len(mesh.geometry.vertices) == 4
        assert mesh.geometry.indices == [0, 1, 2, 0, 2, 3]

    def test_negative_indices_are_relative(self, tmp_path) -> None:
        path = tmp_path / "tri.obj"
        path.write_text("v 0 0 0\nv 1 0 0\nv 0 1 0\nf -3 -2 -1\n")
        mesh = Mesh.from_obj(path)
        assert mesh.geometry.indices == [0, 1, 2]

    def test_missing_file_falls_back_to_cube(self, tmp_path, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="canvas_pipeline"):
            mesh = Mesh.from_obj(tmp_path / "missing.obj")
        assert mesh.geometry.face_count == 12
        assert "Could not load" in caplog.text

    def test_empty_file_falls_back_to_cube(self, tmp_path) -> None:
        path = tmp_path / "empty.obj"
        path.write_text("# nothing here\n")
        assert Mesh.from_obj(path).geometry.face_count == 12


class TestScene:
    def test_add_remove_clear(self) -> None:
        a, b = Mesh.plane(), Mesh.cube()
        scene = Scene().add(a, b)
        assert list(scene) == [a, b]
        scene.remove(a)
        assert scene.children == [b]
        scene.remove(a)  # already gone
        assert len(scene) == 1
        scene.clear()
        assert len(scene) == 0

    def test_remove_uses_identity(self) -> None:
        mesh = Mesh.plane()
        scene = Scene([mesh, mesh])
        scene.remove(mesh)
        assert scene.children == [mesh]
