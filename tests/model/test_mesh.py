"""Unit tests for the TriangleMesh container and mesh validation."""

import numpy as np
import pytest

from heightmap_stl.core.heightfield import HeightField
from heightmap_stl.exceptions import MeshError
from heightmap_stl.model.core.mesh import TriangleMesh, compute_face_normals
from heightmap_stl.model.triangulation import triangulate
from heightmap_stl.model.utils.validation import find_open_edges, is_closed

UNIT_TRIANGLE = ((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0))
DEGENERATE = ((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (2.0, 0.0, 0.0))


class TestTriangleMesh:
    """Container behaviour."""

    def test_from_triangles(self):
        mesh = TriangleMesh.from_triangles([UNIT_TRIANGLE, DEGENERATE])

        assert len(mesh) == 2
        assert mesh.triangles.dtype == np.float32
        assert mesh.to_list()[0] == UNIT_TRIANGLE

    def test_empty(self):
        mesh = TriangleMesh.from_triangles([])
        assert len(mesh) == 0
        assert mesh.triangles.shape == (0, 3, 3)
        assert mesh.signed_volume() == 0.0

    @pytest.mark.parametrize("bad", [
        np.zeros((2, 3)),
        np.zeros((2, 4, 3)),
        np.zeros((2, 3, 2)),
    ])
    def test_rejects_bad_shape(self, bad):
        with pytest.raises(MeshError):
            TriangleMesh(bad)

    def test_face_normals(self):
        mesh = TriangleMesh.from_triangles([UNIT_TRIANGLE, DEGENERATE])
        normals = mesh.face_normals()

        np.testing.assert_array_equal(normals[0], [0, 0, 1])
        np.testing.assert_array_equal(normals[1], [0, 0, 0])
        assert not np.any(np.isnan(normals))

    def test_winding_flips_normal(self):
        flipped = (UNIT_TRIANGLE[0], UNIT_TRIANGLE[2], UNIT_TRIANGLE[1])
        normals = compute_face_normals(np.array([flipped], dtype=np.float32))
        np.testing.assert_array_equal(normals[0], [0, 0, -1])

    def test_without_degenerate_keeps_order(self):
        other = ((0.0, 0.0, 1.0), (0.0, 1.0, 1.0), (1.0, 0.0, 1.0))
        mesh = TriangleMesh.from_triangles([UNIT_TRIANGLE, DEGENERATE, other])
        filtered = mesh.without_degenerate()

        assert filtered.to_list() == [UNIT_TRIANGLE, other]

    def test_areas_and_bounds(self):
        mesh = TriangleMesh.from_triangles([UNIT_TRIANGLE])
        np.testing.assert_allclose(mesh.areas(), [0.5])

        lower, upper = mesh.bounds()
        np.testing.assert_array_equal(lower, [0, 0, 0])
        np.testing.assert_array_equal(upper, [1, 1, 0])

    def test_concatenate(self):
        a = TriangleMesh.from_triangles([UNIT_TRIANGLE])
        b = TriangleMesh.from_triangles([DEGENERATE])
        joined = TriangleMesh.concatenate([a, b])

        assert joined.to_list() == [UNIT_TRIANGLE, DEGENERATE]
        assert len(TriangleMesh.concatenate([])) == 0

    def test_equals(self):
        a = TriangleMesh.from_triangles([UNIT_TRIANGLE])
        assert a.equals(TriangleMesh.from_triangles([UNIT_TRIANGLE]))
        assert not a.equals(TriangleMesh.from_triangles([DEGENERATE]))


class TestOpenEdges:
    """Watertightness check."""

    def test_single_triangle_is_open(self):
        mesh = TriangleMesh.from_triangles([UNIT_TRIANGLE])
        assert len(find_open_edges(mesh)) == 3
        assert not is_closed(mesh)

    def test_unit_column_is_closed(self):
        mesh = triangulate(HeightField((1, 1), (2.0, 3.0), [4.0]))
        assert is_closed(mesh)
        assert mesh.signed_volume() == pytest.approx(24.0)

    def test_missing_face_is_detected(self):
        mesh = triangulate(HeightField((1, 1), (1.0, 1.0), [1.0])).without_degenerate()
        broken = TriangleMesh(mesh.triangles[1:])
        assert find_open_edges(broken)

    def test_t_junctions_count_as_closed(self):
        # A merged 2-cell top meets two separate per-cell walls
        mesh = triangulate(HeightField((2, 1), (1.0, 1.0), [1.0, 1.0]))
        assert is_closed(mesh)

    def test_degenerate_only_mesh_has_no_open_edges(self):
        mesh = TriangleMesh.from_triangles([DEGENERATE])
        assert find_open_edges(mesh) == []
