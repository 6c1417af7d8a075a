"""Mesh data structures."""
from heightmap_stl.model.core.mesh import TriangleMesh, compute_face_normals

__all__ = ['TriangleMesh', 'compute_face_normals']
