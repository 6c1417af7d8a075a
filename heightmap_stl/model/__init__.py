"""Mesh generation and export package."""
from .config import BaseConfig, ReaderConfig, MeshConfig, ExportConfig
from .core.mesh import TriangleMesh, compute_face_normals
from .triangulation import RunMergeTriangulator, triangulate, emit_quad
from .formats.stl import read_binary_stl, write_binary_stl, encode_binary_stl, decode_binary_stl
from .utils.validation import find_open_edges, is_closed

__all__ = [
    'BaseConfig',
    'ReaderConfig',
    'MeshConfig',
    'ExportConfig',
    'TriangleMesh',
    'compute_face_normals',
    'RunMergeTriangulator',
    'triangulate',
    'emit_quad',
    'read_binary_stl',
    'write_binary_stl',
    'encode_binary_stl',
    'decode_binary_stl',
    'find_open_edges',
    'is_closed'
]
