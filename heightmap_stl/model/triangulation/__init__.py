"""
Height field triangulation.

This package converts height fields into closed stepped triangle meshes.
"""

from .base import BaseTriangulator, emit_quad
from .runmerge import RunMergeTriangulator, triangulate

# Define package exports
__all__ = [
    'BaseTriangulator',
    'RunMergeTriangulator',
    'emit_quad',
    'triangulate'
]
