"""Core data model."""
from heightmap_stl.core.heightfield import HeightField

__all__ = ['HeightField']
