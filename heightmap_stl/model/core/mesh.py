"""Triangle mesh container and face geometry helpers."""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence, Tuple

import numpy as np

from heightmap_stl.exceptions import MeshError

logger = logging.getLogger(__name__)

# Type definitions
Vertex = Tuple[float, float, float]
Triangle = Tuple[Vertex, Vertex, Vertex]


def validate_triangles(triangles: np.ndarray) -> bool:
    """Check for an (N, 3, 3) coordinate array."""
    if triangles is None:
        return False
    if not isinstance(triangles, np.ndarray):
        return False
    if triangles.ndim != 3:
        return False
    if triangles.shape[1:] != (3, 3):
        return False
    return True


def _cross_products(triangles: np.ndarray) -> np.ndarray:
    # float64 so tiny float32 cells do not underflow to a zero normal
    tris = triangles.astype(np.float64)
    return np.cross(tris[:, 1] - tris[:, 0], tris[:, 2] - tris[:, 0])


def compute_face_normals(triangles: np.ndarray) -> np.ndarray:
    """
    Unit normals of ``cross(v1 - v0, v2 - v0)`` for each triangle.

    Degenerate triangles, whose cross product is exactly zero, get a zero
    normal instead of NaN.

    Args:
        triangles: (N, 3, 3) vertex array

    Returns:
        (N, 3) float32 array of normals
    """
    cross = _cross_products(triangles)
    length = np.linalg.norm(cross, axis=1)
    normals = np.zeros_like(cross)
    nonzero = length > 0
    normals[nonzero] = cross[nonzero] / length[nonzero, None]
    return normals.astype(np.float32)


@dataclass(eq=False)
class TriangleMesh:
    """
    Ordered sequence of triangles.

    Triangles are stored as an (N, 3, 3) float32 array: triangle, vertex,
    coordinate. Order and winding are preserved everywhere, including through
    STL encode and decode.
    """
    triangles: np.ndarray

    def __post_init__(self):
        """Validate mesh data on creation."""
        triangles = np.asarray(self.triangles, dtype=np.float32)
        if triangles.size == 0:
            triangles = triangles.reshape(0, 3, 3)
        if not validate_triangles(triangles):
            raise MeshError(f"Triangles must have shape (N, 3, 3), got {triangles.shape}")
        self.triangles = triangles

    @classmethod
    def from_triangles(cls, triangles: Iterable[Triangle]) -> 'TriangleMesh':
        """Build a mesh from an iterable of vertex triples."""
        return cls(np.array(list(triangles), dtype=np.float32))

    @classmethod
    def empty(cls) -> 'TriangleMesh':
        return cls(np.zeros((0, 3, 3), dtype=np.float32))

    @classmethod
    def concatenate(cls, meshes: Sequence['TriangleMesh']) -> 'TriangleMesh':
        """Join meshes in order."""
        if not meshes:
            return cls.empty()
        return cls(np.concatenate([m.triangles for m in meshes], axis=0))

    def __len__(self) -> int:
        return len(self.triangles)

    def __iter__(self) -> Iterator[np.ndarray]:
        return iter(self.triangles)

    def __getitem__(self, index) -> np.ndarray:
        return self.triangles[index]

    @property
    def triangle_count(self) -> int:
        return len(self.triangles)

    def equals(self, other: 'TriangleMesh') -> bool:
        """Exact comparison of vertices and order."""
        return np.array_equal(self.triangles, other.triangles)

    def face_normals(self) -> np.ndarray:
        """Unit face normals, zero for degenerate triangles."""
        return compute_face_normals(self.triangles)

    def areas(self) -> np.ndarray:
        """Area of each triangle."""
        return 0.5 * np.linalg.norm(_cross_products(self.triangles), axis=1)

    def degenerate_mask(self) -> np.ndarray:
        """True for triangles whose cross product is exactly zero."""
        cross = _cross_products(self.triangles)
        return np.einsum('ij,ij->i', cross, cross) == 0

    def without_degenerate(self) -> 'TriangleMesh':
        """
        Copy of the mesh without zero-area triangles.

        The triangulator emits zero-height walls between equal neighbours;
        renderers and some slicers prefer them removed.
        """
        mask = self.degenerate_mask()
        if np.any(mask):
            logger.debug(f"Dropping {int(mask.sum())} degenerate triangles")
        return TriangleMesh(self.triangles[~mask])

    def bounds(self) -> Tuple[np.ndarray, np.ndarray]:
        """Minimum and maximum corner of the bounding box."""
        if len(self) == 0:
            zero = np.zeros(3, dtype=np.float32)
            return zero, zero.copy()
        vertices = self.triangles.reshape(-1, 3)
        return vertices.min(axis=0), vertices.max(axis=0)

    def signed_volume(self) -> float:
        """
        Enclosed volume by the divergence theorem.

        Positive for a closed mesh with outward-facing windings.
        """
        if len(self) == 0:
            return 0.0
        tris = self.triangles.astype(np.float64)
        return float(np.einsum('ij,ij->i', tris[:, 0], np.cross(tris[:, 1], tris[:, 2])).sum() / 6.0)

    def to_list(self) -> List[Triangle]:
        """Triangles as nested tuples of Python floats."""
        return [tuple(tuple(float(c) for c in v) for v in tri) for tri in self.triangles]
