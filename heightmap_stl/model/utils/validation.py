"""Validation utilities for triangle meshes."""

import logging
from collections import Counter
from typing import List, Optional, Tuple

import numpy as np

from heightmap_stl.model.core.mesh import TriangleMesh

# Set up logging
logger = logging.getLogger(__name__)

Edge = Tuple[Tuple[float, float, float], Tuple[float, float, float]]


def _interior_points(
    points: np.ndarray,
    a: int,
    b: int,
    tolerance: float
) -> List[int]:
    """Indices of points strictly inside segment a-b, ordered from a to b."""
    start = points[a]
    direction = points[b] - start
    length_sq = float(direction @ direction)
    if length_sq == 0:
        return []

    offsets = points - start
    t = offsets @ direction / length_sq
    # Perpendicular distance of each point from the line through a and b
    residual = offsets - np.outer(t, direction)
    dist_sq = np.einsum('ij,ij->i', residual, residual)
    eps = tolerance / np.sqrt(length_sq)

    inside = (t > eps) & (t < 1 - eps) & (dist_sq <= tolerance * tolerance)
    candidates = np.nonzero(inside)[0]
    return [int(i) for i in candidates[np.argsort(t[candidates])]]


def find_open_edges(mesh: TriangleMesh, tolerance: Optional[float] = None) -> List[Edge]:
    """
    Find edges that are not closed off by an oppositely wound neighbour.

    Degenerate triangles are ignored. Every edge is first split at any mesh
    vertex lying on it, so T-junctions (a long edge meeting several shorter
    ones) still count as closed. A closed, consistently oriented mesh has
    every elementary segment traversed equally often in both directions.

    This is O(edges * vertices); it is meant for tests and inspection, not
    for very large meshes.

    Args:
        mesh: Mesh to check
        tolerance: Distance under which a vertex counts as lying on an edge;
            defaults to 1e-6 of the bounding box diagonal

    Returns:
        List of unbalanced segments as pairs of vertex coordinates
    """
    solid = mesh.without_degenerate()
    if len(solid) == 0:
        return []

    flat = solid.triangles.reshape(-1, 3).astype(np.float64)
    points, inverse = np.unique(flat, axis=0, return_inverse=True)
    indices = np.asarray(inverse).reshape(-1, 3)

    if tolerance is None:
        diagonal = float(np.linalg.norm(points.max(axis=0) - points.min(axis=0)))
        tolerance = max(diagonal, 1.0) * 1e-6

    directed: Counter = Counter()
    for tri in indices:
        for a, b in ((tri[0], tri[1]), (tri[1], tri[2]), (tri[2], tri[0])):
            chain = [int(a)] + _interior_points(points, int(a), int(b), tolerance) + [int(b)]
            for u, v in zip(chain, chain[1:]):
                directed[(u, v)] += 1

    open_edges = []
    seen = set()
    for (u, v), count in directed.items():
        key = (min(u, v), max(u, v))
        if key in seen:
            continue
        seen.add(key)
        if count != directed.get((v, u), 0):
            open_edges.append((tuple(points[u].tolist()), tuple(points[v].tolist())))

    if open_edges:
        logger.debug(f"Found {len(open_edges)} open edges")
    return open_edges


def is_closed(mesh: TriangleMesh, tolerance: Optional[float] = None) -> bool:
    """True when ``find_open_edges`` finds nothing."""
    return not find_open_edges(mesh, tolerance)
