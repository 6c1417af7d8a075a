"""
Base triangulator module for height field triangulation.

This module provides the quad decomposition shared by every face the
triangulators emit and an abstract base class defining the common interface.
"""

import time
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

from heightmap_stl.core.heightfield import HeightField
from heightmap_stl.model.config import MeshConfig
from heightmap_stl.model.core.mesh import Triangle, TriangleMesh, Vertex

# Set up logging
logger = logging.getLogger(__name__)


def emit_quad(triangles: List[Triangle], c0: Vertex, c1: Vertex, c2: Vertex, c3: Vertex) -> None:
    """
    Append a quad as two triangles split along the c0-c2 diagonal.

    The quad's facing follows the right-hand rule over c0, c1, c2, and both
    triangles keep that winding: (c0, c1, c2) and (c0, c2, c3).
    """
    triangles.append((c0, c1, c2))
    triangles.append((c0, c2, c3))


class BaseTriangulator(ABC):
    """Abstract base class for height field triangulation algorithms."""

    def __init__(
        self,
        config: Optional[MeshConfig] = None,
        progress_callback: Optional[Callable[[float], None]] = None
    ):
        """Initialize the base triangulator."""
        self.config = config or MeshConfig()
        self.progress_callback = progress_callback
        self.stats = self._init_stats()
        self.start_time = time.time()

    def _init_stats(self) -> Dict[str, Any]:
        """Initialize statistics dictionary."""
        return {
            "cells": 0,
            "runs": 0,
            "final_triangles": 0,
            "processing_time": 0.0,
        }

    @abstractmethod
    def triangulate(self, field: HeightField) -> TriangleMesh:
        """
        Run triangulation algorithm.

        Args:
            field: Height field to triangulate

        Returns:
            Mesh in emission order
        """

    def finalize_stats(self, field: HeightField, mesh: TriangleMesh) -> None:
        """Update statistics after triangulation is complete."""
        self.stats["cells"] = field.width * field.height
        self.stats["final_triangles"] = len(mesh)
        self.stats["processing_time"] = time.time() - self.start_time

        logger.info(
            f"Triangulation complete. Generated {len(mesh)} triangles from "
            f"{field.width}x{field.height} samples in {self.stats['processing_time']:.2f}s "
            f"({self.stats['runs']} top runs)"
        )

    def get_statistics(self) -> Dict[str, Any]:
        """
        Get statistics about the last triangulation.

        Returns:
            Dictionary with statistics
        """
        return self.stats.copy()

    def report_progress(self, progress: float) -> None:
        """
        Report progress to callback if provided.

        Args:
            progress: Progress value between 0.0 and 1.0
        """
        if self.progress_callback:
            self.progress_callback(max(0.0, min(1.0, progress)))
