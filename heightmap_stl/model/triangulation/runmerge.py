"""
Run-merge triangulation of height fields.

The height field is modelled as a stepped solid: every cell with a positive
sample is a column of that height standing on the z = 0 floor, and cells at
or below zero are outside the solid. The triangulator walks rows
``0..=height`` and columns ``0..=width`` (one past the grid so the far
boundary walls are produced) and, per cell, emits:

1. the top quad of a run of equal-height cells starting at this cell,
2. the front wall towards the previous row,
3. the side wall towards the previous column,
4. the floor quad beneath the run from step 1.

Walls are emitted for every edge, including zero-height ones between equal
neighbours; filtering degenerate triangles is left to the mesh consumer.
The floor is emitted per run only, so zero-height border regions stay open
to the outside rather than being covered by one full-footprint rectangle.
"""

import time
import logging
from typing import Callable, List, Optional

import numpy as np

from heightmap_stl.core.heightfield import HeightField
from heightmap_stl.model.config import MeshConfig
from heightmap_stl.model.core.mesh import Triangle, TriangleMesh
from heightmap_stl.model.triangulation.base import BaseTriangulator, emit_quad
from heightmap_stl.model.utils.logging import mesh_logger

# Set up logging
logger = logging.getLogger(__name__)


class RunMergeTriangulator(BaseTriangulator):
    """
    Triangulator that merges horizontal runs of equal-height cells.

    A run starts at a cell with a strictly positive height that no earlier
    run in the row has absorbed, and extends right while the next sample is
    exactly equal. Each run produces one top quad and one floor quad instead
    of one per cell.
    """

    def _max_run_length(self) -> Optional[int]:
        if not self.config.merge_runs:
            return 1
        return self.config.max_run_length

    def triangulate(self, field: HeightField) -> TriangleMesh:
        self.stats = self._init_stats()
        self.start_time = time.time()

        width, height = field.size
        sx, sy = field.scale
        max_run = self._max_run_length()

        if field.samples.size and float(field.samples.min()) < 0:
            mesh_logger.warning(
                "Height field has negative samples; they are treated as open cells "
                "and the mesh will not be closed",
                negative=int(np.count_nonzero(field.samples < 0))
            )

        # heights[row + 1, col + 1] == field.sample(col, row), zero outside the grid
        heights = field.padded_grid()
        triangles: List[Triangle] = []

        for row in range(height + 1):
            y0 = row * sy
            y1 = (row + 1) * sy
            row_heights = heights[row + 1]
            absorbed_until = 0

            for col in range(width + 1):
                x0 = col * sx
                x1 = (col + 1) * sx
                z = float(row_heights[col + 1])

                run_x1 = None
                if col < width and row < height and col >= absorbed_until and z > 0:
                    end = col + 1
                    while (end < width
                           and row_heights[end + 1] == row_heights[col + 1]
                           and (max_run is None or end - col < max_run)):
                        end += 1
                    absorbed_until = end
                    run_x1 = end * sx
                    self.stats["runs"] += 1
                    emit_quad(triangles,
                              (x0, y0, z), (run_x1, y0, z), (run_x1, y1, z), (x0, y1, z))

                bottom_z = float(heights[row, col + 1])
                emit_quad(triangles,
                          (x0, y0, bottom_z), (x1, y0, bottom_z), (x1, y0, z), (x0, y0, z))

                left_z = float(row_heights[col])
                emit_quad(triangles,
                          (x0, y1, left_z), (x0, y0, left_z), (x0, y0, z), (x0, y1, z))

                if run_x1 is not None:
                    emit_quad(triangles,
                              (x0, y0, 0.0), (x0, y1, 0.0), (run_x1, y1, 0.0), (run_x1, y0, 0.0))

            self.report_progress((row + 1) / (height + 1))

        mesh = TriangleMesh(np.array(triangles, dtype=np.float32))
        self.finalize_stats(field, mesh)
        mesh_logger.debug("Run-merge triangulation", **self.get_statistics())
        return mesh


def triangulate(
    field: HeightField,
    config: Optional[MeshConfig] = None,
    progress_callback: Optional[Callable[[float], None]] = None
) -> TriangleMesh:
    """
    Triangulate a height field into a closed stepped mesh.

    Args:
        field: Height field to triangulate
        config: Triangulation options
        progress_callback: Called with a fraction in [0, 1] after each row

    Returns:
        TriangleMesh in emission order
    """
    return RunMergeTriangulator(config, progress_callback).triangulate(field)
