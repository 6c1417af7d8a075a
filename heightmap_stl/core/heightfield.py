"""
Height field data model.

A height field is a regular grid of elevation samples plus the physical
spacing between them. It is built once by a reader and only read afterwards.
"""

import logging
from dataclasses import dataclass, field
from typing import Tuple, Union, Sequence

import numpy as np

from heightmap_stl.exceptions import SampleCountError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class HeightField:
    """
    Immutable grid of elevation samples.

    Attributes:
        size: (width, height) as the number of sample columns and rows.
        scale: (sx, sy) physical spacing between adjacent samples.
        samples: Flat row-major float32 array of width * height samples.
        invert_row_order: When True, logical row ``r`` is stored at row
            ``height - 1 - r``. Image readers set this because image row 0
            is the top of the picture.
    """
    size: Tuple[int, int]
    scale: Tuple[float, float]
    samples: np.ndarray = field(repr=False)
    invert_row_order: bool = False

    def __post_init__(self):
        width, height = (int(v) for v in self.size)
        if width < 0 or height < 0:
            raise ValueError(f"size must be non-negative, got {self.size}")

        samples = np.array(self.samples, dtype=np.float32).reshape(-1)
        if samples.size != width * height:
            raise SampleCountError(
                f"Expected {width * height} samples for a {width}x{height} grid, "
                f"got {samples.size}"
            )
        samples.setflags(write=False)

        # Frozen dataclass: normalise fields through object.__setattr__
        object.__setattr__(self, 'size', (width, height))
        object.__setattr__(self, 'scale', (float(self.scale[0]), float(self.scale[1])))
        object.__setattr__(self, 'samples', samples)
        object.__setattr__(self, 'invert_row_order', bool(self.invert_row_order))

    @classmethod
    def from_grid(
        cls,
        grid: Union[np.ndarray, Sequence[Sequence[float]]],
        scale: Tuple[float, float] = (1.0, 1.0),
        invert_row_order: bool = False
    ) -> 'HeightField':
        """
        Build a height field from a 2D array indexed ``[row, col]``.

        The array is taken in storage order, so with ``invert_row_order`` the
        first array row becomes the last logical row.
        """
        grid = np.asarray(grid, dtype=np.float32)
        if grid.ndim != 2:
            raise ValueError(f"grid must be 2D, got shape {grid.shape}")
        height, width = grid.shape
        return cls((width, height), scale, grid.reshape(-1), invert_row_order)

    @property
    def width(self) -> int:
        return self.size[0]

    @property
    def height(self) -> int:
        return self.size[1]

    @property
    def extents(self) -> Tuple[float, float]:
        """Physical footprint (width * sx, height * sy)."""
        return self.width * self.scale[0], self.height * self.scale[1]

    def sample(self, col: int, row: int) -> float:
        """
        Return the elevation at (col, row).

        Any coordinate outside the grid yields 0.0, the implicit sea level the
        triangulator builds boundary walls against.
        """
        width, height = self.size
        if col < 0 or row < 0 or col >= width or row >= height:
            return 0.0
        if self.invert_row_order:
            row = height - 1 - row
        return float(self.samples[row * width + col])

    def grid(self) -> np.ndarray:
        """Samples as a (height, width) array in logical row order."""
        grid = self.samples.reshape(self.height, self.width)
        if self.invert_row_order:
            grid = grid[::-1]
        return grid

    def padded_grid(self) -> np.ndarray:
        """
        Logical grid surrounded by a ring of zeros.

        ``padded_grid()[row + 1, col + 1] == sample(col, row)`` for every
        ``-1 <= col <= width`` and ``-1 <= row <= height``.
        """
        return np.pad(self.grid(), 1, mode='constant', constant_values=0.0)

    def height_range(self) -> Tuple[float, float]:
        """Minimum and maximum sample, (0.0, 0.0) for an empty field."""
        if self.samples.size == 0:
            return 0.0, 0.0
        return float(self.samples.min()), float(self.samples.max())

    def stats(self) -> dict:
        """Summary statistics used by the CLI info table."""
        h_min, h_max = self.height_range()
        return {
            'size': f"{self.width} x {self.height}",
            'scale': f"{self.scale[0]:g} x {self.scale[1]:g}",
            'extents': f"{self.extents[0]:g} x {self.extents[1]:g}",
            'min': h_min,
            'max': h_max,
            'mean': float(self.samples.mean()) if self.samples.size else 0.0,
            'zero_samples': int(np.count_nonzero(self.samples == 0)),
            'negative_samples': int(np.count_nonzero(self.samples < 0)),
            'invert_row_order': self.invert_row_order,
        }
