"""Unit tests for the HeightField data model."""

import unittest

import numpy as np
import pytest

from heightmap_stl.core.heightfield import HeightField
from heightmap_stl.exceptions import SampleCountError


class TestHeightField(unittest.TestCase):
    """Test class for HeightField sampling."""

    def setUp(self):
        """Set up test fixtures."""
        # 3 columns, 2 rows, samples equal to their row-major index
        self.field = HeightField((3, 2), (0.5, 2.0), np.arange(6))
        self.inverted = HeightField((3, 2), (1.0, 1.0), np.arange(6), invert_row_order=True)

    def test_row_major_sampling(self):
        """Samples are addressed row * width + col."""
        for row in range(2):
            for col in range(3):
                self.assertEqual(self.field.sample(col, row), row * 3 + col)

    def test_inverted_sampling(self):
        """Inverted fields mirror the row index."""
        self.assertEqual(self.inverted.sample(0, 0), 3.0)
        self.assertEqual(self.inverted.sample(2, 0), 5.0)
        self.assertEqual(self.inverted.sample(0, 1), 0.0)
        self.assertEqual(self.inverted.sample(2, 1), 2.0)

    def test_out_of_range_is_zero(self):
        """Any coordinate outside the grid samples as 0."""
        for field in (self.field, self.inverted):
            for col, row in [(-1, 0), (0, -1), (3, 0), (0, 2), (-5, -5), (100, 100), (3, 2)]:
                self.assertEqual(field.sample(col, row), 0.0)

    def test_empty_field(self):
        """A 0x0 field samples 0 everywhere."""
        field = HeightField((0, 0), (1.0, 1.0), [])
        for col, row in [(0, 0), (-1, -1), (1, 0), (0, 1)]:
            self.assertEqual(field.sample(col, row), 0.0)
        self.assertEqual(field.height_range(), (0.0, 0.0))

    def test_samples_are_read_only(self):
        """The sample array cannot be modified after construction."""
        with self.assertRaises(ValueError):
            self.field.samples[0] = 10.0

    def test_sample_count_mismatch(self):
        """Constructing with the wrong number of samples fails."""
        with self.assertRaises(SampleCountError):
            HeightField((2, 2), (1.0, 1.0), [1, 2, 3])

    def test_negative_size(self):
        with self.assertRaises(ValueError):
            HeightField((-1, 2), (1.0, 1.0), [])

    def test_extents(self):
        self.assertEqual(self.field.extents, (1.5, 4.0))


class TestHeightFieldGrids:
    """Grid helpers agree with sample()."""

    @pytest.mark.parametrize("invert", [False, True])
    def test_padded_grid_matches_sample(self, invert):
        field = HeightField((4, 3), (1.0, 1.0), np.arange(12) + 1, invert_row_order=invert)
        padded = field.padded_grid()

        assert padded.shape == (5, 6)
        for row in range(-1, field.height + 1):
            for col in range(-1, field.width + 1):
                assert padded[row + 1, col + 1] == field.sample(col, row)

    def test_from_grid_storage_order(self):
        field = HeightField.from_grid([[1, 2], [3, 4]], invert_row_order=True)

        assert field.size == (2, 2)
        assert field.sample(0, 1) == 1.0
        assert field.sample(1, 0) == 4.0
        np.testing.assert_array_equal(field.grid(), [[3, 4], [1, 2]])

    def test_stats(self):
        field = HeightField((2, 2), (1.0, 1.0), [0, -1, 2, 3])
        stats = field.stats()

        assert stats['min'] == -1.0
        assert stats['max'] == 3.0
        assert stats['zero_samples'] == 1
        assert stats['negative_samples'] == 1
