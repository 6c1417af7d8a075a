"""
Pytest fixtures shared across test modules.
"""
import numpy as np
import pytest

from heightmap_stl.core.heightfield import HeightField

# 2x2 grid, unit scale, a single sample of height 1 at col 1, row 1
SINGLE_PEAK_TEXT = "2,2\n1,1\n0\n0\n0\n1"


class FixedRng:
    """Random source stub returning a constant value."""

    def __init__(self, value: float = 0.5):
        self.value = value
        self.calls = []

    def random(self, size=None):
        self.calls.append(size)
        return np.full(size, self.value, dtype=np.float64)


class ForbiddenRng:
    """Random source stub that fails the test when used."""

    def random(self, size=None):
        raise AssertionError("random source must not be used")


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep tests away from the user's settings file."""
    monkeypatch.setenv("HEIGHTMAP_STL_CONFIG", str(tmp_path / "no-settings.json"))


@pytest.fixture
def single_peak_text():
    return SINGLE_PEAK_TEXT


@pytest.fixture
def single_peak_field():
    return HeightField((2, 2), (1.0, 1.0), [0, 0, 0, 1])


@pytest.fixture
def write_text(tmp_path):
    """Factory writing text content to a file in tmp_path."""
    def _write(content, name="heights.txt"):
        path = tmp_path / name
        path.write_text(content)
        return path
    return _write


@pytest.fixture
def write_png(tmp_path):
    """Factory saving an (rows, cols, 3) uint8 array as a PNG."""
    from PIL import Image

    def _write(pixels, name="heights.png"):
        path = tmp_path / name
        Image.fromarray(np.asarray(pixels, dtype=np.uint8)).save(path)
        return path
    return _write


@pytest.fixture
def fixed_rng():
    return FixedRng(0.5)


@pytest.fixture
def forbidden_rng():
    return ForbiddenRng()
