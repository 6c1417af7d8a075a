#!/usr/bin/env python3
"""
Heightmap STL Exceptions

This module defines the exceptions raised by the readers, the STL codec and
the mesh helpers. Every exception carries an ``ErrorKind`` so callers can
render a distinct diagnostic for each failure without string matching.
"""

import enum
from contextlib import contextmanager
from typing import Iterator


class ErrorKind(enum.Enum):
    """Closed set of failure kinds."""
    IO = "io"
    INTEGER_PARSE = "integer_parse"
    FLOAT_PARSE = "float_parse"
    IMAGE_DECODE = "image_decode"
    SAMPLE_COUNT = "sample_count"
    MESH = "mesh"


class HeightmapError(Exception):
    """Base class for all heightmap_stl exceptions."""
    kind: ErrorKind = ErrorKind.IO


class HeightmapIOError(HeightmapError):
    """Raised when a file cannot be opened, read, written or is truncated."""
    kind = ErrorKind.IO


class IntegerParseError(HeightmapError):
    """Raised when an integer token (grid dimension) is malformed or missing."""
    kind = ErrorKind.INTEGER_PARSE


class FloatParseError(HeightmapError):
    """Raised when a float token (scale or sample) is malformed or missing."""
    kind = ErrorKind.FLOAT_PARSE


class ImageDecodeError(HeightmapError):
    """Raised when image bytes are corrupt or in an unsupported format."""
    kind = ErrorKind.IMAGE_DECODE


class SampleCountError(HeightmapError):
    """Raised when the number of samples does not match width * height."""
    kind = ErrorKind.SAMPLE_COUNT


class MeshError(HeightmapError):
    """Raised when triangle data does not have the (N, 3, 3) layout."""
    kind = ErrorKind.MESH


@contextmanager
def translate_errors(action: str) -> Iterator[None]:
    """
    Convert ``OSError`` raised inside the block into ``HeightmapIOError``.

    Exceptions that already belong to this module pass through unchanged.

    Args:
        action: Short description used as the message prefix,
            e.g. ``"reading heights.txt"``.
    """
    try:
        yield
    except HeightmapError:
        raise
    except OSError as e:
        raise HeightmapIOError(f"I/O error while {action}: {e}") from e
