"""
Reader for the plain-text heightmap format.

Layout, one value per line after a two-line header::

    <width>,<height>
    <scaleX>,<scaleY>
    <sample 0>
    <sample 1>
    ...

Samples are row-major and should number width * height.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

import numpy as np

from heightmap_stl.core.heightfield import HeightField
from heightmap_stl.exceptions import (
    FloatParseError,
    IntegerParseError,
    SampleCountError,
    translate_errors,
)
from heightmap_stl.model.config import ReaderConfig

logger = logging.getLogger(__name__)


def _split_pair(line: Optional[str], line_number: int, what: str, error_cls) -> Tuple[str, str]:
    if line is None:
        raise error_cls(f"Line {line_number}: missing {what} line")
    parts = line.split(',')
    if len(parts) < 2:
        raise error_cls(f"Line {line_number}: expected two comma-separated {what} values, got '{line.strip()}'")
    return parts[0].strip(), parts[1].strip()


def _parse_size(line: Optional[str]) -> Tuple[int, int]:
    tokens = _split_pair(line, 1, "size", IntegerParseError)
    size = []
    for token in tokens:
        try:
            value = int(token)
        except ValueError as e:
            raise IntegerParseError(f"Line 1: invalid integer '{token}'") from e
        if value < 0:
            raise IntegerParseError(f"Line 1: dimension must be non-negative, got {value}")
        size.append(value)
    return size[0], size[1]


def _parse_scale(line: Optional[str]) -> Tuple[float, float]:
    tokens = _split_pair(line, 2, "scale", FloatParseError)
    try:
        return float(tokens[0]), float(tokens[1])
    except ValueError as e:
        raise FloatParseError(f"Line 2: invalid scale '{line.strip()}'") from e


def _parse_samples(lines: List[str]) -> List[float]:
    samples = []
    # Sample lines start at line 3 of the file
    for line_number, line in enumerate(lines, start=3):
        token = line.strip()
        # Blank lines are tolerated between samples, unlike any other non-number
        if not token:
            continue
        try:
            samples.append(float(token))
        except ValueError as e:
            raise FloatParseError(f"Line {line_number}: invalid sample '{token}'") from e
    return samples


def _fit_samples(samples: List[float], size: Tuple[int, int], strict: bool) -> np.ndarray:
    expected = size[0] * size[1]
    if len(samples) == expected:
        return np.asarray(samples, dtype=np.float32)

    if strict:
        raise SampleCountError(
            f"Expected {expected} samples for a {size[0]}x{size[1]} grid, got {len(samples)}"
        )

    logger.warning(
        f"Sample count {len(samples)} does not match {size[0]}x{size[1]} grid; "
        f"{'padding with zeros' if len(samples) < expected else 'ignoring extra samples'}"
    )
    fitted = np.zeros(expected, dtype=np.float32)
    count = min(expected, len(samples))
    fitted[:count] = samples[:count]
    return fitted


def parse_text_heightfield(text: str, config: Optional[ReaderConfig] = None) -> HeightField:
    """
    Parse the text heightmap format.

    Args:
        text: File contents
        config: Reader configuration; ``strict_shape`` controls whether a
            sample count mismatch is an error

    Returns:
        HeightField with ``invert_row_order`` False

    Raises:
        IntegerParseError: If the size line is missing or malformed
        FloatParseError: If the scale line or a sample is missing or malformed
        SampleCountError: If strict and the sample count is not width * height
    """
    config = config or ReaderConfig()
    lines = text.splitlines()

    size = _parse_size(lines[0] if len(lines) > 0 else None)
    scale = _parse_scale(lines[1] if len(lines) > 1 else None)
    samples = _parse_samples(lines[2:])

    field = HeightField(size, scale, _fit_samples(samples, size, config.strict_shape))
    logger.debug(f"Parsed {size[0]}x{size[1]} text heightfield with scale {scale}")
    return field


def read_text_heightfield(
    path: Union[str, Path],
    config: Optional[ReaderConfig] = None
) -> HeightField:
    """
    Read a text heightmap file.

    Raises:
        HeightmapIOError: If the file cannot be read or is not valid UTF-8
        IntegerParseError, FloatParseError, SampleCountError: see
            ``parse_text_heightfield``
    """
    path = Path(path)
    with translate_errors(f"reading {path}"):
        with open(path, 'r', encoding='utf-8') as f:
            try:
                text = f.read()
            except UnicodeDecodeError as e:
                # A binary file handed to the text reader is unreadable input
                raise OSError(f"not a text file: {e}") from e

    field = parse_text_heightfield(text, config)
    logger.info(f"Loaded text heightmap {path} ({field.width}x{field.height})")
    return field
