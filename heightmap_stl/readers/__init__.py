"""
Heightmap readers.

``load_heightfield`` picks the reader from ``ReaderConfig.format``; in
``auto`` mode known raster extensions go to the image reader and everything
else to the text reader, whose format is extension-agnostic.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from heightmap_stl.core.heightfield import HeightField
from heightmap_stl.model.config import IMAGE_EXTENSIONS, ReaderConfig
from heightmap_stl.readers.image import (
    decode_image_heightfield,
    read_image_heightfield,
    rgb_to_heightfield,
)
from heightmap_stl.readers.text import parse_text_heightfield, read_text_heightfield

logger = logging.getLogger(__name__)


def detect_format(path: Union[str, Path]) -> str:
    """Return 'image' for known raster extensions, 'text' otherwise."""
    return 'image' if Path(path).suffix.lower() in IMAGE_EXTENSIONS else 'text'


def load_heightfield(
    path: Union[str, Path],
    config: Optional[ReaderConfig] = None,
    rng=None
) -> HeightField:
    """
    Load a height field from a text or image heightmap.

    Args:
        path: Input file
        config: Reader configuration
        rng: Random source for image dithering, ignored for text input

    Returns:
        The loaded HeightField
    """
    config = config or ReaderConfig()
    fmt = detect_format(path) if config.format == 'auto' else config.format
    logger.debug(f"Reading {path} as {fmt}")

    if fmt == 'image':
        return read_image_heightfield(path, rng=rng, config=config)
    return read_text_heightfield(path, config=config)


__all__ = [
    'load_heightfield',
    'detect_format',
    'read_text_heightfield',
    'parse_text_heightfield',
    'read_image_heightfield',
    'decode_image_heightfield',
    'rgb_to_heightfield',
]
