"""
Reader for raster images used as heightmaps.

Brightness maps to elevation: ``max(R, G, B) / 255`` scaled by
``max(width, height) / 32``. Pixels whose red channel is 0 but which are not
black receive up to 1/255 of uniform noise before scaling, which breaks up
perfectly flat runs in pure green and blue bands.
"""

import io
import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np

from heightmap_stl.core.heightfield import HeightField
from heightmap_stl.exceptions import ImageDecodeError, translate_errors
from heightmap_stl.model.config import ReaderConfig

logger = logging.getLogger(__name__)

# Pillow modes wider than 8 bits per pixel; convert('RGB') would clip them
_HIGH_DEPTH_MODES = ('I;16', 'I;16L', 'I;16B', 'I;16N', 'I', 'F')


def _high_depth_to_rgb(img) -> np.ndarray:
    """
    Reduce a 16-bit (or wider) grayscale image to 8-bit RGB.

    Values are treated as 16-bit and keep their high byte, which is what
    OpenCV's ``IMREAD_COLOR`` does with the same files.
    """
    values = np.clip(np.array(img, dtype=np.float64), 0, 65535).astype(np.uint16)
    gray = (values >> 8).astype(np.uint8)
    return np.repeat(gray[:, :, np.newaxis], 3, axis=2)


def decode_rgb_pil(data: bytes) -> np.ndarray:
    """
    Decode image bytes with Pillow.

    Returns:
        uint8 array of shape (rows, cols, 3) in RGB order, row 0 at the top

    Raises:
        ImageDecodeError: If Pillow cannot identify or decode the data
    """
    from PIL import Image

    try:
        with Image.open(io.BytesIO(data)) as img:
            if img.mode in _HIGH_DEPTH_MODES:
                return _high_depth_to_rgb(img)
            # Palette, 8-bit grayscale and alpha images all go through RGB
            if img.mode != 'RGB':
                img = img.convert('RGB')
            return np.array(img, dtype=np.uint8)
    except Exception as e:
        raise ImageDecodeError(f"Pillow could not decode image: {e}") from e


def decode_rgb_opencv(data: bytes) -> np.ndarray:
    """
    Decode image bytes with OpenCV.

    Returns:
        uint8 array of shape (rows, cols, 3) in RGB order, row 0 at the top

    Raises:
        ImageDecodeError: If OpenCV cannot decode the data
    """
    import cv2

    buffer = np.frombuffer(data, dtype=np.uint8)
    img = cv2.imdecode(buffer, cv2.IMREAD_COLOR) if buffer.size else None
    if img is None:
        raise ImageDecodeError("OpenCV could not decode image")
    # OpenCV uses BGR
    return cv2.cvtColor(img, cv2.COLOR_BGR2RGB)


_DECODERS = {
    'pillow': decode_rgb_pil,
    'opencv': decode_rgb_opencv,
}


def rgb_to_heightfield(
    rgb: np.ndarray,
    rng=None,
    config: Optional[ReaderConfig] = None
) -> HeightField:
    """
    Convert an RGB pixel array into a height field.

    Args:
        rgb: uint8 array of shape (rows, cols, 3), row 0 at the top
        rng: Random source with a numpy ``Generator``-style ``random(size)``
            method; defaults to ``numpy.random.default_rng()``
        config: Reader configuration (``dither``, ``elevation_divisor``)

    Returns:
        HeightField with unit scale and ``invert_row_order`` True
    """
    config = config or ReaderConfig()
    rgb = np.asarray(rgb)
    if rgb.ndim != 3 or rgb.shape[2] < 3:
        raise ImageDecodeError(f"Expected an RGB pixel array, got shape {rgb.shape}")

    rows, cols = rgb.shape[:2]
    channels = rgb[:, :, :3].astype(np.float32)
    brightest = channels.max(axis=2)
    elevation = brightest / 255.0

    if config.dither:
        mask = (channels[:, :, 0] == 0) & (brightest > 0)
        count = int(np.count_nonzero(mask))
        if count:
            rng = rng if rng is not None else np.random.default_rng()
            noise = np.asarray(rng.random(count), dtype=np.float32)
            elevation[mask] += noise / 255.0
            logger.debug(f"Dithered {count} zero-red pixels")

    elevation *= max(cols, rows) / config.elevation_divisor
    return HeightField((cols, rows), (1.0, 1.0), elevation.reshape(-1), invert_row_order=True)


def decode_image_heightfield(
    data: bytes,
    rng=None,
    config: Optional[ReaderConfig] = None
) -> HeightField:
    """
    Decode image bytes into a height field.

    Raises:
        ImageDecodeError: If the bytes are not a decodable image
    """
    config = config or ReaderConfig()
    decoder = _DECODERS[config.image_backend]
    return rgb_to_heightfield(decoder(data), rng=rng, config=config)


def read_image_heightfield(
    path: Union[str, Path],
    rng=None,
    config: Optional[ReaderConfig] = None
) -> HeightField:
    """
    Read an image file as a height field.

    The file is read before decoding so that an unreadable file and an
    undecodable image surface as different errors.

    Raises:
        HeightmapIOError: If the file cannot be read
        ImageDecodeError: If the file is not a decodable image
    """
    path = Path(path)
    with translate_errors(f"reading {path}"):
        with open(path, 'rb') as f:
            data = f.read()

    field = decode_image_heightfield(data, rng=rng, config=config)
    logger.info(f"Loaded image heightmap {path} ({field.width}x{field.height})")
    return field
