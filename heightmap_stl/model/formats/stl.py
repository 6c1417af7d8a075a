"""
Binary STL codec.

Layout (all little endian)::

    offset        size  field
    0             80    header, written as zeros and ignored on read
    80            4     triangle count N (uint32)
    84 + 50k      12    normal of triangle k (3 x float32)
    96 + 50k      36    vertices of triangle k (3 x 3 x float32)
    132 + 50k     2     attribute byte count, written as zero and ignored
"""

import os
import stat
import struct
import logging
import tempfile
from pathlib import Path
from typing import Union

import numpy as np

from heightmap_stl.exceptions import HeightmapIOError, translate_errors
from heightmap_stl.model.core.mesh import TriangleMesh, compute_face_normals
from heightmap_stl.model.utils.logging import stl_logger

logger = logging.getLogger(__name__)

HEADER_SIZE = 80
COUNT_SIZE = 4
RECORD_DTYPE = np.dtype([
    ("normal", "<f4", (3,)),
    ("vertices", "<f4", (3, 3)),
    ("attr", "<u2"),
])
RECORD_SIZE = RECORD_DTYPE.itemsize  # 50
MAX_TRIANGLES = 2 ** 32 - 1


def binary_stl_size(triangle_count: int) -> int:
    """Exact file size of a binary STL with ``triangle_count`` records."""
    return HEADER_SIZE + COUNT_SIZE + RECORD_SIZE * triangle_count


def encode_binary_stl(mesh: TriangleMesh) -> bytes:
    """
    Encode a mesh as binary STL bytes.

    Normals are computed from each triangle's winding; degenerate triangles
    get a zero normal.

    Raises:
        HeightmapIOError: If the mesh has more triangles than the count
            field can hold
    """
    count = len(mesh)
    if count > MAX_TRIANGLES:
        raise HeightmapIOError(f"Binary STL holds at most {MAX_TRIANGLES} triangles, got {count}")

    records = np.zeros(count, dtype=RECORD_DTYPE)
    if count:
        records["normal"] = compute_face_normals(mesh.triangles)
        records["vertices"] = mesh.triangles

    return b"".join((
        bytes(HEADER_SIZE),
        struct.pack("<I", count),
        records.tobytes(),
    ))


def decode_binary_stl(data: bytes) -> TriangleMesh:
    """
    Decode binary STL bytes into a mesh.

    Stored normals and attribute bytes are discarded without validation.
    Bytes after the last declared record are ignored.

    Raises:
        HeightmapIOError: If the data is shorter than the declared count needs
    """
    if len(data) < HEADER_SIZE + COUNT_SIZE:
        raise HeightmapIOError(
            f"Truncated STL: {len(data)} bytes is shorter than the {HEADER_SIZE + COUNT_SIZE}-byte header"
        )

    count = struct.unpack_from("<I", data, HEADER_SIZE)[0]
    expected = binary_stl_size(count)
    if len(data) < expected:
        raise HeightmapIOError(
            f"Truncated STL: header declares {count} triangles ({expected} bytes), "
            f"file has {len(data)} bytes"
        )
    if len(data) > expected:
        logger.debug(f"Ignoring {len(data) - expected} trailing bytes after {count} STL records")

    records = np.frombuffer(data, dtype=RECORD_DTYPE, count=count, offset=HEADER_SIZE + COUNT_SIZE)
    return TriangleMesh(records["vertices"].astype(np.float32))


def write_binary_stl(
    path: Union[str, Path],
    mesh: TriangleMesh,
    atomic: bool = True
) -> Path:
    """
    Write a mesh to a binary STL file.

    Args:
        path: Destination file
        mesh: Triangles to write, in order
        atomic: Write to a temporary file next to ``path`` and rename it into
            place on success, so a failed write never leaves a truncated file

    Returns:
        The destination path

    Raises:
        HeightmapIOError: If the file cannot be created or written
    """
    path = Path(path)
    payload = encode_binary_stl(mesh)

    with translate_errors(f"writing {path}"):
        if not atomic:
            with open(path, 'wb') as f:
                f.write(payload)
        else:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
            try:
                with os.fdopen(fd, 'wb') as f:
                    f.write(payload)
                # mkstemp creates 0600 files; keep an existing file's mode, else 0644
                os.chmod(tmp_name, stat.S_IMODE(os.stat(path).st_mode) if path.exists() else 0o644)
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise

    stl_logger.info("Wrote binary STL", path=str(path), triangles=len(mesh), bytes=len(payload))
    return path


def read_binary_stl(path: Union[str, Path]) -> TriangleMesh:
    """
    Read a binary STL file.

    Raises:
        HeightmapIOError: If the file cannot be read or is truncated
    """
    path = Path(path)
    with translate_errors(f"reading {path}"):
        with open(path, 'rb') as f:
            data = f.read()

    mesh = decode_binary_stl(data)
    stl_logger.info("Read binary STL", path=str(path), triangles=len(mesh))
    return mesh
