"""
Heightmap STL Package.

Converts height fields, read from a plain-text grid or a raster image, into
closed stepped triangle meshes and reads and writes them as binary STL.
"""

__version__ = "1.0.0"

# Import the exception classes for easy access
from heightmap_stl.exceptions import (
    ErrorKind,
    HeightmapError,
    HeightmapIOError,
    IntegerParseError,
    FloatParseError,
    ImageDecodeError,
    SampleCountError,
    MeshError,
)

from heightmap_stl.core import HeightField
from heightmap_stl.readers import (
    load_heightfield,
    read_text_heightfield,
    parse_text_heightfield,
    read_image_heightfield,
    decode_image_heightfield,
)
from heightmap_stl.model import (
    ReaderConfig,
    MeshConfig,
    ExportConfig,
    TriangleMesh,
    RunMergeTriangulator,
    triangulate,
    read_binary_stl,
    write_binary_stl,
    find_open_edges,
)
from heightmap_stl.pipeline import ConversionResult, convert_heightmap_to_stl
