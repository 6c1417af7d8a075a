"""
Heightmap to STL conversion pipeline.

Chains the reader, the triangulator and the STL writer. Any failure aborts
the conversion with the reader's or writer's exception; nothing is retried.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

from heightmap_stl.core.heightfield import HeightField
from heightmap_stl.model.config import ExportConfig, MeshConfig, ReaderConfig
from heightmap_stl.model.core.mesh import TriangleMesh
from heightmap_stl.model.formats.stl import binary_stl_size, write_binary_stl
from heightmap_stl.model.triangulation import RunMergeTriangulator
from heightmap_stl.readers import load_heightfield

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """Outcome of a successful conversion."""
    input_path: Path
    output_path: Path
    field: HeightField
    mesh: TriangleMesh
    generated_triangles: int
    file_size: int


def convert_heightmap_to_stl(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    reader_config: Optional[ReaderConfig] = None,
    mesh_config: Optional[MeshConfig] = None,
    export_config: Optional[ExportConfig] = None,
    rng=None,
    progress_callback: Optional[Callable[[float], None]] = None
) -> ConversionResult:
    """
    Read a heightmap, triangulate it and write a binary STL.

    Args:
        input_path: Text or image heightmap
        output_path: Destination STL file
        reader_config: Reader options
        mesh_config: Triangulation options
        export_config: Export options
        rng: Random source for image dithering
        progress_callback: Triangulation progress callback

    Returns:
        ConversionResult describing what was written

    Raises:
        HeightmapError: Any read, parse, decode or write failure
    """
    input_path = Path(input_path)
    output_path = Path(output_path)
    export_config = export_config or ExportConfig()

    field = load_heightfield(input_path, reader_config, rng=rng)
    triangulator = RunMergeTriangulator(mesh_config, progress_callback)
    mesh = triangulator.triangulate(field)
    generated = len(mesh)
    if export_config.drop_degenerate:
        mesh = mesh.without_degenerate()

    write_binary_stl(output_path, mesh, atomic=export_config.atomic)
    logger.info(f"Converted {input_path} to {output_path} ({len(mesh)} triangles)")

    return ConversionResult(
        input_path=input_path,
        output_path=output_path,
        field=field,
        mesh=mesh,
        generated_triangles=generated,
        file_size=binary_stl_size(len(mesh)),
    )
