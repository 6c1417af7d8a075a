#!/usr/bin/env python3
"""Heightmap to STL conversion command."""

import logging
from pathlib import Path
from typing import Optional

import numpy as np
import typer

from heightmap_stl.cli.core import (
    build_configs,
    console,
    load_config,
    print_error,
    print_properties,
    print_success,
    print_warning,
    setup_logging,
)
from heightmap_stl.exceptions import HeightmapError
from heightmap_stl.pipeline import convert_heightmap_to_stl

# Set up logging
logger = logging.getLogger(__name__)

INTERACTIVE_NOTICE = (
    "No input given. The interactive viewer is not part of this package; "
    "pass INPUT and OUTPUT to convert a heightmap."
)


def convert_command(
    ctx: typer.Context,
    input_file: Optional[Path] = typer.Argument(None, help="Input heightmap (text grid or image)"),
    output_file: Optional[Path] = typer.Argument(None, help="Output binary STL file"),
    format: Optional[str] = typer.Option(None, "--format", help="Input format: auto, text or image"),
    image_backend: Optional[str] = typer.Option(None, help="Image decoder: pillow or opencv"),
    seed: Optional[int] = typer.Option(None, help="Seed for image dithering noise"),
    lenient_shape: bool = typer.Option(False, "--lenient-shape", help="Pad or truncate samples that do not match the declared size"),
    no_merge: bool = typer.Option(False, "--no-merge", help="Emit one top quad per cell instead of merging runs"),
    drop_degenerate: bool = typer.Option(False, "--drop-degenerate", help="Remove zero-area triangles before writing"),
    no_atomic: bool = typer.Option(False, "--no-atomic", help="Write the STL in place instead of via a temporary file"),
    config_file: Optional[Path] = typer.Option(None, "--config", help="JSON settings file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging")
):
    """Convert a heightmap into a watertight binary STL mesh."""
    if input_file is None and output_file is None:
        console.print(INTERACTIVE_NOTICE)
        console.print(ctx.get_help())
        raise typer.Exit(code=0)
    if input_file is None or output_file is None:
        print_error("Both INPUT and OUTPUT are required")
        raise typer.Exit(code=2)

    setup_logging(verbose)

    overrides = {
        "reader": {
            "format": format,
            "image_backend": image_backend,
            "strict_shape": False if lenient_shape else None,
        },
        "mesh": {"merge_runs": False if no_merge else None},
        "export": {
            "drop_degenerate": True if drop_degenerate else None,
            "atomic": False if no_atomic else None,
        },
    }
    try:
        reader_config, mesh_config, export_config = build_configs(load_config(config_file), overrides)
    except ValueError as e:
        print_error(f"Invalid configuration: {e}")
        raise typer.Exit(code=2)

    try:
        with console.status(f"Converting {input_file}..."):
            result = convert_heightmap_to_stl(
                input_file,
                output_file,
                reader_config=reader_config,
                mesh_config=mesh_config,
                export_config=export_config,
                rng=np.random.default_rng(seed),
            )
    except HeightmapError as e:
        print_error(f"[{e.kind.value}] {e}")
        raise typer.Exit(code=1)

    h_min, h_max = result.field.height_range()
    print_properties({
        "Grid": f"{result.field.width} x {result.field.height}",
        "Height range": f"{h_min:g} to {h_max:g}",
        "Generated triangles": result.generated_triangles,
        "Written triangles": len(result.mesh),
        "File size": f"{result.file_size} bytes",
    }, title="Conversion Summary")
    if h_min < 0:
        print_warning("Input has negative samples; the mesh is not watertight")
    print_success(f"Wrote {result.output_path}")


def create_convert_app() -> typer.Typer:
    """Create the single-command conversion app."""
    app = typer.Typer(
        help="Convert heightmaps to binary STL",
        add_completion=False
    )
    app.command(name="convert")(convert_command)
    return app


app = create_convert_app()


def main() -> None:
    """Console script entry point."""
    app()
