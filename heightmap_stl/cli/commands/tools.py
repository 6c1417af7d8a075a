#!/usr/bin/env python3
"""Inspection commands for heightmaps and STL files."""

import logging
from pathlib import Path
from typing import Optional

import typer

from heightmap_stl.cli.core import (
    build_configs,
    load_config,
    print_error,
    print_properties,
    setup_logging,
)
from heightmap_stl.exceptions import HeightmapError
from heightmap_stl.model.formats.stl import read_binary_stl
from heightmap_stl.model.utils.validation import find_open_edges
from heightmap_stl.readers import load_heightfield

# Set up logging
logger = logging.getLogger(__name__)


def create_tools_app() -> typer.Typer:
    """Create the inspection app."""
    app = typer.Typer(
        help="Inspect heightmaps and binary STL files",
        add_completion=False
    )

    @app.command("info")
    def info_command(
        input_file: Path = typer.Argument(..., help="Input heightmap (text grid or image)"),
        format: Optional[str] = typer.Option(None, "--format", help="Input format: auto, text or image"),
        config_file: Optional[Path] = typer.Option(None, "--config", help="JSON settings file"),
        verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging")
    ):
        """Show size, scale and elevation statistics of a heightmap."""
        setup_logging(verbose)
        try:
            reader_config, _, _ = build_configs(load_config(config_file), {"reader": {"format": format}})
            field = load_heightfield(input_file, reader_config)
        except ValueError as e:
            print_error(f"Invalid configuration: {e}")
            raise typer.Exit(code=2)
        except HeightmapError as e:
            print_error(f"[{e.kind.value}] {e}")
            raise typer.Exit(code=1)

        print_properties(field.stats(), title=f"Heightmap {input_file.name}")

    @app.command("inspect")
    def inspect_command(
        stl_file: Path = typer.Argument(..., help="Binary STL file"),
        edges: bool = typer.Option(False, "--edges/--no-edges", help="Count open edges (slow on large meshes)"),
        verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging")
    ):
        """Show triangle count, bounds and volume of a binary STL."""
        setup_logging(verbose)
        try:
            mesh = read_binary_stl(stl_file)
        except HeightmapError as e:
            print_error(f"[{e.kind.value}] {e}")
            raise typer.Exit(code=1)

        lower, upper = mesh.bounds()
        properties = {
            "Triangles": len(mesh),
            "Degenerate triangles": int(mesh.degenerate_mask().sum()),
            "Bounds min": ", ".join(f"{v:g}" for v in lower),
            "Bounds max": ", ".join(f"{v:g}" for v in upper),
            "Signed volume": mesh.signed_volume(),
        }
        if edges:
            properties["Open edges"] = len(find_open_edges(mesh))

        print_properties(properties, title=f"STL {stl_file.name}")

    return app


app = create_tools_app()


def main() -> None:
    """Console script entry point."""
    app()
