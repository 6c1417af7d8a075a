"""Command line interface for heightmap_stl."""
