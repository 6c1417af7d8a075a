"""Command implementations for the heightmap_stl command line."""
