#!/usr/bin/env python3
"""
Core functionality for the heightmap_stl command line.

This module provides shared functionality used across commands, such as
configuration management and console output.
"""

# Re-export key functionality to make imports easier
from heightmap_stl.cli.core.ui import (
    console,
    print_warning,
    print_error,
    print_success,
    print_properties,
    setup_logging
)

from heightmap_stl.cli.core.config import (
    load_config,
    save_config,
    build_configs,
    get_config_path
)
