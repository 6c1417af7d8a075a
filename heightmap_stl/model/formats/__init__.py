"""Mesh file formats."""
from . import stl
from .stl import (
    decode_binary_stl,
    encode_binary_stl,
    read_binary_stl,
    write_binary_stl,
)

__all__ = [
    'stl',
    'decode_binary_stl',
    'encode_binary_stl',
    'read_binary_stl',
    'write_binary_stl'
]
