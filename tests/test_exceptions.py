#!/usr/bin/env python3
"""
Tests for the heightmap_stl exceptions module.
"""

import pytest

from heightmap_stl.exceptions import (
    ErrorKind,
    FloatParseError,
    HeightmapError,
    HeightmapIOError,
    ImageDecodeError,
    IntegerParseError,
    MeshError,
    SampleCountError,
    translate_errors,
)


class TestExceptions:
    """Test cases for exception classes."""

    @pytest.mark.parametrize("error_cls, kind", [
        (HeightmapIOError, ErrorKind.IO),
        (IntegerParseError, ErrorKind.INTEGER_PARSE),
        (FloatParseError, ErrorKind.FLOAT_PARSE),
        (ImageDecodeError, ErrorKind.IMAGE_DECODE),
        (SampleCountError, ErrorKind.SAMPLE_COUNT),
        (MeshError, ErrorKind.MESH),
    ])
    def test_kind_and_inheritance(self, error_cls, kind):
        """Each exception carries its own kind and derives from HeightmapError."""
        with pytest.raises(HeightmapError) as excinfo:
            raise error_cls("boom")

        assert excinfo.value.kind is kind
        assert str(excinfo.value) == "boom"
        assert isinstance(excinfo.value, Exception)

    def test_read_kinds_are_distinct(self):
        """The four read-path kinds can be told apart."""
        kinds = {HeightmapIOError.kind, IntegerParseError.kind,
                 FloatParseError.kind, ImageDecodeError.kind}
        assert len(kinds) == 4

    def test_parse_errors_are_not_io_errors(self):
        """Parse errors must not be caught by an I/O handler."""
        assert not issubclass(IntegerParseError, HeightmapIOError)
        assert not issubclass(FloatParseError, HeightmapIOError)
        assert not issubclass(ImageDecodeError, HeightmapIOError)


class TestTranslateErrors:
    """Test OSError conversion."""

    def test_oserror_becomes_io_error(self):
        with pytest.raises(HeightmapIOError) as excinfo:
            with translate_errors("reading x.txt"):
                raise FileNotFoundError("x.txt")

        assert "reading x.txt" in str(excinfo.value)
        assert isinstance(excinfo.value.__cause__, FileNotFoundError)

    def test_library_errors_pass_through(self):
        with pytest.raises(FloatParseError):
            with translate_errors("parsing"):
                raise FloatParseError("bad float")

    def test_other_errors_pass_through(self):
        with pytest.raises(KeyError):
            with translate_errors("parsing"):
                raise KeyError("x")
