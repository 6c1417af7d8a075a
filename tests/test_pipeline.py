"""End-to-end tests of the conversion pipeline."""

import numpy as np
import pytest

from heightmap_stl import convert_heightmap_to_stl
from heightmap_stl.exceptions import HeightmapIOError, IntegerParseError
from heightmap_stl.model.config import ExportConfig, MeshConfig, ReaderConfig
from heightmap_stl.model.formats.stl import read_binary_stl
from heightmap_stl.model.utils.validation import is_closed


class TestConvert:
    """Reading, triangulating and writing in one call."""

    def test_text_to_stl(self, tmp_path, write_text, single_peak_text):
        source = write_text(single_peak_text)
        target = tmp_path / "peak.stl"

        result = convert_heightmap_to_stl(source, target)

        assert result.generated_triangles == 40
        assert result.file_size == 84 + 50 * 40
        assert target.stat().st_size == result.file_size
        written = read_binary_stl(target)
        assert written.equals(result.mesh)
        assert is_closed(written)
        assert written.signed_volume() == pytest.approx(1.0)

    def test_drop_degenerate(self, tmp_path, write_text, single_peak_text):
        result = convert_heightmap_to_stl(
            write_text(single_peak_text),
            tmp_path / "peak.stl",
            export_config=ExportConfig(drop_degenerate=True),
        )

        assert result.generated_triangles == 40
        assert len(result.mesh) == 12
        assert result.file_size == 84 + 50 * 12

    def test_no_merge(self, tmp_path, write_text):
        merged = convert_heightmap_to_stl(write_text("3,1\n1,1\n2\n2\n2"), tmp_path / "a.stl")
        unmerged = convert_heightmap_to_stl(
            write_text("3,1\n1,1\n2\n2\n2"),
            tmp_path / "b.stl",
            mesh_config=MeshConfig(merge_runs=False),
        )

        assert len(unmerged.mesh) > len(merged.mesh)
        assert merged.mesh.signed_volume() == pytest.approx(unmerged.mesh.signed_volume())

    def test_image_to_stl(self, tmp_path, write_png, forbidden_rng):
        source = write_png(np.full((2, 2, 3), 255))

        result = convert_heightmap_to_stl(source, tmp_path / "img.stl", rng=forbidden_rng)

        assert result.field.size == (2, 2)
        np.testing.assert_allclose(result.field.samples, 2 / 32)
        assert is_closed(result.mesh)

    def test_image_with_explicit_format(self, tmp_path, write_png, fixed_rng):
        source = write_png(np.full((1, 1, 3), 255))
        renamed = source.rename(tmp_path / "heights.dat")

        result = convert_heightmap_to_stl(
            renamed,
            tmp_path / "img.stl",
            reader_config=ReaderConfig(format="image"),
            rng=fixed_rng,
        )

        assert result.field.size == (1, 1)

    def test_parse_failure_writes_nothing(self, tmp_path, write_text):
        target = tmp_path / "out.stl"
        with pytest.raises(IntegerParseError):
            convert_heightmap_to_stl(write_text("two,2\n1,1\n"), target)
        assert not target.exists()

    def test_missing_input(self, tmp_path):
        with pytest.raises(HeightmapIOError):
            convert_heightmap_to_stl(tmp_path / "missing.txt", tmp_path / "out.stl")

    def test_unwritable_output(self, tmp_path, write_text, single_peak_text):
        with pytest.raises(HeightmapIOError):
            convert_heightmap_to_stl(write_text(single_peak_text), tmp_path / "nope" / "out.stl")
