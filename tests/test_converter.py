"""
End to end conversion tests.
"""

import unittest

from skin2statue.config import ConversionConfig
from skin2statue.converter import StatueConverter, convert
from skin2statue.encoders import OutputFormat
from skin2statue.encoders.nbt import from_gzipped_bytes
from skin2statue.encoders.schematic import unpack_block

from skins import blank_skin, single_pixel_skin, uniform_skin


class TestStatueConverter(unittest.TestCase):

    def test_transparent_skin_every_format(self):
        for fmt in OutputFormat:
            result = convert(blank_skin(), ConversionConfig(output_format=fmt))
            assert result.data == b""
            assert result.is_empty
            assert result.block_count == 0
            assert result.unique_block_count == 0
            assert result.dimensions == (0, 0, 0)

    def test_uniform_skin_every_format(self):
        for fmt in OutputFormat:
            result = convert(uniform_skin(), ConversionConfig(output_format=fmt))
            assert result.format is fmt
            assert result.block_count > 500
            assert result.unique_block_count == 1
            assert result.data

    def test_schem_output(self):
        result = convert(uniform_skin(), ConversionConfig(name="Steve", include_overlay=False))
        root = from_gzipped_bytes(result.data)
        assert root["Name"] == "Steve"
        assert dict(root["Palette"]) == {"minecraft:red_wool": 0}
        assert len(root["BlockData"]) == 352
        assert result.dimensions == (root["Width"], root["Height"], root["Length"])

    def test_litematic_output(self):
        config = ConversionConfig(output_format=OutputFormat.LITEMATIC, direction="south")
        result = convert(single_pixel_skin(8, 8), config)
        root = from_gzipped_bytes(result.data)
        assert list(root["Offset"]) == [-8, 15, 0]
        assert result.dimensions == (1, 1, 1)

    def test_mcstructure_output(self):
        config = ConversionConfig(output_format=OutputFormat.MCSTRUCTURE)
        result = convert(uniform_skin((233, 140, 170, 255)), config)
        root = from_gzipped_bytes(result.data, byteorder="little")
        palette = root["structure"]["palette"]["default"]["block_palette"]
        assert [str(p["states"]["color"]) for p in palette] == ["pink"]

    def test_scale(self):
        small = convert(single_pixel_skin(10, 10), ConversionConfig(scale=1.0))
        big = convert(single_pixel_skin(10, 10), ConversionConfig(scale=2.0))
        assert big.block_count == 8 * small.block_count
        assert big.dimensions != small.dimensions

    def test_category_selection(self):
        config = ConversionConfig(block_categories=("concrete",), include_overlay=False)
        result = StatueConverter(config).voxelize(uniform_skin((200, 55, 55, 255)))
        assert {b.block_name for b in result} == {"minecraft:red_concrete"}

    def test_each_call_has_its_own_matcher(self):
        converter = StatueConverter()
        assert converter.build_matcher() is not converter.build_matcher()

    def test_turned_statue_keeps_every_block(self):
        for fmt in (OutputFormat.SCHEM, OutputFormat.MCSTRUCTURE):
            facing = convert(uniform_skin(), ConversionConfig(output_format=fmt))
            for direction in ("south", "east", "west"):
                turned = convert(uniform_skin(), ConversionConfig(output_format=fmt, direction=direction))
                assert turned.block_count == facing.block_count
                assert turned.unique_block_count == 1
                assert sorted(turned.dimensions) == sorted(facing.dimensions)

    def test_schem_shifted_to_origin(self):
        config = ConversionConfig(direction="south", flip_vertical=True)
        result = convert(uniform_skin(), config)
        root = from_gzipped_bytes(result.data)
        positions = [unpack_block(v)[:3] for v in root["BlockData"]]
        assert len(positions) == result.block_count
        assert min(min(p) for p in positions) == 0
        for axis, size in enumerate((root["Width"], root["Height"], root["Length"])):
            assert max(p[axis] for p in positions) == size - 1

    def test_mcstructure_shifted_to_origin(self):
        config = ConversionConfig(output_format=OutputFormat.MCSTRUCTURE, flip_horizontal=True)
        result = convert(uniform_skin(), config)
        root = from_gzipped_bytes(result.data, byteorder="little")
        primary = list(root["structure"]["block_indices"][0])
        assert sum(1 for idx in primary if idx != -1) == result.block_count

    def test_positive_offset_kept(self):
        config = ConversionConfig(offset=(5, 0, 0), include_overlay=False)
        root = from_gzipped_bytes(convert(single_pixel_skin(8, 8), config).data)
        assert [unpack_block(v) for v in root["BlockData"]] == [(13, 15, 0, 0)]
