"""
Tests for region extraction, scaling and orientation.
"""

import unittest

import numpy as np
import pytest
from PIL import Image

from skin2statue.blocks import get_all_blocks
from skin2statue.color_matching import BlockMatcher
from skin2statue.errors import ConversionCancelled, SkinFormatError
from skin2statue.geometry import Direction, PlacedBlock, apply_orientation, bounding_box, shift_to_origin
from skin2statue.geometry.voxelizer import Voxelizer, detect_slim

from skins import blank_skin, single_pixel_skin, slim_skin, uniform_skin

BASE_LAYER_BLOCKS = 352


def voxelizer(**kwargs):
    return Voxelizer(BlockMatcher(get_all_blocks()), **kwargs)


class TestOrientation(unittest.TestCase):

    def test_directions(self):
        assert apply_orientation(1, 2, 3, Direction.NORTH) == (1, 2, 3)
        assert apply_orientation(1, 2, 3, Direction.SOUTH) == (-1, 2, -3)
        assert apply_orientation(1, 2, 3, Direction.EAST) == (3, 2, -1)
        assert apply_orientation(1, 2, 3, Direction.WEST) == (-3, 2, 1)

    def test_offset_then_flip(self):
        assert apply_orientation(1, 2, 3, "north", (1, 1, 1), flip_horizontal=True) == (-2, 3, 4)
        assert apply_orientation(1, 2, 3, "north", (1, 1, 1), flip_vertical=True) == (2, -3, 4)

    def test_rotate_before_offset(self):
        assert apply_orientation(1, 0, 0, Direction.SOUTH, (10, 0, 0)) == (9, 0, 0)


class TestBoundingBox(unittest.TestCase):

    def test_empty(self):
        assert bounding_box([]) == ((0, 0, 0), (0, 0, 0), (0, 0, 0))

    def test_extent(self):
        blocks = [PlacedBlock(-1, 0, 2, "a"), PlacedBlock(3, 5, 2, "b")]
        assert bounding_box(blocks) == ((-1, 0, 2), (3, 5, 2), (5, 6, 1))

    def test_shift_to_origin(self):
        blocks = [PlacedBlock(-1, 3, 2, "a"), PlacedBlock(3, 5, -4, "b")]
        # only negative axes move
        assert shift_to_origin(blocks) == [PlacedBlock(0, 3, 6, "a"), PlacedBlock(4, 5, 0, "b")]
        assert shift_to_origin(blocks[:1] + [PlacedBlock(1, 1, 1, "c")])[0] == PlacedBlock(0, 3, 2, "a")
        assert shift_to_origin([]) == []


class TestVoxelizer(unittest.TestCase):

    def test_transparent_skin_is_empty(self):
        assert voxelizer().voxelize(blank_skin()) == []

    def test_low_alpha_is_air(self):
        skin = uniform_skin((200, 55, 55, 31))
        assert voxelizer().voxelize(skin) == []

    def test_uniform_skin(self):
        blocks = voxelizer().voxelize(uniform_skin())
        assert len(blocks) > 500
        assert len(blocks) == 2 * BASE_LAYER_BLOCKS
        assert {b.block_name for b in blocks} == {"minecraft:red_wool"}

    def test_base_layer_only(self):
        blocks = voxelizer(include_overlay=False).voxelize(uniform_skin())
        assert len(blocks) == BASE_LAYER_BLOCKS
        assert {b.z for b in blocks} == {0}

    def test_overlay_one_layer_out(self):
        blocks = voxelizer().voxelize(uniform_skin())
        assert {b.z for b in blocks} == {0, 1}

    def test_part_toggles(self):
        blocks = voxelizer(parts=["head"], include_overlay=False).voxelize(uniform_skin())
        assert len(blocks) == 64
        blocks = voxelizer(parts=["arms", "legs"], include_overlay=False).voxelize(uniform_skin())
        assert len(blocks) == 4 * 48

    def test_single_pixel_position(self):
        blocks = voxelizer().voxelize(single_pixel_skin(8, 8))
        # top-left of the head texture is the top row of the head
        assert blocks == [PlacedBlock(8, 15, 0, "minecraft:red_wool")]

    def test_scale_two_replicates_cube(self):
        one = voxelizer(scale=1.0).voxelize(single_pixel_skin(9, 10))
        two = voxelizer(scale=2.0).voxelize(single_pixel_skin(9, 10))
        assert len(two) == 8 * len(one)
        assert len(set(two)) == 8

    def test_scale_below_one(self):
        blocks = voxelizer(scale=0.5).voxelize(single_pixel_skin(8, 8))
        assert blocks == [PlacedBlock(8, 11, 0, "minecraft:red_wool")]

    def test_overlay_z_with_scale(self):
        skin = blank_skin()
        skin[8, 40] = (200, 55, 55, 255)  # hat
        blocks = voxelizer(scale=2.0).voxelize(skin)
        assert {b.z for b in blocks} == {2, 3}

    def test_orientation_applied(self):
        blocks = voxelizer(direction=Direction.SOUTH, offset=(0, 5, 0)).voxelize(single_pixel_skin(8, 8))
        assert blocks == [PlacedBlock(-8, 20, 0, "minecraft:red_wool")]

    def test_translucent_pixel(self):
        skin = single_pixel_skin(8, 8, (200, 55, 55, 120))
        blocks = voxelizer().voxelize(skin)
        assert [b.block_name for b in blocks] == ["minecraft:red_stained_glass"]

    def test_pil_image_input(self):
        img = Image.fromarray(uniform_skin())
        assert len(voxelizer(include_overlay=False).voxelize(img)) == BASE_LAYER_BLOCKS

    def test_hd_skin_keeps_layout(self):
        blocks = voxelizer(include_overlay=False).voxelize(uniform_skin(size=128))
        assert len(blocks) == BASE_LAYER_BLOCKS

    def test_slim_detection(self):
        assert detect_slim(slim_skin())
        assert not detect_slim(uniform_skin())
        assert not detect_slim(blank_skin())

    def test_slim_arms(self):
        blocks = voxelizer(include_overlay=False).voxelize(slim_skin())
        assert len(blocks) == BASE_LAYER_BLOCKS - 2 * 12

    def test_forced_classic(self):
        blocks = voxelizer(include_overlay=False).voxelize(slim_skin(), slim=False)
        # the blanked fourth column drops 12 right arm pixels
        assert len(blocks) == BASE_LAYER_BLOCKS - 12

    def test_unsupported_dimensions(self):
        with pytest.raises(SkinFormatError):
            voxelizer().voxelize(np.zeros((32, 64, 4), dtype=np.uint8))
        with pytest.raises(SkinFormatError):
            voxelizer().voxelize(np.zeros((64, 64, 3), dtype=np.uint8))

    def test_cancel_between_regions(self):
        calls = []

        def cancel():
            calls.append(1)
            return len(calls) > 2

        with pytest.raises(ConversionCancelled):
            voxelizer().voxelize(uniform_skin(), cancel=cancel)
        assert len(calls) == 3

    def test_cancel_not_requested(self):
        blocks = voxelizer().voxelize(uniform_skin(), cancel=lambda: False)
        assert len(blocks) == 2 * BASE_LAYER_BLOCKS
