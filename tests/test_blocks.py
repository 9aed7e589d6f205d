"""
Tests for the compiled-in block palette.
"""

import unittest

import pytest

from skin2statue.blocks import (
    FALLING_BLOCKS,
    BlockCategory,
    BlockDefinition,
    BlockPalette,
    get_all_blocks,
    get_block,
    get_blocks_by_category,
    get_blocks_without_falling,
    select_blocks,
)


class TestPalette(unittest.TestCase):

    def test_size_and_unique_names(self):
        blocks = get_all_blocks()
        assert len(blocks) == 205
        assert len({b.name for b in blocks}) == 205

    def test_without_falling(self):
        full = get_all_blocks()
        solid = get_blocks_without_falling()
        assert len(solid) < len(full)
        assert not any(b.is_falling for b in solid)
        assert len(full) - len(solid) == len(FALLING_BLOCKS) == 19

    def test_falling_membership(self):
        assert get_block("minecraft:sand").is_falling
        assert get_block("minecraft:gravel").is_falling
        assert get_block("minecraft:lime_concrete_powder").is_falling
        assert not get_block("minecraft:lime_concrete").is_falling

    def test_categories(self):
        assert len(get_blocks_by_category(BlockCategory.WOOL)) == 16
        assert len(get_blocks_by_category("planks")) == 11
        # concrete and concrete powder
        assert len(get_blocks_by_category(BlockCategory.CONCRETE)) == 32
        # colored, plain and glazed
        assert len(get_blocks_by_category(BlockCategory.TERRACOTTA)) == 33
        assert sum(len(get_blocks_by_category(c)) for c in BlockCategory) == 205

    def test_transparency(self):
        glass = get_blocks_by_category(BlockCategory.GLASS)
        assert len(glass) == 18
        assert all(b.is_transparent for b in glass)
        assert not get_block("minecraft:white_wool").is_transparent
        assert get_block("minecraft:red_stained_glass").color[3] == 150

    def test_select_blocks(self):
        view = select_blocks([BlockCategory.WOOL, BlockCategory.CONCRETE], exclude_falling=True)
        assert len(view) == 32
        assert all(not b.is_falling for b in view)

        view = select_blocks(["concrete"], exclude_falling=False)
        assert len(view) == 32

    def test_unknown_block(self):
        assert get_block("minecraft:dirt") is None


class TestBlockPalette(unittest.TestCase):

    def test_custom_palette(self):
        palette = BlockPalette([
            BlockDefinition("minecraft:white_wool", (255, 255, 255, 255), BlockCategory.WOOL),
            BlockDefinition("minecraft:sand", (219, 207, 163, 255), BlockCategory.OTHER),
        ])
        assert len(palette) == 2
        assert "minecraft:sand" in palette
        assert [b.name for b in palette.without_falling()] == ["minecraft:white_wool"]
        assert [b.name for b in palette] == ["minecraft:white_wool", "minecraft:sand"]

    def test_duplicates_rejected(self):
        block = BlockDefinition("minecraft:white_wool", (255, 255, 255, 255), BlockCategory.WOOL)
        with pytest.raises(ValueError):
            BlockPalette([block, block])

    def test_definitions_are_frozen(self):
        block = get_block("minecraft:white_wool")
        with pytest.raises(AttributeError):
            block.name = "minecraft:black_wool"
