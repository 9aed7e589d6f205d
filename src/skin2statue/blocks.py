"""
Compiled-in block palette.

Colors are the approximate average top-face color of each block. The table
is built once at import time and never mutated.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Tuple

RGBA = Tuple[int, int, int, int]

# Alpha at or above this value is treated as an opaque block
SOLID_ALPHA = 200

COLORS = (
    "white", "light_gray", "gray", "black", "brown", "red", "orange", "yellow",
    "lime", "green", "cyan", "light_blue", "blue", "purple", "magenta", "pink",
)


class BlockCategory(str, Enum):
    WOOL = "wool"
    CONCRETE = "concrete"
    TERRACOTTA = "terracotta"
    PLANKS = "planks"
    GLASS = "glass"
    OTHER = "other"


FALLING_BLOCKS = frozenset(
    ["minecraft:sand", "minecraft:red_sand", "minecraft:gravel"]
    + [f"minecraft:{c}_concrete_powder" for c in COLORS]
)


@dataclass(frozen=True)
class BlockDefinition:
    name: str
    color: RGBA
    category: BlockCategory
    is_transparent: bool = field(init=False)
    is_falling: bool = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "is_transparent", self.color[3] < SOLID_ALPHA)
        object.__setattr__(self, "is_falling", self.name in FALLING_BLOCKS)

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return self.color[:3]


# Colored families, in COLORS order
_WOOL = [
    (255, 255, 255), (179, 179, 179), (128, 128, 128), (34, 34, 34),
    (119, 72, 49), (200, 55, 55), (222, 126, 52), (251, 223, 68),
    (113, 188, 120), (82, 113, 56), (72, 126, 150), (126, 184, 202),
    (58, 99, 171), (145, 75, 165), (207, 88, 176), (233, 140, 170),
]
_CONCRETE = [
    (229, 229, 229), (157, 157, 157), (109, 109, 109), (29, 29, 29),
    (101, 67, 33), (180, 52, 52), (205, 98, 40), (240, 198, 56),
    (95, 163, 84), (74, 92, 48), (58, 121, 139), (107, 138, 166),
    (46, 56, 141), (122, 57, 127), (184, 53, 140), (213, 101, 142),
]
_CONCRETE_POWDER = [
    (240, 240, 240), (170, 170, 170), (115, 115, 115), (35, 35, 35),
    (110, 72, 39), (190, 57, 57), (215, 107, 44), (250, 207, 61),
    (101, 172, 89), (79, 98, 51), (62, 129, 147), (114, 147, 175),
    (50, 60, 149), (129, 60, 134), (192, 56, 147), (222, 107, 148),
]
_TERRACOTTA = [
    (209, 177, 161), (125, 125, 115), (86, 70, 56), (57, 41, 35),
    (134, 96, 67), (161, 75, 59), (179, 110, 68), (197, 148, 78),
    (119, 126, 71), (96, 96, 62), (96, 100, 93), (113, 108, 129),
    (85, 85, 98), (126, 82, 88), (158, 86, 108), (168, 108, 108),
]
_GLAZED_TERRACOTTA = [
    (224, 228, 230), (179, 179, 179), (119, 119, 119), (41, 41, 41),
    (141, 95, 59), (195, 61, 61), (191, 110, 56), (217, 191, 84),
    (121, 169, 73), (99, 127, 72), (92, 169, 191), (106, 137, 171),
    (76, 94, 173), (142, 79, 176), (176, 77, 126), (207, 110, 150),
]
_SHULKER_BOX = [
    (216, 221, 221), (124, 124, 115), (55, 58, 62), (25, 25, 29),
    (106, 66, 35), (140, 31, 30), (234, 106, 8), (248, 188, 29),
    (99, 172, 23), (79, 100, 31), (20, 121, 135), (49, 163, 212),
    (43, 45, 140), (103, 32, 156), (173, 54, 163), (230, 121, 157),
]

STAINED_GLASS_ALPHA = 150

_PLANKS = [
    ("oak", (191, 163, 130)),
    ("spruce", (139, 107, 68)),
    ("birch", (203, 189, 150)),
    ("jungle", (157, 127, 79)),
    ("acacia", (160, 112, 75)),
    ("dark_oak", (86, 62, 47)),
    ("mangrove", (117, 54, 48)),
    ("cherry", (226, 178, 172)),
    ("bamboo", (193, 173, 80)),
    ("crimson", (101, 48, 70)),
    ("warped", (43, 104, 99)),
]

# Stone-like and mineral blocks, all opaque
_OTHER = [
    ("stone", (128, 128, 128)),
    ("cobblestone", (115, 115, 115)),
    ("andesite", (158, 158, 157)),
    ("diorite", (176, 176, 176)),
    ("granite", (175, 130, 126)),
    ("polished_andesite", (171, 171, 171)),
    ("polished_diorite", (198, 198, 198)),
    ("polished_granite", (180, 136, 132)),
    ("sandstone", (219, 207, 174)),
    ("red_sandstone", (207, 114, 82)),
    ("quartz_block", (229, 229, 229)),
    ("chiseled_quartz_block", (229, 229, 229)),
    ("quartz_pillar", (229, 229, 229)),
    ("quartz_bricks", (229, 229, 229)),
    ("smooth_quartz", (229, 229, 229)),
    ("prismarine", (142, 171, 172)),
    ("prismarine_bricks", (130, 154, 157)),
    ("dark_prismarine", (83, 86, 83)),
    ("sand", (219, 207, 163)),
    ("red_sand", (190, 102, 33)),
    ("gravel", (131, 127, 126)),
    ("smooth_stone", (158, 158, 158)),
    ("stone_bricks", (122, 121, 122)),
    ("mossy_stone_bricks", (115, 121, 105)),
    ("cracked_stone_bricks", (118, 117, 118)),
    ("chiseled_stone_bricks", (119, 118, 119)),
    ("mossy_cobblestone", (110, 118, 94)),
    ("deepslate", (80, 80, 82)),
    ("cobbled_deepslate", (77, 77, 80)),
    ("polished_deepslate", (72, 72, 73)),
    ("deepslate_bricks", (70, 70, 71)),
    ("deepslate_tiles", (54, 54, 55)),
    ("chiseled_deepslate", (54, 54, 54)),
    ("tuff", (108, 109, 102)),
    ("calcite", (223, 224, 220)),
    ("blackstone", (42, 36, 41)),
    ("polished_blackstone", (53, 48, 56)),
    ("polished_blackstone_bricks", (48, 42, 49)),
    ("basalt", (80, 81, 86)),
    ("polished_basalt", (99, 98, 100)),
    ("smooth_basalt", (72, 72, 78)),
    ("netherrack", (97, 38, 38)),
    ("nether_bricks", (44, 21, 26)),
    ("red_nether_bricks", (69, 7, 9)),
    ("end_stone", (219, 222, 158)),
    ("end_stone_bricks", (218, 224, 162)),
    ("purpur_block", (169, 125, 169)),
    ("purpur_pillar", (171, 129, 171)),
    ("obsidian", (15, 10, 24)),
    ("crying_obsidian", (32, 10, 60)),
    ("bricks", (150, 97, 83)),
    ("mud_bricks", (137, 103, 79)),
    ("packed_mud", (142, 106, 79)),
    ("clay", (160, 166, 179)),
    ("snow_block", (249, 254, 254)),
    ("smooth_sandstone", (223, 214, 170)),
    ("cut_sandstone", (217, 206, 159)),
    ("chiseled_sandstone", (216, 203, 155)),
    ("smooth_red_sandstone", (181, 97, 31)),
    ("cut_red_sandstone", (189, 101, 31)),
    ("chiseled_red_sandstone", (183, 96, 27)),
    ("dripstone_block", (134, 107, 92)),
    ("amethyst_block", (133, 97, 191)),
    ("copper_block", (192, 107, 79)),
    ("exposed_copper", (161, 125, 103)),
    ("weathered_copper", (108, 153, 110)),
    ("oxidized_copper", (82, 162, 132)),
    ("iron_block", (220, 220, 220)),
    ("gold_block", (246, 208, 61)),
    ("diamond_block", (98, 237, 228)),
    ("emerald_block", (42, 203, 87)),
    ("lapis_block", (30, 67, 140)),
    ("redstone_block", (175, 24, 5)),
    ("coal_block", (16, 15, 15)),
    ("netherite_block", (66, 61, 63)),
    ("raw_iron_block", (166, 135, 107)),
    ("raw_gold_block", (221, 169, 46)),
    ("raw_copper_block", (154, 105, 79)),
]


def _colored(suffix: str, colors, category: BlockCategory, alpha: int = 255) -> List[BlockDefinition]:
    return [
        BlockDefinition(f"minecraft:{name}_{suffix}", (r, g, b, alpha), category)
        for name, (r, g, b) in zip(COLORS, colors)
    ]


def _build_table() -> Tuple[BlockDefinition, ...]:
    table = []
    table += _colored("wool", _WOOL, BlockCategory.WOOL)
    table += _colored("concrete", _CONCRETE, BlockCategory.CONCRETE)
    table += _colored("concrete_powder", _CONCRETE_POWDER, BlockCategory.CONCRETE)
    table += _colored("terracotta", _TERRACOTTA, BlockCategory.TERRACOTTA)
    table.append(BlockDefinition("minecraft:terracotta", (152, 94, 67, 255), BlockCategory.TERRACOTTA))
    table += _colored("glazed_terracotta", _GLAZED_TERRACOTTA, BlockCategory.TERRACOTTA)
    table += [
        BlockDefinition(f"minecraft:{wood}_planks", (r, g, b, 255), BlockCategory.PLANKS)
        for wood, (r, g, b) in _PLANKS
    ]
    # Stained glass reuses the wool colors
    table += _colored("stained_glass", _WOOL, BlockCategory.GLASS, STAINED_GLASS_ALPHA)
    table.append(BlockDefinition("minecraft:glass", (175, 213, 219, 64), BlockCategory.GLASS))
    table.append(BlockDefinition("minecraft:tinted_glass", (43, 37, 50, 180), BlockCategory.GLASS))
    table += _colored("shulker_box", _SHULKER_BOX, BlockCategory.OTHER)
    table.append(BlockDefinition("minecraft:shulker_box", (139, 96, 139, 255), BlockCategory.OTHER))
    table += [
        BlockDefinition(f"minecraft:{name}", (r, g, b, 255), BlockCategory.OTHER)
        for name, (r, g, b) in _OTHER
    ]
    return tuple(table)


class BlockPalette:
    """Read-only ordered view over a set of block definitions."""

    def __init__(self, blocks: Iterable[BlockDefinition]):
        self._blocks = tuple(blocks)
        self._by_name = {b.name: b for b in self._blocks}
        if len(self._by_name) != len(self._blocks):
            raise ValueError("Duplicate block names in palette")

    def all(self) -> List[BlockDefinition]:
        return list(self._blocks)

    def by_category(self, category) -> List[BlockDefinition]:
        category = BlockCategory(category)
        return [b for b in self._blocks if b.category == category]

    def without_falling(self) -> List[BlockDefinition]:
        return [b for b in self._blocks if not b.is_falling]

    def get(self, name: str) -> Optional[BlockDefinition]:
        return self._by_name.get(name)

    def select(self, categories: Iterable, exclude_falling: bool = True) -> List[BlockDefinition]:
        wanted = {BlockCategory(c) for c in categories}
        return [
            b for b in self._blocks
            if b.category in wanted and not (exclude_falling and b.is_falling)
        ]

    def __len__(self):
        return len(self._blocks)

    def __iter__(self) -> Iterator[BlockDefinition]:
        return iter(self._blocks)

    def __contains__(self, item):
        if isinstance(item, BlockDefinition):
            return self._by_name.get(item.name) == item
        return item in self._by_name


PALETTE = BlockPalette(_build_table())


def get_all_blocks() -> List[BlockDefinition]:
    return PALETTE.all()


def get_blocks_by_category(category) -> List[BlockDefinition]:
    return PALETTE.by_category(category)


def get_blocks_without_falling() -> List[BlockDefinition]:
    return PALETTE.without_falling()


def get_block(name: str) -> Optional[BlockDefinition]:
    return PALETTE.get(name)


def select_blocks(categories: Iterable, exclude_falling: bool = True) -> List[BlockDefinition]:
    """The palette view a conversion job matches against."""
    return PALETTE.select(categories, exclude_falling)
