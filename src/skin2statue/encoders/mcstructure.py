"""
Bedrock structure (.mcstructure), little endian.

Java block names are folded into Bedrock's generic blocks, with the lost
variant carried as a block state (color, wood_type, ...).
"""
import logging
from typing import Dict, List, Optional, Tuple

import nbtlib
import numpy as np

from .base import BlockEncoder
from .nbt import LITTLE_ENDIAN, int_list, to_gzipped_bytes
from ..blocks import COLORS
from ..geometry.primitives import PlacedBlock

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1
BLOCK_VERSION = 17959425  # 1.16.210.03

# Cells without a block
NO_BLOCK = -1

_COLOR_FAMILIES = {
    "wool": "minecraft:wool",
    "concrete": "minecraft:concrete",
    "concrete_powder": "minecraft:concrete_powder",
    "terracotta": "minecraft:stained_hardened_clay",
    "glazed_terracotta": "minecraft:glazed_terracotta",
    "stained_glass": "minecraft:stained_glass",
}
COLORED_BLOCKS = frozenset(_COLOR_FAMILIES.values())


def _build_bedrock_map() -> Dict[str, str]:
    mapping = {
        f"minecraft:{color}_{suffix}": target
        for suffix, target in _COLOR_FAMILIES.items()
        for color in COLORS
    }
    for wood in ("oak", "spruce", "birch", "jungle", "acacia", "dark_oak"):
        mapping[f"minecraft:{wood}_planks"] = "minecraft:planks"
    for stone in ("andesite", "diorite", "granite",
                  "polished_andesite", "polished_diorite", "polished_granite"):
        mapping[f"minecraft:{stone}"] = "minecraft:stone"
    for quartz in ("chiseled_quartz_block", "quartz_pillar", "smooth_quartz"):
        mapping[f"minecraft:{quartz}"] = "minecraft:quartz_block"
    for prismarine in ("prismarine_bricks", "dark_prismarine"):
        mapping[f"minecraft:{prismarine}"] = "minecraft:prismarine"
    mapping["minecraft:terracotta"] = "minecraft:hardened_clay"
    return mapping


BEDROCK_BLOCK_MAP = _build_bedrock_map()

# Extra Bedrock states for the non-colored folded blocks
BEDROCK_STATES: Dict[str, Dict[str, str]] = {
    **{f"minecraft:{w}_planks": {"wood_type": w}
       for w in ("oak", "spruce", "birch", "jungle", "acacia", "dark_oak")},
    "minecraft:andesite": {"stone_type": "andesite"},
    "minecraft:diorite": {"stone_type": "diorite"},
    "minecraft:granite": {"stone_type": "granite"},
    "minecraft:polished_andesite": {"stone_type": "andesite_smooth"},
    "minecraft:polished_diorite": {"stone_type": "diorite_smooth"},
    "minecraft:polished_granite": {"stone_type": "granite_smooth"},
    "minecraft:chiseled_quartz_block": {"chisel_type": "chiseled"},
    "minecraft:quartz_pillar": {"chisel_type": "lined"},
    "minecraft:smooth_quartz": {"chisel_type": "smooth"},
    "minecraft:prismarine_bricks": {"prismarine_block_type": "bricks"},
    "minecraft:dark_prismarine": {"prismarine_block_type": "dark"},
}

# Order matters: compound names must be tested before their parts
_COLOR_CHECKS = (
    ("white", "white"),
    ("orange", "orange"),
    ("magenta", "magenta"),
    ("light_blue", "light_blue"),
    ("yellow", "yellow"),
    ("lime", "lime"),
    ("pink", "pink"),
    ("light_gray", "silver"),
    ("gray", "gray"),
    ("cyan", "cyan"),
    ("purple", "purple"),
    ("blue", "blue"),
    ("brown", "brown"),
    ("green", "green"),
    ("red", "red"),
    ("black", "black"),
)

PaletteKey = Tuple[str, Tuple[Tuple[str, str], ...]]


def bedrock_color(java_name: str) -> Optional[str]:
    for needle, color in _COLOR_CHECKS:
        if needle in java_name:
            return color
    return None


def to_bedrock(java_name: str) -> Tuple[str, Dict[str, str]]:
    """Returns the Bedrock block name and its states for a Java block name."""
    bedrock_name = BEDROCK_BLOCK_MAP.get(java_name, java_name)
    states = dict(BEDROCK_STATES.get(java_name, {}))
    if bedrock_name in COLORED_BLOCKS:
        color = bedrock_color(java_name)
        if color is not None:
            states["color"] = color
    return bedrock_name, states


class McStructureEncoder(BlockEncoder):
    extension = ".mcstructure"
    format_name = "mcstructure"
    origin_anchored = True

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.entries: Dict[PaletteKey, int] = {}
        self.cells: List[Tuple[int, int, int, int]] = []

    def add_block(self, x: int, y: int, z: int, block_name: str):
        java_name = self.map_name(block_name)
        if x < 0 or y < 0 or z < 0:
            logger.warning("Skipping block %s at negative position (%d, %d, %d)", java_name, x, y, z)
            return

        bedrock_name, states = to_bedrock(java_name)
        self.palette_index(bedrock_name)

        key = (bedrock_name, tuple(sorted(states.items())))
        idx = self.entries.get(key)
        if idx is None:
            idx = len(self.entries)
            self.entries[key] = idx

        self.cells.append((int(x), int(y), int(z), idx))
        self.blocks.append(PlacedBlock(int(x), int(y), int(z), bedrock_name))

    def clear(self):
        super().clear()
        self.entries.clear()
        self.cells.clear()

    def get_color_states(self, bedrock_name: str) -> List[str]:
        colors = []
        for name, states in self.entries:
            color = dict(states).get("color")
            if name == bedrock_name and color is not None and color not in colors:
                colors.append(color)
        return colors

    def get_dimensions(self) -> Tuple[int, int, int]:
        if not self.cells:
            return (0, 0, 0)
        return (
            max(c[0] for c in self.cells) + 1,
            max(c[1] for c in self.cells) + 1,
            max(c[2] for c in self.cells) + 1,
        )

    def block_palette(self) -> nbtlib.List:
        return nbtlib.List[nbtlib.Compound]([
            nbtlib.Compound({
                "name": nbtlib.String(name),
                "states": nbtlib.Compound({k: nbtlib.String(v) for k, v in states}),
                "version": nbtlib.Int(BLOCK_VERSION),
            })
            for (name, states), _ in sorted(self.entries.items(), key=lambda item: item[1])
        ])

    def _encode(self) -> bytes:
        if not self.cells:
            return b""
        width, height, length = self.get_dimensions()
        volume = width * height * length

        indices = np.full(volume, NO_BLOCK, dtype=np.int32)
        for x, y, z, idx in self.cells:
            indices[y * width * length + z * width + x] = idx
        waterlogged = np.full(volume, NO_BLOCK, dtype=np.int32)

        root = nbtlib.Compound({
            "format_version": nbtlib.Int(FORMAT_VERSION),
            "size": int_list((width, height, length)),
            "structure": nbtlib.Compound({
                "block_indices": nbtlib.List[nbtlib.List[nbtlib.Int]]([
                    int_list(indices.tolist()),
                    int_list(waterlogged.tolist()),
                ]),
                "entities": nbtlib.List[nbtlib.Compound](),
                "palette": nbtlib.Compound({
                    "default": nbtlib.Compound({
                        "block_palette": self.block_palette(),
                        "block_position_data": nbtlib.Compound(),
                    }),
                }),
            }),
            "structure_world_origin": int_list((0, 0, 0)),
        })
        return to_gzipped_bytes(root, "", LITTLE_ENDIAN)
