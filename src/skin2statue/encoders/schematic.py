"""
Sponge-style schematic (.schem), big endian.

Every block is stored as one packed Long:
x, z and y take 16 bits each above a 16 bit palette index.
"""
import logging
from typing import Tuple

import nbtlib

from .base import BlockEncoder
from .nbt import BIG_ENDIAN, to_gzipped_bytes, to_signed_64, to_unsigned_64

logger = logging.getLogger(__name__)

SCHEMATIC_VERSION = 2
DATA_VERSION = 2578


def pack_block(x: int, y: int, z: int, block_index: int) -> int:
    packed = ((x & 0xFFFF) << 48) | ((z & 0xFFFF) << 32) | ((y & 0xFFFF) << 16) | (block_index & 0xFFFF)
    return to_signed_64(packed)


def _signed_16(value: int) -> int:
    return value - 0x10000 if value & 0x8000 else value


def unpack_block(packed: int) -> Tuple[int, int, int, int]:
    """Returns (x, y, z, block_index). Coordinates come back as signed 16 bit."""
    value = to_unsigned_64(packed)
    x = _signed_16((value >> 48) & 0xFFFF)
    z = _signed_16((value >> 32) & 0xFFFF)
    y = _signed_16((value >> 16) & 0xFFFF)
    return x, y, z, value & 0xFFFF


class SpongeSchematicEncoder(BlockEncoder):
    extension = ".schem"
    format_name = "schem"
    origin_anchored = True

    def get_dimensions(self) -> Tuple[int, int, int]:
        if not self.blocks:
            return (0, 0, 0)
        return (
            max(b.x for b in self.blocks) + 1,
            max(b.y for b in self.blocks) + 1,
            max(b.z for b in self.blocks) + 1,
        )

    def _encode(self) -> bytes:
        if min(min(b.x, b.y, b.z) for b in self.blocks) < 0:
            logger.warning("Schematic has negative coordinates; offset the statue before encoding")

        width, height, length = self.get_dimensions()
        palette = nbtlib.Compound({
            name: nbtlib.Int(idx) for name, idx in self.palette.items()
        })
        block_data = nbtlib.List[nbtlib.Long]([
            nbtlib.Long(pack_block(b.x, b.y, b.z, self.palette[b.block_name]))
            for b in self.blocks
        ])

        root = nbtlib.Compound({
            "Version": nbtlib.Int(SCHEMATIC_VERSION),
            "DataVersion": nbtlib.Int(DATA_VERSION),
            "Name": nbtlib.String(self.name),
            "Author": nbtlib.String(self.author),
            "Width": nbtlib.Short(width),
            "Height": nbtlib.Short(height),
            "Length": nbtlib.Short(length),
            "Palette": palette,
            "BlockData": block_data,
        })
        return to_gzipped_bytes(root, "Schematic", BIG_ENDIAN)
