"""
Litematica schematic (.litematic), big endian, one region.

Block states are a dense array over the enclosing box, indexed
relY * width * length + relZ * width + relX and bit packed into longs.
Entries never straddle two longs.
"""
import time
from typing import Callable, List, Sequence

import nbtlib
import numpy as np

from .base import BlockEncoder
from .nbt import BIG_ENDIAN, int_list, to_gzipped_bytes, xyz
from ..geometry.primitives import bounding_box

SCHEMATIC_VERSION = 7
SCHEMATIC_SUB_VERSION = 1
MINECRAFT_DATA_VERSION = 3700
DESCRIPTION = "Generated from Minecraft skin"

# Index 0 of the written palette, used for every cell no block was placed in
AIR = "minecraft:air"


def bits_per_block(palette_size: int) -> int:
    """Smallest bit width that can address the palette, never below 2."""
    return max((palette_size - 1).bit_length(), 2)


def pack_block_states(indices: Sequence[int], bits: int) -> np.ndarray:
    """Packs palette indices into signed 64 bit words, low bits first."""
    per_long = 64 // bits
    values = np.asarray(indices, dtype=np.uint64)
    n_longs = -(-len(values) // per_long)

    padded = np.zeros(n_longs * per_long, dtype=np.uint64)
    padded[:len(values)] = values
    shifts = (np.arange(per_long, dtype=np.uint64) * np.uint64(bits))
    words = np.bitwise_or.reduce(padded.reshape(n_longs, per_long) << shifts, axis=1)
    return words.astype(np.uint64).view(np.int64)


def unpack_block_states(words: Sequence[int], bits: int, count: int) -> List[int]:
    per_long = 64 // bits
    mask = (1 << bits) - 1
    out = []
    for i in range(count):
        word = int(words[i // per_long]) & 0xFFFFFFFFFFFFFFFF
        out.append((word >> ((i % per_long) * bits)) & mask)
    return out


class LitematicEncoder(BlockEncoder):
    extension = ".litematic"
    format_name = "litematic"

    def __init__(self, *args, clock: Callable[[], float] = time.time, **kwargs):
        super().__init__(*args, **kwargs)
        self.clock = clock

    def block_state_palette(self) -> List[str]:
        return [AIR] + list(self.palette)

    def block_state_indices(self) -> np.ndarray:
        (min_x, min_y, min_z), _, (width, height, length) = bounding_box(self.blocks)
        indices = np.zeros(width * height * length, dtype=np.int64)
        for b in self.blocks:
            rel = (b.y - min_y) * width * length + (b.z - min_z) * width + (b.x - min_x)
            # air takes index 0
            indices[rel] = self.palette[b.block_name] + 1
        return indices

    def _encode(self) -> bytes:
        (min_x, min_y, min_z), _, (width, height, length) = bounding_box(self.blocks)
        now = nbtlib.Long(int(self.clock() * 1000))

        names = self.block_state_palette()
        bits = bits_per_block(len(names))
        states = pack_block_states(self.block_state_indices(), bits)

        region = nbtlib.Compound({
            "Position": xyz(min_x, min_y, min_z),
            "Size": xyz(width, height, length),
            "BlockStatePalette": nbtlib.List[nbtlib.Compound]([
                nbtlib.Compound({
                    "Name": nbtlib.String(name),
                    "Properties": nbtlib.Compound(),
                })
                for name in names
            ]),
            "BlockStates": nbtlib.LongArray(states.tolist()),
            "PendingBlockTicks": nbtlib.List[nbtlib.Compound](),
            "PendingFluidTicks": nbtlib.List[nbtlib.Compound](),
            "Entities": nbtlib.List[nbtlib.Compound](),
            "TileEntities": nbtlib.List[nbtlib.Compound](),
        })

        root = nbtlib.Compound({
            "Version": nbtlib.Int(SCHEMATIC_VERSION),
            "SubVersion": nbtlib.Int(SCHEMATIC_SUB_VERSION),
            "MinecraftDataVersion": nbtlib.Int(MINECRAFT_DATA_VERSION),
            "Metadata": nbtlib.Compound({
                "Name": nbtlib.String(self.name),
                "Author": nbtlib.String(self.author),
                "Description": nbtlib.String(DESCRIPTION),
                "RegionCount": nbtlib.Int(1),
                "TotalVolume": nbtlib.Int(width * height * length),
                "TotalBlocks": nbtlib.Int(len(self.blocks)),
                "TimeCreated": now,
                "TimeModified": now,
                "EnclosingSize": xyz(width, height, length),
            }),
            "Size": int_list((width, height, length)),
            "Offset": int_list((min_x, min_y, min_z)),
            "Regions": nbtlib.Compound({self.name: region}),
        })
        return to_gzipped_bytes(root, "", BIG_ENDIAN)
