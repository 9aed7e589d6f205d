import logging
from typing import Dict, Iterable, List, Optional, Tuple

from ..geometry.primitives import PlacedBlock, bounding_box

logger = logging.getLogger(__name__)


class BlockEncoder:
    """
    Collects placed blocks and serializes them to one output format.

    Names are passed through `name_map` (when given) before they enter the
    palette. Palette indices are assigned in first-seen order.
    """

    extension = ""
    format_name = ""
    # True when the format cannot store negative positions
    origin_anchored = False

    def __init__(self, name: str = "Skin Statue", author: str = "skin2statue",
                 name_map: Optional[Dict[str, str]] = None):
        self.name = name
        self.author = author
        self.name_map = dict(name_map or {})
        self.blocks: List[PlacedBlock] = []
        self.palette: Dict[str, int] = {}

    def map_name(self, block_name: str) -> str:
        return self.name_map.get(block_name, block_name)

    def palette_index(self, block_name: str) -> int:
        idx = self.palette.get(block_name)
        if idx is None:
            idx = len(self.palette)
            self.palette[block_name] = idx
        return idx

    def add_block(self, x: int, y: int, z: int, block_name: str):
        block_name = self.map_name(block_name)
        self.palette_index(block_name)
        self.blocks.append(PlacedBlock(int(x), int(y), int(z), block_name))

    def add_blocks(self, blocks: Iterable[Tuple[int, int, int, str]]):
        for x, y, z, name in blocks:
            self.add_block(x, y, z, name)

    def clear(self):
        self.blocks.clear()
        self.palette.clear()

    def get_block_count(self) -> int:
        return len(self.blocks)

    def get_unique_block_count(self) -> int:
        return len(self.palette)

    def get_palette(self) -> Dict[str, int]:
        return dict(self.palette)

    def get_dimensions(self) -> Tuple[int, int, int]:
        return bounding_box(self.blocks)[2]

    def generate(self) -> bytes:
        if not self.blocks:
            return b""
        data = self._encode()
        logger.info(
            "Encoded %d blocks (%d unique) as %s: %d bytes",
            self.get_block_count(), self.get_unique_block_count(), self.format_name, len(data),
        )
        return data

    def _encode(self) -> bytes:
        raise NotImplementedError
