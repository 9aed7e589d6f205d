import logging
from typing import Callable, Iterable, List, Optional, Sequence

import numpy as np
from PIL import Image

from ..color_matching import MIN_ALPHA, BlockMatcher
from ..blocks import SOLID_ALPHA
from ..errors import ConversionCancelled, SkinFormatError
from .orientation import Direction, apply_orientation
from .primitives import OVERLAY_REGIONS, SKIN_REGIONS, PlacedBlock, SkinRegion

logger = logging.getLogger(__name__)

BASE_TEXTURE_SIZE = 64
ALL_PARTS = ("head", "body", "arms", "legs")

# Right arm texture window scanned to tell slim arms from classic ones
SLIM_SCAN_X = (40, 44)
SLIM_SCAN_Y = (16, 32)


def to_rgba_array(source) -> np.ndarray:
    """Accepts a PIL image or an (H, W, 4) array and returns uint8 RGBA."""
    if isinstance(source, Image.Image):
        if source.mode != "RGBA":
            source = source.convert("RGBA")
        return np.array(source)

    arr = np.asarray(source)
    if arr.ndim != 3 or arr.shape[2] != 4:
        raise SkinFormatError(f"Expected an (H, W, 4) RGBA array, got shape {arr.shape}")
    return arr.astype(np.uint8, copy=False)


def texture_scale_of(pixels: np.ndarray) -> int:
    height, width = pixels.shape[:2]
    if width != height or width < BASE_TEXTURE_SIZE or width % BASE_TEXTURE_SIZE:
        raise SkinFormatError(
            f"Unsupported skin dimensions: {width}x{height}. Must be a square multiple of 64."
        )
    return width // BASE_TEXTURE_SIZE


def detect_slim(pixels: np.ndarray) -> bool:
    """
    Slim (3 pixel) arms leave the fourth column of the right arm empty.
    Looks at the opaque extent of the arm window on the 64x64 grid.
    """
    ts = texture_scale_of(pixels)
    min_x, max_x = None, None
    for y in range(*SLIM_SCAN_Y):
        for x in range(*SLIM_SCAN_X):
            if pixels[y * ts, x * ts, 3] > 0:
                min_x = x if min_x is None else min(min_x, x)
                max_x = x if max_x is None else max(max_x, x)
    if min_x is None:
        return False
    return max_x - min_x + 1 <= 3


class Voxelizer:
    """
    Turns skin regions into placed blocks.

    Each included region is scanned row by row; every pixel with enough alpha
    is matched to a block and placed (replicated into a scale cube when
    scale >= 1), then the facing/offset/flip transform is applied.
    """

    def __init__(self, matcher: BlockMatcher, scale: float = 1.0,
                 parts: Iterable[str] = ALL_PARTS, include_overlay: bool = True,
                 direction=Direction.NORTH, offset: Sequence[int] = (0, 0, 0),
                 flip_horizontal: bool = False, flip_vertical: bool = False,
                 metric=None, weights=None):
        self.matcher = matcher
        self.scale = scale
        self.parts = frozenset(parts)
        self.include_overlay = include_overlay
        self.direction = Direction(direction)
        self.offset = tuple(offset)
        self.flip_horizontal = flip_horizontal
        self.flip_vertical = flip_vertical
        self.metric = metric or matcher.metric
        self.weights = weights if weights is not None else matcher.weights

    @classmethod
    def from_config(cls, matcher: BlockMatcher, config) -> "Voxelizer":
        parts = [name for name, on in (
            ("head", config.include_head),
            ("body", config.include_body),
            ("arms", config.include_arms),
            ("legs", config.include_legs),
        ) if on]
        return cls(
            matcher,
            scale=config.scale,
            parts=parts,
            include_overlay=config.include_overlay,
            direction=config.direction,
            offset=config.offset,
            flip_horizontal=config.flip_horizontal,
            flip_vertical=config.flip_vertical,
        )

    def regions(self) -> List[SkinRegion]:
        regions = [r for r in SKIN_REGIONS if r.part in self.parts]
        if self.include_overlay:
            regions += [r for r in OVERLAY_REGIONS if r.part in self.parts]
        return regions

    def layer_z(self, region: SkinRegion) -> int:
        if not region.is_overlay:
            return 0
        if self.scale >= 1:
            return int(self.scale) * region.layer
        return int(region.layer * self.scale)

    def voxelize(self, source, slim: Optional[bool] = None,
                 cancel: Optional[Callable[[], bool]] = None) -> List[PlacedBlock]:
        pixels = to_rgba_array(source)
        ts = texture_scale_of(pixels)
        if slim is None:
            slim = detect_slim(pixels)

        blocks: List[PlacedBlock] = []
        for region in self.regions():
            if cancel is not None and cancel():
                raise ConversionCancelled(f"Conversion cancelled before region '{region.name}'")

            before = len(blocks)
            self._voxelize_region(pixels, ts, region, slim, blocks)
            logger.debug("Region %s: %d blocks", region.name, len(blocks) - before)

        return blocks

    def _voxelize_region(self, pixels: np.ndarray, ts: int, region: SkinRegion,
                         slim: bool, out: List[PlacedBlock]):
        width = region.region_width(slim)
        height = region.height
        bx, by = region.output_x, region.output_y
        z0 = self.layer_z(region)
        scale = self.scale

        for j in range(height):
            ty = (region.texture_y + j) * ts
            ey = height - 1 - j
            for i in range(width):
                tx = (region.texture_x + i) * ts
                pixel = pixels[ty, tx]
                alpha = int(pixel[3])
                if alpha < MIN_ALPHA:
                    continue

                rgba = (int(pixel[0]), int(pixel[1]), int(pixel[2]), alpha)
                block = self.matcher.find_best_match(
                    rgba, self.metric, self.weights, want_transparent=alpha < SOLID_ALPHA
                )
                if block is None:
                    continue

                if scale >= 1:
                    s = int(scale)
                    x0 = bx + int(i * scale)
                    y0 = by + int(ey * scale)
                    for sy in range(s):
                        for sx in range(s):
                            for sz in range(s):
                                self._place(out, x0 + sx, y0 + sy, z0 + sz, block.name)
                else:
                    self._place(out, int(bx + i * scale), int(by + ey * scale), z0, block.name)

    def _place(self, out: List[PlacedBlock], x: int, y: int, z: int, name: str):
        x, y, z = apply_orientation(
            x, y, z, self.direction, self.offset, self.flip_horizontal, self.flip_vertical
        )
        out.append(PlacedBlock(x, y, z, name))
