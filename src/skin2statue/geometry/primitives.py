from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Sequence, Tuple

Vec3 = Tuple[int, int, int]


class PlacedBlock(NamedTuple):
    x: int
    y: int
    z: int
    block_name: str


@dataclass(frozen=True)
class SkinRegion:
    """
    A rectangle of the skin texture and where its voxels go.

    texture_x/texture_y address a 64x64 texture. origin_x/origin_y is the
    output position of the part, which for an overlay region is its base
    part's position. layer 0 is the base skin, layer 1 the second skin layer.
    """
    name: str
    part: str
    texture_x: int
    texture_y: int
    width: int
    height: int
    slim_width: Optional[int] = None
    layer: int = 0
    origin_x: Optional[int] = None
    origin_y: Optional[int] = None

    def region_width(self, slim: bool) -> int:
        if slim and self.slim_width is not None:
            return self.slim_width
        return self.width

    @property
    def output_x(self) -> int:
        return self.texture_x if self.origin_x is None else self.origin_x

    @property
    def output_y(self) -> int:
        return self.texture_y if self.origin_y is None else self.origin_y

    @property
    def is_overlay(self) -> bool:
        return self.layer > 0


SKIN_REGIONS: Tuple[SkinRegion, ...] = (
    SkinRegion("head", "head", 8, 8, 8, 8),
    SkinRegion("body", "body", 20, 20, 8, 12),
    SkinRegion("right_arm", "arms", 40, 20, 4, 12, slim_width=3),
    SkinRegion("left_arm", "arms", 32, 52, 4, 12, slim_width=3),
    SkinRegion("right_leg", "legs", 0, 20, 4, 12),
    SkinRegion("left_leg", "legs", 16, 52, 4, 12),
)

OVERLAY_REGIONS: Tuple[SkinRegion, ...] = (
    SkinRegion("hat", "head", 40, 8, 8, 8, layer=1, origin_x=8, origin_y=8),
    SkinRegion("jacket", "body", 20, 36, 8, 12, layer=1, origin_x=20, origin_y=20),
    SkinRegion("right_sleeve", "arms", 40, 36, 4, 12, slim_width=3, layer=1, origin_x=40, origin_y=20),
    SkinRegion("left_sleeve", "arms", 48, 52, 4, 12, slim_width=3, layer=1, origin_x=32, origin_y=52),
    SkinRegion("right_pants", "legs", 0, 36, 4, 12, layer=1, origin_x=0, origin_y=20),
    SkinRegion("left_pants", "legs", 0, 52, 4, 12, layer=1, origin_x=16, origin_y=52),
)


def bounding_box(blocks: Sequence[PlacedBlock]) -> Tuple[Vec3, Vec3, Vec3]:
    """
    Returns (min_corner, max_corner, (width, height, length)).
    An empty list gives an all-zero box.
    """
    if not blocks:
        return (0, 0, 0), (0, 0, 0), (0, 0, 0)

    xs: List[int] = [b[0] for b in blocks]
    ys: List[int] = [b[1] for b in blocks]
    zs: List[int] = [b[2] for b in blocks]
    lo = (min(xs), min(ys), min(zs))
    hi = (max(xs), max(ys), max(zs))
    return lo, hi, (hi[0] - lo[0] + 1, hi[1] - lo[1] + 1, hi[2] - lo[2] + 1)


def shift_to_origin(blocks: Sequence[PlacedBlock]) -> List[PlacedBlock]:
    """Moves blocks along each axis whose minimum is negative so it starts at 0."""
    lo = bounding_box(blocks)[0]
    dx, dy, dz = (-v if v < 0 else 0 for v in lo)
    if not (dx or dy or dz):
        return list(blocks)
    return [PlacedBlock(b.x + dx, b.y + dy, b.z + dz, b.block_name) for b in blocks]
