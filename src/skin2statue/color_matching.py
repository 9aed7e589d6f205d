import logging
from typing import Dict, Iterable, Optional, Sequence, Tuple

from .blocks import SOLID_ALPHA, BlockDefinition
from .color_modes import DEFAULT_WEIGHTS, ColorMode, Metric, Weights, get_metric

logger = logging.getLogger(__name__)

# Pixels below this alpha are air
MIN_ALPHA = 32

# A higher priority block may replace the best match when within this factor
PRIORITY_TOLERANCE = 1.05

# Checked in order, so longer names must come before their prefixes
BLOCK_PRIORITIES = (
    ("wool", 10),
    ("concrete_powder", 6),
    ("concrete", 8),
    ("glazed_terracotta", 5),
    ("terracotta", 7),
    ("stained_glass", 4),
    ("shulker_box", 3),
    ("planks", 2),
)
DEFAULT_PRIORITY = 1

CacheKey = Tuple[int, int, int, bool]


def get_block_priority(name: str) -> int:
    for needle, priority in BLOCK_PRIORITIES:
        if needle in name:
            return priority
    return DEFAULT_PRIORITY


class BlockMatcher:
    """
    Nearest-color block lookup for one conversion job.

    The palette is split once into solid and transparent partitions. Results
    are cached per (r, g, b, want_transparent) for the matcher's own metric
    and weights; per-call overrides are matched uncached.
    """

    def __init__(self, blocks: Iterable[BlockDefinition], exact_mode: bool = False,
                 color_mode=ColorMode.LAB, weights: Weights = DEFAULT_WEIGHTS):
        blocks = list(blocks)
        self.solid_blocks = [b for b in blocks if b.color[3] >= SOLID_ALPHA]
        self.transparent_blocks = [b for b in blocks if MIN_ALPHA <= b.color[3] < SOLID_ALPHA]
        self.exact_mode = exact_mode
        self.metric = get_metric(color_mode)
        self.weights = tuple(weights)
        self._solid_names = {b.name for b in self.solid_blocks}
        self._cache: Dict[CacheKey, Optional[BlockDefinition]] = {}

    def find_best_match(self, pixel: Sequence[int], metric: Optional[Metric] = None,
                        weights: Optional[Weights] = None,
                        want_transparent: bool = False) -> Optional[BlockDefinition]:
        """
        Nearest block for `pixel`. A metric or weights other than the
        matcher's own are matched without touching the cache.
        """
        cached = (metric is None or metric is self.metric) and (
            weights is None or tuple(weights) == self.weights)
        metric = metric or self.metric
        weights = weights if weights is not None else self.weights

        key = (int(pixel[0]), int(pixel[1]), int(pixel[2]), bool(want_transparent))
        if cached and key in self._cache:
            return self._cache[key]

        if want_transparent:
            primary, fallback = self.transparent_blocks, self.solid_blocks
        else:
            primary, fallback = self.solid_blocks, self.transparent_blocks

        best = None
        smallest = float("inf")
        best_priority = 0
        for block in primary:
            delta = metric(pixel, block.color, weights)
            priority = get_block_priority(block.name)
            if delta < smallest or (priority > best_priority and delta <= smallest * PRIORITY_TOLERANCE):
                best = block
                smallest = delta
                best_priority = priority

        if best is None and fallback and not self.exact_mode:
            for block in fallback:
                delta = metric(pixel, block.color, weights)
                if delta < smallest:
                    best = block
                    smallest = delta

        self._cache[key] = best
        return best

    def match_pixel(self, rgba: Sequence[int]) -> Optional[BlockDefinition]:
        """Applies the alpha cut points, then matches with the default metric."""
        alpha = rgba[3] if len(rgba) > 3 else 255
        if alpha < MIN_ALPHA:
            return None
        return self.find_best_match(rgba, want_transparent=alpha < SOLID_ALPHA)

    def is_solid(self, name: str) -> bool:
        return name in self._solid_names

    @staticmethod
    def get_block_priority(name: str) -> int:
        return get_block_priority(name)

    def clear_cache(self):
        logger.debug("Clearing match cache (%d entries)", len(self._cache))
        self._cache.clear()

    @property
    def cache_size(self) -> int:
        return len(self._cache)
