import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .blocks import select_blocks
from .color_matching import BlockMatcher
from .config import ConversionConfig
from .encoders import OutputFormat, get_encoder
from .errors import ConfigurationError
from .geometry.primitives import PlacedBlock, shift_to_origin
from .geometry.voxelizer import Voxelizer

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    data: bytes
    format: OutputFormat
    block_count: int
    unique_block_count: int
    dimensions: Tuple[int, int, int]

    @property
    def is_empty(self) -> bool:
        return not self.data


class StatueConverter:
    """
    Runs one conversion job: voxelize a skin, then encode it.

    A fresh BlockMatcher is built per call, so its cache never crosses jobs.
    """

    def __init__(self, config: Optional[ConversionConfig] = None):
        self.config = config or ConversionConfig()

    def build_matcher(self) -> BlockMatcher:
        cfg = self.config
        palette = select_blocks(cfg.block_categories, cfg.exclude_falling_blocks)
        return BlockMatcher(palette, exact_mode=cfg.exact_mode,
                            color_mode=cfg.color_mode, weights=cfg.color_weights)

    def voxelize(self, skin, slim: Optional[bool] = None,
                 cancel: Optional[Callable[[], bool]] = None) -> List[PlacedBlock]:
        errors = self.config.validate()
        if errors:
            raise ConfigurationError(errors)

        matcher = self.build_matcher()
        blocks = Voxelizer.from_config(matcher, self.config).voxelize(skin, slim=slim, cancel=cancel)
        logger.debug("Match cache holds %d colors", matcher.cache_size)
        return blocks

    def convert(self, skin, slim: Optional[bool] = None,
                cancel: Optional[Callable[[], bool]] = None) -> ConversionResult:
        cfg = self.config
        blocks = self.voxelize(skin, slim=slim, cancel=cancel)

        encoder = get_encoder(cfg.output_format, name=cfg.name, author=cfg.author)
        if encoder.origin_anchored:
            shifted = shift_to_origin(blocks)
            if shifted and shifted[0] != blocks[0]:
                logger.info("Moved statue to the origin for %s output", encoder.format_name)
            blocks = shifted
        encoder.add_blocks(blocks)
        data = encoder.generate()

        result = ConversionResult(
            data=data,
            format=OutputFormat(cfg.output_format),
            block_count=encoder.get_block_count(),
            unique_block_count=encoder.get_unique_block_count(),
            dimensions=encoder.get_dimensions(),
        )
        logger.info(
            "Converted skin: %d blocks, %d unique, dimensions %s",
            result.block_count, result.unique_block_count, result.dimensions,
        )
        return result


def convert(skin, config: Optional[ConversionConfig] = None, **kwargs) -> ConversionResult:
    return StatueConverter(config).convert(skin, **kwargs)
