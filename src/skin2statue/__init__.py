from .blocks import BlockCategory, BlockDefinition, BlockPalette
from .color_matching import BlockMatcher
from .color_modes import ColorMode
from .config import ConversionConfig
from .converter import ConversionResult, StatueConverter, convert
from .encoders import OutputFormat, get_encoder
from .errors import (
    ConfigurationError,
    ConversionCancelled,
    NetworkError,
    SchematicError,
    SkinFormatError,
    SkinLoadError,
    SkinStatueError,
)
from .geometry import Direction, PlacedBlock

__version__ = "1.0.0"
