import json
import math
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, List, Tuple

from .blocks import BlockCategory
from .color_modes import ColorMode
from .encoders import OutputFormat
from .errors import ConfigurationError, ErrorCode
from .geometry.orientation import Direction, Plane

DEFAULT_CATEGORIES = (
    BlockCategory.WOOL,
    BlockCategory.CONCRETE,
    BlockCategory.TERRACOTTA,
    BlockCategory.PLANKS,
    BlockCategory.GLASS,
)

_ENUM_FIELDS = {
    "output_format": OutputFormat,
    "color_mode": ColorMode,
    "direction": Direction,
    "plane": Plane,
}
_TUPLE_FIELDS = ("color_weights", "offset")


@dataclass(frozen=True)
class ConversionConfig:
    """
    Settings for one conversion job.

    `rotate` and `plane` are validated and kept for saved configs, but the
    statue is oriented by `direction` and the flips only.
    """

    output_format: OutputFormat = OutputFormat.SCHEM
    color_mode: ColorMode = ColorMode.LAB
    color_weights: Tuple[float, float, float] = (1.0, 1.0, 1.0)
    block_categories: Tuple[BlockCategory, ...] = DEFAULT_CATEGORIES
    exclude_falling_blocks: bool = True
    exact_mode: bool = False

    # Statue
    scale: float = 1.0
    include_head: bool = True
    include_body: bool = True
    include_arms: bool = True
    include_legs: bool = True
    include_overlay: bool = True

    # Orientation
    direction: Direction = Direction.NORTH
    rotate: int = 0
    plane: Plane = Plane.XZ
    flip_horizontal: bool = False
    flip_vertical: bool = False
    offset: Tuple[int, int, int] = (0, 0, 0)

    # Filters, applied upstream of the converter
    hue: float = 0.0
    saturation: float = 1.0
    brightness: float = 1.0
    contrast: float = 1.0
    posterize: int = 0

    # Written into the output metadata
    name: str = "Skin Statue"
    author: str = "skin2statue"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConversionConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError([f"Unknown configuration key: {key}" for key in unknown])

        values = {}
        errors = []
        for key, value in data.items():
            try:
                if key in _ENUM_FIELDS:
                    value = _ENUM_FIELDS[key](value)
                elif key == "block_categories":
                    value = tuple(BlockCategory(v) for v in value)
                elif key in _TUPLE_FIELDS:
                    value = tuple(value)
            except (ValueError, TypeError) as e:
                errors.append(f"Invalid value for {key}: {e}")
                continue
            values[key] = value

        if errors:
            raise ConfigurationError(errors)
        return cls(**values)

    @classmethod
    def load(cls, path: str) -> "ConversionConfig":
        try:
            with open(path, "r") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigurationError(
                [f"Failed to read config file {path}: {e}"], ErrorCode.CONFIG_PARSE_FAILED
            ) from e
        if not isinstance(data, dict):
            raise ConfigurationError(
                [f"Config file {path} must contain a JSON object"], ErrorCode.CONFIG_PARSE_FAILED
            )
        return cls.from_dict(data)

    def replace(self, **changes) -> "ConversionConfig":
        return replace(self, **changes)

    def validate(self) -> List[str]:
        """Returns every violation found; an empty list means the config is usable."""
        errors = []

        if not _is_number(self.scale) or not math.isfinite(self.scale) or self.scale <= 0:
            errors.append("Scale must be greater than 0")

        weights = self.color_weights
        if not isinstance(weights, (tuple, list)) or len(weights) != 3:
            errors.append("Color weights must have exactly 3 values")
        elif not all(_is_number(w) and math.isfinite(w) and w >= 0 for w in weights):
            errors.append("Color weights must be finite non-negative numbers")

        for label, value in (
            ("Hue", self.hue),
            ("Saturation", self.saturation),
            ("Brightness", self.brightness),
            ("Contrast", self.contrast),
        ):
            if not _is_number(value) or not 0.0 <= value <= 1.0:
                errors.append(f"{label} value must be between 0.0 and 1.0")

        if not _is_number(self.posterize) or not 0 <= self.posterize <= 128:
            errors.append("Posterize value must be between 0 and 128")

        if not _is_number(self.rotate) or self.rotate % 90 != 0:
            errors.append("Rotate must be a multiple of 90 degrees")

        if not self.block_categories:
            errors.append("At least one block category must be selected")

        if len(self.offset) != 3:
            errors.append("Offset must have exactly 3 values")

        return errors


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
