"""
Color difference metrics.

The metric set is closed: each ColorMode maps to one plain function in
METRICS. Every metric takes two RGBA samples and a 3-tuple of per-channel
weights and returns a non-negative delta. Alpha is ignored.
"""
from enum import Enum
from typing import Callable, Sequence, Tuple

from . import color_space

Color = Sequence[int]
Weights = Tuple[float, float, float]
Metric = Callable[[Color, Color, Weights], float]

DEFAULT_WEIGHTS: Weights = (1.0, 1.0, 1.0)

# Converted-space deltas are tiny (mostly < 1), so they are stretched before squaring
CONVERTED_SCALE = 1000.0


class ColorMode(str, Enum):
    RGB = "rgb"
    ABSRGB = "absrgb"
    HSL = "hsl"
    HSB = "hsb"
    LAB = "lab"


def rgb_delta(c1: Color, c2: Color, weights: Weights) -> float:
    dr = c1[0] - c2[0]
    dg = c1[1] - c2[1]
    db = c1[2] - c2[2]
    return weights[0] * dr * dr + weights[1] * dg * dg + weights[2] * db * db


def absrgb_delta(c1: Color, c2: Color, weights: Weights) -> float:
    return (weights[0] * abs(c1[0] - c2[0])
            + weights[1] * abs(c1[1] - c2[1])
            + weights[2] * abs(c1[2] - c2[2]))


def _converted_delta(convert, c1: Color, c2: Color, weights: Weights) -> float:
    a = convert(c1[0], c1[1], c1[2])
    b = convert(c2[0], c2[1], c2[2])
    total = 0.0
    for w, x, y in zip(weights, a, b):
        d = (x - y) * CONVERTED_SCALE
        total += w * d * d
    return total


def hsl_delta(c1: Color, c2: Color, weights: Weights) -> float:
    return _converted_delta(color_space.rgb_to_hsl, c1, c2, weights)


def hsb_delta(c1: Color, c2: Color, weights: Weights) -> float:
    return _converted_delta(color_space.rgb_to_hsb, c1, c2, weights)


def lab_delta(c1: Color, c2: Color, weights: Weights) -> float:
    return _converted_delta(color_space.rgb_to_lab, c1, c2, weights)


METRICS = {
    ColorMode.RGB: rgb_delta,
    ColorMode.ABSRGB: absrgb_delta,
    ColorMode.HSL: hsl_delta,
    ColorMode.HSB: hsb_delta,
    ColorMode.LAB: lab_delta,
}


def get_metric(mode) -> Metric:
    return METRICS[ColorMode(mode)]


def color_delta(mode, c1: Color, c2: Color, weights: Weights = DEFAULT_WEIGHTS) -> float:
    return get_metric(mode)(c1, c2, weights)
