"""
Color space conversions used by the color difference metrics.

All functions are pure and take 0-255 integer channels. The LAB path goes
through XYZ with the sRGB matrix applied directly to the normalized channels
(no gamma linearization) and a D65 reference white scaled to 100.
"""
from typing import Tuple

import numpy as np

Triple = Tuple[float, float, float]

# RGB -> XYZ matrix (rows are X, Y, Z)
RGB_TO_XYZ = np.array([
    [0.4124564, 0.3575761, 0.1804375],
    [0.2126729, 0.7151522, 0.0721750],
    [0.0193339, 0.1191920, 0.9503041],
])
XYZ_TO_RGB = np.linalg.inv(RGB_TO_XYZ)

# Reference white (D65)
XN, YN, ZN = 95.047, 100.000, 108.883

_DELTA = 6.0 / 29.0
_DELTA_CUBED = _DELTA ** 3


def _hue(rf: float, gf: float, bf: float, max_val: float, delta: float) -> float:
    # Six-sector hue in [0, 1)
    if delta == 0:
        return 0.0
    if max_val == rf:
        return ((gf - bf) / delta + (6.0 if gf < bf else 0.0)) / 6.0
    if max_val == gf:
        return ((bf - rf) / delta + 2.0) / 6.0
    return ((rf - gf) / delta + 4.0) / 6.0


def rgb_to_hsl(r: int, g: int, b: int) -> Triple:
    rf, gf, bf = r / 255.0, g / 255.0, b / 255.0
    max_val = max(rf, gf, bf)
    min_val = min(rf, gf, bf)
    delta = max_val - min_val

    lightness = (max_val + min_val) / 2.0
    saturation = 0.0
    if delta != 0:
        if lightness > 0.5:
            saturation = delta / (2.0 - max_val - min_val)
        else:
            saturation = delta / (max_val + min_val)

    return (_hue(rf, gf, bf, max_val, delta), saturation, lightness)


def hsl_to_rgb(h: float, s: float, l: float) -> Triple:
    if s == 0:
        return (l * 255.0, l * 255.0, l * 255.0)

    def hue_to_rgb(p, q, t):
        if t < 0:
            t += 1
        if t > 1:
            t -= 1
        if t < 1 / 6:
            return p + (q - p) * 6 * t
        if t < 1 / 2:
            return q
        if t < 2 / 3:
            return p + (q - p) * (2 / 3 - t) * 6
        return p

    q = l * (1 + s) if l < 0.5 else l + s - l * s
    p = 2 * l - q

    return (
        hue_to_rgb(p, q, h + 1 / 3) * 255.0,
        hue_to_rgb(p, q, h) * 255.0,
        hue_to_rgb(p, q, h - 1 / 3) * 255.0,
    )


def rgb_to_hsb(r: int, g: int, b: int) -> Triple:
    rf, gf, bf = r / 255.0, g / 255.0, b / 255.0
    max_val = max(rf, gf, bf)
    min_val = min(rf, gf, bf)
    delta = max_val - min_val

    saturation = 0.0 if max_val == 0 else delta / max_val
    return (_hue(rf, gf, bf, max_val, delta), saturation, max_val)


def rgb_to_xyz(r: int, g: int, b: int) -> Triple:
    rf, gf, bf = r / 255.0, g / 255.0, b / 255.0
    x = rf * 0.4124564 + gf * 0.3575761 + bf * 0.1804375
    y = rf * 0.2126729 + gf * 0.7151522 + bf * 0.0721750
    z = rf * 0.0193339 + gf * 0.1191920 + bf * 0.9503041
    return (x * 100.0, y * 100.0, z * 100.0)


def _f(t: float) -> float:
    if t > _DELTA_CUBED:
        return t ** (1.0 / 3.0)
    return t / (3.0 * _DELTA ** 2) + 4.0 / 29.0


def _f_inv(t: float) -> float:
    if t > _DELTA:
        return t ** 3
    return 3.0 * _DELTA ** 2 * (t - 4.0 / 29.0)


def xyz_to_lab(x: float, y: float, z: float) -> Triple:
    fx = _f(x / XN)
    fy = _f(y / YN)
    fz = _f(z / ZN)
    return (116.0 * fy - 16.0, 500.0 * (fx - fy), 200.0 * (fy - fz))


def rgb_to_lab(r: int, g: int, b: int) -> Triple:
    return xyz_to_lab(*rgb_to_xyz(r, g, b))


def lab_to_rgb(l: float, a: float, b: float) -> Triple:
    """
    Inverse of rgb_to_lab. Returns unclamped float channels in 0-255 space.
    Only used by reference tooling and tests.
    """
    fy = (l + 16.0) / 116.0
    fx = fy + a / 500.0
    fz = fy - b / 200.0

    xyz = np.array([_f_inv(fx) * XN, _f_inv(fy) * YN, _f_inv(fz) * ZN]) / 100.0
    rgb = XYZ_TO_RGB @ xyz * 255.0
    return (float(rgb[0]), float(rgb[1]), float(rgb[2]))
