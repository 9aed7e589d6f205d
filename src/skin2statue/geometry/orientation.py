from enum import Enum
from typing import Sequence, Tuple


class Direction(str, Enum):
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"


class Plane(str, Enum):
    XY = "xy"
    YZ = "yz"
    XZ = "xz"


def rotate_direction(x: int, z: int, direction) -> Tuple[int, int]:
    direction = Direction(direction)
    if direction is Direction.SOUTH:
        return -x, -z
    if direction is Direction.EAST:
        return z, -x
    if direction is Direction.WEST:
        return -z, x
    return x, z


def apply_orientation(x: int, y: int, z: int, direction=Direction.NORTH,
                      offset: Sequence[int] = (0, 0, 0),
                      flip_horizontal: bool = False,
                      flip_vertical: bool = False) -> Tuple[int, int, int]:
    """Rotate by facing direction, then add the offset, then flip."""
    x, z = rotate_direction(x, z, direction)

    x += offset[0]
    y += offset[1]
    z += offset[2]

    if flip_horizontal:
        x = -x
    if flip_vertical:
        y = -y
    return x, y, z
