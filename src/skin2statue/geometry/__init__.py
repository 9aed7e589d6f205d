from .orientation import Direction, Plane, apply_orientation
from .primitives import OVERLAY_REGIONS, SKIN_REGIONS, PlacedBlock, SkinRegion, bounding_box, shift_to_origin
