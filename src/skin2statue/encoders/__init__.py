from enum import Enum

from .base import BlockEncoder
from .litematic import LitematicEncoder
from .mcstructure import McStructureEncoder
from .schematic import SpongeSchematicEncoder


class OutputFormat(str, Enum):
    SCHEM = "schem"
    LITEMATIC = "litematic"
    MCSTRUCTURE = "mcstructure"


ENCODERS = {
    OutputFormat.SCHEM: SpongeSchematicEncoder,
    OutputFormat.LITEMATIC: LitematicEncoder,
    OutputFormat.MCSTRUCTURE: McStructureEncoder,
}


def get_encoder(output_format, **kwargs) -> BlockEncoder:
    return ENCODERS[OutputFormat(output_format)](**kwargs)
