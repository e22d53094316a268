"""
Atlas descriptor schema

An atlas is described by a page size, a page budget, a mip option and a list
of entries. Each entry carries a source image and a wrap policy that decides
how its padding border is filled.

MIP OPTIONS:
- NoMip:             no padding, single level
- NoMipWithPadding:  explicit padding, single level
- Mip:               padding sized for a full chain down to 1x1
- MipWithPadding:    explicit padding, full chain down to 1x1
- MipWithBlock:      padding sized for a partial chain ending at block_size

WRAP POLICIES:
- clamp:   border copies the nearest edge pixel
- repeat:  border tiles the source
- mirror:  border reflects the source (edge pixel included once per fold)
- single:  no wrap extension; the allocated slot is clamp-filled

Validation of value ranges (positive size, power-of-two block, unique keys)
happens in imageatlas.atlas so failures surface as AtlasError subclasses
rather than pydantic errors.
"""

from __future__ import annotations
from enum import Enum
from typing import Annotated, Hashable, List, Literal, Optional, Union

from PIL import Image
from pydantic import BaseModel, ConfigDict, Field

SUPPORTED_MODES = ("L", "LA", "RGB", "RGBA")


class MipFilter(str, Enum):
    nearest = "nearest"
    box = "box"
    linear = "linear"
    hamming = "hamming"
    cubic = "cubic"
    lanczos3 = "lanczos3"


class WrapPolicy(str, Enum):
    clamp = "clamp"
    repeat = "repeat"
    mirror = "mirror"
    single = "single"


#########################
# MIP OPTIONS
#########################

class NoMip(BaseModel):
    model_config = ConfigDict(frozen=True, extra='forbid')

    kind: Literal['none'] = 'none'


class NoMipWithPadding(BaseModel):
    model_config = ConfigDict(frozen=True, extra='forbid')

    kind: Literal['padding'] = 'padding'
    padding: int = Field(..., description="Border width in pixels on every side.")


class Mip(BaseModel):
    model_config = ConfigDict(frozen=True, extra='forbid')

    kind: Literal['mip'] = 'mip'
    filter: MipFilter = Field(MipFilter.lanczos3, description="Downsampling kernel.")


class MipWithPadding(BaseModel):
    model_config = ConfigDict(frozen=True, extra='forbid')

    kind: Literal['mip_padding'] = 'mip_padding'
    filter: MipFilter = Field(MipFilter.lanczos3, description="Downsampling kernel.")
    padding: int = Field(..., description="Border width in pixels on every side.")


class MipWithBlock(BaseModel):
    model_config = ConfigDict(frozen=True, extra='forbid')

    kind: Literal['block'] = 'block'
    filter: MipFilter = Field(MipFilter.lanczos3, description="Downsampling kernel.")
    block_size: int = Field(..., description="Side length of the last mip level (power of two).")


MipOption = Annotated[
    Union[NoMip, NoMipWithPadding, Mip, MipWithPadding, MipWithBlock],
    Field(discriminator='kind'),
]


#########################
# ENTRIES
#########################

class AtlasEntry(BaseModel):
    """
    One source image to place in the atlas.

    The identity of an entry is its key when given, otherwise its position
    in the descriptor's entry list.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    image: Image.Image = Field(..., description="Source pixels (borrowed read-only).")
    wrap: WrapPolicy = Field(WrapPolicy.clamp, description="Padding fill policy.")
    key: Optional[Hashable] = Field(None, description="Caller-supplied unique identity.")


class AtlasDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    max_page_count: int = Field(..., description="Upper bound on pages attempted.")
    size: int = Field(..., description="Side length in pixels of every page.")
    mip: MipOption = Field(default_factory=NoMip, description="Padding and mip chain policy.")
    entries: List[AtlasEntry] = Field(default_factory=list, description="Images to pack, in order.")
    mode: str = Field("RGBA", description="Pixel mode of the pages; entries are converted to it.")

    def identities(self) -> List[Hashable]:
        """Identity of every entry, in entry order."""
        return [
            entry.key if entry.key is not None else index
            for index, entry in enumerate(self.entries)
        ]
