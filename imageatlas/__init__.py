"""
imageatlas - Texture atlas generation with mip-map-safe padding

Packs independent images onto fixed-size square pages, pads every entry with
a wrap-filled border sized for the requested mip depth, builds a mip chain
for every page and reports normalized coordinates for each image.
"""

__version__ = "0.1.0"

from imageatlas.atlas import Atlas, AtlasBuilder, Page, create_atlas
from imageatlas.exceptions import (
    AtlasError,
    DuplicateIdentityError,
    EmptyEntriesError,
    EntryTooLargeError,
    InvalidBlockSizeError,
    InvalidPaddingError,
    InvalidPageCountError,
    InvalidSizeError,
    PagesExhaustedError,
    UnsupportedModeError,
)
from imageatlas.schema import (
    AtlasDescriptor,
    AtlasEntry,
    Mip,
    MipFilter,
    MipWithBlock,
    MipWithPadding,
    NoMip,
    NoMipWithPadding,
    WrapPolicy,
)
from imageatlas.texturing import Texcoord

__all__ = [
    "create_atlas",
    "AtlasBuilder",
    "Atlas",
    "Page",
    "Texcoord",
    "AtlasDescriptor",
    "AtlasEntry",
    "MipFilter",
    "WrapPolicy",
    "NoMip",
    "NoMipWithPadding",
    "Mip",
    "MipWithPadding",
    "MipWithBlock",
    "AtlasError",
    "EmptyEntriesError",
    "InvalidSizeError",
    "InvalidPageCountError",
    "InvalidBlockSizeError",
    "InvalidPaddingError",
    "UnsupportedModeError",
    "DuplicateIdentityError",
    "EntryTooLargeError",
    "PagesExhaustedError",
]
