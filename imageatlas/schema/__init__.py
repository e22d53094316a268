"""Atlas descriptor schema definitions."""
from .descriptor import (
    SUPPORTED_MODES,
    MipFilter,
    WrapPolicy,
    NoMip,
    NoMipWithPadding,
    Mip,
    MipWithPadding,
    MipWithBlock,
    MipOption,
    AtlasEntry,
    AtlasDescriptor,
)

__all__ = [
    "SUPPORTED_MODES",
    "MipFilter",
    "WrapPolicy",
    "NoMip",
    "NoMipWithPadding",
    "Mip",
    "MipWithPadding",
    "MipWithBlock",
    "MipOption",
    "AtlasEntry",
    "AtlasDescriptor",
]
