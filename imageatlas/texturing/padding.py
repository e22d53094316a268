"""
Padding policy.

Every entry is surrounded by a border of ``p`` pixels before packing. When a
page is halved ``k`` times the border shrinks to ``p / 2**k``, so to stay
bleed-free down to the page's final mip depth the border must start at
``support_radius * 2**depth``.
"""

import math
from typing import Tuple

from imageatlas.schema import (
    MipFilter,
    MipOption,
    MipWithBlock,
    Mip,
    MipWithPadding,
    NoMip,
    NoMipWithPadding,
    WrapPolicy,
)

# Integer ceiling of each kernel's support radius. Nearest is raised to 1 so
# that halving keeps entry borders on whole pixels.
FILTER_SUPPORT_RADIUS = {
    MipFilter.nearest: 1,
    MipFilter.box: 1,
    MipFilter.linear: 1,
    MipFilter.hamming: 1,
    MipFilter.cubic: 2,
    MipFilter.lanczos3: 3,
}


def filter_support_radius(mip_filter: MipFilter) -> int:
    """Return the support radius in pixels of a downsampling kernel."""
    return FILTER_SUPPORT_RADIUS[MipFilter(mip_filter)]


def mip_depth(mip: MipOption, size: int) -> int:
    """Number of halvings a page goes through after level 0."""
    if isinstance(mip, (NoMip, NoMipWithPadding)):
        return 0
    if isinstance(mip, (Mip, MipWithPadding)):
        return int(math.log2(size))
    if isinstance(mip, MipWithBlock):
        return int(math.log2(size // mip.block_size))
    raise TypeError(f"Unknown mip option: {mip!r}")


def page_padding(mip: MipOption, size: int) -> int:
    """
    Padding width shared by every entry of one atlas generation.

    Args:
        mip: Mip option of the descriptor
        size: Page side length in pixels

    Returns:
        Border width in pixels added on every side of every entry
    """
    if isinstance(mip, NoMip):
        return 0
    if isinstance(mip, (NoMipWithPadding, MipWithPadding)):
        return mip.padding
    if isinstance(mip, (Mip, MipWithBlock)):
        return filter_support_radius(mip.filter) << mip_depth(mip, size)
    raise TypeError(f"Unknown mip option: {mip!r}")


def entry_padding(padding: int, wrap: WrapPolicy) -> int:
    """Border an entry's own pixels are wrap-extended by (zero for single)."""
    if wrap == WrapPolicy.single:
        return 0
    return padding


def padded_size(width: int, height: int, padding: int) -> Tuple[int, int]:
    """Slot size of a width x height entry once the border is added."""
    return width + 2 * padding, height + 2 * padding
