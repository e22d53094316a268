"""
Mip chain generation for atlas pages.

Each page's chain depends only on its own level-0 buffer. Padding pixels are
resampled like content pixels; the padding policy sizes them so that no two
entries mix at any generated level.
"""

import logging
import math
from typing import List, Optional, Protocol

from PIL import Image

from imageatlas.schema import (
    MipFilter,
    MipOption,
    MipWithBlock,
    Mip,
    MipWithPadding,
    NoMip,
    NoMipWithPadding,
)

logger = logging.getLogger(__name__)


class Resampler(Protocol):
    def downsample(self, image: Image.Image, side: int, mip_filter: MipFilter) -> Image.Image:
        """Return image reduced to side x side with the named kernel."""
        ...


class PillowResampler:
    """Resampler using Pillow's resize kernels."""

    RESAMPLING = {
        MipFilter.nearest: Image.Resampling.NEAREST,
        MipFilter.box: Image.Resampling.BOX,
        MipFilter.linear: Image.Resampling.BILINEAR,
        MipFilter.hamming: Image.Resampling.HAMMING,
        MipFilter.cubic: Image.Resampling.BICUBIC,
        MipFilter.lanczos3: Image.Resampling.LANCZOS,
    }

    def downsample(self, image: Image.Image, side: int, mip_filter: MipFilter) -> Image.Image:
        return image.resize((side, side), resample=self.RESAMPLING[MipFilter(mip_filter)])


def mip_level_count(mip: MipOption, size: int) -> int:
    """Number of levels in every page's chain, level 0 included."""
    if isinstance(mip, (NoMip, NoMipWithPadding)):
        return 1
    if isinstance(mip, (Mip, MipWithPadding)):
        return int(math.log2(size)) + 1
    if isinstance(mip, MipWithBlock):
        return int(math.log2(size // mip.block_size)) + 1
    raise TypeError(f"Unknown mip option: {mip!r}")


def mip_filter_of(mip: MipOption) -> Optional[MipFilter]:
    """Kernel of a mip option, or None when no chain is generated."""
    return getattr(mip, "filter", None)


def build_mip_chain(
    base: Image.Image,
    level_count: int,
    mip_filter: Optional[MipFilter],
    resampler: Resampler,
) -> List[Image.Image]:
    """
    Build a mip chain by repeatedly halving the previous level.

    Args:
        base: Level-0 page buffer (square)
        level_count: Total number of levels including level 0
        mip_filter: Kernel handed to the resampler
        resampler: Downsampling collaborator

    Returns:
        List of level buffers; level k has side max(1, size >> k)
    """
    levels = [base]
    for level in range(1, level_count):
        side = max(1, levels[-1].width >> 1)
        levels.append(resampler.downsample(levels[-1], side, mip_filter))
    logger.debug(f"Built {len(levels)} mip level(s) from {base.width}x{base.height}")
    return levels
