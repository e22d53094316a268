"""
Core atlas generation API

Provides create_atlas() and the AtlasBuilder class that runs the full
pipeline, plus the Atlas and Page result types.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, Hashable, List, Optional

from PIL import Image

from imageatlas.exceptions import (
    DuplicateIdentityError,
    EmptyEntriesError,
    InvalidBlockSizeError,
    InvalidPaddingError,
    InvalidPageCountError,
    InvalidSizeError,
    UnsupportedModeError,
    AtlasError,
)
from imageatlas.schema import (
    SUPPORTED_MODES,
    AtlasDescriptor,
    MipWithBlock,
    NoMip,
    NoMipWithPadding,
    MipWithPadding,
)
from imageatlas.texturing.composer import compose_pages
from imageatlas.texturing.mipmap import (
    PillowResampler,
    Resampler,
    build_mip_chain,
    mip_filter_of,
    mip_level_count,
)
from imageatlas.texturing.packer import Packer, RectpackPacker
from imageatlas.texturing.padding import entry_padding, page_padding
from imageatlas.texturing.planner import padded_rects, plan_pages
from imageatlas.texturing.texcoords import Texcoord, compute_texcoords
from imageatlas.texturing.wrap import wrap_extend

logger = logging.getLogger(__name__)


def _is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


@dataclass
class Page:
    """
    One atlas page and its mip chain.

    Attributes:
        index: Page index referenced by Texcoord.page
        mip_maps: Level buffers; level 0 is size x size, each next level halved
    """
    index: int
    mip_maps: List[Image.Image] = field(default_factory=list)

    @property
    def size(self) -> int:
        return self.mip_maps[0].width

    def __len__(self) -> int:
        return len(self.mip_maps)


@dataclass
class Atlas:
    """
    Result of atlas generation.

    Attributes:
        size: Side length of every page at level 0
        padding: Border width reserved around every entry
        mip_level_count: Number of levels in every page's chain
        pages: Pages in index order
        texcoords: identity -> Texcoord, in entry order
    """
    size: int
    padding: int
    mip_level_count: int
    pages: List[Page]
    texcoords: Dict[Hashable, Texcoord]

    @property
    def page_count(self) -> int:
        return len(self.pages)


def validate_descriptor(descriptor: AtlasDescriptor) -> List[Hashable]:
    """
    Check a descriptor before any pixel work.

    Returns:
        Entry identities, in entry order

    Raises:
        AtlasError: the first problem found
    """
    if not descriptor.entries:
        raise EmptyEntriesError()

    size = descriptor.size
    mip = descriptor.mip
    if size <= 0:
        raise InvalidSizeError(size)
    if not isinstance(mip, (NoMip, NoMipWithPadding)) and not _is_power_of_two(size):
        raise InvalidSizeError(size, "must be a power of two when generating mip maps")

    if descriptor.max_page_count < 1:
        raise InvalidPageCountError(descriptor.max_page_count)

    if descriptor.mode not in SUPPORTED_MODES:
        raise UnsupportedModeError(descriptor.mode, SUPPORTED_MODES)

    if isinstance(mip, (NoMipWithPadding, MipWithPadding)) and mip.padding < 0:
        raise InvalidPaddingError(mip.padding)

    if isinstance(mip, MipWithBlock):
        if not _is_power_of_two(mip.block_size) or mip.block_size > size:
            raise InvalidBlockSizeError(mip.block_size, size)

    identities = descriptor.identities()
    seen = set()
    for identity in identities:
        if identity in seen:
            raise DuplicateIdentityError(identity)
        seen.add(identity)

    return identities


class AtlasBuilder:
    """
    Builds texture atlases from descriptors.

    Examples:
        >>> builder = AtlasBuilder(max_workers=4)
        >>> atlas = builder.build(descriptor)
        >>> tc = atlas.texcoords["grass"]
        >>> level0 = atlas.pages[tc.page].mip_maps[0]

        With the shelf packer:
        >>> AtlasBuilder(packer=ShelfPacker()).build(descriptor)
    """

    def __init__(
        self,
        packer: Optional[Packer] = None,
        resampler: Optional[Resampler] = None,
        max_workers: Optional[int] = None,
    ):
        """
        Initialize builder.

        Args:
            packer: Packer collaborator (default: RectpackPacker)
            resampler: Resampler collaborator (default: PillowResampler)
            max_workers: Threads for per-entry and per-page work. Read from
                         IMAGEATLAS_MAX_WORKERS when None; 1 runs sequentially
        """
        self.packer = packer or RectpackPacker()
        self.resampler = resampler or PillowResampler()
        if max_workers is None:
            max_workers = int(os.environ.get("IMAGEATLAS_MAX_WORKERS", "1"))
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self.max_workers = max_workers

    def build(self, descriptor: AtlasDescriptor) -> Atlas:
        """
        Pack, compose and mip-map every entry of a descriptor.

        Raises:
            AtlasError: on any validation or planning failure; nothing is
                        returned partially
        """
        try:
            identities = validate_descriptor(descriptor)
            size = descriptor.size
            padding = page_padding(descriptor.mip, size)

            sizes = {
                identity: entry.image.size
                for identity, entry in zip(identities, descriptor.entries)
            }
            rects = padded_rects(sizes, padding, size)
            plan = plan_pages(rects, size, descriptor.max_page_count, padding, self.packer)
        except AtlasError as e:
            logger.warning(f"Atlas generation failed: {e}")
            raise

        sources = {}
        for identity, entry in zip(identities, descriptor.entries):
            image = entry.image
            if image.mode != descriptor.mode:
                image = image.convert(descriptor.mode)
            sources[identity] = image

        level_count = mip_level_count(descriptor.mip, size)
        mip_filter = mip_filter_of(descriptor.mip)
        wraps = {identity: entry.wrap for identity, entry in zip(identities, descriptor.entries)}

        if self.max_workers > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                pages = self._generate(executor.map, sources, wraps, plan, size, descriptor.mode, level_count, mip_filter)
        else:
            pages = self._generate(map, sources, wraps, plan, size, descriptor.mode, level_count, mip_filter)

        texcoords = compute_texcoords(plan, sizes, size)
        logger.info(
            f"Built atlas: {len(texcoords)} entries on {len(pages)} page(s) of {size}x{size}, "
            f"{level_count} mip level(s), padding {padding}px"
        )
        return Atlas(
            size=size,
            padding=padding,
            mip_level_count=level_count,
            pages=pages,
            texcoords=texcoords,
        )

    def _generate(self, map_fn, sources, wraps, plan, size, mode, level_count, mip_filter) -> List[Page]:
        identities = list(sources)
        extended = map_fn(
            lambda identity: wrap_extend(
                sources[identity], entry_padding(plan.padding, wraps[identity]), wraps[identity]
            ),
            identities,
        )
        images = dict(zip(identities, extended))

        bases = compose_pages(plan, images, size, mode, map_fn=map_fn)
        chains = map_fn(
            lambda base: build_mip_chain(base, level_count, mip_filter, self.resampler),
            bases,
        )
        return [Page(index=i, mip_maps=chain) for i, chain in enumerate(chains)]


def create_atlas(
    descriptor: AtlasDescriptor,
    packer: Optional[Packer] = None,
    resampler: Optional[Resampler] = None,
    max_workers: Optional[int] = None,
) -> Atlas:
    """
    Create a texture atlas.

    Example:
        >>> atlas = create_atlas(AtlasDescriptor(
        ...     max_page_count=8,
        ...     size=2048,
        ...     mip=MipWithBlock(filter=MipFilter.lanczos3, block_size=32),
        ...     entries=[AtlasEntry(image=Image.new("RGBA", (512, 512)), key="example")],
        ... ))
        >>> atlas.texcoords["example"].uv
    """
    return AtlasBuilder(packer=packer, resampler=resampler, max_workers=max_workers).build(descriptor)
