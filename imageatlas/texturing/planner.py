"""
Page planning.

Finds the smallest page count in [1, max_page_count] for which the packer
places every padded entry. Padding is fixed for the whole generation, so
adding pages is the only way to make a descriptor fit.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Hashable, List

from imageatlas.exceptions import EntryTooLargeError, PagesExhaustedError
from imageatlas.texturing.packer import PackRect, Packer, Placement
from imageatlas.texturing.padding import padded_size

logger = logging.getLogger(__name__)


@dataclass
class PagePlan:
    """Accepted placement of every entry (keyed by identity, in entry order)."""
    placements: Dict[Hashable, Placement]
    page_count: int
    padding: int


def padded_rects(sizes: Dict[Hashable, tuple], padding: int, size: int) -> List[PackRect]:
    """
    Slot rectangles for every entry, rejecting any that can never fit.

    Args:
        sizes: identity -> (width, height) of the unpadded source
        padding: Border width on each side
        size: Page side length

    Raises:
        EntryTooLargeError: if a padded entry is wider or taller than a page
    """
    rects = []
    for identity, (width, height) in sizes.items():
        slot_w, slot_h = padded_size(width, height, padding)
        if slot_w > size or slot_h > size:
            raise EntryTooLargeError(identity, slot_w, slot_h, size)
        rects.append(PackRect(identity, slot_w, slot_h))
    return rects


def plan_pages(
    rects: List[PackRect],
    size: int,
    max_page_count: int,
    padding: int,
    packer: Packer,
) -> PagePlan:
    """
    Try page counts 1, 2, ... until the packer places every rect.

    Raises:
        PagesExhaustedError: if max_page_count pages are not enough
    """
    for page_count in range(1, max_page_count + 1):
        placements = packer.pack(size, page_count, rects)
        if placements is None:
            logger.debug(f"{len(rects)} entries do not fit on {page_count} page(s) of {size}x{size}")
            continue

        ordered = {rect.id: placements[rect.id] for rect in rects}
        used = max(p.page for p in ordered.values()) + 1
        logger.debug(f"Placed {len(rects)} entries on {used} page(s) (attempted {page_count})")
        return PagePlan(placements=ordered, page_count=used, padding=padding)

    raise PagesExhaustedError(max_page_count, len(rects))
