"""
Page composition.

Copies padded entry images into zero-filled page buffers at the offsets
chosen by the planner.
"""

import logging
from typing import Callable, Dict, Hashable, List, Optional

from PIL import Image

from imageatlas.schema import WrapPolicy
from imageatlas.texturing.planner import PagePlan
from imageatlas.texturing.wrap import wrap_extend

logger = logging.getLogger(__name__)


def fit_to_slot(image: Image.Image, slot_width: int, slot_height: int) -> Image.Image:
    """Clamp-extend an unpadded image so it fills its allocated slot."""
    if image.size == (slot_width, slot_height):
        return image
    margin = (slot_width - image.width) // 2
    return wrap_extend(image, margin, WrapPolicy.clamp)


def compose_page(
    page_index: int,
    plan: PagePlan,
    images: Dict[Hashable, Image.Image],
    size: int,
    mode: str,
) -> Image.Image:
    """Level-0 buffer of one page with every entry placed on it."""
    page = Image.new(mode, (size, size))
    count = 0
    for identity, placement in plan.placements.items():
        if placement.page != page_index:
            continue
        tile = fit_to_slot(images[identity], placement.width, placement.height)
        page.paste(tile, (placement.x, placement.y))
        count += 1
    logger.debug(f"Composed page {page_index} with {count} entries")
    return page


def compose_pages(
    plan: PagePlan,
    images: Dict[Hashable, Image.Image],
    size: int,
    mode: str,
    map_fn: Optional[Callable] = None,
) -> List[Image.Image]:
    """
    Compose every page of a plan.

    Args:
        plan: Accepted page plan
        images: identity -> wrap-extended image
        size: Page side length
        mode: Pixel mode of the pages
        map_fn: map-like callable used to compose pages (e.g. Executor.map)

    Returns:
        Level-0 buffers, indexed by page
    """
    map_fn = map_fn or map
    return list(map_fn(
        lambda index: compose_page(index, plan, images, size, mode),
        range(plan.page_count),
    ))
