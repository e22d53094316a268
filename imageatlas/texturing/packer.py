"""
Rectangle packers

Places padded entry rectangles onto a fixed number of square pages.
A packer either places every rectangle or reports failure with None;
partial placements are never returned.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Hashable, List, Optional, Protocol

import rectpack
from rectpack import maxrects

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PackRect:
    """A rectangle to place, identified by its entry identity."""
    id: Hashable
    width: int
    height: int


@dataclass(frozen=True)
class Placement:
    """Where a padded entry landed: page index, top-left origin and slot size."""
    page: int
    x: int
    y: int
    width: int
    height: int

    def overlaps(self, other: "Placement") -> bool:
        if self.page != other.page:
            return False
        return (
            self.x < other.x + other.width and other.x < self.x + self.width
            and self.y < other.y + other.height and other.y < self.y + self.height
        )


class Packer(Protocol):
    def pack(
        self, size: int, page_count: int, rects: List[PackRect]
    ) -> Optional[Dict[Hashable, Placement]]:
        """Place every rect on page_count size x size pages, or return None."""
        ...


class RectpackPacker:
    """MaxRects packer backed by the rectpack library."""

    def __init__(self, pack_algo=maxrects.MaxRectsBssf, sort_algo=rectpack.SORT_AREA):
        self.pack_algo = pack_algo
        self.sort_algo = sort_algo

    def pack(
        self, size: int, page_count: int, rects: List[PackRect]
    ) -> Optional[Dict[Hashable, Placement]]:
        packer = rectpack.newPacker(
            rotation=False, pack_algo=self.pack_algo, sort_algo=self.sort_algo
        )
        packer.add_bin(size, size, count=page_count)
        # rid is the list position so caller identities never reach rectpack
        for index, rect in enumerate(rects):
            packer.add_rect(rect.width, rect.height, rid=index)
        packer.pack()

        packed = list(packer.rect_list())
        if len(packed) < len(rects):
            logger.debug(f"rectpack placed {len(packed)}/{len(rects)} rects on {page_count} page(s)")
            return None

        placements: Dict[Hashable, Placement] = {}
        for bin_index, x, y, w, h, rid in sorted(packed, key=lambda r: r[5]):
            placements[rects[rid].id] = Placement(
                page=int(bin_index), x=int(x), y=int(y), width=int(w), height=int(h)
            )
        return placements


@dataclass
class _Shelf:
    y: int
    height: int
    cursor: int = 0


class ShelfPage:
    """One page filled row by row; each shelf is as tall as its first rect."""

    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        self.shelves: List[_Shelf] = []
        self.top = 0

    def place(self, rect: PackRect) -> Optional[Placement]:
        """Slot for rect on this page, or None when it does not fit."""
        if rect.width > self.size:
            return None

        shelf = next(
            (s for s in self.shelves
             if rect.height <= s.height and rect.width <= self.size - s.cursor),
            None,
        )
        if shelf is None:
            if self.top + rect.height > self.size:
                return None
            shelf = _Shelf(y=self.top, height=rect.height)
            self.shelves.append(shelf)
            self.top += rect.height

        placement = Placement(self.index, shelf.cursor, shelf.y, rect.width, rect.height)
        shelf.cursor += rect.width
        return placement


class ShelfPacker:
    """First-fit shelf packer over several pages, tallest rectangles first."""

    def pack(
        self, size: int, page_count: int, rects: List[PackRect]
    ) -> Optional[Dict[Hashable, Placement]]:
        pages = [ShelfPage(index, size) for index in range(page_count)]
        order = sorted(range(len(rects)), key=lambda i: (rects[i].height, rects[i].width), reverse=True)

        found: Dict[int, Placement] = {}
        for i in order:
            placement = next(
                (p for p in (page.place(rects[i]) for page in pages) if p is not None),
                None,
            )
            if placement is None:
                logger.debug(f"shelf packer could not place rect {i} on {page_count} page(s)")
                return None
            found[i] = placement

        return {rects[i].id: found[i] for i in range(len(rects))}


def get_packer(name: str) -> Any:
    """Packer instance by name ('rectpack' or 'shelf')."""
    if name == "rectpack":
        return RectpackPacker()
    if name == "shelf":
        return ShelfPacker()
    raise ValueError(f"Unknown packer: {name}. Supported: rectpack, shelf")
