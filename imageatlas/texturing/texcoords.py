"""
Texture coordinates for packed entries.

Rectangles exclude padding. Normalized coordinates are resolution
independent, so the level-0 rectangle is also the rectangle for every mip
level of the page.
"""

from dataclasses import dataclass
from typing import Dict, Hashable, Tuple

from imageatlas.texturing.planner import PagePlan


@dataclass(frozen=True)
class Texcoord:
    """Pixel rectangle of an entry at level 0 of its page."""
    page: int
    min_x: int
    min_y: int
    max_x: int
    max_y: int
    size: int

    @property
    def uv(self) -> Tuple[float, float, float, float]:
        """(u_min, v_min, u_max, v_max) normalized to [0, 1]."""
        return (
            self.min_x / self.size,
            self.min_y / self.size,
            self.max_x / self.size,
            self.max_y / self.size,
        )

    def uv_at_level(self, level: int) -> Tuple[float, float, float, float]:
        """Normalized rectangle to sample at mip level; identical to uv."""
        return self.uv

    def pixel_rect_at_level(self, level: int) -> Tuple[float, float, float, float]:
        """Pixel rectangle at mip level (may be fractional past the padding depth)."""
        scale = float(1 << level)
        return (
            self.min_x / scale,
            self.min_y / scale,
            self.max_x / scale,
            self.max_y / scale,
        )

    @property
    def width(self) -> int:
        return self.max_x - self.min_x

    @property
    def height(self) -> int:
        return self.max_y - self.min_y

    def to_dict(self) -> dict:
        return {
            'page': self.page,
            'rect': [self.min_x, self.min_y, self.max_x, self.max_y],
            'uv': list(self.uv),
        }


def compute_texcoords(
    plan: PagePlan,
    sizes: Dict[Hashable, Tuple[int, int]],
    size: int,
) -> Dict[Hashable, Texcoord]:
    """
    Texcoord of every entry, in the plan's entry order.

    Args:
        plan: Accepted page plan
        sizes: identity -> (width, height) of the unpadded source
        size: Page side length
    """
    texcoords = {}
    for identity, placement in plan.placements.items():
        width, height = sizes[identity]
        min_x = placement.x + plan.padding
        min_y = placement.y + plan.padding
        texcoords[identity] = Texcoord(
            page=placement.page,
            min_x=min_x,
            min_y=min_y,
            max_x=min_x + width,
            max_y=min_y + height,
            size=size,
        )
    return texcoords
