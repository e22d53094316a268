"""
Texturing stages of atlas generation.

Padding policy, wrap extension, packing, page planning, composition,
mip chain generation and texture coordinates.
"""
from .padding import page_padding, entry_padding, filter_support_radius, mip_depth
from .wrap import wrap_extend
from .packer import Packer, PackRect, Placement, RectpackPacker, ShelfPacker, get_packer
from .planner import PagePlan, plan_pages, padded_rects
from .composer import compose_pages
from .mipmap import Resampler, PillowResampler, build_mip_chain, mip_level_count
from .texcoords import Texcoord, compute_texcoords

__all__ = [
    'page_padding',
    'entry_padding',
    'filter_support_radius',
    'mip_depth',
    'wrap_extend',
    'Packer',
    'PackRect',
    'Placement',
    'RectpackPacker',
    'ShelfPacker',
    'get_packer',
    'PagePlan',
    'plan_pages',
    'padded_rects',
    'compose_pages',
    'Resampler',
    'PillowResampler',
    'build_mip_chain',
    'mip_level_count',
    'Texcoord',
    'compute_texcoords',
]
