"""
imageatlas Advanced Example

Builds a mip-mapped atlas over several pages with per-entry wrap policies,
then saves every page level and the coordinate table.
"""

from PIL import Image, ImageDraw

from imageatlas import (
    AtlasBuilder,
    AtlasDescriptor,
    AtlasEntry,
    MipFilter,
    MipWithBlock,
    WrapPolicy,
)
from imageatlas.export import write_atlas
from imageatlas.texturing import ShelfPacker


def checker(size, color):
    img = Image.new("RGBA", (size, size), (255, 255, 255, 255))
    draw = ImageDraw.Draw(img)
    step = max(1, size // 8)
    for y in range(0, size, step):
        for x in range(0, size, step):
            if (x // step + y // step) % 2 == 0:
                draw.rectangle([x, y, x + step - 1, y + step - 1], fill=color)
    return img


entries = [
    AtlasEntry(image=checker(256, (200, 30, 30, 255)), wrap=WrapPolicy.repeat, key="brick"),
    AtlasEntry(image=checker(128, (30, 160, 30, 255)), wrap=WrapPolicy.mirror, key="moss"),
    AtlasEntry(image=checker(192, (30, 30, 200, 255)), wrap=WrapPolicy.clamp, key="tile"),
    AtlasEntry(image=checker(64, (200, 200, 30, 255)), wrap=WrapPolicy.single, key="decal"),
]

descriptor = AtlasDescriptor(
    max_page_count=4,
    size=1024,
    mip=MipWithBlock(filter=MipFilter.lanczos3, block_size=64),
    entries=entries,
)

# Shelf packing with four worker threads for the pixel work
atlas = AtlasBuilder(packer=ShelfPacker(), max_workers=4).build(descriptor)

print(f"{atlas.page_count} page(s), {atlas.mip_level_count} levels, padding {atlas.padding}px")
for key, tc in atlas.texcoords.items():
    print(f"  {key}: page {tc.page}, uv {tuple(round(v, 4) for v in tc.uv)}")

write_atlas(atlas, "output", name="advanced", embed=True)
print("\nAll levels saved! Check the output/ directory.")
