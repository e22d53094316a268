"""
imageatlas Quick Start Example

Packs a few generated tiles into one page and prints where each landed.
"""

from PIL import Image

from imageatlas import AtlasDescriptor, AtlasEntry, create_atlas
from imageatlas.export import write_atlas

tiles = {
    "red": Image.new("RGBA", (64, 64), (220, 40, 40, 255)),
    "green": Image.new("RGBA", (32, 96), (40, 200, 60, 255)),
    "blue": Image.new("RGBA", (128, 48), (40, 80, 220, 255)),
}

atlas = create_atlas(AtlasDescriptor(
    max_page_count=1,
    size=256,
    entries=[AtlasEntry(image=img, key=name) for name, img in tiles.items()],
))

for name, tc in atlas.texcoords.items():
    print(f"{name}: page {tc.page}, uv {tc.uv}")

write_atlas(atlas, "output", name="quickstart")
print("✅ Saved to output/quickstart_0_0.png and output/quickstart.json")
