"""
Atlas export to PNG pages and a JSON coordinate table.
"""

import base64
import json
import logging
from io import BytesIO
from pathlib import Path
from typing import Any, Dict, List, Union

from PIL import Image

from imageatlas.atlas import Atlas
from imageatlas.exceptions import DuplicateIdentityError

logger = logging.getLogger(__name__)


def encode_png_b64(image: Image.Image) -> str:
    """Base64-encoded PNG bytes of an image."""
    buf = BytesIO()
    image.save(buf, format='PNG')
    return base64.b64encode(buf.getvalue()).decode('utf-8')


def page_filename(name: str, page: int, level: int) -> str:
    return f"{name}_{page}_{level}.png"


def atlas_to_dict(atlas: Atlas, name: str = "atlas", embed: bool = False) -> Dict[str, Any]:
    """
    Describe an atlas as JSON-serializable data.

    Identities are stored as strings. With embed=True each page also carries
    its level-0 buffer as base64 PNG.
    """
    pages = []
    for page in atlas.pages:
        info = {
            'index': page.index,
            'files': [page_filename(name, page.index, level) for level in range(len(page))],
        }
        if embed:
            info['data'] = encode_png_b64(page.mip_maps[0])
            info['mime'] = 'image/png'
        pages.append(info)

    return {
        'size': atlas.size,
        'padding': atlas.padding,
        'mip_level_count': atlas.mip_level_count,
        'pages': pages,
        'texcoords': texcoord_table(atlas),
    }


def texcoord_table(atlas: Atlas) -> Dict[str, Dict[str, Any]]:
    """
    Texcoords keyed by identity string.

    Raises:
        DuplicateIdentityError: Two identities share a string form, e.g. key "1" and entry index 1
    """
    table: Dict[str, Dict[str, Any]] = {}
    for identity, tc in atlas.texcoords.items():
        name = str(identity)
        if name in table:
            raise DuplicateIdentityError(name)
        table[name] = tc.to_dict()
    return table


def write_atlas(
    atlas: Atlas,
    out_dir: Union[str, Path],
    name: str = "atlas",
    embed: bool = False,
) -> List[Path]:
    """
    Write every page level as PNG plus {name}.json into out_dir.

    Returns:
        Paths of all written files, JSON last
    """
    table = atlas_to_dict(atlas, name=name, embed=embed)
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for page in atlas.pages:
        for level, image in enumerate(page.mip_maps):
            path = out_dir / page_filename(name, page.index, level)
            image.save(path, format='PNG')
            written.append(path)

    table_path = out_dir / f"{name}.json"
    with open(table_path, 'w') as f:
        json.dump(table, f, indent=2)
    written.append(table_path)

    logger.info(f"Wrote {len(written)} files to {out_dir}")
    return written
