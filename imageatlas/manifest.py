"""
JSON atlas manifests

A manifest names the source image files of an atlas plus its page settings:

    {
      "max_page_count": 4,
      "size": 1024,
      "mip": {"kind": "block", "filter": "lanczos3", "block_size": 32},
      "entries": [{"path": "grass.png", "key": "grass", "wrap": "repeat"}]
    }

Relative image paths are resolved against the manifest's directory.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from PIL import Image
from pydantic import BaseModel, ConfigDict, Field

from imageatlas.schema import AtlasDescriptor, AtlasEntry, MipOption, NoMip, WrapPolicy

logger = logging.getLogger(__name__)


class ManifestEntry(BaseModel):
    model_config = ConfigDict(extra='forbid')

    path: str = Field(..., description="Image file, absolute or relative to the manifest.")
    key: Optional[str] = Field(None, description="Identity in the texcoord table (defaults to index).")
    wrap: WrapPolicy = Field(WrapPolicy.clamp, description="Padding fill policy.")


class AtlasManifest(BaseModel):
    model_config = ConfigDict(extra='forbid')

    max_page_count: int = Field(1, description="Upper bound on pages attempted.")
    size: int = Field(..., description="Page side length in pixels.")
    mip: MipOption = Field(default_factory=NoMip, description="Padding and mip chain policy.")
    mode: str = Field("RGBA", description="Pixel mode of the pages.")
    entries: List[ManifestEntry] = Field(default_factory=list)


def load_image(path: Union[str, Path]) -> Image.Image:
    """Open an image file and load its pixels."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Image file not found: {path}")
    with Image.open(path) as img:
        img.load()
        return img.copy()


def manifest_to_descriptor(manifest: AtlasManifest, base_dir: Union[str, Path] = ".") -> AtlasDescriptor:
    """Load every image a manifest names and build the descriptor."""
    base_dir = Path(base_dir)
    entries = []
    for item in manifest.entries:
        path = Path(item.path)
        if not path.is_absolute():
            path = base_dir / path
        entries.append(AtlasEntry(image=load_image(path), wrap=item.wrap, key=item.key))

    return AtlasDescriptor(
        max_page_count=manifest.max_page_count,
        size=manifest.size,
        mip=manifest.mip,
        entries=entries,
        mode=manifest.mode,
    )


def load_manifest(path: Union[str, Path]) -> AtlasDescriptor:
    """
    Read a JSON manifest and load its images.

    Raises:
        FileNotFoundError: if the manifest or an image is missing
        pydantic.ValidationError: if the manifest does not match the schema
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Manifest not found: {path}")

    with open(path, 'r') as f:
        data = json.load(f)

    manifest = AtlasManifest.model_validate(data)
    logger.info(f"Loaded manifest {path} ({len(manifest.entries)} entries)")
    return manifest_to_descriptor(manifest, path.parent)
