"""
Wrap extension of entry borders.

Builds the padded copy of an entry: the source sits in the middle and the
border is filled by mapping every out-of-range coordinate back into the
source with the entry's wrap policy. Axes are mapped independently, so
corners follow from the same rule.
"""

import logging

import numpy as np
from PIL import Image

from imageatlas.schema import WrapPolicy

logger = logging.getLogger(__name__)


def _clamp_indices(coords: np.ndarray, n: int) -> np.ndarray:
    return np.clip(coords, 0, n - 1)


def _repeat_indices(coords: np.ndarray, n: int) -> np.ndarray:
    return np.mod(coords, n)


def _mirror_indices(coords: np.ndarray, n: int) -> np.ndarray:
    # Offset -d reads index d-1; the pattern folds every n pixels.
    folded = np.mod(coords, 2 * n)
    return np.where(folded < n, folded, 2 * n - 1 - folded)


_INDEXERS = {
    WrapPolicy.clamp: _clamp_indices,
    WrapPolicy.repeat: _repeat_indices,
    WrapPolicy.mirror: _mirror_indices,
}


def source_indices(n: int, padding: int, wrap: WrapPolicy) -> np.ndarray:
    """
    Source index for every padded coordinate along one axis.

    Args:
        n: Source length along the axis
        padding: Border width on each side
        wrap: Wrap policy (clamp, repeat or mirror)

    Returns:
        Array of length n + 2 * padding with values in [0, n)
    """
    coords = np.arange(-padding, n + padding)
    return _INDEXERS[WrapPolicy(wrap)](coords, n)


def wrap_extend(image: Image.Image, padding: int, wrap: WrapPolicy) -> Image.Image:
    """
    Return image with a padding-pixel border filled according to wrap.

    Single entries are never extended; the source is returned unchanged.
    """
    if padding == 0 or wrap == WrapPolicy.single:
        return image

    width, height = image.size
    pixels = np.asarray(image)
    rows = source_indices(height, padding, wrap)
    cols = source_indices(width, padding, wrap)
    padded = np.ascontiguousarray(pixels[rows][:, cols])

    out_size = (width + 2 * padding, height + 2 * padding)
    logger.debug(f"Wrap-extended {width}x{height} by {padding}px ({WrapPolicy(wrap).value})")
    return Image.frombytes(image.mode, out_size, padded.tobytes())
