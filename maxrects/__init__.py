"""Rectangle bin packing with the MAXRECTS algorithm.

Packs rectangles into a single fixed-size bin for texture atlases,
sprite sheets and similar layouts.

MIT License

Copyright (c) 2018 shotariya

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.

Typical usage:
    images = {
        'mat1': {'gfx': {'size': (100, 200)}},
        'mat2': {'gfx': {'size': (150, 100)}}
    }
    packed_result = pack(images, 512, 512)
"""

from typing import Dict

from .max_rects_bin_pack import (
    FreeRectChoiceHeuristic,
    HeuristicLike,
    MaxRectsBinPack,
    Placement,
    common_interval_length,
    is_contained_in,
)
from .rect import Rect, RectSize

__all__ = [
    "DEFAULT_HEURISTIC",
    "FreeRectChoiceHeuristic",
    "MAX_PADDING",
    "MaxRectsBinPack",
    "PackingError",
    "Placement",
    "Rect",
    "RectSize",
    "common_interval_length",
    "is_contained_in",
    "pack",
]

DEFAULT_HEURISTIC = FreeRectChoiceHeuristic.BEST_SHORT_SIDE_FIT
MAX_PADDING = 64


class PackingError(Exception):
    """Indicates an error occurred during the packing process."""

    pass


def pack(
    images: Dict,
    width: int,
    height: int,
    heuristic: HeuristicLike = DEFAULT_HEURISTIC,
    allow_flip: bool = False,
    padding: int = 0,
    verbose: bool = False,
) -> Dict:
    """Packs the given images into a single bin of width x height.

    The packer decides the order in which images are placed. Each image's
    entry receives a 'fit' field with its position, its unpadded size and
    whether it was rotated.

    Args:
        images: Dictionary of materials and their image/size data.
                Each item should have the format:
                {material_id: {'gfx': {'size': (width, height)}}}
        width: Width of the bin.
        height: Height of the bin.
        heuristic: Placement rule, an enum member or its short code.
        allow_flip: If True, images may be rotated by 90 degrees.
        padding: Space added around each image, clamped to 0..MAX_PADDING.
        verbose: If True, prints debug information.

    Returns:
        The updated dictionary with {'x', 'y', 'w', 'h', 'rot'} in each
        item's 'gfx.fit' field.

    Raises:
        PackingError: If an entry is malformed, has non-positive dimensions,
            or not every image fits into the bin.
    """
    if not images:
        return {}

    padding = max(0, min(int(padding), MAX_PADDING))
    padding_both_sides = padding * 2

    ids = []
    sizes = []
    for img_id, data in images.items():
        try:
            size = data["gfx"]["size"]
            original_width, original_height = int(size[0]), int(size[1])
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise PackingError(
                "Invalid image data format for '{}': {}".format(img_id, e)
            ) from e

        if not (original_width > 0 and original_height > 0):
            raise PackingError(
                "Image '{}' has non-positive dimensions: ({}x{})".format(
                    img_id, original_width, original_height
                )
            )

        ids.append(img_id)
        sizes.append(
            RectSize(
                original_width + padding_both_sides,
                original_height + padding_both_sides,
            )
        )

    packer = MaxRectsBinPack(width, height, allow_flip, verbose=verbose)
    placed = {}
    for index, rect in packer.insert_rects_indexed(sizes, heuristic):
        placed[ids[index]] = (rect, rect.width != sizes[index].width)

    missing = [img_id for img_id in ids if img_id not in placed]
    if missing:
        raise PackingError(
            "{} image(s) do not fit into {}x{}: {}".format(
                len(missing), width, height, ", ".join(map(str, missing))
            )
        )

    for img_id, (rect, rotated) in placed.items():
        images[img_id]["gfx"]["fit"] = {
            "x": rect.x + padding,
            "y": rect.y + padding,
            "w": rect.width - padding_both_sides,
            "h": rect.height - padding_both_sides,
            "rot": rotated,
        }

    if verbose:
        print(
            "[pack] {} image(s) packed, occupancy: {:.3f}".format(
                len(placed), packer.occupancy()
            )
        )
    return images
