"""MAXRECTS bin packing for a single fixed-size bin.

Based on the MAXRECTS data structure and heuristics described by
Jukka Jylänki in "A Thousand Ways to Pack the Bin", released to the
Public Domain.

The packer keeps a list of maximal free rectangles. Every placement splits
the free rectangles it overlaps into up to four smaller ones, after which
any free rectangle contained in another is pruned.

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
    packer = MaxRectsBinPack(1024, 1024, allow_flip=True)
    node = packer.insert(100, 200, FreeRectChoiceHeuristic.BEST_SHORT_SIDE_FIT)
    if node.height == 0:
        ...  # Does not fit.
    print(packer.occupancy())
"""

from enum import Enum
from typing import Callable, Iterable, Iterator, List, NamedTuple, Tuple, Union

from .rect import Rect, RectSize

Score = Tuple[float, float]


class FreeRectChoiceHeuristic(str, Enum):
    """Rules for choosing the free rectangle a new item is placed into."""

    # Against the short side of the free rectangle it fits best.
    BEST_SHORT_SIDE_FIT = "BSSF"
    # Against the long side of the free rectangle it fits best.
    BEST_LONG_SIDE_FIT = "BLSF"
    # Into the smallest free rectangle it fits.
    BEST_AREA_FIT = "BAF"
    # Tetris placement.
    BOTTOM_LEFT = "BL"
    # Touching the bin border and other items as much as possible.
    CONTACT_POINT = "CP"
    # Keeping the footprint measured from the origin closest to a square.
    BEST_SQUARE_FIT = "BSQF"


HeuristicLike = Union[FreeRectChoiceHeuristic, str]


class Placement(NamedTuple):
    """A candidate placement and its scores. Lower scores are better."""

    rect: Rect
    score1: float
    score2: float


def _no_placement() -> Placement:
    return Placement(Rect(), float("inf"), float("inf"))


def common_interval_length(
    i1_start: int, i1_end: int, i2_start: int, i2_end: int
) -> int:
    """Returns the length of the overlap of two 1D intervals, 0 if disjoint."""
    if i1_end < i2_start or i2_end < i1_start:
        return 0
    return min(i1_end, i2_end) - max(i1_start, i2_start)


def is_contained_in(a: Rect, b: Rect) -> bool:
    """Checks if rectangle `a` lies completely inside rectangle `b`."""
    return b.contains(a)


class MaxRectsBinPack:
    """Packs rectangles into a single bin using the MAXRECTS structure.

    Attributes:
        bin_width: Width of the bin.
        bin_height: Height of the bin.
        allow_flip: If True, items may be rotated by 90 degrees.
        verbose: If True, prints debug information while packing.
        used_rectangles: Placed rectangles, in placement order.
        free_rectangles: Maximal free rectangles still available.
    """

    def __init__(
        self,
        width: int = 0,
        height: int = 0,
        allow_flip: bool = False,
        verbose: bool = False,
    ):
        self.verbose = verbose
        self.bin_width = 0
        self.bin_height = 0
        self.allow_flip = False
        self.used_rectangles: List[Rect] = []
        self.free_rectangles: List[Rect] = []

        self._finders = {
            FreeRectChoiceHeuristic.BEST_SHORT_SIDE_FIT: self._find_position_bssf,
            FreeRectChoiceHeuristic.BEST_LONG_SIDE_FIT: self._find_position_blsf,
            FreeRectChoiceHeuristic.BEST_AREA_FIT: self._find_position_baf,
            FreeRectChoiceHeuristic.BOTTOM_LEFT: self._find_position_bl,
            FreeRectChoiceHeuristic.CONTACT_POINT: self._find_position_cp,
            FreeRectChoiceHeuristic.BEST_SQUARE_FIT: self._find_position_bsqf,
        }

        self.init(width, height, allow_flip)

    def init(self, width: int, height: int, allow_flip: bool = False) -> None:
        """(Re)initializes the packer to an empty bin of width x height.

        Rectangles returned before the call no longer describe the new bin.
        """
        self.bin_width = width
        self.bin_height = height
        self.allow_flip = allow_flip

        self.used_rectangles = []
        self.free_rectangles = [Rect(0, 0, width, height)]

        if self.verbose:
            print(
                "[init] bin:{}x{}, allow_flip:{}".format(
                    width, height, allow_flip
                )
            )

    def insert(self, width: int, height: int, method: HeuristicLike) -> Rect:
        """Inserts a single rectangle into the bin, possibly rotated.

        Args:
            width: Width of the item.
            height: Height of the item.
            method: The heuristic used to choose the position.

        Returns:
            A copy of the placed rectangle. If the item does not fit anywhere
            the returned rectangle has a height of 0 and the bin is unchanged.
        """
        placement = self.score_rect(width, height, method)
        if placement.rect.height == 0:
            if self.verbose:
                print("[insert] {}x{} does not fit".format(width, height))
            return placement.rect

        self.place_rect(placement.rect)
        return placement.rect.copy()

    def insert_rects(
        self,
        sizes: Iterable[Union[RectSize, Tuple[int, int]]],
        method: HeuristicLike,
    ) -> List[Rect]:
        """Inserts a batch of rectangles, choosing the packing order itself.

        After every placement all pending items are scored again and the
        globally best one is placed next. Items that fit nowhere are left out
        of the result. The given `sizes` are not modified.

        Args:
            sizes: Items to pack as `RectSize` or (width, height) pairs.
            method: The heuristic used to score placements.

        Returns:
            Copies of the placed rectangles in placement order.
        """
        return [rect for _, rect in self.insert_rects_indexed(sizes, method)]

    def insert_rects_indexed(
        self,
        sizes: Iterable[Union[RectSize, Tuple[int, int]]],
        method: HeuristicLike,
    ) -> Iterator[Tuple[int, Rect]]:
        """Like `insert_rects`, yielding (input index, rect) pairs instead.

        Lets callers map each placement back to the item it was made for.
        """
        pending = [(i, RectSize(*size)) for i, size in enumerate(sizes)]

        while pending:
            best_score = (float("inf"), float("inf"))
            best_pending_index = -1
            best_node = None

            for pending_index, (_, size) in enumerate(pending):
                placement = self.score_rect(size.width, size.height, method)
                if placement.rect.height == 0:
                    continue
                if (placement.score1, placement.score2) < best_score:
                    best_score = (placement.score1, placement.score2)
                    best_pending_index = pending_index
                    best_node = placement.rect

            if best_node is None:
                if self.verbose:
                    print(
                        "[insert_rects] {} item(s) do not fit".format(
                            len(pending)
                        )
                    )
                return

            self.place_rect(best_node)
            input_index, _ = pending.pop(best_pending_index)
            yield input_index, best_node.copy()

    def place_rect(self, node: Rect) -> None:
        """Places the given rectangle into the bin and updates the free list."""
        if self.verbose:
            print(
                "[place_rect] Placing: {}, FreeRects before split: {}".format(
                    node, len(self.free_rectangles)
                )
            )

        # Free rectangles appended by the split never intersect the node.
        num_to_process = len(self.free_rectangles)
        i = 0
        while i < num_to_process:
            if self.split_free_node(self.free_rectangles[i], node):
                self.free_rectangles.pop(i)
                num_to_process -= 1
            else:
                i += 1

        self.prune_free_list()
        self.used_rectangles.append(node)

    def score_rect(
        self, width: int, height: int, method: HeuristicLike
    ) -> Placement:
        """Computes where an item would go with the given heuristic.

        Lower scores are better for every heuristic. The contact point
        finder already negates its score, so it is used here unchanged.

        Returns:
            The placement and its scores. If the item does not fit, the
            rectangle has a height of 0 and both scores are infinite.
        """
        finder = self._finders[FreeRectChoiceHeuristic(method)]
        placement = finder(width, height)
        if placement.rect.height == 0:
            return _no_placement()
        return placement

    def occupancy(self) -> float:
        """Computes the ratio of used surface area to the total bin area."""
        bin_area = self.bin_width * self.bin_height
        if bin_area <= 0:
            return 0.0
        used_area = sum(rect.area for rect in self.used_rectangles)
        return used_area / bin_area

    # --- Position finders ---

    def _orientations(self, width: int, height: int) -> Iterator[Tuple[Rect, int, int]]:
        """Yields (free rect, width, height) for every orientation that fits."""
        for free_rect in self.free_rectangles:
            if free_rect.width >= width and free_rect.height >= height:
                yield free_rect, width, height
            if (
                self.allow_flip
                and free_rect.width >= height
                and free_rect.height >= width
            ):
                yield free_rect, height, width

    def _find_best(
        self,
        width: int,
        height: int,
        score: Callable[[Rect, int, int], Score],
    ) -> Placement:
        """Keeps the first candidate with the lexicographically smallest score."""
        best = _no_placement()
        for free_rect, w, h in self._orientations(width, height):
            score1, score2 = score(free_rect, w, h)
            if (score1, score2) < (best.score1, best.score2):
                best = Placement(Rect(free_rect.x, free_rect.y, w, h), score1, score2)
        return best

    def _find_position_bssf(self, width: int, height: int) -> Placement:
        """Best Short Side Fit: minimizes the shorter leftover side."""

        def score(free_rect: Rect, w: int, h: int) -> Score:
            leftover_horiz = abs(free_rect.width - w)
            leftover_vert = abs(free_rect.height - h)
            return (
                min(leftover_horiz, leftover_vert),
                max(leftover_horiz, leftover_vert),
            )

        return self._find_best(width, height, score)

    def _find_position_blsf(self, width: int, height: int) -> Placement:
        """Best Long Side Fit: minimizes the longer leftover side."""

        def score(free_rect: Rect, w: int, h: int) -> Score:
            leftover_horiz = abs(free_rect.width - w)
            leftover_vert = abs(free_rect.height - h)
            return (
                max(leftover_horiz, leftover_vert),
                min(leftover_horiz, leftover_vert),
            )

        return self._find_best(width, height, score)

    def _find_position_baf(self, width: int, height: int) -> Placement:
        """Best Area Fit: minimizes the area left in the free rectangle.

        Ties go to the smaller short side leftover.
        """
        request_area = width * height

        def score(free_rect: Rect, w: int, h: int) -> Score:
            leftover_horiz = abs(free_rect.width - w)
            leftover_vert = abs(free_rect.height - h)
            return (
                free_rect.area - request_area,
                min(leftover_horiz, leftover_vert),
            )

        return self._find_best(width, height, score)

    def _find_position_bl(self, width: int, height: int) -> Placement:
        """Bottom-Left rule: lowest resulting top edge, then leftmost."""

        def score(free_rect: Rect, w: int, h: int) -> Score:
            return free_rect.y + h, free_rect.x

        return self._find_best(width, height, score)

    def _find_position_cp(self, width: int, height: int) -> Placement:
        """Contact Point rule: maximizes the length of touching edges."""

        def score(free_rect: Rect, w: int, h: int) -> Score:
            contact = self.contact_point_score_node(free_rect.x, free_rect.y, w, h)
            return -contact, 0

        return self._find_best(width, height, score)

    def _find_position_bsqf(self, width: int, height: int) -> Placement:
        """Best Square Fit: keeps the bounds from the origin close to square."""

        def score(free_rect: Rect, w: int, h: int) -> Score:
            x_bound = free_rect.x + w
            y_bound = free_rect.y + h
            return max(x_bound, y_bound), min(x_bound, y_bound)

        return self._find_best(width, height, score)

    def contact_point_score_node(self, x: int, y: int, width: int, height: int) -> int:
        """Calculates the contact point score for a potential placement.

        The score is the summed length of edges touching the bin border or
        already placed rectangles.
        """
        score = 0
        right = x + width
        bottom = y + height

        if x == 0 or right == self.bin_width:
            score += height
        if y == 0 or bottom == self.bin_height:
            score += width

        for rect in self.used_rectangles:
            if rect.x == right or rect.right == x:
                score += common_interval_length(rect.y, rect.bottom, y, bottom)
            if rect.y == bottom or rect.bottom == y:
                score += common_interval_length(rect.x, rect.right, x, right)
        return score

    # --- Free list maintenance ---

    def split_free_node(self, free_node: Rect, used_node: Rect) -> bool:
        """Splits a free rectangle around an overlapping used rectangle.

        Up to four clones of `free_node`, shrunk to the parts left above,
        below, left and right of `used_node`, are appended to the free list.
        The new rectangles may overlap each other.

        Returns:
            True if the rectangles intersect, meaning `free_node` must be
            removed by the caller, False otherwise.
        """
        if not free_node.intersects(used_node):
            return False

        if used_node.x < free_node.right and used_node.right > free_node.x:
            # Above the used node.
            if free_node.y < used_node.y < free_node.bottom:
                new_node = free_node.copy()
                new_node.height = used_node.y - new_node.y
                self.free_rectangles.append(new_node)

            # Below the used node.
            if used_node.bottom < free_node.bottom:
                new_node = free_node.copy()
                new_node.y = used_node.bottom
                new_node.height = free_node.bottom - used_node.bottom
                self.free_rectangles.append(new_node)

        if used_node.y < free_node.bottom and used_node.bottom > free_node.y:
            # Left of the used node.
            if free_node.x < used_node.x < free_node.right:
                new_node = free_node.copy()
                new_node.width = used_node.x - new_node.x
                self.free_rectangles.append(new_node)

            # Right of the used node.
            if used_node.right < free_node.right:
                new_node = free_node.copy()
                new_node.x = used_node.right
                new_node.width = free_node.right - used_node.right
                self.free_rectangles.append(new_node)

        return True

    def prune_free_list(self) -> None:
        """Removes free rectangles that are contained in another one."""
        count_before = len(self.free_rectangles)

        free = self.free_rectangles
        i = 0
        while i < len(free):
            j = i + 1
            removed_i = False
            while j < len(free):
                if is_contained_in(free[i], free[j]):
                    free.pop(i)
                    removed_i = True
                    break
                if is_contained_in(free[j], free[i]):
                    free.pop(j)
                else:
                    j += 1
            if not removed_i:
                i += 1

        if self.verbose:
            print(
                "[prune_free_list] Count before: {}, after: {}".format(
                    count_before, len(free)
                )
            )
