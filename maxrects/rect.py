"""Rectangle value types used by the packer.

A `Rect` with a height of zero is the "no placement found" sentinel
returned by the packer when an item does not fit.

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
"""

from typing import NamedTuple


class RectSize(NamedTuple):
    """Size of an item waiting to be packed."""

    width: int
    height: int


class Rect:
    """An axis-aligned rectangle with integer position and size.

    Attributes:
        x: The x-coordinate of the left edge.
        y: The y-coordinate of the top edge.
        width: The width of the rectangle.
        height: The height of the rectangle.
    """

    __slots__ = ("x", "y", "width", "height")

    def __init__(self, x: int = 0, y: int = 0, width: int = 0, height: int = 0):
        self.x = x
        self.y = y
        self.width = width
        self.height = height

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    def copy(self) -> "Rect":
        """Returns an independent copy of this rectangle."""
        return Rect(self.x, self.y, self.width, self.height)

    def contains(self, other: "Rect") -> bool:
        """Checks if this rectangle completely contains another rectangle.

        Edges that coincide count as contained.
        """
        return (
            other.x >= self.x
            and other.y >= self.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    def intersects(self, other: "Rect") -> bool:
        """Checks if the two rectangles share any area.

        Rectangles that only touch along an edge do not intersect.
        """
        return not (
            other.x >= self.right
            or other.right <= self.x
            or other.y >= self.bottom
            or other.bottom <= self.y
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Rect):
            return NotImplemented
        return (self.x, self.y, self.width, self.height) == (
            other.x,
            other.y,
            other.width,
            other.height,
        )

    def __str__(self) -> str:
        return "x:{},y:{},width:{},height:{}".format(
            self.x, self.y, self.width, self.height
        )

    def __repr__(self) -> str:
        return "Rect({}, {}, {}, {})".format(
            self.x, self.y, self.width, self.height
        )
