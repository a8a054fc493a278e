"""An RGBA pixel buffer that the renderer draws into."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

PIXEL_BITS = 4

Color = Sequence[int]


@dataclass
class RenderFrame:
    """A frame of `width` x `height` RGBA pixels stored row by row."""

    width: int
    height: int
    buffer: bytearray | None = None

    def __post_init__(self) -> None:
        if self.buffer is None:
            self.buffer = bytearray(self.width * self.height * PIXEL_BITS)

    def pixels(self) -> Iterator[bytes]:
        """Yield every whole pixel in buffer order."""
        whole = len(self.buffer) - len(self.buffer) % PIXEL_BITS
        for start in range(0, whole, PIXEL_BITS):
            yield bytes(self.buffer[start : start + PIXEL_BITS])

    def _index(self, x: int, y: int) -> int | None:
        index = (x + y * self.width) * PIXEL_BITS
        # The very last pixel of the buffer is treated as out of range.
        if index < 0 or index + PIXEL_BITS >= len(self.buffer):
            return None
        return index

    def pixel(self, x: int, y: int) -> bytes | None:
        """Return the pixel at (x, y), or None when it lies outside the buffer."""
        index = self._index(x, y)
        if index is None:
            return None
        return bytes(self.buffer[index : index + PIXEL_BITS])

    def draw_pixel(self, x: int, y: int, color: Color) -> None:
        """Set one pixel; positions outside the buffer are ignored."""
        index = self._index(x, y)
        if index is not None:
            self.buffer[index : index + PIXEL_BITS] = bytes(color)

    def draw_square(self, x: int, y: int, width: int, height: int, color: Color) -> None:
        """Fill a rectangle whose top-left corner is (x, y)."""
        for py in range(y, y + height):
            for px in range(x, x + width):
                self.draw_pixel(px, py, color)

    def fill(self, color: Color) -> None:
        """Set every whole pixel to `color`."""
        pixel_count = len(self.buffer) // PIXEL_BITS
        self.buffer[: pixel_count * PIXEL_BITS] = bytes(color) * pixel_count