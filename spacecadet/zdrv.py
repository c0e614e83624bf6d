"""Depth-buffered drawing of 8-bit indexed bitmaps."""

from __future__ import annotations

from typing import List, Optional, Tuple

MAX_DEPTH = 0xFFFF


def _pad(width: int) -> int:
    """Round ``width`` up to a multiple of four."""
    if width & 3:
        return width - (width & 3) + 4
    return width


class _Plane:
    """A row-major grid of integers with a row stride that may exceed the width."""

    def __init__(self, width: int, height: int, stride: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("dimensions must not be negative")
        if stride < width:
            raise ValueError("stride must be at least the width")
        self.width = width
        self.height = height
        self.stride = stride
        self.data: List[int] = [0] * (stride * height)

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError("coordinates out of range")
        return self.stride * y + x

    def __getitem__(self, pos: Tuple[int, int]) -> int:
        x, y = pos
        return self.data[self._index(x, y)]

    def __setitem__(self, pos: Tuple[int, int], value: int) -> None:
        x, y = pos
        self.data[self._index(x, y)] = value

    def _check_region(self, x: int, y: int, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("region size must not be negative")
        if x < 0 or y < 0 or x + width > self.width or y + height > self.height:
            raise ValueError("region lies outside the plane")

    def _row_start(self, x: int, y: int, row: int) -> int:
        return self.stride * (y + row) + x


class IndexedBitmap(_Plane):
    """An 8-bit palette-indexed bitmap; colour index 0 is transparent."""

    def __init__(self, width: int, height: int, stride: Optional[int] = None) -> None:
        super().__init__(width, height, width if stride is None else stride)


class ZMap(_Plane):
    """A 16-bit depth map; smaller values are nearer to the viewer."""

    def __init__(self, width: int, height: int, stride: Optional[int] = None) -> None:
        if stride is None or stride < 0:
            stride = _pad(width)
        super().__init__(width, height, stride)
        self.resolution = 0

    def fill(self, width: int, height: int, x_off: int, y_off: int, value: int) -> None:
        """Set every depth in the given region to ``value``."""
        self._check_region(x_off, y_off, width, height)
        value &= MAX_DEPTH
        for row in range(height):
            start = self._row_start(x_off, y_off, row)
            self.data[start:start + width] = [value] * width

    def flip_rows(self) -> None:
        """Reverse the order of the rows in place (padding is left untouched)."""
        for top in range(self.height // 2):
            bottom = self.height - 1 - top
            a = self._row_start(0, top, 0)
            b = self._row_start(0, bottom, 0)
            w = self.width
            self.data[a:a + w], self.data[b:b + w] = self.data[b:b + w], self.data[a:a + w]

    def preview(self) -> List[Tuple[int, int, int, int]]:
        """Grey-scale (r, g, b, a) pixels, row by row, nearer depths brighter."""
        pixels = []
        for row in range(self.height):
            start = self._row_start(0, 0, row)
            for z in self.data[start:start + self.width]:
                level = ((MAX_DEPTH - z) // 0xFF) & 0xFF
                pixels.append((level, level, level, 0xFF))
        return pixels


def paint(
    width: int,
    height: int,
    dst_bmp: IndexedBitmap,
    dst_x: int,
    dst_y: int,
    dst_zmap: ZMap,
    dst_zx: int,
    dst_zy: int,
    src_bmp: IndexedBitmap,
    src_x: int,
    src_y: int,
    src_zmap: ZMap,
    src_zx: int,
    src_zy: int,
) -> None:
    """Copy pixels and depths where the source is at least as near as the destination."""
    dst_bmp._check_region(dst_x, dst_y, width, height)
    dst_zmap._check_region(dst_zx, dst_zy, width, height)
    src_bmp._check_region(src_x, src_y, width, height)
    src_zmap._check_region(src_zx, src_zy, width, height)

    for row in range(height):
        d = dst_bmp._row_start(dst_x, dst_y, row)
        dz = dst_zmap._row_start(dst_zx, dst_zy, row)
        s = src_bmp._row_start(src_x, src_y, row)
        sz = src_zmap._row_start(src_zx, src_zy, row)
        src_pixels = src_bmp.data[s:s + width]
        src_depths = src_zmap.data[sz:sz + width]
        for col, (pixel, depth) in enumerate(zip(src_pixels, src_depths)):
            if dst_zmap.data[dz + col] >= depth:
                dst_bmp.data[d + col] = pixel
                dst_zmap.data[dz + col] = depth


def paint_flat(
    width: int,
    height: int,
    dst_bmp: IndexedBitmap,
    dst_x: int,
    dst_y: int,
    zmap: ZMap,
    zx: int,
    zy: int,
    src_bmp: IndexedBitmap,
    src_x: int,
    src_y: int,
    depth: int,
) -> None:
    """Draw non-transparent source pixels at one flat ``depth``; the depth map is not changed."""
    dst_bmp._check_region(dst_x, dst_y, width, height)
    zmap._check_region(zx, zy, width, height)
    src_bmp._check_region(src_x, src_y, width, height)
    depth &= MAX_DEPTH

    for row in range(height):
        d = dst_bmp._row_start(dst_x, dst_y, row)
        z = zmap._row_start(zx, zy, row)
        s = src_bmp._row_start(src_x, src_y, row)
        for col, pixel in enumerate(src_bmp.data[s:s + width]):
            if pixel and zmap.data[z + col] > depth:
                dst_bmp.data[d + col] = pixel