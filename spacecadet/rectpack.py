"""Skyline bottom-left rectangle packing for texture atlases."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, List, Optional, Tuple

MAX_COORD = 0xFFFF
_SENTINEL_Y = 65535
_LARGE = 1 << 30


class Heuristic(IntEnum):
    """Placement heuristic used by the skyline packer."""

    SKYLINE_BL_SORT_HEIGHT = 0
    SKYLINE_BF_SORT_HEIGHT = 1
    SKYLINE_DEFAULT = 0


@dataclass
class Rect:
    """A rectangle to be packed; ``x``, ``y`` and ``was_packed`` are outputs."""

    w: int
    h: int
    id: int = 0
    x: int = 0
    y: int = 0
    was_packed: bool = False


@dataclass(slots=True)
class _Node:
    x: int
    y: int


@dataclass(frozen=True)
class _Placement:
    index: int
    x: int
    y: int


class RectPacker:
    """Packs rectangles into a fixed-size target using a skyline.

    ``num_nodes`` bounds the number of skyline segments available; unless
    out-of-memory is allowed, widths are quantized so that this bound is
    never exceeded.
    """

    def __init__(self, width: int, height: int, num_nodes: int) -> None:
        if width > MAX_COORD or height > MAX_COORD:
            raise ValueError("target dimensions must not exceed 65535")
        if num_nodes < 1:
            raise ValueError("num_nodes must be at least 1")
        self.width = width
        self.height = height
        self.num_nodes = num_nodes
        self.heuristic = Heuristic.SKYLINE_DEFAULT
        self._free = num_nodes
        self._skyline: List[_Node] = [_Node(0, 0), _Node(width, _SENTINEL_Y)]
        self.align = 1
        self.set_allow_out_of_mem(False)

    def set_allow_out_of_mem(self, allow: bool) -> None:
        """Choose between exact widths (may run out of nodes) and quantized widths."""
        if allow:
            self.align = 1
        else:
            self.align = (self.width + self.num_nodes - 1) // self.num_nodes

    def set_heuristic(self, heuristic: int) -> None:
        """Select the placement heuristic; raises ValueError for unknown values."""
        self.heuristic = Heuristic(heuristic)

    def _find_min_y(self, first: int, x0: int, width: int) -> Tuple[int, int]:
        sky = self._skyline
        x1 = x0 + width
        min_y = 0
        waste = 0
        visited = 0
        i = first
        while sky[i].x < x1:
            node, nxt = sky[i], sky[i + 1]
            if node.y > min_y:
                waste += visited * (node.y - min_y)
                min_y = node.y
                if node.x < x0:
                    visited += nxt.x - x0
                else:
                    visited += nxt.x - node.x
            else:
                under = nxt.x - node.x
                if under + visited > width:
                    under = width - visited
                waste += under * (min_y - node.y)
                visited += under
            i += 1
        return min_y, waste

    def _find_best_pos(self, width: int, height: int) -> Optional[_Placement]:
        width = width + self.align - 1
        width -= width % self.align

        if width > self.width or height > self.height:
            return None

        sky = self._skyline
        best_waste = _LARGE
        best_y = _LARGE
        best: Optional[int] = None

        i = 0
        while i < len(sky) and sky[i].x + width <= self.width:
            y, waste = self._find_min_y(i, sky[i].x, width)
            if self.heuristic == Heuristic.SKYLINE_BL_SORT_HEIGHT:
                if y < best_y:
                    best_y = y
                    best = i
            elif y + height <= self.height:
                if y < best_y or (y == best_y and waste < best_waste):
                    best_y = y
                    best_waste = waste
                    best = i
            i += 1

        best_x = 0 if best is None else sky[best].x

        if self.heuristic == Heuristic.SKYLINE_BF_SORT_HEIGHT:
            tail = 0
            node = 0
            while sky[tail].x < width:
                tail += 1
            while tail < len(sky):
                xpos = sky[tail].x - width
                while sky[node + 1].x <= xpos:
                    node += 1
                y, waste = self._find_min_y(node, xpos, width)
                if y + height <= self.height and y <= best_y:
                    if (
                        y < best_y
                        or waste < best_waste
                        or (waste == best_waste and xpos < best_x)
                    ):
                        best_x = xpos
                        best_y = y
                        best_waste = waste
                        best = node
                tail += 1

        if best is None:
            return None
        return _Placement(best, best_x, best_y)

    def _pack_one(self, width: int, height: int) -> Optional[Tuple[int, int]]:
        res = self._find_best_pos(width, height)
        if res is None or res.y + height > self.height or self._free == 0:
            return None

        sky = self._skyline
        self._free -= 1
        new_node = _Node(res.x, res.y + height)

        if sky[res.index].x < res.x:
            sky.insert(res.index + 1, new_node)
            cur = res.index + 2
        else:
            sky.insert(res.index, new_node)
            cur = res.index + 1

        right = res.x + width
        while cur + 1 < len(sky) and sky[cur + 1].x <= right:
            del sky[cur]
            self._free += 1

        if sky[cur].x < right:
            sky[cur].x = right

        return res.x, res.y

    def pack(self, rects: Iterable[Rect]) -> bool:
        """Assign positions to ``rects`` in place; True if every one was packed.

        Rectangles that do not fit get ``was_packed`` False and both
        coordinates set to 65535. Empty rectangles are placed at the origin.
        """
        items = list(rects)
        order = sorted(range(len(items)), key=lambda k: (-items[k].h, -items[k].w))
        for k in order:
            rect = items[k]
            if rect.w == 0 or rect.h == 0:
                rect.x = rect.y = 0
                continue
            pos = self._pack_one(rect.w, rect.h)
            if pos is None:
                rect.x = rect.y = MAX_COORD
            else:
                rect.x, rect.y = pos

        all_packed = True
        for rect in items:
            rect.was_packed = not (rect.x == MAX_COORD and rect.y == MAX_COORD)
            if not rect.was_packed:
                all_packed = False
        return all_packed


def pack_rects(width: int, height: int, rects: Iterable[Rect]) -> bool:
    """Pack ``rects`` into a fresh ``width`` x ``height`` target."""
    packer = RectPacker(width, height, max(width, 1))
    return packer.pack(rects)