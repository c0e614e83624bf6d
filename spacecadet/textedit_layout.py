"""Row layout queries used by the text editor to map between positions and coordinates."""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass

from spacecadet.textedit_undo import EditableText

NEWLINE = "\n"


@dataclass
class Row:
    """The shape of one displayed row of characters."""

    x0: float = 0.0
    x1: float = 0.0
    baseline_y_delta: float = 0.0
    ymin: float = 0.0
    ymax: float = 0.0
    num_chars: int = 0


@dataclass
class FindState:
    """Where a character sits, plus the row before it for upward movement."""

    x: float = 0.0
    y: float = 0.0
    height: float = 0.0
    first_char: int = 0
    length: int = 0
    prev_first: int = 0


class TextDocument(EditableText):
    """Editable text that can lay itself out row by row."""

    @abstractmethod
    def layout_row(self, start: int) -> Row:
        """Lay out the row that begins at character ``start``."""

    @abstractmethod
    def char_width(self, line_start: int, index: int) -> float:
        """Width of character ``index`` of the row starting at ``line_start``."""


class MonospaceDocument(TextDocument):
    """A document with fixed-width characters and one row per line."""

    def __init__(self, text: str = "", char_width: float = 1.0, line_height: float = 1.0) -> None:
        if char_width <= 0:
            raise ValueError("char_width must be positive")
        if line_height <= 0:
            raise ValueError("line_height must be positive")
        super().__init__(text)
        self.char_width_px = char_width
        self.line_height = line_height

    def layout_row(self, start: int) -> Row:
        end = start
        total = len(self)
        while end < total:
            end += 1
            if self[end - 1] == NEWLINE:
                break
        width = sum(self.char_width(start, k) for k in range(end - start))
        return Row(
            x0=0.0,
            x1=width,
            baseline_y_delta=self.line_height,
            ymin=0.0,
            ymax=self.line_height,
            num_chars=end - start,
        )

    def char_width(self, line_start: int, index: int) -> float:
        if self[line_start + index] == NEWLINE:
            return 0.0
        return self.char_width_px


def locate_coord(doc: TextDocument, x: float, y: float) -> int:
    """Return the character position nearest to display point (``x``, ``y``)."""
    n = len(doc)
    base_y = 0.0
    i = 0
    row = Row()

    while i < n:
        row = doc.layout_row(i)
        if row.num_chars <= 0:
            return n
        if i == 0 and y < base_y + row.ymin:
            return 0
        if y < base_y + row.ymax:
            break
        i += row.num_chars
        base_y += row.baseline_y_delta

    if i >= n:
        return n

    if x < row.x0:
        return i

    if x < row.x1:
        prev_x = row.x0
        for k in range(row.num_chars):
            w = doc.char_width(i, k)
            if x < prev_x + w:
                return k + i if x < prev_x + w / 2 else k + i + 1
            prev_x += w

    last = i + row.num_chars - 1
    return last if doc[last] == NEWLINE else i + row.num_chars


def find_charpos(doc: TextDocument, n: int, single_line: bool) -> FindState:
    """Locate character ``n`` and remember the start of the row above it."""
    z = len(doc)
    if n < 0 or n > z:
        raise IndexError("position out of range")

    if n == z:
        if single_line:
            row = doc.layout_row(0)
            return FindState(
                x=row.x1, y=0.0, height=row.ymax - row.ymin,
                first_char=0, length=z, prev_first=0,
            )
        i = 0
        prev_start = 0
        while i < z:
            row = doc.layout_row(i)
            if row.num_chars <= 0:
                raise ValueError("layout produced an empty row")
            prev_start = i
            i += row.num_chars
        return FindState(x=0.0, y=0.0, height=1.0, first_char=i, length=0, prev_first=prev_start)

    find = FindState()
    i = 0
    prev_start = 0
    while True:
        row = doc.layout_row(i)
        if n < i + row.num_chars:
            break
        if row.num_chars <= 0:
            raise ValueError("layout produced an empty row")
        prev_start = i
        i += row.num_chars
        find.y += row.baseline_y_delta

    find.first_char = i
    find.length = row.num_chars
    find.height = row.ymax - row.ymin
    find.prev_first = prev_start
    find.x = row.x0 + sum(doc.char_width(i, k) for k in range(n - i))
    return find