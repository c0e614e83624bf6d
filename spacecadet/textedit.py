"""Keyboard and mouse editing state for a text field.

A ``TextEditState`` maps user input onto insertions and deletions in a
``TextDocument``. It also keeps the cursor, the selection and the undo
history up to date.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Union

from spacecadet.textedit_layout import NEWLINE, TextDocument, find_charpos, locate_coord
from spacecadet.textedit_undo import UndoState


class Key(IntEnum):
    """Editing keys. Combine a movement or deletion key with ``SHIFT`` using ``|``."""

    LEFT = 1
    RIGHT = 2
    UP = 3
    DOWN = 4
    PGUP = 5
    PGDOWN = 6
    LINESTART = 7
    LINEEND = 8
    TEXTSTART = 9
    TEXTEND = 10
    DELETE = 11
    BACKSPACE = 12
    UNDO = 13
    REDO = 14
    INSERT = 15
    WORDLEFT = 16
    WORDRIGHT = 17
    SHIFT = 0x100


def _is_space(ch: str) -> bool:
    return ch.isspace()


def _is_word_boundary(doc: TextDocument, idx: int) -> bool:
    if idx <= 0:
        return True
    return _is_space(doc[idx - 1]) and not _is_space(doc[idx])


def _word_left(doc: TextDocument, c: int) -> int:
    c -= 1
    while c >= 0 and not _is_word_boundary(doc, c):
        c -= 1
    return max(c, 0)


def _word_right(doc: TextDocument, c: int) -> int:
    length = len(doc)
    c += 1
    while c < length and not _is_word_boundary(doc, c):
        c += 1
    return min(c, length)


class TextEditState:
    """Cursor, selection, insert mode and undo history of one text field."""

    def __init__(self, single_line: bool = False) -> None:
        self.single_line = bool(single_line)
        self.cursor = 0
        self.select_start = 0
        self.select_end = 0
        self.insert_mode = False
        self.row_count_per_page = 0
        self.has_preferred_x = False
        self.preferred_x = 0.0
        self.undo_state = UndoState()

    # -- helpers --------------------------------------------------------------

    def has_selection(self) -> bool:
        """True when some text is selected."""
        return self.select_start != self.select_end

    def _clamp(self, doc: TextDocument) -> None:
        n = len(doc)
        if self.has_selection():
            self.select_start = min(self.select_start, n)
            self.select_end = min(self.select_end, n)
            if self.select_start == self.select_end:
                self.cursor = self.select_start
        self.cursor = min(self.cursor, n)

    def _delete(self, doc: TextDocument, where: int, length: int) -> None:
        self.undo_state.make_delete(doc, where, length)
        doc.delete(where, length)
        self.has_preferred_x = False

    def _delete_selection(self, doc: TextDocument) -> None:
        self._clamp(doc)
        if not self.has_selection():
            return
        if self.select_start < self.select_end:
            self._delete(doc, self.select_start, self.select_end - self.select_start)
            self.select_end = self.cursor = self.select_start
        else:
            self._delete(doc, self.select_end, self.select_start - self.select_end)
            self.select_start = self.cursor = self.select_end
        self.has_preferred_x = False

    def _sort_selection(self) -> None:
        if self.select_end < self.select_start:
            self.select_start, self.select_end = self.select_end, self.select_start

    def _move_to_first(self) -> None:
        if self.has_selection():
            self._sort_selection()
            self.cursor = self.select_start
            self.select_end = self.select_start
            self.has_preferred_x = False

    def _move_to_last(self, doc: TextDocument) -> None:
        if self.has_selection():
            self._sort_selection()
            self._clamp(doc)
            self.cursor = self.select_end
            self.select_start = self.select_end
            self.has_preferred_x = False

    def _prep_selection_at_cursor(self) -> None:
        if not self.has_selection():
            self.select_start = self.select_end = self.cursor
        else:
            self.cursor = self.select_end

    def _single_line_y(self, doc: TextDocument, y: float) -> float:
        if self.single_line:
            return doc.layout_row(0).ymin
        return y

    def _line_start(self, doc: TextDocument) -> None:
        if self.single_line:
            self.cursor = 0
        else:
            while self.cursor > 0 and doc[self.cursor - 1] != NEWLINE:
                self.cursor -= 1

    def _line_end(self, doc: TextDocument) -> None:
        n = len(doc)
        if self.single_line:
            self.cursor = n
        else:
            while self.cursor < n and doc[self.cursor] != NEWLINE:
                self.cursor += 1

    def _seek_in_row(self, doc: TextDocument, start: int, goal_x: float):
        """Place the cursor in the row at ``start`` nearest to ``goal_x``."""
        self.cursor = start
        row = doc.layout_row(start)
        x = row.x0
        for i in range(row.num_chars):
            if doc[start + i] == NEWLINE:
                break
            x += doc.char_width(start, i)
            if x > goal_x:
                break
            self.cursor += 1
        return row

    # -- mouse ----------------------------------------------------------------

    def click(self, doc: TextDocument, x: float, y: float) -> None:
        """Move the cursor to the clicked point and clear the selection."""
        y = self._single_line_y(doc, y)
        self.cursor = locate_coord(doc, x, y)
        self.select_start = self.cursor
        self.select_end = self.cursor
        self.has_preferred_x = False

    def drag(self, doc: TextDocument, x: float, y: float) -> None:
        """Extend the selection to the dragged-to point."""
        y = self._single_line_y(doc, y)
        if self.select_start == self.select_end:
            self.select_start = self.cursor
        p = locate_coord(doc, x, y)
        self.cursor = self.select_end = p

    # -- clipboard ------------------------------------------------------------

    def cut(self, doc: TextDocument) -> bool:
        """Delete the selection; True if there was one."""
        if self.has_selection():
            self._delete_selection(doc)
            self.has_preferred_x = False
            return True
        return False

    def paste(self, doc: TextDocument, text: str) -> bool:
        """Replace the selection with ``text``; False if the text did not fit.

        A failed paste still leaves the selection deleted; undo restores it.
        """
        self._clamp(doc)
        self._delete_selection(doc)
        if doc.insert(self.cursor, text):
            self.undo_state.make_insert(self.cursor, len(text))
            self.cursor += len(text)
            self.has_preferred_x = False
            return True
        return False

    # -- keyboard -------------------------------------------------------------

    def _type_char(self, doc: TextDocument, ch: str) -> None:
        if ch == NEWLINE and self.single_line:
            return
        if self.insert_mode and not self.has_selection() and self.cursor < len(doc):
            self.undo_state.make_replace(doc, self.cursor, 1, 1)
            doc.delete(self.cursor, 1)
            if doc.insert(self.cursor, ch):
                self.cursor += 1
                self.has_preferred_x = False
        else:
            self._delete_selection(doc)
            if doc.insert(self.cursor, ch):
                self.undo_state.make_insert(self.cursor, 1)
                self.cursor += 1
                self.has_preferred_x = False

    def key(self, doc: TextDocument, key: Union[int, str]) -> None:
        """Apply one key press: a ``Key`` (optionally | ``Key.SHIFT``) or a character."""
        if isinstance(key, str):
            if len(key) != 1:
                raise ValueError("a typed key must be exactly one character")
            if ord(key) > 0:
                self._type_char(doc, key)
            return

        shift = key & Key.SHIFT
        base = key & ~Key.SHIFT

        if base == Key.INSERT and not shift:
            self.insert_mode = not self.insert_mode
        elif base == Key.UNDO and not shift:
            cursor = self.undo_state.undo(doc)
            if cursor is not None:
                self.cursor = cursor
            self.has_preferred_x = False
        elif base == Key.REDO and not shift:
            cursor = self.undo_state.redo(doc)
            if cursor is not None:
                self.cursor = cursor
            self.has_preferred_x = False
        elif base == Key.LEFT:
            self._key_left(doc, bool(shift))
        elif base == Key.RIGHT:
            self._key_right(doc, bool(shift))
        elif base == Key.WORDLEFT:
            self._key_word(doc, bool(shift), _word_left, self._move_to_first)
        elif base == Key.WORDRIGHT:
            self._key_word(doc, bool(shift), _word_right, lambda: self._move_to_last(doc))
        elif base in (Key.DOWN, Key.PGDOWN):
            self._key_down(doc, key)
        elif base in (Key.UP, Key.PGUP):
            self._key_up(doc, key)
        elif base == Key.DELETE:
            if self.has_selection():
                self._delete_selection(doc)
            elif self.cursor < len(doc):
                self._delete(doc, self.cursor, 1)
            self.has_preferred_x = False
        elif base == Key.BACKSPACE:
            if self.has_selection():
                self._delete_selection(doc)
            else:
                self._clamp(doc)
                if self.cursor > 0:
                    self._delete(doc, self.cursor - 1, 1)
                    self.cursor -= 1
            self.has_preferred_x = False
        elif base == Key.TEXTSTART:
            if shift:
                self._prep_selection_at_cursor()
                self.cursor = self.select_end = 0
            else:
                self.cursor = self.select_start = self.select_end = 0
            self.has_preferred_x = False
        elif base == Key.TEXTEND:
            if shift:
                self._prep_selection_at_cursor()
                self.cursor = self.select_end = len(doc)
            else:
                self.cursor = len(doc)
                self.select_start = self.select_end = 0
            self.has_preferred_x = False
        elif base == Key.LINESTART:
            self._clamp(doc)
            if shift:
                self._prep_selection_at_cursor()
                self._line_start(doc)
                self.select_end = self.cursor
            else:
                self._move_to_first()
                self._line_start(doc)
            self.has_preferred_x = False
        elif base == Key.LINEEND:
            self._clamp(doc)
            if shift:
                self._prep_selection_at_cursor()
                self._line_end(doc)
                self.select_end = self.cursor
            else:
                self._move_to_first()
                self._line_end(doc)
            self.has_preferred_x = False

    def _key_left(self, doc: TextDocument, shift: bool) -> None:
        if shift:
            self._clamp(doc)
            self._prep_selection_at_cursor()
            if self.select_end > 0:
                self.select_end -= 1
            self.cursor = self.select_end
        elif self.has_selection():
            self._move_to_first()
        elif self.cursor > 0:
            self.cursor -= 1
        self.has_preferred_x = False

    def _key_right(self, doc: TextDocument, shift: bool) -> None:
        if shift:
            self._prep_selection_at_cursor()
            self.select_end += 1
            self._clamp(doc)
            self.cursor = self.select_end
        else:
            if self.has_selection():
                self._move_to_last(doc)
            else:
                self.cursor += 1
            self._clamp(doc)
        self.has_preferred_x = False

    def _key_word(self, doc, shift, mover, collapse) -> None:
        if shift:
            if not self.has_selection():
                self._prep_selection_at_cursor()
            self.cursor = mover(doc, self.cursor)
            self.select_end = self.cursor
            self._clamp(doc)
        elif self.has_selection():
            collapse()
        else:
            self.cursor = mover(doc, self.cursor)
            self._clamp(doc)

    def _key_down(self, doc: TextDocument, key: int) -> None:
        shift = key & Key.SHIFT
        sel = bool(shift)
        is_page = (key & ~Key.SHIFT) == Key.PGDOWN
        row_count = self.row_count_per_page if is_page else 1

        if not is_page and self.single_line:
            self.key(doc, Key.RIGHT | shift)
            return

        if sel:
            self._prep_selection_at_cursor()
        elif self.has_selection():
            self._move_to_last(doc)

        self._clamp(doc)
        find = find_charpos(doc, self.cursor, self.single_line)

        for _ in range(row_count):
            goal_x = self.preferred_x if self.has_preferred_x else find.x
            start = find.first_char + find.length
            if find.length == 0:
                break
            if doc[find.first_char + find.length - 1] != NEWLINE:
                break
            row = self._seek_in_row(doc, start, goal_x)
            self._clamp(doc)
            self.has_preferred_x = True
            self.preferred_x = goal_x
            if sel:
                self.select_end = self.cursor
            find.first_char = find.first_char + find.length
            find.length = row.num_chars

    def _key_up(self, doc: TextDocument, key: int) -> None:
        shift = key & Key.SHIFT
        sel = bool(shift)
        is_page = (key & ~Key.SHIFT) == Key.PGUP
        row_count = self.row_count_per_page if is_page else 1

        if not is_page and self.single_line:
            self.key(doc, Key.LEFT | shift)
            return

        if sel:
            self._prep_selection_at_cursor()
        elif self.has_selection():
            self._move_to_first()

        self._clamp(doc)
        find = find_charpos(doc, self.cursor, self.single_line)

        for _ in range(row_count):
            goal_x = self.preferred_x if self.has_preferred_x else find.x
            if find.prev_first == find.first_char:
                break
            self._seek_in_row(doc, find.prev_first, goal_x)
            self._clamp(doc)
            self.has_preferred_x = True
            self.preferred_x = goal_x
            if sel:
                self.select_end = self.cursor
            prev_scan = find.prev_first - 1 if find.prev_first > 0 else 0
            while prev_scan > 0 and doc[prev_scan - 1] != NEWLINE:
                prev_scan -= 1
            find.first_char = find.prev_first
            find.prev_first = prev_scan