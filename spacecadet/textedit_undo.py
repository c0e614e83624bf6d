"""Bounded undo/redo history for a text-editing widget.

Undo and redo records share one fixed-size record table: undo records grow
upwards from the bottom, redo records grow downwards from the top. Characters
that must be restored are kept in one shared fixed-size character buffer,
laid out the same way.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, List, Optional

DEFAULT_STATE_COUNT = 99
DEFAULT_CHAR_COUNT = 999

_EMPTY_CHAR = "\0"


class EditableText:
    """A mutable character sequence, optionally limited in length."""

    def __init__(self, text: str = "", max_length: Optional[int] = None) -> None:
        self._chars: List[str] = list(text)
        self.max_length = max_length

    def __len__(self) -> int:
        return len(self._chars)

    def __getitem__(self, index: int) -> str:
        return self._chars[index]

    def __str__(self) -> str:
        return self.text

    @property
    def text(self) -> str:
        """The current contents as a string."""
        return "".join(self._chars)

    def insert(self, where: int, chars: Iterable[str]) -> bool:
        """Insert ``chars`` before position ``where``; False if it would not fit."""
        new = list(chars)
        if self.max_length is not None and len(self._chars) + len(new) > self.max_length:
            return False
        self._chars[where:where] = new
        return True

    def delete(self, where: int, length: int) -> str:
        """Remove ``length`` characters starting at ``where``; return them."""
        removed = self._chars[where:where + length]
        self._chars[where:where + length] = []
        return "".join(removed)


@dataclass
class UndoRecord:
    """One undo or redo step.

    ``insert_length`` characters stored at ``char_storage`` are to be
    inserted at ``where`` after ``delete_length`` characters there are
    removed. ``char_storage`` is -1 when nothing is stored.
    """

    where: int = 0
    insert_length: int = 0
    delete_length: int = 0
    char_storage: int = -1


class UndoState:
    """Undo/redo history with a fixed number of records and stored characters."""

    def __init__(
        self,
        state_count: int = DEFAULT_STATE_COUNT,
        char_count: int = DEFAULT_CHAR_COUNT,
    ) -> None:
        if state_count < 1:
            raise ValueError("state_count must be at least 1")
        if char_count < 1:
            raise ValueError("char_count must be at least 1")
        self.state_count = state_count
        self.char_count = char_count
        self.records: List[UndoRecord] = [UndoRecord() for _ in range(state_count)]
        self.chars: List[str] = [_EMPTY_CHAR] * char_count
        self.undo_point = 0
        self.redo_point = state_count
        self.undo_char_point = 0
        self.redo_char_point = char_count

    def clear(self) -> None:
        """Forget all undo and redo history."""
        self.undo_point = 0
        self.undo_char_point = 0
        self.redo_point = self.state_count
        self.redo_char_point = self.char_count

    # -- internal bookkeeping -------------------------------------------------

    def _flush_redo(self) -> None:
        self.redo_point = self.state_count
        self.redo_char_point = self.char_count

    def _discard_undo(self) -> None:
        """Drop the oldest undo record, compacting records and characters."""
        if self.undo_point <= 0:
            return
        oldest = self.records[0]
        if oldest.char_storage >= 0:
            n = oldest.insert_length
            self.undo_char_point -= n
            kept = self.undo_char_point
            self.chars[0:kept] = self.chars[n:n + kept]
            for rec in self.records[:self.undo_point]:
                if rec.char_storage >= 0:
                    rec.char_storage -= n
        self.undo_point -= 1
        count = self.undo_point
        self.records[0:count] = [replace(rec) for rec in self.records[1:1 + count]]

    def _discard_redo(self) -> None:
        """Drop the oldest redo record, compacting towards the top."""
        k = self.state_count - 1
        if self.redo_point > k:
            return
        oldest = self.records[k]
        if oldest.char_storage >= 0:
            n = oldest.insert_length
            self.redo_char_point += n
            start = self.redo_char_point
            self.chars[start:self.char_count] = self.chars[start - n:self.char_count - n]
            for rec in self.records[self.redo_point:k]:
                if rec.char_storage >= 0:
                    rec.char_storage += n
        rp = self.redo_point
        move = self.state_count - rp - 1
        self.records[rp + 1:rp + 1 + move] = [replace(rec) for rec in self.records[rp:rp + move]]
        self.redo_point += 1

    def _create_record(self, numchars: int) -> Optional[UndoRecord]:
        self._flush_redo()
        if self.undo_point == self.state_count:
            self._discard_undo()
        if numchars > self.char_count:
            self.undo_point = 0
            self.undo_char_point = 0
            return None
        while self.undo_char_point + numchars > self.char_count:
            self._discard_undo()
        rec = self.records[self.undo_point]
        self.undo_point += 1
        return rec

    def _create_undo(self, where: int, insert_length: int, delete_length: int) -> Optional[int]:
        """Push a new undo record; return where its characters go, if any."""
        rec = self._create_record(insert_length)
        if rec is None:
            return None
        rec.where = where
        rec.insert_length = insert_length
        rec.delete_length = delete_length
        if insert_length == 0:
            rec.char_storage = -1
            return None
        rec.char_storage = self.undo_char_point
        self.undo_char_point += insert_length
        return rec.char_storage

    def _save(self, text: EditableText, storage: int, where: int, length: int) -> None:
        self.chars[storage:storage + length] = [text[where + i] for i in range(length)]

    # -- recording ------------------------------------------------------------

    def make_insert(self, where: int, length: int) -> None:
        """Record that ``length`` characters are being inserted at ``where``."""
        self._create_undo(where, 0, length)

    def make_delete(self, text: EditableText, where: int, length: int) -> None:
        """Record a deletion; call before the characters leave ``text``."""
        storage = self._create_undo(where, length, 0)
        if storage is not None:
            self._save(text, storage, where, length)

    def make_replace(self, text: EditableText, where: int, old_length: int, new_length: int) -> None:
        """Record replacing ``old_length`` characters with ``new_length`` new ones."""
        storage = self._create_undo(where, old_length, new_length)
        if storage is not None:
            self._save(text, storage, where, old_length)

    # -- applying -------------------------------------------------------------

    def undo(self, text: EditableText) -> Optional[int]:
        """Undo the latest step on ``text``; return the new cursor, or None."""
        if self.undo_point == 0:
            return None

        u = replace(self.records[self.undo_point - 1])
        r = self.records[self.redo_point - 1]
        r.char_storage = -1
        r.insert_length = u.delete_length
        r.delete_length = u.insert_length
        r.where = u.where

        if u.delete_length:
            if self.undo_char_point + u.delete_length >= self.char_count:
                r.insert_length = 0
            else:
                while self.undo_char_point + u.delete_length > self.redo_char_point:
                    if self.redo_point == self.state_count:
                        return None
                    self._discard_redo()
                r = self.records[self.redo_point - 1]
                r.char_storage = self.redo_char_point - u.delete_length
                self.redo_char_point -= u.delete_length
                self._save(text, r.char_storage, u.where, u.delete_length)
            text.delete(u.where, u.delete_length)

        if u.insert_length:
            stored = self.chars[u.char_storage:u.char_storage + u.insert_length]
            text.insert(u.where, stored)
            self.undo_char_point -= u.insert_length

        self.undo_point -= 1
        self.redo_point -= 1
        return u.where + u.insert_length

    def redo(self, text: EditableText) -> Optional[int]:
        """Redo the latest undone step on ``text``; return the new cursor, or None."""
        if self.redo_point == self.state_count:
            return None

        u = self.records[self.undo_point]
        r = replace(self.records[self.redo_point])
        u.delete_length = r.insert_length
        u.insert_length = r.delete_length
        u.where = r.where
        u.char_storage = -1

        if r.delete_length:
            if self.undo_char_point + u.insert_length > self.redo_char_point:
                u.insert_length = 0
                u.delete_length = 0
            else:
                u.char_storage = self.undo_char_point
                self.undo_char_point += u.insert_length
                self._save(text, u.char_storage, u.where, u.insert_length)
            text.delete(r.where, r.delete_length)

        if r.insert_length:
            stored = self.chars[r.char_storage:r.char_storage + r.insert_length]
            text.insert(r.where, stored)
            self.redo_char_point += r.insert_length

        self.undo_point += 1
        self.redo_point += 1
        return r.where + r.insert_length