import pytest

from spacecadet.textedit_undo import EditableText, UndoRecord, UndoState


def do_insert(state, text, where, chars):
    assert text.insert(where, chars)
    state.make_insert(where, len(chars))


def do_delete(state, text, where, length):
    state.make_delete(text, where, length)
    text.delete(where, length)


def do_replace(state, text, where, old_length, chars):
    state.make_replace(text, where, old_length, len(chars))
    text.delete(where, old_length)
    text.insert(where, chars)


def test_editable_text_basic_operations():
    text = EditableText("hello")
    assert len(text) == 5
    assert text[1] == "e"
    assert text.insert(5, " world")
    text.delete(0, 1)
    assert text.text == "ello world"
    assert str(text) == "ello world"


def test_editable_text_respects_max_length():
    text = EditableText("ab", max_length=3)
    assert text.insert(2, "c")
    assert not text.insert(0, "d")
    assert text.text == "abc"


def test_undo_with_empty_history_returns_none():
    state = UndoState()
    text = EditableText("abc")
    assert state.undo(text) is None
    assert state.redo(text) is None
    assert text.text == "abc"


def test_undo_and_redo_insert():
    state = UndoState()
    text = EditableText()
    do_insert(state, text, 0, "abc")
    assert state.undo(text) == 0
    assert text.text == ""
    assert state.redo(text) == 3
    assert text.text == "abc"


def test_undo_and_redo_delete():
    state = UndoState()
    text = EditableText("abc")
    do_delete(state, text, 1, 1)
    assert text.text == "ac"
    assert state.undo(text) == 2
    assert text.text == "abc"
    assert state.redo(text) == 1
    assert text.text == "ac"


def test_undo_replace_restores_original():
    state = UndoState()
    text = EditableText("abc")
    do_replace(state, text, 1, 1, "X")
    assert text.text == "aXc"
    state.undo(text)
    assert text.text == "abc"
    state.redo(text)
    assert text.text == "aXc"


def test_full_round_trip_of_many_steps():
    state = UndoState()
    text = EditableText("start")
    snapshots = [text.text]
    do_insert(state, text, 5, " one")
    snapshots.append(text.text)
    do_delete(state, text, 0, 2)
    snapshots.append(text.text)
    do_replace(state, text, 1, 3, "QQ")
    snapshots.append(text.text)
    do_insert(state, text, 0, ">>")
    snapshots.append(text.text)

    for expected in reversed(snapshots[:-1]):
        assert state.undo(text) is not None
        assert text.text == expected
    assert state.undo(text) is None

    for expected in snapshots[1:]:
        assert state.redo(text) is not None
        assert text.text == expected
    assert state.redo(text) is None


def test_new_record_flushes_redo():
    state = UndoState()
    text = EditableText()
    do_insert(state, text, 0, "a")
    state.undo(text)
    do_insert(state, text, 0, "b")
    assert state.redo(text) is None
    assert text.text == "b"


def test_record_capacity_discards_oldest():
    state = UndoState(state_count=2, char_count=10)
    text = EditableText()
    do_insert(state, text, 0, "a")
    do_insert(state, text, 1, "b")
    do_insert(state, text, 2, "c")
    assert state.undo(text) is not None
    assert state.undo(text) is not None
    assert state.undo(text) is None
    assert text.text == "a"


def test_oversized_delete_clears_history():
    state = UndoState(state_count=5, char_count=4)
    text = EditableText("abcdefgh")
    do_insert(state, text, 8, "z")
    do_delete(state, text, 0, 5)
    assert state.undo_point == 0
    assert state.undo(text) is None
    assert text.text == "fghz"


def test_character_pressure_discards_oldest_delete():
    state = UndoState(state_count=5, char_count=4)
    text = EditableText("abcdef")
    do_delete(state, text, 0, 3)
    do_delete(state, text, 0, 2)
    assert text.text == "f"
    assert state.undo(text) == 2
    assert text.text == "def"
    assert state.undo(text) is None
    assert text.text == "def"


def test_clear_forgets_history():
    state = UndoState()
    text = EditableText()
    do_insert(state, text, 0, "abc")
    state.clear()
    assert state.undo(text) is None
    assert state.undo_point == 0
    assert state.redo_point == state.state_count
    assert state.redo_char_point == state.char_count


def test_default_capacities_match_documented_values():
    state = UndoState()
    assert state.state_count == 99
    assert state.char_count == 999


def test_insert_record_stores_no_characters():
    state = UndoState()
    state.make_insert(4, 2)
    assert state.records[0] == UndoRecord(where=4, insert_length=0, delete_length=2, char_storage=-1)
    assert state.undo_char_point == 0


def test_delete_record_stores_characters():
    state = UndoState()
    text = EditableText("xyz")
    state.make_delete(text, 1, 2)
    rec = state.records[0]
    assert rec.insert_length == 2
    assert state.chars[rec.char_storage:rec.char_storage + 2] == ["y", "z"]


@pytest.mark.parametrize("state_count,char_count", [(0, 10), (10, 0), (-1, -1)])
def test_invalid_capacities_raise(state_count, char_count):
    with pytest.raises(ValueError):
        UndoState(state_count, char_count)