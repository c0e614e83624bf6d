# spacecadet

Small, self-contained pieces of a pinball table engine, in plain Python
with no third-party dependencies.

## Modules

- `spacecadet.rectpack`: skyline rectangle packing for texture atlases.
  `RectPacker(width, height, num_nodes)` packs `Rect` objects in place with
  `pack(rects)`, returning True when every rectangle fit. Rectangles that do
  not fit get `was_packed` False and both coordinates set to 65535; empty
  rectangles are placed at the origin. `set_heuristic` chooses between
  `Heuristic.SKYLINE_BL_SORT_HEIGHT` (bottom-left, the default) and
  `Heuristic.SKYLINE_BF_SORT_HEIGHT` (best fit). `set_allow_out_of_mem(True)`
  packs exact widths at the risk of running out of skyline nodes; by default
  widths are rounded up so that `num_nodes` always suffices. `pack_rects`
  packs into a fresh target in one call.
- `spacecadet.textedit_undo`: `EditableText`, a mutable character sequence
  with an optional `max_length` (an `insert` that would exceed it returns
  False), and `UndoState`, a bounded undo/redo history (99 records and 999
  stored characters by default) made of `UndoRecord` entries.
- `spacecadet.textedit_layout`: `TextDocument`, an abstract `EditableText`
  that lays itself out row by row (`layout_row`, `char_width`);
  `MonospaceDocument`, a fixed-width implementation with one row per line;
  `locate_coord`, which maps a display point to a character position; and
  `find_charpos`, which returns a `FindState` describing where a character
  sits and where the row above it starts.
- `spacecadet.textedit`: `TextEditState`, which turns clicks, drags, cut,
  paste and key presses into cursor moves, selections, insertions and
  deletions with undo. Keys are `Key` members, combined with `Key.SHIFT`
  using `|` to extend the selection; a one-character string types that
  character. `Key.INSERT` toggles overwrite mode. In single-line mode, up
  and down behave as left and right and newlines cannot be typed.
- `spacecadet.zdrv`: `IndexedBitmap` (8-bit palette indices, 0 is
  transparent) and `ZMap` (16-bit depths, smaller is nearer; the default
  stride is the width rounded up to a multiple of four). `paint` copies
  pixels and depths wherever the source is at least as near as the
  destination; `paint_flat` draws non-transparent pixels at one depth
  without changing the depth map. `ZMap.fill`, `ZMap.flip_rows` and
  `ZMap.preview` (grey-scale RGBA pixels) are also provided.
- `spacecadet.timers`: `TimerQueue(capacity, clock)`, one-shot timers
  ordered by due time against a millisecond clock. `set` returns a timer id,
  or 0 when the queue is full; `kill` cancels one; `check` runs due timers,
  at most two per call plus any that are 100 ms or more overdue, and returns
  how many fired.
- `spacecadet.score`: `format_score`, which groups digits with commas and
  returns an empty string for -999.
- `spacecadet.pacing`: `WelfordState`, a running mean and sample standard
  deviation, seeded with one sample of 0.005.

## Installation

```
pip install .
```

## Examples

Packing rectangles into a 64×64 atlas:

```python
from spacecadet.rectpack import Rect, pack_rects

rects = [Rect(id=0, w=32, h=16), Rect(id=1, w=16, h=16)]
all_packed = pack_rects(64, 64, rects)
for rect in rects:
    print(rect.id, rect.x, rect.y, rect.was_packed)
```

Formatting a score:

```python
from spacecadet.score import format_score

format_score(1234567)   # "1,234,567"
```

Scheduling timers against a game clock:

```python
from spacecadet.timers import TimerQueue

now = 0
queue = TimerQueue(capacity=10, clock=lambda: now)
timer_id = queue.set(0.5, lambda tid, caller: print("fired", tid, caller), "flipper")
now = 500
queue.check()   # prints "fired 1 flipper" and returns 1
```

Editing text with undo:

```python
from spacecadet.textedit import Key, TextEditState
from spacecadet.textedit_layout import MonospaceDocument

doc = MonospaceDocument("hello", char_width=8.0, line_height=16.0)
state = TextEditState(single_line=True)
state.key(doc, Key.TEXTEND)
state.paste(doc, " world")
state.key(doc, Key.UNDO)
print(doc.text)   # "hello"
```

## What this package does not do

It is a library of parts, not a playable game. It opens no window, draws
nothing to the screen, plays no sound or music, reads no table data files
and has no game loop or command to run. Bitmaps and depth maps live only in
memory; turning them into images on screen is left to the caller.

## Running the tests

```
pip install .[test]
pytest
```