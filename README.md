# engbase

Foundation pieces for small game and graphics engines, in plain Python with no
third-party dependencies:

- `engbase.mem` – a linear `Arena` allocator that hands out aligned offsets into a
  byte buffer, with `ArenaTemp` save points (usable as context managers), a
  fixed-slot `Pool` with a LIFO free list, and `align_forward` / `is_power_of_two`.
  Exhaustion raises `OutOfMemoryError`.
- `engbase.tctx` – a `ThreadContext` that lends out fixed-size `Scratch` arenas
  (`scratch_get`, `scratch_reset`, `scratch_return`, or the `scratch()` context
  manager), plus `current_context()` and `set_current_context()` for the calling thread.
- `engbase.strutil` – byte-string search and replacement (`find_first`, `find_last`,
  `substr_count`, `replace_all`), FNV-1a hashes (`str_hash`, `str_hash_64`),
  single-code-point UTF-8 and UTF-16 encoders and decoders, whole-string
  transcoding (`str16_from_str8`, `str8_from_str16`) and `StringList`.
- `engbase.ds` – `Stack`, an open-addressing `HashTable` with linear probing and
  tombstones, and a fixed-bucket chained `StableTable`.
- `engbase.utils` – packing a `DateTime` into a dense integer and back
  (`dense_time_from_datetime`, `datetime_from_dense_time`), filepath helpers
  (`fix_filepath`, `full_filepath`, `filename_from_filepath`,
  `directory_from_filepath`) and a shared per-frame arena (`frame_arena`,
  `reset_frame_arena`).
- `engbase.vmath` – immutable `Vec2`, `Vec3`, `Vec4`, `Mat3`, `Mat4`, `Quat` and
  `Rect`, with `lerp`, `radians`, `degrees`, `epsilon_equals`, `animate_exp`,
  `color_code_to_vec4` and colour constants.
- `engbase.tetris` – the game model for a `Tetris` board: `move_left`,
  `move_right`, `move_down`, `rotate`, gravity through `tick(dt)` with line
  clearing, and `piece_cells()` for the falling piece.

## Install

```
pip install .
pip install ".[test]"   # with the test tools
```

## Examples

```python
from engbase.mem import Arena

arena = Arena()
with arena.begin_temp():
    offset = arena.alloc(100)      # sizes are rounded up to 8-byte alignment
# the allocations are released when the block ends
```

```python
from engbase.strutil import replace_all, find_first

replace_all(b"a\\\\b", b"\\\\", b"\\")   # b"a\\b"
find_first(b"hello", b"xyz", 0)          # 5: no match gives the length
```

```python
from engbase.vmath import Mat4, Vec3

m = Mat4.translate(Vec3(1.0, 2.0, 3.0)) @ Mat4.identity()
m[3, 0]                                  # element at (x=3, y=0): 1.0
```

```python
import random
from engbase.tetris import Tetris

game = Tetris(12, 18, random.Random(1))
game.move_left()
game.rotate()
cleared_rows = game.tick(2.0)   # the piece falls or locks once the interval is reached
```

## What it does not do

There is no drawing, windowing or input handling. `Tetris` holds the board and
applies the rules; reading keys, timing frames and rendering the field are left
to the caller.

## Tests

```
pytest
```