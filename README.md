# softbuiltins

Pure-Python models of small routines that a language runtime relies on when
the hardware or C library does not provide them:

- **Memory routines** over an emulated, byte-addressed, little-endian
  `Memory`: `memcpy`, `memmove`, `memset`, `memcmp`, `bcmp`, `strlen`, and
  element-wise "unordered atomic" copy, move and fill variants. Word-wise
  copying honours alignment and word size as a real implementation does, so
  the effect of misaligned and overlapping operations can be studied and
  tested.
- **Software multiplication** by shift-and-add (`mulsi3`, `muldi3`), wrapping
  at 32 and 64 bits.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Memory routines

```python
from softbuiltins.memimpl import Memory
from softbuiltins.memory import memcpy, memmove, memset, memcmp, strlen

mem = Memory(32, 8)                 # 32 bytes, 8-byte words
mem.write(0, bytes(range(12)))

memmove(mem, 3, 6, 5)               # overlapping move, returns 3
assert mem.read(0, 12) == bytes([0, 1, 2, 6, 7, 8, 9, 10, 8, 9, 10, 11])

memset(mem, 0, 0x2009, 4)           # only the low byte of c is used
assert mem.read(0, 4) == b"\x09" * 4

assert memcmp(mem, 0, 0, 12) == 0

mem.write(16, b"hello\x00")
assert strlen(mem, 16) == 5
```

`Memory(size, word_size)` starts zero-filled; `word_size` (default 8) must be
a power of two, and address 0 is aligned to it. Any access outside the memory
raises `MemoryFault`, a subclass of `IndexError`; `strlen` raises it as well
when no terminating zero byte follows the start address. Negative byte counts
raise `ValueError`.

`memcpy`, `memmove` and `memset` return the destination address. `memcmp` and
`bcmp` return the difference of the first pair of unequal bytes, or 0.

The element-wise routines take a byte count and an element size of 1, 2, 4,
8 or 16 bytes; the byte count must be a multiple of the element size:

```python
from softbuiltins.memory import (
    memcpy_element_unordered_atomic,
    memmove_element_unordered_atomic,
    memset_element_unordered_atomic,
)

memset_element_unordered_atomic(mem, 0, 0xCC, 8, 4)
memmove_element_unordered_atomic(mem, 4, 0, 8, 2)
```

Unlike `memset`, `memset_element_unordered_atomic` requires `c` to be a
single byte value (0–255).

The lower-level helpers in `softbuiltins.memimpl` are available on their own
too: `copy_forward`, `copy_backward`, `set_bytes`, `compare_bytes`,
`c_string_length`, `word_copy_threshold(word_size)` (the byte count from which
word-wise transfers are used, `max(2 * word_size, 16)`), and
`rep_param(dest, count)`, which splits a count into a `RepParams` tuple of
`pre_byte_count`, `qword_count` and `byte_count` for an 8-byte aligned
transfer.

## Software multiplication

```python
from softbuiltins.softmul import mulsi3, muldi3

assert mulsi3(6, 7) == 42
assert mulsi3(0xFFFFFFFF, 2) == 0xFFFFFFFE    # wraps at 32 bits
```

Operands outside the unsigned 32-bit (`mulsi3`) or 64-bit (`muldi3`) range
raise `ValueError`.

## What this package does not do

It is a library only: it has no command-line tool. It does not generate test
inputs; tests against these routines have to bring their own values.