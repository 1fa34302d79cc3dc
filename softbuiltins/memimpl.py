"""Word-optimised byte copy, fill, compare and scan over an emulated memory.

Addresses are plain integers into a :class:`Memory`, whose address 0 is
aligned to every word size. Multi-byte words are little-endian.
"""

from __future__ import annotations

from typing import NamedTuple


class MemoryFault(IndexError):
    """Raised when an access falls outside the bounds of a :class:`Memory`."""


def _is_power_of_two(value: int) -> bool:
    return value > 0 and value & (value - 1) == 0


class Memory:
    """A flat, byte-addressable, little-endian memory starting at address 0."""

    def __init__(self, size: int, word_size: int = 8) -> None:
        if size < 0:
            raise ValueError(f"memory size must be non-negative, got {size}")
        if not _is_power_of_two(word_size):
            raise ValueError(f"word size must be a power of two, got {word_size}")
        self.word_size = word_size
        self._buffer = bytearray(size)

    def __len__(self) -> int:
        return len(self._buffer)

    def _check(self, address: int, length: int) -> None:
        if length < 0:
            raise ValueError(f"length must be non-negative, got {length}")
        if address < 0 or address + length > len(self._buffer):
            raise MemoryFault(
                f"access of {length} bytes at {address:#x} is outside "
                f"a memory of {len(self._buffer)} bytes"
            )

    def read(self, address: int, length: int) -> bytes:
        """Return ``length`` bytes starting at ``address``."""
        self._check(address, length)
        return bytes(self._buffer[address : address + length])

    def write(self, address: int, data) -> None:
        """Store ``data`` starting at ``address``."""
        payload = bytes(data)
        self._check(address, len(payload))
        self._buffer[address : address + len(payload)] = payload

    @property
    def _word_bits(self) -> int:
        return self.word_size * 8

    @property
    def _word_mask(self) -> int:
        return (1 << self._word_bits) - 1

    def _load_word(self, address: int) -> int:
        end = address + self.word_size
        return int.from_bytes(self._buffer[address:end], "little")

    def _load_word_lenient(self, address: int) -> int:
        # Bytes past the end of memory read as zero; they are never used.
        chunk = bytes(self._buffer[max(address, 0) : address + self.word_size])
        return int.from_bytes(chunk.ljust(self.word_size, b"\0"), "little")

    def _store_word(self, address: int, value: int) -> None:
        end = address + self.word_size
        self._buffer[address:end] = (value & self._word_mask).to_bytes(
            self.word_size, "little"
        )


class RepParams(NamedTuple):
    """Byte counts for an aligned ``rep`` style transfer."""

    pre_byte_count: int
    qword_count: int
    byte_count: int


def word_copy_threshold(word_size: int) -> int:
    """Return the byte count from which word-wise transfers are used."""
    return max(2 * word_size, 16)


def _require_count(n: int) -> None:
    if n < 0:
        raise ValueError(f"byte count must be non-negative, got {n}")


def _copy_forward_bytes(memory: Memory, dest: int, src: int, n: int) -> None:
    buf = memory._buffer
    for offset in range(n):
        buf[dest + offset] = buf[src + offset]


def _copy_forward_aligned_words(memory: Memory, dest: int, src: int, n: int) -> None:
    for offset in range(0, n, memory.word_size):
        memory._store_word(dest + offset, memory._load_word(src + offset))


def _copy_forward_misaligned_words(memory: Memory, dest: int, src: int, n: int) -> None:
    word_size = memory.word_size
    shift = (src & (word_size - 1)) * 8
    src_aligned = src & ~(word_size - 1)
    prev_word = memory._load_word_lenient(src_aligned)
    for offset in range(0, n, word_size):
        src_aligned += word_size
        cur_word = memory._load_word_lenient(src_aligned)
        memory._store_word(
            dest + offset,
            prev_word >> shift | cur_word << (memory._word_bits - shift),
        )
        prev_word = cur_word


def copy_forward(memory: Memory, dest: int, src: int, n: int) -> None:
    """Copy ``n`` bytes from ``src`` to ``dest``, lowest address first."""
    _require_count(n)
    memory._check(dest, n)
    memory._check(src, n)
    mask = memory.word_size - 1
    if n >= word_copy_threshold(memory.word_size):
        dest_misalignment = -dest & mask
        _copy_forward_bytes(memory, dest, src, dest_misalignment)
        dest += dest_misalignment
        src += dest_misalignment
        n -= dest_misalignment

        n_words = n & ~mask
        if src & mask == 0:
            _copy_forward_aligned_words(memory, dest, src, n_words)
        else:
            _copy_forward_misaligned_words(memory, dest, src, n_words)
        dest += n_words
        src += n_words
        n -= n_words
    _copy_forward_bytes(memory, dest, src, n)


# The backward helpers take end addresses (one past the last byte).
def _copy_backward_bytes(memory: Memory, dest: int, src: int, n: int) -> None:
    buf = memory._buffer
    for offset in range(1, n + 1):
        buf[dest - offset] = buf[src - offset]


def _copy_backward_aligned_words(memory: Memory, dest: int, src: int, n: int) -> None:
    word_size = memory.word_size
    for offset in range(word_size, n + 1, word_size):
        memory._store_word(dest - offset, memory._load_word(src - offset))


def _copy_backward_misaligned_words(memory: Memory, dest: int, src: int, n: int) -> None:
    word_size = memory.word_size
    shift = (src & (word_size - 1)) * 8
    src_aligned = src & ~(word_size - 1)
    prev_word = memory._load_word_lenient(src_aligned)
    for offset in range(word_size, n + 1, word_size):
        src_aligned -= word_size
        cur_word = memory._load_word_lenient(src_aligned)
        memory._store_word(
            dest - offset,
            prev_word << (memory._word_bits - shift) | cur_word >> shift,
        )
        prev_word = cur_word


def copy_backward(memory: Memory, dest: int, src: int, n: int) -> None:
    """Copy ``n`` bytes from ``src`` to ``dest``, highest address first."""
    _require_count(n)
    memory._check(dest, n)
    memory._check(src, n)
    mask = memory.word_size - 1
    dest += n
    src += n
    if n >= word_copy_threshold(memory.word_size):
        dest_misalignment = dest & mask
        _copy_backward_bytes(memory, dest, src, dest_misalignment)
        dest -= dest_misalignment
        src -= dest_misalignment
        n -= dest_misalignment

        n_words = n & ~mask
        if src & mask == 0:
            _copy_backward_aligned_words(memory, dest, src, n_words)
        else:
            _copy_backward_misaligned_words(memory, dest, src, n_words)
        dest -= n_words
        src -= n_words
        n -= n_words
    _copy_backward_bytes(memory, dest, src, n)


def set_bytes(memory: Memory, s: int, c: int, n: int) -> None:
    """Fill ``n`` bytes starting at ``s`` with the byte value ``c``."""
    _require_count(n)
    if not 0 <= c <= 0xFF:
        raise ValueError(f"fill value must be a byte, got {c}")
    memory._check(s, n)
    mask = memory.word_size - 1
    buf = memory._buffer
    if n >= word_copy_threshold(memory.word_size):
        misalignment = -s & mask
        buf[s : s + misalignment] = bytes([c]) * misalignment
        s += misalignment
        n -= misalignment

        n_words = n & ~mask
        broadcast = int.from_bytes(bytes([c]) * memory.word_size, "little")
        for offset in range(0, n_words, memory.word_size):
            memory._store_word(s + offset, broadcast)
        s += n_words
        n -= n_words
    buf[s : s + n] = bytes([c]) * n


def compare_bytes(memory: Memory, s1: int, s2: int, n: int) -> int:
    """Return the difference of the first unequal bytes, or 0 if all match."""
    _require_count(n)
    for a, b in zip(memory.read(s1, n), memory.read(s2, n)):
        if a != b:
            return a - b
    return 0


def c_string_length(memory: Memory, s: int) -> int:
    """Return the number of bytes before the first zero byte at ``s``."""
    memory._check(s, 0)
    end = memory._buffer.find(0, s)
    if end < 0:
        raise MemoryFault(f"no terminating zero byte after {s:#x}")
    return end - s


def rep_param(dest: int, count: int) -> RepParams:
    """Split ``count`` into leading bytes, 8-byte words and trailing bytes."""
    _require_count(count)
    pre_byte_count = min((8 - (dest & 0b111)) & 0b111, count)
    count -= pre_byte_count
    return RepParams(pre_byte_count, count >> 3, count & 0b111)