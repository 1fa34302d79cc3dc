"""C-style memory routines over an emulated :class:`~softbuiltins.memimpl.Memory`.

Every routine takes the memory it works on as its first argument. Addresses
are integers into that memory. The routines that return a pointer in C return
the destination address here.
"""

from __future__ import annotations

from softbuiltins.memimpl import (
    Memory,
    c_string_length,
    compare_bytes,
    copy_backward,
    copy_forward,
    set_bytes,
)

_ELEMENT_SIZES = (1, 2, 4, 8, 16)


def memcpy(memory: Memory, dest: int, src: int, n: int) -> int:
    """Copy ``n`` bytes from ``src`` to ``dest`` and return ``dest``."""
    copy_forward(memory, dest, src, n)
    return dest


def memmove(memory: Memory, dest: int, src: int, n: int) -> int:
    """Copy ``n`` bytes between possibly overlapping regions; return ``dest``."""
    # Forward copying is safe when dest is far enough ahead of src or
    # lies before it; otherwise copy from the end.
    if dest < src or dest - src >= n:
        copy_forward(memory, dest, src, n)
    else:
        copy_backward(memory, dest, src, n)
    return dest


def memset(memory: Memory, s: int, c: int, n: int) -> int:
    """Fill ``n`` bytes at ``s`` with the low byte of ``c``; return ``s``."""
    set_bytes(memory, s, c & 0xFF, n)
    return s


def memcmp(memory: Memory, s1: int, s2: int, n: int) -> int:
    """Compare ``n`` bytes; negative, zero or positive like C ``memcmp``."""
    return compare_bytes(memory, s1, s2, n)


def bcmp(memory: Memory, s1: int, s2: int, n: int) -> int:
    """Return zero if the ``n`` bytes at ``s1`` and ``s2`` are equal."""
    return memcmp(memory, s1, s2, n)


def strlen(memory: Memory, s: int) -> int:
    """Return the length of the zero-terminated string at ``s``."""
    return c_string_length(memory, s)


def _element_count(nbytes: int, element_size: int) -> int:
    if element_size not in _ELEMENT_SIZES:
        raise ValueError(
            f"element size must be one of {_ELEMENT_SIZES}, got {element_size}"
        )
    if nbytes < 0:
        raise ValueError(f"byte count must be non-negative, got {nbytes}")
    count, remainder = divmod(nbytes, element_size)
    if remainder:
        raise ValueError(
            f"byte count {nbytes} is not a multiple of element size {element_size}"
        )
    return count


def _copy_element(memory: Memory, dest: int, src: int, index: int, size: int) -> None:
    offset = index * size
    memory.write(dest + offset, memory.read(src + offset, size))


def memcpy_element_unordered_atomic(
    memory: Memory, dest: int, src: int, nbytes: int, element_size: int
) -> None:
    """Copy ``nbytes`` as whole elements of ``element_size`` bytes, first to last."""
    count = _element_count(nbytes, element_size)
    memory._check(src, nbytes)
    memory._check(dest, nbytes)
    for index in range(count):
        _copy_element(memory, dest, src, index, element_size)


def memmove_element_unordered_atomic(
    memory: Memory, dest: int, src: int, nbytes: int, element_size: int
) -> None:
    """Move ``nbytes`` as whole elements, choosing a direction safe for overlap."""
    count = _element_count(nbytes, element_size)
    memory._check(src, nbytes)
    memory._check(dest, nbytes)
    indices = reversed(range(count)) if src < dest else range(count)
    for index in indices:
        _copy_element(memory, dest, src, index, element_size)


def memset_element_unordered_atomic(
    memory: Memory, s: int, c: int, nbytes: int, element_size: int
) -> None:
    """Fill ``nbytes`` at ``s`` with elements made of the repeated byte ``c``."""
    count = _element_count(nbytes, element_size)
    if not 0 <= c <= 0xFF:
        raise ValueError(f"fill value must be a byte, got {c}")
    memory._check(s, nbytes)
    element = bytes([c]) * element_size
    for index in range(count):
        memory.write(s + index * element_size, element)