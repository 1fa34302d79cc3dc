"""Integer multiplication built only from doubling, halving and addition.

This is the shift-and-add method: the first operand is halved and the
second doubled on each step, and the second is added to the result
whenever the first is odd. Results wrap at the operand width.
"""

from __future__ import annotations


def _shift_add_multiply(a: int, b: int, bits: int) -> int:
    mask = (1 << bits) - 1
    for name, value in (("a", a), ("b", b)):
        if not 0 <= value <= mask:
            raise ValueError(
                f"operand {name} must be an unsigned {bits}-bit integer, got {value}"
            )
    result = 0
    while a:
        if a & 1:
            result = (result + b) & mask
        a >>= 1
        b = (b << 1) & mask
    return result


def mulsi3(a: int, b: int) -> int:
    """Multiply two unsigned 32-bit integers, wrapping modulo 2**32."""
    return _shift_add_multiply(a, b, 32)


def muldi3(a: int, b: int) -> int:
    """Multiply two unsigned 64-bit integers, wrapping modulo 2**64."""
    return _shift_add_multiply(a, b, 64)