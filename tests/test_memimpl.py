import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from softbuiltins.memimpl import (
    Memory,
    MemoryFault,
    c_string_length,
    compare_bytes,
    copy_backward,
    copy_forward,
    rep_param,
    set_bytes,
    word_copy_threshold,
)

SIZE = 128
word_sizes = st.sampled_from([2, 4, 8])
payloads = st.binary(min_size=SIZE, max_size=SIZE)


def _memory(payload, word_size):
    memory = Memory(len(payload), word_size)
    memory.write(0, payload)
    return memory


def test_memory_read_write_round_trip():
    memory = Memory(16)
    memory.write(3, b"abc")
    assert memory.read(3, 3) == b"abc"
    assert memory.read(0, 3) == bytes(3)
    assert len(memory) == 16


def test_memory_rejects_bad_arguments():
    with pytest.raises(ValueError):
        Memory(-1)
    with pytest.raises(ValueError):
        Memory(8, 3)
    memory = Memory(8)
    with pytest.raises(MemoryFault):
        memory.read(6, 4)
    with pytest.raises(IndexError):
        memory.write(-1, b"x")
    with pytest.raises(ValueError):
        memory.read(0, -1)


def test_word_copy_threshold_values():
    assert word_copy_threshold(2) == 16
    assert word_copy_threshold(4) == 16
    assert word_copy_threshold(8) == 16
    assert word_copy_threshold(16) >= 2 * 16


@settings(max_examples=200)
@given(
    payload=payloads,
    word_size=word_sizes,
    src=st.integers(0, 16),
    dest=st.integers(64, 80),
    n=st.integers(0, 48),
)
def test_copy_forward_disjoint_matches_slice(payload, word_size, src, dest, n):
    memory = _memory(payload, word_size)
    copy_forward(memory, dest, src, n)
    expected = bytearray(payload)
    expected[dest : dest + n] = payload[src : src + n]
    assert memory.read(0, SIZE) == bytes(expected)


@settings(max_examples=200)
@given(
    payload=payloads,
    word_size=word_sizes,
    dest=st.integers(0, 20),
    delta=st.integers(1, 20),
    n=st.integers(0, 60),
)
def test_copy_forward_overlapping_lower_dest(payload, word_size, dest, delta, n):
    src = dest + delta
    memory = _memory(payload, word_size)
    copy_forward(memory, dest, src, n)
    expected = bytearray(payload)
    expected[dest : dest + n] = payload[src : src + n]
    assert memory.read(0, SIZE) == bytes(expected)


@settings(max_examples=200)
@given(
    payload=payloads,
    word_size=word_sizes,
    src=st.integers(0, 20),
    delta=st.integers(0, 20),
    n=st.integers(0, 60),
)
def test_copy_backward_overlapping_higher_dest(payload, word_size, src, delta, n):
    dest = src + delta
    memory = _memory(payload, word_size)
    copy_backward(memory, dest, src, n)
    expected = bytearray(payload)
    expected[dest : dest + n] = payload[src : src + n]
    assert memory.read(0, SIZE) == bytes(expected)


def test_copy_forward_short_overlap_smears_first_byte():
    memory = Memory(32)
    memory.write(0, b"\x05")
    copy_forward(memory, 1, 0, 10)
    assert memory.read(0, 11) == b"\x05" * 11
    assert memory.read(11, 21) == bytes(21)


def test_copy_rejects_out_of_range_and_negative():
    memory = Memory(16)
    with pytest.raises(MemoryFault):
        copy_forward(memory, 10, 0, 8)
    with pytest.raises(MemoryFault):
        copy_backward(memory, 0, 10, 8)
    with pytest.raises(ValueError):
        copy_forward(memory, 0, 0, -1)


@settings(max_examples=200)
@given(
    payload=payloads,
    word_size=word_sizes,
    start=st.integers(0, 40),
    n=st.integers(0, 80),
    c=st.integers(0, 255),
)
def test_set_bytes_fills_only_region(payload, word_size, start, n, c):
    memory = _memory(payload, word_size)
    set_bytes(memory, start, c, n)
    assert memory.read(start, n) == bytes([c]) * n
    assert memory.read(0, start) == payload[:start]
    assert memory.read(start + n, SIZE - start - n) == payload[start + n :]


def test_set_bytes_rejects_non_byte_value():
    memory = Memory(8)
    with pytest.raises(ValueError):
        set_bytes(memory, 0, 256, 4)
    with pytest.raises(MemoryFault):
        set_bytes(memory, 4, 1, 8)


@given(a=st.binary(min_size=0, max_size=40), b=st.binary(min_size=0, max_size=40))
def test_compare_bytes_sign_matches_lexicographic(a, b):
    n = min(len(a), len(b))
    memory = Memory(80)
    memory.write(0, a[:n])
    memory.write(40, b[:n])
    result = compare_bytes(memory, 0, 40, n)
    left, right = a[:n], b[:n]
    assert (result > 0) == (left > right)
    assert (result < 0) == (left < right)
    assert (result == 0) == (left == right)


def test_compare_bytes_returns_byte_difference():
    memory = Memory(4)
    memory.write(0, b"\x00\x01")
    assert compare_bytes(memory, 0, 1, 1) == -1
    assert compare_bytes(memory, 1, 0, 1) == 1
    assert compare_bytes(memory, 0, 0, 2) == 0


def test_c_string_length_of_literal():
    memory = Memory(16)
    memory.write(2, b"hello\0")
    assert c_string_length(memory, 2) == len(b"hello")
    assert c_string_length(memory, 7) == 0


@given(text=st.binary(min_size=0, max_size=60).map(lambda b: b.replace(b"\0", b"x")),
       start=st.integers(0, 30))
def test_c_string_length_property(text, start):
    memory = Memory(128)
    memory.write(start, text + b"\0")
    assert c_string_length(memory, start) == len(text)


def test_c_string_length_without_terminator():
    memory = Memory(4)
    memory.write(0, b"abcd")
    with pytest.raises(MemoryFault):
        c_string_length(memory, 0)


@given(dest=st.integers(0, 1 << 20), count=st.integers(0, 1000))
def test_rep_param_invariants(dest, count):
    pre, qwords, tail = rep_param(dest, count)
    assert pre + 8 * qwords + tail == count
    assert 0 <= pre < 8 and 0 <= tail < 8
    assert pre == count or (dest + pre) % 8 == 0
    if dest % 8 == 0:
        assert pre == 0


def test_rep_param_named_fields():
    params = rep_param(0, 0)
    assert params == (0, 0, 0)
    assert rep_param(1, 3).pre_byte_count == 3
    with pytest.raises(ValueError):
        rep_param(0, -1)