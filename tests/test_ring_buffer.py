# tests/test_ring_buffer.py
import pytest

from logring.core.buffer import InvalidCapacity, StringRingBuffer, from_iterable


def drain(buf: StringRingBuffer, take) -> str:
    s = ""
    while not buf.empty():
        s += take()
    return s


@pytest.mark.parametrize("cap", [0, 1, 2, 5, 17])
def test_new_buffer_is_empty(cap):
    srb = StringRingBuffer(cap)
    assert srb.empty()
    assert srb.full() is (cap == 0)
    assert len(srb) == 0 and srb.length() == 0
    assert srb.capacity == cap


@pytest.mark.parametrize("n", [0, 1, 3, 4])
def test_length_grows_until_full(n):
    srb = StringRingBuffer(4).push(*[str(i) for i in range(n)])
    assert len(srb) == n
    assert srb.full() is (n == 4)


def test_info():
    srb = StringRingBuffer(5)
    srb.push("1", "2", "3", "4", "5")
    assert len(srb) == 5
    assert srb.full()
    assert repr(srb) == "StringRingBuffer{start: 0, end: 0, lines: ['5', '1', '2', '3', '4'], length: 5}"
    assert str(srb) == repr(srb)

    assert [srb.pop() for _ in range(3)] == ["5", "4", "3"]
    assert len(srb) == 2


def test_add_take():
    srb = StringRingBuffer(3)

    srb.push("1", "2", "3", "4")
    assert drain(srb, srb.pop) == "432"

    srb.unshift("4", "3", "2", "1")
    assert drain(srb, srb.shift) == "123"

    srb.push("1", "2", "3", "4")
    assert drain(srb, srb.shift) == "234"

    srb.unshift("4", "3", "2", "1")
    assert drain(srb, srb.pop) == "321"


def test_inverse_laws():
    vals = ["a", "b", "c", "d"]

    srb = StringRingBuffer(6).push(*vals)
    assert [srb.pop() for _ in vals] == vals[::-1]

    srb = StringRingBuffer(6).unshift(*vals)
    # last argument ends up frontmost
    assert [srb.shift() for _ in vals] == vals[::-1]

    srb = StringRingBuffer(6).push(*vals)
    assert [srb.shift() for _ in vals] == vals

    srb = StringRingBuffer(6).unshift(*vals)
    assert [srb.pop() for _ in vals] == vals


def test_unshift_args_equal_one_at_a_time():
    a = StringRingBuffer(4).unshift("x", "y", "z")
    b = StringRingBuffer(4).unshift("x").unshift("y").unshift("z")
    assert a.slice() == b.slice() == ["z", "y", "x"]


def test_push_evicts_oldest():
    srb = StringRingBuffer(3).push("v1", "v2", "v3", "v4")
    assert srb.full()
    assert [srb.shift() for _ in range(3)] == ["v2", "v3", "v4"]
    assert srb.empty()


def test_unshift_evicts_newest():
    srb = StringRingBuffer(2).push("a", "b").unshift("c")
    assert srb.slice() == ["c", "a"]


def test_empty_removals_are_noops():
    srb = StringRingBuffer(3)
    before = repr(srb)
    assert srb.pop() == ""
    assert srb.shift() == ""
    assert repr(srb) == before


def test_zero_argument_insertions_return_self():
    srb = StringRingBuffer(3).push("a")
    assert srb.push() is srb
    assert srb.unshift() is srb
    assert srb.slice() == ["a"]


def test_zero_capacity():
    srb = StringRingBuffer(0)
    assert srb.push("a", "b").unshift("c") is srb
    assert srb.empty() and srb.full()
    assert srb.pop() == "" and srb.shift() == ""
    assert srb.slice() == []
    assert srb.map(str.upper).each(lambda s: None) is srb
    assert repr(srb) == "StringRingBuffer{start: 0, end: 0, lines: [], length: 0}"


def test_negative_capacity_rejected():
    with pytest.raises(InvalidCapacity):
        StringRingBuffer(-1)
    # still a ValueError for callers that don't know the subclass
    with pytest.raises(ValueError):
        StringRingBuffer(-5)


def test_capacity_is_not_coerced():
    with pytest.raises(TypeError):
        StringRingBuffer(2.9)
    with pytest.raises(TypeError):
        StringRingBuffer("3")


def test_removal_clears_slot():
    srb = StringRingBuffer(3).push("a", "b", "c")
    srb.pop()
    srb.shift()
    assert sorted(srb.lines) == ["", "", "b"]


def test_map_each():
    srb = StringRingBuffer(3)
    srb.push(".", ".", ".")
    c = 0

    def f(s: str) -> str:
        nonlocal c
        c += 1
        return s + str(c)

    srb.map(f).map_r(f)

    total = ""

    def g(s: str) -> None:
        nonlocal total
        total += s

    srb.each(g).each_r(g)
    assert total == ".16.25.34.34.25.16"


def test_map_on_full_buffer_keeps_everything():
    srb = StringRingBuffer(4).push("a", "b", "c", "d", "e")
    assert srb.map(str.upper) is srb
    assert srb.slice() == ["B", "C", "D", "E"]
    assert srb.full()
    assert srb.map_r(lambda s: s + "!").slice() == ["B!", "C!", "D!", "E!"]


def test_each_leaves_lines_unchanged():
    srb = StringRingBuffer(5).push("x", "y")
    seen = []
    srb.each(seen.append).each_r(seen.append)
    assert seen == ["x", "y", "y", "x"]
    assert srb.slice() == ["x", "y"]


def test_slice_is_independent():
    srb = StringRingBuffer(3).push("a", "b")
    out = srb.slice()
    srb.push("c", "d")
    out.append("zzz")
    assert out == ["a", "b", "zzz"]
    assert srb.slice() == ["b", "c", "d"]


def test_unslice_roundtrip():
    srb = StringRingBuffer(4).push("1", "2", "3", "4", "5", "6")
    again = StringRingBuffer.unslice(srb.slice())
    assert again.full()
    assert again.capacity == 4
    assert again.slice() == srb.slice() == ["3", "4", "5", "6"]


def test_unslice_inverse_of_slice():
    srb = StringRingBuffer.unslice(["first", "mid", "last"])
    assert srb.full()
    assert srb.pop() == "last"
    assert srb.shift() == "first"

    srb = StringRingBuffer.unslice(["a", "b"]).push("c")
    assert srb.slice() == ["b", "c"]
    srb = StringRingBuffer.unslice(["a", "b"]).unshift("z")
    assert srb.slice() == ["z", "a"]

    assert StringRingBuffer.unslice([]).empty()


def test_wraparound_many_times():
    srb = StringRingBuffer(3)
    for i in range(50):
        srb.push(str(i))
        if i % 4 == 0:
            srb.shift()
    assert len(srb) <= 3
    assert srb.slice() == [str(i) for i in range(47, 50)]


def test_from_iterable_keeps_tail():
    srb = from_iterable((str(i) for i in range(100)), 3)
    assert srb.slice() == ["97", "98", "99"]
