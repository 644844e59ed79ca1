"""Tests for segments and the segment buffer."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from surrealqb import Node
from surrealqb.core.segment import (
    Held,
    SegmentBuffer,
    Text,
    adopt,
    find_parameter_cycle,
    substitute_parameters,
    to_segment,
)


def test_push_preserves_order():
    buffer = SegmentBuffer().push(Text("SELECT")).push(Text("*")).push(Text("FROM"))

    assert buffer.render() == "SELECT * FROM"
    assert len(buffer) == 3


def test_push_empty_text_is_no_op():
    buffer = SegmentBuffer().push(Text("a"))

    assert buffer.push(Text("")) is buffer


def test_push_returns_new_buffer():
    base = SegmentBuffer().push(Text("a"))

    base.push(Text("b"))

    assert base.render() == "a"


def test_hold_indices_are_stable():
    buffer = SegmentBuffer()
    first = buffer.hold("one")
    second = buffer.hold("two")

    buffer = buffer.push(second).push(first)

    assert (first, second) == (Held(0), Held(1))
    assert buffer.render() == "two one"


def test_push_rejects_dangling_index():
    with pytest.raises(IndexError):
        SegmentBuffer().push(Held(0))


def test_push_rejects_held_from_another_storage():
    """An index that is in range elsewhere must not resolve to the wrong string."""
    first = SegmentBuffer()
    held = first.hold("from_first")
    second = SegmentBuffer()
    second.hold("from_second")

    assert not second.owns(held)
    with pytest.raises(IndexError):
        second.push(held)


def test_held_equality_ignores_storage():
    assert SegmentBuffer().hold("a") == SegmentBuffer().hold("b") == Held(0)


def test_derived_buffers_share_storage():
    base = SegmentBuffer()
    derived = base.push(Text("x"))

    held = derived.hold("kept")

    assert base.resolve(held) == "kept"


def test_with_parameter_last_write_wins():
    buffer = SegmentBuffer().with_parameter("k", "a").with_parameter("k", "b")

    assert buffer.parameters == {"k": "b"}


def test_with_parameter_does_not_mutate():
    base = SegmentBuffer()

    base.with_parameter("k", "v")

    assert base.parameters == {}


def test_to_segment():
    assert to_segment("a") == Text("a")
    assert to_segment(Held(3)) == Held(3)
    assert to_segment(Node("x").with_("y")) == Text("x->y")
    assert to_segment(10) == Text("10")


def test_adopt_copies_foreign_held_strings():
    source = SegmentBuffer()
    held = source.hold("moved")
    target = SegmentBuffer().push(Text("a"))
    target.hold("existing")

    adopted = adopt(target, held)

    assert adopted == Held(1)
    assert target.resolve(adopted) == "moved"


def test_adopt_keeps_text_and_shared_storage():
    buffer = SegmentBuffer()
    held = buffer.hold("same")

    assert adopt(buffer.push(Text("x")), held) is held
    assert adopt(buffer, Text("t")) == Text("t")


def test_adopt_copies_from_any_foreign_storage():
    target = SegmentBuffer()
    target.hold("mine")
    other = SegmentBuffer()
    other.hold("first")
    held = other.hold("second")

    adopted = adopt(target, held)

    assert target.owns(adopted)
    assert target.resolve(adopted) == "second"


def test_adopt_rejects_held_without_storage():
    with pytest.raises(IndexError):
        adopt(SegmentBuffer(), Held(0))


def test_substitute_parameters_rescans_from_start():
    assert substitute_parameters("ab", {"ab": "a", "a": "bb"}) == "bb"


def test_substitute_parameters_repeats_passes_over_earlier_keys():
    parameters = {"{{inner}}": "id", "{{outer}}": "{{inner}}"}

    assert substitute_parameters("{{outer}}", parameters) == "id"


def test_find_parameter_cycle():
    assert find_parameter_cycle({"a": "b", "b": "c"}) is None
    assert find_parameter_cycle({"a": "xa"}) == ["a", "a"]
    assert find_parameter_cycle({"{{a}}": "{{b}}", "{{b}}": "x {{a}}"}) == [
        "{{a}}",
        "{{b}}",
        "{{a}}",
    ]


@given(
    key=st.from_regex(r"\{\{[a-z]{1,5}\}\}", fullmatch=True),
    value=st.from_regex(r"[a-z0-9]{0,8}", fullmatch=True),
    count=st.integers(min_value=0, max_value=5),
)
def test_substitute_parameters_is_exhaustive(key, value, count):
    text = " ".join([key] * count)

    result = substitute_parameters(text, {key: value})

    assert key not in result
    assert result == " ".join([value] * count)
