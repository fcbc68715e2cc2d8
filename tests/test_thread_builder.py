import pytest

from flameconv.categories import JAVA_CATEGORY_INDEX, NATIVE_CATEGORY_INDEX
from flameconv.errors import SchemaInvariantViolation
from flameconv.profile_schema import FRAME_SCHEMA
from flameconv.thread_builder import ThreadBuilder


@pytest.fixture
def builder():
    return ThreadBuilder('MainThread', 0, 0)


def test_same_raw_label_is_the_same_frame(builder):
    first = builder.get_or_create_frame('foo')
    assert builder.get_or_create_frame('bar') != first
    assert builder.get_or_create_frame('foo') == first
    assert builder.frame_table.length == 2


def test_java_frame_is_stored_without_marker(builder):
    frame = builder.get_or_create_frame('foo_[j]')
    row = builder.frame_table.data[frame]
    assert builder.strings.get(row[FRAME_SCHEMA['location']]) == 'foo'
    assert row[FRAME_SCHEMA['category']] == JAVA_CATEGORY_INDEX
    assert builder.get_or_create_frame('foo_[j]') == frame


def test_java_and_native_frames_with_same_location_stay_distinct(builder):
    java = builder.get_or_create_frame('foo_[j]')
    native = builder.get_or_create_frame('foo')
    assert java != native
    location = FRAME_SCHEMA['location']
    assert (builder.frame_table.data[java][location] ==
            builder.frame_table.data[native][location])
    assert builder.frame_table.data[native][
        FRAME_SCHEMA['category']] == NATIVE_CATEGORY_INDEX
    assert builder.strings.strings == ['foo']


def test_stacks_share_common_prefix(builder):
    c = builder.intern_stack(['a', 'b', 'c'])
    d = builder.intern_stack(['a', 'b', 'd'])
    assert c != d
    assert builder.stack_table.length == 4
    assert builder.stack_table.data[c][0] == builder.stack_table.data[d][0]
    assert builder.intern_stack(['a', 'b', 'c']) == c
    assert builder.stack_table.length == 4


def test_same_frame_under_different_prefix_is_a_new_stack(builder):
    builder.intern_stack(['a', 'b'])
    builder.intern_stack(['b', 'a'])
    assert builder.stack_table.data == [[None, 0], [0, 1], [None, 1], [2, 0]]


def test_root_stack_has_no_prefix(builder):
    stack = builder.intern_stack(['main'])
    assert builder.stack_table.data[stack] == [None, 0]
    assert builder.intern_stack([]) is None


def test_sample_times_continue_across_calls(builder):
    x = builder.intern_stack(['x'])
    y = builder.intern_stack(['y'])
    assert builder.add_samples(x, 2) == 2
    assert builder.add_samples(y, 0) == 0
    assert builder.add_samples(y, 3) == 3
    assert builder.samples.data == [
        [x, 0, 0],
        [x, 1, 0],
        [y, 2, 0],
        [y, 3, 0],
        [y, 4, 0],
    ]


def test_finish_returns_thread(builder):
    builder.add_samples(builder.intern_stack(['main', 'foo']), 1)
    thread = builder.finish()
    assert thread.name == 'MainThread'
    assert thread.pid == 0
    assert thread.tid == 0
    assert thread.string_table == ['main', 'foo']
    assert thread.samples.length == 1
    assert thread.markers.length == 0


def test_finish_rejects_forward_prefix(builder):
    builder.intern_stack(['a'])
    builder.stack_table.data.append([5, 0])
    with pytest.raises(SchemaInvariantViolation, match='invalid prefix'):
        builder.finish()


def test_finish_rejects_missing_frame(builder):
    builder.stack_table.add_stack(None, 3)
    with pytest.raises(SchemaInvariantViolation, match='missing frame'):
        builder.finish()


def test_finish_rejects_missing_string(builder):
    builder.frame_table.add_frame(location=0, category=NATIVE_CATEGORY_INDEX)
    with pytest.raises(SchemaInvariantViolation, match='missing string'):
        builder.finish()


def test_finish_rejects_sample_without_stack(builder):
    builder.add_samples(0, 1)
    with pytest.raises(SchemaInvariantViolation, match='missing stack'):
        builder.finish()
