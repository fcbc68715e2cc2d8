import json

from flameconv.profile_schema import (FRAME_SCHEMA, SAMPLES_SCHEMA,
                                      STACK_SCHEMA, Category, FrameTable,
                                      Profile, ProfileMeta, SamplesTable,
                                      StackTable, StringTableBuilder, Thread)


def test_string_table_assigns_ids_in_first_seen_order():
    strings = StringTableBuilder()
    assert strings.insert('main') == 0
    assert strings.insert('foo') == 1
    assert strings.insert('main') == 0
    assert strings.insert('bar') == 2
    assert strings.strings == ['main', 'foo', 'bar']
    assert strings.get(1) == 'foo'
    assert len(strings) == 3


def test_frame_row_layout():
    frames = FrameTable()
    assert frames.add_frame(location=4, category=2) == 0
    assert frames.add_frame(location=5, category=1) == 1
    row = frames.data[0]
    assert len(row) == len(FRAME_SCHEMA)
    assert row[FRAME_SCHEMA['location']] == 4
    assert row[FRAME_SCHEMA['category']] == 2
    assert row[FRAME_SCHEMA['relevantForJS']] is False
    assert row[FRAME_SCHEMA['innerWindowID']] == 0
    assert row[FRAME_SCHEMA['subcategory']] is None
    assert frames.length == 2


def test_stack_and_sample_rows():
    stacks = StackTable()
    root = stacks.add_stack(None, 0)
    child = stacks.add_stack(root, 1)
    assert stacks.data == [[None, 0], [0, 1]]
    assert child == 1

    samples = SamplesTable()
    samples.add_sample(child, 0)
    assert samples.data == [[1, 0, 0]]
    assert samples.json()['schema'] == SAMPLES_SCHEMA
    assert stacks.json() == {'schema': STACK_SCHEMA, 'data': [[None, 0], [0, 1]]}


def test_profile_json_is_serializable():
    profile = Profile(
        meta=ProfileMeta(categories=[Category('Other', 'grey', ['Other'])]),
        threads=[Thread(name='MainThread', string_table=['main'])],
    )
    decoded = json.loads(profile.dumps())
    assert set(decoded) == {'meta', 'libs', 'threads', 'processes', 'pausedRanges'}
    assert decoded['meta']['version'] == 24
    assert decoded['meta']['interval'] == 1
    assert decoded['meta']['categories'] == [{
        'name': 'Other',
        'color': 'grey',
        'subcategories': ['Other']
    }]
    thread = decoded['threads'][0]
    assert thread['name'] == 'MainThread'
    assert thread['stringTable'] == ['main']
    assert thread['processType'] == 'default'
    assert thread['unregisterTime'] is None
    assert thread['markers']['data'] == []


def test_meta_defaults_match_gecko_v24():
    meta = ProfileMeta().json()
    assert meta['version'] == 24
    assert meta['product'] == 'Firefox'
    assert meta['markerSchema'] == []
    assert meta['shutdownTime'] is None
