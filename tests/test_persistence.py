"""
Tests for multimap persistence

Round trips multimaps through bytes and through files in a temp directory.
"""

import logging
import pickle
from collections import OrderedDict

import pytest

from multi_map import MultiMap, dump, dumps, load, loads, persistence


@pytest.fixture
def multi_map():
    result = MultiMap()
    result.put_values('a', [1, 10])
    result.put_value('b', 2)
    result.put_value('c', 3)
    return result


def test_round_trip(multi_map):
    assert loads(dumps(multi_map)) == multi_map


def test_round_trip_empty():
    assert loads(dumps(MultiMap())) == MultiMap()


def test_round_trip_keeps_emptied_keys(multi_map):
    multi_map.remove_value(2)

    result = loads(dumps(multi_map))

    assert result == multi_map
    assert result.get('b') == []


def test_round_trip_keeps_factories():
    multi_map = MultiMap(OrderedDict, set)
    multi_map.put_values('x', ['q', 'r'])

    result = loads(dumps(multi_map))

    assert result == multi_map
    assert not result.put_value('x', 'q')
    assert result.put_value('y', 'q')
    assert result.get('y') == {'q'}


def test_round_trip_result_is_independent(multi_map):
    result = loads(dumps(multi_map))
    result.put_value('a', 100)

    assert multi_map.get('a') == [1, 10]


def test_plain_pickle_round_trip(multi_map):
    assert pickle.loads(pickle.dumps(multi_map)) == multi_map


def test_file_round_trip(multi_map, tmp_path):
    path = tmp_path / 'multi_map.pickle'

    dump(multi_map, path)

    assert path.exists()
    assert load(path) == multi_map


def test_file_round_trip_with_str_path(multi_map, tmp_path):
    path = str(tmp_path / 'multi_map.pickle')

    dump(multi_map, path)

    assert load(path) == multi_map


def test_loads_rejects_other_objects():
    with pytest.raises(TypeError):
        loads(pickle.dumps({'a': [1]}))


def test_unpicklable_factory_fails():
    multi_map = MultiMap(collection_factory=lambda: [])
    multi_map.put_value('a', 1)

    with pytest.raises((pickle.PicklingError, AttributeError)):
        dumps(multi_map)


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load(tmp_path / 'missing.pickle')


def test_logs_sizes(multi_map, caplog):
    caplog.set_level(logging.DEBUG, logger='multi_map.persistence')

    loads(dumps(multi_map))

    assert 'Serialized multimap with 3 keys' in caplog.text
    assert 'Deserialized multimap with 3 keys' in caplog.text


def test_docs_warn_about_untrusted_input():
    assert 'untrusted' in persistence.__doc__
