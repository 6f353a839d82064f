"""Serialization of ``MultiMap`` objects.

``loads(dumps(m)) == m`` holds whenever the keys, the values and both
factories of ``m`` can be pickled. Lambdas and locally defined functions
can't, so factories should be classes or module-level functions.

``loads`` and ``load`` unpickle whatever they are given, which can run
arbitrary code. Never pass them data from an untrusted source.
"""

import logging
import pickle
from pathlib import Path
from typing import Union

from multi_map.multi_map import MultiMap

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def dumps(multi_map: MultiMap) -> bytes:
    data = pickle.dumps(multi_map, protocol=pickle.HIGHEST_PROTOCOL)
    logger.debug('Serialized multimap with %d keys into %d bytes', len(multi_map), len(data))
    return data


def loads(data: bytes) -> MultiMap:
    multi_map = pickle.loads(data)
    if not isinstance(multi_map, MultiMap):
        raise TypeError(f'Expected a serialized MultiMap, got {type(multi_map).__name__}')
    logger.debug('Deserialized multimap with %d keys from %d bytes', len(multi_map), len(data))
    return multi_map


def dump(multi_map: MultiMap, path: PathLike):
    path = Path(path)
    path.write_bytes(dumps(multi_map))
    logger.debug('Wrote multimap to %s', path)


def load(path: PathLike) -> MultiMap:
    path = Path(path)
    logger.debug('Reading multimap from %s', path)
    return loads(path.read_bytes())
