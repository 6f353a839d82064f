from copy import copy as shallow_copy
from itertools import chain
from typing import (
    Any,
    Callable,
    Collection,
    ItemsView,
    Iterable,
    Iterator,
    KeysView,
    Mapping,
    MutableMapping,
    MutableSet,
    Optional,
    TypeVar,
    Union,
    ValuesView,
)

from multi_map.utilities.hashing import collection_hash

K = TypeVar('K')
V = TypeVar('V')

MapFactory = Callable[[], MutableMapping[K, Collection[V]]]
CollectionFactory = Callable[[], Collection[V]]

_MISSING = object()


class MultiMap(MutableMapping[K, Collection[V]]):
    """A mapping that binds each key to a collection of values.

    The backing store and the per-key collections are produced by the two
    factories given at construction time, a ``dict`` of ``list`` by default.
    A key's collection is only created the first time a value is written
    under it. Keys stay in the map when their collection becomes empty.

    Not thread safe: the get-or-create step on write paths is two separate
    calls against the backing store.
    """

    def __init__(
        self,
        map_factory: Optional[MapFactory] = None,
        collection_factory: Optional[CollectionFactory] = None,
    ):
        self._map_factory = map_factory if map_factory is not None else dict
        self._collection_factory = collection_factory if collection_factory is not None else list
        self._map: MutableMapping[K, Collection[V]] = self._map_factory()

    def __getitem__(self, key: K) -> Collection[V]:
        return self._map[key]

    def __setitem__(self, key: K, values: Collection[V]):
        self._map[key] = values

    def __delitem__(self, key: K):
        del self._map[key]

    def __iter__(self) -> Iterator[K]:
        return iter(self._map)

    def __len__(self) -> int:
        return len(self._map)

    def __contains__(self, key: object) -> bool:
        return key in self._map

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if not isinstance(other, MultiMap):
            return NotImplemented
        return self._map == other._map

    def __hash__(self) -> int:
        return hash(frozenset((key, collection_hash(values)) for key, values in self._map.items()))

    def __str__(self) -> str:
        return '\n'.join(f'{key} : {values}' for key, values in self._map.items())

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._map!r})'

    def __copy__(self) -> 'MultiMap[K, V]':
        return self.copy()

    def put(self, key: K, values: Collection[V]) -> Optional[Collection[V]]:
        previous = self._map.get(key)
        self._map[key] = values
        return previous

    def put_value(self, key: K, value: V) -> bool:
        """Adds ``value`` to the collection of ``key``, creating it if needed.

        Returns whether the collection changed, which depends on the
        collection type: a set reports ``False`` for a value it already holds.
        The check compares sizes, so it only holds for collections that grow
        when they change. A full ``deque(maxlen=n)`` reports ``False``.
        """
        values = self._get_or_create(key)
        size = len(values)
        if isinstance(values, MutableSet):
            values.add(value)
        else:
            values.append(value)  # type: ignore[attr-defined]
        return len(values) != size

    def put_all(
        self, mapping: Union[Mapping[K, Collection[V]], Iterable[tuple[K, Collection[V]]]]
    ):
        # Replaces whole collections, same as put() for each key.
        self._map.update(mapping)

    def put_values(self, key: K, values: Iterable[V]) -> bool:
        collection = self._get_or_create(key)
        size = len(collection)
        if isinstance(collection, MutableSet):
            collection.update(values)  # type: ignore[attr-defined]
        else:
            collection.extend(values)  # type: ignore[attr-defined]
        return len(collection) != size

    def get(self, key: K, default: Any = _MISSING) -> Collection[V]:  # type: ignore[override]
        # An absent key reads as a new empty list, never stored.
        values = self._map.get(key, default)
        return [] if values is _MISSING else values

    def setdefault(self, key: K, default: Optional[Collection[V]] = None) -> Collection[V]:
        if default is None:
            return self._get_or_create(key)
        return self._map.setdefault(key, default)

    def remove(self, key: K) -> Optional[Collection[V]]:
        return self._map.pop(key, None)

    def remove_value(self, value: V):
        for values in self._map.values():
            while value in values:
                values.remove(value)  # type: ignore[attr-defined]

    def contains_key(self, key: K) -> bool:
        return key in self._map

    def contains_value(self, value: V) -> bool:
        return any(value in values for values in self._map.values())

    def contains_values(self, values: Collection[V]) -> bool:
        return any(values == candidate for candidate in self._map.values())

    def keys(self) -> KeysView[K]:
        return self._map.keys()

    def items(self) -> ItemsView[K, Collection[V]]:
        return self._map.items()

    def values(self) -> ValuesView[Collection[V]]:
        return self._map.values()

    def value_list(
        self,
        key: Optional[Callable[[V], Any]] = None,
        reverse: bool = False,
        sort: bool = False,
    ) -> list[V]:
        """Returns every value of every key as one new list.

        Keys come in backing store order and values in collection order.
        The list is sorted when ``sort`` is set or a ``key`` is given, by
        natural ordering if ``key`` is ``None``.
        """
        result = list(chain.from_iterable(self._map.values()))
        if sort or key is not None:
            result.sort(key=key, reverse=reverse)
        return result

    def is_empty(self) -> bool:
        return not self._map

    def clear(self):
        self._map.clear()

    def copy(self) -> 'MultiMap[K, V]':
        result = type(self)(self._map_factory, self._collection_factory)
        for key, values in self._map.items():
            result._map[key] = shallow_copy(values)
        return result

    def _get_or_create(self, key: K) -> Collection[V]:
        if (values := self._map.get(key)) is None:
            values = self._map[key] = self._collection_factory()
        return values
