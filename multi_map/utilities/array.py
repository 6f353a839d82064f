from typing import Callable, Collection, Iterable, Optional, TypeVar

from multi_map.multi_map import MultiMap

T = TypeVar('T')
U = TypeVar('U')


def group_by(
    key_function: Callable[[T], U],
    collection_factory: Optional[Callable[[], Collection[T]]] = None,
) -> Callable[[Iterable[T]], MultiMap[U, T]]:
    def impl(iterable: Iterable[T]) -> MultiMap[U, T]:
        result: MultiMap[U, T] = MultiMap(collection_factory=collection_factory)

        for element in iterable:
            result.put_value(key_function(element), element)

        return result

    return impl
