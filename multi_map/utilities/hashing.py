from typing import AbstractSet, Any, Iterable, Mapping, Sequence


def element_hash(element: Any) -> int:
    try:
        return hash(element)
    except TypeError:
        if isinstance(element, Iterable):
            return collection_hash(element)
        raise


# Equal collections must hash equally, so the hash follows the equality
# rule of the collection's kind: sets ignore order, sequences don't.
def collection_hash(values: Iterable[Any]) -> int:
    try:
        return hash(values)
    except TypeError:
        pass

    if isinstance(values, AbstractSet):
        return hash(frozenset(values))
    if isinstance(values, Mapping):
        return hash(frozenset((key, element_hash(value)) for key, value in values.items()))
    if isinstance(values, Sequence):
        return hash(tuple(element_hash(value) for value in values))

    return len(values)  # type: ignore[arg-type]
