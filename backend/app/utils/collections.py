from collections import defaultdict
from collections.abc import Callable, Hashable, Iterable
from typing import TypeVar


K = TypeVar('K', bound=Hashable)
V = TypeVar('V')


def unique(items: Iterable[V]) -> list[V]:
    """Drop repeated items, keeping the first occurrence and the original order."""
    return list(dict.fromkeys(items))


def index_by(items: Iterable[V], key: Callable[[V], K]) -> dict[K, V]:
    return {key(item): item for item in items}


def group_by(items: Iterable[V], key: Callable[[V], K]) -> dict[K, list[V]]:
    grouped: dict[K, list[V]] = defaultdict(list)
    for item in items:
        grouped[key(item)].append(item)
    return dict(grouped)


def load_grouped(
    keys: Iterable[K],
    fetch: Callable[[list[K]], Iterable[V]],
    key: Callable[[V], K],
) -> dict[K, list[V]]:
    """
    Resolve many keys with a single bulk fetch.

    ``fetch`` receives the de-duplicated keys once; the result is indexed so every
    requested key maps to its rows (an empty list when nothing matched).
    """
    wanted = unique(keys)
    if not wanted:
        return {}
    grouped = group_by(fetch(wanted), key)
    return {item: grouped.get(item, []) for item in wanted}
