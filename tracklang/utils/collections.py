import itertools
from typing import Any, Iterator


def as_lists(*args: Any) -> Iterator[Any]:
    """Converts any input objects to list objects."""
    for item in args:
        yield item if isinstance(item, list) else [item]


def as_list(*args: Any) -> list:
    """
    Convert any input objects to a single merged list object.

    Example:
        >>> as_list('en', ['ja', 'de'], 'fr')
        ['en', 'ja', 'de', 'fr']
    """
    return list(itertools.chain.from_iterable(as_lists(*args)))
