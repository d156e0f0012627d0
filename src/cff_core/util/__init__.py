from functools import lru_cache
from typing import Any, List

cache = lru_cache(maxsize=None)


def as_list(value: Any) -> List[Any]:
    """Wrap a single value into a list, pass lists and tuples through as lists."""
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def kebab(name: str) -> str:
    """Return hyphenated spelling of an underscored name."""
    return name.replace("_", "-")
