"""Resolution of accepted document keys to canonical field names.

CFF documents spell multi-word keys with hyphens (`date-released`), model
fields use underscores (`date_released`). Both are accepted, as well as the
few irregular spellings listed in `FIELD_SPELLINGS`. Matching is exact and
case-sensitive.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Type

from pydantic import BaseModel
from typing_extensions import Final

from ..util import cache, kebab

FIELD_SPELLINGS: Final[Mapping[str, Tuple[str, ...]]] = MappingProxyType(
    {
        "schema_version": ("cff-version", "cff_version"),
    }
)
"""Accepted spellings beyond the hyphenated and the canonical form."""


def spellings(canonical: str) -> Tuple[str, ...]:
    """Return all accepted document keys of a field, preferred spelling first."""
    extra = FIELD_SPELLINGS.get(canonical, ())
    ordered = (*extra, kebab(canonical), canonical)
    return tuple(dict.fromkeys(ordered))


def document_key(canonical: str) -> str:
    """Return the preferred document spelling of a field (for messages)."""
    return spellings(canonical)[0]


class FieldResolver:
    """Immutable lookup table from accepted spellings to canonical names."""

    def __init__(self, canonical_names: Iterable[str]):
        self._lookup: Mapping[str, str] = MappingProxyType(
            {key: name for name in canonical_names for key in spellings(name)}
        )

    def resolve(self, key: Any) -> Optional[str]:
        """Return canonical field name for a document key, or None if unmatched."""
        if not isinstance(key, str):
            return None
        return self._lookup.get(key)

    def split(self, data: Mapping[Any, Any]) -> Tuple[Dict[str, Any], Dict[Any, Any]]:
        """Split a raw mapping into canonically keyed and unresolved entries.

        A field given more than once (under different spellings) keeps the
        value given under the canonical name, otherwise the first one.
        The other spellings are returned as unresolved, so an unresolved key
        never equals a canonical name.
        """
        resolved: Dict[str, Any] = {}
        source: Dict[str, Any] = {}
        unresolved: Dict[Any, Any] = {}
        for key, value in data.items():
            name = self.resolve(key)
            if name is None:
                unresolved[key] = value
                continue
            if name in resolved:
                if key != name:
                    unresolved[key] = value
                    continue
                unresolved[source[name]] = resolved[name]
            resolved[name] = value
            source[name] = key
        return resolved, unresolved


@cache
def field_resolver(model: Type[BaseModel]) -> FieldResolver:
    """Return the (cached) resolver for the fields of a model class."""
    return FieldResolver(model.model_fields.keys())
