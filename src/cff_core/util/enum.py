"""Closed enumerations matched case-insensitively against labels and aliases."""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, FrozenSet, Optional, Type, TypeVar

from pydantic import BeforeValidator
from pydantic_core import PydanticCustomError
from typing_extensions import Annotated

from . import cache

E = TypeVar("E", bound="VariantEnum")


class VariantEnum(str, Enum):
    """String enumeration with aliases and case-insensitive lookup.

    Members are declared with their canonical label, optionally followed
    by accepted aliases:

        class Colour(VariantEnum):
            GREY = "grey", "gray"

    Labels containing hyphens also accept the underscored spelling.
    """

    aliases: FrozenSet[str]

    def __new__(cls, label: str, *aliases: str):
        obj = str.__new__(cls, label)
        obj._value_ = label
        spellings = {label, *aliases}
        if "-" in label:
            spellings.add(label.replace("-", "_"))
        obj.aliases = frozenset(spellings)
        return obj

    def __str__(self) -> str:
        return self.value

    @classmethod
    def match(cls: Type[E], token: Any) -> E:
        """Return the member matching the token, ignoring case.

        Raises a pydantic custom error (`type_mismatch` or `invalid_enum_value`),
        so the method can be used directly as a field validator.
        """
        if isinstance(token, cls):
            return token
        if not isinstance(token, str):
            raise PydanticCustomError(
                "type_mismatch",
                "expected text naming a {enum}, got {got}",
                {"enum": cls.__name__, "got": type(token).__name__},
            )
        try:
            return _lookup_table(cls)[token.casefold()]
        except KeyError:
            raise PydanticCustomError(
                "invalid_enum_value",
                "'{token}' is not a valid {enum}",
                {"token": token, "enum": cls.__name__},
            ) from None


@cache
def _lookup_table(enum_cls: Type[VariantEnum]) -> Dict[str, VariantEnum]:
    return {s.casefold(): m for m in enum_cls for s in m.aliases}


def match_variant(enum_cls: Type[E], token: Any, default: Optional[E] = None) -> E:
    """Resolve a raw token into a member of `enum_cls`.

    An absent token (`None`) yields the default, or a `missing` error if the
    enumeration has no default in this context.
    """
    if token is None:
        if default is None:
            raise PydanticCustomError(
                "missing", "no {enum} given", {"enum": enum_cls.__name__}
            )
        return default
    return enum_cls.match(token)


def variant_field(enum_cls: Type[E], default: Optional[E] = None) -> Any:
    """Return annotated type for model fields holding a member of `enum_cls`.

    A null value in the document is treated like an absent one, see `match_variant`.
    """
    return Annotated[
        enum_cls, BeforeValidator(lambda token: match_variant(enum_cls, token, default))
    ]
