"""Structural selection among disjoint record variants.

A polymorphic field (e.g. an author, which is either a person or an entity)
carries no explicit type tag in the document. The variant is chosen by
comparing the keys present in the record with the required fields of each
variant: exactly one variant must have all of its required fields present.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, FrozenSet, Mapping, Type, Union

from pydantic import BaseModel, BeforeValidator, Discriminator, Tag
from pydantic_core import PydanticCustomError
from typing_extensions import Annotated

from ..util import cache
from .fields import field_resolver


@cache
def required_keys(model: Type[BaseModel]) -> FrozenSet[str]:
    """Return canonical names of the required fields of a model."""
    return frozenset(n for n, f in model.model_fields.items() if f.is_required())


def present_keys(model: Type[BaseModel], record: Mapping[Any, Any]) -> FrozenSet[str]:
    """Return canonical names of the fields of `model` present in a raw record."""
    resolve = field_resolver(model).resolve
    return frozenset(name for name in map(resolve, record) if name is not None)


def select_variant(record: Any, variants: Mapping[str, Type[BaseModel]]) -> str:
    """Return the tag of the variant that a raw record structurally matches.

    Raises `ambiguous_variant` if several variants match, `unrecognized_variant`
    if none does, and `type_mismatch` if the record is not a mapping.
    """
    for tag, model in variants.items():
        if isinstance(record, model):
            return tag

    if not isinstance(record, Mapping):
        raise PydanticCustomError(
            "type_mismatch",
            "expected a mapping, got {got}",
            {"got": type(record).__name__},
        )

    matches = [
        tag
        for tag, model in variants.items()
        if required_keys(model) <= present_keys(model, record)
    ]
    if len(matches) == 1:
        return matches[0]

    ctx = {
        "variants": ", ".join(matches or variants),
        "keys": ", ".join(sorted(map(str, record))) or "(none)",
    }
    if matches:
        raise PydanticCustomError(
            "ambiguous_variant",
            "record has the required keys of several variants ({variants}), "
            "present keys: {keys}",
            ctx,
        )
    raise PydanticCustomError(
        "unrecognized_variant",
        "record does not have the required keys of any variant ({variants}), "
        "present keys: {keys}",
        ctx,
    )


def polymorphic(**variants: Type[BaseModel]) -> Any:
    """Return annotated union type choosing its variant with `select_variant`.

    The chosen variant is then validated with its own field rules. Variant
    tags are the keyword names, they show up in pydantic error locations.
    """
    table = MappingProxyType(dict(variants))

    def check_variant(value: Any) -> Any:
        select_variant(value, table)
        return value

    def variant_tag(value: Any) -> Any:
        try:
            return select_variant(value, table)
        except PydanticCustomError:
            return None  # already reported by check_variant

    members = tuple(Annotated[model, Tag(tag)] for tag, model in table.items())
    return Annotated[
        Union[members],  # type: ignore
        Discriminator(variant_tag),
        BeforeValidator(check_variant),
    ]
