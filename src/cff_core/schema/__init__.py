"""Typed model of citation documents and the building blocks used to decode it."""
from .base import CffModel
from .fields import FieldResolver, document_key, field_resolver, spellings
from .models import (
    AUTHOR_VARIANTS,
    DEFAULT_MESSAGE,
    Author,
    Citation,
    Entity,
    Identifier,
    Person,
    Reference,
)
from .types import IdentifierType, ReferenceType, SpdxLicense, Status, WorkType
from .variants import select_variant

__all__ = [
    "CffModel",
    "FieldResolver",
    "document_key",
    "field_resolver",
    "spellings",
    "AUTHOR_VARIANTS",
    "DEFAULT_MESSAGE",
    "Author",
    "Citation",
    "Entity",
    "Identifier",
    "Person",
    "Reference",
    "IdentifierType",
    "ReferenceType",
    "SpdxLicense",
    "Status",
    "WorkType",
    "select_variant",
]
