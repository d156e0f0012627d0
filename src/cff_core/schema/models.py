"""Typed model of a Citation File Format (CFF 1.2.0) document.

See https://github.com/citation-file-format/citation-file-format/blob/main/schema-guide.md
for the documentation of the individual keys.
"""
from __future__ import annotations

from datetime import date
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple, Type

from pydantic import StrictInt
from typing_extensions import Annotated, Final, TypeAlias

from .base import CffModel
from .types import (
    DateText,
    IdentifierTypeField,
    Licenses,
    Month,
    NumberOrText,
    ReferenceTypeField,
    StatusField,
    Text,
    UniqueTexts,
    WorkType,
    WorkTypeField,
    not_empty,
    parse_date,
)
from .variants import polymorphic

DEFAULT_MESSAGE: Final[str] = (
    "If you use this software, please cite it using the metadata from this file."
)
"""Message used when a citation file does not provide one."""


class _ContactDetails(CffModel):
    """Address and contact fields shared by persons and entities."""

    address: Optional[Text] = None
    alias: Optional[Text] = None
    city: Optional[Text] = None
    country: Optional[Text] = None
    email: Optional[Text] = None
    fax: Optional[Text] = None
    orcid: Optional[Text] = None
    """ORCID identifier as URL, e.g. https://orcid.org/0000-0002-1825-0097."""
    post_code: Optional[NumberOrText] = None
    region: Optional[Text] = None
    tel: Optional[Text] = None
    website: Optional[Text] = None


class Person(_ContactDetails):
    """A person authoring or otherwise related to a work."""

    given_names: Text
    family_names: Text
    name_particle: Optional[Text] = None
    """Nobiliary particle, e.g. 'van' in 'Vincent van Gogh'."""
    name_suffix: Optional[Text] = None
    """Suffix such as 'Jr.' or 'III'."""
    affiliation: Optional[Text] = None

    @property
    def full_name(self) -> str:
        parts = (self.given_names, self.name_particle, self.family_names)
        name = " ".join(p for p in parts if p)
        return f"{name}, {self.name_suffix}" if self.name_suffix else name


class Entity(_ContactDetails):
    """An organization, team, project or event."""

    name: Text
    location: Optional[Text] = None
    date_start: Optional[DateText] = None
    date_end: Optional[DateText] = None

    @property
    def full_name(self) -> str:
        return self.name


AUTHOR_VARIANTS: Final[Mapping[str, Type[CffModel]]] = MappingProxyType(
    {"person": Person, "entity": Entity}
)
"""Variants of author-like records, by tag."""

Author: TypeAlias = polymorphic(**AUTHOR_VARIANTS)
"""Either a Person or an Entity, selected by the keys present in the record."""

Authors: TypeAlias = Annotated[Tuple[Author, ...], not_empty("author")]  # type: ignore

PEOPLE_FIELDS: Final = (
    "authors",
    "contact",
    "editors",
    "editors_series",
    "recipients",
    "senders",
    "translators",
)
"""Fields holding sequences of authors (persons or entities)."""


class Identifier(CffModel):
    """Typed identifier of a work (DOI, URL, Software Heritage id, ...)."""

    type: IdentifierTypeField
    value: Text
    description: Optional[Text] = None


class Reference(CffModel):
    """Another work, cited by or instead of the described work."""

    authors: Authors
    title: Text
    type: ReferenceTypeField

    abbreviation: Optional[Text] = None
    abstract: Optional[Text] = None
    collection_doi: Optional[Text] = None
    collection_title: Optional[Text] = None
    collection_type: Optional[Text] = None
    commit: Optional[Text] = None
    conference: Optional[Entity] = None
    contact: Tuple[Author, ...] = ()  # type: ignore
    copyright: Optional[Text] = None
    data_type: Optional[Text] = None
    database: Optional[Text] = None
    database_provider: Optional[Entity] = None
    date_accessed: Optional[DateText] = None
    date_downloaded: Optional[DateText] = None
    date_published: Optional[DateText] = None
    date_released: Optional[DateText] = None
    department: Optional[Text] = None
    doi: Optional[Text] = None
    edition: Optional[NumberOrText] = None
    editors: Tuple[Author, ...] = ()  # type: ignore
    editors_series: Tuple[Author, ...] = ()  # type: ignore
    end: Optional[NumberOrText] = None
    entry: Optional[Text] = None
    filename: Optional[Text] = None
    format: Optional[Text] = None
    identifiers: Tuple[Identifier, ...] = ()
    institution: Optional[Entity] = None
    isbn: Optional[NumberOrText] = None
    issn: Optional[NumberOrText] = None
    issue: Optional[NumberOrText] = None
    issue_date: Optional[Text] = None
    issue_title: Optional[Text] = None
    journal: Optional[Text] = None
    keywords: UniqueTexts = ()
    languages: UniqueTexts = ()
    license: Optional[Licenses] = None
    license_url: Optional[Text] = None
    loc_end: Optional[NumberOrText] = None
    loc_start: Optional[NumberOrText] = None
    location: Optional[Entity] = None
    medium: Optional[Text] = None
    month: Optional[Month] = None
    nihmsid: Optional[Text] = None
    notes: Optional[Text] = None
    number: Optional[NumberOrText] = None
    number_volumes: Optional[NumberOrText] = None
    pages: Optional[NumberOrText] = None
    patent_states: UniqueTexts = ()
    pmcid: Optional[Text] = None
    publisher: Optional[Entity] = None
    recipients: Tuple[Author, ...] = ()  # type: ignore
    repository: Optional[Text] = None
    repository_artifact: Optional[Text] = None
    repository_code: Optional[Text] = None
    scope: Optional[Text] = None
    section: Optional[NumberOrText] = None
    senders: Tuple[Author, ...] = ()  # type: ignore
    start: Optional[NumberOrText] = None
    status: Optional[StatusField] = None
    term: Optional[Text] = None
    thesis_type: Optional[Text] = None
    translators: Tuple[Author, ...] = ()  # type: ignore
    url: Optional[Text] = None
    version: Optional[NumberOrText] = None
    volume: Optional[NumberOrText] = None
    volume_title: Optional[Text] = None
    year: Optional[StrictInt] = None
    year_original: Optional[StrictInt] = None


class Citation(CffModel):
    """Complete citation metadata of one software or dataset."""

    abstract: Optional[Text] = None
    """A description of the software or dataset."""

    authors: Authors
    """The authors of the work (at least one)."""

    schema_version: Text
    """Version of the Citation File Format schema the document adheres to."""

    commit: Optional[Text] = None
    """Commit hash or revision number of the described version."""

    contact: Tuple[Author, ...] = ()  # type: ignore
    """Persons or entities to contact about the work."""

    date_released: Optional[DateText] = None
    """Release date, as YYYY-MM-DD."""

    doi: Optional[Text] = None
    """DOI of the work (without resolver prefix)."""

    identifiers: Tuple[Identifier, ...] = ()

    keywords: UniqueTexts = ()

    license: Optional[Licenses] = None
    """SPDX identifier(s) of the license(s), alternatives if more than one."""

    license_url: Optional[Text] = None
    """URL of the license text, for licenses not on the SPDX list."""

    message: Text = DEFAULT_MESSAGE
    """Instruction to the human reader on how to cite the work."""

    preferred_citation: Optional[Reference] = None
    """Work to cite instead of the described software or dataset."""

    references: Tuple[Reference, ...] = ()

    repository: Optional[Text] = None
    """URL of the work in a repository that is neither code nor artifact repository."""

    repository_artifact: Optional[Text] = None
    """URL of the work in a build artifact/binary repository."""

    repository_code: Optional[Text] = None
    """URL of the work in a source code repository."""

    title: Text
    """Name of the software or dataset."""

    type: WorkTypeField = WorkType.SOFTWARE

    url: Optional[Text] = None
    """URL of a landing page of the work."""

    version: Optional[NumberOrText] = None

    # ----

    @property
    def released(self) -> Optional[date]:
        """Release date as `datetime.date`, if given."""
        return parse_date(self.date_released) if self.date_released else None

    @property
    def license_expression(self) -> Optional[str]:
        """SPDX license expression of the license alternatives, if given."""
        if not self.license:
            return None
        return " OR ".join(map(str, self.license))

    @classmethod
    def from_document(cls, document: Any, *, strict: bool = False) -> Citation:
        """Decode and validate a parsed document, raising on any error."""
        from ..core import check

        return check(document, strict=strict).unwrap()
