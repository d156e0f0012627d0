"""Field types and enumerations of the Citation File Format."""
from __future__ import annotations

import re
from datetime import date, datetime
from importlib.resources import files
from typing import Any, Tuple

import isodate
from pydantic import AfterValidator, BeforeValidator, Field, StrictInt, StrictStr
from pydantic_core import PydanticCustomError
from typing_extensions import Annotated, TypeAlias

from ..util import as_list
from ..util.enum import VariantEnum, variant_field

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")
"""Textual shape of dates (4-digit year, 2-digit month and day)."""

# ----


def _non_empty(value: str) -> str:
    if not value.strip():
        raise PydanticCustomError("format_violation", "must not be empty")
    return value


Text: TypeAlias = Annotated[StrictStr, AfterValidator(_non_empty)]
"""Non-empty string (contains non-whitespace characters)."""


def parse_date(value: str) -> date:
    """Parse a `YYYY-MM-DD` date, rejecting other ISO 8601 forms and invalid days."""
    if not DATE_PATTERN.fullmatch(value):
        raise PydanticCustomError(
            "format_violation",
            "'{value}' does not match the date format YYYY-MM-DD",
            {"value": value},
        )
    try:
        return isodate.parse_date(value)
    except ValueError as e:
        raise PydanticCustomError(
            "format_violation",
            "'{value}' is not a valid calendar date ({reason})",
            {"value": value, "reason": str(e)},
        ) from None


def _date_as_text(value: Any) -> Any:
    # loaders other than ours may already produce date objects
    if isinstance(value, date) and not isinstance(value, datetime):
        return value.isoformat()
    return value


def _check_date(value: str) -> str:
    parse_date(value)
    return value


DateText: TypeAlias = Annotated[
    StrictStr, BeforeValidator(_date_as_text), AfterValidator(_check_date)
]
"""Calendar date, kept in its textual `YYYY-MM-DD` form."""


def _number_as_text(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


NumberOrText: TypeAlias = Annotated[Text, BeforeValidator(_number_as_text)]
"""Text that may also be given as a number (versions, volumes, pages)."""


def _month_as_int(value: Any) -> Any:
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    return value


Month: TypeAlias = Annotated[
    StrictInt, BeforeValidator(_month_as_int), Field(ge=1, le=12)
]


def _unique(values: Tuple[str, ...]) -> Tuple[str, ...]:
    seen = set()
    for value in values:
        if value in seen:
            raise PydanticCustomError(
                "format_violation", "'{value}' is listed more than once", {"value": value}
            )
        seen.add(value)
    return values


UniqueTexts: TypeAlias = Annotated[Tuple[Text, ...], AfterValidator(_unique)]


def not_empty(what: str) -> AfterValidator:
    """Return validator rejecting empty sequences, run after all elements are valid."""

    def check(values: Tuple[Any, ...]) -> Tuple[Any, ...]:
        if not values:
            raise PydanticCustomError(
                "format_violation", "at least one {what} is required", {"what": what}
            )
        return values

    return AfterValidator(check)


# ----


class WorkType(VariantEnum):
    """Type of the work described by a citation file."""

    SOFTWARE = "software"
    DATASET = "dataset"


class IdentifierType(VariantEnum):
    DOI = "doi"
    URL = "url"
    SWH = "swh"
    OTHER = "other"


class Status(VariantEnum):
    """Publication status of a referenced work."""

    ABSTRACT = "abstract"
    ADVANCE_ONLINE = "advance-online"
    IN_PREPARATION = "in-preparation"
    IN_PRESS = "in-press"
    PREPRINT = "preprint"
    SUBMITTED = "submitted"


class ReferenceType(VariantEnum):
    """Type of a referenced work."""

    ART = "art"
    ARTICLE = "article"
    AUDIOVISUAL = "audiovisual"
    BILL = "bill"
    BLOG = "blog"
    BOOK = "book"
    CATALOGUE = "catalogue"
    CONFERENCE = "conference"
    CONFERENCE_PAPER = "conference-paper"
    DATA = "data"
    DATABASE = "database"
    DICTIONARY = "dictionary"
    EDITED_WORK = "edited-work"
    ENCYCLOPEDIA = "encyclopedia"
    FILM_BROADCAST = "film-broadcast"
    GENERIC = "generic"
    GOVERNMENT_DOCUMENT = "government-document"
    GRANT = "grant"
    HEARING = "hearing"
    HISTORICAL_WORK = "historical-work"
    LEGAL_CASE = "legal-case"
    LEGAL_RULE = "legal-rule"
    MAGAZINE_ARTICLE = "magazine-article"
    MANUAL = "manual"
    MAP = "map"
    MULTIMEDIA = "multimedia"
    MUSIC = "music"
    NEWSPAPER_ARTICLE = "newspaper-article"
    PAMPHLET = "pamphlet"
    PATENT = "patent"
    PERSONAL_COMMUNICATION = "personal-communication"
    PROCEEDINGS = "proceedings"
    REPORT = "report"
    SERIAL = "serial"
    SLIDES = "slides"
    SOFTWARE = "software"
    SOFTWARE_CODE = "software-code"
    SOFTWARE_CONTAINER = "software-container"
    SOFTWARE_EXECUTABLE = "software-executable"
    SOFTWARE_VIRTUAL_MACHINE = "software-virtual-machine"
    SOUND_RECORDING = "sound-recording"
    STANDARD = "standard"
    STATUTE = "statute"
    THESIS = "thesis"
    UNPUBLISHED = "unpublished"
    VIDEO = "video"
    WEBSITE = "website"


def _spdx_ids() -> Tuple[str, ...]:
    text = files(__package__).joinpath("spdx_licenses.txt").read_text("utf-8")
    lines = (line.strip() for line in text.splitlines())
    return tuple(line for line in lines if line and not line.startswith("#"))


SpdxLicense = VariantEnum(  # type: ignore[call-overload]
    "SpdxLicense",
    [(spdx_id, spdx_id) for spdx_id in _spdx_ids()],
    module=__name__,
)
"""SPDX license identifiers accepted by the Citation File Format."""

Licenses: TypeAlias = Annotated[
    Tuple[variant_field(SpdxLicense), ...],  # type: ignore[valid-type]
    BeforeValidator(as_list),
    not_empty("license"),
]
"""One or more licenses, where multiple licenses are alternatives (OR)."""

WorkTypeField: TypeAlias = variant_field(WorkType, WorkType.SOFTWARE)
IdentifierTypeField: TypeAlias = variant_field(IdentifierType)
ReferenceTypeField: TypeAlias = variant_field(ReferenceType)
StatusField: TypeAlias = variant_field(Status)

__all__ = [
    "DATE_PATTERN",
    "Text",
    "DateText",
    "NumberOrText",
    "Month",
    "UniqueTexts",
    "parse_date",
    "WorkType",
    "IdentifierType",
    "Status",
    "ReferenceType",
    "SpdxLicense",
    "Licenses",
]
