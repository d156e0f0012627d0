"""Format-level rules evaluated on decoded citations.

Every rule is a generator of findings over a Citation. All rules are always
evaluated, in registration order, and never modify the citation.
"""
from __future__ import annotations

import logging
import re
from typing import Callable, Iterator, List, Optional, Tuple, Union

from pydantic import AnyUrl, TypeAdapter, ValidationError
from pydantic_core import PydanticCustomError
from typing_extensions import Final

from .errors import Finding, FindingKind, Loc, Severity
from .schema.models import PEOPLE_FIELDS, Citation, Entity, Person, Reference
from .schema.types import IdentifierType, parse_date

logger = logging.getLogger(__name__)

Record = Union[Citation, Reference]
Rule = Callable[[Citation], Iterator[Finding]]

RULES: List[Rule] = []


def rule(func: Rule) -> Rule:
    """Register a validation rule."""
    RULES.append(func)
    return func


def validate(citation: Citation) -> List[Finding]:
    """Return all findings of all rules for the citation (empty if valid)."""
    findings = [finding for check in RULES for finding in check(citation)]
    logger.debug("Validation produced %d finding(s)", len(findings))
    return findings


def _error(kind: FindingKind, loc: Loc, message: str) -> Finding:
    return Finding(kind=kind, severity=Severity.ERROR, loc=loc, message=message)


# ---- patterns of the CFF 1.2.0 schema

DOI_PATTERN: Final = re.compile(r"10\.\d{4,9}(\.\d+)?/[A-Za-z0-9:/_;\-\.\(\)\[\]\\]+")
ORCID_PATTERN: Final = re.compile(
    r"https://orcid\.org/[0-9]{4}-[0-9]{4}-[0-9]{4}-[0-9]{3}[0-9X]"
)
EMAIL_PATTERN: Final = re.compile(r"[\S]+@[\S]+\.[\S]{2,}")
SWH_PATTERN: Final = re.compile(r"swh:1:(snp|rel|rev|dir|cnt):[0-9a-fA-F]{40}")

URL_SCHEMES: Final = frozenset({"http", "https", "ftp", "sftp"})
URL_FIELDS: Final = (
    "url",
    "repository",
    "repository_artifact",
    "repository_code",
    "license_url",
)
DATE_FIELDS: Final = (
    "date_released",
    "date_published",
    "date_accessed",
    "date_downloaded",
)
ENTITY_FIELDS: Final = (
    "conference",
    "database_provider",
    "institution",
    "location",
    "publisher",
)

_any_url = TypeAdapter(AnyUrl)


def is_url(value: str) -> bool:
    """Return whether value is a http(s) or (s)ftp URL."""
    try:
        url = _any_url.validate_python(value)
    except ValidationError:
        return False
    return url.scheme in URL_SCHEMES and bool(url.host)


# ---- traversal helpers


def references(citation: Citation) -> Iterator[Tuple[Loc, Reference]]:
    if citation.preferred_citation is not None:
        yield ("preferred_citation",), citation.preferred_citation
    for i, ref in enumerate(citation.references):
        yield ("references", i), ref


def records(citation: Citation) -> Iterator[Tuple[Loc, Record]]:
    """Yield the citation and all references with their location."""
    yield (), citation
    yield from references(citation)


def people(citation: Citation) -> Iterator[Tuple[Loc, Union[Person, Entity]]]:
    """Yield all persons and entities anywhere in the citation."""
    for loc, record in records(citation):
        for name in PEOPLE_FIELDS:
            for i, who in enumerate(getattr(record, name, ())):
                yield (*loc, name, i), who
        for name in ENTITY_FIELDS:
            if (entity := getattr(record, name, None)) is not None:
                yield (*loc, name), entity


def _field_values(
    citation: Citation, names: Tuple[str, ...]
) -> Iterator[Tuple[Loc, str]]:
    for loc, record in records(citation):
        for name in names:
            if (value := getattr(record, name, None)) is not None:
                yield (*loc, name), value


def _identifiers(
    citation: Citation, id_type: IdentifierType
) -> Iterator[Tuple[Loc, str]]:
    for loc, record in records(citation):
        for i, ident in enumerate(record.identifiers):
            if ident.type is id_type:
                yield (*loc, "identifiers", i, "value"), ident.value


def _date_problem(value: str) -> Optional[str]:
    try:
        parse_date(value)
    except PydanticCustomError as e:
        return e.message()
    return None


# ---- rules


@rule
def authors_present(citation: Citation) -> Iterator[Finding]:
    for loc, record in records(citation):
        if not record.authors:
            msg = "at least one author is required"
            yield _error(FindingKind.MISSING_REQUIRED_FIELD, (*loc, "authors"), msg)


@rule
def real_dates(citation: Citation) -> Iterator[Finding]:
    dates = list(_field_values(citation, DATE_FIELDS))
    for loc, who in people(citation):
        if isinstance(who, Entity):
            for name in ("date_start", "date_end"):
                if (value := getattr(who, name)) is not None:
                    dates.append(((*loc, name), value))

    for loc, value in dates:
        if problem := _date_problem(value):
            yield _error(FindingKind.FORMAT_VIOLATION, loc, problem)


@rule
def preferred_citation(citation: Citation) -> Iterator[Finding]:
    if citation.preferred_citation is not None:
        yield Finding(
            kind=FindingKind.PREFERRED_CITATION,
            severity=Severity.INFO,
            loc=("preferred_citation",),
            message=(
                "a preferred citation is given: software and data citation principles "
                "recommend citing the work itself on the same basis as any other "
                "research product"
            ),
        )


@rule
def licensing(citation: Citation) -> Iterator[Finding]:
    if citation.license is None and citation.license_url is None:
        yield Finding(
            kind=FindingKind.LICENSE_UNSPECIFIED,
            severity=Severity.INFO,
            message="licensing unspecified: neither license nor license-url is given",
        )


@rule
def urls(citation: Citation) -> Iterator[Finding]:
    values = list(_field_values(citation, URL_FIELDS))
    values.extend(_identifiers(citation, IdentifierType.URL))
    for loc, who in people(citation):
        if who.website is not None:
            values.append(((*loc, "website"), who.website))

    for loc, value in values:
        if not is_url(value):
            msg = f"'{value}' is not a valid http(s) or (s)ftp URL"
            yield _error(FindingKind.FORMAT_VIOLATION, loc, msg)


@rule
def identifier_syntax(citation: Citation) -> Iterator[Finding]:
    checks: List[Tuple[Loc, str, "re.Pattern[str]", str]] = []
    for loc, value in _field_values(citation, ("doi", "collection_doi")):
        checks.append((loc, value, DOI_PATTERN, "DOI"))
    for loc, value in _identifiers(citation, IdentifierType.DOI):
        checks.append((loc, value, DOI_PATTERN, "DOI"))
    for loc, value in _identifiers(citation, IdentifierType.SWH):
        checks.append((loc, value, SWH_PATTERN, "Software Heritage identifier"))
    for loc, who in people(citation):
        if who.orcid is not None:
            checks.append(((*loc, "orcid"), who.orcid, ORCID_PATTERN, "ORCID URL"))
        if who.email is not None:
            checks.append(((*loc, "email"), who.email, EMAIL_PATTERN, "e-mail address"))

    for loc, value, pattern, what in checks:
        if not pattern.fullmatch(value):
            msg = f"'{value}' is not a valid {what}"
            yield _error(FindingKind.FORMAT_VIOLATION, loc, msg)
