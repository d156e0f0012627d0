"""Decoding of parsed citation documents into the typed model.

Decoding never stops at the first problem: pydantic validates every field
and every sequence element, and all resulting errors are translated into
findings, so that a single run reports everything that needs fixing.
"""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Dict, List, Mapping

from pydantic import ValidationError
from pydantic_core import ErrorDetails
from typing_extensions import Final

from .errors import (
    Finding,
    FindingKind,
    Loc,
    Severity,
    StructuralFailure,
    has_errors,
)
from .report import Report
from .schema.base import DROP_UNKNOWN
from .schema.fields import document_key
from .schema.models import AUTHOR_VARIANTS, PEOPLE_FIELDS, Citation

logger = logging.getLogger(__name__)

ERROR_KINDS: Final[Mapping[str, FindingKind]] = MappingProxyType(
    {
        "missing": FindingKind.MISSING_REQUIRED_FIELD,
        "type_mismatch": FindingKind.TYPE_MISMATCH,
        "invalid_enum_value": FindingKind.INVALID_ENUM_VALUE,
        "enum": FindingKind.INVALID_ENUM_VALUE,
        "ambiguous_variant": FindingKind.AMBIGUOUS_VARIANT,
        "unrecognized_variant": FindingKind.UNRECOGNIZED_VARIANT,
        "union_tag_not_found": FindingKind.UNRECOGNIZED_VARIANT,
        "union_tag_invalid": FindingKind.UNRECOGNIZED_VARIANT,
        "format_violation": FindingKind.FORMAT_VIOLATION,
        "extra_forbidden": FindingKind.UNKNOWN_FIELD,
    }
)
"""Finding kinds of pydantic error types (custom and built-in)."""


def error_kind(error_type: str) -> FindingKind:
    """Return the finding kind for a pydantic error type."""
    if kind := ERROR_KINDS.get(error_type):
        return kind
    if error_type.endswith("_type"):  # string_type, tuple_type, model_type, ...
        return FindingKind.TYPE_MISMATCH
    return FindingKind.FORMAT_VIOLATION


def clean_loc(loc: Loc) -> Loc:
    """Remove variant tags that pydantic inserts after indices of author sequences.

    A tag is only recognized directly after `<people field>, <index>`, so that
    document keys named like a tag keep their place in the location.
    """
    ret: List[Any] = []
    for i, part in enumerate(loc):
        if (
            part in AUTHOR_VARIANTS
            and i >= 2
            and isinstance(loc[i - 1], int)
            and loc[i - 2] in PEOPLE_FIELDS
        ):
            continue
        ret.append(part)
    return tuple(ret)


def _field_name(loc: Loc) -> str:
    names = [p for p in loc if isinstance(p, str)]
    return names[-1] if names else "document"


def to_finding(error: ErrorDetails, *, strict: bool = False) -> Finding:
    """Translate one pydantic error into a finding."""
    kind = error_kind(error["type"])
    loc = clean_loc(error["loc"])
    severity = Severity.ERROR
    if kind is FindingKind.MISSING_REQUIRED_FIELD:
        message = f"missing required field '{document_key(_field_name(loc))}'"
    elif kind is FindingKind.UNKNOWN_FIELD:
        message = f"unknown field '{loc[-1]}'"
        severity = Severity.ERROR if strict else Severity.WARNING
    else:
        message = error["msg"]
    return Finding(kind=kind, severity=severity, loc=loc, message=message)


def translate_errors(exc: ValidationError, *, strict: bool = False) -> List[Finding]:
    return [to_finding(err, strict=strict) for err in exc.errors(include_url=False)]


def decode(document: Any, *, strict: bool = False) -> Report:
    """Decode a parsed document tree (mapping of keys to values) into a Citation.

    Returns a report with the citation and possibly warnings, or a report
    without citation and the complete list of findings.
    Unknown keys are warnings, or errors if `strict` is set.

    Raises `StructuralFailure` if the document root is not a mapping.
    """
    if not isinstance(document, Mapping):
        msg = f"document root must be a mapping, got {type(document).__name__}"
        raise StructuralFailure(msg)

    context: Dict[str, Any] = {DROP_UNKNOWN: False}
    try:
        citation = Citation.model_validate(document, context=context)
    except ValidationError as e:
        findings = translate_errors(e, strict=strict)
    else:
        return Report(citation=citation)

    if has_errors(findings):
        logger.debug("Decoding failed with %d finding(s)", len(findings))
        return Report(findings=tuple(findings))

    # only tolerated unknown keys left, decode again without them
    logger.debug("Ignoring %d unknown field(s)", len(findings))
    citation = Citation.model_validate(document, context={DROP_UNKNOWN: True})
    return Report(citation=citation, findings=tuple(findings))
