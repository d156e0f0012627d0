"""Findings reported on citation documents, and exceptions of the package."""
from __future__ import annotations

from enum import Enum
from typing import Iterable, Tuple, Union

from pydantic import BaseModel, ConfigDict

Loc = Tuple[Union[str, int], ...]
"""Location of a finding: canonical field names and sequence indices."""


class Severity(str, Enum):
    ERROR = "error"
    """Hard violation, the document is rejected."""
    WARNING = "warning"
    """Problem that does not prevent using the document."""
    INFO = "info"
    """Informational note."""


class FindingKind(str, Enum):
    """Taxonomy of problems found in citation documents."""

    MISSING_REQUIRED_FIELD = "MissingRequiredField"
    TYPE_MISMATCH = "TypeMismatch"
    INVALID_ENUM_VALUE = "InvalidEnumValue"
    AMBIGUOUS_VARIANT = "AmbiguousVariant"
    UNRECOGNIZED_VARIANT = "UnrecognizedVariant"
    FORMAT_VIOLATION = "FormatViolation"
    UNKNOWN_FIELD = "UnknownField"
    STRUCTURAL_FAILURE = "StructuralFailure"
    # advisories
    PREFERRED_CITATION = "PreferredCitation"
    LICENSE_UNSPECIFIED = "LicenseUnspecified"


def format_loc(loc: Loc) -> str:
    """Render a location like `authors[1].given_names`."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path


class Finding(BaseModel):
    """A single problem or note about a citation document."""

    model_config = ConfigDict(frozen=True)

    kind: FindingKind
    severity: Severity
    loc: Loc = ()
    message: str

    @property
    def path(self) -> str:
        return format_loc(self.loc)

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def __str__(self) -> str:
        where = f"{self.path}: " if self.loc else ""
        return f"{self.severity.value} [{self.kind.value}] {where}{self.message}"


def has_errors(findings: Iterable[Finding]) -> bool:
    return any(f.is_error for f in findings)


# ----


class CffError(Exception):
    """Base class of all errors raised by cff_core."""


class StructuralFailure(CffError):
    """Document cannot be traversed at all (e.g. root is not a mapping)."""

    def __init__(self, message: str):
        super().__init__(message)
        self.finding = Finding(
            kind=FindingKind.STRUCTURAL_FAILURE,
            severity=Severity.ERROR,
            message=message,
        )


class ReadError(CffError):
    """Citation file could not be read or parsed into a document tree."""


class InvalidCitation(CffError):
    """Citation document has errors, carries the complete list of findings."""

    def __init__(self, findings: Iterable[Finding]):
        self.findings: Tuple[Finding, ...] = tuple(findings)
        errors = [f for f in self.findings if f.is_error]
        lines = "\n".join(f"  {f}" for f in errors)
        super().__init__(f"Citation has {len(errors)} error(s):\n{lines}")
