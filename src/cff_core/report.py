from __future__ import annotations

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .errors import Finding, InvalidCitation, Severity
from .schema.models import Citation


class Report(BaseModel):
    """Outcome of decoding and validating a citation document.

    The citation is only present if no finding is an error.
    """

    model_config = ConfigDict(frozen=True)

    citation: Optional[Citation] = None
    findings: Tuple[Finding, ...] = ()

    def _with_severity(self, severity: Severity) -> Tuple[Finding, ...]:
        return tuple(f for f in self.findings if f.severity is severity)

    @property
    def ok(self) -> bool:
        return self.citation is not None

    @property
    def errors(self) -> Tuple[Finding, ...]:
        return self._with_severity(Severity.ERROR)

    @property
    def warnings(self) -> Tuple[Finding, ...]:
        return self._with_severity(Severity.WARNING)

    @property
    def infos(self) -> Tuple[Finding, ...]:
        return self._with_severity(Severity.INFO)

    def unwrap(self) -> Citation:
        """Return the citation, or raise `InvalidCitation` with all findings."""
        if self.citation is None:
            raise InvalidCitation(self.findings)
        return self.citation
