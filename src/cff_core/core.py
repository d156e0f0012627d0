"""Entry point combining decoding and validation of citation documents."""
from __future__ import annotations

import logging
from typing import Any

from .decoder import decode
from .errors import StructuralFailure, has_errors
from .report import Report
from .validator import validate

logger = logging.getLogger(__name__)


def check(document: Any, *, strict: bool = False) -> Report:
    """Decode and validate a parsed citation document.

    Args:
        document: document tree as produced by a YAML or JSON loader
        strict: treat unknown keys as errors instead of warnings

    Returns:
        A report with the citation and non-error findings (warnings, infos),
        or, if anything is wrong, a report with all findings and no citation.
    """
    try:
        decoded = decode(document, strict=strict)
    except StructuralFailure as e:
        logger.debug("Structural failure: %s", e)
        return Report(findings=(e.finding,))

    if decoded.citation is None:
        return decoded

    findings = (*decoded.findings, *validate(decoded.citation))
    citation = None if has_errors(findings) else decoded.citation
    return Report(citation=citation, findings=findings)
