"""cff_core package."""
import importlib_metadata
from typing_extensions import Final

from .core import check
from .decoder import decode
from .errors import (
    CffError,
    Finding,
    FindingKind,
    InvalidCitation,
    ReadError,
    Severity,
    StructuralFailure,
)
from .loader import load, parse_yaml, read_document
from .report import Report
from .schema import Citation
from .validator import validate

# Set version, will use version from pyproject.toml if defined
__version__: Final[str] = importlib_metadata.version(__package__ or __name__)

__all__ = [
    "check",
    "decode",
    "validate",
    "load",
    "parse_yaml",
    "read_document",
    "Citation",
    "Report",
    "Finding",
    "FindingKind",
    "Severity",
    "CffError",
    "InvalidCitation",
    "ReadError",
    "StructuralFailure",
]
