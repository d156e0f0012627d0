"""Reading citation files from disk into document trees."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Union

from ruamel.yaml import YAML
from ruamel.yaml.constructor import SafeConstructor
from ruamel.yaml.error import YAMLError

from .core import check
from .errors import ReadError
from .report import Report

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "CITATION.cff"


class CffConstructor(SafeConstructor):
    """Safe YAML constructor that keeps timestamps and floats as text.

    Dates are validated by the decoder, so that an invalid date is reported
    as a finding instead of failing while loading the file.
    Floats keep their digits, e.g. `version: 1.10` stays `"1.10"`.
    """


CffConstructor.add_constructor(
    "tag:yaml.org,2002:timestamp", CffConstructor.construct_yaml_str
)
CffConstructor.add_constructor(
    "tag:yaml.org,2002:float", CffConstructor.construct_yaml_str
)


def _yaml() -> YAML:
    yaml = YAML(typ="safe", pure=True)
    yaml.Constructor = CffConstructor
    return yaml


def parse_yaml(text: str) -> Any:
    """Parse YAML text into a tree of dicts, lists and scalars."""
    try:
        return _yaml().load(text)
    except YAMLError as e:
        raise ReadError(f"Invalid YAML: {e}") from e


def read_document(path: Union[str, Path]) -> Any:
    """Read a citation file into a document tree.

    If `path` is a directory, the `CITATION.cff` file inside is read.
    Any failure is raised as `ReadError`.
    """
    path = Path(path)
    if path.is_dir():
        path = path / DEFAULT_FILENAME
    logger.debug("Reading %s", path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ReadError(f"Cannot read {path}: {e}") from e
    return parse_yaml(text)


def load(path: Union[str, Path], *, strict: bool = False) -> Report:
    """Read, decode and validate a citation file."""
    return check(read_document(path), strict=strict)
