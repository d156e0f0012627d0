import copy
from pathlib import Path

import pytest

MINIMAL_DOC = {
    "cff-version": "1.2.0",
    "message": "If you use this software, please cite it as below.",
    "title": "My Research Software",
    "authors": [{"name": "Acme Research Lab"}],
}
"""Smallest valid citation document (one entity author)."""

FULL_CFF = """\
cff-version: 1.2.0
message: If you use this software, please cite it as below.
title: My Research Software
abstract: Does research things.
type: software
version: 2.0.4
date-released: 2021-08-11
doi: 10.5281/zenodo.1234
commit: 1ff847d81f29c45a3a1a5ce73d38e45c2f319bba
license:
  - Apache-2.0
  - MIT
repository-code: https://github.com/acme/my-research-software
url: https://acme.example.org/software
keywords:
  - research
  - software
authors:
  - given-names: Stephan
    family-names: Druskat
    orcid: https://orcid.org/0000-0003-4925-7248
    affiliation: German Aerospace Center
  - name: Acme Research Lab
    website: https://acme.example.org
contact:
  - name: Acme Research Lab
    email: lab@acme.example.org
identifiers:
  - type: doi
    value: 10.5281/zenodo.1234
    description: The concept DOI of the work.
  - type: swh
    value: swh:1:rel:99f6850374dc6597af01bd0ee1d3fc0699301b9f
references:
  - type: article
    title: A paper about the software
    authors:
      - family-names: Doe
        given-names: Jane
    journal: Journal of Research Software
    year: 2020
    volume: 12
"""
"""Citation file using most of the supported features, without problems."""


@pytest.fixture
def minimal_doc():
    """Fresh copy of the minimal valid document, safe to modify in a test."""
    return copy.deepcopy(MINIMAL_DOC)


@pytest.fixture
def cff_file(tmp_path):
    """Return a function writing text into a citation file in a temporary directory."""

    def write(text: str, name: str = "CITATION.cff") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return write


@pytest.fixture
def full_cff():
    return FULL_CFF
