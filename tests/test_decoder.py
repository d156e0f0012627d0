from datetime import date

import pytest

from cff_core.decoder import clean_loc, decode, error_kind
from cff_core.errors import FindingKind, Severity, StructuralFailure
from cff_core.loader import parse_yaml
from cff_core.schema.models import DEFAULT_MESSAGE, Entity, Person
from cff_core.schema.types import IdentifierType, WorkType

K = FindingKind


def kinds_at(report):
    """Return set of (kind, loc) of the findings of a report."""
    return {(f.kind, f.loc) for f in report.findings}


# ---- required fields


@pytest.mark.parametrize(
    "key,name",
    [("title", "title"), ("cff-version", "schema_version"), ("authors", "authors")],
)
def test_missing_required(minimal_doc, key, name):
    del minimal_doc[key]
    report = decode(minimal_doc)
    assert report.citation is None
    assert kinds_at(report) == {(K.MISSING_REQUIRED_FIELD, (name,))}
    assert f"'{key}'" in report.findings[0].message


def test_missing_all_required():
    report = decode({})
    assert report.citation is None
    assert kinds_at(report) == {
        (K.MISSING_REQUIRED_FIELD, ("title",)),
        (K.MISSING_REQUIRED_FIELD, ("schema_version",)),
        (K.MISSING_REQUIRED_FIELD, ("authors",)),
    }


def test_missing_message_defaults(minimal_doc):
    del minimal_doc["message"]
    report = decode(minimal_doc)
    assert report.findings == ()
    assert report.citation.message == DEFAULT_MESSAGE


@pytest.mark.parametrize(
    "key,value,kind",
    [
        ("title", "", K.FORMAT_VIOLATION),
        ("title", "   ", K.FORMAT_VIOLATION),
        ("title", 42, K.TYPE_MISMATCH),
        ("cff-version", ["1.2.0"], K.TYPE_MISMATCH),
        ("message", None, K.TYPE_MISMATCH),
        ("abstract", {"text": "x"}, K.TYPE_MISMATCH),
        ("authors", [], K.FORMAT_VIOLATION),
        ("authors", "Acme", K.TYPE_MISMATCH),
        ("keywords", "research", K.TYPE_MISMATCH),
        ("preferred-citation", "cite the paper", K.TYPE_MISMATCH),
    ],
)
def test_invalid_scalar(minimal_doc, key, value, kind):
    minimal_doc[key] = value
    report = decode(minimal_doc)
    assert report.citation is None
    assert [f.kind for f in report.findings] == [kind]
    assert report.findings[0].severity is Severity.ERROR


def test_collects_all_errors(minimal_doc):
    minimal_doc.update(
        {
            "title": 5,
            "type": "library",
            "date-released": "2021-02-30",
            "license": ["MIT", "no-such-license"],
        }
    )
    del minimal_doc["cff-version"]
    report = decode(minimal_doc)
    assert report.citation is None
    assert kinds_at(report) == {
        (K.TYPE_MISMATCH, ("title",)),
        (K.INVALID_ENUM_VALUE, ("type",)),
        (K.FORMAT_VIOLATION, ("date_released",)),
        (K.INVALID_ENUM_VALUE, ("license", 1)),
        (K.MISSING_REQUIRED_FIELD, ("schema_version",)),
    }


def test_structural_failure():
    for doc in [None, "title: x", ["title"], 3]:
        with pytest.raises(StructuralFailure):
            decode(doc)


# ---- authors


@pytest.mark.parametrize(
    "record",
    [
        {"given-names": "Jane", "family-names": "Doe"},
        {"given_names": "Jane", "family_names": "Doe"},
        {"given-names": "Jane", "family_names": "Doe"},
    ],
)
def test_author_person(minimal_doc, record):
    minimal_doc["authors"] = [record]
    author = decode(minimal_doc).citation.authors[0]
    assert author == Person(given_names="Jane", family_names="Doe")


def test_author_entity(minimal_doc):
    author = decode(minimal_doc).citation.authors[0]
    assert isinstance(author, Entity)
    assert author.name == "Acme Research Lab"


def test_author_errors_per_element(minimal_doc):
    minimal_doc["authors"] = [
        {"name": "Acme"},
        {"email": "jane@doe.org"},
        {"name": "Acme", "given-names": "Jane", "family-names": "Doe"},
        "Jane Doe",
        {"given-names": "Jane", "family-names": 7},
        {"given-names": "John", "family-names": "Doe"},
    ]
    report = decode(minimal_doc)
    assert report.citation is None
    assert kinds_at(report) == {
        (K.UNRECOGNIZED_VARIANT, ("authors", 1)),
        (K.AMBIGUOUS_VARIANT, ("authors", 2)),
        (K.TYPE_MISMATCH, ("authors", 3)),
        (K.TYPE_MISMATCH, ("authors", 4, "family_names")),
    }


def test_invalid_author_only_reported_once(minimal_doc):
    minimal_doc["authors"] = [{"email": "x@y.org"}]
    assert kinds_at(decode(minimal_doc)) == {(K.UNRECOGNIZED_VARIANT, ("authors", 0))}

    minimal_doc["authors"] = [{"name": "Acme", "nickname": "ACME"}, {"name": 5}]
    assert kinds_at(decode(minimal_doc)) == {
        (K.UNKNOWN_FIELD, ("authors", 0, "nickname")),
        (K.TYPE_MISMATCH, ("authors", 1, "name")),
    }


def test_empty_authors(minimal_doc):
    minimal_doc["authors"] = []
    (finding,) = decode(minimal_doc).findings
    assert finding.loc == ("authors",)
    assert finding.message == "at least one author is required"


def test_contact_is_polymorphic(minimal_doc):
    minimal_doc["contact"] = [
        {"name": "Acme"},
        {"given-names": "Jane", "family-names": "Doe", "email": "jane@doe.org"},
    ]
    contact = decode(minimal_doc).citation.contact
    assert isinstance(contact[0], Entity)
    assert isinstance(contact[1], Person)


# ---- enumerations


def test_type_default(minimal_doc):
    assert decode(minimal_doc).citation.type is WorkType.SOFTWARE


def test_type_null_defaults(minimal_doc):
    minimal_doc["type"] = None
    assert decode(minimal_doc).citation.type is WorkType.SOFTWARE


def test_required_enum_null(minimal_doc):
    minimal_doc["identifiers"] = [{"type": None, "value": "x"}]
    (finding,) = decode(minimal_doc).findings
    assert finding.kind is K.MISSING_REQUIRED_FIELD
    assert finding.loc == ("identifiers", 0, "type")
    assert finding.message == "missing required field 'type'"


@pytest.mark.parametrize("token", ["dataset", "Dataset", "DATASET"])
def test_type_dataset(minimal_doc, token):
    minimal_doc["type"] = token
    assert decode(minimal_doc).citation.type is WorkType.DATASET


@pytest.mark.parametrize("token", ["data", "library", 1])
def test_type_invalid(minimal_doc, token):
    minimal_doc["type"] = token
    report = decode(minimal_doc)
    assert report.citation is None
    (finding,) = report.findings
    assert finding.loc == ("type",)
    assert finding.kind in (K.INVALID_ENUM_VALUE, K.TYPE_MISMATCH)


def test_license_or(minimal_doc):
    minimal_doc["license"] = ["MIT", "apache-2.0"]
    c = decode(minimal_doc).citation
    assert [str(x) for x in c.license] == ["MIT", "Apache-2.0"]
    assert c.license_expression == "MIT OR Apache-2.0"


def test_invalid_license_only_reported_once(minimal_doc):
    minimal_doc["license"] = ["MIT", "nope"]
    assert kinds_at(decode(minimal_doc)) == {(K.INVALID_ENUM_VALUE, ("license", 1))}


# ---- dates


def test_date_released(minimal_doc):
    minimal_doc["date-released"] = "2021-02-28"
    assert decode(minimal_doc).citation.released == date(2021, 2, 28)


@pytest.mark.parametrize("value", ["2021-02-30", "2021-13-01", "2021-2-3", "yesterday"])
def test_date_released_invalid(minimal_doc, value):
    minimal_doc["date-released"] = value
    report = decode(minimal_doc)
    assert kinds_at(report) == {(K.FORMAT_VIOLATION, ("date_released",))}


# ---- sequences


def test_sequences(minimal_doc):
    minimal_doc["identifiers"] = [
        {"type": "DOI", "value": "10.5281/zenodo.1"},
        {"type": "url", "value": "https://example.org", "description": "Homepage"},
    ]
    minimal_doc["keywords"] = ["citation", "metadata"]
    minimal_doc["references"] = [
        {
            "type": "article",
            "title": "Paper",
            "authors": [{"family-names": "Doe", "given-names": "J."}],
        }
    ]
    c = decode(minimal_doc).citation
    assert [i.type for i in c.identifiers] == [IdentifierType.DOI, IdentifierType.URL]
    assert c.keywords == ("citation", "metadata")
    assert c.references[0].authors[0].family_names == "Doe"


def test_sequence_errors_per_index(minimal_doc):
    minimal_doc["identifiers"] = [
        {"type": "doi", "value": "10.5281/zenodo.1"},
        {"type": "isbn", "value": "123"},
        {"value": "x"},
    ]
    minimal_doc["references"] = [
        {"type": "article", "authors": [{"name": "Acme"}]},
        {"type": "book", "title": "Book", "authors": [{"nickname": "anon"}]},
    ]
    report = decode(minimal_doc)
    assert kinds_at(report) == {
        (K.INVALID_ENUM_VALUE, ("identifiers", 1, "type")),
        (K.MISSING_REQUIRED_FIELD, ("identifiers", 2, "type")),
        (K.MISSING_REQUIRED_FIELD, ("references", 0, "title")),
        (K.UNRECOGNIZED_VARIANT, ("references", 1, "authors", 0)),
    }


# ---- unknown fields


def test_unknown_fields_lenient(minimal_doc):
    minimal_doc.update({"homepage": "https://example.org", "stars": 5})
    report = decode(minimal_doc)
    assert report.citation is not None
    assert all(f.severity is Severity.WARNING for f in report.findings)
    assert kinds_at(report) == {
        (K.UNKNOWN_FIELD, ("homepage",)),
        (K.UNKNOWN_FIELD, ("stars",)),
    }


def test_unknown_fields_strict(minimal_doc):
    minimal_doc.update({"homepage": "https://example.org", "stars": 5})
    report = decode(minimal_doc, strict=True)
    assert report.citation is None
    assert [f.kind for f in report.errors] == [K.UNKNOWN_FIELD] * 2


def test_unknown_nested_field(minimal_doc):
    minimal_doc["authors"] = [{"name": "Acme", "nickname": "ACME"}]
    report = decode(minimal_doc)
    assert report.citation.authors == (Entity(name="Acme"),)
    assert kinds_at(report) == {(K.UNKNOWN_FIELD, ("authors", 0, "nickname"))}


def test_unknown_field_with_other_errors(minimal_doc):
    minimal_doc.update({"stars": 5, "title": ""})
    report = decode(minimal_doc)
    assert report.citation is None
    assert len(report.errors) == 1
    assert len(report.warnings) == 1


def test_unknown_non_text_key(minimal_doc):
    minimal_doc.update(parse_yaml("2021: release year\n"))
    report = decode(minimal_doc)
    assert report.citation is not None
    assert kinds_at(report) == {(K.UNKNOWN_FIELD, ("2021",))}
    assert report.warnings[0].message == "unknown field '2021'"

    assert not decode(minimal_doc, strict=True).ok


def test_unknown_key_named_like_variant(minimal_doc):
    minimal_doc["identifiers"] = [{"type": "other", "value": "x", "person": "Jane"}]
    (finding,) = decode(minimal_doc).findings
    assert finding.kind is K.UNKNOWN_FIELD
    assert finding.loc == ("identifiers", 0, "person")
    assert finding.message == "unknown field 'person'"


def test_duplicate_spelling(minimal_doc):
    minimal_doc["date-released"] = "2020-01-01"
    minimal_doc["date_released"] = "2020-01-02"
    report = decode(minimal_doc)
    assert report.citation.date_released == "2020-01-02"
    assert kinds_at(report) == {(K.UNKNOWN_FIELD, ("date-released",))}


def test_spellings_equivalent(minimal_doc):
    hyphenated = dict(minimal_doc, **{"repository-code": "https://x.org", "license-url": "https://x.org/l"})
    underscored = dict(minimal_doc, repository_code="https://x.org", license_url="https://x.org/l")
    del underscored["cff-version"]
    underscored["cff_version"] = "1.2.0"
    assert decode(hyphenated).citation == decode(underscored).citation


def test_idempotent(minimal_doc):
    first = decode(minimal_doc)
    second = decode(minimal_doc)
    assert first.citation == second.citation
    assert first.findings == second.findings == ()


# ---- helpers


def test_error_kind():
    assert error_kind("missing") is K.MISSING_REQUIRED_FIELD
    assert error_kind("string_type") is K.TYPE_MISMATCH
    assert error_kind("model_attributes_type") is K.TYPE_MISMATCH
    assert error_kind("extra_forbidden") is K.UNKNOWN_FIELD
    assert error_kind("too_short") is K.FORMAT_VIOLATION
    assert error_kind("less_than_equal") is K.FORMAT_VIOLATION


def test_clean_loc():
    assert clean_loc(("authors", 0, "person", "email")) == ("authors", 0, "email")
    assert clean_loc(("references", 1, "authors", 2, "entity")) == (
        "references",
        1,
        "authors",
        2,
    )
    assert clean_loc(("title",)) == ("title",)
    assert clean_loc(("authors", 0, "entity", "person")) == ("authors", 0, "person")
    assert clean_loc(("identifiers", 0, "person")) == ("identifiers", 0, "person")
