from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, ValidationInfo, model_validator
from typing_extensions import Final

from .fields import field_resolver

DROP_UNKNOWN: Final[str] = "drop_unknown"
"""Validation context flag: discard unknown keys instead of rejecting them."""


class CffModel(BaseModel):
    """Base for all records of a citation file.

    Records are immutable and exclusively owned by their citation.

    Before validation, the accepted document spellings of keys are resolved
    to canonical field names. Unknown keys are rejected (and reported by
    pydantic as `extra_forbidden` at their location), unless the validation
    context sets `DROP_UNKNOWN`.
    """

    model_config = ConfigDict(
        # no mutation after construction
        frozen=True,
        # unknown keys surface as errors, the decoder decides on severity
        extra="forbid",
        # defaults should also be validated
        validate_default=True,
        # for JSON compat
        allow_inf_nan=False,
    )

    @model_validator(mode="before")
    @classmethod
    def resolve_field_keys(cls, data: Any, info: ValidationInfo) -> Any:
        if not isinstance(data, Mapping):
            return data  # instances pass, everything else fails as type mismatch
        resolved, unknown = field_resolver(cls).split(data)
        if unknown and not (info.context or {}).get(DROP_UNKNOWN):
            # YAML keys can be numbers, dates etc., extra keys must be strings
            resolved.update((str(key), value) for key, value in unknown.items())
        return resolved
