"""
Schema validation of parsed model output.

A response that parses as JSON but does not match its schema is not an
error: the pipeline logs the violations and carries on with the raw object,
which the normalizer can read defensively. validate_output() therefore never
raises on a bad shape and returns one of two tagged outcomes.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

M = TypeVar('M', bound=BaseModel)


@dataclass(frozen=True)
class FieldViolation:
    """One field that failed validation."""

    path: str
    message: str
    error_type: str

    def to_dict(self) -> dict[str, str]:
        return {'path': self.path, 'message': self.message, 'error_type': self.error_type}


@dataclass(frozen=True)
class ValidatedOutput(Generic[M]):
    """Schema passed. data is the model dumped back to camelCase keys."""

    model: M
    data: dict[str, Any]

    @property
    def schema_valid(self) -> bool:
        return True

    @property
    def violations(self) -> list[FieldViolation]:
        return []


@dataclass(frozen=True)
class UnverifiedOutput:
    """Schema failed. data is the raw parsed object, untouched."""

    data: dict[str, Any]
    violations: list[FieldViolation] = field(default_factory=list)

    @property
    def schema_valid(self) -> bool:
        return False


ValidationOutcome = ValidatedOutput | UnverifiedOutput


def _format_path(loc: tuple[int | str, ...]) -> str:
    return '.'.join(str(part) for part in loc) or '<root>'


def validate_output(schema: type[M], raw: dict[str, Any]) -> ValidationOutcome:
    """
    Validate a parsed response against an expert output schema.

    Args:
        schema: Pydantic response model for the expert family
        raw: Object extracted from the model response

    Returns:
        ValidatedOutput on success, UnverifiedOutput with field-level
        violations otherwise
    """
    try:
        model = schema.model_validate(raw)
    except ValidationError as e:
        violations = [
            FieldViolation(
                path=_format_path(err['loc']),
                message=err['msg'],
                error_type=err['type'],
            )
            for err in e.errors()
        ]
        return UnverifiedOutput(data=raw if isinstance(raw, dict) else {}, violations=violations)

    return ValidatedOutput(model=model, data=model.model_dump(by_alias=True))
