from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from product_api.products.models import ProductCreate, ProductUpdate


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass
class ValidationResult:
    errors: list[FieldError] = field(default_factory=list)
    value: dict[str, Any] | None = None

    @property
    def ok(self) -> bool:
        return not self.errors

    def message(self) -> str:
        details = ", ".join(f"{e.field}: {e.message}" for e in self.errors)
        return f"Product validation failed: {details}"


def _field_error(error: dict) -> FieldError:
    loc = ".".join(str(part) for part in error.get("loc", ())) or "body"
    return FieldError(field=loc, message=error.get("msg", "invalid value"))


def validate_product(data: Any, partial: bool = False) -> ValidationResult:
    """
    Check a candidate product body before it reaches storage.

    Full mode (create, or the merged record on update) requires every
    required field. Partial mode accepts any subset of mutable fields but
    holds each given field to the same rule. Unknown keys, including
    `id` and `createdAt`, are dropped from the cleaned value.
    """
    if not isinstance(data, Mapping):
        return ValidationResult(errors=[FieldError("body", "Request body must be a JSON object")])

    model = ProductUpdate if partial else ProductCreate
    try:
        parsed = model.model_validate(dict(data))
    except ValidationError as e:
        return ValidationResult(errors=[_field_error(err) for err in e.errors()])

    return ValidationResult(value=parsed.model_dump(exclude_unset=partial))
