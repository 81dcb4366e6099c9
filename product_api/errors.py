from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    MALFORMED_ID = "malformed_id"
    NOT_FOUND = "not_found"
    STORAGE = "storage"


# HTTP status for each failure kind
STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.MALFORMED_ID: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.STORAGE: 500,
}


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a storage or service call.

    Exactly one of `value` / `error` is meaningful: check `ok` first.
    Storage code never raises driver errors past this boundary, it
    returns a failed Result instead.
    """
    value: T | None = None
    error: Failure | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T | None = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "Result[T]":
        return cls(error=Failure(kind, message))


def not_found(message: str = "Product not found") -> Result:
    return Result.failure(ErrorKind.NOT_FOUND, message)


def malformed_id(product_id: str) -> Result:
    return Result.failure(ErrorKind.MALFORMED_ID, f"Invalid product id: {product_id}")


def storage_fault(message: str) -> Result:
    return Result.failure(ErrorKind.STORAGE, message)
