"""
Result Channel Module

Every ledger operation returns either a success value or exactly one
categorised failure:

- Ok(value): the operation succeeded
- Err(kind): the operation failed with an ErrorKind

Failures are never flattened to booleans, so callers can tell
"no chain yet" apart from "corrupted block".

ChainError is the exception form of an Err. It is only raised by
unwrap() at a caller boundary; the core itself never raises it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Optional, TypeVar, Union


T = TypeVar('T')


# ============================================================================
# Error Kinds
# ============================================================================

class ErrorKind(Enum):
    """Kinds of failure produced by the ledger."""

    EMPTY_CHAIN = "empty_chain"
    GENESIS_ALREADY_EXISTS = "genesis_already_exists"
    BLOCK_NOT_FOUND = "block_not_found"
    INVALID_BLOCK = "invalid_block"
    HASH_COMPUTATION_FAILED = "hash_computation_failed"
    DIGEST_UNAVAILABLE = "digest_unavailable"
    UNKNOWN = "unknown"


# ============================================================================
# Result Types
# ============================================================================

@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful result holding a value."""
    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    """
    Failed result.

    Only `kind` takes part in equality, so a result can be compared
    against Err(ErrorKind.X) without knowing the message.
    """
    kind: ErrorKind
    message: str = field(default="", compare=False)
    cause: Optional[ErrorKind] = field(default=None, compare=False)

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap(self):
        """Raise the failure as a ChainError."""
        raise ChainError(self)

    def __str__(self) -> str:
        text = self.kind.value
        if self.message:
            text = f"{text}: {self.message}"
        if self.cause is not None:
            text = f"{text} (caused by {self.cause.value})"
        return text


Result = Union[Ok[T], Err]


# ============================================================================
# Exception Bridge
# ============================================================================

class ChainError(Exception):
    """Raised when an Err is unwrapped at a caller boundary."""

    def __init__(self, failure: Err):
        super().__init__(str(failure))
        self.failure = failure

    @property
    def kind(self) -> ErrorKind:
        return self.failure.kind


def failure_from_exception(exc: BaseException) -> Err:
    """
    Map an exception back onto the result channel.

    A ChainError gives back the Err it carries; anything else becomes
    ErrorKind.UNKNOWN.
    """
    if isinstance(exc, ChainError):
        return exc.failure
    return Err(ErrorKind.UNKNOWN, f"{type(exc).__name__}: {exc}")
