"""Error kinds and step results for the swap flow."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, cast

T = TypeVar("T")


class SwapErrorKind(Enum):
    """Ways a swap run can fail. Every kind is terminal for the run."""

    TOKEN_LOOKUP_FAILED = "token_lookup_failed"
    POOL_NOT_FOUND = "pool_not_found"
    POOL_READ_FAILED = "pool_read_failed"
    QUOTE_FAILED = "quote_failed"
    APPROVAL_FAILED = "approval_failed"
    SWAP_SUBMISSION_FAILED = "swap_submission_failed"


class SwapError(Exception):
    """Base error for swap runs."""

    kind: SwapErrorKind | None = None

    def __init__(self, message: str, kind: SwapErrorKind | None = None) -> None:
        super().__init__(message)
        if kind is not None:
            self.kind = kind


class TokenLookupError(SwapError):
    """symbol() or decimals() could not be read from a token."""

    kind = SwapErrorKind.TOKEN_LOOKUP_FAILED


class PoolNotFoundError(SwapError):
    """Factory returned the zero address for the pair and fee tier."""

    kind = SwapErrorKind.POOL_NOT_FOUND


class PoolReadError(SwapError):
    """A factory or pool read failed at the RPC level."""

    kind = SwapErrorKind.POOL_READ_FAILED


class QuoteFailedError(SwapError):
    """The quoter call reverted or the RPC call failed."""

    kind = SwapErrorKind.QUOTE_FAILED


class ApprovalFailedError(SwapError):
    """The approval transaction failed to submit, confirm, or succeed."""

    kind = SwapErrorKind.APPROVAL_FAILED


class SwapSubmissionError(SwapError):
    """The swap transaction failed to submit."""

    kind = SwapErrorKind.SWAP_SUBMISSION_FAILED


_ERRORS_BY_KIND: dict[SwapErrorKind, type[SwapError]] = {
    SwapErrorKind.TOKEN_LOOKUP_FAILED: TokenLookupError,
    SwapErrorKind.POOL_NOT_FOUND: PoolNotFoundError,
    SwapErrorKind.POOL_READ_FAILED: PoolReadError,
    SwapErrorKind.QUOTE_FAILED: QuoteFailedError,
    SwapErrorKind.APPROVAL_FAILED: ApprovalFailedError,
    SwapErrorKind.SWAP_SUBMISSION_FAILED: SwapSubmissionError,
}


def error_for_kind(kind: SwapErrorKind, message: str) -> SwapError:
    """Build the exception class matching an error kind."""
    return _ERRORS_BY_KIND[kind](message)


@dataclass(frozen=True)
class StepResult(Generic[T]):
    """Result of one step of the swap flow.

    Steps return this instead of raising, so the orchestrator decides
    whether to continue or abort.

    Attributes:
        value: The step's output, or None if it failed.
        error: If the step failed, the kind of failure.
        error_detail: Optional human-readable detail about the failure.
        cause: The underlying exception, when there was one.

    Examples:
        result = StepResult.ok(pool)
        assert result.is_ok

        result = StepResult.fail(SwapErrorKind.POOL_NOT_FOUND, "no pool at fee 100")
        assert result.is_error
    """

    value: T | None = None
    error: SwapErrorKind | None = None
    error_detail: str | None = None
    cause: BaseException | None = None

    @property
    def is_ok(self) -> bool:
        """True if the step succeeded."""
        return self.error is None

    @property
    def is_error(self) -> bool:
        """True if the step failed."""
        return self.error is not None

    def unwrap(self) -> T:
        """Return the value, or raise the SwapError matching the failure."""
        if self.error is not None:
            raise error_for_kind(self.error, self.error_detail or self.error.value) from self.cause
        return cast(T, self.value)

    @classmethod
    def ok(cls, value: T) -> StepResult[T]:
        """Create a successful result."""
        return cls(value=value)

    @classmethod
    def fail(
        cls,
        error: SwapErrorKind,
        detail: str | None = None,
        cause: BaseException | None = None,
    ) -> StepResult[T]:
        """Create a failed result."""
        return cls(error=error, error_detail=detail, cause=cause)


__all__ = [
    "SwapErrorKind",
    "SwapError",
    "TokenLookupError",
    "PoolNotFoundError",
    "PoolReadError",
    "QuoteFailedError",
    "ApprovalFailedError",
    "SwapSubmissionError",
    "error_for_kind",
    "StepResult",
]
