"""
Typed error taxonomy shared by every facade operation.

Each failed call raises exactly one ``JsonError`` subclass. The subclass names
the operation family that failed and ``kind`` names the condition, so callers
can catch broadly (``except DecodeError``) and still switch on the cause.
"""

from collections.abc import Iterator
from enum import Enum


class ErrorKind(Enum):
    """
    Closed set of terminal failure conditions.

    One kind is attached to every raised error; a single call never reports
    more than one.
    """

    DEPTH_EXCEEDED = "depth_exceeded"
    MALFORMED = "malformed"
    CONTROL_CHARACTER = "control_character"
    SYNTAX = "syntax"
    INVALID_ENCODING = "invalid_encoding"
    RECURSION = "recursion"
    NON_FINITE_NUMBER = "non_finite_number"
    UNSUPPORTED_TYPE = "unsupported_type"
    INVALID_KEY_NAME = "invalid_key_name"
    LINTING_FAILED = "linting_failed"
    VALIDATION_FAILED = "validation_failed"
    UNKNOWN = "unknown"
    IO_FAILURE = "io_failure"


class JsonError(Exception):
    """
    Base error for all facade failures.

    Carries the failure kind, a human-readable message, the file path for
    file-backed operations and the error it wraps. ``cause`` is mirrored onto
    ``__cause__`` so tracebacks show the same chain.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        path: str | None = None,
        cause: BaseException | None = None,
        diagnostic: str | None = None,
    ) -> None:
        if not isinstance(kind, ErrorKind):
            raise TypeError("kind must be an ErrorKind")

        self.kind = kind
        self.message = message
        self.path = path
        self.cause = cause
        self.diagnostic = diagnostic

        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def chain(self) -> Iterator[BaseException]:
        """Yields this error followed by each wrapped cause, outermost first."""
        current: BaseException | None = self
        while current is not None:
            yield current
            current = current.cause if isinstance(current, JsonError) else None

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(kind={self.kind.name}, "
            f"message={self.message!r}, path={self.path!r})"
        )


class DecodeError(JsonError):
    """Raised when text could not be decoded into a value."""


class EncodeError(JsonError):
    """Raised when a value could not be encoded, or saved once encoded."""


class LintingError(JsonError):
    """Raised when the linter rejects the encoded text."""


class ValidationError(JsonError):
    """
    Raised when a decoded value fails schema validation.

    ``violations`` keeps every reported violation in the validator's order;
    the message lists them one per line.
    """

    def __init__(
        self,
        message: str,
        violations: tuple = (),
        *,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(ErrorKind.VALIDATION_FAILED, message, cause=cause)
        self.violations = tuple(violations)


class SourceError(JsonError):
    """
    Raised when a byte source or sink could not be read or written.

    ``kind`` is ``INVALID_ENCODING`` when a text handle failed to decode or
    encode, otherwise ``IO_FAILURE``.
    """

    def __init__(
        self,
        message: str,
        path: str,
        *,
        cause: BaseException | None = None,
        kind: ErrorKind = ErrorKind.IO_FAILURE,
    ) -> None:
        super().__init__(
            kind,
            message,
            path=path,
            cause=cause,
            diagnostic=str(cause) if cause is not None else None,
        )


__all__ = [
    "DecodeError",
    "EncodeError",
    "ErrorKind",
    "JsonError",
    "LintingError",
    "SourceError",
    "ValidationError",
]
