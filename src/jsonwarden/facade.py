"""
JSON facade: decode, encode, lint and validate behind one typed error model.

The facade owns the translation from collaborator signals to ``ErrorKind``,
the partial-output suppression rule, the recontextualization of file
failures with their path, and the aggregation of schema violations.
"""

import logging
from typing import Any

from jsonschema.exceptions import SchemaError

from .errors import DecodeError
from .errors import EncodeError
from .errors import ErrorKind
from .errors import JsonError
from .errors import LintingError
from .errors import ValidationError
from .lint import Linter
from .native import CodecSignal
from .native import JsonValue
from .native import NativeCodec
from .options import CodecOptions
from .options import resolve_options
from .schema import SchemaValidator
from .source import Source
from .source import describe
from .source import read_all
from .source import write_all

logger = logging.getLogger(__name__)

DEPTH_MESSAGE = "The maximum stack depth of {max_depth} was exceeded."

# signal -> (kind, message template)
DECODE_ERRORS: dict[int, tuple[ErrorKind, str]] = {
    CodecSignal.DEPTH: (ErrorKind.DEPTH_EXCEEDED, DEPTH_MESSAGE),
    CodecSignal.STATE_MISMATCH: (
        ErrorKind.MALFORMED,
        "The value is not JSON or is malformed.",
    ),
    CodecSignal.CTRL_CHAR: (
        ErrorKind.CONTROL_CHARACTER,
        "An unexpected control character was found.",
    ),
    CodecSignal.SYNTAX: (
        ErrorKind.SYNTAX,
        "The encoded value has a syntax error.",
    ),
    CodecSignal.UTF8: (
        ErrorKind.INVALID_ENCODING,
        "The encoded value contains invalid UTF-8 characters.",
    ),
}

# signal -> (kind, message template, suppressed under partial output)
ENCODE_ERRORS: dict[int, tuple[ErrorKind, str, bool]] = {
    CodecSignal.DEPTH: (ErrorKind.DEPTH_EXCEEDED, DEPTH_MESSAGE, False),
    CodecSignal.RECURSION: (
        ErrorKind.RECURSION,
        "A recursive value was found and partial output is not enabled.",
        True,
    ),
    CodecSignal.INF_OR_NAN: (
        ErrorKind.NON_FINITE_NUMBER,
        "An INF or NAN value was found and partial output is not enabled.",
        True,
    ),
    CodecSignal.UNSUPPORTED_TYPE: (
        ErrorKind.UNSUPPORTED_TYPE,
        "An unsupported value type was found and partial output is not "
        "enabled.",
        True,
    ),
    CodecSignal.INVALID_PROPERTY_NAME: (
        ErrorKind.INVALID_KEY_NAME,
        "The value contained a property with an invalid JSON key name.",
        False,
    ),
}

LINT_MESSAGE = "The encoded value is not valid."
LINT_FILE_MESSAGE = 'The encoded value in the file "{path}" is not valid.'
VALIDATION_HEADER = "The decoded value failed validation:"


class Json:
    """
    Manages encoding, decoding, linting, and validation of JSON data.

    Collaborators are built once, either by the caller or here, and only
    read afterwards, so one instance can serve concurrent callers as long as
    the collaborators can.
    """

    def __init__(
        self,
        codec: NativeCodec | None = None,
        linter: Linter | None = None,
        validator: SchemaValidator | None = None,
    ) -> None:
        self.codec = codec if codec is not None else NativeCodec()
        self.linter = linter if linter is not None else Linter()
        self.validator = (
            validator if validator is not None else SchemaValidator()
        )

    def decode(
        self,
        source: str | bytes,
        options: CodecOptions | None = None,
        **kwargs: Any,
    ) -> JsonValue:
        """
        Decodes JSON text or UTF-8 bytes.

        Raises ``DecodeError`` whose ``kind`` names the failure. A document
        holding ``null`` decodes to ``None`` without error.
        """
        options = resolve_options(options, kwargs)
        result = self.codec.decode(source, options)

        if not result.failed:
            return result.value

        kind, template = DECODE_ERRORS.get(
            result.signal, (ErrorKind.UNKNOWN, result.diagnostic)
        )
        raise DecodeError(
            kind,
            template.format(max_depth=options.max_depth)
            if kind is ErrorKind.DEPTH_EXCEEDED
            else template,
            diagnostic=result.diagnostic,
        )

    def decode_file(
        self,
        source: Source,
        options: CodecOptions | None = None,
        **kwargs: Any,
    ) -> JsonValue:
        """
        Reads a whole file, or file object, and decodes its contents.

        Every failure, read or decode, is raised as a ``DecodeError`` naming
        the file, with the original error as its cause.
        """
        options = resolve_options(options, kwargs)
        path = describe(source)
        try:
            return self.decode(read_all(source), options)
        except JsonError as exc:
            logger.debug("Decoding %s failed: %s", path, exc.message)
            raise DecodeError(
                exc.kind,
                f'The file "{path}" could not be decoded: {exc.message}',
                path=path,
                cause=exc,
                diagnostic=exc.diagnostic,
            ) from exc

    def encode(
        self,
        value: Any,
        options: CodecOptions | None = None,
        **kwargs: Any,
    ) -> str:
        """
        Encodes a value as JSON text.

        With ``partial_output_on_error`` enabled, recursion, non-finite
        numbers and unsupported types are replaced in the output instead of
        failing. Depth and key-name errors always fail.
        """
        options = resolve_options(options, kwargs)
        result = self.codec.encode(value, options)

        if not result.failed:
            return result.text

        kind, template, suppressible = ENCODE_ERRORS.get(
            result.signal, (ErrorKind.UNKNOWN, result.diagnostic, False)
        )
        if suppressible and options.partial_output_on_error:
            logger.debug(
                "Suppressed %s while encoding with partial output: %s",
                kind.name,
                result.diagnostic,
            )
            return result.text

        raise EncodeError(
            kind,
            template.format(max_depth=options.max_depth)
            if kind is ErrorKind.DEPTH_EXCEEDED
            else template,
            diagnostic=result.diagnostic,
        )

    def encode_file(
        self,
        value: Any,
        target: Source,
        options: CodecOptions | None = None,
        **kwargs: Any,
    ) -> None:
        """
        Encodes a value and writes the text to a file or file object.

        Failures at either stage are raised as an ``EncodeError`` naming the
        target, with the original error as its cause.
        """
        options = resolve_options(options, kwargs)
        path = describe(target)
        try:
            write_all(target, self.encode(value, options))
        except JsonError as exc:
            logger.debug("Encoding to %s failed: %s", path, exc.message)
            raise EncodeError(
                exc.kind,
                f'The value could not be encoded and saved to "{path}": '
                f"{exc.message}",
                path=path,
                cause=exc,
                diagnostic=exc.diagnostic,
            ) from exc

    def lint(self, source: str | bytes) -> None:
        """Lints JSON text, raising ``LintingError`` when it is not valid."""
        diagnostic = self.linter.lint(source)
        if diagnostic is not None:
            raise LintingError(
                ErrorKind.LINTING_FAILED,
                LINT_MESSAGE,
                cause=diagnostic,
                diagnostic=str(diagnostic),
            ) from diagnostic

    def lint_file(self, source: Source) -> None:
        """Lints the contents of a file, naming it in any ``LintingError``."""
        path = describe(source)
        try:
            contents = read_all(source)
        except JsonError as exc:
            raise LintingError(
                exc.kind,
                f'The file "{path}" could not be linted: {exc.message}',
                path=path,
                cause=exc,
                diagnostic=exc.diagnostic,
            ) from exc

        diagnostic = self.linter.lint(contents)
        if diagnostic is not None:
            raise LintingError(
                ErrorKind.LINTING_FAILED,
                LINT_FILE_MESSAGE.format(path=path),
                path=path,
                cause=diagnostic,
                diagnostic=str(diagnostic),
            ) from diagnostic

    def validate(self, schema: Any, decoded: Any) -> None:
        """
        Validates a decoded value against a JSON schema.

        All violations are collected and reported together in one
        ``ValidationError``, one ``[path] message`` line each.
        """
        try:
            violations = self.validator.validate(schema, decoded)
        except SchemaError as exc:
            raise ValidationError(
                f"The schema is not valid: {exc.message}", cause=exc
            ) from exc

        if not violations:
            return

        lines = "\n".join(str(violation) for violation in violations)
        raise ValidationError(f"{VALIDATION_HEADER}\n{lines}", violations)


__all__ = ["Json"]
