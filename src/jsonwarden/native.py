"""
Native codec service built on the standard library json module.

Every call returns a ``CodecResult`` whose ``signal`` plays the part of the
host codec's last-error code. The signal, not the value, decides success: a
decoded ``None`` with ``CodecSignal.NONE`` is a valid decode of ``null``.
"""

import json
import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import IntEnum
from types import SimpleNamespace
from typing import Any

from .options import CodecOptions

# Type aliases for domain concepts - recursive definition
JsonValue = (
    str
    | int
    | float
    | bool
    | None
    | dict[str, "JsonValue"]
    | list["JsonValue"]
    | SimpleNamespace
)

_SURROGATE = re.compile("[\ud800-\udfff]")

# Closing bracket -> the opener it cannot close
_MISMATCHED_OPENER = {"]": "{", "}": "["}


class CodecSignal(IntEnum):
    """
    Error codes reported by the codec, numbered like the host codec's.

    ``UNCLASSIFIED`` covers failures the underlying library raises without a
    dedicated code.
    """

    NONE = 0
    DEPTH = 1
    STATE_MISMATCH = 2
    CTRL_CHAR = 3
    SYNTAX = 4
    UTF8 = 5
    RECURSION = 6
    INF_OR_NAN = 7
    UNSUPPORTED_TYPE = 8
    INVALID_PROPERTY_NAME = 9
    UTF16 = 10
    UNCLASSIFIED = 99


SIGNAL_MESSAGES: dict[CodecSignal, str] = {
    CodecSignal.NONE: "No error",
    CodecSignal.DEPTH: "Maximum stack depth exceeded",
    CodecSignal.STATE_MISMATCH: "State mismatch (invalid or malformed JSON)",
    CodecSignal.CTRL_CHAR: (
        "Control character error, possibly incorrectly encoded"
    ),
    CodecSignal.SYNTAX: "Syntax error",
    CodecSignal.UTF8: (
        "Malformed UTF-8 characters, possibly incorrectly encoded"
    ),
    CodecSignal.RECURSION: "Recursion detected",
    CodecSignal.INF_OR_NAN: "Inf and NaN cannot be JSON encoded",
    CodecSignal.UNSUPPORTED_TYPE: "Type is not supported",
    CodecSignal.INVALID_PROPERTY_NAME: "The decoded property name is invalid",
    CodecSignal.UTF16: "Single unpaired UTF-16 surrogate in unicode escape",
    CodecSignal.UNCLASSIFIED: "Unclassified error",
}


@dataclass(frozen=True)
class CodecResult:
    """
    Outcome of a single codec call.

    ``value`` is set by decode and ``text`` by encode. Under partial output an
    encode result can carry both text and a non-NONE signal.
    """

    value: Any = None
    text: str = ""
    signal: int = CodecSignal.NONE
    diagnostic: str = SIGNAL_MESSAGES[CodecSignal.NONE]

    @property
    def failed(self) -> bool:
        return self.signal != CodecSignal.NONE


class _Halt(Exception):
    """Stops a walk as soon as a fatal signal is raised."""

    def __init__(self, signal: CodecSignal, diagnostic: str = "") -> None:
        super().__init__(diagnostic)
        self.signal = signal
        self.diagnostic = diagnostic or SIGNAL_MESSAGES[signal]


class _RejectedConstant(ValueError):
    pass


def _reject_constant(name: str) -> Any:
    raise _RejectedConstant(f"Unexpected constant {name!r}")


def _failure(signal: CodecSignal, diagnostic: str = "") -> CodecResult:
    return CodecResult(
        signal=signal, diagnostic=diagnostic or SIGNAL_MESSAGES[signal]
    )


def classify_decode_error(exc: json.JSONDecodeError) -> CodecSignal:
    """
    Maps a standard library decode error onto a codec signal.

    A closing bracket of the wrong kind, in a place where a closer is allowed,
    is a state mismatch rather than a plain syntax error.
    """
    doc, pos = exc.doc, exc.pos
    char = doc[pos] if pos < len(doc) else ""

    if exc.msg.startswith("Invalid control character"):
        return CodecSignal.CTRL_CHAR
    # Outside a string only NUL counts, other controls are syntax errors
    if char == "\0":
        return CodecSignal.CTRL_CHAR

    if char in _MISMATCHED_OPENER:
        if exc.msg == "Expecting ',' delimiter":
            return CodecSignal.STATE_MISMATCH
        previous = doc[:pos].rstrip(" \t\n\r")[-1:]
        if previous == _MISMATCHED_OPENER[char]:
            return CodecSignal.STATE_MISMATCH

    return CodecSignal.SYNTAX


class _DecodeWalker:
    """
    Post-decode pass enforcing the depth limit and surrogate rules.

    Works in place on the freshly decoded structure and converts objects to
    records when requested. Uses one stack frame per nesting level.
    """

    def __init__(self, options: CodecOptions) -> None:
        self.max_depth = options.max_depth
        self.records = not options.associative_objects

    def visit(self, value: Any, depth: int) -> Any:
        if isinstance(value, str):
            if _SURROGATE.search(value):
                raise _Halt(CodecSignal.UTF16)
            return value

        if isinstance(value, list):
            if depth + 1 >= self.max_depth:
                raise _Halt(CodecSignal.DEPTH)
            for index, item in enumerate(value):
                value[index] = self.visit(item, depth + 1)
            return value

        if isinstance(value, dict):
            if depth + 1 >= self.max_depth:
                raise _Halt(CodecSignal.DEPTH)
            for key in value:
                if _SURROGATE.search(key):
                    raise _Halt(CodecSignal.UTF16)
                value[key] = self.visit(value[key], depth + 1)
            if not self.records:
                return value
            if any(key.startswith("\0") for key in value):
                raise _Halt(CodecSignal.INVALID_PROPERTY_NAME)
            return SimpleNamespace(**value)

        return value


class _EncodeWalker:
    """
    Pre-encode pass that detects what the standard library cannot express.

    Produces a plain, acyclic, finite copy of the value. Recoverable signals
    halt the walk unless partial output is enabled, in which case the first
    one is remembered and a substitute is emitted in place of the bad member.
    """

    def __init__(self, options: CodecOptions) -> None:
        self.options = options
        self.signal = CodecSignal.NONE
        self.diagnostic = SIGNAL_MESSAGES[CodecSignal.NONE]
        self._active: set[int] = set()

    def _flag(self, signal: CodecSignal, diagnostic: str) -> None:
        if not self.options.partial_output_on_error:
            raise _Halt(signal, diagnostic)
        if self.signal == CodecSignal.NONE:
            self.signal = signal
            self.diagnostic = diagnostic

    def _key(self, key: Any) -> str:
        if isinstance(key, str):
            return key
        if key is True:
            return "true"
        if key is False:
            return "false"
        if key is None:
            return "null"
        if isinstance(key, int):
            return int.__repr__(key)
        if isinstance(key, float) and math.isfinite(key):
            return float.__repr__(key)
        raise _Halt(
            CodecSignal.INVALID_PROPERTY_NAME,
            f"keys must be str, int, float, bool or None, "
            f"not {type(key).__name__}",
        )

    def visit(self, value: Any, depth: int) -> Any:  # noqa: PLR0911
        if value is None or isinstance(value, bool | int | str):
            return value

        if isinstance(value, float):
            if math.isfinite(value):
                return value
            self._flag(
                CodecSignal.INF_OR_NAN,
                f"Out of range float value {value!r} is not JSON compliant",
            )
            return 0

        if isinstance(value, Mapping | SimpleNamespace | list | tuple):
            marker = id(value)
            if marker in self._active:
                self._flag(
                    CodecSignal.RECURSION,
                    f"Circular reference detected in {type(value).__name__}",
                )
                return None
            if depth + 1 > self.options.max_depth:
                raise _Halt(CodecSignal.DEPTH)

            self._active.add(marker)
            try:
                if isinstance(value, list | tuple):
                    return [self.visit(item, depth + 1) for item in value]
                members = (
                    vars(value) if isinstance(value, SimpleNamespace) else value
                )
                return {
                    self._key(key): self.visit(item, depth + 1)
                    for key, item in members.items()
                }
            finally:
                self._active.discard(marker)

        if self.options.default is not None:
            try:
                converted = self.options.default(value)
            except TypeError as exc:
                self._flag(CodecSignal.UNSUPPORTED_TYPE, str(exc))
                return None
            return self.visit(converted, depth)

        self._flag(
            CodecSignal.UNSUPPORTED_TYPE,
            f"Object of type {type(value).__name__} is not JSON serializable",
        )
        return None


class NativeCodec:
    """
    Decoder/encoder service over the standard library json module.

    Stateless: every call builds its own walker, so one instance can be shared
    by any number of callers.
    """

    def decode(self, source: str | bytes, options: CodecOptions) -> CodecResult:
        """Decodes JSON text or UTF-8 bytes into a value."""
        if isinstance(source, bytes | bytearray | memoryview):
            errors = "strict" if options.reject_invalid_utf8 else "replace"
            try:
                text = bytes(source).decode("utf-8", errors)
            except UnicodeDecodeError as exc:
                return _failure(CodecSignal.UTF8, str(exc))
        elif isinstance(source, str):
            if _SURROGATE.search(source):
                if options.reject_invalid_utf8:
                    return _failure(CodecSignal.UTF8)
                source = _SURROGATE.sub("\ufffd", source)
            text = source
        else:
            raise TypeError(
                "the JSON object must be str or bytes, "
                f"not {type(source).__name__}"
            )

        try:
            value = json.loads(text, parse_constant=_reject_constant)
        except json.JSONDecodeError as exc:
            return _failure(classify_decode_error(exc), str(exc))
        except _RejectedConstant as exc:
            return _failure(CodecSignal.SYNTAX, str(exc))
        except RecursionError:
            return _failure(CodecSignal.DEPTH)
        except ValueError as exc:
            return _failure(CodecSignal.UNCLASSIFIED, str(exc))

        try:
            value = _DecodeWalker(options).visit(value, 0)
        except _Halt as halt:
            return _failure(halt.signal, halt.diagnostic)
        except RecursionError:
            return _failure(CodecSignal.DEPTH)

        return CodecResult(value=value)

    def encode(self, value: Any, options: CodecOptions) -> CodecResult:
        """
        Encodes a value into JSON text.

        Compact separators are used unless ``options.indent`` is set.
        """
        walker = _EncodeWalker(options)
        try:
            prepared = walker.visit(value, 0)
            text = json.dumps(
                prepared,
                ensure_ascii=options.ensure_ascii,
                indent=options.indent,
                separators=options.separators(),
                sort_keys=options.sort_keys,
                allow_nan=False,
                check_circular=False,
            )
        except _Halt as halt:
            return _failure(halt.signal, halt.diagnostic)
        except RecursionError:
            return _failure(CodecSignal.DEPTH)
        except (TypeError, ValueError) as exc:
            return _failure(CodecSignal.UNCLASSIFIED, str(exc))

        return CodecResult(
            text=text, signal=walker.signal, diagnostic=walker.diagnostic
        )


__all__ = [
    "SIGNAL_MESSAGES",
    "CodecResult",
    "CodecSignal",
    "JsonValue",
    "NativeCodec",
    "classify_decode_error",
]
