"""
Strict JSON linter with position-aware diagnostics.

Tokenizes and parses the input with a recursive descent parser and reports the
first problem found as a ``ParsingError`` carrying the offending position,
line and column. Only object keys are decoded, for duplicate detection; other
values are checked for well-formedness and discarded.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

Position: TypeAlias = int

_DIGITS = "0123456789"
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_WHITESPACE = " \t\n\r"

_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}


class ParsingError(ValueError):
    """
    Handles lint failures with precise position and context information.

    Error state containing position, line/column numbers, and surrounding
    context to help users identify and fix JSON syntax issues.
    """

    def __init__(self, msg: str, doc: str = "", pos: Position = 0) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.msg = msg
        self.doc = doc
        self.pos = pos

        # Compute line and column numbers from position
        self.lineno = doc.count("\n", 0, pos) + 1 if doc else 1
        self.colno = pos - doc.rfind("\n", 0, pos) if doc else pos + 1

        super().__init__(f"{msg} at line {self.lineno}, column {self.colno}")

    def excerpt(self) -> str:
        """Returns the offending line with a caret under the error column."""
        start = self.doc.rfind("\n", 0, self.pos) + 1
        end = self.doc.find("\n", self.pos)
        line = self.doc[start : end if end != -1 else len(self.doc)]
        return f"{line}\n{' ' * (self.colno - 1)}^"


class TokenType(Enum):
    """Kinds of tokens produced by the lexer."""

    PUNCTUATION = "punctuation"
    STRING = "string"
    NUMBER = "number"
    LITERAL = "literal"


@dataclass(frozen=True)
class JsonToken:
    """Represents a JSON token with position information."""

    type: TokenType
    value: str
    start: Position
    end: Position


class JsonLexer:
    """
    Tokenizes JSON input for the parser.

    Character-by-character scanning that handles whitespace, strings,
    numbers, literals, and structural tokens.
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.length = len(text)

    def peek(self) -> str:
        """Returns current character without advancing."""
        return self.text[self.pos] if self.pos < self.length else "\0"

    def advance(self) -> str:
        """Returns current character and advances position."""
        char = self.peek()
        if self.pos < self.length:
            self.pos += 1
        return char

    def skip_whitespace(self) -> None:
        """Skips whitespace characters according to the JSON grammar."""
        while self.pos < self.length and self.text[self.pos] in _WHITESPACE:
            self.pos += 1

    def _scan_escape(self, start: Position) -> None:
        """Validates the escape sequence following a backslash."""
        escape_pos = self.pos - 1
        if self.pos >= self.length:
            raise ParsingError(
                "Unterminated string starting at", self.text, start
            )

        char = self.advance()
        if char == "u":
            digits = self.text[self.pos : self.pos + 4]
            if len(digits) < 4 or not set(digits) <= _HEX_DIGITS:
                raise ParsingError(
                    "Invalid \\uXXXX escape", self.text, escape_pos
                )
            self.pos += 4
        elif char not in _ESCAPES:
            raise ParsingError(
                f"Invalid \\escape: {char!r}", self.text, escape_pos
            )

    def scan_string(self) -> JsonToken:
        """Scans a JSON string token including quotes."""
        start = self.pos
        if self.advance() != '"':
            raise ParsingError("Expected string", self.text, start)

        while self.pos < self.length:
            char = self.advance()
            if char == '"':
                return JsonToken(
                    TokenType.STRING,
                    self.text[start : self.pos],
                    start,
                    self.pos,
                )
            elif char == "\\":
                self._scan_escape(start)
            elif char < " ":
                raise ParsingError(
                    "Invalid control character at", self.text, self.pos - 1
                )

        raise ParsingError("Unterminated string starting at", self.text, start)

    def _scan_integer_part(self, start: Position) -> None:
        """Scans the integer part of a JSON number."""
        if self.peek() not in _DIGITS:
            raise ParsingError("Invalid number", self.text, start)

        if self.peek() == "0":
            self.advance()
            if self.peek() in _DIGITS:
                raise ParsingError(
                    "Leading zeros not allowed", self.text, start
                )
        else:
            while self.peek() in _DIGITS:
                self.advance()

    def _scan_decimal_part(self, start: Position) -> None:
        """Scans the decimal part of a JSON number if present."""
        if self.peek() == ".":
            self.advance()
            if self.peek() not in _DIGITS:
                raise ParsingError("Invalid decimal number", self.text, start)
            while self.peek() in _DIGITS:
                self.advance()

    def _scan_exponent_part(self, start: Position) -> None:
        """Scans the exponent part of a JSON number if present."""
        if self.peek() in "eE":
            self.advance()
            if self.peek() in "+-":
                self.advance()
            if self.peek() not in _DIGITS:
                raise ParsingError("Invalid exponent", self.text, start)
            while self.peek() in _DIGITS:
                self.advance()

    def scan_number(self) -> JsonToken:
        """Scans a JSON number token."""
        start = self.pos

        if self.peek() == "-":
            self.advance()

        self._scan_integer_part(start)
        self._scan_decimal_part(start)
        self._scan_exponent_part(start)

        return JsonToken(
            TokenType.NUMBER, self.text[start : self.pos], start, self.pos
        )

    def scan_literal(self) -> JsonToken:
        """Scans literal tokens: true, false, null."""
        start = self.pos

        for literal in ("true", "false", "null"):
            if self.text.startswith(literal, self.pos):
                self.pos += len(literal)
                return JsonToken(TokenType.LITERAL, literal, start, self.pos)

        raise ParsingError("Expecting value", self.text, start)

    def next_token(self) -> JsonToken | None:
        """Returns the next token or None if at end."""
        self.skip_whitespace()

        if self.pos >= self.length:
            return None

        char = self.peek()
        start = self.pos

        # Structural tokens
        if char in "{}[],:":
            self.advance()
            return JsonToken(TokenType.PUNCTUATION, char, start, self.pos)

        # String tokens
        elif char == '"':
            return self.scan_string()

        # Number tokens
        elif char in _DIGITS or char == "-":
            return self.scan_number()

        # Literal tokens
        elif char in "tfn":
            return self.scan_literal()

        elif char == "'":
            raise ParsingError(
                "Invalid string, it appears you used single quotes "
                "instead of double quotes",
                self.text,
                start,
            )

        else:
            raise ParsingError("Expecting value", self.text, self.pos)


def _decode_string(raw_token: str) -> str:
    """Decodes a lexed string token, quotes included, into its text."""
    inner = raw_token[1:-1]
    if "\\" not in inner:
        return inner

    result = []
    i = 0
    while i < len(inner):
        if inner[i] == "\\":
            next_char = inner[i + 1]
            if next_char == "u":
                result.append(chr(int(inner[i + 2 : i + 6], 16)))
                i += 6
            else:
                result.append(_ESCAPES[next_char])
                i += 2
        else:
            result.append(inner[i])
            i += 1

    return "".join(result)


class JsonParser:
    """
    Recursive descent parser over the lexer's token stream.

    Validates structure only; rejects trailing commas and, when asked,
    duplicate object keys.
    """

    def __init__(self, lexer: JsonLexer, detect_duplicate_keys: bool = False):
        self.lexer = lexer
        self.detect_duplicate_keys = detect_duplicate_keys
        self.current_token: JsonToken | None = None

    def advance_token(self) -> JsonToken | None:
        """Advances to next token and returns it."""
        self.current_token = self.lexer.next_token()
        return self.current_token

    def expect_token(self, expected_value: str) -> JsonToken:
        """Expects a specific token value and advances."""
        if not self.current_token or self.current_token.value != expected_value:
            raise ParsingError(
                f"Expecting '{expected_value}' delimiter",
                self.lexer.text,
                self.current_token.start
                if self.current_token
                else self.lexer.pos,
            )
        token = self.current_token
        self.advance_token()
        return token

    def parse_value(self) -> None:
        """Parses any JSON value based on current token."""
        if not self.current_token:
            raise ParsingError(
                "Expecting value", self.lexer.text, self.lexer.pos
            )

        token = self.current_token

        if token.type in (
            TokenType.LITERAL,
            TokenType.STRING,
            TokenType.NUMBER,
        ):
            self.advance_token()
        elif token.value == "{":
            self.parse_object()
        elif token.value == "[":
            self.parse_array()
        else:
            raise ParsingError(
                "Expecting value", self.lexer.text, token.start
            )

    def _parse_object_key(self) -> JsonToken:
        """Parses object key and validates it's a proper string token."""
        if (
            not self.current_token
            or self.current_token.type != TokenType.STRING
        ):
            raise ParsingError(
                "Expecting property name enclosed in double quotes",
                self.lexer.text,
                self.current_token.start
                if self.current_token
                else self.lexer.pos,
            )

        key_token = self.current_token
        self.advance_token()
        return key_token

    def _handle_object_continuation(self) -> bool:
        """Consumes a comma or closing brace, True if a member follows."""
        if not self.current_token:
            raise ParsingError(
                "Expecting ',' delimiter",
                self.lexer.text,
                self.lexer.pos,
            )

        if self.current_token.value == "}":
            self.advance_token()
            return False
        elif self.current_token.value == ",":
            comma_pos = self.current_token.start
            self.advance_token()
            # Check for trailing comma
            if self.current_token and self.current_token.value == "}":
                raise ParsingError(
                    "Illegal trailing comma before end of object",
                    self.lexer.text,
                    comma_pos,
                )
            return True
        else:
            raise ParsingError(
                "Expecting ',' delimiter",
                self.lexer.text,
                self.current_token.start,
            )

    def parse_object(self) -> None:
        """Parses a JSON object."""
        self.expect_token("{")

        # Handle empty object
        if self.current_token and self.current_token.value == "}":
            self.advance_token()
            return

        seen: set[str] = set()

        while True:
            key_token = self._parse_object_key()
            if self.detect_duplicate_keys:
                key = _decode_string(key_token.value)
                if key in seen:
                    raise ParsingError(
                        f'Duplicate key "{key}"',
                        self.lexer.text,
                        key_token.start,
                    )
                seen.add(key)

            self.expect_token(":")
            self.parse_value()

            if not self._handle_object_continuation():
                break

    def parse_array(self) -> None:
        """Parses a JSON array."""
        self.expect_token("[")

        # Handle empty array
        if self.current_token and self.current_token.value == "]":
            self.advance_token()
            return

        while True:
            self.parse_value()

            # Check for continuation or end
            if not self.current_token:
                raise ParsingError(
                    "Expecting ',' delimiter",
                    self.lexer.text,
                    self.lexer.pos,
                )

            if self.current_token.value == "]":
                self.advance_token()
                break
            elif self.current_token.value == ",":
                comma_pos = self.current_token.start
                self.advance_token()
                # Check for trailing comma
                if self.current_token and self.current_token.value == "]":
                    raise ParsingError(
                        "Illegal trailing comma before end of array",
                        self.lexer.text,
                        comma_pos,
                    )
            else:
                raise ParsingError(
                    "Expecting ',' delimiter",
                    self.lexer.text,
                    self.current_token.start,
                )


def parse_document(text: str, detect_duplicate_keys: bool = False) -> None:
    """
    Checks a complete JSON document, raising ``ParsingError`` on the first
    problem.
    """
    # Check for UTF-8 BOM and reject it, RFC 8259 forbids it
    if text.startswith("\ufeff"):
        raise ParsingError(
            "JSON input should not contain BOM (Byte Order Mark)", text, 0
        )

    lexer = JsonLexer(text)
    parser = JsonParser(lexer, detect_duplicate_keys)

    try:
        parser.advance_token()  # Load first token
        parser.parse_value()
    except RecursionError:
        raise ParsingError(
            "Maximum nesting depth exceeded", text, lexer.pos
        ) from None

    # Check for extra data after valid JSON
    if parser.current_token:
        raise ParsingError("Extra data", text, parser.current_token.start)


class Linter:
    """
    Lint service returning a diagnostic instead of raising.

    Holds only its configuration, so one instance is built once and shared;
    every call gets a fresh lexer and parser.
    """

    def __init__(self, *, detect_duplicate_keys: bool = False) -> None:
        if not isinstance(detect_duplicate_keys, bool):
            raise TypeError("detect_duplicate_keys must be a boolean")
        self._detect_duplicate_keys = detect_duplicate_keys

    @property
    def detect_duplicate_keys(self) -> bool:
        return self._detect_duplicate_keys

    def lint(self, source: str | bytes) -> ParsingError | None:
        """
        Lints JSON text or UTF-8 bytes.

        Returns ``None`` for a valid document, otherwise the diagnostic for
        the first problem found.
        """
        if isinstance(source, bytes | bytearray | memoryview):
            data = bytes(source)
            try:
                text = data.decode("utf-8")
            except UnicodeDecodeError as exc:
                prefix = data[: exc.start].decode("utf-8")
                return ParsingError(
                    "Invalid UTF-8 sequence", prefix, len(prefix)
                )
        elif isinstance(source, str):
            text = source
        else:
            raise TypeError(
                "the JSON object must be str or bytes, "
                f"not {type(source).__name__}"
            )

        try:
            parse_document(text, self._detect_duplicate_keys)
        except ParsingError as exc:
            return exc
        return None


__all__ = [
    "JsonLexer",
    "JsonParser",
    "JsonToken",
    "Linter",
    "ParsingError",
    "TokenType",
    "parse_document",
]
