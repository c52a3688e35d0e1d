"""
JSON encoding, decoding, linting and schema validation with typed errors.

Wraps the standard library codec, a strict linter and jsonschema behind one
facade that reports every failure as a single, catchable ``JsonError`` whose
``kind`` names the exact condition.
"""

from .errors import DecodeError
from .errors import EncodeError
from .errors import ErrorKind
from .errors import JsonError
from .errors import LintingError
from .errors import SourceError
from .errors import ValidationError
from .facade import Json
from .lint import Linter
from .lint import ParsingError
from .native import CodecResult
from .native import CodecSignal
from .native import JsonValue
from .native import NativeCodec
from .options import CodecOptions
from .schema import SchemaValidator
from .schema import Violation

__version__ = "0.1.0"

__all__ = [
    "CodecOptions",
    "CodecResult",
    "CodecSignal",
    "DecodeError",
    "EncodeError",
    "ErrorKind",
    "Json",
    "JsonError",
    "JsonValue",
    "Linter",
    "LintingError",
    "NativeCodec",
    "ParsingError",
    "SchemaValidator",
    "SourceError",
    "ValidationError",
    "Violation",
]
