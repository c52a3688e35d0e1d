"""
Schema validation service backed by jsonschema.

The validator class is picked from the schema's ``$schema`` keyword, the schema
is checked against its meta-schema, and every violation is collected instead
of stopping at the first one.
"""

from collections.abc import Mapping
from collections.abc import Sequence
from dataclasses import dataclass
from types import SimpleNamespace
from typing import Any

import jsonschema
from jsonschema.validators import validator_for


@dataclass(frozen=True)
class Violation:
    """A single schema constraint violated by the validated value."""

    property_path: str
    message: str

    def __str__(self) -> str:
        return f"[{self.property_path}] {self.message}"


def format_property_path(path: Sequence[Any]) -> str:
    """
    Formats a jsonschema instance path as ``items[0].name``.

    The root of the document is the empty string.
    """
    formatted = ""
    for part in path:
        if isinstance(part, int):
            formatted += f"[{part}]"
        elif formatted:
            formatted += f".{part}"
        else:
            formatted = str(part)
    return formatted


def to_plain(value: Any) -> Any:
    """Converts records and other mappings into plain dicts and lists."""
    if isinstance(value, SimpleNamespace):
        value = vars(value)
    if isinstance(value, Mapping):
        return {key: to_plain(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [to_plain(item) for item in value]
    return value


class SchemaValidator:
    """
    Validator service returning violations rather than raising them.

    ``check_formats`` turns ``format`` keywords into assertions. Stateless
    apart from that flag, so one instance can be shared.
    """

    def __init__(self, *, check_formats: bool = False) -> None:
        if not isinstance(check_formats, bool):
            raise TypeError("check_formats must be a boolean")
        self._check_formats = check_formats

    @property
    def check_formats(self) -> bool:
        return self._check_formats

    def validate(self, schema: Any, value: Any) -> list[Violation]:
        """
        Checks ``value`` against ``schema`` and returns every violation.

        Violations keep the order jsonschema reports them in. Raises
        ``jsonschema.exceptions.SchemaError`` when the schema itself is
        invalid.
        """
        schema = to_plain(schema)
        validator_class = validator_for(schema)
        validator_class.check_schema(schema)

        format_checker = (
            jsonschema.FormatChecker() if self._check_formats else None
        )
        validator = validator_class(schema, format_checker=format_checker)

        return [
            Violation(format_property_path(error.absolute_path), error.message)
            for error in validator.iter_errors(to_plain(value))
        ]


__all__ = [
    "SchemaValidator",
    "Violation",
    "format_property_path",
    "to_plain",
]
