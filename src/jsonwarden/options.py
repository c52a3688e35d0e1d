"""
Immutable codec configuration.

One options object drives both directions of the codec so a caller can keep a
single configured instance and pass it to decode and encode alike.
"""

from collections.abc import Callable
from dataclasses import dataclass
from dataclasses import replace
from typing import Any

DEFAULT_MAX_DEPTH = 512

DefaultHook = Callable[[Any], Any] | None


@dataclass(frozen=True)
class CodecOptions:
    """
    Configures decoding and encoding behavior with immutable settings.

    Decode reads ``associative_objects``, ``max_depth`` and
    ``reject_invalid_utf8``. Encode reads ``max_depth``,
    ``partial_output_on_error`` and the formatting fields.

    Objects decode to plain dicts unless ``associative_objects`` is turned
    off. The PHP library this package descends from defaulted the other way,
    to records.
    """

    associative_objects: bool = True
    max_depth: int = DEFAULT_MAX_DEPTH
    partial_output_on_error: bool = False
    reject_invalid_utf8: bool = True
    ensure_ascii: bool = True
    sort_keys: bool = False
    indent: str | int | None = None
    default: DefaultHook = None

    def __post_init__(self) -> None:
        for name in (
            "associative_objects",
            "partial_output_on_error",
            "reject_invalid_utf8",
            "ensure_ascii",
            "sort_keys",
        ):
            if not isinstance(getattr(self, name), bool):
                raise TypeError(f"{name} must be a boolean")

        if isinstance(self.max_depth, bool) or not isinstance(
            self.max_depth, int
        ):
            raise TypeError("max_depth must be an integer")
        if self.max_depth <= 0:
            raise ValueError("max_depth must be greater than 0")

        if self.indent is not None and not isinstance(self.indent, str | int):
            raise TypeError("indent must be a string, an integer or None")
        if self.default is not None and not callable(self.default):
            raise TypeError("default must be callable")

    def separators(self) -> tuple[str, str]:
        """Returns compact separators, or spaced ones when indenting."""
        return (",", ":") if self.indent is None else (",", ": ")


def resolve_options(
    options: CodecOptions | None, overrides: dict[str, Any]
) -> CodecOptions:
    """
    Merges keyword overrides into an options object.

    Unknown keywords raise ``TypeError`` the same way the dataclass
    constructor does.
    """
    if options is None:
        return CodecOptions(**overrides)
    if not isinstance(options, CodecOptions):
        raise TypeError("options must be a CodecOptions instance")
    return replace(options, **overrides) if overrides else options


__all__ = ["DEFAULT_MAX_DEPTH", "CodecOptions", "resolve_options"]
