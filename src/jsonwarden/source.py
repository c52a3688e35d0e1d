"""
Byte source and sink helpers for the file-backed operations.

A source or sink is either a filesystem path or an already open file object.
Paths are opened and closed here; file objects belong to the caller and are
left open.
"""

import io
import os
from typing import IO
from typing import Any
from typing import TypeAlias

from .errors import ErrorKind
from .errors import SourceError

Source: TypeAlias = str | os.PathLike[str] | IO[Any]


def _is_path(target: Any) -> bool:
    return isinstance(target, str | os.PathLike)


def describe(target: Source) -> str:
    """Returns the identifier used for a source or sink in messages."""
    if _is_path(target):
        return os.fspath(target)

    name = getattr(target, "name", None)
    if isinstance(name, str | os.PathLike):
        return os.fspath(name)
    if isinstance(name, int):
        return f"<fd {name}>"
    return f"<{type(target).__name__}>"


def _failure(action: str, target: Source, exc: Exception) -> SourceError:
    kind = (
        ErrorKind.INVALID_ENCODING
        if isinstance(exc, UnicodeError)
        else ErrorKind.IO_FAILURE
    )
    return SourceError(
        f'The file "{describe(target)}" could not be {action}.',
        describe(target),
        cause=exc,
        kind=kind,
    )


def read_all(source: Source) -> bytes | str:
    """
    Reads the entire contents of a source.

    Raises ``SourceError`` when the read fails, including a text handle that
    cannot decode its bytes or is already closed, and ``TypeError`` when the
    argument is neither a path nor readable.
    """
    if _is_path(source):
        try:
            with open(source, "rb") as fp:
                return fp.read()
        except OSError as exc:
            raise _failure("read", source, exc) from exc

    if not hasattr(source, "read"):
        raise TypeError("source must be a path or have a read() method")

    try:
        return source.read()
    except (OSError, ValueError) as exc:
        raise _failure("read", source, exc) from exc


def write_all(target: Source, text: str) -> None:
    """
    Writes the complete text to a sink as UTF-8.

    Binary file objects receive encoded bytes and text file objects receive
    the string unchanged, encoded by the handle itself.
    """
    if _is_path(target):
        try:
            data = text.encode("utf-8")
            with open(target, "wb") as fp:
                fp.write(data)
        except (OSError, UnicodeError) as exc:
            raise _failure("written", target, exc) from exc
        return

    if not hasattr(target, "write"):
        raise TypeError("target must be a path or have a write() method")

    binary = isinstance(target, io.RawIOBase | io.BufferedIOBase)
    try:
        target.write(text.encode("utf-8") if binary else text)
    except (OSError, ValueError) as exc:
        raise _failure("written", target, exc) from exc


__all__ = ["Source", "describe", "read_all", "write_all"]
