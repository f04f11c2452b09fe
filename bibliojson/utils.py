"""File loading helpers for TOML, JSON and JSON Lines data."""

from __future__ import annotations

import json
import tomllib
from os import PathLike
from pathlib import Path
from typing import Any

StrPath = str | PathLike[str]


class LoadError(Exception):
    """Raised when a file cannot be read, decoded, parsed or written."""


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON value {name}")


def _loads(text: str) -> Any:
    return json.loads(text, parse_constant=_reject_constant)


def load_file(path: StrPath) -> str:
    """Read a whole file as UTF-8 text."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise LoadError(str(exc)) from exc
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise LoadError(str(exc)) from exc


def load_toml(path: StrPath) -> dict[str, Any]:
    """Read and parse a TOML file."""
    src = load_file(path)
    try:
        return tomllib.loads(src)
    except tomllib.TOMLDecodeError as exc:
        raise LoadError(str(exc)) from exc


def load_json(path: StrPath) -> Any:
    """Read and parse a JSON file."""
    src = load_file(path)
    try:
        return _loads(src)
    except ValueError as exc:
        raise LoadError(str(exc)) from exc


def _lines(src: str):
    for index, line in enumerate(src.split("\n")):
        yield index, line.removesuffix("\r")


def load_json_lines(path: StrPath) -> list[tuple[Any, int]]:
    """Parse each non-empty line of a JSON Lines file.

    Returns ``(value, line_index)`` pairs where the index is zero-based.
    """
    src = load_file(path)
    values = []
    for index, line in _lines(src):
        if not line:
            continue
        try:
            values.append((_loads(line), index))
        except ValueError as exc:
            raise LoadError(str(exc)) from exc
    return values


def write_file(path: StrPath, src: str) -> None:
    """Write text to a file as UTF-8."""
    try:
        Path(path).write_bytes(src.encode("utf-8"))
    except OSError as exc:
        raise LoadError(str(exc)) from exc