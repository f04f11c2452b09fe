"""Dictionary modules: a TOML description plus entries stored as JSON Lines."""

from __future__ import annotations

from dataclasses import dataclass, field
from os import PathLike
from typing import Any

from .utils import LoadError, load_json_lines, load_toml

_MAX_U32 = 2**32 - 1


def _object(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError(f"invalid type: expected {what} to be an object")
    return data


def _string(data: dict[str, Any], key: str, *, optional: bool = False) -> str | None:
    value = data.get(key)
    if value is None:
        if optional:
            return None
        raise ValueError(f"missing field `{key}`")
    if not isinstance(value, str):
        raise ValueError(f"invalid type for `{key}`: expected a string")
    return value


def _strings(data: dict[str, Any], key: str, *, optional: bool = False) -> list[str] | None:
    value = data.get(key)
    if value is None:
        if optional:
            return None
        raise ValueError(f"missing field `{key}`")
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"invalid type for `{key}`: expected a list of strings")
    return list(value)


def _year(data: dict[str, Any], key: str) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _MAX_U32:
        raise ValueError(f"invalid value for `{key}`: expected a u32")
    return value


@dataclass
class DictConfig:
    """The TOML description of a dictionary module."""

    name: str
    authors: list[str]
    language: str
    description: str | None = None
    data_source: str | None = None
    pub_year: int | None = None
    license: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> DictConfig:
        data = _object(data, "a dictionary config")
        return cls(
            name=_string(data, "name"),
            authors=_strings(data, "authors"),
            language=_string(data, "language"),
            description=_string(data, "description", optional=True),
            data_source=_string(data, "data_source", optional=True),
            pub_year=_year(data, "pub_year"),
            license=_string(data, "license", optional=True),
        )


@dataclass
class DictEntry:
    """A dictionary term with optional aliases and its definitions."""

    term: str
    definitions: list[str] = field(default_factory=list)
    aliases: list[str] | None = None

    @classmethod
    def from_dict(cls, data: Any) -> DictEntry:
        data = _object(data, "a dictionary entry")
        return cls(
            term=_string(data, "term"),
            definitions=_strings(data, "definitions"),
            aliases=_strings(data, "aliases", optional=True),
        )

    @classmethod
    def from_file(cls, path: str | PathLike[str]) -> list[DictEntry]:
        """Load every entry of a JSON Lines file."""
        try:
            return [cls.from_dict(data) for data, _ in load_json_lines(path)]
        except ValueError as exc:
            raise LoadError(str(exc)) from exc


def _normalized(text: str) -> list[str]:
    return [
        char.lower() if char.isascii() else char
        for char in text
        if char.isalnum() or char == "-"
    ]


def eq_ignore_punc_and_case(a: str, b: str) -> bool:
    """Compare two strings ignoring punctuation, whitespace and ASCII case.

    Hyphens are kept, and only ASCII letters are folded to lower case.
    """
    return _normalized(a) == _normalized(b)


@dataclass
class DictModule:
    """A loaded dictionary module."""

    name: str
    authors: list[str]
    language: str
    description: str | None
    pub_year: int | None
    license: str | None
    entries: list[DictEntry]

    @classmethod
    def load(cls, dir_path: str | PathLike[str], name: str) -> DictModule:
        """Load ``<name>.toml`` and ``<name>.jsonl`` from a directory."""
        try:
            config = DictConfig.from_dict(load_toml(f"{dir_path}/{name}.toml"))
        except ValueError as exc:
            raise LoadError(str(exc)) from exc
        entries = DictEntry.from_file(f"{dir_path}/{name}.jsonl")
        return cls(
            name=config.name,
            authors=config.authors,
            language=config.language,
            description=config.description,
            pub_year=config.pub_year,
            license=config.license,
            entries=entries,
        )

    def find(self, term: str) -> DictEntry | None:
        """Return the first entry whose term or an alias matches ``term``."""
        for entry in self.entries:
            if eq_ignore_punc_and_case(entry.term, term):
                return entry
            if any(eq_ignore_punc_and_case(alias, term) for alias in entry.aliases or ()):
                return entry
        return None