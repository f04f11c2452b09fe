"""Cross-reference modules: a TOML description plus references as JSON Lines."""

from __future__ import annotations

from dataclasses import dataclass, field
from os import PathLike
from typing import Any

from .ref_id import RefId, parse_ref_id
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


def _year(data: dict[str, Any], key: str) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _MAX_U32:
        raise ValueError(f"invalid value for `{key}`: expected a u32")
    return value


def _list(data: dict[str, Any], key: str) -> list[Any]:
    value = data.get(key)
    if value is None:
        raise ValueError(f"missing field `{key}`")
    if not isinstance(value, list):
        raise ValueError(f"invalid type for `{key}`: expected a list")
    return value


def _ref_id(value: Any, key: str) -> RefId:
    if not isinstance(value, str):
        raise ValueError(f"invalid type for `{key}`: expected a string")
    return parse_ref_id(value)


@dataclass
class XRefsConfig:
    """The TOML description of a cross-reference module."""

    name: str
    description: str | None = None
    data_source: str | None = None
    license: str | None = None
    language: str | None = None
    pub_year: int | None = None
    bible_dep: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> XRefsConfig:
        data = _object(data, "a cross-reference config")
        return cls(
            name=_string(data, "name"),
            description=_string(data, "description", optional=True),
            data_source=_string(data, "data_source", optional=True),
            license=_string(data, "license", optional=True),
            language=_string(data, "language", optional=True),
            pub_year=_year(data, "pub_year"),
            bible_dep=_string(data, "bible_dep", optional=True),
        )


@dataclass
class MutualRef:
    """One member of a mutual cross reference."""

    id: RefId
    text: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> MutualRef:
        data = _object(data, "a mutual reference")
        if data.get("id") is None:
            raise ValueError("missing field `id`")
        return cls(_ref_id(data["id"], "id"), _string(data, "text", optional=True))


@dataclass
class DirectedXRef:
    """A reference from one source passage to any number of targets."""

    source: RefId
    targets: list[RefId] = field(default_factory=list)
    source_text: str | None = None
    note: str | None = None

    def has_source(self, ref_id: RefId) -> bool:
        return self.source == ref_id

    def ref_ids(self) -> list[RefId]:
        """Every reference named here: the targets, then the source."""
        return [*self.targets, self.source]


@dataclass
class MutualXRef:
    """A group of passages that all refer to one another."""

    refs: list[MutualRef] = field(default_factory=list)
    note: str | None = None

    def has_source(self, ref_id: RefId) -> bool:
        return any(ref.id == ref_id for ref in self.refs)

    def ref_ids(self) -> list[RefId]:
        return [ref.id for ref in self.refs]


XRef = DirectedXRef | MutualXRef


def parse_xref(data: Any) -> XRef:
    """Build a cross reference from an object tagged by its ``type`` field."""
    data = _object(data, "a cross reference")
    kind = data.get("type")
    if kind is None:
        raise ValueError("missing field `type`")
    match kind:
        case "directed":
            if data.get("source") is None:
                raise ValueError("missing field `source`")
            return DirectedXRef(
                source=_ref_id(data["source"], "source"),
                targets=[_ref_id(target, "targets") for target in _list(data, "targets")],
                source_text=_string(data, "source_text", optional=True),
                note=_string(data, "note", optional=True),
            )
        case "mutual":
            return MutualXRef(
                refs=[MutualRef.from_dict(ref) for ref in _list(data, "refs")],
                note=_string(data, "note", optional=True),
            )
    raise ValueError(f"unknown variant `{kind}`, expected `directed` or `mutual`")


def load_xrefs(path: str | PathLike[str]) -> list[XRef]:
    """Load every cross reference of a JSON Lines file."""
    try:
        return [parse_xref(data) for data, _ in load_json_lines(path)]
    except ValueError as exc:
        raise LoadError(str(exc)) from exc


@dataclass
class XRefModule:
    """A loaded cross-reference module."""

    name: str
    description: str | None
    data_source: str | None
    pub_year: int | None
    language: str | None
    license: str | None
    refs: list[XRef]
    bible_dep: str | None

    @classmethod
    def load(cls, dir_path: str | PathLike[str], name: str) -> XRefModule:
        """Load ``<name>.toml`` and ``<name>.jsonl`` from a directory."""
        try:
            config = XRefsConfig.from_dict(load_toml(f"{dir_path}/{name}.toml"))
        except ValueError as exc:
            raise LoadError(str(exc)) from exc
        refs = load_xrefs(f"{dir_path}/{name}.jsonl")
        return cls(
            name=config.name,
            description=config.description,
            data_source=config.data_source,
            pub_year=config.pub_year,
            language=config.language,
            license=config.license,
            refs=refs,
            bible_dep=config.bible_dep,
        )