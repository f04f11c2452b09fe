"""Packages: a directory with a ``biblio-json.toml`` that lists Bible, dictionary and xref modules."""

from __future__ import annotations

import glob
from collections.abc import Callable
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Any

from .bible import BibleModule
from .dictionary import DictModule
from .ref_id import RefId
from .utils import LoadError, load_toml
from .xrefs import XRefModule

PACKAGE_FILE_NAME = "biblio-json.toml"

Module = BibleModule | DictModule | XRefModule


def _object(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError(f"invalid type: expected {what} to be a table")
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


def _strings(data: dict[str, Any], key: str) -> list[str]:
    value = data.get(key)
    if value is None:
        raise ValueError(f"missing field `{key}`")
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"invalid type for `{key}`: expected a list of strings")
    return list(value)


def is_bible(module: Module) -> bool:
    """Whether the module is a Bible."""
    return isinstance(module, BibleModule)


def is_dict(module: Module) -> bool:
    """Whether the module is a dictionary."""
    return isinstance(module, DictModule)


def is_xrefs(module: Module) -> bool:
    """Whether the module is a cross-reference module."""
    return isinstance(module, XRefModule)


@dataclass
class ModulePaths:
    """Glob patterns, relative to the package directory, for each module kind."""

    bibles: str | None = None
    dictionaries: str | None = None
    xrefs: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> ModulePaths:
        data = _object(data, "module_paths")
        return cls(
            bibles=_string(data, "bibles", optional=True),
            dictionaries=_string(data, "dictionaries", optional=True),
            xrefs=_string(data, "xrefs", optional=True),
        )


@dataclass
class PackageConfig:
    """The contents of a package's ``biblio-json.toml``."""

    name: str
    authors: list[str]
    license: str
    module_paths: ModulePaths | None = None

    @classmethod
    def from_dict(cls, data: Any) -> PackageConfig:
        data = _object(data, "a package config")
        paths = data.get("module_paths")
        return cls(
            name=_string(data, "name"),
            authors=_strings(data, "authors"),
            license=_string(data, "license"),
            module_paths=None if paths is None else ModulePaths.from_dict(paths),
        )


@dataclass(frozen=True)
class InvalidRefId:
    """A cross reference names a passage that a Bible does not contain."""

    id: RefId
    bible_name: str
    xref_name: str
    line: int

    def __str__(self) -> str:
        return (
            f"RefId {self.id} in xref module {self.xref_name} on line {self.line} "
            f"does not exist in Bible {self.bible_name}"
        )


class PackageLoadError(Exception):
    """Raised when a package or any of its modules fails to load."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__("\n".join(errors))
        self.errors = list(errors)


class PackageValidationError(Exception):
    """Raised when a loaded package holds inconsistent data."""

    def __init__(self, errors: list[InvalidRefId]) -> None:
        super().__init__("\n".join(str(error) for error in errors))
        self.errors = list(errors)


def _load_matching(
    base_dir: str, pattern: str, loader: Callable[[str, str], Module]
) -> list[Module]:
    """Load every ``.toml`` file matching the pattern; stop at the first failure."""
    modules: list[Module] = []
    for entry in sorted(glob.glob(f"{base_dir}/{pattern}", recursive=True)):
        path = Path(entry)
        if path.suffix != ".toml":
            continue
        try:
            modules.append(loader(str(path.parent), path.stem))
        except ValueError as exc:
            raise LoadError(str(exc)) from exc
    return modules


@dataclass
class Package:
    """A loaded package and all of its modules."""

    name: str
    authors: list[str]
    license: str
    modules: list[Module] = field(default_factory=list)

    @classmethod
    def load(cls, dir_path: str | PathLike[str]) -> Package:
        """Load a package directory, raising :class:`PackageLoadError` on failure."""
        root = str(dir_path)
        if not Path(root).is_dir():
            raise PackageLoadError([f"Provided path: {root}, must be a directory"])

        try:
            config = PackageConfig.from_dict(load_toml(Path(root) / PACKAGE_FILE_NAME))
        except (LoadError, ValueError) as exc:
            raise PackageLoadError([str(exc)]) from exc

        modules = [] if config.module_paths is None else cls._load_modules(root, config.module_paths)
        return cls(config.name, config.authors, config.license, modules)

    @staticmethod
    def _load_modules(root: str, paths: ModulePaths) -> list[Module]:
        kinds: list[tuple[str | None, Callable[[str, str], Module]]] = [
            (paths.bibles, BibleModule.load),
            (paths.dictionaries, DictModule.load),
            (paths.xrefs, XRefModule.load),
        ]
        modules: list[Module] = []
        errors: list[str] = []
        for pattern, loader in kinds:
            if pattern is None:
                continue
            try:
                modules.extend(_load_matching(root, pattern, loader))
            except LoadError as exc:
                errors.append(str(exc))
        if errors:
            raise PackageLoadError(errors)
        return modules

    def validate(self) -> None:
        """Check every xref against every Bible; raise :class:`PackageValidationError` on mismatch."""
        bibles = [module for module in self.modules if isinstance(module, BibleModule)]
        xref_modules = [module for module in self.modules if isinstance(module, XRefModule)]

        errors = [
            InvalidRefId(ref_id, bible.name, xref_module.name, index + 1)
            for bible in bibles
            for xref_module in xref_modules
            for index, xref in enumerate(xref_module.refs)
            for ref_id in xref.ref_ids()
            if not bible.source.id_exists(ref_id)
        ]
        if errors:
            raise PackageValidationError(errors)