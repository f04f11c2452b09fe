import json
from pathlib import Path

import pytest

from bibliojson.bible import BibleModule
from bibliojson.dictionary import DictModule
from bibliojson.package import (
    InvalidRefId,
    ModulePaths,
    Package,
    PackageConfig,
    PackageLoadError,
    PackageValidationError,
    is_bible,
    is_dict,
    is_xrefs,
)
from bibliojson.ref_id import parse_ref_id
from bibliojson.xrefs import XRefModule

PACKAGE_TOML = """\
name = "Test Package"
authors = ["Someone"]
license = "MIT"

[module_paths]
bibles = "bibles/*"
dictionaries = "dicts/*"
xrefs = "xrefs/*"
"""

BIBLE_TOML = """\
name = "Test Bible"
description = "A tiny bible"
language = "en"

[books]
Gen = "Genesis"
"""

DICT_TOML = """\
name = "Test Dict"
authors = ["Someone"]
language = "en"
"""

XREF_TOML = """\
name = "Test XRefs"
"""


def _jsonl(rows):
    return "\n".join(json.dumps(row) for row in rows) + "\n"


VERSES = [
    {"id": "Gen.1.1", "words": [{"text": "In"}, {"text": "the"}]},
    {"id": "Gen.1.2", "words": [{"text": "And"}]},
]

GOOD_XREFS = [
    {"type": "directed", "source": "Gen.1.1", "targets": ["Gen.1.2"]},
    {"type": "mutual", "refs": [{"id": "Gen.1.1#2"}, {"id": "Gen.1"}]},
]


def _make_package(root: Path, xrefs=GOOD_XREFS, verses=VERSES, package_toml=PACKAGE_TOML):
    (root / "biblio-json.toml").write_text(package_toml)
    for sub in ("bibles", "dicts", "xrefs"):
        (root / sub).mkdir()
    (root / "bibles" / "tiny.toml").write_text(BIBLE_TOML)
    (root / "bibles" / "tiny.jsonl").write_text(_jsonl(verses))
    (root / "dicts" / "words.toml").write_text(DICT_TOML)
    (root / "dicts" / "words.jsonl").write_text(
        _jsonl([{"term": "Abba", "definitions": ["father"]}])
    )
    (root / "xrefs" / "refs.toml").write_text(XREF_TOML)
    (root / "xrefs" / "refs.jsonl").write_text(_jsonl(xrefs))
    return root


def test_load_full_package(tmp_path):
    package = Package.load(_make_package(tmp_path))
    assert package.name == "Test Package"
    assert package.authors == ["Someone"]
    assert package.license == "MIT"
    assert [type(m) for m in package.modules] == [BibleModule, DictModule, XRefModule]
    assert package.modules[0].name == "Test Bible"
    assert len(package.modules[2].refs) == 2


def test_module_kind_predicates(tmp_path):
    modules = Package.load(_make_package(tmp_path)).modules
    assert [is_bible(m) for m in modules] == [True, False, False]
    assert [is_dict(m) for m in modules] == [False, True, False]
    assert [is_xrefs(m) for m in modules] == [False, False, True]


def test_valid_package_validates(tmp_path):
    package = Package.load(_make_package(tmp_path))
    assert package.validate() is None
    assert len(package.modules) == 3


def test_invalid_refs_are_reported(tmp_path):
    xrefs = [
        {"type": "directed", "source": "Gen.1.1", "targets": ["Gen.2.1"]},
        {"type": "mutual", "refs": [{"id": "Gen.1.1#3"}, {"id": "Gen.1.2"}]},
    ]
    package = Package.load(_make_package(tmp_path, xrefs=xrefs))
    with pytest.raises(PackageValidationError) as info:
        package.validate()
    assert info.value.errors == [
        InvalidRefId(parse_ref_id("Gen.2.1"), "Test Bible", "Test XRefs", 1),
        InvalidRefId(parse_ref_id("Gen.1.1#3"), "Test Bible", "Test XRefs", 2),
    ]


def test_invalid_ref_message():
    error = InvalidRefId(parse_ref_id("Gen.2.1"), "Test Bible", "Test XRefs", 4)
    assert str(error) == "RefId Gen.2.1 in xref module Test XRefs on line 4 does not exist in Bible Test Bible"


def test_load_requires_directory(tmp_path):
    file_path = tmp_path / "file.txt"
    file_path.write_text("")
    with pytest.raises(PackageLoadError) as info:
        Package.load(file_path)
    assert info.value.errors == [f"Provided path: {file_path}, must be a directory"]


def test_load_missing_config(tmp_path):
    with pytest.raises(PackageLoadError) as info:
        Package.load(tmp_path)
    assert len(info.value.errors) == 1


def test_load_without_module_paths(tmp_path):
    (tmp_path / "biblio-json.toml").write_text('name = "P"\nauthors = []\nlicense = "MIT"\n')
    package = Package.load(tmp_path)
    assert package.name == "P"
    assert package.modules == []


def test_broken_bible_reports_one_error(tmp_path):
    verses = [{"id": "Gen.1.1", "words": []}, {"id": "Gen.1.3", "words": []}]
    _make_package(tmp_path, verses=verses)
    with pytest.raises(PackageLoadError) as info:
        Package.load(tmp_path)
    assert len(info.value.errors) == 1
    assert "verse number that is out of order" in info.value.errors[0]


def test_errors_collected_across_kinds(tmp_path):
    verses = [{"id": "Gen.1", "words": []}]
    _make_package(tmp_path, verses=verses)
    (tmp_path / "xrefs" / "refs.jsonl").write_text('{"type": "unknown"}\n')
    with pytest.raises(PackageLoadError) as info:
        Package.load(tmp_path)
    assert len(info.value.errors) == 2


def test_non_toml_files_are_ignored(tmp_path):
    _make_package(tmp_path)
    (tmp_path / "bibles" / "notes.txt").write_text("ignored")
    package = Package.load(tmp_path)
    assert sum(is_bible(m) for m in package.modules) == 1


def test_module_paths_from_dict_defaults():
    paths = ModulePaths.from_dict({"bibles": "b/*"})
    assert paths == ModulePaths(bibles="b/*", dictionaries=None, xrefs=None)


def test_package_config_from_dict():
    config = PackageConfig.from_dict(
        {"name": "N", "authors": ["A"], "license": "L", "module_paths": {"xrefs": "x/*"}}
    )
    assert config.module_paths == ModulePaths(xrefs="x/*")
    assert config.authors == ["A"]


def test_package_config_missing_field():
    with pytest.raises(ValueError):
        PackageConfig.from_dict({"authors": [], "license": "MIT"})