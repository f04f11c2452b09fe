import json
from pathlib import Path

from bibliojson.cli import format_validation_errors, main
from bibliojson.package import InvalidRefId
from bibliojson.ref_id import parse_ref_id

PACKAGE_TOML = """\
name = "Test Package"
authors = ["Someone"]
license = "MIT"

[module_paths]
bibles = "bibles/*"
xrefs = "xrefs/*"
"""

BIBLE_TOML = """\
name = "Test Bible"
description = "A tiny bible"
language = "en"

[books]
Gen = "Genesis"
"""


def _make_package(root: Path, xrefs):
    (root / "biblio-json.toml").write_text(PACKAGE_TOML)
    (root / "bibles").mkdir()
    (root / "xrefs").mkdir()
    (root / "bibles" / "tiny.toml").write_text(BIBLE_TOML)
    verses = [
        {"id": "Gen.1.1", "words": [{"text": "In"}]},
        {"id": "Gen.1.2", "words": [{"text": "And"}]},
    ]
    (root / "bibles" / "tiny.jsonl").write_text("\n".join(json.dumps(v) for v in verses))
    (root / "xrefs" / "refs.toml").write_text('name = "Test XRefs"\n')
    (root / "xrefs" / "refs.jsonl").write_text("\n".join(json.dumps(x) for x in xrefs))
    return root


def _error(ref, line):
    return InvalidRefId(parse_ref_id(ref), "B", "X", line)


def test_format_deduplicates_by_id():
    errors = [_error("Gen.9.9", 1), _error("Gen.9.9", 3), _error("Exod.1.1", 2)]
    assert format_validation_errors(errors) == " 1. Gen.9.9 on 1\n 2. Exod.1.1 on 2"


def test_format_empty():
    assert format_validation_errors([]) == ""


def test_main_passes(tmp_path, capsys):
    _make_package(tmp_path, [{"type": "directed", "source": "Gen.1.1", "targets": ["Gen.1.2"]}])
    assert main([str(tmp_path)]) == 0
    assert capsys.readouterr().out == "Package loaded!\nValidation passed!\n"


def test_main_reports_unknown_refs(tmp_path, capsys):
    xrefs = [
        {"type": "directed", "source": "Gen.1.1", "targets": ["Gen.5.5"]},
        {"type": "mutual", "refs": [{"id": "Gen.5.5"}, {"id": "Gen.1.2"}]},
    ]
    _make_package(tmp_path, xrefs)
    assert main([str(tmp_path)]) == 1
    out = capsys.readouterr().out
    assert out == "Package loaded!\nUnknown errors:\n 1. Gen.5.5 on 1\n"


def test_main_reports_load_errors(tmp_path, capsys):
    missing = tmp_path / "missing"
    assert main([str(missing)]) == 1
    out = capsys.readouterr().out
    assert out == f"Package loaded with errors:\nProvided path: {missing}, must be a directory\n\n"