# bibliojson

Read a *biblio-json* package from disk and check that it holds together.

A biblio-json package is a directory with a `biblio-json.toml` file at its
root. That file names the package and says where its modules live. There are
three kinds of module. Each one is a pair of files with the same stem: a
`.toml` file that describes the module and a `.jsonl` file that holds its
data, one JSON object per line. Empty lines in a `.jsonl` file are skipped.

- **Bibles** (`bibliojson.bible`): one verse per line, in book, chapter and
  verse order.
- **Dictionaries** (`bibliojson.dictionary`): one entry per line, each with a
  term, optional aliases and its definitions.
- **Cross references** (`bibliojson.xrefs`): one reference per line, either
  *directed* (a source passage pointing at targets) or *mutual* (a set of
  passages that refer to each other).

## Installing

```
pip install .
```

Python 3.11 or later is needed. The package has no dependencies beyond the
standard library.

## Package layout

```
res/
  biblio-json.toml
  bibles/
    kjv.toml
    kjv.jsonl
  dictionaries/
    eastons.toml
    eastons.jsonl
  xrefs/
    tsk.toml
    tsk.jsonl
```

`biblio-json.toml` needs `name`, `authors` and `license`; `module_paths` and
each of its entries are optional:

```toml
name = "Example Package"
authors = ["Example Author"]
license = "CC0"

[module_paths]
bibles = "bibles/*.toml"
dictionaries = "dictionaries/*.toml"
xrefs = "xrefs/*.toml"
```

Each entry under `module_paths` is a glob pattern, relative to the package
directory (`**` matches across directories). Only the `.toml` files it
matches are taken as modules, in sorted path order. Every matched `.toml`
file needs a `.jsonl` file with the same stem next to it.

A Bible's `.toml` file needs `name`, `description`, `language` and a `books`
table that maps each book id to its full name; `pub_year` and `data_source`
are optional:

```toml
name = "Example Bible"
description = "A sample translation"
language = "en"
pub_year = 1900

[books]
Gen = "Genesis"
John = "John"
```

A line of a Bible's `.jsonl` file:

```json
{"id": "Gen.1.1", "words": [{"text": "In"}, {"text": "the"}, {"text": "beginning", "end_punc": ","}]}
```

A word may also carry `red`, `italics` and `begin_punc`. Loading a Bible
checks that every id is a verse (`book.chapter.verse`), that each book's
verses are together and appear once, that chapters start at 1 and go up by
one, that verses in each chapter start at 1 and go up by one, and that every
book has a full name in the `books` table. The loaded `BibleSource` keeps the
verses by id and a `BookInfo` per book, with the verse count of each chapter.

A dictionary's `.toml` file needs `name`, `authors` and `language`;
`description`, `data_source`, `pub_year` and `license` are optional. A line
of its `.jsonl` file:

```json
{"term": "Aaron", "aliases": ["Aaron's"], "definitions": ["The eldest son of Amram and Jochebed."]}
```

A cross-reference module's `.toml` file needs `name`; `description`,
`data_source`, `license`, `language`, `pub_year` and `bible_dep` are
optional. Lines of its `.jsonl` file:

```json
{"type": "directed", "source": "Gen.1.1", "targets": ["John.1.1-John.1.3"]}
{"type": "mutual", "refs": [{"id": "Gen.1.1"}, {"id": "John.1.1", "text": "In the beginning"}]}
```

A directed reference may also carry `source_text` and `note`; a mutual one
may carry `note`.

## Reference ids

A reference points at a book, a chapter, a verse or a single word, or at a
range between two of them:

| Text                | Meaning                          |
|---------------------|----------------------------------|
| `Gen`               | the book of Genesis              |
| `Gen.1`             | Genesis chapter 1                |
| `Gen.1.1`           | Genesis 1:1                      |
| `John.3.16#2`       | the second word of John 3:16     |
| `Gen.1.1-Gen.1.3`   | Genesis 1:1 through Genesis 1:3  |

Chapter, verse and word numbers must be positive. A malformed id raises
`ValueError`.

```python
from bibliojson.ref_id import parse_ref_id

ref = parse_ref_id("Gen.1.1-Gen.1.3")
print(ref)             # Gen.1.1-Gen.1.3
print(ref.is_valid())  # True: both ends are verses

verse = parse_ref_id("John.3.16")
print(verse.verse_components())  # ('John', 3, 16)
```

`is_valid()` is false for a range whose ends differ in kind, such as
`Gen.1-Gen.1.3`.

## Checking a package from the command line

```
bibliojson [PATH]
```

This loads the package in `PATH` (by default `./res`) and prints
`Package loaded!`, or `Package loaded with errors:` followed by the errors.
It then checks that every reference in every cross-reference module exists
in every Bible in the package, and prints `Validation passed!` or
`Unknown errors:` followed by a numbered list. Each unknown reference is
listed once, with the line of the cross-reference file it first appears on.
The exit status is 0 when both steps succeed and 1 otherwise.

## Using the library

```python
from bibliojson.package import (
    Package,
    PackageLoadError,
    PackageValidationError,
    is_bible,
)

try:
    package = Package.load("./res")
except PackageLoadError as exc:
    print(exc.errors)
else:
    bibles = [module for module in package.modules if is_bible(module)]
    print(f"{package.name}: {len(bibles)} Bible(s)")
    try:
        package.validate()
    except PackageValidationError as exc:
        for error in exc.errors:
            print(error)
```

`PackageLoadError.errors` holds one message per module kind that failed to
load; within a kind, loading stops at the first module that fails.
`PackageValidationError.errors` holds an `InvalidRefId` for each reference
that a Bible lacks. When checking a reference, a missing chapter or verse
number is taken as 1, a word number must not exceed the verse's word count,
and a range needs both of its ends to exist.

Single modules can be loaded on their own, from the directory that holds them
and their file stem. Load failures raise `bibliojson.utils.LoadError`.

```python
from bibliojson.bible import BibleModule
from bibliojson.dictionary import DictModule
from bibliojson.ref_id import parse_ref_id

bible = BibleModule.load("res/bibles", "kjv")
print(bible.source.id_exists(parse_ref_id("Gen.1.1#1")))

dictionary = DictModule.load("res/dictionaries", "eastons")
entry = dictionary.find("aaron's")
```

`DictModule.find` returns the first entry whose term or one of whose aliases
matches, or `None`. Matching ignores whitespace and punctuation other than
hyphens, and ignores the case of ASCII letters.

## What it does not do

The package loads and checks data. It does not display, search or render
Bible text, and it does not write or convert packages.

## Running the tests

```
pip install .[test]
pytest
```