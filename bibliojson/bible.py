"""Bible text modules: a TOML description plus verses stored as JSON Lines."""

from __future__ import annotations

from dataclasses import dataclass, field
from os import PathLike
from typing import Any

from .ref_id import Atom, RefId, parse_ref_id
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


def _flag(data: dict[str, Any], key: str) -> bool | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ValueError(f"invalid type for `{key}`: expected a boolean")
    return value


def _year(data: dict[str, Any], key: str) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _MAX_U32:
        raise ValueError(f"invalid value for `{key}`: expected a u32")
    return value


def _book_names(data: dict[str, Any], key: str) -> dict[str, str]:
    value = data.get(key)
    if value is None:
        raise ValueError(f"missing field `{key}`")
    if not isinstance(value, dict):
        raise ValueError(f"invalid type for `{key}`: expected a table")
    for osis_id, name in value.items():
        if not isinstance(name, str):
            raise ValueError(f"invalid type for `{key}.{osis_id}`: expected a string")
    return dict(value)


@dataclass
class Word:
    """One word of a verse with its formatting."""

    text: str
    red: bool | None = None
    italics: bool | None = None
    begin_punc: str | None = None
    end_punc: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> Word:
        data = _object(data, "a word")
        return cls(
            text=_string(data, "text"),
            red=_flag(data, "red"),
            italics=_flag(data, "italics"),
            begin_punc=_string(data, "begin_punc", optional=True),
            end_punc=_string(data, "end_punc", optional=True),
        )


@dataclass
class Verse:
    """A verse identified by a reference and made of words."""

    id: RefId
    words: list[Word] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> Verse:
        data = _object(data, "a verse")
        ref_id = parse_ref_id(_string(data, "id"))
        words = data.get("words")
        if words is None:
            raise ValueError("missing field `words`")
        if not isinstance(words, list):
            raise ValueError("invalid type for `words`: expected a list")
        return cls(ref_id, [Word.from_dict(word) for word in words])


@dataclass
class BookInfo:
    """Summary of one book: its names, position and verse count per chapter."""

    name: str
    osis_id: str
    index: int
    chapters: list[int]


@dataclass
class BibleConfig:
    """The TOML description of a Bible module."""

    name: str
    description: str
    language: str
    books: dict[str, str]
    pub_year: int | None = None
    data_source: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> BibleConfig:
        data = _object(data, "a bible config")
        return cls(
            name=_string(data, "name"),
            description=_string(data, "description"),
            language=_string(data, "language"),
            books=_book_names(data, "books"),
            pub_year=_year(data, "pub_year"),
            data_source=_string(data, "data_source", optional=True),
        )


@dataclass
class BibleSource:
    """The verses of a Bible together with per-book information."""

    book_infos: dict[int, BookInfo]
    verses: dict[RefId, Verse]

    @classmethod
    def from_file(cls, path: str | PathLike[str], books: dict[str, str]) -> BibleSource:
        """Load verses from a JSON Lines file, checking that they are in order."""
        try:
            verses = [(Verse.from_dict(data), line) for data, line in load_json_lines(path)]
        except ValueError as exc:
            raise LoadError(str(exc)) from exc

        visited: set[str] = set()
        book_infos: dict[int, BookInfo] = {}
        current_book: str | None = None
        chapters: list[int] = []

        def close_book(book: str, chapter_counts: list[int], line: int) -> None:
            name = books.get(book)
            if name is None:
                raise LoadError(
                    f"Full book name for {book} in file {path} on line {line}, "
                    "does not exist in the bible config."
                )
            index = len(visited)
            book_infos[index] = BookInfo(name, book, index, chapter_counts)

        for verse, line in verses:
            components = verse.id.verse_components()
            if components is None:
                raise LoadError(
                    f"Verse {verse.id} in file {path} on line {line + 1}, "
                    "is not in the format `book.chapter.verse`."
                )
            book, chapter, verse_number = components

            if book != current_book:
                if current_book is not None:
                    # The previous book ended on the line before this one.
                    close_book(current_book, chapters, line)
                if book in visited:
                    raise LoadError(
                        f"Book {book} in file {path} on line {line + 1}, "
                        "has already been defined and is out of order."
                    )
                visited.add(book)
                current_book = book
                chapters = [0]

            if chapter == len(chapters) + 1:
                chapters.append(0)
            elif chapter != len(chapters):
                raise LoadError(
                    f"Verse {verse.id} in file {path} on line {line}, "
                    "has a chapter number that is out of order."
                )

            if verse_number != chapters[-1] + 1:
                raise LoadError(
                    f"Verse {verse.id} in file {path} on line {line}, "
                    "has a verse number that is out of order."
                )
            chapters[-1] += 1

        if current_book is not None:
            close_book(current_book, chapters, len(verses))

        return cls(book_infos, {verse.id: verse for verse, _ in verses})

    def id_exists(self, ref_id: RefId) -> bool:
        """Whether every atom of the reference exists in this Bible."""
        if ref_id.end is None:
            return self.atom_exists(ref_id.start)
        return self.atom_exists(ref_id.start) and self.atom_exists(ref_id.end)

    def atom_exists(self, atom: Atom) -> bool:
        """Whether the atom exists; missing chapter or verse numbers default to 1."""
        key = RefId(Atom(atom.book, atom.chapter or 1, atom.verse or 1))
        verse = self.verses.get(key)
        if verse is None:
            return False
        if atom.word is not None:
            return atom.word <= len(verse.words)
        return True


@dataclass
class BibleModule:
    """A loaded Bible module."""

    name: str
    description: str
    language: str
    pub_year: int | None
    source: BibleSource

    @classmethod
    def load(cls, dir_path: str | PathLike[str], name: str) -> BibleModule:
        """Load ``<name>.toml`` and ``<name>.jsonl`` from a directory."""
        try:
            config = BibleConfig.from_dict(load_toml(f"{dir_path}/{name}.toml"))
        except ValueError as exc:
            raise LoadError(str(exc)) from exc
        source = BibleSource.from_file(f"{dir_path}/{name}.jsonl", config.books)
        return cls(
            name=config.name,
            description=config.description,
            language=config.language,
            pub_year=config.pub_year,
            source=source,
        )