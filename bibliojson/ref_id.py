"""Scripture reference identifiers such as ``Gen.1.1`` or ``Gen.1.1#3-Gen.1.2#1``."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

_MAX_INDEX = 2**32 - 1
_INDEX_PATTERN = re.compile(r"\+?[0-9]+")


class AtomKind(Enum):
    """The granularity of an :class:`Atom`."""

    BOOK = "book"
    CHAPTER = "chapter"
    VERSE = "verse"
    WORD = "word"


def _parse_index(text: str, what: str) -> int:
    if _INDEX_PATTERN.fullmatch(text) is None:
        raise ValueError(f"Invalid {what}")
    value = int(text)
    if not 1 <= value <= _MAX_INDEX:
        raise ValueError(f"Invalid {what}")
    return value


def _check_index(value: int | None, what: str) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{what} must be an int, not {type(value).__name__}")
    if not 1 <= value <= _MAX_INDEX:
        raise ValueError(f"Invalid {what}")


@dataclass(frozen=True)
class Atom:
    """A single location: a book, a chapter, a verse or a word within a verse."""

    book: str
    chapter: int | None = None
    verse: int | None = None
    word: int | None = None

    def __post_init__(self) -> None:
        _check_index(self.chapter, "chapter")
        _check_index(self.verse, "verse")
        _check_index(self.word, "word")
        if self.verse is not None and self.chapter is None:
            raise ValueError("A verse requires a chapter")
        if self.word is not None and self.verse is None:
            raise ValueError("A word requires a verse")

    @property
    def kind(self) -> AtomKind:
        if self.word is not None:
            return AtomKind.WORD
        if self.verse is not None:
            return AtomKind.VERSE
        if self.chapter is not None:
            return AtomKind.CHAPTER
        return AtomKind.BOOK

    def __str__(self) -> str:
        match self.kind:
            case AtomKind.BOOK:
                return self.book
            case AtomKind.CHAPTER:
                return f"{self.book}.{self.chapter}"
            case AtomKind.VERSE:
                return f"{self.book}.{self.chapter}.{self.verse}"
            case AtomKind.WORD:
                return f"{self.book}.{self.chapter}.{self.verse}#{self.word}"
        raise AssertionError("unreachable")


@dataclass(frozen=True)
class RefId:
    """A reference to a single atom, or to a range between two atoms."""

    start: Atom
    end: Atom | None = None

    @property
    def is_range(self) -> bool:
        return self.end is not None

    def is_valid(self) -> bool:
        """A range is valid only when both ends have the same granularity."""
        if self.end is None:
            return True
        return self.start.kind is self.end.kind

    def verse_components(self) -> tuple[str, int, int] | None:
        """Return ``(book, chapter, verse)`` for a single verse reference, else None."""
        if self.end is None and self.start.kind is AtomKind.VERSE:
            return self.start.book, self.start.chapter, self.start.verse
        return None

    def __str__(self) -> str:
        if self.end is None:
            return str(self.start)
        return f"{self.start}-{self.end}"


def parse_atom(text: str) -> Atom:
    """Parse ``book``, ``book.chapter``, ``book.chapter.verse`` or ``book.chapter.verse#word``."""
    main, sep, word = text.partition("#")
    word_text = word if sep else None
    parts = main.split(".")

    match len(parts), word_text:
        case 1, None:
            return Atom(parts[0])
        case 2, None:
            return Atom(parts[0], _parse_index(parts[1], "chapter"))
        case 3, None:
            return Atom(
                parts[0],
                _parse_index(parts[1], "chapter"),
                _parse_index(parts[2], "verse"),
            )
        case 3, str():
            return Atom(
                parts[0],
                _parse_index(parts[1], "chapter"),
                _parse_index(parts[2], "verse"),
                _parse_index(word_text, "word"),
            )
    raise ValueError(f"Unrecognized Atom format: {text}")


def parse_ref_id(text: str) -> RefId:
    """Parse a reference, which is either an atom or two atoms joined by ``-``."""
    start, sep, end = text.partition("-")
    if sep:
        return RefId(parse_atom(start.strip()), parse_atom(end.strip()))
    return RefId(parse_atom(text.strip()))