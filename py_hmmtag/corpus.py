from collections.abc import Iterable, Iterator
from itertools import zip_longest
from pathlib import Path

import regex as re

WHITESPACE_REGEX = r"\s+"

_whitespace = re.compile(WHITESPACE_REGEX)


class CorpusFormatError(ValueError):
    """Sentence and tag sources are not line-aligned."""


def normalize(line: str, lowercase: bool = True) -> str:
    return line.lower() if lowercase else line


def tokenize(line: str, lowercase: bool = True) -> list[str]:
    """Case-normalizes a line and splits it on runs of whitespace."""
    if isinstance(line, (list, tuple)):
        raise ValueError("Expected a single line of text, not a token sequence.")
    return [token for token in _whitespace.split(normalize(line, lowercase)) if token]


def iter_tagged_lines(
    sentence_lines: Iterable[str],
    tag_lines: Iterable[str],
    lowercase: bool = True,
) -> Iterator[tuple[list[str], list[str]]]:
    """
    Pairs up sentence and tag lines and yields (words, tags) token lists.

    Raises CorpusFormatError as soon as the two sources disagree: one runs out
    before the other, a line is blank, or a sentence and its tag line have a
    different number of tokens.
    """
    missing = object()
    for line_no, (sentence, tags) in enumerate(zip_longest(sentence_lines, tag_lines, fillvalue=missing), start=1):
        if sentence is missing or tags is missing:
            source = "tag" if tags is missing else "sentence"
            raise CorpusFormatError(f"Line {line_no}: {source} source ended early")
        words = tokenize(sentence, lowercase)
        labels = tokenize(tags, lowercase)
        if not words or not labels:
            raise CorpusFormatError(f"Line {line_no}: blank line in corpus")
        if len(words) != len(labels):
            raise CorpusFormatError(
                f"Line {line_no}: {len(words)} words but {len(labels)} tags ({sentence.strip()!r} / {tags.strip()!r})"
            )
        yield words, labels


def read_tagged_corpus(
    sentence_path: str | Path,
    tag_path: str | Path,
    lowercase: bool = True,
) -> list[tuple[list[str], list[str]]]:
    with open(sentence_path, "r", encoding="utf-8") as sentences, open(tag_path, "r", encoding="utf-8") as tags:
        return list(iter_tagged_lines(sentences, tags, lowercase))


def read_sentences(path: str | Path) -> list[str]:
    """Raw lines of a sentence file, without their line endings."""
    with open(path, "r", encoding="utf-8") as f:
        return [line.rstrip("\n") for line in f]
