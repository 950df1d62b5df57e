from pathlib import Path

import pytest

from booktext.etl.annotator import annotate_lines
from booktext.etl.loader import Line
from booktext.nlp.adjacency import attach_following
from booktext.nlp.tokenizer import Token, tokenize_lines

SCENARIO = ["CHAPTER I", "Cook and Aorangi.", "", "Mount Cook is big."]

THREE_CHAPTERS = [
    "CHAPTER I",
    "Aorangi stood white above the plain.",
    "",
    "CHAPTER II",
    "Cook climbed Aorangi at dawn.",
    "",
    "CHAPTER III",
    "The river ran down to the sea.",
]


def make_lines(texts):
    return [Line(raw_text=t, line_index=i) for i, t in enumerate(texts)]


def analyze_texts(texts):
    lines = annotate_lines(make_lines(texts))
    return lines, attach_following(tokenize_lines(lines).tokens)


def make_tokens(units):
    """units: [(chapter_index, paragraph_index, "space separated words"), ...]"""
    tokens = []
    for chapter, paragraph, words in units:
        for w in words.split():
            tokens.append(Token(text=w, token_index=len(tokens), line_index=paragraph,
                                paragraph_index=paragraph, chapter_index=chapter))
    return tokens


@pytest.fixture
def scenario():
    return analyze_texts(SCENARIO)


@pytest.fixture
def three_chapters():
    return analyze_texts(THREE_CHAPTERS)


@pytest.fixture
def book_file(tmp_path: Path) -> Path:
    path = tmp_path / "aorangi.txt"
    path.write_text("\n".join(THREE_CHAPTERS) + "\n", encoding="utf-8")
    return path
