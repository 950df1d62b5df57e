# usage: annotated lines -> Token records (words / sentences / n-grams via NLTK)
import re
from dataclasses import dataclass, field
from typing import Optional, Sequence

import nltk
from nltk.tokenize import RegexpTokenizer, sent_tokenize
from nltk.util import ngrams

from booktext.etl.loader import ESCAPED_RE, Line
from booktext.nlp.resources import ensure_nltk_data
from booktext.shared.errors import ConfigurationError, ResourceUnavailable, TokenizationError

GRANULARITIES = ("words", "sentences", "ngrams")
ERROR_POLICIES = ("raise", "skip")

# languages shipped in the punkt_tab sentence models
PUNKT_LANGUAGES = (
    "czech", "danish", "dutch", "english", "estonian", "finnish", "french", "german", "greek", "italian",
    "malayalam", "norwegian", "polish", "portuguese", "russian", "slovene", "spanish", "swedish", "turkish",
)

# A word is a run of Unicode letters/digits; "_" is a boundary (Gutenberg _italics_)
_WORD = r"[^\W_]+"
_APOSTROPHES = "'’"


@dataclass(frozen=True)
class Token:
    text: str
    token_index: int
    line_index: int
    paragraph_index: int
    chapter_index: int
    following: Optional[str] = None


@dataclass(frozen=True)
class TokenizerConfig:
    """
    How lines are split into tokens.

    granularity: "words", "sentences" or "ngrams" (word n-grams inside a line).
    lowercase: fold case with str.lower().
    keep_contractions: an apostrophe between two words stays inside the token
        ("don't", "o'clock"); otherwise it splits them.
    keep_hyphens: a hyphen between two words stays inside the token
        ("well-known"); otherwise it splits them.
    pattern: regular expression replacing the built-in word rule entirely.
    ngram_n: n for the "ngrams" granularity.
    language: punkt model for the "sentences" granularity.
    """
    granularity: str = "words"
    lowercase: bool = True
    keep_contractions: bool = True
    keep_hyphens: bool = False
    pattern: Optional[str] = None
    ngram_n: int = 2
    language: str = "english"

    def __post_init__(self):
        if self.granularity not in GRANULARITIES:
            raise ConfigurationError(f"granularity must be one of {GRANULARITIES}, got {self.granularity!r}")
        if self.granularity == "ngrams" and (not isinstance(self.ngram_n, int) or self.ngram_n < 2):
            raise ConfigurationError(f"ngram_n must be an integer >= 2, got {self.ngram_n!r}")
        if self.pattern is not None:
            try:
                compiled = re.compile(self.pattern)
            except (re.error, TypeError) as exc:
                raise ConfigurationError(f"Invalid token pattern {self.pattern!r}: {exc}") from exc
            if compiled.groups:
                raise ConfigurationError("Token pattern must use non-capturing groups only, e.g. (?:...)")
        if self.language not in PUNKT_LANGUAGES:
            raise ConfigurationError(f"No sentence model for language {self.language!r}; choose from {PUNKT_LANGUAGES}")

    def word_pattern(self) -> str:
        if self.pattern is not None:
            return self.pattern
        joins = []
        if self.keep_contractions:
            joins.append(f"[{_APOSTROPHES}]")
        if self.keep_hyphens:
            joins.append("-")
        if not joins:
            return _WORD
        return rf"{_WORD}(?:(?:{'|'.join(joins)}){_WORD})*"


class WordTokenizer:
    def __init__(self, config: TokenizerConfig):
        self.lowercase = config.lowercase
        self._re = RegexpTokenizer(config.word_pattern())

    def tokenize(self, text: str) -> list[str]:
        words = [w.replace("’", "'") for w in self._re.tokenize(text)]
        return [w.lower() for w in words] if self.lowercase else words


class NgramTokenizer:
    def __init__(self, config: TokenizerConfig):
        self.n = config.ngram_n
        self._words = WordTokenizer(config)

    def tokenize(self, text: str) -> list[str]:
        return [" ".join(g) for g in ngrams(self._words.tokenize(text), self.n)]


class SentenceTokenizer:
    def __init__(self, config: TokenizerConfig):
        self.lowercase = config.lowercase
        self.language = config.language
        ensure_nltk_data("punkt", "punkt_tab")
        try:
            nltk.data.find(f"tokenizers/punkt_tab/{self.language}/")
        except LookupError as exc:
            raise ResourceUnavailable(f"NLTK sentence model for {self.language!r} is not installed") from exc

    def tokenize(self, text: str) -> list[str]:
        sents = [s.strip() for s in sent_tokenize(text, language=self.language) if s.strip()]
        return [s.lower() for s in sents] if self.lowercase else sents


_STRATEGIES = {
    "words": WordTokenizer,
    "sentences": SentenceTokenizer,
    "ngrams": NgramTokenizer,
}


def make_tokenizer(config: Optional[TokenizerConfig] = None):
    config = config or TokenizerConfig()
    return _STRATEGIES[config.granularity](config)


@dataclass
class Tokenized:
    """Tokenizer output plus the per-line failures that were skipped."""
    tokens: list = field(default_factory=list)
    errors: list = field(default_factory=list)


def _check_line(ln: Line) -> None:
    if ESCAPED_RE.search(ln.raw_text):
        raise TokenizationError("undecodable bytes in line", line_index=ln.line_index)
    if "\ufffd" in ln.raw_text:
        raise TokenizationError("replacement character U+FFFD in line", line_index=ln.line_index)


def tokenize_lines(lines: Sequence[Line], tokenizer=None, *, on_error: str = "skip") -> Tokenized:
    """
    Split annotated lines into Tokens, line by line and left to right.

    Tokens inherit line/paragraph/chapter indices from their line and get a
    dense token_index from 0. Blank lines yield nothing. A line with encoding
    anomalies raises TokenizationError under on_error="raise"; under "skip"
    the error is recorded in `Tokenized.errors` and the line contributes no
    tokens.
    """
    if on_error not in ERROR_POLICIES:
        raise ConfigurationError(f"on_error must be one of {ERROR_POLICIES}, got {on_error!r}")
    if any(ln.paragraph_index is None or ln.chapter_index is None for ln in lines):
        raise ConfigurationError("Lines must go through annotate_lines before tokenization.")
    tokenizer = tokenizer or make_tokenizer()

    out = Tokenized()
    for ln in lines:
        if ln.is_blank:
            continue
        try:
            _check_line(ln)
            pieces = tokenizer.tokenize(ln.raw_text)
        except TokenizationError as err:
            if on_error == "raise":
                raise
            print(f"[WARN] {err}; line skipped")
            out.errors.append(err)
            continue
        for text in pieces:
            out.tokens.append(Token(
                text=text,
                token_index=len(out.tokens),
                line_index=ln.line_index,
                paragraph_index=ln.paragraph_index,
                chapter_index=ln.chapter_index,
            ))
    return out
