# usage: stop-word removal, stemming and summary stats over Token records
from collections import Counter
from dataclasses import replace
from typing import Iterable, Sequence, Union

from nltk.stem import SnowballStemmer
from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

from booktext.nlp.resources import ensure_nltk_data
from booktext.shared.errors import ConfigurationError

STOP_WORD_SOURCES = ("nltk", "sklearn")


def load_stop_words(source: Union[str, Iterable[str]] = "nltk", *, language: str = "english") -> frozenset:
    """
    Stop-word list as a frozenset of lowercase words.

    source: "nltk" (NLTK stopwords corpus, downloaded on first use),
        "sklearn" (scikit-learn's built-in English list, no download), or any
        iterable of words supplied by the caller.
    """
    if isinstance(source, str):
        if source == "nltk":
            ensure_nltk_data("stopwords")
            from nltk.corpus import stopwords
            try:
                words = stopwords.words(language)
            except (OSError, LookupError) as exc:
                raise ConfigurationError(f"No NLTK stop-word list for {language!r}") from exc
        elif source == "sklearn":
            words = ENGLISH_STOP_WORDS
        else:
            raise ConfigurationError(f"Stop-word source must be one of {STOP_WORD_SOURCES} or a word list, got {source!r}")
    else:
        words = source
    return frozenset(w.lower() for w in words)


def remove_stop_words(tokens: Sequence, stop_words: Iterable[str]) -> list:
    """
    Drop tokens whose text is a stop word. Surviving tokens keep their original
    token_index (and `following`), so they can still be joined back to the
    full token table.
    """
    stop = stop_words if isinstance(stop_words, (set, frozenset)) else frozenset(stop_words)
    return [t for t in tokens if t.text not in stop]


def make_stemmer(language: str = "english") -> SnowballStemmer:
    try:
        return SnowballStemmer(language)
    except ValueError as exc:
        raise ConfigurationError(f"Snowball has no stemmer for {language!r}") from exc


def stem_tokens(tokens: Sequence, language: str = "english") -> list:
    """Replace each token's text (and `following`) with its Snowball stem."""
    stemmer = make_stemmer(language)
    cache = {}

    def stem(w):
        if w is None:
            return None
        if w not in cache:
            cache[w] = stemmer.stem(w)
        return cache[w]

    return [replace(t, text=stem(t.text), following=stem(t.following)) for t in tokens]


def text_stats(tokens: Sequence) -> dict:
    """Vocabulary size, token count and type/token ratio."""
    freq = Counter(t.text for t in tokens)
    token_count = len(tokens)
    vocab_size = len(freq)
    return {
        "token_count": token_count,
        "vocab_size": vocab_size,
        "type_token_ratio": (vocab_size / token_count) if token_count else 0.0,
    }
