# usage: word-level sentiment via external lexicons (Bing opinion lexicon / VADER) joined to tokens
from collections import Counter
from collections.abc import Mapping
from typing import Optional, Sequence

import pandas as pd

from booktext.nlp.frequency import FrequencyEngine, check_group_by
from booktext.nlp.resources import ensure_nltk_data
from booktext.nlp.tables import tokens_to_frame
from booktext.shared.errors import ConfigurationError

LEXICONS = ("bing", "vader")
LEXICON_COLUMNS = ["word", "sentiment"]


def _bing_rows():
    ensure_nltk_data("opinion_lexicon")
    from nltk.corpus import opinion_lexicon
    rows = [(w, "positive") for w in opinion_lexicon.positive()]
    rows += [(w, "negative") for w in opinion_lexicon.negative()]
    return rows


def _vader_rows():
    # VADER scores words on a valence scale; keep only the sign as a label
    ensure_nltk_data("vader_lexicon")
    from nltk.sentiment import SentimentIntensityAnalyzer
    lex = SentimentIntensityAnalyzer().lexicon
    return [(w, "positive" if s > 0 else "negative") for w, s in lex.items() if s != 0]


def _mapping_rows(mapping: Mapping):
    rows = []
    for word, labels in mapping.items():
        if isinstance(labels, str):
            labels = [labels]
        rows.extend((word, lab) for lab in labels)
    return rows


def load_lexicon(source="bing") -> pd.DataFrame:
    """
    Sentiment lexicon as a (word, sentiment) table; a word may carry several
    labels. `source` is "bing", "vader", a mapping word -> label(s), or a
    DataFrame that already has word/sentiment columns.
    """
    if isinstance(source, pd.DataFrame):
        missing = set(LEXICON_COLUMNS) - set(source.columns)
        if missing:
            raise ConfigurationError(f"Lexicon table lacks columns: {sorted(missing)}")
        df = source[LEXICON_COLUMNS].copy()
    elif isinstance(source, Mapping):
        df = pd.DataFrame(_mapping_rows(source), columns=LEXICON_COLUMNS)
    elif source == "bing":
        df = pd.DataFrame(_bing_rows(), columns=LEXICON_COLUMNS)
    elif source == "vader":
        df = pd.DataFrame(_vader_rows(), columns=LEXICON_COLUMNS)
    else:
        raise ConfigurationError(f"Unknown lexicon {source!r}; choose from {LEXICONS} or pass a table.")
    df["word"] = df["word"].str.lower()
    return df.drop_duplicates().reset_index(drop=True)


def attach_sentiment(tokens: Sequence, lexicon: pd.DataFrame) -> pd.DataFrame:
    """Token table inner-joined to the lexicon on text == word, in token order."""
    joined = tokens_to_frame(tokens).merge(lexicon, left_on="text", right_on="word", how="inner")
    return joined.drop(columns="word").sort_values("token_index", kind="stable").reset_index(drop=True)


def sentiment_balance(tokens: Sequence, lexicon: pd.DataFrame, group_by=("chapter_index",),
                      lines: Optional[Sequence] = None) -> pd.DataFrame:
    """
    Per-unit label counts plus net = positive - negative.

    Every unit appears (zero-filled), and every label in the lexicon gets a
    column, so chapters with no sentiment words show 0 rather than vanishing.
    """
    dims = check_group_by(group_by)
    labels = sorted(set(lexicon["sentiment"]) | {"positive", "negative"})
    by_word = {}
    for word, lab in lexicon[LEXICON_COLUMNS].itertuples(index=False):
        by_word.setdefault(word, []).append(lab)

    tally = Counter()
    for t in tokens:
        unit = tuple(getattr(t, d) for d in dims)
        for lab in by_word.get(t.text, ()):
            tally[unit, lab] += 1

    rows = []
    for unit in FrequencyEngine(tokens, lines).units(dims):
        row = dict(zip(dims, unit))
        row.update({lab: tally[unit, lab] for lab in labels})
        row["net"] = row["positive"] - row["negative"]
        rows.append(row)
    return pd.DataFrame(rows, columns=[*dims, *labels, "net"])
