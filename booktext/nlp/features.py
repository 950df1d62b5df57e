# Feature extraction utilities: n-grams that stay inside one paragraph
from collections import Counter
from itertools import groupby
from operator import attrgetter
from typing import Sequence


def make_ngrams(words, n=2):
    """
    Construct n-grams of length n from a list of words.
    Example: words=["mount","cook","is"], n=2 -> ["mount cook", "cook is"]
    """
    return [" ".join(words[i:i+n]) for i in range(0, max(0, len(words)-n+1))]


def ngram_name(n: int) -> str:
    return {1: "unigram", 2: "bigram", 3: "trigram"}.get(n, f"ngram_{n}")


def count_ngrams(tokens: Sequence, ngram_ns=(1, 2, 3)):
    """
    Count unigrams, bigrams, trigrams, ... over Token records.
    N-grams are built per paragraph, so none spans a blank line.
    Returns {ngram_name: Counter}.
    """
    paragraphs = [[t.text for t in run] for _, run in groupby(tokens, key=attrgetter("paragraph_index"))]
    out = {}
    for n in ngram_ns:
        counter = Counter()
        for words in paragraphs:
            counter.update(words if n <= 1 else make_ngrams(words, n))
        out[ngram_name(n)] = counter
    return out
