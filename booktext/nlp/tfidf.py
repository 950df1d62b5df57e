# usage: term-document counts per structural unit and TF-IDF weights (scikit-learn)
from typing import Sequence

import numpy as np
import pandas as pd
from sklearn.feature_extraction.text import CountVectorizer, TfidfTransformer

from booktext.nlp.frequency import FrequencyEngine, check_group_by


def _identity(doc):
    # tokens are already split and normalized; don't let sklearn re-tokenize
    return doc


def document_term_matrix(tokens: Sequence, group_by=("chapter_index",)):
    """
    Treat each unit (chapter by default) as a document.

    Returns (unit_keys, vocabulary, counts) where counts is a sparse
    documents x terms matrix and vocabulary is sorted alphabetically.
    Raises ValueError from scikit-learn if there are no tokens at all.
    """
    dims = check_group_by(group_by)
    units = FrequencyEngine(tokens).units(dims)
    docs = {u: [] for u in units}
    for t in tokens:
        docs[tuple(getattr(t, d) for d in dims)].append(t.text)

    vec = CountVectorizer(analyzer=_identity, lowercase=False)
    counts = vec.fit_transform([docs[u] for u in units])
    return units, list(vec.get_feature_names_out()), counts


def tf_idf(tokens: Sequence, group_by=("chapter_index",)) -> pd.DataFrame:
    """
    One row per (unit, term) present in the unit.

    Columns: grouping dims, term, count, tf (count / unit total), idf and
    tf_idf as scikit-learn computes them with smooth_idf=False and no
    normalization: idf = ln(N / df) + 1 and tf_idf = count * idf.
    Sorted by tf_idf descending; ties keep unit order, then term order.
    """
    dims = check_group_by(group_by)
    columns = [*dims, "term", "count", "tf", "idf", "tf_idf"]
    if not tokens:
        return pd.DataFrame(columns=columns)

    units, vocab, counts = document_term_matrix(tokens, dims)
    transformer = TfidfTransformer(norm=None, smooth_idf=False)
    weights = transformer.fit_transform(counts).tocsr()
    counts = counts.tocsr()
    totals = np.asarray(counts.sum(axis=1)).ravel()

    rows = []
    for d, unit in enumerate(units):
        start, end = counts.indptr[d], counts.indptr[d + 1]
        for j, n in zip(counts.indices[start:end], counts.data[start:end]):
            rows.append((*unit, vocab[j], int(n), n / totals[d], transformer.idf_[j], weights[d, j]))
    df = pd.DataFrame(rows, columns=columns)
    df = df.sort_values([*dims, "term"], kind="stable")
    return df.sort_values("tf_idf", ascending=False, kind="stable").reset_index(drop=True)
