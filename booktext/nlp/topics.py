# usage: LDA topic model over chapters (scikit-learn LatentDirichletAllocation)
from dataclasses import dataclass
from typing import Sequence

import numpy as np
import pandas as pd
from sklearn.decomposition import LatentDirichletAllocation

from booktext.nlp.frequency import check_group_by
from booktext.nlp.tfidf import document_term_matrix
from booktext.shared.errors import ConfigurationError


@dataclass
class TopicModel:
    gamma: pd.DataFrame   # unit dims, topic, gamma  (per-document topic weights)
    beta: pd.DataFrame    # topic, term, beta        (per-topic term weights)
    model: LatentDirichletAllocation

    def top_terms(self, n: int = 10) -> pd.DataFrame:
        """The n heaviest terms of each topic."""
        ordered = self.beta.sort_values(["topic", "beta"], ascending=[True, False], kind="stable")
        return ordered.groupby("topic", sort=True).head(n).reset_index(drop=True)


def check_k(k) -> int:
    if isinstance(k, bool) or not isinstance(k, (int, np.integer)) or k < 1:
        raise ConfigurationError(f"Number of topics must be an integer >= 1, got {k!r}")
    return int(k)


def fit_topics(tokens: Sequence, k: int, group_by=("chapter_index",), *, random_state: int = 0,
               max_iter: int = 10) -> TopicModel:
    """
    Fit LDA with `k` topics, one document per unit.

    gamma rows sum to 1 for each document; beta rows are the model's
    components normalized to sum to 1 per topic. Topics are numbered from 1.
    """
    k = check_k(k)
    dims = check_group_by(group_by)
    if not tokens:
        raise ConfigurationError("Cannot fit a topic model on a book with no tokens.")

    units, vocab, counts = document_term_matrix(tokens, dims)
    lda = LatentDirichletAllocation(n_components=k, random_state=random_state, max_iter=max_iter)
    doc_topic = lda.fit_transform(counts)

    gamma_rows = [
        (*unit, topic + 1, float(doc_topic[d, topic]))
        for d, unit in enumerate(units)
        for topic in range(k)
    ]
    gamma = pd.DataFrame(gamma_rows, columns=[*dims, "topic", "gamma"])

    comps = lda.components_ / lda.components_.sum(axis=1, keepdims=True)
    beta_rows = [
        (topic + 1, term, float(comps[topic, j]))
        for topic in range(k)
        for j, term in enumerate(vocab)
    ]
    beta = pd.DataFrame(beta_rows, columns=["topic", "term", "beta"])
    return TopicModel(gamma=gamma, beta=beta, model=lda)
