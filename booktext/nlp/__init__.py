# Expose the tokenization / frequency core and the library-backed helpers.

from .tokenizer import Token, TokenizerConfig, make_tokenizer, tokenize_lines  # Lines -> Token records
from .adjacency import attach_following                                       # following word per paragraph
from .frequency import (                                                      # counts and percentages per unit
    FrequencyEngine,
    FrequencyRecord,
    all_of,
    followed_by,
    term_is,
)
from .features import count_ngrams                                            # paragraph-local n-grams
from .preprocessing import load_stop_words, remove_stop_words, stem_tokens    # stop words / Snowball stems
from .sentiment import attach_sentiment, load_lexicon, sentiment_balance      # lexicon joins
from .tfidf import tf_idf                                                     # chapters as documents
from .topics import fit_topics                                                # LDA

# Define what symbols are exported when `from package import *` is used
__all__ = [
    "Token",
    "TokenizerConfig",
    "make_tokenizer",
    "tokenize_lines",
    "attach_following",
    "FrequencyEngine",
    "FrequencyRecord",
    "all_of",
    "followed_by",
    "term_is",
    "count_ngrams",
    "load_stop_words",
    "remove_stop_words",
    "stem_tokens",
    "attach_sentiment",
    "load_lexicon",
    "sentiment_balance",
    "tf_idf",
    "fit_topics",
]
