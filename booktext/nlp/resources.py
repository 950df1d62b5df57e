# usage: fetch NLTK corpora/models on first use instead of at import time
import nltk

# name -> locator used by nltk.data.find
NLTK_PACKAGES = {
    "punkt": "tokenizers/punkt",
    "punkt_tab": "tokenizers/punkt_tab",
    "stopwords": "corpora/stopwords",
    "opinion_lexicon": "corpora/opinion_lexicon",
    "vader_lexicon": "sentiment/vader_lexicon.zip",
}


def ensure_nltk_data(*packages: str) -> None:
    """Download any of `packages` that NLTK can't find locally (quietly)."""
    for pkg in packages:
        locator = NLTK_PACKAGES.get(pkg, pkg)
        try:
            nltk.data.find(locator)
        except LookupError:
            nltk.download(pkg, quiet=True)
