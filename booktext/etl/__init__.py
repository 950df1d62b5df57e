"""
Package export surface for the loading side of the pipeline.
Exposes the line loader, Gutenberg stripping and structural annotation.
"""
from .loader import Line, load_lines                    # path/stream -> ordered Line records
from .normalizers import strip_gutenberg_lines          # drop Gutenberg header/footer lines
from .annotator import (                                # paragraph/chapter indices
    DEFAULT_CHAPTER_RULES,
    annotate_lines,
    prefix_rule,
    regex_rule,
)

__all__ = [
    "Line",
    "load_lines",
    "strip_gutenberg_lines",
    "DEFAULT_CHAPTER_RULES",
    "annotate_lines",
    "prefix_rule",
    "regex_rule",
]
