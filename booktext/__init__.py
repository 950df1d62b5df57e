"""
booktext: chapter/paragraph-aware word counts for a single public-domain book.

    from booktext import run_pipeline
    analysis = run_pipeline("pg1234.txt")
    analysis.engine().count_terms("chapter_index", normalization="percent")
"""
from .pipeline import Analysis, PipelineConfig, run_pipeline

__all__ = ["Analysis", "PipelineConfig", "run_pipeline"]

# Package version identifier
__version__ = "0.1.0"
