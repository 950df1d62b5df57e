# Command-line script for analyzing one public-domain book (or a folder of them).
# Writes token tables, word frequencies, n-grams, term-by-chapter counts,
# TF-IDF, optional sentiment balance / topic model, and a JSON summary.

import argparse, json
from pathlib import Path

import pandas as pd

from booktext.etl.annotator import prefix_rule, regex_rule
from booktext.nlp.features import count_ngrams
from booktext.nlp.frequency import FrequencyEngine, term_is
from booktext.nlp.plotting import plot_sentiment_balance, plot_term_frequencies
from booktext.nlp.preprocessing import (
    load_stop_words,
    make_stemmer,
    remove_stop_words,
    stem_tokens,
    text_stats,
)
from booktext.nlp.sentiment import load_lexicon, sentiment_balance
from booktext.nlp.tables import lines_to_frame, records_to_frame, tokens_to_frame, write_csv
from booktext.nlp.tfidf import tf_idf
from booktext.nlp.tokenizer import TokenizerConfig
from booktext.nlp.topics import check_k, fit_topics
from booktext.pipeline import PipelineConfig, run_pipeline
from booktext.shared.errors import BooktextError
from booktext.shared.io_utils import hash_stem, table_path


def build_config(args) -> PipelineConfig:
    """Map CLI flags onto a validated PipelineConfig."""
    rules = [prefix_rule(p, case_sensitive=not args.ignore_case) for p in args.chapter_prefix or ["CHAPTER"]]
    rules += [regex_rule(r, ignore_case=args.ignore_case) for r in args.chapter_regex or []]
    return PipelineConfig(
        encoding=args.encoding,
        on_error=args.on_error,
        strip_gutenberg=args.strip_gutenberg,
        chapter_rules=tuple(rules),
        tokenizer=TokenizerConfig(
            keep_contractions=not args.no_contractions,
            keep_hyphens=args.keep_hyphens,
        ),
    )


def analyze_file(txt_path: Path, outdir: Path, config: PipelineConfig, *, stop_words=None, stem=False,
                 topn=50, terms=(), topics=0, lexicon=None, plot=False) -> dict:
    """
    Run the pipeline on one text file and write CSV/JSON outputs to `outdir`.
    """
    analysis = run_pipeline(txt_path, config)
    tokens = analysis.tokens
    if stop_words is not None:
        tokens = remove_stop_words(tokens, stop_words)
    if stem:
        tokens = stem_tokens(tokens)

    tag = hash_stem(txt_path)  # Short hash for filenames to avoid collisions
    outdir.mkdir(parents=True, exist_ok=True)

    # --- Save outputs ---
    # Annotated lines (one row per physical line)
    write_csv(lines_to_frame(analysis.lines), table_path(outdir, tag, "lines"))

    # Full token table (all tokens, before stop-word removal)
    write_csv(tokens_to_frame(analysis.tokens), table_path(outdir, tag, "tokens"))

    # Word frequency table
    engine = FrequencyEngine(tokens)
    wordfreq = records_to_frame(engine.count_terms(normalization="percent"))
    write_csv(wordfreq.head(topn), table_path(outdir, tag, f"wordfreq_top{topn}"))

    # Per-chapter word frequency
    by_chapter = records_to_frame(engine.count_terms("chapter_index", normalization="percent"), ("chapter_index",))
    write_csv(by_chapter, table_path(outdir, tag, "wordfreq_by_chapter"))

    # N-gram tables (paragraph-local)
    for name, counter in count_ngrams(tokens, ngram_ns=(2, 3)).items():
        write_csv(pd.DataFrame(counter.most_common(topn), columns=["term", "count"]),
                  table_path(outdir, tag, f"{name}_top{topn}"))

    # Search terms per chapter, both percentage semantics
    if terms:
        terms = [t.lower() if config.tokenizer.lowercase else t for t in terms]
        if stem:
            stemmer = make_stemmer()
            terms = [stemmer.stem(t) for t in terms]
        preds = [term_is(t) for t in terms]
        # counted before stop-word removal, so a stop word can still be searched for
        term_engine = FrequencyEngine(stem_tokens(analysis.tokens) if stem else analysis.tokens)
        for semantics in ("group_total", "matches_only"):
            recs = term_engine.match(preds, "chapter_index", semantics=semantics)
            write_csv(records_to_frame(recs, ("chapter_index",)), table_path(outdir, tag, f"terms_{semantics}"))

    # TF-IDF with chapters as documents
    if tokens:
        write_csv(tf_idf(tokens).head(topn * 5), table_path(outdir, tag, "tf_idf"))

    if lexicon is not None:
        balance = sentiment_balance(tokens, lexicon)
        write_csv(balance, table_path(outdir, tag, "sentiment_by_chapter"))
        if plot:
            plot_sentiment_balance(balance, table_path(outdir, tag, "sentiment_by_chapter", ".png"))

    if topics:
        model = fit_topics(tokens, topics)
        write_csv(model.gamma, table_path(outdir, tag, f"topics{topics}_gamma"))
        write_csv(model.top_terms(10), table_path(outdir, tag, f"topics{topics}_top_terms"))

    if plot and len(wordfreq):
        plot_term_frequencies(wordfreq, table_path(outdir, tag, "wordfreq", ".png"), topn=min(topn, 25))

    # Document summary (JSON with run metadata)
    meta = {
        "file": str(txt_path),
        "line_count": len(analysis.lines),
        "paragraph_count": len({ln.paragraph_index for ln in analysis.lines}),
        "chapter_count": len({ln.chapter_index for ln in analysis.lines}),
        "skipped_lines": [e.line_index for e in analysis.errors],
        **text_stats(tokens),
    }
    table_path(outdir, tag, "summary", ".json").write_text(json.dumps(meta, indent=2), encoding="utf-8")
    print(f"NLP ✓ {txt_path.name} -> {tag}_*")
    return meta


def main(argv=None):
    """
    CLI entrypoint: parses arguments and runs analysis on a file or directory.
    """
    ap = argparse.ArgumentParser(description="Tokenize a book by chapter/paragraph and write frequency tables.")
    ap.add_argument("--input", required=True, help="Plain .txt file or directory of .txt files.")
    ap.add_argument("--outdir", default="data/outputs", help="Output directory for CSV/JSON.")
    ap.add_argument("--encoding", default="utf-8", help="Text encoding of the input bytes.")
    ap.add_argument("--on-error", choices=("raise", "skip"), default="raise",
                    help="Undecodable / untokenizable lines: abort (raise) or skip and report.")
    ap.add_argument("--strip-gutenberg", action="store_true", help="Drop Project Gutenberg header/footer lines.")
    ap.add_argument("--chapter-prefix", action="append", help="Line prefix that opens a chapter (repeatable). Default: CHAPTER")
    ap.add_argument("--chapter-regex", action="append", help="Regex that opens a chapter (repeatable).")
    ap.add_argument("--ignore-case", action="store_true", help="Case-insensitive chapter markers.")
    ap.add_argument("--keep-hyphens", action="store_true", help="Keep hyphenated words as one token.")
    ap.add_argument("--no-contractions", action="store_true", help="Split words at apostrophes.")
    ap.add_argument("--stop-words", choices=("none", "nltk", "sklearn"), default="none")
    ap.add_argument("--stem", action="store_true", help="Snowball-stem tokens before counting.")
    ap.add_argument("--topn", type=int, default=50)
    ap.add_argument("--term", action="append", default=[], help="Word to count per chapter (repeatable).")
    ap.add_argument("--topics", type=int, default=0, help="Fit an LDA model with K topics (0 = off).")
    ap.add_argument("--lexicon", choices=("none", "bing", "vader"), default="none")
    ap.add_argument("--plot", action="store_true", help="Also write PNG charts.")
    args = ap.parse_args(argv)

    try:
        # Validate everything before touching the input
        config = build_config(args)
        if args.topics:
            check_k(args.topics)
        stop_words = None if args.stop_words == "none" else load_stop_words(args.stop_words)
        lexicon = None if args.lexicon == "none" else load_lexicon(args.lexicon)

        ip = Path(args.input)
        if ip.is_dir():
            paths = sorted(ip.rglob("*.txt"))
            if not paths:
                raise SystemExit("No .txt files found.")
        else:
            paths = [ip]

        for p in paths:
            analyze_file(
                p, Path(args.outdir), config,
                stop_words=stop_words, stem=args.stem, topn=args.topn, terms=tuple(args.term),
                topics=args.topics, lexicon=lexicon, plot=args.plot,
            )
    except BooktextError as err:
        raise SystemExit(f"error: {err}") from err


if __name__ == "__main__":
    main()
