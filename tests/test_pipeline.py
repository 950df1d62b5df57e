import json
from pathlib import Path

import pandas as pd
import pytest

from booktext import PipelineConfig, run_pipeline
from booktext.etl.annotator import prefix_rule
from booktext.nlp.analyze_book import main
from booktext.nlp.frequency import term_is
from booktext.nlp.tokenizer import TokenizerConfig
from booktext.shared.errors import ConfigurationError, DecodingError
from booktext.nlp.tables import LINE_COLUMNS
from booktext.shared.io_utils import hash_stem, safe_filename, table_path


def test_run_pipeline_on_file(book_file: Path) -> None:
    analysis = run_pipeline(book_file)

    assert len(analysis.lines) == 8
    assert [ln.chapter_index for ln in analysis.lines] == [0, 0, 0, 1, 1, 1, 2, 2]
    assert analysis.errors == []
    cook = next(t for t in analysis.tokens if t.text == "cook")
    assert cook.following == "climbed"


def test_config_is_validated_before_the_input_is_opened(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        run_pipeline(tmp_path / "missing.txt", PipelineConfig(encoding="nope"))
    with pytest.raises(ConfigurationError):
        PipelineConfig(on_error="retry")
    with pytest.raises(ConfigurationError):
        PipelineConfig(chapter_rules=())
    with pytest.raises(ConfigurationError):
        PipelineConfig(tokenizer={"granularity": "words"})


def test_skip_policy_carries_through_to_tokenizer(tmp_path: Path) -> None:
    path = tmp_path / "bad.txt"
    path.write_bytes(b"CHAPTER I\nbad \xff line\nMount Cook\n")

    analysis = run_pipeline(path, PipelineConfig(on_error="skip"))

    assert len(analysis.lines) == 3
    assert [e.line_index for e in analysis.errors] == [1]
    assert [t.text for t in analysis.tokens] == ["chapter", "i", "mount", "cook"]
    # the skipped line does not break adjacency bookkeeping
    assert analysis.tokens[1].following == "mount"


def test_raise_policy_aborts(tmp_path: Path) -> None:
    path = tmp_path / "bad.txt"
    path.write_bytes(b"ok\n\xff\n")

    with pytest.raises(DecodingError):
        run_pipeline(path)


def test_custom_rules_and_tokenizer(book_file: Path) -> None:
    config = PipelineConfig(
        chapter_rules=(prefix_rule("chapter", case_sensitive=False),),
        tokenizer=TokenizerConfig(lowercase=False),
    )

    analysis = run_pipeline(book_file, config)

    assert analysis.tokens[0].text == "CHAPTER"
    records = analysis.engine().match(term_is("Aorangi"), "chapter_index")
    assert [r.count for r in records] == [1, 1, 0]


def test_engine_with_empty_units_sees_all_lines(book_file: Path) -> None:
    analysis = run_pipeline(book_file)

    assert analysis.engine(include_empty_units=True).units("paragraph_index") == [(0,), (1,), (2,)]


def test_io_utils() -> None:
    assert safe_filename("terms group/total") == "terms_group_total"
    assert safe_filename("///") == "untitled"
    tag = hash_stem(Path("books/pg1234.txt"))
    assert tag.startswith("pg1234_") and len(tag) == len("pg1234_") + 6
    assert table_path(Path("out"), tag, "tf idf") == Path("out") / f"{tag}_tf_idf.csv"


def test_cli_writes_tables(book_file: Path, tmp_path: Path, capsys) -> None:
    outdir = tmp_path / "out"

    main([
        "--input", str(book_file), "--outdir", str(outdir),
        "--term", "Aorangi", "--stop-words", "sklearn", "--stem", "--topics", "2",
        "--lexicon", "none", "--plot",
    ])

    tag = hash_stem(book_file)
    group_total = pd.read_csv(outdir / f"{tag}_terms_group_total.csv")
    matches_only = pd.read_csv(outdir / f"{tag}_terms_matches_only.csv")
    assert group_total["chapter_index"].tolist() == [0, 1, 2]
    assert group_total["count"].tolist() == [1, 1, 0]
    assert matches_only["chapter_index"].tolist() == [0, 1]

    lines = pd.read_csv(outdir / f"{tag}_lines.csv", keep_default_na=False)
    assert list(lines.columns) == LINE_COLUMNS
    assert lines["line_index"].tolist() == list(range(8))
    assert lines["chapter_index"].tolist() == [0, 0, 0, 1, 1, 1, 2, 2]
    assert lines["raw_text"].tolist()[:2] == ["CHAPTER I", "Aorangi stood white above the plain."]

    for name in ("tokens", "wordfreq_top50", "wordfreq_by_chapter", "bigram_top50", "tf_idf", "topics2_gamma"):
        assert (outdir / f"{tag}_{name}.csv").exists(), name
    assert (outdir / f"{tag}_wordfreq.png").exists()

    summary = json.loads((outdir / f"{tag}_summary.json").read_text(encoding="utf-8"))
    assert summary["chapter_count"] == 3
    assert summary["skipped_lines"] == []
    assert "NLP ✓ aorangi.txt" in capsys.readouterr().out


def test_cli_terms_are_counted_before_stop_word_removal(book_file: Path, tmp_path: Path) -> None:
    outdir = tmp_path / "out"

    main(["--input", str(book_file), "--outdir", str(outdir), "--term", "the", "--stop-words", "sklearn"])

    tag = hash_stem(book_file)
    group_total = pd.read_csv(outdir / f"{tag}_terms_group_total.csv")
    assert group_total["count"].tolist() == [1, 0, 2]
    wordfreq = pd.read_csv(outdir / f"{tag}_wordfreq_top50.csv")
    assert "the" not in wordfreq["term"].tolist()


def test_cli_directory_input(book_file: Path, tmp_path: Path) -> None:
    outdir = tmp_path / "out"

    main(["--input", str(book_file.parent), "--outdir", str(outdir)])

    assert (outdir / f"{hash_stem(book_file)}_summary.json").exists()


@pytest.mark.parametrize("extra", [
    ["--topics", "-1"],
    ["--chapter-regex", "("],
    ["--encoding", "nope"],
])
def test_cli_configuration_errors_exit(book_file: Path, tmp_path: Path, extra) -> None:
    with pytest.raises(SystemExit) as info:
        main(["--input", str(book_file), "--outdir", str(tmp_path / "out"), *extra])
    assert "error:" in str(info.value)
    assert not (tmp_path / "out").exists()


def test_cli_missing_input_exits(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        main(["--input", str(tmp_path / "missing.txt"), "--outdir", str(tmp_path / "out")])
