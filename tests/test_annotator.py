import pytest

from booktext.etl.annotator import DEFAULT_CHAPTER_RULES, annotate_lines, prefix_rule, regex_rule
from booktext.shared.errors import ConfigurationError

from conftest import SCENARIO, THREE_CHAPTERS, make_lines


def _indices(lines):
    return [(ln.paragraph_index, ln.chapter_index) for ln in lines]


def test_scenario_paragraphs_and_chapters() -> None:
    lines = annotate_lines(make_lines(SCENARIO))

    # blank line 2 still belongs to paragraph 0; the opening heading keeps chapter 0
    assert _indices(lines) == [(0, 0), (0, 0), (0, 0), (1, 0)]


def test_paragraph_index_counts_blank_lines_before_the_line() -> None:
    texts = ["a", "", "", "b", "   ", "c", "d", ""]
    lines = annotate_lines(make_lines(texts))

    expected = [sum(1 for t in texts[:i] if not t.strip()) for i in range(len(texts))]
    assert [ln.paragraph_index for ln in lines] == expected
    assert expected == [0, 0, 1, 2, 2, 3, 3, 3]


def test_indices_are_non_decreasing() -> None:
    lines = annotate_lines(make_lines(THREE_CHAPTERS * 3))

    for prev, cur in zip(lines, lines[1:]):
        assert cur.paragraph_index >= prev.paragraph_index
        assert cur.chapter_index >= prev.chapter_index


def test_three_chapters_number_from_zero() -> None:
    lines = annotate_lines(make_lines(THREE_CHAPTERS))

    assert [ln.chapter_index for ln in lines] == [0, 0, 0, 1, 1, 1, 2, 2]


def test_front_matter_is_chapter_zero_and_heading_opens_chapter_one() -> None:
    lines = annotate_lines(make_lines(["AORANGI", "by a traveller", "", "CHAPTER I", "Text."]))

    assert [ln.chapter_index for ln in lines] == [0, 0, 0, 1, 1]


def test_blank_lines_before_first_heading_do_not_count_as_front_matter() -> None:
    lines = annotate_lines(make_lines(["", "CHAPTER I", "Text.", "CHAPTER II"]))

    assert [ln.chapter_index for ln in lines] == [0, 0, 0, 1]


def test_no_boundary_matches_is_one_chapter() -> None:
    lines = annotate_lines(make_lines(["Just", "", "prose"]))

    assert {ln.chapter_index for ln in lines} == {0}


def test_rules_are_ored_and_caller_supplied() -> None:
    rules = (prefix_rule("CHAPTER"), prefix_rule("glossary", case_sensitive=False), regex_rule(r"^APPENDIX [A-Z]$"))
    texts = ["Preface", "CHAPTER I", "text", "Glossary", "terms", "APPENDIX A", "notes", "chapter ii"]

    lines = annotate_lines(make_lines(texts), rules)

    # lowercase "chapter ii" does not match the case-sensitive CHAPTER rule
    assert [ln.chapter_index for ln in lines] == [0, 1, 1, 2, 2, 3, 3, 3]


def test_prefix_rule_ignores_leading_whitespace() -> None:
    assert prefix_rule("CHAPTER")("   CHAPTER IV")
    assert not prefix_rule("CHAPTER")("The CHAPTER")


def test_input_lines_are_not_modified() -> None:
    lines = make_lines(SCENARIO)
    annotate_lines(lines)

    assert all(ln.paragraph_index is None for ln in lines)


@pytest.mark.parametrize("build", [
    lambda: annotate_lines(make_lines(["x"]), ()),
    lambda: annotate_lines(make_lines(["x"]), ("CHAPTER",)),
    lambda: prefix_rule(""),
    lambda: regex_rule("("),
])
def test_invalid_rules_are_configuration_errors(build) -> None:
    with pytest.raises(ConfigurationError):
        build()


def test_default_rules_match_chapter_prefix() -> None:
    assert any(rule("CHAPTER XII") for rule in DEFAULT_CHAPTER_RULES)
