from booktext.nlp.adjacency import attach_following

from conftest import analyze_texts, make_tokens


def test_scenario_following(scenario) -> None:
    _, tokens = scenario
    mount = next(t for t in tokens if t.text == "mount")

    assert mount.following == "cook"


def test_last_token_of_each_paragraph_has_no_following(scenario) -> None:
    _, tokens = scenario
    by_text = {(t.paragraph_index, t.text): t for t in tokens}

    # "aorangi" ends paragraph 0 even though "mount" is the next token overall
    assert by_text[(0, "aorangi")].following is None
    assert by_text[(1, "big")].following is None


def test_following_never_crosses_paragraphs() -> None:
    _, tokens = analyze_texts(["one two", "three", "", "four", "", "", "five six"])

    for here, there in zip(tokens, tokens[1:]):
        if here.paragraph_index == there.paragraph_index:
            assert here.following == there.text
        else:
            assert here.following is None
    assert tokens[-1].following is None
    # adjacency runs across lines of the same paragraph
    assert [t.following for t in tokens[:3]] == ["two", "three", None]


def test_original_tokens_untouched_and_order_kept() -> None:
    tokens = make_tokens([(0, 0, "a b"), (0, 1, "c")])

    out = attach_following(tokens)

    assert [t.following for t in tokens] == [None, None, None]
    assert [t.token_index for t in out] == [0, 1, 2]
    assert [t.following for t in out] == ["b", None, None]


def test_paragraphs_grouped_before_shifting() -> None:
    # interleaved input: grouping by paragraph keeps each paragraph's own sequence
    a, b, c, d = make_tokens([(0, 0, "a"), (0, 1, "b"), (0, 0, "c"), (0, 1, "d")])

    out = attach_following([a, b, c, d])

    assert [t.following for t in out] == ["c", "d", None, None]


def test_empty_input() -> None:
    assert attach_following([]) == []
