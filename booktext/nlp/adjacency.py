# usage: "following word" column, computed inside each paragraph only
from dataclasses import replace
from typing import Sequence

from booktext.nlp.tokenizer import Token


def attach_following(tokens: Sequence[Token]) -> list[Token]:
    """
    Return a copy of `tokens` where each token's `following` is the text of
    the next token in the same paragraph. The last token of a paragraph gets
    None; adjacency never crosses a paragraph boundary.

    Grouping happens before shifting, so the next token is looked up among
    the paragraph's own tokens (in their original order) and the output keeps
    the input order.
    """
    by_paragraph = {}
    for pos, t in enumerate(tokens):
        by_paragraph.setdefault(t.paragraph_index, []).append(pos)

    following = [None] * len(tokens)
    for positions in by_paragraph.values():
        for here, there in zip(positions, positions[1:]):
            following[here] = tokens[there].text

    return [replace(t, following=f) for t, f in zip(tokens, following)]
