# usage: paragraph / chapter indices for loaded lines (cumulative boundary scan)
import re
from dataclasses import replace
from typing import Callable, Iterable, Sequence

from booktext.etl.loader import Line
from booktext.shared.errors import ConfigurationError

BoundaryRule = Callable[[str], bool]


class _PrefixRule:
    def __init__(self, prefix: str, case_sensitive: bool):
        self.prefix = prefix if case_sensitive else prefix.casefold()
        self.case_sensitive = case_sensitive

    def __call__(self, text: str) -> bool:
        s = text.strip()
        return (s if self.case_sensitive else s.casefold()).startswith(self.prefix)

    def __repr__(self):
        return f"prefix_rule({self.prefix!r}, case_sensitive={self.case_sensitive})"


class _RegexRule:
    def __init__(self, pattern: "re.Pattern"):
        self.pattern = pattern

    def __call__(self, text: str) -> bool:
        return self.pattern.search(text.strip()) is not None

    def __repr__(self):
        return f"regex_rule({self.pattern.pattern!r})"


def prefix_rule(prefix: str, *, case_sensitive: bool = True) -> BoundaryRule:
    """Matches lines whose stripped text starts with `prefix`."""
    if not isinstance(prefix, str) or not prefix.strip():
        raise ConfigurationError(f"Chapter prefix must be a non-empty string, got {prefix!r}")
    return _PrefixRule(prefix.strip(), case_sensitive)


def regex_rule(pattern: str, *, ignore_case: bool = False) -> BoundaryRule:
    """Matches lines whose stripped text matches `pattern` (re.search)."""
    try:
        compiled = re.compile(pattern, re.IGNORECASE if ignore_case else 0)
    except (re.error, TypeError) as exc:
        raise ConfigurationError(f"Invalid chapter pattern {pattern!r}: {exc}") from exc
    return _RegexRule(compiled)


DEFAULT_CHAPTER_RULES = (prefix_rule("CHAPTER"),)


def check_rules(rules: Iterable[BoundaryRule]) -> tuple:
    rules = tuple(rules)
    if not rules:
        raise ConfigurationError("At least one chapter boundary rule is required.")
    for r in rules:
        if not callable(r):
            raise ConfigurationError(f"Chapter boundary rule is not callable: {r!r}")
    return rules


def annotate_lines(lines: Sequence[Line], chapter_rules: Iterable[BoundaryRule] = DEFAULT_CHAPTER_RULES) -> list[Line]:
    """
    Return a new list of Lines carrying paragraph_index and chapter_index.

    Paragraphs: a line's paragraph_index is the number of blank lines before
    it, so a blank line still belongs to the paragraph it closes.

    Chapters: indices start at 0 and a line matching any rule opens the next
    chapter (the heading belongs to the chapter it opens). A heading with no
    non-blank line before it keeps chapter 0, since there is no front matter
    to separate. No matches at all leaves the whole book in chapter 0.
    """
    rules = check_rules(chapter_rules)

    out = []
    paragraph, chapter, seen_text = 0, 0, False
    for ln in lines:
        blank = ln.is_blank
        if not blank and seen_text and any(rule(ln.raw_text) for rule in rules):
            chapter += 1
        out.append(replace(ln, paragraph_index=paragraph, chapter_index=chapter))
        if blank:
            paragraph += 1
        else:
            seen_text = True
    return out
