# usage: term counts and percentages grouped by chapter / paragraph
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Union

from booktext.shared.errors import ConfigurationError, DivisionUndefined

GROUP_DIMENSIONS = ("chapter_index", "paragraph_index")
NORMALIZATIONS = ("count", "percent")
SEMANTICS = ("group_total", "matches_only")


@dataclass(frozen=True)
class FrequencyRecord:
    unit_key: tuple
    term: object
    count: int
    percentage: Optional[float] = None


class Predicate:
    """A token-level condition with a label that becomes the record's term."""

    def __init__(self, test, label):
        self.test = test
        self.label = label

    def __call__(self, token) -> bool:
        return self.test(token)

    def __and__(self, other):
        return all_of(self, other)

    def __repr__(self):
        return f"Predicate({self.label!r})"


def term_is(text: str) -> Predicate:
    return Predicate(lambda t: t.text == text, text)


def followed_by(text: str, following: str) -> Predicate:
    """`text` immediately followed by `following` in the same paragraph."""
    return Predicate(lambda t: t.text == text and t.following == following, (text, following))


def all_of(*predicates: Predicate) -> Predicate:
    preds = check_predicates(predicates)
    return Predicate(lambda t: all(p(t) for p in preds), tuple(p.label for p in preds))


def check_predicates(predicates) -> tuple:
    if isinstance(predicates, Predicate):
        predicates = (predicates,)
    preds = tuple(predicates)
    if not preds:
        raise ConfigurationError("At least one predicate is required.")
    for p in preds:
        if not isinstance(p, Predicate):
            raise ConfigurationError(f"Unknown predicate {p!r}; build one with term_is/followed_by/all_of.")
    return preds


def check_group_by(group_by: Union[str, Iterable[str], None]) -> tuple:
    if group_by is None:
        return ()
    dims = (group_by,) if isinstance(group_by, str) else tuple(group_by)
    for d in dims:
        if d not in GROUP_DIMENSIONS:
            raise ConfigurationError(f"Cannot group by {d!r}; choose from {GROUP_DIMENSIONS}.")
    if len(set(dims)) != len(dims):
        raise ConfigurationError(f"Duplicate grouping dimension in {dims!r}.")
    return dims


def _percent(part: int, whole: int, unit_key) -> float:
    if whole == 0:
        raise DivisionUndefined(unit_key)
    return 100.0 * part / whole


def _sorted(records: list, sort: bool) -> list:
    # sorted() is stable, so equal counts keep first-encountered order
    return sorted(records, key=lambda r: -r.count) if sort else records


class FrequencyEngine:
    """
    Frequency queries over one tokenized book.

    Pass `lines` (annotated) to make every structural unit visible, including
    units that hold no tokens; otherwise units are the ones the tokens touch.
    Units and terms are reported in first-seen order.
    """

    def __init__(self, tokens: Sequence, lines: Optional[Sequence] = None):
        self.tokens = tuple(tokens)
        self.lines = tuple(lines) if lines is not None else None

    @staticmethod
    def _key(obj, dims: tuple) -> tuple:
        return tuple(getattr(obj, d) for d in dims)

    def units(self, group_by=()) -> list:
        dims = check_group_by(group_by)
        if not dims:
            return [()]
        source = self.lines if self.lines is not None else self.tokens
        return list(dict.fromkeys(self._key(o, dims) for o in source))

    def unit_totals(self, group_by=()) -> dict:
        """Token count per unit, zero-filled for units without tokens."""
        dims = check_group_by(group_by)
        tally = Counter(self._key(t, dims) for t in self.tokens)
        return {u: tally[u] for u in self.units(dims)}

    def count_terms(self, group_by=(), *, by_following=False, normalization="count", sort=True) -> list:
        """
        One record per (unit, term). With `by_following` the term is the pair
        (text, following) and tokens that end a paragraph are left out.
        "percent" divides by the unit's total, so each unit sums to 100.
        """
        dims = check_group_by(group_by)
        if normalization not in NORMALIZATIONS:
            raise ConfigurationError(f"normalization must be one of {NORMALIZATIONS}, got {normalization!r}")

        if by_following:
            tally = Counter((self._key(t, dims), (t.text, t.following))
                            for t in self.tokens if t.following is not None)
        else:
            tally = Counter((self._key(t, dims), t.text) for t in self.tokens)

        totals = Counter()
        for (unit, _), n in tally.items():
            totals[unit] += n

        records = []
        for (unit, term), n in tally.items():
            pct = _percent(n, totals[unit], unit) if normalization == "percent" else None
            records.append(FrequencyRecord(unit, term, n, pct))
        return _sorted(records, sort)

    def match(self, predicates, group_by=(), *, semantics="group_total", sort=False) -> list:
        """
        Count tokens satisfying each predicate, per unit.

        semantics="group_total": every unit is reported; percentage is
            matches / all tokens in the unit, so a unit with no matches shows
            count 0 and percentage 0.0. A unit with no tokens at all raises
            DivisionUndefined.
        semantics="matches_only": only units with at least one match are
            reported; percentage is the unit's share of all matches.
        """
        preds = check_predicates(predicates)
        dims = check_group_by(group_by)
        if semantics not in SEMANTICS:
            raise ConfigurationError(f"semantics must be one of {SEMANTICS}, got {semantics!r}")

        units = self.units(dims)
        totals = self.unit_totals(dims)
        records = []
        for pred in preds:
            hits = Counter(self._key(t, dims) for t in self.tokens if pred(t))
            if semantics == "group_total":
                for u in units:
                    records.append(FrequencyRecord(u, pred.label, hits[u], _percent(hits[u], totals[u], u)))
            else:
                matched = sum(hits.values())
                for u in units:
                    if hits[u]:
                        records.append(FrequencyRecord(u, pred.label, hits[u], _percent(hits[u], matched, u)))
        return _sorted(records, sort)
