# usage: error kinds raised by the loader, annotator, tokenizer and frequency engine
from typing import Optional


class BooktextError(Exception):
    """Base class for every failure this package raises on purpose."""


class ResourceUnavailable(BooktextError):
    """The input text, or a model it needs, could not be opened or read."""


class _LineError(BooktextError):
    def __init__(self, message: str, *, line_index: Optional[int]):
        where = "line ?" if line_index is None else f"line {line_index}"
        super().__init__(f"{where}: {message}")
        self.line_index = line_index


class DecodingError(_LineError):
    """Bytes on a line do not decode under the declared encoding.

    line_index counts the lines load_lines returns, so with Gutenberg
    stripping it is the index after the header was dropped.
    """


class TokenizationError(_LineError):
    """A line holds text the tokenizer refuses to split (e.g. escaped bytes)."""


class ConfigurationError(BooktextError, ValueError):
    """Invalid option, rule, grouping dimension or predicate; raised before any work."""


class DivisionUndefined(BooktextError, ZeroDivisionError):
    """A percentage was requested over a unit that holds zero tokens."""

    def __init__(self, unit_key):
        super().__init__(f"no tokens in unit {unit_key!r}; percentage is undefined")
        self.unit_key = unit_key
