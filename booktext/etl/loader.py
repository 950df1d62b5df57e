# usage: read a plain-text book into an ordered list of Line records
import codecs
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from booktext.etl.normalizers import strip_gutenberg_lines
from booktext.shared.errors import ConfigurationError, DecodingError, ResourceUnavailable

DECODE_POLICIES = ("raise", "skip")

# Lone surrogates only appear when undecodable bytes were escaped on load
ESCAPED_RE = re.compile(r"[\udc80-\udcff]")


@dataclass(frozen=True)
class Line:
    """One physical line of the source plus its structural annotations."""
    raw_text: str
    line_index: int
    paragraph_index: Optional[int] = None
    chapter_index: Optional[int] = None

    @property
    def is_blank(self) -> bool:
        return not self.raw_text.strip()


def check_encoding(encoding: str) -> str:
    try:
        codecs.lookup(encoding)
    except LookupError as exc:
        raise ConfigurationError(f"Unknown text encoding: {encoding!r}") from exc
    return encoding


def check_decode_policy(policy: str) -> str:
    if policy not in DECODE_POLICIES:
        raise ConfigurationError(f"on_decode_error must be one of {DECODE_POLICIES}, got {policy!r}")
    return policy


def _read_source(source):
    """Return raw bytes (paths, binary streams) or str (text streams)."""
    if isinstance(source, (str, os.PathLike)):
        p = Path(source)
        try:
            return p.read_bytes()
        except OSError as exc:
            raise ResourceUnavailable(f"Cannot read {p}: {exc.strerror or exc}") from exc
    if not callable(getattr(source, "read", None)):
        raise ResourceUnavailable(f"Not a path or readable stream: {type(source).__name__}")
    try:
        data = source.read()
    except UnicodeDecodeError as exc:
        # text stream decoded by the caller; the byte offset can't be mapped to a line
        raise DecodingError(f"stream is not valid text: {exc.reason}", line_index=None) from exc
    except (OSError, ValueError) as exc:
        # closed or write-only streams raise ValueError / io.UnsupportedOperation
        raise ResourceUnavailable(f"Cannot read from stream: {exc}") from exc
    if not isinstance(data, (str, bytes, bytearray)):
        raise ResourceUnavailable(f"Stream returned {type(data).__name__}, not text or bytes")
    return data


def _decode(data: bytes, encoding: str):
    """Decoded text plus the first UnicodeDecodeError (None when the bytes were clean)."""
    try:
        return data.decode(encoding), None
    except UnicodeDecodeError as exc:
        return data.decode(encoding, errors="surrogateescape"), exc


def split_physical_lines(text: str) -> list[str]:
    """
    Split on '\\n' only. A trailing '\\r' is dropped from each line and a final
    newline does not produce an extra empty line.
    """
    if not text:
        return []
    pieces = text.split("\n")
    if pieces[-1] == "":
        pieces.pop()
    return [p[:-1] if p.endswith("\r") else p for p in pieces]


def load_lines(source, *, encoding="utf-8", on_decode_error="raise", strip_gutenberg=False) -> list[Line]:
    """
    Load `source` (a path or an open text/binary stream) as Line records.

    Args:
        source: file path or stream.
        encoding: declared text encoding of the bytes.
        on_decode_error: "raise" aborts with DecodingError on the first bad
            line; "skip" keeps the bytes as surrogate escapes, prints a
            warning per affected line and lets the tokenizer decide.
        strip_gutenberg: drop Project Gutenberg header/footer lines before
            line indices are assigned.

    Every line number this reports (DecodingError, the [WARN] lines, and
    later TokenizationError) is a Line.line_index, i.e. counted after the
    Gutenberg boilerplate was stripped. Bad bytes that only occur in the
    stripped boilerplate are dropped with it.

    Raises:
        ResourceUnavailable, DecodingError, ConfigurationError
    """
    check_encoding(encoding)
    check_decode_policy(on_decode_error)

    data = _read_source(source)
    text, failure = (data, None) if isinstance(data, str) else _decode(data, encoding)

    raw = split_physical_lines(text)
    if strip_gutenberg:
        raw = strip_gutenberg_lines(raw)

    lines = [Line(raw_text=t, line_index=i) for i, t in enumerate(raw)]
    escaped = [ln.line_index for ln in lines if ESCAPED_RE.search(ln.raw_text)]
    if escaped and failure is not None and on_decode_error == "raise":
        raise DecodingError(
            f"cannot decode as {encoding} ({failure.reason})", line_index=escaped[0]
        ) from failure
    for i in escaped:
        print(f"[WARN] line {i}: undecodable bytes kept as escapes")
    return lines
