# usage: Project Gutenberg boilerplate removal on a list of raw lines
import re

# Tolerate the common START/END variants found in Gutenberg plain-text dumps
_START_RE = re.compile(
    r"^(\*\*\*\s*START\s+OF\s+(?:THE|THIS)?\s*PROJECT\s+GUTENBERG\s+EBOOK|\*\*\*\s*START\s+OF\s+.*EBOOK)",
    re.IGNORECASE,
)
_END_RE = re.compile(
    r"^(\*\*\*\s*END\s+OF\s+(?:THE|THIS)?\s*PROJECT\s+GUTENBERG\s+EBOOK|\*\*\*\s*END\s+OF\s+.*EBOOK"
    r"|End\s+of\s+(?:the\s+)?Project\s+Gutenberg'?s?\s+E?Book)",
    re.IGNORECASE,
)


def gutenberg_body_bounds(lines: list[str]) -> tuple[int, int]:
    """
    Return the half-open slice `[start, end)` holding the book body.

    `start` is the line after the first START marker and `end` the line of the
    last END marker (scanning from the bottom). Missing markers leave the
    corresponding bound at the edge of the document.
    """
    start, end = 0, len(lines)
    for i, ln in enumerate(lines):
        if _START_RE.search(ln.strip()):
            start = i + 1
            break
    for i in range(len(lines) - 1, start - 1, -1):
        if _END_RE.search(lines[i].strip()):
            end = i
            break
    return start, end


def strip_gutenberg_lines(lines: list[str]) -> list[str]:
    """
    Drop Gutenberg header/footer lines, keeping every body line untouched.

    Unlike whole-text cleaning this never joins, trims or re-wraps lines, so
    blank-line paragraph boundaries inside the body survive.
    """
    start, end = gutenberg_body_bounds(lines)
    return lines[start:end]
