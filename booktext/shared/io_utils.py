# usage: helper functions for output file naming
from pathlib import Path
import hashlib
import re


def safe_filename(name: str, maxlen: int = 120) -> str:
    """
    Turn a table label or search term into something usable in a filename.

    Characters other than word chars, dash and dot become "_", runs of "_"
    collapse, and leading/trailing dots or underscores go away. An empty
    result becomes "untitled".
    """
    s = re.sub(r"[^\w\-.]+", "_", name)
    s = re.sub(r"_+", "_", s).strip("._")
    return s[:maxlen] if s else "untitled"


def hash_stem(p: Path) -> str:
    """
    Short, collision-resistant stem for outputs derived from `p`.

    Example:
        Path("books/pg1234.txt") -> "pg1234_ab12cd"

    The suffix is the first 6 hex chars of the SHA-1 of the full path, so two
    books with the same filename in different folders don't overwrite each
    other's tables.
    """
    h = hashlib.sha1(str(p).encode("utf-8")).hexdigest()[:6]
    return f"{p.stem}_{h}"


def table_path(outdir: Path, tag: str, name: str, suffix: str = ".csv") -> Path:
    """Path for one output table: `<outdir>/<tag>_<name><suffix>`."""
    return outdir / f"{tag}_{safe_filename(name)}{suffix}"
