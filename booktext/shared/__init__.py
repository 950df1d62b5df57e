# Shared helpers: error kinds and output naming
from .errors import (
    BooktextError,
    ConfigurationError,
    DecodingError,
    DivisionUndefined,
    ResourceUnavailable,
    TokenizationError,
)
from .io_utils import hash_stem, safe_filename, table_path

__all__ = [
    "BooktextError",
    "ConfigurationError",
    "DecodingError",
    "DivisionUndefined",
    "ResourceUnavailable",
    "TokenizationError",
    "hash_stem",
    "safe_filename",
    "table_path",
]
