# Copyright 2025, Ryan P. Kelly.

from .split import (
    BLOCK_COMMENT,
    DOLLAR_QUOTED_STRING,
    QUOTED_IDENTIFIER,
    QUOTED_STRING,
    Comment,
    ScanResult,
    Semicolon,
    non_empty_statements,
    scan,
    split_statements,
)
from .version import __version__

__all__ = [
    "BLOCK_COMMENT",
    "Comment",
    "DOLLAR_QUOTED_STRING",
    "QUOTED_IDENTIFIER",
    "QUOTED_STRING",
    "ScanResult",
    "Semicolon",
    "__version__",
    "non_empty_statements",
    "scan",
    "split_statements",
]
