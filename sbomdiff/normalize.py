from __future__ import annotations

from typing import Optional

DOS_SEPARATOR = "\\"
UNIX_SEPARATOR = "/"
RELATIVE_DIR = "./"
NO_NAME = "[NO_NAME]"


def normalize_file_name(file_name: Optional[str]) -> str:
    """Unix separators and a leading ``./``; a missing name becomes ``[NO_NAME]``."""
    if file_name is None:
        return NO_NAME
    out = file_name.replace(DOS_SEPARATOR, UNIX_SEPARATOR)
    if not out.startswith(RELATIVE_DIR):
        out = RELATIVE_DIR + out
    return out


def compare_file_names(name_a: Optional[str], name_b: Optional[str]) -> int:
    a = normalize_file_name(name_a)
    b = normalize_file_name(name_b)
    return (a > b) - (a < b)


def has_leading_dir(file_name_a: str, file_name_b: str) -> bool:
    """True if ``file_name_a`` is ``file_name_b`` with extra leading directories.

    Not used by the alignment itself.
    """
    a = file_name_a[len(RELATIVE_DIR):] if file_name_a.startswith(RELATIVE_DIR) else file_name_a
    b = file_name_b[len(RELATIVE_DIR):] if file_name_b.startswith(RELATIVE_DIR) else file_name_b
    if len(a) <= len(b):
        return False
    if not a.endswith(b):
        return False
    return a[len(a) - len(b) - 1] == UNIX_SEPARATOR
