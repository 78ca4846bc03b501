from __future__ import annotations


class CompareError(Exception):
    """Base class for every failure raised while comparing documents."""


class ConfigurationError(CompareError):
    """The comparison request itself is invalid (names, counts, options)."""


class UnsortedSequenceError(ConfigurationError):
    def __init__(self, doc_index: int, position: int) -> None:
        super().__init__(
            f"Sequence for document {doc_index} is not sorted at position {position}"
        )
        self.doc_index = doc_index
        self.position = position


class RecordError(CompareError):
    """A record is missing data its comparator or predicate needs."""


class DocumentLoadError(CompareError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Error opening SPDX document {path}: {reason}")
        self.path = path
        self.reason = reason
