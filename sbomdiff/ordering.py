"""Total orders over the identity key of every comparison category.

Each comparator returns -1, 0 or 1. Comparators raise ``RecordError`` when a
record lacks a field its key is built from; the error is not caught here.
"""
from __future__ import annotations

import functools
from typing import Any, Iterable, List, Optional, TypeVar

from .align import Comparator
from .equivalence import element_equivalent
from .errors import RecordError
from .models import (
    Annotation,
    ExternalDocumentRef,
    ExtractedLicense,
    Relationship,
    SpdxFile,
    SpdxPackage,
    SpdxSnippet,
)
from .normalize import compare_file_names

T = TypeVar("T")


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def _cmp_optional(a: Optional[str], b: Optional[str]) -> int:
    if a is None or b is None:
        return (a is not None) - (b is not None)
    return _cmp(a, b)


def _require(value: Optional[str], what: str) -> str:
    if value is None:
        raise RecordError(f"{what} is missing")
    return value


def nulls_first(compare: Comparator) -> Comparator:
    """Order a missing record before any present one."""

    @functools.wraps(compare)
    def wrapper(a: Any, b: Any) -> int:
        if a is None or b is None:
            return (a is not None) - (b is not None)
        return compare(a, b)

    return wrapper


@nulls_first
def compare_files(a: SpdxFile, b: SpdxFile) -> int:
    return compare_file_names(a.name, b.name)


@nulls_first
def compare_annotations(a: Annotation, b: Annotation) -> int:
    result = _cmp(_require(a.annotator, "Annotation annotator"), _require(b.annotator, "Annotation annotator"))
    if result:
        return result
    result = _cmp(
        _require(a.annotation_type, "Annotation type"),
        _require(b.annotation_type, "Annotation type"),
    )
    if result:
        return result
    return _cmp(_require(a.comment, "Annotation comment"), _require(b.comment, "Annotation comment"))


@nulls_first
def compare_relationships(a: Relationship, b: Relationship) -> int:
    result = _cmp(
        _require(a.relationship_type, "Relationship type"),
        _require(b.relationship_type, "Relationship type"),
    )
    if result:
        return result
    related_a, related_b = a.related, b.related
    if related_a is None or related_b is None:
        # a relationship without a related element sorts last
        return (related_a is None) - (related_b is None)
    if element_equivalent(related_a, related_b):
        return 0
    if related_a.name is not None and related_b.name is not None:
        return _cmp(related_a.name, related_b.name)
    return _cmp(related_a.spdx_id, related_b.spdx_id)


@nulls_first
def compare_external_refs(a: ExternalDocumentRef, b: ExternalDocumentRef) -> int:
    result = _cmp(
        _require(a.namespace, "External document namespace"),
        _require(b.namespace, "External document namespace"),
    )
    if result:
        return result
    if a.checksum is None or b.checksum is None:
        # a reference without a checksum sorts last
        return (a.checksum is None) - (b.checksum is None)
    return _cmp(a.checksum.value, b.checksum.value)


@nulls_first
def compare_extracted_licenses(a: ExtractedLicense, b: ExtractedLicense) -> int:
    return _cmp_optional(a.text, b.text)


@nulls_first
def compare_packages(a: SpdxPackage, b: SpdxPackage) -> int:
    result = _cmp(_require(a.name, "Package name"), _require(b.name, "Package name"))
    if result:
        return result
    return _cmp_optional(a.version, b.version)


@nulls_first
def compare_snippets(a: SpdxSnippet, b: SpdxSnippet) -> int:
    result = _cmp_optional(a.name, b.name)
    if result:
        return result
    from_a = a.from_file.name if a.from_file is not None else None
    from_b = b.from_file.name if b.from_file is not None else None
    result = compare_file_names(from_a, from_b)
    if result:
        return result
    return _cmp_optional(a.byte_range, b.byte_range)


@nulls_first
def compare_creators(a: str, b: str) -> int:
    return _cmp(a, b)


def sort_records(records: Iterable[T], compare: Comparator) -> List[T]:
    return sorted(records, key=functools.cmp_to_key(compare))
