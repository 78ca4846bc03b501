from __future__ import annotations

from typing import Callable, Iterable, Optional, Sequence, TypeVar

from .models import (
    Annotation,
    Checksum,
    Element,
    ExternalDocumentRef,
    ExtractedLicense,
    PackageExternalRef,
    Relationship,
)

T = TypeVar("T")


def _clean(value: Optional[str]) -> str:
    if value is None:
        return ""
    return value.replace("\r\n", "\n").strip()


def strings_equal(a: Optional[str], b: Optional[str]) -> bool:
    """Missing and empty strings are equal; line endings and outer whitespace are ignored."""
    return _clean(a) == _clean(b)


def string_collections_equal(a: Optional[Iterable[str]], b: Optional[Iterable[str]]) -> bool:
    return sorted(_clean(s) for s in a or []) == sorted(_clean(s) for s in b or [])


def checksum_equivalent(a: Optional[Checksum], b: Optional[Checksum]) -> bool:
    if a is None or b is None:
        return a is None and b is None
    return a.algorithm.upper() == b.algorithm.upper() and a.value.lower() == b.value.lower()


def checksums_equivalent(a: Optional[Iterable[Checksum]], b: Optional[Iterable[Checksum]]) -> bool:
    set_a = {(c.algorithm.upper(), c.value.lower()) for c in a or []}
    set_b = {(c.algorithm.upper(), c.value.lower()) for c in b or []}
    return set_a == set_b


def element_equivalent(a: Optional[Element], b: Optional[Element]) -> bool:
    # SPDX IDs are document-local, so they take no part in equivalence.
    if a is None or b is None:
        return a is None and b is None
    return (
        a.element_type == b.element_type
        and strings_equal(a.name, b.name)
        and strings_equal(a.version, b.version)
        and checksums_equivalent(a.checksums, b.checksums)
    )


def annotation_equivalent(a: Annotation, b: Annotation) -> bool:
    return (
        strings_equal(a.annotator, b.annotator)
        and strings_equal(a.annotation_type, b.annotation_type)
        and strings_equal(a.comment, b.comment)
        and strings_equal(a.date, b.date)
    )


def relationship_equivalent(a: Relationship, b: Relationship) -> bool:
    return (
        strings_equal(a.relationship_type, b.relationship_type)
        and element_equivalent(a.related, b.related)
        and strings_equal(a.comment, b.comment)
    )


def external_ref_equivalent(a: ExternalDocumentRef, b: ExternalDocumentRef) -> bool:
    return strings_equal(a.namespace, b.namespace) and checksum_equivalent(a.checksum, b.checksum)


def extracted_license_equivalent(a: ExtractedLicense, b: ExtractedLicense) -> bool:
    return strings_equal(a.name, b.name)


def package_external_ref_equivalent(a: PackageExternalRef, b: PackageExternalRef) -> bool:
    return (
        strings_equal(a.category, b.category)
        and strings_equal(a.reference_type, b.reference_type)
        and strings_equal(a.locator, b.locator)
        and strings_equal(a.comment, b.comment)
    )


def collections_equivalent(
    a: Optional[Sequence[T]],
    b: Optional[Sequence[T]],
    equivalent: Callable[[T, T], bool],
) -> bool:
    """Same size and every item of ``a`` has an equivalent in ``b``."""
    if a is None or b is None:
        return a is None and b is None
    if len(a) != len(b):
        return False
    return all(any(equivalent(item_a, item_b) for item_b in b) for item_a in a)
