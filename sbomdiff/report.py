from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence

from . import equivalence as eq
from . import render
from .align import AlignmentRow, align
from .categories import Category, select_categories
from .errors import CompareError, ConfigurationError
from .models import Config, CreationInfo, SpdxDocument
from .ordering import sort_records

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_DOCUMENTS = 25
ERROR_POLICIES = ("abort", "skip")


@dataclass
class SummaryField:
    title: str
    equal: Optional[bool]
    values: List[str]


@dataclass
class CategoryResult:
    category: Category
    rows: List[AlignmentRow] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def equal_count(self) -> int:
        return sum(1 for row in self.rows if row.equal)

    @property
    def different_count(self) -> int:
        return sum(1 for row in self.rows if not row.equal)


@dataclass
class ComparisonReport:
    doc_names: List[str]
    summary: List[SummaryField]
    categories: List[CategoryResult]
    verification: List[List[str]]


def check_documents(documents: Sequence[SpdxDocument], doc_names: Optional[Sequence[str]], max_documents: int) -> None:
    if doc_names is None:
        raise ConfigurationError("Document names can not be null")
    if len(doc_names) != len(documents):
        raise ConfigurationError(
            "Number of document names does not match the number of SPDX documents being compared"
        )
    if not documents:
        raise ConfigurationError("At least one SPDX document is required")
    if len(documents) > max_documents:
        raise ConfigurationError(f"Too many SPDX documents specified. Must be at most {max_documents}")


def _all_equal(values: Sequence[Any], equals: Callable[[Any, Any], bool]) -> bool:
    return all(equals(values[0], value) for value in values[1:])


def _creation(doc: SpdxDocument) -> CreationInfo:
    return doc.creation_info or CreationInfo()


def _string_field(title: str, documents: Sequence[SpdxDocument], getter: Callable[[SpdxDocument], Optional[str]]) -> SummaryField:
    raw = [getter(doc) for doc in documents]
    return SummaryField(title, _all_equal(raw, eq.strings_equal), [value or "" for value in raw])


def summarize_documents(documents: Sequence[SpdxDocument]) -> List[SummaryField]:
    """Document-level fields, one value per document and an overall verdict."""
    return [
        _string_field("Document Name", documents, lambda d: d.name),
        _string_field("SPDX Version", documents, lambda d: d.spec_version),
        _string_field("Data License", documents, lambda d: d.data_license),
        SummaryField("ID", None, [d.spdx_id or "" for d in documents]),
        SummaryField("Document Namespace", None, [d.namespace or "" for d in documents]),
        SummaryField(
            "Document Describes",
            _all_equal(
                [d.describes for d in documents],
                lambda a, b: eq.collections_equivalent(a, b, eq.element_equivalent),
            ),
            [render.elements_to_string(d.describes) for d in documents],
        ),
        _string_field("Document Comment", documents, lambda d: d.comment),
        _string_field("Creation Date", documents, lambda d: _creation(d).created),
        _string_field("Creator Comment", documents, lambda d: _creation(d).comment),
        _string_field("Lic. List. Ver.", documents, lambda d: _creation(d).license_list_version),
        SummaryField(
            "Annotations",
            _all_equal(
                [d.annotations for d in documents],
                lambda a, b: eq.collections_equivalent(a, b, eq.annotation_equivalent),
            ),
            [render.annotations_to_string(d.annotations) for d in documents],
        ),
        SummaryField(
            "Relationships",
            _all_equal(
                [d.relationships for d in documents],
                lambda a, b: eq.collections_equivalent(a, b, eq.relationship_equivalent),
            ),
            [render.relationships_to_string(d.relationships) for d in documents],
        ),
    ]


def compare_category(category: Category, documents: Sequence[SpdxDocument]) -> CategoryResult:
    sequences = [sort_records(category.records(doc), category.compare) for doc in documents]
    rows = list(align(sequences, category.compare, category.equals))
    LOGGER.debug("Aligned %s: %d rows", category.sheet_title, len(rows))
    return CategoryResult(category, rows)


def build_report(
    documents: Sequence[SpdxDocument],
    doc_names: Optional[Sequence[str]],
    config: Optional[Config] = None,
) -> ComparisonReport:
    report_cfg = (config or {}).get("report") or {}
    max_documents = int(report_cfg.get("max_documents", DEFAULT_MAX_DOCUMENTS))
    policy = str(report_cfg.get("on_category_error", "abort")).lower()
    if policy not in ERROR_POLICIES:
        raise ConfigurationError(f"on_category_error must be one of {', '.join(ERROR_POLICIES)}, not {policy!r}")
    check_documents(documents, doc_names, max_documents)
    categories = select_categories(report_cfg.get("categories") or [])

    results: List[CategoryResult] = []
    for category in categories:
        try:
            results.append(compare_category(category, documents))
        except CompareError as exc:
            if policy == "abort":
                LOGGER.error("Comparison of %s failed: %s", category.sheet_title, exc)
                raise
            LOGGER.warning("Skipping %s: %s", category.sheet_title, exc)
            results.append(CategoryResult(category, error=str(exc)))

    LOGGER.info("Compared %d documents across %d categories", len(documents), len(results))
    return ComparisonReport(
        doc_names=list(doc_names),
        summary=summarize_documents(documents),
        categories=results,
        verification=[list(doc.verification) for doc in documents],
    )
