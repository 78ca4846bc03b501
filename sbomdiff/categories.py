from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence

from . import equivalence as eq
from . import ordering
from . import render
from .errors import ConfigurationError
from .models import SpdxDocument, SpdxFile, SpdxPackage, SpdxSnippet
from .normalize import normalize_file_name

NO_FILE_VALUE = "[No File]"
NO_PACKAGE_VALUE = "[No Package]"
NO_SNIPPET_VALUE = "[No Snippet]"
NO_VALUE = "[No Value]"


@dataclass(frozen=True)
class Property:
    """One row of a property-layout sheet: how to show and compare a single field."""

    title: str
    render: Callable[[Any], str]
    equals: Callable[[Any, Any], bool]

    def agrees(self, values: Sequence[Any]) -> bool:
        """True when every present record has an equal value; absent slots are ignored."""
        present = [value for value in values if value is not None]
        return all(self.equals(present[0], value) for value in present[1:])


@dataclass(frozen=True)
class Category:
    name: str
    sheet_title: str
    records: Callable[[SpdxDocument], List[Any]]
    compare: Callable[[Any, Any], int]
    equals: Callable[[Any, Any], bool]
    render: Callable[[Any], str]
    key_headers: Sequence[str]
    key_values: Callable[[Any], List[str]]
    absent_value: str = ""
    column_width: int = 30
    properties: Sequence[Property] = ()


def _creators(doc: SpdxDocument) -> List[str]:
    return list(doc.creation_info.creators) if doc.creation_info else []


def _file_category(
    name: str,
    sheet_title: str,
    value: Callable[[SpdxFile], str],
    equals: Callable[[SpdxFile, SpdxFile], bool],
    column_width: int,
) -> Category:
    return Category(
        name=name,
        sheet_title=sheet_title,
        records=lambda doc: list(doc.files),
        compare=ordering.compare_files,
        equals=equals,
        render=value,
        key_headers=("File Path",),
        key_values=lambda f: [normalize_file_name(f.name)],
        absent_value=NO_FILE_VALUE,
        column_width=column_width,
    )


def _or_empty(value: Optional[str]) -> str:
    return value if value is not None else ""


def _text_property(title: str, getter: Callable[[Any], Optional[str]]) -> Property:
    return Property(title, lambda r: _or_empty(getter(r)), lambda a, b: eq.strings_equal(getter(a), getter(b)))


def _list_property(title: str, getter: Callable[[Any], List[str]], show: Callable[[List[str]], str]) -> Property:
    return Property(title, lambda r: show(getter(r)), lambda a, b: eq.string_collections_equal(getter(a), getter(b)))


def _same_properties(properties: Sequence[Property]) -> Callable[[Any, Any], bool]:
    def equals(a: Any, b: Any) -> bool:
        return all(p.equals(a, b) for p in properties)

    return equals


# SPDX IDs are document-local; only presence is compared.
_ID_PROPERTY = Property("SPDX ID", lambda r: r.spdx_id, lambda a, b: True)
_ANNOTATIONS_PROPERTY = Property(
    "Annotations",
    lambda r: render.annotations_to_string(r.annotations),
    lambda a, b: eq.collections_equivalent(a.annotations, b.annotations, eq.annotation_equivalent),
)
_RELATIONSHIPS_PROPERTY = Property(
    "Relationships",
    lambda r: render.relationships_to_string(r.relationships),
    lambda a, b: eq.collections_equivalent(a.relationships, b.relationships, eq.relationship_equivalent),
)


def _verification_code(pkg: SpdxPackage) -> str:
    return pkg.verification_code if pkg.verification_code is not None else NO_VALUE


def _verification_excluded(pkg: SpdxPackage) -> str:
    if pkg.verification_code is None:
        return NO_VALUE
    return render.excluded_files_to_string(pkg.verification_excluded)


PACKAGE_PROPERTIES: List[Property] = [
    _ID_PROPERTY,
    _ANNOTATIONS_PROPERTY,
    _RELATIONSHIPS_PROPERTY,
    _text_property("File Name", lambda p: p.file_name),
    _text_property("Supplier", lambda p: p.supplier),
    _text_property("Originator", lambda p: p.originator),
    _text_property("Download Location", lambda p: p.download_location),
    Property(
        "Verification Value",
        _verification_code,
        lambda a, b: eq.strings_equal(a.verification_code, b.verification_code),
    ),
    Property(
        "Verification Excluded",
        _verification_excluded,
        lambda a, b: eq.string_collections_equal(a.verification_excluded, b.verification_excluded),
    ),
    Property(
        "Checksum",
        lambda p: render.checksums_to_string(p.checksums),
        lambda a, b: eq.checksums_equivalent(a.checksums, b.checksums),
    ),
    _text_property("Home Page", lambda p: p.home_page),
    _text_property("Source Info", lambda p: p.source_info),
    _text_property("Concluded License", lambda p: p.concluded_license),
    _list_property("License From Files", lambda p: p.license_info_from_files, render.license_infos_to_string),
    _text_property("Declared License", lambda p: p.declared_license),
    _text_property("License Comment", lambda p: p.license_comments),
    _text_property("Copyright", lambda p: p.copyright_text),
    _list_property("Attributions", lambda p: p.attribution, render.attributions_to_string),
    _text_property("Summary", lambda p: p.summary),
    _text_property("Description", lambda p: p.description),
    Property(
        "Files Analyzed",
        lambda p: "true" if p.files_analyzed else "false",
        lambda a, b: a.files_analyzed == b.files_analyzed,
    ),
    Property(
        "External Refs",
        lambda p: render.package_external_refs_to_string(p.external_refs),
        lambda a, b: eq.collections_equivalent(a.external_refs, b.external_refs, eq.package_external_ref_equivalent),
    ),
]

SNIPPET_PROPERTIES: List[Property] = [
    _ID_PROPERTY,
    _text_property("Byte Range", lambda s: s.byte_range),
    _text_property("Line Range", lambda s: s.line_range),
    _text_property("Concluded License", lambda s: s.concluded_license),
    _list_property("License Info", lambda s: s.license_info, render.license_infos_to_string),
    _text_property("License Comment", lambda s: s.license_comments),
    _text_property("Copyright", lambda s: s.copyright_text),
    _text_property("Comment", lambda s: s.comment),
    _list_property("Attributions", lambda s: s.attribution, render.attributions_to_string),
    _ANNOTATIONS_PROPERTY,
    _RELATIONSHIPS_PROPERTY,
]


def _snippet_file(snippet: SpdxSnippet) -> str:
    return normalize_file_name(snippet.from_file.name if snippet.from_file is not None else None)


PACKAGE_CATEGORY = Category(
    name="packages",
    sheet_title="Package",
    records=lambda doc: list(doc.packages),
    compare=ordering.compare_packages,
    equals=_same_properties(PACKAGE_PROPERTIES),
    render=lambda pkg: pkg.spdx_id,
    key_headers=("Package Name", "Version"),
    key_values=lambda pkg: [_or_empty(pkg.name), _or_empty(pkg.version)],
    absent_value=NO_PACKAGE_VALUE,
    column_width=40,
    properties=tuple(PACKAGE_PROPERTIES),
)

SNIPPET_CATEGORY = Category(
    name="snippets",
    sheet_title="Snippets",
    records=lambda doc: list(doc.snippets),
    compare=ordering.compare_snippets,
    equals=_same_properties(SNIPPET_PROPERTIES),
    render=lambda snippet: snippet.spdx_id,
    key_headers=("Snippet Name", "From File"),
    key_values=lambda s: [_or_empty(s.name), _snippet_file(s)],
    absent_value=NO_SNIPPET_VALUE,
    column_width=40,
    properties=tuple(SNIPPET_PROPERTIES),
)


DOCUMENT_CATEGORIES: List[Category] = [
    Category(
        name="creators",
        sheet_title="Creator",
        records=_creators,
        compare=ordering.compare_creators,
        equals=eq.strings_equal,
        render=lambda creator: creator,
        key_headers=("Creator",),
        key_values=lambda creator: [creator],
        column_width=40,
    ),
    Category(
        name="external_refs",
        sheet_title="Ext. Doc. References",
        records=lambda doc: list(doc.external_refs),
        compare=ordering.compare_external_refs,
        equals=eq.external_ref_equivalent,
        render=lambda ref: ref.ref_id,
        key_headers=("External Document Namespace", "External Doc Checksum"),
        key_values=lambda ref: [_or_empty(ref.namespace), render.checksum_to_string(ref.checksum, "[NONE]")],
        column_width=30,
    ),
    Category(
        name="document_annotations",
        sheet_title="Doc. Annotations",
        records=lambda doc: list(doc.annotations),
        compare=ordering.compare_annotations,
        equals=eq.annotation_equivalent,
        render=lambda annotation: _or_empty(annotation.date),
        key_headers=("Annotator", "Type", "Comment"),
        key_values=lambda a: [_or_empty(a.annotator), _or_empty(a.annotation_type), _or_empty(a.comment)],
        column_width=25,
    ),
    Category(
        name="document_relationships",
        sheet_title="Doc. Relationships",
        records=lambda doc: list(doc.relationships),
        compare=ordering.compare_relationships,
        equals=eq.relationship_equivalent,
        render=render.relationship_to_string,
        key_headers=("Type",),
        key_values=lambda r: [_or_empty(r.relationship_type)],
        column_width=60,
    ),
    Category(
        name="extracted_licenses",
        sheet_title="Extracted Licenses",
        records=lambda doc: list(doc.extracted_licenses),
        compare=ordering.compare_extracted_licenses,
        equals=eq.extracted_license_equivalent,
        render=render.extracted_license_to_string,
        key_headers=("Extracted Text",),
        key_values=lambda lic: [_or_empty(lic.text)],
        column_width=20,
    ),
]

FILE_CATEGORIES: List[Category] = [
    _file_category(
        "file_ids", "File IDs",
        lambda f: f.spdx_id,
        lambda a, b: eq.strings_equal(a.spdx_id, b.spdx_id),
        30,
    ),
    _file_category(
        "file_checksums", "File Checksum",
        lambda f: render.checksums_to_string(f.checksums),
        lambda a, b: eq.checksums_equivalent(a.checksums, b.checksums),
        55,
    ),
    _file_category(
        "file_concluded", "File Concluded",
        lambda f: _or_empty(f.concluded_license),
        lambda a, b: eq.strings_equal(a.concluded_license, b.concluded_license),
        40,
    ),
    _file_category(
        "file_found_licenses", "File Found Licenses",
        lambda f: render.license_infos_to_string(f.license_info),
        lambda a, b: eq.string_collections_equal(a.license_info, b.license_info),
        40,
    ),
    _file_category(
        "file_license_comments", "File License Comment",
        lambda f: _or_empty(f.license_comments),
        lambda a, b: eq.strings_equal(a.license_comments, b.license_comments),
        60,
    ),
    _file_category(
        "file_comments", "File Comment",
        lambda f: _or_empty(f.comment),
        lambda a, b: eq.strings_equal(a.comment, b.comment),
        60,
    ),
    _file_category(
        "file_copyrights", "File Copyrights",
        lambda f: f.copyright_text if f.copyright_text is not None else "NONE",
        lambda a, b: eq.strings_equal(a.copyright_text, b.copyright_text),
        60,
    ),
    _file_category(
        "file_types", "File Type",
        lambda f: render.file_types_to_string(f.file_types),
        lambda a, b: eq.string_collections_equal(a.file_types, b.file_types),
        20,
    ),
    _file_category(
        "file_contributors", "File Contributors",
        lambda f: render.contributors_to_string(f.contributors),
        lambda a, b: eq.string_collections_equal(a.contributors, b.contributors),
        50,
    ),
    _file_category(
        "file_attributions", "File Attribution",
        lambda f: render.attributions_to_string(f.attribution),
        lambda a, b: eq.string_collections_equal(a.attribution, b.attribution),
        60,
    ),
    _file_category(
        "file_notices", "File Notices",
        lambda f: _or_empty(f.notice),
        lambda a, b: eq.strings_equal(a.notice, b.notice),
        60,
    ),
    _file_category(
        "file_annotations", "File Annot.",
        lambda f: render.annotations_to_string(f.annotations),
        lambda a, b: eq.collections_equivalent(a.annotations, b.annotations, eq.annotation_equivalent),
        60,
    ),
    _file_category(
        "file_relationships", "File Relationships",
        lambda f: render.relationships_to_string(f.relationships),
        lambda a, b: eq.collections_equivalent(a.relationships, b.relationships, eq.relationship_equivalent),
        60,
    ),
]

# Workbook sheet order: the package sheet sits between the document sheets and extracted licenses.
ALL_CATEGORIES: List[Category] = (
    DOCUMENT_CATEGORIES[:4] + [PACKAGE_CATEGORY] + DOCUMENT_CATEGORIES[4:] + FILE_CATEGORIES + [SNIPPET_CATEGORY]
)


def select_categories(selected: Optional[Sequence[str]]) -> List[Category]:
    """Categories whose name or sheet title is listed; all of them for an empty list."""
    if not selected:
        return list(ALL_CATEGORIES)
    wanted = {s.strip().lower() for s in selected}
    known = {c.name for c in ALL_CATEGORIES} | {c.sheet_title.lower() for c in ALL_CATEGORIES}
    unknown = sorted(wanted - known)
    if unknown:
        raise ConfigurationError(f"Unknown comparison categories: {', '.join(unknown)}")
    return [c for c in ALL_CATEGORIES if c.name in wanted or c.sheet_title.lower() in wanted]
