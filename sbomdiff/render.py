from __future__ import annotations

from typing import Iterable, Optional

from .models import Annotation, Checksum, Element, ExtractedLicense, PackageExternalRef, Relationship

MAX_CHARACTERS_PER_CELL = 32000
MORE_MARKER = "[more...]"


def truncate_value(value: str, max_chars: int = MAX_CHARACTERS_PER_CELL) -> str:
    if len(value) <= max_chars:
        return value
    return value[: max_chars - len(MORE_MARKER)] + MORE_MARKER


def join_limited(items: Iterable[str], separator: str, max_chars: int = MAX_CHARACTERS_PER_CELL) -> str:
    """Join whole items; once the next one would not fit, count what is left."""
    items = list(items)
    if not items:
        return ""
    out = items[0]
    for index in range(1, len(items)):
        item = items[index]
        if len(out) + len(separator) + len(item) > max_chars:
            return f"{out}{separator}[{len(items) - index} more...]"
        out += separator + item
    return out


def _text(value: Optional[str]) -> str:
    return value if value is not None else ""


def annotation_to_string(annotation: Optional[Annotation]) -> str:
    if annotation is None:
        return ""
    return (
        f"{_text(annotation.date)} {_text(annotation.annotator)}: "
        f"{_text(annotation.comment)}[{_text(annotation.annotation_type)}]"
    )


def annotations_to_string(annotations: Iterable[Annotation]) -> str:
    return join_limited((annotation_to_string(a) for a in annotations), "\n")


def checksum_to_string(checksum: Optional[Checksum], missing: str = "") -> str:
    if checksum is None:
        return missing
    return f"{checksum.algorithm} {checksum.value}"


def checksums_to_string(checksums: Iterable[Checksum]) -> str:
    return join_limited(sorted(checksum_to_string(c) for c in checksums), "\n")


def relationship_to_string(relationship: Optional[Relationship]) -> str:
    if relationship is None:
        return ""
    if relationship.relationship_type is None:
        return "Unknown relationship type"
    out = relationship.relationship_type + ":"
    related = relationship.related
    if related is None:
        out += "?NULL"
    else:
        if related.name is not None:
            out += f"[{related.name}]"
        out += related.spdx_id
    if relationship.comment:
        out += f"({relationship.comment})"
    return out


def relationships_to_string(relationships: Iterable[Relationship]) -> str:
    return join_limited((relationship_to_string(r) for r in relationships), "\n")


def element_to_string(element: Optional[Element]) -> str:
    if element is None or not element.spdx_id:
        return "[UNKNOWNID]"
    if element.name is not None:
        return f"{element.spdx_id}({element.name})"
    return element.spdx_id


def elements_to_string(elements: Iterable[Element]) -> str:
    return join_limited((element_to_string(e) for e in elements), ", ")


def file_types_to_string(file_types: Iterable[str]) -> str:
    return join_limited(sorted(file_types), ", ")


def license_infos_to_string(license_infos: Iterable[str]) -> str:
    return join_limited(license_infos, ", ")


def contributors_to_string(contributors: Iterable[str]) -> str:
    return join_limited(contributors, ", ")


def attributions_to_string(attributions: Iterable[str]) -> str:
    return join_limited(attributions, "\n")


def extracted_license_to_string(license_info: ExtractedLicense) -> str:
    """``id[name]{seeAlso, ...}(comment)``; empty parts are left out."""
    out = license_info.license_id
    if license_info.name:
        out += f"[{license_info.name}]"
    if license_info.cross_refs:
        out += "{" + ", ".join(license_info.cross_refs) + "}"
    if license_info.comment:
        out += f"({license_info.comment})"
    return out


def package_external_ref_to_string(ref: PackageExternalRef, doc_namespace: Optional[str] = None) -> str:
    reference_type = ref.reference_type or "[MISSING]"
    if doc_namespace and reference_type.startswith(doc_namespace):
        reference_type = reference_type[len(doc_namespace):]
    out = f"{ref.category or 'OTHER'} {reference_type} {ref.locator or '[MISSING]'}"
    if ref.comment:
        out += f"({ref.comment})"
    return out


def package_external_refs_to_string(refs: Iterable[PackageExternalRef], doc_namespace: Optional[str] = None) -> str:
    return join_limited((package_external_ref_to_string(r, doc_namespace) for r in refs), "; ")


def excluded_files_to_string(file_names: Iterable[str]) -> str:
    return join_limited(file_names, ", ")
