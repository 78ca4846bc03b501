from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .errors import DocumentLoadError
from .models import (
    Annotation,
    Checksum,
    CreationInfo,
    Element,
    ExternalDocumentRef,
    ExtractedLicense,
    PackageExternalRef,
    Relationship,
    SpdxDocument,
    SpdxFile,
    SpdxPackage,
    SpdxSnippet,
)

LOGGER = logging.getLogger(__name__)

DOCUMENT_SUFFIXES = (".json", ".yaml", ".yml")
SENTINEL_IDS = {"NONE": "SpdxNoneElement", "NOASSERTION": "SpdxNoAssertionElement"}
REQUIRED_FIELDS = {
    "spdxVersion": "SPDX version",
    "dataLicense": "data license",
    "SPDXID": "document ID",
    "name": "document name",
    "documentNamespace": "document namespace",
}


def list_documents(path: str) -> List[str]:
    root = Path(path)
    if root.is_file():
        return [str(root)]
    if not root.exists():
        return []
    return sorted(str(p) for p in root.rglob("*") if p.is_file() and p.suffix.lower() in DOCUMENT_SUFFIXES)


def _checksum(data: Optional[Dict[str, Any]]) -> Optional[Checksum]:
    if not data:
        return None
    return Checksum(algorithm=str(data.get("algorithm", "")), value=str(data.get("checksumValue", "")))


def _checksums(items: Optional[List[Dict[str, Any]]]) -> List[Checksum]:
    return [c for c in (_checksum(item) for item in items or []) if c is not None]


def _annotations(items: Optional[List[Dict[str, Any]]]) -> List[Annotation]:
    return [
        Annotation(
            annotator=item.get("annotator"),
            annotation_type=item.get("annotationType"),
            comment=item.get("comment"),
            date=item.get("annotationDate"),
        )
        for item in items or []
    ]


def _element_index(data: Dict[str, Any]) -> Dict[str, Element]:
    index: Dict[str, Element] = {}
    for item in data.get("files") or []:
        index[item.get("SPDXID", "")] = Element(
            spdx_id=item.get("SPDXID", ""),
            name=item.get("fileName"),
            element_type="SpdxFile",
            checksums=_checksums(item.get("checksums")),
        )
    for item in data.get("packages") or []:
        index[item.get("SPDXID", "")] = Element(
            spdx_id=item.get("SPDXID", ""),
            name=item.get("name"),
            element_type="SpdxPackage",
            checksums=_checksums(item.get("checksums")),
            version=item.get("versionInfo"),
        )
    for item in data.get("snippets") or []:
        index[item.get("SPDXID", "")] = Element(
            spdx_id=item.get("SPDXID", ""), name=item.get("name"), element_type="SpdxSnippet"
        )
    doc_id = data.get("SPDXID")
    if doc_id:
        index[doc_id] = Element(spdx_id=doc_id, name=data.get("name"), element_type="SpdxDocument")
    return index


def _resolve(spdx_id: Optional[str], index: Dict[str, Element]) -> Optional[Element]:
    if spdx_id is None:
        return None
    if spdx_id in index:
        return index[spdx_id]
    if spdx_id in SENTINEL_IDS:
        return Element(spdx_id=spdx_id, element_type=SENTINEL_IDS[spdx_id])
    if spdx_id.startswith("DocumentRef-"):
        return Element(spdx_id=spdx_id, element_type="ExternalSpdxElement")
    return Element(spdx_id=spdx_id)


def _relationships_by_source(data: Dict[str, Any], index: Dict[str, Element]) -> Dict[str, List[Relationship]]:
    by_source: Dict[str, List[Relationship]] = {}
    for item in data.get("relationships") or []:
        by_source.setdefault(item.get("spdxElementId", ""), []).append(
            Relationship(
                relationship_type=item.get("relationshipType"),
                related=_resolve(item.get("relatedSpdxElement"), index),
                comment=item.get("comment"),
            )
        )
    return by_source


def _file(item: Dict[str, Any], relationships: List[Relationship]) -> SpdxFile:
    return SpdxFile(
        spdx_id=item.get("SPDXID", ""),
        name=item.get("fileName"),
        checksums=_checksums(item.get("checksums")),
        file_types=list(item.get("fileTypes") or []),
        concluded_license=item.get("licenseConcluded"),
        license_info=list(item.get("licenseInfoInFiles") or []),
        license_comments=item.get("licenseComments"),
        copyright_text=item.get("copyrightText"),
        comment=item.get("comment"),
        notice=item.get("noticeText"),
        contributors=list(item.get("fileContributors") or []),
        attribution=list(item.get("attributionTexts") or []),
        annotations=_annotations(item.get("annotations")),
        relationships=relationships,
    )


def _package(item: Dict[str, Any], relationships: List[Relationship]) -> SpdxPackage:
    verification = item.get("packageVerificationCode") or {}
    return SpdxPackage(
        spdx_id=item.get("SPDXID", ""),
        name=item.get("name"),
        version=item.get("versionInfo"),
        file_name=item.get("packageFileName"),
        supplier=item.get("supplier"),
        originator=item.get("originator"),
        download_location=item.get("downloadLocation"),
        verification_code=verification.get("packageVerificationCodeValue"),
        verification_excluded=list(verification.get("packageVerificationCodeExcludedFiles") or []),
        checksums=_checksums(item.get("checksums")),
        home_page=item.get("homepage"),
        source_info=item.get("sourceInfo"),
        concluded_license=item.get("licenseConcluded"),
        license_info_from_files=list(item.get("licenseInfoFromFiles") or []),
        declared_license=item.get("licenseDeclared"),
        license_comments=item.get("licenseComments"),
        copyright_text=item.get("copyrightText"),
        attribution=list(item.get("attributionTexts") or []),
        summary=item.get("summary"),
        description=item.get("description"),
        files_analyzed=bool(item.get("filesAnalyzed", True)),
        external_refs=[
            PackageExternalRef(
                category=ref.get("referenceCategory"),
                reference_type=ref.get("referenceType"),
                locator=ref.get("referenceLocator"),
                comment=ref.get("comment"),
            )
            for ref in item.get("externalRefs") or []
        ],
        annotations=_annotations(item.get("annotations")),
        relationships=relationships,
    )


def _snippet_range(ranges: Optional[List[Dict[str, Any]]], pointer_key: str) -> Optional[str]:
    for item in ranges or []:
        start = (item.get("startPointer") or {}).get(pointer_key)
        end = (item.get("endPointer") or {}).get(pointer_key)
        if start is not None or end is not None:
            return f"{start}:{end}"
    return None


def _snippet(item: Dict[str, Any], relationships: List[Relationship], index: Dict[str, Element]) -> SpdxSnippet:
    ranges = item.get("ranges")
    return SpdxSnippet(
        spdx_id=item.get("SPDXID", ""),
        name=item.get("name"),
        from_file=_resolve(item.get("snippetFromFile"), index),
        byte_range=_snippet_range(ranges, "offset"),
        line_range=_snippet_range(ranges, "lineNumber"),
        concluded_license=item.get("licenseConcluded"),
        license_info=list(item.get("licenseInfoInSnippets") or []),
        license_comments=item.get("licenseComments"),
        copyright_text=item.get("copyrightText"),
        comment=item.get("comment"),
        attribution=list(item.get("attributionTexts") or []),
        annotations=_annotations(item.get("annotations")),
        relationships=relationships,
    )


def document_from_dict(data: Dict[str, Any], path: str) -> SpdxDocument:
    index = _element_index(data)
    by_source = _relationships_by_source(data, index)
    doc_id = data.get("SPDXID")

    creation = data.get("creationInfo") or {}
    creation_info = CreationInfo(
        created=creation.get("created"),
        creators=list(creation.get("creators") or []),
        comment=creation.get("comment"),
        license_list_version=creation.get("licenseListVersion"),
    )

    describes_ids = list(data.get("documentDescribes") or [])
    for rel in by_source.get(doc_id or "", []):
        if rel.relationship_type == "DESCRIBES" and rel.related is not None and rel.related.spdx_id not in describes_ids:
            describes_ids.append(rel.related.spdx_id)
    describes = [e for e in (_resolve(i, index) for i in describes_ids) if e is not None]

    external_refs = [
        ExternalDocumentRef(
            ref_id=item.get("externalDocumentId", ""),
            namespace=item.get("spdxDocument"),
            checksum=_checksum(item.get("checksum")),
        )
        for item in data.get("externalDocumentRefs") or []
    ]
    extracted = [
        ExtractedLicense(
            license_id=item.get("licenseId", ""),
            text=item.get("extractedText"),
            name=item.get("name"),
            cross_refs=list(item.get("seeAlsos") or []),
            comment=item.get("comment"),
        )
        for item in data.get("hasExtractedLicensingInfos") or []
    ]
    files = [_file(item, by_source.get(item.get("SPDXID", ""), [])) for item in data.get("files") or []]
    packages = [_package(item, by_source.get(item.get("SPDXID", ""), [])) for item in data.get("packages") or []]
    snippets = [
        _snippet(item, by_source.get(item.get("SPDXID", ""), []), index) for item in data.get("snippets") or []
    ]

    verification = [f"Missing {label}" for key, label in REQUIRED_FIELDS.items() if not data.get(key)]
    if not creation_info.created:
        verification.append("Missing creation date")
    if not creation_info.creators:
        verification.append("Missing creators")

    return SpdxDocument(
        path=path,
        name=data.get("name"),
        spdx_id=doc_id,
        spec_version=data.get("spdxVersion"),
        data_license=data.get("dataLicense"),
        namespace=data.get("documentNamespace"),
        comment=data.get("comment"),
        creation_info=creation_info,
        describes=describes,
        annotations=_annotations(data.get("annotations")),
        relationships=by_source.get(doc_id or "", []),
        external_refs=external_refs,
        extracted_licenses=extracted,
        files=files,
        packages=packages,
        snippets=snippets,
        verification=verification,
    )


def load_document(path: str) -> SpdxDocument:
    try:
        with open(path, "r", encoding="utf-8") as file:
            if path.lower().endswith(".json"):
                data = json.load(file)
            else:
                data = yaml.safe_load(file)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise DocumentLoadError(path, str(exc)) from exc
    if not isinstance(data, dict):
        raise DocumentLoadError(path, "top level is not an object")
    doc = document_from_dict(data, path)
    LOGGER.info(
        "Loaded %s: %d packages, %d files, %d snippets, %d relationships",
        path,
        len(doc.packages),
        len(doc.files),
        len(doc.snippets),
        len(doc.relationships),
    )
    for message in doc.verification:
        LOGGER.warning("%s: %s", path, message)
    return doc
