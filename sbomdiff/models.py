from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Checksum:
    algorithm: str
    value: str


@dataclass
class Element:
    spdx_id: str
    name: Optional[str] = None
    element_type: str = "SpdxElement"
    checksums: List[Checksum] = field(default_factory=list)
    version: Optional[str] = None


@dataclass
class Annotation:
    annotator: Optional[str]
    annotation_type: Optional[str]
    comment: Optional[str]
    date: Optional[str] = None


@dataclass
class Relationship:
    relationship_type: Optional[str]
    related: Optional[Element]
    comment: Optional[str] = None


@dataclass
class ExternalDocumentRef:
    ref_id: str
    namespace: Optional[str]
    checksum: Optional[Checksum] = None


@dataclass
class ExtractedLicense:
    license_id: str
    text: Optional[str]
    name: Optional[str] = None
    cross_refs: List[str] = field(default_factory=list)
    comment: Optional[str] = None


@dataclass
class SpdxFile:
    spdx_id: str
    name: Optional[str]
    checksums: List[Checksum] = field(default_factory=list)
    file_types: List[str] = field(default_factory=list)
    concluded_license: Optional[str] = None
    license_info: List[str] = field(default_factory=list)
    license_comments: Optional[str] = None
    copyright_text: Optional[str] = None
    comment: Optional[str] = None
    notice: Optional[str] = None
    contributors: List[str] = field(default_factory=list)
    attribution: List[str] = field(default_factory=list)
    annotations: List[Annotation] = field(default_factory=list)
    relationships: List[Relationship] = field(default_factory=list)


@dataclass
class PackageExternalRef:
    category: Optional[str]
    reference_type: Optional[str]
    locator: Optional[str]
    comment: Optional[str] = None


@dataclass
class SpdxPackage:
    spdx_id: str
    name: Optional[str]
    version: Optional[str] = None
    file_name: Optional[str] = None
    supplier: Optional[str] = None
    originator: Optional[str] = None
    download_location: Optional[str] = None
    verification_code: Optional[str] = None
    verification_excluded: List[str] = field(default_factory=list)
    checksums: List[Checksum] = field(default_factory=list)
    home_page: Optional[str] = None
    source_info: Optional[str] = None
    concluded_license: Optional[str] = None
    license_info_from_files: List[str] = field(default_factory=list)
    declared_license: Optional[str] = None
    license_comments: Optional[str] = None
    copyright_text: Optional[str] = None
    attribution: List[str] = field(default_factory=list)
    summary: Optional[str] = None
    description: Optional[str] = None
    files_analyzed: bool = True
    external_refs: List[PackageExternalRef] = field(default_factory=list)
    annotations: List[Annotation] = field(default_factory=list)
    relationships: List[Relationship] = field(default_factory=list)


@dataclass
class SpdxSnippet:
    spdx_id: str
    name: Optional[str]
    from_file: Optional[Element] = None
    byte_range: Optional[str] = None
    line_range: Optional[str] = None
    concluded_license: Optional[str] = None
    license_info: List[str] = field(default_factory=list)
    license_comments: Optional[str] = None
    copyright_text: Optional[str] = None
    comment: Optional[str] = None
    attribution: List[str] = field(default_factory=list)
    annotations: List[Annotation] = field(default_factory=list)
    relationships: List[Relationship] = field(default_factory=list)


@dataclass
class CreationInfo:
    created: Optional[str] = None
    creators: List[str] = field(default_factory=list)
    comment: Optional[str] = None
    license_list_version: Optional[str] = None


@dataclass
class SpdxDocument:
    path: str
    name: Optional[str] = None
    spdx_id: Optional[str] = None
    spec_version: Optional[str] = None
    data_license: Optional[str] = None
    namespace: Optional[str] = None
    comment: Optional[str] = None
    creation_info: Optional[CreationInfo] = None
    describes: List[Element] = field(default_factory=list)
    annotations: List[Annotation] = field(default_factory=list)
    relationships: List[Relationship] = field(default_factory=list)
    external_refs: List[ExternalDocumentRef] = field(default_factory=list)
    extracted_licenses: List[ExtractedLicense] = field(default_factory=list)
    files: List[SpdxFile] = field(default_factory=list)
    packages: List[SpdxPackage] = field(default_factory=list)
    snippets: List[SpdxSnippet] = field(default_factory=list)
    verification: List[str] = field(default_factory=list)


Config = Dict[str, Any]
