import json
import os
import tempfile
import unittest

import yaml

from sbomdiff.errors import DocumentLoadError
from sbomdiff.ingest import document_from_dict, list_documents, load_document
from spdx_samples import sample_document


class IngestTests(unittest.TestCase):
    def test_document_fields(self):
        doc = document_from_dict(sample_document(), "sample.json")
        self.assertEqual(doc.name, "sample")
        self.assertEqual(doc.spec_version, "SPDX-2.3")
        self.assertEqual(doc.creation_info.creators, ["Tool: sbom-gen", "Organization: Example"])
        self.assertEqual(doc.creation_info.license_list_version, "3.22")
        self.assertEqual([e.name for e in doc.describes], ["libfoo"])
        self.assertEqual(doc.verification, [])

    def test_relationships_split_by_source(self):
        doc = document_from_dict(sample_document(), "sample.json")
        self.assertEqual([r.relationship_type for r in doc.relationships], ["DESCRIBES"])
        self.assertEqual(doc.relationships[0].related.element_type, "SpdxPackage")
        file_rel = doc.files[0].relationships
        self.assertEqual(len(file_rel), 1)
        self.assertEqual(file_rel[0].related.element_type, "SpdxNoAssertionElement")

    def test_file_fields(self):
        f = document_from_dict(sample_document(), "sample.json").files[0]
        self.assertEqual(f.name, "./src/foo.c")
        self.assertEqual(f.checksums[0].value, "abc")
        self.assertEqual(f.file_types, ["SOURCE"])
        self.assertEqual(f.annotations[0].annotator, "Person: A")

    def test_external_refs_and_extracted_licenses(self):
        doc = document_from_dict(sample_document(), "sample.json")
        self.assertEqual(doc.external_refs[0].ref_id, "DocumentRef-other")
        self.assertEqual(doc.external_refs[0].checksum.value, "def")
        self.assertEqual(doc.extracted_licenses[0].text, "Custom terms")
        self.assertEqual(doc.extracted_licenses[0].cross_refs, ["https://example.com/terms"])
        self.assertEqual(doc.extracted_licenses[0].comment, "vendored")

    def test_package_fields(self):
        pkg = document_from_dict(sample_document(), "sample.json").packages[0]
        self.assertEqual((pkg.name, pkg.version), ("libfoo", "1.0"))
        self.assertEqual(pkg.supplier, "Organization: Example")
        self.assertEqual(pkg.verification_code, "d6a770ba38583ed4bb4525bd96e50461655d2758")
        self.assertEqual(pkg.verification_excluded, ["./package.spdx"])
        self.assertEqual(pkg.checksums[0].algorithm, "SHA256")
        self.assertTrue(pkg.files_analyzed)
        self.assertEqual(pkg.external_refs[0].locator, "pkg:generic/libfoo@1.0")
        self.assertEqual([r.relationship_type for r in pkg.relationships], ["CONTAINS"])

    def test_snippet_fields(self):
        snippet = document_from_dict(sample_document(), "sample.json").snippets[0]
        self.assertEqual(snippet.name, "main loop")
        self.assertEqual(snippet.from_file.name, "./src/foo.c")
        self.assertEqual(snippet.byte_range, "310:420")
        self.assertEqual(snippet.line_range, "5:23")
        self.assertEqual(snippet.license_info, ["MIT"])

    def test_missing_fields_become_verification_messages(self):
        data = sample_document()
        del data["dataLicense"]
        data["creationInfo"] = {}
        doc = document_from_dict(data, "sample.json")
        self.assertIn("Missing data license", doc.verification)
        self.assertIn("Missing creation date", doc.verification)
        self.assertIn("Missing creators", doc.verification)

    def test_load_json_and_yaml(self):
        with tempfile.TemporaryDirectory() as tmp:
            json_path = os.path.join(tmp, "a.spdx.json")
            yaml_path = os.path.join(tmp, "nested", "b.yaml")
            os.makedirs(os.path.dirname(yaml_path))
            with open(json_path, "w", encoding="utf-8") as fh:
                json.dump(sample_document(), fh)
            with open(yaml_path, "w", encoding="utf-8") as fh:
                yaml.safe_dump(sample_document(name="yaml doc"), fh)
            with open(os.path.join(tmp, "notes.txt"), "w", encoding="utf-8") as fh:
                fh.write("ignored")

            self.assertEqual(list_documents(tmp), [json_path, yaml_path])
            self.assertEqual(load_document(json_path).name, "sample")
            self.assertEqual(load_document(yaml_path).name, "yaml doc")

    def test_load_errors(self):
        with tempfile.TemporaryDirectory() as tmp:
            broken = os.path.join(tmp, "broken.json")
            with open(broken, "w", encoding="utf-8") as fh:
                fh.write("{not json")
            with self.assertRaises(DocumentLoadError):
                load_document(broken)
            listing = os.path.join(tmp, "list.yaml")
            with open(listing, "w", encoding="utf-8") as fh:
                fh.write("- a\n- b\n")
            with self.assertRaises(DocumentLoadError):
                load_document(listing)
            with self.assertRaises(DocumentLoadError):
                load_document(os.path.join(tmp, "missing.json"))


if __name__ == "__main__":
    unittest.main()
