import unittest

from sbomdiff.errors import RecordError
from sbomdiff.models import (
    Annotation,
    Checksum,
    Element,
    ExternalDocumentRef,
    ExtractedLicense,
    Relationship,
    SpdxFile,
    SpdxPackage,
    SpdxSnippet,
)
from sbomdiff.ordering import (
    compare_annotations,
    compare_creators,
    compare_external_refs,
    compare_extracted_licenses,
    compare_files,
    compare_packages,
    compare_relationships,
    compare_snippets,
    sort_records,
)


class OrderingTests(unittest.TestCase):
    def test_missing_record_sorts_first(self):
        f = SpdxFile("SPDXRef-1", "a.c")
        self.assertEqual(compare_files(None, f), -1)
        self.assertEqual(compare_files(f, None), 1)
        self.assertEqual(compare_files(None, None), 0)

    def test_files_sort_by_normalized_name(self):
        files = [SpdxFile("1", "src\\z.c"), SpdxFile("2", "./a.c"), SpdxFile("3", "m.c")]
        self.assertEqual([f.spdx_id for f in sort_records(files, compare_files)], ["2", "3", "1"])

    def test_annotation_field_order(self):
        a = Annotation("Person: A", "REVIEW", "z comment")
        b = Annotation("Person: B", "OTHER", "a comment")
        c = Annotation("Person: A", "OTHER", "z comment")
        d = Annotation("Person: A", "REVIEW", "a comment", date="2020-01-01T00:00:00Z")
        ordered = sort_records([a, b, c, d], compare_annotations)
        self.assertEqual(ordered, [c, d, a, b])

    def test_annotation_dates_are_not_part_of_key(self):
        a = Annotation("Person: A", "REVIEW", "ok", date="2020-01-01T00:00:00Z")
        b = Annotation("Person: A", "REVIEW", "ok", date="2023-05-05T00:00:00Z")
        self.assertEqual(compare_annotations(a, b), 0)

    def test_annotation_without_annotator_raises(self):
        with self.assertRaises(RecordError):
            compare_annotations(Annotation(None, "REVIEW", "x"), Annotation("Tool: t", "REVIEW", "x"))

    def test_relationship_type_first(self):
        a = Relationship("CONTAINS", Element("SPDXRef-z", "zzz"))
        b = Relationship("DESCRIBES", Element("SPDXRef-a", "aaa"))
        self.assertEqual(compare_relationships(a, b), -1)

    def test_relationship_equivalent_elements_compare_equal(self):
        a = Relationship("DESCRIBES", Element("SPDXRef-1", "pkg", "SpdxPackage"))
        b = Relationship("DESCRIBES", Element("SPDXRef-99", "pkg", "SpdxPackage"))
        self.assertEqual(compare_relationships(a, b), 0)

    def test_relationship_falls_back_to_name_then_id(self):
        named_a = Relationship("DESCRIBES", Element("SPDXRef-9", "alpha", "SpdxPackage"))
        named_b = Relationship("DESCRIBES", Element("SPDXRef-1", "beta", "SpdxPackage"))
        self.assertEqual(compare_relationships(named_a, named_b), -1)
        unnamed_a = Relationship("DESCRIBES", Element("SPDXRef-1", None, "SpdxFile", [Checksum("SHA1", "aa")]))
        unnamed_b = Relationship("DESCRIBES", Element("SPDXRef-2", None, "SpdxFile", [Checksum("SHA1", "bb")]))
        self.assertEqual(compare_relationships(unnamed_a, unnamed_b), -1)
        self.assertEqual(compare_relationships(unnamed_b, unnamed_a), 1)

    def test_relationship_without_related_element_sorts_last(self):
        present = Relationship("CONTAINS", Element("SPDXRef-1", "x"))
        missing = Relationship("CONTAINS", None)
        self.assertEqual(compare_relationships(present, missing), -1)
        self.assertEqual(compare_relationships(missing, present), 1)
        self.assertEqual(compare_relationships(missing, Relationship("CONTAINS", None)), 0)

    def test_external_refs_namespace_then_checksum(self):
        a = ExternalDocumentRef("DocumentRef-a", "https://a", Checksum("SHA1", "bb"))
        b = ExternalDocumentRef("DocumentRef-b", "https://a", Checksum("SHA1", "aa"))
        c = ExternalDocumentRef("DocumentRef-c", "https://a", None)
        d = ExternalDocumentRef("DocumentRef-d", "https://0", None)
        self.assertEqual(sort_records([a, b, c, d], compare_external_refs), [d, b, a, c])

    def test_extracted_license_missing_text_first(self):
        a = ExtractedLicense("LicenseRef-1", "some text")
        b = ExtractedLicense("LicenseRef-2", None)
        self.assertEqual(sort_records([a, b], compare_extracted_licenses), [b, a])

    def test_packages_by_name_then_version(self):
        a = SpdxPackage("SPDXRef-1", "libfoo", "2.0")
        b = SpdxPackage("SPDXRef-2", "libfoo", "1.0")
        c = SpdxPackage("SPDXRef-3", "libbar", "9.0")
        d = SpdxPackage("SPDXRef-4", "libfoo", None)
        self.assertEqual(sort_records([a, b, c, d], compare_packages), [c, d, b, a])
        self.assertEqual(compare_packages(SpdxPackage("SPDXRef-5", "libfoo", "1.0"), b), 0)

    def test_package_without_name_raises(self):
        with self.assertRaises(RecordError):
            compare_packages(SpdxPackage("SPDXRef-1", None), SpdxPackage("SPDXRef-2", "libfoo"))

    def test_snippets_by_name_then_file(self):
        a = SpdxSnippet("SPDXRef-1", "loop", Element("SPDXRef-f2", "b.c"))
        b = SpdxSnippet("SPDXRef-2", "loop", Element("SPDXRef-f1", "./a.c"))
        c = SpdxSnippet("SPDXRef-3", None)
        self.assertEqual(sort_records([a, b, c], compare_snippets), [c, b, a])
        self.assertEqual(compare_snippets(b, SpdxSnippet("SPDXRef-9", "loop", Element("SPDXRef-x", "a.c"))), 0)

    def test_creators_plain_string_order(self):
        self.assertEqual(compare_creators("Tool: a", "Person: b"), 1)
        self.assertEqual(compare_creators("Tool: a", "Tool: a"), 0)


if __name__ == "__main__":
    unittest.main()
