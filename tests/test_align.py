import itertools
import random
import unittest

from sbomdiff.align import Aligner, AlignmentRow, align
from sbomdiff.errors import RecordError, UnsortedSequenceError
from sbomdiff.models import Annotation, SpdxFile
from sbomdiff.normalize import normalize_file_name
from sbomdiff.ordering import compare_annotations, compare_files, sort_records


def _cmp(a, b):
    return (a > b) - (a < b)


def _eq(a, b):
    return a == b


class AlignTests(unittest.TestCase):
    def _file(self, name, comment=""):
        return SpdxFile(spdx_id=f"SPDXRef-{name}", name=name, comment=comment)

    def test_scenario_two_documents_partial_overlap(self):
        doc1 = [self._file("./a.c", "same"), self._file("./b.c")]
        doc2 = [self._file("./a.c", "same"), self._file("./c.c")]
        rows = list(align([doc1, doc2], compare_files, lambda x, y: x.comment == y.comment))
        self.assertEqual(len(rows), 3)
        self.assertEqual([normalize_file_name(r.key.name) for r in rows], ["./a.c", "./b.c", "./c.c"])
        self.assertTrue(rows[0].equal)
        self.assertEqual(rows[1].present, [0])
        self.assertFalse(rows[1].equal)
        self.assertEqual(rows[2].present, [1])
        self.assertFalse(rows[2].equal)

    def test_scenario_raw_paths_align_into_one_row(self):
        rows = list(align([[self._file("src\\a.c")], [self._file("./src/a.c")]], compare_files, lambda x, y: True))
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0].present, [0, 1])
        self.assertTrue(rows[0].equal)

    def test_scenario_one_empty_document(self):
        seqs = [["a", "b"], [], ["a", "c"]]
        rows = list(align(seqs, _cmp, _eq))
        self.assertEqual(len(rows), 3)
        for row in rows:
            self.assertFalse(row.is_present(1))
            self.assertFalse(row.equal)

    def test_scenario_all_empty(self):
        aligner = Aligner([[], [], []], _cmp, _eq)
        self.assertTrue(aligner.exhausted())
        self.assertIsNone(aligner.step())
        self.assertEqual(list(align([[], []], _cmp, _eq)), [])

    def test_scenario_annotation_dates_left_to_predicate(self):
        a = Annotation("Person: A", "REVIEW", "ok", date="2020-01-01T00:00:00Z")
        b = Annotation("Person: A", "REVIEW", "ok", date="2024-01-01T00:00:00Z")
        ignore_dates = list(align([[a], [b]], compare_annotations, lambda x, y: x.comment == y.comment))
        self.assertEqual(len(ignore_dates), 1)
        self.assertTrue(ignore_dates[0].equal)
        with_dates = list(align([[a], [b]], compare_annotations, lambda x, y: x.date == y.date))
        self.assertFalse(with_dates[0].equal)

    def test_no_documents(self):
        self.assertIsNone(Aligner([], _cmp, _eq).step())

    def test_single_document_rows_are_equal(self):
        rows = list(align([["a", "b"]], _cmp, _eq))
        self.assertEqual([r.values for r in rows], [("a",), ("b",)])
        self.assertTrue(all(r.equal for r in rows))

    def test_duplicate_keys_consumed_one_at_a_time(self):
        rows = list(align([["a", "a", "b"], ["a", "b"]], _cmp, _eq))
        self.assertEqual([r.values for r in rows], [("a", "a"), ("a", None), ("b", "b")])

    def test_equal_compares_against_first_present_record(self):
        calls = []

        def equals(x, y):
            calls.append((x, y))
            return True

        rows = list(align([[1], [1], [1]], _cmp, equals))
        self.assertTrue(rows[0].equal)
        self.assertEqual(calls, [(1, 1), (1, 1)])

    def test_equals_not_called_when_slot_absent(self):
        def equals(x, y):
            raise AssertionError("should not be called")

        rows = list(align([["a"], ["b"]], _cmp, equals))
        self.assertEqual(len(rows), 2)

    def test_unsorted_input_rejected_before_first_row(self):
        with self.assertRaises(UnsortedSequenceError) as ctx:
            align([["a", "b"], ["c", "a"]], _cmp, _eq)
        self.assertEqual(ctx.exception.doc_index, 1)
        self.assertEqual(ctx.exception.position, 1)

    def test_predicate_failure_propagates_unchanged(self):
        def equals(x, y):
            raise RecordError("bad record")

        aligner = Aligner([["a"], ["a"]], _cmp, equals)
        with self.assertRaises(RecordError):
            aligner.step()
        self.assertEqual(aligner.cursors, (0, 0))

    def test_comparator_failure_propagates_unchanged(self):
        seqs = [[Annotation("A", "REVIEW", "x")], [Annotation(None, "REVIEW", "x")]]
        aligner = Aligner(seqs, compare_annotations, _eq, check_order=False)
        with self.assertRaises(RecordError):
            list(aligner)

    def test_cursors_advance_monotonically(self):
        aligner = Aligner([["a", "c"], ["b"]], _cmp, _eq)
        seen = [aligner.cursors]
        while aligner.step() is not None:
            seen.append(aligner.cursors)
        self.assertEqual(seen, [(0, 0), (1, 0), (1, 1), (2, 1)])
        self.assertTrue(aligner.exhausted())

    def test_row_is_immutable(self):
        row = AlignmentRow(("a", None), False)
        with self.assertRaises(Exception):
            row.equal = True

    def test_merge_properties_on_random_inputs(self):
        rng = random.Random(1234)
        for _ in range(200):
            docs = rng.randint(1, 5)
            seqs = [sorted(rng.choice("abcdefg") for _ in range(rng.randint(0, 8))) for _ in range(docs)]
            rows = list(align(seqs, _cmp, _eq))
            keys = [row.key for row in rows]
            # ordering
            self.assertEqual(keys, sorted(keys))
            # completeness
            for doc_index, seq in enumerate(seqs):
                emitted = [row.values[doc_index] for row in rows if row.is_present(doc_index)]
                self.assertEqual(emitted, seq)
            # exhaustion
            self.assertLessEqual(len(rows), sum(len(s) for s in seqs))
            # equal-row invariant
            for row in rows:
                all_present = all(v is not None for v in row.values)
                self.assertEqual(row.equal, all_present and len(set(row.values)) == 1)

    def test_interleaved_documents(self):
        seqs = [sort_records([self._file(n) for n in names], compare_files) for names in (["c", "a"], ["b"], ["a", "b", "d"])]
        rows = list(align(seqs, compare_files, lambda x, y: True))
        layout = [tuple(v is not None for v in r.values) for r in rows]
        self.assertEqual(
            layout,
            [(True, False, True), (False, True, True), (True, False, False), (False, False, True)],
        )
        self.assertEqual([r.equal for r in rows], [False, False, False, False])
        self.assertEqual(list(itertools.chain.from_iterable(r.present for r in rows)), [0, 2, 1, 2, 0, 2])


if __name__ == "__main__":
    unittest.main()
