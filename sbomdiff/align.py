"""D-way merge of independently sorted record sequences.

Every comparison category feeds one sorted sequence per document into an
``Aligner``. Each ``step()`` takes the smallest current record across all
documents, pulls every record comparing equal to it into one row, and
advances those documents' cursors. A slot is ``None`` when its document has
no record for the row's key.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, List, Optional, Sequence, Tuple, TypeVar

from .errors import UnsortedSequenceError

T = TypeVar("T")
Comparator = Callable[[Any, Any], int]
EqualsFn = Callable[[Any, Any], bool]


@dataclass(frozen=True)
class AlignmentRow(Generic[T]):
    values: Tuple[Optional[T], ...]
    equal: bool

    @property
    def key(self) -> T:
        """First present record; all present records share its identity key."""
        return next(value for value in self.values if value is not None)

    @property
    def present(self) -> List[int]:
        return [i for i, value in enumerate(self.values) if value is not None]

    def is_present(self, doc_index: int) -> bool:
        return self.values[doc_index] is not None


def check_sorted(sequences: Sequence[Sequence[T]], compare: Comparator) -> None:
    for doc_index, sequence in enumerate(sequences):
        for position in range(1, len(sequence)):
            if compare(sequence[position - 1], sequence[position]) > 0:
                raise UnsortedSequenceError(doc_index, position)


class Aligner(Generic[T]):
    """Iterator of ``AlignmentRow`` over ``len(sequences)`` sorted sequences.

    The sequences are borrowed, never copied or mutated. Exceptions raised by
    ``compare`` or ``equals`` propagate out of ``step()`` as they are; the
    cursors of the failed step are not advanced.
    """

    def __init__(
        self,
        sequences: Sequence[Sequence[T]],
        compare: Comparator,
        equals: EqualsFn,
        check_order: bool = True,
    ) -> None:
        self._sequences = sequences
        self._compare = compare
        self._equals = equals
        self._cursors = [0] * len(sequences)
        if check_order:
            check_sorted(sequences, compare)

    @property
    def cursors(self) -> Tuple[int, ...]:
        return tuple(self._cursors)

    def exhausted(self) -> bool:
        return all(cursor >= len(seq) for cursor, seq in zip(self._cursors, self._sequences))

    def step(self) -> Optional[AlignmentRow[T]]:
        """Emit the next row, or ``None`` once every sequence is consumed."""
        candidates = [
            (doc_index, seq[cursor])
            for doc_index, (cursor, seq) in enumerate(zip(self._cursors, self._sequences))
            if cursor < len(seq)
        ]
        if not candidates:
            return None

        min_index, minimum = candidates[0]
        for doc_index, record in candidates[1:]:
            if self._compare(minimum, record) > 0:
                min_index, minimum = doc_index, record

        values: List[Optional[T]] = [None] * len(self._sequences)
        for doc_index, record in candidates:
            if doc_index == min_index or self._compare(minimum, record) == 0:
                values[doc_index] = record

        equal = self._all_equal(values)
        for doc_index, value in enumerate(values):
            if value is not None:
                self._cursors[doc_index] += 1
        return AlignmentRow(tuple(values), equal)

    def _all_equal(self, values: List[Optional[T]]) -> bool:
        if any(value is None for value in values):
            return False
        reference = values[0]
        return all(self._equals(reference, value) for value in values[1:])

    def __iter__(self) -> Iterator[AlignmentRow[T]]:
        return self

    def __next__(self) -> AlignmentRow[T]:
        row = self.step()
        if row is None:
            raise StopIteration
        return row


def align(
    sequences: Sequence[Sequence[T]],
    compare: Comparator,
    equals: EqualsFn,
) -> Aligner[T]:
    return Aligner(sequences, compare, equals)
