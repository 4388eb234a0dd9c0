"""
Base class for every entity of the genome model.

All coordinates are 0-based. ``end`` is the last position covered by the interval, so an interval always covers
``end - start + 1`` positions. Entities refer to their parent by ID only; parents own their children.
"""
from abc import ABC, abstractmethod
from typing import Optional, Dict, Any

from inscripta.featurecantor.exc import InvalidCoordinatesError
from inscripta.featurecantor.location.strand import Strand


class GenomicInterval(ABC):
    """A stranded interval with an identifier, situated on a chromosome."""

    def __init__(self, start: int, end: int, strand: Strand, id: Optional[str], parent_id: Optional[str] = None):
        if end < start:
            raise InvalidCoordinatesError(f"{type(self).__name__} {id} has end {end} before start {start}")
        self.start = start
        self.end = end
        self.strand = strand
        self.id = id
        self.parent_id = parent_id

    def __repr__(self):
        return f"{type(self).__name__}({self.id}, {self.start}-{self.end}:{self.strand})"

    def __lt__(self, other: "GenomicInterval"):
        return (self.start, self.end) < (other.start, other.end)

    @property
    def size(self) -> int:
        return self.end - self.start + 1

    @property
    def is_complement(self) -> bool:
        return self.strand == Strand.MINUS

    def intersects(self, start: int, end: int) -> bool:
        """Does this interval share at least one position with ``start..end``?"""
        return self.start <= end and start <= self.end

    def includes(self, start: int, end: int) -> bool:
        """Is ``start..end`` entirely within this interval?"""
        return self.start <= start and end <= self.end

    def shift(self, offset: int):
        """Move this interval by ``offset`` positions."""
        self.start += offset
        self.end += offset

    def expand_to(self, start: int, end: int) -> bool:
        """Widen this interval so that it covers ``start..end``. Returns True if the interval changed."""
        new_start = min(self.start, start)
        new_end = max(self.end, end)
        changed = (new_start, new_end) != (self.start, self.end)
        self.start, self.end = new_start, new_end
        return changed

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Dictionary representation, loadable by the matching model in :mod:`featurecantor.io.models`."""
