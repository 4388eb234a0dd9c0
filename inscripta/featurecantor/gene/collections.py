"""
Genome index. Once an import finishes, every chromosome, gene, transcript, exon and CDS piece is handed to a
:class:`GenomeIndex`, exactly once, in creation order. The index is append-only for the duration of an import.

:class:`IntervalIndex` is the default in-memory implementation, which supports lookups by identifier and range
queries by position.
"""
import bisect
from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Dict, List, Iterator, Optional, Set, Type

from inscripta.featurecantor.exc import DuplicateRegistrationError
from inscripta.featurecantor.gene.chromosome import Chromosome
from inscripta.featurecantor.gene.gene import Gene
from inscripta.featurecantor.gene.interval import GenomicInterval
from inscripta.featurecantor.gene.transcript import Transcript, Exon, Cds


class GenomeIndex(ABC):
    """Registration contract for the consumer of a built genome model."""

    @abstractmethod
    def register(self, entity: GenomicInterval):
        """Index one entity by coordinate range and by ID. Each entity is registered once."""


class IntervalIndex(GenomeIndex):
    """Indexes entities by ID, and per chromosome in order of start position."""

    def __init__(self):
        self._by_id: Dict[str, List[GenomicInterval]] = defaultdict(list)
        self._starts: Dict[str, List[int]] = defaultdict(list)
        self._intervals: Dict[str, List[GenomicInterval]] = defaultdict(list)
        self._registered: Set[int] = set()
        self._chromosome_of: Dict[str, str] = {}

    def __len__(self):
        return len(self._registered)

    def __iter__(self) -> Iterator[GenomicInterval]:
        for intervals in self._intervals.values():
            yield from intervals

    def register(self, entity: GenomicInterval):
        if id(entity) in self._registered:
            raise DuplicateRegistrationError(f"{entity} was already registered")
        chromosome_id = self._find_chromosome_id(entity)
        self._registered.add(id(entity))
        self._by_id[entity.id].append(entity)
        if isinstance(entity, (Chromosome, Gene, Transcript)):
            self._chromosome_of[entity.id] = chromosome_id
        position = bisect.bisect_right(self._starts[chromosome_id], entity.start)
        self._starts[chromosome_id].insert(position, entity.start)
        self._intervals[chromosome_id].insert(position, entity)

    def _find_chromosome_id(self, entity: GenomicInterval) -> Optional[str]:
        """Walk parent IDs up to the chromosome. Parents are always registered before their children."""
        if isinstance(entity, Chromosome):
            return entity.id
        return self._chromosome_of.get(entity.parent_id)

    def get(self, entity_id: str, entity_type: Optional[Type[GenomicInterval]] = None) -> List[GenomicInterval]:
        """All entities registered under ``entity_id``, optionally restricted to one type.

        CDS pieces of a transcript share an ID, so this returns a list.
        """
        entities = self._by_id.get(entity_id, [])
        if entity_type is None:
            return list(entities)
        return [entity for entity in entities if isinstance(entity, entity_type)]

    def query_by_position(
        self,
        chromosome_id: str,
        start: int,
        end: int,
        entity_type: Optional[Type[GenomicInterval]] = None,
    ) -> List[GenomicInterval]:
        """Entities on ``chromosome_id`` that intersect ``start..end`` (0-based, ``end`` inclusive).

        Args:
            chromosome_id: Chromosome to query.
            start: 0-based start.
            end: 0-based end, inclusive.
            entity_type: Optional type to restrict results to, such as :class:`Gene` or :class:`Exon`.

        Returns:
            Matching entities sorted by start position.
        """
        # nothing that starts after the query end can intersect it
        last = bisect.bisect_right(self._starts.get(chromosome_id, []), end)
        hits = []
        for entity in self._intervals.get(chromosome_id, [])[:last]:
            if not entity.intersects(start, end):
                continue
            if entity_type is not None and not isinstance(entity, entity_type):
                continue
            hits.append(entity)
        return hits

    def genes(self) -> List[Gene]:
        return [entity for entity in self if isinstance(entity, Gene)]

    def exons(self) -> List[Exon]:
        return [entity for entity in self if isinstance(entity, Exon)]

    def cds(self) -> List[Cds]:
        return [entity for entity in self if isinstance(entity, Cds)]
