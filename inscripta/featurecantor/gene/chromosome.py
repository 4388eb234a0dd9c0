from typing import Optional, Dict, Any

from inscripta.featurecantor.gene.interval import GenomicInterval
from inscripta.featurecantor.location.strand import Strand


class Chromosome(GenomicInterval):
    """A chromosome. Exactly one exists per record set; it owns the coordinate space of everything in that set."""

    def __init__(
        self,
        start: int,
        end: int,
        name: str,
        genome_id: Optional[str] = None,
        is_circular: bool = False,
    ):
        super().__init__(start, end, Strand.PLUS, name, parent_id=genome_id)
        self.is_circular = is_circular
        self.sequence: Optional[str] = None

    def __repr__(self):
        topology = "circular" if self.is_circular else "linear"
        return f"Chromosome({self.id}, {self.start}-{self.end}, {topology})"

    @property
    def name(self) -> str:
        return self.id

    @property
    def genome_id(self) -> Optional[str]:
        return self.parent_id

    def to_dict(self) -> Dict[str, Any]:
        return dict(
            chromosome_id=self.id,
            genome_id=self.genome_id,
            start=self.start,
            end=self.end,
            is_circular=self.is_circular,
            sequence_length=len(self.sequence) if self.sequence is not None else None,
        )
