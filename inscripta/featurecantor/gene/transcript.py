"""
Transcripts and their two independent sets of sub-intervals: exons, built from mRNA features, and CDS pieces, built
from CDS features. A transcript may have either or both; they are reconciled when CDS features are matched to
transcripts, never merged structurally.
"""
from typing import List, Optional, Dict, Any

from inscripta.featurecantor.exc import ValidationException
from inscripta.featurecantor.gene.interval import GenomicInterval
from inscripta.featurecantor.location.strand import Strand


class Exon(GenomicInterval):
    """An exon. ``rank`` is its 1-based ordinal position within the transcript."""

    def __init__(self, start: int, end: int, strand: Strand, exon_id: str, transcript_id: str, rank: int):
        super().__init__(start, end, strand, exon_id, parent_id=transcript_id)
        self.rank = rank
        self.sequence: Optional[str] = None

    def __repr__(self):
        return f"Exon({self.id}, {self.start}-{self.end}:{self.strand}, rank={self.rank})"

    @property
    def transcript_id(self) -> str:
        return self.parent_id

    def to_dict(self) -> Dict[str, Any]:
        return dict(
            exon_id=self.id,
            start=self.start,
            end=self.end,
            strand=self.strand.name,
            rank=self.rank,
            sequence=self.sequence,
        )


class Cds(GenomicInterval):
    """One piece of a coding sequence. The full CDS of a transcript is the ordered list of its pieces."""

    def __init__(self, start: int, end: int, strand: Strand, cds_id: str, transcript_id: str):
        super().__init__(start, end, strand, cds_id, parent_id=transcript_id)

    @property
    def transcript_id(self) -> str:
        return self.parent_id

    def to_dict(self) -> Dict[str, Any]:
        return dict(cds_id=self.id, start=self.start, end=self.end, strand=self.strand.name)


class Transcript(GenomicInterval):
    """A transcript, owned by exactly one gene."""

    def __init__(self, start: int, end: int, strand: Strand, transcript_id: str, gene_id: str):
        super().__init__(start, end, strand, transcript_id, parent_id=gene_id)
        self.exons: List[Exon] = []
        self.cds: List[Cds] = []
        self.protein_coding = False
        self.ribosomal_slippage = False

    def __repr__(self):
        return (
            f"Transcript({self.id}, {self.start}-{self.end}:{self.strand}, "
            f"exons={len(self.exons)}, cds={len(self.cds)})"
        )

    @property
    def gene_id(self) -> str:
        return self.parent_id

    @property
    def cds_id(self) -> str:
        return f"CDS_{self.id}"

    def add_exon(self, exon: Exon):
        if exon.transcript_id != self.id:
            raise ValidationException(f"Exon {exon.id} belongs to transcript {exon.transcript_id}, not {self.id}")
        if self.exons and exon.rank <= self.exons[-1].rank:
            raise ValidationException(f"Exon rank {exon.rank} does not follow rank {self.exons[-1].rank}")
        self.exons.append(exon)

    def add_cds(self, cds: Cds):
        if cds.transcript_id != self.id:
            raise ValidationException(f"CDS {cds.id} belongs to transcript {cds.transcript_id}, not {self.id}")
        self.cds.append(cds)

    def sorted_exons(self) -> List[Exon]:
        return sorted(self.exons)

    def sorted_cds(self) -> List[Cds]:
        return sorted(self.cds)

    def find_exon(self, start: int, end: int) -> Optional[Exon]:
        """Returns the exon that fully includes ``start..end``, if there is one."""
        for exon in self.exons:
            if exon.includes(start, end):
                return exon
        return None

    def to_dict(self) -> Dict[str, Any]:
        return dict(
            transcript_id=self.id,
            gene_id=self.gene_id,
            start=self.start,
            end=self.end,
            strand=self.strand.name,
            protein_coding=self.protein_coding,
            ribosomal_slippage=self.ribosomal_slippage,
            exons=[exon.to_dict() for exon in self.exons],
            cds=[cds.to_dict() for cds in self.cds],
        )
