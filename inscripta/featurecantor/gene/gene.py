from typing import List, Dict, Any, Iterator

from inscripta.featurecantor.exc import ValidationException
from inscripta.featurecantor.gene.interval import GenomicInterval
from inscripta.featurecantor.gene.transcript import Transcript
from inscripta.featurecantor.location.strand import Strand


class Gene(GenomicInterval):
    """A gene. Owns its transcripts; refers to its chromosome by name."""

    def __init__(self, start: int, end: int, strand: Strand, gene_id: str, gene_name: str, chromosome_id: str):
        super().__init__(start, end, strand, gene_id, parent_id=chromosome_id)
        self.name = gene_name
        self.transcripts: List[Transcript] = []

    def __repr__(self):
        return f"Gene({self.id}, {self.start}-{self.end}:{self.strand}, name={self.name})"

    def __iter__(self) -> Iterator[Transcript]:
        yield from self.transcripts

    @property
    def chromosome_id(self) -> str:
        return self.parent_id

    @property
    def is_protein_coding(self) -> bool:
        return any(tx.protein_coding for tx in self.transcripts)

    def add_transcript(self, transcript: Transcript):
        if transcript.gene_id != self.id:
            raise ValidationException(f"Transcript {transcript.id} belongs to gene {transcript.gene_id}, not {self.id}")
        self.transcripts.append(transcript)

    def to_dict(self) -> Dict[str, Any]:
        return dict(
            gene_id=self.id,
            gene_name=self.name,
            chromosome_id=self.chromosome_id,
            start=self.start,
            end=self.end,
            strand=self.strand.name,
            transcripts=[tx.to_dict() for tx in self.transcripts],
        )
