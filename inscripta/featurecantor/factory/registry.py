"""
Per-import registries. A :class:`ModelRegistry` is created when an import starts, filled during the pass over the
record sets, handed to the genome index when the import ends, and then discarded.
"""
from typing import Dict, List, Optional, Iterator

from inscripta.featurecantor.exc import ValidationException
from inscripta.featurecantor.gene.chromosome import Chromosome
from inscripta.featurecantor.gene.collections import GenomeIndex
from inscripta.featurecantor.gene.gene import Gene
from inscripta.featurecantor.gene.interval import GenomicInterval
from inscripta.featurecantor.gene.transcript import Transcript


class ModelRegistry:
    """Genes, transcripts and chromosomes by ID, in creation order, plus the transcript to protein sequence map."""

    def __init__(self):
        self.chromosomes: Dict[str, Chromosome] = {}
        self.genes: Dict[str, Gene] = {}
        self.transcripts: Dict[str, Transcript] = {}
        self.protein_by_transcript_id: Dict[str, Optional[str]] = {}

    def __repr__(self):
        return (
            f"ModelRegistry(chromosomes={len(self.chromosomes)}, genes={len(self.genes)}, "
            f"transcripts={len(self.transcripts)})"
        )

    def add_chromosome(self, chromosome: Chromosome):
        if chromosome.id in self.chromosomes:
            raise ValidationException(f"Chromosome {chromosome.id} was already created")
        self.chromosomes[chromosome.id] = chromosome

    def add_gene(self, gene: Gene):
        if gene.id in self.genes:
            raise ValidationException(f"Gene {gene.id} was already created")
        self.genes[gene.id] = gene

    def add_transcript(self, transcript: Transcript):
        """Register a transcript and attach it to the gene that owns it."""
        if transcript.id in self.transcripts:
            raise ValidationException(f"Transcript {transcript.id} was already created")
        gene = self.genes.get(transcript.gene_id)
        if gene is None:
            raise ValidationException(f"Transcript {transcript.id} refers to unknown gene {transcript.gene_id}")
        gene.add_transcript(transcript)
        self.transcripts[transcript.id] = transcript

    def find_gene(self, gene_id: Optional[str]) -> Optional[Gene]:
        if gene_id is None:
            return None
        return self.genes.get(gene_id)

    def find_transcript(self, transcript_id: Optional[str]) -> Optional[Transcript]:
        if transcript_id is None:
            return None
        return self.transcripts.get(transcript_id)

    def gene_of(self, transcript: Transcript) -> Gene:
        return self.genes[transcript.gene_id]

    def transcripts_on(self, chromosome_id: str) -> List[Transcript]:
        return [tx for gene in self.genes.values() if gene.chromosome_id == chromosome_id for tx in gene.transcripts]

    def iter_entities(self) -> Iterator[GenomicInterval]:
        """Every entity, parents before children, in creation order."""
        for chromosome in self.chromosomes.values():
            yield chromosome
            for gene in self.genes.values():
                if gene.chromosome_id != chromosome.id:
                    continue
                yield gene
                for transcript in gene.transcripts:
                    yield transcript
                    yield from transcript.exons
                    yield from transcript.cds

    def register_with(self, index: GenomeIndex) -> int:
        """Hand every entity to ``index``, once each. Returns the number of entities registered."""
        count = 0
        for entity in self.iter_entities():
            index.register(entity)
            count += 1
        return count
