"""
Steps run after the features of a record set (or of every record set) have been resolved: filling in exons for
transcripts that only have CDS pieces, attaching exon sequences, and widening transcripts and genes to cover their
children.
"""
import logging

from Bio.Seq import reverse_complement

from inscripta.featurecantor.factory.registry import ModelRegistry
from inscripta.featurecantor.gene.transcript import Exon
from inscripta.featurecantor.location.strand import Strand

logger = logging.getLogger(__name__)


def infer_exons_from_cds(registry: ModelRegistry, chromosome_id: str) -> int:
    """Transcripts that have CDS pieces but no exons get one exon per CDS piece, ranked in input order.

    Prokaryotic feature tables in particular list no mRNA, so the CDS is the only record of the transcribed region.

    Returns:
        Number of exons created.
    """
    count = 0
    for transcript in registry.transcripts_on(chromosome_id):
        if transcript.exons or not transcript.cds:
            continue
        for rank, cds in enumerate(transcript.cds, start=1):
            transcript.add_exon(Exon(cds.start, cds.end, cds.strand, f"{transcript.id}_{rank}", transcript.id, rank))
            count += 1
    return count


def slice_sequence(sequence: str, start: int, end: int) -> str:
    """``sequence[start..end]``, with ``end`` inclusive. A negative start wraps around the end of the sequence."""
    if start < 0:
        return sequence[start % len(sequence) :] + sequence[: end + 1]
    return sequence[start : end + 1]


def attach_exon_sequences(registry: ModelRegistry, chromosome_id: str, sequence: str) -> int:
    """Attach sequence to every exon on a chromosome, reverse complemented for exons on the minus strand.

    Returns:
        Number of exons that received a sequence.
    """
    count = 0
    for transcript in registry.transcripts_on(chromosome_id):
        for exon in transcript.exons:
            exon_seq = slice_sequence(sequence, exon.start, exon.end)
            if exon.strand == Strand.MINUS:
                exon_seq = reverse_complement(exon_seq)
            exon.sequence = exon_seq
            count += 1
    return count


def adjust_boundaries(registry: ModelRegistry) -> int:
    """Widen transcripts to cover their exons and CDS pieces, then genes to cover their transcripts.

    Returns:
        Number of transcripts and genes that changed.
    """
    changed = 0
    for gene in registry.genes.values():
        for transcript in gene.transcripts:
            pieces = transcript.exons + transcript.cds
            if pieces and transcript.expand_to(min(p.start for p in pieces), max(p.end for p in pieces)):
                changed += 1
            if gene.expand_to(transcript.start, transcript.end):
                changed += 1
    logger.debug("Adjusted boundaries of %d genes and transcripts", changed)
    return changed
