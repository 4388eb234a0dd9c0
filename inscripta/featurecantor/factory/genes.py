"""
Gene resolution and the mRNA path of transcript building.

Genes are looked up by identifier. When a feature carries no identifier, one is synthesized from the feature's
normalized coordinates (``Gene_<start>_<end>``), so a missing identity degrades to a coordinate-based one instead of
failing.
"""
import logging
import warnings
from typing import Optional

from inscripta.featurecantor.exc import MissingTranscriptIdError
from inscripta.featurecantor.factory.registry import ModelRegistry
from inscripta.featurecantor.gene.chromosome import Chromosome
from inscripta.featurecantor.gene.circular import correct_if_circular
from inscripta.featurecantor.gene.gene import Gene
from inscripta.featurecantor.gene.transcript import Transcript, Exon
from inscripta.featurecantor.io.exc import GeneNotFoundWarning, DuplicateTranscriptWarning
from inscripta.featurecantor.io.models import FeatureRecord
from inscripta.featurecantor.location.coordinates import normalize
from inscripta.featurecantor.location.strand import Strand

logger = logging.getLogger(__name__)


def synthesized_gene_id(start: int, end: int) -> str:
    return f"Gene_{start}_{end}"


def synthesized_transcript_id(start: int, end: int) -> str:
    return f"Tr_{start}_{end}"


def gene_id(record: FeatureRecord, start: int, end: int) -> str:
    """Gene ID of a feature; falls back to an ID synthesized from the normalized coordinates."""
    return record.gene_id or synthesized_gene_id(start, end)


def gene_name(record: FeatureRecord, start: int, end: int) -> str:
    """Gene name of a feature; falls back to the same synthesized string as :meth:`gene_id()`."""
    return record.gene_name or synthesized_gene_id(start, end)


class GeneResolver:
    """Finds genes by identity, creating them when they do not exist yet."""

    def __init__(self, registry: ModelRegistry):
        self.registry = registry

    def find_or_create_gene(self, record: FeatureRecord, chromosome: Chromosome, warn: bool = False) -> Gene:
        """Find the gene a feature refers to, or create it.

        An existing gene is returned unchanged; its coordinates and name are not updated.

        Args:
            record: A GENE, MRNA or CDS feature.
            chromosome: The chromosome of the current record set.
            warn: Emit a :class:`GeneNotFoundWarning` if the gene has to be created. Used when the feature is not a
                GENE feature, so the gene it refers to was expected to exist.

        Returns:
            The registered :class:`Gene`.
        """
        start, end = normalize(record.start, record.end)
        gid = gene_id(record, start, end)
        gene = self.registry.find_gene(gid)
        if gene is None:
            gene = Gene(start, end, record.strand, gid, gene_name(record, start, end), chromosome.id)
            self.registry.add_gene(gene)
            if warn:
                warnings.warn(GeneNotFoundWarning(f"Gene '{gid}' not found: created from feature {record}"))
        return gene


class TranscriptBuilder:
    """Builds transcripts and their exons from mRNA features."""

    def __init__(self, registry: ModelRegistry, gene_resolver: GeneResolver):
        self.registry = registry
        self.gene_resolver = gene_resolver

    def add_mrna(self, record: FeatureRecord, chromosome: Chromosome, latest_gene: Optional[Gene]) -> Transcript:
        """Build a transcript from an mRNA feature.

        The transcript belongs to the latest gene if that gene intersects the feature; otherwise its gene is
        resolved from the feature itself. Each segment of a multi-segment feature becomes one exon, ranked 1..N in
        input order.

        Args:
            record: An MRNA feature.
            chromosome: The chromosome of the current record set.
            latest_gene: The gene of the latest-context cursor, if any.

        Returns:
            The new :class:`Transcript`, or the existing one if its ID was already taken.

        Raises:
            MissingTranscriptIdError: if the feature has no transcript ID.
        """
        transcript_id = record.transcript_id
        if transcript_id is None:
            raise MissingTranscriptIdError(f"mRNA feature has no transcript ID: {record}")

        existing = self.registry.find_transcript(transcript_id)
        if existing is not None:
            warnings.warn(
                DuplicateTranscriptWarning(f"Transcript '{transcript_id}' found twice; ignoring feature {record}")
            )
            return existing

        start, end = normalize(record.start, record.end)
        if latest_gene is not None and latest_gene.intersects(start, end):
            gene = latest_gene
        else:
            gene = self.gene_resolver.find_or_create_gene(record, chromosome, warn=True)

        transcript = Transcript(start, end, record.strand, transcript_id, gene.id)
        if record.has_multiple_coordinates:
            for rank, coordinates in enumerate(record, start=1):
                exon_start, exon_end = normalize(coordinates.start, coordinates.end)
                strand = Strand.from_complement(coordinates.complement)
                transcript.add_exon(Exon(exon_start, exon_end, strand, f"{transcript.id}_{rank}", transcript.id, rank))

        self.registry.add_transcript(transcript)
        correct_if_circular(transcript, chromosome, transcript.exons)
        logger.debug("Transcript %s: %d exons, gene %s", transcript.id, len(transcript.exons), gene.id)
        return transcript
