"""
CDS resolution: deciding which transcript a CDS feature belongs to, then attaching its pieces.

Identity is resolved in three steps; the first that succeeds wins:

1. *Latest context*: if the CDS names the latest gene, the first transcript built for that gene in the current
   context that has no CDS yet and whose coordinates are compatible with the CDS.
2. *Explicit ID*: an existing transcript with the CDS's transcript ID.
3. *Fallback*: a gene (the latest one if the CDS is within it and names it, otherwise resolved from the CDS itself)
   and a transcript with the CDS's transcript ID, or ``Tr_<start>_<end>``, created if needed.

Step 3 never fails, so every CDS ends up attached to some transcript.

Coordinate compatibility between a multi-segment CDS and a transcript that has exons follows the exon-matching
rule of :meth:`cds_matches_transcript_exons()`. Feature tables often list a CDS whose segments are the mRNA's exons
with the UTRs trimmed off, so only the start of the first segment and the end of the last may differ from the
exons they fall in.
"""
import logging
from typing import List, Optional, Sequence, Tuple

from inscripta.featurecantor.factory.cursor import LatestContext
from inscripta.featurecantor.factory.genes import GeneResolver, synthesized_transcript_id
from inscripta.featurecantor.factory.registry import ModelRegistry
from inscripta.featurecantor.gene.chromosome import Chromosome
from inscripta.featurecantor.gene.circular import correct_if_circular
from inscripta.featurecantor.gene.gene import Gene
from inscripta.featurecantor.gene.transcript import Transcript, Exon, Cds
from inscripta.featurecantor.io.models import FeatureRecord
from inscripta.featurecantor.location.coordinates import normalize

logger = logging.getLogger(__name__)


def cds_segments(record: FeatureRecord) -> List[Tuple[int, int]]:
    """Normalized segments of a CDS feature, sorted by start position."""
    return sorted(normalize(coordinates.start, coordinates.end) for coordinates in record)


def cds_matches_transcript_exons(segments: Sequence[Tuple[int, int]], exons: Sequence[Exon]) -> bool:
    """Do the segments of a CDS fit in the exons of a transcript?

    Both lists must be sorted by start position.

    * A CDS cannot have more segments than the transcript has exons.
    * A single segment must be included in one exon.
    * Otherwise, exons that end before the first segment are skipped. The first segment may start after its exon
      starts, but must end where it ends. Interior segments must match their exons exactly, one exon per segment.
      The last segment must start where its exon starts, and may end before it ends.

    Any mismatch means the CDS does not belong to this transcript; it is never an error.

    Args:
        segments: ``(start, end)`` pairs of the CDS, normalized and sorted.
        exons: The transcript's exons, sorted.

    Returns:
        True if every segment fits.
    """
    if len(segments) > len(exons):
        return False

    if len(segments) == 1:
        start, end = segments[0]
        return any(exon.includes(start, end) for exon in exons)

    exon_idx = 0
    exon = exons[exon_idx]
    first_start, first_end = segments[0]
    while first_start > exon.end:
        exon_idx += 1
        if exon_idx >= len(exons):
            return False
        exon = exons[exon_idx]

    # first segment can differ only on the left side
    if exon.start > first_start or exon.end != first_end:
        return False

    # interior segments must match exactly
    for start, end in segments[1:-1]:
        exon_idx += 1
        if exon_idx >= len(exons):
            return False
        exon = exons[exon_idx]
        if exon.start != start or exon.end != end:
            return False

    exon_idx += 1
    if exon_idx >= len(exons):
        return False
    exon = exons[exon_idx]

    # last segment can differ only on the right side
    last_start, last_end = segments[-1]
    return exon.start == last_start and last_end <= exon.end


class CdsResolver:
    """Matches CDS features to transcripts, creating genes and transcripts when nothing matches."""

    def __init__(self, registry: ModelRegistry, gene_resolver: GeneResolver):
        self.registry = registry
        self.gene_resolver = gene_resolver

    @staticmethod
    def cds_matches_gene(record: FeatureRecord, gene: Optional[Gene]) -> bool:
        """Is the CDS within ``gene``, and does it name it?"""
        if gene is None:
            return False
        start, end = normalize(record.start, record.end)
        if not gene.includes(start, end):
            return False
        name = record.gene_name
        return name is not None and name == gene.name

    @staticmethod
    def cds_matches_transcript(record: FeatureRecord, transcript: Optional[Transcript]) -> bool:
        """Is the CDS compatible with the coordinates of ``transcript``?

        The CDS must be within the transcript. If the CDS has multiple segments and the transcript has exons, the
        segments must also satisfy :meth:`cds_matches_transcript_exons()`.
        """
        if transcript is None:
            return False
        start, end = normalize(record.start, record.end)
        if not transcript.includes(start, end):
            return False
        if record.has_multiple_coordinates and transcript.exons:
            return cds_matches_transcript_exons(cds_segments(record), transcript.sorted_exons())
        return True

    def find_transcript_from_latest(self, record: FeatureRecord, context: LatestContext) -> Optional[Transcript]:
        """First transcript of the latest context that has no CDS yet and is compatible with this CDS.

        When there is no latest gene, the transcripts are scanned without checking the gene.
        """
        if context.gene is not None and not self.cds_matches_gene(record, context.gene):
            return None
        for transcript in context.transcripts:
            if not transcript.cds and self.cds_matches_transcript(record, transcript):
                return transcript
        return None

    def find_transcript_for_cds(
        self, record: FeatureRecord, chromosome: Chromosome, context: LatestContext
    ) -> Transcript:
        """Find, or create, the transcript a CDS feature belongs to. See the module docstring for the steps."""
        transcript = self.find_transcript_from_latest(record, context)
        if transcript is not None:
            return transcript

        transcript_id = record.transcript_id
        transcript = self.registry.find_transcript(transcript_id)
        if transcript is not None:
            return transcript

        start, end = normalize(record.start, record.end)
        if self.cds_matches_gene(record, context.gene):
            gene = context.gene
        else:
            gene = self.gene_resolver.find_or_create_gene(record, chromosome, warn=True)

        if transcript_id is None:
            transcript_id = synthesized_transcript_id(start, end)
        transcript = self.registry.find_transcript(transcript_id)
        if transcript is None:
            logger.debug("Transcript '%s' not found; creating it for gene '%s'", transcript_id, gene.id)
            transcript = Transcript(start, end, record.strand, transcript_id, gene.id)
            self.registry.add_transcript(transcript)
        return transcript

    def add_cds(self, record: FeatureRecord, chromosome: Chromosome, context: LatestContext) -> Transcript:
        """Attach a CDS feature to its transcript, along with its protein coding information.

        One CDS piece is added per segment. The transcript is marked protein coding if the feature has a translation,
        and as having ribosomal slippage if the feature says so. The translation (or ``None``) is recorded in the
        registry's protein map.

        Args:
            record: A CDS feature.
            chromosome: The chromosome of the current record set.
            context: The latest-context cursor.

        Returns:
            The :class:`Transcript` the CDS was attached to.
        """
        transcript = self.find_transcript_for_cds(record, chromosome, context)

        if record.aa_sequence is not None:
            transcript.protein_coding = True
        if record.has_ribosomal_slippage:
            transcript.ribosomal_slippage = True

        if record.has_multiple_coordinates:
            added = []
            for coordinates in record:
                start, end = normalize(coordinates.start, coordinates.end)
                added.append(Cds(start, end, record.strand, transcript.cds_id, transcript.id))
            for piece in added:
                transcript.add_cds(piece)
            correct_if_circular(transcript, chromosome, added)
        else:
            start, end = normalize(record.start, record.end)
            transcript.add_cds(Cds(start, end, record.strand, transcript.cds_id, transcript.id))

        self.registry.protein_by_transcript_id[transcript.id] = record.aa_sequence
        return transcript
