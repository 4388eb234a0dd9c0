"""
Coordinate repair for transcripts on circular chromosomes.

A feature that wraps past the end of a circular chromosome is written as, e.g., ``join(4901..5000,1..50)``. Taken in
input order, such a list of pieces jumps backwards once, at the origin. This module re-expresses every piece before
that jump relative to the origin (as negative positions), so that the pieces are monotonic and contiguous in
genome-linear terms.
"""
import warnings
from typing import List, Optional, Sequence

from inscripta.featurecantor.gene.chromosome import Chromosome
from inscripta.featurecantor.gene.interval import GenomicInterval
from inscripta.featurecantor.gene.transcript import Transcript
from inscripta.featurecantor.io.exc import CircularCorrectionWarning


def find_wrap_points(pieces: Sequence[GenomicInterval]) -> List[int]:
    """Indices ``i`` where ``pieces[i]`` starts before ``pieces[i - 1]``, with pieces taken in input order."""
    return [i for i in range(1, len(pieces)) if pieces[i].start < pieces[i - 1].start]


class CircularCorrection:
    """Corrects the exons and CDS pieces of a transcript whose coordinates wrap around the chromosome origin.

    Correction is best effort. A piece list with more than one wrap point cannot be interpreted; it is left as
    parsed and a :class:`CircularCorrectionWarning` is emitted.
    """

    def __init__(self, transcript: Transcript, chromosome_length: int):
        self.transcript = transcript
        self.chromosome_length = chromosome_length

    def correct(self, pieces: Optional[List[GenomicInterval]] = None) -> bool:
        """Correct pieces in place.

        Args:
            pieces: The pieces to examine, in input order; typically those added by a single feature. Defaults to
                the exons and then the CDS pieces of the transcript, each list examined on its own.

        Returns:
            True if any coordinate was changed.
        """
        if pieces is None:
            corrected_exons = self._correct_pieces(self.transcript.exons, "exons")
            corrected_cds = self._correct_pieces(self.transcript.cds, "CDS pieces")
            corrected = corrected_exons or corrected_cds
        else:
            corrected = self._correct_pieces(pieces, "pieces")
        if corrected:
            self._correct_transcript()
        return corrected

    def _correct_pieces(self, pieces: List[GenomicInterval], description: str) -> bool:
        wrap_points = find_wrap_points(pieces)
        if not wrap_points:
            return False
        if len(wrap_points) > 1:
            warnings.warn(
                CircularCorrectionWarning(
                    f"{description.capitalize()} of transcript {self.transcript.id} wrap around the origin "
                    f"{len(wrap_points)} times; coordinates were left as parsed."
                )
            )
            return False
        wrap_point = wrap_points[0]
        for piece in pieces[:wrap_point]:
            piece.shift(-self.chromosome_length)
        return True

    def _correct_transcript(self):
        """Fit the transcript to its corrected pieces.

        The transcript range of a wrapping feature spans almost the whole chromosome, because it was taken from the
        lowest and highest positions of the pieces; it is recomputed from the pieces themselves.
        """
        pieces = self.transcript.exons + self.transcript.cds
        start = min(piece.start for piece in pieces)
        end = max(piece.end for piece in pieces)
        self.transcript.start = start
        self.transcript.end = end


def correct_if_circular(
    transcript: Transcript, chromosome: Chromosome, pieces: Optional[List[GenomicInterval]] = None
) -> bool:
    """Run :class:`CircularCorrection` on ``transcript`` if ``chromosome`` is circular.

    ``pieces`` limits the correction to the given exons or CDS pieces, so that pieces added by an earlier feature are
    never shifted again.
    """
    if not chromosome.is_circular:
        return False
    return CircularCorrection(transcript, chromosome.size).correct(pieces)
