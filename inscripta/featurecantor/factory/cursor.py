"""
The latest-context cursor: the most recently built gene and the transcripts built for it since.

Feature tables usually list a gene, then its mRNAs, then their CDSs. CDS features often carry no transcript ID, so
they are matched against the transcripts built just before them. :class:`LatestContext` is immutable; the model
assembler threads it through the pass over a record set as a fold accumulator, and each transition returns a new
cursor.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from inscripta.featurecantor.gene.gene import Gene
from inscripta.featurecantor.gene.transcript import Transcript


@dataclass(frozen=True)
class LatestContext:
    gene: Optional[Gene] = None
    transcripts: Tuple[Transcript, ...] = ()

    def on_gene(self, gene: Gene) -> "LatestContext":
        """A GENE feature starts a new context with no transcripts."""
        return LatestContext(gene, ())

    def on_transcript(self, transcript: Transcript, gene: Gene) -> "LatestContext":
        """A transcript was built (or reused) for an mRNA or CDS feature; ``gene`` is the gene that owns it.

        The transcript is appended to the current list if it belongs to the latest gene. Otherwise, or if there is
        no current list, it starts a new list of its own.
        """
        if self.gene is None or not self.transcripts or transcript.gene_id != self.gene.id:
            return LatestContext(gene, (transcript,))
        return LatestContext(gene, self.transcripts + (transcript,))
