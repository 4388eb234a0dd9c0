"""
Genome model entities: chromosomes, genes, transcripts, exons and CDS pieces.

Parents own their children (a gene owns its transcripts, a transcript owns its exons and CDS pieces); children
refer back to their parent by ID only.
"""

from inscripta.featurecantor.gene.interval import GenomicInterval  # noqa F401
from inscripta.featurecantor.gene.chromosome import Chromosome  # noqa F401
from inscripta.featurecantor.gene.transcript import Transcript, Exon, Cds  # noqa F401
from inscripta.featurecantor.gene.gene import Gene  # noqa F401
from inscripta.featurecantor.gene.circular import CircularCorrection, correct_if_circular  # noqa F401
from inscripta.featurecantor.gene.collections import GenomeIndex, IntervalIndex  # noqa F401
