"""
Resolution of feature records into a genome model: gene and transcript identity, CDS to transcript matching, exon
boundary reconciliation and the single pass over each record set that drives them.
"""

from inscripta.featurecantor.factory.assembler import FeaturesModelAssembler  # noqa F401
from inscripta.featurecantor.factory.cursor import LatestContext  # noqa F401
from inscripta.featurecantor.factory.registry import ModelRegistry  # noqa F401
from inscripta.featurecantor.factory.sequence import SequenceResolver  # noqa F401
