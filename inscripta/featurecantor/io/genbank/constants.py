"""
Feature table constants. Records feature types and qualifiers with special meaning, as enumerations.
"""
from enum import Enum
from typing import Tuple


class FeatureFileFormat(str, Enum):
    """Feature table file formats. Values are the format names understood by ``Bio.SeqIO``."""

    GENBANK = "genbank"
    EMBL = "embl"


class Topology(str, Enum):
    LINEAR = "linear"
    CIRCULAR = "circular"


class FeatureType(str, Enum):
    """Feature types FeatureCantor understands. Values are the feature keys used in GenBank and EMBL tables."""

    SOURCE = "source"
    GENE = "gene"
    MRNA = "mRNA"
    CDS = "CDS"
    EXON = "exon"
    TRNA = "tRNA"
    RRNA = "rRNA"
    NCRNA = "ncRNA"
    MISC_RNA = "misc_RNA"
    OTHER = "other"

    @classmethod
    def from_feature_key(cls, key: str) -> "FeatureType":
        """Map a feature key to a type. Unknown keys become :attr:`OTHER`."""
        if key in cls._value2member_map_:
            return cls(key)
        return cls.OTHER


class KnownQualifiers(str, Enum):
    """Qualifiers that have special meaning"""

    GENE = "gene"
    GENE_NAME = "gene_name"
    GENE_ID = "gene_id"
    LOCUS_TAG = "locus_tag"
    DBXREF = "db_xref"
    TRANSCRIPT_ID = "transcript_id"
    PROTEIN_ID = "protein_id"
    TRANSLATION = "translation"
    RIBOSOMAL_SLIPPAGE = "ribosomal_slippage"
    CHROMOSOME = "chromosome"


# qualifiers searched for identifiers, most important first
GENE_ID_QUALIFIERS: Tuple[KnownQualifiers, ...] = (
    KnownQualifiers.GENE_ID,
    KnownQualifiers.LOCUS_TAG,
    KnownQualifiers.DBXREF,
    KnownQualifiers.GENE,
)
GENE_NAME_QUALIFIERS: Tuple[KnownQualifiers, ...] = (
    KnownQualifiers.GENE,
    KnownQualifiers.GENE_NAME,
    KnownQualifiers.LOCUS_TAG,
)
TRANSCRIPT_ID_QUALIFIERS: Tuple[KnownQualifiers, ...] = (
    KnownQualifiers.TRANSCRIPT_ID,
    KnownQualifiers.PROTEIN_ID,
)

# db_xref values that carry a gene identifier look like GeneID:945803
GENE_ID_DBXREF_PREFIX = "GeneID:"
