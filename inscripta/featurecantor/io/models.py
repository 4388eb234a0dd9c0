"""
Data models. These models act as a JSON schema for serializing and deserializing the feature records that come into
FeatureCantor, and the genome models that come out of it.

Feature records use the coordinates of the feature table they came from: 1-based and closed. Genome models use
0-based coordinates where ``end`` is the last position covered.
"""
import json
from dataclasses import field
from typing import List, Optional, ClassVar, Type, Dict, Iterator

from marshmallow import Schema  # noqa: F401
from marshmallow_dataclass import dataclass

from inscripta.featurecantor.io.genbank.constants import (
    FeatureType,
    KnownQualifiers,
    GENE_ID_QUALIFIERS,
    GENE_NAME_QUALIFIERS,
    TRANSCRIPT_ID_QUALIFIERS,
    GENE_ID_DBXREF_PREFIX,
    Topology,
)
from inscripta.featurecantor.location.strand import Strand


@dataclass
class BaseModel:
    """Base for all of the models."""

    Schema: ClassVar[Type[Schema]] = Schema  # noqa: F811


@dataclass
class FeatureCoordinates(BaseModel):
    """One segment of a multi-segment feature, such as one block of a ``join()``."""

    start: int
    end: int
    complement: bool = False


@dataclass
class FeatureRecord(BaseModel):
    """A single annotated region from a feature table. Read-only once parsed.

    ``coordinates`` holds the segments of a spliced or otherwise discontiguous feature in the order they were
    written. Qualifier values are lists, as a qualifier may be repeated.
    """

    type: FeatureType
    start: int
    end: int
    complement: bool = False
    coordinates: Optional[List[FeatureCoordinates]] = None
    qualifiers: Optional[Dict[str, List[str]]] = None

    def __iter__(self) -> Iterator[FeatureCoordinates]:
        """Iterate over the segments of this feature. A single-segment feature yields its own range."""
        if self.coordinates:
            yield from self.coordinates
        else:
            yield FeatureCoordinates(self.start, self.end, self.complement)

    def __str__(self):
        qualifiers = ", ".join(f"{key}={vals[0] if vals else ''}" for key, vals in (self.qualifiers or {}).items())
        return f"{self.type.value} {self.start}..{self.end}{' (complement)' if self.complement else ''} [{qualifiers}]"

    @property
    def has_multiple_coordinates(self) -> bool:
        return self.coordinates is not None and len(self.coordinates) > 1

    @property
    def strand(self) -> Strand:
        return Strand.from_complement(self.complement)

    def get(self, qualifier: str) -> Optional[str]:
        """First value of a qualifier, or ``None`` if the qualifier is absent.

        Flag qualifiers such as ``/ribosomal_slippage`` have no value; they are returned as an empty string.
        """
        if not self.qualifiers or qualifier not in self.qualifiers:
            return None
        vals = self.qualifiers[qualifier]
        return vals[0] if vals else ""

    def _first_of(self, qualifiers) -> Optional[str]:
        for qualifier in qualifiers:
            if qualifier == KnownQualifiers.DBXREF:
                val = self._gene_id_from_dbxref()
            else:
                val = self.get(qualifier.value)
            if val:
                return val
        return None

    def _gene_id_from_dbxref(self) -> Optional[str]:
        for val in (self.qualifiers or {}).get(KnownQualifiers.DBXREF.value, []):
            if val.startswith(GENE_ID_DBXREF_PREFIX):
                return val[len(GENE_ID_DBXREF_PREFIX) :]
        return None

    @property
    def gene_id(self) -> Optional[str]:
        return self._first_of(GENE_ID_QUALIFIERS)

    @property
    def gene_name(self) -> Optional[str]:
        return self._first_of(GENE_NAME_QUALIFIERS)

    @property
    def transcript_id(self) -> Optional[str]:
        return self._first_of(TRANSCRIPT_ID_QUALIFIERS)

    @property
    def aa_sequence(self) -> Optional[str]:
        return self.get(KnownQualifiers.TRANSLATION.value)

    @property
    def has_ribosomal_slippage(self) -> bool:
        return self.get(KnownQualifiers.RIBOSOMAL_SLIPPAGE.value) is not None


@dataclass
class FeatureRecordSet(BaseModel):
    """One entry of a feature file (one GenBank ``LOCUS`` or EMBL ``ID`` block): its features, in file order, and
    optionally its sequence."""

    features: List[FeatureRecord] = field(default_factory=list)
    sequence: Optional[str] = None
    locus_name: Optional[str] = None
    topology: Optional[Topology] = None

    @property
    def is_circular(self) -> bool:
        return self.topology == Topology.CIRCULAR


@dataclass
class ChromosomeModel(BaseModel):
    chromosome_id: str
    start: int
    end: int
    genome_id: Optional[str] = None
    is_circular: bool = False
    sequence_length: Optional[int] = None


@dataclass
class ExonModel(BaseModel):
    exon_id: str
    start: int
    end: int
    strand: Strand
    rank: int
    sequence: Optional[str] = None


@dataclass
class CdsModel(BaseModel):
    cds_id: str
    start: int
    end: int
    strand: Strand


@dataclass
class TranscriptModel(BaseModel):
    transcript_id: str
    gene_id: str
    start: int
    end: int
    strand: Strand
    protein_coding: bool = False
    ribosomal_slippage: bool = False
    exons: List[ExonModel] = field(default_factory=list)
    cds: List[CdsModel] = field(default_factory=list)


@dataclass
class GeneModel(BaseModel):
    gene_id: str
    gene_name: str
    chromosome_id: str
    start: int
    end: int
    strand: Strand
    transcripts: List[TranscriptModel] = field(default_factory=list)


@dataclass
class GenomeModel(BaseModel):
    """The result of an import: every chromosome and gene, plus the transcript to protein sequence map."""

    genome_id: Optional[str] = None
    chromosomes: List[ChromosomeModel] = field(default_factory=list)
    genes: List[GeneModel] = field(default_factory=list)
    protein_by_transcript_id: Dict[str, Optional[str]] = field(default_factory=dict)

    def to_json(self, **kwargs) -> str:
        return json.dumps(GenomeModel.Schema().dump(self), **kwargs)
