"""
Parse GenBank and EMBL files into feature record sets. Biopython provides the core parsing functionality; this
module converts each ``SeqRecord`` into a :class:`~featurecantor.io.models.FeatureRecordSet` without interpreting
the feature hierarchy, which is left to :mod:`featurecantor.factory`.

Biopython locations are 0-based and half-open. They are converted back to the 1-based, closed coordinates of the
feature table, and the segments of a feature are kept in the order they were written.
"""
import pathlib
from typing import Iterator, List, Optional, TextIO, Union

from Bio import SeqIO
from Bio.Seq import UndefinedSequenceError
from Bio.SeqFeature import SeqFeature
from Bio.SeqRecord import SeqRecord

from inscripta.featurecantor.io.genbank.constants import FeatureFileFormat, FeatureType, Topology
from inscripta.featurecantor.io.genbank.exc import FeatureLocationError
from inscripta.featurecantor.io.models import FeatureRecord, FeatureRecordSet, FeatureCoordinates


def parse_feature_records(
    handle_or_path: Union[TextIO, str, pathlib.Path],
    file_format: Union[FeatureFileFormat, str] = FeatureFileFormat.GENBANK,
) -> Iterator[FeatureRecordSet]:
    """This is the main parsing function. Yields one record set per entry of the file, lazily.

    Args:
        handle_or_path: An open GenBank or EMBL file, or a path to one.
        file_format: Format of the file.

    Yields:
        :class:`FeatureRecordSet`.
    """
    file_format = FeatureFileFormat(file_format)
    for seqrecord in SeqIO.parse(handle_or_path, format=file_format.value):
        yield seqrecord_to_record_set(seqrecord)


def seqrecord_to_record_set(seqrecord: SeqRecord) -> FeatureRecordSet:
    """Convert one Biopython ``SeqRecord`` into a :class:`FeatureRecordSet`."""
    return FeatureRecordSet(
        features=[seqfeature_to_record(feature) for feature in seqrecord.features],
        sequence=_extract_sequence(seqrecord),
        locus_name=_extract_locus_name(seqrecord),
        topology=_extract_topology(seqrecord),
    )


def seqfeature_to_record(feature: SeqFeature) -> FeatureRecord:
    """Convert one Biopython ``SeqFeature`` into a :class:`FeatureRecord`.

    Raises:
        FeatureLocationError: if Biopython could not parse the feature's location.
    """
    if feature.location is None:
        raise FeatureLocationError(f"Feature {feature} did not have parseable coordinates.")

    complement = feature.location.strand == -1
    parts = list(feature.location.parts)
    # Biopython stores complement(join(a,b)) as [b, a]; restore the written order
    if complement and len(parts) > 1:
        parts = parts[::-1]

    coordinates: Optional[List[FeatureCoordinates]] = None
    if len(parts) > 1:
        coordinates = [
            FeatureCoordinates(start=int(part.start) + 1, end=int(part.end), complement=part.strand == -1)
            for part in parts
        ]

    return FeatureRecord(
        type=FeatureType.from_feature_key(feature.type),
        start=int(feature.location.start) + 1,
        end=int(feature.location.end),
        complement=complement,
        coordinates=coordinates,
        qualifiers={key: [str(val) for val in vals] for key, vals in feature.qualifiers.items()},
    )


def _extract_sequence(seqrecord: SeqRecord) -> Optional[str]:
    """Records without ORIGIN / SQ blocks have an undefined sequence."""
    try:
        seq = str(seqrecord.seq)
    except UndefinedSequenceError:
        return None
    return seq or None


def _extract_locus_name(seqrecord: SeqRecord) -> Optional[str]:
    name = seqrecord.name
    if not name or name.startswith("<unknown"):
        return None
    return name


def _extract_topology(seqrecord: SeqRecord) -> Optional[Topology]:
    topology = seqrecord.annotations.get("topology")
    if topology in Topology._value2member_map_:
        return Topology(topology)
    return None
