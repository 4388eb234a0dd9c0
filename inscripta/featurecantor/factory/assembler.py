"""
Builds a genome model from feature record sets.

Each record set is processed in a single pass, in input order, because later decisions depend on what was built
before them: SOURCE features establish the chromosome, GENE features set the latest gene, and MRNA / CDS features
build or reuse transcripts. The latest gene and its transcripts are carried through the pass as a
:class:`~featurecantor.factory.cursor.LatestContext`.

An import is all or nothing. Entities are handed to the genome index only after every record set was processed
and the finishing steps ran; any failure is raised as a :class:`~featurecantor.exc.FeatureImportError` that names
the file being imported.
"""
import logging
import warnings
from typing import Iterable, Optional

from inscripta.featurecantor.config import ImportConfig
from inscripta.featurecantor.exc import ChromosomeNotFoundError, FeatureImportError
from inscripta.featurecantor.factory.cds import CdsResolver
from inscripta.featurecantor.factory.cursor import LatestContext
from inscripta.featurecantor.factory.finish import infer_exons_from_cds, attach_exon_sequences, adjust_boundaries
from inscripta.featurecantor.factory.genes import GeneResolver, TranscriptBuilder
from inscripta.featurecantor.factory.registry import ModelRegistry
from inscripta.featurecantor.factory.sequence import SequenceResolver
from inscripta.featurecantor.gene.chromosome import Chromosome
from inscripta.featurecantor.gene.collections import GenomeIndex, IntervalIndex
from inscripta.featurecantor.io.exc import DuplicateSourceWarning
from inscripta.featurecantor.io.genbank.constants import FeatureType, KnownQualifiers
from inscripta.featurecantor.io.models import FeatureRecord, FeatureRecordSet, GenomeModel
from inscripta.featurecantor.location.coordinates import normalize

logger = logging.getLogger(__name__)


class FeaturesModelAssembler:
    """Assembles chromosomes, genes, transcripts, exons and CDS pieces from feature record sets.

    Args:
        config: Import configuration.
        index: Genome index that receives every entity once the import succeeds. Defaults to a new
            :class:`IntervalIndex`.
        sequence_resolver: Resolver for record set sequences. Defaults to one that falls back to the FASTA
            candidates of ``config``.
    """

    def __init__(
        self,
        config: ImportConfig,
        index: Optional[GenomeIndex] = None,
        sequence_resolver: Optional[SequenceResolver] = None,
    ):
        self.config = config
        self.index = index if index is not None else IntervalIndex()
        if sequence_resolver is None:
            sequence_resolver = SequenceResolver(config.fasta_candidates(), genome_id=config.genome_id)
        self.sequence_resolver = sequence_resolver
        self.chromosome: Optional[Chromosome] = None
        self._sequence: Optional[str] = None
        self._new_registry()

    def _new_registry(self):
        self.registry = ModelRegistry()
        self.gene_resolver = GeneResolver(self.registry)
        self.transcript_builder = TranscriptBuilder(self.registry, self.gene_resolver)
        self.cds_resolver = CdsResolver(self.registry, self.gene_resolver)

    def create(self, record_sets: Iterable[FeatureRecordSet], source: Optional[str] = None) -> GenomeModel:
        """Import every record set, run the finishing steps and register the result with the genome index.

        Args:
            record_sets: Record sets, such as those yielded by
                :meth:`~featurecantor.io.genbank.parser.parse_feature_records()`.
            source: Identity of the file being imported, for error reporting.

        Returns:
            The :class:`GenomeModel` that was built.

        Raises:
            FeatureImportError: if anything fails. The underlying exception is chained as the cause.
        """
        self._new_registry()
        try:
            for record_set in record_sets:
                self.chromosome = None
                self._sequence = None
                self.add_features(record_set)
                infer_exons_from_cds(self.registry, self.chromosome.id)
                self.add_sequence(self.chromosome, self.sequence(record_set))

            adjust_boundaries(self.registry)
            registered = self.registry.register_with(self.index)
        except Exception as err:
            raise FeatureImportError(f"Error reading file '{source}': {err}", source=source) from err

        logger.info(
            "Imported %d chromosomes, %d genes and %d transcripts (%d entities) from '%s'",
            len(self.registry.chromosomes),
            len(self.registry.genes),
            len(self.registry.transcripts),
            registered,
            source,
        )
        return self.to_genome_model()

    def add_features(self, record_set: FeatureRecordSet) -> LatestContext:
        """Establish the chromosome of a record set, then resolve its features in one pass.

        Returns:
            The latest-context cursor as it stands after the last feature.
        """
        self.chromosome = self.add_chromosome(record_set)
        context = LatestContext()
        for record in record_set.features:
            context = self.add_feature(record, context)
        return context

    def add_feature(self, record: FeatureRecord, context: LatestContext) -> LatestContext:
        """Resolve one feature and return the updated cursor. Feature types other than GENE, MRNA and CDS are
        ignored."""
        if record.type == FeatureType.GENE:
            gene = self.gene_resolver.find_or_create_gene(record, self.chromosome)
            return context.on_gene(gene)

        if record.type == FeatureType.MRNA:
            transcript = self.transcript_builder.add_mrna(record, self.chromosome, context.gene)
        elif record.type == FeatureType.CDS:
            transcript = self.cds_resolver.add_cds(record, self.chromosome, context)
        else:
            return context
        return context.on_transcript(transcript, self.registry.gene_of(transcript))

    def add_chromosome(self, record_set: FeatureRecordSet) -> Chromosome:
        """Create the chromosome of a record set from its first SOURCE feature.

        Further SOURCE features are ignored with a warning. Without any SOURCE feature, the chromosome spans the
        record set's sequence.
        """
        chromosome = None
        for record in record_set.features:
            if record.type != FeatureType.SOURCE:
                continue
            if chromosome is not None:
                warnings.warn(
                    DuplicateSourceWarning(
                        f"SOURCE already assigned to chromosome '{chromosome.id}'. Ignoring feature {record}"
                    )
                )
                continue
            start, end = normalize(record.start, record.end)
            chromosome = self._new_chromosome(start, end, self.chromosome_name(record_set, record), record_set)

        if chromosome is None:
            name = self.chromosome_name(record_set)
            size = len(self.sequence(record_set, name))
            chromosome = self._new_chromosome(0, size - 1, name, record_set)

        self.registry.add_chromosome(chromosome)
        logger.info("Chromosome: '%s'\tlength: %d", chromosome.id, chromosome.size)
        return chromosome

    def _new_chromosome(self, start: int, end: int, name: str, record_set: FeatureRecordSet) -> Chromosome:
        is_circular = record_set.is_circular or self.config.is_circular(name)
        return Chromosome(start, end, name, genome_id=self.config.genome_id, is_circular=is_circular)

    def chromosome_name(self, record_set: FeatureRecordSet, source: Optional[FeatureRecord] = None) -> str:
        """Chromosome name: the SOURCE feature's ``/chromosome``, else the locus name, else the genome ID.

        Raises:
            ChromosomeNotFoundError: if none of those exist.
        """
        if source is not None:
            name = source.get(KnownQualifiers.CHROMOSOME.value)
            if name:
                return name
        if record_set.locus_name:
            return record_set.locus_name
        if self.config.genome_id:
            return self.config.genome_id
        raise ChromosomeNotFoundError("Could not find a chromosome name: no SOURCE feature, locus name or genome ID")

    def sequence(self, record_set: FeatureRecordSet, chromosome_name: Optional[str] = None) -> str:
        """Sequence of the current record set, resolved once per record set."""
        if self._sequence is None:
            if chromosome_name is None and self.chromosome is not None:
                chromosome_name = self.chromosome.id
            self._sequence = self.sequence_resolver.resolve(record_set, chromosome_name)
        return self._sequence

    def add_sequence(self, chromosome: Chromosome, sequence: str):
        """Register a sequence against its chromosome, and give every exon on that chromosome its sequence."""
        if len(sequence) != chromosome.size:
            logger.warning(
                "Chromosome '%s' has length %d but its sequence has length %d",
                chromosome.id,
                chromosome.size,
                len(sequence),
            )
        chromosome.sequence = sequence
        attach_exon_sequences(self.registry, chromosome.id, sequence)

    def to_genome_model(self) -> GenomeModel:
        return GenomeModel.Schema().load(
            dict(
                genome_id=self.config.genome_id,
                chromosomes=[chromosome.to_dict() for chromosome in self.registry.chromosomes.values()],
                genes=[gene.to_dict() for gene in self.registry.genes.values()],
                protein_by_transcript_id=dict(self.registry.protein_by_transcript_id),
            )
        )
