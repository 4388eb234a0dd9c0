import pytest

from inscripta.featurecantor.factory.cds import CdsResolver, cds_matches_transcript_exons, cds_segments
from inscripta.featurecantor.factory.cursor import LatestContext
from inscripta.featurecantor.factory.genes import GeneResolver, TranscriptBuilder
from inscripta.featurecantor.factory.registry import ModelRegistry
from inscripta.featurecantor.gene.chromosome import Chromosome
from inscripta.featurecantor.gene.transcript import Exon
from inscripta.featurecantor.io.exc import GeneNotFoundWarning
from inscripta.featurecantor.io.genbank.constants import FeatureType
from inscripta.featurecantor.io.models import FeatureRecord, FeatureCoordinates
from inscripta.featurecantor.location.strand import Strand

chrom = Chromosome(0, 999, "chr1")


def feature(feature_type, start, end, complement=False, segments=None, **qualifiers) -> FeatureRecord:
    coordinates = [FeatureCoordinates(s, e, complement) for s, e in segments] if segments else None
    return FeatureRecord(
        feature_type,
        start,
        end,
        complement=complement,
        coordinates=coordinates,
        qualifiers={key: [val] for key, val in qualifiers.items()},
    )


def exons(*ranges):
    return [Exon(s, e, Strand.PLUS, f"tx_{i}", "tx", i) for i, (s, e) in enumerate(ranges, start=1)]


class TestExonMatching:
    @pytest.mark.parametrize(
        "segments,exon_ranges,expected",
        [
            # identical
            ([(100, 199), (300, 499)], [(100, 199), (300, 499)], True),
            # first segment trimmed on the left
            ([(120, 199), (300, 499)], [(100, 199), (300, 499)], True),
            # last segment trimmed on the right
            ([(100, 199), (300, 479)], [(100, 199), (300, 499)], True),
            # both UTRs trimmed
            ([(120, 199), (300, 479)], [(100, 199), (300, 499)], True),
            # first segment trimmed on the right
            ([(100, 189), (300, 499)], [(100, 199), (300, 499)], False),
            # last segment trimmed on the left
            ([(100, 199), (310, 499)], [(100, 199), (300, 499)], False),
            # interior segment does not match its exon
            ([(100, 199), (300, 389), (500, 599)], [(100, 199), (300, 399), (500, 599)], False),
            # interior segment matches
            ([(150, 199), (300, 399), (500, 549)], [(100, 199), (300, 399), (500, 599)], True),
            # leading exons without CDS are skipped
            ([(300, 399), (500, 549)], [(100, 199), (300, 399), (500, 599)], True),
            # more segments than exons
            ([(100, 149), (160, 199), (300, 499)], [(100, 199), (300, 499)], False),
            # segments run past the last exon
            ([(300, 499), (600, 650)], [(100, 199), (300, 499)], False),
            # single segment within an exon
            ([(320, 479)], [(100, 199), (300, 499)], True),
            # single segment across an intron
            ([(150, 350)], [(100, 199), (300, 499)], False),
        ],
    )
    def test_cds_matches_transcript_exons(self, segments, exon_ranges, expected):
        assert cds_matches_transcript_exons(segments, exons(*exon_ranges)) == expected

    def test_cds_segments_sorted(self):
        rec = feature(FeatureType.CDS, 101, 500, complement=True, segments=[(301, 500), (101, 200)])
        assert cds_segments(rec) == [(100, 199), (300, 499)]
        assert cds_segments(feature(FeatureType.CDS, 11, 40)) == [(10, 39)]


@pytest.fixture
def registry() -> ModelRegistry:
    return ModelRegistry()


@pytest.fixture
def resolvers(registry):
    gene_resolver = GeneResolver(registry)
    return gene_resolver, TranscriptBuilder(registry, gene_resolver), CdsResolver(registry, gene_resolver)


class TestCdsResolver:
    def test_cds_matches_gene(self, resolvers):
        gene_resolver, _, cds_resolver = resolvers
        gene = gene_resolver.find_or_create_gene(feature(FeatureType.GENE, 101, 500, gene="G1"), chrom)
        assert cds_resolver.cds_matches_gene(feature(FeatureType.CDS, 121, 480, gene="G1"), gene)
        assert not cds_resolver.cds_matches_gene(feature(FeatureType.CDS, 121, 480, gene="G2"), gene)
        assert not cds_resolver.cds_matches_gene(feature(FeatureType.CDS, 121, 480), gene)
        assert not cds_resolver.cds_matches_gene(feature(FeatureType.CDS, 21, 480, gene="G1"), gene)
        assert not cds_resolver.cds_matches_gene(feature(FeatureType.CDS, 121, 480, gene="G1"), None)

    def test_spliced_cds_joins_latest_transcript(self, registry, resolvers):
        gene_resolver, builder, cds_resolver = resolvers
        gene = gene_resolver.find_or_create_gene(feature(FeatureType.GENE, 101, 500, gene="G1"), chrom)
        context = LatestContext().on_gene(gene)
        mrna = feature(FeatureType.MRNA, 101, 500, segments=[(101, 200), (301, 500)], gene="G1", transcript_id="T1")
        tx = builder.add_mrna(mrna, chrom, gene)
        context = context.on_transcript(tx, gene)

        cds = feature(FeatureType.CDS, 121, 480, segments=[(121, 200), (301, 480)], gene="G1", translation="MKLV")
        assert cds_resolver.add_cds(cds, chrom, context) is tx
        assert [(c.id, c.start, c.end) for c in tx.cds] == [("CDS_T1", 120, 199), ("CDS_T1", 300, 479)]
        assert tx.protein_coding
        assert not tx.ribosomal_slippage
        assert registry.protein_by_transcript_id == {"T1": "MKLV"}

    def test_second_cds_skips_transcript_with_cds(self, registry, resolvers):
        gene_resolver, builder, cds_resolver = resolvers
        gene = gene_resolver.find_or_create_gene(feature(FeatureType.GENE, 101, 500, gene="G1"), chrom)
        context = LatestContext().on_gene(gene)
        for tid in ("T1", "T2"):
            tx = builder.add_mrna(feature(FeatureType.MRNA, 101, 500, gene="G1", transcript_id=tid), chrom, gene)
            context = context.on_transcript(tx, gene)
        first = cds_resolver.add_cds(feature(FeatureType.CDS, 121, 480, gene="G1"), chrom, context)
        second = cds_resolver.add_cds(feature(FeatureType.CDS, 121, 480, gene="G1"), chrom, context)
        assert (first.id, second.id) == ("T1", "T2")

    def test_single_segment_cds_by_transcript_id(self, registry, resolvers):
        gene_resolver, builder, cds_resolver = resolvers
        gene = gene_resolver.find_or_create_gene(feature(FeatureType.GENE, 101, 500, gene="G1"), chrom)
        tx = builder.add_mrna(feature(FeatureType.MRNA, 101, 500, transcript_id="T1"), chrom, gene)
        # no latest context; the explicit transcript ID still resolves it
        cds = feature(FeatureType.CDS, 121, 480, transcript_id="T1", ribosomal_slippage="")
        assert cds_resolver.add_cds(cds, chrom, LatestContext()) is tx
        assert [(c.start, c.end, c.strand) for c in tx.cds] == [(120, 479, Strand.PLUS)]
        assert tx.ribosomal_slippage
        assert not tx.protein_coding
        assert registry.protein_by_transcript_id == {"T1": None}

    def test_fallback_creates_gene_and_transcript(self, registry, resolvers):
        _, _, cds_resolver = resolvers
        cds = feature(FeatureType.CDS, 21, 80, complement=True, translation="MA")
        with pytest.warns(GeneNotFoundWarning):
            tx = cds_resolver.add_cds(cds, chrom, LatestContext())
        assert tx.id == "Tr_20_79"
        assert tx.gene_id == "Gene_20_79"
        assert tx.strand == Strand.MINUS
        assert registry.find_gene("Gene_20_79").name == "Gene_20_79"
        assert tx.protein_coding

    def test_fallback_uses_latest_gene(self, registry, resolvers):
        gene_resolver, _, cds_resolver = resolvers
        gene = gene_resolver.find_or_create_gene(feature(FeatureType.GENE, 601, 900, locus_tag="G2", gene="abc"), chrom)
        cds = feature(FeatureType.CDS, 611, 890, gene="abc", locus_tag="G2", protein_id="P2")
        tx = cds_resolver.add_cds(cds, chrom, LatestContext().on_gene(gene))
        assert tx.id == "P2"
        assert tx.gene_id == "G2"
        assert len(registry.genes) == 1

    def test_fallback_is_deterministic(self, resolvers):
        _, _, cds_resolver = resolvers
        cds = feature(FeatureType.CDS, 21, 80)
        with pytest.warns(GeneNotFoundWarning):
            first = cds_resolver.add_cds(cds, chrom, LatestContext())
        second = cds_resolver.add_cds(cds, chrom, LatestContext())
        assert first is second
        assert len(first.cds) == 2

    def test_permissive_without_latest_gene(self, resolvers):
        gene_resolver, builder, cds_resolver = resolvers
        gene = gene_resolver.find_or_create_gene(feature(FeatureType.GENE, 101, 500, gene="G1"), chrom)
        tx = builder.add_mrna(feature(FeatureType.MRNA, 101, 500, transcript_id="T1"), chrom, gene)
        context = LatestContext(None, (tx,))
        assert cds_resolver.find_transcript_from_latest(feature(FeatureType.CDS, 121, 480), context) is tx

    def test_spliced_cds_piece_strands(self, resolvers):
        _, _, cds_resolver = resolvers
        cds = feature(FeatureType.CDS, 21, 80, complement=True, segments=[(21, 40), (61, 80)], transcript_id="P1")
        with pytest.warns(GeneNotFoundWarning):
            tx = cds_resolver.add_cds(cds, chrom, LatestContext())
        assert [(c.start, c.end, c.strand) for c in tx.cds] == [(20, 39, Strand.MINUS), (60, 79, Strand.MINUS)]
