import pytest

from inscripta.featurecantor.exc import DuplicateRegistrationError
from inscripta.featurecantor.gene.chromosome import Chromosome
from inscripta.featurecantor.gene.collections import IntervalIndex
from inscripta.featurecantor.gene.gene import Gene
from inscripta.featurecantor.gene.transcript import Transcript, Exon, Cds
from inscripta.featurecantor.location.strand import Strand


@pytest.fixture
def index() -> IntervalIndex:
    chrom = Chromosome(0, 999, "chr1")
    gene = Gene(100, 499, Strand.PLUS, "G1", "gene1", "chr1")
    tx = Transcript(100, 499, Strand.PLUS, "T1", "G1")
    exons = [Exon(100, 199, Strand.PLUS, "T1_1", "T1", 1), Exon(300, 499, Strand.PLUS, "T1_2", "T1", 2)]
    cds = [Cds(120, 199, Strand.PLUS, "CDS_T1", "T1"), Cds(300, 479, Strand.PLUS, "CDS_T1", "T1")]
    other_chrom = Chromosome(0, 99, "chr2")
    other_gene = Gene(10, 20, Strand.MINUS, "G2", "gene2", "chr2")

    idx = IntervalIndex()
    for entity in [chrom, gene, tx] + exons + cds + [other_chrom, other_gene]:
        idx.register(entity)
    return idx


class TestIntervalIndex:
    def test_len(self, index):
        assert len(index) == 9

    def test_get(self, index):
        assert [g.name for g in index.get("G1")] == ["gene1"]
        assert len(index.get("CDS_T1")) == 2
        assert index.get("CDS_T1", Exon) == []
        assert index.get("nothing") == []

    def test_query_by_position(self, index):
        hits = index.query_by_position("chr1", 250, 320)
        assert [type(h).__name__ for h in hits] == ["Chromosome", "Gene", "Transcript", "Exon", "Cds"]
        assert [e.id for e in index.query_by_position("chr1", 150, 350, Exon)] == ["T1_1", "T1_2"]
        assert index.query_by_position("chr1", 200, 299, Exon) == []

    def test_query_other_chromosome(self, index):
        assert [g.id for g in index.query_by_position("chr2", 0, 99, Gene)] == ["G2"]
        assert index.query_by_position("chr3", 0, 99) == []

    def test_typed_views(self, index):
        assert {g.id for g in index.genes()} == {"G1", "G2"}
        assert len(index.exons()) == 2
        assert len(index.cds()) == 2

    def test_duplicate_registration(self, index):
        gene = index.get("G1")[0]
        with pytest.raises(DuplicateRegistrationError):
            index.register(gene)
