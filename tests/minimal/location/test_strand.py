import pytest

from inscripta.featurecantor.location.strand import Strand


class TestStrand:
    @pytest.mark.parametrize(
        "strand,string",
        [
            (Strand.PLUS, "+"),
            (Strand.MINUS, "-"),
            (Strand.UNSTRANDED, "."),
        ],
    )
    def test_str(self, strand, string):
        assert str(strand) == string

    def test_from_complement(self):
        assert Strand.from_complement(False) == Strand.PLUS
        assert Strand.from_complement(True) == Strand.MINUS

    def test_from_int_valid(self):
        assert Strand.from_int(1) == Strand.PLUS
        assert Strand.from_int(-1) == Strand.MINUS
        assert Strand.from_int(0) == Strand.UNSTRANDED
        assert Strand.from_int(None) == Strand.UNSTRANDED

    def test_from_int_invalid(self):
        with pytest.raises(ValueError):
            Strand.from_int(2)

    def test_is_complement(self):
        assert Strand.MINUS.is_complement
        assert not Strand.PLUS.is_complement
        assert not Strand.UNSTRANDED.is_complement

    def test_order(self):
        assert sorted([Strand.MINUS, Strand.UNSTRANDED, Strand.PLUS]) == [
            Strand.PLUS,
            Strand.MINUS,
            Strand.UNSTRANDED,
        ]

    def test_compare_invalid(self):
        with pytest.raises(ValueError):
            _ = Strand.PLUS < 1
