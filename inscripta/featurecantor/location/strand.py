from enum import Enum
from functools import total_ordering


@total_ordering
class Strand(Enum):
    PLUS = 1
    MINUS = -1
    UNSTRANDED = 0

    def __str__(self):
        return self.to_symbol()

    @staticmethod
    def from_complement(complement: bool) -> "Strand":
        """Feature tables only express strand through the ``complement()`` operator."""
        return Strand.MINUS if complement else Strand.PLUS

    @staticmethod
    def from_int(value: int) -> "Strand":
        """Converts integer representation of a strand to a Strand. ``None`` is treated as unstranded."""
        if value is None:
            return Strand.UNSTRANDED
        return Strand(value)  # Raises ValueError for invalid int

    @property
    def is_complement(self) -> bool:
        return self == Strand.MINUS

    def to_symbol(self) -> str:
        if self == Strand.PLUS:
            return "+"
        if self == Strand.MINUS:
            return "-"
        return "."

    @staticmethod
    def _order():
        return {Strand.PLUS: 1, Strand.MINUS: 2, Strand.UNSTRANDED: 3}

    def __lt__(self, other):
        if not type(other) is Strand:
            raise ValueError("Cannot compare {} to {}".format(type(self).__name__, type(other).__name__))
        order = Strand._order()
        return order[self] < order[other]
