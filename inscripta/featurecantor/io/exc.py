"""
I/O exceptions, and the warnings emitted for structural problems found while building a genome model. Warnings
never interrupt an import.
"""
from inscripta.featurecantor.exc import FeatureCantorException


class FeatureCantorIOException(FeatureCantorException):
    pass


class InvalidInputError(FeatureCantorIOException):
    pass


class DuplicateSourceWarning(UserWarning):
    pass


class GeneNotFoundWarning(UserWarning):
    pass


class DuplicateTranscriptWarning(UserWarning):
    pass


class CircularCorrectionWarning(UserWarning):
    pass
