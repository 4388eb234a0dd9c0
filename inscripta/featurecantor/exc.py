from typing import Optional


class FeatureCantorException(Exception):
    """
    Base exception class for FeatureCantor.
    """

    pass


class ValidationException(FeatureCantorException):
    """
    Raised when model constructors or feature records are given invalid inputs.
    """

    pass


class InvalidCoordinatesError(ValidationException):
    """
    Raised when a coordinate range is malformed, such as a 1-based start below 1 or an end before the start.
    Malformed ranges are rejected rather than clamped.
    """

    pass


class MissingTranscriptIdError(ValidationException):
    """
    Raised when an mRNA feature carries no transcript identifier. Such features are not given a synthesized ID,
    because coordinate-derived IDs for mRNAs collide with the IDs synthesized for CDS features.
    """

    pass


class ChromosomeNotFoundError(FeatureCantorException):
    """
    Raised when no chromosome can be established for a record set: there is no SOURCE feature with a usable name,
    no locus name and no genome ID to fall back on.
    """

    pass


class SequenceNotFoundError(FeatureCantorException):
    """
    Raised when a record set has no embedded sequence and none of the candidate FASTA files provide one.
    """

    pass


class DuplicateRegistrationError(FeatureCantorException):
    """
    Raised when an entity is registered with a genome index more than once.
    """

    pass


class FeatureImportError(FeatureCantorException):
    """
    Raised when importing a features file fails. Wraps the underlying cause, which is available as ``__cause__``,
    and records the identity of the file being imported.
    """

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.source = source
