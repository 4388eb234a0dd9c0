from inscripta.featurecantor.io.exc import InvalidInputError


class FeatureFileParserError(InvalidInputError):
    """
    Raised when there is an error parsing a GenBank or EMBL file.
    """

    pass


class FeatureLocationError(FeatureFileParserError):
    """
    Raised when there is an issue with locations (usually BioPython makes them None)
    """

    pass
