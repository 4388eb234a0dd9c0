"""
Strand and coordinate conventions. Feature tables use 1-based closed coordinates; everything past the coordinate
normalizer uses 0-based coordinates.
"""

from inscripta.featurecantor.location.strand import Strand  # noqa F401
from inscripta.featurecantor.location.coordinates import normalize, denormalize, INPUT_OFFSET  # noqa F401
