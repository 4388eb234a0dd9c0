"""
Coordinate normalization. Feature tables give 1-based, closed intervals. The model stores 0-based positions, and
every component converts input coordinates here before building or comparing model entities.

The stored ``end`` is the last position covered by an interval, so ``SOURCE 1..1000`` becomes ``0..999``.
"""
from typing import Tuple

from inscripta.featurecantor.exc import InvalidCoordinatesError

# offset between feature table coordinates and model coordinates
INPUT_OFFSET = 1


def normalize(start: int, end: int) -> Tuple[int, int]:
    """Convert a 1-based closed ``(start, end)`` pair from a feature record into model coordinates.

    Args:
        start: 1-based start position.
        end: 1-based end position, inclusive.

    Returns:
        The 0-based ``(start, end)`` pair.

    Raises:
        InvalidCoordinatesError: if the pair is malformed. Malformed ranges are never clamped.
    """
    if start < INPUT_OFFSET:
        raise InvalidCoordinatesError(f"Start position {start} is below {INPUT_OFFSET}")
    if end < start:
        raise InvalidCoordinatesError(f"End position {end} is before start position {start}")
    return start - INPUT_OFFSET, end - INPUT_OFFSET


def denormalize(start: int, end: int) -> Tuple[int, int]:
    """Inverse of :meth:`normalize()`. Negative starts are allowed, since circular correction produces them."""
    if end < start:
        raise InvalidCoordinatesError(f"End position {end} is before start position {start}")
    return start + INPUT_OFFSET, end + INPUT_OFFSET
