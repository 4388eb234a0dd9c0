"""
Functions for handling FASTA files. Used as the fallback source of sequence when a feature file carries none.
"""
import gzip
import logging
import pathlib
from typing import Dict, Union

from Bio import SeqIO

logger = logging.getLogger(__name__)


def _open(path: pathlib.Path):
    if path.suffix == ".gz":
        return gzip.open(path, "rt")
    return open(path, "r")


def read_fasta_sequences(fasta_path: Union[str, pathlib.Path]) -> Dict[str, str]:
    """Read every sequence of a FASTA file, keyed by record ID, in file order.

    A file that cannot be read or parsed yields an empty dictionary; an unusable candidate file is not an error.

    Args:
        fasta_path: Path to a FASTA file, optionally gzipped.

    Returns:
        Dictionary mapping record IDs to sequence strings.
    """
    fasta_path = pathlib.Path(fasta_path)
    try:
        with _open(fasta_path) as fh:
            return {rec.id: str(rec.seq) for rec in SeqIO.parse(fh, format="fasta")}
    except (OSError, ValueError, UnicodeDecodeError) as err:
        logger.debug("Could not read FASTA file '%s': %s", fasta_path, err)
        return {}
