"""
Sequence resolution for a record set: the sequence embedded in the feature file if there is one, otherwise the
first usable sequence among a list of candidate FASTA files.
"""
import logging
import os
from typing import List, Optional, Dict, Callable

from methodtools import lru_cache

from inscripta.featurecantor.exc import SequenceNotFoundError
from inscripta.featurecantor.io.fasta.fasta import read_fasta_sequences
from inscripta.featurecantor.io.models import FeatureRecordSet

logger = logging.getLogger(__name__)


class SequenceResolver:
    """Resolves record set sequences.

    Args:
        fasta_files: Candidate FASTA files, in the order they are tried.
        genome_id: Name of the genome, used in error messages.
        reader: Function that reads a FASTA file into a dictionary of sequences by ID, returning an empty dictionary
            on failure.
    """

    def __init__(
        self,
        fasta_files: List[str],
        genome_id: Optional[str] = None,
        reader: Callable[[str], Dict[str, str]] = read_fasta_sequences,
    ):
        self.fasta_files = fasta_files
        self.genome_id = genome_id
        self.reader = reader

    @lru_cache(maxsize=8)
    def _read(self, fasta_file: str) -> Dict[str, str]:
        return self.reader(fasta_file)

    def resolve(self, record_set: FeatureRecordSet, chromosome_name: Optional[str] = None) -> str:
        """Sequence of ``record_set``.

        From a FASTA file, the record named like the chromosome is preferred; otherwise the file's first non-empty
        record is used.

        Args:
            record_set: The record set.
            chromosome_name: Name of the record set's chromosome, if known.

        Returns:
            The nucleotide sequence.

        Raises:
            SequenceNotFoundError: if neither the record set nor any candidate file provide a sequence.
        """
        if record_set.sequence:
            return record_set.sequence
        logger.info("No sequence found in feature file; trying %d FASTA files", len(self.fasta_files))

        for fasta_file in self.fasta_files:
            logger.info("Trying FASTA file '%s'", fasta_file)
            if not os.access(fasta_file, os.R_OK):
                continue
            sequences = self._read(fasta_file)
            if chromosome_name is not None and sequences.get(chromosome_name):
                return sequences[chromosome_name]
            for seq in sequences.values():
                if seq:
                    return seq

        name = chromosome_name or record_set.locus_name or self.genome_id
        raise SequenceNotFoundError(f"Cannot find sequence for '{name}'")
