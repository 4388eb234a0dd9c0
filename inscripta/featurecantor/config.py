"""
Import configuration. Loaded and validated through a marshmallow dataclass, either from a dictionary or from a
JSON file.
"""
import pathlib
from dataclasses import field
from typing import List, Optional, Union

from marshmallow_dataclass import dataclass

from inscripta.featurecantor.io.genbank.constants import FeatureFileFormat
from inscripta.featurecantor.io.models import BaseModel

# extensions tried, in order, when looking for a genome FASTA in the data directory
FASTA_EXTENSIONS = (".fa", ".fasta", ".fa.gz", ".fasta.gz")


@dataclass
class ImportConfig(BaseModel):
    """Settings for one import.

    Attributes:
        genome_id: Name of the genome being built. Last resort name for chromosomes, and the stem used to look for
            FASTA files in ``data_dir``.
        data_dir: Optional directory holding genome FASTA files.
        fasta_files: FASTA files to try, in order, before anything found in ``data_dir``.
        circular_chromosomes: Names of chromosomes to treat as circular even when the feature file does not say so.
        file_format: Format of the feature file.
    """

    genome_id: str
    data_dir: Optional[str] = None
    fasta_files: List[str] = field(default_factory=list)
    circular_chromosomes: List[str] = field(default_factory=list)
    file_format: FeatureFileFormat = FeatureFileFormat.GENBANK

    @staticmethod
    def from_json(path: Union[str, pathlib.Path]) -> "ImportConfig":
        with open(path, "r") as fh:
            return ImportConfig.Schema().loads(fh.read())

    def is_circular(self, chromosome_name: str) -> bool:
        return chromosome_name in self.circular_chromosomes

    def fasta_candidates(self) -> List[str]:
        """Candidate FASTA files for sequence fallback, in the order they should be tried."""
        candidates = list(self.fasta_files)
        if self.data_dir:
            data_dir = pathlib.Path(self.data_dir)
            for stem in (data_dir / self.genome_id / "sequences", data_dir / self.genome_id):
                candidates.extend(str(stem) + ext for ext in FASTA_EXTENSIONS)
        return candidates
