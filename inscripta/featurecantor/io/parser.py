"""
Entry point for importing a feature file: parse it, assemble the genome model, and register the model with a
genome index.
"""
import pathlib
from typing import Optional, Union

from inscripta.featurecantor.config import ImportConfig
from inscripta.featurecantor.factory.assembler import FeaturesModelAssembler
from inscripta.featurecantor.gene.collections import GenomeIndex
from inscripta.featurecantor.io.genbank.parser import parse_feature_records
from inscripta.featurecantor.io.models import GenomeModel


def import_features_file(
    path: Union[str, pathlib.Path],
    config: ImportConfig,
    index: Optional[GenomeIndex] = None,
) -> GenomeModel:
    """Import a GenBank or EMBL file.

    Args:
        path: Path to the feature file. Its format is taken from ``config.file_format``.
        config: Import configuration.
        index: Optional genome index to register the model with.

    Returns:
        The :class:`GenomeModel` that was built.

    Raises:
        FeatureImportError: if the import fails for any reason, with the path of the file attached.
    """
    assembler = FeaturesModelAssembler(config, index=index)
    return assembler.create(parse_feature_records(path, config.file_format), source=str(path))
