from typing import Any, Dict, List, Mapping, Optional

from MSIConfig.config.logger_config import get_logger
from MSIConfig.metadata.experiment_metadata import ExperimentMetadata
from MSIConfig.processing.processing_config import (
    DatabaseSelection,
    HMDB,
    HMDB_DEFAULT_VERSION,
    ImageGenerationConfig,
    IsotopeGenerationConfig,
    ProcessingConfiguration,
)
from MSIConfig.processing.resolving_power import rp_at_200, select_tier, select_resolution_params

logger = get_logger(__name__)

DEFAULT_PPM = 3.0
SIGMA_DECIMALS = 6


class ProcessingConfigGenerator:
    def __init__(self, default_adducts: Mapping[str, List[str]], default_ppm: float = DEFAULT_PPM):
        """
        Derives processing configurations from experiment metadata.

        :param default_adducts: Mapping, adducts keyed by polarity symbol ('+', '-'), used when
            a dataset does not list its own.
        :param default_ppm: float, mass tolerance used when a dataset does not specify one.
        :raises ValueError: default adducts are missing for a polarity.
        """
        for symbol in ("+", "-"):
            if not default_adducts.get(symbol):
                raise ValueError(f"No default adducts configured for polarity '{symbol}'.")
        self._default_adducts = {symbol: list(adducts) for symbol, adducts in default_adducts.items()}
        self._default_ppm = default_ppm

    def generate(self, metadata: Mapping[str, Any]) -> ProcessingConfiguration:
        """
        Derive the processing configuration for a dataset.

        :param metadata: Mapping, the submitted experiment metadata.
        :return: ProcessingConfiguration, a new object on every call.
        :raises InvalidMetadata: the metadata is missing a required field or holds an unusable value.
        """
        return self.generate_from_metadata(ExperimentMetadata.from_dict(metadata))

    def generate_from_metadata(self, metadata: ExperimentMetadata) -> ProcessingConfiguration:
        polarity = metadata.polarity.symbol

        rp200 = rp_at_200(metadata.analyzer, metadata.resolving_power)
        tier = select_tier(rp200)
        params = select_resolution_params(rp200)
        logger.debug(f"{metadata.analyzer}: RP {metadata.resolving_power.resolving_power:.0f} "
                     f"at m/z {metadata.resolving_power.mz:g} -> RP200 {rp200:.0f} -> tier {tier}")

        ppm = metadata.ppm if metadata.ppm is not None else self._default_ppm

        adducts = metadata.adducts if metadata.adducts is not None else self._default_adducts[polarity]

        return ProcessingConfiguration(
            databases=_database_selections(metadata.databases),
            isotope_generation=IsotopeGenerationConfig(
                adducts=list(adducts),
                polarity=polarity,
                isocalc_sigma=round(params.sigma, SIGMA_DECIMALS),
                isocalc_pts_per_mz=params.pts_per_mz,
            ),
            image_generation=ImageGenerationConfig(ppm=ppm),
        )


def _database_selections(names: List[str]) -> List[DatabaseSelection]:
    databases = [DatabaseSelection(name) for name in names]
    # HMDB is always searched; exact, case-sensitive name match
    if not any(database.name == HMDB for database in databases):
        databases.append(DatabaseSelection(HMDB, HMDB_DEFAULT_VERSION))
    return databases


def generate_processing_config(metadata: Mapping[str, Any],
                               default_adducts: Mapping[str, List[str]],
                               default_ppm: Optional[float] = None) -> Dict[str, Any]:
    """
    Derive the processing configuration for a dataset as a JSON-ready dictionary.
    """
    generator = ProcessingConfigGenerator(
        default_adducts, DEFAULT_PPM if default_ppm is None else default_ppm
    )
    return generator.generate(metadata).to_dict()
