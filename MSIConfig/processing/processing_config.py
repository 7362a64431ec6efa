from typing import Any, Dict, List, Optional

HMDB = "HMDB"
HMDB_DEFAULT_VERSION = "2016"


class DatabaseSelection:
    def __init__(self, name: str, version: Optional[str] = None):
        self.name = name
        self.version = version

    def to_dict(self) -> Dict[str, str]:
        if self.version is None:
            return {"name": self.name}
        return {"name": self.name, "version": self.version}


class IsotopeGenerationConfig:
    def __init__(self, adducts: List[str], polarity: str, isocalc_sigma: float, isocalc_pts_per_mz: int,
                 n_charges: int = 1):
        self.adducts = adducts
        self.polarity = polarity
        self.n_charges = n_charges
        self.isocalc_sigma = isocalc_sigma
        self.isocalc_pts_per_mz = isocalc_pts_per_mz

    def to_dict(self) -> Dict[str, Any]:
        return {
            "adducts": list(self.adducts),
            "charge": {
                "polarity": self.polarity,
                "n_charges": self.n_charges,
            },
            "isocalc_sigma": self.isocalc_sigma,
            "isocalc_pts_per_mz": self.isocalc_pts_per_mz,
        }


class ImageGenerationConfig:
    def __init__(self, ppm: float, nlevels: int = 30, q: int = 99, do_preprocessing: bool = False):
        self.ppm = ppm
        self.nlevels = nlevels
        self.q = q
        self.do_preprocessing = do_preprocessing

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ppm": self.ppm,
            "nlevels": self.nlevels,
            "q": self.q,
            "do_preprocessing": self.do_preprocessing,
        }


class ProcessingConfiguration:
    """
    Parameters consumed by the downstream annotation pipeline for one dataset.
    """

    def __init__(self, databases: List[DatabaseSelection], isotope_generation: IsotopeGenerationConfig,
                 image_generation: ImageGenerationConfig):
        self.databases = databases
        self.isotope_generation = isotope_generation
        self.image_generation = image_generation

    def to_dict(self) -> Dict[str, Any]:
        return {
            "databases": [database.to_dict() for database in self.databases],
            "isotope_generation": self.isotope_generation.to_dict(),
            "image_generation": self.image_generation.to_dict(),
        }

    def __eq__(self, other):
        if not isinstance(other, ProcessingConfiguration):
            return NotImplemented
        return self.to_dict() == other.to_dict()
