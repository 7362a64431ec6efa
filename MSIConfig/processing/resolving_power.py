from types import MappingProxyType
from typing import Callable, Dict, Mapping

import numpy as np

from MSIConfig.metadata.experiment_metadata import ResolvingPower

REFERENCE_MZ = 200.0


class ResolutionParams:
    def __init__(self, sigma: float, fwhm: float, pts_per_mz: int):
        """
        Isotope pattern generation parameters for one resolving power tier.

        Parameters:
        ----------
        sigma : float
            Standard deviation of the Gaussian peak shape.

        fwhm : float
            Full width at half maximum of the peak shape.

        pts_per_mz : int
            Number of points per m/z unit used to sample isotope patterns.
        """
        self.sigma = sigma
        self.fwhm = fwhm
        self.pts_per_mz = pts_per_mz

    def __eq__(self, other):
        if not isinstance(other, ResolutionParams):
            return NotImplemented
        return (self.sigma, self.fwhm, self.pts_per_mz) == (other.sigma, other.fwhm, other.pts_per_mz)

    def __repr__(self):
        return f"ResolutionParams(sigma={self.sigma}, fwhm={self.fwhm}, pts_per_mz={self.pts_per_mz})"


RESOL_POWER_PARAMS: Mapping[str, ResolutionParams] = MappingProxyType({
    "70K": ResolutionParams(sigma=0.00247585727028, fwhm=0.00583019832869, pts_per_mz=2019),
    "100K": ResolutionParams(sigma=0.0017331000892, fwhm=0.00408113883008, pts_per_mz=2885),
    "140K": ResolutionParams(sigma=0.00123792863514, fwhm=0.00291509916435, pts_per_mz=4039),
    "200K": ResolutionParams(sigma=0.000866550044598, fwhm=0.00204056941504, pts_per_mz=5770),
    "250K": ResolutionParams(sigma=0.000693240035678, fwhm=0.00163245553203, pts_per_mz=7212),
    "280K": ResolutionParams(sigma=0.00061896431757, fwhm=0.00145754958217, pts_per_mz=8078),
    "500K": ResolutionParams(sigma=0.000346620017839, fwhm=0.000816227766017, pts_per_mz=14425),
    "750K": ResolutionParams(sigma=0.000231080011893, fwhm=0.000544151844011, pts_per_mz=21637),
    "1000K": ResolutionParams(sigma=0.00017331000892, fwhm=0.000408113883008, pts_per_mz=28850),
})

# exclusive upper bounds of every tier but the last
RP200_THRESHOLDS = np.array([85000, 120000, 195000, 265000, 390000, 625000, 875000], dtype=float)
RP200_TIERS = ("70K", "100K", "140K", "250K", "280K", "500K", "750K", "1000K")


FTICR = "FTICR"
ORBITRAP = "Orbitrap"


def _fticr_rp200(rp: ResolvingPower) -> float:
    return rp.resolving_power * rp.mz / REFERENCE_MZ


def _orbitrap_rp200(rp: ResolvingPower) -> float:
    return rp.resolving_power * np.sqrt(rp.mz / REFERENCE_MZ)


_RP200_NORMALIZERS: Dict[str, Callable[[ResolvingPower], float]] = {
    FTICR: _fticr_rp200,
    ORBITRAP: _orbitrap_rp200,
}


def rp_at_200(analyzer: str, rp: ResolvingPower) -> float:
    """
    Normalize a reported resolving power to the resolving power at m/z 200.

    Resolving power falls off with m/z as 1/m for FTICR and as 1/sqrt(m) for Orbitrap
    analyzers. Any other analyzer is taken as reported.
    """
    normalizer = _RP200_NORMALIZERS.get(analyzer)
    if normalizer is None:
        return float(rp.resolving_power)
    return float(normalizer(rp))


def select_tier(rp200: float) -> str:
    """
    Name of the resolving power tier for a resolving power at m/z 200.
    """
    # side="right": a value equal to a threshold belongs to the next tier
    return RP200_TIERS[int(np.searchsorted(RP200_THRESHOLDS, rp200, side="right"))]


def select_resolution_params(rp200: float) -> ResolutionParams:
    return RESOL_POWER_PARAMS[select_tier(rp200)]
