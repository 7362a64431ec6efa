import math
from enum import Enum
from typing import Any, List, Mapping, Optional, Union

from MSIConfig.metadata.errors import InvalidMetadata

MS_ANALYSIS = "MS_Analysis"
OPTIONS = "metaspace_options"


class Polarity(Enum):
    POSITIVE = "Positive"
    NEGATIVE = "Negative"

    @property
    def symbol(self) -> str:
        return "+" if self is Polarity.POSITIVE else "-"


class ResolvingPower:
    def __init__(self, mz: float, resolving_power: float):
        """
        Resolving power of the detector, reported at a given m/z.
        """
        self.mz = mz
        self.resolving_power = resolving_power


class ExperimentMetadata:
    """
    Validated view on the metadata submitted with a dataset.

    The loosely structured submission (a nested mapping) is checked once, here,
    and every field the processing configuration depends on is normalized:
    numeric fields are floats and the molecular database selection is always a list.
    """

    def __init__(
            self,
            polarity: Polarity,
            analyzer: str,
            resolving_power: ResolvingPower,
            databases: List[str],
            ppm: Optional[float] = None,
            adducts: Optional[List[str]] = None,
            dataset_name: str = "",
    ):
        self.polarity = polarity
        self.analyzer = analyzer
        self.resolving_power = resolving_power
        self.databases = databases
        self.ppm = ppm
        self.adducts = adducts
        self.dataset_name = dataset_name

    @classmethod
    def from_dict(cls, meta_json: Mapping[str, Any]) -> "ExperimentMetadata":
        """
        Parse and validate submitted metadata.

        :param meta_json: Mapping, the metadata as submitted (parsed JSON).
        :return: ExperimentMetadata
        :raises InvalidMetadata: a required field is missing or has an unusable value.
        """
        ms_analysis = _require_mapping(meta_json, MS_ANALYSIS, MS_ANALYSIS)
        options = _require_mapping(meta_json, OPTIONS, OPTIONS)

        polarity = _parse_polarity(_require(ms_analysis, "Polarity", f"{MS_ANALYSIS}.Polarity"))

        analyzer = _require(ms_analysis, "Analyzer", f"{MS_ANALYSIS}.Analyzer")
        if not isinstance(analyzer, str):
            raise InvalidMetadata(f"expected a string, got {analyzer!r}", f"{MS_ANALYSIS}.Analyzer")

        rp_path = f"{MS_ANALYSIS}.Detector_Resolving_Power"
        rp = _require_mapping(ms_analysis, "Detector_Resolving_Power", rp_path)
        resolving_power = ResolvingPower(
            mz=_parse_positive_number(_require(rp, "mz", f"{rp_path}.mz"), f"{rp_path}.mz"),
            resolving_power=_parse_positive_number(
                _require(rp, "Resolving_Power", f"{rp_path}.Resolving_Power"), f"{rp_path}.Resolving_Power"
            ),
        )

        databases = _parse_databases(
            _require(options, "Metabolite_Database", f"{OPTIONS}.Metabolite_Database")
        )

        ppm = None
        if "ppm" in options:
            ppm = options["ppm"]
            if isinstance(ppm, bool) or not isinstance(ppm, (int, float)):
                raise InvalidMetadata(f"expected a number, got {ppm!r}", f"{OPTIONS}.ppm")

        adducts = None
        if "Adducts" in options:
            adducts = _parse_string_list(options["Adducts"], f"{OPTIONS}.Adducts")

        dataset_name = options.get("Dataset_Name") or ""

        return cls(
            polarity=polarity,
            analyzer=analyzer,
            resolving_power=resolving_power,
            databases=databases,
            ppm=ppm,
            adducts=adducts,
            dataset_name=dataset_name,
        )


def _require(section: Mapping[str, Any], key: str, path: str) -> Any:
    if key not in section or section[key] is None:
        raise InvalidMetadata("missing required field", path)
    return section[key]


def _require_mapping(section: Mapping[str, Any], key: str, path: str) -> Mapping[str, Any]:
    value = _require(section, key, path)
    if not isinstance(value, Mapping):
        raise InvalidMetadata(f"expected an object, got {type(value).__name__}", path)
    return value


def _parse_polarity(value: Any) -> Polarity:
    try:
        return Polarity(value)
    except ValueError:
        valid = ", ".join(p.value for p in Polarity)
        raise InvalidMetadata(f"unknown polarity {value!r}, expected one of: {valid}",
                              f"{MS_ANALYSIS}.Polarity") from None


def _parse_positive_number(value: Union[str, int, float], path: str) -> float:
    """
    Zero and negative values are rejected along with NaN and infinity: a zero resolving power
    says nothing about the detector, and a negative m/z turns the Orbitrap normalization into NaN.
    """
    if isinstance(value, bool):
        raise InvalidMetadata(f"expected a number, got {value!r}", path)
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        raise InvalidMetadata(f"expected a number, got {value!r}", path) from None
    if not math.isfinite(number) or number <= 0:
        raise InvalidMetadata(f"expected a positive finite number, got {value!r}", path)
    return number


def _parse_string_list(value: Any, path: str) -> List[str]:
    if not isinstance(value, (list, tuple)):
        raise InvalidMetadata(f"expected a list of strings, got {value!r}", path)
    for item in value:
        if not isinstance(item, str):
            raise InvalidMetadata(f"expected a list of strings, got item {item!r}", path)
    return list(value)


def _parse_databases(value: Union[str, List[str]]) -> List[str]:
    """A single database name or a list of them, as a list."""
    if isinstance(value, str):
        return [value]
    return _parse_string_list(value, f"{OPTIONS}.Metabolite_Database")
