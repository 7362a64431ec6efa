from typing import Dict, List

POSITIVE = "+"
NEGATIVE = "-"


def split_adducts(value: str) -> List[str]:
    return [adduct.strip() for adduct in value.split(",") if adduct.strip()]


class AdductsConfig:
    def __init__(self, positive: List[str], negative: List[str], default_ppm: float = 3.0):
        """
        Processing defaults applied when a dataset does not specify them.

        Parameters:
        ----------
        positive : List[str]
            Adducts used for positive mode datasets.

        negative : List[str]
            Adducts used for negative mode datasets.

        default_ppm : float
            Mass tolerance in ppm (default: 3.0).
        """
        self.positive = list(positive)
        self.negative = list(negative)
        self.default_ppm = default_ppm

    @property
    def default_adducts(self) -> Dict[str, List[str]]:
        """Default adducts keyed by polarity symbol."""
        return {POSITIVE: list(self.positive), NEGATIVE: list(self.negative)}

    @classmethod
    def from_parser(cls, parser) -> "AdductsConfig":
        return cls(
            positive=split_adducts(parser.get("default_adducts_positive")),
            negative=split_adducts(parser.get("default_adducts_negative")),
            default_ppm=parser.get("default_ppm"),
        )
