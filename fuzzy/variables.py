# fuzzy/variables.py
# Linguistic variables for image-quality inputs and enhancement outputs.
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from config import BRIGHTNESS_RANGE, PERCENT_RANGE
from .membership import Triangular as Tri, Trapezoidal as Trap, fuzzify, mf_to_dict


class FuzzyConfigError(Exception):
    """Static fuzzy configuration (variables or rules) is inconsistent."""


@dataclass(frozen=True)
class LinguisticVariable:
    name: str
    universe: Tuple[float, float]
    terms: Mapping[str, object]
    default: Optional[float] = None  # neutral crisp value for outputs
    description: str = field(default="", compare=False)

    def __post_init__(self):
        # freeze the term table
        object.__setattr__(self, "terms", MappingProxyType(dict(self.terms)))

    @property
    def vmin(self):
        return self.universe[0]

    @property
    def vmax(self):
        return self.universe[1]

    def fuzzify(self, x):
        return fuzzify(x, self.terms)

    def to_dict(self):
        return {
            "name": self.name,
            "universe": list(self.universe),
            "terms": {t: mf_to_dict(mf) for t, mf in self.terms.items()},
            "default": self.default,
        }


BRIGHTNESS = LinguisticVariable(
    "brightness", BRIGHTNESS_RANGE,
    {
        "VeryDark":   Trap(0, 0, 40, 80),
        "Dark":       Tri(40, 80, 120),
        "Normal":     Tri(80, 127, 175),
        "Bright":     Tri(135, 175, 215),
        "VeryBright": Trap(175, 215, 255, 255),
    },
    description="mean luma",
)

CONTRAST = LinguisticVariable(
    "contrast", PERCENT_RANGE,
    {
        "VeryLow":  Trap(0, 0, 15, 25),
        "Low":      Tri(15, 25, 40),
        "Medium":   Tri(30, 50, 70),
        "High":     Tri(60, 75, 90),
        "VeryHigh": Trap(80, 90, 100, 100),
    },
    description="luma standard deviation, % of 128",
)

SHARPNESS = LinguisticVariable(
    "sharpness", PERCENT_RANGE,
    {
        "VeryBlurry": Trap(0, 0, 15, 30),
        "Blurry":     Tri(15, 30, 50),
        "Acceptable": Tri(40, 55, 70),
        "Sharp":      Tri(60, 75, 90),
        "VerySharp":  Trap(80, 90, 100, 100),
    },
    description="Laplacian RMS, % of 50",
)

NOISE = LinguisticVariable(
    "noise", PERCENT_RANGE,
    {
        "Clean":    Trap(0, 0, 10, 25),
        "Slight":   Tri(15, 30, 50),
        "Moderate": Tri(40, 60, 80),
        "Heavy":    Trap(70, 85, 100, 100),
    },
    description="mean neighbour deviation, % of 30",
)

BRIGHTNESS_ADJ = LinguisticVariable(
    "brightness_adj", (-100.0, 100.0),
    {
        "LargeDecrease": Trap(-100, -100, -80, -60),
        "SmallDecrease": Tri(-70, -40, -15),
        "NoChange":      Tri(-20, 0, 20),
        "SmallIncrease": Tri(15, 40, 70),
        "LargeIncrease": Trap(60, 80, 100, 100),
    },
    default=0.0,
    description="additive luma offset",
)

CONTRAST_ADJ = LinguisticVariable(
    "contrast_adj", (0.5, 2.0),
    {
        "LargeDecrease": Trap(0.5, 0.5, 0.6, 0.7),
        "SmallDecrease": Tri(0.7, 0.8, 0.9),
        "NoChange":      Tri(0.9, 1.0, 1.1),
        "SmallIncrease": Tri(1.1, 1.3, 1.5),
        "LargeIncrease": Trap(1.5, 1.7, 2.0, 2.0),
    },
    default=1.0,
    description="contrast gain around mid-grey",
)

SHARPEN = LinguisticVariable(
    "sharpen", (0.0, 100.0),
    {
        "None":     Trap(0, 0, 5, 15),
        "Low":      Tri(10, 20, 35),
        "Medium":   Tri(30, 45, 65),
        "High":     Tri(60, 75, 90),
        "VeryHigh": Trap(85, 92, 100, 100),
    },
    default=0.0,
    description="sharpen amount, %",
)

DENOISE = LinguisticVariable(
    "denoise", (0.0, 100.0),
    {
        "None":     Trap(0, 0, 5, 15),
        "Low":      Tri(10, 25, 40),
        "Medium":   Tri(35, 50, 70),
        "High":     Tri(65, 80, 95),
        "VeryHigh": Trap(90, 95, 100, 100),
    },
    default=0.0,
    description="denoise strength, %",
)

INPUT_VARIABLES = MappingProxyType({v.name: v for v in (BRIGHTNESS, CONTRAST, SHARPNESS, NOISE)})
OUTPUT_VARIABLES = MappingProxyType({v.name: v for v in (BRIGHTNESS_ADJ, CONTRAST_ADJ, SHARPEN, DENOISE)})


def validate_registry(inputs=INPUT_VARIABLES, outputs=OUTPUT_VARIABLES):
    names = list(inputs) + list(outputs)
    if len(set(names)) != len(names):
        raise FuzzyConfigError(f"variable names must be unique: {names}")
    for key, var in list(inputs.items()) + list(outputs.items()):
        if key != var.name:
            raise FuzzyConfigError(f"registry key {key!r} does not match variable {var.name!r}")
        lo, hi = var.universe
        if not lo < hi:
            raise FuzzyConfigError(f"{var.name}: empty universe {var.universe}")
        if not var.terms:
            raise FuzzyConfigError(f"{var.name}: no terms")
    for var in outputs.values():
        if var.default is None:
            raise FuzzyConfigError(f"{var.name}: output variable needs a neutral default")
        if not var.vmin <= var.default <= var.vmax:
            raise FuzzyConfigError(f"{var.name}: default {var.default} outside {var.universe}")


validate_registry()
