# fuzzy/rules.py
# Static rule base: 50 conjunctive IF/THEN rules, evaluated in id order.
from dataclasses import dataclass
from typing import NamedTuple, Tuple

from .variables import FuzzyConfigError, INPUT_VARIABLES, OUTPUT_VARIABLES

RULE_COUNT = 50


class Condition(NamedTuple):
    variable: str
    term: str


class Consequent(NamedTuple):
    variable: str
    term: str


@dataclass(frozen=True)
class Rule:
    id: int
    conditions: Tuple[Condition, ...]
    consequents: Tuple[Consequent, ...]
    description: str = ""

    @property
    def label(self):
        return self.description or f"Rule {self.id}"

    def __str__(self):
        lhs = " AND ".join(f"{c.variable} is {c.term}" for c in self.conditions)
        rhs = ", ".join(f"{c.variable} is {c.term}" for c in self.consequents)
        return f"R{self.id}: IF {lhs} THEN {rhs}"

    def to_dict(self):
        return {
            "id": self.id,
            "if": [c._asdict() for c in self.conditions],
            "then": [c._asdict() for c in self.consequents],
            "description": self.description,
        }


def _rule(rid, when, then, description):
    return Rule(
        rid,
        tuple(Condition(*c) for c in when),
        tuple(Consequent(*c) for c in then),
        description,
    )


B, C, S, N = "brightness", "contrast", "sharpness", "noise"
BA, CA, SH, DN = "brightness_adj", "contrast_adj", "sharpen", "denoise"

RULES = (
    # brightness
    _rule(1, [(B, "VeryDark")], [(BA, "LargeIncrease"), (CA, "SmallIncrease")],
          "Very dark image: brighten strongly, lift contrast a little"),
    _rule(2, [(B, "VeryDark"), (C, "VeryLow")], [(BA, "LargeIncrease"), (CA, "LargeIncrease")],
          "Very dark and flat: brighten and stretch contrast strongly"),
    _rule(3, [(B, "Dark")], [(BA, "SmallIncrease")],
          "Dark image: brighten a little"),
    _rule(4, [(B, "Dark"), (C, "Low")], [(CA, "SmallIncrease")],
          "Dark with low contrast: lift contrast a little"),
    _rule(5, [(B, "Normal"), (C, "Medium")], [(BA, "NoChange"), (CA, "NoChange")],
          "Normal brightness and medium contrast: no brightness or contrast change"),
    _rule(6, [(B, "Bright")], [(BA, "SmallDecrease")],
          "Bright image: darken a little"),
    _rule(7, [(B, "Bright"), (C, "High")], [(CA, "SmallDecrease")],
          "Bright with high contrast: soften contrast a little"),
    _rule(8, [(B, "VeryBright")], [(BA, "LargeDecrease"), (CA, "SmallDecrease")],
          "Very bright image: darken strongly, soften contrast a little"),
    _rule(9, [(B, "VeryBright"), (C, "VeryHigh")], [(BA, "LargeDecrease"), (CA, "LargeDecrease")],
          "Very bright and harsh: darken and soften contrast strongly"),
    # contrast
    _rule(10, [(C, "VeryLow"), (B, "Normal")], [(CA, "LargeIncrease")],
          "Flat image at normal brightness: stretch contrast strongly"),
    _rule(11, [(C, "VeryLow"), (B, "Dark")], [(CA, "SmallIncrease")],
          "Flat dark image: lift contrast a little"),
    _rule(12, [(C, "Low")], [(CA, "SmallIncrease")],
          "Low contrast: lift contrast a little"),
    _rule(13, [(C, "Medium"), (B, "Normal")], [(CA, "NoChange")],
          "Medium contrast at normal brightness: keep contrast"),
    _rule(14, [(C, "High"), (B, "Bright")], [(CA, "SmallDecrease")],
          "High contrast on a bright image: soften contrast a little"),
    _rule(15, [(C, "High")], [(CA, "SmallDecrease")],
          "High contrast: soften contrast a little"),
    _rule(16, [(C, "VeryHigh")], [(CA, "LargeDecrease")],
          "Very high contrast: soften contrast strongly"),
    _rule(17, [(C, "VeryLow"), (S, "VeryBlurry")], [(CA, "LargeIncrease"), (SH, "Medium")],
          "Flat and very blurry: stretch contrast, sharpen moderately"),
    _rule(18, [(C, "Low"), (S, "Blurry")], [(SH, "Low")],
          "Low contrast and blurry: sharpen lightly"),
    # sharpness x noise
    _rule(19, [(S, "VeryBlurry"), (N, "Clean")], [(SH, "VeryHigh")],
          "Very blurry and clean: sharpen very strongly"),
    _rule(20, [(S, "VeryBlurry"), (N, "Slight")], [(SH, "High"), (DN, "Low")],
          "Very blurry with slight noise: sharpen strongly, denoise lightly"),
    _rule(21, [(S, "VeryBlurry"), (N, "Moderate")], [(SH, "Medium"), (DN, "Medium")],
          "Very blurry with moderate noise: sharpen and denoise moderately"),
    _rule(22, [(S, "Blurry"), (N, "Clean")], [(SH, "High")],
          "Blurry and clean: sharpen strongly"),
    _rule(23, [(S, "Blurry"), (N, "Slight")], [(SH, "Medium"), (DN, "Low")],
          "Blurry with slight noise: sharpen moderately, denoise lightly"),
    _rule(24, [(S, "Blurry"), (N, "Moderate")], [(SH, "Low"), (DN, "High")],
          "Blurry with moderate noise: sharpen lightly, denoise strongly"),
    _rule(25, [(S, "Acceptable"), (N, "Clean")], [(SH, "Low")],
          "Acceptable sharpness and clean: sharpen lightly"),
    _rule(26, [(S, "Acceptable"), (N, "Slight")], [(SH, "None"), (DN, "Low")],
          "Acceptable sharpness with slight noise: no sharpening, denoise lightly"),
    _rule(27, [(S, "Sharp")], [(SH, "None")],
          "Sharp image: no sharpening"),
    _rule(28, [(S, "VerySharp")], [(SH, "None")],
          "Very sharp image: no sharpening"),
    _rule(29, [(S, "VerySharp"), (B, "VeryDark")], [(BA, "LargeIncrease")],
          "Very sharp but very dark: brighten strongly"),
    # noise
    _rule(30, [(N, "Clean")], [(DN, "None")],
          "Clean image: no denoising"),
    _rule(31, [(N, "Slight"), (S, "Sharp")], [(DN, "Low")],
          "Slight noise on a sharp image: denoise lightly"),
    _rule(32, [(N, "Slight"), (S, "Acceptable")], [(DN, "Low")],
          "Slight noise at acceptable sharpness: denoise lightly"),
    _rule(33, [(N, "Slight"), (S, "Blurry")], [(DN, "Medium")],
          "Slight noise on a blurry image: denoise moderately"),
    _rule(34, [(N, "Moderate"), (S, "VerySharp")], [(DN, "Medium"), (SH, "None")],
          "Moderate noise on a very sharp image: denoise moderately, no sharpening"),
    _rule(35, [(N, "Moderate"), (S, "Sharp")], [(DN, "High"), (SH, "None")],
          "Moderate noise on a sharp image: denoise strongly, no sharpening"),
    _rule(36, [(N, "Moderate")], [(DN, "High")],
          "Moderate noise: denoise strongly"),
    _rule(37, [(N, "Heavy"), (S, "VeryBlurry")], [(DN, "VeryHigh"), (SH, "None")],
          "Heavy noise and very blurry: denoise maximally, no sharpening"),
    _rule(38, [(N, "Heavy")], [(DN, "VeryHigh"), (SH, "None")],
          "Heavy noise: denoise maximally, no sharpening"),
    # combined
    _rule(39, [(B, "Normal"), (C, "Medium"), (S, "Sharp"), (N, "Clean")],
          [(BA, "NoChange"), (CA, "NoChange"), (SH, "None"), (DN, "None")],
          "Well-exposed, sharp and clean: leave the image alone"),
    _rule(40, [(B, "VeryDark"), (C, "VeryLow"), (S, "VeryBlurry")],
          [(BA, "LargeIncrease"), (CA, "LargeIncrease"), (SH, "Medium")],
          "Very dark, flat and blurry: brighten, stretch contrast, sharpen moderately"),
    _rule(41, [(B, "VeryBright"), (C, "VeryHigh"), (S, "VerySharp")],
          [(BA, "LargeDecrease"), (CA, "LargeDecrease"), (SH, "None")],
          "Very bright, harsh and very sharp: darken, soften contrast, no sharpening"),
    _rule(42, [(C, "VeryLow"), (S, "VeryBlurry"), (N, "Heavy")],
          [(CA, "SmallIncrease"), (SH, "None"), (DN, "VeryHigh")],
          "Flat, very blurry and noisy: lift contrast a little, denoise maximally"),
    _rule(43, [(B, "Dark"), (C, "Low"), (N, "Moderate")],
          [(BA, "SmallIncrease"), (CA, "SmallIncrease"), (DN, "Medium")],
          "Dark, low contrast, moderate noise: brighten and lift contrast a little, denoise moderately"),
    _rule(44, [(B, "Bright"), (S, "Blurry"), (N, "Slight")],
          [(BA, "SmallDecrease"), (SH, "Medium"), (DN, "Low")],
          "Bright, blurry, slight noise: darken a little, sharpen moderately, denoise lightly"),
    _rule(45, [(C, "High"), (S, "VerySharp"), (N, "Clean")],
          [(CA, "SmallDecrease"), (SH, "None")],
          "High contrast, very sharp and clean: soften contrast a little, no sharpening"),
    _rule(46, [(B, "VeryDark"), (N, "Heavy")],
          [(BA, "LargeIncrease"), (DN, "VeryHigh"), (SH, "None")],
          "Very dark and noisy: brighten strongly, denoise maximally, no sharpening"),
    _rule(47, [(B, "VeryBright"), (C, "VeryLow")],
          [(BA, "LargeDecrease"), (CA, "LargeIncrease")],
          "Very bright and washed out: darken strongly, stretch contrast strongly"),
    _rule(48, [(B, "VeryDark"), (C, "VeryHigh")],
          [(BA, "LargeIncrease"), (CA, "SmallDecrease")],
          "Very dark with harsh contrast: brighten strongly, soften contrast a little"),
    _rule(49, [(S, "VeryBlurry"), (N, "Heavy"), (C, "VeryLow")],
          [(DN, "VeryHigh"), (SH, "None"), (CA, "SmallIncrease")],
          "Very blurry, noisy and flat: denoise maximally, lift contrast a little"),
    _rule(50, [(B, "Normal"), (C, "Medium"), (S, "Blurry"), (N, "Moderate")],
          [(SH, "None"), (DN, "High")],
          "Well-exposed but blurry and noisy: denoise strongly, no sharpening"),
)


def validate_rule_base(rules, inputs=INPUT_VARIABLES, outputs=OUTPUT_VARIABLES, expected_count=None):
    if expected_count is not None and len(rules) != expected_count:
        raise FuzzyConfigError(f"expected {expected_count} rules, got {len(rules)}")
    prev_id = None
    for rule in rules:
        if prev_id is not None and rule.id <= prev_id:
            raise FuzzyConfigError(f"rule ids must be unique and ascending: {rule.id} after {prev_id}")
        prev_id = rule.id
        if not rule.conditions:
            raise FuzzyConfigError(f"rule {rule.id}: empty antecedent")
        if not rule.consequents:
            raise FuzzyConfigError(f"rule {rule.id}: empty consequent")
        for var, term in rule.conditions:
            if var not in inputs:
                raise FuzzyConfigError(f"rule {rule.id}: unknown input variable {var!r}")
            if term not in inputs[var].terms:
                raise FuzzyConfigError(f"rule {rule.id}: {var} has no term {term!r}")
        for var, term in rule.consequents:
            if var not in outputs:
                raise FuzzyConfigError(f"rule {rule.id}: unknown output variable {var!r}")
            if term not in outputs[var].terms:
                raise FuzzyConfigError(f"rule {rule.id}: {var} has no term {term!r}")


validate_rule_base(RULES, expected_count=RULE_COUNT)
