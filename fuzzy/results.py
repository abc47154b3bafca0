# fuzzy/results.py
from dataclasses import dataclass, field
from typing import Dict, Mapping, Tuple

import numpy as np

from .membership import mf_to_dict
from .rules import Rule

METRIC_NAMES = ("brightness", "contrast", "sharpness", "noise")


@dataclass(frozen=True)
class Metrics:
    brightness: float  # 0..255
    contrast: float    # 0..100
    sharpness: float   # 0..100
    noise: float       # 0..100

    @classmethod
    def from_mapping(cls, values: Mapping[str, float]) -> "Metrics":
        return cls(*(float(values[k]) for k in METRIC_NAMES))

    def as_dict(self) -> Dict[str, float]:
        return {k: getattr(self, k) for k in METRIC_NAMES}

    def rounded(self, ndigits: int) -> "Metrics":
        return Metrics(*(round(getattr(self, k), ndigits) for k in METRIC_NAMES))


@dataclass(frozen=True)
class ClippedOutput:
    """Consequent term mf capped at the rule's firing strength."""
    variable: str
    term: str
    membership_function: object
    clipping_level: float

    def degree(self, x):
        return min(self.membership_function(x), self.clipping_level)

    def to_dict(self):
        return {
            "variable": self.variable,
            "term": self.term,
            "membership_function": mf_to_dict(self.membership_function),
            "clipping_level": self.clipping_level,
        }


@dataclass(frozen=True)
class FiredRule:
    rule: Rule
    firing_strength: float
    outputs: Tuple[ClippedOutput, ...]

    def to_dict(self):
        return {
            "rule": self.rule.to_dict(),
            "firing_strength": self.firing_strength,
            "outputs": [o.to_dict() for o in self.outputs],
        }


@dataclass(frozen=True)
class AggregatedOutput:
    """Sampled aggregate curve; empty points means no rule addressed the variable."""
    variable: str
    points: Tuple[Tuple[float, float], ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.points

    @property
    def xs(self) -> np.ndarray:
        return np.array([p[0] for p in self.points], dtype=np.float64)

    @property
    def degrees(self) -> np.ndarray:
        return np.array([p[1] for p in self.points], dtype=np.float64)

    def to_dict(self):
        return {"variable": self.variable, "points": [list(p) for p in self.points]}


@dataclass(frozen=True)
class EnhancementParameters:
    brightness_adj: float = 0.0  # -100..100
    contrast_adj: float = 1.0    # 0.5..2.0
    sharpen: float = 0.0         # 0..100
    denoise: float = 0.0         # 0..100

    def as_dict(self) -> Dict[str, float]:
        return {
            "brightness_adj": self.brightness_adj,
            "contrast_adj": self.contrast_adj,
            "sharpen": self.sharpen,
            "denoise": self.denoise,
        }


@dataclass(frozen=True)
class InferenceResult:
    metrics: Metrics
    fuzzified_inputs: Dict[str, Dict[str, float]]
    fired_rules: Tuple[FiredRule, ...]
    aggregated_outputs: Dict[str, AggregatedOutput]
    parameters: EnhancementParameters = field(default_factory=EnhancementParameters)

    @property
    def fired_rule_ids(self):
        return [fr.rule.id for fr in self.fired_rules]

    def to_dict(self):
        return {
            "metrics": self.metrics.as_dict(),
            "fuzzified_inputs": {v: dict(t) for v, t in self.fuzzified_inputs.items()},
            "fired_rules": [fr.to_dict() for fr in self.fired_rules],
            "aggregated_outputs": {k: a.to_dict() for k, a in self.aggregated_outputs.items()},
            "parameters": self.parameters.as_dict(),
        }
