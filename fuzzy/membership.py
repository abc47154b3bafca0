# fuzzy/membership.py
import math
from dataclasses import dataclass


def trimf(x, a, b, c):
    """Triangle with apex at b. Zero at a and c, except a == b keeps x == a on the apex. NaN reads 0."""
    x = float(x)
    if math.isnan(x) or x < a or x > c: return 0.0
    if x == b: return 1.0
    if x == a or x == c: return 0.0
    if x < b: return (x - a) / (b - a)
    return (c - x) / (c - b)


def trapmf(x, a, b, c, d):
    """Trapezoid with plateau [b, c].

    The left foot a is 0 unless a == b: then the plateau starts at the
    universe bound and x == a reads 1 (left shoulder). The right foot d is
    always 0. NaN reads 0.
    """
    x = float(x)
    if math.isnan(x) or x < a or x >= d: return 0.0
    if x == a: return 1.0 if a == b else 0.0
    if b <= x <= c: return 1.0
    if x < b: return (x - a) / (b - a)
    return (d - x) / (d - c)


@dataclass(frozen=True)
class Triangular:
    a: float
    b: float
    c: float
    kind = "tri"

    def __post_init__(self):
        if not (self.a <= self.b <= self.c):
            raise ValueError(f"triangular points must satisfy a<=b<=c, got {self.points}")

    @property
    def points(self):
        return (self.a, self.b, self.c)

    def __call__(self, x):
        return trimf(x, self.a, self.b, self.c)


@dataclass(frozen=True)
class Trapezoidal:
    a: float
    b: float
    c: float
    d: float
    kind = "trap"

    def __post_init__(self):
        if not (self.a <= self.b <= self.c <= self.d):
            raise ValueError(f"trapezoidal points must satisfy a<=b<=c<=d, got {self.points}")

    @property
    def points(self):
        return (self.a, self.b, self.c, self.d)

    def __call__(self, x):
        return trapmf(x, self.a, self.b, self.c, self.d)


def mf_eval(x, mf):
    if isinstance(mf, Trapezoidal):
        return trapmf(x, *mf.points)
    if isinstance(mf, Triangular):
        return trimf(x, *mf.points)
    raise TypeError(f"unsupported membership function: {mf!r}")


def mf_to_dict(mf):
    return {"type": mf.kind, "points": list(mf.points)}


def fuzzify(x, terms):
    """Degree of x in every term of a {name: mf} mapping, in term order."""
    return {name: mf_eval(x, mf) for name, mf in terms.items()}


def crisp_label(mu_dict):
    return max(mu_dict.items(), key=lambda kv: kv[1])[0]
