# processing/smoothing.py
from fuzzy.results import Metrics, METRIC_NAMES


def ewma(prev, x, alpha):
    if prev is None:
        return float(x)
    return float(alpha * x + (1.0 - alpha) * prev)


def ewma_metrics(prev, cur, alpha):
    if prev is None:
        return cur
    return Metrics(*(ewma(getattr(prev, k), getattr(cur, k), alpha) for k in METRIC_NAMES))
