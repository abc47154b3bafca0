# fuzzy/mamdani.py
import logging

import numpy as np

from config import N_SAMPLES
from .rules import RULES
from .results import (
    AggregatedOutput, ClippedOutput, EnhancementParameters, FiredRule, InferenceResult, Metrics,
)
from .variables import INPUT_VARIABLES, OUTPUT_VARIABLES

log = logging.getLogger(__name__)


def fuzzify_inputs(metrics, inputs=INPUT_VARIABLES):
    """{variable: {term: degree}} for every term of every input variable."""
    return {name: var.fuzzify(getattr(metrics, name)) for name, var in inputs.items()}


def firing_strength(rule, fuzzified):
    # Zadeh AND; an unknown (variable, term) reads as 0
    return float(min(fuzzified.get(var, {}).get(term, 0.0) for var, term in rule.conditions))


def evaluate_rules(fuzzified, rules=RULES, outputs=OUTPUT_VARIABLES):
    fired = []
    for rule in rules:
        alpha = firing_strength(rule, fuzzified)
        if alpha <= 0:
            continue
        clipped = tuple(
            ClippedOutput(var, term, outputs[var].terms[term], alpha)
            for var, term in rule.consequents
        )
        fired.append(FiredRule(rule, alpha, clipped))
    return fired


def sample_grid(variable, n=N_SAMPLES):
    # linspace indexes min + i*step and pins both endpoints
    return np.linspace(variable.vmin, variable.vmax, n, dtype=np.float64)


def aggregate_output_curve(clipped, x_grid):
    mu = np.zeros_like(x_grid, dtype=np.float64)
    for out in clipped:
        mf_vals = np.array([out.membership_function(x) for x in x_grid], dtype=np.float64)
        mu_term = np.minimum(mf_vals, out.clipping_level)
        mu = np.maximum(mu, mu_term)
    return mu


def aggregate_outputs(fired_rules, outputs=OUTPUT_VARIABLES, n=N_SAMPLES):
    aggregated = {}
    for name, var in outputs.items():
        clipped = [o for fr in fired_rules for o in fr.outputs if o.variable == name]
        if not clipped:
            log.debug(f"no fired rule addresses {name}")
            aggregated[name] = AggregatedOutput(name)
            continue
        x_grid = sample_grid(var, n)
        mu = aggregate_output_curve(clipped, x_grid)
        aggregated[name] = AggregatedOutput(name, tuple(zip(x_grid.tolist(), mu.tolist())))
    return aggregated


def defuzz_centroid(x_grid, mu_curve):
    x_grid = np.asarray(x_grid, dtype=np.float64)
    mu_curve = np.asarray(mu_curve, dtype=np.float64)
    if mu_curve.size == 0:
        return 0.0
    den = float(np.sum(mu_curve))
    if den == 0.0:
        return 0.0
    return float(np.sum(x_grid * mu_curve)) / den


def defuzzify(aggregated):
    return defuzz_centroid(aggregated.xs, aggregated.degrees)


def crisp_parameters(aggregated, outputs=OUTPUT_VARIABLES):
    values = {name: var.default for name, var in outputs.items()}
    for name, curve in aggregated.items():
        if not curve.is_empty:
            values[name] = defuzzify(curve)
    return EnhancementParameters(**values)


def mamdani_infer(metrics, rules=RULES, inputs=INPUT_VARIABLES, outputs=OUTPUT_VARIABLES):
    if not isinstance(metrics, Metrics):
        metrics = Metrics.from_mapping(metrics)

    fuzzified = fuzzify_inputs(metrics, inputs)
    fired = evaluate_rules(fuzzified, rules, outputs)
    aggregated = aggregate_outputs(fired, outputs)
    params = crisp_parameters(aggregated, outputs)

    log.debug(f"fired {len(fired)}/{len(rules)} rules -> {params}")
    return InferenceResult(metrics, fuzzified, tuple(fired), aggregated, params)
