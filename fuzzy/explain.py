# fuzzy/explain.py
# Human-readable views of an InferenceResult: chart series, rule rows, advice.
from config import N_SAMPLES
from .mamdani import sample_grid
from .membership import crisp_label, mf_eval
from .variables import INPUT_VARIABLES, OUTPUT_VARIABLES

CHART_COLORS = ("#8884d8", "#82ca9d", "#ffc658", "#ff7300", "#8dd1e1")

# thresholds below which a crisp output is reported as "no action"
BRIGHTNESS_ACTION_MIN = 20.0
CONTRAST_ACTION_MIN = 0.1
SHARPEN_ACTION_MIN = 10.0
DENOISE_ACTION_MIN = 10.0


def membership_chart(variable_name, current_value=None, is_output=False, n=N_SAMPLES):
    registry = OUTPUT_VARIABLES if is_output else INPUT_VARIABLES
    if variable_name not in registry:
        raise KeyError(f"variable {variable_name} not found")
    var = registry[variable_name]
    xs = sample_grid(var, n).tolist()
    functions = []
    for i, (term, mf) in enumerate(var.terms.items()):
        functions.append({
            "name": term,
            "points": [(x, mf_eval(x, mf)) for x in xs],
            "color": CHART_COLORS[i % len(CHART_COLORS)],
        })
    return {
        "variable": variable_name,
        "universe": var.universe,
        "functions": functions,
        "current_value": current_value,
    }


def rule_rows(result):
    rows = []
    for fr in result.fired_rules:
        rule = fr.rule
        rows.append({
            "rule_id": rule.id,
            "description": rule.label,
            "firing_strength": fr.firing_strength,
            "is_active": fr.firing_strength > 0,
            "antecedents": [
                {
                    "variable": var,
                    "term": term,
                    "membership": result.fuzzified_inputs.get(var, {}).get(term, 0.0),
                }
                for var, term in rule.conditions
            ],
            "consequents": [{"variable": var, "term": term} for var, term in rule.consequents],
        })
    return rows


def dominant_terms(fuzzified):
    return {var: crisp_label(degrees) for var, degrees in fuzzified.items()}


def linguistic_interpretation(metrics):
    parts = []

    if metrics.brightness < 60:
        parts.append("dark")
    elif metrics.brightness > 200:
        parts.append("very bright")
    elif metrics.brightness > 160:
        parts.append("bright")
    else:
        parts.append("normal brightness")

    if metrics.contrast < 20:
        parts.append("very low contrast")
    elif metrics.contrast < 40:
        parts.append("low contrast")
    elif metrics.contrast > 85:
        parts.append("very high contrast")
    elif metrics.contrast > 70:
        parts.append("high contrast")
    else:
        parts.append("medium contrast")

    if metrics.sharpness < 25:
        parts.append("very blurry")
    elif metrics.sharpness < 45:
        parts.append("blurry")
    elif metrics.sharpness > 85:
        parts.append("very sharp")
    elif metrics.sharpness > 65:
        parts.append("sharp")
    else:
        parts.append("acceptable sharpness")

    if metrics.noise > 75:
        parts.append("heavy noise")
    elif metrics.noise > 45:
        parts.append("moderate noise")
    elif metrics.noise > 20:
        parts.append("slight noise")
    else:
        parts.append("clean")

    return f"Image is {', '.join(parts)}."


def recommended_actions(result):
    p = result.parameters
    actions = []

    if abs(p.brightness_adj) > BRIGHTNESS_ACTION_MIN:
        if p.brightness_adj > 0:
            actions.append(f"Increase brightness by {p.brightness_adj:.1f} units")
        else:
            actions.append(f"Decrease brightness by {abs(p.brightness_adj):.1f} units")

    if abs(p.contrast_adj - 1.0) > CONTRAST_ACTION_MIN:
        if p.contrast_adj > 1.0:
            actions.append(f"Increase contrast by {(p.contrast_adj - 1.0) * 100:.0f}%")
        else:
            actions.append(f"Decrease contrast by {(1.0 - p.contrast_adj) * 100:.0f}%")

    if p.sharpen > SHARPEN_ACTION_MIN:
        actions.append(f"Apply {p.sharpen:.0f}% sharpening")

    if p.denoise > DENOISE_ACTION_MIN:
        actions.append(f"Apply {p.denoise:.0f}% noise reduction")

    if not actions:
        actions.append("No enhancement needed - image quality is already good")
    return actions


def explain(result):
    return {
        "interpretation": linguistic_interpretation(result.metrics),
        "active_rules_count": len(result.fired_rules),
        "dominant_characteristics": dominant_terms(result.fuzzified_inputs),
        "recommended_actions": recommended_actions(result),
    }


def format_report(result, max_rules=10):
    """Plain-text report for terminals."""
    m, p = result.metrics, result.parameters
    lines = [
        f"metrics    : brightness={m.brightness:.2f} contrast={m.contrast:.2f} "
        f"sharpness={m.sharpness:.2f} noise={m.noise:.2f}",
        f"terms      : " + ", ".join(f"{v}={t}" for v, t in dominant_terms(result.fuzzified_inputs).items()),
        f"parameters : brightness_adj={p.brightness_adj:.3f} contrast_adj={p.contrast_adj:.3f} "
        f"sharpen={p.sharpen:.3f} denoise={p.denoise:.3f}",
        f"fired rules: {len(result.fired_rules)}",
    ]
    strongest = sorted(result.fired_rules, key=lambda fr: -fr.firing_strength)[:max_rules]
    for fr in strongest:
        lines.append(f"  {fr.firing_strength:5.3f}  {fr.rule}")
    lines.append(linguistic_interpretation(m))
    lines.extend(f"- {a}" for a in recommended_actions(result))
    return "\n".join(lines)


def dashboard(result, n=N_SAMPLES):
    """Chart series for all eight variables, current values marked, plus the fired-rule rows."""
    charts = {name: membership_chart(name, getattr(result.metrics, name), False, n) for name in INPUT_VARIABLES}
    charts.update(
        {name: membership_chart(name, getattr(result.parameters, name), True, n) for name in OUTPUT_VARIABLES})
    return {"charts": charts, "rules": rule_rows(result)}
