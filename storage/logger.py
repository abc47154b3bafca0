# storage/logger.py
import csv

from fuzzy.explain import dominant_terms

INFERENCE_HEADER = [
    "t",
    "brightness", "contrast", "sharpness", "noise",
    "brightness_term", "contrast_term", "sharpness_term", "noise_term",
    "brightness_adj", "contrast_adj", "sharpen", "denoise",
    "fired_rules",
]


def inference_row(t, result):
    m, p = result.metrics, result.parameters
    terms = dominant_terms(result.fuzzified_inputs)
    return [
        t,
        m.brightness, m.contrast, m.sharpness, m.noise,
        terms["brightness"], terms["contrast"], terms["sharpness"], terms["noise"],
        p.brightness_adj, p.contrast_adj, p.sharpen, p.denoise,
        " ".join(str(i) for i in result.fired_rule_ids),
    ]


class CSVLogger:
    def __init__(self, path):
        self.f = open(path, "w", newline="", encoding="utf-8")
        self.wr = csv.writer(self.f)

    def write_header(self, header=INFERENCE_HEADER):
        self.wr.writerow(header)

    def write_row(self, row):
        self.wr.writerow(row)

    def write_result(self, t, result):
        self.write_row(inference_row(t, result))

    def close(self):
        self.f.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
