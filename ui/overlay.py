# ui/overlay.py
import numpy as np
import cv2

from fuzzy.explain import dominant_terms
from processing.stats import gray_histogram


def draw_hud(canvas, result, fps=None):
    H, W = canvas.shape[:2]
    overlay = canvas.copy()
    alpha = 0.6
    lh = 24
    rect_h = 11 * lh
    rect_w = min(W, 560)
    cv2.rectangle(overlay, (0, 0), (rect_w, rect_h), (0, 0, 0), -1)
    cv2.addWeighted(overlay, alpha, canvas, 1 - alpha, 0, canvas)

    x_pad = 12
    fs = 0.55
    y0 = 28
    m, p = result.metrics, result.parameters
    terms = dominant_terms(result.fuzzified_inputs)

    cv2.putText(canvas, "FUZZY IMAGE ENHANCEMENT (Mamdani)", (x_pad, y0),
                cv2.FONT_HERSHEY_DUPLEX, 0.65, (255, 255, 255), 1)

    rows = [
        (f"Brightness: {m.brightness:6.1f} | {terms['brightness']}", (100, 255, 100)),
        (f"Contrast  : {m.contrast:6.1f} | {terms['contrast']}", (255, 255, 100)),
        (f"Sharpness : {m.sharpness:6.1f} | {terms['sharpness']}", (255, 100, 100)),
        (f"Noise     : {m.noise:6.1f} | {terms['noise']}", (255, 100, 255)),
        None,
        (f"brightness_adj: {p.brightness_adj:+7.2f}", (255, 255, 255)),
        (f"contrast_adj  : {p.contrast_adj:7.3f}", (255, 255, 255)),
        (f"sharpen       : {p.sharpen:7.2f}", (255, 255, 255)),
        (f"denoise       : {p.denoise:7.2f}", (255, 255, 255)),
    ]
    for i, row in enumerate(rows, start=1):
        if row is None:
            continue
        text, color = row
        cv2.putText(canvas, text, (x_pad, y0 + i * lh), cv2.FONT_HERSHEY_SIMPLEX, fs, color, 1)

    footer = f"rules fired: {len(result.fired_rules)}"
    if fps is not None:
        footer += f" | {fps:4.1f} fps"
    cv2.putText(canvas, footer, (x_pad, y0 + (len(rows) + 1) * lh),
                cv2.FONT_HERSHEY_SIMPLEX, fs, (200, 200, 200), 1)

    cv2.putText(canvas, "ESC/q to quit", (W - 150, H - 12),
                cv2.FONT_HERSHEY_SIMPLEX, 0.5, (230, 230, 230), 1)
    return canvas


def draw_histogram(canvas, img, origin=None, size=(256, 80), color=(220, 220, 220)):
    hist = gray_histogram(img).astype(np.float64)
    H, W = canvas.shape[:2]
    w, h = size
    x0, y0 = origin if origin is not None else (W - w - 10, 10 + h)
    peak = hist.max()
    if peak <= 0:
        return canvas
    pts = [(x0 + int(i * w / 256), y0 - int(v / peak * h)) for i, v in enumerate(hist)]
    cv2.rectangle(canvas, (x0, y0 - h), (x0 + w, y0), (0, 0, 0), -1)
    cv2.polylines(canvas, [np.array(pts, np.int32).reshape((-1, 1, 2))], False, color, 1, cv2.LINE_AA)
    return canvas


def side_by_side(original, enhanced, labels=("original", "enhanced")):
    left, right = _bgr(original), _bgr(enhanced)
    if left.shape[0] != right.shape[0]:
        scale = left.shape[0] / right.shape[0]
        right = cv2.resize(right, (int(right.shape[1] * scale), left.shape[0]))
    out = np.hstack([left, right])
    for x, label in ((10, labels[0]), (left.shape[1] + 10, labels[1])):
        cv2.putText(out, label, (x, out.shape[0] - 12), cv2.FONT_HERSHEY_SIMPLEX, 0.6, (0, 0, 0), 3, cv2.LINE_AA)
        cv2.putText(out, label, (x, out.shape[0] - 12), cv2.FONT_HERSHEY_SIMPLEX, 0.6, (255, 255, 255), 1, cv2.LINE_AA)
    return out


def _bgr(img):
    img = np.asarray(img)
    if img.ndim == 2:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2BGR)
    if img.shape[2] == 4:
        return cv2.cvtColor(img, cv2.COLOR_BGRA2BGR)
    return img.copy()
