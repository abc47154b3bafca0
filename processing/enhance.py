# processing/enhance.py
# Renders EnhancementParameters onto 8-bit pixel data. Inputs are never modified.
import logging
import math

import numpy as np
import cv2

log = logging.getLogger(__name__)


def _to_u8(x):
    return np.clip(np.rint(x), 0, 255).astype(np.uint8)


def _color_view(img):
    # alpha, when present, is left as is
    if img.ndim == 3 and img.shape[2] == 4:
        return img[..., :3], img[..., 3:]
    return img, None


def _merge(color, alpha):
    if alpha is None:
        return color
    return np.concatenate([color, alpha], axis=2)


def adjust_brightness(img, adjustment):
    color, alpha = _color_view(np.asarray(img))
    out = _to_u8(color.astype(np.float32) + float(adjustment))
    return _merge(out, alpha)


def adjust_contrast(img, factor):
    color, alpha = _color_view(np.asarray(img))
    out = _to_u8((color.astype(np.float32) - 128.0) * float(factor) + 128.0)
    return _merge(out, alpha)


def sharpen(img, amount):
    img = np.asarray(img)
    if amount == 0:
        return img.copy()
    k = float(amount) / 100.0
    kernel = np.array([
        [0.0, -k, 0.0],
        [-k, 1.0 + 4.0 * k, -k],
        [0.0, -k, 0.0],
    ], dtype=np.float32)
    color, alpha = _color_view(img)
    filtered = cv2.filter2D(color.astype(np.float32), -1, kernel, borderType=cv2.BORDER_REPLICATE)
    out = _to_u8(filtered)
    # border rows and columns keep their source values
    out[0, ...] = color[0, ...]
    out[-1, ...] = color[-1, ...]
    out[:, 0, ...] = color[:, 0, ...]
    out[:, -1, ...] = color[:, -1, ...]
    return _merge(out, alpha)


def denoise_radius(strength):
    return int(math.ceil(float(strength) / 100.0 * 3.0))


def denoise(img, strength):
    img = np.asarray(img)
    if strength == 0:
        return img.copy()
    r = denoise_radius(strength)
    color, alpha = _color_view(img)
    size = 2 * r + 1
    out = cv2.blur(color.astype(np.float32), (size, size), borderType=cv2.BORDER_REPLICATE)
    return _merge(_to_u8(out), alpha)


def apply_enhancements(img, params):
    """Brightness, contrast, sharpen, denoise in that order; neutral steps are skipped."""
    out = np.asarray(img)
    if out.dtype != np.uint8:
        raise TypeError(f"expected uint8 image, got {out.dtype}")
    if params.brightness_adj != 0:
        out = adjust_brightness(out, params.brightness_adj)
    if params.contrast_adj != 1:
        out = adjust_contrast(out, params.contrast_adj)
    if params.sharpen > 0:
        out = sharpen(out, params.sharpen)
    if params.denoise > 0:
        out = denoise(out, params.denoise)
    if out is img:
        out = out.copy()
    log.debug(f"applied {params}")
    return out
