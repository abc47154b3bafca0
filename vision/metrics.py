# vision/metrics.py
import numpy as np
import cv2

from config import CONTRAST_STD_REF, SHARPNESS_RMS_REF, NOISE_DIFF_REF
from fuzzy.results import Metrics


class ImageError(ValueError):
    """Array cannot be analysed as an image."""


def to_gray(img):
    """Float luma (0.299 R + 0.587 G + 0.114 B) from a gray, BGR or BGRA array."""
    img = np.asarray(img)
    if img.size == 0:
        raise ImageError("empty image")
    if img.ndim == 2:
        return img.astype(np.float64)
    if img.ndim != 3 or img.shape[2] not in (3, 4):
        raise ImageError(f"expected HxW, HxWx3 or HxWx4 array, got shape {img.shape}")
    code = cv2.COLOR_BGR2GRAY if img.shape[2] == 3 else cv2.COLOR_BGRA2GRAY
    return cv2.cvtColor(img.astype(np.float32), code).astype(np.float64)


def _interior_laplacian(gray):
    # 4-neighbour kernel [[0,1,0],[1,-4,1],[0,1,0]], border pixels excluded
    if gray.shape[0] < 3 or gray.shape[1] < 3:
        return np.empty(0, dtype=np.float64)
    lap = cv2.Laplacian(gray, cv2.CV_64F, ksize=1)
    return lap[1:-1, 1:-1]


def brightness(gray):
    return float(np.mean(gray))


def contrast(gray):
    return float(min(np.std(gray) / CONTRAST_STD_REF * 100.0, 100.0))


def sharpness(gray):
    lap = _interior_laplacian(gray)
    if lap.size == 0:
        return 0.0
    rms = float(np.sqrt(np.mean(lap * lap)))
    return min(rms / SHARPNESS_RMS_REF * 100.0, 100.0)


def noise(gray):
    # |center - mean(4 neighbours)| == |laplacian| / 4
    lap = _interior_laplacian(gray)
    if lap.size == 0:
        return 0.0
    avg = float(np.mean(np.abs(lap))) / 4.0
    return min(avg / NOISE_DIFF_REF * 100.0, 100.0)


def analyze_image(img):
    gray = to_gray(img)
    return Metrics(
        brightness=brightness(gray),
        contrast=contrast(gray),
        sharpness=sharpness(gray),
        noise=noise(gray),
    )
