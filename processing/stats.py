# processing/stats.py
import numpy as np

from vision.metrics import to_gray


def gray_histogram(img):
    """256-bin histogram of rounded luma."""
    gray = np.clip(np.rint(to_gray(img)), 0, 255).astype(np.int64)
    return np.bincount(gray.ravel(), minlength=256)


def channel_statistics(img):
    img = np.asarray(img)
    if img.ndim == 2:
        img = img[..., None]
    names = ("b", "g", "r", "a")[: img.shape[2]] if img.shape[2] > 1 else ("gray",)
    flat = img.reshape(-1, img.shape[2]).astype(np.float64)
    return {
        "mean": {n: float(v) for n, v in zip(names, flat.mean(axis=0))},
        "min": {n: float(v) for n, v in zip(names, flat.min(axis=0))},
        "max": {n: float(v) for n, v in zip(names, flat.max(axis=0))},
    }
