import numpy as np
import pytest

from fuzzy.mamdani import mamdani_infer
from fuzzy.results import EnhancementParameters, Metrics
from vision.metrics import ImageError, analyze_image, to_gray


def test_uniform_image(gray_image):
    m = analyze_image(gray_image)
    assert isinstance(m, Metrics)
    assert m.brightness == pytest.approx(100.0, abs=1e-3)
    assert m.contrast == pytest.approx(0.0, abs=1e-3)
    assert m.sharpness == pytest.approx(0.0, abs=1e-3)
    assert m.noise == pytest.approx(0.0, abs=1e-3)


def test_checkerboard_saturates_detail_metrics(checkerboard):
    m = analyze_image(checkerboard)
    assert m.brightness == pytest.approx(127.5, abs=1e-2)
    assert m.contrast == pytest.approx(127.5 / 128.0 * 100.0, abs=1e-2)
    assert m.sharpness == 100.0
    assert m.noise == 100.0


def test_tiny_image_has_no_interior():
    img = np.array([[0, 255], [255, 0]], dtype=np.uint8)
    m = analyze_image(img)
    assert m.sharpness == 0.0
    assert m.noise == 0.0
    assert m.contrast > 0.0


def test_luma_weights_follow_bgr_order():
    blue = np.zeros((8, 8, 3), dtype=np.uint8)
    blue[..., 0] = 255
    assert analyze_image(blue).brightness == pytest.approx(0.114 * 255, abs=1e-2)
    red = np.zeros((8, 8, 3), dtype=np.uint8)
    red[..., 2] = 255
    assert analyze_image(red).brightness == pytest.approx(0.299 * 255, abs=1e-2)


def test_alpha_channel_is_ignored(gray_image):
    bgra = np.dstack([gray_image, np.zeros(gray_image.shape[:2], dtype=np.uint8)])
    assert analyze_image(bgra).brightness == pytest.approx(100.0, abs=1e-3)


def test_grayscale_input_passes_through():
    gray = np.arange(12, dtype=np.uint8).reshape(3, 4)
    out = to_gray(gray)
    assert out.dtype == np.float64
    assert np.array_equal(out, gray.astype(np.float64))


def test_noisy_image_reads_noisier_than_flat(dark_noisy_image, gray_image):
    noisy = analyze_image(dark_noisy_image)
    flat = analyze_image(gray_image)
    assert noisy.noise > flat.noise
    assert noisy.brightness < 40.0


@pytest.mark.parametrize("bad", [
    np.zeros((0, 0), dtype=np.uint8),
    np.zeros((4, 4, 2), dtype=np.uint8),
    np.zeros((2, 2, 2, 3), dtype=np.uint8),
])
def test_bad_shapes_raise(bad):
    with pytest.raises(ImageError):
        analyze_image(bad)


def test_nan_pixel_yields_neutral_parameters():
    img = np.full((8, 8), 100.0, dtype=np.float32)
    img[3, 4] = np.nan
    m = analyze_image(img)
    assert np.isnan(m.brightness)
    assert mamdani_infer(m).parameters == EnhancementParameters()
