import numpy as np
import pytest

from fuzzy.results import EnhancementParameters
from processing.enhance import (
    adjust_brightness, adjust_contrast, apply_enhancements, denoise, denoise_radius, sharpen,
)


def test_brightness_offset_clamps(gray_image):
    assert np.all(adjust_brightness(gray_image, 20.4) == 120)
    assert np.all(adjust_brightness(gray_image, 200) == 255)
    assert np.all(adjust_brightness(gray_image, -150) == 0)


def test_contrast_scales_around_mid_grey(gray_image):
    assert np.all(adjust_contrast(gray_image, 2.0) == 72)
    assert np.all(adjust_contrast(gray_image, 0.5) == 114)
    assert np.all(adjust_contrast(np.full((2, 2), 128, dtype=np.uint8), 1.7) == 128)


def test_neutral_parameters_return_equal_copy(gray_image):
    out = apply_enhancements(gray_image, EnhancementParameters())
    assert out is not gray_image
    assert np.array_equal(out, gray_image)


def test_input_is_not_modified(dark_noisy_image):
    before = dark_noisy_image.copy()
    out = apply_enhancements(dark_noisy_image, EnhancementParameters(40.0, 1.4, 50.0, 60.0))
    assert np.array_equal(dark_noisy_image, before)
    assert out.shape == before.shape
    assert out.dtype == np.uint8
    assert out.mean() > before.mean()


def test_sharpen_leaves_uniform_image_alone(gray_image):
    assert np.array_equal(sharpen(gray_image, 80.0), gray_image)


def test_sharpen_keeps_border_pixels(dark_noisy_image):
    out = sharpen(dark_noisy_image, 100.0)
    assert np.array_equal(out[0], dark_noisy_image[0])
    assert np.array_equal(out[-1], dark_noisy_image[-1])
    assert np.array_equal(out[:, 0], dark_noisy_image[:, 0])
    assert np.array_equal(out[:, -1], dark_noisy_image[:, -1])
    assert not np.array_equal(out[1:-1, 1:-1], dark_noisy_image[1:-1, 1:-1])


@pytest.mark.parametrize("strength,radius", [(0, 0), (10, 1), (33.3, 1), (34, 2), (66.7, 3), (100, 3)])
def test_denoise_radius(strength, radius):
    assert denoise_radius(strength) == radius


def test_denoise_spreads_an_impulse():
    img = np.zeros((9, 9), dtype=np.uint8)
    img[4, 4] = 255
    out = denoise(img, 10.0)
    assert out[4, 4] == 28
    assert out[3, 3] == 28
    assert out[2, 2] == 0
    assert int(out.sum()) == 9 * 28


def test_zero_strength_filters_copy(gray_image):
    assert sharpen(gray_image, 0) is not gray_image
    assert denoise(gray_image, 0) is not gray_image


def test_non_uint8_input_is_rejected():
    with pytest.raises(TypeError):
        apply_enhancements(np.zeros((4, 4, 3), dtype=np.float32), EnhancementParameters())


def test_alpha_channel_is_preserved():
    img = np.full((6, 6, 4), 100, dtype=np.uint8)
    img[..., 3] = 7
    out = apply_enhancements(img, EnhancementParameters(50.0, 1.5, 40.0, 40.0))
    assert out.shape == (6, 6, 4)
    assert np.all(out[..., 3] == 7)
    assert np.all(out[..., :3] == 161)
