import numpy as np

from ui.overlay import draw_histogram, draw_hud, side_by_side


def test_hud_draws_in_place(balanced_result):
    canvas = np.full((360, 640, 3), 128, dtype=np.uint8)
    out = draw_hud(canvas, balanced_result, fps=29.7)
    assert out is canvas
    assert out.shape == (360, 640, 3)
    # the translucent panel darkens the top-left corner
    assert out[2, 2].max() < 128


def test_histogram_panel(dark_noisy_image):
    canvas = np.zeros((200, 400, 3), dtype=np.uint8)
    draw_histogram(canvas, dark_noisy_image, origin=(10, 100))
    assert canvas.any()


def test_side_by_side_widths(gray_image):
    out = side_by_side(gray_image, gray_image)
    assert out.shape == (24, 64, 3)


def test_side_by_side_rescales_and_converts():
    left = np.zeros((40, 30), dtype=np.uint8)
    right = np.zeros((20, 10, 4), dtype=np.uint8)
    out = side_by_side(left, right)
    assert out.shape == (40, 50, 3)
