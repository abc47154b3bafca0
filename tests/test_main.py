import csv
import json

import cv2
import numpy as np
import pytest

import main


def test_metrics_mode_prints_report(capsys):
    main.main(["--metrics", "127", "50", "70", "10"])
    out = capsys.readouterr().out
    assert "fired rules: 5" in out
    assert "No enhancement needed" in out


def test_metrics_mode_json(capsys):
    main.main(["--metrics", "-1", "-1", "-1", "-1", "--json"])
    payload = json.loads(capsys.readouterr().out)
    assert payload["fired_rules"] == []
    assert payload["parameters"] == {"brightness_adj": 0.0, "contrast_adj": 1.0, "sharpen": 0.0, "denoise": 0.0}
    assert payload["explanation"]["active_rules_count"] == 0
    assert payload["dashboard"]["rules"] == []
    assert payload["dashboard"]["charts"]["noise"]["current_value"] == -1.0
    assert len(payload["dashboard"]["charts"]["sharpen"]["functions"][0]["points"]) == 101


def test_image_mode_writes_outputs(tmp_path, dark_noisy_image, capsys):
    src = tmp_path / "dark.png"
    cv2.imwrite(str(src), dark_noisy_image)
    out_path = tmp_path / "enhanced.png"
    cmp_path = tmp_path / "compare.png"
    csv_path = tmp_path / "trace.csv"

    main.main(["--input", str(src), "--output", str(out_path), "--compare", str(cmp_path),
               "--csv", str(csv_path), "--no-show"])

    printed = capsys.readouterr().out
    assert "enhanced   :" in printed
    enhanced = cv2.imread(str(out_path))
    assert enhanced.shape == dark_noisy_image.shape
    assert enhanced.mean() > dark_noisy_image.mean()
    assert cv2.imread(str(cmp_path)).shape == (48, 128, 3)
    with open(csv_path, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert len(rows) == 2
    assert float(rows[1][rows[0].index("brightness_adj")]) > 0


def test_missing_image_exits(tmp_path):
    with pytest.raises(SystemExit, match="Could not read image"):
        main.main(["--input", str(tmp_path / "nope.png"), "--no-show"])


def test_udp_argument():
    args = main.build_parser().parse_args(["--metrics", "1", "2", "3", "4", "--udp"])
    assert args.udp == ("127.0.0.1", 5005)
    args = main.build_parser().parse_args(["--metrics", "1", "2", "3", "4", "--udp", "10.0.0.2:9000"])
    assert args.udp == ("10.0.0.2", 9000)
    with pytest.raises(SystemExit):
        main.build_parser().parse_args(["--udp", "nowhere"])


def test_metrics_and_input_are_exclusive():
    with pytest.raises(SystemExit):
        main.build_parser().parse_args(["--metrics", "1", "2", "3", "4", "--input", "x.png"])


def test_camera_no_show_needs_output():
    with pytest.raises(SystemExit, match="needs --output"):
        main.main(["--no-show"])


def test_emit_writes_to_every_sink(balanced_result):
    class Sink:
        def __init__(self):
            self.seen = []

        def write_result(self, t, result):
            self.seen.append(t)

        send_result = write_result

    logger, udp = Sink(), Sink()
    main.emit(balanced_result, logger, udp, t=4.0)
    assert logger.seen == udp.seen == [4.0]
    assert np.isfinite(balanced_result.parameters.sharpen)
