import json

import pytest

pytest.importorskip("cv2")

from lane_windows.cli import main


def _write_segments(path, solid):
    path.write_text(json.dumps({"width": 640, "height": 480, "solid": solid}))
    return path


def test_windows_from_segments_file(tmp_path):
    seg = _write_segments(tmp_path / "seg.json", [[120, 480, 300, 300], [520, 480, 340, 300]])
    out = tmp_path / "out" / "windows.json"
    assert main(["windows", "--segments", str(seg), "--json", str(out)]) == 0
    data = json.loads(out.read_text())
    assert len(data["windows"]) == 5
    assert data["windows"][0] == [120, 213, 400, 266]


def test_windows_geometry_failure_exit_code(tmp_path):
    seg = _write_segments(tmp_path / "seg.json", [[100, 480, 100, 0], [500, 480, 500, 0]])
    assert main(["windows", "--segments", str(seg), "--json", str(tmp_path / "w.json")]) == 2


def test_generate_then_windows_on_image(tmp_path):
    img = tmp_path / "lane.png"
    overlay = tmp_path / "overlay.png"
    assert main(["generate", "--output", str(img), "--width", "320", "--height", "240"]) == 0
    assert img.exists()
    rc = main(["windows", "--image", str(img), "--output", str(overlay), "--json", str(tmp_path / "w.json")])
    assert rc == 0
    assert overlay.exists()
