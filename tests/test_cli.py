import json

import cv2
import numpy as np
import pytest

from mouthstate.cli import main
from mouthstate.models import FaceBox


class DummyDetector:
    def detect(self, image):
        return [FaceBox(x=0, y=0, w=40, h=40, confidence=0.95)]


@pytest.fixture
def image_path(tmp_path):
    path = tmp_path / "face.png"
    cv2.imwrite(str(path), np.zeros((40, 40, 3), dtype=np.uint8))
    return str(path)


def test_cli_whole_image(image_path, capsys, tmp_path):
    out = tmp_path / "out" / "scores.json"
    main(["--image", image_path, "--whole", "--out", str(out)])
    printed = capsys.readouterr().out
    assert "Scores written to" in printed
    result = json.loads(out.read_text(encoding="utf-8"))
    assert result[0]["path"] == image_path
    assert result[0]["faces"][0]["score"] == pytest.approx(25.5)

def test_cli_with_detector(image_path, tmp_path):
    out = tmp_path / "scores.json"
    main(["--image", image_path, "--image", image_path, "--out", str(out)], detector=DummyDetector())
    result = json.loads(out.read_text(encoding="utf-8"))
    assert len(result) == 2
    assert result[0]["faces"][0]["box"]["w"] == 40

def test_cli_missing_image(tmp_path):
    with pytest.raises(FileNotFoundError):
        main(["--image", str(tmp_path / "nope.png"), "--whole"])
