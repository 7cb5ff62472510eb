"""
CLI to score mouth openness in still images -> JSON.
"""
from __future__ import annotations
import argparse, json, os
from typing import Dict, List, Optional

import cv2

from mouthstate.config import Settings, configure_logging
from mouthstate.detector import FaceDetector
from mouthstate.scoring import crop_mouth, score_mouth_region


def score_image(path: str, detector: Optional[FaceDetector], whole: bool = False) -> Dict:
    image = cv2.imread(path, cv2.IMREAD_COLOR)
    if image is None:
        raise FileNotFoundError(f"Image not found or unreadable: {path}")
    if whole:
        h, w = image.shape[:2]
        box = {"x": 0, "y": 0, "w": w, "h": h}
        return {"path": path, "faces": [{"box": box, "score": score_mouth_region(image)}]}

    faces = []
    for box in detector.detect(image):
        faces.append({"box": box.model_dump(), "score": score_mouth_region(crop_mouth(image, box))})
    return {"path": path, "faces": faces}


def main(argv: Optional[List[str]] = None, detector: Optional[FaceDetector] = None) -> None:
    p = argparse.ArgumentParser(description="Score mouth openness in images")
    p.add_argument("--image", action="append", required=True, help="Path to an input image (repeatable)")
    p.add_argument("--whole", action="store_true", help="Score the whole image as the mouth region")
    p.add_argument("--out", default=None, help="Optional path to output JSON")
    args = p.parse_args(argv)

    settings = Settings()
    configure_logging(settings)
    if not args.whole:
        detector = detector or FaceDetector(settings)

    result = [score_image(path, detector, whole=args.whole) for path in args.image]
    print(json.dumps(result, indent=2))

    if args.out:
        os.makedirs(os.path.dirname(args.out) or ".", exist_ok=True)
        with open(args.out, "w", encoding="utf-8") as f:
            json.dump(result, f, indent=2)
        print(f"Scores written to {args.out}")

if __name__ == "__main__":
    main()
