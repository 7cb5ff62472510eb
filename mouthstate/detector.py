"""
Face boxes from OpenCV's res10 SSD Caffe model.
"""
from __future__ import annotations
import logging
import os
from typing import List, Optional

import cv2
import numpy as np

from mouthstate.config import Settings
from mouthstate.models import FaceBox

logger = logging.getLogger(__name__)

BLOB_SIZE = (300, 300)
BLOB_MEAN = (104, 117, 123)


class FaceDetector:
    """Lazy wrapper around cv2.dnn; pass `net` to skip loading model files."""
    def __init__(self, settings: Optional[Settings] = None, net=None):
        self.s = settings or Settings()
        self.confidence = float(self.s.FACE_CONFIDENCE)
        self._net = net

    def _load(self):
        if self._net is not None:
            return self._net
        for path in (self.s.FACE_PROTO, self.s.FACE_MODEL):
            if not os.path.exists(path):
                raise FileNotFoundError(f"Face model file not found: {path}")
        logger.debug(f"[detector] loading {self.s.FACE_MODEL}")
        self._net = cv2.dnn.readNetFromCaffe(self.s.FACE_PROTO, self.s.FACE_MODEL)
        return self._net

    def detect(self, frame: np.ndarray) -> List[FaceBox]:
        net = self._load()
        H, W = frame.shape[:2]
        blob = cv2.dnn.blobFromImage(frame, 1.0, BLOB_SIZE, BLOB_MEAN, False, False)
        net.setInput(blob, "data")
        detections = net.forward("detection_out")

        faces: List[FaceBox] = []
        for i in range(detections.shape[2]):
            confidence = float(detections[0, 0, i, 2])
            if confidence <= self.confidence:
                continue
            x1 = int(detections[0, 0, i, 3] * W)
            y1 = int(detections[0, 0, i, 4] * H)
            x2 = int(detections[0, 0, i, 5] * W)
            y2 = int(detections[0, 0, i, 6] * H)

            # clamp to frame, keep at least one pixel
            x1 = max(0, min(x1, W - 1)); y1 = max(0, min(y1, H - 1))
            x2 = max(x1 + 1, min(x2, W)); y2 = max(y1 + 1, min(y2, H))
            faces.append(FaceBox(x=x1, y=y1, w=x2 - x1, h=y2 - y1, confidence=confidence))

        logger.debug(f"[detector] {len(faces)} face(s) above {self.confidence}")
        return faces
