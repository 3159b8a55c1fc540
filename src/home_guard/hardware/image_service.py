"""
Image Services - cat detection adapters

- ImageService: interface consumed by the SecurityService
- YOLOImageService: ultralytics YOLO model, COCO "cat" class only
- FakeImageService: random answer, for demos without a camera or model
"""

import logging
import random
import time
from abc import ABC, abstractmethod
from typing import Any, Optional

import cv2
import numpy as np

# Ultralytics YOLO
try:
    from ultralytics import YOLO
    HAS_YOLO = True
except ImportError:
    HAS_YOLO = False


logger = logging.getLogger(__name__)

CAT_CLASS_NAME = "cat"


class ImageService(ABC):
    """Answers whether a camera frame contains a cat."""

    @abstractmethod
    def image_contains_cat(self, image: Any, confidence_threshold: float) -> bool:
        """
        Args:
            image: camera frame (BGR numpy array for the YOLO adapter)
            confidence_threshold: minimum confidence, percent (0-100)
        """
        pass

    def get_stats(self) -> dict:
        """Detector counters, empty unless the adapter keeps any."""
        return {}


def decode_image(data: bytes) -> np.ndarray:
    """Decode encoded image bytes (JPEG, PNG, ...) into a BGR frame.

    Raises:
        ValueError: if the bytes are not a decodable image
    """
    buffer = np.frombuffer(data, dtype=np.uint8)
    frame = cv2.imdecode(buffer, cv2.IMREAD_COLOR) if buffer.size else None
    if frame is None:
        raise ValueError("Image data could not be decoded")
    return frame


class YOLOImageService(ImageService):
    """
    YOLO cat detector

    - Pretrained COCO model, filtered to the cat class
    - Threshold converted from percent to the 0-1 scale YOLO expects
    """

    def __init__(
        self,
        model_name: str = "yolo11n.pt",
        device: str = "cpu",
        model: Optional[Any] = None,
    ):
        """
        Args:
            model_name: YOLO weights to load
            device: 'cpu' or 'cuda'
            model: preloaded model object, skips loading
        """
        self.model_name = model_name
        self.device = device

        if model is None:
            if not HAS_YOLO:
                raise RuntimeError("ultralytics not installed. Install: pip install ultralytics")
            logger.info("Loading YOLO model %s", model_name)
            model = YOLO(model_name)
            if device == "cuda":
                model.to("cuda")
        self.model = model

        self.class_names = self.model.names  # {0: 'person', 15: 'cat', ...}
        self.target_class_ids = [
            class_id for class_id, class_name in self.class_names.items()
            if class_name == CAT_CLASS_NAME
        ]
        if not self.target_class_ids:
            raise RuntimeError(f"Model {model_name} has no '{CAT_CLASS_NAME}' class")

        logger.info(
            "YOLO cat detector ready (class ids %s, device %s)",
            self.target_class_ids, device,
        )

        # Stats
        self.frame_count = 0
        self.detection_count = 0
        self.total_inference_time = 0.0

    def image_contains_cat(self, image: Any, confidence_threshold: float) -> bool:
        start_time = time.time()

        results = self.model(
            image,
            conf=confidence_threshold / 100.0,
            classes=self.target_class_ids,
            verbose=False,
        )

        self.total_inference_time += time.time() - start_time
        self.frame_count += 1

        cats = sum(len(result.boxes) for result in results)
        self.detection_count += cats
        return cats > 0

    def get_stats(self) -> dict:
        avg_time = (
            self.total_inference_time / self.frame_count
            if self.frame_count > 0 else 0.0
        )
        return {
            "frame_count": self.frame_count,
            "detection_count": self.detection_count,
            "avg_inference_ms": avg_time * 1000,
        }


class FakeImageService(ImageService):
    """Returns a random answer; the threshold is ignored."""

    def __init__(self, probability: float = 0.5, seed: Optional[int] = None):
        self.probability = probability
        self._random = random.Random(seed)

    def image_contains_cat(self, image: Any, confidence_threshold: float) -> bool:
        return self._random.random() < self.probability
