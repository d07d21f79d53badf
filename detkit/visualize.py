from __future__ import annotations

import math
from typing import Iterable, Optional, Tuple

import numpy as np

from .catalog import ClassCatalog
from .types import Detection

# OpenCV colors are BGR.
RED = (0, 0, 255)
WHITE = (255, 255, 255)


def format_label(name: str, confidence: float) -> str:
    # Rounds half up: 0.125 -> 13%.
    return f"{name} {int(math.floor(confidence * 100 + 0.5))}%"


def label_box(
    left: float,
    top: float,
    text_w: int,
    text_h: int,
    padding: int = 15,
) -> Tuple[int, int, int, int]:
    """
    Integer (x1, y1, x2, y2) of the label background sitting on the box's top edge.

    When the box touches the top of the image the label is pushed down so
    that y1 is never negative.
    """

    height = text_h + padding
    x1 = max(0, int(round(left)))
    y1 = max(0, int(round(top)) - height)
    return x1, y1, x1 + text_w + padding, y1 + height


def draw_detections(
    image_bgr: np.ndarray,
    detections: Iterable[Detection],
    *,
    catalog: Optional[ClassCatalog] = None,
    box_color: Tuple[int, int, int] = RED,
    text_color: Tuple[int, int, int] = RED,
    label_bg_color: Tuple[int, int, int] = WHITE,
    label_bg_alpha: float = 200 / 255,
    box_thickness: int = 3,
    font_scale: float = 0.8,
    font_thickness: int = 2,
) -> np.ndarray:
    """
    Draw bounding boxes + labels on an OpenCV BGR image and return a copy.

    Args:
        image_bgr: input image in BGR (H, W, 3).
        detections: detections in original image coordinates.
        catalog: class names; ids it does not know are shown as `class_<id>`.
    """

    try:
        import cv2  # type: ignore
    except Exception as e:  # pragma: no cover
        raise ImportError("OpenCV is required for draw_detections(). Install with `pip install opencv-python`.") from e

    if image_bgr is None or not hasattr(image_bgr, "shape"):
        raise TypeError("image_bgr must be a NumPy array (BGR).")
    if image_bgr.ndim != 3 or image_bgr.shape[2] != 3:
        raise ValueError(f"Expected image shape (H, W, 3), got {getattr(image_bgr, 'shape', None)}")

    catalog = catalog if catalog is not None else ClassCatalog(())
    out = image_bgr.copy()
    h, w = out.shape[:2]

    for det in detections:
        x1, y1, x2, y2 = (int(round(v)) for v in det.as_xyxy())
        cv2.rectangle(out, (x1, y1), (min(x2, w - 1), min(y2, h - 1)), box_color, thickness=box_thickness)

        label = format_label(catalog.name(det.class_id), det.confidence)
        (tw, th), _ = cv2.getTextSize(label, cv2.FONT_HERSHEY_SIMPLEX, font_scale, font_thickness)
        bx1, by1, bx2, by2 = label_box(det.left, det.top, tw, th)

        # Blend the label background only inside the image.
        cx2, cy2 = min(bx2, w), min(by2, h)
        if cx2 > bx1 and cy2 > by1:
            roi = out[by1:cy2, bx1:cx2]
            bg = np.empty_like(roi)
            bg[:] = label_bg_color
            out[by1:cy2, bx1:cx2] = cv2.addWeighted(bg, label_bg_alpha, roi, 1.0 - label_bg_alpha, 0)

        cv2.putText(
            out,
            label,
            (bx1 + 8, by2 - 8),
            cv2.FONT_HERSHEY_SIMPLEX,
            font_scale,
            text_color,
            thickness=font_thickness,
            lineType=cv2.LINE_AA,
        )

    return out
