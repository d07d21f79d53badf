from __future__ import annotations

import logging
from typing import List, Tuple

from .config import DetectConfig, check_positive
from .coords import to_image_space
from .decode import decode
from .nms import suppress
from .types import Detection, RawOutput

logger = logging.getLogger(__name__)


class DetectionPostprocessor:
    """
    Turns one flat detector output into final detections for one image.

    Steps (per call, no state kept between calls):
    - decode the (C + 4, A) buffer and drop boxes below `conf_threshold`
    - rescale each candidate from model-input pixels to image pixels, clamping to the image
    - per-class NMS with `iou_threshold`

    Safe to share across threads: the instance only holds its frozen config.
    """

    def __init__(self, cfg: DetectConfig):
        self.cfg = cfg

    def process(self, raw: RawOutput, image_size: Tuple[int, int]) -> List[Detection]:
        """
        Args:
            raw: flat detector output, length (num_classes + 4) * num_boxes
            image_size: (width, height) of the original image
        """

        image_width, image_height = image_size
        check_positive("image_width", image_width)
        check_positive("image_height", image_height)
        cfg = self.cfg

        candidates = decode(raw, cfg.num_classes, cfg.conf_threshold)
        logger.debug(
            "decoded %d candidates above conf %.2f (%d features per box)",
            len(candidates),
            cfg.conf_threshold,
            cfg.features_per_box,
        )

        detections: List[Detection] = []
        for cand in candidates:
            det = to_image_space(cand, cfg.model_side, image_width, image_height)
            if det is not None:
                detections.append(det)

        for det in detections[:3]:
            logger.debug(
                "detection class=%d conf=%.3f box=(%.0f,%.0f) %.0fx%.0f",
                det.class_id,
                det.confidence,
                det.left,
                det.top,
                det.width,
                det.height,
            )

        kept = suppress(detections, cfg.iou_threshold)
        logger.debug("after NMS: %d of %d detections kept", len(kept), len(detections))
        return kept


def detect(
    raw: RawOutput,
    num_classes: int,
    image_width: int,
    image_height: int,
    model_side: int = 640,
    conf_threshold: float = 0.5,
    iou_threshold: float = 0.45,
) -> List[Detection]:
    cfg = DetectConfig(
        num_classes=num_classes,
        model_side=model_side,
        conf_threshold=conf_threshold,
        iou_threshold=iou_threshold,
    )
    return DetectionPostprocessor(cfg).process(raw, (image_width, image_height))
