from typing import Dict, List

from .config import check_unit_interval
from .types import Detection


def iou(a: Detection, b: Detection) -> float:
    """
    Intersection-over-union of two top-left/extent boxes, 0.0 for zero-area unions.
    """

    x1 = max(a.left, b.left)
    y1 = max(a.top, b.top)
    x2 = min(a.right, b.right)
    y2 = min(a.bottom, b.bottom)

    inter = max(0.0, x2 - x1) * max(0.0, y2 - y1)
    union = a.area + b.area - inter
    if union <= 0:
        return 0.0
    return inter / union


def _suppress_group(group: List[Detection], iou_threshold: float) -> List[Detection]:
    # sorted() is stable, so equal confidences keep their input order.
    ordered = sorted(group, key=lambda d: d.confidence, reverse=True)
    suppressed = [False] * len(ordered)
    keep: List[Detection] = []

    for i, det in enumerate(ordered):
        if suppressed[i]:
            continue
        keep.append(det)
        for j in range(i + 1, len(ordered)):
            if not suppressed[j] and iou(det, ordered[j]) > iou_threshold:
                suppressed[j] = True

    return keep


def suppress(detections: List[Detection], iou_threshold: float) -> List[Detection]:
    """
    Greedy per-class NMS.

    Within one class, a detection is dropped when it overlaps a higher-confidence
    kept detection with IoU strictly above `iou_threshold`. Detections of
    different classes never suppress each other. Classes come out in order of
    first appearance, each sorted by descending confidence.
    """

    check_unit_interval("iou_threshold", iou_threshold)
    if not detections:
        return []

    by_class: Dict[int, List[Detection]] = {}
    for det in detections:
        by_class.setdefault(det.class_id, []).append(det)

    kept: List[Detection] = []
    for group in by_class.values():
        kept.extend(_suppress_group(group, iou_threshold))
    return kept
