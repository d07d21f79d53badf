from typing import List

import numpy as np

from .config import check_num_classes, check_unit_interval
from .errors import ShapeMismatch
from .types import Candidate, RawOutput


def split_features(raw: RawOutput, num_classes: int) -> np.ndarray:
    """
    View a flat (C + 4) x A output as a 2-D array of feature rows.

    Any array-like is accepted and flattened in C order, so a (1, C + 4, A)
    tensor reads the same as its flat buffer. Values are widened to float64.
    """

    features = check_num_classes(num_classes) + 4
    flat = np.asarray(raw, dtype=np.float64).reshape(-1)
    if flat.size % features != 0:
        raise ShapeMismatch(int(flat.size), features)
    return flat.reshape(features, flat.size // features)


def decode(raw: RawOutput, num_classes: int, conf_threshold: float) -> List[Candidate]:
    """
    Decode a YOLOv8-style (C + 4, A) output into candidates above `conf_threshold`.

    Rows 0..3 hold cx, cy, w, h in model-input pixels, rows 4.. hold one score
    per class. Each box keeps its best class; on equal scores the lowest class
    id wins. Candidates come out in box index order.
    """

    check_unit_interval("conf_threshold", conf_threshold)
    p = split_features(raw, num_classes)
    if p.shape[1] == 0:
        return []

    class_scores = p[4:, :]
    class_ids = np.argmax(class_scores, axis=0)
    scores = class_scores[class_ids, np.arange(class_scores.shape[1])]

    keep = np.nonzero(scores >= conf_threshold)[0]
    return [
        Candidate(
            center_x=float(p[0, b]),
            center_y=float(p[1, b]),
            width=float(p[2, b]),
            height=float(p[3, b]),
            class_id=int(class_ids[b]),
            confidence=float(scores[b]),
        )
        for b in keep
    ]
