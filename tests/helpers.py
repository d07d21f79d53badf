from typing import Dict, Sequence, Tuple

import numpy as np

Box = Tuple[float, float, float, float, Dict[int, float]]


def make_raw(boxes: Sequence[Box], num_classes: int) -> np.ndarray:
    """
    Build a flat (C + 4, A) output from (cx, cy, w, h, {class_id: score}) tuples.
    """

    p = np.zeros((num_classes + 4, len(boxes)), dtype=np.float32)
    for b, (cx, cy, w, h, scores) in enumerate(boxes):
        p[0:4, b] = [cx, cy, w, h]
        for cls, score in scores.items():
            p[4 + cls, b] = score
    return p.reshape(-1)
