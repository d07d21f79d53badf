from dataclasses import asdict, dataclass
from typing import Any, Dict, Sequence, Tuple, Union

import numpy as np

# Flat detector output, feature-major / box-minor.
RawOutput = Union[np.ndarray, Sequence[float]]


@dataclass(frozen=True)
class Candidate:
    """
    Provisional detection in model-input space (center + extent), before rescaling.
    """

    center_x: float
    center_y: float
    width: float
    height: float
    class_id: int
    confidence: float


@dataclass(frozen=True)
class Detection:
    """
    Final detection in original image pixels (top-left + extent).
    """

    left: float
    top: float
    width: float
    height: float
    confidence: float
    class_id: int

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    def as_xyxy(self) -> Tuple[float, float, float, float]:
        return self.left, self.top, self.right, self.bottom

    def as_xywh(self) -> Tuple[float, float, float, float]:
        return self.left, self.top, self.width, self.height

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
