from typing import Optional

from .config import check_positive
from .types import Candidate, Detection


def _clamp(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)


def to_image_space(
    candidate: Candidate,
    model_side: int,
    image_width: int,
    image_height: int,
) -> Optional[Detection]:
    """
    Map a candidate from the square model input to original image pixels.

    The model input is a plain stretch of the image (no letterbox), so each
    axis is scaled independently. Edges are clamped to the image; a box that
    ends up with no area returns None.
    """

    check_positive("model_side", model_side)
    check_positive("image_width", image_width)
    check_positive("image_height", image_height)

    scale_x = image_width / model_side
    scale_y = image_height / model_side

    left = (candidate.center_x - candidate.width / 2) * scale_x
    top = (candidate.center_y - candidate.height / 2) * scale_y
    width = candidate.width * scale_x
    height = candidate.height * scale_y

    clamped_left = _clamp(left, 0.0, float(image_width))
    clamped_top = _clamp(top, 0.0, float(image_height))
    clamped_width = _clamp(left + width, 0.0, float(image_width)) - clamped_left
    clamped_height = _clamp(top + height, 0.0, float(image_height)) - clamped_top

    # NaN compares false here, so boxes built from NaN or inf are dropped too.
    if not (clamped_width > 0 and clamped_height > 0):
        return None

    return Detection(
        left=clamped_left,
        top=clamped_top,
        width=clamped_width,
        height=clamped_height,
        confidence=candidate.confidence,
        class_id=candidate.class_id,
    )
