from __future__ import annotations


class DetectionError(ValueError):
    """
    Base class for errors raised while turning detector output into detections.
    """


class ShapeMismatch(DetectionError):
    """
    The flat output length is not a whole number of (num_classes + 4) feature rows.
    """

    def __init__(self, length: int, features_per_box: int):
        self.length = length
        self.features_per_box = features_per_box
        super().__init__(
            f"Output length {length} is not divisible by num_classes + 4 = {features_per_box} "
            f"(remainder {length % features_per_box}). Check num_classes against the model."
        )


class InvalidConfiguration(DetectionError):
    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"{field} {message}")
