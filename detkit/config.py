from __future__ import annotations

import json
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Union

from .errors import InvalidConfiguration

PathLike = Union[str, Path]


def check_num_classes(num_classes: int) -> int:
    if isinstance(num_classes, bool) or not isinstance(num_classes, int):
        raise InvalidConfiguration("num_classes", f"must be an integer, got {num_classes!r}")
    if num_classes < 1:
        raise InvalidConfiguration("num_classes", f"must be >= 1, got {num_classes}")
    return num_classes


def check_positive(name: str, value: float) -> float:
    if value <= 0:
        raise InvalidConfiguration(name, f"must be > 0, got {value}")
    return value


def check_unit_interval(name: str, value: float) -> float:
    # NaN fails both comparisons, so it is rejected too.
    if not 0.0 <= value <= 1.0:
        raise InvalidConfiguration(name, f"must be within [0, 1], got {value}")
    return value


@dataclass(frozen=True)
class DetectConfig:
    """
    Settings for decoding one detector output.

    - num_classes: number of class score rows the model emits (not discoverable from the buffer)
    - model_side: side of the square model input, in pixels
    - conf_threshold: boxes whose best class score is below this are dropped
    - iou_threshold: same-class boxes overlapping a kept box by more than this are suppressed
    """

    num_classes: int
    model_side: int = 640
    conf_threshold: float = 0.5
    iou_threshold: float = 0.45

    def __post_init__(self) -> None:
        check_num_classes(self.num_classes)
        check_positive("model_side", self.model_side)
        check_unit_interval("conf_threshold", self.conf_threshold)
        check_unit_interval("iou_threshold", self.iou_threshold)

    @property
    def features_per_box(self) -> int:
        return self.num_classes + 4

    def replace(self, **overrides: Any) -> "DetectConfig":
        """Copy with the given fields changed; `None` values are ignored."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def _require_int(payload: Dict[str, Any], key: str) -> int:
    value = payload[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key} must be an integer")
    return int(value)


def _require_number(payload: Dict[str, Any], key: str) -> float:
    value = payload[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{key} must be a number")
    return float(value)


def load_detect_config(path: PathLike) -> DetectConfig:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Detect config not found: {path}")
    raw = path.read_text(encoding="utf-8")
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid detect config JSON: {path}") from exc
    if not isinstance(payload, dict):
        raise ValueError("Detect config must be a JSON object")

    allowed = {"num_classes", "model_side", "conf_threshold", "iou_threshold"}
    unknown = sorted(set(payload.keys()) - allowed)
    if unknown:
        raise ValueError(f"Unknown detect config keys: {unknown}")
    if "num_classes" not in payload:
        raise ValueError("Missing required key: num_classes")

    kwargs: Dict[str, Any] = {"num_classes": _require_int(payload, "num_classes")}
    if "model_side" in payload:
        kwargs["model_side"] = _require_int(payload, "model_side")
    for key in ("conf_threshold", "iou_threshold"):
        if key in payload:
            kwargs[key] = _require_number(payload, key)
    return DetectConfig(**kwargs)
