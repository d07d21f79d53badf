"""
Decoding, rescaling and class-wise NMS for flat YOLO detector outputs.

The core (decode, coords, nms, postprocess) only needs NumPy. OpenCV is used
for preprocessing and drawing; ONNX Runtime is an optional backend.
"""

from .types import Candidate, Detection, RawOutput
from .errors import DetectionError, InvalidConfiguration, ShapeMismatch
from .config import DetectConfig, load_detect_config
from .decode import decode
from .coords import to_image_space
from .nms import iou, suppress
from .postprocess import DetectionPostprocessor, detect
from .catalog import SURFRIDER_CATALOG, ClassCatalog, load_class_catalog
from .preprocess import to_input_blob
from .runtime import DetectionPipeline, load_pipeline
from .visualize import draw_detections, format_label

__all__ = [
    "Candidate",
    "Detection",
    "RawOutput",
    "DetectionError",
    "InvalidConfiguration",
    "ShapeMismatch",
    "DetectConfig",
    "load_detect_config",
    "decode",
    "to_image_space",
    "iou",
    "suppress",
    "DetectionPostprocessor",
    "detect",
    "SURFRIDER_CATALOG",
    "ClassCatalog",
    "load_class_catalog",
    "to_input_blob",
    "DetectionPipeline",
    "load_pipeline",
    "draw_detections",
    "format_label",
]
