from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple, Union

import numpy as np

from .config import DetectConfig
from .postprocess import DetectionPostprocessor
from .preprocess import to_input_blob
from .types import Detection, RawOutput

PathLike = Union[str, Path]


@dataclass(frozen=True)
class PreprocessResult:
    blob: np.ndarray
    orig_size: Tuple[int, int]


class DetectionPipeline:
    """
    Plug-and-play pipeline: preprocess (stretch to model side) -> inference -> postprocess.

    The pipeline expects BGR images (OpenCV-style) as `np.ndarray` and returns
    a list of `Detection` in original image coordinates. `infer_fn` takes the
    NCHW blob and returns the flat detector output.
    """

    def __init__(
        self,
        infer_fn: Callable[[np.ndarray], RawOutput],
        *,
        cfg: DetectConfig,
        backend: Optional[object] = None,
        backend_name: Optional[str] = None,
    ):
        self._infer_fn = infer_fn
        self.cfg = cfg
        self.backend = backend
        self.backend_name = backend_name
        self.post = DetectionPostprocessor(cfg)

    def preprocess(self, image_bgr: np.ndarray) -> PreprocessResult:
        blob = to_input_blob(image_bgr, self.cfg.model_side)
        orig_h, orig_w = image_bgr.shape[:2]
        return PreprocessResult(blob=blob, orig_size=(orig_w, orig_h))

    def __call__(self, image_bgr: np.ndarray) -> List[Detection]:
        prep = self.preprocess(image_bgr)
        raw = self._infer_fn(prep.blob)
        return self.post.process(raw, prep.orig_size)


def load_pipeline(
    model_path: PathLike,
    cfg: DetectConfig,
    *,
    backend: Optional[str] = None,
    onnx_providers: Optional[Sequence[str]] = None,
    onnx_input_name: Optional[str] = None,
    onnx_output_name: Optional[str] = None,
) -> DetectionPipeline:
    """
    Create a pipeline for a model on disk.

        pipe = load_pipeline("models/litter.onnx", DetectConfig(num_classes=10))

    Args:
        model_path: path to the exported model
        backend: "onnxruntime", or None to infer from the file extension
    """

    resolved = Path(model_path).expanduser().resolve()
    chosen = backend
    if chosen is None:
        suffix = resolved.suffix.lower()
        if suffix == ".onnx":
            chosen = "onnxruntime"
        else:
            raise ValueError(
                f"Could not infer backend from extension '{suffix}'. Pass backend=... explicitly."
            )

    if chosen.lower() == "onnxruntime":
        from .backends.onnxruntime_backend import OnnxRuntimeBackend, OnnxRuntimeBackendConfig

        ort_backend = OnnxRuntimeBackend(
            resolved,
            OnnxRuntimeBackendConfig(
                providers=onnx_providers,
                input_name=onnx_input_name,
                output_name=onnx_output_name,
            ),
        )
        return DetectionPipeline(ort_backend.run, cfg=cfg, backend=ort_backend, backend_name="onnxruntime")

    raise ValueError(f"Unsupported backend: {backend!r}")
