from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def to_raw_output(value: Any) -> np.ndarray:
    """
    Normalize whatever the runtime hands back into one flat float32 buffer.

    Accepts NumPy arrays of any rank (e.g. (1, C + 4, A)), nested lists/tuples
    of floats, and bare scalars. Nesting is flattened in row-major order.
    """

    if isinstance(value, np.ndarray):
        return np.asarray(value, dtype=np.float32).reshape(-1)

    out: List[float] = []

    def walk(v: Any) -> None:
        if isinstance(v, np.ndarray):
            out.extend(v.astype(np.float32).reshape(-1).tolist())
        elif isinstance(v, (list, tuple)):
            for item in v:
                walk(item)
        elif isinstance(v, (float, int, np.floating, np.integer)) and not isinstance(v, bool):
            out.append(float(v))
        else:
            raise TypeError(f"Unexpected value in model output: {type(v).__name__}")

    walk(value)
    return np.asarray(out, dtype=np.float32)


@dataclass(frozen=True)
class OnnxRuntimeBackendConfig:
    """
    Configuration for ONNX Runtime inference.

    - providers: ORT execution providers (e.g., ["CPUExecutionProvider"])
    - input_name/output_name: override the first model input/output if needed
    """

    providers: Optional[Sequence[str]] = None
    input_name: Optional[str] = None
    output_name: Optional[str] = None


class OnnxRuntimeBackend:
    """
    ONNX Runtime adapter producing the flat detector output.

    Expects an NCHW float32 blob shaped (1, 3, S, S) and returns the selected
    output flattened to 1-D float32.
    """

    def __init__(self, model_path: PathLike, cfg: OnnxRuntimeBackendConfig = OnnxRuntimeBackendConfig()):
        try:
            import onnxruntime as ort  # type: ignore
        except Exception as e:  # pragma: no cover
            raise ImportError(
                "onnxruntime is required for the ONNX backend. Install it with `pip install onnxruntime`."
            ) from e

        self.model_path = Path(model_path)
        if not self.model_path.exists():
            raise FileNotFoundError(str(self.model_path))

        providers = list(cfg.providers) if cfg.providers is not None else None
        self.session = ort.InferenceSession(
            str(self.model_path), sess_options=ort.SessionOptions(), providers=providers
        )
        self.input_name = cfg.input_name or self.session.get_inputs()[0].name
        self.output_name = cfg.output_name or self.session.get_outputs()[0].name
        logger.info(
            "loaded %s (input=%s, output=%s, providers=%s)",
            self.model_path.name,
            self.input_name,
            self.output_name,
            ",".join(self.session.get_providers()),
        )

    def run(self, blob: np.ndarray, extra_inputs: Optional[Dict[str, Any]] = None) -> np.ndarray:
        inputs: Dict[str, Any] = {self.input_name: blob}
        if extra_inputs:
            inputs.update(extra_inputs)
        outputs = self.session.run([self.output_name], inputs)
        return to_raw_output(outputs[0])
