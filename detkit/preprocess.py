import numpy as np

from .config import check_positive


def to_input_blob(image_bgr: np.ndarray, model_side: int = 640) -> np.ndarray:
    """
    Stretch an OpenCV BGR image to the square model input and lay it out as NCHW.

    Aspect ratio is not preserved (no letterbox padding), which is what
    `to_image_space` assumes when scaling boxes back.

    Returns:
        float32 array of shape (1, 3, model_side, model_side), RGB, values in [0, 1]
    """
    try:
        import cv2  # type: ignore
    except Exception as e:  # pragma: no cover
        raise ImportError("OpenCV is required for to_input_blob(). Install with `pip install opencv-python`.") from e

    if image_bgr is None or not hasattr(image_bgr, "shape"):
        raise TypeError("image_bgr must be a NumPy array (BGR).")
    if image_bgr.ndim != 3 or image_bgr.shape[2] != 3:
        raise ValueError(f"Expected image shape (H, W, 3), got {getattr(image_bgr, 'shape', None)}")
    check_positive("model_side", model_side)

    h, w = image_bgr.shape[:2]
    img = image_bgr
    if (w, h) != (model_side, model_side):
        img = cv2.resize(img, (model_side, model_side), interpolation=cv2.INTER_LINEAR)

    # BGR -> RGB, normalize, HWC -> CHW, add batch
    blob = img[:, :, ::-1].astype(np.float32) / 255.0
    blob = np.transpose(blob, (2, 0, 1))[None, ...]
    return np.ascontiguousarray(blob)
