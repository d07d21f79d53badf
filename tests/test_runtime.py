import unittest

import numpy as np
from helpers import make_raw

from detkit.backends.onnxruntime_backend import to_raw_output
from detkit.config import DetectConfig
from detkit.runtime import DetectionPipeline, load_pipeline


class TestDetectionPipeline(unittest.TestCase):
    def test_end_to_end_with_stub_inference(self) -> None:
        seen = []

        def infer(blob: np.ndarray) -> np.ndarray:
            seen.append(blob.shape)
            return make_raw([(320, 320, 100, 100, {1: 0.8}), (322, 320, 100, 100, {1: 0.7})], num_classes=2)

        pipe = DetectionPipeline(infer, cfg=DetectConfig(num_classes=2))
        img = np.zeros((640, 1280, 3), dtype=np.uint8)
        dets = pipe(img)

        self.assertEqual(seen, [(1, 3, 640, 640)])
        self.assertEqual(len(dets), 1)
        self.assertEqual(dets[0].as_xywh(), (540.0, 270.0, 200.0, 100.0))
        self.assertEqual(dets[0].class_id, 1)

    def test_preprocess_reports_original_size(self) -> None:
        pipe = DetectionPipeline(lambda b: [], cfg=DetectConfig(num_classes=1, model_side=32))
        prep = pipe.preprocess(np.zeros((48, 64, 3), dtype=np.uint8))
        self.assertEqual(prep.orig_size, (64, 48))
        self.assertEqual(prep.blob.shape, (1, 3, 32, 32))

    def test_unknown_extension(self) -> None:
        with self.assertRaises(ValueError):
            load_pipeline("Models/model.pt", DetectConfig(num_classes=1))

    def test_unknown_backend(self) -> None:
        with self.assertRaises(ValueError):
            load_pipeline("Models/model.onnx", DetectConfig(num_classes=1), backend="tflite")


class TestToRawOutput(unittest.TestCase):
    def test_batched_array(self) -> None:
        p = np.arange(12, dtype=np.float64).reshape(1, 3, 4)
        out = to_raw_output(p)
        self.assertEqual(out.dtype, np.float32)
        self.assertEqual(out.tolist(), list(range(12)))

    def test_nested_sequences(self) -> None:
        out = to_raw_output([[1.0, 2.0], (3, [4.5, np.float32(5.0)]), np.array([6.0, 7.0])])
        self.assertEqual(out.tolist(), [1.0, 2.0, 3.0, 4.5, 5.0, 6.0, 7.0])

    def test_rejects_unknown_values(self) -> None:
        with self.assertRaises(TypeError):
            to_raw_output([1.0, "x"])
        with self.assertRaises(TypeError):
            to_raw_output([True])


if __name__ == "__main__":
    unittest.main()
