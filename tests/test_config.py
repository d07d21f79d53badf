import json
import tempfile
import unittest
from pathlib import Path

from detkit.config import DetectConfig, load_detect_config
from detkit.errors import InvalidConfiguration


class TestDetectConfig(unittest.TestCase):
    def test_defaults(self) -> None:
        cfg = DetectConfig(num_classes=10)
        self.assertEqual(cfg.model_side, 640)
        self.assertEqual(cfg.conf_threshold, 0.5)
        self.assertEqual(cfg.iou_threshold, 0.45)
        self.assertEqual(cfg.features_per_box, 14)

    def test_rejects_bad_values(self) -> None:
        for kwargs in (
            {"num_classes": 0},
            {"num_classes": 2.0},
            {"num_classes": 1, "model_side": 0},
            {"num_classes": 1, "conf_threshold": -0.01},
            {"num_classes": 1, "iou_threshold": 1.5},
            {"num_classes": 1, "conf_threshold": float("nan")},
        ):
            with self.subTest(kwargs=kwargs):
                with self.assertRaises(InvalidConfiguration):
                    DetectConfig(**kwargs)

    def test_error_names_field(self) -> None:
        with self.assertRaises(InvalidConfiguration) as ctx:
            DetectConfig(num_classes=3, iou_threshold=7)
        self.assertEqual(ctx.exception.field, "iou_threshold")

    def test_replace_skips_none(self) -> None:
        cfg = DetectConfig(num_classes=3).replace(num_classes=None, conf_threshold=0.3)
        self.assertEqual(cfg, DetectConfig(num_classes=3, conf_threshold=0.3))

    def test_replace_validates(self) -> None:
        with self.assertRaises(InvalidConfiguration):
            DetectConfig(num_classes=3).replace(model_side=-1)


class TestLoadDetectConfig(unittest.TestCase):
    def _write(self, tmp: str, payload: object) -> Path:
        path = Path(tmp) / "detect.json"
        text = payload if isinstance(payload, str) else json.dumps(payload)
        path.write_text(text, encoding="utf-8")
        return path

    def test_load_full(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write(
                tmp, {"num_classes": 10, "model_side": 320, "conf_threshold": 0.25, "iou_threshold": 0.5}
            )
            cfg = load_detect_config(path)
        self.assertEqual(cfg, DetectConfig(num_classes=10, model_side=320, conf_threshold=0.25, iou_threshold=0.5))

    def test_load_minimal(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            cfg = load_detect_config(self._write(tmp, {"num_classes": 4}))
        self.assertEqual(cfg, DetectConfig(num_classes=4))

    def test_missing_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_detect_config("does/not/exist.json")

    def test_rejects_bad_payloads(self) -> None:
        for payload in (
            "{not json",
            [1, 2],
            {},
            {"num_classes": 4, "nms": 0.4},
            {"num_classes": "4"},
            {"num_classes": 4, "conf_threshold": True},
        ):
            with self.subTest(payload=payload):
                with tempfile.TemporaryDirectory() as tmp:
                    path = self._write(tmp, payload)
                    with self.assertRaises(ValueError):
                        load_detect_config(path)

    def test_out_of_range_value(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write(tmp, {"num_classes": 4, "iou_threshold": 3})
            with self.assertRaises(InvalidConfiguration):
                load_detect_config(path)


if __name__ == "__main__":
    unittest.main()
