import argparse
import logging

import cv2
import numpy as np

from detkit import (
    SURFRIDER_CATALOG,
    DetectConfig,
    DetectionPostprocessor,
    draw_detections,
    load_class_catalog,
    load_detect_config,
    load_pipeline,
)


def main() -> int:
    parser = argparse.ArgumentParser(description="Detect objects in one image and draw labeled boxes.")
    parser.add_argument("--image", required=True, help="Path to the input image.")
    parser.add_argument("--model", default="Models/my_model_quantized.onnx", help="Path to the ONNX model.")
    parser.add_argument(
        "--raw",
        default=None,
        help="Saved detector output (.npy). Skips inference; --image is still used for size and drawing.",
    )
    parser.add_argument("--metadata", default=None, help="Class names yaml (names: block). Defaults to Surfrider.")
    parser.add_argument("--config", default=None, help="JSON detect config (num_classes, model_side, thresholds).")
    parser.add_argument("--num-classes", type=int, default=None, help="Number of class scores per box.")
    parser.add_argument("--imgsz", type=int, default=None, help="Model input side (default 640).")
    parser.add_argument("--conf", type=float, default=None, help="Confidence threshold (default 0.5).")
    parser.add_argument("--iou", type=float, default=None, help="IoU threshold for NMS (default 0.45).")
    parser.add_argument("--out", default=None, help="Optional output path for the annotated image.")
    parser.add_argument("--show", action="store_true", help="Show a window with the annotated image.")
    parser.add_argument("--log-level", default="WARNING", help="DEBUG, INFO, WARNING or ERROR.")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    catalog = load_class_catalog(args.metadata) if args.metadata else SURFRIDER_CATALOG

    if args.config:
        cfg = load_detect_config(args.config)
    else:
        cfg = DetectConfig(num_classes=args.num_classes or len(catalog))
    cfg = cfg.replace(
        num_classes=args.num_classes,
        model_side=args.imgsz,
        conf_threshold=args.conf,
        iou_threshold=args.iou,
    )

    img = cv2.imread(args.image)
    if img is None:
        raise FileNotFoundError(f"Could not read image at path: {args.image}")

    if args.raw:
        h, w = img.shape[:2]
        detections = DetectionPostprocessor(cfg).process(np.load(args.raw), (w, h))
    else:
        pipeline = load_pipeline(args.model, cfg)
        detections = pipeline(img)

    for det in detections:
        print(catalog.name(det.class_id), f"{det.confidence:.3f}", tuple(round(v, 1) for v in det.as_xywh()))

    vis = draw_detections(img, detections, catalog=catalog)
    if args.out:
        ok = cv2.imwrite(args.out, vis)
        if not ok:
            raise RuntimeError(f"Failed to write output image: {args.out}")

    if args.show:
        cv2.imshow("detections", vis)
        cv2.waitKey(0)
        cv2.destroyAllWindows()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
