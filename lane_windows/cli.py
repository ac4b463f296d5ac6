import argparse
import logging
from pathlib import Path

import cv2
import structlog

from .config import DetectionSettings, WindowSettings
from .errors import GeometryError
from .logging import configure_logging
from .pipeline import compute_windows, detect_segments, generate_synthetic_lane, render_overlay
from .schemas import DetectionIn, WindowSetOut
from .stereo import StereoImage, StereoImageFileInfo

log = structlog.get_logger(__name__)


def _cmd_generate(args: argparse.Namespace) -> int:
    img = generate_synthetic_lane(width=args.width, height=args.height, curvature_px=args.curvature)
    args.output.parent.mkdir(parents=True, exist_ok=True)
    cv2.imwrite(str(args.output), img)
    log.info("wrote_synthetic_image", path=str(args.output))
    return 0


def _window_settings(args: argparse.Namespace) -> WindowSettings:
    overrides = {
        k: v
        for k, v in (("scale_step", args.scale_step), ("min_scale", args.min_scale), ("aspect_ratio", args.aspect_ratio))
        if v is not None
    }
    return WindowSettings(**overrides)


def _detection_settings(args: argparse.Namespace) -> DetectionSettings:
    overrides = {
        k: v
        for k, v in (
            ("canny_low", args.canny_low),
            ("canny_high", args.canny_high),
            ("hough_threshold", args.hough_threshold),
            ("min_line_length", args.min_line_length),
            ("max_line_gap", args.max_line_gap),
            ("slope_threshold", args.slope_threshold),
            ("up_margin", args.up_margin),
            ("down_margin", args.down_margin),
        )
        if v is not None
    }
    return DetectionSettings(**overrides)


def _cmd_windows(args: argparse.Namespace) -> int:
    image = None
    if args.segments:
        payload = DetectionIn.model_validate_json(args.segments.read_text())
        detection = payload.to_result()
        width, height = payload.width, payload.height
    else:
        stereo = StereoImage.load(
            StereoImageFileInfo(
                name=args.image.stem,
                left_image_path=args.image,
                right_image_path=args.right_image or args.image,
            )
        )
        image = stereo.left
        width, height = stereo.size
        detection = detect_segments(image, _detection_settings(args))

    try:
        result = compute_windows(detection, width, height, _window_settings(args))
    except GeometryError as e:
        log.error("window_generation_failed", error=str(e), kind=type(e).__name__)
        return 2

    out = WindowSetOut.from_window_set(result)
    if args.json:
        args.json.parent.mkdir(parents=True, exist_ok=True)
        args.json.write_text(out.model_dump_json(indent=2))
        log.info("wrote_windows", path=str(args.json))
    else:
        print(out.model_dump_json())

    if image is not None and args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        cv2.imwrite(str(args.output), render_overlay(image, detection, result))
        log.info("wrote_overlay", path=str(args.output))
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Multiscale vehicle search windows from lane boundaries")
    p.add_argument("--verbose", action="store_true", help="Log debug events")
    sub = p.add_subparsers(dest="cmd", required=True)

    g = sub.add_parser("generate", help="Generate a synthetic lane image")
    g.add_argument("--output", type=Path, required=True)
    g.add_argument("--width", type=int, default=640)
    g.add_argument("--height", type=int, default=360)
    g.add_argument("--curvature", type=int, default=0, help="pixels to shift the far ends of the boundaries")
    g.set_defaults(func=_cmd_generate)

    w = sub.add_parser("windows", help="Compute search windows for a frame")
    src = w.add_mutually_exclusive_group(required=True)
    src.add_argument("--image", type=Path, help="Frame to run line detection on (left camera)")
    src.add_argument("--segments", type=Path, help="JSON file with pre-detected segments")
    w.add_argument("--right-image", type=Path, help="Right camera image of the stereo pair")
    w.add_argument("--output", type=Path, default=Path("outputs/windows.png"), help="Overlay image path")
    w.add_argument("--json", type=Path, help="Write windows as JSON here instead of stdout")
    w.add_argument("--scale-step", type=float, default=None)
    w.add_argument("--min-scale", type=float, default=None)
    w.add_argument("--aspect-ratio", type=float, default=None)
    w.add_argument("--canny-low", type=int, default=None, help="Lower Canny threshold (auto if omitted)")
    w.add_argument("--canny-high", type=int, default=None, help="Upper Canny threshold (auto if omitted)")
    w.add_argument("--hough-threshold", type=int, default=None)
    w.add_argument("--min-line-length", type=int, default=None)
    w.add_argument("--max-line-gap", type=int, default=None)
    w.add_argument("--slope-threshold", type=float, default=None)
    w.add_argument("--up-margin", type=int, default=None, help="Rows above the region of interest")
    w.add_argument("--down-margin", type=int, default=None, help="Rows below the region of interest")
    w.set_defaults(func=_cmd_windows)
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
