# main.py
import argparse
import json
import logging
import sys
import time
from datetime import datetime

import cv2

from config import (
    CAM_INDEX, CAP_FPS, UPDATE_HZ, EWMA_ALPHA,
    WINDOW_W, WINDOW_H,
    UDP_HOST, UDP_PORT,
    LOG_LEVEL, LOG_FORMAT, EPS,
)

from fuzzy.results import Metrics
from fuzzy.mamdani import mamdani_infer
from fuzzy.explain import format_report, explain, dashboard

from vision.metrics import analyze_image, ImageError

from processing.enhance import apply_enhancements
from processing.smoothing import ewma_metrics
from processing.cache import InferenceCache
from processing.stats import channel_statistics

from storage.logger import CSVLogger
from storage.udp_sender import UdpSender
from ui.overlay import draw_hud, draw_histogram, side_by_side

log = logging.getLogger("main")


def parse_udp(value):
    host, _, port = value.rpartition(":")
    try:
        return (host or UDP_HOST, int(port))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected HOST:PORT, got {value!r}")


def build_parser():
    p = argparse.ArgumentParser(
        description="Fuzzy (Mamdani) image enhancement: metrics -> rules -> enhancement parameters")
    src = p.add_mutually_exclusive_group()
    src.add_argument("--metrics", nargs=4, type=float, metavar=("BRIGHTNESS", "CONTRAST", "SHARPNESS", "NOISE"),
                     help="Run inference on given metrics only")
    src.add_argument("--input", help="Input image path (if neither --input nor --metrics: webcam)")
    p.add_argument("--camera", type=int, default=CAM_INDEX, help=f"Webcam index (default: {CAM_INDEX})")
    p.add_argument("--mirror", action="store_true", help="Mirror the webcam image")
    p.add_argument("--output", help="Enhanced image path (image mode) or snapshot path (webcam mode)")
    p.add_argument("--compare", help="Write a side-by-side original/enhanced image to this path")
    p.add_argument("--no-show", action="store_true", help="Do not open preview windows")
    p.add_argument("--csv", help="Write one CSV row per inference to this path")
    p.add_argument("--udp", nargs="?", const=f"{UDP_HOST}:{UDP_PORT}", type=parse_udp, metavar="HOST:PORT",
                   help=f"Publish results as JSON over UDP (default target {UDP_HOST}:{UDP_PORT})")
    p.add_argument("--json", action="store_true",
                   help="Print the full inference result, explanation and chart data as JSON")
    p.add_argument("--rules", type=int, default=10, help="Fired rules listed in the report (default: 10)")
    p.add_argument("--log-level", default=LOG_LEVEL, help=f"Logging level (default: {LOG_LEVEL})")
    return p


def emit(result, logger=None, udp=None, t=None):
    t = time.time() if t is None else t
    if logger is not None:
        logger.write_result(t, result)
    if udp is not None:
        udp.send_result(t, result)


def print_result(result, args):
    if args.json:
        payload = result.to_dict()
        payload["explanation"] = explain(result)
        payload["dashboard"] = dashboard(result)
        print(json.dumps(payload, indent=2))
    else:
        print(format_report(result, max_rules=args.rules))


def open_outputs(args):
    logger = None
    if args.csv:
        logger = CSVLogger(args.csv)
        logger.write_header()
    udp = UdpSender(*args.udp) if args.udp else None
    return logger, udp


def close_outputs(logger, udp):
    if logger is not None:
        logger.close()
    if udp is not None:
        udp.close()


def run_metrics(args, logger, udp):
    result = mamdani_infer(Metrics(*args.metrics))
    emit(result, logger, udp)
    print_result(result, args)
    return result


def run_image(args, logger, udp):
    img = cv2.imread(args.input, cv2.IMREAD_COLOR)
    if img is None:
        raise SystemExit(f"Could not read image: {args.input}")

    try:
        metrics = analyze_image(img)
    except ImageError as e:
        raise SystemExit(f"Could not analyse {args.input}: {e}")

    result = mamdani_infer(metrics)
    enhanced = apply_enhancements(img, result.parameters)
    after = analyze_image(enhanced)
    emit(result, logger, udp)

    print_result(result, args)
    if not args.json:
        print(f"enhanced   : brightness={after.brightness:.2f} contrast={after.contrast:.2f} "
              f"sharpness={after.sharpness:.2f} noise={after.noise:.2f}")
    log.info(f"channel stats before={channel_statistics(img)['mean']} after={channel_statistics(enhanced)['mean']}")

    if args.output:
        if not cv2.imwrite(args.output, enhanced):
            raise SystemExit(f"Could not write output: {args.output}")
        log.info(f"saved {args.output}")
    if args.compare:
        if not cv2.imwrite(args.compare, side_by_side(img, enhanced)):
            raise SystemExit(f"Could not write comparison: {args.compare}")
        log.info(f"saved {args.compare}")

    if not args.no_show:
        cv2.imshow("Before / After", side_by_side(img, enhanced))
        cv2.waitKey(0)
        cv2.destroyAllWindows()
    return result, enhanced


def run_camera(args, logger, udp):
    if args.no_show and not args.output:
        raise SystemExit("Webcam mode with --no-show needs --output (snapshot path).")

    cap = cv2.VideoCapture(args.camera)
    if not cap.isOpened():
        raise SystemExit(f"Could not open webcam index {args.camera}")
    cap.set(cv2.CAP_PROP_FPS, CAP_FPS)

    if not args.no_show:
        cv2.namedWindow("FUZZY ENHANCE", cv2.WINDOW_NORMAL)
        cv2.resizeWindow("FUZZY ENHANCE", WINDOW_W, WINDOW_H)

    cache = InferenceCache()
    smoothed = None
    result = None
    next_emit_t = time.time()
    emit_dt = 1.0 / max(1, UPDATE_HZ)
    prev_t = None
    fps = None

    try:
        while True:
            ok, frame = cap.read()
            if not ok or frame is None:
                break
            if args.mirror:
                frame = cv2.flip(frame, 1)

            t_now = time.time()
            if prev_t is not None:
                fps = 1.0 / max(EPS, t_now - prev_t)
            prev_t = t_now

            smoothed = ewma_metrics(smoothed, analyze_image(frame), EWMA_ALPHA)

            # ---------- UPDATE ----------
            if t_now >= next_emit_t:
                result = cache.get(smoothed)
                emit(result, logger, udp, t_now)
                next_emit_t = t_now + emit_dt

            enhanced = apply_enhancements(frame, result.parameters)

            if args.no_show:
                if not cv2.imwrite(args.output, enhanced):
                    raise SystemExit(f"Could not write output: {args.output}")
                print(f"saved_snapshot={args.output}")
                break

            canvas = side_by_side(frame, enhanced)
            canvas = draw_hud(canvas, result, fps)
            canvas = draw_histogram(canvas, enhanced)
            cv2.imshow("FUZZY ENHANCE", canvas)

            key = cv2.waitKey(1) & 0xFF
            if key in (27, ord("q")):
                break
            if key == ord("s"):
                path = args.output or f"fuzzy_enhance_{datetime.now().strftime('%Y%m%d_%H%M%S')}.png"
                cv2.imwrite(path, enhanced)
                print(f"saved_snapshot={path}")
    finally:
        cap.release()
        if not args.no_show:
            cv2.destroyAllWindows()
    log.info(f"inference cache: {cache.hits} hits, {cache.misses} misses")
    return result


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format=LOG_FORMAT, stream=sys.stderr)

    logger, udp = open_outputs(args)
    try:
        if args.metrics:
            run_metrics(args, logger, udp)
        elif args.input:
            run_image(args, logger, udp)
        else:
            run_camera(args, logger, udp)
    finally:
        close_outputs(logger, udp)


if __name__ == "__main__":
    main()
