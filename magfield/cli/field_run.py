from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from typing import Any

from magfield.errors import MagfieldError
from magfield.field import EvaluationOptions, FieldSource, evaluate
from magfield.magnet2d import Circle, Rectangle
from magfield.magnet3d import Prism, Sphere
from magfield.points import Point2, Point3

logger = logging.getLogger(__name__)

SHAPES = ("rectangle", "circle", "prism", "sphere")
_SIZE_COUNT = {"rectangle": 2, "circle": 1, "prism": 3, "sphere": 1}


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Evaluate the field of one magnet at given points")
    ap.add_argument("--shape", choices=SHAPES, default="rectangle", help="source shape")
    ap.add_argument(
        "--size",
        type=float,
        nargs="+",
        required=True,
        help="width height | radius | width depth height | radius",
    )
    ap.add_argument("--center", type=float, nargs="+", default=None, help="magnet center")
    ap.add_argument("--alpha", type=float, default=0.0, help="body rotation [deg]")
    ap.add_argument("--jr", type=float, default=1.0, help="remanent magnetization [T]")
    ap.add_argument("--theta", type=float, default=0.0, help="magnetization angle [deg]")
    ap.add_argument("--phi", type=float, default=0.0, help="azimuth for 3D sources [deg]")
    ap.add_argument(
        "--point",
        type=float,
        nargs="+",
        action="append",
        required=True,
        help="observation point; repeat for several points",
    )
    ap.add_argument("--cutoff", type=float, default=EvaluationOptions.cutoff, help="axis cutoff")
    ap.add_argument(
        "--strict",
        action="store_true",
        help="fail on indeterminate points instead of substituting zero",
    )
    ap.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return ap.parse_args(argv)


def _configure_logging(level: str) -> None:
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[handler],
        force=True,
    )


def build_magnet(args: argparse.Namespace) -> FieldSource:
    size = list(args.size)
    expected = _SIZE_COUNT[args.shape]
    if len(size) != expected:
        raise ValueError(f"--size for {args.shape} takes {expected} values, got {len(size)}")
    dims = 3 if args.shape in ("prism", "sphere") else 2
    center_raw = args.center if args.center is not None else [0.0] * dims
    if len(center_raw) != dims:
        raise ValueError(f"--center for {args.shape} takes {dims} values")

    if args.shape == "rectangle":
        return Rectangle(
            size[0], size[1], Point2(*center_raw), alpha=args.alpha, jr=args.jr, theta=args.theta
        )
    if args.shape == "circle":
        return Circle(size[0], Point2(*center_raw), jr=args.jr, theta=args.theta)
    if args.shape == "prism":
        return Prism(
            size[0],
            size[1],
            size[2],
            Point3(*center_raw),
            alpha=args.alpha,
            jr=args.jr,
            theta=args.theta,
            phi=args.phi,
        )
    return Sphere(size[0], Point3(*center_raw), jr=args.jr, theta=args.theta, phi=args.phi)


def run(args: argparse.Namespace) -> dict[str, Any]:
    magnet = build_magnet(args)
    options = EvaluationOptions(
        cutoff=args.cutoff, on_singular="raise" if args.strict else "zero"
    )
    point_type = Point3 if magnet.dims == 3 else Point2
    logger.info("magnet %s, %d points", magnet, len(args.point))

    results: list[dict[str, Any]] = []
    for coords in args.point:
        if len(coords) != magnet.dims:
            raise ValueError(f"--point takes {magnet.dims} values, got {len(coords)}")
        point = point_type(*coords)
        res = evaluate(magnet, point, options)
        if res.singular:
            logger.warning("point %s is singular along %s", coords, ",".join(res.singular_axes))
        results.append(
            {
                "point": [float(v) for v in coords],
                "field": res.field.as_array().tolist(),
                "singular": res.singular,
            }
        )
    return {"shape": args.shape, "results": results}


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    _configure_logging(args.log_level)
    try:
        out = run(args)
    except (MagfieldError, ValueError) as exc:
        logger.error("%s", exc)
        return 1
    sys.stdout.write(json.dumps(out, indent=2) + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
