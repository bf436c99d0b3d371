from __future__ import annotations

import argparse
import json
import os
import statistics
from collections.abc import Callable
from dataclasses import dataclass
from time import perf_counter
from typing import Any

import numpy as np

from magfield.batch import field_at_points
from magfield.field import FieldSource, get_field
from magfield.magnet2d import Rectangle
from magfield.magnet3d import Prism
from magfield.points import Point2, Point3
from magfield.types import FloatArray


@dataclass(frozen=True)
class Preset:
    n_points: int
    extent: float


PRESETS: dict[str, Preset] = {
    "tiny": Preset(n_points=64, extent=2.0),
    "dev": Preset(n_points=4_096, extent=4.0),
    "prod": Preset(n_points=262_144, extent=8.0),
}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Micro-benchmark field kernels (scalar/batch)")
    parser.add_argument("--preset", choices=sorted(PRESETS.keys()), default="dev")
    parser.add_argument("--repeats", type=int, default=10)
    parser.add_argument("--out", type=str, default=None)
    return parser.parse_args()


def build_points(cfg: Preset, dims: int, rng: np.random.Generator) -> FloatArray:
    pts = rng.uniform(-cfg.extent, cfg.extent, size=(cfg.n_points, dims))
    return np.ascontiguousarray(pts, dtype=np.float64)


def measure(fn: Callable[[], Any], repeats: int) -> dict[str, float]:
    if repeats < 1:
        raise ValueError("repeats must be >= 1")
    start = perf_counter()
    _ = fn()
    compile_ms = (perf_counter() - start) * 1000.0
    samples: list[float] = []
    for _ in range(repeats):
        start = perf_counter()
        _ = fn()
        samples.append((perf_counter() - start) * 1000.0)
    return {
        "compile_ms": float(compile_ms),
        "mean_ms": float(statistics.fmean(samples)),
        "median_ms": float(statistics.median(samples)),
        "min_ms": float(min(samples)),
    }


def _scalar_loop(magnet: FieldSource, pts: FloatArray) -> float:
    point_type = Point3 if magnet.dims == 3 else Point2
    acc = 0.0
    for p in pts:
        acc += get_field(magnet, point_type(*p)).norm()
    return acc


def run_bench(preset_name: str, repeats: int) -> dict[str, Any]:
    cfg = PRESETS[preset_name]
    rng = np.random.default_rng(0)
    rect = Rectangle(1.0, 0.5, Point2(0.1, -0.2), alpha=20.0, jr=1.0, theta=30.0)
    prism = Prism(1.0, 0.5, 2.0, Point3(0.1, -0.2, 0.3), alpha=20.0, jr=1.0, theta=60.0, phi=10.0)
    pts2 = build_points(cfg, 2, rng)
    pts3 = build_points(cfg, 3, rng)
    # the scalar loop is slow; time it on a bounded slice
    n_scalar = min(cfg.n_points, 2_048)

    return {
        "preset": preset_name,
        "repeats": int(repeats),
        "config": {"n_points": cfg.n_points, "extent": cfg.extent, "n_scalar": n_scalar},
        "rectangle_scalar": measure(lambda: _scalar_loop(rect, pts2[:n_scalar]), repeats),
        "rectangle_batch": measure(lambda: field_at_points(rect, pts2), repeats),
        "prism_scalar": measure(lambda: _scalar_loop(prism, pts3[:n_scalar]), repeats),
        "prism_batch": measure(lambda: field_at_points(prism, pts3), repeats),
    }


def print_summary(results: dict[str, Any]) -> None:
    cfg = results["config"]
    print(
        "preset={preset} repeats={repeats} n_points={n_points} n_scalar={n_scalar}".format(
            preset=results["preset"],
            repeats=results["repeats"],
            n_points=cfg["n_points"],
            n_scalar=cfg["n_scalar"],
        )
    )
    print(f"{'name':<20} {'compile_ms':>11} {'mean_ms':>9} {'median_ms':>11} {'min_ms':>9}")
    for name in ("rectangle_scalar", "rectangle_batch", "prism_scalar", "prism_batch"):
        stats = results[name]
        print(
            f"{name:<20} {stats['compile_ms']:>11.3f} {stats['mean_ms']:>9.3f} "
            f"{stats['median_ms']:>11.3f} {stats['min_ms']:>9.3f}"
        )


def write_json(path: str, results: dict[str, Any]) -> None:
    out_dir = os.path.dirname(path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(results, f, indent=2, sort_keys=True)


def main() -> None:
    args = parse_args()
    results = run_bench(args.preset, args.repeats)
    print_summary(results)
    if args.out:
        write_json(args.out, results)


if __name__ == "__main__":
    main()
