import importlib.util
import json
import sys
from pathlib import Path
from types import ModuleType


def _load_bench() -> ModuleType:
    path = Path(__file__).resolve().parents[1] / "bench" / "bench_kernels.py"
    spec = importlib.util.spec_from_file_location("bench_kernels", path)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    spec.loader.exec_module(module)
    return module


def test_bench_tiny_preset(tmp_path: Path) -> None:
    bench = _load_bench()
    results = bench.run_bench("tiny", 1)
    assert results["config"]["n_points"] == 64
    for name in ("rectangle_scalar", "rectangle_batch", "prism_scalar", "prism_batch"):
        assert results[name]["min_ms"] >= 0.0

    out = tmp_path / "bench" / "tiny.json"
    bench.write_json(str(out), results)
    with out.open("r", encoding="utf-8") as handle:
        assert json.load(handle)["preset"] == "tiny"
