"""Benchmark: yaml-reference load latency (p50/p95/mean).

Measures per-call latency for resolving a small tree of referenced files.
"""
from __future__ import annotations

import json
import sys
import tempfile
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import yamlref

_WARMUP: int = 20
_ITERATIONS: int = 300

_FILES = {
    "main.yaml": (
        "database: !reference {path: database.yaml}\n"
        "services: !reference-all {glob: services/*.yaml}\n"
        "ports: !flatten [80, [443, 8443]]\n"
        "settings: !merge [{debug: false}, {debug: true}]\n"
    ),
    "database.yaml": "host: localhost\nport: 5432\n",
    "services/a.yaml": "name: a\n",
    "services/b.yaml": "name: b\n",
    "services/c.yaml": "name: c\n",
}


def _write_tree(root: Path) -> Path:
    for relative, text in _FILES.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root / "main.yaml"


def bench_load_latency(iterations: int = _ITERATIONS) -> dict[str, object]:
    """Benchmark ``yamlref.load`` latency on a five-file tree.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms, p50_ms, p95_ms.
    """
    with tempfile.TemporaryDirectory() as tmp:
        entry = _write_tree(Path(tmp))

        for _ in range(min(_WARMUP, iterations)):
            yamlref.load(entry)

        latencies_ms: list[float] = []
        for _ in range(iterations):
            t0 = time.perf_counter()
            yamlref.load(entry)
            latencies_ms.append((time.perf_counter() - t0) * 1000)

    sorted_lats = sorted(latencies_ms)
    n = len(sorted_lats)
    total = sum(latencies_ms) / 1000

    result: dict[str, object] = {
        "operation": "yamlref_load_latency_small_tree",
        "iterations": iterations,
        "total_seconds": round(total, 4),
        "ops_per_second": round(iterations / total, 1) if total else 0.0,
        "avg_latency_ms": round(sum(latencies_ms) / n, 4),
        "p50_ms": round(sorted_lats[int(n * 0.50)], 4),
        "p95_ms": round(sorted_lats[min(int(n * 0.95), n - 1)], 4),
    }
    print(
        f"[bench_latency] {result['operation']}: "
        f"p50={result['p50_ms']:.4f}ms  p95={result['p95_ms']:.4f}ms  "
        f"mean={result['avg_latency_ms']:.4f}ms"
    )
    return result


if __name__ == "__main__":
    result = bench_load_latency()
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "latency_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(result, fh, indent=2)
    print(f"Results saved to {output_path}")
