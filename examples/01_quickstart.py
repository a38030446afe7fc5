#!/usr/bin/env python3
"""Example: quickstart for yaml-reference

Minimal working example: write a small tree of YAML files that use
every tag, then resolve it into one document.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install yaml-reference
"""
from __future__ import annotations

import json
import tempfile
from pathlib import Path

import yamlref

FILES = {
    "main.yaml": """\
name: shop
database: !reference {path: database.yaml}
services: !reference-all {glob: services/*.yaml}
ports: !flatten [80, [443, [8443]]]
settings: !merge
  - {debug: false, workers: 2}
  - !reference {path: overrides.yaml}
""",
    "database.yaml": "host: localhost\nport: 5432\n",
    "overrides.yaml": "debug: true\n",
    "services/api.yaml": "name: api\nreplicas: 3\n",
    "services/worker.yaml": "name: worker\nreplicas: 1\n",
}


def main() -> None:
    print(f"yaml-reference version: {yamlref.__version__}")

    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp)
        for relative, text in FILES.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")

        # Step 1: Parse without resolving to see the markers
        tree = yamlref.parse_file(root / "main.yaml")
        print(f"Unresolved database entry: {tree['database']!r}")

        # Step 2: Resolve everything
        data = yamlref.load(root / "main.yaml")
        print(json.dumps(data, indent=2, sort_keys=True))

        # Step 3: References outside the entry directory are rejected
        (root / "main.yaml").write_text("x: !reference {path: ../secret.yaml}\n", encoding="utf-8")
        try:
            yamlref.load(root / "main.yaml")
        except yamlref.PathNotAllowedError as exc:
            print(f"Rejected: {exc}")


if __name__ == "__main__":
    main()
