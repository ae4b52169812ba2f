from __future__ import annotations

from pathlib import Path


def test_required_package_paths_exist() -> None:
    root = Path(__file__).resolve().parents[1]
    required = [
        "src/tag_finder/cli.py",
        "src/tag_finder/server.py",
        "src/tag_finder/analysis/__init__.py",
        "src/tag_finder/execution/__init__.py",
        "src/tag_finder/logging/__init__.py",
        "src/tag_finder/tools/__init__.py",
        "src/tag_finder/walker/__init__.py",
    ]
    for rel in required:
        assert (root / rel).exists(), rel
