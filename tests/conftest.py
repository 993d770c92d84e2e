import sys
from pathlib import Path
from typing import Callable, Dict, Union

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'jdists'
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))


WriteTree = Callable[[Dict[str, Union[str, bytes]]], Path]


@pytest.fixture
def write_tree(tmp_path: Path) -> WriteTree:
    """Write a mapping of relative path -> content under tmp_path and return the root."""

    def _write(files: Dict[str, Union[str, bytes]]) -> Path:
        for rel, content in files.items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        return tmp_path

    return _write


@pytest.fixture(autouse=True)
def _clear_jdists_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Environment overrides must not leak into config tests."""
    import os

    for key in list(os.environ):
        if key.startswith("JDISTS_"):
            monkeypatch.delenv(key, raising=False)
