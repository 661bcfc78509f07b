"""Package version: installed metadata first, pyproject.toml in a source checkout."""
from __future__ import annotations

import re
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path


def _from_pyproject() -> str:
    pyproject = Path(__file__).resolve().parent.parent / "pyproject.toml"
    if not pyproject.is_file():
        return "0.0.0"
    match = re.search(r'^version\s*=\s*"([^"]+)"', pyproject.read_text(encoding="utf-8"), re.MULTILINE)
    return match.group(1) if match else "0.0.0"


try:
    __version__: str = version("namumark-renderer")
except PackageNotFoundError:
    __version__ = _from_pyproject()
