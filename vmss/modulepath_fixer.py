"""
Puts the repository root on the module search path so the program can import
the shared `modules` and `utils` packages when the Pulumi CLI runs it from
this directory.

Nothing is added in CI (where `PYTHONPATH` already points at the root) or
once the project is installed with `pip install -e .`.
"""

from importlib.util import find_spec
from pathlib import Path
from typing import Optional
import os
import sys

ROOT_MARKER = "pyproject.toml"


def find_repo_root(start: Path) -> Optional[Path]:
    for directory in (start, *start.parents):
        if (directory / ROOT_MARKER).is_file():
            return directory
    return None


def add_repo_root(start: Path) -> Optional[Path]:
    if os.environ.get("CI") == "true" or find_spec("modules") is not None:
        return None

    root = find_repo_root(start)
    if root is not None and str(root) not in sys.path:
        sys.path.append(str(root))
    return root


add_repo_root(Path(__file__).resolve().parent)
